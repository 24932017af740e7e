""" Schema authoring syntax.

Writing nested dicts by hand gets noisy. These helpers build the very same schema definition:

```python
from goal import defschema, required, optional

schema = defschema(
    required('id', 'string', format='uuid'),
    required('name', 'string', min=3, max=20),
    optional('age', 'integer', min=0, max=120),
    optional('gender', 'enum', values=['female', 'male', 'non-binary']),

    required('data', 'map', properties=[
        required('color', 'string'),
        optional('money', 'decimal'),
    ]),
)

schema == {
    'id': {'type': 'string', 'required': True, 'format': 'uuid'},
    'name': {'type': 'string', 'required': True, 'min': 3, 'max': 20},
    ...
}
```

Since `is` is a Python keyword, rule names can be given with a trailing underscore: `is_=4`.
"""

from .schema.const import TYPE, RULE


def _field(name, type, required, properties, rules):
    rules = {rule[:-1] if rule.endswith('_') else rule: value
             for rule, value in rules.items()}

    field = {RULE.TYPE: type}
    if required:
        field[RULE.REQUIRED] = True
    if properties is not None:
        field[RULE.PROPERTIES] = defschema(*properties) if isinstance(properties, (list, tuple)) else properties
    field.update(rules)
    return name, field


def optional(name, type=TYPE.DEFAULT, properties=None, **rules):
    """ Declare an optional field

    :param name: Field name
    :param type: Field type
    :param properties: Nested fields: a list of `required()`/`optional()` declarations, or a schema mapping
    :type properties: list|Mapping|None
    :param rules: Constraints
    :return: (name, rule set)
    :rtype: tuple
    """
    return _field(name, type, False, properties, rules)


def required(name, type=TYPE.DEFAULT, properties=None, **rules):
    """ Declare a required field. See `optional()` """
    return _field(name, type, True, properties, rules)


def defschema(*fields):
    """ Build a schema definition from field declarations

    :param fields: `required()` and `optional()` declarations
    :rtype: dict
    """
    return dict(fields)


__all__ = ('defschema', 'required', 'optional',)
