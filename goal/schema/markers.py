""" A *Marker* is a proxy class which wraps a schema key.

```python
from goal import Schema, Required, Optional

Schema({
    Required('name'): {'type': 'string'},  # required key
    Optional('age'): {'type': 'integer'},  # optional key
    'email': {'format': 'email'},  # optional as well: keys are optional by default
})
```

A marker is equivalent to the `required` rule: `Required('name'): {}` is the same as `'name': {'required': True}`.
When both are given, the marker wins.
"""

from .util import get_literal_name


class Marker(object):
    """ A Marker is a class that decorates a mapping key.

    It behaves like the key it wraps: hashing and equality are proxied,
    so `{Required('name'): ...}` can still be looked up with `'name'`.
    """

    #: Value of the `required` rule this marker enforces
    required = None

    def __init__(self, key):
        #: The original key
        self.key = key

    def apply(self, rules):
        """ Apply the marker to the field's rule set

        :type rules: Mapping
        :rtype: dict
        """
        rules = dict(rules)
        rules['required'] = self.required
        return rules

    def __repr__(self):
        return '{cls}({0!r})'.format(self.key, cls=type(self).__name__)

    #region Marker is a Proxy

    def __hash__(self):
        return hash(self.key)

    def __eq__(self, other):
        # Marker equality comparison:
        #  key == key | key == Marker.key
        return self.key == (other.key if isinstance(other, Marker) else other)

    def __ne__(self, other):
        return not self == other

    def __str__(self):
        return get_literal_name(self.key)

    #endregion


class Required(Marker):
    """ `Required(key)` is used to decorate mapping keys and hence specify that these keys must always be present in
    the input mapping.

    When compiled, [`Schema`](#schema) reports `can't be blank` for a missing required key,
    or for a key whose value is `None` or a blank string.

    ```python
    from goal import Schema, Required

    schema = Schema({
        Required('name'): {},
    })

    schema.validate({})  #-> Failure: {'name': [u"can't be blank"]}
    ```
    """

    required = True


class Optional(Marker):
    """ `Optional(key)` is the default behavior: the key may be absent from the input.

    Absent optional keys are not reported, and not defaulted: they are simply missing from the output.
    """

    required = False


__all__ = ('Marker', 'Required', 'Optional',)
