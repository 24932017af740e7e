""" Collection of helpers to render validation results. """

from .schema import Result
from .schema.engine import ValidationContext
from .schema.errors import Invalid


def default_message(error):
    """ Render an error with its default English message """
    return error.render()


def traverse_errors(context, msg_func=default_message, with_field=False):
    """ Render the error tree into a mapping of field names to messages.

    Every leaf error goes through `msg_func`. Nested maps become nested mappings,
    and arrays of maps become lists with one entry per member: `{}` for a valid one.

    ```python
    from goal import Schema, traverse_errors

    schema = Schema({
        'name': {'is': 4},
        'dogs': {'type': ('array', 'map'), 'properties': {
            'age': {'type': 'integer'},
        }},
    })

    result = schema.validate({'name': 'Joe', 'dogs': [{'age': 3}, {'age': 'old'}]})
    traverse_errors(result)
    #-> {'name': ['should be 4 character(s)'], 'dogs': [{}, {'age': ['is invalid']}]}
    ```

    A translation layer plugs in as `msg_func`:

    ```python
    def translate_error(error):
        return error.render(gettext(error.message))

    traverse_errors(result, translate_error)
    ```

    :param context: A validation context, or a validation result
    :type context: ValidationContext|Result
    :param msg_func: Renders a single error: `msg_func(error)`,
        or `msg_func(context, field, error)` when `with_field` is set
    :type msg_func: callable
    :param with_field: Pass the context and the field name to `msg_func`
    :type with_field: bool
    :rtype: dict
    """
    if isinstance(context, Result):
        context = context.context
    assert isinstance(context, ValidationContext), 'Expected a ValidationContext, got {!r}'.format(context)

    tree = {}
    for field, error in context.errors:
        # Map
        if isinstance(error, ValidationContext):
            tree[field] = traverse_errors(error, msg_func, with_field)
        # Array of maps
        elif isinstance(error, list):
            tree[field] = [traverse_errors(member, msg_func, with_field) for member in error]
        # Field
        else:
            assert isinstance(error, Invalid)
            message = msg_func(context, field, error) if with_field else msg_func(error)
            tree.setdefault(field, []).append(message)
    return tree


__all__ = ('traverse_errors',)
