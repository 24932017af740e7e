import logging
from collections.abc import Mapping

from .compiler import CompiledSchema
from .engine import ValidationContext, run
from .errors import MultipleInvalid
from ..patterns import default_patterns

logger = logging.getLogger(__name__)


class Schema(object):
    """ Validation schema.

    A schema is a mapping of field names to *rule sets*: the field type, whether it's required,
    and the constraints on its value.

    When a schema is created, it's compiled: types are resolved and rules are turned into validators once,
    hence it does not need to analyze the schema every time.

    ```python
    from goal import Schema

    schema = Schema({
        'name': {'type': 'string', 'required': True, 'min': 3, 'squish': True},
        'age': {'type': 'integer', 'min': 0, 'max': 120},
        'gender': {'type': 'enum', 'values': ['female', 'male', 'non-binary']},
        'data': {'type': 'map', 'properties': {
            'color': {'required': True},
            'money': {'type': 'decimal'},
        }},
        'dogs': {'type': ('array', 'map'), 'properties': {
            'name': {},
            'age': {'type': 'integer'},
        }},
    })

    result = schema.validate({'name': ' Jane  Doe ', 'age': '29'})
    result.valid  #-> True
    result.value  #-> {'name': 'Jane Doe', 'age': 29}
    ```

    The following rules exist:

    1. **type**: `string` (the default), `integer`, `float`, `decimal`, `boolean`, `date`, `time`, `datetime`,
        `uuid`, `any`, `enum` (with `values`), `map`, and arrays: `('array', <type>)`.

        Python types are accepted as well: `str`, `int`, `float`, `Decimal`, `bool`, `date`, `time`, `datetime`,
        `UUID`, `dict`, `list`.

    2. **required**: the field must be present and not blank.

    3. **properties**: the schema of a `map`, or of every member of an `('array', 'map')`.
        There is no limitation on depth.

    4. Constraints:

        * All types except maps: `equals`, `included`, `excluded`
        * Numbers: `is`, `min`, `max`, `equal_to`, `not_equal_to`, `greater_than`, `less_than`,
            `greater_than_or_equal_to`, `less_than_or_equal_to`
        * Strings: `is`, `min`, `max` (length), `trim`, `squish`, `format`
        * Arrays: `is`, `min`, `max` (number of items), `subset`

    Rules that do not apply to the field type are ignored with a warning.
    Give `strict=True` to get a [`SchemaError`](#schemaerror) instead.

    Input keys are matched by string first, and then by the schema key itself.
    Keys not declared in the schema are dropped.

    :param schema: Schema definition
    :type schema: Mapping
    :param patterns: Registry of named regular expressions for the `format` rule.
        Defaults to the built-in patterns.
    :type patterns: goal.patterns.PatternRegistry|None
    :param strict: Fail on rules that do not apply to the field type
    :type strict: bool
    :raises SchemaError: Schema compilation error
    """

    compiled_schema_cls = CompiledSchema

    def __init__(self, schema, patterns=None, strict=False):
        self.schema = schema
        self.patterns = default_patterns if patterns is None else patterns
        self.strict = strict

        self.compiled = self.compiled_schema_cls(self.schema, self.patterns, self.strict)
        logger.debug('Compiled schema with %d field(s)', len(self.compiled))

    def __repr__(self):
        return '{cls}({0.compiled!r})'.format(self, cls=type(self).__name__)

    def changeset(self, params=None):
        """ Validate the input and get the validation context, valid or not

        :param params: Input mapping. `None` is an empty input.
        :type params: Mapping|None
        :rtype: ValidationContext
        :raises TypeError: The input is not a mapping
        """
        if params is None:
            params = {}
        if not isinstance(params, Mapping):
            raise TypeError('Params must be a mapping, got {!r}'.format(type(params).__name__))

        return run(self.compiled, params)

    def validate(self, params=None):
        """ Validate the input.

        Never raises for invalid input: returns [`Success`](#success) with the typed mapping,
        or [`Failure`](#failure) with the error tree.

        :param params: Input mapping
        :type params: Mapping|None
        :rtype: Success|Failure
        """
        context = self.changeset(params)
        if context.valid:
            logger.debug('Valid input: %d field(s)', len(context.changes))
            return Success(context)
        else:
            logger.debug('Invalid input: %d field(s) with errors', len(context.errors))
            return Failure(context)

    def __call__(self, params=None):
        """ Validate the input, and raise errors.

        :param params: Input mapping
        :type params: Mapping|None
        :return: The typed mapping
        :rtype: dict
        :raises MultipleInvalid: Invalid input. See [`MultipleInvalid`](#multipleinvalid).
        """
        return self.validate(params).unwrap()


class Result(object):
    """ Validation outcome.

    :param context: The validation context
    :type context: ValidationContext
    """

    #: Is the input valid?
    valid = None

    def __init__(self, context):
        self.context = context

    def __repr__(self):
        return '{cls}({0.value!r})'.format(self, cls=type(self).__name__)

    @property
    def value(self):
        """ The typed mapping, or `None` on failure """
        return self.context.changes if self.valid else None

    @property
    def errors(self):
        """ The error tree: [(field, error)] """
        return self.context.errors

    def unwrap(self):
        """ Get the typed mapping, or raise [`MultipleInvalid`](#multipleinvalid)

        :rtype: dict
        """
        if not self.valid:
            raise MultipleInvalid.from_context(self.context)
        return self.context.changes


class Success(Result):
    """ Valid input: `value` is the typed mapping """

    valid = True


class Failure(Result):
    """ Invalid input: `errors` is the error tree. Render it with [`traverse_errors()`](#traverse_errors). """

    valid = False

    def __repr__(self):
        return '{cls}({0.errors!r})'.format(self, cls=type(self).__name__)


def validate(schema, params, patterns=None):
    """ Validate the input against a schema.

    ```python
    from goal import validate

    validate({'email': {'format': 'email'}}, {'email': 'jane@example.com'})
    #-> Success({'email': 'jane@example.com'})
    validate({'email': {'format': 'email'}}, {'email': 'invalid'})
    #-> Failure([('email', Invalid('has invalid format', ...))])
    ```

    A schema definition is compiled on every call: create a [`Schema`](#schema) to reuse it.

    :param schema: Schema definition, or a compiled `Schema`
    :type schema: Mapping|Schema
    :param params: Input mapping
    :type params: Mapping
    :param patterns: Registry of named regular expressions for the `format` rule.
        If given together with a `Schema`, the schema is recompiled with it.
    :type patterns: goal.patterns.PatternRegistry|None
    :rtype: Success|Failure
    """
    if not isinstance(schema, Schema):
        schema = Schema(schema, patterns)
    elif patterns is not None and patterns is not schema.patterns:
        schema = Schema(schema.schema, patterns, schema.strict)
    return schema.validate(params)


__all__ = ('Schema', 'Result', 'Success', 'Failure', 'ValidationContext', 'validate',)
