import decimal
import logging
from collections.abc import Mapping

from .const import TYPE, RULE
from .errors import SchemaError
from .markers import Marker
from .util import type_aliases, const
from ..validators.types import casters, String, Enum, Map, Array
from ..validators.numbers import Number
from ..validators.strings import Trim, Squish, Format
from ..validators.values import In, NotIn, Subset, Length

logger = logging.getLogger(__name__)


def _normalize_token(token):
    """ Get the canonical form of a type token: Python types become tokens, lists become tuples """
    if isinstance(token, list):
        token = tuple(token)
    if isinstance(token, type):
        token = type_aliases.get(token, token)
    return token


def resolve_token(token, rules):
    """ Get a caster for a type token

    :param token: Type token: 'string', 'integer', ..., ('array', <token>)
    :param rules: The field rule set: `enum` reads its `values` from it
    :type rules: Mapping
    :rtype: Cast
    :raises SchemaError: Unsupported type, malformed enum
    """
    token = _normalize_token(token)

    # Legacy spelling
    if token == TYPE.LIST:
        token = (TYPE.ARRAY, _normalize_token(rules.get(RULE.INNER_TYPE, TYPE.STRING)))

    # Array
    if isinstance(token, tuple):
        if len(token) != 2 or token[0] != TYPE.ARRAY:
            raise SchemaError(u'Malformed array type {!r}: expected (\'array\', <type>)'.format(token))
        return Array(resolve_token(token[1], rules))

    # Enum
    if token == TYPE.ENUM:
        values = rules.get(RULE.VALUES)
        if not isinstance(values, (list, tuple)) or not values:
            raise SchemaError(u'Enum `values` must be a non-empty list, got {!r}'.format(values))
        return Enum(values)

    # Simple types
    try:
        return casters[token]()
    except (KeyError, TypeError):
        raise SchemaError(u'Unsupported type {!r}'.format(token))


def resolve_type(rules):
    """ Get a caster for a field rule set. The default type is 'string'.

    ```python
    resolve_type({'type': 'integer'})  #-> Integer
    resolve_type({'type': ('array', 'integer')})  #-> Array(Integer)
    resolve_type({'type': 'enum', 'values': ['male', 'female']})  #-> Enum
    resolve_type({})  #-> String
    ```

    :type rules: Mapping
    :rtype: Cast
    :raises SchemaError: Unsupported type, malformed enum
    """
    return resolve_token(rules.get(RULE.TYPE, TYPE.DEFAULT), rules)


class CompiledField(object):
    """ A field, resolved once: caster, required flag, normalizers, constraints, nested schema.

    :param key: Field name, as declared in the schema
    :param cast: Type caster
    :type cast: Cast
    :param required: Is the field required?
    :type required: bool
    :param normalizers: Validators that transform the value: trim, squish
    :type normalizers: list[ValidatorBase]
    :param constraints: Validators that check the value, in declaration order
    :type constraints: list[ValidatorBase]
    :param properties: Nested schema, for maps and arrays of maps
    :type properties: CompiledSchema|None
    """

    def __init__(self, key, cast, required=False, normalizers=(), constraints=(), properties=None):
        self.key = key
        self.cast = cast
        self.required = required
        self.normalizers = list(normalizers)
        self.constraints = list(constraints)
        self.properties = properties

        #: Input keys to look the value up with: the string key goes first
        self.lookup_keys = (key,) if isinstance(key, str) else (u'{}'.format(key), key)

    @property
    def nested(self):
        """ Does the field hold a nested schema? """
        return self.properties is not None

    @property
    def many(self):
        """ Is the field an array of maps? """
        return isinstance(self.cast, Array) and self.cast.of_maps

    def lookup(self, params):
        """ Get the field's raw value from the input, or `UNDEFINED`

        :type params: Mapping
        """
        for key in self.lookup_keys:
            if key in params:
                return params[key]
        return const.UNDEFINED

    def __repr__(self):
        return '{cls}({0.key!r}, {0.cast!s}{required})'.format(
            self,
            cls=type(self).__name__,
            required=', required' if self.required else '')


class CompiledSchema(object):
    """ Schema compiler.

    Resolves every field of a schema definition into a `CompiledField`, recursively.
    This happens once: validation never looks at the rule sets again.

    :param schema: Schema definition: a mapping of field names to rule sets
    :type schema: Mapping
    :param patterns: Registry for the `format` rule
    :type patterns: goal.patterns.PatternRegistry
    :param strict: Raise `SchemaError` for rules that do not apply to the field type, instead of ignoring them
    :type strict: bool
    :param path: Path to this schema
    :type path: list|None
    :raises SchemaError: Schema compilation error
    """

    def __init__(self, schema, patterns, strict=False, path=None):
        self.schema = schema
        self.patterns = patterns
        self.strict = strict
        self.path = path or []

        self.fields = self.compile_schema(schema)

    def __repr__(self):
        return '{cls}({fields})'.format(
            cls=type(self).__name__,
            fields=', '.join(map(repr, self.fields)))

    def __iter__(self):
        return iter(self.fields)

    def __len__(self):
        return len(self.fields)

    def sub_compile(self, schema, path):
        """ Compile a nested schema

        :type schema: Mapping
        :type path: list
        :rtype: CompiledSchema
        """
        return type(self)(schema, self.patterns, self.strict, path)

    def path_name(self, path):
        return u'.'.join(u'{}'.format(p) for p in path)

    #region Compilation Procedure

    def compile_schema(self, schema):
        """ Compile all fields of a schema definition

        :rtype: list[CompiledField]
        """
        # A `Schema` object is used for its definition
        if isinstance(getattr(schema, 'compiled', None), CompiledSchema):
            schema = schema.schema

        if not isinstance(schema, Mapping):
            raise SchemaError(u'Schema must be a mapping, got {!r} at {}'.format(
                type(schema).__name__, self.path_name(self.path) or u'the top level'))

        return [self.compile_field(key, rules) for key, rules in schema.items()]

    def compile_field(self, key, rules):
        """ Compile a single field

        :param key: Field name, or a Marker
        :param rules: Field rule set
        :type rules: Mapping
        :rtype: CompiledField
        """
        path = self.path + [key.key if isinstance(key, Marker) else key]
        if not isinstance(rules, Mapping):
            raise SchemaError(u'Rules for {} must be a mapping, got {!r}'.format(
                self.path_name(path), type(rules).__name__))

        if isinstance(key, Marker):
            rules = key.apply(rules)
            key = key.key

        # Type
        try:
            cast = resolve_type(rules)
        except SchemaError as e:
            raise SchemaError(u'{} @ {}'.format(e, self.path_name(path)))

        # Required
        required = rules.get(RULE.REQUIRED, False)
        if not isinstance(required, bool):
            raise SchemaError(u'`required` must be a boolean at {}'.format(self.path_name(path)))

        # Nested
        properties = None
        if RULE.PROPERTIES in rules:
            if not (isinstance(cast, Map) or (isinstance(cast, Array) and cast.of_maps)):
                raise SchemaError(u'`properties` are only supported by map fields, got {} at {}'.format(
                    cast.name, self.path_name(path)))
            properties = self.sub_compile(rules[RULE.PROPERTIES], path)

        # Constraints
        normalizers, constraints = [], []
        for rule, value in rules.items():
            validator = self.compile_rule(rule, value, cast, path)
            if validator is None:
                continue
            (normalizers if validator.normalizer else constraints).append(validator)

        return CompiledField(key, cast, required, normalizers, constraints, properties)

    def compile_rule(self, rule, value, cast, path):
        """ Compile a single rule into a validator

        :return: Validator, or `None` when the rule compiles to nothing
        :rtype: ValidatorBase|None
        """
        # Structural rules
        if rule in (RULE.TYPE, RULE.REQUIRED, RULE.PROPERTIES):
            return None
        if rule == RULE.VALUES:
            inner = cast.inner if isinstance(cast, Array) else cast
            return None if isinstance(inner, Enum) else self.inapplicable(rule, cast, path)
        if rule == RULE.INNER_TYPE:
            return None if isinstance(cast, Array) else self.inapplicable(rule, cast, path)

        try:
            compiler = self.rule_compilers[rule]
        except (KeyError, TypeError):
            return self.inapplicable(rule, cast, path, u'Unknown rule {rule!r} at {path}')

        return compiler(self, rule, value, cast, path)

    def inapplicable(self, rule, cast, path, message=u'Rule {rule!r} does not apply to {type} field {path}'):
        """ Handle a rule that does not apply to the field type: ignore it, or fail in strict mode """
        message = message.format(rule=rule, type=cast.name, path=self.path_name(path))
        if self.strict:
            raise SchemaError(message)
        logger.warning('%s: ignored', message)
        return None

    #endregion

    #region Rule Compilers

    def _cast_values(self, rule, values, cast, path):
        """ Cast the allowed values of a membership rule with the field caster, so they compare with the input """
        try:
            return [None if v is None else cast.cast(v) for v in values]
        except const.transformed_exceptions:
            raise SchemaError(u'`{}` values {!r} do not match the {} type at {}'.format(
                rule, values, cast.name, self.path_name(path)))

    def _collection(self, rule, value, path):
        if not isinstance(value, (list, tuple, set, frozenset)):
            raise SchemaError(u'`{}` must be a list at {}'.format(rule, self.path_name(path)))
        return list(value)

    def _compile_membership(self, rule, value, cast, path):
        if isinstance(cast, Map) or (isinstance(cast, Array) and cast.of_maps):
            return self.inapplicable(rule, cast, path)

        if rule == RULE.EQUALS:
            return In(self._cast_values(rule, [value], cast, path))

        values = self._cast_values(rule, self._collection(rule, value, path), cast, path)
        return (In if rule == RULE.INCLUDED else NotIn)(values)

    def _compile_subset(self, rule, value, cast, path):
        if not isinstance(cast, Array) or cast.of_maps:
            return self.inapplicable(rule, cast, path)
        return Subset(self._cast_values(rule, self._collection(rule, value, path), cast.inner, path))

    def _compile_size(self, rule, value, cast, path):
        # is, min, max: the meaning depends on the type
        if cast.token in TYPE.numeric:
            return self._compile_number(rule, value, cast, path)

        if isinstance(cast, String):
            unit = 'string'
        elif isinstance(cast, Array) and not cast.of_maps:
            unit = 'list'
        else:
            return self.inapplicable(rule, cast, path)

        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise SchemaError(u'`{}` must be a non-negative integer at {}'.format(rule, self.path_name(path)))
        return Length(rule, value, unit)

    def _compile_number(self, rule, value, cast, path):
        if cast.token not in TYPE.numeric:
            return self.inapplicable(rule, cast, path)
        if isinstance(value, bool) or not isinstance(value, (int, float, decimal.Decimal)):
            raise SchemaError(u'`{}` must be a number at {}'.format(rule, self.path_name(path)))

        # Decimals compare exactly: a float bound is converted the way decimal input is
        if cast.token == TYPE.DECIMAL:
            value = self._cast_values(rule, [value], cast, path)[0]
        return Number(rule, value)

    def _compile_normalizer(self, rule, value, cast, path):
        if not isinstance(cast, String):
            return self.inapplicable(rule, cast, path)
        if not isinstance(value, bool):
            raise SchemaError(u'`{}` must be a boolean at {}'.format(rule, self.path_name(path)))
        if not value:
            return None
        return Trim() if rule == RULE.TRIM else Squish()

    def _compile_format(self, rule, value, cast, path):
        if not isinstance(cast, String):
            return self.inapplicable(rule, cast, path)
        try:
            pattern = self.patterns.resolve(value)
        except SchemaError as e:
            raise SchemaError(u'{} @ {}'.format(e, self.path_name(path)))
        return Format(pattern, value if isinstance(value, str) else None)

    rule_compilers = {
        RULE.EQUALS:                    _compile_membership,
        RULE.INCLUDED:                  _compile_membership,
        RULE.EXCLUDED:                  _compile_membership,
        RULE.SUBSET:                    _compile_subset,
        RULE.IS:                        _compile_size,
        RULE.MIN:                       _compile_size,
        RULE.MAX:                       _compile_size,
        RULE.EQUAL_TO:                  _compile_number,
        RULE.NOT_EQUAL_TO:              _compile_number,
        RULE.GREATER_THAN:              _compile_number,
        RULE.LESS_THAN:                 _compile_number,
        RULE.GREATER_THAN_OR_EQUAL_TO:  _compile_number,
        RULE.LESS_THAN_OR_EQUAL_TO:     _compile_number,
        RULE.TRIM:                      _compile_normalizer,
        RULE.SQUISH:                    _compile_normalizer,
        RULE.FORMAT:                    _compile_format,
    }

    #endregion
