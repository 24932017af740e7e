
class TYPE:
    """ Field type tokens """

    STRING = 'string'
    INTEGER = 'integer'
    FLOAT = 'float'
    DECIMAL = 'decimal'
    BOOLEAN = 'boolean'
    DATE = 'date'
    TIME = 'time'
    DATETIME = 'datetime'
    UUID = 'uuid'
    ANY = 'any'
    ENUM = 'enum'
    MAP = 'map'

    #: Array type: ('array', <inner type>)
    ARRAY = 'array'

    #: Legacy array spelling: {'type': 'list', 'inner_type': <inner type>}
    LIST = 'list'

    #: The type used when a rule set declares none
    DEFAULT = STRING

    numeric = (INTEGER, FLOAT, DECIMAL)


class RULE:
    """ Rule set keys """

    TYPE = 'type'
    REQUIRED = 'required'
    PROPERTIES = 'properties'
    VALUES = 'values'
    INNER_TYPE = 'inner_type'

    # Membership
    EQUALS = 'equals'
    INCLUDED = 'included'
    EXCLUDED = 'excluded'
    SUBSET = 'subset'

    # Numeric value, string length, or array length: depends on the field type
    IS = 'is'
    MIN = 'min'
    MAX = 'max'

    # Numeric only
    EQUAL_TO = 'equal_to'
    NOT_EQUAL_TO = 'not_equal_to'
    GREATER_THAN = 'greater_than'
    LESS_THAN = 'less_than'
    GREATER_THAN_OR_EQUAL_TO = 'greater_than_or_equal_to'
    LESS_THAN_OR_EQUAL_TO = 'less_than_or_equal_to'

    # Strings
    TRIM = 'trim'
    SQUISH = 'squish'
    FORMAT = 'format'

    #: `is`, `min`, `max` spelled as numeric comparisons
    number_aliases = {
        IS: EQUAL_TO,
        MIN: GREATER_THAN_OR_EQUAL_TO,
        MAX: LESS_THAN_OR_EQUAL_TO,
    }


class ERROR:
    """ Error codes """

    CAST = 'cast'
    REQUIRED = 'required'
    INCLUSION = 'inclusion'
    EXCLUSION = 'exclusion'
    SUBSET = 'subset'
    LENGTH = 'length'
    NUMBER = 'number'
    FORMAT = 'format'
