""" Misc utilities """

import decimal
import uuid
from datetime import date, time, datetime

from .const import TYPE


class Undefined(object):
    """ Special singleton object to represent the case when no value was provided.

    This is how the engine tells "the key is absent" from "the key is present and set to `None`".

    This value is never equal to anything and always returns False for any attempts to typecheck it:
    this makes sure it will never match any condition.
    """

    _instance = None

    def __new__(cls):
        # Singleton
        if cls._instance is None:
            cls._instance = super(Undefined, cls).__new__(cls)
        return cls._instance

    def __eq__(self, other):
        return False

    def __ne__(self, other):
        return True

    __hash__ = object.__hash__

    def __bool__(self):
        return False

    def __repr__(self):
        return '<Undefined>'


def get_literal_name(v):
    """ Get a human-friendly name for the given literal.

    :param v: Value
    :type v: *
    :rtype: unicode
    """
    return u'{}'.format(v)


def get_token_name(token):
    """ Get a printable name for a type token.

    ```python
    get_token_name('integer')  #-> 'integer'
    get_token_name(('array', 'map'))  #-> 'array<map>'
    ```

    :type token: str|tuple
    :rtype: unicode
    """
    if isinstance(token, tuple):
        return u'{}<{}>'.format(token[0], get_token_name(token[1]))
    return u'{}'.format(token)


#: Python types accepted in place of type tokens
type_aliases = {
    str:              TYPE.STRING,
    int:              TYPE.INTEGER,
    float:            TYPE.FLOAT,
    decimal.Decimal:  TYPE.DECIMAL,
    bool:             TYPE.BOOLEAN,
    date:             TYPE.DATE,
    time:             TYPE.TIME,
    datetime:         TYPE.DATETIME,
    uuid.UUID:        TYPE.UUID,
    dict:             TYPE.MAP,
    list:             TYPE.LIST,
}


def is_blank(v):
    """ Test whether the value counts as "not provided" for required fields: `None`, or a whitespace-only string

    :rtype: bool
    """
    if v is None:
        return True
    if isinstance(v, str):
        return not v.strip()
    return False


def commajoin_as_strings(iterable):
    """ Join the given iterable with ',' """
    return u','.join(u'{}'.format(i) for i in iterable)


class const:
    """ Misc constants """

    #: Undefined singleton
    UNDEFINED = Undefined()

    #: Input values treated as an explicit `None`
    empty_values = (u'',)

    #: Exception classes that mean "cannot cast" when thrown by a caster
    transformed_exceptions = (TypeError, ValueError, ArithmeticError)
