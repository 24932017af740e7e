""" Type casters: one per field type token.

A caster turns a loosely-typed input value (typically, a string from a query string or a form)
into the declared type, or reports `Invalid(u'is invalid', code='cast')`.

```python
from goal.validators.types import Integer

Integer()(u'29')  #-> 29
Integer()(u'a')
#-> Invalid: is invalid
```
"""

import re
import decimal
import uuid
from collections.abc import Mapping
from datetime import date, time, datetime

from .base import ValidatorBase
from ..schema.const import TYPE, ERROR
from ..schema.util import const, get_token_name


class Cast(ValidatorBase):
    """ Base for type casters.

    Subclasses implement `cast()`, which raises `TypeError` or `ValueError` when the value cannot be cast.
    """

    code = ERROR.CAST

    #: Type token
    token = None

    def __init__(self):
        self.name = get_token_name(self.token)

    def __call__(self, v):
        try:
            return self.cast(v)
        except const.transformed_exceptions:
            raise self.invalid(u'is invalid', v, type=self.name)

    def cast(self, v):
        """ Cast the value, or raise `TypeError`/`ValueError`

        :param v: Input value, never `None`
        :return: Cast value
        """
        raise NotImplementedError


class String(Cast):
    """ Accepts strings only: numbers are not silently converted """

    token = TYPE.STRING

    def cast(self, v):
        if not isinstance(v, str):
            raise TypeError(v)
        return v


class Integer(Cast):
    """ Accepts integers and strings holding a whole integer """

    token = TYPE.INTEGER

    _rex = re.compile(r'[+-]?[0-9]+')

    def cast(self, v):
        if isinstance(v, bool):
            raise TypeError(v)
        if isinstance(v, int):
            return v
        if isinstance(v, str) and self._rex.fullmatch(v):
            return int(v)
        raise ValueError(v)


class Float(Cast):
    """ Accepts floats, integers, decimals and numeric strings """

    token = TYPE.FLOAT

    _rex = re.compile(r'[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?')

    def cast(self, v):
        if isinstance(v, bool):
            raise TypeError(v)
        if isinstance(v, (int, float, decimal.Decimal)):
            return float(v)
        if isinstance(v, str) and self._rex.fullmatch(v):
            return float(v)
        raise ValueError(v)


class Decimal(Float):
    """ Accepts decimals, integers, floats and numeric strings.

    Floats are converted through their shortest representation: `100.04` becomes `Decimal('100.04')`.
    NaN and infinities are rejected.
    """

    token = TYPE.DECIMAL

    def cast(self, v):
        if isinstance(v, bool):
            raise TypeError(v)
        if isinstance(v, decimal.Decimal):
            value = v
        elif isinstance(v, int):
            value = decimal.Decimal(v)
        elif isinstance(v, float):
            value = decimal.Decimal(repr(v))
        elif isinstance(v, str) and self._rex.fullmatch(v):
            value = decimal.Decimal(v)
        else:
            raise ValueError(v)

        if not value.is_finite():
            raise ValueError(v)
        return value


class Boolean(Cast):
    """ Accepts booleans, and 'true', 'false', '1', '0' """

    token = TYPE.BOOLEAN

    _values = {
        u'true': True,
        u'1': True,
        u'false': False,
        u'0': False,
    }

    def cast(self, v):
        if isinstance(v, bool):
            return v
        if isinstance(v, str) and v in self._values:
            return self._values[v]
        raise ValueError(v)


class Date(Cast):
    """ Accepts dates and 'YYYY-MM-DD' strings. A `datetime` is truncated to its date. """

    token = TYPE.DATE

    format = '%Y-%m-%d'

    #: strptime() accepts unpadded fields: the layout is checked first
    _rex = re.compile(r'[0-9]{4}-[0-9]{2}-[0-9]{2}')

    def cast(self, v):
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, date):
            return v
        if isinstance(v, str):
            if not self._rex.fullmatch(v):
                raise ValueError(v)
            return datetime.strptime(v, self.format).date()
        raise TypeError(v)


class Time(Cast):
    """ Accepts times and 'HH:MM:SS', 'HH:MM:SS.ffffff', 'HH:MM' strings """

    token = TYPE.TIME

    formats = ('%H:%M:%S', '%H:%M:%S.%f', '%H:%M')

    _rex = re.compile(r'[0-9]{2}:[0-9]{2}(:[0-9]{2}(\.[0-9]{1,6})?)?')

    def cast(self, v):
        if isinstance(v, datetime):
            return v.time()
        if isinstance(v, time):
            return v
        if not isinstance(v, str):
            raise TypeError(v)
        if not self._rex.fullmatch(v):
            raise ValueError(v)
        for format in self.formats:
            try:
                return datetime.strptime(v, format).time()
            except ValueError:
                pass
        raise ValueError(v)


class DateTime(Cast):
    """ Accepts datetimes and ISO 8601 strings, with an optional 'Z' suffix """

    token = TYPE.DATETIME

    def cast(self, v):
        if isinstance(v, datetime):
            return v
        if not isinstance(v, str):
            raise TypeError(v)
        if v.endswith(u'Z'):
            v = v[:-1] + u'+00:00'
        return datetime.fromisoformat(v)


class Uuid(Cast):
    """ Accepts UUIDs and hyphenated UUID strings, normalized to the lowercase canonical form """

    token = TYPE.UUID

    _rex = re.compile(r'[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}')

    def cast(self, v):
        if isinstance(v, uuid.UUID):
            return str(v)
        if not isinstance(v, str) or not self._rex.fullmatch(v):
            raise ValueError(v)
        return str(uuid.UUID(v))


class Anything(Cast):
    """ Passthrough """

    token = TYPE.ANY

    def cast(self, v):
        return v


class Enum(Cast):
    """ A closed set of string values.

    :param values: Allowed values. Each is converted to a string.
    :type values: list
    """

    token = TYPE.ENUM

    def __init__(self, values):
        self.values = tuple(u'{}'.format(v) for v in values)
        super(Enum, self).__init__()

    def cast(self, v):
        if not isinstance(v, str):
            raise TypeError(v)
        if v not in self.values:
            raise ValueError(v)
        return v


class Map(Cast):
    """ Any mapping. The value is kept as is: `properties` are validated by the engine. """

    token = TYPE.MAP

    def cast(self, v):
        if not isinstance(v, Mapping):
            raise TypeError(v)
        return v


class Array(Cast):
    """ A homogeneous list.

    Every member is cast with the inner caster: if any of them fails, the whole value is invalid.
    `None` members are kept, except in arrays of maps.

    :param inner: Caster for the members
    :type inner: Cast
    """

    def __init__(self, inner):
        self.inner = inner
        self.token = (TYPE.ARRAY, inner.token)
        super(Array, self).__init__()

    @property
    def of_maps(self):
        """ Is it an array of maps? """
        return isinstance(self.inner, Map)

    def cast(self, v):
        if not isinstance(v, (list, tuple)):
            raise TypeError(v)
        if self.of_maps:
            return [self.inner.cast(item) for item in v]
        return [None if item is None else self.inner.cast(item)
                for item in v]


#: Casters for simple type tokens
casters = {
    cls.token: cls
    for cls in (String, Integer, Float, Decimal, Boolean, Date, Time, DateTime, Uuid, Anything, Map)
}


__all__ = ('Cast', 'String', 'Integer', 'Float', 'Decimal', 'Boolean', 'Date', 'Time', 'DateTime', 'Uuid',
           'Anything', 'Enum', 'Map', 'Array',)
