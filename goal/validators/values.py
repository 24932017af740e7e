import unicodedata

from .base import ValidatorBase
from ..schema.const import RULE, ERROR
from ..schema.util import commajoin_as_strings


class In(ValidatorBase):
    """ Validate that a value is in a collection.

    This is a plain simple `value in container` check. `equals` is compiled into an `In` with a single value.

    ```python
    from goal.validators import In

    In([u'Mercedes', u'GMC'])(u'GMC')  #-> u'GMC'
    In([u'Mercedes', u'GMC'])(u'Lada')
    #-> Invalid: is invalid
    ```

    :param container: Collection of allowed values
    :type container: list|tuple|set|frozenset
    """

    code = ERROR.INCLUSION
    message = u'is invalid'

    def __init__(self, container):
        self.container = list(container)
        self.name = u'{cls}({container})'.format(
            cls=type(self).__name__,
            container=commajoin_as_strings(self.container))

    def test(self, v):
        return v in self.container

    def __call__(self, v):
        if not self.test(v):
            raise self.invalid(self.message, v, enum=self.container)
        return v


class NotIn(In):
    """ Validate that a value is not in a collection """

    code = ERROR.EXCLUSION
    message = u'is reserved'

    def test(self, v):
        return v not in self.container


class Subset(In):
    """ Validate that every member of a list is in a collection """

    code = ERROR.SUBSET
    message = u'has an invalid entry'

    def test(self, v):
        return all(member in self.container for member in v)


class Length(ValidatorBase):
    """ Validate the length of a string (in characters) or of a list (in items).

    A character is a base code point together with the combining marks that follow it:
    `e` followed by U+0301 counts as one, like its precomposed form. Other multi-code-point sequences,
    such as emoji joined with zero-width joiners, count every code point.

    ```python
    from goal.validators import Length

    Length('min', 3)(u'Jane')  #-> u'Jane'
    Length('is', 4)(u'Joe')
    #-> Invalid: should be 4 character(s)
    ```

    :param kind: 'is', 'min' or 'max'
    :type kind: str
    :param count: The bound
    :type count: int
    :param unit: 'string' or 'list'
    :type unit: str
    """

    code = ERROR.LENGTH

    #: (unit, kind) -> message
    messages = {
        ('string', RULE.IS):   u'should be {count} character(s)',
        ('string', RULE.MIN):  u'should be at least {count} character(s)',
        ('string', RULE.MAX):  u'should be at most {count} character(s)',
        ('list', RULE.IS):     u'should have {count} item(s)',
        ('list', RULE.MIN):    u'should have at least {count} item(s)',
        ('list', RULE.MAX):    u'should have at most {count} item(s)',
    }

    tests = {
        RULE.IS:   lambda length, count: length == count,
        RULE.MIN:  lambda length, count: length >= count,
        RULE.MAX:  lambda length, count: length <= count,
    }

    def __init__(self, kind, count, unit='string'):
        assert (unit, kind) in self.messages, 'Unknown length check: {!r}'.format((unit, kind))

        self.kind = kind
        self.count = count
        self.unit = unit
        self.test = self.tests[kind]
        self.message = self.messages[(unit, kind)]

        self.name = u'Length({}={})'.format(kind, count)

    def measure(self, v):
        if self.unit == 'list':
            return len(v)
        return sum(1 for c in v if not unicodedata.combining(c))

    def __call__(self, v):
        if not self.test(self.measure(v), self.count):
            raise self.invalid(self.message, v, kind=self.kind, count=self.count, type=self.unit)
        return v


__all__ = ('In', 'NotIn', 'Subset', 'Length',)
