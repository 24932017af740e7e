import operator

from .base import ValidatorBase
from ..schema.const import RULE, ERROR


class Number(ValidatorBase):
    """ Compare a number against a bound.

    ```python
    from goal.validators import Number

    Number('greater_than_or_equal_to', 0)(5)  #-> 5
    Number('greater_than_or_equal_to', 0)(-1)
    #-> Invalid: must be greater than or equal to 0
    ```

    `is`, `min` and `max` are accepted as aliases of `equal_to`, `greater_than_or_equal_to` and
    `less_than_or_equal_to`.

    :param kind: Comparison name
    :type kind: str
    :param number: The bound
    :type number: int|float|Decimal
    """

    code = ERROR.NUMBER

    #: kind -> (test, message)
    comparisons = {
        RULE.LESS_THAN:                 (operator.lt, u'must be less than {number}'),
        RULE.GREATER_THAN:              (operator.gt, u'must be greater than {number}'),
        RULE.LESS_THAN_OR_EQUAL_TO:     (operator.le, u'must be less than or equal to {number}'),
        RULE.GREATER_THAN_OR_EQUAL_TO:  (operator.ge, u'must be greater than or equal to {number}'),
        RULE.EQUAL_TO:                  (operator.eq, u'must be equal to {number}'),
        RULE.NOT_EQUAL_TO:              (operator.ne, u'must be not equal to {number}'),
    }

    def __init__(self, kind, number):
        kind = RULE.number_aliases.get(kind, kind)
        assert kind in self.comparisons, 'Unknown comparison: {!r}'.format(kind)

        self.kind = kind
        self.number = number
        self.test, self.message = self.comparisons[kind]

        self.name = u'Number({}={})'.format(kind, number)

    def __call__(self, v):
        if not self.test(v, self.number):
            raise self.invalid(self.message, v, kind=self.kind, number=self.number)
        return v


__all__ = ('Number',)
