from .base import ValidatorBase
from ..schema.const import ERROR


def squish(s):
    """ Remove leading, trailing, and repeated inner whitespace.

    ```python
    squish(u' banana  man ')  #-> u'banana man'
    ```

    :type s: unicode
    :rtype: unicode
    """
    return u' '.join(s.split())


class Trim(ValidatorBase):
    """ Strip leading and trailing whitespace.

    A normalizer: the engine applies it before any other constraint on the field,
    so `min`, `max` and `format` see the stripped value.
    """

    name = u'Trim'
    normalizer = True

    def __call__(self, v):
        return v.strip()


class Squish(Trim):
    """ Strip leading and trailing whitespace, and collapse inner whitespace to a single space. """

    name = u'Squish'

    def __call__(self, v):
        return squish(v)


class Format(ValidatorBase):
    """ Validate the input string against a regular expression.

    ```python
    import re
    from goal.validators import Format

    Format(re.compile(r'^0x[A-F0-9]+$'), u'hex')(u'0xDEADBEEF')  #-> u'0xDEADBEEF'
    Format(re.compile(r'^0x[A-F0-9]+$'), u'hex')(u'0x')
    #-> Invalid: has invalid format
    ```

    The pattern is searched, not anchored: anchor it with `^...$` to match the whole string.

    :param pattern: Compiled pattern
    :type pattern: re.Pattern
    :param format: Pattern name, reported in `Invalid.info`
    :type format: unicode|None
    """

    code = ERROR.FORMAT

    def __init__(self, pattern, format=None):
        self.rex = pattern
        self.format = format or pattern.pattern
        self.name = u'Format({})'.format(self.format)

    def __call__(self, v):
        if not self.rex.search(v):
            raise self.invalid(u'has invalid format', v, format=self.format)
        return v


__all__ = ('squish', 'Trim', 'Squish', 'Format',)
