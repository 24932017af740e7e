"""
Source: [goal/schema/errors.py](goal/schema/errors.py)

Two kinds of errors exist, and they never mix:

1. [`SchemaError`](#schemaerror) is a programming mistake in the schema itself: unknown type, malformed `values`,
   `properties` on a scalar field. It is raised immediately, when the [`Schema`](#schema) is compiled.
2. [`Invalid`](#invalid) describes a single field that failed validation. The engine never raises it: every
   `Invalid` is collected into the [`ValidationContext`](#validationcontext) so that *all* problems are
   reported at once, and a single bad field never stops the validation of its siblings.

[`MultipleInvalid`](#multipleinvalid) is only raised when the caller asked for exceptions:
see [`Schema.__call__`](#schema).

All errors are available right at the top-level:

```python
from goal import SchemaError, Invalid, MultipleInvalid
```
"""

import re


class BaseError(Exception):
    """ Base validation exception """


class SchemaError(BaseError):
    """ Schema error (e.g. malformed) """


class Invalid(BaseError):
    """ Validation error for a single value.

    The message is a template rather than prose: `'should be at least {count} character(s)'`.
    Together with `code` and `info`, this gives a translation layer everything it needs to build
    a localized message; [`Invalid.render()`](#invalidrender) gives the default English one.

    :param message: Error message template, e.g. `u"can't be blank"`
    :type message: unicode
    :param code: Machine-readable error code: 'cast', 'required', 'inclusion', 'exclusion', 'subset',
        'length', 'number', 'format'.
    :type code: str|None
    :param provided: The value that was actually supplied by the user
    :param path: Path to the error value.

        E.g. if an invalid value was encountered at ['dogs'][1]['age'], then path=['dogs', 1, 'age'].

    :type path: list
    :param validator: The validator that has failed
    :type validator: *
    :param info: Structured metadata: the failing bound (`count`, `number`), the allowed values (`enum`), etc.
    :type info: dict
    """

    _placeholder_rex = re.compile(r'{(\w+)}')

    def __init__(self, message, code=None, provided=None, path=None, validator=None, **info):
        super(Invalid, self).__init__(message, code, provided, path, validator)
        self.message = message
        self.code = code
        self.provided = provided
        self.path = path or []
        self.validator = validator
        self.info = info

    def __iter__(self):
        """ Iterate over container errors.

        For `Invalid`, just yields self, however for `MultipleInvalid` it yields every contained errors.
        """
        yield self

    def __repr__(self):
        return '{cls}({0.message!r}, ' \
               'code={0.code!r}, ' \
               'provided={0.provided!r}, ' \
               'path={0.path!r}, ' \
               'info={0.info!r})' \
            .format(self, cls=type(self).__name__)

    def __str__(self):
        message = self.render()
        if not self.path:
            return message
        return u'{} @ {}'.format(
            message,
            u''.join(map(lambda v: u'[{!r}]'.format(v), self.path))
        )

    def render(self, message=None):
        """ Interpolate `info` into the message template.

        Unknown placeholders are left as they are.

        ```python
        Invalid(u'should be {count} character(s)', 'length', count=4).render()
        #-> u'should be 4 character(s)'
        ```

        :param message: Template override, e.g. a translated one
        :type message: unicode|None
        :rtype: unicode
        """
        return self._placeholder_rex.sub(
            lambda m: u'{}'.format(self.info.get(m.group(1), m.group(0))),
            self.message if message is None else message
        )

    def enrich(self, path=None):
        """ Prepend a path prefix to this error, or to every contained error of a `MultipleInvalid`.

        The engine calls it when the error is reported on a field: validators know nothing about where they run.

        :param path: Prefix to prepend to Invalid.path
        :type path: list|None
        :rtype: Invalid|MultipleInvalid
        """
        for e in self:
            e.path = (path or []) + e.path
        return self


class MultipleInvalid(Invalid):
    """ Validation errors for multiple values.

    Raised by [`Schema.__call__`](#schema) when the input is invalid.

    `MultipleInvalid` has the same attributes as [`Invalid`](#invalid),
    but the values are taken from the first error in the list.

    In addition, it has the `errors` attribute: a plain list of [`Invalid`](#invalid) errors with full paths,
    and `context`: the failed [`ValidationContext`](#validationcontext) which holds the error tree.

    ```python
    try:
        schema(params)
    except MultipleInvalid as ee:
        reported_problems = {}
        for e in ee:
            path_str = u'.'.join(map(str, e.path))  # 'dogs.1.age'
            reported_problems.setdefault(path_str, []).append(e.render())
    ```

    :param errors: The reported errors.
    :type errors: list[Invalid]
    :param context: The failed validation context
    :type context: goal.schema.engine.ValidationContext|None
    """

    def __init__(self, errors, context=None):
        errors = self.flatten(errors)
        assert errors, 'Errors list is empty'

        e = errors[0]
        super(MultipleInvalid, self).__init__(e.message, e.code, e.provided, e.path, e.validator, **e.info)

        #: The collected errors
        self.errors = errors
        #: The failed context
        self.context = context

    def __iter__(self):
        return iter(self.errors)

    def __repr__(self):
        return '{cls}({0!r})'.format(self.errors, cls=type(self).__name__)

    def __str__(self):
        return u'; '.join(map(Invalid.__str__, self.errors))

    @classmethod
    def flatten(cls, errors):
        """ Unwind `MultipleInvalid` to have a plain list of `Invalid`

        :type errors: list[Invalid|MultipleInvalid]
        :rtype: list[Invalid]
        """
        ers = []
        for e in errors:
            if isinstance(e, MultipleInvalid):
                ers.extend(cls.flatten(e.errors))
            else:
                ers.append(e)
        return ers

    @classmethod
    def from_context(cls, context):
        """ Collect every leaf error of a failed context, recursively.

        :type context: goal.schema.engine.ValidationContext
        :rtype: MultipleInvalid
        """
        return cls(list(context.iter_errors()), context)
