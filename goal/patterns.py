""" Named regular expressions for the `format` rule.

`goal` has sensible defaults for `uuid`, `email`, `password` and `url`.
If these don't match your production system's behavior, bring your own:

```python
from goal import Schema, PatternRegistry

patterns = PatternRegistry(email=r'^[^@]+@example\\.com$', hex=r'^[0-9a-f]+$')

schema = Schema({
    'email': {'format': 'email'},
    'token': {'format': 'hex'},
}, patterns=patterns)
```

A registry is immutable: [`PatternRegistry.replace()`](#patternregistryreplace) returns a new one.
Overrides can also be loaded from application configuration, or from the environment:

```python
PatternRegistry.from_config({'email_regex': r'^[^@]+@example\\.com$'})
PatternRegistry.from_env()  # GOAL_EMAIL_REGEX=...
```
"""

import os
import re
import logging
from collections.abc import Mapping

from .schema.errors import SchemaError

logger = logging.getLogger(__name__)

#: Built-in patterns
DEFAULT_PATTERNS = {
    'uuid': r'^[0-9a-fA-F]{8}\b-[0-9a-fA-F]{4}\b-[0-9a-fA-F]{4}\b-[0-9a-fA-F]{4}\b-[0-9a-fA-F]{12}$',
    'email': r'^(([^<>()\[\]\\.,;:\s@"]+(\.[^<>()\[\]\\.,;:\s@"]+)*)|(".+"))'
             r'@((\[[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\])|(([a-zA-Z\-0-9]+\.)+[a-zA-Z]{2,}))$',
    'password': r'^(?=.*[a-zA-Z])(?=.*[0-9])',
    'url': r'^(http://www\.|https://www\.|http://|https://)?[a-z0-9]+([\-.][a-z0-9]+)*\.[a-z]{2,5}(:[0-9]{1,5})?(/.*)?$',
}

#: Configuration keys are spelled '<name>_regex'
CONFIG_SUFFIX = '_regex'


class PatternRegistry(Mapping):
    """ An immutable mapping of pattern names to compiled regular expressions.

    :param patterns: Patterns to use instead of the built-in ones
    :type patterns: Mapping|None
    :param overrides: Patterns to add or override, as keyword arguments
    """

    def __init__(self, patterns=None, **overrides):
        source = dict(DEFAULT_PATTERNS if patterns is None else patterns)
        source.update(overrides)
        self._patterns = {name: self._compile(name, pattern) for name, pattern in source.items()}

    @staticmethod
    def _compile(name, pattern):
        try:
            return re.compile(pattern)
        except (re.error, TypeError) as e:
            raise SchemaError(u'Invalid regular expression for {!r}: {}'.format(name, e))

    def __getitem__(self, name):
        return self._patterns[name]

    def __iter__(self):
        return iter(self._patterns)

    def __len__(self):
        return len(self._patterns)

    def __repr__(self):
        return '{cls}({names})'.format(cls=type(self).__name__, names=', '.join(sorted(self._patterns)))

    def resolve(self, format):
        """ Get the compiled pattern for a `format` rule value

        :param format: Pattern name, or a compiled pattern which is used as is
        :type format: str|re.Pattern
        :rtype: re.Pattern
        :raises SchemaError: Unknown pattern name
        """
        if isinstance(format, re.Pattern):
            return format
        try:
            return self._patterns[format]
        except (KeyError, TypeError):
            raise SchemaError(u'Unknown format {!r}: known formats are {}'.format(
                format, u', '.join(sorted(self._patterns))))

    def replace(self, **overrides):
        """ Get a copy of this registry with some patterns added or replaced

        :rtype: PatternRegistry
        """
        patterns = dict(self._patterns)
        patterns.update(overrides)
        return type(self)(patterns)

    @classmethod
    def from_config(cls, config):
        """ Load overrides from an application configuration mapping.

        Keys are spelled '<name>_regex': `uuid_regex`, `email_regex`, `password_regex`, `url_regex`,
        or any custom name. Other keys are ignored.

        :type config: Mapping
        :rtype: PatternRegistry
        """
        overrides = {key[:-len(CONFIG_SUFFIX)]: pattern
                     for key, pattern in config.items()
                     if key.endswith(CONFIG_SUFFIX)}
        if overrides:
            logger.debug('Pattern overrides loaded from config: %s', ', '.join(sorted(overrides)))
        return cls(**overrides)

    @classmethod
    def from_env(cls, environ=None, prefix='GOAL_'):
        """ Load overrides from environment variables: `GOAL_EMAIL_REGEX`, `GOAL_HEX_REGEX`, ...

        :param environ: Environment mapping. Defaults to `os.environ`
        :type environ: Mapping|None
        :param prefix: Variable name prefix
        :type prefix: str
        :rtype: PatternRegistry
        """
        environ = os.environ if environ is None else environ
        return cls.from_config({key[len(prefix):].lower(): value
                                for key, value in environ.items()
                                if key.startswith(prefix)})


#: The registry used when none is given
default_patterns = PatternRegistry()
