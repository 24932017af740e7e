""" Parameter validation library.

Core features:

* Validates untrusted, loosely-typed input: HTTP request parameters, JSON bodies, form data
* Casts values into the declared types: `'29'` becomes `29`
* Nested maps and lists of maps, with no limitation on depth
* Reports *all* errors at once, as a tree that mirrors the schema
* Errors carry a code and metadata, ready for translation
* Bring your own regex for `email`, `password`, `url`, `uuid` formats
* Schemas are compiled once, and validation never raises for bad input

```python
from goal import Schema, traverse_errors

schema = Schema({
    'name': {'type': 'string', 'required': True, 'is': 4},
})

schema.validate({'name': 'Jane'})  #-> Success({'name': 'Jane'})

result = schema.validate({'name': 'Joe'})
traverse_errors(result)  #-> {'name': ['should be 4 character(s)']}
```
"""
# Core

from .schema.errors import SchemaError, Invalid, MultipleInvalid

from .schema import Schema, Result, Success, Failure, ValidationContext, validate
from .schema.compiler import resolve_type

from .schema import markers
from .schema.markers import *

from .patterns import PatternRegistry, default_patterns

# Helpers
from .helpers import *
from .syntax import *
from .validators.strings import squish
