""" Validators the schema compiler builds from field rule sets.

* [types](goal/validators/types.py): casters, one per field type
* [numbers](goal/validators/numbers.py): numeric comparisons
* [strings](goal/validators/strings.py): trimming, squishing, formats
* [values](goal/validators/values.py): membership and length
"""

from .base import ValidatorBase
from .types import *
from .numbers import *
from .strings import *
from .values import *
