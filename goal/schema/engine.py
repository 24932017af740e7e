""" The recursive validation engine.

Validation of a single mapping goes through these steps:

1. **Cast**: every declared field present in the input is cast to its type.
   A value that cannot be cast is reported as `is invalid`.
   An explicit `None` (or an empty string) is kept as `None`; absent fields are skipped.
2. **Required**: required fields that are absent, `None` or blank are reported as `can't be blank`.
3. **Constraints**: `trim` and `squish` rewrite the value first, then every constraint runs in declaration order.
   All failures are reported, not just the first one.
4. **Nested fields**: maps and arrays of maps with `properties` are validated recursively,
   each with a fresh `ValidationContext`. The typed result replaces the raw value;
   a failed sub-context moves the field into `errors`.

Whatever happens with one field, its siblings are still validated.
"""

from .const import ERROR
from .errors import Invalid
from .util import const, is_blank, get_literal_name


class ValidationContext(object):
    """ The working state of a single validation call.

    A context is created for every validated mapping: the top-level input,
    every nested map, and every member of an array of maps.

    :param schema: The compiled schema
    :type schema: goal.schema.compiler.CompiledSchema
    :param input: The raw input mapping
    :type input: Mapping
    :param path: Path to this mapping in the top-level input
    :type path: list|None
    """

    def __init__(self, schema, input, path=None):
        self.schema = schema
        self.input = input
        self.path = path or []

        #: field -> validated value
        #: Every field in here has passed casting and all constraints
        self.changes = {}

        #: [(field, error)]
        #: The error is an `Invalid`, a nested `ValidationContext` (maps),
        #: or a list of `ValidationContext`s (arrays of maps, one per member)
        self.errors = []

    @property
    def valid(self):
        """ Is the input valid?

        Nested failures are moved into `errors`, so this covers nested contexts as well.

        :rtype: bool
        """
        return not self.errors

    def add_error(self, field, error):
        """ Report an error on a field and drop the field from `changes`

        :param field: Field name
        :param error: Field error, or a nested error tree
        :type error: Invalid|ValidationContext|list[ValidationContext]
        """
        if isinstance(error, Invalid):
            error.enrich(path=self.path + [field])
        self.errors.append((field, error))
        self.changes.pop(field, None)

    def has_error(self, field):
        return any(name == field for name, error in self.errors)

    def errors_on(self, field):
        """ Get the errors reported on a field

        :rtype: list
        """
        return [error for name, error in self.errors if name == field]

    def iter_errors(self):
        """ Iterate over every `Invalid` in this context, including nested contexts

        :rtype: Iterable[Invalid]
        """
        for field, error in self.errors:
            if isinstance(error, ValidationContext):
                for e in error.iter_errors():
                    yield e
            elif isinstance(error, list):
                for context in error:
                    for e in context.iter_errors():
                        yield e
            else:
                yield error

    def __repr__(self):
        return '{cls}(valid={0.valid!r}, changes={0.changes!r}, errors={0.errors!r})'.format(
            self, cls=type(self).__name__)


def run(schema, params, path=None):
    """ Validate a mapping against a compiled schema

    :param schema: The compiled schema
    :type schema: goal.schema.compiler.CompiledSchema
    :param params: Input mapping
    :type params: Mapping
    :param path: Path to this mapping in the top-level input
    :type path: list|None
    :rtype: ValidationContext
    """
    context = ValidationContext(schema, params, path)

    cast_fields(context)
    validate_required_fields(context)
    validate_basic_fields(context)
    validate_nested_fields(context)

    return context


def cast_fields(context):
    """ Cast every declared field present in the input """
    for field in context.schema:
        value = field.lookup(context.input)

        # Absent: skip
        if value is const.UNDEFINED:
            continue

        # Explicit None
        if value is None or (isinstance(value, str) and value in const.empty_values):
            context.changes[field.key] = None
            continue

        try:
            context.changes[field.key] = field.cast(value)
        except Invalid as e:
            context.add_error(field.key, e)


def validate_required_fields(context):
    """ Report required fields that are missing, unless they already failed casting """
    for field in context.schema:
        if not field.required or context.has_error(field.key):
            continue

        if is_blank(context.changes.get(field.key)):
            context.add_error(field.key, Invalid(
                u"can't be blank", ERROR.REQUIRED,
                get_literal_name(context.changes.get(field.key)), None, field))


def validate_basic_fields(context):
    """ Normalize and check scalar fields """
    for field in context.schema:
        if field.nested or field.key not in context.changes:
            continue

        value = context.changes[field.key]
        if value is None:
            continue

        # Normalize first: constraints see the normalized value
        for normalizer in field.normalizers:
            value = normalizer(value)
        context.changes[field.key] = value

        # Report every failure
        errors = []
        for constraint in field.constraints:
            try:
                constraint(value)
            except Invalid as e:
                errors.append(e)

        for e in errors:
            context.add_error(field.key, e)


def validate_nested_fields(context):
    """ Validate maps and arrays of maps recursively, and merge the results """
    for field in context.schema:
        if not field.nested:
            continue

        value = context.changes.get(field.key)
        if value is None:
            continue

        # Array of maps: one context per member, positions preserved
        if field.many:
            path = context.path + [field.key]
            members = [run(field.properties, item, path + [index])
                       for index, item in enumerate(value)]

            if all(member.valid for member in members):
                context.changes[field.key] = [member.changes for member in members]
            else:
                context.add_error(field.key, members)
        # Map
        else:
            member = run(field.properties, value, context.path + [field.key])

            if member.valid:
                context.changes[field.key] = member.changes
            else:
                context.add_error(field.key, member)
