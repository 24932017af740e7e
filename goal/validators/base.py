from ..schema.errors import Invalid
from ..schema.util import get_literal_name


class ValidatorBase(object):
    """ Base for class-based validators """

    #: Validator name.
    #: Must be overridden in subclasses, and potentially hold the value
    name = u'???'

    #: Error code for the `Invalid` errors this validator reports
    code = None

    #: Normalizers transform the value and never fail.
    #: The engine runs them before any other constraint on the field.
    normalizer = False

    def __call__(self, v):
        """ Do validation

        :param v: Input value
        :return: Sanitized value
        :raises Invalid: errors
        """
        raise NotImplementedError

    def invalid(self, message, v, **info):
        """ Create an `Invalid` error reported by this validator

        :param message: Message template
        :type message: unicode
        :param v: The offending value
        :rtype: Invalid
        """
        return Invalid(message, self.code, get_literal_name(v), None, self, **info)

    def __repr__(self):
        return self.name

    def __str__(self):
        return self.name
