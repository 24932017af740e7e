import re
import unittest
import uuid
from datetime import date, time, datetime, timezone
from decimal import Decimal

from goal import Invalid, MultipleInvalid, SchemaError, PatternRegistry, default_patterns, squish, resolve_type
from goal.validators.types import String, Integer, Float, Decimal as DecimalCast, Boolean, Date, Time, DateTime, \
    Uuid, Anything, Enum, Map, Array
from goal.validators import Number, Length, In, NotIn, Subset, Format, Trim, Squish
from goal.schema.util import const, get_token_name, is_blank


class CastTest(unittest.TestCase):
    """ Test: type casters """

    def assertCasts(self, caster, value, expected):
        result = caster(value)
        self.assertEqual(result, expected)
        self.assertIs(type(result), type(expected))

    def assertFails(self, caster, value):
        with self.assertRaises(Invalid, msg=repr(value)) as cm:
            caster(value)
        e = cm.exception
        self.assertEqual(e.code, 'cast')
        self.assertEqual(e.message, u'is invalid')
        self.assertEqual(e.info, {'type': caster.name})
        self.assertIs(e.validator, caster)
        return e

    def test_string(self):
        self.assertCasts(String(), u'abc', u'abc')
        self.assertCasts(String(), u'', u'')
        for v in (1, 1.5, True, [], {}):
            self.assertFails(String(), v)

    def test_integer(self):
        self.assertCasts(Integer(), 29, 29)
        self.assertCasts(Integer(), u'29', 29)
        self.assertCasts(Integer(), u'-1', -1)
        self.assertCasts(Integer(), u'+1', 1)
        for v in (u'1.5', u'1e3', u'a', u' 1', u'12\n', u'\u0661\u0662', 1.5, True, [1]):
            self.assertFails(Integer(), v)

    def test_float(self):
        self.assertCasts(Float(), 60.5, 60.5)
        self.assertCasts(Float(), 60, 60.0)
        self.assertCasts(Float(), u'60.5', 60.5)
        self.assertCasts(Float(), u'.5', 0.5)
        self.assertCasts(Float(), u'1e3', 1000.0)
        self.assertCasts(Float(), Decimal('1.5'), 1.5)
        for v in (u'nan', u'inf', u'a', u'1.5.1', u'1.5\n', False, None):
            self.assertFails(Float(), v)

    def test_decimal(self):
        self.assertCasts(DecimalCast(), 100.04, Decimal('100.04'))
        self.assertCasts(DecimalCast(), u'100.04', Decimal('100.04'))
        self.assertCasts(DecimalCast(), 100, Decimal('100'))
        self.assertCasts(DecimalCast(), Decimal('1.10'), Decimal('1.10'))
        for v in (u'NaN', Decimal('NaN'), Decimal('Infinity'), float('inf'), u'a', u'1.5\n', True):
            self.assertFails(DecimalCast(), v)

    def test_boolean(self):
        self.assertCasts(Boolean(), True, True)
        self.assertCasts(Boolean(), u'true', True)
        self.assertCasts(Boolean(), u'1', True)
        self.assertCasts(Boolean(), u'false', False)
        self.assertCasts(Boolean(), u'0', False)
        for v in (u'yes', u'True', 1, 0, None):
            self.assertFails(Boolean(), v)

    def test_date_time(self):
        self.assertCasts(Date(), u'2022-03-31', date(2022, 3, 31))
        self.assertCasts(Date(), date(2022, 3, 31), date(2022, 3, 31))
        self.assertCasts(Date(), datetime(2022, 3, 31, 10, 15), date(2022, 3, 31))
        self.assertFails(Date(), u'31.03.2022')
        self.assertFails(Date(), u'2020-1-5')
        self.assertFails(Date(), u'2022-03-31\n')
        self.assertFails(Date(), 20220331)

        self.assertCasts(Time(), u'10:15:30', time(10, 15, 30))
        self.assertCasts(Time(), u'10:15:30.5', time(10, 15, 30, 500000))
        self.assertCasts(Time(), u'10:15', time(10, 15))
        self.assertFails(Time(), u'10')
        self.assertFails(Time(), u'1:5')
        self.assertFails(Time(), u'10:15\n')
        self.assertFails(Time(), 1015)

        self.assertCasts(DateTime(), u'2022-03-31T10:15:00', datetime(2022, 3, 31, 10, 15))
        self.assertCasts(DateTime(), u'2022-03-31T10:15:00Z', datetime(2022, 3, 31, 10, 15, tzinfo=timezone.utc))
        self.assertFails(DateTime(), u'yesterday')
        self.assertFails(DateTime(), 0)

    def test_uuid(self):
        self.assertCasts(Uuid(), u'F45FB959-B0F9-4A32-B6CA-D32BDB53EE8E', u'f45fb959-b0f9-4a32-b6ca-d32bdb53ee8e')
        self.assertCasts(Uuid(), uuid.UUID('f45fb959-b0f9-4a32-b6ca-d32bdb53ee8e'),
                         u'f45fb959-b0f9-4a32-b6ca-d32bdb53ee8e')
        for v in (u'f45fb959b0f94a32b6cad32bdb53ee8e',
                  u'----1234567812345678123456781234567a',
                  u'f45fb959b0f94a32-b6ca-d32bdb53ee8e----',
                  u'uuid', 123):
            self.assertFails(Uuid(), v)

    def test_enum(self):
        caster = Enum(['male', 'female', 1])
        self.assertEqual(caster.values, (u'male', u'female', u'1'))
        self.assertCasts(caster, u'female', u'female')
        self.assertCasts(caster, u'1', u'1')
        self.assertFails(caster, u'alien')
        self.assertFails(caster, 1)

    def test_map(self):
        self.assertCasts(Map(), {'a': 1}, {'a': 1})
        self.assertFails(Map(), [('a', 1)])
        self.assertFails(Map(), u'a')

    def test_array(self):
        caster = Array(Integer())
        self.assertEqual(caster.name, u'array<integer>')
        self.assertFalse(caster.of_maps)
        self.assertEqual(caster([u'1', 2, None]), [1, 2, None])
        self.assertEqual(caster(()), [])
        self.assertFails(caster, [u'1', u'a'])
        self.assertFails(caster, u'1')

        caster = Array(Map())
        self.assertEqual(caster.name, u'array<map>')
        self.assertTrue(caster.of_maps)
        self.assertEqual(caster([{}]), [{}])
        self.assertFails(caster, [{}, None])

    def test_anything(self):
        value = object()
        self.assertIs(Anything()(value), value)


class ResolveTypeTest(unittest.TestCase):
    """ Test: resolve_type() """

    def test_tokens(self):
        self.assertIsInstance(resolve_type({}), String)
        self.assertIsInstance(resolve_type({'type': 'integer'}), Integer)
        self.assertIsInstance(resolve_type({'type': int}), Integer)
        self.assertIsInstance(resolve_type({'type': Decimal}), DecimalCast)
        self.assertIsInstance(resolve_type({'type': 'any'}), Anything)

        caster = resolve_type({'type': ['array', ['array', 'integer']]})
        self.assertEqual(caster.name, u'array<array<integer>>')
        self.assertEqual(caster([[u'1'], []]), [[1], []])

        caster = resolve_type({'type': 'list', 'inner_type': 'boolean'})
        self.assertEqual(caster.name, u'array<boolean>')

        caster = resolve_type({'type': 'enum', 'values': ('a', 'b')})
        self.assertEqual(caster.values, (u'a', u'b'))

    def test_errors(self):
        for rules in (
            {'type': 'str'},
            {'type': object},
            {'type': ('array',)},
            {'type': ('map', 'integer')},
            {'type': 'enum', 'values': []},
            {'type': 'enum', 'values': {'a': 1}},
        ):
            with self.assertRaises(SchemaError, msg=repr(rules)):
                resolve_type(rules)

    def test_token_name(self):
        self.assertEqual(get_token_name('integer'), u'integer')
        self.assertEqual(get_token_name(('array', 'map')), u'array<map>')


class ConstraintValidatorsTest(unittest.TestCase):
    """ Test: constraint validators """

    def test_number(self):
        v = Number('greater_than_or_equal_to', 0)
        self.assertEqual(v(5), 5)
        self.assertEqual(v(0), 0)
        with self.assertRaises(Invalid) as cm:
            v(-1)
        self.assertEqual(cm.exception.code, 'number')
        self.assertEqual(cm.exception.info, {'kind': 'greater_than_or_equal_to', 'number': 0})
        self.assertEqual(cm.exception.render(), u'must be greater than or equal to 0')
        self.assertEqual(cm.exception.provided, u'-1')

        # Aliases
        self.assertEqual(Number('min', 1).kind, 'greater_than_or_equal_to')
        self.assertEqual(Number('max', 1).kind, 'less_than_or_equal_to')
        self.assertEqual(Number('is', 1).kind, 'equal_to')
        self.assertRaises(Invalid, Number('is', 1), 2)

    def test_length(self):
        self.assertEqual(Length('min', 3)(u'Jane'), u'Jane')
        self.assertEqual(Length('max', 2, 'list')([1, 2]), [1, 2])

        with self.assertRaises(Invalid) as cm:
            Length('is', 4)(u'Joe')
        self.assertEqual(cm.exception.code, 'length')
        self.assertEqual(cm.exception.render(), u'should be 4 character(s)')
        self.assertEqual(cm.exception.info, {'kind': 'is', 'count': 4, 'type': 'string'})

        with self.assertRaises(Invalid) as cm:
            Length('max', 1, 'list')([1, 2])
        self.assertEqual(cm.exception.render(), u'should have at most 1 item(s)')

        # Characters, not bytes
        self.assertEqual(Length('is', 4)(u'Жанн'), u'Жанн')

        # Combining marks belong to the preceding character
        self.assertEqual(Length('is', 1)(u'e\u0301'), u'e\u0301')
        self.assertEqual(Length('is', 4)(u'Rene\u0301'), u'Rene\u0301')
        self.assertRaises(Invalid, Length('is', 2), u'e\u0301')
        self.assertEqual(Length('is', 2, 'list')([u'e', u'\u0301']), [u'e', u'\u0301'])

    def test_membership(self):
        self.assertEqual(In([u'Mercedes', u'GMC'])(u'GMC'), u'GMC')
        with self.assertRaises(Invalid) as cm:
            In([u'Mercedes', u'GMC'])(u'Lada')
        self.assertEqual(cm.exception.code, 'inclusion')
        self.assertEqual(cm.exception.info, {'enum': [u'Mercedes', u'GMC']})
        self.assertEqual(u'{}'.format(In([u'a', u'b'])), u'In(a,b)')

        self.assertEqual(NotIn([u'camo'])(u'red'), u'red')
        with self.assertRaises(Invalid) as cm:
            NotIn([u'camo'])(u'camo')
        self.assertEqual(cm.exception.code, 'exclusion')
        self.assertEqual(cm.exception.render(), u'is reserved')

        self.assertEqual(Subset([1, 2, 3])([3, 1]), [3, 1])
        self.assertEqual(Subset([1, 2, 3])([]), [])
        with self.assertRaises(Invalid) as cm:
            Subset([1, 2, 3])([1, 4])
        self.assertEqual(cm.exception.code, 'subset')
        self.assertEqual(cm.exception.render(), u'has an invalid entry')

    def test_format(self):
        v = Format(re.compile(r'^0x[A-F0-9]+$'), u'hex')
        self.assertEqual(v(u'0xDEADBEEF'), u'0xDEADBEEF')
        with self.assertRaises(Invalid) as cm:
            v(u'0x')
        self.assertEqual(cm.exception.code, 'format')
        self.assertEqual(cm.exception.info, {'format': u'hex'})

        # Searched, not anchored
        self.assertEqual(Format(re.compile(r'\d'))(u'a1b'), u'a1b')
        self.assertEqual(Format(re.compile(r'\d')).format, r'\d')

    def test_normalizers(self):
        self.assertTrue(Trim().normalizer)
        self.assertTrue(Squish().normalizer)
        self.assertFalse(Length('min', 1).normalizer)

        self.assertEqual(Trim()(u'  a  b  '), u'a  b')
        self.assertEqual(Squish()(u'  a  b  '), u'a b')


class StringTest(unittest.TestCase):
    """ Test: squish() and blank values """

    def test_squish(self):
        self.assertEqual(squish(u'hello  world'), u'hello world')
        self.assertEqual(squish(u'hello    world'), u'hello world')
        self.assertEqual(squish(u'  hello world'), u'hello world')
        self.assertEqual(squish(u'hello world   '), u'hello world')
        self.assertEqual(squish(u'   '), u'')
        self.assertEqual(squish(u''), u'')
        self.assertEqual(squish(u' \t hello \n\r world  '), u'hello world')

    def test_blank(self):
        self.assertTrue(is_blank(None))
        self.assertTrue(is_blank(u''))
        self.assertTrue(is_blank(u' \t\n'))
        self.assertFalse(is_blank(u'a'))
        self.assertFalse(is_blank(0))
        self.assertFalse(is_blank(False))
        self.assertFalse(is_blank([]))

    def test_undefined(self):
        self.assertIs(type(const.UNDEFINED)(), const.UNDEFINED)
        self.assertFalse(const.UNDEFINED)
        self.assertNotEqual(const.UNDEFINED, None)


class PatternRegistryTest(unittest.TestCase):
    """ Test: built-in patterns and overrides """

    def assertMatches(self, name, *strings, **kwargs):
        registry = kwargs.pop('registry', default_patterns)
        for s in strings:
            self.assertTrue(registry.resolve(name).search(s), u'{} should match {!r}'.format(name, s))

    def assertNotMatches(self, name, *strings, **kwargs):
        registry = kwargs.pop('registry', default_patterns)
        for s in strings:
            self.assertFalse(registry.resolve(name).search(s), u'{} should not match {!r}'.format(name, s))

    def test_uuid(self):
        self.assertMatches('uuid', u'38fb9ab5-6353-47fe-9ff6-19e5fe0f4f46')
        self.assertNotMatches('uuid', u'38fb9ab5-6353-47fe-9ff6-19e5fe0f4f46aa', u'uuid', u'123')

    def test_password(self):
        self.assertMatches('password', u'password123', u'password123!', u'Password123!')
        self.assertNotMatches('password', u'password', u'123')

    def test_email(self):
        self.assertMatches('email',
                           u'jane@doe.com',
                           u'bill.clinton@example.auction',
                           u'j.h.doe@subdomain.user.com',
                           u'linda+marie@doe.com',
                           u'fringilla%mail@doe.com',
                           u'j/h/doe@subdomain.user.com')
        self.assertNotMatches('email',
                              u'jane@doe',  # no TLD
                              u'jane@.com',  # no domain
                              u'jane @doe.com',
                              u'bill@clinton@example.auction',
                              u'chris@subdomain`.user.com',
                              u'lea[]@example.com')

    def test_url(self):
        self.assertMatches('url',
                           u'https://www.example.com',
                           u'http://example.com',
                           u'http://subdomain.example.com',
                           u'http://subdomain.subdomain.example.com',
                           u'example.com')
        self.assertNotMatches('url',
                              u'http://example',
                              u'http://example.',
                              u'http://example.c',
                              u'http://.com',
                              u'http://examp le.com')

    def test_overrides(self):
        for name in ('uuid', 'email', 'password', 'url', 'custom'):
            registry = PatternRegistry(**{name: r'^[a-zA-Z]+$'})
            self.assertMatches(name, u'abc', registry=registry)
            self.assertNotMatches(name, u'123', registry=registry)

        # Other defaults are kept
        registry = PatternRegistry(email=r'^[a-zA-Z]+$')
        self.assertMatches('url', u'example.com', registry=registry)

        # No defaults at all
        registry = PatternRegistry({'hex': r'^[0-9a-f]+$'})
        self.assertEqual(list(registry), ['hex'])
        self.assertRaises(SchemaError, registry.resolve, 'email')

    def test_replace(self):
        registry = default_patterns.replace(email=r'^[a-zA-Z]+$', hex=r'^[0-9a-f]+$')
        self.assertMatches('email', u'abc', registry=registry)
        self.assertMatches('hex', u'deadbeef', registry=registry)
        self.assertMatches('url', u'example.com', registry=registry)

        # The original is intact
        self.assertNotIn('hex', default_patterns)
        self.assertNotMatches('email', u'abc')

    def test_from_config(self):
        registry = PatternRegistry.from_config({
            'email_regex': r'^[a-zA-Z]+$',
            'custom_regex': r'^\d+$',
            'database_url': 'sqlite://',
        })
        self.assertMatches('email', u'abc', registry=registry)
        self.assertMatches('custom', u'123', registry=registry)
        self.assertMatches('password', u'password123', registry=registry)
        self.assertNotIn('database_url', registry)
        self.assertNotIn('database', registry)

    def test_from_env(self):
        registry = PatternRegistry.from_env({
            'GOAL_URL_REGEX': r'^[a-zA-Z]+$',
            'GOAL_LEVEL': 'debug',
            'HOME': '/root',
        })
        self.assertMatches('url', u'abc', registry=registry)
        self.assertNotMatches('url', u'example.com', registry=registry)
        self.assertNotIn('level', registry)

        registry = PatternRegistry.from_env({'APP_HEX_REGEX': r'^[0-9a-f]+$'}, prefix='APP_')
        self.assertMatches('hex', u'deadbeef', registry=registry)

    def test_resolve(self):
        rex = re.compile(r'^a$')
        self.assertIs(default_patterns.resolve(rex), rex)
        self.assertRaises(SchemaError, default_patterns.resolve, 'unknown')
        self.assertRaises(SchemaError, default_patterns.resolve, None)

    def test_invalid_regex(self):
        self.assertRaises(SchemaError, PatternRegistry, email=r'^[a-z')
        self.assertRaises(SchemaError, PatternRegistry, email=None)


class ErrorsTest(unittest.TestCase):
    """ Test: Invalid and MultipleInvalid """

    def test_enrich(self):
        e = Invalid(u'is invalid', 'cast', u'x', ['age'])
        self.assertIs(e.enrich(['dogs', 1]), e)
        self.assertEqual(e.path, ['dogs', 1, 'age'])
        self.assertEqual(e.provided, u'x')
        self.assertIsNone(e.validator)

        self.assertEqual(Invalid(u'is invalid').enrich().path, [])

        # Every contained error gets the prefix
        ee = MultipleInvalid([Invalid(u'a', path=['x']), Invalid(u'b', path=['y'])])
        ee.enrich(['root'])
        self.assertEqual([e.path for e in ee], [['root', 'x'], ['root', 'y']])
