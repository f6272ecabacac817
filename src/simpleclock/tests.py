
from calendar import timegm
from unittest import TestCase
from pytz import timezone, utc
from simpleclock import Clock, ClockConfig, InvalidConfiguration, InvalidArgumentError, TimestampError, \
    DEFAULT_LOCALE, now, timestamp, create
from simpleclock.moment import Moment, FrozenMoment, ParseError, local_zone_name
import datetime as dt
import time as t


DEBUG = True


def utc_clock(**kargs):
    return Clock(ClockConfig(time_zone='UTC', **kargs))


class CustomMoment(Moment):
    __slots__ = ()


class CustomFrozenMoment(FrozenMoment):
    __slots__ = ()


class ConfigurationTest(TestCase):

    def test_defaults(self):
        clock = Clock()
        assert clock.locale() == DEFAULT_LOCALE == 'ru', clock.locale()
        assert clock.time_zone() == local_zone_name(), clock.time_zone()
        assert clock.creator() is FrozenMoment
        assert clock.creator(immutable=False) is Moment

    def test_locale(self):
        clock = utc_clock()
        assert clock.locale('en') == 'ru'
        assert clock.locale() == 'en'
        assert clock.locale('de') == 'en'
        assert clock.config.locale == 'de'

    def test_time_zone(self):
        clock = Clock()
        assert clock.time_zone('europe/moscow') == local_zone_name()
        assert clock.time_zone() == 'Europe/Moscow', clock.time_zone()
        assert clock.time_zone(timezone('Asia/Tokyo')) == 'Europe/Moscow'
        assert clock.time_zone() == 'Asia/Tokyo', clock.time_zone()

    def test_unknown_time_zone(self):
        clock = utc_clock()
        with self.assertRaisesRegex(InvalidArgumentError, 'Unknown time zone'):
            clock.time_zone('Mars/Olympus_Mons')
        assert clock.time_zone() == 'UTC', clock.time_zone()
        with self.assertRaisesRegex(InvalidArgumentError, 'Unknown time zone'):
            ClockConfig(time_zone='Nowhere')

    def test_set_creators(self):
        clock = utc_clock()
        clock.set_creators(CustomMoment, CustomFrozenMoment)
        assert isinstance(clock.create(0), CustomFrozenMoment)
        assert isinstance(clock.create(0, immutable=False), CustomMoment)
        clock.set_creators(immutable=FrozenMoment)
        assert type(clock.create(0)) is FrozenMoment
        assert isinstance(clock.create(0, immutable=False), CustomMoment)

    def test_invalid_creators(self):
        clock = utc_clock()
        for mutable, immutable in ((str, None), ('Moment', None), (None, Moment), (None, dt.datetime),
                                   (CustomMoment, Moment)):
            with self.assertRaisesRegex(InvalidConfiguration, 'subclass of'):
                clock.set_creators(mutable, immutable)
            assert clock.creator() is FrozenMoment
            assert clock.creator(immutable=False) is Moment
            assert abs(clock.now().timestamp - t.time()) < 2

    def test_invalid_configuration_is_type_error(self):
        with self.assertRaises(TypeError):
            ClockConfig(immutable_kind=Moment)

    def test_configured(self):
        clock = utc_clock()
        other = clock.configured(locale='de', time_zone='Europe/Berlin')
        assert other.locale() == 'de'
        assert other.time_zone() == 'Europe/Berlin'
        assert clock.locale() == 'ru'
        assert clock.time_zone() == 'UTC'
        assert other.create(0).zone == 'Europe/Berlin'

    def test_existing_values_unchanged(self):
        clock = utc_clock()
        before = clock.create(0)
        clock.locale('en')
        clock.time_zone('Asia/Tokyo')
        after = clock.create(0)
        assert before.locale == 'ru' and before.zone == 'UTC', repr(before)
        assert after.locale == 'en' and after.zone == 'Asia/Tokyo', repr(after)
        assert before == after


class CreateTest(TestCase):

    def test_timestamps(self):
        clock = utc_clock()
        for value in (0, 1, -86400, 1234567890, 1700000000):
            assert clock.create(value).timestamp == value, clock.create(value)
            assert clock.from_timestamp(value).timestamp == value, clock.from_timestamp(value)
        assert clock.create('1700000000').timestamp == 1700000000
        assert clock.create(1.5).float_timestamp == 1.5

    def test_timestamp_zone(self):
        clock = utc_clock()
        date = clock.create(1700000000, tz='Europe/Moscow')
        assert date.zone == 'Europe/Moscow', date.zone
        assert date.hour == 1, date.hour
        assert date.timestamp == 1700000000

    def test_components(self):
        clock = utc_clock()
        date = clock.create([2024, 1, 15])
        assert (date.year, date.month, date.day, date.hour) == (2024, 1, 15, 0), date
        date = clock.create([2024, 1, 15, 10, 30, 45])
        assert str(date) == '2024-01-15 10:30:45.000000 UTC', str(date)
        date = clock.create((2024,))
        assert str(date) == '2024-01-01 00:00:00.000000 UTC', str(date)
        date = clock.create([2024, 2, 29, 12], tz='Asia/Tokyo')
        assert date.timestamp == timegm((2024, 2, 29, 3, 0, 0)), date

    def test_bad_components(self):
        clock = utc_clock()
        with self.assertRaisesRegex(InvalidArgumentError, '1 to 6'):
            clock.create([])
        with self.assertRaisesRegex(InvalidArgumentError, '1 to 6'):
            clock.create([1, 2, 3, 4, 5, 6, 7])
        with self.assertRaises(ValueError):
            clock.create([])
        with self.assertRaisesRegex(ParseError, 'Invalid date'):
            clock.create([2024, 13, 1])

    def test_strings(self):
        clock = utc_clock()
        date = clock.create('2024-03-01 12:30', tz='Europe/Moscow')
        assert date.hour == 12 and date.zone == 'Europe/Moscow', repr(date)
        assert date.timestamp == timegm((2024, 3, 1, 9, 30, 0)), date.timestamp
        date = clock.create('2024-03-01T12:30:00+02:00')
        assert date.timestamp == timegm((2024, 3, 1, 10, 30, 0)), date.timestamp
        with self.assertRaisesRegex(ParseError, 'not a date'):
            clock.create('not a date')

    def test_now(self):
        clock = utc_clock()
        for value in ('now', 'NOW', 'Now'):
            delta = clock.create(value).float_timestamp - t.time()
            assert abs(delta) < 1, delta
        delta = clock.create().float_timestamp - t.time()
        assert abs(delta) < 1, delta

    def test_format(self):
        clock = utc_clock()
        date = clock.create('15.01.2024 10:20', format='%d.%m.%Y %H:%M')
        assert str(date) == '2024-01-15 10:20:00.000000 UTC', str(date)
        with self.assertRaisesRegex(ParseError, 'Could not parse'):
            clock.create('2024/01/15', format='%d.%m.%Y')

    def test_existing(self):
        clock = utc_clock()
        original = clock.create(1700000000, tz='Asia/Tokyo')
        mutable = clock.create(original, immutable=False)
        assert isinstance(mutable, Moment) and not mutable.immutable
        assert mutable.timestamp == original.timestamp
        frozen = clock.create(mutable, immutable=True)
        assert isinstance(frozen, FrozenMoment) and frozen.immutable
        assert frozen == original
        mutable.add(hours=1)
        assert frozen.timestamp == original.timestamp == 1700000000

    def test_datetimes(self):
        clock = utc_clock()
        date = clock.create(dt.datetime(2024, 1, 1, tzinfo=utc))
        assert date.timestamp == 1704067200, date.timestamp
        date = clock.create(dt.datetime(2024, 1, 1), tz='Europe/Moscow')
        assert date.timestamp == 1704067200 - 3 * 3600, date.timestamp

    def test_fallback(self):
        clock = utc_clock()
        date = clock.create(dt.date(2024, 1, 2))
        assert str(date) == '2024-01-02 00:00:00.000000 UTC', str(date)
        with self.assertRaisesRegex(ParseError, 'Cannot convert'):
            clock.create(object())
        with self.assertRaisesRegex(ParseError, 'out of range'):
            clock.create(1e20)

    def test_locale(self):
        clock = utc_clock()
        assert clock.create(0).locale == 'ru'
        assert clock.create('2024-01-01').locale == 'ru'
        assert clock.create(clock.create(0).with_locale('fr')).locale == 'ru'
        clock.locale('en')
        assert clock.create([2024]).locale == 'en'

    def test_debug(self):
        clock = utc_clock(debug=DEBUG)
        clock.create('2024-01-01')
        clock.create([2024, 1])
        assert not clock.is_date('nonsense')


class FactoryTest(TestCase):

    def test_now(self):
        clock = utc_clock()
        date = clock.now()
        assert isinstance(date, FrozenMoment) and date.zone == 'UTC', repr(date)
        date = clock.now('Asia/Tokyo', immutable=False)
        assert isinstance(date, Moment) and date.zone == 'Asia/Tokyo', repr(date)
        assert abs(date.float_timestamp - t.time()) < 1

    def test_timestamps(self):
        clock = utc_clock()
        date = clock.from_timestamp_ms(1700000000123, tz='Europe/Moscow')
        assert date.timestamp_ms == 1700000000123, date.timestamp_ms
        assert date.microsecond == 123000, date.microsecond
        assert clock.from_timestamp_utc(60).zone == 'UTC'
        assert clock.from_timestamp_ms_utc(-1500).timestamp_ms == -1500
        assert clock.from_timestamp('1234567890').timestamp == 1234567890
        with self.assertRaisesRegex(ParseError, 'Not a timestamp'):
            clock.from_timestamp('soon')

    def test_object(self):
        clock = utc_clock()
        date = clock.from_object(Moment.create(2024, 5, 6, tz='Asia/Tokyo'))
        assert isinstance(date, FrozenMoment) and date.zone == 'Asia/Tokyo', repr(date)
        assert date.locale == 'ru'
        date = clock.from_object(dt.datetime(2024, 5, 6, 7), immutable=False)
        assert isinstance(date, Moment) and str(date) == '2024-05-06 07:00:00.000000 UTC', str(date)
        with self.assertRaises(ParseError):
            clock.from_object('2024-05-06')

    def test_format(self):
        clock = utc_clock()
        date = clock.from_format('%Y%m%d', '20240506', tz='Europe/Berlin')
        assert date.zone == 'Europe/Berlin' and date.day == 6, repr(date)
        with self.assertRaises(ParseError):
            clock.from_format('%Y%m%d', '2024-05-06')

    def test_date_time(self):
        clock = utc_clock()
        date = clock.from_date_time(2024, 2, 29, 23, 59, 59, tz='Asia/Tokyo')
        assert str(date) == '2024-02-29 23:59:59.000000 JST', str(date)
        date = clock.from_date_time()
        assert (date.month, date.day, date.hour) == (1, 1, 0), date
        assert date.year == dt.datetime.now(utc).year
        with self.assertRaises(ParseError):
            clock.from_date_time(2023, 2, 29)

    def test_time(self):
        clock = utc_clock()
        date = clock.from_time(10, 30)
        assert (date.hour, date.minute, date.second) == (10, 30, 0), date
        with self.assertRaises(ParseError):
            clock.from_time(25)

    def test_iso_format(self):
        clock = utc_clock()
        date = clock.from_iso_format('DD MMMM YYYY, HH:mm', '05 March 2024, 18:45')
        assert str(date) == '2024-03-05 18:45:00.000000 UTC', str(date)
        assert date.locale == 'ru'
        date = clock.from_iso_format('D MMMM YYYY', '5 марта 2024', locale='ru',
                                     translator={'Марта': 'March'}, tz='Europe/Moscow')
        assert date.zone == 'Europe/Moscow' and (date.month, date.day) == (3, 5), repr(date)
        with self.assertRaises(ParseError):
            clock.from_iso_format('YYYY-MM-DD', '5 марта 2024')
        date = clock.from_iso_format('YYYY', '2024', locale=None)
        assert (date.year, date.locale) == (2024, 'ru'), repr(date)


class ClassifyTest(TestCase):

    def test_is_date(self):
        clock = utc_clock()
        assert not clock.is_date('not a date')
        assert clock.is_date('2024-01-01')
        assert clock.is_date('tomorrow')
        assert clock.is_date(clock.now())
        assert clock.is_date(dt.date(2024, 1, 1))
        assert not clock.is_date(None)
        assert not clock.is_date([2024, 1, 1])
        assert not clock.is_date('')

    def test_is_timestamp(self):
        clock = utc_clock()
        assert clock.is_timestamp('1700000000')
        assert clock.is_timestamp(1700000000)
        assert clock.is_timestamp(-1.5)
        assert not clock.is_timestamp('hello')
        assert not clock.is_timestamp('2024-01-01')
        assert not clock.is_timestamp(True)
        assert not clock.is_timestamp([1])
        assert not clock.is_timestamp(10 ** 30)

    def test_exponent_floats(self):
        clock = utc_clock()
        assert not clock.is_timestamp(1e-05)
        date = clock.create(1e-05)
        assert date.timestamp == 0, date.timestamp
        assert date.float_timestamp == 1e-05, date.float_timestamp


class TimestampTest(TestCase):

    def test_values(self):
        clock = utc_clock()
        assert clock.timestamp(clock.create(1700000000)) == 1700000000
        assert clock.timestamp(dt.datetime(2024, 1, 1, tzinfo=utc)) == 1704067200
        assert clock.timestamp(dt.datetime(2024, 1, 1)) == 1704067200

    def test_strings(self):
        clock = utc_clock()
        assert clock.timestamp('2024-01-01 00:00:00') == 1704067200
        assert clock.timestamp('@1700000000') == 1700000000
        assert abs(clock.timestamp() - t.time()) < 2
        moscow = clock.configured(time_zone='Europe/Moscow')
        assert moscow.timestamp('2024-01-01') == 1704067200 - 3 * 3600

    def test_errors(self):
        clock = utc_clock()
        with self.assertRaisesRegex(TimestampError, 'garbage'):
            clock.timestamp('garbage')
        with self.assertRaises(RuntimeError):
            clock.timestamp('')
        with self.assertRaises(TimestampError):
            clock.timestamp(True)
        with self.assertRaises(TimestampError):
            clock.timestamp([2024, 1, 1])

    def test_numbers(self):
        clock = utc_clock()
        assert clock.timestamp(12) == 12, clock.timestamp(12)
        assert clock.timestamp(1700000000) == clock.create(1700000000).timestamp
        assert clock.timestamp(-1.5) == clock.create(-1.5).timestamp == -2, clock.timestamp(-1.5)


class ModuleTest(TestCase):

    def test_functions(self):
        date = now()
        assert isinstance(date, FrozenMoment), repr(date)
        assert isinstance(now(immutable=False), Moment)
        assert now('UTC').zone == 'UTC'
        assert abs(timestamp() - t.time()) < 2
        assert timestamp(date) == date.timestamp
        assert create(1700000000).timestamp == 1700000000
