
from unittest import TestCase
from pytz import timezone, utc
from simpleclock.moment import Moment, FrozenMoment, BaseMoment, ParseError, UnknownZone, \
    to_tzinfo, zone_name, try_parse, to_number, DEFAULT_LOCALE
import datetime as dt
import time as t


DEBUG = True


class ConstructorTest(TestCase):

    def test_generic(self):
        date = FrozenMoment('2013-06-08 15:51', tz='Europe/Moscow', debug=DEBUG)
        assert str(date) == '2013-06-08 15:51:00.000000 MSK', str(date)
        assert date.locale == DEFAULT_LOCALE == 'en'
        assert str(FrozenMoment(0, tz='UTC')) == '1970-01-01 00:00:00.000000 UTC'
        assert str(FrozenMoment(dt.date(2024, 1, 2), tz='UTC')) == '2024-01-02 00:00:00.000000 UTC'
        date = Moment(dt.datetime(2024, 1, 2, 3, tzinfo=utc), tz='Asia/Tokyo', locale='ja')
        assert str(date) == '2024-01-02 12:00:00.000000 JST', str(date)
        assert date.locale == 'ja'

    def test_now(self):
        for date in (FrozenMoment(), FrozenMoment('now'), Moment.now('UTC')):
            delta = date.float_timestamp - t.time()
            assert abs(delta) < 1, delta

    def test_copy_constructor(self):
        original = Moment.create(2024, 1, 2, tz='UTC').with_locale('de')
        copy = FrozenMoment(original, tz='Europe/Berlin')
        assert copy == original and copy.locale == 'de' and copy.hour == 1, repr(copy)

    def test_errors(self):
        with self.assertRaisesRegex(ParseError, 'Cannot convert'):
            FrozenMoment(object())
        with self.assertRaisesRegex(ParseError, 'Cannot convert'):
            FrozenMoment(True)
        with self.assertRaisesRegex(ParseError, 'Could not parse'):
            FrozenMoment('the day after the day after tomorrow')
        with self.assertRaisesRegex(UnknownZone, 'Unknown time zone'):
            FrozenMoment(0, tz='Atlantis')

    def test_create(self):
        date = FrozenMoment.create(2013, 6, 8, 15, 51, tz='UTC')
        assert str(date) == '2013-06-08 15:51:00.000000 UTC', str(date)
        date = FrozenMoment.create(2024, tz='UTC')
        assert str(date) == '2024-01-01 00:00:00.000000 UTC', str(date)
        with self.assertRaisesRegex(ParseError, 'Invalid date'):
            FrozenMoment.create(2024, 2, 30)
        with self.assertRaisesRegex(ParseError, 'Invalid date'):
            FrozenMoment.create('2024')

    def test_from_time(self):
        now = dt.datetime.now(timezone('Asia/Tokyo'))
        date = FrozenMoment.from_time(9, 15, tz='Asia/Tokyo')
        assert (date.hour, date.minute, date.second) == (9, 15, 0), date
        assert abs((date.date - now.date()).days) <= 1, date

    def test_timestamps(self):
        assert FrozenMoment.from_timestamp(-0.5).timestamp == -1
        assert FrozenMoment.from_timestamp(1.5).timestamp == 1
        assert FrozenMoment.from_timestamp_utc('86400').day == 2
        assert FrozenMoment.from_timestamp_ms(1500, tz='UTC').microsecond == 500000
        assert FrozenMoment.from_timestamp_ms_utc(1700000000123).timestamp_ms == 1700000000123
        with self.assertRaisesRegex(ParseError, 'out of range'):
            FrozenMoment.from_timestamp(10 ** 20)
        with self.assertRaisesRegex(ParseError, 'Not a timestamp'):
            FrozenMoment.from_timestamp('')

    def test_from_format(self):
        date = FrozenMoment.from_format('%Y-%m-%d %H:%M %z', '2024-07-01 10:00 +0300', tz='UTC', debug=DEBUG)
        assert date.timestamp == FrozenMoment.create(2024, 7, 1, 7, tz='UTC').timestamp, repr(date)
        date = FrozenMoment.from_format('%H:%M', '10:00', tz='UTC')
        assert date.year == 1900, date
        with self.assertRaisesRegex(ParseError, 'Could not parse'):
            FrozenMoment.from_format('%H:%M', '10h00')
        with self.assertRaises(ParseError):
            FrozenMoment.from_format('%H:%M', None)

    def test_from_iso_format(self):
        date = FrozenMoment.from_iso_format('dddd, D MMM YYYY h:mm A', 'Tuesday, 5 Mar 2024 6:45 PM', tz='UTC',
                                            debug=DEBUG)
        assert str(date) == '2024-03-05 18:45:00.000000 UTC', str(date)
        date = FrozenMoment.from_iso_format('D MMMM YYYY', '5 марта 2024', tz='UTC', locale='ru',
                                            translator=lambda word: {'марта': 'March'}.get(word, word),
                                            debug=DEBUG)
        assert (date.month, date.locale) == (3, 'ru'), repr(date)
        date = FrozenMoment.from_iso_format('YYYY', '2024', tz='UTC', locale=None, debug=DEBUG)
        assert (date.year, date.locale) == (2024, DEFAULT_LOCALE), repr(date)

    def test_from_moment(self):
        frozen = FrozenMoment.create(2024, 1, 1, tz='Europe/Berlin').with_locale('de')
        mutable = Moment.from_moment(frozen, debug=DEBUG)
        assert type(mutable) is Moment and mutable == frozen and mutable.locale == 'de'
        again = FrozenMoment.from_moment(mutable, debug=DEBUG)
        assert type(again) is FrozenMoment and again == frozen
        date = FrozenMoment.from_moment(dt.datetime(2024, 1, 1), tz='Europe/Berlin')
        assert date == frozen
        with self.assertRaises(ParseError):
            FrozenMoment.from_moment(dt.date(2024, 1, 1))


class MutabilityTest(TestCase):

    def test_mutable(self):
        date = Moment.create(2024, 1, 31, tz='UTC')
        assert date.add(days=1) is date
        assert (date.month, date.day) == (2, 1), date
        assert date.subtract(hours=1).with_locale('fr') is date
        assert str(date) == '2024-01-31 23:00:00.000000 UTC' and date.locale == 'fr', repr(date)
        assert date.replace(year=2023) is date and date.year == 2023
        assert date.set_timezone('Asia/Tokyo') is date and date.zone == 'Asia/Tokyo'

    def test_immutable(self):
        date = FrozenMoment.create(2024, 1, 31, tz='UTC')
        later = date.add(days=1)
        assert later is not date and later.day == 1 and date.day == 31
        assert date.with_locale('fr').locale == 'fr' and date.locale == 'en'
        assert date.replace(day=1).day == 1 and date.day == 31
        moved = date.set_timezone('Europe/Moscow')
        assert moved.hour == 3 and date.hour == 0 and moved == date
        assert isinstance(moved, FrozenMoment)

    def test_dst(self):
        date = FrozenMoment.create(2024, 3, 30, 12, tz='Europe/Berlin')
        assert str(date).endswith('CET'), str(date)
        later = date.add(days=1)
        assert str(later) == '2024-03-31 13:00:00.000000 CEST', str(later)
        summer = date.replace(month=7)
        assert summer.datetime.utcoffset() == dt.timedelta(hours=2), summer.datetime.utcoffset()
        assert str(date + dt.timedelta(days=1)) == str(later)

    def test_conversion(self):
        date = FrozenMoment.create(2024, 1, 1, tz='UTC')
        mutable = date.to_mutable()
        assert type(mutable) is Moment and mutable == date
        assert type(mutable.to_immutable()) is FrozenMoment
        copy = mutable.copy()
        mutable.add(days=1)
        assert copy == date and mutable != date

    def test_comparison(self):
        utc_date = FrozenMoment.create(2024, 1, 1, 9, tz='UTC')
        tokyo = FrozenMoment.create(2024, 1, 1, 18, tz='Asia/Tokyo')
        assert utc_date == tokyo and hash(utc_date) == hash(tokyo)
        assert utc_date <= tokyo and utc_date >= tokyo
        later = tokyo + dt.timedelta(minutes=1)
        assert utc_date < later and later > utc_date
        assert later - utc_date == dt.timedelta(minutes=1)
        assert (later - dt.timedelta(minutes=1)) == utc_date
        assert utc_date != utc_date.datetime
        with self.assertRaises(TypeError):
            hash(utc_date.to_mutable())

    def test_base_is_abstract(self):
        date = BaseMoment(0, tz='UTC')
        with self.assertRaises(NotImplementedError):
            date.add(days=1)

    def test_repr(self):
        date = FrozenMoment.create(2013, 6, 8, 15, 51, tz='UTC')
        assert repr(date) == "FrozenMoment('2013-06-08 15:51:00.000000 UTC', tz='UTC', locale='en')", repr(date)
        assert date.isoformat() == '2013-06-08T15:51:00+00:00', date.isoformat()
        assert date.strftime('%d/%m/%Y') == '08/06/2013'


class ParseTest(TestCase):

    def test_relative(self):
        today, error = try_parse('today', 'UTC')
        assert error is None, error
        assert (today.hour, today.minute) == (0, 0), today
        tomorrow, _ = try_parse(' Tomorrow ', 'UTC')
        yesterday, _ = try_parse('yesterday', 'UTC')
        noon, _ = try_parse('noon', 'UTC')
        assert tomorrow - today == today - yesterday == dt.timedelta(days=1)
        assert noon - today == dt.timedelta(hours=12)

    def test_timestamps(self):
        date, error = try_parse('@1700000000', 'Europe/Moscow')
        assert error is None and date.timestamp() == 1700000000, error
        date, error = try_parse('@99999999999999999999')
        assert date is None and 'out of range' in error, error

    def test_free_form(self):
        date, error = try_parse('2024-01-15 10:30', 'Europe/Moscow')
        assert error is None, error
        assert date.utcoffset() == dt.timedelta(hours=3), date
        date, error = try_parse('Mon, 15 Jan 2024 10:30:00 -0500')
        assert error is None and date.utcoffset() == dt.timedelta(hours=-5), error

    def test_failure(self):
        date, error = try_parse('hello', 'UTC')
        assert date is None and "'hello'" in error, error
        date, error = try_parse(None)
        assert date is None and 'Expected a string' in error, error


class ZoneTest(TestCase):

    def test_to_tzinfo(self):
        assert to_tzinfo('utc') is utc
        assert zone_name(to_tzinfo('america/new_york')) == 'America/New_York'
        tz = timezone('Asia/Tokyo')
        assert to_tzinfo(tz) is tz
        assert isinstance(to_tzinfo(None), dt.tzinfo)
        with self.assertRaisesRegex(UnknownZone, 'Unknown time zone'):
            to_tzinfo('Nowhere/Special')
        with self.assertRaisesRegex(UnknownZone, 'Cannot use'):
            to_tzinfo(42)

    def test_zone_name(self):
        assert zone_name(utc) == 'UTC'
        assert zone_name(dt.timezone.utc) == 'UTC'

    def test_to_number(self):
        assert to_number('12') == 12 and isinstance(to_number('12'), int)
        assert to_number(' 1.5 ') == 1.5
        with self.assertRaises(ParseError):
            to_number(False)
        with self.assertRaises(ParseError):
            to_number([])
