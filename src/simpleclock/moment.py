
from calendar import timegm
import datetime as dt
from numbers import Real
from re import compile
from dateutil.parser import parse as dateutil_parse
from pytz import timezone, utc, UnknownTimeZoneError
from tzlocal import get_localzone, get_localzone_name
from simpleclock.fmt import to_strptime, translate
from simpleclock.utils import DebugLog, SimpleClockError, set_kargs_only


# Date and time values (mutable and immutable), built on datetime, pytz,
# tzlocal and dateutil.  These are the values that the Clock creates.


DEFAULT_LOCALE = 'en'
DEFAULT_FORMAT = '%Y-%m-%d %H:%M:%S.%f %Z'

EPOCH = dt.datetime(1970, 1, 1, tzinfo=utc)
TIMESTAMP = compile(r'^@\s*([+-]?\d+(?:\.\d+)?)$')
FIELDS = ('year', 'month', 'day', 'hour', 'minute', 'second', 'microsecond')



# Exceptions.


class ParseError(SimpleClockError, ValueError):
    '''
    A string, pattern, timestamp or set of components could not be read as
    a date.
    '''


class UnknownZone(SimpleClockError, ValueError):
    '''
    A time zone name (or value) that pytz does not recognise.
    '''



# Time zone utilities.


def local_zone_name():
    '''
    :return: The name of the environment's default time zone.
    '''
    return get_localzone_name() or 'UTC'


def local_zone():
    '''
    :return: The environment's default time zone, from pytz if possible.
    '''
    try:
        return timezone(local_zone_name())
    except UnknownTimeZoneError:
        return get_localzone()


def to_tzinfo(zone=None):
    '''
    :param zone: A `dt.tzinfo`, a zone name (matched ignoring case), or
                 `None` for the environment's default.
    :return: A `dt.tzinfo` instance.
    '''
    if zone is None:
        return local_zone()
    if isinstance(zone, dt.tzinfo):
        return zone
    if isinstance(zone, str):
        try:
            return timezone(zone)
        except UnknownTimeZoneError:
            raise UnknownZone('Unknown time zone {0!r}', zone)
    raise UnknownZone('Cannot use {0!r} as a time zone', zone)


def zone_name(tzinfo):
    '''
    :param tzinfo: A `dt.tzinfo` instance.
    :return: The zone's name (eg 'Europe/Moscow').
    '''
    # pytz uses `zone`, zoneinfo uses `key`
    for attribute in ('zone', 'key'):
        name = getattr(tzinfo, attribute, None)
        if name:
            return name
    return str(tzinfo)


def tzinfo_localize(tzinfo, datetime):
    '''
    Attach a timezone to a naive datetime.  pytz zones must be attached with
    `localize` (to pick the offset in effect); other zones are simply set.

    :param tzinfo: The tzinfo we are setting.
    :param datetime: The naive datetime we are converting.
    :return: The localized datetime.
    '''
    try:
        return tzinfo.localize(datetime)
    except AttributeError:
        return datetime.replace(tzinfo=tzinfo)


def tzinfo_normalize(datetime):
    '''
    Correct the offset after arithmetic (only needed for pytz zones).
    '''
    try:
        return datetime.tzinfo.normalize(datetime)
    except AttributeError:
        return datetime


def reapply_tzinfo(datetime):
    '''
    Re-apply the timezone to the datetime.  After `replace()` a pytz tzinfo
    keeps the offset of the original date, which may be wrong for the new
    one.

    :param datetime: The datetime (with tzinfo) that may be broken.
    :return: A new datetime, with the same tzinfo.
    '''
    return tzinfo_localize(datetime.tzinfo, datetime.replace(tzinfo=None))



# Parsing.


def to_number(value):
    '''
    :param value: A number, or a string containing one.
    :return: The number (an int where possible).
    '''
    if isinstance(value, Real) and not isinstance(value, bool):
        return value if isinstance(value, int) else float(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            try:
                return float(value.strip())
            except ValueError:
                pass
    raise ParseError('Not a timestamp: {0!r}', value)


def from_epoch(tzinfo, seconds=0, milliseconds=0):
    '''
    :param tzinfo: The zone for the result.
    :param seconds: Seconds since the Unix epoch.
    :param milliseconds: Milliseconds since the Unix epoch.
    :return: An aware datetime.
    '''
    try:
        return (EPOCH + dt.timedelta(seconds=seconds, milliseconds=milliseconds)).astimezone(tzinfo)
    except (OverflowError, ValueError) as e:
        raise ParseError('Timestamp out of range ({0})', e)


def try_parse(text, tz=None):
    '''
    Read a free-form date.  Besides anything dateutil understands, this
    accepts 'now', 'today', 'midnight', 'noon', 'tomorrow', 'yesterday' and
    '@<seconds>' (a Unix timestamp).  Dates without a time are at midnight;
    times without a date are today.  A zone or offset in the text is kept,
    otherwise the value is in `tz`.

    Failure is returned rather than raised, so that callers can test input without catching errors.

    :param text: The string to parse.
    :param tz: The zone for the result (`None` is the environment default).
    :return: `(datetime, None)` on success, or `(None, message)` on failure.
    '''
    if not isinstance(text, str):
        return None, 'Expected a string, not {0!r}'.format(text)
    tzinfo = to_tzinfo(tz)
    stripped = text.strip()
    word = stripped.lower()

    now = dt.datetime.now(tzinfo)
    if word == 'now':
        return now, None
    midnight = now.replace(tzinfo=None, hour=0, minute=0, second=0, microsecond=0)
    relative = {'today': midnight, 'midnight': midnight,
                'noon': midnight.replace(hour=12),
                'tomorrow': midnight + dt.timedelta(days=1),
                'yesterday': midnight - dt.timedelta(days=1)}
    if word in relative:
        return tzinfo_localize(tzinfo, relative[word]), None

    match = TIMESTAMP.match(stripped)
    if match:
        try:
            return from_epoch(tzinfo, seconds=to_number(match.group(1))), None
        except ParseError as e:
            return None, str(e)

    try:
        datetime = dateutil_parse(stripped, default=midnight)
    except (ValueError, OverflowError) as e:
        return None, 'Could not parse {0!r} ({1})'.format(text, e)
    if datetime.tzinfo is None:
        datetime = tzinfo_localize(tzinfo, datetime)
    return datetime, None



# The values.


class BaseMoment(DebugLog):
    '''
    A date and time in a particular zone, tagged with a locale.

    The class methods (`now`, `from_timestamp`, `from_format`, etc) are the
    construction protocol used by the Clock.  Subclasses decide whether the
    operations that change a value (`add`, `with_locale`, etc) do so in place
    (`Moment`) or return a new instance (`FrozenMoment`).
    '''

    __slots__ = ('__datetime', '__locale')

    immutable = False

    def __init__(self, time=None, tz=None, locale=None, debug=False):
        '''
        The generic entry point: `time` is interpreted by type.

          >>> FrozenMoment('2013-06-08 15:51', tz='Europe/Moscow')
          FrozenMoment('2013-06-08 15:51:00.000000 MSK', tz='Europe/Moscow', locale='en')

        :param time: `None` or 'now' (the current time), a string (parsed),
                     a number (Unix timestamp), an existing value, a
                     `dt.datetime` or a `dt.date` (midnight).
        :param tz: The zone to use (`None` is the environment default).  An
                   aware `time` is converted to this zone, if given.
        :param locale: The locale tag (default copied from an existing
                       value, or DEFAULT_LOCALE).
        :param debug: If true, print a description of the logic followed.
        '''
        log = self._get_log(debug)
        if time is None or (isinstance(time, str) and time.strip().lower() == 'now'):
            log('Using the current time')
            datetime = dt.datetime.now(to_tzinfo(tz))
        elif isinstance(time, BaseMoment):
            log('Copying {0!r}', time)
            datetime = time.datetime if tz is None else time.datetime.astimezone(to_tzinfo(tz))
            if locale is None:
                locale = time.locale
        elif isinstance(time, dt.datetime):
            if time.tzinfo is None:
                log('Localizing naive {0!r}', time)
                datetime = tzinfo_localize(to_tzinfo(tz), time)
            else:
                datetime = time if tz is None else time.astimezone(to_tzinfo(tz))
        elif isinstance(time, dt.date):
            log('Using midnight on {0}', time)
            datetime = tzinfo_localize(to_tzinfo(tz), dt.datetime.combine(time, dt.time()))
        elif isinstance(time, Real) and not isinstance(time, bool):
            log('Found a numeric value, will use as Unix epoch')
            datetime = from_epoch(to_tzinfo(tz), seconds=to_number(time))
        elif isinstance(time, str):
            log('Found a string, will try to parse')
            datetime, error = try_parse(time, tz)
            if error is not None:
                raise ParseError('{0}', error)
        else:
            raise ParseError('Cannot convert {0!r} to a date', time)
        self._assign(datetime, DEFAULT_LOCALE if locale is None else locale)
        log('Created {0!r}', self)

    @classmethod
    def _wrap(cls, datetime, locale=DEFAULT_LOCALE):
        moment = cls.__new__(cls)
        moment.__datetime = datetime
        moment.__locale = locale
        return moment

    def _assign(self, datetime, locale):
        self.__datetime = datetime
        self.__locale = locale

    def _apply(self, datetime, locale):
        '''
        :return: A value with the given datetime and locale (either `self`,
                 modified, or a new instance).
        '''
        raise NotImplementedError()

    # construction protocol

    @classmethod
    def now(cls, tz=None):
        return cls._wrap(dt.datetime.now(to_tzinfo(tz)))

    @classmethod
    def from_timestamp(cls, timestamp, tz=None):
        '''
        :param timestamp: Seconds since the Unix epoch (a number, or a
                          string containing one).
        :param tz: The zone for the result (`None` is the environment default).
        '''
        return cls._wrap(from_epoch(to_tzinfo(tz), seconds=to_number(timestamp)))

    @classmethod
    def from_timestamp_ms(cls, timestamp, tz=None):
        return cls._wrap(from_epoch(to_tzinfo(tz), milliseconds=to_number(timestamp)))

    @classmethod
    def from_timestamp_utc(cls, timestamp):
        return cls.from_timestamp(timestamp, tz=utc)

    @classmethod
    def from_timestamp_ms_utc(cls, timestamp):
        return cls.from_timestamp_ms(timestamp, tz=utc)

    @classmethod
    def from_format(cls, format, time, tz=None, debug=False):
        '''
        Parse strictly, using `dt.datetime.strptime`.  Fields missing from
        the format take strptime's defaults (1900-01-01 00:00).

        :param format: A strptime format (eg '%Y-%m-%d %H:%M').
        :param time: The string to parse.
        :param tz: The zone, used if the format has no %z.
        :param debug: If true, print a description of the logic followed.
        '''
        log = cls._get_log(debug)
        try:
            datetime = dt.datetime.strptime(time, format)
        except (ValueError, TypeError) as e:
            log('Failed to parse {0!r} with {1!r} ({2})', time, format, e)
            raise ParseError('Could not parse {0!r} with {1!r} ({2})', time, format, e)
        if datetime.tzinfo is None:
            datetime = tzinfo_localize(to_tzinfo(tz), datetime)
        log('Parsed {0!r} with {1!r} to give {2}', time, format, datetime)
        return cls._wrap(datetime)

    @classmethod
    def from_time_string(cls, time, tz=None, debug=False):
        '''
        Parse a free-form string (see `try_parse`).
        '''
        log = cls._get_log(debug)
        datetime, error = try_parse(time, tz)
        if error is not None:
            log('Failed: {0}', error)
            raise ParseError('{0}', error)
        log('Parsed {0!r} to give {1}', time, datetime)
        return cls._wrap(datetime)

    @classmethod
    def from_iso_format(cls, format, time, tz=None, locale=DEFAULT_LOCALE, translator=None, debug=False):
        '''
        Parse using a moment-style pattern (eg 'DD MMMM YYYY, HH:mm').

        Names of months and days are read in English; for other languages
        give a `translator` (a mapping or callable from local words to
        English).

        :param format: The pattern (see `simpleclock.fmt`).
        :param time: The string to parse.
        :param tz: The zone, used if the pattern has no Z.
        :param locale: The locale of the input, which is also set on the
                       result (`None` is DEFAULT_LOCALE).
        :param translator: Converts words in `time` before parsing.
        :param debug: If true, print a description of the logic followed.
        '''
        log = cls._get_log(debug)
        locale = DEFAULT_LOCALE if locale is None else locale
        pattern = to_strptime(format)
        text = translate(time, translator) if isinstance(time, str) else time
        log('Reading {0!r} as {1!r} with {2!r}', time, text, pattern)
        if translator is None and not locale.lower().startswith('en'):
            log('No translator for {0}; names must be in English', locale)
        return cls._wrap(cls.from_format(pattern, text, tz=tz, debug=debug).datetime, locale)

    @classmethod
    def create(cls, year=None, month=1, day=1, hour=0, minute=0, second=0, microsecond=0, tz=None):
        '''
        :param year: The year (`None`, here and below, is the current value).
        :param month: The month (default 1).
        :param day: The day of the month (default 1).
        :param hour: The hour (default 0).
        :param minute: The minute (default 0).
        :param second: The second (default 0).
        :param microsecond: The microsecond (default 0).
        :param tz: The zone for the result (`None` is the environment default).
        '''
        tzinfo = to_tzinfo(tz)
        now = dt.datetime.now(tzinfo)
        fields = dict((name, getattr(now, name)) for name in FIELDS)
        fields.update(set_kargs_only(year=year, month=month, day=day, hour=hour,
                                     minute=minute, second=second, microsecond=microsecond))
        try:
            return cls._wrap(tzinfo_localize(tzinfo, dt.datetime(**fields)))
        except (ValueError, TypeError, OverflowError) as e:
            raise ParseError('Invalid date {0} ({1})',
                             ', '.join('%s=%r' % (name, fields[name]) for name in FIELDS), e)

    @classmethod
    def from_time(cls, hour=0, minute=0, second=0, microsecond=0, tz=None):
        '''
        :return: The given time, today (in `tz`).
        '''
        return cls.create(None, None, None, hour, minute, second, microsecond, tz=tz)

    @classmethod
    def from_moment(cls, value, tz=None, debug=False):
        '''
        Convert from another value, keeping the instant, zone and locale.

        :param value: A `BaseMoment` or `dt.datetime`.
        :param tz: The zone for naive datetimes (`None` is the environment
                   default).
        :param debug: If true, print a description of the logic followed.
        '''
        log = cls._get_log(debug)
        if isinstance(value, BaseMoment):
            # the datetime itself never changes (mutable values replace it)
            # so it can be shared.
            if value.immutable:
                log('Converting from immutable {0!r}', value)
            else:
                log('Converting from mutable {0!r}', value)
            return cls._wrap(value.datetime, value.locale)
        if isinstance(value, dt.datetime):
            if value.tzinfo is None:
                log('Localizing naive {0!r}', value)
                value = tzinfo_localize(to_tzinfo(tz), value)
            return cls._wrap(value)
        raise ParseError('Cannot convert {0!r} to {1}', value, cls.__name__)

    # attributes

    @property
    def datetime(self):
        return self.__datetime

    @property
    def locale(self):
        return self.__locale

    @property
    def tzinfo(self):
        return self.__datetime.tzinfo

    @property
    def zone(self):
        return zone_name(self.__datetime.tzinfo)

    @property
    def timestamp(self):
        '''
        Whole seconds since the Unix epoch (rounded down).
        '''
        return timegm(self.__datetime.utctimetuple())

    @property
    def float_timestamp(self):
        return self.__datetime.timestamp()

    @property
    def timestamp_ms(self):
        return (self.__datetime - EPOCH) // dt.timedelta(milliseconds=1)

    @property
    def year(self):
        return self.__datetime.year

    @property
    def month(self):
        return self.__datetime.month

    @property
    def day(self):
        return self.__datetime.day

    @property
    def hour(self):
        return self.__datetime.hour

    @property
    def minute(self):
        return self.__datetime.minute

    @property
    def second(self):
        return self.__datetime.second

    @property
    def microsecond(self):
        return self.__datetime.microsecond

    @property
    def weekday(self):
        return self.__datetime.weekday()

    @property
    def date(self):
        return self.__datetime.date()

    @property
    def time(self):
        return self.__datetime.timetz()

    # changes (in place or not, depending on the subclass)

    def with_locale(self, locale):
        return self._apply(self.__datetime, locale)

    def set_timezone(self, tz):
        return self._apply(tzinfo_normalize(self.__datetime.astimezone(to_tzinfo(tz))), self.__locale)

    def add(self, **kargs):
        '''
        :param kargs: Arguments for `dt.timedelta` (days, hours, etc).
        '''
        return self._apply(tzinfo_normalize(self.__datetime + dt.timedelta(**kargs)), self.__locale)

    def subtract(self, **kargs):
        return self._apply(tzinfo_normalize(self.__datetime - dt.timedelta(**kargs)), self.__locale)

    def replace(self, year=None, month=None, day=None, hour=None, minute=None, second=None, microsecond=None):
        datetime = self.__datetime.replace(**set_kargs_only(year=year, month=month, day=day, hour=hour, minute=minute,
                                                            second=second, microsecond=microsecond))
        return self._apply(reapply_tzinfo(datetime), self.__locale)

    # conversion

    def copy(self):
        return self._wrap(self.__datetime, self.__locale)

    def to_mutable(self):
        return Moment._wrap(self.__datetime, self.__locale)

    def to_immutable(self):
        return FrozenMoment._wrap(self.__datetime, self.__locale)

    def strftime(self, format):
        return self.__datetime.strftime(format)

    def isoformat(self, sep='T'):
        return self.__datetime.isoformat(sep)

    def __str__(self):
        return self.__datetime.strftime(DEFAULT_FORMAT)

    def __repr__(self):
        return '{0}({1!r}, tz={2!r}, locale={3!r})'.format(self.__class__.__name__, str(self), self.zone, self.__locale)

    # comparison is by instant (zone and locale are ignored)

    def __eq__(self, other):
        if isinstance(other, BaseMoment): return self.__datetime == other.datetime
        else: return NotImplemented

    def __lt__(self, other):
        if isinstance(other, BaseMoment): return self.__datetime < other.datetime
        else: return NotImplemented

    def __gt__(self, other):
        if isinstance(other, BaseMoment): return self.__datetime > other.datetime
        else: return NotImplemented

    def __le__(self, other):
        if isinstance(other, BaseMoment): return self.__datetime <= other.datetime
        else: return NotImplemented

    def __ge__(self, other):
        if isinstance(other, BaseMoment): return self.__datetime >= other.datetime
        else: return NotImplemented

    __hash__ = None

    def __add__(self, other):
        if isinstance(other, dt.timedelta):
            return self._wrap(tzinfo_normalize(self.__datetime + other), self.__locale)
        else: return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, BaseMoment): return self.__datetime - other.datetime
        elif isinstance(other, dt.timedelta):
            return self._wrap(tzinfo_normalize(self.__datetime - other), self.__locale)
        else: return NotImplemented


class Moment(BaseMoment):
    '''
    A mutable value: changes are made in place and return `self` (so calls
    can be chained).
    '''

    __slots__ = ()

    def _apply(self, datetime, locale):
        self._assign(datetime, locale)
        return self


class FrozenMoment(BaseMoment):
    '''
    An immutable value: changes return a new instance.
    '''

    __slots__ = ()

    immutable = True

    def _apply(self, datetime, locale):
        return self._wrap(datetime, locale)

    def __hash__(self):
        return hash(self.datetime)
