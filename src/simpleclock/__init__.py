
from calendar import timegm
import datetime as dt
from numbers import Real
from simpleclock.moment import BaseMoment, Moment, FrozenMoment, ParseError, UnknownZone, \
    to_tzinfo, zone_name, local_zone_name, try_parse
from simpleclock.utils import DebugLog, SimpleClockError


# Factories for dates and times (Moment and FrozenMoment instances), with
# configurable defaults for the locale, time zone and classes used.



DEFAULT_LOCALE = 'ru'
MAX_COMPONENTS = 6



# Exceptions.


class InvalidConfiguration(SimpleClockError, TypeError):
    '''
    A class given as a creator does not support the construction protocol
    (or, for immutable values, does not return new instances on change).
    '''


class InvalidArgumentError(SimpleClockError, ValueError):
    pass


class TimestampError(SimpleClockError, RuntimeError):
    '''
    A string given to `timestamp()` could not be parsed.
    '''



# Configuration.


def check_creator(kind, immutable=False):
    '''
    :param kind: The class to check.
    :param immutable: Whether `kind` must create immutable values.
    '''
    if not (isinstance(kind, type) and issubclass(kind, BaseMoment)):
        raise InvalidConfiguration('Creator must be a subclass of {0} (not {1!r})', BaseMoment.__name__, kind)
    if immutable and not issubclass(kind, FrozenMoment):
        raise InvalidConfiguration('Immutable creator must be a subclass of {0} (not {1!r})',
                                   FrozenMoment.__name__, kind)


def normalize_zone(zone):
    '''
    :param zone: A zone name (any case) or `dt.tzinfo`.
    :return: The canonical name (eg 'europe/moscow' gives 'Europe/Moscow').
    '''
    try:
        return zone_name(to_tzinfo(zone))
    except UnknownZone as e:
        raise InvalidArgumentError('{0}', e)


class ClockConfig:
    '''
    The defaults used by a Clock.  Shared by reference, so changes made
    through the Clock are visible here (use `copy()` to isolate).
    '''

    __slots__ = ('mutable_kind', 'immutable_kind', 'locale', 'time_zone', 'debug')

    def __init__(self, mutable_kind=Moment, immutable_kind=FrozenMoment, locale=DEFAULT_LOCALE,
                 time_zone=None, debug=False):
        '''
        :param mutable_kind: The class used for mutable values.
        :param immutable_kind: The class used for immutable values.
        :param locale: The locale tag set on all values.
        :param time_zone: The default zone name (`None` is the environment's
                          zone, read when needed).
        :param debug: If true, print a description of the logic followed.
        '''
        check_creator(mutable_kind)
        check_creator(immutable_kind, immutable=True)
        self.mutable_kind = mutable_kind
        self.immutable_kind = immutable_kind
        self.locale = locale
        self.time_zone = None if time_zone is None else normalize_zone(time_zone)
        self.debug = debug

    def copy(self, **changes):
        values = dict((name, getattr(self, name)) for name in self.__slots__)
        values.update(changes)
        return ClockConfig(**values)

    def __repr__(self):
        return '{0}({1})'.format(self.__class__.__name__,
                                 ', '.join('%s=%r' % (name, getattr(self, name)) for name in self.__slots__))



# The facade.


class Clock(DebugLog):
    '''
    Create dates and times from timestamps, strings, lists of components
    and existing values, using the classes, locale and zone in the
    configuration.

    IMPORTANT: Changing the configuration is not thread safe.
    '''

    def __init__(self, config=None):
        '''
        :param config: The configuration (default a new ClockConfig()).
        '''
        self.__config = ClockConfig() if config is None else config

    @property
    def config(self):
        return self.__config

    def configured(self, **changes):
        '''
        :param changes: Configuration values to change (see ClockConfig).
        :return: A new Clock with a modified copy of this configuration.
        '''
        return Clock(self.__config.copy(**changes))

    def set_creators(self, mutable=None, immutable=None):
        '''
        Replace the classes used to create values.  Nothing is changed if
        either class is invalid.

        :param mutable: A `BaseMoment` subclass (or `None` for no change).
        :param immutable: A `FrozenMoment` subclass (or `None` for no change).
        '''
        log = self._get_log(self.__config.debug)
        if mutable is not None:
            check_creator(mutable)
        if immutable is not None:
            check_creator(immutable, immutable=True)
        if mutable is not None:
            log('Mutable creator is now {0}', mutable.__name__)
            self.__config.mutable_kind = mutable
        if immutable is not None:
            log('Immutable creator is now {0}', immutable.__name__)
            self.__config.immutable_kind = immutable

    def locale(self, locale=None):
        '''
        :param locale: The new default locale (or `None` to leave unchanged).
        :return: The previous locale, if changed, otherwise the current value.
        '''
        if locale is not None:
            old, self.__config.locale = self.__config.locale, locale
            return old
        return self.__config.locale

    def time_zone(self, zone=None):
        '''
        :param zone: The new default zone, as a name or `dt.tzinfo` (or
                     `None` to leave unchanged).
        :return: The zone name in effect before the call (the configured
                 zone or, if none, the environment's).
        '''
        log = self._get_log(self.__config.debug)
        current = self.__config.time_zone or local_zone_name()
        if zone is not None:
            self.__config.time_zone = normalize_zone(zone)
            log('Time zone changed from {0} to {1}', current, self.__config.time_zone)
        return current

    def creator(self, immutable=True):
        return self.__config.immutable_kind if immutable else self.__config.mutable_kind

    def _tzinfo(self, tz=None):
        return to_tzinfo(self.__config.time_zone if tz is None else tz)

    def _localized(self, moment):
        return moment.with_locale(self.__config.locale)

    def create(self, time='now', tz=None, immutable=True, format=None):
        '''
        Create a value, choosing how by the type of `time`:

          >>> clock = Clock(ClockConfig(time_zone='UTC'))
          >>> clock.create(1700000000)
          FrozenMoment('2023-11-14 22:13:20.000000 UTC', tz='UTC', locale='ru')
          >>> clock.create([2024, 2, 29, 12])
          FrozenMoment('2024-02-29 12:00:00.000000 UTC', tz='UTC', locale='ru')

        :param time: An existing value (or `dt.datetime`), which is converted;
                     a number or numeric string (Unix timestamp); 'now'; a
                     string to parse (using `format` if given); or a list of
                     1 to 6 integers (year, month, day, hour, minute, second).
                     Anything else goes to the class constructor.
        :param tz: The zone (default the configured zone).  Ignored when
                   converting an existing aware value.
        :param immutable: Create a FrozenMoment (or configured equivalent)?
        :param format: A strptime format for parsing a string.
        :return: A new value, with the configured locale.
        '''
        log = self._get_log(self.__config.debug)
        creator = self.creator(immutable)

        if isinstance(time, (BaseMoment, dt.datetime)):
            log('Converting existing value {0!r}', time)
            return self._localized(creator.from_moment(time, tz=self._tzinfo(tz), debug=self.__config.debug))

        tzinfo = self._tzinfo(tz)

        if self.is_timestamp(time):
            log('Reading {0!r} as a Unix timestamp', time)
            return self._localized(creator.from_timestamp(time, tz=tzinfo))

        if isinstance(time, str):
            if format is not None:
                log('Parsing {0!r} with {1!r}', time, format)
                return self._localized(creator.from_format(format, time, tz=tzinfo, debug=self.__config.debug))
            elif time.lower() == 'now':
                return self._localized(creator.now(tz=tzinfo))
            log('Parsing free-form {0!r}', time)
            return self._localized(creator.from_time_string(time, tz=tzinfo, debug=self.__config.debug))

        if isinstance(time, (list, tuple)):
            if not 0 < len(time) <= MAX_COMPONENTS:
                raise InvalidArgumentError('Component list must contain 1 to {0} integers (not {1})',
                                           MAX_COMPONENTS, len(time))
            log('Creating from components {0!r}', time)
            return self._localized(creator.create(*time, tz=tzinfo))

        log('Passing {0!r} to {1}', time, creator.__name__)
        return self._localized(creator(time, tz=tzinfo, debug=self.__config.debug))

    def now(self, tz=None, immutable=True):
        return self._localized(self.creator(immutable).now(tz=self._tzinfo(tz)))

    def from_object(self, time, immutable=True):
        '''
        :param time: An existing value (or `dt.datetime`; naive values are
                     taken to be in the configured zone).
        '''
        return self._localized(self.creator(immutable).from_moment(time, tz=self._tzinfo(), debug=self.__config.debug))

    def from_format(self, format, time, tz=None, immutable=True):
        return self._localized(self.creator(immutable).from_format(format, time, tz=self._tzinfo(tz),
                                                                   debug=self.__config.debug))

    def from_timestamp(self, timestamp, tz=None, immutable=True):
        return self._localized(self.creator(immutable).from_timestamp(timestamp, tz=self._tzinfo(tz)))

    def from_timestamp_ms(self, timestamp, tz=None, immutable=True):
        return self._localized(self.creator(immutable).from_timestamp_ms(timestamp, tz=self._tzinfo(tz)))

    def from_timestamp_utc(self, timestamp, immutable=True):
        return self._localized(self.creator(immutable).from_timestamp_utc(timestamp))

    def from_timestamp_ms_utc(self, timestamp, immutable=True):
        return self._localized(self.creator(immutable).from_timestamp_ms_utc(timestamp))

    def from_date_time(self, year=None, month=1, day=1, hour=0, minute=0, second=0, tz=None, immutable=True):
        '''
        Missing values default as shown (`None` means the current value, so
        by default the date is January 1st of this year).
        '''
        return self._localized(self.creator(immutable).create(year, month, day, hour, minute, second,
                                                              tz=self._tzinfo(tz)))

    def from_time(self, hour=0, minute=0, second=0, tz=None, immutable=True):
        return self._localized(self.creator(immutable).from_time(hour, minute, second, tz=self._tzinfo(tz)))

    def from_iso_format(self, format, time, locale='en', translator=None, tz=None, immutable=True):
        '''
        Parse using a moment-style pattern (see `simpleclock.fmt`).

        :param format: The pattern (eg 'D MMMM YYYY').
        :param time: The string to parse.
        :param locale: The language of `time`.
        :param translator: A mapping or callable that converts words in
                           `time` to English.
        :param tz: The zone (default the configured zone).
        :param immutable: Create a FrozenMoment (or configured equivalent)?
        '''
        return self._localized(self.creator(immutable).from_iso_format(
            format, time, tz=self._tzinfo(tz), locale=locale, translator=translator, debug=self.__config.debug))

    def timestamp(self, time='now'):
        '''
        :param time: A value, `dt.datetime`, string, or number (read as a
                     Unix timestamp, as in `create()`).
        :return: Whole seconds since the Unix epoch.
        '''
        if isinstance(time, BaseMoment):
            return time.timestamp
        if isinstance(time, dt.datetime):
            return self.from_object(time).timestamp
        if isinstance(time, Real) and not isinstance(time, bool):
            time = '@{0}'.format(time)
        datetime, error = try_parse(time, self._tzinfo())
        if error is not None:
            raise TimestampError('{0}', error)
        return timegm(datetime.utctimetuple())

    def is_date(self, value):
        '''
        :return: True if `value` is a date, or a string (or number) that can
                 be parsed as one.
        '''
        if isinstance(value, (BaseMoment, dt.date)):
            return True
        log = self._get_log(self.__config.debug)
        if isinstance(value, bool) or not isinstance(value, (str, Real)):
            return False
        datetime, error = try_parse(str(value), self._tzinfo())
        if error is not None:
            log('{0!r} is not a date ({1})', value, error)
        return error is None

    def is_timestamp(self, value):
        '''
        :return: True if `value` is a Unix timestamp (a number, or a string
                 containing one).
        '''
        if isinstance(value, bool) or not isinstance(value, (str, Real)):
            return False
        # only plain decimals match; floats printed with an exponent (1e-05)
        # fail here, and create() then reads them with the class constructor.
        return self.is_date('@{0}'.format(value))


DEFAULT_CLOCK = Clock()


def now(tz=None, immutable=True):
    '''
    :return: The current time, from the default clock.
    '''
    return DEFAULT_CLOCK.now(tz, immutable)


def timestamp(time='now'):
    '''
    :return: Whole seconds since the Unix epoch, from the default clock.
    '''
    return DEFAULT_CLOCK.timestamp(time)


def create(time='now', tz=None, immutable=True, format=None):
    return DEFAULT_CLOCK.create(time, tz=tz, immutable=immutable, format=format)
