
from setuptools import setup

setup(
    name = 'simple-clock',
    url = 'https://github.com/andrewcooke/simple-date',
    install_requires = ['pytz', 'tzlocal>=4', 'python-dateutil'],
    extras_require = {'test': ['pytest']},
    packages = ['simpleclock'],
    package_dir = {'': 'src'},
    version = '0.1.0',
    description = 'Configurable factories for dates and times (mutable and immutable).',
    author = 'Andrew Cooke',
    author_email = 'andrew@acooke.org',
    classifiers = ['Development Status :: 4 - Beta',
                   'Intended Audience :: Developers',
                   'License :: Public Domain',
                   'Programming Language :: Python :: 3',
                   'Topic :: Software Development',
                   'Topic :: Software Development :: Libraries',
                   'Topic :: Software Development :: Libraries :: Python Modules'],
    long_description = '''
Factories for dates and times, built on
`datetime <http://docs.python.org/3/library/datetime.html#module-datetime>`_,
`pytz <http://pytz.sourceforge.net/>`_,
`tzlocal <https://pypi.python.org/pypi/tzlocal>`_ and
`dateutil <https://pypi.org/project/python-dateutil/>`_.

A single `create()` accepts timestamps, strings, lists of components and
existing values; the locale, time zone and classes used are configurable.

Examples
--------

What time is it now?

::

    >>> now()
    FrozenMoment('2013-06-14 13:14:17.295943 MSK', tz='Europe/Moscow', locale='ru')

And in Tokyo, as a value I can change?

::

    >>> date = now('Asia/Tokyo', immutable=False)
    >>> date.add(days=7)
    Moment('2013-06-21 19:14:17.295943 JST', tz='Asia/Tokyo', locale='ru')

What's the date for epoch 1234567890?

::

    >>> create(1234567890, tz='UTC')
    FrozenMoment('2009-02-13 23:31:30.000000 UTC', tz='UTC', locale='ru')

Or for a list of components?

::

    >>> create([2013, 12, 24], tz='UTC')
    FrozenMoment('2013-12-24 00:00:00.000000 UTC', tz='UTC', locale='ru')

Configure defaults for a clock of your own:

::

    >>> clock = Clock(ClockConfig(locale='en', time_zone='Europe/London'))
    >>> clock.from_iso_format('D MMMM YYYY', '5 March 2024')
    FrozenMoment('2024-03-05 00:00:00.000000 GMT', tz='Europe/London', locale='en')
    >>> clock.timestamp('2024-03-05')
    1709596800

Licence
-------

Released into the public domain for any use, but with absolutely no
warranty.
    '''
)
