import datetime
import os

import pytest

# For the purposes of these tests, we assume the Canada/Mountain timezone is the host's local zone
os.environ['TZ']		= "Canada/Mountain"

from .			import defaults
from .duration		import duration, elapsed, classify, operand, COUNT, UNIT, INSTANT
from .instant		import instant
from .misc		import now_ms


def test_duration_classify():
    assert classify( 5 ) == operand( COUNT, 5 )
    assert classify( 1.5 ) == operand( COUNT, 1.5 )
    assert classify( ' Hours ' ) == operand( UNIT, 'hours' )
    assert classify( '2021-01-01', first=True ) == operand( INSTANT, '2021-01-01' )
    assert classify( datetime.date( 2021, 1, 1 )).kind == INSTANT
    i				= instant( 0, 'UTC' )
    assert classify( i ) == operand( INSTANT, i )
    for bad in ( True, [ 1 ], object() ):
        with pytest.raises( TypeError ):
            classify( bad )


def test_duration_quantities():
    assert duration( 20, 'hours' ).as_minutes() == 1200
    assert duration( 2, 'days' ).as_hours() == 48
    assert duration( 1, 'weeks' ).as_days() == 7
    assert duration( 1, 'months' ).as_days() == 30
    assert duration( 1, 'years' ).as_days() == 365
    assert duration( 1500, 'milliseconds' ).ms == 1500
    assert duration( 1500 ).as_seconds() == 1
    assert duration( 90, 'seconds' ).as_minutes() == 1

    # Negative quantities are their magnitude
    assert duration( -5000 ).ms == 5000
    assert duration( -2, 'hours' ).as_hours() == 2

    # Nothing, or an unknown unit
    assert duration( None ) is None
    assert duration( None, 'hours' ) is None
    assert duration( 5, 'fortnights' ) is None
    assert duration( 5, 'hour' ) is None

    assert duration( 0 ).ms == 0
    assert duration( 0 ).humanize() == 'now'


def test_duration_instants():
    a				= instant( '2021-01-01 00:00', 'UTC' )
    b				= instant( '2021-02-13 00:00', 'US/Pacific' )
    assert duration( a, b ) == duration( b, a )
    assert duration( a, b ).ms == duration( b, a ).ms >= 0
    assert duration( a, b ).as_days() == 43

    # Instants mixed with milliseconds, and with datetimes or strings
    assert duration( a, a.value + defaults.day ).as_hours() == 24
    assert duration( a.value + defaults.hour, a ).as_minutes() == 60
    assert duration( '2021-01-01T00:00:00Z', datetime.datetime( 2021, 1, 2, tzinfo=a.tzinfo )).as_days() == 1

    # A small instant (before 1970-04-26) is its milliseconds; a large one is measured from now
    assert duration( instant( 5000, 'UTC' )).ms == 5000
    assert duration( 20000000000 ).ms == 20000000000
    d				= duration( instant( now_ms() - 3 * defaults.hour, 'UTC' ))
    assert d.as_hours() == 3
    d				= duration( instant( now_ms() + 2 * defaults.day + defaults.hour, 'UTC' ))
    assert d.as_days() == 2

    # A str second operand is a unit, never a date/time
    assert duration( a, '2021-01-02' ) is None


def test_duration_conversions():
    d				= duration( 43, 'days' )
    assert d.as_months() == 1 and d.months() == 1 and d.asMonths() == 1
    assert d.as_weeks() == 6 and d.weeks() == 6 and d.asWeeks() == 6
    assert d.as_years() == 0 and d.years() == 0 and d.asYears() == 0
    assert d.as_days() == 43 and d.days() == 43 and d.asDays() == 43
    assert d.as_hours() == 43 * 24 and d.asHours() == d.hours()
    assert d.asMinutes() == 43 * 24 * 60 and d.asSeconds() == 43 * 24 * 3600
    assert d.timedelta() == datetime.timedelta( days=43 )
    assert int( d ) == 43 * defaults.day
    assert elapsed( 1.5 ).ms == 1.5 and elapsed( 2.0 ).ms == 2 and isinstance( elapsed( 2.0 ).ms, int )
    assert elapsed( -7 ).ms == 7


def test_duration_humanize():
    assert duration( 43, 'days' ).humanize() == '1 month'
    assert duration( 2, 'hours' ).humanize() == '2 hours'
    assert duration( 400, 'days' ).humanize() == '1 year'
    assert duration( 1000 ).humanize() == '1 second'
    assert duration( 999 ).humanize() == 'now'
    assert duration( 13, 'days' ).humanize() == '1 week'


def test_duration_humanize_abv():
    assert duration( 43, 'days' ).humanize_abv() == '1 mo'
    assert duration( 43, 'days' ).humanizeAbv() == '1 mo'
    assert duration( 5, 'hours' ).humanize_abv( 'd' ) == '0 d'
    assert duration( 5, 'hours' ).humanize_abv( 'h' ) == '5 h'
    assert duration( 3, 'days' ).humanize_abv( padding=0 ) == '3d'
    assert duration( 3, 'days' ).humanize_abv( 'mo', 2 ) == '0  mo'
    assert duration( 3, 'days' ).humanize_abv( padding='x' ) == '3 d'
    assert duration( 3, 'days' ).humanize_abv( padding='2.5' ) == '3  d'
    assert duration( 3, 'days' ).humanize_abv( padding=3.9 ) == '3   d'
    assert duration( 3, 'days' ).humanize_abv( padding=float( 'inf' )) == '3 d'
    assert duration( 90, 'seconds' ).humanize_abv() == '1 m'
    assert duration( 500 ).humanize_abv() == 'now'
    assert duration( 500 ).humanize_abv( 's' ) == 'now'


def test_duration_format():
    d				= duration( 2 * defaults.day + 3 * defaults.hour + 4 * defaults.minute + 5 * defaults.second )
    assert d.format() == '2d 03h 04m 05s'
    assert str( d ) == d.format()
    assert repr( d ) == '<2d 03h 04m 05s =~= %rms>' % ( d.ms, )
    assert duration( 0 ).format() == '0d 00h 00m 00s'
    assert duration( 400, 'days' ).format() == '400d 00h 00m 00s'


def test_duration_compare():
    a				= duration( 1, 'hours' )
    b				= duration( 60, 'minutes' )
    c				= duration( 2, 'hours' )
    assert a == b and not a != b and hash( a ) == hash( b )
    assert a < c and c > a and a <= b and b >= a and not c <= a
    assert a != 3600000
    with pytest.raises( TypeError ):
        a < 3600000
