#
# Datetz -- Timezone-aware date/time values and arithmetic
#
# Copyright (c) 2021, Hard Consulting Corporation.
#
# Datetz is free software: you can redistribute it and/or modify it under the
# terms of the GNU General Public License as published by the Free Software
# Foundation, either version 3 of the License, or (at your option) any later
# version.  See the LICENSE file at the top of the source tree.
#
# Datetz is distributed in the hope that it will be useful, but WITHOUT ANY
# WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS FOR
# A PARTICULAR PURPOSE.  See the GNU General Public License for more details.
#

__author__                      = "Perry Kundert"
__email__                       = "perry@hardconsulting.com"
__copyright__                   = "Copyright (c) 2021 Hard Consulting Corporation"
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

__all__				= [ "instant", "tz", "now", "InvalidInstant" ]

import datetime
import logging

# Installed packages (eg. pip/setup.py install python-dateutil)
import dateutil.parser

from .			import arithmetic, defaults, zone
from .format		import render
from .misc		import type_str_base, isfinite, now_ms, round_half_up
from .zone		import InvalidInstant

log				= logging.getLogger( __package__ )


# Day of week names in day() order
DAYS				= ( 'Sunday', 'Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday' )


class instant( object ):
    """An absolute instant (integer milliseconds since the UNIX epoch, in .value) tagged with a timezone
    name, which is used for every calendar field read/write and every format.  A timezone of None
    means the host's local zone.

    Initialize from milliseconds, another instant, a datetime/date, or a date/time string (default:
    now).  If only a string is given and it is a timezone name (or cannot be parsed as a date/time),
    it is the timezone instead:

        >>> instant( '2021-05-16T20:01:00-05:00', 'US/Pacific' ).format()
        '2021-05-16T18:01:00-07:00'
        >>> instant( 1615712400000, 'US/Pacific' ).format()
        '2021-03-14T01:00:00-08:00'
        >>> instant( 'US/Pacific' ).timezone
        'US/Pacific'

    Without a timezone, the process-wide default (see defaults.set_timezone) is read once, here.

    The calendar setters and add/subtract mutate the instant and return it, so calls may be chained:

        >>> instant( 1615712400000, 'US/Pacific' ).add( 1, 'day' ).hour( 9 ).format( 'MMM D, h:mm aa' )
        'Mar 15, 9:00 am'

    Use copy() to obtain an independent instant.  Instants are not synchronized; do not mutate an
    instant shared between threads.

    """
    def __init__( self, timestamp=None, timezone=None ):
        if timezone is None and isinstance( timestamp, type_str_base ) and self.zone_only( timestamp ):
            log.debug( "Interpreting %r as a timezone", timestamp )
            timestamp,timezone	= None,timestamp.strip()
        if timezone is None and isinstance( timestamp, instant ):
            timezone		= timestamp.timezone
        if timezone is None:
            timezone		= defaults.get_timezone()
        self.timezone		= timezone

        if timestamp is None:
            self.value		= now_ms()
        elif isinstance( timestamp, instant ):
            self.value		= timestamp.value
        elif isinstance( timestamp, bool ):
            raise InvalidInstant( "Invalid instant of %s: %r" % ( type( timestamp ), timestamp ))
        elif isinstance( timestamp, ( int, float )):
            if not isfinite( timestamp ):
                raise InvalidInstant( "Invalid instant of %r milliseconds" % ( timestamp, ))
            self.value		= int( timestamp )
        elif isinstance( timestamp, type_str_base ):
            self.value		= self.value_from_string( timestamp, self.tzinfo )
        elif isinstance( timestamp, datetime.datetime ):
            self.value		= self.value_from_datetime( timestamp, self.tzinfo )
        elif isinstance( timestamp, datetime.date ):
            self.value		= self.value_from_datetime(
                datetime.datetime.combine( timestamp, datetime.time() ), self.tzinfo )
        else:
            raise InvalidInstant( "Invalid instant of %s: %r" % ( type( timestamp ), timestamp ))
        self.value		= zone.checked( self.value )

    @classmethod
    def zone_only( cls, s ):
        """True iff the string s names a timezone, or isn't a date/time we can parse."""
        if zone.is_zone_name( s.strip() ):
            return True
        try:
            cls.datetime_from_string( s )
        except InvalidInstant:
            return True
        return False

    @classmethod
    def datetime_from_string( cls, s ):
        """Parse a date/time string, returning a (possibly naive) datetime.  If the time is followed by a
        timezone name, the naive time is localized to that zone:

            2014-11-01 01:02:03.456 America/Edmonton

        An explicit UTC offset or zone designator within the time takes precedence.

        """
        terms			= str( s ).split()
        name			= None
        if len( terms ) > 1 and zone.is_zone_name( terms[-1] ):
            terms,name		= terms[:-1],terms[-1]
        try:
            dt			= dateutil.parser.parse( ' '.join( terms ))
        except ( ValueError, OverflowError ) as exc:
            raise InvalidInstant( "Invalid time format %r: %s" % ( s, exc ))
        if name and dt.tzinfo is None:
            dt			= zone.localize( dt, name )
        return dt

    @classmethod
    def value_from_datetime( cls, dt, tzinfo=None ):
        """Milliseconds of an aware datetime, or of a naive datetime in the supplied zone."""
        try:
            if dt.tzinfo is None or dt.utcoffset() is None:
                dt		= zone.localize( dt.replace( tzinfo=None ), tzinfo )
        except ( ValueError, OverflowError ) as exc:
            raise InvalidInstant( "Invalid instant %s: %s" % ( dt, exc ))
        return zone.checked( zone.epoch_ms( dt ))

    @classmethod
    def value_from_string( cls, s, tzinfo=None ):
        return cls.value_from_datetime( cls.datetime_from_string( s ), tzinfo )

    @property
    def timezone( self ):
        return self._timezone
    @timezone.setter
    def timezone( self, name ):
        """Replace the timezone; raises pytz.UnknownTimeZoneError for an unknown name."""
        zone.timezone_info( name )
        self._timezone		= name

    @property
    def tzinfo( self ):
        return zone.timezone_info( self._timezone )

    def copy( self ):
        return self.__class__( self )

    def parts( self ):
        """The calendar fields in the instant's timezone.  Recomputed on each call."""
        return zone.resolve_fields( self.value, self.tzinfo )

    def to_datetime( self ):
        """An aware datetime in the instant's timezone."""
        return zone.civil( self.value, self.tzinfo )

    # Civil calendar fields in the instant's timezone.  Setting these adds the difference, in the
    # corresponding calendar unit.
    def year( self, val=None ):
        """Get or set the 4 digit year"""
        y			= int( self.parts().year )
        if val is None:
            return y
        return self.add( val - y, 'years' )
    years			= year

    def month( self, val=None ):
        """Get or set the month [0 - 11].  Setting an out of range month is ignored."""
        m			= int( self.parts().month ) - 1
        if val is None:
            return m
        if val < 0 or val > 11:
            return self
        return self.add( val - m, 'months' )
    months			= month

    def date( self, val=None ):
        """Get or set the day of the month [1 - 31].  0 is the last day of the prior month, etc."""
        d			= int( self.parts().day )
        if val is None:
            return d
        return self.add( val - d, 'days' )

    def hour( self, val=None ):
        """Get or set the hour [0 - 23]"""
        h			= int( self.parts().hour )
        if val is None:
            return h
        return self.add( val - h, 'hours' )
    hours			= hour

    # Sub-hour fields are read and written on the absolute instant, via the host's local wall clock.
    # Out of range values roll over into the adjacent hour/minute/second.
    def _local( self ):
        return zone.civil( self.value, zone.get_localzone() )

    def _set_local( self, **kwds ):
        host			= zone.get_localzone()
        loc			= zone.civil( self.value, host ).replace( tzinfo=None )
        delta			= dict(
            minutes		= loc.minute,
            seconds		= loc.second,
            milliseconds	= loc.microsecond // 1000 )
        delta.update( ( k, int( v )) for k,v in kwds.items() )
        base			= loc.replace( minute=0, second=0, microsecond=0 )
        try:
            value		= zone.epoch_ms( zone.localize( base + datetime.timedelta( **delta ), host ))
        except OverflowError as exc:
            raise InvalidInstant( "Invalid instant %s + %r: %s" % ( base, delta, exc ))
        self.value		= zone.checked( value )
        return self

    def minute( self, val=None ):
        """Get or set the minute [0 - 59]"""
        if val is None:
            return self._local().minute
        return self._set_local( minutes=val )
    minutes			= minute

    def second( self, val=None ):
        """Get or set the second [0 - 59]"""
        if val is None:
            return self._local().second
        return self._set_local( seconds=val )
    seconds			= second

    def millisecond( self, val=None ):
        """Get or set the millisecond [0 - 999]"""
        if val is None:
            return self._local().microsecond // 1000
        return self._set_local( milliseconds=val )
    milliseconds = ms		= millisecond

    def day( self ):
        """The day of the week [0 - 6], Sunday is 0"""
        return DAYS.index( self.parts().weekday )

    def day_of_year( self ):
        """The day of the year; 1 on January 1st.  Whole days elapsed since 00:00:00 on the last day of
        the prior year, so within a DST period the first hour of each day counts as the prior day.

        """
        start			= self.copy().month( 0 ).date( 0 ).hours( 0 ).minutes( 0 ).seconds( 0 )
        return ( self.value - start.value ) // defaults.day

    def week( self ):
        """The Sunday-based week of the year [1 - 54].  Any days before the first Sunday are week 1.

        Only the whole days elapsed since January 1st are rounded (to absorb a DST hour).  The week is
        then floored, after offsetting by January 1st's weekday, rather than rounding the elapsed
        weeks; rounding the weeks would yield week 0 (or skip a week) around the first Sunday.

        """
        start			= self.copy().month( 0 ).date( 1 ).reset_day()
        elapsed			= self.copy().reset_day().value - start.value
        days			= round_half_up( elapsed / defaults.day ) # absorbs DST hour
        return ( days + start.day() ) // 7 + 1

    def reset_day( self ):
        """Set the time to the beginning of the day 00:00:00.000"""
        return self.hours( 0 ).minutes( 0 ).seconds( 0 ).milliseconds( 0 )

    def add( self, count, unit ):
        """Add a count of 'ms', 'seconds', 'minutes', 'hours', 'days', 'weeks', 'months' or 'years'"""
        return arithmetic.add( self, count, unit )

    def subtract( self, count, unit ):
        return arithmetic.subtract( self, count, unit )

    def format( self, template=None ):
        """Render using the template (see datetz.format), or as YYYY-MM-DDTHH:MM:SS+HH:MM"""
        return render( self.parts(), template )

    def __int__( self ):
        return self.value

    def __float__( self ):
        return float( self.value )

    def __str__( self ):
        return self.format()

    def __repr__( self ):
        return '<%s =~= %d>' % ( self, self.value )

    # Comparisons are of the absolute instant, regardless of timezone.  Numbers are milliseconds.
    @staticmethod
    def _value_of( rhs ):
        if isinstance( rhs, instant ):
            return rhs.value
        if isinstance( rhs, ( int, float )) and not isinstance( rhs, bool ):
            return rhs
        return None

    def __lt__( self, rhs ):
        v			= self._value_of( rhs )
        return NotImplemented if v is None else self.value < v
    def __gt__( self, rhs ):
        v			= self._value_of( rhs )
        return NotImplemented if v is None else self.value > v
    def __le__( self, rhs ):
        v			= self._value_of( rhs )
        return NotImplemented if v is None else self.value <= v
    def __ge__( self, rhs ):
        v			= self._value_of( rhs )
        return NotImplemented if v is None else self.value >= v
    def __eq__( self, rhs ):
        v			= self._value_of( rhs )
        return NotImplemented if v is None else self.value == v
    def __ne__( self, rhs ):
        v			= self._value_of( rhs )
        return NotImplemented if v is None else self.value != v

    __hash__			= None

    # Add/subtract numeric milliseconds.  +/- 0 is a copy.
    def __add__( self, rhs ):
        result			= self.copy()
        result.value		= zone.checked( result.value + int( rhs ))
        return result
    def __iadd__( self, rhs ):
        self.value		= zone.checked( self.value + int( rhs ))
        return self
    def __sub__( self, rhs ):
        result			= self.copy()
        result.value		= zone.checked( result.value - int( rhs ))
        return result
    def __isub__( self, rhs ):
        self.value		= zone.checked( self.value - int( rhs ))
        return self


def tz( timestamp=None, timezone=None ):
    """Construct an instant, eg. tz( 1615712400000, 'US/Pacific' ), tz( 'UTC' ) or tz()"""
    return instant( timestamp, timezone )


def now( timezone=None ):
    return instant( None, timezone )
