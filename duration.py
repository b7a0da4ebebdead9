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

__all__				= [ "duration", "elapsed", "operand", "classify", "COUNT", "UNIT", "INSTANT" ]

import collections
import datetime
import logging

from .			import defaults
from .instant		import instant
from .misc		import type_str_base, now_ms

log				= logging.getLogger( __package__ )

# The kinds of duration() operands.  A str first operand is a date/time, a str second operand is a
# unit name, eg. 'hours'.
COUNT				= 'count'	# int/float milliseconds (or count of units)
UNIT				= 'unit'	# a unit name in defaults.unit_ms
INSTANT				= 'instant'	# an instant, datetime, date or date/time str; None is now

operand				= collections.namedtuple( 'operand', [ 'kind', 'value' ] )


def classify( value, first=False ):
    """Classify a duration() operand, once."""
    if isinstance( value, bool ):
        raise TypeError( "Invalid duration operand %r" % ( value, ))
    if isinstance( value, ( int, float )):
        return operand( COUNT, value )
    if isinstance( value, type_str_base ) and not first:
        return operand( UNIT, value.strip().lower() )
    if isinstance( value, ( instant, datetime.date, type_str_base )):
        return operand( INSTANT, value )
    raise TypeError( "Invalid duration operand of %s: %r" % ( type( value ), value ))


def _milliseconds( op ):
    if op.kind == COUNT:
        return op.value
    if op.value is None:
        return now_ms()
    if isinstance( op.value, instant ):
        return op.value.value
    return instant( op.value ).value


def duration( a, b=None ):
    """Compute the elapsed time between two instants, or of a quantity:

        duration( <instant> )			-- from/until now, if after 1970-04-26, else .value ms
        duration( <instant>, <instant> )	-- between two instants (either order)
        duration( 20, 'hours' )			-- a count of 'minutes', 'hours', 'days', 'weeks',
						   'months' (30 days) or 'years' (365 days)
        duration( 1500 )			-- milliseconds

    Numbers are milliseconds, and may be mixed with instants.  Returns None if 'a' is None, or 'b' is an
    unrecognized unit name.

    """
    if a is None:
        return None
    first			= classify( a, first=True )
    second			= None if b is None else classify( b )

    ms				= _milliseconds( first )
    if first.kind == COUNT:
        ms			= abs( ms )
    elif ms > defaults.absolute_threshold and second is None:
        second			= operand( INSTANT, None )

    if second is not None:
        if second.kind == UNIT:
            if second.value not in defaults.unit_ms:
                log.debug( "Unrecognized duration unit %r", b )
                return None
            ms		       *= defaults.unit_ms[second.value]
        else:
            ms			= abs( _milliseconds( second ) - ms )
    return elapsed( ms )


class elapsed( object ):
    """A non-negative elapsed time in .ms milliseconds.  The as_<unit> conversions use fixed unit lengths
    (a month is 30 days, a year 365 days), and are each the whole number of that unit in the total;
    eg. a 2 day duration is 48 hours.

    """
    def __init__( self, ms=0 ):
        ms			= abs( ms )
        self.ms			= int( ms ) if float( ms ).is_integer() else ms

    def as_seconds( self ):
        return int( self.ms // defaults.second )
    seconds = asSeconds		= as_seconds

    def as_minutes( self ):
        return int( self.ms // defaults.minute )
    minutes = asMinutes		= as_minutes

    def as_hours( self ):
        return int( self.ms // defaults.hour )
    hours = asHours		= as_hours

    def as_days( self ):
        return int( self.ms // defaults.day )
    days = asDays		= as_days

    def as_weeks( self ):
        return int( self.ms // defaults.week )
    weeks = asWeeks		= as_weeks

    def as_months( self ):
        return int( self.ms // defaults.month )
    months = asMonths		= as_months

    def as_years( self ):
        return int( self.ms // defaults.year )
    years = asYears		= as_years

    def _largest( self ):
        """Yields (<name>, <abbreviation>, <count>) from largest to smallest unit"""
        yield 'year',	'y',	self.as_years()
        yield 'month',	'mo',	self.as_months()
        yield 'week',	'w',	self.as_weeks()
        yield 'day',	'd',	self.as_days()
        yield 'hour',	'h',	self.as_hours()
        yield 'minute',	'm',	self.as_minutes()
        yield 'second',	's',	self.as_seconds()

    def humanize( self ):
        """The count of the largest non-zero unit, eg. '1 month', '3 days', or 'now'"""
        for name,_,count in self._largest():
            if count:
                return "%d %s%s" % ( count, name, 's' if count > 1 else '' )
        return 'now'

    def humanize_abv( self, min_res=None, padding=None ):
        """The count of the largest non-zero unit, abbreviated, eg. '1 mo'.  Stops at the min_res unit
        ('y', 'mo', 'w', 'd', 'h', 'm' or 's', default 's') even if zero, eg. '0 d'.  The count and the
        abbreviation are separated by 'padding' spaces (default 1).

        """
        min_res			= min_res or 's'
        try:
            padding		= 1 if padding is None else int( float( padding ))
        except ( TypeError, ValueError, OverflowError ):
            padding		= 1
        for _,abv,count in self._largest():
            if count or ( min_res == abv and abv != 's' ):
                return "%d%s%s" % ( count, ' ' * padding, abv )
        return 'now'
    humanizeAbv			= humanize_abv

    def format( self ):
        """Days, and remaining hours, minutes and seconds, eg. '2d 03h 04m 05s'"""
        return "%dd %02dh %02dm %02ds" % (
            self.as_days(), self.as_hours() % 24, self.as_minutes() % 60, self.as_seconds() % 60 )

    def timedelta( self ):
        return datetime.timedelta( milliseconds=self.ms )

    def __int__( self ):
        return int( self.ms )

    def __str__( self ):
        return self.format()

    def __repr__( self ):
        return '<%s =~= %rms>' % ( self, self.ms )

    def __eq__( self, rhs ):
        if not isinstance( rhs, elapsed ):
            return NotImplemented
        return self.ms == rhs.ms
    def __ne__( self, rhs ):
        if not isinstance( rhs, elapsed ):
            return NotImplemented
        return self.ms != rhs.ms
    def __lt__( self, rhs ):
        if not isinstance( rhs, elapsed ):
            return NotImplemented
        return self.ms < rhs.ms
    def __gt__( self, rhs ):
        if not isinstance( rhs, elapsed ):
            return NotImplemented
        return self.ms > rhs.ms
    def __le__( self, rhs ):
        if not isinstance( rhs, elapsed ):
            return NotImplemented
        return self.ms <= rhs.ms
    def __ge__( self, rhs ):
        if not isinstance( rhs, elapsed ):
            return NotImplemented
        return self.ms >= rhs.ms

    def __hash__( self ):
        return hash( self.ms )
