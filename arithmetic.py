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

__all__				= [ "add", "subtract", "unit_name", "calendar_shift", "rollover_months" ]

import datetime
import logging

from .			import defaults, zone
from .misc		import isfinite, round_half_up

log				= logging.getLogger( __package__ )

# Units which shift the absolute instant by a fixed number of milliseconds.  Keyed by the first 3
# characters of the normalized unit name.
absolute_units			= {
    'ms':			1,
    'mil':			1,
    'sec':			defaults.second,
    'min':			defaults.minute,
    'hou':			defaults.hour,
    'wee':			defaults.week,
}

# Units which change the civil calendar date, preserving the wall-clock time of day
calendar_units			= ( 'day', 'mon', 'yea' )


def unit_name( unit ):
    """Normalize a unit, eg. ' Months' --> 'mon'"""
    return str( unit ).strip().lower()[:3]


def _number( count ):
    """Any numeric count (or str representation), else 0"""
    try:
        value			= float( count )
    except ( TypeError, ValueError ):
        return 0.0
    return value if isfinite( value ) else 0.0


def rollover_months( naive, months ):
    """Add a number of months to a naive datetime, rolling excess days into the following month(s); eg.
    Jan 31 + 1 month is Mar 3 (or Mar 2 in a leap year), and Feb 29 + 12 months is Mar 1.

    """
    year,month			= divmod( naive.year * 12 + naive.month - 1 + months, 12 )
    first			= naive.replace( year=year, month=month + 1, day=1 )
    return first + datetime.timedelta( days=naive.day - 1 )


def calendar_shift( ms, count, unit, tz=None ):
    """Shift instant 'ms' by a count of calendar days, months or years as observed in zone 'tz'.

    The civil arithmetic is performed in the host's local zone.  First, the instant is shifted by the
    difference between the host's UTC offset and the zone's UTC offset (in whole hours), so that its
    host-local wall clock reads the same as the zone's wall clock.  The calendar change is applied to
    this wall clock, and then the instant is shifted back by the same difference.  The difference is
    computed once, at the original instant; if the zone and the host observe different transitions
    within the shifted span, the result may be off by the difference in their transitions.

    """
    host			= zone.get_localzone()
    local_offset		= zone.resolve_offset_hours( ms, host ) - zone.resolve_offset_hours( ms, tz )
    aligned			= ms - local_offset * defaults.hour
    try:
        naive			= zone.civil( aligned, host ).replace( tzinfo=None )
        if unit == 'day':
            shifted		= naive + datetime.timedelta( days=count )
        elif unit == 'mon':
            shifted		= rollover_months( naive, count )
        elif unit == 'yea':
            shifted		= rollover_months( naive, count * 12 )
        else:
            raise AssertionError( "Invalid calendar unit %r" % ( unit, ))
        result			= zone.epoch_ms( zone.localize( shifted, host )) + local_offset * defaults.hour
    except ( ValueError, OverflowError ) as exc:
        raise zone.InvalidInstant( "Invalid instant %r %+d %s: %s" % ( ms, count, unit, exc ))
    log.trace( "%+d %s in %s (host %s, %+dh): %s --> %s",
               count, unit, tz, host, local_offset, naive, shifted )
    return zone.checked( result )


def add( inst, count, unit ):
    """Add a signed count of the unit to the instant, mutating and returning it.  The count is rounded
    to the nearest integer; non-numeric counts are 0.  Units are matched on their first 3 characters:

        ms/millisecond(s), second(s), minute(s), hour(s), week(s)	-- shift the absolute instant
        day(s), month(s), year(s)					-- shift the civil calendar

    Unrecognized units are ignored.  Raises InvalidInstant (leaving the instant unchanged) if the result
    is beyond the representable range.

    """
    key				= unit_name( unit )
    count			= round_half_up( _number( count ))
    if key in absolute_units:
        inst.value		= zone.checked( inst.value + count * absolute_units[key] )
    elif key in calendar_units:
        inst.value		= calendar_shift( inst.value, count, key, inst.tzinfo )
    else:
        log.debug( "Ignoring unrecognized unit %r", unit )
    return inst


def subtract( inst, count, unit ):
    """Convenience function to add a negated count"""
    return add( inst, -_number( count ), unit )
