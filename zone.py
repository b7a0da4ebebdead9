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

__all__				= [ "get_localzone", "timezone_info", "civil", "epoch_ms", "localize",
                                    "parts", "resolve_fields", "resolve_offset_hours",
                                    "offset_label", "parse_offset", "format_offset",
                                    "is_zone_name", "WEEKDAYS", "MONTHS",
                                    "InvalidInstant", "MIN_MS", "MAX_MS", "checked" ]

"""
datetz.zone -- The narrow interface to the timezone database

All knowledge of civil calendars in arbitrary zones comes from pytz; the host's local zone name comes
from the TZ environment variable or tzlocal.  Instants are integer milliseconds since the UNIX epoch.

"""

import collections
import datetime
import functools
import logging
import os
import re

# Installed packages (eg. pip/setup.py install pytz tzlocal)
import pytz
import tzlocal

log				= logging.getLogger( __package__ )

EPOCH				= datetime.datetime( 1970, 1, 1, tzinfo=pytz.utc )

# English names, independent of the host's locale.  WEEKDAYS is in datetime.weekday() order.
WEEKDAYS			= ( 'Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday' )
MONTHS				= ( 'January', 'February', 'March', 'April', 'May', 'June', 'July',
                                    'August', 'September', 'October', 'November', 'December' )

# The calendar fields of an instant as read on a wall clock in some zone; all str, zero-padded
parts				= collections.namedtuple( 'parts', [
    'year', 'month', 'day', 'hour', 'minute', 'second', 'weekday', 'month_long', 'offset_label' ])

# Zone names that render with a 'Z' designator, rather than a +00:00 offset
_utc_names			= ( 'UTC', 'UCT', 'Zulu', 'Universal' )


@functools.lru_cache( maxsize=None )
def _tzfile( path ):
    with open( path, 'rb' ) as tzfile:
        return pytz.tzfile.build_tzinfo( 'local', tzfile )


def TZ_wrapper():
    """Wrap get_localzone in a handler that respects a TZ variable before attempting other host-specific
    local timezone detection.  The TZ variable is consulted on every call, so a change to it (eg. in a
    test harness) takes effect immediately.

    """
    def decorate( func ):
        @functools.wraps( func )
        def call( *args, **kwds ):
            # TZ environment variable?  Either a tzinfo file or a timezone name, optionally ':' prefixed
            tzenv		= os.environ.get( 'TZ' )
            if tzenv:
                tzenv		= tzenv[1:] if tzenv.startswith( ':' ) else tzenv
                if os.path.isfile( tzenv ):
                    return _tzfile( tzenv )
                try:
                    return pytz.timezone( tzenv )
                except pytz.UnknownTimeZoneError:
                    log.warning( "Ignoring unrecognized TZ=%r", tzenv )
            return func( *args, **kwds )
        return call
    return decorate


@TZ_wrapper()
def get_localzone():
    """The host's local zone, as a pytz tzinfo."""
    name			= tzlocal.get_localzone_name()
    if not name:
        log.warning( "Can not find any timezone configuration; assuming UTC" )
        return pytz.utc
    return pytz.timezone( name )


def is_zone_name( name ):
    return name in pytz.all_timezones_set


def timezone_info( zone ):
    """Return the tzinfo for the supplied zone: None is the host local zone, a tzinfo is used as-is,
    and a str is looked up in the timezone database (raising pytz.UnknownTimeZoneError if unknown).

    """
    if zone is None:
        return get_localzone()
    if isinstance( zone, datetime.tzinfo ):
        return zone
    return pytz.timezone( zone )


def civil( ms, zone=None ):
    """The instant 'ms' as an aware datetime in the specified zone."""
    return ( EPOCH + datetime.timedelta( milliseconds=ms )).astimezone( timezone_info( zone ))


def epoch_ms( dt ):
    """Convert a timezone-aware datetime to integer milliseconds since the UNIX epoch.  Sub-millisecond
    precision is truncated.

    """
    assert dt.tzinfo is not None and dt.utcoffset() is not None, \
        "Expected a timezone-aware datetime, not %r" % ( dt, )
    delta			= dt - EPOCH
    return ( delta.days * 86400 + delta.seconds ) * 1000 + delta.microseconds // 1000


class InvalidInstant( ValueError ):
    pass


# The instants representable as a datetime in every zone; a day within datetime's year 1 - 9999 range
MIN_MS				= epoch_ms( datetime.datetime( 1, 1, 2, tzinfo=pytz.utc ))
MAX_MS				= epoch_ms( datetime.datetime( 9999, 12, 31, tzinfo=pytz.utc ))

def checked( ms ):
    """Return the instant 'ms', or raise InvalidInstant if it is beyond the representable range."""
    if not MIN_MS <= ms <= MAX_MS:
        raise InvalidInstant( "Invalid instant of %r milliseconds; must be within [%d, %d]" % (
            ms, MIN_MS, MAX_MS ))
    return ms


def localize( naive, zone=None ):
    """Attach the zone to a naive civil datetime.  Times skipped by a forward transition (eg. 02:30 on
    the day DST begins) are interpreted using the offset in effect before the transition, and so land
    after it (eg. 03:30).  Times repeated by a backward transition resolve to the earlier instant.

    """
    tzinfo			= timezone_info( zone )
    if not hasattr( tzinfo, 'localize' ):
        return naive.replace( tzinfo=tzinfo )
    try:
        return tzinfo.localize( naive, is_dst=None )
    except pytz.AmbiguousTimeError:
        log.trace( "%s: %s is ambiguous; using earlier instant", tzinfo, naive )
        return tzinfo.localize( naive, is_dst=True )
    except pytz.NonExistentTimeError:
        log.trace( "%s: %s does not exist; using offset before transition", tzinfo, naive )
        return tzinfo.normalize( tzinfo.localize( naive, is_dst=False ))


def _offset_minutes( dt ):
    return int( dt.utcoffset().total_seconds() // 60 )


def offset_label( dt ):
    """The short offset label of an aware datetime: 'UTC' in a UTC zone, else 'GMT', 'GMT-8' or
    'GMT+5:30'.

    """
    minutes			= _offset_minutes( dt )
    if minutes == 0:
        return 'UTC' if dt.tzname() in _utc_names else 'GMT'
    sign			= '-' if minutes < 0 else '+'
    hours,mins			= divmod( abs( minutes ), 60 )
    if mins:
        return "GMT%s%d:%02d" % ( sign, hours, mins )
    return "GMT%s%d" % ( sign, hours )


_offset_re			= re.compile( r"^(?:UTC|GMT)?(?:([+-])(\d{1,2})(?::?(\d{2}))?)?$" )

def parse_offset( label ):
    """Convert an offset label like 'GMT-8', 'GMT+5:30', '-08:00', '+0530', 'UTC' or 'Z' into signed
    minutes east of UTC.

    """
    term			= str( label ).strip()
    if term == 'Z':
        return 0
    match			= _offset_re.match( term )
    if not term or not match:
        raise ValueError( "Invalid offset %r; must be [UTC|GMT][+|-]h[[:]mm] or Z" % ( label, ))
    sign,hours,mins		= match.groups()
    if sign is None:
        return 0
    offset			= int( hours ) * 60 + int( mins or 0 )
    return -offset if sign == '-' else offset


def format_offset( minutes, sep=':' ):
    """Convert signed minutes east of UTC into '+HH:MM' or '-HH:MM'"""
    hours,mins			= divmod( abs( int( minutes )), 60 )
    return "%s%02d%s%02d" % ( '-' if minutes < 0 else '+', hours, sep, mins )


def resolve_fields( ms, zone=None ):
    """Return the calendar parts of instant 'ms' in the zone (default: host local zone)."""
    dt				= civil( ms, zone )
    return parts(
        year		= "%04d" % dt.year,
        month		= "%02d" % dt.month,
        day		= "%02d" % dt.day,
        hour		= "%02d" % dt.hour,
        minute		= "%02d" % dt.minute,
        second		= "%02d" % dt.second,
        weekday		= WEEKDAYS[dt.weekday()],
        month_long	= MONTHS[dt.month - 1],
        offset_label	= offset_label( dt ),
    )


def resolve_offset_hours( ms, zone=None ):
    """The zone's UTC offset at instant 'ms', in signed whole hours (truncated toward zero, so a
    -3:30 offset is -3).

    """
    return int( _offset_minutes( civil( ms, zone )) / 60 )
