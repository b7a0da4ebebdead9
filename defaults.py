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


"""
datetz.defaults -- System-wide default (global) values

"""
__all__				= [ 'second', 'minute', 'hour', 'day', 'week', 'month', 'year',
                                    'unit_ms', 'absolute_threshold',
                                    'get_timezone', 'set_timezone',
                                    'config_name', 'config_section', 'config_env',
                                    'config_paths', 'config_load' ]

import configparser
import logging
import os
import threading

import pytz

from .misc		import mutexmethod, logresult

log				= logging.getLogger( __package__ )

# Fixed unit lengths in milliseconds.  Months and years are approximations (30 and 365 days), used
# only for durations; calendar arithmetic on instants uses real month/year lengths.
second				= 1000
minute				= 60 * second
hour				= 60 * minute
day				= 24 * hour		#         86,400,000
week				= 7 * day		#        604,800,000
month				= 30 * day		#      2,592,000,000
year				= 365 * day		#     31,536,000,000

unit_ms				= {
    'milliseconds':		1,
    'seconds':			second,
    'minutes':			minute,
    'hours':			hour,
    'days':			day,
    'weeks':			week,
    'months':			month,
    'years':			year,
}

# A duration operand with more milliseconds than this is an absolute instant (after 1970-04-26),
# not a small count of elapsed milliseconds.
absolute_threshold		= 10000000000


class _default_timezone( object ):
    """The process-wide default timezone, consulted by every instant constructed without an explicit
    zone.  Set it once during program initialization; None means the host's local zone.

    """
    name			= None
    lock			= threading.Lock()

    @classmethod
    @mutexmethod( 'lock' )
    def get( cls ):
        return cls.name

    @classmethod
    @mutexmethod( 'lock' )
    def set( cls, name ):
        if name is not None:
            pytz.timezone( name ) # raises pytz.UnknownTimeZoneError
        if name != cls.name:
            log.detail( "Default timezone: %r (was %r)", name, cls.name )
        cls.name		= name
        return name

def get_timezone():
    return _default_timezone.get()

def set_timezone( name ):
    return _default_timezone.set( name )


# Define the default paths used for configuration files, etc.
config_name			= 'datetz.cfg'	# Default Datetz configuration file
config_section			= 'datetz'	# [datetz] timezone = America/Edmonton
config_env			= 'DATETZ_TIMEZONE'

def config_paths( filename, extra=None ):
    """Yield the Datetz configuration search paths in *reverse* order of precedence (furthest or most
    general, to nearest or most specific).

    This is the order that is required by configparser; settings configured in "later" files
    override those in "earlier" ones.

    """
    yield os.path.join( os.path.dirname( __file__ ), filename )			# datetz installation dir
    yield os.path.join( os.getenv( 'APPDATA', os.sep + 'etc' ), filename )	# global app data dir, eg. /etc/
    yield os.path.join( os.path.expanduser( '~' ), '.datetz', filename )	# user dir, ~username/.datetz/name
    yield os.path.join( os.path.expanduser( '~' ), '.' + filename )		# user dir, ~username/.name
    for e in extra or []:							# any extra dirs...
        yield os.path.join( e, filename )
    yield filename								# current dir (most specific)



@logresult( log=log, log_level=logging.DETAIL )
def config_load( extra=None, filenames=None ):
    """Read the Datetz configuration files (or the supplied filenames), and install any configured
    default timezone.  A DATETZ_TIMEZONE environment variable overrides all configuration files.
    Returns the ConfigParser, which may be consulted for application-specific settings.

        [datetz]
        timezone = America/Edmonton  # default zone for instants lacking one

    """
    config			= configparser.ConfigParser(
        comment_prefixes=('#',), inline_comment_prefixes=('#',),
        allow_no_value=True, empty_lines_in_values=False,
        interpolation=configparser.ExtendedInterpolation() )
    if filenames is None:
        filenames		= list( config_paths( config_name, extra=extra ))
    loaded			= config.read( filenames )
    log.detail( "Config files loaded: %r", loaded )

    name			= os.environ.get( config_env )
    if not name and config.has_section( config_section ):
        name			= config[config_section].get( 'timezone' )
    if name:
        set_timezone( name.strip() )
    return config
