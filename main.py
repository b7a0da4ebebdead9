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

__all__				= [ "main" ]

import argparse
import logging
import sys

import pytz

from .			import defaults, misc
from .duration		import duration
from .instant		import instant, InvalidInstant

log				= logging.getLogger( __package__ )


def main( argv=None ):
    """Render an instant in a timezone, optionally after adding calendar or absolute units.

    """
    ap				= argparse.ArgumentParser(
        description = "Render timezone-aware date/times, and compute durations",
        formatter_class = argparse.RawDescriptionHelpFormatter,
        epilog = """\

The timestamp may be milliseconds since the UNIX epoch, or a date/time string
(optionally followed by a zone name), eg:

    datetz -z US/Pacific 1615712400000
    datetz -z US/Pacific -a 1 day -f 'dddd, MMMM D YYYY h:mm aa' '2021-03-13 09:00'
    datetz --since --humanize 2020-01-01T00:00:00Z

Without a --timezone, the default timezone from --default-timezone, the
DATETZ_TIMEZONE environment variable or a datetz.cfg configuration file is
used; failing those, the host's local timezone. """ )

    ap.add_argument( '-v', '--verbose', action="count",
                     default=0,
                     help="Display logging information." )
    ap.add_argument( '-l', '--log',
                     help="Log file, if desired" )
    ap.add_argument( '-c', '--config', action="append",
                     default=None,
                     help="Configuration file(s) (default: %s)" % ( defaults.config_name ))
    ap.add_argument( '-z', '--timezone',
                     default=None,
                     help="Timezone to render the timestamp in (default: the default timezone)" )
    ap.add_argument( '-d', '--default-timezone',
                     default=None,
                     help="Process-wide default timezone" )
    ap.add_argument( '-a', '--add', nargs=2, action="append", metavar=('COUNT', 'UNIT'),
                     default=[],
                     help="Add a (-'ve) COUNT of ms, seconds, minutes, hours, days, weeks, months or years" )
    ap.add_argument( '-f', '--format',
                     default=None,
                     help="Format template, eg. 'YYYY-MM-DD HH:mm:ss' (default: ISO 8601)" )
    ap.add_argument( '-s', '--since', action='store_true',
                     help="Print the duration between the timestamp and now" )
    ap.add_argument( '-H', '--humanize', action='store_true',
                     help="Print the --since duration in words, eg. '1 month'" )
    ap.add_argument( 'timestamp', nargs="?",
                     default=None,
                     help="Milliseconds since the epoch, or a date/time string (default: now)" )

    args			= ap.parse_args( argv )

    # Set up logging level (-v...) and --log <file>
    levelmap 			= {
        0: logging.WARNING,
        1: logging.NORMAL,
        2: logging.DETAIL,
        3: logging.INFO,
        4: logging.DEBUG,
        }
    misc.log_cfg['level']	= ( levelmap[args.verbose]
                                    if args.verbose in levelmap
                                    else logging.DEBUG )
    if args.log:
        misc.log_cfg['filename'] = args.log

    logging.basicConfig( **misc.log_cfg )

    timestamp			= args.timestamp
    if timestamp is not None:
        try:
            timestamp		= int( timestamp )
        except ValueError:
            pass

    try:
        defaults.config_load( filenames=args.config )
        if args.default_timezone:
            defaults.set_timezone( args.default_timezone )
        if timestamp is None:
            when		= instant( None, args.timezone )
        else:
            when		= instant( timestamp, args.timezone )
        for count,unit in args.add:
            when.add( float( count ), unit )
            log.detail( "Added %s %s: %s", count, unit, when )
    except ( InvalidInstant, pytz.UnknownTimeZoneError, ValueError ) as exc:
        log.error( "Invalid timestamp, timezone or count: %s", exc )
        return 1

    if args.since:
        dur			= duration( when, instant() )
        print( dur.humanize() if args.humanize else dur.format() )
    else:
        print( when.format( args.format ))
    return 0


if __name__ == "__main__":
    sys.exit( main() )
