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

__all__				= [ "render", "render_default", "tokens" ]

import re

from .			import zone

"""
datetz.format -- Render calendar parts via a template of tokens

    YYYY - Full year		YY   - 2-digit year
    MMMM - Month (full)		MMM  - Month (abv)
    MM   - Month 2-digit	M    - Month (not when followed by a letter)
    dddd - Weekday (full)	ddd  - Weekday (abv)
    DD   - 2 digit date		D    - date
    HH   - hour (24h) 2-digit	H    - hour (24h)
    hh   - hour (12h) 2-digit	h    - hour (12h); hour%12, so midnight and noon are 0
    mm   - minute 2-digit	m    - minute
    ss   - second 2-digit	s    - second
    aa   - day period (am/pm)	a    - day period (a/p)

Any other text is copied literally.  The template is scanned once, left to right, trying the longer
tokens first; substituted text is never rescanned.

"""

tokens				= ( 'YYYY', 'YY', 'MMMM', 'MMM', 'MM', 'M(?![a-zA-Z])', 'dddd', 'ddd',
                                    'DD', 'D', 'HH', 'H', 'hh', 'h', 'mm', 'm', 'ss', 's', 'aa', 'a' )
token_re			= re.compile( '|'.join( tokens ))


def render_default( fields ):
    """YYYY-MM-DDTHH:MM:SS+HH:MM, or YYYY-MM-DDTHH:MM:SSZ in UTC"""
    if fields.offset_label == 'UTC':
        suffix			= 'Z'
    else:
        suffix			= zone.format_offset( zone.parse_offset( fields.offset_label ))
    return "%s-%s-%sT%s:%s:%s%s" % (
        fields.year, fields.month, fields.day, fields.hour, fields.minute, fields.second, suffix )


def render( fields, template=None ):
    """Render the zone.parts 'fields' using the template, or the default ISO 8601 format."""
    if not template:
        return render_default( fields )

    hour			= int( fields.hour )
    values			= {
        'YYYY':		fields.year,
        'YY':		fields.year[2:],
        'MMMM':		fields.month_long,
        'MMM':		fields.month_long[:3],
        'MM':		fields.month,
        'M':		str( int( fields.month )),
        'dddd':		fields.weekday,
        'ddd':		fields.weekday[:3],
        'DD':		fields.day,
        'D':		str( int( fields.day )),
        'HH':		fields.hour,
        'H':		str( hour ),
        'hh':		"%02d" % ( hour % 12 ),
        'h':		str( hour % 12 ),
        'mm':		fields.minute,
        'm':		str( int( fields.minute )),
        'ss':		fields.second,
        's':		str( int( fields.second )),
        'aa':		'am' if hour < 12 else 'pm',
        'a':		'a' if hour < 12 else 'p',
    }
    return token_re.sub( lambda match: values[match.group( 0 )], template )
