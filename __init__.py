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

from .version		import __version__, __version_info__
from .misc		import *	# installs logging.NORMAL, DETAIL, TRACE
from .			import defaults, zone
from .instant		import instant, tz, now, InvalidInstant
from .duration		import duration, elapsed
from .defaults		import get_timezone, set_timezone, config_load
