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

import functools
import logging
import math
import time

__author__                      = "Perry Kundert"
__email__                       = "perry@hardconsulting.com"
__copyright__                   = "Copyright (c) 2021 Hard Consulting Corporation"
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

__all__				= [ "log_cfg", "type_str_base", "mutexmethod", "timer", "now_ms",
                                    "isfinite", "round_half_up", "reprargs", "logresult" ]

"""
Miscellaneous functionality used by various other modules.
"""

log_cfg				= {
    "level":	logging.WARNING,
    "datefmt":	'%m-%d %H:%M:%S',
    "format":	'%(asctime)s.%(msecs).03d %(name)-8.8s %(levelname)-8.8s %(funcName)-10.10s %(message)s',
}

# The base class of string types
type_str_base			= str

#
# misc.mutexmethod -- apply a synchronization mutex around a method invocation
#
def mutexmethod( mutex='lock', blocking=True ):
    """A method synchronization decorator.  Defaults to acquire the mutex attribute (default:
    '<self>.lock') on the class/instance of the bound 'method' during its invocation.  If not
    'blocking', will raise an AssertionError if the mutex cannot be acquired instead of blocking.

    """
    def decorator( method ):
        @functools.wraps( method )
        def wrapper( *args, **kwds ):
            # Get the class method's class, or the instance method's self argument, then find mutex
            lock		= getattr( getattr( method, '__self__', args[0] ), mutex )
            assert lock.acquire( blocking ), "Lock is held"
            try:
                return method( *args, **kwds )
            finally:
                lock.release()
        return wrapper
    return decorator


#
# misc.timer	-- wall-clock seconds since the UNIX epoch
# misc.now_ms	-- wall-clock integer milliseconds since the UNIX epoch
#
timer				= time.time

def now_ms():
    return int( round_half_up( timer() * 1000 ))

#
# misc.isfinite	-- True iff the provided value is neither nan nor inf
# misc.round_half_up -- round to nearest integer, .5 toward +inf
#
#     Python's round() uses banker's rounding (round( 2.5 ) == 2); counts of calendar units and
# week numbers round .5 up, always (round_half_up( -2.5 ) == -2).
#
isfinite			= math.isfinite

def round_half_up( value ):
    return int( math.floor( value + 0.5 ))


#
# logging.normal	-- regular program output
# logging.detail	-- detail in addition to normal output
# logging.trace		-- logs less relevant than debug (eg. calendar shift arithmetic)
#
#     Augment logging with some new levels, between INFO and WARNING, used for normal/detail output.
#
#     Logging finds the caller by looking for the first frame whose co_filename is *not* the
# logger source file.  So, our methods must appear as if they originated from logging._srcfile.
#
#      .FATAL 		       == 50
#      .ERROR 		       == 40
#      .WARNING 	       == 30
logging.NORMAL			= logging.INFO+5
logging.DETAIL			= logging.INFO+3
#      .INFO    	       == 20
#      .DEBUG    	       == 10
logging.TRACE			= logging.NOTSET+5
#      .NOTSET    	       == 0

logging.addLevelName( logging.NORMAL,	'NORMAL' )
logging.addLevelName( logging.DETAIL,	'DETAIL' )
logging.addLevelName( logging.TRACE,	'TRACE' )

def change_function( function, **kwds ):
    """Change a function with one or more changed co_... attributes, eg.:

            change_function( func, co_filename="new/file/path.py" )

    will change the func's co_filename to the specified string.

    """
    function.__code__		= function.__code__.replace( **kwds )

def __normal( self, msg, *args, **kwargs ):
    if self.isEnabledFor( logging.NORMAL ):
        self._log( logging.NORMAL, msg, args, **kwargs )

def __detail( self, msg, *args, **kwargs ):
    if self.isEnabledFor( logging.DETAIL ):
        self._log( logging.DETAIL, msg, args, **kwargs )

def __trace( self, msg, *args, **kwargs ):
    if self.isEnabledFor( logging.TRACE ):
        self._log( logging.TRACE, msg, args, **kwargs )

if logging._srcfile:
    change_function( __normal, co_filename=logging._srcfile )
    change_function( __detail, co_filename=logging._srcfile )
    change_function( __trace, co_filename=logging._srcfile )

logging.Logger.normal		= __normal
logging.Logger.detail		= __detail
logging.Logger.trace		= __trace


#
# reprargs(args,kwds)	-- log args/kwds in sensible fashion
# @logresult(prefix,log)-- decorator to log results/exception of function
#
def reprargs( *args, **kwds ):
    return ", ".join(   [ repr( x ) for x in args ]
                      + [ "%s=%r" % ( k, v ) for k,v in kwds.items() ])


def logresult( prefix=None, log=None, log_level=logging.DEBUG, exc_level=logging.WARNING ):
    """Log the result (or the Exception raised) of each invocation of the decorated function."""
    def decorator( function ):
        @functools.wraps( function )
        def wrapper( *args, **kwds ):
            logger		= log or logging.getLogger()
            try:
                result		= function( *args, **kwds )
                if logger.isEnabledFor( log_level ):
                    logger.log( log_level, "%s-->%r",
                        prefix or function.__name__+'('+reprargs( *args, **kwds )+')', result )
                return result
            except Exception as exc:
                if logger.isEnabledFor( exc_level ):
                    logger.log( exc_level, "%s-->%r",
                        prefix or function.__name__+'('+reprargs( *args, **kwds )+')', exc )
                raise
        return wrapper
    return decorator
