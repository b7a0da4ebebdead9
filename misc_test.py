import logging
import threading

import pytest

from .misc import (
    round_half_up, isfinite, now_ms, timer, mutexmethod, reprargs, logresult,
)


def test_round_half_up():
    assert round_half_up(  2.5 ) ==  3
    assert round_half_up(  1.5 ) ==  2
    assert round_half_up( -2.5 ) == -2
    assert round_half_up( -2.6 ) == -3
    assert round_half_up(  0.49999 ) == 0
    assert round_half_up(  7 ) ==  7
    assert isinstance( round_half_up( 1.0 ), int )


def test_isfinite():
    assert isfinite( 0 )
    assert isfinite( -1.5e300 )
    assert not isfinite( float( 'nan' ))
    assert not isfinite( float( 'inf' ))
    assert not isfinite( float( '-inf' ))


def test_now_ms():
    before			= timer()
    ms				= now_ms()
    after			= timer()
    assert isinstance( ms, int )
    assert before * 1000 - 1 <= ms <= after * 1000 + 1


def test_logging_levels():
    assert logging.WARNING > logging.NORMAL > logging.DETAIL > logging.INFO
    assert logging.NOTSET < logging.TRACE < logging.DEBUG
    assert logging.getLevelName( logging.DETAIL ) == 'DETAIL'
    for method in ( 'normal', 'detail', 'trace' ):
        assert callable( getattr( logging.getLogger(), method ))


def test_logging_caller( caplog ):
    """The augmented log methods report their caller, not the logging machinery"""
    log				= logging.getLogger( 'datetz.test' )
    with caplog.at_level( logging.TRACE, logger='datetz.test' ):
        log.detail( "Detail %d", 1 )
        log.trace( "Trace %s", 'two' )
    assert [ r.getMessage() for r in caplog.records ] == [ 'Detail 1', 'Trace two' ]
    assert all( r.funcName == 'test_logging_caller' for r in caplog.records )
    assert caplog.records[0].levelname == 'DETAIL'


def test_mutexmethod():

    class C( object ):
        _cls_lock		= threading.Lock()
        def __init__( self ):
            self._ins_lock	= threading.Lock()

        @classmethod
        @mutexmethod( '_cls_lock', blocking=False )
        def clsmethod_lock_cls( cls, f=None ):
            if f:
                return f()

        @mutexmethod( '_cls_lock', blocking=False )
        def insmethod_lock_cls( self, f=None ):
            if f:
                return f()

        @mutexmethod( '_ins_lock', blocking=False )
        def insmethod_lock_ins( self, f=None ):
            if f:
                return f()

    c				= C()

    # Same lock; should raise Exception (since blocking=False used above)
    assert c.insmethod_lock_cls() is None
    with pytest.raises( AssertionError ) as exc:
        c.insmethod_lock_cls( c.insmethod_lock_cls )
    assert "Lock is held" in str( exc.value )

    assert c.clsmethod_lock_cls() is None
    with pytest.raises( AssertionError ):
        c.clsmethod_lock_cls( c.clsmethod_lock_cls )

    # Different locks; should be fine, and the locks are released afterwards
    assert c.insmethod_lock_ins( c.clsmethod_lock_cls ) is None
    assert not C._cls_lock.locked() and not c._ins_lock.locked()
    assert C.clsmethod_lock_cls.__name__ == 'clsmethod_lock_cls'


def test_logresult( caplog ):
    log				= logging.getLogger( 'datetz.test' )

    @logresult( log=log, log_level=logging.INFO )
    def divide( a, b=1 ):
        return a // b

    assert reprargs( 1, 'a', b=2 ) == "1, 'a', b=2"
    with caplog.at_level( logging.INFO, logger='datetz.test' ):
        assert divide( 7, b=2 ) == 3
        with pytest.raises( ZeroDivisionError ):
            divide( 1, b=0 )
    messages			= [ r.getMessage() for r in caplog.records ]
    assert messages[0] == "divide(7, b=2)-->3"
    assert messages[1].startswith( "divide(1, b=0)-->ZeroDivisionError" )
    assert caplog.records[1].levelno == logging.WARNING
