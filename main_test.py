import os

import pytest

# For the purposes of these tests, we assume the Canada/Mountain timezone is the host's local zone
os.environ['TZ']		= "Canada/Mountain"

from .			import defaults
from .main		import main
from .misc		import now_ms


@pytest.fixture( autouse=True )
def no_default_timezone( monkeypatch ):
    monkeypatch.delenv( defaults.config_env, raising=False )
    defaults.set_timezone( None )
    yield
    defaults.set_timezone( None )


def test_main_format( capsys ):
    assert main( [ '-z', 'US/Pacific', '1615712400000' ] ) == 0
    assert capsys.readouterr().out == '2021-03-14T01:00:00-08:00\n'

    assert main( [ '-z', 'US/Pacific', '-a', '1', 'day', '-f', 'YYYY-MM-DD HH:mm', '1615712400000' ] ) == 0
    assert capsys.readouterr().out == '2021-03-15 01:00\n'

    assert main( [ '-z', 'UTC', '-a', '1', 'month', '-a', '-2', 'hours', '2021-01-31 12:00' ] ) == 0
    assert capsys.readouterr().out == '2021-03-03T10:00:00Z\n'

    assert main( [ '-d', 'Asia/Kolkata', '0' ] ) == 0
    assert capsys.readouterr().out == '1970-01-01T05:30:00+05:30\n'

    assert main( [ '-z', 'UTC', '-f', 'YYYY' ] ) == 0
    assert int( capsys.readouterr().out ) >= 2021


def test_main_since( capsys ):
    then			= now_ms() - 3 * defaults.day - defaults.hour
    assert main( [ '-s', '-H', '-z', 'UTC', str( then ) ] ) == 0
    assert capsys.readouterr().out == '3 days\n'

    assert main( [ '--since', '-z', 'UTC', str( then ) ] ) == 0
    assert capsys.readouterr().out.startswith( '3d 01h 00m ' )


def test_main_config( tmp_path, capsys ):
    cfg				= tmp_path / 'datetz.cfg'
    cfg.write_text( "[datetz]\ntimezone = America/St_Johns\n" )
    assert main( [ '-c', str( cfg ), '1609459200000' ] ) == 0
    assert capsys.readouterr().out == '2020-12-31T20:30:00-03:30\n'


def test_main_invalid( capsys ):
    assert main( [ '-z', 'Nowhere/Special', '0' ] ) == 1
    assert main( [ '-d', 'Nowhere/Special', '0' ] ) == 1
    assert main( [ '-z', 'UTC', 'not a date' ] ) == 1
    assert main( [ '-z', 'UTC', '-a', 'x', 'days', '0' ] ) == 1
    assert main( [ '-z', 'UTC', '-a', '9000', 'years', '0' ] ) == 1
    assert main( [ '-z', 'UTC', '100000000000000000000' ] ) == 1
    assert capsys.readouterr().out == ''
