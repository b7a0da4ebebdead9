from setuptools import setup

import os

HERE				= os.path.dirname( os.path.abspath( __file__ ))

__version__			= None
__version_info__		= None
exec( open( os.path.join( HERE, 'version.py' ), 'r' ).read() )

console_scripts			= [
    'datetz		= datetz.main:main',
]

entry_points			= {
    'console_scripts': 		console_scripts,
}

def requirements( name ):
    # Remove whitespace, elide blank lines and comments
    return list(
        ''.join( r.split() )
        for r in open( os.path.join( HERE, name )).readlines()
        if r.strip() and not r.strip().startswith( '#' )
    )

install_requires		= requirements( "requirements.txt" )
tests_require			= requirements( "requirements-tests.txt" )

extras_require			= {
    'tests':			tests_require,
}

package_dir			= {
    "datetz":			".",
}

long_description		= """\
Datetz provides a timezone-aware instant: an absolute time in milliseconds since
the UNIX epoch, tagged with an IANA timezone name.  Its calendar fields (year,
month, date, hour, ...) read and write as they appear in that zone, calendar
arithmetic (days, months, years) preserves the wall-clock time across Daylight
Saving Time transitions, and instants render via a simple template language
(eg. 'dddd, MMMM D YYYY h:mm aa').

Durations between instants, or of quantities of fixed-length units, may be
converted between units and rendered in words (eg. '1 month', '3 d').
"""

classifiers			= [
    "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
    "License :: Other/Proprietary License",
    "Programming Language :: Python :: 3",
    "Development Status :: 5 - Production/Stable",
    "Intended Audience :: Developers",
    "Environment :: Console",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

setup(
    name			= "datetz",
    version			= __version__,
    install_requires		= install_requires,
    extras_require		= extras_require,
    packages			= list( package_dir.keys() ),
    package_dir			= package_dir,
    zip_safe			= False,
    entry_points		= entry_points,
    author			= "Perry Kundert",
    author_email		= "perry@hardconsulting.com",
    description			= "Timezone-aware date/time values, DST-correct calendar arithmetic and durations",
    long_description		= long_description,
    license			= "Dual License; GPLv3 and Proprietary",
    keywords			= "datetime timezone DST calendar duration format",
    url				= "https://github.com/pjkundert/datetz",
    classifiers			= classifiers,
)
