#! /usr/bin/env python3

import os
import sys

this_dir = os.path.dirname(os.path.abspath(__file__))
sys.path = [os.path.join(this_dir, "lib")] + sys.path

from setuptools import setup  # noqa: E402

if sys.version_info < (3, 8, 0):
    print("ERROR: gprefs requires Python >= 3.8.0")
    sys.exit(1)

import importlib.util  # noqa: E402
import importlib.machinery  # noqa: E402

spec = importlib.machinery.PathFinder().find_spec("gprefs", [os.path.join(this_dir, "lib")])
gprefs = importlib.util.module_from_spec(spec)
spec.loader.exec_module(gprefs)

VERSION = gprefs.VERSION

NAME = "gprefs"

DESC = "Typed access to hierarchical desktop preference stores"

LONG_DESC = """gprefs gives an application typed access to its preferences kept in a
GConf-style hierarchical configuration store.

Preferences are addressed by a section and a name, which gprefs turns into
key paths below /apps/<application>/, with their schemas below
/schemas/apps/<application>/. On top of that it offers:
- bool, int, float, string, list and schema getters and setters
- change notifications per section, keyed by the listening object
- listing and unsetting whole sections
- conversion between enumeration values and their stored nicknames
- memory, ini file, sqlite and GConf daemon backends
- a small command line tool, python -m gprefs"""

CLASSIFIERS = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications :: GTK",
    "Intended Audience :: Developers",
    "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3.8",
    "Programming Language :: Python :: 3.9",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Topic :: Desktop Environment :: Gnome",
    "Topic :: Software Development :: Libraries",
]

PACKAGES = [
    "gprefs",
    "gprefs.Clients",
    "gprefs.System",
]

setup(
    name=NAME,
    version=VERSION,
    author="gprefs team",
    classifiers=CLASSIFIERS,
    keywords="python gconf preferences configuration settings gtk",
    description=DESC,
    long_description=LONG_DESC,
    license="GPL3",
    python_requires=">=3.8",
    install_requires=[
        "SQLAlchemy>=2",
    ],
    extras_require={
        "gobject": [
            "PyGObject",
        ],
    },
    package_dir={"": "lib"},
    packages=PACKAGES,
    entry_points={
        "console_scripts": [
            "gprefs = gprefs.__main__:main",
        ],
    },
)
