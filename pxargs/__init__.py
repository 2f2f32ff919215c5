"""
pxargs: declarative command-line descriptors.

Register Flag, Value and MultiValue descriptors on a CommandLine, parse a token
sequence once, then read each descriptor's value and validity.

    >>> line = CommandLine("tool")
    >>> count = line.add_value("count", int).set_tag("-c").set_default(1)
    >>> line.parse(["-c", "3"]).is_valid(), count.get_value()
    (True, 3)

Unset is exported so callers can tell "no default" apart from a None default.
"""
__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'pxargs'
__author__ = 'pxargs contributors'
__license__ = 'MIT'
__version__ = "0.1.0"

from .arguments import *
from .commandline import *
from .faults import *
from .utils import Unset

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Mirrors __version__.
version_info = VersionInfo(*map(int, __version__.split(".")), "final", 0, "")

__all__ = (
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info",
    "Unset",
)

__all__ += arguments.__all__  # type: ignore[attr-defined]
__all__ += commandline.__all__  # type: ignore[attr-defined]
__all__ += faults.__all__  # type: ignore[attr-defined]
