__title__ = 'signet'
__author__ = 'Eiko Reishin (影皇嶺臣)'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from . import blocks as _blocks, descriptors as _descriptors, signatures as _signatures
from . import faults as _faults, layout as _layout, commands as _commands

from .blocks import *
from .descriptors import *
from .signatures import *
from .faults import *
from .layout import *
from .commands import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the block extractor
__all__ += _blocks.__all__  # type: ignore[attr-defined]
# Load the exposed API of the descriptors
__all__ += _descriptors.__all__  # type: ignore[attr-defined]
# Load the exposed API of the signature compiler
__all__ += _signatures.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += _faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the layout
__all__ += _layout.__all__  # type: ignore[attr-defined]
# Load the exposed API of the commands
__all__ += _commands.__all__  # type: ignore[attr-defined]
