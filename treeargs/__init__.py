__title__ = 'treeargs'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .faults import *
from .grammar import *
from .parser import *
from .store import *
from .usage import *
from .values import *

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
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of every layer
__all__ += faults.__all__  # type: ignore[attr-defined]
__all__ += grammar.__all__  # type: ignore[attr-defined]
__all__ += parser.__all__  # type: ignore[attr-defined]
__all__ += store.__all__  # type: ignore[attr-defined]
__all__ += usage.__all__  # type: ignore[attr-defined]
__all__ += values.__all__  # type: ignore[attr-defined]
