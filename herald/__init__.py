__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'herald'
__author__ = 'Eiko Reishin (影皇嶺臣)'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .arguments import *
from .dynamic import *
from .faults import *
from .interpreter import *
from .prompts import *
from .repository import *
from .schemes import *

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
    "__path__",
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the argument model
__all__ += arguments.__all__  # type: ignore[attr-defined]
# Load the exposed API of the dynamic values
__all__ += dynamic.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the interpreter
__all__ += interpreter.__all__  # type: ignore[attr-defined]
# Load the exposed API of the prompts
__all__ += prompts.__all__  # type: ignore[attr-defined]
# Load the exposed API of the repository
__all__ += repository.__all__  # type: ignore[attr-defined]
# Load the exposed API of the scheme compiler
__all__ += schemes.__all__  # type: ignore[attr-defined]
