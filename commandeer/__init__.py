"""
commandeer: declarative command-line argument parsing.

Definitions (argument(), option(), Command, Program) are validated as soon as
they are built; parse() then matches a token list against them and returns a
ParseResult, or raises a ParseError carrying the partial result.

Limitation: a value starting with '-' (a negative number, a path like '-x')
is always read as a flag. It is never captured by a positional or variadic
slot, and there is no '--' terminator.
"""
__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'commandeer'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .arguments import *
from .commands import *
from .extraction import *
from .faults import *
from .parsing import *
from .suggestions import *
from .tokens import *
from .validation import *
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
    "__path__",
    "__title__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the definitions
__all__ += arguments.__all__  # type: ignore[attr-defined]
# Load the exposed API of the commands
__all__ += commands.__all__  # type: ignore[attr-defined]
# Load the exposed API of the typed extraction
__all__ += extraction.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the matcher
__all__ += parsing.__all__  # type: ignore[attr-defined]
# Load the exposed API of the suggestions
__all__ += suggestions.__all__  # type: ignore[attr-defined]
# Load the exposed API of the token stream
__all__ += tokens.__all__  # type: ignore[attr-defined]
# Load the exposed API of the validator
__all__ += validation.__all__  # type: ignore[attr-defined]
# Load the exposed API of the parsed values
__all__ += values.__all__  # type: ignore[attr-defined]
