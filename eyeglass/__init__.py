"""Eyeglass: sass options assembly with module include paths.

Resolves where stylesheet modules live (``includePaths`` and the
``SASS_PATH`` default), assembles a single options mapping for the Sass
compiler, and keeps accepting the pre-0.8 option layout and entry points
while reporting them as deprecated.

Usage:
    from eyeglass import Eyeglass

    eyeglass = Eyeglass({"eyeglass": {"root": "/srv/app"}})
    options = eyeglass.options
"""

from eyeglass.core import Eyeglass, LifecycleState, decorate
from eyeglass.deprecation import (
    DeprecationEmitter,
    DeprecationRecord,
    EyeglassDeprecationWarning,
    StreamSink,
    WarningsSink,
)
from eyeglass.errors import (
    CompilerUnavailableError,
    ConfigurationError,
    EyeglassError,
    ModuleVersionError,
)
from eyeglass.options import NAMESPACE, assemble
from eyeglass.paths import SASS_PATH_ENV, resolve_include_paths
from eyeglass.versions import VERSION

__version__ = VERSION

__all__ = [
    "VERSION",
    "NAMESPACE",
    "SASS_PATH_ENV",
    "Eyeglass",
    "LifecycleState",
    "decorate",
    "assemble",
    "resolve_include_paths",
    "DeprecationEmitter",
    "DeprecationRecord",
    "EyeglassDeprecationWarning",
    "StreamSink",
    "WarningsSink",
    "EyeglassError",
    "ConfigurationError",
    "ModuleVersionError",
    "CompilerUnavailableError",
]
