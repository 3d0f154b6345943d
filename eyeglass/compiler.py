"""Hand-off to the Sass compiler.

Eyeglass does not compile stylesheets. It passes the canonical options to
an object implementing :class:`SassCompiler`. :class:`LibsassCompiler`
adapts them to ``sass.compile`` from the optional ``libsass`` package.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Protocol

from eyeglass.errors import CompilerUnavailableError, ConfigurationError
from eyeglass.options import sass_options_for_compiler

logger = logging.getLogger(__name__)

__all__ = ["SassCompiler", "LibsassCompiler", "to_libsass_kwargs", "render"]

# canonical option -> sass.compile keyword
_LIBSASS_KEYWORDS = {
    "includePaths": "include_paths",
    "outputStyle": "output_style",
    "precision": "precision",
    "sourceComments": "source_comments",
    "sourceMapContents": "source_map_contents",
    "sourceMapEmbed": "source_map_embed",
    "omitSourceMapUrl": "omit_source_map_url",
    "sourceMapRoot": "source_map_root",
}


class SassCompiler(Protocol):
    def compile(self, options: Mapping[str, Any]) -> str: ...


def to_libsass_kwargs(options: Mapping[str, Any]) -> Dict[str, Any]:
    """Translate canonical options into ``sass.compile`` keyword arguments.

    Raises:
        ConfigurationError: If neither ``data`` nor ``file`` is set.
    """
    sass_options = sass_options_for_compiler(options)
    kwargs: Dict[str, Any] = {}

    if sass_options.get("data") is not None:
        kwargs["string"] = sass_options["data"]
        kwargs["indented"] = bool(sass_options.get("indentedSyntax", False))
    elif sass_options.get("file") is not None:
        kwargs["filename"] = sass_options["file"]
    else:
        raise ConfigurationError(
            "Nothing to compile",
            field="data",
            suggestion="Pass either 'data' or 'file' in the sass options.",
        )

    for option, keyword in _LIBSASS_KEYWORDS.items():
        if sass_options.get(option) is not None:
            kwargs[keyword] = sass_options[option]
    if "include_paths" in kwargs:
        kwargs["include_paths"] = list(kwargs["include_paths"])
    return kwargs


class LibsassCompiler:
    """Compile through libsass-python's ``sass.compile``."""

    backend = "libsass"

    def compile(self, options: Mapping[str, Any]) -> str:
        try:
            import sass
        except ImportError as exc:
            raise CompilerUnavailableError(
                "libsass is not installed",
                backend=self.backend,
                cause=exc,
            ) from exc

        kwargs = to_libsass_kwargs(options)
        logger.debug("Compiling with libsass (%s)", ", ".join(sorted(kwargs)))
        return sass.compile(**kwargs)


def render(
    options: Mapping[str, Any],
    compiler: Optional[SassCompiler] = None,
) -> str:
    """Compile ``options`` with ``compiler`` (libsass by default)."""
    compiler = compiler or LibsassCompiler()
    return compiler.compile(options)
