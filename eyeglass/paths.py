"""Include path resolution.

Turns an ``includePaths`` value (a list of directories, a delimiter-joined
string, or nothing at all) into the ordered list of absolute directories
the compiler searches. With no explicit value the ``SASS_PATH``
environment variable supplies the default.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Iterable, List, Mapping, Optional, Union

logger = logging.getLogger(__name__)

__all__ = [
    "SASS_PATH_ENV",
    "path_delimiter",
    "split_path_list",
    "resolve_include_paths",
]

SASS_PATH_ENV = "SASS_PATH"

PathSource = Union[str, os.PathLike, Iterable[Any], None]


def path_delimiter(platform: Optional[str] = None) -> str:
    """Return the path-list separator for ``platform`` (default: this host)."""
    if platform is None:
        return os.pathsep
    return ";" if platform.lower().startswith("win") else ":"


def split_path_list(value: str, delimiter: Optional[str] = None) -> List[str]:
    """Split a delimiter-joined path list, dropping empty segments."""
    delimiter = delimiter or path_delimiter()
    return [segment for segment in value.split(delimiter) if segment.strip()]


def _as_text(entry: Any) -> str:
    try:
        text = os.fspath(entry)
    except TypeError:
        return str(entry)
    if isinstance(text, bytes):
        return os.fsdecode(text)
    return text


def _absolute(entry: str, base_dir: str) -> str:
    return os.path.normpath(os.path.join(base_dir, entry))


def resolve_include_paths(
    source: PathSource,
    base_dir: Union[str, os.PathLike, None] = None,
    *,
    env_var: str = SASS_PATH_ENV,
    delimiter: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    cwd: Optional[str] = None,
) -> List[str]:
    """Resolve include paths to absolute, de-duplicated directories.

    Args:
        source: Explicit include paths as a list or a delimiter-joined
            string. ``None`` falls back to the ``env_var`` environment
            variable.
        base_dir: Directory explicit relative entries resolve against.
            Defaults to ``cwd``.
        env_var: Environment variable holding the default path list.
        delimiter: Path-list separator; defaults to the host's.
        environ: Environment mapping (defaults to ``os.environ``).
        cwd: Working directory (defaults to ``os.getcwd()``). Environment
            entries always resolve against it.

    Returns:
        Absolute directories in lookup order; the first occurrence of a
        duplicate keeps its position. Never None.
    """
    delimiter = delimiter or path_delimiter()
    cwd = os.path.abspath(cwd) if cwd is not None else os.getcwd()

    if source is None:
        env = os.environ if environ is None else environ
        entries = split_path_list(env.get(env_var) or "", delimiter)
        base = cwd
        logger.debug("Using %s for include paths: %s", env_var, entries)
    else:
        if isinstance(source, (str, bytes, os.PathLike)):
            entries = split_path_list(_as_text(source), delimiter)
        elif isinstance(source, Iterable):
            entries = [_as_text(entry) for entry in source]
            entries = [entry for entry in entries if entry.strip()]
        else:
            entries = [_as_text(source)]
        base = _absolute(_as_text(base_dir), cwd) if base_dir is not None else cwd

    resolved: List[str] = []
    seen = set()
    for entry in entries:
        path = _absolute(entry, base)
        if path in seen:
            continue
        seen.add(path)
        resolved.append(path)
    return resolved
