"""Environment variable utilities.

Provides expansion of ${VAR_NAME} patterns in option values and loading
of .env files, so defaults such as ``SASS_PATH`` can live next to a
project.

Uses python-dotenv for .env file loading.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from dotenv import load_dotenv

__all__ = ["expand_env_vars", "expand_options", "load_env_file"]

# ${VAR_NAME}, ${VAR_NAME:default} or $VAR_NAME
ENV_VAR_PATTERN = re.compile(
    r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::([^}]*))?\}|\$([A-Za-z_][A-Za-z0-9_]*)"
)


def load_env_file(
    path: Optional[Union[str, Path]] = None,
    *,
    override: bool = False,
) -> bool:
    """Load environment variables from a .env file.

    Args:
        path: Path to .env file. If None, searches for .env in current
              directory and parent directories.
        override: If True, override existing environment variables.

    Returns:
        True if a .env file was found and loaded, False otherwise.
    """
    return load_dotenv(dotenv_path=path, override=override)


def expand_env_vars(value: str, *, strict: bool = False) -> str:
    """Expand environment variables in a string.

    Supports ${VAR_NAME}, ${VAR_NAME:default} and $VAR_NAME.

    Args:
        value: String potentially containing env var references
        strict: If True, raise KeyError for missing variables without a
            default

    Returns:
        String with environment variables expanded

    Example:
        >>> os.environ["VENDOR_DIR"] = "vendor/sass"
        >>> expand_env_vars("${VENDOR_DIR}:${EXTRA_DIR:lib}")
        'vendor/sass:lib'
    """

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1) or match.group(3)
        default = match.group(2)
        env_value = os.environ.get(var_name)
        if env_value is not None:
            return env_value
        if default is not None:
            return default
        if strict:
            raise KeyError(f"Environment variable not set: {var_name}")
        return str(match.group(0))

    return ENV_VAR_PATTERN.sub(replacer, value)


def expand_options(options: Mapping[str, Any], *, strict: bool = False) -> Dict[str, Any]:
    """Recursively expand environment variables in an options mapping.

    Returns a new dictionary; ``options`` is left untouched.
    """
    return {key: _expand_value(value, strict) for key, value in options.items()}


def _expand_value(value: Any, strict: bool) -> Any:
    if isinstance(value, str):
        return expand_env_vars(value, strict=strict)
    if isinstance(value, Mapping):
        return expand_options(value, strict=strict)
    if isinstance(value, list):
        return [_expand_value(item, strict) for item in value]
    return value
