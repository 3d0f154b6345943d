"""YAML options file loader.

Lets a project keep its sass and eyeglass options in a YAML file:

    outputStyle: compressed
    includePaths:
      - ./vendor/sass
    eyeglass:
      root: ./
      ignoreDeprecations: "0.8.0"

The file holds a raw configuration, in either the canonical or the legacy
layout; it is validated for shape only and then handed to
:class:`eyeglass.Eyeglass` or :func:`eyeglass.options.assemble`.

Usage:
    from eyeglass import Eyeglass
    from eyeglass.config_loader import load_options_file

    eyeglass = Eyeglass(load_options_file("eyeglass.yaml"))
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, StrictStr, ValidationError

from eyeglass.env import expand_options, load_env_file
from eyeglass.errors import ConfigurationError
from eyeglass.options import NAMESPACE

logger = logging.getLogger(__name__)

__all__ = ["NamespaceModel", "OptionsFileModel", "load_options_file"]


class NamespaceModel(BaseModel):
    model_config = ConfigDict(extra="allow")

    root: Optional[str] = None
    cacheDir: Optional[str] = None
    buildDir: Optional[str] = None
    httpRoot: Optional[str] = None
    ignoreDeprecations: Optional[StrictStr] = None


class OptionsFileModel(BaseModel):
    model_config = ConfigDict(extra="allow")

    includePaths: Optional[Union[StrictStr, List[StrictStr]]] = None
    namespace: Optional[NamespaceModel] = None

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> "OptionsFileModel":
        data = dict(raw)
        if NAMESPACE in data:
            data["namespace"] = data.pop(NAMESPACE)
        return cls.model_validate(data)


def _resolve_path(path: Any, config_dir: Path) -> Any:
    """Resolve ``./`` and ``../`` paths against the options file directory."""
    if not isinstance(path, str) or os.path.isabs(path):
        return path
    if path in (".", "..") or path.startswith(("./", "../")):
        return str((config_dir / path).resolve())
    return path


def load_options_file(
    path: Union[str, Path],
    *,
    env_file: Optional[Union[str, Path]] = None,
    expand_env: bool = True,
) -> Dict[str, Any]:
    """Load a raw configuration from a YAML options file.

    Args:
        path: YAML file to read.
        env_file: Optional .env file loaded before expansion (existing
            environment variables win).
        expand_env: Expand ``${VAR}`` references in option values.

    Returns:
        The raw configuration dict. ``root`` values starting with ``./`` or
        ``../`` are resolved against the file's directory.

    Raises:
        ConfigurationError: If the file is missing, is not valid YAML, or
            has the wrong shape.
    """
    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigurationError("Options file not found", path=str(config_path))

    if env_file is not None and not load_env_file(env_file):
        logger.warning("No environment loaded from %s", env_file)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML syntax: {exc}", path=str(config_path)) from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigurationError(
            "Options file must contain a mapping",
            path=str(config_path),
            value=type(raw).__name__,
        )

    if expand_env:
        try:
            raw = expand_options(raw, strict=True)
        except KeyError as exc:
            raise ConfigurationError(
                f"Undefined environment variable in options: {exc.args[0]}",
                path=str(config_path),
                suggestion="Set the variable, or give it a default with ${VAR:default}.",
            ) from exc

    try:
        OptionsFileModel.from_raw(raw)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())).replace("namespace", NAMESPACE, 1)
        raise ConfigurationError(
            f"Invalid options: {first.get('msg')}",
            path=str(config_path),
            field=field,
        ) from exc

    config_dir = config_path.parent.resolve()
    if "root" in raw:
        raw["root"] = _resolve_path(raw["root"], config_dir)
    namespace = raw.get(NAMESPACE)
    if isinstance(namespace, dict) and "root" in namespace:
        namespace["root"] = _resolve_path(namespace["root"], config_dir)

    logger.debug("Loaded options from %s", config_path)
    return raw
