"""Module version compatibility checks.

Eyeglass modules declare the eyeglass versions they work with in the
``eyeglass.needs`` field of their ``package.json``. These manifests are
only consulted here; installing or upgrading modules is left to the
package manager.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from eyeglass.deprecation import DiagnosticSink, StreamSink
from eyeglass.errors import ConfigurationError, ModuleVersionError
from eyeglass.options import NAMESPACE
from eyeglass.versions import VERSION, satisfies

logger = logging.getLogger(__name__)

__all__ = [
    "WARNING_TAG",
    "EyeglassManifest",
    "ModuleManifest",
    "check_module_versions",
]

WARNING_TAG = "[eyeglass:warning]"


class EyeglassManifest(BaseModel):
    """The ``eyeglass`` section of a module's package.json."""

    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    needs: Optional[str] = None


class ModuleManifest(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    version: Optional[str] = None
    eyeglass: EyeglassManifest = Field(default_factory=EyeglassManifest)

    @property
    def module_name(self) -> str:
        """Name the module is imported under in stylesheets."""
        return self.eyeglass.name or self.name

    @property
    def needs(self) -> Optional[str]:
        return self.eyeglass.needs

    def is_compatible(self, version: str = VERSION) -> bool:
        return self.needs is None or satisfies(version, self.needs)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ModuleManifest":
        """Read a manifest from a ``package.json`` file.

        Raises:
            ConfigurationError: If the file cannot be read or is not a
                valid manifest.
        """
        manifest_path = Path(path)
        try:
            data = json.loads(manifest_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise ConfigurationError(
                f"Cannot read module manifest: {exc}", path=str(manifest_path)
            ) from exc
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigurationError(
                "Invalid module manifest",
                path=str(manifest_path),
                details={"errors": exc.error_count()},
            ) from exc


def _incompatible_message(manifest: ModuleManifest, version: str) -> str:
    return (
        f"{WARNING_TAG} The module `{manifest.module_name}` needs eyeglass "
        f"{manifest.needs}, but this is eyeglass {version}.\n"
    )


def check_module_versions(
    manifests: Iterable[Union[ModuleManifest, Mapping[str, Any]]],
    options: Mapping[str, Any],
    *,
    sink: Optional[DiagnosticSink] = None,
    version: str = VERSION,
) -> List[ModuleManifest]:
    """Check every module's ``needs`` range against ``version``.

    The namespace's ``strictModuleVersions`` decides what happens to
    incompatible modules: ``True`` raises, ``"warn"`` writes a warning per
    module to ``sink``, anything falsy only logs.

    Returns:
        The incompatible manifests, in input order.

    Raises:
        ModuleVersionError: If modules are incompatible and strict checking
            is enabled.
    """
    resolved = [
        item if isinstance(item, ModuleManifest) else ModuleManifest.model_validate(item)
        for item in manifests
    ]
    incompatible = [manifest for manifest in resolved if not manifest.is_compatible(version)]
    if not incompatible:
        return []

    strict = options.get(NAMESPACE, {}).get("strictModuleVersions", "warn")
    names = [manifest.module_name for manifest in incompatible]
    logger.info("Modules incompatible with eyeglass %s: %s", version, ", ".join(names))

    if strict is True:
        raise ModuleVersionError(
            "Incompatible eyeglass modules",
            modules=names,
            version=version,
        )
    if strict == "warn":
        sink = sink if sink is not None else StreamSink()
        for manifest in incompatible:
            try:
                sink.write(_incompatible_message(manifest, version))
            except Exception as exc:
                logger.debug("Could not write module warning: %s", exc)
    return incompatible
