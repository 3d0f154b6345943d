"""Options assembly.

Builds the canonical options mapping handed to the Sass compiler from
whatever the caller passed in. Two layouts are accepted:

* canonical: eyeglass settings live under the ``"eyeglass"`` key;
* legacy: some eyeglass settings sit at the top level next to the sass
  options (the pre-0.8 layout).

Legacy settings are migrated into the namespace and reported as
deprecations. The caller's mapping is never modified.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from eyeglass.deprecation import (
    DeprecationEmitter,
    DeprecationRecord,
    DiagnosticSink,
    namespaced_option,
)
from eyeglass.paths import SASS_PATH_ENV, resolve_include_paths

logger = logging.getLogger(__name__)

__all__ = [
    "NAMESPACE",
    "LEGACY_NAMESPACED_KEYS",
    "ConfigurationShape",
    "ShapeClassification",
    "classify",
    "assemble",
    "sass_options_for_compiler",
]

NAMESPACE = "eyeglass"

# Order matters: deprecations are reported in this order.
LEGACY_NAMESPACED_KEYS: Tuple[str, ...] = (
    "root",
    "cacheDir",
    "buildDir",
    "httpRoot",
    "assetsHttpPrefix",
    "assetsRelativeTo",
    "strictModuleVersions",
)

CACHE_DIR_NAME = ".eyeglass_cache"


class ConfigurationShape(str, Enum):
    CANONICAL = "canonical"
    LEGACY = "legacy"


@dataclass(frozen=True)
class ShapeClassification:
    """Result of inspecting a raw configuration before any merging."""

    shape: ConfigurationShape
    legacy_keys: Tuple[str, ...]
    namespace: Optional[Mapping[str, Any]]

    @property
    def is_legacy(self) -> bool:
        return self.shape is ConfigurationShape.LEGACY


def classify(raw: Optional[Mapping[str, Any]]) -> ShapeClassification:
    """Classify ``raw`` as canonical or legacy without touching it."""
    raw = raw or {}
    legacy_keys = tuple(key for key in LEGACY_NAMESPACED_KEYS if key in raw)

    namespace = raw.get(NAMESPACE)
    if namespace is not None and not isinstance(namespace, Mapping):
        logger.warning(
            "Ignoring %r options of type %s; expected a mapping",
            NAMESPACE,
            type(namespace).__name__,
        )
        namespace = None

    shape = ConfigurationShape.LEGACY if legacy_keys else ConfigurationShape.CANONICAL
    return ShapeClassification(shape=shape, legacy_keys=legacy_keys, namespace=namespace)


def _path_text(value: Any) -> Optional[str]:
    """Return ``value`` as a str path, or None when it is not a path."""
    if not isinstance(value, (str, os.PathLike)):
        return None
    text = os.fspath(value)
    return text if isinstance(text, str) else None


def _apply_defaults(namespace: Dict[str, Any], cwd: str) -> None:
    if namespace.get("root") is None:
        namespace["root"] = cwd
    if namespace.get("cacheDir") is None:
        root = _path_text(namespace["root"])
        if root is None:
            logger.warning(
                "Not defaulting cacheDir: root of type %s is not a path",
                type(namespace["root"]).__name__,
            )
        else:
            namespace["cacheDir"] = os.path.join(root, CACHE_DIR_NAME)
    namespace.setdefault("httpRoot", "/")
    namespace.setdefault("enableImportOnce", True)
    namespace.setdefault("strictModuleVersions", "warn")


def assemble(
    raw: Optional[Mapping[str, Any]],
    *,
    sink: Optional[DiagnosticSink] = None,
    emitter: Optional[DeprecationEmitter] = None,
    deprecations: Iterable[DeprecationRecord] = (),
    environ: Optional[Mapping[str, str]] = None,
    cwd: Optional[str] = None,
    delimiter: Optional[str] = None,
) -> Dict[str, Any]:
    """Assemble canonical options from a raw configuration.

    Args:
        raw: Options as passed by the caller, in either layout. Not modified.
        sink: Diagnostic sink for deprecations (ignored when ``emitter`` is
            given). Defaults to stderr.
        emitter: Emitter to report deprecations through.
        deprecations: Legacy call-pattern deprecations raised by the caller;
            reported after the legacy option warnings.
        environ: Environment used for the ``SASS_PATH`` default.
        cwd: Working directory; defaults to ``os.getcwd()``.
        delimiter: Path-list separator override.

    Returns:
        A new options dict whose ``"eyeglass"`` entry is a fresh mapping and
        whose ``includePaths`` is a list of absolute directories.
    """
    raw = raw or {}
    cwd = os.path.abspath(cwd) if cwd is not None else os.getcwd()
    classification = classify(raw)

    pending: List[DeprecationRecord] = []
    namespace: Dict[str, Any] = dict(classification.namespace or {})
    for key in classification.legacy_keys:
        pending.append(namespaced_option(key))
        if key in namespace:
            logger.debug("Discarding top-level %r; the %r value wins", key, NAMESPACE)
            continue
        namespace[key] = raw[key]

    _apply_defaults(namespace, cwd)

    result: Dict[str, Any] = {
        key: value
        for key, value in raw.items()
        if key not in classification.legacy_keys and key != NAMESPACE
    }

    source = result.get("includePaths")
    if source is None:
        base_dir = None
    else:
        base_dir = namespace["root"]
    result["includePaths"] = resolve_include_paths(
        source,
        base_dir,
        env_var=SASS_PATH_ENV,
        delimiter=delimiter,
        environ=environ,
        cwd=cwd,
    )

    result[NAMESPACE] = dict(namespace)

    emitter = emitter or DeprecationEmitter(sink)
    pending.extend(deprecations)
    emitter.emit_all(pending, threshold=namespace.get("ignoreDeprecations"))

    logger.debug(
        "Assembled %s options with %d include path(s)",
        classification.shape.value,
        len(result["includePaths"]),
    )
    return result


def sass_options_for_compiler(
    options: Mapping[str, Any],
    include_namespace: bool = False,
) -> Dict[str, Any]:
    """Return a copy of ``options`` suitable for handing to a compiler."""
    if include_namespace:
        return dict(options)
    return {key: value for key, value in options.items() if key != NAMESPACE}
