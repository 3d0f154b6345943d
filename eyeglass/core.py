"""The Eyeglass entry point and its deprecated aliases."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from eyeglass.compiler import SassCompiler, render
from eyeglass.deprecation import (
    LEGACY_CLASS,
    LEGACY_DECORATE,
    LEGACY_SASS_OPTIONS,
    DeprecationEmitter,
    DeprecationRecord,
    DiagnosticSink,
    instance_property,
)
from eyeglass.modules import ModuleManifest, check_module_versions
from eyeglass.options import NAMESPACE, assemble
from eyeglass.versions import VERSION

logger = logging.getLogger(__name__)

__all__ = ["Eyeglass", "LifecycleState", "decorate"]


class LifecycleState(str, Enum):
    UNINITIALIZED = "uninitialized"
    ASSEMBLING = "assembling"
    READY = "ready"


def _legacy_option_property(option: str, doc: str) -> property:
    """Property for an option that used to be assigned on the instance.

    Reading returns the live option value. Assigning still updates it, but
    reports that the option belongs in the constructor options.
    """

    def getter(self: "Eyeglass") -> Any:
        return self.options[NAMESPACE].get(option)

    def setter(self: "Eyeglass", value: Any) -> None:
        self._deprecate(instance_property(option))
        self.options[NAMESPACE][option] = value

    return property(getter, setter, doc=doc)


class Eyeglass:
    """Assemble sass options with eyeglass settings applied.

    Options are assembled once, on construction; legacy option layouts are
    migrated and reported on the diagnostic sink.

    Example:
        eyeglass = Eyeglass({
            "includePaths": ["styles/vendor"],
            "eyeglass": {"root": "/srv/app", "ignoreDeprecations": "0.8.0"},
        })
        css = eyeglass.compile()
    """

    version = VERSION

    def __init__(
        self,
        options: Optional[Mapping[str, Any]] = None,
        *,
        sink: Optional[DiagnosticSink] = None,
        _deprecations: Sequence[DeprecationRecord] = (),
    ) -> None:
        # _deprecations: legacy entry-point records, reported after the
        # legacy option warnings.
        self.state = LifecycleState.UNINITIALIZED
        self._emitter = DeprecationEmitter(sink)
        self.state = LifecycleState.ASSEMBLING
        self._options = assemble(options, emitter=self._emitter, deprecations=_deprecations)
        self.state = LifecycleState.READY
        logger.debug("Eyeglass ready (root=%s)", self._options[NAMESPACE]["root"])

    @classmethod
    def _create(
        cls,
        options: Optional[Mapping[str, Any]],
        sink: Optional[DiagnosticSink],
        deprecation: DeprecationRecord,
    ) -> "Eyeglass":
        return cls(options, sink=sink, _deprecations=(deprecation,))

    @classmethod
    def Eyeglass(  # noqa: N802 - mirrors the historical attribute name
        cls,
        options: Optional[Mapping[str, Any]] = None,
        *,
        sink: Optional[DiagnosticSink] = None,
    ) -> "Eyeglass":
        """Deprecated alias for constructing :class:`Eyeglass` directly."""
        return cls._create(options, sink, LEGACY_CLASS)

    @property
    def options(self) -> Dict[str, Any]:
        """The canonical sass options, including the ``eyeglass`` namespace."""
        return self._options

    @property
    def ignore_deprecations(self) -> Optional[Any]:
        return self._options[NAMESPACE].get("ignoreDeprecations")

    def _deprecate(self, record: DeprecationRecord) -> None:
        self._emitter.emit(record, self.ignore_deprecations)

    def sass_options(self) -> Dict[str, Any]:
        """Deprecated: use :attr:`options`."""
        self._deprecate(LEGACY_SASS_OPTIONS)
        return self.options

    enable_import_once = _legacy_option_property(
        "enableImportOnce",
        "Whether each stylesheet module is imported at most once.",
    )

    def check_modules(
        self,
        manifests: Iterable[ModuleManifest],
    ) -> List[ModuleManifest]:
        """Check module version requirements against this instance's options."""
        return check_module_versions(manifests, self.options, sink=self._emitter.sink)

    def compile(self, compiler: Optional[SassCompiler] = None) -> str:
        """Compile with ``compiler`` (libsass by default) using these options."""
        return render(self.options, compiler)

    def __repr__(self) -> str:
        return f"Eyeglass(root={self._options[NAMESPACE]['root']!r}, state={self.state.value!r})"


def decorate(
    options: Optional[Mapping[str, Any]] = None,
    *,
    sink: Optional[DiagnosticSink] = None,
) -> Eyeglass:
    """Deprecated alias for :class:`Eyeglass`."""
    return Eyeglass._create(options, sink, LEGACY_DECORATE)
