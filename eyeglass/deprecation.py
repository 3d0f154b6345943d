"""Deprecation records and the diagnostic stream they are written to.

Every legacy usage pattern eyeglass still accepts has a
:class:`DeprecationRecord`. Records are rendered as a tagged block and
written to a diagnostic sink (stderr by default), unless the caller's
``ignoreDeprecations`` version covers the release they were introduced in.
"""

from __future__ import annotations

import logging
import sys
import threading
import warnings
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Protocol, TextIO, Type

from eyeglass.versions import should_warn

logger = logging.getLogger(__name__)

__all__ = [
    "DEPRECATION_TAG",
    "DeprecationRecord",
    "EyeglassDeprecationWarning",
    "DiagnosticSink",
    "StreamSink",
    "WarningsSink",
    "DeprecationEmitter",
    "namespaced_option",
    "instance_property",
    "LEGACY_CLASS",
    "LEGACY_DECORATE",
    "LEGACY_SASS_OPTIONS",
]

DEPRECATION_TAG = "[eyeglass:deprecation]"

DEPRECATED_IN = "0.8.0"
REMOVED_IN = "0.9.0"


class EyeglassDeprecationWarning(DeprecationWarning):
    """Category used when deprecations are routed through :mod:`warnings`."""


@dataclass(frozen=True)
class DeprecationRecord:
    trigger_key: str
    message: str
    introduced_in: str = DEPRECATED_IN
    removed_in: str = REMOVED_IN

    def format(self) -> str:
        return (
            f"{DEPRECATION_TAG} (deprecated in {self.introduced_in}, "
            f"will be removed in {self.removed_in}) {self.message}"
        )


def _options_snippet(key: str) -> str:
    return "\n".join(
        [
            "  options = Eyeglass({",
            "    # sass options",
            "    ...",
            '    "eyeglass": {',
            f'      "{key}": ...',
            "    }",
            "  })",
        ]
    )


def namespaced_option(key: str) -> DeprecationRecord:
    """Record for an eyeglass option passed at the top level of the sass options."""
    return DeprecationRecord(
        trigger_key=f"option:{key}",
        message=(
            f"`{key}` should be passed into the eyeglass options rather than "
            f"the sass options:\n{_options_snippet(key)}"
        ),
    )


def instance_property(key: str) -> DeprecationRecord:
    """Record for an option assigned directly onto an Eyeglass instance."""
    return DeprecationRecord(
        trigger_key=f"property:{key}",
        message=(
            f"The property `{key}` should no longer be set directly on eyeglass. "
            "Instead, you should pass this as an option to eyeglass:\n"
            f"{_options_snippet(key)}"
        ),
    )


LEGACY_CLASS = DeprecationRecord(
    trigger_key="entry:Eyeglass.Eyeglass",
    message="`eyeglass.Eyeglass.Eyeglass` is deprecated. Instead, use `eyeglass.Eyeglass`",
)

LEGACY_DECORATE = DeprecationRecord(
    trigger_key="entry:decorate",
    message="`eyeglass.decorate` is deprecated. Instead, use `eyeglass.Eyeglass`",
)

LEGACY_SASS_OPTIONS = DeprecationRecord(
    trigger_key="method:sass_options",
    message=(
        "#sass_options() is deprecated. "
        "Instead, you should access the sass options on #options"
    ),
)


class DiagnosticSink(Protocol):
    def write(self, text: str) -> None: ...


class StreamSink:
    """Write diagnostic blocks to a text stream.

    With no stream the sink writes to whatever ``sys.stderr`` is at the time
    of the write. Writes from every StreamSink share one lock, so blocks
    from concurrent assemblies never interleave.
    """

    _lock = threading.Lock()

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    def write(self, text: str) -> None:
        with self._lock:
            stream = self.stream
            stream.write(text)
            stream.flush()


class WarningsSink:
    """Route diagnostic blocks through :func:`warnings.warn`."""

    def __init__(
        self,
        category: Type[Warning] = EyeglassDeprecationWarning,
        stacklevel: int = 4,
    ):
        self.category = category
        self.stacklevel = stacklevel

    def write(self, text: str) -> None:
        warnings.warn(text.rstrip("\n"), self.category, stacklevel=self.stacklevel)


class DeprecationEmitter:
    """Render deprecation records onto a diagnostic sink."""

    def __init__(self, sink: Optional[DiagnosticSink] = None):
        self.sink = sink if sink is not None else StreamSink()

    def emit(self, record: DeprecationRecord, threshold: Optional[Any] = None) -> None:
        """Write ``record`` unless ``threshold`` suppresses it.

        Sink failures are logged and dropped.
        """
        if not should_warn(record, threshold):
            logger.debug("Suppressed deprecation %s (threshold %s)", record.trigger_key, threshold)
            return
        try:
            self.sink.write(record.format() + "\n")
        except Exception as exc:
            logger.debug("Could not write deprecation %s: %s", record.trigger_key, exc)

    def emit_all(
        self,
        records: Iterable[DeprecationRecord],
        threshold: Optional[Any] = None,
    ) -> None:
        """Emit records in order, each trigger at most once."""
        seen = set()
        for record in records:
            if record.trigger_key in seen:
                continue
            seen.add(record.trigger_key)
            self.emit(record, threshold)
