"""Structured exception hierarchy for eyeglass.

Options assembly itself never raises for user misconfiguration; these
exceptions cover the edges around it: loading options files, enforcing
strict module versions and reaching the compiler.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

__all__ = [
    "EyeglassError",
    "ConfigurationError",
    "ModuleVersionError",
    "CompilerUnavailableError",
]


class EyeglassError(Exception):
    """Base exception for all eyeglass errors.

    Provides structured error information for debugging.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        self.message = message
        self.details = details or {}
        self.suggestion = suggestion

        parts = [message]

        if details:
            parts.append("\nDetails:")
            parts.extend(f"  {k}: {v}" for k, v in details.items())

        if suggestion:
            parts.append(f"\nSuggestion: {suggestion}")

        super().__init__("\n".join(parts) if len(parts) > 1 else message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "suggestion": self.suggestion,
        }


class ConfigurationError(EyeglassError):
    """Error in an options file or its environment.

    Raised when an options file cannot be read or has the wrong shape.
    """

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Any = None,
        path: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        self.field = field
        self.value = value
        self.path = path

        details = kwargs.pop("details", {})
        if path:
            details["path"] = path
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)

        super().__init__(message, details=details, **kwargs)


class ModuleVersionError(EyeglassError):
    """One or more eyeglass modules need a different eyeglass version.

    Raised when ``strictModuleVersions`` is enabled.
    """

    def __init__(
        self,
        message: str,
        *,
        modules: Optional[List[str]] = None,
        version: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        self.modules = modules or []
        self.version = version

        details = kwargs.pop("details", {})
        if version:
            details["eyeglass_version"] = version
        if self.modules:
            details["modules"] = ", ".join(self.modules)

        suggestion = kwargs.pop("suggestion", None)
        if not suggestion:
            suggestion = (
                "Upgrade the listed modules, or set strictModuleVersions to "
                '"warn" to continue with a warning.'
            )

        super().__init__(message, details=details, suggestion=suggestion, **kwargs)


class CompilerUnavailableError(EyeglassError):
    """The Sass compiler backend could not be loaded."""

    def __init__(
        self,
        message: str,
        *,
        backend: Optional[str] = None,
        cause: Optional[Exception] = None,
        **kwargs: Any,
    ) -> None:
        self.backend = backend
        self.cause = cause

        details = kwargs.pop("details", {})
        if backend:
            details["backend"] = backend
        if cause:
            details["cause"] = str(cause)
            details["cause_type"] = type(cause).__name__

        suggestion = kwargs.pop("suggestion", None)
        if not suggestion:
            suggestion = "Install the compiler extra: pip install 'eyeglass[sass]'"

        super().__init__(message, details=details, suggestion=suggestion, **kwargs)
