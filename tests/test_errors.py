"""Tests for eyeglass/errors.py."""

import pytest

from eyeglass.errors import (
    CompilerUnavailableError,
    ConfigurationError,
    EyeglassError,
    ModuleVersionError,
)


def test_plain_message():
    error = EyeglassError("Something broke")

    assert str(error) == "Something broke"
    assert error.to_dict() == {
        "error_type": "EyeglassError",
        "message": "Something broke",
        "details": {},
        "suggestion": None,
    }


def test_details_and_suggestion_in_message():
    error = EyeglassError("Something broke", details={"key": "value"}, suggestion="Fix it")

    assert "Details:" in str(error)
    assert "  key: value" in str(error)
    assert "Suggestion: Fix it" in str(error)


def test_configuration_error_details():
    error = ConfigurationError("Bad option", field="eyeglass.root", value=3, path="eyeglass.yaml")

    assert error.details == {"path": "eyeglass.yaml", "field": "eyeglass.root", "value": "3"}
    assert error.to_dict()["error_type"] == "ConfigurationError"


def test_module_version_error_default_suggestion():
    error = ModuleVersionError("Incompatible", modules=["a", "b"], version="0.8.3")

    assert error.details == {"eyeglass_version": "0.8.3", "modules": "a, b"}
    assert "strictModuleVersions" in error.suggestion


def test_compiler_unavailable_cause():
    cause = ImportError("No module named 'sass'")
    error = CompilerUnavailableError("libsass is not installed", backend="libsass", cause=cause)

    assert error.details["cause_type"] == "ImportError"
    assert error.backend == "libsass"


@pytest.mark.parametrize("cls", [ConfigurationError, ModuleVersionError, CompilerUnavailableError])
def test_hierarchy(cls):
    assert issubclass(cls, EyeglassError)
