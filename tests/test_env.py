"""Tests for eyeglass/env.py."""

import os

import pytest

from eyeglass.env import expand_env_vars, expand_options, load_env_file


class TestExpandEnvVars:
    def test_braced_and_bare_references(self, monkeypatch):
        monkeypatch.setenv("VENDOR_DIR", "vendor/sass")

        assert expand_env_vars("${VENDOR_DIR}:$VENDOR_DIR") == "vendor/sass:vendor/sass"

    def test_default_used_when_unset(self, monkeypatch):
        monkeypatch.delenv("EXTRA_DIR", raising=False)

        assert expand_env_vars("${EXTRA_DIR:lib}") == "lib"

    def test_set_value_beats_default(self, monkeypatch):
        monkeypatch.setenv("EXTRA_DIR", "custom")

        assert expand_env_vars("${EXTRA_DIR:lib}") == "custom"

    def test_missing_variable_is_left_alone(self, monkeypatch):
        monkeypatch.delenv("NOT_SET_ANYWHERE", raising=False)

        assert expand_env_vars("a/${NOT_SET_ANYWHERE}/b") == "a/${NOT_SET_ANYWHERE}/b"

    def test_strict_missing_variable_raises(self, monkeypatch):
        monkeypatch.delenv("NOT_SET_ANYWHERE", raising=False)

        with pytest.raises(KeyError, match="NOT_SET_ANYWHERE"):
            expand_env_vars("${NOT_SET_ANYWHERE}", strict=True)


def test_expand_options_is_recursive_and_copies(monkeypatch):
    monkeypatch.setenv("ROOT_DIR", "/srv/app")
    options = {
        "includePaths": ["${ROOT_DIR}/a", "b"],
        "precision": 5,
        "eyeglass": {"root": "${ROOT_DIR}", "enableImportOnce": True},
    }

    result = expand_options(options)

    assert result == {
        "includePaths": ["/srv/app/a", "b"],
        "precision": 5,
        "eyeglass": {"root": "/srv/app", "enableImportOnce": True},
    }
    assert options["eyeglass"]["root"] == "${ROOT_DIR}"


class TestLoadEnvFile:
    @pytest.fixture
    def unset_var(self, monkeypatch):
        # Registered through setenv so the variable is removed again afterwards.
        monkeypatch.setenv("EYEGLASS_TEST_VAR", "placeholder")
        monkeypatch.delenv("EYEGLASS_TEST_VAR")
        return "EYEGLASS_TEST_VAR"

    def test_loads_values(self, tmp_path, unset_var):
        env_file = tmp_path / ".env"
        env_file.write_text(f"{unset_var}=from_file\n", encoding="utf-8")

        assert load_env_file(env_file) is True
        assert os.environ[unset_var] == "from_file"

    def test_existing_values_win(self, tmp_path, unset_var, monkeypatch):
        monkeypatch.setenv(unset_var, "existing")
        env_file = tmp_path / ".env"
        env_file.write_text(f"{unset_var}=from_file\n", encoding="utf-8")

        load_env_file(env_file)

        assert os.environ[unset_var] == "existing"

    def test_override(self, tmp_path, unset_var, monkeypatch):
        monkeypatch.setenv(unset_var, "existing")
        env_file = tmp_path / ".env"
        env_file.write_text(f"{unset_var}=from_file\n", encoding="utf-8")

        load_env_file(env_file, override=True)

        assert os.environ[unset_var] == "from_file"
