"""Tests for the eyeglass-options command."""

import json

import pytest

from eyeglass import VERSION
from eyeglass.cli import main

pytestmark = pytest.mark.usefixtures("restore_logging")


@pytest.fixture
def legacy_config(tmp_path):
    path = tmp_path / "eyeglass.yaml"
    path.write_text("root: ./\noutputStyle: compressed\n", encoding="utf-8")
    return path


def test_prints_assembled_options(legacy_config, capsys):
    assert main([str(legacy_config)]) == 0

    captured = capsys.readouterr()
    options = json.loads(captured.out)
    assert options["outputStyle"] == "compressed"
    assert options["includePaths"] == []
    assert options["eyeglass"]["root"] == str(legacy_config.parent.resolve())
    assert "root" not in options
    assert "[eyeglass:deprecation]" in captured.err
    assert "`root` should be passed into the eyeglass options" in captured.err


def test_sass_only(legacy_config, capsys):
    assert main([str(legacy_config), "--sass-only"]) == 0

    assert "eyeglass" not in json.loads(capsys.readouterr().out)


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.yaml")]) == 1

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Options file not found" in captured.err


def test_missing_file_json_log(tmp_path, capsys):
    config = str(tmp_path / "missing.yaml")
    assert main([config, "--log-format", "json"]) == 1

    record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert record["level"] == "ERROR"
    assert record["config"] == config
    assert record["error"]["error_type"] == "ConfigurationError"


def test_version(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])

    assert exc_info.value.code == 0
    assert VERSION in capsys.readouterr().out


def test_non_path_root_still_prints_options(tmp_path, capsys):
    path = tmp_path / "eyeglass.yaml"
    path.write_text("root: 5\n", encoding="utf-8")

    assert main([str(path)]) == 0

    options = json.loads(capsys.readouterr().out)
    assert options["eyeglass"]["root"] == 5
    assert "cacheDir" not in options["eyeglass"]
