"""Tests for eyeglass/paths.py include path resolution."""

import os
from pathlib import Path

import pytest

from eyeglass.paths import (
    SASS_PATH_ENV,
    path_delimiter,
    resolve_include_paths,
    split_path_list,
)


class TestPathDelimiter:
    def test_host_default(self):
        assert path_delimiter() == os.pathsep

    @pytest.mark.parametrize(
        "platform, expected",
        [("win32", ";"), ("Windows", ";"), ("linux", ":"), ("darwin", ":")],
    )
    def test_platform_override(self, platform, expected):
        assert path_delimiter(platform) == expected


def test_split_path_list_drops_empty_segments():
    assert split_path_list("a::b: :c", ":") == ["a", "b", "c"]
    assert split_path_list("", ":") == []


class TestResolveIncludePaths:
    def test_sequence_resolves_against_base_dir(self, tmp_path):
        result = resolve_include_paths(["one", "two/three"], str(tmp_path))

        assert result == [
            os.path.join(str(tmp_path), "one"),
            os.path.join(str(tmp_path), "two", "three"),
        ]

    def test_delimited_string(self, tmp_path):
        result = resolve_include_paths("one:two", str(tmp_path), delimiter=":")

        assert result == [os.path.join(str(tmp_path), "one"), os.path.join(str(tmp_path), "two")]

    def test_windows_delimiter_on_request(self, tmp_path):
        result = resolve_include_paths("one;two", str(tmp_path), delimiter=path_delimiter("win32"))

        assert result == [os.path.join(str(tmp_path), "one"), os.path.join(str(tmp_path), "two")]

    def test_absolute_entries_pass_through(self, tmp_path):
        absolute = str(tmp_path / "vendor")

        assert resolve_include_paths([absolute], "/elsewhere") == [absolute]

    def test_duplicates_keep_first_position(self, tmp_path):
        base = str(tmp_path)
        result = resolve_include_paths(["a", "b", "./a", "a/", os.path.join(base, "b"), "c"], base)

        assert result == [os.path.join(base, name) for name in ("a", "b", "c")]

    def test_base_dir_defaults_to_cwd(self, tmp_path):
        assert resolve_include_paths(["lib"], cwd=str(tmp_path)) == [os.path.join(str(tmp_path), "lib")]

    def test_relative_base_dir_is_made_absolute(self, tmp_path):
        result = resolve_include_paths(["lib"], "project", cwd=str(tmp_path))

        assert result == [os.path.join(str(tmp_path), "project", "lib")]

    def test_path_objects_and_odd_entries_are_treated_as_text(self, tmp_path):
        result = resolve_include_paths([Path("styles"), 42, ""], str(tmp_path))

        assert result == [os.path.join(str(tmp_path), "styles"), os.path.join(str(tmp_path), "42")]

    def test_non_iterable_source_is_a_single_entry(self, tmp_path):
        assert resolve_include_paths(7, str(tmp_path)) == [os.path.join(str(tmp_path), "7")]

    def test_environment_fallback_uses_cwd(self, tmp_path):
        environ = {SASS_PATH_ENV: "foo:bar:foo"}

        result = resolve_include_paths(
            None, "/ignored/root", environ=environ, cwd=str(tmp_path), delimiter=":"
        )

        assert result == [os.path.join(str(tmp_path), "foo"), os.path.join(str(tmp_path), "bar")]

    def test_process_environment_is_the_default(self, monkeypatch):
        monkeypatch.setenv(SASS_PATH_ENV, os.pathsep.join(["foo", "bar"]))

        assert resolve_include_paths(None) == [
            os.path.join(os.getcwd(), "foo"),
            os.path.join(os.getcwd(), "bar"),
        ]

    @pytest.mark.parametrize("environ", [{}, {SASS_PATH_ENV: ""}])
    def test_empty_or_unset_environment_gives_empty_list(self, environ):
        assert resolve_include_paths(None, environ=environ) == []

    def test_custom_environment_variable(self, tmp_path):
        result = resolve_include_paths(
            None, env_var="STYLE_PATH", environ={"STYLE_PATH": "x"}, cwd=str(tmp_path)
        )

        assert result == [os.path.join(str(tmp_path), "x")]

    def test_empty_sequence(self):
        assert resolve_include_paths([], "/root") == []
