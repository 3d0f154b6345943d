"""Pytest configuration and fixtures."""

import io
import logging
import sys
from pathlib import Path

import pytest

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from eyeglass.deprecation import StreamSink  # noqa: E402


@pytest.fixture(autouse=True)
def empty_sass_path(monkeypatch):
    """Every test starts with an empty SASS_PATH."""
    monkeypatch.setenv("SASS_PATH", "")


@pytest.fixture
def diagnostics():
    """An in-memory diagnostic stream and a sink writing to it."""
    stream = io.StringIO()
    return stream, StreamSink(stream)


@pytest.fixture
def basic_modules(tmp_path):
    """A project root with a stylesheet module directory."""
    root = tmp_path / "basic_modules"
    (root / "node_modules" / "module_a" / "sass").mkdir(parents=True)
    (root / "node_modules" / "module_a" / "sass" / "index.scss").write_text(
        ".module-a { color: red; }\n", encoding="utf-8"
    )
    return root


@pytest.fixture
def restore_logging(monkeypatch):
    """Undo root logger changes made by setup_logging."""
    for name in ("EYEGLASS_LOG_LEVEL", "EYEGLASS_LOG_FORMAT", "EYEGLASS_LOG_FILE", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
