"""Shared test fixtures for colortag test suite."""

import io
import os
from unittest.mock import patch

import pytest

from colortag import emitter as _emitter_mod
from colortag.colors import ColorCache
from colortag.render import FrameCounter, TagRenderer
from colortag.typenames import TypeNameCache


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep the developer's own switches out of the test run."""
    for var in ("COLORTAG_LOG", "COLORTAG_COLOR", "NO_COLOR"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def _reset_logger():
    """Reset the logger singleton between tests."""
    old = _emitter_mod._logger
    _emitter_mod._logger = None
    yield
    _emitter_mod._logger = old


@pytest.fixture
def tmp_config_home(tmp_path):
    """Provide a temporary home directory for ~/.colortag/config.json."""
    home = tmp_path / "home"
    home.mkdir()
    with patch.dict(os.environ, {"HOME": str(home), "USERPROFILE": str(home)}):
        with patch("pathlib.Path.home", return_value=home):
            yield home


# ---------------------------------------------------------------------------
# Sinks and renderers
# ---------------------------------------------------------------------------
class RecordingSink:
    """Sink that keeps every (severity, line, context) call."""

    def __init__(self):
        self.calls = []

    def __call__(self, severity, line, context=None):
        self.calls.append((severity, line, context))

    @property
    def lines(self):
        return [line for _, line, _ in self.calls]


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def buf():
    """A StringIO buffer for capturing output."""
    return io.StringIO()


@pytest.fixture
def counter():
    """A private frame counter starting at 0."""
    return FrameCounter()


@pytest.fixture
def renderer(counter):
    """A renderer with private caches, so tests do not share state."""
    return TagRenderer(colors=ColorCache(), names=TypeNameCache(),
                       frame_source=counter)
