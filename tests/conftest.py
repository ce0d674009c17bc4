"""Shared test fixtures for the ctxlog test suite."""

import io
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from ctxlog import presenter as _presenter_mod
from ctxlog import signals as _signals_mod
from ctxlog.levels import SEVERITIES
from ctxlog.presenter import Presenter
from ctxlog.settings import MemorySettingsStore
from ctxlog.signals import (
    DEBUG_KEYS, DISABLE_KEYS, ENABLED_KEYS, ENV_KEY, LOGS_KEYS, SignalReader,
)


ALL_SIGNAL_KEYS = DISABLE_KEYS + DEBUG_KEYS + LOGS_KEYS + ENABLED_KEYS + (ENV_KEY,)


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _isolated_signals(tmp_path, monkeypatch):
    """Keep real env vars, settings files and singletons out of every test."""
    for key in ALL_SIGNAL_KEYS:
        monkeypatch.delenv(key, raising=False)

    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)

    saved_reader = _signals_mod._reader
    saved_presenter = _presenter_mod._presenter
    _signals_mod._reader = None
    _presenter_mod._presenter = None
    with patch.dict(os.environ, {"HOME": str(home), "USERPROFILE": str(home)}):
        with patch("pathlib.Path.home", return_value=home):
            yield
    _signals_mod._reader = saved_reader
    _presenter_mod._presenter = saved_presenter


@pytest.fixture
def home_dir():
    """The isolated home directory (holds ~/.ctxlog/settings.json)."""
    return Path.home()


@pytest.fixture
def work_dir():
    """The isolated working directory (project .ctxlog.json lives here)."""
    return Path(os.getcwd())


# ---------------------------------------------------------------------------
# Signal fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def settings():
    """An empty in-memory settings store."""
    return MemorySettingsStore()


@pytest.fixture
def environ():
    """An empty environment mapping."""
    return {}


@pytest.fixture
def reader(settings, environ):
    """A SignalReader over the in-memory settings and environment."""
    return SignalReader(settings=settings, environ=environ)


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def streams():
    """One StringIO buffer per severity channel."""
    return {severity: io.StringIO() for severity in SEVERITIES}


@pytest.fixture
def plain(streams):
    """A plain-text Presenter writing to per-severity buffers."""
    return Presenter(rich=False, streams=streams)


@pytest.fixture
def styled(streams, monkeypatch):
    """A rich Presenter writing styled output to per-severity buffers."""
    monkeypatch.setenv("TERM", "xterm-256color")
    monkeypatch.delenv("NO_COLOR", raising=False)
    return Presenter(rich=True, streams=streams)
