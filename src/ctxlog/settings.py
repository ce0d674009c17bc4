"""Persisted settings for ctxlog.

Two-layer settings resolution (highest priority wins):
  1. Project settings — .ctxlog.json in the working directory or a parent
  2. Global settings — ~/.ctxlog/settings.json

Settings are the interactive counterpart of environment variables:
a developer can flip ``DEBUG`` or ``LOGS_ENABLED`` in a JSON file
while the process runs, and the next log call sees it. Files are
re-read on every lookup; nothing is cached.

Reads never raise. A missing, unreadable or malformed file is an
empty layer.
"""

import json
import os
from pathlib import Path
from typing import Dict, Mapping, Optional


PROJECT_FILENAME = ".ctxlog.json"


# ---------------------------------------------------------------------------
# Settings file locations
# ---------------------------------------------------------------------------
def get_global_settings_dir():
    """Return the global settings directory (~/.ctxlog/)."""
    return Path.home() / ".ctxlog"


def get_global_settings_path():
    """Return path to the global settings file."""
    return get_global_settings_dir() / "settings.json"


def find_project_settings(start_dir=None):
    """Walk up from start_dir looking for .ctxlog.json.

    Returns the path if found, None otherwise.
    """
    try:
        current = Path(start_dir or os.getcwd()).resolve()
    except OSError:
        return None
    for _ in range(20):  # safety limit
        candidate = current / PROJECT_FILENAME
        try:
            if candidate.is_file():
                return candidate
        except OSError:
            return None
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


# ---------------------------------------------------------------------------
# Settings loading
# ---------------------------------------------------------------------------
def load_json(path):
    """Load a JSON object from a file, returning empty dict on error."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _as_signal(value) -> Optional[str]:
    """Normalize a JSON scalar to the string form signals are compared in.

    JSON ``true`` becomes ``"true"`` so it reads the same as the
    environment variable would. Nulls and nested values are dropped.
    """
    if value is None or isinstance(value, (dict, list)):
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def load_settings(start_dir=None) -> Dict[str, str]:
    """Load merged settings: global file first, project file on top."""
    merged: Dict[str, str] = {}
    layers = [load_json(get_global_settings_path())]
    project_path = find_project_settings(start_dir)
    if project_path:
        layers.append(load_json(project_path))
    for layer in layers:
        for key, value in layer.items():
            signal = _as_signal(value)
            if signal is None:
                merged.pop(key, None)
            else:
                merged[key] = signal
    return merged


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------
class JsonSettingsStore:
    """Settings store backed by the global and project JSON files.

    Every ``get`` re-reads both files so edits made while the process
    runs take effect on the next call. ``snapshot`` reads them once for
    callers that look up several keys together.
    """

    def __init__(self, start_dir=None):
        self.start_dir = start_dir

    def get(self, key: str) -> Optional[str]:
        return load_settings(self.start_dir).get(key)

    def snapshot(self) -> "MemorySettingsStore":
        """Read both files once and return the merged values."""
        return MemorySettingsStore(load_settings(self.start_dir))


class MemorySettingsStore:
    """Dict-backed settings store, for embedding hosts and tests."""

    def __init__(self, values: Optional[Mapping[str, object]] = None):
        self._values: Dict[str, str] = {}
        for key, value in (values or {}).items():
            self.set(key, value)

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value) -> None:
        signal = _as_signal(value)
        if signal is None:
            self._values.pop(key, None)
        else:
            self._values[key] = signal

    def remove(self, key: str) -> None:
        self._values.pop(key, None)

    def clear(self) -> None:
        self._values.clear()

    def snapshot(self) -> "MemorySettingsStore":
        return self


# ---------------------------------------------------------------------------
# Settings writing
# ---------------------------------------------------------------------------
def _settings_target(global_, start_dir):
    if global_:
        return get_global_settings_path()
    existing = find_project_settings(start_dir)
    if existing:
        return existing
    return Path(start_dir or os.getcwd()) / PROJECT_FILENAME


def _write_json(path, data):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, sort_keys=True)
        f.write("\n")
    return path


def save_setting(key, value, global_=False, start_dir=None):
    """Write one setting to the project (default) or global settings file.

    Unlike reads, writes are explicit caller actions and let OSError
    propagate.

    Args:
        key: Signal name, e.g. ``"DEBUG"`` or ``"LOGS_ENABLED"``.
        value: JSON scalar to store (booleans are kept as JSON booleans).
        global_: Write to ~/.ctxlog/settings.json instead of the project file.
        start_dir: Directory to start the project file search from.

    Returns:
        Path of the file written.
    """
    target = _settings_target(global_, start_dir)
    data = load_json(target)
    data[key] = value
    return _write_json(target, data)


def remove_setting(key, global_=False, start_dir=None):
    """Remove one setting from the project (default) or global settings file.

    Returns the path of the file written, or None when there was
    nothing to remove.
    """
    target = _settings_target(global_, start_dir)
    data = load_json(target)
    if key not in data:
        return None
    del data[key]
    return _write_json(target, data)
