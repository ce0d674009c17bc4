"""
Signal reader — looks up enablement signals by name.

A signal is a string setting consulted on every log call. Two sources
are tried, in order:

    1. Persisted settings (.ctxlog.json / ~/.ctxlog/settings.json)
    2. Environment variables

Every candidate key is tried against the settings store before any key
is tried against the environment, so an interactive setting always
beats deploy-time configuration. Presence decides, not truthiness:
a stored ``"false"`` or ``""`` is a value.

Each signal has a primary name and a ``CTXLOG_``-prefixed alias for
hosts that only forward prefixed variables to the process.
"""

import os
from typing import Mapping, Optional, Sequence

from .settings import JsonSettingsStore, MemorySettingsStore


ALIAS_PREFIX = 'CTXLOG_'


def _keys(name: str) -> tuple:
    return (name, ALIAS_PREFIX + name)


DISABLE_KEYS = _keys('DISABLE_LOGS')     # hard off
DEBUG_KEYS = _keys('DEBUG')              # context filter, primary family
LOGS_KEYS = _keys('LOGS')                # context filter, secondary family
ENABLED_KEYS = _keys('LOGS_ENABLED')     # global enable
ENV_KEY = 'PYTHON_ENV'                   # deployment environment, env only

PRODUCTION = 'production'


def _read(store, key: str) -> Optional[str]:
    """Read one key from a store, treating any failure as absent."""
    if store is None:
        return None
    try:
        value = store.get(key)
    except Exception:
        return None
    return None if value is None else str(value)


class SignalReader:
    """Resolves signal names against the settings store, then the environment.

    Usage::

        reader = SignalReader()
        reader.resolve(DEBUG_KEYS)     # 'app:*,-app:noise' or None
        reader.env(ENV_KEY)            # 'production' or None

    Args:
        settings: Object with ``get(key) -> str | None``. Defaults to the
            JSON settings files. Pass a MemorySettingsStore to isolate.
        environ: Mapping of environment variables. Defaults to the live
            ``os.environ``, read at lookup time.
    """

    def __init__(self, settings=None, environ: Optional[Mapping[str, str]] = None):
        self.settings = settings if settings is not None else JsonSettingsStore()
        self._environ = environ

    @property
    def environ(self) -> Mapping[str, str]:
        return self._environ if self._environ is not None else os.environ

    def snapshot(self) -> "SignalReader":
        """Return a reader over a single read of the settings store.

        Stores without ``snapshot()`` are used as they are. A store that
        fails to snapshot reads as empty.
        """
        take = getattr(self.settings, 'snapshot', None)
        if take is None:
            return self
        try:
            settings = take()
        except Exception:
            settings = MemorySettingsStore()
        return SignalReader(settings=settings, environ=self._environ)

    def setting(self, key: str) -> Optional[str]:
        """Read a single key from the settings store."""
        return _read(self.settings, key)

    def env(self, key: str) -> Optional[str]:
        """Read a single key from the environment."""
        return _read(self.environ, key)

    def resolve(self, keys: Sequence[str]) -> Optional[str]:
        """Return the first defined value for ``keys``, or None.

        All keys are tried against settings first, then all keys
        against the environment.
        """
        for key in keys:
            value = self.setting(key)
            if value is not None:
                return value
        for key in keys:
            value = self.env(key)
            if value is not None:
                return value
        return None


def is_true(value: Optional[str]) -> bool:
    """True only for the string 'true', any case. No trimming."""
    return str(value).lower() == 'true'


def is_production(reader: SignalReader) -> bool:
    """True when PYTHON_ENV is exactly 'production' in the environment."""
    return reader.env(ENV_KEY) == PRODUCTION


# =============================================================================
# Module-level default reader
# =============================================================================

_reader: Optional[SignalReader] = None


def set_reader(reader: Optional[SignalReader]) -> Optional[SignalReader]:
    """Install the default SignalReader (None restores the built-in one).

    Returns the previously installed reader so callers can restore it.
    """
    global _reader
    previous = _reader
    _reader = reader
    return previous


def get_reader() -> SignalReader:
    """Get the default SignalReader, creating one if needed."""
    global _reader
    if _reader is None:
        _reader = SignalReader()
    return _reader
