"""
ctxlog — context-labelled console logging with call-time enablement.

A small logging facade for libraries and apps:
- Per-instance context labels (``app:core``, ``svc:beta``)
- DEBUG-style include/exclude context filters with '*' wildcards
- Hard-off and global-enable switches from settings files or env vars
- On by default outside production, off in production
- Styled output on rich consoles, plain prefixed text elsewhere

Public API:
    Logger            — the logger facade
    LoggerConfig      — immutable per-logger settings
    traced            — function tracing decorator
    SignalReader      — settings-then-environment signal lookup
    compile_filters   — compile a filter string
    matches_context   — test a context against compiled filters
    should_log        — resolve enablement for a config
    explain           — resolve enablement and report the deciding rule
    Presenter         — console renderer
"""

from ctxlog._version import __version__, __app_name__
from ctxlog.filters import (
    CompiledFilterSet, compile_filters, compile_pattern, matches_context,
    format_filter_set,
)
from ctxlog.levels import DEBUG, INFO, WARN, ERROR, SEVERITIES
from ctxlog.logger import Logger, LoggerConfig
from ctxlog.presenter import (
    Presenter, get_presenter, set_presenter, has_rich_console,
)
from ctxlog.resolver import Decision, explain, should_log
from ctxlog.settings import (
    JsonSettingsStore, MemorySettingsStore, save_setting, remove_setting,
)
from ctxlog.signals import SignalReader, get_reader, set_reader
from ctxlog.trace import traced

__all__ = [
    '__version__', '__app_name__',
    'Logger', 'LoggerConfig', 'traced',
    'DEBUG', 'INFO', 'WARN', 'ERROR', 'SEVERITIES',
    'CompiledFilterSet', 'compile_filters', 'compile_pattern',
    'matches_context', 'format_filter_set',
    'Decision', 'explain', 'should_log',
    'Presenter', 'get_presenter', 'set_presenter', 'has_rich_console',
    'SignalReader', 'get_reader', 'set_reader',
    'JsonSettingsStore', 'MemorySettingsStore', 'save_setting', 'remove_setting',
]
