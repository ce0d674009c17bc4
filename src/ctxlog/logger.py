"""
Logger — a context-labelled logging facade.

Each Logger binds a context label and an optional explicit on/off
switch at construction. Every call asks the resolver whether to emit,
so settings and environment changes apply on the next call:

    log = Logger(context='app:core')
    log.info('started', {'pid': 42})

    with_override = Logger(context='tests', enabled=False)
    with_override.error('never shown')

    log.group('loading plugins', lambda: (
        log.debug('found 3'),
        log.info('loaded'),
    ), collapsed=False)

The four severities are display-only; an enabled logger emits all of
them.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from .levels import DEBUG, ERROR, INFO, WARN, validate_severity
from .presenter import Presenter, get_presenter
from .resolver import Decision, explain, should_log
from .signals import SignalReader


@dataclass(frozen=True)
class LoggerConfig:
    """Construction-time logger settings. Never changes afterwards."""
    context: Optional[str] = None
    explicit_enabled: Optional[bool] = None


class Logger:
    """Context-labelled logger with call-time enablement.

    Args:
        context: Label for the subsystem this logger speaks for, e.g.
            ``'app:core'``. Shown in every line and matched against
            DEBUG/LOGS filter patterns.
        enabled: True or False forces the logger on or off regardless of
            any setting or environment variable. None (default) resolves
            from signals on every call.
        reader: Signal source; defaults to the module-level reader.
        presenter: Output renderer; defaults to the module-level presenter.
    """

    def __init__(self, context: Optional[str] = None,
                 enabled: Optional[bool] = None, *,
                 reader: Optional[SignalReader] = None,
                 presenter: Optional[Presenter] = None):
        self._config = LoggerConfig(context=context, explicit_enabled=enabled)
        self._reader = reader
        self._presenter = presenter

    def __repr__(self):
        return (f"Logger(context={self.context!r}, "
                f"enabled={self.explicit_enabled!r})")

    @property
    def config(self) -> LoggerConfig:
        return self._config

    @property
    def context(self) -> Optional[str]:
        return self._config.context

    @property
    def explicit_enabled(self) -> Optional[bool]:
        return self._config.explicit_enabled

    @property
    def enabled(self) -> bool:
        """Whether a call made now would emit.

        Useful to skip building expensive log arguments.
        """
        return should_log(self._config, self._reader)

    def explain(self) -> Decision:
        """Report the current decision and the rule that made it."""
        return explain(self._config, self._reader)

    @property
    def presenter(self) -> Presenter:
        return self._presenter if self._presenter is not None else get_presenter()

    def _log(self, severity: str, message: str, args) -> None:
        if not should_log(self._config, self._reader):
            return
        self.presenter.emit(severity, self.context, message, args)

    def debug(self, message: str, *args: Any) -> None:
        """Log at debug severity."""
        self._log(DEBUG, message, args)

    def info(self, message: str, *args: Any) -> None:
        """Log at info severity."""
        self._log(INFO, message, args)

    def warn(self, message: str, *args: Any) -> None:
        """Log at warn severity."""
        self._log(WARN, message, args)

    warning = warn

    def error(self, message: str, *args: Any) -> None:
        """Log at error severity."""
        self._log(ERROR, message, args)

    def group(self, label: str, body: Callable[[], Any],
              collapsed: bool = True, level: str = INFO) -> None:
        """Run ``body`` inside a labelled console group.

        When the logger is disabled, ``body`` is not called and nothing
        is written.

        Args:
            label: Group header text
            body: Zero-argument callable; logs it makes are nested
            collapsed: Start collapsed (default True)
            level: Severity used for the header style and channel

        Raises:
            ValueError: If ``level`` is not a known severity
        """
        validate_severity(level)
        if not should_log(self._config, self._reader):
            return
        self.presenter.group(level, self.context, label, body, collapsed)
