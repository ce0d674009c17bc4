"""
Presenter — renders log lines and groups to the console.

Two renderings share one write routine:

    rich   An interactive terminal with colour, or a Jupyter front end.
           The ``[SEVERITY] [context]`` label is drawn bold in the
           severity's colours and extra arguments are handed to rich
           for pretty inspection.
    plain  Everything else (pipes, files, CI, NO_COLOR, TERM=dumb).
           The same label is a plain text prefix.

Channels:
    debug, info  → stdout
    warn, error  → stderr

Streams are looked up at write time, so redirected or captured
``sys.stdout``/``sys.stderr`` are honoured.

Groups indent every line written inside them by two spaces per level,
like a console group. Grouping is synchronous: only lines written
while the body runs belong to the group.
"""

import sys
import textwrap
from functools import lru_cache
from typing import Any, Callable, Dict, Optional, Sequence, TextIO

from rich.console import Console, ConsoleRenderable
from rich.pretty import pretty_repr
from rich.style import Style
from rich.text import Text

from .levels import DEBUG, ERROR, INFO, SEVERITY_STYLES, WARN


CHANNELS = {
    DEBUG: 'stdout',
    INFO:  'stdout',
    WARN:  'stderr',
    ERROR: 'stderr',
}

INDENT = '  '
COLLAPSED_MARKER = '▸ '
EXPANDED_MARKER = '▾ '


@lru_cache(maxsize=None)
def has_rich_console(stderr: bool = False) -> bool:
    """Probe once per channel whether it writes to a styled console.

    stdout and stderr are probed separately, so a redirected stderr
    gets plain text while an interactive stdout stays styled.
    """
    console = Console(stderr=stderr)
    if console.is_jupyter:
        return True
    return console.is_terminal and console.color_system is not None


def _unprintable(value) -> str:
    return f"<unprintable {type(value).__name__} object>"


def safe_str(value) -> str:
    """str() that never raises; broken objects get a placeholder."""
    try:
        return str(value)
    except Exception:
        return _unprintable(value)


def safe_renderable(value):
    """Pass ``value`` to rich only if rich can render it without raising."""
    if isinstance(value, (str, Text, ConsoleRenderable)):
        return value
    try:
        # rich pretty-prints containers and str()s everything else
        pretty_repr(value)
        str(value)
    except Exception:
        return _unprintable(value)
    return value


def format_label(severity: str, context: Optional[str] = None) -> str:
    """Build the ``[SEVERITY] [context]`` label; context omitted when empty."""
    label = f"[{severity.upper()}]"
    if context:
        label += f" [{context}]"
    return label


def label_style(severity: str) -> Style:
    """Bold label style in the severity's foreground/background colours."""
    color, bgcolor = SEVERITY_STYLES[severity]
    return Style(bold=True, color=color, bgcolor=bgcolor)


class Presenter:
    """Writes labelled log lines and nested groups to console channels.

    Usage::

        p = Presenter()
        p.emit('info', 'app:core', 'started', [{'pid': 42}])
        p.group('warn', 'app:core', 'retrying', lambda: p.emit(...))

    Args:
        rich: Force rich (True) or plain (False) rendering. None probes
            each channel (stdout or stderr) once per process.
        streams: Optional severity → stream mapping. Missing severities
            fall back to the live sys.stdout/sys.stderr.
    """

    def __init__(self, rich: Optional[bool] = None,
                 streams: Optional[Dict[str, TextIO]] = None):
        self._rich = rich
        self.streams: Dict[str, TextIO] = dict(streams or {})
        self.depth = 0

    def rich_for(self, severity: str) -> bool:
        """Whether output on this severity's channel is styled."""
        if self._rich is not None:
            return self._rich
        return has_rich_console(CHANNELS[severity] == 'stderr')

    def stream_for(self, severity: str) -> TextIO:
        stream = self.streams.get(severity)
        if stream is not None:
            return stream
        return sys.stderr if CHANNELS[severity] == 'stderr' else sys.stdout

    def emit(self, severity: str, context: Optional[str], message: str,
             args: Sequence[Any] = ()) -> None:
        """Write one log line on the severity's channel."""
        self._write(severity, format_label(severity, context), message, args)

    def group(self, severity: str, context: Optional[str], label: str,
              body: Callable[[], Any], collapsed: bool = True) -> None:
        """Open a group, run ``body`` inside it, then close it.

        The group is closed even if ``body`` raises; the exception
        propagates to the caller.
        """
        header = format_label(severity, context)
        rich = self.rich_for(severity)
        marker = COLLAPSED_MARKER if collapsed else EXPANDED_MARKER
        self._write(severity, header, label, (), marker=marker if rich else '')
        self.depth += 1
        try:
            if rich:
                # Repeat the header inside the group; some consoles render
                # the opener line without its style.
                self._write(severity, header, label, ())
            body()
        finally:
            self.depth -= 1

    def _write(self, severity: str, label: str, message: str,
               args: Sequence[Any], marker: str = '') -> None:
        stream = self.stream_for(severity)
        indent = INDENT * self.depth
        if self.rich_for(severity):
            console = Console(file=stream, force_terminal=self._rich,
                              soft_wrap=True)
            text = Text(indent)
            text.append(marker + label, style=label_style(severity))
            text.append(f" {safe_str(message)}")
            console.print(text, *(safe_renderable(arg) for arg in args),
                          markup=False, highlight=False)
            return
        line = ' '.join([f"{marker}{label} {safe_str(message)}"]
                        + [safe_str(arg) for arg in args])
        print(textwrap.indent(line, indent) if indent else line, file=stream)


# =============================================================================
# Module-level default presenter
# =============================================================================

_presenter: Optional[Presenter] = None


def set_presenter(presenter: Optional[Presenter]) -> Optional[Presenter]:
    """Install the default Presenter (None restores the built-in one).

    Returns the previously installed presenter so callers can restore it.
    """
    global _presenter
    previous = _presenter
    _presenter = presenter
    return previous


def get_presenter() -> Presenter:
    """Get the default Presenter, creating one if needed."""
    global _presenter
    if _presenter is None:
        _presenter = Presenter()
    return _presenter
