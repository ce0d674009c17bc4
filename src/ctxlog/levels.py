"""
Severity constants for ctxlog.

Severities are display-only. A logger is either enabled or it is not;
once enabled, every severity goes through. The ordering exists so
callers can sort or compare, never to filter:

    debug < info < warn < error

Each severity owns one console channel and one label style.
"""

DEBUG = 'debug'
INFO = 'info'
WARN = 'warn'
ERROR = 'error'

# Display order, quietest first
SEVERITIES = (DEBUG, INFO, WARN, ERROR)

SEVERITY_ORDER = {name: rank for rank, name in enumerate(SEVERITIES)}

# Label styles for rich consoles: (foreground, background).
# Same palette the styled browser console used.
SEVERITY_STYLES = {
    DEBUG: ('#000000', '#e0e0e0'),
    INFO:  ('#3c763d', '#dff0d8'),
    WARN:  ('#8a6d3b', '#fcf8e3'),
    ERROR: ('#a94442', '#f2dede'),
}


def validate_severity(name: str) -> str:
    """Return ``name`` if it is a known severity, else raise ValueError."""
    if name not in SEVERITY_ORDER:
        known = ', '.join(SEVERITIES)
        raise ValueError(f"Unknown severity {name!r} (expected one of: {known})")
    return name
