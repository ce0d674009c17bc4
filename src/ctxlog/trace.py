"""
Function tracing decorator.

Routes call tracing through a Logger, so tracing is enabled, filtered
and silenced exactly like the logger's own calls.
"""

import functools
from pathlib import Path

from .levels import DEBUG, validate_severity


def _short_repr(value):
    if isinstance(value, Path):
        return f"Path('{value}')"
    if isinstance(value, str) and len(value) > 50:
        return f"'{value[:47]}...'"
    if isinstance(value, (list, tuple)) and len(value) > 3:
        return f"[...{len(value)} items...]"
    return repr(value)


def traced(logger, level=DEBUG):
    """Decorator factory: log entry, return value and exceptions of a function.

    Arguments are only formatted when the logger is enabled.

    Usage::

        log = Logger(context='db')

        @traced(log)
        def fetch(key):
            ...
    """
    validate_severity(level)

    def decorator(func):
        name = f"{func.__module__}.{func.__qualname__}"

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            if not logger.enabled:
                return func(*args, **kwargs)

            emit = getattr(logger, level)
            args_repr = [_short_repr(arg) for arg in args]
            args_repr += [f"{key}={_short_repr(value)}"
                          for key, value in kwargs.items()]
            emit(f">> {name}({', '.join(args_repr)})")

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                emit(f"!! {name} raised: {type(e).__name__}: {e}")
                raise

            if result is not None:
                emit(f"<< {name} returned: {_short_repr(result)}")
            return result

        return wrapper

    return decorator
