"""
Enablement resolver — decides, per call, whether a logger emits.

Precedence, first matching rule wins:

    1. explicit     Logger(enabled=True/False) is returned verbatim
    2. disabled     DISABLE_LOGS == 'true' silences everything
    3. filter       DEBUG (or LOGS) patterns decide for a logger with a
                    context, whenever at least one pattern is configured.
                    No fallthrough: an unmatched context stays silent
                    even when LOGS_ENABLED is set.
    4. enabled      LOGS_ENABLED == 'true' turns logging on
    5. environment  on unless PYTHON_ENV == 'production'

Signals are re-read on every call. Changing a setting or environment
variable takes effect on the very next log statement.
"""

from dataclasses import dataclass
from typing import Optional

from .filters import compile_filters, matches_context
from .signals import (
    DEBUG_KEYS, DISABLE_KEYS, ENABLED_KEYS, LOGS_KEYS, ENV_KEY,
    SignalReader, get_reader, is_production, is_true,
)


# Rule names, in precedence order
RULE_EXPLICIT = 'explicit'
RULE_DISABLED = 'disabled'
RULE_FILTER = 'filter'
RULE_ENABLED = 'enabled'
RULE_ENVIRONMENT = 'environment'


@dataclass(frozen=True)
class Decision:
    """Outcome of one resolution, with the rule that produced it."""
    enabled: bool
    rule: str
    detail: str = ''


def read_filter_string(reader: SignalReader) -> Optional[str]:
    """Read the raw context filter: the DEBUG family, else the LOGS family.

    The LOGS family is consulted only when no DEBUG key is defined at
    all; a defined but empty DEBUG still wins.
    """
    raw = reader.resolve(DEBUG_KEYS)
    if raw is None:
        raw = reader.resolve(LOGS_KEYS)
    return raw


def explain(config, reader: Optional[SignalReader] = None) -> Decision:
    """Resolve enablement for a logger config and report which rule decided.

    Args:
        config: Object with ``context`` and ``explicit_enabled`` attributes
            (a LoggerConfig)
        reader: Signal source; defaults to the module-level reader

    Returns:
        Decision with the boolean outcome and the deciding rule
    """
    if isinstance(config.explicit_enabled, bool):
        return Decision(config.explicit_enabled, RULE_EXPLICIT)

    # One settings read per resolution, however many keys are tried
    reader = (reader if reader is not None else get_reader()).snapshot()

    if is_true(reader.resolve(DISABLE_KEYS)):
        return Decision(False, RULE_DISABLED, 'DISABLE_LOGS is true')

    raw = read_filter_string(reader)
    filters = compile_filters(raw)
    if config.context and filters.configured:
        matched = matches_context(config.context, filters)
        verb = 'matches' if matched else 'does not match'
        return Decision(matched, RULE_FILTER,
                        f"context {config.context!r} {verb} {raw!r}")

    if is_true(reader.resolve(ENABLED_KEYS)):
        return Decision(True, RULE_ENABLED, 'LOGS_ENABLED is true')

    prod = is_production(reader)
    return Decision(not prod, RULE_ENVIRONMENT,
                    f"{ENV_KEY}={reader.env(ENV_KEY)!r}")


def should_log(config, reader: Optional[SignalReader] = None) -> bool:
    """Return True when a logger with this config should emit right now."""
    return explain(config, reader).enabled
