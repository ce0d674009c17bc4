"""
Context filter compilation and matching.

A filter string selects which logger contexts are enabled, in the
style of the ``DEBUG`` variable used by many JavaScript and Python
debug tools:

    DEBUG="app:*,-app:noise svc:beta"

Grammar:
    - Tokens are separated by runs of commas and/or whitespace
    - A token starting with '-' is an exclude pattern (rest of token)
    - Any other token is an include pattern
    - '*' matches zero or more characters; everything else is literal
    - Matching is case-sensitive and covers the whole context string

Exclude beats include. An empty or absent filter string compiles to an
empty set, which means "no filtering configured", not "nothing passes".
"""

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional, Pattern, Tuple


_SEPARATORS = re.compile(r'[\s,]+')


@dataclass(frozen=True)
class CompiledFilterSet:
    """Compiled include and exclude matchers, in token order."""
    include: Tuple[Pattern, ...] = field(default_factory=tuple)
    exclude: Tuple[Pattern, ...] = field(default_factory=tuple)

    @property
    def configured(self) -> bool:
        """True when at least one include or exclude pattern exists."""
        return bool(self.include or self.exclude)


def compile_pattern(pattern: str) -> Pattern:
    """Compile a glob-like pattern into an anchored regular expression.

    Only '*' is special. Every other character, regex metacharacters
    included, is matched literally, so any string compiles.
    """
    source = '.*'.join(re.escape(part) for part in pattern.split('*'))
    return re.compile(source, re.DOTALL)


@lru_cache(maxsize=64)
def compile_filters(raw: Optional[str]) -> CompiledFilterSet:
    """Compile a raw filter string into include/exclude matchers.

    Args:
        raw: Filter string such as ``"app:*,-app:noise, svc:beta"``, or None

    Returns:
        CompiledFilterSet; both tuples are empty for None or blank input
    """
    if not raw:
        return CompiledFilterSet()

    include = []
    exclude = []
    for token in _SEPARATORS.split(raw):
        token = token.strip()
        if not token:
            continue
        if token.startswith('-'):
            exclude.append(compile_pattern(token[1:]))
        else:
            include.append(compile_pattern(token))
    return CompiledFilterSet(include=tuple(include), exclude=tuple(exclude))


def matches_context(context: str, filters: CompiledFilterSet) -> bool:
    """Decide whether ``context`` passes a configured filter set.

    Any exclude match wins. With no include patterns nothing passes;
    otherwise at least one include must match.
    """
    if any(rx.fullmatch(context) for rx in filters.exclude):
        return False
    if not filters.include:
        return False
    return any(rx.fullmatch(context) for rx in filters.include)


def _pattern_text(rx: Pattern) -> str:
    """Recover the glob text a matcher was compiled from."""
    return '*'.join(re.sub(r'\\(.)', r'\1', part, flags=re.DOTALL)
                    for part in rx.pattern.split('.*'))


def format_filter_set(filters: CompiledFilterSet) -> str:
    """Format a compiled filter set for display.

    Returns:
        Multi-line string listing include and exclude patterns.
    """
    if not filters.configured:
        return "Context filters: (not configured)"
    lines = ["Context filters:"]
    for rx in filters.include:
        lines.append(f"  + {_pattern_text(rx)}")
    for rx in filters.exclude:
        lines.append(f"  - {_pattern_text(rx)}")
    return "\n".join(lines)
