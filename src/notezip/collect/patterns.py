"""Wildcard matching for folder and filename exclusion rules."""

from __future__ import annotations

import re
from collections.abc import Sequence
from functools import lru_cache


@lru_cache(maxsize=256)
def _wildcard_regex(pattern: str) -> re.Pattern[str]:
    """Translate a `*` pattern into an anchored regex. Only `*` is special."""
    body = ".*".join(re.escape(part) for part in pattern.split("*"))
    return re.compile(body, re.DOTALL)


def normalize_pattern(pattern: str) -> str:
    """Trim and lowercase a pattern. Returns "" for blank patterns."""
    return pattern.strip().lower()


def matches_pattern(candidate: str, pattern: str) -> bool:
    """
    Case-insensitive whole-string match of `candidate` against `pattern`.

    Without a `*` this is plain equality. Each `*` matches any run of zero or
    more characters. Blank patterns never match.
    """
    normalized = normalize_pattern(pattern)
    if not normalized:
        return False
    candidate = candidate.lower()
    if "*" not in normalized:
        return candidate == normalized
    return _wildcard_regex(normalized).fullmatch(candidate) is not None


def matches_any(candidate: str, patterns: Sequence[str]) -> bool:
    return any(matches_pattern(candidate, pattern) for pattern in patterns)
