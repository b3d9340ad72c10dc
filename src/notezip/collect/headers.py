"""
Removal of Markdown sections whose heading matches an excluded substring.

Sections are line based: a heading of level N starts skipping, and skipping
ends at the next heading of level N or shallower. Deeper headings inside a
skipped section are consumed without being checked.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Sequence

HEADING_RE = re.compile(r"^(#{1,6}) (.*)$")


def heading_level(line: str) -> tuple[int, str] | None:
    """Return `(level, text)` for an ATX heading line, or `None`."""
    match = HEADING_RE.match(line)
    if match is None:
        return None
    return len(match.group(1)), match.group(2).strip()


def _is_excluded_heading(text: str, needles: Sequence[str]) -> bool:
    lowered = text.lower()
    return any(needle in lowered for needle in needles)


def iter_kept_lines(lines: Iterable[str], excluded_headers: Sequence[str]) -> Iterator[str]:
    """Yield the lines that fall outside excluded sections."""
    needles = [h.strip().lower() for h in excluded_headers if h.strip()]
    skip_level: int | None = None

    for line in lines:
        heading = heading_level(line)
        if heading is not None:
            level, text = heading
            if skip_level is not None and level <= skip_level:
                skip_level = None
            if skip_level is None and _is_excluded_heading(text, needles):
                skip_level = level
                continue
        if skip_level is None:
            yield line


def filter_excluded_sections(text: str, excluded_headers: Sequence[str]) -> str:
    """
    Drop every section of `text` whose heading contains one of
    `excluded_headers` (case-insensitive substring match).

    Args:
        text: Raw document text.
        excluded_headers: Heading substrings to exclude.

    Returns:
        The text with excluded sections removed, or `text` itself when there is
        nothing to exclude.
    """
    if not any(h.strip() for h in excluded_headers):
        return text
    return "\n".join(iter_kept_lines(text.split("\n"), excluded_headers))
