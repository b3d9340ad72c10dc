"""
YAML frontmatter parsing.

A frontmatter block starts with a `---` line at the very top of the file and
ends at the next `---` or `...` line. Anything else means the note has no
frontmatter.
"""

from __future__ import annotations

import logging
import re
from typing import Any, cast

import yaml

log = logging.getLogger(__name__)

_OPEN = "---"
_CLOSE = ("---", "...")

_BOOL_TAG = "tag:yaml.org,2002:bool"


class FrontmatterLoader(yaml.SafeLoader):
    """
    `SafeLoader` with YAML 1.2 booleans. Only `true` and `false` (in lower, title
    or upper case) are booleans; `yes`, `no`, `on` and `off` stay strings.
    """


FrontmatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _BOOL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
FrontmatterLoader.add_implicit_resolver(
    _BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


def split_frontmatter(text: str) -> tuple[str | None, str]:
    """
    Split `text` into `(frontmatter, body)`. `frontmatter` is `None` when the
    text doesn't start with a complete frontmatter block.
    """
    text = text.removeprefix("\ufeff")
    lines = text.split("\n")
    if not lines or lines[0].rstrip() != _OPEN:
        return None, text
    for i in range(1, len(lines)):
        if lines[i].rstrip() in _CLOSE:
            return "\n".join(lines[1:i]), "\n".join(lines[i + 1 :])
    return None, text


def parse_frontmatter(text: str, source: str = "<text>") -> dict[str, Any] | None:
    """
    Parse the frontmatter of `text` into a dict.

    Returns `None` if there is no frontmatter, it is empty, or it is not a
    mapping. Invalid YAML is logged and treated as no frontmatter, so one broken
    note cannot abort an export.
    """
    raw, _body = split_frontmatter(text)
    if raw is None or not raw.strip():
        return None
    try:
        data = yaml.load(raw, Loader=FrontmatterLoader)
    except yaml.YAMLError as e:
        log.warning("Ignoring invalid frontmatter in %s: %s", source, e)
        return None
    if not isinstance(data, dict):
        return None
    return {str(key): value for key, value in cast(dict[Any, Any], data).items()}
