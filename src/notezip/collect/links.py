"""
Link extraction from note text.

Wiki links (`[[Target]]`, `[[Target|Alias]]`, `![[Embed.png]]`) are always
recognized. Standard Markdown links to local files (`[text](Other.md)`) are
optional and parsed with Marko.
"""

from __future__ import annotations

import re
from urllib.parse import unquote, urlsplit

from marko import Markdown, inline

from notezip.collect.types import Document, LinkResolver

# Target runs up to the first `|` or `]`; an optional alias follows the pipe.
# A `[` inside the target means the brackets are malformed, so the scan moves on.
WIKI_LINK_RE = re.compile(r"\[\[([^\[\]|]+)(?:\|[^\]]*)?\]\]")


def find_wiki_link_targets(text: str) -> list[str]:
    """Return raw wiki link targets in order of appearance (duplicates kept)."""
    targets: list[str] = []
    for match in WIKI_LINK_RE.finditer(text):
        target = match.group(1).strip()
        if target:
            targets.append(target)
    return targets


def _local_destination(dest: str) -> str | None:
    """
    Reduce a Markdown link destination to a vault lookup name, or `None` for
    external URLs and in-page anchors.
    """
    dest = dest.strip()
    if not dest or dest.startswith("#"):
        return None
    parts = urlsplit(dest)
    # Single-letter schemes are Windows drive letters, not URLs.
    if parts.scheme and len(parts.scheme) > 1:
        return None
    if parts.netloc:
        return None
    path = unquote(dest.split("#", 1)[0]).strip()
    return path or None


def find_markdown_link_targets(text: str) -> list[str]:
    """
    Return local destinations of Markdown links and images in `text`, in
    document order. External URLs and `#fragment` links are skipped.
    """
    doc = Markdown().parse(text)
    targets: list[str] = []

    def visit(element: object) -> None:
        if isinstance(element, (inline.Link, inline.Image)):
            target = _local_destination(element.dest)
            if target is not None:
                targets.append(target)

        children = getattr(element, "children", None)
        if isinstance(children, list):
            for child in children:  # pyright: ignore[reportUnknownVariableType]
                visit(child)  # pyright: ignore[reportUnknownArgumentType]

    visit(doc)
    return targets


def extract_links(
    text: str,
    resolve: LinkResolver,
    *,
    markdown_links: bool = False,
) -> list[Document]:
    """
    Resolve every link in `text` to a document.

    Args:
        text: Note text, already filtered of excluded sections.
        resolve: Host lookup from link name to document. Returns `None` when the
            target doesn't exist; such links are dropped silently.
        markdown_links: Also follow standard Markdown links to local files.
            Their targets come after all wiki link targets.

    Returns:
        Resolved documents in order of appearance. Duplicates are kept.
    """
    names = find_wiki_link_targets(text)
    if markdown_links:
        names.extend(find_markdown_link_targets(text))

    resolved: list[Document] = []
    for name in names:
        document = resolve(name)
        if document is not None:
            resolved.append(document)
    return resolved
