"""
Depth-first collection of a document and everything it links to.

A document is marked visited before its text is scanned, so cycles terminate
and diamonds are scanned once. Excluded documents are never marked visited and
never contribute links. The walk uses an explicit stack, so graph depth is not
limited by the interpreter's recursion limit.
"""

from __future__ import annotations

import logging
import threading

from notezip.collect.headers import filter_excluded_sections
from notezip.collect.links import extract_links
from notezip.collect.policy import exclusion_reason
from notezip.collect.types import Corpus, Document, ExclusionConfig, VisitedSet

log = logging.getLogger(__name__)


class TraversalCancelled(Exception):
    """Raised when a collection run is cancelled between visits."""


def collect(
    root: Document,
    corpus: Corpus,
    config: ExclusionConfig | None = None,
    *,
    markdown_links: bool = False,
    cancel: threading.Event | None = None,
) -> VisitedSet:
    """
    Collect `root` and every document reachable from it through links.

    Args:
        root: The starting document.
        corpus: Host lookup service for links, metadata and content.
        config: Exclusion rules; one snapshot is used for the whole run.
        markdown_links: Also follow standard Markdown links to local files.
        cancel: If set during the run, `TraversalCancelled` is raised at the
            next visit step.

    Returns:
        The visited set, in first-visit order. Empty if `root` is excluded.
    """
    config = config if config is not None else ExclusionConfig()
    visited = VisitedSet()
    stack: list[Document] = [root]

    while stack:
        if cancel is not None and cancel.is_set():
            raise TraversalCancelled(f"Collection cancelled after {len(visited)} documents")

        document = stack.pop()
        if document.path in visited:
            continue

        reason = exclusion_reason(document, config, corpus.get_metadata)
        if reason is not None:
            log.debug("Excluded %s (%s rule)", document.path, reason)
            continue

        visited.add(document)
        log.debug("Visited %s", document.path)

        if document.is_binary:
            continue

        text = filter_excluded_sections(corpus.read_text(document), config.excluded_headers)
        children = extract_links(text, corpus.resolve_link_target, markdown_links=markdown_links)
        # Reversed so children pop in the order they appear in the text.
        stack.extend(reversed(children))

    log.info("Collected %d documents starting from %s", len(visited), root.path)
    return visited
