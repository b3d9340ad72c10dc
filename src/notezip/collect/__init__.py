"""
Reference-graph collection: starting from one document, find every document it
transitively links to, honoring folder, filename, metadata and heading
exclusion rules.

No imports from `notezip` outside this package. The host environment is
supplied as a `Corpus`.

Usage::

    from notezip.collect import ExclusionConfig, collect

    config = ExclusionConfig(
        excluded_folders=["Templates"],
        excluded_headers=["Private"],
    )
    visited = collect(root_note, vault, config)
"""

from notezip.collect.headers import filter_excluded_sections
from notezip.collect.links import extract_links
from notezip.collect.patterns import matches_pattern
from notezip.collect.policy import is_excluded, is_truthy
from notezip.collect.traversal import TraversalCancelled, collect
from notezip.collect.types import Corpus, Document, ExclusionConfig, VisitedSet

__all__ = [
    "Corpus",
    "Document",
    "ExclusionConfig",
    "TraversalCancelled",
    "VisitedSet",
    "collect",
    "extract_links",
    "filter_excluded_sections",
    "is_excluded",
    "is_truthy",
    "matches_pattern",
]
