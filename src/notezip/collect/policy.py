"""
Per-document exclusion decision.

Checks run cheapest first and stop at the first match:
1. folder patterns against the document path
2. filename patterns against the bare filename
3. metadata keys with a truthy value (needs a metadata lookup)
"""

from __future__ import annotations

import posixpath
from collections.abc import Sequence
from typing import Any

from notezip.collect.patterns import matches_any, normalize_pattern
from notezip.collect.types import Document, ExclusionConfig, Metadata, MetadataAccessor


def is_truthy(value: Any) -> bool:
    """
    Metadata truthiness: only `True`, the number 1, `"true"` and `"1"` count.
    Anything else, including `"yes"` or `"True"`, does not.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    if isinstance(value, str):
        return value in ("true", "1")
    return False


def in_excluded_folder(path: str, folders: Sequence[str]) -> bool:
    """
    True if `path` lies inside a folder named by any of `folders`, at the vault
    root or nested anywhere below it.
    """
    lowered = path.lower()
    for folder in folders:
        pattern = normalize_pattern(folder).strip("/")
        if not pattern:
            continue
        if (
            lowered.startswith(pattern + "/")
            or f"/{pattern}/" in lowered
            or lowered == pattern
        ):
            return True
    return False


def has_excluded_filename(path: str, files: Sequence[str]) -> bool:
    name = posixpath.basename(path)
    return matches_any(name, files)


def has_excluded_metadata(metadata: Metadata | None, keys: Sequence[str]) -> bool:
    if not metadata:
        return False
    for key in keys:
        key = key.strip()
        if key and key in metadata and is_truthy(metadata[key]):
            return True
    return False


def exclusion_reason(
    document: Document,
    config: ExclusionConfig,
    get_metadata: MetadataAccessor | None = None,
) -> str | None:
    """
    Return a short description of the first rule that excludes `document`, or
    `None` if it is included. Metadata is only fetched when the cheaper checks
    pass and metadata rules are configured.
    """
    if in_excluded_folder(document.path, config.excluded_folders):
        return "folder"
    if has_excluded_filename(document.path, config.excluded_files):
        return "filename"
    if get_metadata is not None and any(k.strip() for k in config.excluded_metadata_keys):
        if has_excluded_metadata(get_metadata(document), config.excluded_metadata_keys):
            return "metadata"
    return None


def is_excluded(
    document: Document,
    config: ExclusionConfig,
    get_metadata: MetadataAccessor | None = None,
) -> bool:
    return exclusion_reason(document, config, get_metadata) is not None
