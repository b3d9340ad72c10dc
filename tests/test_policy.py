"""Tests for the per-document exclusion policy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest

from notezip.collect.policy import (
    exclusion_reason,
    in_excluded_folder,
    is_excluded,
    is_truthy,
)
from notezip.collect.types import ExclusionConfig


@dataclass(frozen=True)
class Doc:
    path: str
    is_binary: bool = False


class MetadataLookup:
    """Metadata accessor that records which documents were asked about."""

    def __init__(self, metadata: dict[str, dict[str, Any]]) -> None:
        self.metadata = metadata
        self.calls: list[str] = []

    def __call__(self, document: Doc) -> dict[str, Any] | None:
        self.calls.append(document.path)
        return self.metadata.get(document.path)


class TestIsTruthy:
    @pytest.mark.parametrize("value", [True, 1, 1.0, "true", "1"])
    def test_truthy_values(self, value: Any) -> None:
        assert is_truthy(value)

    @pytest.mark.parametrize(
        "value", [False, 0, 2, "false", "0", "yes", "True", "TRUE", "", None, [True], {}]
    )
    def test_other_values_are_not_truthy(self, value: Any) -> None:
        assert not is_truthy(value)


class TestFolderExclusion:
    def test_root_and_nested_folders(self) -> None:
        folders = ["Templates"]
        assert in_excluded_folder("Templates/a.md", folders)
        assert in_excluded_folder("Notes/Templates/b.md", folders)
        assert not in_excluded_folder("MyTemplates/c.md", folders)

    def test_exact_path_match(self) -> None:
        assert in_excluded_folder("Templates", ["templates"])

    def test_case_insensitive_and_trimmed(self) -> None:
        assert in_excluded_folder("ARCHIVE/old.md", ["  archive "])

    def test_trailing_slash_in_pattern(self) -> None:
        assert in_excluded_folder("Archive/old.md", ["Archive/"])

    def test_folder_name_prefix_is_not_a_match(self) -> None:
        assert not in_excluded_folder("Archived/old.md", ["Archive"])
        assert not in_excluded_folder("Notes/Archive.md", ["Archive"])

    def test_nested_pattern(self) -> None:
        assert in_excluded_folder("Work/Drafts/x.md", ["work/drafts"])
        assert not in_excluded_folder("Drafts/x.md", ["work/drafts"])

    def test_blank_patterns_skipped(self) -> None:
        assert not in_excluded_folder("Notes/a.md", ["", "  ", "/"])


def test_filename_wildcard():
    config = ExclusionConfig(excluded_files=["*.tmp"])
    assert is_excluded(Doc("Notes/notes.tmp"), config)
    assert not is_excluded(Doc("Notes/notes.tmp.bak"), config)


def test_filename_matches_bare_name_only():
    config = ExclusionConfig(excluded_files=["secret.md"])
    assert is_excluded(Doc("Deep/Folder/Secret.md"), config)
    assert not is_excluded(Doc("secret.md/other.md"), config)


@pytest.mark.parametrize("value", ["true", 1, True])
def test_truthy_metadata_excludes(value: Any):
    lookup = MetadataLookup({"a.md": {"private": value}})
    config = ExclusionConfig(excluded_metadata_keys=["private"])
    assert is_excluded(Doc("a.md"), config, lookup)


@pytest.mark.parametrize("value", ["false", 0])
def test_falsy_metadata_does_not_exclude(value: Any):
    lookup = MetadataLookup({"a.md": {"private": value}})
    config = ExclusionConfig(excluded_metadata_keys=["private"])
    assert not is_excluded(Doc("a.md"), config, lookup)


def test_missing_key_or_metadata_does_not_exclude():
    lookup = MetadataLookup({"a.md": {"draft": True}})
    config = ExclusionConfig(excluded_metadata_keys=["private"])
    assert not is_excluded(Doc("a.md"), config, lookup)
    assert not is_excluded(Doc("no-frontmatter.md"), config, lookup)


def test_any_configured_key_excludes():
    lookup = MetadataLookup({"a.md": {"draft": "1"}})
    config = ExclusionConfig(excluded_metadata_keys=["private", "draft"])
    assert exclusion_reason(Doc("a.md"), config, lookup) == "metadata"


def test_cheaper_checks_short_circuit_metadata_lookup():
    lookup = MetadataLookup({"Templates/a.md": {"private": True}})
    config = ExclusionConfig(
        excluded_folders=["Templates"],
        excluded_files=["*.tmp"],
        excluded_metadata_keys=["private"],
    )
    assert exclusion_reason(Doc("Templates/a.md"), config, lookup) == "folder"
    assert exclusion_reason(Doc("b.tmp"), config, lookup) == "filename"
    assert lookup.calls == []


def test_no_metadata_lookup_without_metadata_rules():
    lookup = MetadataLookup({})
    assert not is_excluded(Doc("a.md"), ExclusionConfig(excluded_files=["*.tmp"]), lookup)
    assert lookup.calls == []


def test_empty_config_excludes_nothing():
    config = ExclusionConfig()
    assert not is_excluded(Doc("Templates/a.md"), config)


def test_config_is_frozen_snapshot():
    folders = ["Templates"]
    config = ExclusionConfig(excluded_folders=folders)
    folders.append("Archive")
    assert config.excluded_folders == ("Templates",)
    with pytest.raises(AttributeError):
        config.excluded_folders = ("Other",)  # type: ignore[misc]
