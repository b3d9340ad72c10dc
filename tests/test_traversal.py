"""Tests for reference-graph collection."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

import pytest

from notezip.collect import ExclusionConfig, TraversalCancelled, VisitedSet, collect


@dataclass(frozen=True)
class Doc:
    path: str
    is_binary: bool = False


@dataclass
class MemoryCorpus:
    """In-memory corpus: notes are named by path without `.md`."""

    texts: dict[str, str | bytes]
    metadata: dict[str, dict[str, Any]] = field(default_factory=dict)
    reads: list[str] = field(default_factory=list)

    def doc(self, name: str) -> Doc:
        path = name if "." in name.rsplit("/", 1)[-1] else f"{name}.md"
        return Doc(path, is_binary=isinstance(self.texts[name], bytes))

    def resolve_link_target(self, name: str) -> Doc | None:
        return self.doc(name) if name in self.texts else None

    def get_metadata(self, document: Doc) -> dict[str, Any] | None:
        return self.metadata.get(document.path)

    def read_text(self, document: Doc) -> str:
        self.reads.append(document.path)
        text = self.texts[document.path.removesuffix(".md")]
        assert isinstance(text, str)
        return text

    def read_binary(self, document: Doc) -> bytes:
        data = self.texts[document.path]
        assert isinstance(data, bytes)
        return data


def _collect(corpus: MemoryCorpus, root: str, **kwargs: Any) -> VisitedSet:
    return collect(corpus.doc(root), corpus, **kwargs)


def test_cycle_terminates():
    corpus = MemoryCorpus({"A": "[[B]]", "B": "[[A]]"})
    visited = _collect(corpus, "A")
    assert set(visited.paths()) == {"A.md", "B.md"}
    assert corpus.reads == ["A.md", "B.md"]


def test_self_link():
    corpus = MemoryCorpus({"A": "[[A]] [[A|me]]"})
    assert _collect(corpus, "A").paths() == ["A.md"]


def test_diamond_visits_shared_child_once():
    corpus = MemoryCorpus(
        {"A": "[[B]] [[C]]", "B": "[[D]]", "C": "[[D]]", "D": "leaf"},
    )
    visited = _collect(corpus, "A")
    assert set(visited.paths()) == {"A.md", "B.md", "C.md", "D.md"}
    assert corpus.reads.count("D.md") == 1


def test_depth_first_discovery_order():
    corpus = MemoryCorpus(
        {"A": "[[B]] [[C]]", "B": "[[D]]", "C": "[[E]]", "D": "", "E": ""},
    )
    assert _collect(corpus, "A").paths() == ["A.md", "B.md", "D.md", "C.md", "E.md"]


def test_excluded_document_blocks_descent():
    corpus = MemoryCorpus({"A": "[[B]]", "B": "[[C]]", "C": ""})
    config = ExclusionConfig(excluded_files=["B.md"])
    visited = _collect(corpus, "A", config=config)
    assert visited.paths() == ["A.md"]
    assert "C.md" not in visited
    assert corpus.reads == ["A.md"]


def test_excluded_document_reachable_other_way_is_still_excluded():
    corpus = MemoryCorpus(
        {"A": "[[Private]] [[B]]", "B": "[[Private]]", "Private": "[[C]]", "C": ""},
        metadata={"Private.md": {"private": True}},
    )
    config = ExclusionConfig(excluded_metadata_keys=["private"])
    assert _collect(corpus, "A", config=config).paths() == ["A.md", "B.md"]


def test_excluded_root_yields_empty_set():
    corpus = MemoryCorpus({"Templates/A": "[[B]]", "B": ""})
    config = ExclusionConfig(excluded_folders=["Templates"])
    visited = _collect(corpus, "Templates/A", config=config)
    assert len(visited) == 0
    assert corpus.reads == []


def test_binary_root_is_a_singleton():
    corpus = MemoryCorpus({"image.png": b"\x89PNG [[A]] [[B]]", "A": "", "B": ""})
    visited = _collect(corpus, "image.png")
    assert visited.paths() == ["image.png"]
    assert corpus.reads == []


def test_binary_child_is_included_but_not_scanned():
    corpus = MemoryCorpus({"A": "![[chart.png]]", "chart.png": b"[[B]]", "B": ""})
    assert _collect(corpus, "A").paths() == ["A.md", "chart.png"]


def test_unresolved_links_are_ignored():
    corpus = MemoryCorpus({"A": "[[Missing]] [[B]]", "B": ""})
    assert _collect(corpus, "A").paths() == ["A.md", "B.md"]


def test_excluded_headers_hide_links():
    corpus = MemoryCorpus(
        {
            "A": "# Keep\n[[X]]\n## Excluded\n[[Y]]\n## Keep2\n[[Z]]",
            "X": "",
            "Y": "",
            "Z": "",
        }
    )
    config = ExclusionConfig(excluded_headers=["Excluded"])
    assert set(_collect(corpus, "A", config=config).paths()) == {"A.md", "X.md", "Z.md"}


def test_document_linked_from_excluded_section_and_elsewhere_is_included():
    corpus = MemoryCorpus(
        {"A": "## Private\n[[B]]\n## Public\n[[C]]", "C": "[[B]]", "B": ""},
    )
    config = ExclusionConfig(excluded_headers=["private"])
    assert _collect(corpus, "A", config=config).paths() == ["A.md", "C.md", "B.md"]


def test_markdown_links_are_opt_in():
    corpus = MemoryCorpus({"A": "[b](B)", "B": ""})
    assert _collect(corpus, "A").paths() == ["A.md"]
    assert _collect(corpus, "A", markdown_links=True).paths() == ["A.md", "B.md"]


def test_deep_chain_does_not_hit_recursion_limit():
    depth = 5000
    texts: dict[str, str | bytes] = {f"N{i}": f"[[N{i + 1}]]" for i in range(depth)}
    texts[f"N{depth}"] = ""
    corpus = MemoryCorpus(texts)
    assert len(_collect(corpus, "N0")) == depth + 1


def test_cancelled_run_raises():
    corpus = MemoryCorpus({"A": "[[B]]", "B": ""})
    cancel = threading.Event()
    cancel.set()
    with pytest.raises(TraversalCancelled):
        _collect(corpus, "A", cancel=cancel)


def test_read_failure_propagates():
    class FailingCorpus(MemoryCorpus):
        def read_text(self, document: Doc) -> str:
            if document.path == "B.md":
                raise OSError("disk on fire")
            return super().read_text(document)

    corpus = FailingCorpus({"A": "[[B]]", "B": ""})
    with pytest.raises(OSError, match="disk on fire"):
        _collect(corpus, "A")


def test_visited_set_membership():
    visited = VisitedSet()
    visited.add(Doc("a.md"))
    visited.add(Doc("a.md"))
    assert len(visited) == 1
    assert "a.md" in visited
    assert Doc("a.md") in visited
    assert "b.md" not in visited
    assert [d.path for d in visited] == ["a.md"]
