"""Types shared by the collection engine and the hosts that feed it."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol


class Document(Protocol):
    """
    A unit of content in the corpus. The engine only ever looks at the identity
    (`path`) and the binary classification; content and metadata are read through
    the `Corpus`.
    """

    @property
    def path(self) -> str: ...

    @property
    def is_binary(self) -> bool: ...


Metadata = Mapping[str, Any]

MetadataAccessor = Callable[[Document], "Metadata | None"]

LinkResolver = Callable[[str], "Document | None"]


class Corpus(Protocol):
    """Lookup service provided by the host environment."""

    def resolve_link_target(self, name: str) -> Document | None: ...

    def get_metadata(self, document: Document) -> Metadata | None: ...

    def read_text(self, document: Document) -> str: ...

    def read_binary(self, document: Document) -> bytes: ...


def _as_tuple(values: Iterable[str] | None) -> tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str):
        return (values,)
    return tuple(values)


@dataclass(frozen=True)
class ExclusionConfig:
    """
    Immutable snapshot of the exclusion rules for one collection run.

    Values arrive already split and trimmed by the config layer; the engine still
    skips blank entries so an empty pattern can never match everything.
    """

    excluded_metadata_keys: Sequence[str] = ()
    excluded_headers: Sequence[str] = ()
    excluded_folders: Sequence[str] = ()
    excluded_files: Sequence[str] = ()

    def __post_init__(self) -> None:
        # Freeze whatever sequence type the caller passed in.
        for name in (
            "excluded_metadata_keys",
            "excluded_headers",
            "excluded_folders",
            "excluded_files",
        ):
            object.__setattr__(self, name, _as_tuple(getattr(self, name)))


class VisitedSet:
    """
    Insertion-ordered set of included documents, keyed by path.

    Only grows during a run. Iteration yields documents in the order they were
    first visited, which keeps exports deterministic.
    """

    def __init__(self) -> None:
        self._documents: dict[str, Document] = {}

    def add(self, document: Document) -> None:
        self._documents.setdefault(document.path, document)

    def __contains__(self, item: object) -> bool:
        path = item if isinstance(item, str) else getattr(item, "path", None)
        return path in self._documents

    def __iter__(self) -> Iterator[Document]:
        return iter(self._documents.values())

    def __len__(self) -> int:
        return len(self._documents)

    def paths(self) -> list[str]:
        return list(self._documents)

    def __repr__(self) -> str:
        return f"VisitedSet({self.paths()!r})"
