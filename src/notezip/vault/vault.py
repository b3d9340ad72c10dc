"""
Vault: a directory of notes acting as the corpus for collection.

Scans the directory once, applying gitignore-aware exclusions, and then answers
link resolution, metadata and content requests against that snapshot.
"""

from __future__ import annotations

import logging
import os
import posixpath
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any

import pathspec

from notezip.vault.defaults import BINARY_EXTENSIONS
from notezip.vault.frontmatter import parse_frontmatter
from notezip.vault.gitignore import load_gitignore, load_tool_ignore
from notezip.vault.types import VaultConfig

log = logging.getLogger(__name__)

NOTE_EXTENSION = ".md"


def is_binary_path(path: str) -> bool:
    """Classify a file by extension. Unknown extensions are text."""
    suffix = PurePosixPath(path).suffix.lower()
    return suffix[1:] in BINARY_EXTENSIONS if suffix else False


@dataclass(frozen=True)
class NoteFile:
    """A file in the vault, identified by its vault-relative POSIX path."""

    path: str
    is_binary: bool = field(compare=False)

    @classmethod
    def from_path(cls, path: str) -> NoteFile:
        return cls(path=path, is_binary=is_binary_path(path))

    @property
    def name(self) -> str:
        """Bare filename, e.g. `Idea.md`."""
        return posixpath.basename(self.path)

    @property
    def basename(self) -> str:
        """Filename without extension, e.g. `Idea`."""
        return PurePosixPath(self.path).stem

    @property
    def extension(self) -> str:
        return PurePosixPath(self.path).suffix.lower()


def normalize_link_name(name: str) -> str:
    """
    Reduce a link target to a path-like lookup key: drop `#heading` and
    `^block` suffixes, normalize separators and leading `./`, `../` and `/`.
    Returns "" for pure in-note anchors.
    """
    name = name.split("#", 1)[0].split("^", 1)[0].strip()
    if not name:
        return ""
    name = name.replace("\\", "/")
    name = posixpath.normpath(name)
    while name.startswith("../"):
        name = name[3:]
    name = name.lstrip("/")
    if name in (".", ".."):
        return ""
    return name


class Vault:
    """
    Corpus backed by a directory of Markdown notes and attachments.

    Implements the `Corpus` protocol of `notezip.collect`.
    """

    def __init__(self, root: str | Path, config: VaultConfig | None = None) -> None:
        self.root: Path = Path(root).expanduser().resolve()
        if not self.root.is_dir():
            raise NotADirectoryError(f"Vault directory not found: {root}")
        self._config: VaultConfig = config if config is not None else VaultConfig()
        self._exclude_spec: pathspec.PathSpec = pathspec.GitIgnoreSpec.from_lines(
            self._config.effective_exclude
        )
        self._tool_ignore: pathspec.PathSpec | None = load_tool_ignore(
            self._config.tool_name, self.root
        )
        # Cache gitignore specs per directory to avoid re-reading from disk.
        self._gitignore_cache: dict[Path, pathspec.PathSpec | None] = {}
        self._metadata_cache: dict[str, dict[str, Any] | None] = {}

        self._by_path: dict[str, NoteFile] = {}
        # Lowercased path -> first note in sorted order, for case-insensitive lookup.
        self._by_folded_path: dict[str, NoteFile] = {}
        self._by_name: dict[str, list[NoteFile]] = {}
        for rel_path in sorted(self._scan()):
            note = NoteFile.from_path(rel_path)
            self._by_path[rel_path] = note
            shadowed = self._by_folded_path.setdefault(rel_path.lower(), note)
            if shadowed is not note:
                log.warning(
                    "%s differs from %s only by case; case-insensitive lookups use the latter",
                    rel_path,
                    shadowed.path,
                )
            self._by_name.setdefault(note.name.lower(), []).append(note)
        log.debug("Scanned %d files in vault %s", len(self._by_path), self.root)

    # --- Scanning ---

    def _scan(self) -> Iterable[str]:
        """
        Walk the vault using `os.walk()`, pruning excluded directories in-place,
        and yield vault-relative POSIX paths of the remaining files.
        """
        for dirpath, dirnames, filenames in os.walk(self.root):
            current = Path(dirpath)
            rel_dir = current.relative_to(self.root)

            gitignore_specs: list[pathspec.PathSpec] = []
            if self._config.respect_gitignore:
                gitignore_specs = self._get_gitignore_chain(current)

            dirnames[:] = sorted(
                d
                for d in dirnames
                if not self._is_excluded(d + "/", (rel_dir / d).as_posix() + "/", gitignore_specs)
            )

            for filename in filenames:
                rel_path = (rel_dir / filename).as_posix()
                if not self._is_excluded(filename, rel_path, gitignore_specs):
                    yield rel_path

    def _is_excluded(
        self, name: str, rel_path: str, gitignore_specs: list[pathspec.PathSpec]
    ) -> bool:
        if self._exclude_spec.match_file(name) or self._exclude_spec.match_file(rel_path):
            return True
        if any(spec.match_file(name) for spec in gitignore_specs):
            return True
        if self._tool_ignore is not None and (
            self._tool_ignore.match_file(name) or self._tool_ignore.match_file(rel_path)
        ):
            return True
        return False

    def _get_gitignore(self, directory: Path) -> pathspec.PathSpec | None:
        """Load and cache gitignore for a directory."""
        if directory not in self._gitignore_cache:
            self._gitignore_cache[directory] = load_gitignore(directory)
        return self._gitignore_cache[directory]

    def _get_gitignore_chain(self, directory: Path) -> list[pathspec.PathSpec]:
        """Collect all gitignore specs from the vault root down to `directory`."""
        specs: list[pathspec.PathSpec] = []
        current = self.root
        for part in (None, *directory.relative_to(self.root).parts):
            if part is not None:
                current = current / part
            spec = self._get_gitignore(current)
            if spec is not None:
                specs.append(spec)
        return specs

    # --- Lookup ---

    def __iter__(self) -> Iterator[NoteFile]:
        return iter(self._by_path.values())

    def __len__(self) -> int:
        return len(self._by_path)

    def get(self, path: str) -> NoteFile | None:
        """
        Lookup by vault-relative path. An exact-case match wins; otherwise the
        match is case-insensitive.
        """
        path = path.replace("\\", "/").lstrip("/")
        return self._by_path.get(path) or self._by_folded_path.get(path.lower())

    def resolve_link_target(self, name: str) -> NoteFile | None:
        """
        Resolve a link name to a file, following note-app conventions:

        - exact vault path, with or without the `.md` extension
        - otherwise any file whose path ends with the name (again with or
          without `.md`); the shortest path wins, ties broken alphabetically

        Returns `None` if nothing matches.
        """
        normalized = normalize_link_name(name)
        if not normalized:
            return None

        exact = self.get(normalized) or self.get(normalized + NOTE_EXTENSION)
        if exact is not None:
            return exact

        key = normalized.lower()
        last = key.rsplit("/", 1)[-1]
        candidates = self._by_name.get(last, []) + self._by_name.get(last + NOTE_EXTENSION, [])
        if "/" in key:
            suffixes = ("/" + key, "/" + key + NOTE_EXTENSION)
            candidates = [c for c in candidates if c.path.lower().endswith(suffixes)]
        if not candidates:
            return None
        return min(candidates, key=lambda c: (len(c.path), c.path))

    def find_note(self, ref: str | Path) -> NoteFile | None:
        """
        Find the note named by `ref`: a filesystem path inside the vault, a
        vault-relative path, or a link name.
        """
        candidate = Path(ref)
        if candidate.is_file():
            try:
                rel = candidate.resolve().relative_to(self.root).as_posix()
            except ValueError:
                return None
            return self.get(rel)
        return self.get(str(ref)) or self.resolve_link_target(str(ref))

    # --- Content ---

    def absolute_path(self, document: NoteFile) -> Path:
        return self.root / document.path

    def read_text(self, document: NoteFile) -> str:
        return self.absolute_path(document).read_text(encoding="utf-8", errors="replace")

    def read_binary(self, document: NoteFile) -> bytes:
        return self.absolute_path(document).read_bytes()

    def get_metadata(self, document: NoteFile) -> dict[str, Any] | None:
        """Frontmatter of a text note, cached per document. `None` for binaries."""
        if document.is_binary:
            return None
        if document.path not in self._metadata_cache:
            self._metadata_cache[document.path] = parse_frontmatter(
                self.read_text(document), source=document.path
            )
        return self._metadata_cache[document.path]
