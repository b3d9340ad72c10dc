"""
Export API: collect a note and everything it links to, archive, and save.

Either the whole collected set is archived and saved, or nothing is written.
"""

from __future__ import annotations

import logging
import threading
import zipfile
from dataclasses import dataclass, field
from pathlib import Path

from notezip.archive import ZipArchiveWriter, save_archive
from notezip.collect import ExclusionConfig, TraversalCancelled, collect
from notezip.vault import NoteFile, Vault

log = logging.getLogger(__name__)


class NotezipError(Exception):
    """Base class for export errors reported to the user."""


class NoActiveNoteError(NotezipError):
    def __init__(self) -> None:
        super().__init__("No active note to share.")


class NoteNotFoundError(NotezipError):
    def __init__(self, note: str) -> None:
        super().__init__(f"Note not found in vault: {note}")
        self.note: str = note


class NoteExcludedError(NotezipError):
    def __init__(self, note: str) -> None:
        super().__init__(f"Note is excluded by the current exclusion rules: {note}")
        self.note: str = note


class ExportError(NotezipError):
    """The export failed while reading notes, building or saving the archive."""


class ExportCancelled(ExportError):
    pass


@dataclass
class ExportResult:
    """Outcome of an export. `destination` is `None` for a listing-only run."""

    documents: list[NoteFile] = field(default_factory=list)
    destination: Path | None = None

    @property
    def paths(self) -> list[str]:
        return [doc.path for doc in self.documents]


def default_destination(note: NoteFile, directory: Path | None = None) -> Path:
    """`<note basename>.zip` in `directory` (default: current directory)."""
    return (directory if directory is not None else Path.cwd()) / f"{note.basename}.zip"


def export_note(
    vault: Vault,
    note: str | Path | None,
    *,
    destination: str | Path | None = None,
    config: ExclusionConfig | None = None,
    markdown_links: bool = False,
    list_only: bool = False,
    cancel: threading.Event | None = None,
    writer: ZipArchiveWriter | None = None,
) -> ExportResult:
    """
    Export `note` and every note it transitively links to as a ZIP archive.

    Args:
        vault: The corpus to export from.
        note: Path or link name of the starting note.
        destination: Archive path. Defaults to `<note basename>.zip` in the
            current directory.
        config: Exclusion rules, used as a single snapshot for the whole run.
        markdown_links: Also follow standard Markdown links to local files.
        list_only: Collect only; don't build or save an archive.
        cancel: Event checked at each visit step.
        writer: Archive writer (default: `ZipArchiveWriter()`).

    Returns:
        The collected documents and, unless `list_only`, the saved path.

    Raises:
        NoActiveNoteError: If no note was given.
        NoteNotFoundError: If the note isn't in the vault.
        NoteExcludedError: If the note itself is excluded.
        ExportError: On any failure while reading, archiving or saving.
    """
    if note is None or not str(note).strip():
        raise NoActiveNoteError()

    root = vault.find_note(note)
    if root is None:
        raise NoteNotFoundError(str(note))

    config = config if config is not None else ExclusionConfig()
    try:
        visited = collect(root, vault, config, markdown_links=markdown_links, cancel=cancel)
    except TraversalCancelled as e:
        raise ExportCancelled(str(e)) from e
    except OSError as e:
        raise ExportError(f"Could not read note: {e}") from e

    documents: list[NoteFile] = list(visited)  # pyright: ignore[reportAssignmentType]
    if not documents:
        raise NoteExcludedError(root.path)

    if list_only:
        return ExportResult(documents=documents)

    target = Path(destination) if destination is not None else default_destination(root)
    writer = writer if writer is not None else ZipArchiveWriter()
    try:
        data = writer.write(documents, vault)
        saved = save_archive(data, target)
    except (OSError, zipfile.LargeZipFile) as e:
        raise ExportError(f"Could not write archive {target}: {e}") from e

    log.info("Exported %d notes to %s", len(documents), saved)
    return ExportResult(documents=documents, destination=saved)
