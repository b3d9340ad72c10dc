from notezip.collect import ExclusionConfig, VisitedSet, collect
from notezip.export_api import (
    ExportCancelled,
    ExportError,
    ExportResult,
    NoActiveNoteError,
    NoteExcludedError,
    NoteNotFoundError,
    NotezipError,
    export_note,
)
from notezip.vault import NoteFile, Vault, VaultConfig

__all__ = [
    "ExclusionConfig",
    "ExportCancelled",
    "ExportError",
    "ExportResult",
    "NoActiveNoteError",
    "NoteExcludedError",
    "NoteFile",
    "NoteNotFoundError",
    "NotezipError",
    "Vault",
    "VaultConfig",
    "VisitedSet",
    "collect",
    "export_note",
]
