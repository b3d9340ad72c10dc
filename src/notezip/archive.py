"""
Archive writing and saving.

The archive is built fully in memory and then written atomically, so a failed
export never leaves a partial file at the destination.
"""

from __future__ import annotations

import io
import logging
import zipfile
from collections.abc import Iterable
from pathlib import Path

from strif import atomic_output_file

from notezip.collect.types import Corpus, Document

log = logging.getLogger(__name__)


class ZipArchiveWriter:
    """
    Serializes documents into a ZIP archive keyed by their vault paths.

    Every document is stored as its raw bytes, text notes included, so files in
    any encoding come out exactly as they went in.
    """

    def __init__(self, compression: int = zipfile.ZIP_DEFLATED) -> None:
        self.compression: int = compression

    def write(self, documents: Iterable[Document], corpus: Corpus) -> bytes:
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", compression=self.compression) as zf:
            for document in documents:
                zf.writestr(document.path, corpus.read_binary(document))
        return buffer.getvalue()


def save_archive(data: bytes, destination: str | Path) -> Path:
    """Write archive bytes to `destination` atomically, creating parent directories."""
    destination = Path(destination)
    with atomic_output_file(destination, make_parents=True) as temp_path:
        Path(temp_path).write_bytes(data)
    log.debug("Wrote %d bytes to %s", len(data), destination)
    return destination
