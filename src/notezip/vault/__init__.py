"""
A directory of Markdown notes as a corpus: gitignore-aware scanning, note-app
style link resolution, YAML frontmatter and content access.

Usage::

    from notezip.vault import Vault, VaultConfig

    vault = Vault("~/notes", VaultConfig(extend_exclude=["Archive/"]))
    note = vault.resolve_link_target("Project Plan")
"""

from notezip.vault.defaults import BINARY_EXTENSIONS, DEFAULT_EXCLUDES
from notezip.vault.frontmatter import parse_frontmatter, split_frontmatter
from notezip.vault.types import VaultConfig
from notezip.vault.vault import NoteFile, Vault, is_binary_path

__all__ = [
    "BINARY_EXTENSIONS",
    "DEFAULT_EXCLUDES",
    "NoteFile",
    "Vault",
    "VaultConfig",
    "is_binary_path",
    "parse_frontmatter",
    "split_frontmatter",
]
