"""Configuration types for the vault scan."""

from __future__ import annotations

from dataclasses import dataclass, field

from notezip.vault.defaults import DEFAULT_EXCLUDES


@dataclass
class VaultConfig:
    """
    Which files under the vault root make up the corpus.

    `tool_name` determines the ignore file name (e.g., `.notezipignore`).
    `exclude=None` means use `DEFAULT_EXCLUDES`; providing a list replaces them entirely.
    These are scan rules only; export exclusions live in `ExclusionConfig`.
    """

    tool_name: str = "notezip"
    exclude: list[str] | None = None
    extend_exclude: list[str] = field(default_factory=list)
    respect_gitignore: bool = True

    @property
    def effective_exclude(self) -> list[str]:
        """Combined exclude patterns: defaults (or `exclude`) + `extend_exclude`."""
        base = self.exclude if self.exclude is not None else list(DEFAULT_EXCLUDES)
        return base + self.extend_exclude
