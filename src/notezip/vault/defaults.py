"""
Default scan exclusions and the binary extension set.

Exclusion patterns use gitignore syntax. Directory patterns end with `/`.
"""

from __future__ import annotations

# Directories that never hold notes worth sharing.
# Applied during the vault scan (prune, don't enter).
DEFAULT_EXCLUDES: list[str] = [
    # Version control
    ".git/",
    ".hg/",
    ".svn/",
    # Note app state
    ".obsidian/",
    ".trash/",
    ".logseq/",
    # Tooling
    ".venv/",
    "venv/",
    "__pycache__/",
    "node_modules/",
    ".cache/",
    # IDE/Editor
    ".idea/",
    ".vscode/",
    # OS litter
    ".DS_Store",
    "Thumbs.db",
]

# Extensions (lowercase, no dot) whose content is never scanned for links.
BINARY_EXTENSIONS: frozenset[str] = frozenset(
    [
        # Images
        "png",
        "jpg",
        "jpeg",
        "gif",
        "bmp",
        "svg",
        "webp",
        "ico",
        "tif",
        "tiff",
        "heic",
        "avif",
        # Audio
        "mp3",
        "wav",
        "ogg",
        "flac",
        "m4a",
        "aac",
        "opus",
        "3gp",
        # Video
        "mp4",
        "mov",
        "mkv",
        "avi",
        "webm",
        "ogv",
        # Archives
        "zip",
        "tar",
        "gz",
        "tgz",
        "bz2",
        "xz",
        "7z",
        "rar",
        # Office documents
        "pdf",
        "doc",
        "docx",
        "xls",
        "xlsx",
        "ppt",
        "pptx",
        "odt",
        "ods",
        "odp",
        # Executables and libraries
        "exe",
        "dll",
        "so",
        "dylib",
        "bin",
        "class",
        "jar",
        "wasm",
    ]
)
