#!/usr/bin/env python3
"""
Notezip: Share a Markdown note and every note it links to as a ZIP archive

Common usage:
  notezip "Project Plan"
  notezip Notes/Idea.md --vault ~/notes -o idea.zip
  notezip "Project Plan" --exclude-folder Templates --exclude-metadata private
  notezip "Project Plan" --list-files

Settings can also live in `.notezip.toml`, `notezip.toml`, or `[tool.notezip]`
in `pyproject.toml`. Explicit flags take precedence over config files.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from notezip.collect import ExclusionConfig
from notezip.config import (
    find_config_file,
    load_config,
    merge_cli_with_config,
    parse_pattern_list,
)
from notezip.export_api import ExportError, NotezipError, export_note
from notezip.vault import Vault, VaultConfig

log = logging.getLogger(__name__)


@dataclass
class Options:
    """Command-line options for the notezip tool."""

    note: str | None
    output: str | None
    vault: str | None
    # Exclusion options
    exclude_metadata: list[str]
    exclude_headers: list[str]
    exclude_folders: list[str]
    exclude_files: list[str]
    markdown_links: bool
    # Vault scan options
    extend_exclude: list[str]
    respect_gitignore: bool
    list_files: bool
    verbose: bool
    version: bool


# Options fields a config file may also set (argparse dest == field name)
_TRACKED_FLAGS: set[str] = {
    "vault",
    "exclude_metadata",
    "exclude_headers",
    "exclude_folders",
    "exclude_files",
    "markdown_links",
    "extend_exclude",
    "respect_gitignore",
}


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns a tuple of (options, explicit_flags) where `explicit_flags` tracks
    which flags the user explicitly passed (for config merge precedence).
    """
    # Use the module's docstring as the description
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        prog="notezip",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "note",
        nargs="?",
        type=str,
        default=None,
        help="Note to share: a file path or a link name such as 'Project Plan'",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Output archive path (default: <note name>.zip in the current directory)",
    )
    parser.add_argument(
        "--vault",
        type=str,
        default=None,
        metavar="DIR",
        help="Vault directory containing the notes (default: current directory)",
    )
    # Exclusion options. Append actions use None as "not supplied".
    parser.add_argument(
        "--exclude-metadata",
        action="append",
        default=None,
        metavar="KEY",
        help="Skip notes whose frontmatter sets KEY to true or 1. Can be repeated or comma-separated",
    )
    parser.add_argument(
        "--exclude-header",
        action="append",
        default=None,
        dest="exclude_headers",
        metavar="TEXT",
        help="Ignore links in sections whose heading contains TEXT. Can be repeated",
    )
    parser.add_argument(
        "--exclude-folder",
        action="append",
        default=None,
        dest="exclude_folders",
        metavar="FOLDER",
        help="Skip notes inside FOLDER, at any depth. Can be repeated",
    )
    parser.add_argument(
        "--exclude-file",
        action="append",
        default=None,
        dest="exclude_files",
        metavar="PATTERN",
        help="Skip files whose name matches PATTERN ('*' wildcard). Can be repeated",
    )
    parser.add_argument(
        "--markdown-links",
        action="store_true",
        default=None,
        help="Also follow standard Markdown links to local files, e.g. [text](Other.md)",
    )
    # Vault scan options
    parser.add_argument(
        "--extend-exclude",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Additional gitignore-style patterns to leave out of the vault scan. Can be repeated",
    )
    parser.add_argument(
        "--no-respect-gitignore",
        action="store_const",
        const=False,
        default=None,
        dest="respect_gitignore",
        help="Disable .gitignore integration when scanning the vault",
    )
    parser.add_argument(
        "--list-files",
        action="store_true",
        dest="list_files",
        help="Print the paths that would be exported without writing an archive",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    opts = parser.parse_args(args)

    explicit_flags = {
        field_name for field_name in _TRACKED_FLAGS if getattr(opts, field_name) is not None
    }

    return (
        Options(
            note=opts.note,
            output=opts.output,
            vault=opts.vault,
            exclude_metadata=parse_pattern_list(opts.exclude_metadata),
            exclude_headers=parse_pattern_list(opts.exclude_headers),
            exclude_folders=parse_pattern_list(opts.exclude_folders),
            exclude_files=parse_pattern_list(opts.exclude_files),
            markdown_links=bool(opts.markdown_links),
            extend_exclude=parse_pattern_list(opts.extend_exclude),
            respect_gitignore=opts.respect_gitignore is not False,
            list_files=opts.list_files,
            verbose=opts.verbose,
            version=opts.version,
        ),
        explicit_flags,
    )


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the notezip CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, 1 for usage errors, 2 for export failures)
    """
    options, explicit_flags = _parse_args(args)
    _setup_logging(options.verbose)

    # Display version information if requested
    if options.version:
        try:
            version = importlib.metadata.version("notezip")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    # Load and merge config file settings
    config_path = find_config_file(Path.cwd())
    if config_path:
        log.debug("Using config file %s", config_path)
        merge_cli_with_config(options, load_config(config_path), explicit_flags)

    exclusions = ExclusionConfig(
        excluded_metadata_keys=options.exclude_metadata,
        excluded_headers=options.exclude_headers,
        excluded_folders=options.exclude_folders,
        excluded_files=options.exclude_files,
    )

    try:
        vault = Vault(
            options.vault or Path.cwd(),
            VaultConfig(
                extend_exclude=options.extend_exclude,
                respect_gitignore=options.respect_gitignore,
            ),
        )
        result = export_note(
            vault,
            options.note,
            destination=options.output,
            config=exclusions,
            markdown_links=options.markdown_links,
            list_only=options.list_files,
        )
    except ExportError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except (NotezipError, NotADirectoryError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if options.list_files:
        for path in result.paths:
            print(path)
        return 0

    noun = "note" if len(result.documents) == 1 else "notes"
    print(f"Exported {len(result.documents)} {noun} to {result.destination}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
