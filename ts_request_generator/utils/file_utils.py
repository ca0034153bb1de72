"""
File utilities for the request generator.

This module provides the file operations used by the CLI when writing
generated TypeScript modules.
"""

from pathlib import Path


def write_files_to_disk(files: dict[Path, str]) -> None:
    """Write generated files to disk.

    Args:
        files: Dictionary mapping file paths to their content.
    """
    for path, content in files.items():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
