"""Directory listing shared by the tutorial loader and static copying."""

from __future__ import annotations

import re
from pathlib import Path

# Dotfiles and dot-directories (".git", ".DS_Store") are never listed
HIDDEN_NAME = re.compile(r"^\.[^./\\]")


def is_hidden(path: Path, directory: Path) -> bool:
    """Whether any part of ``path`` below ``directory`` is a dot name."""
    return any(HIDDEN_NAME.match(part) for part in path.relative_to(directory).parts)


def list_files(directory: Path, max_depth: int = 1) -> list[Path]:
    """Files below ``directory``, sorted.

    Args:
        directory: Directory to scan
        max_depth: Directory levels to scan; 1 lists only the files directly
            inside ``directory``, 2 also lists those one directory down, etc.

    Returns:
        Paths of the visible files found
    """
    files: list[Path] = []
    for path in sorted(directory.rglob("*")):
        if not path.is_file():
            continue
        if len(path.relative_to(directory).parts) > max_depth:
            continue
        if is_hidden(path, directory):
            continue
        files.append(path)
    return files
