"""Filesystem probes. Read-only: nothing here creates or removes anything."""

from __future__ import annotations

import os
from pathlib import Path

from challenge_checker.errors import DirectoryReadError


def is_not_chapter(dir_name: str) -> bool:
    """False for dot directories (.git, .github, ...), which are never chapters."""
    return not dir_name.startswith(".")


def list_directories(path: str, exclude_hidden: bool = True) -> set[str]:
    """Names of the immediate subdirectories of ``path``. No recursion.

    Symlinks pointing at directories are counted as directories.
    """
    root = Path(path)
    if not root.exists():
        raise DirectoryReadError(f"project directory not found: {path}")
    if not root.is_dir():
        raise DirectoryReadError(f"not a directory: {path}")

    dirs = set()
    try:
        with os.scandir(root) as it:
            for entry in it:
                if not entry.is_dir():
                    continue
                if exclude_hidden and not is_not_chapter(entry.name):
                    continue
                dirs.add(entry.name)
    except OSError as e:
        raise DirectoryReadError(f"cannot list {path}: {e}") from e
    return dirs
