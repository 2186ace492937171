"""Utility helpers for working with content files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

from docsite.config import DEFAULT_EXTENSION


def _raise(error: OSError) -> None:
    raise error


def iter_doc_paths(root: Path, extension: str = DEFAULT_EXTENSION) -> Iterator[Path]:
    """Yield document files under ``root``, descending into directories.

    Raises FileNotFoundError / NotADirectoryError for a bad root and lets any
    OSError hit while walking abort the scan.
    """
    root = Path(root)
    if not root.exists():
        raise FileNotFoundError(f"Content directory not found: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Content path is not a directory: {root}")

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames.sort()
        for name in sorted(filenames):
            path = Path(dirpath) / name
            if is_doc_file(path, extension) and not path.is_dir():
                yield path


def is_doc_file(path: Path, extension: str = DEFAULT_EXTENSION) -> bool:
    return Path(path).name.endswith(extension)


def canonical_path(path: Path | str) -> str:
    """Absolute, symlink-free form of ``path`` used as the menu key."""
    return str(Path(path).resolve())


def relative_display_path(path: Path | str, root: Path) -> str:
    """Path relative to the content root for operator messages."""
    try:
        return str(Path(path).resolve().relative_to(Path(root).resolve()))
    except ValueError:
        return str(path)
