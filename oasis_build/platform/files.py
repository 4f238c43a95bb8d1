"""Filesystem helpers for staging build artifacts."""

from __future__ import annotations

import os
import shutil
from pathlib import Path

__all__ = ["EXECUTABLE_MODE", "copy_tree", "make_executable", "reset_dir"]

EXECUTABLE_MODE = 0o755


def reset_dir(path: Path) -> None:
    """Remove ``path`` if present, then recreate it (and parents) empty.

    Removal is not atomic: a failure part-way leaves a partially deleted tree
    and the OSError propagates.
    """
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()
    path.mkdir(parents=True)


def copy_tree(source: Path, destination: Path) -> bool:
    """Copy a file or a directory tree from ``source`` to ``destination``.

    Directories are recreated depth-first with every child copied; files are
    copied byte for byte without their metadata. A missing source copies
    nothing and returns False, leaving the caller to decide whether that is
    fatal. Inside the tree every entry is copied unconditionally: an entry
    that cannot be read (a dangling symlink, say) raises instead of being
    skipped. OSError propagates.
    """
    if not source.exists():
        return False

    destination.parent.mkdir(parents=True, exist_ok=True)
    _copy_entry(source, destination)
    return True


def _copy_entry(source: Path, destination: Path) -> None:
    if source.is_dir():
        destination.mkdir(exist_ok=True)
        for child in source.iterdir():
            _copy_entry(child, destination / child.name)
    else:
        shutil.copyfile(source, destination)


def make_executable(path: Path, mode: int = EXECUTABLE_MODE) -> None:
    """Set permission bits to exactly ``mode`` (rwxr-xr-x by default)."""
    os.chmod(path, mode)
