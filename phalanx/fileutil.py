"""Small helpers for checking paths on the local file system."""

from __future__ import annotations

import os
import stat

__all__ = ["file_exists", "is_file", "is_dir"]


def file_exists(path: str | os.PathLike[str]) -> bool:
    """Return False only when *path* is known not to exist."""
    try:
        os.stat(path)
    except FileNotFoundError:
        return False
    except OSError:
        # Any other failure (permissions, a file used as a directory, ...)
        # does not prove that the path is absent.
        return True
    return True


def is_file(path: str | os.PathLike[str]) -> bool:
    """Return True when *path* exists and is not a directory."""
    try:
        info = os.stat(path)
    except FileNotFoundError:
        return False
    return not stat.S_ISDIR(info.st_mode)


def is_dir(path: str | os.PathLike[str]) -> bool:
    """Return True when *path* exists and is a directory."""
    try:
        info = os.stat(path)
    except FileNotFoundError:
        return False
    return stat.S_ISDIR(info.st_mode)