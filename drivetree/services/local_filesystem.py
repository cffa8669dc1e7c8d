"""Host filesystem access used by the tree: drives, listings and renames."""

from __future__ import annotations

import os
import stat
from datetime import datetime
from typing import Optional

from PySide6.QtCore import QDir

from drivetree.core.fs_node import DirEntryInfo


def _timestamp(st: os.stat_result | None) -> Optional[datetime]:
    if st is None:
        return None
    try:
        return datetime.fromtimestamp(st.st_mtime)
    except (OverflowError, OSError, ValueError):
        return None


def _is_hidden(name: str, st: os.stat_result | None) -> bool:
    if name.startswith("."):
        return True
    attrs = getattr(st, "st_file_attributes", 0) if st is not None else 0
    return bool(attrs & getattr(stat, "FILE_ATTRIBUTE_HIDDEN", 0))


def _same_entry(a: str, b: str) -> bool:
    # Case-only renames on case-insensitive filesystems resolve to the same entry.
    try:
        return os.path.samefile(a, b)
    except OSError:
        return False


class LocalFileSystem:
    """Default filesystem collaborator backed by ``os`` and ``QDir``."""

    def __init__(self, *, show_hidden: bool = False) -> None:
        self.show_hidden = bool(show_hidden)

    def drives(self) -> list[DirEntryInfo]:
        result: list[DirEntryInfo] = []
        for info in QDir.drives():
            path = QDir.toNativeSeparators(info.absoluteFilePath())
            try:
                st = os.stat(path)
            except OSError:
                st = None
            result.append(DirEntryInfo(name=path, path=path, is_dir=True, size=None, modified=_timestamp(st)))
        return result

    def list_directory(self, path: str) -> list[DirEntryInfo]:
        """List ``path`` sorted by name; ``OSError`` propagates to the caller."""
        entries: list[DirEntryInfo] = []
        with os.scandir(path) as it:
            for entry in it:
                try:
                    st = entry.stat()
                except OSError:
                    # Dangling symlink and the like: fall back to the link itself.
                    try:
                        st = entry.stat(follow_symlinks=False)
                    except OSError:
                        st = None
                if not self.show_hidden and _is_hidden(entry.name, st):
                    continue
                try:
                    is_dir = entry.is_dir()
                except OSError:
                    is_dir = False
                entries.append(
                    DirEntryInfo(
                        name=entry.name,
                        path=entry.path,
                        is_dir=is_dir,
                        size=None if is_dir or st is None else int(st.st_size),
                        modified=_timestamp(st),
                    )
                )
        entries.sort(key=lambda e: e.name)
        return entries

    def rename(self, old_path: str, new_path: str) -> None:
        if not os.path.lexists(old_path):
            raise FileNotFoundError(2, "No such file or directory", old_path)
        # os.rename replaces an existing target on POSIX.
        if os.path.lexists(new_path) and not _same_entry(old_path, new_path):
            raise FileExistsError(17, "File exists", new_path)
        os.rename(old_path, new_path)
