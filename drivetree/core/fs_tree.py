"""Lazily populated filesystem tree (pure Python, no Qt).

Roots come from drive enumeration at construction. A directory's children are
listed once, on first expansion, and never re-scanned afterwards. Rename goes
to disk first and only then updates the node path in place.
"""

from __future__ import annotations

import logging
import os
from typing import List, Optional, Protocol, Sequence

from drivetree.core.errors import AddressingError, ExpansionError, NodeStateError, RenameError
from drivetree.core.fs_node import DirEntryInfo, FsNode, NodeKind

logger = logging.getLogger(__name__)


class FileSystemBackend(Protocol):
    def drives(self) -> Sequence[DirEntryInfo]:
        ...

    def list_directory(self, path: str) -> Sequence[DirEntryInfo]:
        ...

    def rename(self, old_path: str, new_path: str) -> None:
        ...


def _separators() -> tuple[str, ...]:
    seps = {"/", os.sep}
    if os.altsep:
        seps.add(os.altsep)
    return tuple(seps)


class FsTree:
    def __init__(self, filesystem: FileSystemBackend):
        self._fs = filesystem
        self._roots: List[FsNode] = [
            FsNode(info.path, NodeKind.DRIVE, parent=None, modified=info.modified)
            for info in filesystem.drives()
        ]

    # ---------- Addressing ----------

    def roots(self) -> List[FsNode]:
        return list(self._roots)

    def root_count(self) -> int:
        return len(self._roots)

    def root_at(self, row: int) -> FsNode:
        if not 0 <= row < len(self._roots):
            raise IndexError(f"Root row {row} out of range [0, {len(self._roots)})")
        return self._roots[row]

    def child_count(self, node: FsNode) -> int:
        return len(node.children)

    def child_at(self, node: FsNode, row: int) -> FsNode:
        child = node.child_at(row)
        if child is None:
            raise IndexError(f"Child row {row} out of range [0, {len(node.children)}) for '{node.path}'")
        return child

    def parent_of(self, node: FsNode) -> Optional[FsNode]:
        return node.parent

    def row_of(self, node: FsNode) -> int:
        parent = node.parent
        if parent is None and not node.is_root:
            raise AddressingError(f"Parent of '{node.path}' is gone")
        siblings = parent.children if parent is not None else self._roots
        for row, candidate in enumerate(siblings):
            if candidate is node:
                return row
        raise AddressingError(f"'{node.path}' is not in its owning sequence")

    def is_expandable(self, node: FsNode) -> bool:
        return node.kind is not NodeKind.FILE

    def needs_expansion(self, node: FsNode) -> bool:
        return self.is_expandable(node) and not node.expanded

    def has_children(self, node: FsNode) -> bool:
        # Unlisted directories are assumed to have children, even empty ones.
        if self.needs_expansion(node):
            return True
        return bool(node.children)

    # ---------- Lazy loading ----------

    def load_children(self, node: FsNode) -> List[FsNode]:
        """List ``node`` and build its would-be children without attaching them.

        Raises ``NodeStateError`` if the node does not need expansion and
        ``ExpansionError`` if the listing fails.
        """
        if not self.is_expandable(node):
            raise NodeStateError(f"'{node.path}' is a file and cannot be expanded")
        if node.expanded:
            raise NodeStateError(f"'{node.path}' is already expanded")
        try:
            entries = list(self._fs.list_directory(node.path))
        except OSError as exc:
            logger.warning("Listing %s failed: %s", node.path, exc)
            raise ExpansionError(node.path, exc) from exc

        return [
            FsNode(
                entry.path,
                NodeKind.DIRECTORY if entry.is_dir else NodeKind.FILE,
                parent=node,
                size=entry.size,
                modified=entry.modified,
            )
            for entry in entries
        ]

    def commit_children(self, node: FsNode, children: List[FsNode]) -> None:
        if node.expanded:
            raise NodeStateError(f"'{node.path}' is already expanded")
        for child in children:
            if child.parent is not node:
                raise NodeStateError(f"'{child.path}' was not built for '{node.path}'")
        node.children.extend(children)
        node.expanded = True
        logger.debug("Expanded %s (%d entries)", node.path, len(children))

    def expand(self, node: FsNode) -> List[FsNode]:
        children = self.load_children(node)
        self.commit_children(node, children)
        return children

    # ---------- Rename ----------

    def rename(self, node: FsNode, new_name: str) -> str:
        """Rename ``node`` on disk, then update its path in place.

        Returns the new path. Raises ``RenameError`` without touching the node
        when the rename is rejected or fails.
        """
        if node.is_root:
            raise RenameError("Drives cannot be renamed.", kind="root", path=node.path)
        name = str(new_name or "")
        if not name.strip() or name in (".", "..") or "\x00" in name or any(sep in name for sep in _separators()):
            raise RenameError(f"Invalid name: {name!r}", kind="invalid_name", path=node.path)

        old_path = node.path
        new_path = os.path.join(os.path.dirname(old_path), name)
        if new_path == old_path:
            return old_path

        try:
            self._fs.rename(old_path, new_path)
        except OSError as exc:
            error = self._rename_error(exc, old_path, new_path)
            logger.warning("Rename %s -> %s failed (%s): %s", old_path, new_path, error.kind, exc)
            raise error from exc

        node.path = new_path
        self._rebase_descendants(node, old_path, new_path)
        logger.debug("Renamed %s -> %s", old_path, new_path)
        return new_path

    @staticmethod
    def _rename_error(exc: OSError, old_path: str, new_path: str) -> RenameError:
        if isinstance(exc, FileExistsError):
            return RenameError(f"Target already exists:\n{new_path}", kind="exists", path=old_path)
        if isinstance(exc, FileNotFoundError):
            return RenameError(f"Path no longer exists:\n{old_path}", kind="missing", path=old_path)
        if isinstance(exc, PermissionError):
            return RenameError(f"Permission denied:\n{exc}", kind="permission", path=old_path)
        return RenameError(f"Could not rename path:\n{exc}", kind="failed", path=old_path)

    def _rebase_descendants(self, node: FsNode, old_prefix: str, new_prefix: str) -> None:
        # Materialized descendants keep their identity; only the path prefix moves.
        stack = list(node.children)
        while stack:
            child = stack.pop()
            child.path = new_prefix + child.path[len(old_prefix):]
            stack.extend(child.children)
