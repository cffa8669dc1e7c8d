from __future__ import annotations

import enum
import weakref
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional


class NodeKind(enum.Enum):
    DRIVE = "drive"
    DIRECTORY = "directory"
    FILE = "file"


@dataclass(frozen=True, slots=True)
class DirEntryInfo:
    """One listing entry as reported by the filesystem backend."""

    name: str
    path: str
    is_dir: bool
    size: Optional[int]
    modified: Optional[datetime]


class FsNode:
    """One filesystem entry in the tree.

    The parent link is a weak reference; children are owned top-down only.
    """

    __slots__ = ("path", "kind", "expanded", "children", "size", "modified", "_parent_ref", "__weakref__")

    def __init__(
            self,
            path: str,
            kind: NodeKind,
            parent: Optional["FsNode"] = None,
            size: Optional[int] = None,
            modified: Optional[datetime] = None,
    ):
        self.path = path
        self.kind = kind
        self.children: List["FsNode"] = []
        # Files cannot have children, so there is nothing left to fetch.
        self.expanded = kind is NodeKind.FILE
        self.size = size if kind is NodeKind.FILE else None
        self.modified = modified
        self._parent_ref = weakref.ref(parent) if parent is not None else None

    @property
    def parent(self) -> Optional["FsNode"]:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def is_root(self) -> bool:
        return self._parent_ref is None

    def child_at(self, row: int) -> Optional["FsNode"]:
        if 0 <= row < len(self.children):
            return self.children[row]
        return None

    def __repr__(self) -> str:
        return f"FsNode({self.path!r}, {self.kind.value}, expanded={self.expanded})"
