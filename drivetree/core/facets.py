"""Display facets of a node, one per view column."""

from __future__ import annotations

import enum
import os
from typing import Any, Optional, Protocol

from drivetree.core.fs_node import FsNode, NodeKind


class Column(enum.IntEnum):
    NAME = 0
    MODIFIED = 1
    SIZE = 2
    TYPE = 3


COLUMN_HEADERS = {
    Column.NAME: "Name",
    Column.MODIFIED: "Date Modified",
    Column.SIZE: "Size",
    Column.TYPE: "Type",
}


class TypeLabelProvider(Protocol):
    def type_label(self, node: FsNode) -> str:
        ...


def display_name(node: FsNode) -> str:
    if node.is_root:
        return node.path
    name = os.path.basename(node.path)
    if node.kind is NodeKind.FILE:
        base, _ext = os.path.splitext(name)
        return base or name
    return name


def edit_value(node: FsNode) -> str:
    """Name offered for in-place editing: the full entry name, extension included."""
    if node.is_root:
        return node.path
    return os.path.basename(node.path)


def display_value(node: FsNode, column: Column, types: Optional[TypeLabelProvider] = None) -> Any:
    if column == Column.NAME:
        return display_name(node)
    if column == Column.MODIFIED:
        return node.modified
    if column == Column.SIZE:
        return node.size if node.kind is NodeKind.FILE else None
    if column == Column.TYPE:
        return types.type_label(node) if types is not None else None
    return None
