from drivetree.core.errors import AddressingError, ExpansionError, NodeStateError, RenameError
from drivetree.core.facets import Column, display_value, edit_value
from drivetree.core.fs_node import FsNode, NodeKind
from drivetree.core.fs_tree import FsTree

__all__ = [
    "AddressingError",
    "Column",
    "ExpansionError",
    "FsNode",
    "FsTree",
    "NodeKind",
    "NodeStateError",
    "RenameError",
    "display_value",
    "edit_value",
]
