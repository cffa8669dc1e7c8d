from __future__ import annotations

from PySide6.QtCore import QFileInfo
from PySide6.QtGui import QIcon
from PySide6.QtWidgets import QFileIconProvider

from drivetree.core.fs_node import FsNode, NodeKind


class FileIconProvider:
    """Type labels and icons for tree nodes, backed by the platform provider."""

    def __init__(self) -> None:
        self._platform = QFileIconProvider()

    def type_label(self, node: FsNode) -> str:
        label = self._platform.type(QFileInfo(node.path))
        if node.kind is NodeKind.DRIVE:
            return label or "Drive"
        return label

    def icon(self, node: FsNode) -> QIcon:
        if node.kind is NodeKind.DRIVE:
            return self._platform.icon(QFileIconProvider.IconType.Drive)
        if node.kind is NodeKind.DIRECTORY:
            return self._platform.icon(QFileIconProvider.IconType.Folder)
        return self._platform.icon(QFileInfo(node.path))
