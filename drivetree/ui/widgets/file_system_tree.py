from typing import Any, Optional, Sequence, cast

from PySide6.QtCore import (
    Qt, QAbstractItemModel, QDateTime, QModelIndex, QObject, Signal
)
from PySide6.QtWidgets import QAbstractItemView, QTreeView, QWidget

from drivetree.core.errors import ExpansionError, RenameError
from drivetree.core.facets import COLUMN_HEADERS, Column, display_value, edit_value
from drivetree.core.fs_node import FsNode
from drivetree.core.fs_tree import FsTree
from drivetree.ui.icons.file_icon_provider import FileIconProvider


class FileSystemTreeModel(QAbstractItemModel):
    """Item model over an ``FsTree``: drives at the top, directories listed on demand."""

    filesystemError = Signal(str, str)   # title, message
    pathRenamed = Signal(str, str)       # old_path, new_path

    def __init__(
            self,
            tree: FsTree,
            metadata_provider: Optional[FileIconProvider] = None,
            parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._tree = tree
        self._metadata = metadata_provider if metadata_provider is not None else FileIconProvider()

    # ---------- Public API ----------

    def node_from_index(self, index: QModelIndex) -> Optional[FsNode]:
        if not index.isValid():
            return None
        return cast(FsNode, index.internalPointer())

    def index_from_node(self, node: Optional[FsNode], column: int = Column.NAME) -> QModelIndex:
        if node is None:
            return QModelIndex()
        return self.createIndex(self._tree.row_of(node), int(column), node)

    def path_from_index(self, index: QModelIndex) -> Optional[str]:
        node = self.node_from_index(index)
        return node.path if node is not None else None

    # ---------- QAbstractItemModel ----------

    def index(self, row: int, column: int, parent: QModelIndex = QModelIndex()) -> QModelIndex:
        if not self.hasIndex(row, column, parent):
            return QModelIndex()
        if not parent.isValid():
            return self.createIndex(row, column, self._tree.root_at(row))
        parent_node = cast(FsNode, parent.internalPointer())
        return self.createIndex(row, column, self._tree.child_at(parent_node, row))

    def parent(self, index: QModelIndex) -> QModelIndex:
        if not index.isValid():
            return QModelIndex()
        node = cast(FsNode, index.internalPointer())
        return self.index_from_node(self._tree.parent_of(node))

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        if not parent.isValid():
            return self._tree.root_count()
        if parent.column() > 0:
            return 0
        return self._tree.child_count(cast(FsNode, parent.internalPointer()))

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(Column)

    def hasChildren(self, parent: QModelIndex = QModelIndex()) -> bool:
        if not parent.isValid():
            return self._tree.root_count() > 0
        if parent.column() > 0:
            return False
        return self._tree.has_children(cast(FsNode, parent.internalPointer()))

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid():
            return None
        node = cast(FsNode, index.internalPointer())
        column = Column(index.column())
        if role == Qt.ItemDataRole.DisplayRole:
            value = display_value(node, column, self._metadata)
            if column == Column.MODIFIED and value is not None:
                return QDateTime.fromMSecsSinceEpoch(int(value.timestamp() * 1000))
            return value
        if role == Qt.ItemDataRole.EditRole and column == Column.NAME:
            return edit_value(node)
        if role == Qt.ItemDataRole.DecorationRole and column == Column.NAME:
            return self._metadata.icon(node)
        if role == Qt.ItemDataRole.TextAlignmentRole and column == Column.SIZE:
            return int(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        if role == Qt.ItemDataRole.UserRole:
            return node.path
        return None

    def setData(self, index: QModelIndex, value: Any, role: int = Qt.ItemDataRole.EditRole) -> bool:
        if not index.isValid() or role != Qt.ItemDataRole.EditRole or index.column() != Column.NAME:
            return False
        node = cast(FsNode, index.internalPointer())
        old_path = node.path
        try:
            new_path = self._tree.rename(node, str(value or ""))
        except RenameError as exc:
            self.filesystemError.emit("Rename Failed", str(exc))
            return False
        if new_path != old_path:
            first = index.siblingAtColumn(0)
            last = index.siblingAtColumn(self.columnCount() - 1)
            self.dataChanged.emit(first, last)
            self._emit_descendants_changed(first)
            self.pathRenamed.emit(old_path, new_path)
        return True

    def _emit_descendants_changed(self, parent_index: QModelIndex):
        # Descendant paths were rebased; their path-derived data is stale too.
        rows = self.rowCount(parent_index)
        if rows == 0:
            return
        last_column = self.columnCount() - 1
        self.dataChanged.emit(self.index(0, 0, parent_index), self.index(rows - 1, last_column, parent_index))
        for row in range(rows):
            self._emit_descendants_changed(self.index(row, 0, parent_index))

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if orientation == Qt.Orientation.Horizontal and role == Qt.ItemDataRole.DisplayRole:
            if 0 <= section < len(Column):
                return COLUMN_HEADERS[Column(section)]
        return None

    def flags(self, index: QModelIndex) -> Qt.ItemFlag:
        flags = super().flags(index)
        if index.isValid() and index.column() == Column.NAME:
            node = cast(FsNode, index.internalPointer())
            if not node.is_root:
                flags |= Qt.ItemFlag.ItemIsEditable
        return flags

    def canFetchMore(self, parent: QModelIndex) -> bool:
        if not parent.isValid():
            return False
        return self._tree.needs_expansion(cast(FsNode, parent.internalPointer()))

    def fetchMore(self, parent: QModelIndex):
        if not self.canFetchMore(parent):
            return
        node = cast(FsNode, parent.internalPointer())
        try:
            children = self._tree.load_children(node)
        except ExpansionError as exc:
            self.filesystemError.emit("Expand Failed", str(exc))
            return

        parent_index = parent.siblingAtColumn(0)
        if children:
            self.beginInsertRows(parent_index, 0, len(children) - 1)
            self._tree.commit_children(node, children)
            self.endInsertRows()
        else:
            self._tree.commit_children(node, children)
            # Let the view drop the expand arrow of an empty directory.
            self.dataChanged.emit(parent_index, parent_index)


class FileSystemTreeWidget(QTreeView):
    operationError = Signal(str, str)   # title, message
    pathRenamed = Signal(str, str)      # old_path, new_path

    def __init__(
            self,
            tree: FsTree,
            metadata_provider: Optional[FileIconProvider] = None,
            column_widths: Optional[Sequence[int]] = None,
            parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self._model = FileSystemTreeModel(tree, metadata_provider=metadata_provider, parent=self)
        self.setModel(self._model)
        self.setUniformRowHeights(True)
        self.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.setEditTriggers(
            QAbstractItemView.EditTrigger.EditKeyPressed | QAbstractItemView.EditTrigger.SelectedClicked
        )
        for column, width in enumerate(column_widths or ()):
            if width > 0:
                self.setColumnWidth(column, int(width))

        self.expanded.connect(self._on_expanded)
        self._model.filesystemError.connect(self.operationError)
        self._model.pathRenamed.connect(self.pathRenamed)

    def tree_model(self) -> FileSystemTreeModel:
        return self._model

    def selected_path(self) -> Optional[str]:
        index = self.currentIndex()
        return self._model.path_from_index(index) if index.isValid() else None

    def column_widths(self) -> list[int]:
        return [self.columnWidth(column) for column in range(self._model.columnCount())]

    def _on_expanded(self, index: QModelIndex):
        if self._model.canFetchMore(index):
            self._model.fetchMore(index)
