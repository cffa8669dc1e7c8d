from __future__ import annotations

import logging
import os

from PySide6.QtWidgets import QMainWindow, QMessageBox

from drivetree.core.fs_tree import FsTree
from drivetree.settings_store import DriveTreeSettings, SettingsStoreError
from drivetree.ui.icons.file_icon_provider import FileIconProvider
from drivetree.ui.widgets.file_system_tree import FileSystemTreeWidget

logger = logging.getLogger(__name__)


class DriveTreeWindow(QMainWindow):
    APP_NAME = "DriveTree"

    def __init__(self, tree: FsTree, settings: DriveTreeSettings, parent=None):
        super().__init__(parent)
        self._settings = settings
        self.setWindowTitle(self.APP_NAME)

        self.tree = FileSystemTreeWidget(
            tree,
            metadata_provider=FileIconProvider(),
            column_widths=settings.column_widths,
            parent=self,
        )
        self.setCentralWidget(self.tree)
        self.tree.operationError.connect(self._show_tree_error)
        self.tree.pathRenamed.connect(self._on_path_renamed)

        self.resize(*settings.window_size)

    def _show_tree_error(self, title: str, message: str):
        QMessageBox.warning(self, title, message)

    def _on_path_renamed(self, old_path: str, new_path: str):
        old_name = os.path.basename(old_path)
        new_name = os.path.basename(new_path)
        self.statusBar().showMessage(f"Renamed '{old_name}' to '{new_name}'", 2200)

    def closeEvent(self, event):
        self._settings.window_size = (self.width(), self.height())
        self._settings.column_widths = self.tree.column_widths()
        if self._settings.dirty:
            try:
                self._settings.save()
            except SettingsStoreError as exc:
                logger.warning("%s", exc)
        super().closeEvent(event)
