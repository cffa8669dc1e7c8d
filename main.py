import logging
import sys

from PySide6.QtWidgets import QApplication

from drivetree.core.fs_tree import FsTree
from drivetree.services.local_filesystem import LocalFileSystem
from drivetree.settings_models import default_settings_path
from drivetree.settings_store import DriveTreeSettings
from drivetree.ui.main_window import DriveTreeWindow


def _configure_logging(level: int) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load_settings() -> DriveTreeSettings:
    settings = DriveTreeSettings(default_settings_path())
    settings.load()
    return settings


if __name__ == "__main__":
    settings = _load_settings()
    _configure_logging(settings.log_level)
    if settings.last_error:
        logging.getLogger(__name__).warning("Settings not loaded: %s", settings.last_error)

    app = QApplication(sys.argv)
    app.setStyle("Fusion")
    app.setApplicationName(DriveTreeWindow.APP_NAME)

    filesystem = LocalFileSystem(show_hidden=settings.show_hidden)
    window = DriveTreeWindow(FsTree(filesystem), settings)
    window.show()
    sys.exit(app.exec())
