from pathlib import Path

from PySide6 import QtCore, QtGui

from .capture import CaptureCoordinator, CaptureResult
from .config import LOG_FILENAME
from .log import configure_logging, get_logger
from .settings import SettingsStore
from .watcher import ClipboardWatcher

log = get_logger(__name__)


class AppController(QtCore.QObject):
    """Wires the clipboard, the coordinator and the settings together."""

    def __init__(self, clipboard: QtGui.QClipboard, store: SettingsStore):
        super().__init__()
        self.store = store
        self.watcher = ClipboardWatcher(clipboard)
        self.coordinator = CaptureCoordinator(store, self.watcher.image)

        self.watcher.changed.connect(self.coordinator.on_clipboard_changed)
        self.coordinator.saved.connect(self.watcher.place_result)
        self.coordinator.saved.connect(self._notify_saved)
        self.coordinator.failed.connect(self._notify_failed)
        self.store.changed.connect(self._apply_settings)

        self._apply_settings()

    @QtCore.Slot()
    def _apply_settings(self):
        s = self.store.settings
        configure_logging(s.enable_logging, self.store.base_dir / LOG_FILENAME)
        save_dir = Path(self.coordinator.resolver.save_directory())
        try:
            save_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            log.error("Cannot create save directory %s: %s", save_dir, e)
        mode = "project" if self.coordinator.resolver.is_project_mode_active() else "normal"
        log.info("Saving clipboard images to %s (%s mode)", save_dir, mode)

    @QtCore.Slot(object)
    def _notify_saved(self, result: CaptureResult):
        log.info("%s: %s", result.title, result.message.replace("\n", " | "))

    @QtCore.Slot(str)
    def _notify_failed(self, message: str):
        log.error("Error: %s", message)
