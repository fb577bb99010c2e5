from typing import Optional

from PySide6 import QtCore, QtGui

from .capture import CaptureResult
from .config import INTERNAL_MIME
from .log import get_logger

log = get_logger(__name__)


class ClipboardWatcher(QtCore.QObject):
    """Bridges the system clipboard and the capture coordinator.

    Re-emits clipboard changes as ``changed``, hands out the current
    clipboard image, and writes output paths back as text.
    """

    changed = QtCore.Signal()

    def __init__(self, clipboard: QtGui.QClipboard):
        super().__init__()
        self.clip = clipboard
        self.clip.dataChanged.connect(self._on_changed)

    @QtCore.Slot()
    def _on_changed(self):
        md = self.clip.mimeData()
        # Ignore our own programmatic copies
        try:
            if md is not None and md.hasFormat(INTERNAL_MIME):
                return
        except Exception:
            pass
        self.changed.emit()

    def image(self) -> Optional[QtGui.QImage]:
        try:
            img = self.clip.image()
        except Exception as e:
            log.debug("Clipboard image unavailable: %s", e)
            return None
        if img is None or img.isNull():
            return None
        return img

    @QtCore.Slot(object)
    def place_result(self, result: CaptureResult):
        self.place_text(result.output_path)

    def place_text(self, text: str):
        md = QtCore.QMimeData()
        md.setText(text)
        md.setData(INTERNAL_MIME, QtCore.QByteArray(b"1"))
        self.clip.setMimeData(md)
