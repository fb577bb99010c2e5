import enum
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from PySide6 import QtCore, QtGui

from .config import FILENAME_PREFIX, IMAGE_EXT, IMAGE_FORMAT, TIMESTAMP_FORMAT
from .hashing import compute_fingerprint
from .log import get_logger
from .paths import PathResolver
from .settings import SettingsStore

log = get_logger(__name__)

ImageSource = Callable[[], Optional[QtGui.QImage]]


class CaptureState(enum.Enum):
    IDLE = "idle"
    PROCESSING = "processing"


@dataclass(frozen=True)
class CaptureResult:
    saved_path: str
    output_path: str
    project_mode: bool
    fingerprint: str

    @property
    def title(self) -> str:
        return "Image Saved"

    @property
    def message(self) -> str:
        if self.project_mode:
            return (f"Saved to: {self.saved_path}\nRelative Path: {self.output_path}\n"
                    "(Relative path copied to clipboard)")
        return (f"Saved to: {self.saved_path}\nWSL Path: {self.output_path}\n"
                "(WSL path copied to clipboard)")


def image_file_name(when: datetime, attempt: int = 1) -> str:
    stamp = when.strftime(TIMESTAMP_FORMAT)
    suffix = f"_{attempt}" if attempt > 1 else ""
    return f"{FILENAME_PREFIX}{stamp}{suffix}.{IMAGE_EXT}"


class CaptureCoordinator(QtCore.QObject):
    """Turns clipboard images into saved files and output paths.

    At most one capture runs at a time: notifications arriving while a
    capture is in flight (for example the one caused by writing the
    output path back to the clipboard) are dropped, not queued.
    """

    saved = QtCore.Signal(object)  # CaptureResult
    failed = QtCore.Signal(str)

    def __init__(self, store: SettingsStore, image_source: Optional[ImageSource] = None,
                 clock: Callable[[], datetime] = datetime.now):
        super().__init__()
        self.store = store
        self.resolver = PathResolver(store)
        self.image_source = image_source
        self._clock = clock
        self._state = CaptureState.IDLE
        self._last_fingerprint = ''

    @property
    def state(self) -> CaptureState:
        return self._state

    @property
    def last_fingerprint(self) -> str:
        return self._last_fingerprint

    @QtCore.Slot()
    def on_clipboard_changed(self) -> Optional[CaptureResult]:
        if not self._enter():
            return None
        try:
            image = self.image_source() if self.image_source else None
            return self._capture(image)
        finally:
            self._state = CaptureState.IDLE

    def on_clipboard_image(self, qimage: Optional[QtGui.QImage]) -> Optional[CaptureResult]:
        if not self._enter():
            return None
        try:
            return self._capture(qimage)
        finally:
            self._state = CaptureState.IDLE

    def _enter(self) -> bool:
        if self._state is CaptureState.PROCESSING:
            log.debug("Clipboard update ignored: capture already in progress")
            return False
        self._state = CaptureState.PROCESSING
        return True

    def _capture(self, qimage: Optional[QtGui.QImage]) -> Optional[CaptureResult]:
        if qimage is None or qimage.isNull():
            return None
        log.debug("Clipboard update: contains image")
        try:
            fingerprint = compute_fingerprint(qimage)
        except ValueError as e:
            log.debug("Clipboard image could not be encoded: %s", e)
            return None
        if fingerprint == self._last_fingerprint:
            log.debug("Duplicate image %s skipped", fingerprint[:12])
            return None

        previous = self._last_fingerprint
        # Record before writing so our own clipboard write cannot re-trigger a save
        self._last_fingerprint = fingerprint
        log.debug("New image: %dx%d", qimage.width(), qimage.height())
        try:
            saved_path = self._write(qimage)
        except Exception as e:
            self._last_fingerprint = previous
            log.error("Failed to save image: %s", e)
            self.failed.emit(f"Failed to save image: {e}")
            return None

        result = CaptureResult(
            saved_path=saved_path,
            output_path=self.resolver.clipboard_path(saved_path),
            project_mode=self.resolver.is_project_mode_active(),
            fingerprint=fingerprint,
        )
        log.info("Saved %s -> %s", result.saved_path, result.output_path)
        self.saved.emit(result)
        return result

    def _write(self, qimage: QtGui.QImage) -> str:
        save_dir = self.resolver.save_directory()
        Path(save_dir).mkdir(parents=True, exist_ok=True)
        when = self._clock()
        attempt = 1
        path = os.path.join(save_dir, image_file_name(when))
        while os.path.exists(path):
            attempt += 1
            path = os.path.join(save_dir, image_file_name(when, attempt))
        if not qimage.save(path, IMAGE_FORMAT):
            raise OSError(f"could not write {path}")
        return path
