import os
import sys
from pathlib import Path

APP_NAME = "ClipToWSL"
SETTINGS_FILENAME = "settings.json"
LOG_FILENAME = "clipboard_log.txt"
INSTANCE_LOCK_NAME = "instance.lock"
DEFAULT_IMAGES_DIRNAME = "ClipboardImages"
DEFAULT_SCREENSHOTS_DIR = "screenshots"
FILENAME_PREFIX = "clipboard_"
TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
IMAGE_FORMAT = "PNG"
IMAGE_EXT = "png"
INTERNAL_MIME = "application/x-cliptowsl-internal"


def default_base_dir() -> Path:
    # Settings live next to the executable when frozen
    if getattr(sys, "frozen", False):
        return Path(os.path.dirname(sys.executable))
    return Path(__file__).resolve().parent.parent
