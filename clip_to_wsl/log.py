import logging
import os
from pathlib import Path
from typing import Optional

ROOT_LOGGER = "clip_to_wsl"
FILE_FORMAT = "%(asctime)s.%(msecs)03d - %(message)s"
CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_console_handler: Optional[logging.Handler] = None
_file_handler: Optional[logging.FileHandler] = None


def get_logger(name: str) -> logging.Logger:
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(enable_file: bool, log_path: Optional[Path] = None, console: bool = True) -> None:
    """Install the console handler once and toggle the debug log file.

    The file handler is present exactly while ``enable_file`` is true.
    Calling again with a different path moves the file handler.
    """
    global _console_handler, _file_handler
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(logging.DEBUG)

    if console and _console_handler is None:
        _console_handler = logging.StreamHandler()
        _console_handler.setLevel(logging.INFO)
        _console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        root.addHandler(_console_handler)

    if _file_handler is not None:
        if enable_file and log_path is not None and _file_handler.baseFilename == os.path.abspath(log_path):
            return
        root.removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None

    if enable_file and log_path is not None:
        try:
            Path(log_path).parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(log_path, encoding="utf-8")
        except OSError as e:
            root.warning("Could not open log file %s: %s", log_path, e)
            return
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
        root.addHandler(handler)
        _file_handler = handler


def file_logging_enabled() -> bool:
    return _file_handler is not None
