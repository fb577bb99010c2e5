import argparse
import signal
import sys
from pathlib import Path

from PySide6 import QtCore, QtGui

from .app import AppController
from .config import APP_NAME, INSTANCE_LOCK_NAME, LOG_FILENAME, default_base_dir
from .log import configure_logging
from .paths import is_project_mode_active, save_directory
from .settings import SettingsStore


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Save copied images to disk and put their WSL or project-relative path on the clipboard.",
    )
    p.add_argument("--base-dir", type=Path, default=None, help="directory holding settings.json")
    p.add_argument("--save-path", help="folder for images when project mode is off")
    p.add_argument("--project-root", help="project root used in project mode")
    p.add_argument("--screenshots-dir", help="folder inside the project root")
    p.add_argument("--project-mode", dest="project_mode", action="store_true", default=None)
    p.add_argument("--no-project-mode", dest="project_mode", action="store_false")
    p.add_argument("--enable-logging", dest="enable_logging", action="store_true", default=None)
    p.add_argument("--disable-logging", dest="enable_logging", action="store_false")
    p.add_argument("--show-settings", action="store_true", help="print effective settings and exit")
    return p


def settings_changes(args: argparse.Namespace) -> dict:
    changes = {}
    if args.save_path is not None:
        changes["save_path"] = args.save_path
    if args.project_root is not None:
        changes["project_root_path"] = args.project_root
    if args.screenshots_dir is not None:
        changes["project_screenshots_dir"] = args.screenshots_dir
    if args.project_mode is not None:
        changes["project_mode_enabled"] = args.project_mode
    if args.enable_logging is not None:
        changes["enable_logging"] = args.enable_logging
    return changes


def main(argv=None):
    args = build_parser().parse_args(argv)
    base_dir = args.base_dir or default_base_dir()

    store = SettingsStore(base_dir)
    store.load()
    configure_logging(store.settings.enable_logging, store.base_dir / LOG_FILENAME)
    changes = settings_changes(args)
    if changes:
        store.update(**changes)

    if args.show_settings:
        s = store.settings
        for key, value in s.to_json().items():
            print(f"{key}: {value}")
        print(f"Mode: {'project' if is_project_mode_active(s) else 'normal'}")
        print(f"Save directory: {save_directory(s)}")
        return 0

    app = QtGui.QGuiApplication(sys.argv[:1])
    app.setApplicationName(APP_NAME)

    store.base_dir.mkdir(parents=True, exist_ok=True)
    lock = QtCore.QLockFile(str(store.base_dir / INSTANCE_LOCK_NAME))
    lock.setStaleLockTime(5000)
    if not lock.tryLock(1):
        print(f"{APP_NAME} is already running.")
        return 0

    controller = AppController(app.clipboard(), store)

    # Let Ctrl+C reach Python while the Qt loop runs
    signal.signal(signal.SIGINT, lambda *_: app.quit())
    timer = QtCore.QTimer()
    timer.timeout.connect(lambda: None)
    timer.start(500)

    rc = app.exec()
    del controller
    lock.unlock()
    return rc


if __name__ == "__main__":
    sys.exit(main())
