import os

from .settings import Settings, SettingsStore


def convert_to_drive_path(path: str) -> str:
    """Translate a drive-rooted host path into its /mnt/<drive> form.

    ``C:\\Users\\test\\file.png`` becomes ``/mnt/c/Users/test/file.png``.
    Paths without a drive prefix only get their separators normalized.
    """
    path = path.replace("\\", "/")
    if len(path) >= 2 and path[1] == ":":
        drive = path[0].lower()
        path = f"/mnt/{drive}{path[2:]}"
    return path


def file_name(path: str) -> str:
    normalized = path.replace("\\", "/")
    return normalized.rsplit("/", 1)[-1]


def is_project_mode_active(settings: Settings) -> bool:
    return bool(settings.project_mode_enabled and settings.project_root_path)


def save_directory(settings: Settings) -> str:
    if is_project_mode_active(settings):
        return os.path.join(settings.project_root_path, settings.project_screenshots_dir)
    return settings.save_path


def clipboard_path(settings: Settings, written_path: str) -> str:
    # Project mode yields a path relative to the project root, always with '/'
    if is_project_mode_active(settings):
        rel_dir = settings.project_screenshots_dir.replace("\\", "/")
        return f"{rel_dir}/{file_name(written_path)}"
    return convert_to_drive_path(written_path)


class PathResolver:
    """Resolves save locations against the store's current settings.

    Nothing is cached: every call looks at ``store.settings`` again, so
    edits committed between captures take effect immediately.
    """

    def __init__(self, store: SettingsStore):
        self.store = store

    def is_project_mode_active(self) -> bool:
        return is_project_mode_active(self.store.settings)

    def save_directory(self) -> str:
        return save_directory(self.store.settings)

    def clipboard_path(self, written_path: str) -> str:
        return clipboard_path(self.store.settings, written_path)
