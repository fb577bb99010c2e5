import json
import os
from dataclasses import dataclass, asdict, replace
from pathlib import Path
from typing import Any, Dict, Union

from PySide6 import QtCore

from .config import DEFAULT_IMAGES_DIRNAME, DEFAULT_SCREENSHOTS_DIR, SETTINGS_FILENAME
from .log import get_logger

log = get_logger(__name__)

# settings.json key -> Settings attribute
JSON_KEYS = {
    "SavePath": "save_path",
    "EnableLogging": "enable_logging",
    "ProjectModeEnabled": "project_mode_enabled",
    "ProjectRootPath": "project_root_path",
    "ProjectScreenshotsDir": "project_screenshots_dir",
}
BOOL_FIELDS = ("enable_logging", "project_mode_enabled")


@dataclass
class Settings:
    save_path: str
    enable_logging: bool = False
    project_mode_enabled: bool = False
    project_root_path: str = ''
    project_screenshots_dir: str = DEFAULT_SCREENSHOTS_DIR

    @classmethod
    def defaults(cls, base_dir: Union[str, Path]) -> "Settings":
        return cls(save_path=os.path.join(str(base_dir), DEFAULT_IMAGES_DIRNAME))

    def to_json(self) -> Dict[str, Any]:
        data = asdict(self)
        return {key: data[attr] for key, attr in JSON_KEYS.items()}


def check_value(attr: str, value: Any, label: str = "") -> None:
    label = label or attr
    if attr in BOOL_FIELDS:
        if not isinstance(value, bool):
            raise TypeError(f"{label} must be a boolean, got {type(value).__name__}")
    elif not isinstance(value, str):
        raise TypeError(f"{label} must be a string, got {type(value).__name__}")

def merge_json(current: Settings, data: Any) -> Settings:
    """Return ``current`` overlaid with the recognized keys of ``data``.

    Raises ValueError/TypeError for a structurally invalid record so the
    caller can discard it as a whole. Unknown keys are ignored; missing,
    null and empty string values keep the current value. Booleans
    overwrite whenever present.
    """
    if not isinstance(data, dict):
        raise ValueError("settings root is not an object")
    changes: Dict[str, Any] = {}
    for key, attr in JSON_KEYS.items():
        if key not in data:
            continue
        value = data[key]
        if value is None and attr not in BOOL_FIELDS:
            continue
        check_value(attr, value, key)
        if attr in BOOL_FIELDS or value:
            changes[attr] = value
    return replace(current, **changes)


class SettingsStore(QtCore.QObject):
    """Owns the single Settings record and its settings.json file."""

    changed = QtCore.Signal()

    def __init__(self, base_dir: Union[str, Path]):
        super().__init__()
        self.base_dir = Path(base_dir)
        self.path = self.base_dir / SETTINGS_FILENAME
        self.settings = Settings.defaults(base_dir)

    def snapshot(self) -> Settings:
        return replace(self.settings)

    def load(self) -> Settings:
        if not self.path.exists():
            log.debug("No settings file at %s, using defaults", self.path)
            return self.settings
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self.settings = merge_json(self.settings, data)
        except (OSError, ValueError, TypeError) as e:
            # JSONDecodeError is a ValueError
            log.warning("Ignoring unreadable settings file %s: %s", self.path, e)
        return self.settings

    def save(self) -> bool:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            txt = json.dumps(self.settings.to_json(), ensure_ascii=False, indent=2)
            self.base_dir.mkdir(parents=True, exist_ok=True)
            # Atomic write
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(txt)
            os.replace(tmp, self.path)
        except (OSError, TypeError, ValueError) as e:
            log.warning("Failed to save settings to %s: %s", self.path, e)
            try:
                tmp.unlink(missing_ok=True)
            except OSError:
                pass
            return False
        log.debug("Settings saved to %s", self.path)
        return True

    def update(self, **changes: Any) -> Settings:
        """Apply ``changes`` to the record, persist it, and notify listeners."""
        for attr in changes:
            if attr not in JSON_KEYS.values():
                raise AttributeError(f"Unknown setting: {attr}")
            check_value(attr, changes[attr])
        self.settings = replace(self.settings, **changes)
        self.save()
        self.changed.emit()
        return self.settings
