"""Doctor Settings: persisted defaults for the rigdoctor CLI"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

SETTINGS_ENV = "RIGDOCTOR_SETTINGS"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _log_level(value) -> str:
    level = str(value).upper()
    if level not in LOG_LEVELS:
        logger.warning(f"Unknown log_level {value!r} in settings, using WARNING")
        return "WARNING"
    return level


@dataclass
class DoctorSettings:
    """Doctor Settings: CLI defaults"""

    town_root: Optional[str] = None  # None: use the current directory
    default_rig: str = ""
    log_level: str = "WARNING"
    checks_disabled: List[str] = field(default_factory=list)

    def get_town_root(self) -> Path:
        return Path(self.town_root).expanduser() if self.town_root else Path.cwd()

    def to_dict(self) -> Dict:
        """Convert to dictionary"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> "DoctorSettings":
        """Create from dictionary"""
        return cls(
            town_root=data.get("town_root"),
            default_rig=data.get("default_rig", ""),
            log_level=_log_level(data.get("log_level", "WARNING")),
            checks_disabled=list(data.get("checks_disabled", [])),
        )


def default_settings_path() -> Path:
    override = os.environ.get(SETTINGS_ENV)
    if override:
        return Path(override).expanduser()
    # Default: ~/.rigdoctor/settings.json
    return Path.home() / ".rigdoctor" / "settings.json"


class SettingsManager:
    """Manage doctor settings persistence"""

    def __init__(self, settings_path: Optional[Path] = None):
        self.settings_path = Path(settings_path) if settings_path else default_settings_path()

    def load(self) -> DoctorSettings:
        """Load settings from file"""
        if not self.settings_path.exists():
            return DoctorSettings()

        try:
            with open(self.settings_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return DoctorSettings.from_dict(data)
        except (OSError, ValueError, AttributeError, TypeError) as e:
            logger.warning(f"Failed to load settings from {self.settings_path}: {e}")
            return DoctorSettings()

    def save(self, settings: DoctorSettings) -> None:
        """Save settings to file"""
        self.settings_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.settings_path, "w", encoding="utf-8") as f:
            json.dump(settings.to_dict(), f, indent=2)


def load_settings(settings_path: Optional[Path] = None) -> DoctorSettings:
    """Load settings from the default (or given) location"""
    return SettingsManager(settings_path).load()
