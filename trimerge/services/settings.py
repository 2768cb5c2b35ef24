"""
Application settings management.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, asdict, fields
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


@dataclass
class MergeSettings:
    """Settings for merge operations."""
    show_base_in_conflicts: bool = True
    marker_size: int = 7
    strategy: str = "manual"
    create_backup: bool = False
    backup_extension: str = ".orig"


@dataclass
class LoggingSettings:
    """Settings for log output."""
    level: str = "WARNING"
    log_file: str = ""


@dataclass
class ApplicationSettings:
    """Main application settings container."""
    merge: MergeSettings = field(default_factory=MergeSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)


class SettingsManager:
    """Manager for loading/saving application settings."""

    def __init__(self, settings_path: Optional[Path] = None):
        self.settings_path = Path(settings_path) if settings_path else self._get_default_path()
        self._settings: Optional[ApplicationSettings] = None

    @staticmethod
    def _get_default_path() -> Path:
        """Get the default settings file path."""
        if os.name == 'nt':
            app_data = os.environ.get('APPDATA', os.path.expanduser('~'))
            return Path(app_data) / 'trimerge' / 'settings.json'
        else:
            config_home = os.environ.get('XDG_CONFIG_HOME',
                                         os.path.expanduser('~/.config'))
            return Path(config_home) / 'trimerge' / 'settings.json'

    @property
    def settings(self) -> ApplicationSettings:
        """Get current settings, loading from disk if needed."""
        if self._settings is None:
            self._settings = self.load()
        return self._settings

    def load(self) -> ApplicationSettings:
        """Load settings from disk, falling back to defaults."""
        if not self.settings_path.exists():
            return ApplicationSettings()

        try:
            with open(self.settings_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", self.settings_path, e)
            return ApplicationSettings()

        if not isinstance(data, dict):
            logger.warning("Ignoring malformed settings file %s", self.settings_path)
            return ApplicationSettings()

        return self._from_dict(data)

    def save(self, settings: Optional[ApplicationSettings] = None) -> bool:
        """Save settings to disk."""
        settings = settings or self._settings
        if settings is None:
            return False

        try:
            self.settings_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.settings_path, 'w', encoding='utf-8') as f:
                json.dump(asdict(settings), f, indent=2)
        except OSError as e:
            logger.error("Failed to save settings to %s: %s", self.settings_path, e)
            return False

        self._settings = settings
        return True

    def reset(self) -> ApplicationSettings:
        """Reset settings to defaults."""
        self._settings = ApplicationSettings()
        return self._settings

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> ApplicationSettings:
        return ApplicationSettings(
            merge=cls._section(MergeSettings, data.get('merge')),
            logging=cls._section(LoggingSettings, data.get('logging')),
        )

    @staticmethod
    def _section(section_cls, data: Any):
        """Build a settings section, ignoring unknown or mistyped keys."""
        section = section_cls()
        if not isinstance(data, dict):
            return section
        for f in fields(section_cls):
            if f.name not in data:
                continue
            value = data[f.name]
            default = getattr(section, f.name)
            if type(value) is type(default):
                setattr(section, f.name, value)
            else:
                logger.warning("Ignoring setting %s=%r: expected %s",
                               f.name, value, type(default).__name__)
        return section
