"""Log file settings."""

import os
from typing import Any, Dict

from whoa.settings import Settings


class LogFileSettings(Settings):
    """
    Application log file.

    Read from the ``logging`` configuration section. When logging is
    disabled the application logger gets a ``NullHandler``.
    """

    KEY_IS_ENABLED = "enabled"
    KEY_LOG_FOLDER = "folder"
    KEY_LOG_FILE = "file"
    KEY_LOG_LEVEL = "level"
    KEY_LOG_FORMAT = "format"
    KEY_LOGGER_NAME = "logger_name"

    DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    def get(self, app_config: Dict[str, Any]) -> Dict[str, Any]:
        section = app_config.get("logging") or {}
        settings = {
            self.KEY_IS_ENABLED: bool(section.get(self.KEY_IS_ENABLED, False)),
            self.KEY_LOG_FOLDER: section.get(self.KEY_LOG_FOLDER),
            self.KEY_LOG_FILE: section.get(self.KEY_LOG_FILE) or "whoa.log",
            self.KEY_LOG_LEVEL: str(section.get(self.KEY_LOG_LEVEL) or "INFO").upper(),
            self.KEY_LOG_FORMAT: section.get(self.KEY_LOG_FORMAT) or self.DEFAULT_FORMAT,
            self.KEY_LOGGER_NAME: (app_config.get("app") or {}).get("name") or "whoa.app",
        }
        settings.update(self.get_settings())

        if settings[self.KEY_IS_ENABLED]:
            folder = settings[self.KEY_LOG_FOLDER]
            if not folder or not os.path.isdir(folder):
                raise ValueError(f"Invalid log folder `{folder}`.")

        return settings

    def get_settings(self) -> Dict[str, Any]:
        return {}
