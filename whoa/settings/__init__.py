"""Settings and settings providers."""

from .base import Settings
from .instance_provider import InstanceSettingsProvider
from .file_provider import FileSettingsProvider

__all__ = ["Settings", "InstanceSettingsProvider", "FileSettingsProvider"]
