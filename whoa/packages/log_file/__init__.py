"""Log file package."""

from .package import LogFilePackage
from .settings import LogFileSettings

__all__ = ["LogFilePackage", "LogFileSettings"]
