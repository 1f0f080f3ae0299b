"""Data package."""

from .package import DataPackage
from .configurator import dispose_engines

__all__ = ["DataPackage", "dispose_engines"]
