"""Commands package."""

from .package import CommandsPackage

__all__ = ["CommandsPackage"]
