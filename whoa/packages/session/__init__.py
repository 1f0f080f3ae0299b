"""Session package."""

from .package import SessionPackage
from .settings import SessionSettings

__all__ = ["SessionPackage", "SessionSettings"]
