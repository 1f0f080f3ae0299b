"""Session abstractions."""

from .session import Session, SessionFunctions

__all__ = ["Session", "SessionFunctions"]
