"""Exception handlers producing HTTP responses."""

from .base import (
    ThrowableHandler,
    BaseThrowableHandler,
    ThrowableResponse,
    get_status_code,
)
from .handlers import TextThrowableHandler, HtmlThrowableHandler, JsonThrowableHandler

__all__ = [
    "ThrowableHandler",
    "BaseThrowableHandler",
    "ThrowableResponse",
    "get_status_code",
    "TextThrowableHandler",
    "HtmlThrowableHandler",
    "JsonThrowableHandler",
]
