"""Base exception handler turning exceptions into HTTP responses."""

import logging
import traceback
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Tuple

from starlette.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response

from whoa.class_loader import import_string
from whoa.settings import InstanceSettingsProvider

logger = logging.getLogger(__name__)

DEFAULT_HTTP_ERROR_CODE = 500
INTERNAL_SERVER_ERROR = "Internal Server Error"


class ThrowableResponse:
    """Mixin for responses created from an exception."""

    throwable: Optional[BaseException] = None


class ThrowableTextResponse(ThrowableResponse, PlainTextResponse):
    def __init__(self, throwable: BaseException, content: str, status_code: int):
        super().__init__(content, status_code=status_code)
        self.throwable = throwable


class ThrowableHtmlResponse(ThrowableResponse, HTMLResponse):
    def __init__(self, throwable: BaseException, content: str, status_code: int):
        super().__init__(content, status_code=status_code)
        self.throwable = throwable


class ThrowableJsonResponse(ThrowableResponse, JSONResponse):
    def __init__(self, throwable: BaseException, content: Any, status_code: int):
        super().__init__(content, status_code=status_code)
        self.throwable = throwable


def get_status_code(throwable: BaseException) -> int:
    status_code = getattr(throwable, "status_code", None)
    if isinstance(status_code, int) and not isinstance(status_code, bool) and status_code > 0:
        return status_code
    return DEFAULT_HTTP_ERROR_CODE


def get_location(throwable: BaseException) -> Tuple[str, int]:
    """File and line where the exception was raised."""
    frames = traceback.extract_tb(throwable.__traceback__) if throwable.__traceback__ else []
    if not frames:
        return "<unknown>", 0
    return frames[-1].filename, frames[-1].lineno


def describe(throwable: BaseException) -> str:
    file_name, line = get_location(throwable)
    return f"{type(throwable).__name__}: {throwable} in file {file_name} on line {line}"


def format_stack_trace(throwable: BaseException) -> str:
    frames = traceback.extract_tb(throwable.__traceback__) if throwable.__traceback__ else []
    lines = [
        f"{index:>3}. {frame.name}() {frame.filename}:{frame.lineno}"
        for index, frame in enumerate(reversed(frames), start=1)
    ]
    return "Stack trace:\n" + "\n".join(lines)


class ThrowableHandler(ABC):
    """Creates an HTTP response for an exception."""

    @abstractmethod
    def create_response(self, throwable: BaseException, container) -> Response:
        pass


class BaseThrowableHandler(ThrowableHandler):
    """Common logging and settings helpers for exception handlers."""

    def log_exception(self, throwable: BaseException, container, message: str):
        if not container.has(logging.Logger):
            logger.error(f"{message}: {throwable!r}")
            return

        try:
            app_logger = container.get(logging.Logger)
            app_logger.error(message, exc_info=(type(throwable), throwable, throwable.__traceback__))
        except Exception as e:
            # the response is still created when logs cannot be written
            logger.warning(f"Failed to log exception {throwable!r}: {e!r}")

    def get_settings(self, container) -> Tuple[bool, str, Optional[Callable]]:
        """Debug flag, application name and exception dumper."""
        app_config: Dict[str, Any] = {}
        if container.has(InstanceSettingsProvider):
            app_config = container.get(InstanceSettingsProvider).get_application_configuration() or {}

        app_section = app_config.get("app") or {}
        is_debug = bool(app_section.get("debug", False))
        app_name = app_section.get("name", "Whoa")
        dumper = app_section.get("exception_dumper")
        if isinstance(dumper, str):
            dumper = import_string(dumper)

        return is_debug, app_name, dumper

    def get_details(self, throwable: BaseException, container, dumper: Optional[Callable]) -> Dict[str, Any]:
        if dumper is None:
            return {}
        return dict(dumper(throwable, container) or {})

    def create_text_response(self, throwable: BaseException, text: str, status_code: int) -> Response:
        return ThrowableTextResponse(throwable, text, status_code)

    def create_html_response(self, throwable: BaseException, html: str, status_code: int) -> Response:
        return ThrowableHtmlResponse(throwable, html, status_code)

    def create_json_response(self, throwable: BaseException, data: Any, status_code: int) -> Response:
        return ThrowableJsonResponse(throwable, data, status_code)
