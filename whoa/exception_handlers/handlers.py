"""Text, HTML and JSON exception handlers."""

import html

from starlette.responses import Response

from .base import (
    INTERNAL_SERVER_ERROR,
    BaseThrowableHandler,
    describe,
    format_stack_trace,
    get_location,
    get_status_code,
)


class TextThrowableHandler(BaseThrowableHandler):
    """Plain text responses, with exception details in debug mode."""

    def create_response(self, throwable: BaseException, container) -> Response:
        self.log_exception(throwable, container, INTERNAL_SERVER_ERROR)

        is_debug, _, _ = self.get_settings(container)
        message = INTERNAL_SERVER_ERROR
        if is_debug:
            message = f"{describe(throwable)}\n{format_stack_trace(throwable)}"

        return self.create_text_response(throwable, message, get_status_code(throwable))


class HtmlThrowableHandler(BaseThrowableHandler):
    """HTML page with exception details in debug mode, plain text otherwise."""

    def create_response(self, throwable: BaseException, container) -> Response:
        self.log_exception(throwable, container, INTERNAL_SERVER_ERROR)

        is_debug, app_name, dumper = self.get_settings(container)
        status_code = get_status_code(throwable)

        if not is_debug:
            return self.create_text_response(throwable, INTERNAL_SERVER_ERROR, status_code)

        details = self.get_details(throwable, container, dumper)
        rows = "".join(
            f"<tr><th>{html.escape(str(key))}</th><td>{html.escape(str(value))}</td></tr>"
            for key, value in details.items()
        )
        details_table = f"<h2>{html.escape(app_name)} Details</h2><table>{rows}</table>" if details else ""
        title = html.escape(f"Whoops! There was a problem with '{app_name}'.")
        page = (
            f"<!DOCTYPE html><html><head><meta charset=\"utf-8\"><title>{title}</title></head>"
            f"<body><h1>{title}</h1>"
            f"<p>{html.escape(describe(throwable))}</p>"
            f"<pre>{html.escape(format_stack_trace(throwable))}</pre>"
            f"{details_table}</body></html>"
        )

        return self.create_html_response(throwable, page, status_code)


class JsonThrowableHandler(BaseThrowableHandler):
    """JSON ``{"error": {...}}`` responses."""

    def create_response(self, throwable: BaseException, container) -> Response:
        self.log_exception(throwable, container, INTERNAL_SERVER_ERROR)

        is_debug, _, dumper = self.get_settings(container)
        status_code = get_status_code(throwable)

        if not is_debug:
            return self.create_json_response(throwable, {"error": {"message": INTERNAL_SERVER_ERROR}}, status_code)

        file_name, line = get_location(throwable)
        error = {
            "type": type(throwable).__name__,
            "message": str(throwable),
            "file": file_name,
            "line": line,
            "trace": format_stack_trace(throwable).splitlines()[1:],
        }
        error.update(self.get_details(throwable, container, dumper))

        return self.create_json_response(throwable, {"error": error}, status_code)
