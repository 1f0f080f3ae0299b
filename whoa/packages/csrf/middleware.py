"""CSRF protection middleware."""

import logging

from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

from whoa.csrf import CsrfTokenStorage
from whoa.http import ContainerMiddleware
from whoa.settings import InstanceSettingsProvider
from .settings import CsrfSettings

logger = logging.getLogger(__name__)


class CsrfMiddleware(ContainerMiddleware):
    """Rejects form submissions without a valid single-use CSRF token."""

    @classmethod
    async def handle(cls, request: Request, call_next, container) -> Response:
        settings = container.get(InstanceSettingsProvider).get(CsrfSettings)
        if request.method.upper() not in settings[CsrfSettings.KEY_HTTP_METHODS_TO_CHECK]:
            return await call_next(request)

        # body is cached so the route can read the form again
        await request.body()
        form = await request.form()
        token = form.get(settings[CsrfSettings.KEY_HTTP_REQUEST_CSRF_TOKEN_KEY])

        if isinstance(token, str) and container.get(CsrfTokenStorage).check(token):
            return await call_next(request)

        logger.info(f"CSRF check failed for {request.method} {request.url.path}")
        create_error_response = settings[CsrfSettings.KEY_CREATE_ERROR_RESPONSE_METHOD]
        if create_error_response is not None:
            return create_error_response(container, request)

        return cls.create_error_response(container, request)

    @classmethod
    def create_error_response(cls, container, request: Request) -> Response:
        return PlainTextResponse("Forbidden", status_code=403)
