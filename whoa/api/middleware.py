"""Middleware wiring the per-request container and exception handling."""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from whoa.exception_handlers import TextThrowableHandler, ThrowableHandler
from whoa.http import RequestStorage

logger = logging.getLogger(__name__)


class RequestContainerMiddleware(BaseHTTPMiddleware):
    """Creates a container for every request and stores it in ``request.state.container``."""

    def __init__(self, app, application):
        super().__init__(app)
        self.application = application

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        container = self.application.create_container()
        if container.has(RequestStorage):
            container.get(RequestStorage).set(request)
        request.state.container = container

        return await call_next(request)


class ThrowableHandlerMiddleware(BaseHTTPMiddleware):
    """Turns exceptions raised by inner middleware and routes into responses."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            container = request.state.container
            handler = container.get(ThrowableHandler) if container.has(ThrowableHandler) else TextThrowableHandler()
            logger.debug(f"Handling {type(e).__name__} with {type(handler).__name__}")
            return handler.create_response(e, container)
