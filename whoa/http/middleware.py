"""Base class for middleware working with the request container."""

from abc import ABC, abstractmethod

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response


class ContainerMiddleware(BaseHTTPMiddleware, ABC):
    """
    Middleware handing the per-request container to ``handle``.

    The container is put into ``request.state.container`` by the application
    before package middleware runs.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        return await self.handle(request, call_next, request.state.container)

    @classmethod
    @abstractmethod
    async def handle(cls, request: Request, call_next, container) -> Response:
        pass
