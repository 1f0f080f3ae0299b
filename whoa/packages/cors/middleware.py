"""CORS middleware."""

import logging

from starlette.requests import Request
from starlette.responses import Response

from whoa.http import ContainerMiddleware, CorsAnalyzer, RequestType

logger = logging.getLogger(__name__)


class CorsMiddleware(ContainerMiddleware):
    """
    Handles cross-origin requests.

    Requests out of CORS scope pass through unchanged. Actual CORS requests
    pass through and get CORS headers added. Pre-flight requests are answered
    here with an empty response. Requests failing the CORS checks get
    ``400 Bad Request``.
    """

    @classmethod
    async def handle(cls, request: Request, call_next, container) -> Response:
        analyzer: CorsAnalyzer = container.get(CorsAnalyzer)
        result = analyzer.analyze(request)
        request_type = result.get_request_type()

        if request_type is RequestType.OUT_OF_CORS_SCOPE:
            return await call_next(request)

        if request_type is RequestType.ACTUAL_REQUEST:
            response = await call_next(request)
            response.headers.update(result.get_response_headers())
            return response

        if request_type is RequestType.PRE_FLIGHT_REQUEST:
            return Response(status_code=200, headers=result.get_response_headers())

        logger.info(f"CORS request rejected: {request_type.value}")
        return cls.create_error_response(request, request_type)

    @classmethod
    def create_error_response(cls, request: Request, request_type: RequestType) -> Response:
        return Response(status_code=400)
