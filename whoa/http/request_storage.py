"""Storage of the current HTTP request."""

from typing import Optional

from starlette.requests import Request


class RequestStorage:
    """Holds the request being handled so services can read it."""

    def __init__(self):
        self._request: Optional[Request] = None

    def get(self) -> Request:
        if not self.has():
            raise RuntimeError("Request has not been assigned yet.")
        return self._request

    def set(self, request: Request) -> "RequestStorage":
        self._request = request
        return self

    def has(self) -> bool:
        return self._request is not None
