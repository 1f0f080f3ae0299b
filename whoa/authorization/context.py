"""Authorization context passed to policy rules."""

from typing import Any, Dict, Mapping


class RequestProperties:
    REQ_ACTION = "action"
    REQ_RESOURCE_TYPE = "resource_type"
    REQ_RESOURCE_IDENTITY = "resource_identity"
    REQ_RESOURCE_ATTRIBUTES = "resource_attributes"
    REQ_RESOURCE_RELATIONSHIPS = "resource_relationships"


class ContextProperties:
    CTX_CONTAINER = "container"


class PropertyBag:
    """Read-only properties with ``has``/``get`` access."""

    def __init__(self, properties: Mapping[str, Any] = None):
        self._properties: Dict[str, Any] = dict(properties or {})

    def has(self, key: str) -> bool:
        return key in self._properties

    def get(self, key: str) -> Any:
        return self._properties[key]

    def __repr__(self):
        return f"<PropertyBag: {sorted(self._properties)}>"


class AuthorizationContext(PropertyBag):
    """
    Context properties plus the properties of the request being authorized.

    Context properties (such as the container) are read with ``has``/``get``,
    request properties with ``get_request().has``/``get_request().get``.
    """

    def __init__(self, request: Mapping[str, Any], context: Mapping[str, Any] = None):
        super().__init__(context)
        self._request = PropertyBag(request)

    def get_request(self) -> PropertyBag:
        return self._request
