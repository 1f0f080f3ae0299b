"""HTTP helpers: request storage, CORS analysis and container middleware."""

from .request_storage import RequestStorage
from .cors import AnalysisResult, CorsAnalyzer, CorsSettings, RequestType
from .middleware import ContainerMiddleware

__all__ = [
    "RequestStorage",
    "AnalysisResult",
    "CorsAnalyzer",
    "CorsSettings",
    "RequestType",
    "ContainerMiddleware",
]
