"""CORS package definition."""

from whoa.core import Package, PackageConfig
from whoa.http import CorsSettings
from .configurator import CorsContainerConfigurator
from .middleware import CorsMiddleware


class CorsPackage(Package):
    """Cross-origin resource sharing."""

    DEFAULT_PRIORITY = 45

    def __init__(self, config: PackageConfig = None):
        super().__init__(config)

        self._configurators = [CorsContainerConfigurator]
        self._middleware = [CorsMiddleware]
        self._settings = [CorsSettings]

    @property
    def name(self) -> str:
        return "cors"

    @property
    def display_name(self) -> str:
        return "CORS"

    @property
    def description(self) -> str:
        return "Cross-origin request analysis and response headers"
