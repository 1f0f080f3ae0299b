"""CSRF package definition."""

from whoa.core import Package, PackageConfig
from .configurator import CsrfContainerConfigurator
from .middleware import CsrfMiddleware
from .settings import CsrfSettings


class CsrfPackage(Package):
    """Cross-site request forgery protection for forms."""

    DEFAULT_PRIORITY = 50

    def __init__(self, config: PackageConfig = None):
        super().__init__(config)

        self._configurators = [CsrfContainerConfigurator]
        self._middleware = [CsrfMiddleware]
        self._settings = [CsrfSettings]

    @property
    def name(self) -> str:
        return "csrf"

    @property
    def display_name(self) -> str:
        return "CSRF"

    @property
    def description(self) -> str:
        return "Session stored CSRF tokens checked on form submissions"
