"""Authorization package definition."""

from whoa.authorization import AuthorizationSettings
from whoa.core import Package, PackageConfig
from .configurator import AuthorizationContainerConfigurator


class AuthorizationPackage(Package):
    """Current account and policy based authorization."""

    DEFAULT_PRIORITY = 60

    def __init__(self, config: PackageConfig = None):
        super().__init__(config)

        self._configurators = [AuthorizationContainerConfigurator]
        self._settings = [AuthorizationSettings]

    @property
    def name(self) -> str:
        return "authorization"

    @property
    def display_name(self) -> str:
        return "Authorization"

    @property
    def description(self) -> str:
        return "Account manager and authorization policies"
