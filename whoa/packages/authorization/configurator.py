"""Container configurator for accounts and authorization."""

from whoa.authorization import AccountManager, AuthorizationManager, AuthorizationSettings
from whoa.core import Container, ContainerConfigurator
from whoa.settings import InstanceSettingsProvider


class AuthorizationContainerConfigurator(ContainerConfigurator):
    """Registers the account manager and the authorization manager."""

    @classmethod
    def configure_container(cls, container: Container):
        container.share(AccountManager, lambda c: AccountManager())
        container.share(AuthorizationManager, cls.create_authorization_manager)

    @staticmethod
    def create_authorization_manager(container: Container) -> AuthorizationManager:
        settings = container.get(InstanceSettingsProvider).get(AuthorizationSettings)
        return AuthorizationManager(
            settings[AuthorizationSettings.KEY_RULES],
            container,
            settings[AuthorizationSettings.KEY_LOG_IS_ENABLED],
        )
