"""Container configurator for CSRF tokens."""

from whoa.core import Container, ContainerConfigurator
from whoa.csrf import CsrfTokenGenerator, CsrfTokenStorage, SessionCsrfTokenStorage
from whoa.session import Session
from whoa.settings import InstanceSettingsProvider
from .settings import CsrfSettings


class CsrfContainerConfigurator(ContainerConfigurator):
    """Registers one session token storage as both token generator and storage."""

    @classmethod
    def configure_container(cls, container: Container):
        container.share(CsrfTokenStorage, cls.create_storage)
        container.share(CsrfTokenGenerator, lambda c: c.get(CsrfTokenStorage))

    @staticmethod
    def create_storage(container: Container) -> CsrfTokenStorage:
        settings = container.get(InstanceSettingsProvider).get(CsrfSettings)
        return SessionCsrfTokenStorage(
            container.get(Session),
            settings[CsrfSettings.KEY_TOKEN_STORAGE_KEY_IN_SESSION],
            settings[CsrfSettings.KEY_MAX_TOKENS],
            settings[CsrfSettings.KEY_MAX_TOKENS_THRESHOLD],
        )
