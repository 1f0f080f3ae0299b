"""Command middleware running commands on behalf of a configured user."""

import logging
from abc import abstractmethod
from typing import Any, Callable, Dict, List, Mapping, Union

from whoa.authorization import AccountManager, PassportAccount
from whoa.settings import InstanceSettingsProvider
from .base import CommandMiddleware
from .io import CommandIO
from .settings import CommandSettings

logger = logging.getLogger(__name__)

ScopesReader = Callable[[Union[int, str]], List[str]]


class CliPassport(PassportAccount):
    """User account for console commands. Scopes are read when first asked for."""

    def __init__(self, user_identity: Union[int, str], read_user_scopes: ScopesReader,
                 properties: Mapping[str, Any] = None):
        if isinstance(user_identity, bool) or not isinstance(user_identity, (int, str)):
            raise ValueError(f"Invalid user identity {user_identity!r}")

        self._user_identity = user_identity
        self._read_user_scopes = read_user_scopes
        self._properties = dict(properties or {})

    def has_property(self, key) -> bool:
        return key in self._properties

    def get_property(self, key):
        return self._properties[key]

    def has_user_identity(self) -> bool:
        return True

    def get_user_identity(self):
        return self._user_identity

    def has_client_identity(self) -> bool:
        return False

    def get_client_identity(self):
        return None

    def has_scope(self, scope: str) -> bool:
        return scope in self.get_scopes()

    def has_scopes(self) -> bool:
        return True

    def get_scopes(self) -> List[str]:
        return list(self._read_user_scopes(self._user_identity))


class BaseImpersonationMiddleware(CommandMiddleware):
    """Installs a :class:`CliPassport` for the impersonated user before the command runs."""

    @classmethod
    @abstractmethod
    def create_read_scopes(cls, container) -> ScopesReader:
        pass

    @classmethod
    def handle(cls, io: CommandIO, next_handler: Callable[[CommandIO], None], container):
        settings = container.get(InstanceSettingsProvider).get(CommandSettings)
        user_identity = settings.get(CommandSettings.KEY_IMPERSONATE_AS_USER_IDENTITY)
        properties = settings.get(CommandSettings.KEY_IMPERSONATE_WITH_USER_PROPERTIES) or {}

        if user_identity is None:
            logger.debug("No user to impersonate, running command without an account")
        else:
            passport = cls.create_cli_passport(user_identity, cls.create_read_scopes(container), properties)
            container.get(AccountManager).set_account(passport)
            logger.debug(f"Impersonating user {user_identity}")

        next_handler(io)

    @staticmethod
    def create_cli_passport(user_identity, read_user_scopes: ScopesReader,
                            properties: Dict[str, Any]) -> PassportAccount:
        return CliPassport(user_identity, read_user_scopes, properties)


class ImpersonationMiddleware(BaseImpersonationMiddleware):
    """Reads the impersonated user scopes from command settings."""

    @classmethod
    def create_read_scopes(cls, container) -> ScopesReader:
        def read_scopes(user_identity) -> List[str]:
            settings = container.get(InstanceSettingsProvider).get(CommandSettings)
            return list(settings.get(CommandSettings.KEY_IMPERSONATE_WITH_USER_SCOPES) or [])

        return read_scopes
