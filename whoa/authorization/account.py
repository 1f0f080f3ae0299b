"""Accounts and the account manager."""

from abc import ABC, abstractmethod
from typing import Any, List, Optional


class Account(ABC):
    """Authenticated party of the current request or command."""


class PassportAccount(Account):
    """Account issued for a user or a client, with scopes and properties."""

    @abstractmethod
    def has_property(self, key) -> bool:
        pass

    @abstractmethod
    def get_property(self, key) -> Any:
        pass

    @abstractmethod
    def has_user_identity(self) -> bool:
        pass

    @abstractmethod
    def get_user_identity(self):
        pass

    @abstractmethod
    def has_client_identity(self) -> bool:
        pass

    @abstractmethod
    def get_client_identity(self):
        pass

    @abstractmethod
    def has_scope(self, scope: str) -> bool:
        pass

    @abstractmethod
    def has_scopes(self) -> bool:
        pass

    @abstractmethod
    def get_scopes(self) -> List[str]:
        pass


class AccountManager:
    """Holds the current account."""

    def __init__(self):
        self._account: Optional[Account] = None

    def get_account(self) -> Optional[Account]:
        return self._account

    def set_account(self, account: Optional[Account]) -> "AccountManager":
        self._account = account
        return self
