"""Accounts, authorization context, rules and policies."""

from .account import Account, AccountManager, PassportAccount
from .context import AuthorizationContext, ContextProperties, PropertyBag, RequestProperties
from .rules import AuthorizationRulesMixin
from .manager import AuthorizationManager, AuthorizationSettings

__all__ = [
    "Account",
    "AccountManager",
    "PassportAccount",
    "AuthorizationContext",
    "ContextProperties",
    "PropertyBag",
    "RequestProperties",
    "AuthorizationRulesMixin",
    "AuthorizationManager",
    "AuthorizationSettings",
]
