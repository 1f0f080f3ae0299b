"""Helpers for writing authorization policy rules."""

from typing import Any, Dict, Optional

from .account import Account, AccountManager
from .context import AuthorizationContext, ContextProperties, RequestProperties


class AuthorizationRulesMixin:
    """
    Read request and context properties inside policy rules.

    Getters raise ``KeyError`` when the property is missing, check with the
    matching ``*_has_*`` helper first.
    """

    @staticmethod
    def req_has_action(context: AuthorizationContext) -> bool:
        return context.get_request().has(RequestProperties.REQ_ACTION)

    @staticmethod
    def req_get_action(context: AuthorizationContext) -> str:
        return context.get_request().get(RequestProperties.REQ_ACTION)

    @staticmethod
    def req_has_resource_type(context: AuthorizationContext) -> bool:
        return context.get_request().has(RequestProperties.REQ_RESOURCE_TYPE)

    @staticmethod
    def req_get_resource_type(context: AuthorizationContext) -> Optional[str]:
        return context.get_request().get(RequestProperties.REQ_RESOURCE_TYPE)

    @staticmethod
    def req_has_resource_identity(context: AuthorizationContext) -> bool:
        return context.get_request().has(RequestProperties.REQ_RESOURCE_IDENTITY)

    @staticmethod
    def req_get_resource_identity(context: AuthorizationContext) -> Optional[str]:
        return context.get_request().get(RequestProperties.REQ_RESOURCE_IDENTITY)

    @staticmethod
    def req_has_resource_attributes(context: AuthorizationContext) -> bool:
        return context.get_request().has(RequestProperties.REQ_RESOURCE_ATTRIBUTES)

    @staticmethod
    def req_get_resource_attributes(context: AuthorizationContext) -> Dict[str, Any]:
        return context.get_request().get(RequestProperties.REQ_RESOURCE_ATTRIBUTES)

    @staticmethod
    def req_has_resource_relationships(context: AuthorizationContext) -> bool:
        return context.get_request().has(RequestProperties.REQ_RESOURCE_RELATIONSHIPS)

    @staticmethod
    def req_get_resource_relationships(context: AuthorizationContext) -> Dict[str, Any]:
        return context.get_request().get(RequestProperties.REQ_RESOURCE_RELATIONSHIPS)

    @classmethod
    def ctx_has_current_account(cls, context: AuthorizationContext) -> bool:
        if not cls.ctx_has_container(context):
            return False
        return cls.ctx_get_container(context).get(AccountManager).get_account() is not None

    @classmethod
    def ctx_get_current_account(cls, context: AuthorizationContext) -> Account:
        account = cls.ctx_get_container(context).get(AccountManager).get_account()
        if account is None:
            raise KeyError("No current account")
        return account

    @staticmethod
    def ctx_has_container(context: AuthorizationContext) -> bool:
        return context.has(ContextProperties.CTX_CONTAINER)

    @staticmethod
    def ctx_get_container(context: AuthorizationContext):
        return context.get(ContextProperties.CTX_CONTAINER)
