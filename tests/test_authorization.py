"""Tests for accounts, policies and the authorization manager."""

import pytest

from whoa.authorization import (
    AccountManager,
    AuthorizationContext,
    AuthorizationManager,
    AuthorizationRulesMixin,
    AuthorizationSettings,
    ContextProperties,
    RequestProperties,
)
from whoa.commands import CliPassport
from whoa.core import Container
from whoa.exceptions import AuthorizationError

from conftest import fixture_path
from fixtures.policies.post_rules import ACTION_CREATE_POST, ACTION_EDIT_POST, ACTION_VIEW_POSTS


def make_passport(scopes=(), identity=1):
    return CliPassport(identity, lambda user_identity: list(scopes), {"email": "admin@example.com"})


class TestAuthorizationSettings:
    """Policies loaded from a folder."""

    def test_rules_are_loaded(self):
        settings = AuthorizationSettings().get({"authorization": {"policies_folder": fixture_path("policies")}})

        assert sorted(settings[AuthorizationSettings.KEY_RULES]) == [
            ACTION_CREATE_POST, ACTION_EDIT_POST, ACTION_VIEW_POSTS,
        ]
        assert settings[AuthorizationSettings.KEY_LOG_IS_ENABLED] is True

    def test_underscore_files_are_skipped(self):
        rules = AuthorizationSettings.load_rules(fixture_path("policies", "*.py"))

        # the draft policy would deny viewing posts
        assert rules[ACTION_VIEW_POSTS](None) is True

    def test_invalid_folder(self, tmp_path):
        with pytest.raises(ValueError) as exc_info:
            AuthorizationSettings().get({"authorization": {"policies_folder": str(tmp_path / "missing")}})

        assert "Invalid Policies folder" in str(exc_info.value)

    def test_duplicate_action(self, tmp_path):
        (tmp_path / "one.py").write_text("RULES = {'can_read': lambda context: True}\n")
        (tmp_path / "two.py").write_text("RULES = {'can_read': lambda context: False}\n")

        with pytest.raises(ValueError) as exc_info:
            AuthorizationSettings.load_rules(str(tmp_path / "*.py"))

        assert "defined more than once" in str(exc_info.value)

    def test_rule_must_be_callable(self, tmp_path):
        (tmp_path / "bad.py").write_text("RULES = {'can_read': True}\n")

        with pytest.raises(ValueError):
            AuthorizationSettings.load_rules(str(tmp_path / "*.py"))


class TestAuthorizationManager:
    """Evaluating rules."""

    @pytest.fixture
    def container(self):
        container = Container()
        container[AccountManager] = AccountManager()
        return container

    @pytest.fixture
    def manager(self, container):
        rules = AuthorizationSettings.load_rules(fixture_path("policies", "*.py"))
        return AuthorizationManager(rules, container)

    def test_rule_without_account(self, manager):
        assert manager.is_allowed(ACTION_VIEW_POSTS, "posts")
        assert not manager.is_allowed(ACTION_CREATE_POST, "posts")

    def test_rule_with_account(self, manager, container):
        container[AccountManager].set_account(make_passport())

        assert manager.is_allowed(ACTION_CREATE_POST, "posts")
        assert not manager.is_allowed(ACTION_EDIT_POST, "posts", 1)

    def test_rule_with_scope(self, manager, container):
        container[AccountManager].set_account(make_passport(["posts:edit"]))

        assert manager.is_allowed(ACTION_EDIT_POST, "posts", 1)

    def test_unknown_action_is_denied(self, manager):
        assert not manager.is_allowed("can_delete_everything")

    def test_authorize_raises(self, manager):
        with pytest.raises(AuthorizationError) as exc_info:
            manager.authorize(ACTION_EDIT_POST, "posts", 7)

        assert exc_info.value.action == ACTION_EDIT_POST
        assert exc_info.value.resource_type == "posts"
        assert exc_info.value.identity == 7
        assert exc_info.value.status_code == 403

    def test_request_properties_reach_rule(self):
        seen = {}

        def rule(context):
            request = context.get_request()
            seen["action"] = request.get(RequestProperties.REQ_ACTION)
            seen["type"] = request.get(RequestProperties.REQ_RESOURCE_TYPE)
            seen["id"] = request.get(RequestProperties.REQ_RESOURCE_IDENTITY)
            seen["attributes"] = request.get(RequestProperties.REQ_RESOURCE_ATTRIBUTES)
            seen["has_container"] = context.has(ContextProperties.CTX_CONTAINER)
            return True

        manager = AuthorizationManager({"can_update": rule})
        manager.authorize(
            "can_update", "posts", "5", {RequestProperties.REQ_RESOURCE_ATTRIBUTES: {"title": "New"}}
        )

        assert seen == {
            "action": "can_update",
            "type": "posts",
            "id": "5",
            "attributes": {"title": "New"},
            "has_container": False,
        }

    def test_actions(self, manager):
        assert manager.get_actions() == [ACTION_CREATE_POST, ACTION_EDIT_POST, ACTION_VIEW_POSTS]


class TestAuthorizationRulesMixin:
    """Helpers used inside rules."""

    def test_request_helpers(self):
        context = AuthorizationContext({
            RequestProperties.REQ_ACTION: "can_view",
            RequestProperties.REQ_RESOURCE_TYPE: "posts",
        })

        assert AuthorizationRulesMixin.req_has_action(context)
        assert AuthorizationRulesMixin.req_get_action(context) == "can_view"
        assert AuthorizationRulesMixin.req_get_resource_type(context) == "posts"
        assert not AuthorizationRulesMixin.req_has_resource_identity(context)
        assert not AuthorizationRulesMixin.req_has_resource_relationships(context)
        with pytest.raises(KeyError):
            AuthorizationRulesMixin.req_get_resource_attributes(context)

    def test_account_helpers(self):
        container = Container()
        container[AccountManager] = AccountManager()
        context = AuthorizationContext({}, {ContextProperties.CTX_CONTAINER: container})

        assert AuthorizationRulesMixin.ctx_has_container(context)
        assert not AuthorizationRulesMixin.ctx_has_current_account(context)
        with pytest.raises(KeyError):
            AuthorizationRulesMixin.ctx_get_current_account(context)

        passport = make_passport()
        container[AccountManager].set_account(passport)
        assert AuthorizationRulesMixin.ctx_get_current_account(context) is passport

    def test_no_container(self):
        context = AuthorizationContext({})

        assert not AuthorizationRulesMixin.ctx_has_container(context)
        assert not AuthorizationRulesMixin.ctx_has_current_account(context)


class TestAuthorizationInContainer:
    """Authorization services registered by the package."""

    def test_manager_uses_request_container(self, container):
        manager = container.get(AuthorizationManager)
        assert not manager.is_allowed(ACTION_CREATE_POST)

        container.get(AccountManager).set_account(make_passport())
        assert manager.is_allowed(ACTION_CREATE_POST)

    def test_account_manager_is_shared(self, container):
        assert container.get(AccountManager) is container.get(AccountManager)
