"""Authorization settings and manager."""

import glob
import logging
import os
from typing import Any, Callable, Dict, Mapping

from whoa.class_loader import import_file
from whoa.exceptions import AuthorizationError
from whoa.settings import Settings
from .context import AuthorizationContext, ContextProperties, RequestProperties

logger = logging.getLogger(__name__)

Rule = Callable[[AuthorizationContext], bool]


class AuthorizationSettings(Settings):
    """
    Authorization policies.

    Every policy file in the policies folder may define ``RULES``, a dict
    mapping action names to callables taking an
    :class:`~whoa.authorization.context.AuthorizationContext` and returning
    whether the action is allowed. Values from ``get_settings`` take
    precedence over the ``authorization`` section of the configuration.
    """

    KEY_POLICIES_FOLDER = "policies_folder"
    KEY_POLICIES_FILE_MASK = "policies_file_mask"
    KEY_LOG_IS_ENABLED = "log_is_enabled"
    KEY_RULES = "rules"

    def get(self, app_config: Dict[str, Any]) -> Dict[str, Any]:
        section = app_config.get("authorization") or {}
        settings = {
            self.KEY_POLICIES_FOLDER: section.get(self.KEY_POLICIES_FOLDER),
            self.KEY_POLICIES_FILE_MASK: section.get(self.KEY_POLICIES_FILE_MASK) or "*.py",
            self.KEY_LOG_IS_ENABLED: section.get(self.KEY_LOG_IS_ENABLED, True),
        }
        settings.update(self.get_settings())

        folder = settings[self.KEY_POLICIES_FOLDER]
        if not folder or not os.path.isdir(folder):
            raise ValueError(f"Invalid Policies folder `{folder}`.")

        settings[self.KEY_RULES] = self.load_rules(os.path.join(folder, settings[self.KEY_POLICIES_FILE_MASK]))

        return settings

    def get_settings(self) -> Dict[str, Any]:
        """Settings overriding the application configuration."""
        return {}

    @staticmethod
    def load_rules(path_pattern: str) -> Dict[str, Rule]:
        rules: Dict[str, Rule] = {}
        for file_path in sorted(glob.glob(path_pattern)):
            if os.path.basename(file_path).startswith("_"):
                continue

            module = import_file(file_path)
            for action, rule in (getattr(module, "RULES", None) or {}).items():
                if action in rules:
                    raise ValueError(f"Rule for action `{action}` is defined more than once ({file_path}).")
                if not callable(rule):
                    raise ValueError(f"Rule for action `{action}` is not callable ({file_path}).")
                rules[action] = rule

        logger.debug(f"Loaded {len(rules)} authorization rules from {path_pattern}")
        return rules


class AuthorizationManager:
    """Evaluates policy rules for actions."""

    def __init__(self, rules: Mapping[str, Rule], container=None, log_is_enabled: bool = True):
        self._rules = dict(rules)
        self._container = container
        self._log_is_enabled = log_is_enabled

    def is_allowed(self, action: str, resource_type: str = None, resource_identity=None,
                   extra: Mapping[str, Any] = None) -> bool:
        request = {
            RequestProperties.REQ_ACTION: action,
            RequestProperties.REQ_RESOURCE_TYPE: resource_type,
            RequestProperties.REQ_RESOURCE_IDENTITY: resource_identity,
        }
        request.update(extra or {})

        rule = self._rules.get(action)
        if rule is None:
            if self._log_is_enabled:
                logger.warning(f"No authorization rule for action `{action}`, access denied")
            return False

        context_properties = {}
        if self._container is not None:
            context_properties[ContextProperties.CTX_CONTAINER] = self._container

        is_allowed = bool(rule(AuthorizationContext(request, context_properties)))
        if self._log_is_enabled:
            logger.debug(f"Authorization of `{action}` for {resource_type}:{resource_identity} -> {is_allowed}")

        return is_allowed

    def authorize(self, action: str, resource_type: str = None, resource_identity=None,
                  extra: Mapping[str, Any] = None):
        if not self.is_allowed(action, resource_type, resource_identity, extra):
            raise AuthorizationError(action, resource_type, resource_identity)

    def get_actions(self):
        return sorted(self._rules)
