"""Settings for console commands."""

import os
from typing import Any, Dict

from whoa.settings import Settings

DEFAULT_TEMPLATES_FOLDER = os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")


class CommandSettings(Settings):
    """
    Console commands settings.

    Commands run on behalf of an impersonated user. Its identity, properties
    and scopes come from the ``commands`` configuration section unless
    ``get_settings`` overrides them.
    """

    KEY_IMPERSONATE_AS_USER_IDENTITY = "impersonate_as_user_identity"
    KEY_IMPERSONATE_WITH_USER_PROPERTIES = "impersonate_with_user_properties"
    KEY_IMPERSONATE_WITH_USER_SCOPES = "impersonate_with_user_scopes"

    def get(self, app_config: Dict[str, Any]) -> Dict[str, Any]:
        section = app_config.get("commands") or {}
        settings = {
            self.KEY_IMPERSONATE_AS_USER_IDENTITY: section.get(self.KEY_IMPERSONATE_AS_USER_IDENTITY),
            self.KEY_IMPERSONATE_WITH_USER_PROPERTIES: dict(
                section.get(self.KEY_IMPERSONATE_WITH_USER_PROPERTIES) or {}
            ),
            self.KEY_IMPERSONATE_WITH_USER_SCOPES: list(section.get(self.KEY_IMPERSONATE_WITH_USER_SCOPES) or []),
        }
        settings.update(self.get_settings())

        return settings

    def get_settings(self) -> Dict[str, Any]:
        return {}


class ScaffoldSettings(Settings):
    """
    Where ``w:make`` reads templates from and writes generated code to.

    Folders that are not set explicitly default to sub-folders of
    ``scaffold.root``. Models, migrations, seeds and policies folders come
    from the data and authorization settings instead.
    """

    KEY_TEMPLATES_FOLDER = "templates_folder"
    KEY_ROOT = "root"
    KEY_SCHEMAS_FOLDER = "schemas_folder"
    KEY_API_FOLDER = "api_folder"
    KEY_VALIDATORS_FOLDER = "validators_folder"
    KEY_RULES_FOLDER = "rules_folder"
    KEY_JSON_CONTROLLERS_FOLDER = "json_controllers_folder"
    KEY_WEB_CONTROLLERS_FOLDER = "web_controllers_folder"
    KEY_ROUTES_FOLDER = "routes_folder"

    DEFAULT_SUB_FOLDERS = {
        KEY_SCHEMAS_FOLDER: "schemas",
        KEY_API_FOLDER: "api",
        KEY_VALIDATORS_FOLDER: "validators",
        KEY_RULES_FOLDER: "rules",
        KEY_JSON_CONTROLLERS_FOLDER: "json_controllers",
        KEY_WEB_CONTROLLERS_FOLDER: "web_controllers",
        KEY_ROUTES_FOLDER: "routes",
    }

    def get(self, app_config: Dict[str, Any]) -> Dict[str, Any]:
        section = app_config.get("scaffold") or {}
        root = section.get(self.KEY_ROOT)

        settings = {
            self.KEY_ROOT: root,
            self.KEY_TEMPLATES_FOLDER: section.get(self.KEY_TEMPLATES_FOLDER) or DEFAULT_TEMPLATES_FOLDER,
        }
        for key, sub_folder in self.DEFAULT_SUB_FOLDERS.items():
            folder = section.get(key) or sub_folder
            settings[key] = os.path.join(root, folder) if root else section.get(key)

        settings.update(self.get_settings())

        return settings

    def get_settings(self) -> Dict[str, Any]:
        return {}
