"""Code scaffolding command."""

import keyword
import logging
import os
import re
from typing import Dict, List, Tuple

from whoa.authorization import AuthorizationSettings
from whoa.data.settings import DataSettings
from whoa.filesystem import FileSystem
from whoa.settings import InstanceSettingsProvider
from .base import Command
from .io import CommandIO
from .settings import ScaffoldSettings

logger = logging.getLogger(__name__)

FOLDER_MODELS = "models"
FOLDER_MIGRATIONS = "migrations"
FOLDER_SEEDS = "seeds"
FOLDER_POLICIES = "policies"

TPL_MODEL = "model"
TPL_MIGRATION = "migration"
TPL_SEED = "seed"
TPL_SCHEMA = "schema"
TPL_API = "api"
TPL_QUERY_RULES_ON_READ = "query_rules_on_read"
TPL_API_AUTHORIZATION = "api_authorization"
TPL_VALIDATION_RULES = "validation_rules"
TPL_JSON_RULES_ON_CREATE = "json_rules_on_create"
TPL_JSON_RULES_ON_UPDATE = "json_rules_on_update"
TPL_JSON_CONTROLLER = "json_controller"
TPL_JSON_ROUTES = "json_routes"
TPL_WEB_RULES_ON_CREATE = "web_rules_on_create"
TPL_WEB_RULES_ON_UPDATE = "web_rules_on_update"
TPL_WEB_CONTROLLER = "web_controller"
TPL_WEB_ROUTES = "web_routes"

# template -> (folder, target path inside the folder)
TEMPLATE_TARGETS: Dict[str, Tuple[str, str]] = {
    TPL_MODEL: (FOLDER_MODELS, "{singular}.py"),
    TPL_MIGRATION: (FOLDER_MIGRATIONS, "{plural}_migration.py"),
    TPL_SEED: (FOLDER_SEEDS, "{plural}_seed.py"),
    TPL_SCHEMA: (ScaffoldSettings.KEY_SCHEMAS_FOLDER, "{singular}_schema.py"),
    TPL_API: (ScaffoldSettings.KEY_API_FOLDER, "{plural}_api.py"),
    TPL_QUERY_RULES_ON_READ: (ScaffoldSettings.KEY_VALIDATORS_FOLDER, "{singular}/{plural}_read_query.py"),
    TPL_API_AUTHORIZATION: (FOLDER_POLICIES, "{singular}_rules.py"),
    TPL_VALIDATION_RULES: (ScaffoldSettings.KEY_RULES_FOLDER, "{singular}/{singular}_rules.py"),
    TPL_JSON_RULES_ON_CREATE: (ScaffoldSettings.KEY_VALIDATORS_FOLDER, "{singular}/{singular}_create_json.py"),
    TPL_JSON_RULES_ON_UPDATE: (ScaffoldSettings.KEY_VALIDATORS_FOLDER, "{singular}/{singular}_update_json.py"),
    TPL_JSON_CONTROLLER: (ScaffoldSettings.KEY_JSON_CONTROLLERS_FOLDER, "{plural}_controller.py"),
    TPL_JSON_ROUTES: (ScaffoldSettings.KEY_ROUTES_FOLDER, "{singular}_api_routes.py"),
    TPL_WEB_RULES_ON_CREATE: (ScaffoldSettings.KEY_VALIDATORS_FOLDER, "{singular}/{singular}_create_form.py"),
    TPL_WEB_RULES_ON_UPDATE: (ScaffoldSettings.KEY_VALIDATORS_FOLDER, "{singular}/{singular}_update_form.py"),
    TPL_WEB_CONTROLLER: (ScaffoldSettings.KEY_WEB_CONTROLLERS_FOLDER, "{plural}_controller.py"),
    TPL_WEB_ROUTES: (ScaffoldSettings.KEY_ROUTES_FOLDER, "{singular}_web_routes.py"),
}

_DATA_TEMPLATES = [TPL_MODEL, TPL_MIGRATION, TPL_SEED]
_API_TEMPLATES = [TPL_SCHEMA, TPL_API, TPL_QUERY_RULES_ON_READ, TPL_API_AUTHORIZATION, TPL_VALIDATION_RULES]
_JSON_TEMPLATES = [TPL_JSON_RULES_ON_CREATE, TPL_JSON_RULES_ON_UPDATE, TPL_JSON_CONTROLLER, TPL_JSON_ROUTES]
_WEB_TEMPLATES = [TPL_WEB_RULES_ON_CREATE, TPL_WEB_RULES_ON_UPDATE, TPL_WEB_CONTROLLER, TPL_WEB_ROUTES]


def to_snake_case(name: str) -> str:
    """``BlogPost`` -> ``blog_post``, ``APIKey`` -> ``api_key``."""
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    return re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name).lower()


class MakeCommand(Command):
    """Generates resource source files from templates."""

    NAME = "w:make"
    DESCRIPTION = "Creates necessary classes for models, migrations and data seeds."
    HELP = "Generates resource boilerplate such as models, migrations, seeds, schemas, policies and controllers."

    ARG_ITEM = "item"
    ARG_SINGULAR = "singular"
    ARG_PLURAL = "plural"

    ITEM_DATA_RESOURCE = "data-resource"
    ITEM_JSON_API_RESOURCE = "json-api-resource"
    ITEM_WEB_RESOURCE = "web-resource"
    ITEM_FULL_RESOURCE = "full-resource"

    ITEMS: Dict[str, List[str]] = {
        ITEM_DATA_RESOURCE: _DATA_TEMPLATES,
        ITEM_JSON_API_RESOURCE: _DATA_TEMPLATES + _API_TEMPLATES + _JSON_TEMPLATES,
        ITEM_WEB_RESOURCE: _DATA_TEMPLATES + _API_TEMPLATES + _WEB_TEMPLATES,
        ITEM_FULL_RESOURCE: _DATA_TEMPLATES + _API_TEMPLATES + _JSON_TEMPLATES + _WEB_TEMPLATES,
    }

    @classmethod
    def get_arguments(cls):
        items = ", ".join(f"`{item}`" for item in cls.ITEMS)
        return [
            {"name": cls.ARG_ITEM, "description": f"Item to create ({items}).", "required": True},
            {"name": cls.ARG_SINGULAR, "description": "Singular name in camel case (e.g. `Post`).", "required": True},
            {"name": cls.ARG_PLURAL, "description": "Plural name in camel case (e.g. `Posts`).", "required": True},
        ]

    @classmethod
    def execute(cls, container, io: CommandIO):
        item = io.get_argument(cls.ARG_ITEM)
        singular = io.get_argument(cls.ARG_SINGULAR)
        plural = io.get_argument(cls.ARG_PLURAL)

        cls.check_class_name(singular)
        cls.check_class_name(plural)

        templates = cls.ITEMS.get(item)
        if templates is None:
            io.write_error(f"Unsupported item type `{item}`.")
            return

        file_system: FileSystem = container.get(FileSystem)
        folders = cls.get_folders(container, templates)
        replacements = cls.get_replacements(singular, plural)
        names = {"singular": to_snake_case(singular), "plural": to_snake_case(plural)}

        files = []
        for template in templates:
            folder_key, target_format = TEMPLATE_TARGETS[template]
            template_path = os.path.join(folders[ScaffoldSettings.KEY_TEMPLATES_FOLDER], f"{template}.txt")
            root_folder = folders[folder_key]
            target_path = os.path.join(root_folder, *target_format.format(**names).split("/"))
            files.append((file_system.read(template_path), root_folder, target_path))

        for _, root_folder, target_path in files:
            cls.check_target(file_system, root_folder, target_path)

        for content, _, target_path in files:
            target_folder = os.path.dirname(target_path)
            if not file_system.exists(target_folder):
                file_system.create_folder(target_folder)
            file_system.write(target_path, cls.compose(content, replacements))
            io.write_info(f"File `{target_path}` created.", verbosity=io.VERBOSITY_VERBOSE)

        logger.info(f"Created {len(files)} files for {item} `{singular}`")

    @staticmethod
    def check_class_name(name: str):
        if not isinstance(name, str) or not name.isidentifier() or keyword.iskeyword(name):
            raise ValueError(f"`{name}` is not a valid class name.")

    @staticmethod
    def check_target(file_system: FileSystem, root_folder: str, target_path: str):
        if not root_folder or not file_system.exists(root_folder):
            raise ValueError(f"Folder `{root_folder}` does not exist.")
        if file_system.exists(target_path):
            raise ValueError(f"File `{target_path}` already exists.")

        target_folder = os.path.dirname(target_path)
        writable_folder = target_folder if file_system.exists(target_folder) else root_folder
        if not file_system.is_writable(writable_folder):
            raise ValueError(f"Folder `{writable_folder}` is not writable.")

    @staticmethod
    def get_folders(container, templates: List[str]) -> Dict[str, str]:
        provider: InstanceSettingsProvider = container.get(InstanceSettingsProvider)
        needed = {TEMPLATE_TARGETS[template][0] for template in templates}

        folders = dict(provider.get(ScaffoldSettings))
        if needed & {FOLDER_MODELS, FOLDER_MIGRATIONS, FOLDER_SEEDS}:
            data = provider.get(DataSettings)
            folders[FOLDER_MODELS] = data[DataSettings.KEY_MODELS_FOLDER]
            folders[FOLDER_MIGRATIONS] = data[DataSettings.KEY_MIGRATIONS_FOLDER]
            folders[FOLDER_SEEDS] = data[DataSettings.KEY_SEEDS_FOLDER]
        if FOLDER_POLICIES in needed:
            folders[FOLDER_POLICIES] = provider.get(AuthorizationSettings)[AuthorizationSettings.KEY_POLICIES_FOLDER]

        return folders

    @staticmethod
    def get_replacements(singular: str, plural: str) -> Dict[str, str]:
        return {
            "{%SINGULAR_CC%}": singular,
            "{%SINGULAR_LC%}": singular.lower(),
            "{%SINGULAR_UC%}": singular.upper(),
            "{%SINGULAR_SC%}": to_snake_case(singular),
            "{%PLURAL_CC%}": plural,
            "{%PLURAL_LC%}": plural.lower(),
            "{%PLURAL_UC%}": plural.upper(),
            "{%PLURAL_SC%}": to_snake_case(plural),
        }

    @staticmethod
    def compose(template: str, replacements: Dict[str, str]) -> str:
        for placeholder, value in replacements.items():
            template = template.replace(placeholder, value)
        return template
