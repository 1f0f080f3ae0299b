"""Data settings: model discovery, migrations and database connection."""

import logging
import os
from typing import Any, Dict, Iterable, Type

from whoa.class_loader import import_string, select_classes
from whoa.exceptions import ModelSchemaError
from whoa.settings import Settings
from .model import Model
from .model_schema_info import ModelSchemaInfo
from .relationship_types import RelationshipTypes

logger = logging.getLogger(__name__)


class DataSettings(Settings):
    """
    Application data settings.

    Values returned by ``get_settings`` take precedence over the ``data``
    section of the application configuration. The resulting settings also
    hold ``KEY_MODELS_SCHEMA_INFO``, the data of a :class:`ModelSchemaInfo`
    built from every model found in the models folder.
    """

    KEY_MODELS_FOLDER = "models_folder"
    KEY_MODELS_FILE_MASK = "models_file_mask"
    KEY_MIGRATIONS_FOLDER = "migrations_folder"
    KEY_MIGRATIONS_LIST_FILE = "migrations_list_file"
    KEY_SEEDS_FOLDER = "seeds_folder"
    KEY_SEEDS_LIST_FILE = "seeds_list_file"
    KEY_SEED_INIT = "seed_init"
    KEY_MODELS_SCHEMA_INFO = "models_schema_info"

    def get(self, app_config: Dict[str, Any]) -> Dict[str, Any]:
        defaults = _config_section(app_config, "data", (
            self.KEY_MODELS_FOLDER,
            self.KEY_MODELS_FILE_MASK,
            self.KEY_MIGRATIONS_FOLDER,
            self.KEY_MIGRATIONS_LIST_FILE,
            self.KEY_SEEDS_FOLDER,
            self.KEY_SEEDS_LIST_FILE,
            self.KEY_SEED_INIT,
        ))
        defaults.update(self.get_settings())
        defaults.setdefault(self.KEY_MODELS_FILE_MASK, "*.py")

        models_folder = defaults.get(self.KEY_MODELS_FOLDER)
        models_file_mask = defaults.get(self.KEY_MODELS_FILE_MASK)
        migrations_folder = defaults.get(self.KEY_MIGRATIONS_FOLDER)
        migrations_list_file = defaults.get(self.KEY_MIGRATIONS_LIST_FILE)
        seeds_folder = defaults.get(self.KEY_SEEDS_FOLDER)
        seeds_list_file = defaults.get(self.KEY_SEEDS_LIST_FILE)

        if not models_folder or not os.path.isdir(models_folder):
            raise ValueError(f"Invalid Models folder `{models_folder}`.")
        if not models_file_mask:
            raise ValueError(f"Invalid Models file mask `{models_file_mask}`.")
        if not migrations_folder or not os.path.isdir(migrations_folder):
            raise ValueError(f"Invalid Migrations folder `{migrations_folder}`.")
        if not migrations_list_file or not os.path.isfile(migrations_list_file):
            raise ValueError(f"Invalid Migrations file `{migrations_list_file}`.")
        if not seeds_folder or not os.path.isdir(seeds_folder):
            raise ValueError(f"Invalid Seeds folder `{seeds_folder}`.")
        if not seeds_list_file or not os.path.isfile(seeds_list_file):
            raise ValueError(f"Invalid Seeds file `{seeds_list_file}`.")

        seed_init = defaults.get(self.KEY_SEED_INIT)
        if isinstance(seed_init, str):
            seed_init = defaults[self.KEY_SEED_INIT] = import_string(seed_init)
        if seed_init is not None and not callable(seed_init):
            raise ValueError("Seed init should be either `None` or a callable.")

        models_path = os.path.join(models_folder, models_file_mask)
        model_classes = [cls for cls in select_classes(models_path, Model) if cls.is_model()]
        defaults[self.KEY_MODELS_SCHEMA_INFO] = build_models_schema_info(model_classes).get_data()

        return defaults

    def get_settings(self) -> Dict[str, Any]:
        """Settings overriding the application configuration."""
        return {}


class DatabaseSettings(Settings):
    """
    Database connection settings.

    Values returned by ``get_settings`` take precedence over ``data.url``,
    ``data.echo`` and ``data.exec`` of the application configuration.
    """

    KEY_URL = "url"
    KEY_ECHO = "echo"
    # SQL statements executed on every new connection
    KEY_EXEC = "exec"

    def get(self, app_config: Dict[str, Any]) -> Dict[str, Any]:
        settings = {self.KEY_ECHO: False, self.KEY_EXEC: []}
        settings.update(_config_section(app_config, "data", (self.KEY_URL, self.KEY_ECHO, self.KEY_EXEC)))
        settings.update(self.get_settings())

        if not settings.get(self.KEY_URL):
            raise ValueError("Database URL is not configured.")

        return settings

    def get_settings(self) -> Dict[str, Any]:
        """Settings overriding the application configuration."""
        return {}


def _config_section(app_config: Dict[str, Any], section: str, keys) -> Dict[str, Any]:
    values = app_config.get(section) or {}
    return {key: values[key] for key in keys if values.get(key) is not None}


def build_models_schema_info(model_classes: Iterable[Type[Model]]) -> ModelSchemaInfo:
    """
    Register models and their relationships.

    Every belongs-to must be paired with a has-many on the reverse model (and
    the other way round), otherwise :class:`ModelSchemaError` is raised.
    """
    schema_info = ModelSchemaInfo()
    registered = set()
    registered_models = []

    for model_class in model_classes:
        registered_models.append(model_class)
        schema_info.register_class(
            model_class,
            model_class.get_table_name(),
            model_class.get_primary_key_name(),
            model_class.get_attribute_types(),
            model_class.get_attribute_lengths(),
            model_class.get_raw_attributes(),
            model_class.get_virtual_attributes(),
        )

        relationships = model_class.get_relationships()

        for name, (reverse_class, foreign_key, reverse_name) in relationships.get(
                RelationshipTypes.BELONGS_TO, {}).items():
            schema_info.register_belongs_to_one_relationship(
                model_class, name, foreign_key, reverse_class, reverse_name
            )
            registered.add((model_class, name))
            registered.add((reverse_class, reverse_name))

            paired = reverse_class.get_relationships().get(RelationshipTypes.HAS_MANY, {}).get(reverse_name)
            if paired != (model_class, foreign_key, name):
                raise ModelSchemaError(
                    f"`belongs_to` relationship `{name}` of class {model_class.__name__} "
                    f"should be paired with `has_many` relationship."
                )

        for name, (reverse_class, foreign_key, reverse_name) in relationships.get(
                RelationshipTypes.HAS_MANY, {}).items():
            paired = reverse_class.get_relationships().get(RelationshipTypes.BELONGS_TO, {}).get(reverse_name)
            if paired != (model_class, foreign_key, name):
                raise ModelSchemaError(
                    f"`has_many` relationship `{name}` of class {model_class.__name__} "
                    f"should be paired with `belongs_to` relationship."
                )

        for name, data in relationships.get(RelationshipTypes.BELONGS_TO_MANY, {}).items():
            if (model_class, name) in registered:
                continue
            reverse_class, table, foreign_key, reverse_foreign_key, reverse_name = data
            schema_info.register_belongs_to_many_relationship(
                model_class, name, table, foreign_key, reverse_foreign_key, reverse_class, reverse_name
            )
            registered.add((model_class, name))
            registered.add((reverse_class, reverse_name))

    logger.debug(f"Built schema info for {len(registered_models)} models")
    return schema_info
