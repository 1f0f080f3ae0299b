"""Container configurator for the database and model schema."""

import logging
from typing import Dict, Tuple

from sqlalchemy.engine import Engine

from whoa.core import Container, ContainerConfigurator
from whoa.data import DatabaseSettings, DataSettings, ModelSchemaInfo, create_engine
from whoa.settings import InstanceSettingsProvider

logger = logging.getLogger(__name__)

# engines outlive the per request containers
_engines: Dict[Tuple, Engine] = {}


def dispose_engines():
    """Close connections of every engine created so far."""
    for engine in _engines.values():
        engine.dispose()
    _engines.clear()


class DataContainerConfigurator(ContainerConfigurator):
    """Registers the SQLAlchemy engine and the models schema."""

    @classmethod
    def configure_container(cls, container: Container):
        container.share(Engine, cls.create_engine)
        container.share(ModelSchemaInfo, cls.create_schema_info)

    @staticmethod
    def create_engine(container: Container) -> Engine:
        settings = container.get(InstanceSettingsProvider).get(DatabaseSettings)
        url = settings[DatabaseSettings.KEY_URL]
        echo = bool(settings[DatabaseSettings.KEY_ECHO])
        statements = tuple(settings[DatabaseSettings.KEY_EXEC] or ())

        key = (url, echo, statements)
        if key not in _engines:
            _engines[key] = create_engine(url, echo=echo, on_connect=statements)

        return _engines[key]

    @staticmethod
    def create_schema_info(container: Container) -> ModelSchemaInfo:
        settings = container.get(InstanceSettingsProvider).get(DataSettings)
        return ModelSchemaInfo().set_data(settings[DataSettings.KEY_MODELS_SCHEMA_INFO])
