"""Data layer: model schema registry, migrations, seeds and sessions."""

from .model import Model
from .model_schema_info import ModelSchemaInfo
from .relationship_types import RelationshipTypes
from .types import Types, column_type
from .settings import DataSettings, DatabaseSettings, build_models_schema_info
from .migrations import (
    Migration,
    Seed,
    BaseMigrationRunner,
    BaseSeedRunner,
    FileMigrationRunner,
    FileSeedRunner,
    MIGRATIONS_TABLE,
    SEEDS_TABLE,
)
from .session import create_engine, session_scope

__all__ = [
    "Model",
    "ModelSchemaInfo",
    "RelationshipTypes",
    "Types",
    "column_type",
    "DataSettings",
    "DatabaseSettings",
    "build_models_schema_info",
    "Migration",
    "Seed",
    "BaseMigrationRunner",
    "BaseSeedRunner",
    "FileMigrationRunner",
    "FileSeedRunner",
    "MIGRATIONS_TABLE",
    "SEEDS_TABLE",
    "create_engine",
    "session_scope",
]
