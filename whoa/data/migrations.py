"""Database migrations and seeds built on SQLAlchemy Core."""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence, Type, Union

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    delete,
    insert,
    inspect,
    select,
)
from sqlalchemy.engine import Engine

from whoa.class_loader import import_string
from whoa.filesystem import FileSystem
from .model import Model
from .relationship_types import RelationshipTypes
from .types import Types, column_type

logger = logging.getLogger(__name__)

MIGRATIONS_TABLE = "whoa_migrations"
SEEDS_TABLE = "whoa_seeds"

ClassReference = Union[str, Type]


def class_reference_name(reference: ClassReference) -> str:
    """Dotted name under which an applied migration or seed is recorded."""
    if isinstance(reference, str):
        return reference
    return f"{reference.__module__}.{reference.__qualname__}"


def _bookkeeping_table(table_name: str, metadata: MetaData) -> Table:
    return Table(
        table_name,
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("class_name", String(255), nullable=False, unique=True),
        Column("applied_at", DateTime, nullable=False),
    )


class Migration(ABC):
    """
    Database migration.

    ``init`` is called with the container before ``migrate`` or ``rollback``.
    Table helpers build tables from :class:`~whoa.data.model.Model` metadata.
    """

    def __init__(self):
        self.container = None
        self.engine: Optional[Engine] = None

    def init(self, container) -> "Migration":
        self.container = container
        self.engine = container.get(Engine)
        return self

    @abstractmethod
    def migrate(self):
        pass

    @abstractmethod
    def rollback(self):
        pass

    def create_table(self, model_class: Type[Model], *extra: Any) -> Table:
        """
        Create the table of a model.

        Columns come from the model attribute types and lengths. Every
        belongs-to relationship adds a foreign key to the reverse model table.
        Extra columns and constraints may be passed in ``extra``.
        """
        metadata = MetaData()
        primary_key = model_class.get_primary_key_name()
        lengths = model_class.get_attribute_lengths()

        foreign_keys = {}
        belongs_to = model_class.get_relationships().get(RelationshipTypes.BELONGS_TO, {})
        for reverse_class, foreign_key, _ in belongs_to.values():
            reverse_table = reverse_class.get_table_name()
            if reverse_table != model_class.get_table_name():
                self._reflect(reverse_table, metadata)
            foreign_keys[foreign_key] = f"{reverse_table}.{reverse_class.get_primary_key_name()}"

        columns = []
        for name, type_name in model_class.get_attribute_types().items():
            arguments = []
            if name in foreign_keys:
                arguments.append(ForeignKey(foreign_keys[name]))

            if name == primary_key:
                columns.append(Column(
                    name, column_type(type_name, lengths.get(name)), *arguments,
                    primary_key=True, autoincrement=type_name in (Types.INTEGER, Types.BIG_INTEGER),
                ))
            else:
                columns.append(Column(
                    name, column_type(type_name, lengths.get(name)), *arguments,
                    nullable=name not in foreign_keys,
                ))

        table = Table(model_class.get_table_name(), metadata, *columns, *extra)
        table.create(self.engine)
        logger.info(f"Created table {table.name}")

        return table

    def create_intermediate_table(self, model_class: Type[Model], relationship_name: str) -> Table:
        """Create the table linking the two sides of a belongs-to-many relationship."""
        relationships = model_class.get_relationships().get(RelationshipTypes.BELONGS_TO_MANY, {})
        if relationship_name not in relationships:
            raise ValueError(
                f"`{relationship_name}` is not a belongs-to-many relationship of {model_class.__name__}"
            )

        reverse_class, table_name, foreign_key, reverse_foreign_key, _ = relationships[relationship_name]

        metadata = MetaData()
        columns = []
        for side, key in ((model_class, foreign_key), (reverse_class, reverse_foreign_key)):
            self._reflect(side.get_table_name(), metadata)
            primary_key = side.get_primary_key_name()
            type_name = side.get_attribute_types().get(primary_key, Types.INTEGER)
            columns.append(Column(
                key,
                column_type(type_name, side.get_attribute_lengths().get(primary_key)),
                ForeignKey(f"{side.get_table_name()}.{primary_key}", ondelete="CASCADE"),
                nullable=False,
            ))

        table = Table(table_name, metadata, *columns, PrimaryKeyConstraint(foreign_key, reverse_foreign_key))
        table.create(self.engine)
        logger.info(f"Created intermediate table {table.name}")

        return table

    def drop_table(self, model_or_table: Union[Type[Model], str]):
        table_name = model_or_table if isinstance(model_or_table, str) else model_or_table.get_table_name()
        Table(table_name, MetaData()).drop(self.engine, checkfirst=True)
        logger.info(f"Dropped table {table_name}")

    def _reflect(self, table_name: str, metadata: MetaData) -> Table:
        return Table(table_name, metadata, autoload_with=self.engine)


class Seed(ABC):
    """Database seed. ``init`` is called with the container before ``run``."""

    def __init__(self):
        self.container = None
        self.engine: Optional[Engine] = None

    def init(self, container) -> "Seed":
        self.container = container
        self.engine = container.get(Engine)
        return self

    @abstractmethod
    def run(self):
        pass

    def insert_row(self, model_or_table: Union[Type[Model], str], values: Dict[str, Any]):
        """
        Insert a row.

        Returns:
            Primary key of the inserted row
        """
        table = self._table(model_or_table)
        with self.engine.begin() as connection:
            result = connection.execute(insert(table).values(**values))
            inserted = result.inserted_primary_key

        return inserted[0] if inserted and len(inserted) == 1 else inserted

    def insert_rows(self, model_or_table: Union[Type[Model], str], rows: Sequence[Dict[str, Any]]) -> int:
        if not rows:
            return 0

        table = self._table(model_or_table)
        with self.engine.begin() as connection:
            connection.execute(insert(table), list(rows))

        return len(rows)

    def now(self) -> datetime:
        return datetime.utcnow()

    def _table(self, model_or_table: Union[Type[Model], str]) -> Table:
        table_name = model_or_table if isinstance(model_or_table, str) else model_or_table.get_table_name()
        return Table(table_name, MetaData(), autoload_with=self.engine)


def _resolve_class(reference: ClassReference, io) -> Optional[Type]:
    if not isinstance(reference, str):
        return reference

    try:
        return import_string(reference)
    except ImportError as e:
        io.write_warning(f"Class `{reference}` cannot be loaded ({e}).")
        return None


class BaseMigrationRunner(ABC):
    """
    Applies migrations and keeps track of them.

    Applied migrations are recorded in ``whoa_migrations`` so running
    ``migrate`` again applies only new ones. ``rollback`` reverts applied
    migrations newest first and drops the migrations and seeds tables.
    """

    MIGRATIONS_TABLE = MIGRATIONS_TABLE
    SEEDS_TABLE = SEEDS_TABLE

    def __init__(self, io):
        self._io = io

    @property
    def io(self):
        return self._io

    @abstractmethod
    def get_migration_classes(self) -> List[ClassReference]:
        pass

    def migrate(self, container):
        engine: Engine = container.get(Engine)

        table = _bookkeeping_table(self.MIGRATIONS_TABLE, MetaData())
        table.create(engine, checkfirst=True)

        with engine.connect() as connection:
            applied = set(connection.execute(select(table.c.class_name)).scalars())

        for reference in self.get_migration_classes():
            class_name = class_reference_name(reference)
            if class_name in applied:
                continue

            migration = self._create_migration(reference, container)
            if migration is None:
                continue

            self.io.write_info(f"Starting migration for `{class_name}`...", verbosity=self.io.VERBOSITY_VERBOSE)
            migration.migrate()
            with engine.begin() as connection:
                connection.execute(insert(table).values(class_name=class_name, applied_at=datetime.utcnow()))
            self.io.write_info(f"Migration finished for `{class_name}`.", verbosity=self.io.VERBOSITY_VERBOSE)
            logger.info(f"Applied migration {class_name}")

    def rollback(self, container):
        engine: Engine = container.get(Engine)

        metadata = MetaData()
        migrations = _bookkeeping_table(self.MIGRATIONS_TABLE, metadata)
        seeds = _bookkeeping_table(self.SEEDS_TABLE, metadata)

        # recorded names resolve against the listed classes first, classes
        # defined in a list file have no importable module
        known = {class_reference_name(reference): reference for reference in self.get_migration_classes()}

        kept = 0
        if inspect(engine).has_table(self.MIGRATIONS_TABLE):
            with engine.connect() as connection:
                applied = list(connection.execute(
                    select(migrations.c.id, migrations.c.class_name).order_by(migrations.c.id.desc())
                ))

            for row_id, class_name in applied:
                migration = self._create_migration(known.get(class_name, class_name), container)
                if migration is None:
                    kept += 1
                    continue

                self.io.write_info(f"Starting rollback for `{class_name}`...", verbosity=self.io.VERBOSITY_VERBOSE)
                migration.rollback()
                with engine.begin() as connection:
                    connection.execute(delete(migrations).where(migrations.c.id == row_id))
                self.io.write_info(f"Rollback finished for `{class_name}`.", verbosity=self.io.VERBOSITY_VERBOSE)
                logger.info(f"Rolled back migration {class_name}")

        if kept:
            self.io.write_warning(
                f"{kept} migration(s) could not be rolled back, table `{self.MIGRATIONS_TABLE}` is kept."
            )
            return

        migrations.drop(engine, checkfirst=True)
        seeds.drop(engine, checkfirst=True)

    def _create_migration(self, reference: ClassReference, container) -> Optional[Migration]:
        migration_class = _resolve_class(reference, self.io)
        if migration_class is None:
            return None

        return migration_class().init(container)


class BaseSeedRunner(ABC):
    """Runs seeds once, recording them in ``whoa_seeds``."""

    def __init__(self, io, seed_init: Callable = None, seeds_table: str = SEEDS_TABLE):
        self._io = io
        self._seed_init = seed_init
        self._seeds_table = seeds_table

    @property
    def io(self):
        return self._io

    @abstractmethod
    def get_seeds(self) -> List[ClassReference]:
        pass

    def run(self, container):
        engine: Engine = container.get(Engine)

        table = _bookkeeping_table(self._seeds_table, MetaData())
        table.create(engine, checkfirst=True)

        with engine.connect() as connection:
            seeded = set(connection.execute(select(table.c.class_name)).scalars())

        for reference in self.get_seeds():
            class_name = class_reference_name(reference)
            if class_name in seeded:
                continue

            seed_class = _resolve_class(reference, self.io)
            if seed_class is None:
                continue

            if self._seed_init is not None:
                self._seed_init(container, seed_class)

            self.io.write_info(f"Starting seed for `{class_name}`...", verbosity=self.io.VERBOSITY_VERBOSE)
            seed_class().init(container).run()
            with engine.begin() as connection:
                connection.execute(insert(table).values(class_name=class_name, applied_at=datetime.utcnow()))
            self.io.write_info(f"Seed finished for `{class_name}`.", verbosity=self.io.VERBOSITY_VERBOSE)
            logger.info(f"Applied seed {class_name}")


class FileMigrationRunner(BaseMigrationRunner):
    """Migration runner reading the ``MIGRATIONS`` list from a Python file."""

    LIST_NAME = "MIGRATIONS"

    def __init__(self, io, migrations_path: str):
        super().__init__(io)
        self.migrations_path = migrations_path
        self._migration_classes: List[ClassReference] = []

    def migrate(self, container):
        self._migration_classes = self._read_list(container)
        super().migrate(container)

    def rollback(self, container):
        self._migration_classes = self._read_list(container)
        super().rollback(container)

    def get_migration_classes(self) -> List[ClassReference]:
        return self._migration_classes

    def _read_list(self, container) -> List[ClassReference]:
        file_system: FileSystem = container.get(FileSystem)
        self.io.write_info(f"Migrations `{self.migrations_path}` started.", verbosity=self.io.VERBOSITY_VERBOSE)
        return list(file_system.require_file(self.migrations_path).get(self.LIST_NAME, []))


class FileSeedRunner(BaseSeedRunner):
    """Seed runner reading the ``SEEDS`` list from a Python file."""

    LIST_NAME = "SEEDS"

    def __init__(self, io, seeds_path: str, seed_init: Callable = None, seeds_table: str = SEEDS_TABLE):
        super().__init__(io, seed_init, seeds_table)
        self.seeds_path = seeds_path
        self._seeds: List[ClassReference] = []

    def run(self, container):
        file_system: FileSystem = container.get(FileSystem)
        self.io.write_info(f"Seeds `{self.seeds_path}` started.", verbosity=self.io.VERBOSITY_VERBOSE)
        self._seeds = list(file_system.require_file(self.seeds_path).get(self.LIST_NAME, []))

        super().run(container)

    def get_seeds(self) -> List[ClassReference]:
        return self._seeds
