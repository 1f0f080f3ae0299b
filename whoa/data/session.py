"""Database engine and session management."""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable

from sqlalchemy import create_engine as sa_create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

logger = logging.getLogger(__name__)


def create_engine(url: str, echo: bool = False, on_connect: Iterable[str] = ()) -> Engine:
    """
    Create a database engine.

    Args:
        url: SQLAlchemy database URL
        echo: Log emitted SQL
        on_connect: SQL statements executed on every new connection
    """
    if url.startswith("sqlite:///") and url != "sqlite:///:memory:":
        # Ensure directory exists
        db_path = url[len("sqlite:///"):]
        if db_path:
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    engine = sa_create_engine(url, echo=echo)

    statements = list(on_connect)
    if statements:
        @event.listens_for(engine, "connect")
        def _execute_on_connect(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            try:
                for statement in statements:
                    cursor.execute(statement)
            finally:
                cursor.close()

    logger.info(f"Database engine created for {engine.url.render_as_string(hide_password=True)}")
    return engine


@contextmanager
def session_scope(engine: Engine):
    """Get a database session as a context manager."""
    session = sessionmaker(bind=engine)()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def table_exists(engine: Engine, table_name: str) -> bool:
    from sqlalchemy import inspect

    return inspect(engine).has_table(table_name)


def execute(engine: Engine, statement: str, **params):
    """Execute a raw SQL statement in its own transaction."""
    with engine.begin() as connection:
        return connection.execute(text(statement), params)
