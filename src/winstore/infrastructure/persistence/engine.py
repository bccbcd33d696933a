"""Engine construction and per-dialect locking setup.

PostgreSQL gives us real row locks through ``SELECT ... FOR UPDATE``.
SQLite has no row locks and ignores ``FOR UPDATE``, so every write
transaction is opened with ``BEGIN IMMEDIATE`` instead: the database
write lock is taken up front, which serialises writers the same way a
row lock would (only coarser).  The sqlite3 busy timeout then plays the
part of the lock timeout.  Read-only units of work open a plain deferred
``BEGIN`` and read alongside an open checkout instead of queueing
behind it.
"""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url

from winstore.infrastructure.config import Settings
from winstore.infrastructure.persistence.tables import metadata

logger = logging.getLogger(__name__)


def create_engine_from_settings(settings: Settings) -> Engine:
    url = make_url(settings.database_url)

    connect_args: dict = {}
    if url.get_backend_name() == "sqlite":
        connect_args = {"timeout": settings.lock_timeout, "check_same_thread": False}
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(url, echo=settings.sql_echo, connect_args=connect_args)
    if engine.dialect.name == "sqlite":
        _install_sqlite_locking(engine)

    logger.debug("Engine created for %s", url.render_as_string(hide_password=True))
    return engine


def create_schema(engine: Engine) -> None:
    """Create any missing tables; existing tables are left alone."""
    metadata.create_all(engine)


def _install_sqlite_locking(engine: Engine) -> None:

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record) -> None:
        # Hand transaction control to the "begin" hook below.
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(connection) -> None:
        if connection.get_execution_options().get("winstore_read_only"):
            connection.exec_driver_sql("BEGIN")
        else:
            connection.exec_driver_sql("BEGIN IMMEDIATE")
