"""SQL implementation of UnitOfWork: one connection, one transaction."""

from __future__ import annotations

import logging

from sqlalchemy.engine import Connection, Engine, RootTransaction
from sqlalchemy.exc import SQLAlchemyError

from winstore.domain.exceptions import InfrastructureError
from winstore.domain.repository.unit_of_work import UnitOfWork
from winstore.infrastructure.persistence.sql_catalog_repository import SqlCatalogRepository
from winstore.infrastructure.persistence.sql_order_repository import SqlOrderRepository
from winstore.infrastructure.persistence.sql_product_repository import SqlProductRepository

logger = logging.getLogger(__name__)


class SqlUnitOfWork(UnitOfWork):
    """Runs every repository call of one ``with`` block in a single transaction.

    A ``read_only`` unit of work is for queries: it cannot commit, and on
    SQLite it does not take the write lock.

    Any ``SQLAlchemyError`` (lost connection, lock timeout, constraint
    violation) is re-raised as InfrastructureError once the transaction
    has been rolled back.
    """

    def __init__(
        self, engine: Engine, lock_timeout: float | None = None, read_only: bool = False
    ) -> None:
        self._engine = engine
        self._lock_timeout = lock_timeout
        self._read_only = read_only
        self._connection: Connection | None = None
        self._transaction: RootTransaction | None = None

    def __enter__(self) -> SqlUnitOfWork:
        if self._connection is not None:
            raise RuntimeError("SqlUnitOfWork is already in use")
        try:
            self._connection = self._engine.connect()
            if self._read_only:
                self._connection.execution_options(winstore_read_only=True)
            self._transaction = self._connection.begin()
            if self._lock_timeout and self._connection.dialect.name == "postgresql":
                millis = int(self._lock_timeout * 1000)
                self._connection.exec_driver_sql(f"SET LOCAL lock_timeout = '{millis}ms'")
        except SQLAlchemyError as exc:
            self._close()
            raise InfrastructureError(f"Could not open a transaction: {exc}") from exc

        self.products = SqlProductRepository(self._connection)
        self.orders = SqlOrderRepository(self._connection)
        self.catalog = SqlCatalogRepository(self._connection)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.rollback()
        except SQLAlchemyError as rollback_exc:
            raise InfrastructureError(f"Rollback failed: {rollback_exc}") from rollback_exc
        finally:
            self._close()
        if isinstance(exc, SQLAlchemyError):
            raise InfrastructureError(f"Store failure, transaction rolled back: {exc}") from exc

    def commit(self) -> None:
        if self._transaction is None:
            raise RuntimeError("No active transaction")
        if self._read_only:
            raise RuntimeError("A read-only unit of work cannot commit")
        # A failed COMMIT propagates as SQLAlchemyError and __exit__ rolls back.
        self._transaction.commit()

    def rollback(self) -> None:
        if self._transaction is not None and self._transaction.is_active:
            try:
                self._transaction.rollback()
            except SQLAlchemyError:
                logger.exception("Rollback failed; the connection will be discarded")
                if self._connection is not None:
                    self._connection.invalidate()
                raise

    def _close(self) -> None:
        if self._connection is not None:
            self._connection.close()
        self._connection = None
        self._transaction = None
