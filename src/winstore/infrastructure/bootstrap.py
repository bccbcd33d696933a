"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from winstore.domain.exceptions import InfrastructureError
from winstore.infrastructure.config import Settings
from winstore.infrastructure.persistence.engine import create_engine_from_settings, create_schema
from winstore.infrastructure.persistence.sql_unit_of_work import SqlUnitOfWork

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def settings() -> Settings:
    return Settings.from_env()


@lru_cache(maxsize=None)
def _engine_for(current: Settings) -> Engine:
    engine = create_engine_from_settings(current)
    try:
        create_schema(engine)
    except SQLAlchemyError as exc:
        engine.dispose()
        raise InfrastructureError(f"Database unavailable: {exc}") from exc
    return engine


def engine() -> Engine:
    return _engine_for(settings())


def unit_of_work(read_only: bool = False) -> SqlUnitOfWork:
    current = settings()
    return SqlUnitOfWork(
        _engine_for(current), lock_timeout=current.lock_timeout, read_only=read_only
    )


def configure_logging(level: str | int | None = None) -> None:
    if level is None:
        level = settings().log_level
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
