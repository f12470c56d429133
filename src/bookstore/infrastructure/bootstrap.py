"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import sessionmaker

from bookstore.infrastructure.config import Settings
from bookstore.infrastructure.persistence.database import (
    build_engine,
    build_session_factory,
    create_schema,
)
from bookstore.infrastructure.persistence.unit_of_work import SqlAlchemyUnitOfWork


@lru_cache(maxsize=1)
def settings() -> Settings:
    return Settings.from_env()


@lru_cache(maxsize=1)
def engine() -> Engine:
    config = settings()
    url = make_url(config.database_url)
    if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    db_engine = build_engine(config.database_url, echo=config.echo_sql)
    create_schema(db_engine)
    return db_engine


@lru_cache(maxsize=1)
def session_factory() -> sessionmaker:
    return build_session_factory(engine())


def unit_of_work() -> SqlAlchemyUnitOfWork:
    """A fresh unit of work; callers must not share one across threads."""
    return SqlAlchemyUnitOfWork(session_factory())


def reset() -> None:
    """Forget cached settings and connections (after the environment changes)."""
    if engine.cache_info().currsize:
        engine().dispose()
    session_factory.cache_clear()
    engine.cache_clear()
    settings.cache_clear()
