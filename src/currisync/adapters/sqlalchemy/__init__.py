"""SQLAlchemy adapter package for currisync."""

from __future__ import annotations

from .mappings import create_all_tables, mapper_registry, start_mappers
from .repositories import (
    EntityNotFoundError,
    SqlAlchemyEntityStore,
    SqlAlchemyHierarchyReader,
    build_stores,
)
from .session import (
    StartupError,
    build_engine,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "EntityNotFoundError",
    "SqlAlchemyEntityStore",
    "SqlAlchemyHierarchyReader",
    "StartupError",
    "build_engine",
    "build_stores",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
