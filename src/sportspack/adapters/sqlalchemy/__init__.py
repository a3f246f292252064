"""SQLAlchemy adapter package for sportspack."""

from __future__ import annotations

from .mappings import create_all_tables, mapper_registry, node_table, start_mappers
from .repositories import SqlAlchemyTreeStore
from .unit_of_work import (
    SqlAlchemyUnitOfWork,
    StartupError,
    configured_engine,
    create_tree_engine,
    enable_sqlite_savepoints,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyTreeStore",
    "SqlAlchemyUnitOfWork",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "create_tree_engine",
    "enable_sqlite_savepoints",
    "is_started",
    "mapper_registry",
    "node_table",
    "shutdown",
    "start_mappers",
    "startup",
]
