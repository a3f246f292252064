"""SQLAlchemy mapping metadata for the node tree."""

from __future__ import annotations

import logging
import uuid
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import Column, Enum, Index, String, Table, Text, Uuid, and_, orm
from sqlalchemy.orm import configure_mappers

from sportspack.domain.model import Node, NodeType

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]

mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# parent_id carries no foreign key: dangling parents are a state the
# resolver handles, not one the schema rejects.
node_table = Table(
    "node",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("node_type", Enum(NodeType, native_enum=False), nullable=False),
    Column("parent_id", UUIDColumnType, nullable=True, index=True),
    Column("title", String, nullable=False, default=""),
    Column("content", Text, nullable=False, default=""),
    Column("logo", String, nullable=False, default=""),
    Column("remote_provider", String, nullable=False, default=""),
    Column("remote_id", String, nullable=False, default=""),
)

# one synced container per remote id below a parent; same scope as
# SqlAlchemyTreeStore.find_child_by_remote_id
_synced_container = and_(
    node_table.c.remote_id != "",
    node_table.c.node_type == NodeType.CONTAINER,
)
Index(
    "uq_node_parent_remote_id",
    node_table.c.parent_id,
    node_table.c.remote_id,
    unique=True,
    sqlite_where=_synced_container,
    postgresql_where=_synced_container,
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Node, node_table)

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
