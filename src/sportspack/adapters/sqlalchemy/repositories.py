"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from sportspack.adapters.sqlalchemy.mappings import node_table
from sportspack.domain.errors import NodeNotFoundError, NodeWriteError
from sportspack.domain.model import Node, NodeType

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from uuid import UUID

    from sqlalchemy.orm import Session

    from sportspack.domain.model import Attribute


class SqlAlchemyTreeStore:
    """Tree store over the ``node`` table.

    Each write runs inside a SAVEPOINT and is flushed immediately, so a
    rejected write (for example a duplicate remote id below one parent) is
    rolled back on its own and surfaces as ``NodeWriteError`` without
    poisoning the surrounding transaction.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_node(self, node_id: UUID) -> Node | None:
        return self.session.get(Node, node_id)

    def get_children(self, parent_id: UUID) -> Sequence[Node]:
        stmt = (
            select(Node)
            .where(node_table.c.parent_id == parent_id)
            .where(node_table.c.node_type == NodeType.CONTAINER)
        )
        return self.session.scalars(stmt).all()

    def find_child_by_remote_id(self, parent_id: UUID, remote_id: str) -> Node | None:
        if not remote_id:
            return None
        stmt = (
            select(Node)
            .where(node_table.c.parent_id == parent_id)
            .where(node_table.c.node_type == NodeType.CONTAINER)
            .where(node_table.c.remote_id == remote_id)
            .order_by(node_table.c.id)
            .limit(1)
        )
        return self.session.scalars(stmt).first()

    def create_node(
        self,
        parent_id: UUID | None,
        *,
        title: str,
        content: str = "",
        attributes: Mapping[Attribute, str] | None = None,
        node_type: NodeType = NodeType.CONTAINER,
    ) -> UUID:
        node = Node(node_type=node_type, parent_id=parent_id, title=title, content=content)
        node.set_attributes(attributes or {})
        try:
            with self.session.begin_nested():
                self.session.add(node)
        except SQLAlchemyError as exc:
            raise NodeWriteError(f"Could not create node under {parent_id}: {exc}") from exc
        return node.id

    def update_node(
        self,
        node_id: UUID,
        *,
        title: str | None = None,
        content: str | None = None,
        attributes: Mapping[Attribute, str] | None = None,
    ) -> None:
        node = self.get_node(node_id)
        if node is None:
            raise NodeNotFoundError(node_id)
        try:
            with self.session.begin_nested():
                if title is not None:
                    node.title = title
                if content is not None:
                    node.content = content
                node.set_attributes(attributes or {})
        except SQLAlchemyError as exc:
            raise NodeWriteError(f"Could not update node {node_id}: {exc}") from exc


if TYPE_CHECKING:
    from sportspack.domain.ports.persistence import TreeStore

    _session_stub = cast("Session", object())
    _store_check: TreeStore = SqlAlchemyTreeStore(_session_stub)
