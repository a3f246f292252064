"""Ports for reading and writing the node tree."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from sportspack.domain.model import Attribute, Node, NodeType

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from uuid import UUID


@runtime_checkable
class TreeReader(Protocol):
    """Read access the inheritance resolver needs."""

    def get_node(self, node_id: UUID) -> Node | None: ...

    def get_children(self, parent_id: UUID) -> Sequence[Node]:
        """Container children of ``parent_id``, in no particular order."""
        ...


@runtime_checkable
class TreeStore(TreeReader, Protocol):
    """Persistence contract for hierarchy nodes.

    Writes raise ``NodeWriteError`` when the store rejects them and leave the
    store unchanged in that case. ``update_node`` raises ``NodeNotFoundError``
    for unknown ids.
    """

    def create_node(
        self,
        parent_id: UUID | None,
        *,
        title: str,
        content: str = "",
        attributes: Mapping[Attribute, str] | None = None,
        node_type: NodeType = NodeType.CONTAINER,
    ) -> UUID: ...

    def update_node(
        self,
        node_id: UUID,
        *,
        title: str | None = None,
        content: str | None = None,
        attributes: Mapping[Attribute, str] | None = None,
    ) -> None: ...

    def find_child_by_remote_id(self, parent_id: UUID, remote_id: str) -> Node | None: ...
