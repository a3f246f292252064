"""Attribute inheritance over the node tree.

A container without its own value for an attribute inherits it from the
nearest ancestor that has one. Resolutions, including empty ones, are cached
in a shared ``ResolutionCache``; every mutation path must call ``invalidate``
on the mutated node, which cascades to its whole subtree.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from sportspack.domain.model import Attribute, HierarchyLevel

if TYPE_CHECKING:
    from uuid import UUID

    from sportspack.domain.cache import ResolutionCache
    from sportspack.domain.model import Node
    from sportspack.domain.ports.persistence import TreeReader

log = getLogger(__name__)


@dataclass(slots=True)
class InheritanceResolver:
    """Cache-aside resolver for inherited attribute values."""

    store: TreeReader
    cache: ResolutionCache

    def resolve(self, node_id: UUID, attribute: Attribute | str) -> str:
        """Return the nearest-ancestor-or-self value, or ``""`` if none is set."""

        attr = Attribute(attribute)
        cached = self.cache.get(node_id, attr)
        if cached is not None:
            return cached

        generation = self.cache.generation(node_id)
        value = self._walk(node_id, attr)
        self.cache.store(node_id, attr, value, generation=generation)
        return value

    def resolve_logo(self, node_id: UUID) -> str:
        return self.resolve(node_id, Attribute.LOGO)

    def resolve_provider(self, node_id: UUID) -> str:
        return self.resolve(node_id, Attribute.REMOTE_PROVIDER)

    def resolve_remote_id(self, node_id: UUID) -> str:
        return self.resolve(node_id, Attribute.REMOTE_ID)

    def resolve_all(self, node_id: UUID) -> dict[Attribute, str]:
        return {attribute: self.resolve(node_id, attribute) for attribute in Attribute}

    def invalidate(self, node_id: UUID) -> None:
        """Drop cached values for ``node_id`` and every container below it."""

        pending = [node_id]
        seen: set[UUID] = set()
        while pending:
            current = pending.pop()
            if current in seen:
                continue
            seen.add(current)
            self.cache.discard(current)
            pending.extend(child.id for child in self.store.get_children(current))
        log.debug("Invalidated inheritance cache for %s (%d nodes)", node_id, len(seen))

    def hierarchy_level(self, node_id: UUID) -> int:
        """Number of parent hops to the root; -1 for missing or non-container nodes.

        A parent id pointing at a missing node still counts as a hop and ends
        the walk there.
        """

        node = self.store.get_node(node_id)
        if node is None or not node.is_container:
            return -1

        level = 0
        visited = {node.id}
        current = node
        while current.parent_id is not None:
            if current.parent_id in visited:
                log.warning("Parent cycle detected while computing level of %s", node_id)
                return -1
            level += 1
            parent = self.store.get_node(current.parent_id)
            if parent is None:
                break
            visited.add(parent.id)
            current = parent
        return level

    @staticmethod
    def hierarchy_label(level: int) -> str:
        return HierarchyLevel.for_level(level).value

    def node_label(self, node_id: UUID) -> str:
        return self.hierarchy_label(self.hierarchy_level(node_id))

    def ancestors(self, node_id: UUID) -> list[Node]:
        """Existing ancestors of ``node_id``, root first."""

        node = self.store.get_node(node_id)
        if node is None:
            return []
        chain: list[Node] = []
        visited = {node.id}
        parent_id = node.parent_id
        while parent_id is not None and parent_id not in visited:
            parent = self.store.get_node(parent_id)
            if parent is None:
                break
            visited.add(parent.id)
            chain.append(parent)
            parent_id = parent.parent_id
        chain.reverse()
        return chain

    def _walk(self, node_id: UUID, attribute: Attribute) -> str:
        visited: set[UUID] = set()
        current_id: UUID | None = node_id
        while current_id is not None:
            if current_id in visited:
                log.warning(
                    "Parent cycle detected while resolving %s for %s; treating as unset",
                    attribute,
                    node_id,
                )
                return ""
            visited.add(current_id)

            node = self.store.get_node(current_id)
            if node is None:
                return ""
            value = node.attribute(attribute)
            if value:
                return value
            # only containers inherit
            if not node.is_container:
                return ""
            current_id = node.parent_id
        return ""
