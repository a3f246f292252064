"""Tree nodes.

A node's three attribute fields are plain strings. There is no distinction
between "absent" and "empty": both mean the value must be inherited.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sportspack.domain.model.enums import Attribute, NodeType

if TYPE_CHECKING:
    from collections.abc import Mapping


def new_id() -> UUID:
    return uuid4()


@dataclass(eq=False, kw_only=True)
class Node:
    """An entity in the hierarchy (category, grouping, item or a leaf type)."""

    id: UUID = field(default_factory=new_id)
    node_type: NodeType = NodeType.CONTAINER
    parent_id: UUID | None = None
    title: str = ""
    content: str = ""
    logo: str = ""
    remote_provider: str = ""
    remote_id: str = ""

    @property
    def is_container(self) -> bool:
        return self.node_type == NodeType.CONTAINER

    def attribute(self, attribute: Attribute) -> str:
        return getattr(self, attribute.value) or ""

    def set_attribute(self, attribute: Attribute, value: str | None) -> None:
        setattr(self, attribute.value, value or "")

    def set_attributes(self, values: Mapping[Attribute, str | None]) -> None:
        for attribute, value in values.items():
            self.set_attribute(attribute, value)

    @property
    def attributes(self) -> dict[Attribute, str]:
        return {attribute: self.attribute(attribute) for attribute in Attribute}
