"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum
from typing import Final


class NodeType(StrEnum):
    """Entity kinds stored in the tree; only containers form the hierarchy."""

    CONTAINER = "container"
    TEAM = "team"
    PERSON = "person"
    VENUE = "venue"


class Attribute(StrEnum):
    """Inheritable scalar fields. Unset and empty string are the same state."""

    LOGO = "logo"
    REMOTE_PROVIDER = "remote_provider"
    REMOTE_ID = "remote_id"

    @property
    def storage_key(self) -> str:
        return f"_sportspack_{self.value}"


class HierarchyLevel(StrEnum):
    CATEGORY = "Category"
    GROUPING = "Grouping"
    ITEM = "Item"
    UNKNOWN = "Unknown"

    @classmethod
    def for_level(cls, level: int) -> HierarchyLevel:
        return _LEVELS.get(level, cls.UNKNOWN)


_LEVELS: Final[dict[int, HierarchyLevel]] = {
    0: HierarchyLevel.CATEGORY,
    1: HierarchyLevel.GROUPING,
    2: HierarchyLevel.ITEM,
}

KNOWN_PROVIDERS: Final[frozenset[str]] = frozenset(
    {"statsperform", "heimspiel", "sportradar", "custom"}
)


def sanitize_provider(value: str | None) -> str:
    """Return ``value`` if it names a known provider, else the unset value."""

    if value is None:
        return ""
    normalized = value.strip()
    if normalized not in KNOWN_PROVIDERS:
        return ""
    return normalized
