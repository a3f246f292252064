"""Public domain model surface."""

from __future__ import annotations

from sportspack.domain.model.enums import (
    KNOWN_PROVIDERS,
    Attribute,
    HierarchyLevel,
    NodeType,
    sanitize_provider,
)
from sportspack.domain.model.node import Node, new_id
from sportspack.domain.model.records import SyncRecord

__all__ = [
    "KNOWN_PROVIDERS",
    "Attribute",
    "HierarchyLevel",
    "Node",
    "NodeType",
    "SyncRecord",
    "new_id",
    "sanitize_provider",
]
