"""Errors raised across the domain ports."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID


class NodeNotFoundError(LookupError):
    """Raised when a write targets a node that does not exist."""

    def __init__(self, node_id: UUID) -> None:
        super().__init__(f"Node {node_id} does not exist")
        self.node_id = node_id


class NodeWriteError(RuntimeError):
    """Raised by a tree store when it rejects a single create or update."""


class ProviderPayloadError(ValueError):
    """Raised when a provider returns a record that cannot be reconciled."""

    def __init__(self, provider: str, message: str, *, index: int | None = None) -> None:
        location = f" (record {index})" if index is not None else ""
        super().__init__(f"{provider}: invalid event payload{location}: {message}")
        self.provider = provider
        self.index = index
