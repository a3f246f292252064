"""Ports for fetching events from remote providers."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sportspack.domain.model import SyncRecord

type EventPayload = Mapping[str, object]

EventFetchHook = Callable[[str, int], Iterable[EventPayload]]
"""Injectable fetch strategy: ``(remote_id, days) -> raw event payloads``."""


def no_events(remote_id: str, days: int) -> list[EventPayload]:
    """Default fetch hook for providers without a wired client."""

    _ = (remote_id, days)
    return []


@runtime_checkable
class EventProvider(Protocol):
    """A pluggable source of events for a remote competition."""

    def get_name(self) -> str: ...

    def is_configured(self) -> bool:
        """True iff credentials are present; says nothing about their validity."""
        ...

    def fetch_events(self, remote_id: str, days: int = 30) -> list[SyncRecord]:
        """Return every event in the lookahead window as a finite list."""
        ...


EventProviderFactory = Callable[[], EventProvider]


__all__ = [
    "EventFetchHook",
    "EventPayload",
    "EventProvider",
    "EventProviderFactory",
    "no_events",
]
