"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import EventFetchHook, EventPayload, EventProvider, EventProviderFactory, no_events
from .persistence import TreeReader, TreeStore
from .unit_of_work import RepositoryCollection, TreeRepositories, TreeUnitOfWork, UnitOfWork

__all__ = [
    "EventFetchHook",
    "EventPayload",
    "EventProvider",
    "EventProviderFactory",
    "RepositoryCollection",
    "TreeReader",
    "TreeRepositories",
    "TreeStore",
    "TreeUnitOfWork",
    "UnitOfWork",
    "no_events",
]
