"""Process-wide cache of resolved attribute values.

Entries are keyed by ``(node_id, attribute)`` and expire after a fixed TTL.
A resolver snapshots ``generation`` before walking the tree and hands it back
on ``store``; if the node was invalidated in between, the write is dropped so
an invalidation always wins over a concurrent resolve.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sportspack.config.inheritance import DEFAULT_CACHE_TTL_SECONDS
from sportspack.domain.model import Attribute

if TYPE_CHECKING:
    from collections.abc import Callable
    from uuid import UUID

    from sportspack.config.inheritance import InheritanceConfig

type CacheKey = tuple[UUID, Attribute]

DEFAULT_MAX_TRACKED_INVALIDATIONS = 10_000


@dataclass(frozen=True, slots=True)
class CachedValue:
    value: str
    expires_at: float

    def is_live(self, now: float) -> bool:
        return now < self.expires_at


class ResolutionCache:
    """Thread-safe TTL cache with authoritative invalidation.

    Invalidations are stamped with a global sequence number. A store is
    rejected when its node, or the whole cache, was invalidated after the
    sequence number the resolver snapshotted. Once more than
    ``max_tracked_invalidations`` node stamps accumulate they are folded into
    a single cache-wide stamp, which keeps the bookkeeping bounded at the cost
    of rejecting stores that were in flight at that moment.
    """

    def __init__(
        self,
        *,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        max_tracked_invalidations: int = DEFAULT_MAX_TRACKED_INVALIDATIONS,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("Cache TTL must be positive")
        if max_tracked_invalidations < 1:
            raise ValueError("max_tracked_invalidations must be at least 1")
        self.ttl_seconds = ttl_seconds
        self.max_tracked_invalidations = max_tracked_invalidations
        self._clock = clock
        self._entries: dict[CacheKey, CachedValue] = {}
        self._invalidated_at: dict[UUID, int] = {}
        self._cleared_at = 0
        self._sequence = 0
        self._lock = threading.Lock()

    @classmethod
    def from_config(
        cls,
        config: InheritanceConfig,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> ResolutionCache:
        return cls(ttl_seconds=config.ttl_seconds, clock=clock)

    def get(self, node_id: UUID, attribute: Attribute) -> str | None:
        key = (node_id, attribute)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if not entry.is_live(self._clock()):
                del self._entries[key]
                return None
            return entry.value

    def generation(self, node_id: UUID) -> int:
        """Snapshot to hand back to ``store`` once the value is computed."""

        _ = node_id
        with self._lock:
            return self._sequence

    def store(self, node_id: UUID, attribute: Attribute, value: str, *, generation: int) -> bool:
        """Cache ``value`` unless ``node_id`` was invalidated since ``generation``."""

        with self._lock:
            invalidated_at = max(self._cleared_at, self._invalidated_at.get(node_id, 0))
            if invalidated_at > generation:
                return False
            self._entries[(node_id, attribute)] = CachedValue(
                value=value,
                expires_at=self._clock() + self.ttl_seconds,
            )
            return True

    def discard(self, node_id: UUID) -> None:
        with self._lock:
            for attribute in Attribute:
                self._entries.pop((node_id, attribute), None)
            self._sequence += 1
            self._invalidated_at[node_id] = self._sequence
            if len(self._invalidated_at) > self.max_tracked_invalidations:
                self._invalidated_at.clear()
                self._cleared_at = self._sequence

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._invalidated_at.clear()
            self._sequence += 1
            self._cleared_at = self._sequence

    @property
    def tracked_invalidations(self) -> int:
        with self._lock:
            return len(self._invalidated_at)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
