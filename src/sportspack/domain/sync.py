"""Provider event sync: fetch records and reconcile them under a container.

A sync run resolves the container's provider and remote id through the
inheritance resolver, asks the provider for events and then creates or
updates one child container per record. Children are matched by their stored
``remote_id`` within the parent, which makes re-running a sync idempotent.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from sportspack.config.sync import DEFAULT_SYNC_DAYS
from sportspack.domain.errors import NodeWriteError
from sportspack.domain.inheritance import InheritanceResolver
from sportspack.domain.model import Attribute

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence
    from uuid import UUID

    from sportspack.domain.cache import ResolutionCache
    from sportspack.domain.model import SyncRecord
    from sportspack.domain.ports.persistence import TreeStore
    from sportspack.domain.ports.unit_of_work import TreeUnitOfWork
    from sportspack.domain.providers import ProviderRegistry

log = getLogger(__name__)


class SyncError(RuntimeError):
    """Fatal precondition failure; raised before any provider call or write."""


class ContainerNotFoundError(SyncError):
    def __init__(self, container_id: UUID) -> None:
        super().__init__(f"Container {container_id} does not exist or is not a container")
        self.container_id = container_id


class ProviderNotResolvedError(SyncError):
    def __init__(self, container_id: UUID) -> None:
        super().__init__(
            f"No provider specified and no inherited provider found for container {container_id}"
        )
        self.container_id = container_id


class RemoteIdNotResolvedError(SyncError):
    def __init__(self, container_id: UUID) -> None:
        super().__init__(f"No remote id found for container {container_id}")
        self.container_id = container_id


class UnknownProviderError(SyncError):
    def __init__(self, provider: str, known: Sequence[str] = ()) -> None:
        hint = f" (known: {', '.join(known)})" if known else ""
        super().__init__(f"Unknown provider: {provider}{hint}")
        self.provider = provider


class ReconcileAction(StrEnum):
    CREATE = "create"
    UPDATE = "update"


@dataclass(frozen=True, slots=True)
class RecordFailure:
    """A record the store refused to write."""

    remote_id: str
    action: ReconcileAction
    reason: str


@dataclass(slots=True)
class SyncEventsResult:
    """Outcome of a sync run. Counts only cover records that were written."""

    provider: str
    remote_id: str
    fetched: int = 0
    created: int = 0
    updated: int = 0
    failures: list[RecordFailure] = field(default_factory=list["RecordFailure"])

    @property
    def skipped(self) -> int:
        return len(self.failures)

    def as_dict(self) -> dict[str, int]:
        return {"created": self.created, "updated": self.updated}


@dataclass(slots=True)
class _LockEntry:
    lock: threading.Lock = field(default_factory=threading.Lock)
    holders: int = 0


class _ContainerLocks:
    """One lock per container so overlapping syncs of a parent run one at a time.

    An entry lives only while some sync holds or waits for it.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: dict[UUID, _LockEntry] = {}

    @contextmanager
    def hold(self, container_id: UUID) -> Iterator[None]:
        with self._guard:
            entry = self._entries.setdefault(container_id, _LockEntry())
            entry.holders += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._guard:
                entry.holders -= 1
                if entry.holders == 0:
                    del self._entries[container_id]

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)


@dataclass(slots=True)
class SyncEngine:
    """Orchestrates one provider sync per call; holds no persistent state."""

    registry: ProviderRegistry
    cache: ResolutionCache
    unit_of_work_factory: Callable[[], TreeUnitOfWork]
    _locks: _ContainerLocks = field(default_factory=_ContainerLocks, init=False, repr=False)

    def sync(
        self,
        container_id: UUID,
        days: int = DEFAULT_SYNC_DAYS,
        provider_override: str | None = None,
    ) -> SyncEventsResult:
        """Fetch events for the container's remote competition and reconcile them."""

        if days < 1:
            raise ValueError("days must be at least 1")

        with self._locks.hold(container_id), self.unit_of_work_factory() as uow:
            store = uow.repositories.nodes
            resolver = InheritanceResolver(store=store, cache=self.cache)

            container = store.get_node(container_id)
            if container is None or not container.is_container:
                raise ContainerNotFoundError(container_id)

            provider_name = (provider_override or "").strip() or resolver.resolve(
                container_id, Attribute.REMOTE_PROVIDER
            )
            if not provider_name:
                raise ProviderNotResolvedError(container_id)

            remote_id = resolver.resolve(container_id, Attribute.REMOTE_ID)
            if not remote_id:
                raise RemoteIdNotResolvedError(container_id)

            provider = self.registry.get(provider_name)
            if provider is None:
                raise UnknownProviderError(provider_name, self.registry.names())

            log.info(
                "Syncing events for container %s (%s) using provider %s, remote id %s",
                container_id,
                container.title,
                provider_name,
                remote_id,
            )
            records = provider.fetch_events(remote_id, days)
            result = SyncEventsResult(
                provider=provider_name,
                remote_id=remote_id,
                fetched=len(records),
            )
            if not records:
                log.warning("No events returned from provider %s", provider_name)
                return result

            try:
                for record in records:
                    self._reconcile(store, container_id, provider_name, record, result)
                uow.commit()
            finally:
                resolver.invalidate(container_id)

        log.info(
            "Sync complete for %s: created=%d, updated=%d, skipped=%d",
            container_id,
            result.created,
            result.updated,
            result.skipped,
        )
        return result

    def _reconcile(
        self,
        store: TreeStore,
        container_id: UUID,
        provider_name: str,
        record: SyncRecord,
        result: SyncEventsResult,
    ) -> None:
        attributes = {
            Attribute.REMOTE_PROVIDER: provider_name,
            Attribute.REMOTE_ID: record.remote_id,
        }
        existing = store.find_child_by_remote_id(container_id, record.remote_id)
        action = ReconcileAction.CREATE if existing is None else ReconcileAction.UPDATE
        try:
            if existing is None:
                node_id = store.create_node(
                    container_id,
                    title=record.title,
                    content=record.content,
                    attributes=attributes,
                )
                result.created += 1
            else:
                node_id = existing.id
                store.update_node(
                    node_id,
                    title=record.title,
                    content=record.content,
                    attributes=attributes,
                )
                result.updated += 1
        except NodeWriteError as exc:
            log.warning("Could not %s event %s: %s", action, record.remote_id, exc)
            result.failures.append(
                RecordFailure(remote_id=record.remote_id, action=action, reason=str(exc))
            )
            return
        log.debug("%sd event %s as node %s", action.capitalize(), record.remote_id, node_id)
