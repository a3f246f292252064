"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from functools import cache
from logging import getLogger
from typing import TYPE_CHECKING

from sportspack.adapters.providers import build_default_registry
from sportspack.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork, is_started, startup
from sportspack.config import get_inheritance_config, get_sync_config
from sportspack.domain import editing
from sportspack.domain.cache import ResolutionCache
from sportspack.domain.errors import NodeNotFoundError
from sportspack.domain.inheritance import InheritanceResolver
from sportspack.domain.ports.unit_of_work import TreeUnitOfWork
from sportspack.domain.sync import SyncEngine, SyncEventsResult

if TYPE_CHECKING:
    from uuid import UUID

    from sportspack.domain.model import Attribute, Node
    from sportspack.domain.providers import ProviderRegistry

UnitOfWorkFactory = Callable[[], TreeUnitOfWork]


log = getLogger(__name__)


@cache
def get_resolution_cache() -> ResolutionCache:
    """The process-wide cache shared by every resolver built here."""

    return ResolutionCache.from_config(get_inheritance_config())


def ensure_started() -> None:
    if not is_started():
        startup()


@dataclass(slots=True)
class NodeSummary:
    node: Node
    level: int
    label: str
    resolved: dict[Attribute, str]
    ancestors: list[Node]

    @property
    def breadcrumb(self) -> str:
        return " > ".join([*(ancestor.title for ancestor in self.ancestors), self.node.title])


def build_sync_engine(
    *,
    registry: ProviderRegistry | None = None,
    resolution_cache: ResolutionCache | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> SyncEngine:
    if unit_of_work_factory is None:
        ensure_started()
    return SyncEngine(
        registry=registry or build_default_registry(),
        cache=resolution_cache or get_resolution_cache(),
        unit_of_work_factory=unit_of_work_factory or SqlAlchemyUnitOfWork,
    )


def sync_competition_events(
    container_id: UUID,
    *,
    days: int | None = None,
    provider_override: str | None = None,
    engine: SyncEngine | None = None,
) -> SyncEventsResult:
    """Synchronise provider events below a competition container."""

    effective_engine = engine or build_sync_engine()
    effective_days = days if days is not None else get_sync_config().days
    log.info(
        "Starting event sync: container=%s, days=%s, provider_override=%s",
        container_id,
        effective_days,
        provider_override,
    )
    result = effective_engine.sync(container_id, effective_days, provider_override)
    log.info(
        f"Finished event sync: provider={result.provider}, fetched={result.fetched}, "
        f"created={result.created}, updated={result.updated}, skipped={result.skipped}"
    )
    return result


def create_container(
    *,
    title: str,
    parent_id: UUID | None = None,
    logo: str | None = None,
    remote_provider: str | None = None,
    remote_id: str | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> UUID:
    if unit_of_work_factory is None:
        ensure_started()
    effective_uow = unit_of_work_factory or SqlAlchemyUnitOfWork
    with effective_uow() as uow:
        return editing.create_container(
            uow,
            title=title,
            parent_id=parent_id,
            logo=logo,
            remote_provider=remote_provider,
            remote_id=remote_id,
        )


def set_node_attributes(
    node_id: UUID,
    *,
    title: str | None = None,
    logo: str | None = None,
    remote_provider: str | None = None,
    remote_id: str | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    resolution_cache: ResolutionCache | None = None,
) -> dict[Attribute, str]:
    if unit_of_work_factory is None:
        ensure_started()
    effective_uow = unit_of_work_factory or SqlAlchemyUnitOfWork
    with effective_uow() as uow:
        return editing.update_node_attributes(
            uow,
            resolution_cache or get_resolution_cache(),
            node_id,
            title=title,
            logo=logo,
            remote_provider=remote_provider,
            remote_id=remote_id,
        )


def describe_node(
    node_id: UUID,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    resolution_cache: ResolutionCache | None = None,
) -> NodeSummary:
    """Collect a node with its hierarchy position and resolved attributes."""

    if unit_of_work_factory is None:
        ensure_started()
    effective_uow = unit_of_work_factory or SqlAlchemyUnitOfWork
    with effective_uow() as uow:
        store = uow.repositories.nodes
        node = store.get_node(node_id)
        if node is None:
            raise NodeNotFoundError(node_id)
        resolver = InheritanceResolver(
            store=store,
            cache=resolution_cache or get_resolution_cache(),
        )
        level = resolver.hierarchy_level(node_id)
        return NodeSummary(
            node=node,
            level=level,
            label=resolver.hierarchy_label(level),
            resolved=resolver.resolve_all(node_id),
            ancestors=resolver.ancestors(node_id),
        )
