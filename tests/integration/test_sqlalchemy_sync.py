from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from sportspack.adapters.providers import build_default_registry
from sportspack.config import ProviderConfig
from sportspack.domain import editing
from sportspack.domain.cache import ResolutionCache
from sportspack.domain.inheritance import InheritanceResolver
from sportspack.domain.model import Attribute, NodeType
from sportspack.domain.sync import SyncEngine, UnknownProviderError
from tests.helpers.tree import FixtureEvents, ManualClock

if TYPE_CHECKING:
    from collections.abc import Callable
    from uuid import UUID

    from sportspack.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork


def _seed(uow_factory: Callable[[], SqlAlchemyUnitOfWork]) -> tuple[UUID, UUID]:
    with uow_factory() as uow:
        sport_id = editing.create_container(
            uow, title="Football", logo="football.png", remote_provider="statsperform"
        )
        competition_id = editing.create_container(
            uow, title="Bundesliga", parent_id=sport_id, remote_id="X1"
        )
    return sport_id, competition_id


def _engine(
    uow_factory: Callable[[], SqlAlchemyUnitOfWork],
    cache: ResolutionCache,
    hook: FixtureEvents,
) -> SyncEngine:
    return SyncEngine(
        registry=build_default_registry(ProviderConfig(), hooks={"statsperform": hook}),
        cache=cache,
        unit_of_work_factory=uow_factory,
    )


def test_sync_is_idempotent_against_sqlite(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    _, competition_id = _seed(sqlite_unit_of_work)
    cache = ResolutionCache(clock=ManualClock())
    hook = FixtureEvents(
        [
            {"remote_id": "E1", "title": "Final"},
            {"remote_id": "E2", "title": "Semi-final", "content": "Leg 2"},
        ]
    )
    engine = _engine(sqlite_unit_of_work, cache, hook)

    first = engine.sync(competition_id, 14)
    hook.payloads = [{"remote_id": "E1", "title": "Final (rescheduled)"}]
    second = engine.sync(competition_id, 14)

    assert first.as_dict() == {"created": 2, "updated": 0}
    assert second.as_dict() == {"created": 0, "updated": 1}
    with sqlite_unit_of_work() as uow:
        children = sorted(
            uow.repositories.nodes.get_children(competition_id),
            key=lambda node: node.remote_id,
        )
        assert [(node.remote_id, node.title) for node in children] == [
            ("E1", "Final (rescheduled)"),
            ("E2", "Semi-final"),
        ]
        assert all(node.remote_provider == "statsperform" for node in children)


def test_synced_events_inherit_logo(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    _, competition_id = _seed(sqlite_unit_of_work)
    cache = ResolutionCache(clock=ManualClock())
    hook = FixtureEvents([{"remote_id": "E1", "title": "Final"}])
    engine = _engine(sqlite_unit_of_work, cache, hook)

    engine.sync(competition_id)

    with sqlite_unit_of_work() as uow:
        store = uow.repositories.nodes
        event = store.find_child_by_remote_id(competition_id, "E1")
        assert event is not None
        resolver = InheritanceResolver(store=store, cache=cache)
        assert resolver.resolve_logo(event.id) == "football.png"
        assert resolver.node_label(event.id) == "Item"


def test_unknown_provider_leaves_database_untouched(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    _, competition_id = _seed(sqlite_unit_of_work)
    hook = FixtureEvents([{"remote_id": "E1", "title": "Final"}])
    engine = _engine(sqlite_unit_of_work, ResolutionCache(clock=ManualClock()), hook)

    with pytest.raises(UnknownProviderError):
        engine.sync(competition_id, provider_override="bogus")

    assert hook.calls == []
    with sqlite_unit_of_work() as uow:
        assert list(uow.repositories.nodes.get_children(competition_id)) == []


def test_provider_change_reaches_synced_descendants(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    sport_id, competition_id = _seed(sqlite_unit_of_work)
    cache = ResolutionCache(clock=ManualClock())

    with sqlite_unit_of_work() as uow:
        resolver = InheritanceResolver(store=uow.repositories.nodes, cache=cache)
        assert resolver.resolve_provider(competition_id) == "statsperform"

    with sqlite_unit_of_work() as uow:
        editing.update_node_attributes(uow, cache, sport_id, remote_provider="heimspiel")

    with sqlite_unit_of_work() as uow:
        resolver = InheritanceResolver(store=uow.repositories.nodes, cache=cache)
        assert resolver.resolve_provider(competition_id) == "heimspiel"


def test_team_with_same_remote_id_does_not_block_event_creation(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    _, competition_id = _seed(sqlite_unit_of_work)
    with sqlite_unit_of_work() as uow:
        uow.repositories.nodes.create_node(
            competition_id,
            title="FC Example",
            node_type=NodeType.TEAM,
            attributes={Attribute.REMOTE_ID: "E1"},
        )
        uow.commit()
    hook = FixtureEvents([{"remote_id": "E1", "title": "Final"}])
    engine = _engine(sqlite_unit_of_work, ResolutionCache(clock=ManualClock()), hook)

    first = engine.sync(competition_id)
    second = engine.sync(competition_id)

    assert first.as_dict() == {"created": 1, "updated": 0}
    assert first.failures == []
    assert second.as_dict() == {"created": 0, "updated": 1}
