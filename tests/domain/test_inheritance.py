from __future__ import annotations

import pytest

from sportspack.domain.model import Attribute, Node, NodeType, new_id
from tests.helpers.tree import (
    InMemoryTreeStore,
    ManualClock,
    container,
    make_resolver,
    make_sport_tree,
)


def test_resolve_returns_own_value_first() -> None:
    tree = make_sport_tree()
    tree.competition.logo = "bundesliga.png"
    resolver = make_resolver(tree.store)

    assert resolver.resolve(tree.competition.id, Attribute.LOGO) == "bundesliga.png"


def test_resolve_walks_to_nearest_ancestor() -> None:
    tree = make_sport_tree()
    resolver = make_resolver(tree.store)

    assert resolver.resolve(tree.event.id, Attribute.LOGO) == "football.png"
    assert resolver.resolve(tree.event.id, Attribute.REMOTE_ID) == "X1"
    assert resolver.resolve(tree.event.id, Attribute.REMOTE_PROVIDER) == "statsperform"


def test_resolve_prefers_nearer_ancestor() -> None:
    tree = make_sport_tree()
    tree.competition.logo = "bundesliga.png"
    resolver = make_resolver(tree.store)

    assert resolver.resolve_logo(tree.event.id) == "bundesliga.png"


def test_resolve_returns_empty_when_nothing_is_set() -> None:
    root = container("Handball")
    child = container("Liga", parent=root)
    resolver = make_resolver(InMemoryTreeStore([root, child]))

    assert resolver.resolve(child.id, Attribute.LOGO) == ""


def test_resolve_accepts_attribute_names() -> None:
    tree = make_sport_tree()
    resolver = make_resolver(tree.store)

    assert resolver.resolve(tree.event.id, "remote_id") == "X1"


def test_resolve_rejects_unknown_attribute_names() -> None:
    tree = make_sport_tree()
    resolver = make_resolver(tree.store)

    with pytest.raises(ValueError, match="colour"):
        resolver.resolve(tree.event.id, "colour")


def test_resolve_missing_node_is_empty() -> None:
    resolver = make_resolver(InMemoryTreeStore())

    assert resolver.resolve(new_id(), Attribute.LOGO) == ""


def test_non_container_only_consults_its_own_value() -> None:
    sport = container("Football", logo="football.png")
    team = Node(node_type=NodeType.TEAM, parent_id=sport.id, title="FC Example")
    resolver = make_resolver(InMemoryTreeStore([sport, team]))

    assert resolver.resolve(team.id, Attribute.LOGO) == ""

    team.logo = "crest.png"
    resolver.invalidate(team.id)
    assert resolver.resolve(team.id, Attribute.LOGO) == "crest.png"


def test_dangling_parent_ends_the_walk() -> None:
    orphan = Node(title="Orphan", parent_id=new_id())
    resolver = make_resolver(InMemoryTreeStore([orphan]))

    assert resolver.resolve(orphan.id, Attribute.REMOTE_ID) == ""


def test_resolve_handles_deep_trees() -> None:
    root = container("Root", remote_id="deep")
    nodes = [root]
    for index in range(50):
        nodes.append(container(f"Level {index + 1}", parent=nodes[-1]))
    resolver = make_resolver(InMemoryTreeStore(nodes))

    assert resolver.resolve(nodes[-1].id, Attribute.REMOTE_ID) == "deep"


def test_parent_cycle_terminates_and_fails_closed(caplog: pytest.LogCaptureFixture) -> None:
    first = Node(title="A")
    second = Node(title="B", parent_id=first.id)
    first.parent_id = second.id
    resolver = make_resolver(InMemoryTreeStore([first, second]))

    assert resolver.resolve(first.id, Attribute.LOGO) == ""
    assert "cycle" in caplog.text


def test_cache_hit_skips_tree_access() -> None:
    tree = make_sport_tree()
    resolver = make_resolver(tree.store)
    resolver.resolve(tree.event.id, Attribute.LOGO)
    reads = tree.store.reads

    assert resolver.resolve(tree.event.id, Attribute.LOGO) == "football.png"
    assert tree.store.reads == reads


def test_empty_result_is_cached_until_invalidated() -> None:
    root = container("Handball")
    child = container("Liga", parent=root)
    resolver = make_resolver(InMemoryTreeStore([root, child]))
    assert resolver.resolve(child.id, Attribute.REMOTE_PROVIDER) == ""

    root.remote_provider = "heimspiel"
    assert resolver.resolve(child.id, Attribute.REMOTE_PROVIDER) == ""

    resolver.invalidate(root.id)
    assert resolver.resolve(child.id, Attribute.REMOTE_PROVIDER) == "heimspiel"


def test_cached_value_expires_after_ttl() -> None:
    clock = ManualClock()
    tree = make_sport_tree()
    resolver = make_resolver(tree.store, ttl_seconds=60, clock=clock)
    assert resolver.resolve(tree.event.id, Attribute.LOGO) == "football.png"

    tree.sport.logo = "new.png"
    assert resolver.resolve(tree.event.id, Attribute.LOGO) == "football.png"

    clock.advance(60)
    assert resolver.resolve(tree.event.id, Attribute.LOGO) == "new.png"


def test_invalidate_cascades_to_all_descendants() -> None:
    tree = make_sport_tree()
    resolver = make_resolver(tree.store)
    for node in (tree.sport, tree.competition, tree.event):
        resolver.resolve_all(node.id)

    tree.sport.logo = "rebrand.png"
    resolver.invalidate(tree.sport.id)

    assert resolver.resolve_logo(tree.sport.id) == "rebrand.png"
    assert resolver.resolve_logo(tree.competition.id) == "rebrand.png"
    assert resolver.resolve_logo(tree.event.id) == "rebrand.png"


def test_invalidate_leaves_other_subtrees_cached() -> None:
    tree = make_sport_tree()
    sibling = tree.store.add(container("Premier League", parent=tree.sport))
    resolver = make_resolver(tree.store)
    resolver.resolve_logo(sibling.id)
    resolver.resolve_logo(tree.event.id)

    tree.sport.logo = "rebrand.png"
    resolver.invalidate(tree.competition.id)

    assert resolver.resolve_logo(tree.event.id) == "rebrand.png"
    assert resolver.resolve_logo(sibling.id) == "football.png"


def test_invalidate_then_ancestor_mutation_is_visible() -> None:
    tree = make_sport_tree()
    resolver = make_resolver(tree.store)
    resolver.resolve_provider(tree.event.id)

    resolver.invalidate(tree.event.id)
    tree.sport.remote_provider = "heimspiel"

    assert resolver.resolve_provider(tree.event.id) == "heimspiel"


def test_invalidate_survives_cycles() -> None:
    first = Node(title="A")
    second = Node(title="B", parent_id=first.id)
    first.parent_id = second.id
    resolver = make_resolver(InMemoryTreeStore([first, second]))
    resolver.resolve_all(first.id)
    resolver.resolve_all(second.id)
    assert len(resolver.cache) == 6

    resolver.invalidate(first.id)

    assert len(resolver.cache) == 0


def test_override_on_child_after_invalidation() -> None:
    sport = container("Football", remote_provider="statsperform", remote_id="X1")
    competition = container("Cup", parent=sport)
    store = InMemoryTreeStore([sport, competition])
    resolver = make_resolver(store)
    assert resolver.resolve(competition.id, Attribute.REMOTE_PROVIDER) == "statsperform"

    store.update_node(competition.id, attributes={Attribute.REMOTE_PROVIDER: "custom"})
    resolver.invalidate(competition.id)

    assert resolver.resolve(competition.id, Attribute.REMOTE_PROVIDER) == "custom"


def test_hierarchy_levels_and_labels() -> None:
    tree = make_sport_tree()
    resolver = make_resolver(tree.store)

    assert resolver.hierarchy_level(tree.sport.id) == 0
    assert resolver.hierarchy_level(tree.competition.id) == 1
    assert resolver.hierarchy_level(tree.event.id) == 2
    assert resolver.node_label(tree.sport.id) == "Category"
    assert resolver.node_label(tree.competition.id) == "Grouping"
    assert resolver.node_label(tree.event.id) == "Item"


def test_child_level_is_parent_level_plus_one() -> None:
    root = container("Root")
    nodes = [root]
    for index in range(5):
        nodes.append(container(f"Level {index + 1}", parent=nodes[-1]))
    resolver = make_resolver(InMemoryTreeStore(nodes))

    for parent, child in zip(nodes, nodes[1:], strict=False):
        assert resolver.hierarchy_level(child.id) == resolver.hierarchy_level(parent.id) + 1
    assert resolver.node_label(nodes[-1].id) == "Unknown"


def test_hierarchy_level_for_missing_or_non_container() -> None:
    team = Node(node_type=NodeType.TEAM, title="FC Example")
    resolver = make_resolver(InMemoryTreeStore([team]))

    assert resolver.hierarchy_level(new_id()) == -1
    assert resolver.hierarchy_level(team.id) == -1
    assert resolver.hierarchy_label(-1) == "Unknown"


def test_hierarchy_level_counts_hop_to_dangling_parent() -> None:
    orphan = Node(title="Orphan", parent_id=new_id())
    resolver = make_resolver(InMemoryTreeStore([orphan]))

    assert resolver.hierarchy_level(orphan.id) == 1


def test_hierarchy_level_of_cycle_is_unknown() -> None:
    first = Node(title="A")
    second = Node(title="B", parent_id=first.id)
    first.parent_id = second.id
    resolver = make_resolver(InMemoryTreeStore([first, second]))

    assert resolver.hierarchy_level(first.id) == -1


@pytest.mark.parametrize(
    ("level", "label"),
    [(0, "Category"), (1, "Grouping"), (2, "Item"), (3, "Unknown"), (-1, "Unknown")],
)
def test_hierarchy_label(level: int, label: str) -> None:
    resolver = make_resolver(InMemoryTreeStore())

    assert resolver.hierarchy_label(level) == label


def test_ancestors_are_root_first() -> None:
    tree = make_sport_tree()
    resolver = make_resolver(tree.store)

    assert [node.title for node in resolver.ancestors(tree.event.id)] == [
        "Football",
        "Bundesliga",
    ]
    assert resolver.ancestors(tree.sport.id) == []
    assert resolver.ancestors(new_id()) == []
