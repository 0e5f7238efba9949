"""Tests for flattening the category forest."""

from kb_core.core.tree.builder import build_forest
from kb_core.core.tree.flatten import flatten
from kb_core.models.content import CategoryRecord

SAMPLE = [
    CategoryRecord(id="a", parent_id="root", order=1),
    CategoryRecord(id="b", parent_id="root", order=0),
    CategoryRecord(id="c", parent_id="a", order=0),
]


def _pairs(entries: list) -> list[tuple[str, int]]:
    return [(e.record.id, e.depth) for e in entries]


def test_flatten_is_preorder_with_depth() -> None:
    forest = build_forest(SAMPLE)
    assert _pairs(flatten(forest, set())) == [("b", 0), ("a", 0), ("c", 1)]


def test_collapsed_node_is_shown_but_subtree_pruned() -> None:
    forest = build_forest(SAMPLE)
    assert _pairs(flatten(forest, {"a"})) == [("b", 0), ("a", 0)]


def test_collapsing_a_leaf_changes_nothing() -> None:
    forest = build_forest(SAMPLE)
    assert flatten(forest, {"c", "b"}) == flatten(forest)


def test_collapse_deep_node_keeps_siblings() -> None:
    records = [
        CategoryRecord(id="top", parent_id="root"),
        CategoryRecord(id="m1", parent_id="top", order=0),
        CategoryRecord(id="m1-leaf", parent_id="m1"),
        CategoryRecord(id="m2", parent_id="top", order=1),
        CategoryRecord(id="m2-leaf", parent_id="m2"),
    ]
    forest = build_forest(records)
    assert _pairs(flatten(forest, frozenset({"m1"}))) == [
        ("top", 0),
        ("m1", 1),
        ("m2", 1),
        ("m2-leaf", 2),
    ]


def test_child_count_ignores_collapsed_state() -> None:
    forest = build_forest(SAMPLE)
    entries = flatten(forest, {"a"})
    assert [e.child_count for e in entries] == [0, 1]


def test_flatten_empty_forest() -> None:
    assert flatten([]) == []
