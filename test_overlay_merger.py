"""
Tests for overlay merging.
"""

from propstack.config.overlay import OverlayMerger
from propstack.config.properties import PropertySet


def test_merge_scenario_order():
    base = PropertySet([("a", "1"), ("c", "3")])
    overlay = PropertySet([("a", "2"), ("b", "4")])
    merged = OverlayMerger.merge(base, overlay)
    assert list(merged.items()) == [("a", "2"), ("c", "3"), ("b", "4")]


def test_merge_keeps_every_key_once():
    base = PropertySet([("x", "1"), ("y", "2"), ("z", "3")])
    overlay = PropertySet([("w", "9"), ("y", "8"), ("v", "7")])
    merged = OverlayMerger.merge(base, overlay)
    assert set(merged) == set(base) | set(overlay)
    assert len(merged) == len(set(base) | set(overlay))
    for key in merged:
        assert merged[key] == (overlay[key] if key in overlay else base[key])
    assert list(merged) == ["x", "y", "z", "w", "v"]


def test_merge_does_not_mutate_inputs():
    base = {"a": "1"}
    overlay = {"a": "2", "b": "3"}
    OverlayMerger.merge(base, overlay)
    assert base == {"a": "1"}
    assert overlay == {"a": "2", "b": "3"}


def test_merge_with_empty_sides():
    props = PropertySet([("a", "1")])
    assert OverlayMerger.merge(props, PropertySet()) == props
    assert OverlayMerger.merge(PropertySet(), props) == props


def test_merge_all_folds_left_to_right():
    merged = OverlayMerger.merge_all({"a": "1"}, {"a": "2", "b": "2"}, {"b": "3"})
    assert list(merged.items()) == [("a", "2"), ("b", "3")]
