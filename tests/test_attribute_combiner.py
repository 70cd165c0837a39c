"""Tests for attribute_combiner.py — folding str/dex/vit/enr into all-stats."""

import pytest

from attribute_combiner import combine_all_attributes
from conftest import make_prop


def _attrs(value=10, **overrides):
    return [make_prop(code, overrides.get(code, value)) for code in ("str", "dex", "vit", "enr")]


def test_combines_four_equal_attributes(translator):
    out = combine_all_attributes(_attrs(10), translator)
    assert len(out) == 1
    assert out[0].code == "all-stats"
    assert (out[0].min, out[0].max) == (10, 10)
    assert out[0].display_text == "+10 To All Attributes"
    assert not out[0].has_range


def test_takes_position_of_earliest(translator):
    props = [make_prop("hp", 50), make_prop("vit", 5), make_prop("res-fire", 30),
             make_prop("str", 5), make_prop("enr", 5), make_prop("dex", 5), make_prop("mana", 20)]
    out = combine_all_attributes(props, translator)
    assert [p.code for p in out] == ["hp", "all-stats", "res-fire", "mana"]


def test_ranges_must_match(translator):
    props = [make_prop(c, lo=5, hi=10) for c in ("str", "dex", "vit", "enr")]
    out = combine_all_attributes(props, translator)
    assert [p.code for p in out] == ["all-stats"]
    assert out[0].display_text == "+5-10 To All Attributes"
    assert out[0].has_range


@pytest.mark.parametrize("props", [
    _attrs(10, dex=11),
    _attrs(10)[:3],
    _attrs(10) + [make_prop("str", 10)],
    [make_prop("str", 10), make_prop("dex", 10)],
    [],
], ids=["one-differs", "missing-one", "duplicate", "two-only", "empty"])
def test_unchanged(translator, props):
    snapshot = list(props)
    out = combine_all_attributes(props, translator)
    assert out is props
    assert out == snapshot


def test_idempotent(translator):
    once = combine_all_attributes([make_prop("hp", 1)] + _attrs(3), translator)
    twice = combine_all_attributes(once, translator)
    assert [p.code for p in twice] == [p.code for p in once] == ["hp", "all-stats"]


def test_input_list_not_mutated(translator):
    props = _attrs(4)
    combine_all_attributes(props, translator)
    assert [p.code for p in props] == ["str", "dex", "vit", "enr"]


def test_default_translator():
    out = combine_all_attributes(_attrs(2))
    assert out[0].display_text == "+2 To All Attributes"
