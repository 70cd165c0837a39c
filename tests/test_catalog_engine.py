"""Tests for the CatalogEngine facade."""

from pathlib import Path

import pytest

from property_translator import Property
from reverse_translator import TemplateError
from type_hierarchy import ResolveStats


class TestCatalogEngineInit:
    """Test CatalogEngine construction and initialization."""

    def test_construct_with_d2_config(self):
        from core import CatalogEngine
        from games.d2 import create_d2_config

        engine = CatalogEngine(create_d2_config())
        assert not engine.ready
        assert engine.config.game_id == "d2"

    def test_calls_before_init_are_empty(self):
        from core import CatalogEngine, GameConfig

        engine = CatalogEngine(GameConfig(game_id="test", catalog_dir=Path("/tmp/none")))
        assert engine.translate_mod_lines(["+10 To Strength"]) == []
        assert engine.render([Property("str", min=1, max=1)]) == []
        assert engine.load_catalog() is None
        assert engine.compute_runeword_bases(None) == []

    def test_initialize(self):
        from core import CatalogEngine
        from games.d2 import create_d2_config

        engine = CatalogEngine(create_d2_config())
        assert engine.initialize() is True
        assert engine.ready
        assert engine.registry.is_known("hp")
        assert engine.registry.is_known("war")

    def test_bad_format_override_raises(self):
        from core import CatalogEngine
        from games.d2 import create_d2_config

        engine = CatalogEngine(create_d2_config(format_overrides={"bad": "{nope}"}))
        with pytest.raises(TemplateError):
            engine.initialize()
        assert not engine.ready


@pytest.fixture(scope="module")
def engine():
    """An initialized engine shared across this module."""
    from core import CatalogEngine
    from games.d2 import create_d2_config

    eng = CatalogEngine(create_d2_config())
    eng.initialize()
    return eng


# ── translate_mod_lines / render ─────────────────────────

class TestTranslateModLines:

    def test_recognized_lines_enriched(self, engine):
        props = engine.translate_mod_lines(["Fire Resist +30%", "+15-40% Enhanced Damage"])
        assert [p.code for p in props] == ["res-fire", "dmg%"]
        assert props[1].has_range
        assert props[1].display_text == "+15-40% Enhanced Damage"

    def test_raw_lines_kept(self, engine):
        props = engine.translate_mod_lines(["A Line Nobody Knows"])
        assert props[0].code == "raw"
        assert props[0].display_text == "A Line Nobody Knows"

    def test_attributes_combined(self, engine):
        props = engine.translate_mod_lines([
            "+10 To Strength", "+10 To Dexterity", "+10 To Vitality", "+10 To Energy",
        ])
        assert [p.code for p in props] == ["all-stats"]
        assert props[0].display_text == "+10 To All Attributes"

    def test_blank_lines_dropped(self, engine):
        assert engine.translate_mod_lines(["", "  "]) == []

    def test_render_dedupes(self, engine):
        props = [Property("swing1", min=20, max=20), Property("swing3", min=20, max=20)]
        assert engine.render(props) == ["+20% Increased Attack Speed"]


def test_format_override_used():
    from core import CatalogEngine
    from games.d2 import create_d2_config

    eng = CatalogEngine(create_d2_config(format_overrides={"new-stat": "+{value} Shiny Points"}))
    eng.initialize()
    props = eng.translate_mod_lines(["+4 Shiny Points"])
    assert (props[0].code, props[0].min) == ("new-stat", 4)
    assert eng.registry.is_known("new-stat")
    assert eng.render(props) == ["+4 Shiny Points"]


def test_new_codes_reach_sink():
    from core import CatalogEngine
    from games.d2 import create_d2_config

    seen = []
    eng = CatalogEngine(create_d2_config(format_overrides={"glow": "Glows {value}"}),
                        stat_sink=lambda stat: seen.append(stat.code))
    eng.initialize()
    seeded = len(seen)
    eng.translate_mod_lines(["Glows 3", "Glows 4", "+3 To Whirlwind"])
    assert seen[seeded:] == ["glow"]


# ── catalog / runeword bases ─────────────────────────────

class TestRunewordBases:

    @pytest.fixture
    def d2_engine(self, catalog_dir):
        from core import CatalogEngine
        from games.d2 import create_d2_config

        eng = CatalogEngine(create_d2_config(catalog_dir=catalog_dir))
        eng.initialize()
        return eng

    def test_compute(self, d2_engine):
        catalog = d2_engine.load_catalog()
        stats = ResolveStats()
        edges = d2_engine.compute_runeword_bases(catalog, stats)
        by_recipe = {}
        for e in edges:
            by_recipe.setdefault(e.recipe_id, []).append(e.base_item_code)

        # Steel: swor/axe, 2 sockets
        assert by_recipe[1] == ["ssd", "crs", "hax"]
        # Stealth: tors, 2 sockets
        assert by_recipe[2] == ["qui", "xtp"]
        # Spirit: swor/shld minus pala, 4 sockets
        assert by_recipe[3] == ["crs"]
        # Mystery names an unknown rune
        assert 4 not in by_recipe
        assert stats.skipped == 0

    def test_recompute_replaces(self, d2_engine):
        catalog = d2_engine.load_catalog()
        first = d2_engine.compute_runeword_bases(catalog)
        second = d2_engine.compute_runeword_bases(catalog)
        assert first == second
        assert d2_engine.edges == second

    def test_missing_catalog_raises(self, tmp_path):
        from core import CatalogEngine
        from games.d2 import create_d2_config

        eng = CatalogEngine(create_d2_config(catalog_dir=tmp_path))
        eng.initialize()
        with pytest.raises(FileNotFoundError):
            eng.load_catalog()
