"""Tests for GameConfig and the D2 game config factory."""

from pathlib import Path

import pytest


class TestGameConfig:
    """Test the GameConfig dataclass itself."""

    def test_create_minimal(self):
        from core.game_config import GameConfig
        cfg = GameConfig(game_id="test", catalog_dir=Path("/tmp/test-catalog"))
        assert cfg.game_id == "test"
        assert cfg.catalog_dir == Path("/tmp/test-catalog")

    def test_defaults(self):
        from core.game_config import GameConfig
        cfg = GameConfig(game_id="test", catalog_dir=Path("/tmp"))
        assert cfg.class_names == ()
        assert cfg.skill_tabs_per_class == 3
        assert cfg.per_level_multiplier == 8
        assert cfg.skill_tab_variants == {}
        assert cfg.format_overrides == {}
        assert cfg.runewords_file == "runes.txt"
        assert cfg.log_file is None

    def test_catalog_path(self):
        from core.game_config import GameConfig
        cfg = GameConfig(game_id="test", catalog_dir=Path("/data/d2"))
        assert cfg.catalog_path(cfg.armor_file) == Path("/data/d2/armor.txt")


class TestD2Config:
    """Test the D2 config factory."""

    def test_create_default(self):
        from games.d2 import create_d2_config
        import config

        cfg = create_d2_config()
        assert cfg.game_id == "d2"
        assert cfg.catalog_dir == config.CATALOG_DIR
        assert cfg.per_level_multiplier == 8

    def test_classes(self):
        from games.d2 import create_d2_config
        cfg = create_d2_config()
        assert cfg.class_names[0] == "Amazon"
        assert "Warlock" in cfg.class_names
        assert cfg.skill_tab_variants["psychic skill tab"] == 21

    def test_catalog_dir_override(self, tmp_path):
        from games.d2 import create_d2_config
        cfg = create_d2_config(catalog_dir=tmp_path)
        assert cfg.catalog_dir == tmp_path

    def test_format_overrides_copied(self):
        from games.d2 import create_d2_config
        overrides = {"foo": "Foo {value}"}
        cfg = create_d2_config(format_overrides=overrides)
        overrides["bar"] = "Bar"
        assert cfg.format_overrides == {"foo": "Foo {value}"}

    def test_variants_not_shared(self):
        from games.d2 import create_d2_config
        import config

        cfg = create_d2_config()
        cfg.skill_tab_variants["extra"] = 99
        assert "extra" not in config.SKILL_TAB_VARIANTS
