"""
GameConfig — catalog configuration dataclass.

Every game-specific value that core modules need is a field here.
Consumers create a GameConfig (via a game factory like create_d2_config)
and pass it to CatalogEngine, which hands values to the codec, loader
and resolver.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple


@dataclass
class GameConfig:
    """Complete configuration for a game's catalog engine."""

    # ── Identity ────────────────────────────────────────────
    game_id: str                          # e.g. "d2"
    catalog_dir: Path                     # directory holding the TSV data files

    # ── Classes & Skill Tabs ────────────────────────────────
    class_names: Tuple[str, ...] = ()     # in skill-tab order
    skill_tabs_per_class: int = 3
    skill_tab_variants: Dict[str, int] = field(default_factory=dict)

    # ── Property Codec ──────────────────────────────────────
    per_level_multiplier: int = 8
    # Extra or replacement display templates, merged over the built-in table
    format_overrides: Dict[str, str] = field(default_factory=dict)

    # ── Catalog Files ───────────────────────────────────────
    item_types_file: str = "itemtypes.txt"
    armor_file: str = "armor.txt"
    weapons_file: str = "weapons.txt"
    misc_file: str = "misc.txt"
    runewords_file: str = "runes.txt"

    # ── Logging ─────────────────────────────────────────────
    log_file: Optional[Path] = None

    def catalog_path(self, filename: str) -> Path:
        return self.catalog_dir / filename
