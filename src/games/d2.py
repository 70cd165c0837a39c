"""
D2 game configuration factory.

Creates a GameConfig populated with the Diablo II catalog constants from
config.py.
"""

from pathlib import Path
from typing import Dict, Optional

from core.game_config import GameConfig


def create_d2_config(
    catalog_dir: Optional[Path] = None,
    format_overrides: Optional[Dict[str, str]] = None,
) -> GameConfig:
    """Create a GameConfig for Diablo II.

    Args:
        catalog_dir: Override catalog directory. Defaults to config.CATALOG_DIR.
        format_overrides: Extra display templates merged over the built-in table.

    Returns:
        Fully populated GameConfig for D2.
    """
    from config import (
        GAME_ID,
        CATALOG_DIR,
        CLASS_NAMES,
        SKILL_TABS_PER_CLASS,
        SKILL_TAB_VARIANTS,
        PER_LEVEL_MULTIPLIER,
        ITEM_TYPES_FILE,
        ARMOR_FILE,
        WEAPONS_FILE,
        MISC_FILE,
        RUNEWORDS_FILE,
        LOG_FILE,
    )

    return GameConfig(
        # Identity
        game_id=GAME_ID,
        catalog_dir=Path(catalog_dir) if catalog_dir else CATALOG_DIR,

        # Classes & skill tabs
        class_names=tuple(CLASS_NAMES),
        skill_tabs_per_class=SKILL_TABS_PER_CLASS,
        skill_tab_variants=dict(SKILL_TAB_VARIANTS),

        # Property codec
        per_level_multiplier=PER_LEVEL_MULTIPLIER,
        format_overrides=dict(format_overrides or {}),

        # Catalog files
        item_types_file=ITEM_TYPES_FILE,
        armor_file=ARMOR_FILE,
        weapons_file=WEAPONS_FILE,
        misc_file=MISC_FILE,
        runewords_file=RUNEWORDS_FILE,

        # Logging
        log_file=Path(LOG_FILE) if LOG_FILE else None,
    )
