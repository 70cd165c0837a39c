"""
D2 Catalog Core — game-agnostic catalog engine.

Usage:
    from core import CatalogEngine, GameConfig
    from games.d2 import create_d2_config

    engine = CatalogEngine(create_d2_config())
    engine.initialize()
    props = engine.translate_mod_lines(lines)
"""

from core.game_config import GameConfig
from core.catalog_engine import CatalogEngine

# Key types live in the flat modules:
#   from property_translator import Property
#   from reverse_translator import TemplateError
#   from type_hierarchy import CompatibilityEdge

__all__ = [
    "CatalogEngine",
    "GameConfig",
]
