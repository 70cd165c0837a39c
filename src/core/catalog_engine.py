"""
CatalogEngine — game-agnostic facade for the catalog pipeline.

Single entry point wrapping PropertyTranslator, ReverseTranslator,
StatRegistry, CatalogLoader and the runeword base resolver. Consumers pass
a GameConfig to configure all modules without them importing from
config.py directly.

Usage:
    from core import CatalogEngine
    from games.d2 import create_d2_config

    engine = CatalogEngine(create_d2_config())
    engine.initialize()
    props = engine.translate_mod_lines(["+2 To All Skills", "Fire Resist +30%"])
    lines = engine.render(props)
"""

import logging
from typing import Callable, Iterable, List, Optional

from core.game_config import GameConfig

logger = logging.getLogger(__name__)


class CatalogEngine:
    """Game-agnostic catalog engine facade.

    Builds each module from GameConfig values. Until initialize() succeeds
    every method returns an empty result.
    """

    def __init__(self, config: GameConfig, stat_sink: Optional[Callable] = None):
        self.config = config
        self._stat_sink = stat_sink
        self._translator = None
        self._reverse = None
        self._registry = None
        self._edges: list = []
        self._ready = False

    @property
    def ready(self) -> bool:
        return self._ready

    @property
    def translator(self):
        return self._translator

    @property
    def registry(self):
        return self._registry

    @property
    def edges(self) -> list:
        """Edges from the latest compute_runeword_bases() call."""
        return list(self._edges)

    def initialize(self) -> bool:
        """Build the codecs and seed the stat registry. Returns True when ready.

        Malformed display templates raise TemplateError instead of leaving
        a half-built engine.
        """
        self._init_translators()
        self._init_registry()

        self._ready = self._translator is not None and self._reverse is not None
        logger.info(f"CatalogEngine initialized (ready={self._ready}, "
                    f"game={self.config.game_id})")
        return self._ready

    # ── Public API ──────────────────────────────────────────

    def translate_mod_lines(self, lines: Iterable[str]) -> list:
        """Turn display lines into canonical properties.

        Reverse-translates each line, enriches the recognized ones, folds
        identical primary attributes into all-stats and registers any new
        stat codes.

        Returns:
            List of Property objects (empty before initialize()).
        """
        if not self._ready:
            return []

        from attribute_combiner import combine_all_attributes
        from config import RAW_CODE

        props = self._reverse.reverse_translate_lines(lines)
        for prop in props:
            if prop.code != RAW_CODE:
                self._translator.enrich_property(prop)
        props = combine_all_attributes(props, self._translator)

        for prop in props:
            self._registry.ensure_stat(prop)
        return props

    def render(self, props: Iterable) -> List[str]:
        """Display lines for props, repeated lines dropped."""
        if not self._ready:
            return []
        return self._translator.translate_properties(props)

    def load_catalog(self):
        """Read the TSV catalog from config.catalog_dir.

        Returns:
            CatalogData or None before initialize().

        Raises:
            FileNotFoundError: a required catalog file is missing.
        """
        if not self._ready:
            return None

        from catalog_loader import CatalogLoader

        loader = CatalogLoader(
            self.config.catalog_dir,
            translator=self._translator,
            item_types_file=self.config.item_types_file,
            armor_file=self.config.armor_file,
            weapons_file=self.config.weapons_file,
            misc_file=self.config.misc_file,
            runewords_file=self.config.runewords_file,
        )
        catalog = loader.load()
        for rw in catalog.runewords:
            for prop in rw.properties:
                self._registry.ensure_stat(prop)
        return catalog

    def compute_runeword_bases(self, catalog, stats=None) -> list:
        """Recompute every runeword/base pairing from scratch.

        Replaces the previous edge list; nothing is carried over between
        calls.

        Args:
            catalog: CatalogData from load_catalog().
            stats: Optional ResolveStats to fill in.

        Returns:
            List of CompatibilityEdge.
        """
        if not self._ready or catalog is None:
            return []

        from type_hierarchy import (
            build_ancestor_closure,
            compute_compatibility,
            requirements_from_runewords,
        )

        self._edges = []
        closure = build_ancestor_closure(catalog.item_types)
        known_runes = catalog.rune_codes or None
        recipes = requirements_from_runewords(catalog.runewords, known_runes)
        self._edges = compute_compatibility(recipes, catalog.base_items, closure, stats)
        return list(self._edges)

    # ── Module Initialization ───────────────────────────────

    def _init_translators(self):
        from property_translator import PROPERTY_FORMATS, PropertyTranslator, SkillTabs
        from reverse_translator import ReverseTranslator

        formats = dict(PROPERTY_FORMATS)
        formats.update(self.config.format_overrides)

        skill_tabs = SkillTabs(
            variants=self.config.skill_tab_variants,
            class_names=self.config.class_names,
            tabs_per_class=self.config.skill_tabs_per_class,
        )
        self._translator = PropertyTranslator(formats=formats, skill_tabs=skill_tabs)
        self._reverse = ReverseTranslator(
            self._translator,
            class_names=self.config.class_names,
            per_level_multiplier=self.config.per_level_multiplier,
        )

    def _init_registry(self):
        from stat_registry import CharacterClass, StatRegistry

        self._registry = StatRegistry(sink=self._stat_sink)
        self._registry.seed_from_filterable_stats()
        self._registry.seed_from_classes(CharacterClass(name=n) for n in self.config.class_names)
