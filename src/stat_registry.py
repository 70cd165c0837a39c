"""
D2 Catalog - Stat Registry

In-memory set of known stat codes. Seeded from the filterable stat catalog
and the character classes, then grows as imports discover new codes. New
stats are handed to an optional sink (the persistence layer) before they
are marked known.

Import workers may share one registry; a single lock guards the
check-then-insert on the known-codes map.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from config import (
    CLASS_CODES,
    RAW_CODE,
    UNKNOWN_STAT_CATEGORY,
    UNKNOWN_STAT_SORT_ORDER,
)
from property_translator import Property
from stat_codes import PARAMETRIC_STAT_CODES, STAT_CATEGORIES, filterable_stats

logger = logging.getLogger(__name__)


@dataclass
class Stat:
    code: str
    name: str
    display_text: str
    category: str
    is_variable: bool = True
    is_parametric: bool = False
    aliases: Tuple[str, ...] = field(default_factory=tuple)
    sort_order: int = 0


@dataclass(frozen=True)
class SkillTree:
    code: str   # "fire"
    name: str   # "Fire Skills"


@dataclass(frozen=True)
class CharacterClass:
    name: str                          # "Sorceress"
    code: str = ""                     # "sor"; derived from the name when empty
    skill_trees: Tuple[SkillTree, ...] = ()


class StatRegistry:
    """
    Known stat codes, safe to share across import threads.

    Usage:
        reg = StatRegistry(sink=repo.upsert_stat)
        reg.seed_from_filterable_stats()
        reg.ensure_stat(prop)
    """

    def __init__(self, sink: Optional[Callable[[Stat], None]] = None):
        self._sink = sink
        self._known: Dict[str, Stat] = {}
        self._lock = threading.Lock()

    def load(self, codes: Iterable[str]):
        """Replace the known set with codes already persisted elsewhere."""
        with self._lock:
            self._known = {
                code: Stat(code=code, name=code, display_text=code, category=UNKNOWN_STAT_CATEGORY)
                for code in codes
            }
        logger.info(f"StatRegistry: loaded {len(self._known)} known codes")

    def seed_from_filterable_stats(self) -> int:
        """Register the filterable stat catalog. Returns the number of stats seeded."""
        category_order = {cat: i * 100 for i, cat in enumerate(STAT_CATEGORIES)}

        seeded = 0
        position: Dict[str, int] = {}
        with self._lock:
            for info in filterable_stats():
                i = position.get(info.category, 0)
                position[info.category] = i + 1
                stat = Stat(
                    code=info.code,
                    name=info.name,
                    display_text=info.description,
                    category=info.category,
                    is_variable=info.is_variable,
                    aliases=info.aliases,
                    sort_order=category_order.get(info.category, len(STAT_CATEGORIES) * 100) + i,
                )
                self._persist(stat)
                self._known[info.code] = stat
                for alias in info.aliases:
                    self._known.setdefault(alias, stat)
                seeded += 1

        logger.info(f"StatRegistry: seeded {seeded} filterable stats")
        return seeded

    def seed_from_classes(self, classes: Iterable[CharacterClass]) -> int:
        """Register class-skill and skill-tree codes. Returns the number of new stats."""
        seeded = 0
        order = 100  # after the Skills category

        with self._lock:
            for c in classes:
                class_code = c.code or CLASS_CODES.get(c.name, c.name[:3].lower())
                if class_code not in self._known:
                    stat = Stat(
                        code=class_code,
                        name=f"{c.name} Skills",
                        display_text=f"+{{value}} To {c.name} Skill Levels",
                        category="Skills",
                        sort_order=order,
                    )
                    self._persist(stat)
                    self._known[class_code] = stat
                    seeded += 1
                    order += 1

                for tree in c.skill_trees:
                    tree_code = f"{class_code}-{tree.code}"
                    if tree_code in self._known:
                        continue
                    stat = Stat(
                        code=tree_code,
                        name=tree.name,
                        display_text=f"+{{value}} To {tree.name} ({c.name} Only)",
                        category="Skill Trees",
                        sort_order=order,
                    )
                    self._persist(stat)
                    self._known[tree_code] = stat
                    seeded += 1
                    order += 1

        logger.info(f"StatRegistry: seeded {seeded} class stats")
        return seeded

    def ensure_stat(self, prop: Property) -> bool:
        """
        Register prop.code if it's new. Returns True if a stat was added.

        Empty, raw and parametric codes are never registered. Sink errors
        propagate and leave the code unknown.
        """
        if not prop.code or prop.code == RAW_CODE:
            return False
        if prop.code in PARAMETRIC_STAT_CODES:
            return False

        with self._lock:
            if prop.code in self._known:
                return False

            stat = Stat(
                code=prop.code,
                name=prop.code,
                display_text=prop.display_text or prop.code,
                category=UNKNOWN_STAT_CATEGORY,
                sort_order=UNKNOWN_STAT_SORT_ORDER,
            )
            self._persist(stat)
            self._known[prop.code] = stat

        logger.info(f"StatRegistry: discovered new stat code {prop.code!r}")
        return True

    def is_known(self, code: str) -> bool:
        with self._lock:
            return code in self._known

    def count(self) -> int:
        with self._lock:
            return len(self._known)

    def stats(self) -> List[Stat]:
        """Distinct registered stats (aliases collapsed), by sort order."""
        with self._lock:
            unique = {id(s): s for s in self._known.values()}
        return sorted(unique.values(), key=lambda s: (s.sort_order, s.code))

    def _persist(self, stat: Stat):
        if self._sink is not None:
            self._sink(stat)
