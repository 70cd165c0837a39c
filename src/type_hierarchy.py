"""
D2 Catalog - Item Type Hierarchy & Runeword Base Resolver

Item types form an equivalence graph: each type names up to two parents
("swor" -> "mele" -> "weap"). A runeword lists the type codes it accepts
and excludes; a base item qualifies when one of its type codes, or any
ancestor of them, is accepted, none is excluded, and it has enough sockets.

The result is a full compatibility table, recomputed from scratch on every
data load.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

logger = logging.getLogger(__name__)


# ─── Data Structures ─────────────────────────────────

@dataclass(frozen=True)
class TypeNode:
    code: str                       # "swor"
    parents: Tuple[str, ...] = ()   # direct equivalence parents, at most two

    @classmethod
    def from_row(cls, code: str, equiv1: str = "", equiv2: str = "") -> "TypeNode":
        return cls(code=code, parents=tuple(p for p in (equiv1, equiv2) if p))


@dataclass(frozen=True)
class RunewordRequirement:
    recipe_id: int
    name: str
    valid_types: Tuple[str, ...]
    excluded_types: Tuple[str, ...] = ()
    required_sockets: int = 0


@dataclass(frozen=True)
class BaseItemCandidate:
    id: int
    code: str
    name: str
    category: str                # "armor", "weapon", "misc"
    primary_type: str
    secondary_type: str = ""
    max_sockets: int = 0

    @property
    def type_codes(self) -> Tuple[str, ...]:
        return tuple(t for t in (self.primary_type, self.secondary_type) if t)


@dataclass(frozen=True)
class CompatibilityEdge:
    recipe_id: int
    base_item_id: int
    required_sockets: int
    base_item_code: str = ""
    base_item_name: str = ""
    category: str = ""
    max_sockets: int = 0

    def to_row(self) -> dict:
        return {
            "recipeId": self.recipe_id,
            "baseItemId": self.base_item_id,
            "baseItemCode": self.base_item_code,
            "baseItemName": self.base_item_name,
            "category": self.category,
            "maxSockets": self.max_sockets,
            "requiredSockets": self.required_sockets,
        }


@dataclass
class ResolveStats:
    recipes: int = 0
    skipped: int = 0
    edges: int = 0
    skipped_names: List[str] = field(default_factory=list)


# ─── Ancestor Closure ────────────────────────────────

def _ancestors(code: str, direct_parents: Mapping[str, Sequence[str]]) -> List[str]:
    """code followed by every transitive parent, depth-first, each once."""
    visited: Set[str] = set()
    result: List[str] = []
    stack = [code]
    while stack:
        current = stack.pop()
        if current in visited:
            continue
        visited.add(current)
        result.append(current)
        # Reversed so the first parent is explored first
        for parent in reversed(direct_parents.get(current, ())):
            if parent not in visited:
                stack.append(parent)
    return result


def build_ancestor_closure(nodes: Iterable[TypeNode]) -> Dict[str, List[str]]:
    """
    Map each type code to itself plus all of its ancestors.

    Parents that have no node of their own still appear as ancestors.
    Cycles in the equivalence graph are tolerated; every code is visited
    at most once per expansion.
    """
    direct_parents: Dict[str, Tuple[str, ...]] = {}
    for node in nodes:
        direct_parents[node.code] = node.parents

    closure = {code: _ancestors(code, direct_parents) for code in direct_parents}
    logger.debug(f"Built ancestor closure for {len(closure)} item types")
    return closure


# ─── Compatibility ───────────────────────────────────

def requirements_from_runewords(runewords: Iterable, known_runes: Optional[Set[str]] = None
                                ) -> List[RunewordRequirement]:
    """
    Turn catalog runewords into requirements (one socket per rune).

    Runewords naming a rune code missing from known_runes are logged and
    skipped. When known_runes is None, rune codes aren't checked.
    """
    requirements = []
    for rw in runewords:
        if known_runes is not None:
            missing = [r for r in rw.runes if r not in known_runes]
            if missing:
                logger.warning(f"Skipping runeword {rw.name!r}: unresolved runes {missing}")
                continue
        requirements.append(RunewordRequirement(
            recipe_id=rw.id,
            name=rw.name,
            valid_types=tuple(rw.valid_types),
            excluded_types=tuple(rw.excluded_types),
            required_sockets=len(rw.runes),
        ))
    return requirements


def is_compatible(recipe: RunewordRequirement, base: BaseItemCandidate,
                  closure: Mapping[str, Sequence[str]]) -> bool:
    """
    True if the base has enough sockets, one of its type codes has an
    accepted ancestor, and neither type code has an excluded one.
    Type codes outside the closure match nothing.
    """
    if base.max_sockets < recipe.required_sockets:
        return False
    lineages = [set(closure[code]) for code in base.type_codes if code in closure]
    valid_hit = any(not a.isdisjoint(recipe.valid_types) for a in lineages)
    excluded_hit = any(not a.isdisjoint(recipe.excluded_types) for a in lineages)
    return valid_hit and not excluded_hit


def compute_compatibility(recipes: Iterable[RunewordRequirement],
                          base_items: Sequence[BaseItemCandidate],
                          closure: Mapping[str, Sequence[str]],
                          stats: Optional[ResolveStats] = None) -> List[CompatibilityEdge]:
    """
    Every (runeword, base item) pair where the base can hold the runeword.

    Recipes needing zero sockets or listing no valid types are logged and
    skipped; the rest of the computation carries on.
    """
    stats = stats if stats is not None else ResolveStats()
    edges: List[CompatibilityEdge] = []

    for recipe in recipes:
        stats.recipes += 1
        if recipe.required_sockets <= 0 or not recipe.valid_types:
            logger.warning(f"Skipping runeword {recipe.name!r}: "
                           f"sockets={recipe.required_sockets}, valid types={list(recipe.valid_types)}")
            stats.skipped += 1
            stats.skipped_names.append(recipe.name)
            continue

        unknown = [t for t in recipe.valid_types if t not in closure]
        if unknown and closure:
            logger.warning(f"Runeword {recipe.name!r} names types outside the hierarchy: {unknown}")

        matched = 0
        for base in base_items:
            if not is_compatible(recipe, base, closure):
                continue
            edges.append(CompatibilityEdge(
                recipe_id=recipe.recipe_id,
                base_item_id=base.id,
                required_sockets=recipe.required_sockets,
                base_item_code=base.code,
                base_item_name=base.name,
                category=base.category,
                max_sockets=base.max_sockets,
            ))
            matched += 1

        if not matched:
            logger.debug(f"Runeword {recipe.name!r} has no compatible bases")

    stats.edges = len(edges)
    logger.info(f"Computed {len(edges)} runeword bases for {stats.recipes - stats.skipped} "
                f"runewords ({stats.skipped} skipped)")
    return edges
