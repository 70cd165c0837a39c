"""
D2 Catalog - Catalog Loader

Builds the in-memory inputs of the runeword base resolver from the game's
TSV data files:
    itemtypes.txt            -> TypeNode (Code, Equiv1, Equiv2)
    armor/weapons/misc.txt   -> BaseItemCandidate (+ rune codes from misc)
    runes.txt                -> Runeword (types, runes, properties)
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Set, Tuple, Union

from config import (
    ARMOR_FILE,
    ITEM_TYPES_FILE,
    MISC_FILE,
    RUNE_ITEM_TYPE,
    RUNEWORD_MAX_EXCLUDED_TYPES,
    RUNEWORD_MAX_PROPERTIES,
    RUNEWORD_MAX_RUNES,
    RUNEWORD_MAX_VALID_TYPES,
    RUNEWORDS_FILE,
    WEAPONS_FILE,
)
from attribute_combiner import combine_all_attributes
from property_translator import Property, PropertyTranslator
from tsv_reader import Row, read_tsv
from type_hierarchy import BaseItemCandidate, TypeNode

logger = logging.getLogger(__name__)


@dataclass
class Runeword:
    id: int
    name: str                       # "Runeword22"
    display_name: str               # "Enigma"
    runes: Tuple[str, ...]          # ("r31", "r06", "r30")
    valid_types: Tuple[str, ...]
    excluded_types: Tuple[str, ...] = ()
    properties: List[Property] = field(default_factory=list)


@dataclass
class CatalogData:
    item_types: List[TypeNode] = field(default_factory=list)
    base_items: List[BaseItemCandidate] = field(default_factory=list)
    rune_codes: Set[str] = field(default_factory=set)
    runewords: List[Runeword] = field(default_factory=list)


def _columns(row: Row, template: str, count: int) -> Tuple[str, ...]:
    values = (row.get_str(template % j) for j in range(1, count + 1))
    return tuple(v for v in values if v)


class CatalogLoader:
    """
    Loads catalog TSV files from one directory.

    Usage:
        loader = CatalogLoader(Path("catalogs/d2"))
        data = loader.load()
    """

    def __init__(self, catalog_dir: Union[str, Path],
                 translator: Optional[PropertyTranslator] = None,
                 item_types_file: str = ITEM_TYPES_FILE,
                 armor_file: str = ARMOR_FILE,
                 weapons_file: str = WEAPONS_FILE,
                 misc_file: str = MISC_FILE,
                 runewords_file: str = RUNEWORDS_FILE):
        self.catalog_dir = Path(catalog_dir)
        self._translator = translator or PropertyTranslator()
        self.item_types_file = item_types_file
        self.armor_file = armor_file
        self.weapons_file = weapons_file
        self.misc_file = misc_file
        self.runewords_file = runewords_file

    def load(self) -> CatalogData:
        data = CatalogData()
        data.item_types = self.load_item_types()
        data.base_items = self.load_base_items()
        data.rune_codes = self.load_rune_codes()
        data.runewords = self.load_runewords()
        logger.info(f"Catalog: {len(data.item_types)} item types, {len(data.base_items)} bases, "
                    f"{len(data.rune_codes)} runes, {len(data.runewords)} runewords "
                    f"from {self.catalog_dir}")
        return data

    # ─── Item Types ───────────────────────────────

    def load_item_types(self) -> List[TypeNode]:
        nodes = []
        for r in read_tsv(self.catalog_dir / self.item_types_file):
            code = r.get_str("Code")
            if not code or code == "none":
                continue
            nodes.append(TypeNode.from_row(code, r.get_str("Equiv1"), r.get_str("Equiv2")))
        return nodes

    # ─── Base Items ───────────────────────────────

    def load_base_items(self) -> List[BaseItemCandidate]:
        """Armor, weapons and misc bases with sequential ids in load order."""
        bases: List[BaseItemCandidate] = []
        for filename, category, required in (
            (self.armor_file, "armor", True),
            (self.weapons_file, "weapon", True),
            (self.misc_file, "misc", False),
        ):
            rows = self._read(filename, required)
            skipped = 0
            for r in rows:
                code = r.get_str("code")
                name = r.get_str("name")
                if not code or not name or name.startswith("Expansion"):
                    skipped += 1
                    continue
                bases.append(BaseItemCandidate(
                    id=len(bases) + 1,
                    code=code,
                    name=name,
                    category=category,
                    primary_type=r.get_str("type"),
                    secondary_type=r.get_str("type2"),
                    max_sockets=r.get_int("gemsockets", 0),
                ))
            logger.debug(f"{filename}: {len(rows) - skipped} bases, {skipped} skipped")
        return bases

    def load_rune_codes(self) -> Set[str]:
        return {
            r.get_str("code")
            for r in self._read(self.misc_file, required=False)
            if r.get_str("type") == RUNE_ITEM_TYPE and r.get_str("code")
        }

    # ─── Runewords ────────────────────────────────

    def load_runewords(self) -> List[Runeword]:
        """Complete runewords from runes.txt, properties enriched and canonicalized."""
        runewords = []
        for r in read_tsv(self.catalog_dir / self.runewords_file):
            name = r.get_str("Name")
            if not name or not r.get_bool("complete"):
                continue

            props = []
            for j in range(1, RUNEWORD_MAX_PROPERTIES + 1):
                code = r.get_str(f"T1Code{j}")
                if not code:
                    continue
                props.append(self._translator.enrich_property(Property(
                    code=code,
                    param=r.get_str(f"T1Param{j}"),
                    min=r.get_int(f"T1Min{j}", 0),
                    max=r.get_int(f"T1Max{j}", 0),
                )))

            runewords.append(Runeword(
                id=len(runewords) + 1,
                name=name,
                display_name=r.get_str("*Rune Name", name),
                runes=_columns(r, "Rune%d", RUNEWORD_MAX_RUNES),
                valid_types=_columns(r, "itype%d", RUNEWORD_MAX_VALID_TYPES),
                excluded_types=_columns(r, "etype%d", RUNEWORD_MAX_EXCLUDED_TYPES),
                properties=combine_all_attributes(props, self._translator),
            ))
        return runewords

    def _read(self, filename: str, required: bool = True) -> List[Row]:
        path = self.catalog_dir / filename
        if not required and not path.exists():
            logger.warning(f"Catalog file {path} not found, skipping")
            return []
        return read_tsv(path)
