"""Shared fixtures for the D2 Catalog test suite."""

import sys
import logging
from pathlib import Path

import pytest

# Ensure src/ is importable
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from property_translator import Property, PropertyTranslator
from reverse_translator import ReverseTranslator

logger = logging.getLogger(__name__)


# ── Session-scoped codec fixtures ────────────────────────

@pytest.fixture(scope="session")
def translator():
    """One PropertyTranslator per session (tables are read-only)."""
    return PropertyTranslator()


@pytest.fixture(scope="session")
def reverse_translator(translator):
    """Compile the reverse patterns once per session."""
    return ReverseTranslator(translator)


# ── Helper factories ─────────────────────────────────────

def make_prop(code, value=None, lo=0, hi=0, param=""):
    """Shorthand: make_prop("str", 10) or make_prop("dmg%", lo=15, hi=40)."""
    if value is not None:
        lo = hi = value
    return Property(code=code, param=param, min=lo, max=hi)


# ── TSV catalog writer ───────────────────────────────────

ITEM_TYPES_ROWS = [
    ["Code", "Equiv1", "Equiv2"],
    ["weap", "", ""],
    ["mele", "weap", ""],
    ["swor", "mele", ""],
    ["axe", "mele", ""],
    ["armo", "", ""],
    ["tors", "armo", ""],
    ["shld", "armo", ""],
    ["pala", "shld", ""],
    ["rune", "", ""],
]

ARMOR_ROWS = [
    ["name", "code", "type", "type2", "gemsockets"],
    ["Quilted Armor", "qui", "tors", "", "2"],
    ["Mage Plate", "xtp", "tors", "", "3"],
    ["Targe", "pa1", "pala", "", "4"],
    ["Expansion", "", "", "", ""],
]

WEAPONS_ROWS = [
    ["name", "code", "type", "type2", "gemsockets"],
    ["Short Sword", "ssd", "swor", "", "2"],
    ["Crystal Sword", "crs", "swor", "", "6"],
    ["Hand Axe", "hax", "axe", "", "2"],
]

MISC_ROWS = [
    ["name", "code", "type", "type2", "gemsockets"],
    ["El Rune", "r01", "rune", "", "0"],
    ["Tir Rune", "r03", "rune", "", "0"],
    ["Ral Rune", "r08", "rune", "", "0"],
    ["Jah Rune", "r31", "rune", "", "0"],
]

RUNEWORD_HEADERS = (
    ["Name", "*Rune Name", "complete"]
    + [f"itype{j}" for j in range(1, 7)]
    + [f"etype{j}" for j in range(1, 4)]
    + [f"Rune{j}" for j in range(1, 7)]
    + [f"T1{c}{j}" for j in range(1, 8) for c in ("Code", "Param", "Min", "Max")]
)


def runeword_row(name, display, complete="1", itypes=(), etypes=(), runes=(), props=()):
    """One runes.txt row; props are (code, param, min, max) tuples."""
    row = dict.fromkeys(RUNEWORD_HEADERS, "")
    row.update({"Name": name, "*Rune Name": display, "complete": complete})
    for j, t in enumerate(itypes, 1):
        row[f"itype{j}"] = t
    for j, t in enumerate(etypes, 1):
        row[f"etype{j}"] = t
    for j, r in enumerate(runes, 1):
        row[f"Rune{j}"] = r
    for j, (code, param, lo, hi) in enumerate(props, 1):
        row[f"T1Code{j}"] = code
        row[f"T1Param{j}"] = param
        row[f"T1Min{j}"] = str(lo)
        row[f"T1Max{j}"] = str(hi)
    return [row[h] for h in RUNEWORD_HEADERS]


RUNEWORD_ROWS = [
    RUNEWORD_HEADERS,
    runeword_row("Runeword1", "Steel", itypes=("swor", "axe"), runes=("r01", "r03"),
                 props=(("dmg%", "", 20, 20), ("swing2", "", 25, 25))),
    runeword_row("Runeword2", "Stealth", itypes=("tors",), runes=("r01", "r03"),
                 props=(("str", "", 6, 6), ("dex", "", 6, 6), ("vit", "", 6, 6), ("enr", "", 6, 6))),
    runeword_row("Runeword3", "Spirit", itypes=("swor", "shld"), etypes=("pala",),
                 runes=("r01", "r03", "r08", "r31"),
                 props=(("cast1", "", 25, 35), ("skilltab", "9", 2, 2))),
    runeword_row("Runeword4", "Unfinished", complete="0", itypes=("swor",), runes=("r01",)),
    runeword_row("Runeword5", "Mystery", itypes=("swor",), runes=("r01", "r99")),
]


def write_tsv(path, rows):
    path.write_text("\n".join("\t".join(r) for r in rows) + "\n", encoding="utf-8")


@pytest.fixture
def catalog_dir(tmp_path):
    """A small but complete TSV catalog in a temp directory."""
    write_tsv(tmp_path / "itemtypes.txt", ITEM_TYPES_ROWS)
    write_tsv(tmp_path / "armor.txt", ARMOR_ROWS)
    write_tsv(tmp_path / "weapons.txt", WEAPONS_ROWS)
    write_tsv(tmp_path / "misc.txt", MISC_ROWS)
    write_tsv(tmp_path / "runes.txt", RUNEWORD_ROWS)
    return tmp_path
