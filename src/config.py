"""
D2 Catalog - Configuration
All tunable constants in one place.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
load_dotenv()

# ─────────────────────────────────────────────
# Version
# ─────────────────────────────────────────────
APP_VERSION = "0.4.0"

# ─────────────────────────────────────────────
# Game
# ─────────────────────────────────────────────
GAME_ID = "d2"

# Character classes, in skill-tab order (three tabs per class).
# Warlock has no numbered tabs in the raw data but shows up in scraped
# "(Warlock Only)" suffixes.
CLASS_NAMES = (
    "Amazon",
    "Sorceress",
    "Necromancer",
    "Paladin",
    "Barbarian",
    "Druid",
    "Assassin",
    "Warlock",
)

# Short codes used by the class-skill stats ("+{value} To Amazon Skill Levels")
CLASS_CODES = {
    "Amazon": "ama",
    "Sorceress": "sor",
    "Necromancer": "nec",
    "Paladin": "pal",
    "Barbarian": "bar",
    "Druid": "dru",
    "Assassin": "ass",
    "Warlock": "war",
}

SKILL_TABS_PER_CLASS = 3

# Skill tab names that appear on scraped pages but not in the tab table
SKILL_TAB_VARIANTS = {
    "psychic skill tab": 21,
}

# ─────────────────────────────────────────────
# Property Codec
# ─────────────────────────────────────────────
# Code given to scraped lines that match no template
RAW_CODE = "raw"

# Synthetic code replacing str/dex/vit/enr when all four roll the same
ALL_STATS_CODE = "all-stats"

# Per-level stats store value * 8 internally; "(1.5 Per Character Level)" -> 12
PER_LEVEL_MULTIPLIER = 8

# Sort order given to stat codes discovered during import
UNKNOWN_STAT_SORT_ORDER = 9999
UNKNOWN_STAT_CATEGORY = "Other"

# ─────────────────────────────────────────────
# Catalog Files (tab-separated game data)
# ─────────────────────────────────────────────
CATALOG_DIR = Path(os.environ.get("D2_CATALOG_DIR", "catalogs/d2"))

ITEM_TYPES_FILE = "itemtypes.txt"
ARMOR_FILE = "armor.txt"
WEAPONS_FILE = "weapons.txt"
MISC_FILE = "misc.txt"
RUNEWORDS_FILE = "runes.txt"

# Item type code of socketable runes in misc.txt
RUNE_ITEM_TYPE = "rune"

# Column counts in runes.txt
RUNEWORD_MAX_VALID_TYPES = 6
RUNEWORD_MAX_EXCLUDED_TYPES = 3
RUNEWORD_MAX_RUNES = 6
RUNEWORD_MAX_PROPERTIES = 7

# ─────────────────────────────────────────────
# Logging
# ─────────────────────────────────────────────
LOG_LEVEL = os.environ.get("D2_LOG_LEVEL", "INFO")
LOG_FILE = os.environ.get("D2_LOG_FILE", "")
