"""
D2 Catalog - Property Translator
Renders structured affix records (code, param, min/max) as display text.

Every code maps to one display template. Templates use the placeholders
{value}, {min}, {max}, {param} and {skilltab}; a literal "+" right before
{value} is dropped when the value is negative so the sign isn't doubled.
The template and skill-tab tables are built once and never mutated, so a
translator can be shared freely between threads.
"""

import logging
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

from config import CLASS_NAMES, SKILL_TAB_VARIANTS, SKILL_TABS_PER_CLASS
from stat_codes import FIXED_VALUE_CODES

logger = logging.getLogger(__name__)


@dataclass
class Property:
    code: str               # "res-fire"
    param: str = ""         # skill name, tab number, duration...
    min: int = 0
    max: int = 0
    display_text: str = ""  # derived: "Fire Resist +30%"
    has_range: bool = False  # derived: min != max unless a fixed-value code

    def to_dict(self) -> dict:
        """Wire shape: empty param/displayText and false hasRange are omitted."""
        d = {"code": self.code}
        if self.param:
            d["param"] = self.param
        d["min"] = self.min
        d["max"] = self.max
        if self.display_text:
            d["displayText"] = self.display_text
        if self.has_range:
            d["hasRange"] = True
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "Property":
        return cls(
            code=data.get("code", ""),
            param=data.get("param", "") or "",
            min=int(data.get("min", 0) or 0),
            max=int(data.get("max", 0) or 0),
            display_text=data.get("displayText", "") or "",
            has_range=bool(data.get("hasRange", False)),
        )


# ─── Display Templates ───────────────────────────────

PROPERTY_FORMATS: Dict[str, str] = {
    # Skills
    "allskills": "+{value} To All Skills",
    "skill": "+{value} To {param}",
    "skilltab": "+{value} To {skilltab}",
    "aura": "Level {value} {param} Aura When Equipped",
    "oskill": "+{value} To {param}",
    "charged": "Level {min} {param} ({max} Charges)",

    # Class skills
    "ama": "+{value} To Amazon Skill Levels",
    "sor": "+{value} To Sorceress Skill Levels",
    "nec": "+{value} To Necromancer Skill Levels",
    "pal": "+{value} To Paladin Skill Levels",
    "bar": "+{value} To Barbarian Skill Levels",
    "dru": "+{value} To Druid Skill Levels",
    "ass": "+{value} To Assassin Skill Levels",
    "randclassskill": "+{value} To Random Character Class Skills",

    # Attributes
    "str": "+{value} To Strength",
    "dex": "+{value} To Dexterity",
    "vit": "+{value} To Vitality",
    "enr": "+{value} To Energy",
    "all-stats": "+{value} To All Attributes",

    # Life/Mana
    "hp": "+{value} To Life",
    "mana": "+{value} To Mana",
    "hp%": "+{value}% To Life",
    "mana%": "+{value}% To Mana",
    "regen-mana": "Regenerate Mana {value}%",
    "regen": "Replenish Life +{value}",

    # Defense
    "ac": "+{value} Defense",
    "ac%": "+{value}% Enhanced Defense",
    "ac-miss": "+{value} Defense vs. Missile",
    "red-dmg": "Damage Reduced By {value}",
    "red-dmg%": "Damage Reduced By {value}%",
    "red-mag": "Magic Damage Reduced By {value}",

    # Damage
    "dmg%": "+{value}% Enhanced Damage",
    "dmg": "+{value} Damage",
    "dmg-min": "+{value} To Minimum Damage",
    "dmg-max": "+{value} To Maximum Damage",
    "ltng-min": "+{value} To Minimum Lightning Damage",
    "ltng-max": "+{value} To Maximum Lightning Damage",
    "fire-min": "+{value} To Minimum Fire Damage",
    "fire-max": "+{value} To Maximum Fire Damage",
    "cold-min": "+{value} To Minimum Cold Damage",
    "cold-max": "+{value} To Maximum Cold Damage",
    "pois-min": "+{value} To Minimum Poison Damage",
    "pois-max": "+{value} To Maximum Poison Damage",
    "mag-min": "+{value} To Minimum Magic Damage",
    "mag-max": "+{value} To Maximum Magic Damage",
    "dmg-norm": "Adds {min}-{max} Damage",
    "dmg-fire": "Adds {min}-{max} Fire Damage",
    "dmg-cold": "Adds {min}-{max} Cold Damage",
    "dmg-ltng": "Adds {min}-{max} Lightning Damage",
    "dmg-pois": "+{value} Poison Damage Over {param} Seconds",
    "dmg-mag": "Adds {min}-{max} Magic Damage",
    "extra-fire": "+{value}% To Fire Skill Damage",
    "extra-cold": "+{value}% To Cold Skill Damage",
    "extra-ltng": "+{value}% To Lightning Skill Damage",
    "extra-pois": "+{value}% To Poison Skill Damage",

    # Attack rating
    "att": "+{value} To Attack Rating",
    "att%": "+{value}% To Attack Rating",
    "att-demon": "+{value} To Attack Rating Against Demons",
    "att-undead": "+{value} To Attack Rating Against Undead",

    # Speed
    "swing1": "+{value}% Increased Attack Speed",
    "swing2": "+{value}% Increased Attack Speed",
    "swing3": "+{value}% Increased Attack Speed",
    "cast1": "+{value}% Faster Cast Rate",
    "cast2": "+{value}% Faster Cast Rate",
    "cast3": "+{value}% Faster Cast Rate",
    "move1": "+{value}% Faster Run/Walk",
    "move2": "+{value}% Faster Run/Walk",
    "move3": "+{value}% Faster Run/Walk",
    "block": "+{value}% Faster Block Rate",
    "block1": "+{value}% Faster Block Rate",
    "block2": "+{value}% Faster Block Rate",
    "block3": "+{value}% Faster Block Rate",
    "balance1": "+{value}% Faster Hit Recovery",
    "balance2": "+{value}% Faster Hit Recovery",
    "balance3": "+{value}% Faster Hit Recovery",

    # Resistances
    "res-fire": "Fire Resist +{value}%",
    "res-cold": "Cold Resist +{value}%",
    "res-ltng": "Lightning Resist +{value}%",
    "res-pois": "Poison Resist +{value}%",
    "res-all": "All Resistances +{value}",
    "res-mag": "Magic Resist +{value}%",
    "abs-fire": "+{value} Fire Absorb",
    "abs-cold": "+{value} Cold Absorb",
    "abs-ltng": "+{value} Lightning Absorb",
    "abs-fire%": "{value}% Fire Absorb",
    "abs-cold%": "{value}% Cold Absorb",
    "abs-ltng%": "{value}% Lightning Absorb",

    # Pierce
    "pierce-fire": "-{value}% To Enemy Fire Resistance",
    "pierce-cold": "-{value}% To Enemy Cold Resistance",
    "pierce-ltng": "-{value}% To Enemy Lightning Resistance",
    "pierce-pois": "-{value}% To Enemy Poison Resistance",

    # Sunder charms
    "pierce-immunity-cold": "Monster Cold Immunity is Sundered",
    "pierce-immunity-fire": "Monster Fire Immunity is Sundered",
    "pierce-immunity-light": "Monster Lightning Immunity is Sundered",
    "pierce-immunity-poison": "Monster Poison Immunity is Sundered",
    "pierce-immunity-damage": "Monster Physical Immunity is Sundered",
    "pierce-immunity-magic": "Monster Magic Immunity is Sundered",

    # Leech
    "lifesteal": "{value}% Life Stolen Per Hit",
    "manasteal": "{value}% Mana Stolen Per Hit",

    # Kill bonuses
    "hp/kill": "+{value} Life After Each Kill",
    "mana/kill": "+{value} Mana After Each Kill",
    "heal-kill": "+{value} Life After Each Kill",
    "mana-kill": "+{value} Mana After Each Kill",

    # Magic find
    "mag%": "+{value}% Better Chance Of Getting Magic Items",
    "gold%": "+{value}% Extra Gold From Monsters",

    # Other
    "light": "+{value} To Light Radius",
    "thorns": "Attacker Takes Damage Of {value}",
    "nofreeze": "Cannot Be Frozen",
    "half-freeze": "Half Freeze Duration",
    "ignore-ac": "Ignore Target's Defense",
    "knock": "Knockback",
    "slow": "Slows Target By {value}%",
    "howl": "Hit Causes Monster To Flee {value}%",
    "stupidity": "Hit Blinds Target +{value}",
    "crush": "{value}% Chance Of Crushing Blow",
    "deadly": "{value}% Deadly Strike",
    "openwounds": "{value}% Chance Of Open Wounds",
    "dmg-demon": "+{value}% Damage To Demons",
    "dmg-undead": "+{value}% Damage To Undead",
    "indestruct": "Indestructible",
    "ethereal": "Ethereal (Cannot Be Repaired)",
    "sock": "Socketed ({value})",
    "rep-dur": "Repairs 1 Durability In {value} Seconds",
    "rep-quant": "Replenishes Quantity",
    "stack": "+{value} To Maximum Quantity",
    "bloody": "Slain Monsters Rest In Peace",
    "teleport": "+1 To Teleport",
    "exp": "+{value}% To Experience Gained",
    "addxp": "+{value}% To Experience Gained",
    "ease": "Requirements -{value}%",
    "dmg-ac": "{value}% Damage Taken Goes To Mana",
    "noheal": "Prevent Monster Heal",
    "dur": "+{value} To Maximum Durability",
    "stamdrain": "+{value}% Slower Stamina Drain",

    # Per character level
    "hp/lvl": "+{value} To Life (Based On Character Level)",
    "mana/lvl": "+{value} To Mana (Based On Character Level)",
    "str/lvl": "+{value} To Strength (Based On Character Level)",
    "dex/lvl": "+{value} To Dexterity (Based On Character Level)",
    "vit/lvl": "+{value} To Vitality (Based On Character Level)",
    "enr/lvl": "+{value} To Energy (Based On Character Level)",
    "ac/lvl": "+{value} Defense (Based On Character Level)",
    "ac%/lvl": "+{value}% Enhanced Defense (Based On Character Level)",
    "dmg%/lvl": "+{value}% Enhanced Damage (Based On Character Level)",
    "dmg/lvl": "+{value} To Maximum Damage (Based On Character Level)",
    "att/lvl": "+{value} To Attack Rating (Based On Character Level)",
    "att%/lvl": "+{value}% To Attack Rating (Based On Character Level)",

    # Chance to cast (min = chance %, max = skill level, param = skill name)
    "hit-skill": "{min}% Chance To Cast Level {max} {param} On Striking",
    "gethit-skill": "{min}% Chance To Cast Level {max} {param} When Struck",
    "kill-skill": "{min}% Chance To Cast Level {max} {param} On Kill",
    "death-skill": "{min}% Chance To Cast Level {max} {param} On Death",
    "levelup-skill": "{min}% Chance To Cast Level {max} {param} On Level Up",
    "att-skill": "{min}% Chance To Cast Level {max} {param} On Attack",
}

# Skill tab names indexed by tab number, three per class in roster order
SKILL_TAB_NAMES: Dict[int, str] = {
    0: "Bow and Crossbow Skills",
    1: "Passive and Magic Skills",
    2: "Javelin and Spear Skills",
    3: "Fire Skills",
    4: "Lightning Skills",
    5: "Cold Skills",
    6: "Curses",
    7: "Poison and Bone Skills",
    8: "Summoning Skills",
    9: "Combat Skills",
    10: "Offensive Auras",
    11: "Defensive Auras",
    12: "Combat Skills",
    13: "Masteries",
    14: "Warcries",
    15: "Summoning Skills",
    16: "Shape Shifting Skills",
    17: "Elemental Skills",
    18: "Traps",
    19: "Shadow Disciplines",
    20: "Martial Arts",
}

# Short names for filter dropdowns
DISPLAY_NAMES: Dict[str, str] = {
    "allskills": "All Skills",
    "str": "Strength",
    "dex": "Dexterity",
    "vit": "Vitality",
    "enr": "Energy",
    "hp": "Life",
    "mana": "Mana",
    "all-stats": "All Attributes",
    "res-fire": "Fire Resistance",
    "res-cold": "Cold Resistance",
    "res-ltng": "Lightning Resistance",
    "res-pois": "Poison Resistance",
    "res-all": "All Resistances",
    "res-mag": "Magic Resistance",
    "dmg%": "Enhanced Damage",
    "dmg": "Damage",
    "dmg-min": "Minimum Damage",
    "dmg-max": "Maximum Damage",
    "ltng-min": "Minimum Lightning Damage",
    "ltng-max": "Maximum Lightning Damage",
    "fire-min": "Minimum Fire Damage",
    "fire-max": "Maximum Fire Damage",
    "cold-min": "Minimum Cold Damage",
    "cold-max": "Maximum Cold Damage",
    "ac%": "Enhanced Defense",
    "ac": "Defense",
    "red-dmg": "Damage Reduced",
    "red-dmg%": "Damage Reduced %",
    "red-mag": "Magic Damage Reduced",
    "cast1": "Faster Cast Rate",
    "cast2": "Faster Cast Rate",
    "cast3": "Faster Cast Rate",
    "swing1": "Increased Attack Speed",
    "swing2": "Increased Attack Speed",
    "swing3": "Increased Attack Speed",
    "move1": "Faster Run/Walk",
    "move2": "Faster Run/Walk",
    "move3": "Faster Run/Walk",
    "balance1": "Faster Hit Recovery",
    "balance2": "Faster Hit Recovery",
    "balance3": "Faster Hit Recovery",
    "block1": "Faster Block Rate",
    "block2": "Faster Block Rate",
    "block3": "Faster Block Rate",
    "mag%": "Magic Find",
    "gold%": "Extra Gold",
    "lifesteal": "Life Steal",
    "manasteal": "Mana Steal",
    "crush": "Crushing Blow",
    "deadly": "Deadly Strike",
    "openwounds": "Open Wounds",
    "pierce-fire": "Fire Pierce",
    "pierce-cold": "Cold Pierce",
    "pierce-ltng": "Lightning Pierce",
    "pierce-pois": "Poison Pierce",
    "pierce-immunity-cold": "Sundered Cold Immunity",
    "pierce-immunity-fire": "Sundered Fire Immunity",
    "pierce-immunity-light": "Sundered Lightning Immunity",
    "pierce-immunity-poison": "Sundered Poison Immunity",
    "pierce-immunity-damage": "Sundered Physical Immunity",
    "pierce-immunity-magic": "Sundered Magic Immunity",
    "abs-fire": "Fire Absorb",
    "abs-cold": "Cold Absorb",
    "abs-ltng": "Lightning Absorb",
    "abs-fire%": "Fire Absorb %",
    "abs-cold%": "Cold Absorb %",
    "abs-ltng%": "Lightning Absorb %",
}


class SkillTabs:
    """
    Skill tab number <-> name table.

    Name lookup is case-insensitive. Several names repeat across classes
    ("Combat Skills" is tab 9 for Paladin and 12 for Barbarian), so a class
    name can be passed to pick the right one; without it the lowest tab wins.
    """

    def __init__(self, names: Optional[Mapping[int, str]] = None,
                 variants: Optional[Mapping[str, int]] = None,
                 class_names=CLASS_NAMES,
                 tabs_per_class: int = SKILL_TABS_PER_CLASS):
        self._names = MappingProxyType(dict(SKILL_TAB_NAMES if names is None else names))
        self._class_names = tuple(class_names)
        self._tabs_per_class = tabs_per_class

        by_name: Dict[str, List[int]] = {}
        for tab in sorted(self._names):
            by_name.setdefault(self._names[tab].lower(), []).append(tab)
        for name, tab in (SKILL_TAB_VARIANTS if variants is None else variants).items():
            by_name.setdefault(name.lower(), []).append(tab)
        self._by_name = MappingProxyType({k: tuple(v) for k, v in by_name.items()})

    def name(self, tab: int) -> Optional[str]:
        return self._names.get(tab)

    def class_of(self, tab: int) -> Optional[str]:
        idx = tab // self._tabs_per_class
        if 0 <= idx < len(self._class_names):
            return self._class_names[idx]
        return None

    def lookup(self, name: str, class_name: Optional[str] = None) -> Optional[int]:
        """Resolve a tab name to its number, or None if it isn't a tab."""
        tabs = self._by_name.get(name.strip().lower())
        if not tabs:
            return None
        if class_name and len(tabs) > 1:
            for tab in tabs:
                owner = self.class_of(tab)
                if owner and owner.lower() == class_name.lower():
                    return tab
        return tabs[0]

    def __len__(self):
        return len(self._names)


class PropertyTranslator:
    """
    Forward codec: Property -> display text.

    Usage:
        t = PropertyTranslator()
        t.translate(Property("res-fire", min=30, max=30))  # "Fire Resist +30%"
    """

    def __init__(self, formats: Optional[Mapping[str, str]] = None,
                 skill_tabs: Optional[SkillTabs] = None):
        self._formats = MappingProxyType(dict(PROPERTY_FORMATS if formats is None else formats))
        self._skill_tabs = skill_tabs or SkillTabs()

    @property
    def formats(self) -> Mapping[str, str]:
        return self._formats

    @property
    def skill_tabs(self) -> SkillTabs:
        return self._skill_tabs

    def translate(self, prop: Property) -> str:
        """Render a property. Never fails; unknown codes get "<code>: <value>"."""
        template = self._formats.get(prop.code)
        if template is None:
            if prop.min == prop.max:
                return f"{prop.code}: {prop.min}"
            lo, hi = sorted((prop.min, prop.max))
            return f"{prop.code}: {lo}-{hi}"

        result = template

        if prop.min == prop.max:
            value_str = str(prop.min)
            negative = prop.min < 0
        else:
            lo, hi = sorted((prop.min, prop.max))
            if lo < 0 and hi < 0:
                # Both negative: smaller magnitude first, one leading minus
                value_str = f"-({-hi}-{-lo})"
            else:
                value_str = f"{lo}-{hi}"
            negative = lo < 0

        if negative and "+{value}" in result:
            result = result.replace("+{value}", value_str)
        else:
            result = result.replace("{value}", value_str)

        result = result.replace("{min}", str(prop.min))
        result = result.replace("{max}", str(prop.max))

        if "{skilltab}" in result and prop.param:
            result = result.replace("{skilltab}", self._skill_tab_name(prop.param))

        if prop.param:
            result = result.replace("{param}", prop.param)

        return result

    def _skill_tab_name(self, param: str) -> str:
        try:
            tab = int(param.strip())
        except ValueError:
            return param
        return self._skill_tabs.name(tab) or param

    def translate_properties(self, props: Iterable[Property]) -> List[str]:
        """Translate several properties, dropping repeated lines (first one wins)."""
        results = []
        seen = set()
        for prop in props:
            text = self.translate(prop)
            if text not in seen:
                seen.add(text)
                results.append(text)
        return results

    def has_range(self, prop: Property) -> bool:
        # Fixed-value codes use min/max for chance/level/damage band, not a roll
        if prop.code in FIXED_VALUE_CODES:
            return False
        return prop.min != prop.max

    def enrich_property(self, prop: Property) -> Property:
        """Set display_text and has_range in place. Returns the same object."""
        prop.display_text = self.translate(prop)
        prop.has_range = self.has_range(prop)
        return prop

    def enrich_properties(self, props: Iterable[Property]) -> List[Property]:
        """Enriched copies of props; the input objects are left untouched."""
        return [self.enrich_property(replace(p)) for p in props]

    def get_display_name(self, code: str) -> str:
        return DISPLAY_NAMES.get(code, code)
