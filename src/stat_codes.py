"""
D2 Catalog - Stat Code Sets

Finite, hand-maintained sets of property codes that get special treatment
in the codec, plus the filterable stat catalog used to seed the registry.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

# Codes whose min/max are not an item roll range:
#   skill procs (min = chance %, max = skill level),
#   charged skills (min = skill level, max = charges),
#   flat damage adds (min-max is the per-hit damage band),
#   sunder effects (fixed text, no value at all).
FIXED_VALUE_CODES = frozenset({
    "hit-skill",
    "gethit-skill",
    "kill-skill",
    "death-skill",
    "levelup-skill",
    "att-skill",
    "charged",
    "dmg-norm",
    "dmg-fire",
    "dmg-cold",
    "dmg-ltng",
    "dmg-mag",
    "dmg-pois",
    "pierce-immunity-cold",
    "pierce-immunity-fire",
    "pierce-immunity-light",
    "pierce-immunity-poison",
    "pierce-immunity-damage",
    "pierce-immunity-magic",
})

# Codes rendered as "... (Based On Character Level)". The stat text each one
# matches is taken from its display template.
PER_LEVEL_CODES = frozenset({
    "hp/lvl",
    "mana/lvl",
    "str/lvl",
    "dex/lvl",
    "vit/lvl",
    "enr/lvl",
    "ac/lvl",
    "ac%/lvl",
    "dmg%/lvl",
    "dmg/lvl",
    "att/lvl",
    "att%/lvl",
})

# Codes whose identity depends on their param (a skill or tab), so the code
# alone is not a filterable stat.
PARAMETRIC_STAT_CODES = frozenset({
    "skill",
    "oskill",
    "aura",
    "charged",
    "skilltab",
    "hit-skill",
    "gethit-skill",
    "kill-skill",
    "death-skill",
    "levelup-skill",
    "att-skill",
})

# The four attributes folded into "all-stats" when they share a roll
PRIMARY_ATTRIBUTE_CODES = ("str", "dex", "vit", "enr")


@dataclass(frozen=True)
class StatCodeInfo:
    code: str               # primary code used for filtering
    name: str               # short display name
    description: str        # display template, e.g. "+{value} To Strength"
    category: str           # UI grouping
    aliases: Tuple[str, ...] = field(default_factory=tuple)
    is_variable: bool = True


# Ordering of stat categories in the UI
STAT_CATEGORIES: List[str] = [
    "Skills",
    "Skill Trees",
    "Attributes",
    "Life & Mana",
    "Speed",
    "Resistances",
    "Absorb",
    "Damage",
    "Attack",
    "Defense",
    "Leech",
    "Combat",
    "Magic Find",
    "Pierce",
    "Other",
]


def _s(code, name, description, category, aliases=(), is_variable=True):
    return StatCodeInfo(code, name, description, category, tuple(aliases), is_variable)


def _skill_tree(cls_code, tree_code, name, tree_text, cls_name):
    return _s(
        f"{cls_code}-{tree_code}", name,
        f"+{{value}} To {tree_text} ({cls_name} Only)", "Skill Trees",
    )


def filterable_stats() -> List[StatCodeInfo]:
    """All stat codes that are useful for marketplace filtering."""
    return [
        # Skills
        _s("allskills", "All Skills", "+{value} To All Skills", "Skills"),
        _s("ama", "Amazon Skills", "+{value} To Amazon Skill Levels", "Skills"),
        _s("sor", "Sorceress Skills", "+{value} To Sorceress Skill Levels", "Skills"),
        _s("nec", "Necromancer Skills", "+{value} To Necromancer Skill Levels", "Skills"),
        _s("pal", "Paladin Skills", "+{value} To Paladin Skill Levels", "Skills"),
        _s("bar", "Barbarian Skills", "+{value} To Barbarian Skill Levels", "Skills"),
        _s("dru", "Druid Skills", "+{value} To Druid Skill Levels", "Skills"),
        _s("ass", "Assassin Skills", "+{value} To Assassin Skill Levels", "Skills"),

        # Skill trees
        _skill_tree("ama", "bow", "Bow and Crossbow", "Bow and Crossbow Skills", "Amazon"),
        _skill_tree("ama", "passive", "Passive and Magic", "Passive and Magic Skills", "Amazon"),
        _skill_tree("ama", "javelin", "Javelin and Spear", "Javelin and Spear Skills", "Amazon"),
        _skill_tree("sor", "fire", "Fire Skills", "Fire Skills", "Sorceress"),
        _skill_tree("sor", "lightning", "Lightning Skills", "Lightning Skills", "Sorceress"),
        _skill_tree("sor", "cold", "Cold Skills", "Cold Skills", "Sorceress"),
        _skill_tree("nec", "curses", "Curses", "Curses", "Necromancer"),
        _skill_tree("nec", "poisonbone", "Poison and Bone", "Poison and Bone Skills", "Necromancer"),
        _skill_tree("nec", "summon", "Summoning Skills", "Summoning Skills", "Necromancer"),
        _skill_tree("pal", "combat", "Combat Skills", "Combat Skills", "Paladin"),
        _skill_tree("pal", "offensive", "Offensive Auras", "Offensive Auras", "Paladin"),
        _skill_tree("pal", "defensive", "Defensive Auras", "Defensive Auras", "Paladin"),
        _skill_tree("bar", "combat", "Combat Skills", "Combat Skills", "Barbarian"),
        _skill_tree("bar", "masteries", "Masteries", "Masteries", "Barbarian"),
        _skill_tree("bar", "warcries", "Warcries", "Warcries", "Barbarian"),
        _skill_tree("dru", "summon", "Summoning Skills", "Summoning Skills", "Druid"),
        _skill_tree("dru", "shapeshifting", "Shape Shifting", "Shape Shifting Skills", "Druid"),
        _skill_tree("dru", "elemental", "Elemental Skills", "Elemental Skills", "Druid"),
        _skill_tree("ass", "traps", "Traps", "Traps", "Assassin"),
        _skill_tree("ass", "shadow", "Shadow Disciplines", "Shadow Disciplines", "Assassin"),
        _skill_tree("ass", "martial", "Martial Arts", "Martial Arts", "Assassin"),

        # Attributes
        _s("str", "Strength", "+{value} To Strength", "Attributes"),
        _s("dex", "Dexterity", "+{value} To Dexterity", "Attributes"),
        _s("vit", "Vitality", "+{value} To Vitality", "Attributes"),
        _s("enr", "Energy", "+{value} To Energy", "Attributes"),
        _s("all-stats", "All Attributes", "+{value} To All Attributes", "Attributes"),

        # Life & Mana
        _s("hp", "Life", "+{value} To Life", "Life & Mana"),
        _s("mana", "Mana", "+{value} To Mana", "Life & Mana"),
        _s("hp%", "Life %", "+{value}% To Life", "Life & Mana"),
        _s("mana%", "Mana %", "+{value}% To Mana", "Life & Mana"),
        _s("regen-mana", "Mana Regen", "Regenerate Mana {value}%", "Life & Mana"),
        _s("regen", "Replenish Life", "Replenish Life +{value}", "Life & Mana"),

        # Speed (game data uses numbered variants)
        _s("fcr", "Faster Cast Rate", "+{value}% Faster Cast Rate", "Speed",
           aliases=("cast1", "cast2", "cast3")),
        _s("ias", "Increased Attack Speed", "+{value}% Increased Attack Speed", "Speed",
           aliases=("swing1", "swing2", "swing3")),
        _s("frw", "Faster Run/Walk", "+{value}% Faster Run/Walk", "Speed",
           aliases=("move1", "move2", "move3")),
        _s("fhr", "Faster Hit Recovery", "+{value}% Faster Hit Recovery", "Speed",
           aliases=("balance1", "balance2", "balance3")),
        _s("block", "Faster Block Rate", "+{value}% Faster Block Rate", "Speed",
           aliases=("block1", "block2", "block3")),

        # Resistances
        _s("fire_res", "Fire Resist", "Fire Resist +{value}%", "Resistances", aliases=("res-fire",)),
        _s("cold_res", "Cold Resist", "Cold Resist +{value}%", "Resistances", aliases=("res-cold",)),
        _s("light_res", "Lightning Resist", "Lightning Resist +{value}%", "Resistances",
           aliases=("res-ltng",)),
        _s("poison_res", "Poison Resist", "Poison Resist +{value}%", "Resistances",
           aliases=("res-pois",)),
        _s("all_res", "All Resistances", "All Resistances +{value}", "Resistances",
           aliases=("res-all",)),
        _s("res-mag", "Magic Resist", "Magic Resist +{value}%", "Resistances"),

        # Absorb
        _s("abs-fire", "Fire Absorb", "+{value} Fire Absorb", "Absorb"),
        _s("abs-cold", "Cold Absorb", "+{value} Cold Absorb", "Absorb"),
        _s("abs-ltng", "Lightning Absorb", "+{value} Lightning Absorb", "Absorb"),
        _s("abs-fire%", "Fire Absorb %", "{value}% Fire Absorb", "Absorb"),
        _s("abs-cold%", "Cold Absorb %", "{value}% Cold Absorb", "Absorb"),
        _s("abs-ltng%", "Lightning Absorb %", "{value}% Lightning Absorb", "Absorb"),

        # Damage
        _s("ed", "Enhanced Damage", "+{value}% Enhanced Damage", "Damage", aliases=("dmg%",)),
        _s("dmg-min", "Minimum Damage", "+{value} To Minimum Damage", "Damage"),
        _s("dmg-max", "Maximum Damage", "+{value} To Maximum Damage", "Damage"),
        _s("dmg-demon", "Damage to Demons", "+{value}% Damage To Demons", "Damage"),
        _s("dmg-undead", "Damage to Undead", "+{value}% Damage To Undead", "Damage"),
        _s("extra-fire", "Fire Skill Damage", "+{value}% To Fire Skill Damage", "Damage"),
        _s("extra-cold", "Cold Skill Damage", "+{value}% To Cold Skill Damage", "Damage"),
        _s("extra-ltng", "Lightning Skill Damage", "+{value}% To Lightning Skill Damage", "Damage"),
        _s("extra-pois", "Poison Skill Damage", "+{value}% To Poison Skill Damage", "Damage"),

        # Attack
        _s("ar", "Attack Rating", "+{value} To Attack Rating", "Attack", aliases=("att", "att%")),
        _s("att-demon", "AR vs Demons", "+{value} To Attack Rating Against Demons", "Attack"),
        _s("att-undead", "AR vs Undead", "+{value} To Attack Rating Against Undead", "Attack"),
        _s("ignore-ac", "Ignore Defense", "Ignore Target's Defense", "Attack", is_variable=False),

        # Defense
        _s("ac", "Defense", "+{value} Defense", "Defense"),
        _s("ac%", "Enhanced Defense", "+{value}% Enhanced Defense", "Defense"),
        _s("red-dmg", "Damage Reduced", "Damage Reduced By {value}", "Defense"),
        _s("red-dmg%", "Damage Reduced %", "Damage Reduced By {value}%", "Defense"),
        _s("red-mag", "Magic Damage Reduced", "Magic Damage Reduced By {value}", "Defense"),

        # Leech
        _s("life_steal", "Life Steal", "{value}% Life Stolen Per Hit", "Leech",
           aliases=("lifesteal",)),
        _s("mana_steal", "Mana Steal", "{value}% Mana Stolen Per Hit", "Leech",
           aliases=("manasteal",)),
        _s("hp/kill", "Life per Kill", "+{value} Life After Each Kill", "Leech"),
        _s("mana/kill", "Mana per Kill", "+{value} Mana After Each Kill", "Leech"),

        # Combat
        _s("crushing_blow", "Crushing Blow", "{value}% Chance Of Crushing Blow", "Combat",
           aliases=("crush",)),
        _s("deadly_strike", "Deadly Strike", "{value}% Deadly Strike", "Combat",
           aliases=("deadly",)),
        _s("open_wounds", "Open Wounds", "{value}% Chance Of Open Wounds", "Combat",
           aliases=("openwounds",)),
        _s("knock", "Knockback", "Knockback", "Combat", is_variable=False),
        _s("slow", "Slow Target", "Slows Target By {value}%", "Combat"),
        _s("noheal", "Prevent Monster Heal", "Prevent Monster Heal", "Combat", is_variable=False),

        # Magic Find & Gold
        _s("mf", "Magic Find", "+{value}% Better Chance Of Getting Magic Items", "Magic Find",
           aliases=("mag%",)),
        _s("gf", "Gold Find", "+{value}% Extra Gold From Monsters", "Magic Find",
           aliases=("gold%",)),

        # Pierce
        _s("pierce-fire", "Fire Pierce", "-{value}% To Enemy Fire Resistance", "Pierce"),
        _s("pierce-cold", "Cold Pierce", "-{value}% To Enemy Cold Resistance", "Pierce"),
        _s("pierce-ltng", "Lightning Pierce", "-{value}% To Enemy Lightning Resistance", "Pierce"),
        _s("pierce-pois", "Poison Pierce", "-{value}% To Enemy Poison Resistance", "Pierce"),

        # Other
        _s("sock", "Sockets", "Socketed ({value})", "Other"),
        _s("nofreeze", "Cannot Be Frozen", "Cannot Be Frozen", "Other", is_variable=False),
        _s("half-freeze", "Half Freeze Duration", "Half Freeze Duration", "Other", is_variable=False),
        _s("indestruct", "Indestructible", "Indestructible", "Other", is_variable=False),
        _s("ethereal", "Ethereal", "Ethereal (Cannot Be Repaired)", "Other", is_variable=False),
        _s("light", "Light Radius", "+{value} To Light Radius", "Other"),
        _s("thorns", "Thorns", "Attacker Takes Damage Of {value}", "Other"),
        _s("ease", "Requirements", "Requirements -{value}%", "Other"),
        _s("exp", "Experience", "+{value}% To Experience Gained", "Other"),
    ]
