"""
D2 Catalog - Reverse Translator
Recovers structured properties from scraped mod text lines.

At construction every display template of the PropertyTranslator is
compiled into a matching pattern: literal text is escaped (whitespace made
flexible) and each placeholder becomes a capture group. Lines are then
matched against fixed-text templates first, then the regex templates from
most to least literal text. Anything unmatched comes back as a "raw"
property carrying the original text, so nothing scraped is ever lost.
"""

import re
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from config import CLASS_NAMES, PER_LEVEL_MULTIPLIER, RAW_CODE
from property_translator import Property, PropertyTranslator
from stat_codes import PER_LEVEL_CODES

logger = logging.getLogger(__name__)


class TemplateError(ValueError):
    """A display template could not be compiled into a reverse pattern."""


# Signed integer, plain range "5-10", or the negative range "-(5-10)"
_VALUE_GROUP = r"(-\(\d+-\d+\)|[+-]?\d+(?:-\d+)?)"

_GROUP_PATTERNS = {
    "value": _VALUE_GROUP,
    "min": r"(\d+)",
    "max": r"(\d+)",
    "param": r"(.+?)",
    "skilltab": r"(.+?)",
}

# Captures validated against a closed vocabulary after matching
_CONSTRAINED_GROUPS = frozenset({"skilltab"})

_PLACEHOLDER_RE = re.compile(r"(\{[^{}]*\})")

_NEGATIVE_RANGE_RE = re.compile(r"-\((\d+)-(\d+)\)")
_RANGE_RE = re.compile(r"(-?\d+)-(\d+)")
_INT_RE = re.compile(r"[+-]?\d+")

_PER_LEVEL_MULT_RE = re.compile(
    r"^\(([0-9]+(?:\.[0-9]+)?)\s+Per\s+Character\s+Level\)\s+(\d+)-(\d+)(%?)\s+(.+?)"
    r"\s+\(Based\s+On\s+Character\s+Level\)$",
    re.IGNORECASE,
)
_PER_LEVEL_SIMPLE_RE = re.compile(
    r"^\+?(-?\d+(?:-\d+)?)(%?)\s+(.+?)\s+\(Based\s+On\s+Character\s+Level\)$",
    re.IGNORECASE,
)
_PER_LEVEL_TEMPLATE_RE = re.compile(
    r"\{value\}(%?)\s+(.+?)\s+\(Based On Character Level\)", re.IGNORECASE,
)


def class_suffix_regex(class_names: Iterable[str] = CLASS_NAMES) -> re.Pattern:
    """Matches a trailing "(Amazon Only)" / "(Warlock only)" / "(Druid)" suffix."""
    names = "|".join(re.escape(n) for n in class_names)
    return re.compile(r"\s*\((%s)(\s+only)?\)\s*$" % names, re.IGNORECASE)


def _normalize(text: str) -> str:
    return " ".join(text.split()).lower()


def _literal_to_regex(text: str) -> str:
    # Any run of whitespace in the template matches any run in the input
    return r"\s+".join(re.escape(part) for part in re.split(r"\s+", text))


@dataclass(frozen=True)
class ReversePattern:
    code: str
    template: str
    regex: Optional[re.Pattern]  # None for fixed-text templates
    groups: Tuple[str, ...]      # capture group names in order: "value", "min", ...
    is_fixed: bool               # True for templates with no placeholders
    literal_chars: int           # non-whitespace literal characters

    @property
    def constrained_groups(self) -> int:
        return sum(1 for g in self.groups if g in _CONSTRAINED_GROUPS)


def build_reverse_pattern(code: str, template: str) -> ReversePattern:
    """
    Compile a display template into a reverse pattern.

    Example: "+{value}% Enhanced Damage"
        -> r"^\\+?(-\\(\\d+-\\d+\\)|[+-]?\\d+(?:-\\d+)?)%\\s+Enhanced\\s+Damage$"

    A literal "+" directly before {value} becomes optional, mirroring the
    forward translator dropping it for negative values.

    Raises TemplateError for unknown placeholders or an uncompilable result.
    """
    pieces = _PLACEHOLDER_RE.split(template)
    literal_chars = sum(len("".join(p.split())) for p in pieces[0::2])

    if len(pieces) == 1:
        return ReversePattern(
            code=code, template=template, regex=None, groups=(),
            is_fixed=True, literal_chars=literal_chars,
        )

    parts: List[str] = []
    groups: List[str] = []
    for i, piece in enumerate(pieces):
        if i % 2 == 0:
            if not piece:
                continue
            next_is_value = i + 1 < len(pieces) and pieces[i + 1] == "{value}"
            if next_is_value and piece.endswith("+"):
                parts.append(_literal_to_regex(piece[:-1]) + r"\+?")
            else:
                parts.append(_literal_to_regex(piece))
            continue

        name = piece[1:-1]
        group = _GROUP_PATTERNS.get(name)
        if group is None:
            raise TemplateError(f"template for {code!r} has unknown placeholder {piece}: {template!r}")
        parts.append(group)
        groups.append(name)

    pattern_str = "^" + "".join(parts) + "$"
    try:
        regex = re.compile(pattern_str, re.IGNORECASE)
    except re.error as e:
        raise TemplateError(f"template for {code!r} does not compile: {template!r} ({e})") from e

    return ReversePattern(
        code=code, template=template, regex=regex, groups=tuple(groups),
        is_fixed=False, literal_chars=literal_chars,
    )


def parse_value_str(s: str) -> Tuple[int, int]:
    """
    Parse a captured {value}:
      "25" -> (25, 25)       "+25" -> (25, 25)      "-25" -> (-25, -25)
      "25-35" -> (25, 35)    "-(5-10)" -> (-10, -5)  "-5-10" -> (-5, 10)
    Unparseable input gives (0, 0).
    """
    s = s.strip()

    m = _NEGATIVE_RANGE_RE.fullmatch(s)
    if m:
        a, b = int(m.group(1)), int(m.group(2))
        return -b, -a

    if s.startswith("+"):
        s = s[1:]

    m = _RANGE_RE.fullmatch(s)
    if m:
        return int(m.group(1)), int(m.group(2))

    if _INT_RE.fullmatch(s):
        val = int(s)
        return val, val

    return 0, 0


def split_or_alternatives(text: str) -> List[str]:
    """Split a stat cell holding "A or \\nB" alternatives into separate lines."""
    text = text.strip()
    parts = [p.strip() for p in text.split(" or \n")]
    if len(parts) > 1:
        return [p for p in parts if p]
    return [text]


class ReverseTranslator:
    """
    Reverse codec: display text -> Property.

    Usage:
        rt = ReverseTranslator()
        rt.reverse_translate("Fire Resist +30%")  # Property(code="res-fire", min=30, max=30)
    """

    def __init__(self, translator: Optional[PropertyTranslator] = None,
                 class_names: Iterable[str] = CLASS_NAMES,
                 per_level_multiplier: int = PER_LEVEL_MULTIPLIER):
        self._translator = translator or PropertyTranslator()
        self._skill_tabs = self._translator.skill_tabs
        self._class_suffix = class_suffix_regex(class_names)
        self._per_level_multiplier = per_level_multiplier

        fixed: Dict[str, str] = {}
        patterns: List[ReversePattern] = []
        for code, template in self._translator.formats.items():
            rp = build_reverse_pattern(code, template)
            if rp.is_fixed:
                fixed.setdefault(_normalize(template), code)
            else:
                patterns.append(rp)

        # Most literal text first; among equals, patterns whose captures are
        # validated (skilltab) go before free-text ones so a rejected match
        # can fall through. Stable sort keeps table order for exact ties.
        patterns.sort(key=lambda p: (-p.literal_chars, -p.constrained_groups, -len(p.regex.pattern)))

        self._fixed = fixed
        self._patterns: Tuple[ReversePattern, ...] = tuple(patterns)
        self._per_level = self._build_per_level_registry()

        logger.info(f"ReverseTranslator: {len(fixed)} fixed + {len(patterns)} regex patterns, "
                    f"{len(self._per_level)} per-level stats")

    @property
    def patterns(self) -> Tuple[ReversePattern, ...]:
        return self._patterns

    def _build_per_level_registry(self) -> Dict[Tuple[str, str], str]:
        """(percent sign, lowercased stat text) -> per-level code."""
        registry: Dict[Tuple[str, str], str] = {}
        for code, template in self._translator.formats.items():
            if code not in PER_LEVEL_CODES:
                continue
            m = _PER_LEVEL_TEMPLATE_RE.search(template)
            if not m:
                raise TemplateError(f"per-level code {code!r} has no per-level template: {template!r}")
            registry.setdefault((m.group(1), _normalize(m.group(2))), code)
        return registry

    # ─── Matching ─────────────────────────────────

    def reverse_translate(self, display_text: str) -> Property:
        """Convert one display line back to a Property. Never raises."""
        text = (display_text or "").strip()
        if not text:
            return Property(code=RAW_CODE, display_text=text)

        prop = self._match_per_level(text)
        if prop is not None:
            return prop

        code = self._fixed.get(_normalize(text))
        if code is not None:
            return Property(code=code, display_text=text)

        for pattern in self._patterns:
            m = pattern.regex.match(text)
            if not m:
                continue
            prop = self._extract(pattern, m, text)
            if prop is None:
                logger.debug(f"'{text}': rejected {pattern.code} match, trying next pattern")
                continue
            return prop

        logger.debug(f"'{text}': no pattern matched, keeping as raw")
        return Property(code=RAW_CODE, display_text=text)

    def reverse_translate_lines(self, lines: Iterable[str]) -> List[Property]:
        """Reverse-translate each non-blank line."""
        props = []
        for line in lines:
            line = line.strip()
            if not line:
                continue
            props.append(self.reverse_translate(line))
        return props

    def _extract(self, pattern: ReversePattern, m: re.Match, text: str) -> Optional[Property]:
        """Build a Property from a regex match, or None if the match is rejected."""
        prop = Property(code=pattern.code, display_text=text)
        for name, val in zip(pattern.groups, m.groups()):
            if val is None:
                continue
            if name == "value":
                prop.min, prop.max = parse_value_str(val)
            elif name == "min":
                prop.min = int(val)
            elif name == "max":
                prop.max = int(val)
            elif name == "param":
                prop.param = self._class_suffix.sub("", val)
            elif name == "skilltab":
                cls = self._class_suffix.search(val)
                cleaned = self._class_suffix.sub("", val)
                tab = self._skill_tabs.lookup(cleaned, cls.group(1) if cls else None)
                if tab is None:
                    # Not a tab name; let "skill" and friends have it
                    return None
                prop.param = str(tab)
        return prop

    def _match_per_level(self, text: str) -> Optional[Property]:
        """
        Handle the two per-level display formats:
            "(1.5 Per Character Level) 1-148 To Life (Based On Character Level)"
            "+1 To Maximum Damage (Based On Character Level)"
        The first stores per_level * 8, rounded half up, as the raw magnitude;
        the second keeps the literal value.
        """
        if "based on character level" not in text.lower():
            return None

        m = _PER_LEVEL_MULT_RE.match(text)
        if m:
            code = self._per_level.get((m.group(4), _normalize(m.group(5))))
            if code is not None:
                raw = int(float(m.group(1)) * self._per_level_multiplier + 0.5)
                return Property(code=code, min=raw, max=raw, display_text=text)

        m = _PER_LEVEL_SIMPLE_RE.match(text)
        if m:
            code = self._per_level.get((m.group(2), _normalize(m.group(3))))
            if code is not None:
                lo, hi = parse_value_str(m.group(1))
                return Property(code=code, min=lo, max=hi, display_text=text)

        return None
