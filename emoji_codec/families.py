"""
Emoji Codec - Algorithmic Families

Names whose glyph follows from a closed-form formula:

1. Flags:               flag_us              -> regional indicators U, S
2. Regional indicators: regional_indicator_z -> regional indicator Z
3. Clock faces:         clock3, clock330     -> U+1F552, U+1F55E
4. Keycaps:             five, hash, asterisk -> char + U+FE0F + U+20E3
5. Keycap ten:          keycap_ten           -> U+1F51F

A dictionary name whose recorded glyph equals its formula output is
"droppable": it is never stored, only recomputed.
"""
from __future__ import annotations
import logging
from typing import Callable, Iterable, Optional, Set, Tuple

from .constants import (
    FLAG_PREFIX,
    REGIONAL_INDICATOR_PREFIX,
    REGIONAL_INDICATOR_A,
    KEYCAP_WORDS,
    KEYCAP_SUFFIX,
    KEYCAP_TEN_NAME,
    KEYCAP_TEN,
    CLOCK_PREFIX,
    HALF_HOUR_SUFFIX,
    CLOCK_WHOLE_HOUR_BASE,
    CLOCK_HALF_HOUR_BASE,
)
from .types import DictionaryEntry

logger = logging.getLogger(__name__)


def _letter_offset(ch: str) -> Optional[int]:
    """Offset of a lowercase ASCII letter from 'a', or None."""
    if not "a" <= ch <= "z":
        return None
    return ord(ch) - ord("a")


def flag_glyph(name: str) -> Optional[str]:
    """flag_ + two letters -> pair of regional indicators."""
    if len(name) != len(FLAG_PREFIX) + 2 or not name.startswith(FLAG_PREFIX):
        return None
    first = _letter_offset(name[-2])
    second = _letter_offset(name[-1])
    if first is None or second is None:
        return None
    return chr(REGIONAL_INDICATOR_A + first) + chr(REGIONAL_INDICATOR_A + second)


def regional_indicator_glyph(name: str) -> Optional[str]:
    """regional_indicator_ + one letter -> a single regional indicator."""
    if len(name) != len(REGIONAL_INDICATOR_PREFIX) + 1 or not name.startswith(REGIONAL_INDICATOR_PREFIX):
        return None
    offset = _letter_offset(name[-1])
    if offset is None:
        return None
    return chr(REGIONAL_INDICATOR_A + offset)


def keycap_glyph(name: str) -> Optional[str]:
    char = KEYCAP_WORDS.get(name)
    if char is None:
        return None
    return char + KEYCAP_SUFFIX


def keycap_ten_glyph(name: str) -> Optional[str]:
    return KEYCAP_TEN if name == KEYCAP_TEN_NAME else None


def _parse_hour(text: str) -> Optional[int]:
    # "3" and "12" are hours, "03" and "+3" are not
    if not text.isascii() or not text.isdigit() or text.startswith("0"):
        return None
    hour = int(text)
    return hour if 1 <= hour <= 12 else None


def clock_glyph(name: str) -> Optional[str]:
    """clockH -> whole-hour face, clockH30 -> half-hour face (H in 1..12)."""
    if not name.startswith(CLOCK_PREFIX):
        return None
    rest = name[len(CLOCK_PREFIX):]
    if not rest:
        return None

    if rest.endswith(HALF_HOUR_SUFFIX):
        hour = _parse_hour(rest[:-len(HALF_HOUR_SUFFIX)])
        if hour is not None:
            return chr(CLOCK_HALF_HOUR_BASE + hour - 1)

    hour = _parse_hour(rest)
    if hour is None:
        return None
    return chr(CLOCK_WHOLE_HOUR_BASE + hour - 1)


# Fixed priority order; the first formula that accepts a name wins
FAMILIES: Tuple[Tuple[str, Callable[[str], Optional[str]]], ...] = (
    ("flag", flag_glyph),
    ("regional_indicator", regional_indicator_glyph),
    ("clock", clock_glyph),
    ("keycap", keycap_glyph),
    ("keycap_ten", keycap_ten_glyph),
)


def algorithmic_glyph(name: str) -> Optional[str]:
    """Glyph produced by the first family accepting the name, or None."""
    for _, formula in FAMILIES:
        glyph = formula(name)
        if glyph is not None:
            return glyph
    return None


def family_of(name: str) -> Optional[str]:
    """Name of the family that accepts the name, or None."""
    for family, formula in FAMILIES:
        if formula(name) is not None:
            return family
    return None


def find_droppable(entries: Iterable[DictionaryEntry]) -> Set[str]:
    """
    Names whose recorded glyph equals the formula output.

    A name that matches a family pattern but carries a different glyph is kept
    in the tables like any other name.
    """
    droppable = set()
    for entry in entries:
        if algorithmic_glyph(entry.name) == entry.glyph:
            droppable.add(entry.name)
    logger.info(f"Found {len(droppable)} formula-derivable names")
    return droppable
