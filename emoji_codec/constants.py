"""
Emoji Codec - Constants

Tone tokens, modifier scalars and the closed-form constants behind the
algorithmic name families (flags, regional indicators, keycaps, clock faces).

Everything here is part of the runtime state of a generated table: changing a
value changes what every previously generated artifact resolves to.
"""
import re
from typing import Dict, FrozenSet, Optional, Tuple

# =============================================================================
# SKIN TONES
# =============================================================================

# Fitzpatrick modifiers, indexed by tone ordinal (index 0 unused)
TONE_MODIFIERS: Tuple[str, ...] = (
    "",
    "\U0001F3FB",  # light
    "\U0001F3FC",  # medium-light
    "\U0001F3FD",  # medium
    "\U0001F3FE",  # medium-dark
    "\U0001F3FF",  # dark
)

TONE_MODIFIER_SET: FrozenSet[str] = frozenset(TONE_MODIFIERS[1:])

TONE_TOKENS: Dict[str, int] = {
    "tone1": 1,
    "tone2": 2,
    "tone3": 3,
    "tone4": 4,
    "tone5": 5,
    "light_skin_tone": 1,
    "medium_light_skin_tone": 2,
    "medium_skin_tone": 3,
    "medium_dark_skin_tone": 4,
    "dark_skin_tone": 5,
}

# Longest alternatives first so "medium_light_skin_tone" never loses to "light_skin_tone"
_TONE_TOKEN_PATTERN = "|".join(sorted(TONE_TOKENS, key=len, reverse=True))

# stem + one or two tone tokens; the stem must be non-empty (use with fullmatch)
TONE_SUFFIX_RE = re.compile(
    rf"(?P<stem>.+?)_(?P<first>{_TONE_TOKEN_PATTERN})(?:_(?P<second>{_TONE_TOKEN_PATTERN}))?",
    re.DOTALL,
)

# Variation selector 16 (emoji presentation)
PRESENTATION_SELECTOR = "\uFE0F"

# =============================================================================
# ALGORITHMIC FAMILIES
# =============================================================================

FLAG_PREFIX = "flag_"
REGIONAL_INDICATOR_PREFIX = "regional_indicator_"
REGIONAL_INDICATOR_A = 0x1F1E6

COMBINING_ENCLOSING_KEYCAP = "\u20E3"
KEYCAP_SUFFIX = PRESENTATION_SELECTOR + COMBINING_ENCLOSING_KEYCAP

KEYCAP_WORDS: Dict[str, str] = {
    "zero": "0",
    "one": "1",
    "two": "2",
    "three": "3",
    "four": "4",
    "five": "5",
    "six": "6",
    "seven": "7",
    "eight": "8",
    "nine": "9",
    "hash": "#",
    "asterisk": "*",
}

KEYCAP_TEN_NAME = "keycap_ten"
KEYCAP_TEN = "\U0001F51F"

CLOCK_PREFIX = "clock"
HALF_HOUR_SUFFIX = "30"
CLOCK_WHOLE_HOUR_BASE = 0x1F550  # clock1 .. clock12
CLOCK_HALF_HOUR_BASE = 0x1F55C   # clock130 .. clock1230

# Canonical name alphabet: lowercase ASCII letters, digits, underscore
SAFE_NAME_RE = re.compile(r"^[a-z0-9_]+$")


# =============================================================================
# VALIDATORS
# =============================================================================

def is_valid_tone(tone: int) -> bool:
    """Check if tone is a valid ordinal (1-5)."""
    return isinstance(tone, int) and 1 <= tone <= 5


def is_tone_modifier(scalar: str) -> bool:
    """Check if a single scalar is one of the five skin-tone modifiers."""
    return scalar in TONE_MODIFIER_SET


def tone_token_to_number(token: str) -> Optional[int]:
    """Map a tone token (short or descriptive form) to its ordinal, or None."""
    return TONE_TOKENS.get(token)


def strip_tone_modifiers(glyph: str) -> str:
    """Remove every skin-tone modifier scalar from a glyph."""
    return "".join(ch for ch in glyph if ch not in TONE_MODIFIER_SET)
