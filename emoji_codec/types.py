"""
Emoji Codec - Type Definitions

Dataclasses for dictionary entries, tone variants, tone rules and the exported
table quartet.

Glyphs are plain ``str`` values. A Python string is a sequence of Unicode
scalar values, so every position stored in a ToneRule is a scalar index.
"""
from __future__ import annotations
from dataclasses import dataclass, field, asdict
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from .constants import is_valid_tone

# (stem, tones) -> glyph key used by the explicit tone table
ToneKey = Tuple[str, Tuple[int, ...]]


@dataclass(frozen=True)
class DictionaryEntry:
    """One source pair: name -> glyph."""
    name: str
    glyph: str


@dataclass(frozen=True)
class ToneVariant:
    """
    A dictionary entry whose name carries a skin-tone suffix.

    Examples:
    - 'thumbsup_tone2'            -> stem 'thumbsup', tones (2,)
    - 'people_holding_hands_tone1_tone5' -> tones (1, 5)
    - 'ok_hand_medium_dark_skin_tone'    -> tones (4,)
    """
    name: str
    stem: str
    tones: Tuple[int, ...]
    glyph: str

    def __post_init__(self):
        if not self.stem:
            raise ValueError(f"Empty stem for tone variant: {self.name!r}")
        if len(self.tones) not in (1, 2):
            raise ValueError(f"Tone variant needs 1 or 2 tones, got {self.tones}")
        for tone in self.tones:
            if not is_valid_tone(tone):
                raise ValueError(f"Invalid tone: {tone} (must be 1-5)")

    @property
    def arity(self) -> int:
        return len(self.tones)

    @property
    def is_uniform(self) -> bool:
        """True when every tone slot carries the same value."""
        return len(set(self.tones)) == 1


@dataclass(frozen=True)
class ToneRule:
    """
    Edit script turning a base glyph into its toned form.

    insert_positions: base indices where a tone modifier is inserted, one per slot
    delete_positions: base indices of presentation selectors dropped in toned forms
    """
    insert_positions: Tuple[int, ...]
    delete_positions: Tuple[int, ...] = ()

    @property
    def slots(self) -> int:
        return len(self.insert_positions)

    def as_tuple(self) -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
        return (self.insert_positions, self.delete_positions)

    @classmethod
    def from_tuple(cls, value) -> "ToneRule":
        inserts, deletes = value
        return cls(tuple(inserts), tuple(deletes))


@dataclass(frozen=True)
class CanonicalGroup:
    """Names sharing one glyph. ``canonical`` represents the group; the rest alias it."""
    glyph: str
    canonical: str
    aliases: Tuple[str, ...] = ()

    @property
    def names(self) -> Tuple[str, ...]:
        return (self.canonical,) + self.aliases


@dataclass(frozen=True)
class CodecTables:
    """
    The exported runtime state.

    - base: canonical name -> glyph (never contains formula-derivable names)
    - aliases: alias -> canonical name (single hop)
    - tone_rules: canonical stem -> ToneRule
    - explicit_tones: (stem, tones) -> glyph, for stems without a rule

    Mappings are wrapped read-only so a shared instance can be consulted from
    any number of threads.
    """
    base: Mapping[str, str] = field(default_factory=dict)
    aliases: Mapping[str, str] = field(default_factory=dict)
    tone_rules: Mapping[str, ToneRule] = field(default_factory=dict)
    explicit_tones: Mapping[ToneKey, str] = field(default_factory=dict)

    def __post_init__(self):
        for name in ("base", "aliases", "tone_rules", "explicit_tones"):
            value = getattr(self, name)
            if not isinstance(value, MappingProxyType):
                object.__setattr__(self, name, MappingProxyType(dict(value)))

    @classmethod
    def from_literals(
        cls,
        base: Mapping[str, str],
        aliases: Mapping[str, str],
        tone_rules: Mapping[str, Any],
        explicit_tones: Mapping[ToneKey, str],
    ) -> "CodecTables":
        """Build tables from the plain literals written into a generated module."""
        return cls(
            base=base,
            aliases=aliases,
            tone_rules={stem: ToneRule.from_tuple(rule) for stem, rule in tone_rules.items()},
            explicit_tones=explicit_tones,
        )


@dataclass(frozen=True)
class Mismatch:
    """A source entry the generated tables failed to reproduce."""
    name: str
    expected: str
    actual: Optional[str]

    def describe(self) -> str:
        """One diagnostic line; glyphs are escaped so terminals show every scalar."""
        return f"{self.name}: expected {ascii(self.expected)}, got {ascii(self.actual)}"


@dataclass
class GenerationStats:
    """Counts reported after a successful generation run."""
    source_keys: int = 0
    unique_glyphs: int = 0
    base_entries: int = 0
    alias_entries: int = 0
    tone_rule_stems: int = 0
    explicit_tone_entries: int = 0
    droppable_names: int = 0
    tone_variant_names: int = 0

    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary."""
        return asdict(self)
