"""
Emoji Codec - Lookup

resolve(name, tables) -> glyph or None

Resolution order:
1. strip a :shortcode: wrapper
2. split off a one- or two-token tone suffix
3. follow an alias (single hop)
4. base table, applying the stem's tone rule when tones were requested
5. algorithmic families
6. explicit tone entries, a two-tone miss retried with the first tone twice

The function reads the tables and nothing else, so it is safe to call from
any number of threads.
"""
from __future__ import annotations
from typing import Optional, Tuple

from .families import algorithmic_glyph
from .loader import parse_tone_suffix
from .tone_rules import apply_tone_rule, lookup_tones_for_rule
from .types import CodecTables

# Returned for names the tables cannot resolve
NOT_FOUND = None


def strip_delimiters(name: str) -> str:
    """':smile:' -> 'smile'. Names without a full wrapper are returned unchanged."""
    if len(name) > 2 and name.startswith(":") and name.endswith(":"):
        return name[1:-1]
    return name


def split_tones(name: str) -> Tuple[str, Tuple[int, ...]]:
    """(candidate base name, tones); tones is empty when the name has no suffix."""
    parsed = parse_tone_suffix(name)
    if parsed is None:
        return name, ()
    return parsed


def resolve(name: str, tables: CodecTables) -> Optional[str]:
    """
    Resolve an emoji name to its glyph.

    Args:
        name: Emoji name, optionally wrapped in colons and tone-suffixed
        tables: Generated codec tables

    Returns:
        Glyph string, or NOT_FOUND (None) for unknown names
    """
    if not name:
        return NOT_FOUND

    candidate, tones = split_tones(strip_delimiters(name))
    candidate = tables.aliases.get(candidate, candidate)

    base = tables.base.get(candidate)
    if base is not None:
        if not tones:
            return base
        rule = tables.tone_rules.get(candidate)
        if rule is not None:
            fitted = lookup_tones_for_rule(rule, tones)
            if fitted is not None:
                return apply_tone_rule(base, rule, fitted)

    glyph = algorithmic_glyph(candidate)
    if glyph is not None:
        return glyph

    if tones:
        glyph = tables.explicit_tones.get((candidate, tones))
        if glyph is None and len(tones) == 2:
            glyph = tables.explicit_tones.get((candidate, (tones[0], tones[0])))
        if glyph is not None:
            return glyph

    return NOT_FOUND
