"""
Emoji Codec - Canonicalizer / Alias Builder

Groups plain names by identical glyph and picks one canonical name per group.
Every other member becomes an alias pointing straight at the canonical name,
so aliases never chain.

Canonical ranking (lower wins):
1. formula-derivable (droppable) names
2. names made of [a-z0-9_] only
3. shorter names
4. lexicographic order
"""
from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Set, Tuple

from .constants import SAFE_NAME_RE
from .types import CanonicalGroup, DictionaryEntry

logger = logging.getLogger(__name__)


def group_by_glyph(entries: Iterable[DictionaryEntry]) -> Dict[str, List[str]]:
    """Map each glyph to the names carrying it, in input order."""
    groups: Dict[str, List[str]] = {}
    for entry in entries:
        groups.setdefault(entry.glyph, []).append(entry.name)
    return groups


def canonical_rank(name: str, droppable: Set[str]) -> Tuple[int, int, int, str]:
    return (
        0 if name in droppable else 1,
        0 if SAFE_NAME_RE.match(name) else 1,
        len(name),
        name,
    )


def pick_canonical(names: Iterable[str], droppable: Set[str]) -> str:
    return min(names, key=lambda name: canonical_rank(name, droppable))


def build_canonical_groups(
    entries: Iterable[DictionaryEntry],
    droppable: Set[str],
) -> List[CanonicalGroup]:
    """
    One CanonicalGroup per distinct glyph, sorted by canonical name.

    Args:
        entries: Plain (non tone-suffixed) dictionary entries
        droppable: Names reproducible by an algorithmic family

    Returns:
        List of CanonicalGroup with aliases in sorted order
    """
    groups = []
    for glyph, names in group_by_glyph(entries).items():
        canonical = pick_canonical(names, droppable)
        aliases = tuple(sorted(n for n in names if n != canonical))
        groups.append(CanonicalGroup(glyph=glyph, canonical=canonical, aliases=aliases))

    groups.sort(key=lambda g: g.canonical)
    logger.info(f"Built {len(groups)} canonical groups")
    return groups


def build_alias_table(groups: Iterable[CanonicalGroup]) -> Dict[str, str]:
    """alias -> canonical name."""
    return {alias: group.canonical for group in groups for alias in group.aliases}


def build_canonical_index(groups: Iterable[CanonicalGroup]) -> Dict[str, str]:
    """Every plain name -> its group's canonical name (canonical names map to themselves)."""
    return {name: group.canonical for group in groups for name in group.names}


def build_base_table(groups: Iterable[CanonicalGroup], droppable: Set[str]) -> Dict[str, str]:
    """canonical name -> glyph, leaving out names the formulas regenerate."""
    return {
        group.canonical: group.glyph
        for group in groups
        if group.canonical not in droppable
    }
