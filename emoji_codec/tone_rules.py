"""
Emoji Codec - Tone Rule Deriver

For every canonical stem with skin-tone variants, derive a ToneRule that turns
the base glyph into each toned glyph, or fall back to storing the toned glyphs
literally.

Derivation Algorithm:
1. Group variants by canonical stem
2. Resolve the base glyph (dictionary entry, or a variant with modifiers removed)
3. Pick a representative variant (max arity, all tones 1 preferred)
4. Diff representative against base: modifier insertions, FE0F deletions
5. Check the rule reproduces every variant of the stem
6. Any failure -> explicit (stem, tones) entries for the whole stem
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple

from .constants import (
    PRESENTATION_SELECTOR,
    TONE_MODIFIERS,
    is_tone_modifier,
    strip_tone_modifiers,
)
from .types import ToneKey, ToneRule, ToneVariant

logger = logging.getLogger(__name__)


# =============================================================================
# DIFF / APPLY
# =============================================================================

def compute_tone_rule(base: str, variant: str) -> Optional[ToneRule]:
    """
    Diff a base glyph against a toned glyph.

    Only two edits are allowed:
    - a tone modifier in the variant is an insertion at the current base index
    - a presentation selector in the base that the variant lacks is a deletion

    Returns:
        ToneRule, or None if the glyphs differ in any other way or no
        modifier was inserted
    """
    inserts: List[int] = []
    deletes: List[int] = []
    ib = iv = 0

    while ib < len(base) or iv < len(variant):
        if iv < len(variant) and is_tone_modifier(variant[iv]):
            inserts.append(ib)
            iv += 1
            continue

        if ib < len(base) and base[ib] == PRESENTATION_SELECTOR:
            if iv >= len(variant) or variant[iv] != PRESENTATION_SELECTOR:
                deletes.append(ib)
                ib += 1
                continue

        if ib >= len(base) or iv >= len(variant) or base[ib] != variant[iv]:
            return None
        ib += 1
        iv += 1

    if not inserts:
        return None
    return ToneRule(insert_positions=tuple(inserts), delete_positions=tuple(deletes))


def apply_tone_rule(base: str, rule: ToneRule, tones: Tuple[int, ...]) -> str:
    """
    Apply a ToneRule to a base glyph.

    Edits run from the highest base index to the lowest so earlier positions
    stay valid. At a shared index the deletion happens before the insertion.
    Slot i takes tones[i], or tones[0] when fewer tones are supplied.
    """
    scalars = list(base)
    inserts = rule.insert_positions
    deletes = rule.delete_positions
    ii = len(inserts) - 1
    di = len(deletes) - 1

    while ii >= 0 or di >= 0:
        idx = max(inserts[ii] if ii >= 0 else -1, deletes[di] if di >= 0 else -1)

        while di >= 0 and deletes[di] == idx:
            del scalars[idx]
            di -= 1

        while ii >= 0 and inserts[ii] == idx:
            tone = tones[ii] if ii < len(tones) else tones[0]
            scalars.insert(idx, TONE_MODIFIERS[tone])
            ii -= 1

    return "".join(scalars)


def tones_for_rule(rule: ToneRule, tones: Tuple[int, ...]) -> Optional[Tuple[int, ...]]:
    """
    Fit requested tones to a rule's slots.

    - 1 slot:  exactly one tone
    - 2 slots: two tones as given, or one tone applied to both slots

    Returns None when the tones cannot fill the rule.
    """
    if rule.slots == 1:
        return tones if len(tones) == 1 else None
    if rule.slots == 2:
        if len(tones) == 2:
            return tones
        if len(tones) == 1:
            return (tones[0], tones[0])
    return None


def lookup_tones_for_rule(rule: ToneRule, tones: Tuple[int, ...]) -> Optional[Tuple[int, ...]]:
    """
    Fit tones requested at lookup time to a rule's slots.

    Looser than tones_for_rule: a 1-slot rule asked for two tones uses the
    first one. Derivation keeps the strict fit so such names never validate
    a rule.
    """
    if rule.slots == 1 and tones:
        return tones[:1]
    return tones_for_rule(rule, tones)


# =============================================================================
# DERIVATION
# =============================================================================

@dataclass
class ToneDerivation:
    """Output of derive_tone_rules."""
    tone_rules: Dict[str, ToneRule] = field(default_factory=dict)
    explicit_tones: Dict[ToneKey, str] = field(default_factory=dict)
    # stems without an untoned dictionary entry -> base glyph rebuilt from a variant
    reconstructed_bases: Dict[str, str] = field(default_factory=dict)


def group_tone_variants(
    variants: Iterable[ToneVariant],
    canonical_index: Mapping[str, str],
) -> Dict[str, List[ToneVariant]]:
    """canonical stem -> its variants, sorted by name."""
    groups: Dict[str, List[ToneVariant]] = {}
    for variant in variants:
        stem = canonical_index.get(variant.stem, variant.stem)
        groups.setdefault(stem, []).append(variant)
    for members in groups.values():
        members.sort(key=lambda v: v.name)
    return groups


def pick_representative(variants: List[ToneVariant]) -> ToneVariant:
    """
    Variant used to derive a stem's rule.

    Preference: max arity with every tone 1, then the first max-arity variant.
    Variants are expected sorted by name so the choice is deterministic.
    """
    max_arity = max(v.arity for v in variants)
    widest = [v for v in variants if v.arity == max_arity]
    for variant in widest:
        if all(t == 1 for t in variant.tones):
            return variant
    return widest[0]


def check_tone_rule(base: str, rule: ToneRule, variants: Iterable[ToneVariant]) -> Optional[str]:
    """Name of the first variant the rule fails to reproduce, or None if all match."""
    for variant in variants:
        tones = tones_for_rule(rule, variant.tones)
        if tones is None or apply_tone_rule(base, rule, tones) != variant.glyph:
            return variant.name
    return None


def derive_stem_rule(stem: str, base: str, variants: List[ToneVariant]) -> Optional[ToneRule]:
    """Rule reproducing every variant of one stem, or None."""
    sample = pick_representative(variants)
    rule = compute_tone_rule(base, sample.glyph)
    if rule is None:
        logger.debug(f"No rule for {stem}: {sample.name} is not base + tone modifiers")
        return None
    if rule.slots not in (1, 2):
        logger.debug(f"No rule for {stem}: {rule.slots} tone slots")
        return None

    failed = check_tone_rule(base, rule, variants)
    if failed is not None:
        logger.debug(f"No rule for {stem}: rule from {sample.name} does not reproduce {failed}")
        return None
    return rule


def explicit_entries(stem: str, variants: Iterable[ToneVariant]) -> Dict[ToneKey, str]:
    """
    Literal (stem, tones) -> glyph entries for a stem without a rule.

    A uniform two-tone variant is also stored under its single-tone key unless
    a real single-tone variant already holds it.
    """
    variants = list(variants)
    entries: Dict[ToneKey, str] = {(stem, v.tones): v.glyph for v in variants}
    for variant in variants:
        if variant.arity == 2 and variant.is_uniform:
            entries.setdefault((stem, variant.tones[:1]), variant.glyph)
    return entries


def derive_tone_rules(
    variants: Iterable[ToneVariant],
    canonical_index: Mapping[str, str],
    plain_glyphs: Mapping[str, str],
    droppable: Set[str],
) -> ToneDerivation:
    """
    Derive tone rules and explicit fallbacks for every stem.

    Args:
        variants: All tone-suffixed dictionary entries
        canonical_index: plain name -> canonical name
        plain_glyphs: plain name -> glyph
        droppable: Formula-derivable names (always stored explicitly)

    Returns:
        ToneDerivation with rules, explicit entries and reconstructed bases
    """
    result = ToneDerivation()

    for stem, members in sorted(group_tone_variants(variants, canonical_index).items()):
        if stem in droppable:
            # formula names have no base table entry for a rule to edit
            logger.debug(f"No rule for {stem}: formula-derivable stem")
            result.explicit_tones.update(explicit_entries(stem, members))
            continue

        base = plain_glyphs.get(stem)
        if base is None:
            base = strip_tone_modifiers(members[0].glyph)
            result.reconstructed_bases[stem] = base

        rule = derive_stem_rule(stem, base, members)
        if rule is not None:
            result.tone_rules[stem] = rule
        else:
            result.explicit_tones.update(explicit_entries(stem, members))

    logger.info(
        f"Derived {len(result.tone_rules)} tone rules, "
        f"{len(result.explicit_tones)} explicit tone entries"
    )
    return result
