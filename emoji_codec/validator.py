"""
Emoji Codec - Round-Trip Validator

Replays lookup against every source entry before an artifact is written.

The validator checks:
    1. resolve(name) == glyph for every dictionary entry
    2. Alias targets are canonical names, never other aliases
    3. No formula-derivable name is stored in the base table
    4. Every tone rule has a base glyph to apply to
"""
from __future__ import annotations
import logging
from typing import Callable, Iterable, List, Mapping, Optional, Set, Tuple

from .errors import RoundTripError, TableInvariantError
from .lookup import resolve
from .types import CodecTables, Mismatch

logger = logging.getLogger(__name__)

Resolver = Callable[[str, CodecTables], Optional[str]]


def find_mismatches(
    dictionary: Mapping[str, str],
    tables: CodecTables,
    resolver: Resolver = resolve,
) -> List[Mismatch]:
    """Every dictionary entry the tables fail to reproduce, in dictionary order."""
    mismatches = []
    for name, glyph in dictionary.items():
        actual = resolver(name, tables)
        if actual != glyph:
            mismatches.append(Mismatch(name=name, expected=glyph, actual=actual))
    return mismatches


def validate_table_invariants(tables: CodecTables, droppable: Set[str]) -> Tuple[bool, List[str]]:
    """
    Check structural invariants of generated tables.

    Returns:
        Tuple of (is_valid, list_of_error_messages)
    """
    errors = []

    for alias, target in tables.aliases.items():
        if target in tables.aliases:
            errors.append(f"Alias '{alias}' points to another alias '{target}'")
        elif target not in tables.base and target not in droppable:
            errors.append(f"Alias '{alias}' points to unknown name '{target}'")

    for name in tables.base:
        if name in droppable:
            errors.append(f"Formula-derivable name '{name}' stored in base table")

    for stem in tables.tone_rules:
        if stem not in tables.base:
            errors.append(f"Tone rule for '{stem}' has no base glyph")

    return len(errors) == 0, errors


def validate_round_trip(
    dictionary: Mapping[str, str],
    tables: CodecTables,
    droppable: Iterable[str] = (),
    resolver: Resolver = resolve,
) -> None:
    """
    Raise unless the tables are sound and reproduce the whole dictionary.

    Raises:
        TableInvariantError: If an alias chains, a droppable name is stored,
            or a rule has no base
        RoundTripError: If any entry resolves to a different glyph; carries
            every mismatch, not only the first
    """
    is_valid, errors = validate_table_invariants(tables, set(droppable))
    if not is_valid:
        raise TableInvariantError(errors)

    mismatches = find_mismatches(dictionary, tables, resolver)
    if mismatches:
        logger.error(f"Round trip failed for {len(mismatches)} of {len(dictionary)} entries")
        raise RoundTripError(mismatches)

    logger.info(f"Round trip OK for {len(dictionary)} entries")
