"""
Emoji Codec - Generator

Runs the whole pipeline on one dictionary:

    load -> classify -> find droppable -> canonicalize -> derive tone rules
         -> validate round trip -> render -> write

Validation runs before anything is written; a failed run leaves no artifact.
"""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Set, Union

from .canonical import (
    build_alias_table,
    build_base_table,
    build_canonical_groups,
    build_canonical_index,
)
from .emitter import DEFAULT_GENERATOR, render_module, write_module
from .families import find_droppable
from .loader import classify_entries, load_dictionary
from .tone_rules import derive_tone_rules
from .types import CodecTables, GenerationStats
from .validator import validate_round_trip

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Tables plus the bookkeeping needed to validate and report on them."""
    tables: CodecTables
    droppable: Set[str] = field(default_factory=set)
    stats: GenerationStats = field(default_factory=GenerationStats)


def build_tables(dictionary: Mapping[str, str]) -> GenerationResult:
    """
    Compress a name -> glyph dictionary into codec tables.

    The result is not validated; call validate_round_trip (or use
    generate_tables) before exposing it.
    """
    tone_variants, plain = classify_entries(dict(dictionary))
    droppable = find_droppable(plain)

    groups = build_canonical_groups(plain, droppable)
    aliases = build_alias_table(groups)
    base = build_base_table(groups, droppable)

    derivation = derive_tone_rules(
        tone_variants,
        canonical_index=build_canonical_index(groups),
        plain_glyphs={entry.name: entry.glyph for entry in plain},
        droppable=droppable,
    )
    for stem, glyph in derivation.reconstructed_bases.items():
        base.setdefault(stem, glyph)

    tables = CodecTables(
        base=base,
        aliases=aliases,
        tone_rules=derivation.tone_rules,
        explicit_tones=derivation.explicit_tones,
    )
    stats = GenerationStats(
        source_keys=len(dictionary),
        unique_glyphs=len(set(dictionary.values())),
        base_entries=len(base),
        alias_entries=len(aliases),
        tone_rule_stems=len(derivation.tone_rules),
        explicit_tone_entries=len(derivation.explicit_tones),
        droppable_names=len(droppable),
        tone_variant_names=len(tone_variants),
    )
    return GenerationResult(tables=tables, droppable=droppable, stats=stats)


def generate_tables(dictionary: Mapping[str, str]) -> GenerationResult:
    """build_tables followed by validation. Raises CodecError on any failure."""
    result = build_tables(dictionary)
    validate_round_trip(dictionary, result.tables, droppable=result.droppable)
    return result


def source_label(input_path: Union[str, Path]) -> str:
    """Input path as shown in the generated header: cwd-relative, forward slashes."""
    path = Path(input_path).resolve()
    try:
        label = os.path.relpath(path, Path.cwd())
    except ValueError:
        label = str(path)
    return label.replace("\\", "/")


def generate(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    generator: str = DEFAULT_GENERATOR,
) -> GenerationResult:
    """
    Load a dictionary file, build and validate tables, write the module.

    Raises:
        OSError: If the input does not exist or cannot be read
        DictionaryFormatError: If the input is malformed
        RoundTripError / TableInvariantError: If validation fails; nothing is written
    """
    dictionary = load_dictionary(input_path)
    result = generate_tables(dictionary)

    text = render_module(result.tables, source=source_label(input_path), generator=generator)
    written = write_module(output_path, text)
    logger.info(f"Wrote {written}")
    return result


def summarize_stats(stats: GenerationStats) -> Dict[str, int]:
    """Human-readable stat labels -> values, in report order."""
    return {
        "Original keys": stats.source_keys,
        "Original unique emoji values": stats.unique_glyphs,
        "BASE entries": stats.base_entries,
        "ALIAS entries": stats.alias_entries,
        "TONE_RULES stems": stats.tone_rule_stems,
        "EXPLICIT_TONES entries": stats.explicit_tone_entries,
        "Droppable algorithmic entries": stats.droppable_names,
        "Tone-variant keys (generated at runtime)": stats.tone_variant_names,
    }
