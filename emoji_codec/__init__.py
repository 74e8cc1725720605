# Emoji Codec
# Compresses an emoji name -> glyph dictionary into base/alias/tone tables
# and resolves names back to glyphs.

from .types import (
    DictionaryEntry,
    ToneVariant,
    ToneRule,
    CanonicalGroup,
    CodecTables,
    Mismatch,
    GenerationStats,
)

from .errors import (
    CodecError,
    DictionaryFormatError,
    TableInvariantError,
    RoundTripError,
)

from .loader import (
    load_dictionary,
    parse_tone_suffix,
    classify_entries,
)

from .families import (
    algorithmic_glyph,
    find_droppable,
)

from .canonical import (
    build_canonical_groups,
    pick_canonical,
)

from .tone_rules import (
    compute_tone_rule,
    apply_tone_rule,
    derive_tone_rules,
)

from .lookup import (
    NOT_FOUND,
    resolve,
)

from .validator import (
    find_mismatches,
    validate_round_trip,
)

from .generator import (
    build_tables,
    generate_tables,
    generate,
)

from .config import GeneratorConfig

__all__ = [
    # Types
    "DictionaryEntry",
    "ToneVariant",
    "ToneRule",
    "CanonicalGroup",
    "CodecTables",
    "Mismatch",
    "GenerationStats",
    # Errors
    "CodecError",
    "DictionaryFormatError",
    "TableInvariantError",
    "RoundTripError",
    # Loader
    "load_dictionary",
    "parse_tone_suffix",
    "classify_entries",
    # Families
    "algorithmic_glyph",
    "find_droppable",
    # Canonicalizer
    "build_canonical_groups",
    "pick_canonical",
    # Tone rules
    "compute_tone_rule",
    "apply_tone_rule",
    "derive_tone_rules",
    # Lookup
    "NOT_FOUND",
    "resolve",
    # Validator
    "find_mismatches",
    "validate_round_trip",
    # Generator
    "build_tables",
    "generate_tables",
    "generate",
    "GeneratorConfig",
]
