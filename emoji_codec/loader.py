"""
Emoji Codec - Source Loader & Classifier

Loads the name -> glyph dictionary and splits it into tone-suffixed names and
plain names. Nothing is dropped: every entry lands in exactly one partition.
"""
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from .constants import TONE_SUFFIX_RE, tone_token_to_number
from .errors import DictionaryFormatError
from .types import DictionaryEntry, ToneVariant

logger = logging.getLogger(__name__)


def load_dictionary(path: Union[str, Path]) -> Dict[str, str]:
    """
    Load a JSON emoji dictionary.

    Args:
        path: Path to a UTF-8 JSON object mapping names to glyph strings

    Returns:
        Dict of name -> glyph, in file order

    Raises:
        FileNotFoundError: If the file does not exist
        OSError: If the path cannot be read (e.g. a directory)
        DictionaryFormatError: If the document is not UTF-8 JSON or not an object of strings
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Dictionary not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as e:
            raise DictionaryFormatError(f"{path}: invalid JSON ({e})") from e
        except UnicodeDecodeError as e:
            raise DictionaryFormatError(f"{path}: not UTF-8 ({e})") from e

    return validate_dictionary(raw, source=str(path))


def validate_dictionary(raw, source: str = "<dictionary>") -> Dict[str, str]:
    """Check that raw is a mapping of non-empty names to non-empty glyph strings."""
    if not isinstance(raw, dict):
        raise DictionaryFormatError(f"{source}: expected a JSON object, got {type(raw).__name__}")

    for name, glyph in raw.items():
        if not isinstance(name, str) or not name:
            raise DictionaryFormatError(f"{source}: invalid name {name!r}")
        if not isinstance(glyph, str) or not glyph:
            raise DictionaryFormatError(f"{source}: glyph for {name!r} must be a non-empty string")

    logger.info(f"Loaded {len(raw)} entries from {source}")
    return dict(raw)


def parse_tone_suffix(name: str) -> Optional[Tuple[str, Tuple[int, ...]]]:
    """
    Split a trailing one- or two-token tone suffix off a name.

    Examples:
        >>> parse_tone_suffix("thumbsup_tone2")
        ('thumbsup', (2,))
        >>> parse_tone_suffix("handshake_light_skin_tone_dark_skin_tone")
        ('handshake', (1, 5))
        >>> parse_tone_suffix("_tone1") is None
        True

    Returns:
        (stem, tones) or None when the name carries no tone suffix
    """
    match = TONE_SUFFIX_RE.fullmatch(name)
    if not match:
        return None

    first = tone_token_to_number(match.group("first"))
    second_token = match.group("second")
    if first is None:
        return None
    if second_token is None:
        return match.group("stem"), (first,)

    second = tone_token_to_number(second_token)
    if second is None:
        return None
    return match.group("stem"), (first, second)


def classify_entries(
    dictionary: Dict[str, str],
) -> Tuple[List[ToneVariant], List[DictionaryEntry]]:
    """
    Partition the dictionary into tone variants and plain entries.

    Returns:
        (tone_variants, plain_entries), both in dictionary order
    """
    tone_variants: List[ToneVariant] = []
    plain: List[DictionaryEntry] = []

    for name, glyph in dictionary.items():
        parsed = parse_tone_suffix(name)
        if parsed is None:
            plain.append(DictionaryEntry(name=name, glyph=glyph))
            continue
        stem, tones = parsed
        tone_variants.append(ToneVariant(name=name, stem=stem, tones=tones, glyph=glyph))

    logger.info(f"Classified {len(tone_variants)} tone variants, {len(plain)} plain names")
    return tone_variants, plain
