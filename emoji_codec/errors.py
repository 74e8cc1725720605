"""
Emoji Codec - Exceptions

Unknown names are not errors: lookup returns None for them. Only a malformed
source dictionary or a failed round trip stops generation.
"""
from typing import List

from .types import Mismatch


class CodecError(Exception):
    """Base class for table generation failures."""


class DictionaryFormatError(CodecError, ValueError):
    """The source dictionary is not a JSON object of name -> glyph strings."""


class TableInvariantError(CodecError):
    """Generated tables break a structural invariant (alias chain, stored droppable name)."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class RoundTripError(CodecError):
    """Generated tables do not reproduce the source dictionary."""

    def __init__(self, mismatches: List[Mismatch]):
        self.mismatches = list(mismatches)
        super().__init__(f"Validation failed. Mismatches: {len(self.mismatches)}")
