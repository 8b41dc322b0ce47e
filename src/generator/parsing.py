"""Word list parsing and validation."""

import re
from typing import List, Optional

from .models import (
    GenerationError,
    EMPTY_WORD_LIST,
    ODD_WORD_COUNT,
    WORD_TOO_SHORT,
    WORD_TOO_LONG,
    INVALID_CHARACTERS,
    DUPLICATE_WORDS,
)
from ..engine.scanner import MIN_RUN_LENGTH


def parse_words(text: str) -> List[str]:
    """Split raw input on newlines, commas or spaces into uppercase words."""
    return [w.upper() for w in re.split(r'[\s,;]+', text.strip()) if w]


def validate_words(words: List[str], grid_size: int) -> Optional[GenerationError]:
    """
    Check a word list before any placement is attempted.

    Returns the first problem found, or None if the list can be generated.
    """
    if not words:
        return GenerationError(
            code=EMPTY_WORD_LIST,
            message="Please enter at least two words"
        )

    if len(words) % 2 != 0:
        return GenerationError(
            code=ODD_WORD_COUNT,
            message=f"Words are placed in pairs; got an odd count ({len(words)})",
            words=list(words)
        )

    bad = [w for w in words if not re.fullmatch(r'[A-Za-z]+', w)]
    if bad:
        return GenerationError(
            code=INVALID_CHARACTERS,
            message=f"Words may only contain letters: {', '.join(bad)}",
            words=bad
        )

    repeated = sorted({w for w in words if words.count(w) > 1})
    if repeated:
        return GenerationError(
            code=DUPLICATE_WORDS,
            message=f"Each word may only appear once: {', '.join(repeated)}",
            words=repeated
        )

    short = [w for w in words if len(w) < MIN_RUN_LENGTH]
    if short:
        return GenerationError(
            code=WORD_TOO_SHORT,
            message=f"Words need at least {MIN_RUN_LENGTH} letters: {', '.join(short)}",
            words=short
        )

    long = [w for w in words if len(w) > grid_size]
    if long:
        return GenerationError(
            code=WORD_TOO_LONG,
            message=f"Words longer than the {grid_size}-cell grid: {', '.join(long)}",
            words=long
        )

    return None
