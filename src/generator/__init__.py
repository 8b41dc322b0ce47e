"""Procedural level generation for worfdall."""

from .models import (
    GeneratorConfig,
    GenerationError,
    GenerationResult,
    GenerationStep,
    Highlight,
    PlacementPlan,
    EMPTY_WORD_LIST,
    ODD_WORD_COUNT,
    WORD_TOO_SHORT,
    WORD_TOO_LONG,
    INVALID_CHARACTERS,
    DUPLICATE_WORDS,
    PLACEMENT_EXHAUSTED,
)
from .parsing import parse_words, validate_words
from .generate import generate, LevelGenerator
from .verify import check_layout

__all__ = [
    # Main generation
    "generate",
    "LevelGenerator",
    "check_layout",
    # Models
    "GeneratorConfig",
    "GenerationError",
    "GenerationResult",
    "GenerationStep",
    "Highlight",
    "PlacementPlan",
    # Error codes
    "EMPTY_WORD_LIST",
    "ODD_WORD_COUNT",
    "WORD_TOO_SHORT",
    "WORD_TOO_LONG",
    "INVALID_CHARACTERS",
    "DUPLICATE_WORDS",
    "PLACEMENT_EXHAUSTED",
    # Parsing
    "parse_words",
    "validate_words",
]
