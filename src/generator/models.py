"""Data models for level generation."""

from typing import List, Optional, Literal, Tuple
from pydantic import BaseModel, Field

from ..engine.models import Position, Orientation


# Error codes
EMPTY_WORD_LIST = "EMPTY_WORD_LIST"
ODD_WORD_COUNT = "ODD_WORD_COUNT"
WORD_TOO_SHORT = "WORD_TOO_SHORT"
WORD_TOO_LONG = "WORD_TOO_LONG"
INVALID_CHARACTERS = "INVALID_CHARACTERS"
DUPLICATE_WORDS = "DUPLICATE_WORDS"
PLACEMENT_EXHAUSTED = "PLACEMENT_EXHAUSTED"

INVALID_WORD_LIST_CODES = (
    EMPTY_WORD_LIST,
    ODD_WORD_COUNT,
    WORD_TOO_SHORT,
    WORD_TOO_LONG,
    INVALID_CHARACTERS,
    DUPLICATE_WORDS,
)


class GeneratorConfig(BaseModel):
    """Configuration for a generation run."""
    grid_size: int = Field(default=20, ge=3, le=100)
    max_attempts: int = Field(default=1000, ge=1)
    horizontal_bias: float = Field(default=0.7, ge=0.0, le=1.0)
    seed: Optional[int] = None
    record_steps: bool = False


class GenerationError(BaseModel):
    """Why a word list could not be turned into a level."""
    code: str
    message: str
    words: List[str] = Field(default_factory=list)

    @property
    def is_invalid_word_list(self) -> bool:
        return self.code in INVALID_WORD_LIST_CODES


class Highlight(BaseModel):
    """A cell singled out in a debug step."""
    row: int
    col: int
    mark: Literal['new', 'word1', 'word2', 'swap']


class GenerationStep(BaseModel):
    """Snapshot of the canvas at one point of generation."""
    description: str
    grid: List[str]
    highlights: List[Highlight] = Field(default_factory=list)


class PlacementPlan(BaseModel):
    """Where one word pair went and which of its letters were swapped."""
    words: Tuple[str, str]
    orientation: Orientation
    word1_positions: List[Position]
    word2_positions: List[Position]
    shifted_columns: List[int] = Field(default_factory=list)
    swap: Optional[Tuple[Position, Position]] = None


class GenerationResult(BaseModel):
    """Result of generating a level from a word list."""
    success: bool
    grid: List[str] = Field(default_factory=list)
    valid_words: List[str] = Field(default_factory=list)
    placements: List[PlacementPlan] = Field(default_factory=list)
    steps: List[GenerationStep] = Field(default_factory=list)
    error: Optional[GenerationError] = None
