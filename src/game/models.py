"""
Pydantic models for the play layer.

Level descriptors as handed over by a level catalog or the generator, and the
results of swap attempts made during a session.
"""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from ..engine.models import GAP, Grid, Position, SwapResult
from ..generator.models import GenerationResult


class Level(BaseModel):
    """
    A playable level.

    Attributes:
        id: Catalog number
        name: Display name
        theme: Optional theme shared by the words
        grid: Authoring grid rows; a space marks a gap
        valid_words: The level dictionary
    """
    id: int = 0
    name: str = ""
    theme: Optional[str] = None
    grid: List[str]
    valid_words: List[str] = Field(default_factory=list)

    @field_validator("grid", mode="before")
    @classmethod
    def _join_rows(cls, rows):
        """Accept rows given as lists of characters and pad them to a rectangle."""
        rows = [''.join(ch or GAP for ch in row) if not isinstance(row, str) else row for row in rows]
        width = max((len(r) for r in rows), default=0)
        return [r.ljust(width, GAP) for r in rows]

    @field_validator("valid_words")
    @classmethod
    def _upper_words(cls, words: List[str]) -> List[str]:
        return [w.strip().upper() for w in words if w.strip()]

    @classmethod
    def from_generation(cls, result: GenerationResult, **fields) -> "Level":
        """
        Wrap a successful generator result.

        Raises:
            ValueError: If the generation failed
        """
        if not result.success:
            message = result.error.message if result.error else "unknown error"
            raise ValueError(f"Cannot build a level from a failed generation: {message}")
        fields.setdefault("name", "Generated Level")
        return cls(grid=result.grid, valid_words=result.valid_words, **fields)

    def to_grid(self) -> Grid:
        """The play grid: authoring grid trimmed to its letters."""
        return Grid.from_rows(self.grid).trim()


class AttemptOutcome(str, Enum):
    LEGAL = "LEGAL"
    SINGLE_WORD = "SINGLE_WORD"
    INVALID = "INVALID"
    NOT_ADJACENT = "NOT_ADJACENT"


class SwapAttempt(BaseModel):
    """Result of a player trying to swap two cells."""
    outcome: AttemptOutcome
    pos_a: Position
    pos_b: Position
    words_found: List[str] = Field(default_factory=list)
    cleared: List[Position] = Field(default_factory=list)
    new_words: List[str] = Field(default_factory=list)
    validation: Optional[SwapResult] = None

    @property
    def accepted(self) -> bool:
        return self.outcome == AttemptOutcome.LEGAL
