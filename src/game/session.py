import logging
import random
from typing import List, Dict, Optional
from pydantic import BaseModel, Field, ConfigDict

from ..engine.models import Grid, Position, SwapHint
from ..engine.scanner import normalize_dictionary
from ..engine.swap import are_adjacent, evaluate_swap
from ..engine.gravity import collapse
from ..engine.hint import generate_hint
from .models import Level, AttemptOutcome, SwapAttempt


logger = logging.getLogger(__name__)

DEFAULT_HINTS = 3


class GameSession(BaseModel):
    """
    One attempt at a level.

    Owns the live play grid and the found-words set. Every move replaces the
    grid with a new value; nothing else holds a reference to it.

    Attributes:
        level: The level being played
        grid: Current play grid
        dictionary: Normalized level dictionary
        found_words: Words already credited in this attempt
        hints_remaining: Hints the player may still request
        seed: Optional random seed for hint selection
        history: Every swap attempt, in order
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    level: Level
    grid: Grid = Field(default_factory=Grid)
    dictionary: List[str] = Field(default_factory=list)
    found_words: List[str] = Field(default_factory=list)
    max_hints: int = Field(default=DEFAULT_HINTS, ge=0)
    hints_remaining: int = Field(default=DEFAULT_HINTS, ge=0)
    seed: Optional[int] = None
    history: List[SwapAttempt] = Field(default_factory=list)
    _rng: random.Random = None

    def model_post_init(self, __context) -> None:
        """Initialize the random generator after model creation."""
        self._rng = random.Random(self.seed)

    @classmethod
    def create(cls, level: Level, max_hints: int = DEFAULT_HINTS, seed: Optional[int] = None) -> "GameSession":
        """
        Factory method to start a fresh attempt at a level.

        Args:
            level: Level descriptor to play
            max_hints: Number of hints available
            seed: Optional random seed for reproducible hints

        Returns:
            A new GameSession with the trimmed play grid loaded
        """
        session = cls(level=level, max_hints=max_hints, hints_remaining=max_hints, seed=seed)
        session.restart()
        return session

    def restart(self) -> None:
        """Reload the level grid and forget found words."""
        self.grid = self.level.to_grid()
        self.dictionary = list(normalize_dictionary(self.level.valid_words))
        self.found_words = []
        self.hints_remaining = self.max_hints
        self.history = []
        logger.info("Level %s loaded with %d visible letters", self.level.id, self.remaining_letters)

    @property
    def remaining_letters(self) -> int:
        return self.grid.visible_count

    @property
    def is_complete(self) -> bool:
        return self.remaining_letters == 0

    def attempt_swap(self, pos_a: Position, pos_b: Position) -> SwapAttempt:
        """
        Try to swap two cells.

        A legal swap is committed: letters are exchanged, the completed words
        are cleared and the grid collapses. Any other outcome leaves the grid
        as it was.
        """
        pos_a, pos_b = Position(*pos_a), Position(*pos_b)

        if not (are_adjacent(pos_a, pos_b) and self.grid.is_letter(pos_a) and self.grid.is_letter(pos_b)):
            attempt = SwapAttempt(outcome=AttemptOutcome.NOT_ADJACENT, pos_a=pos_a, pos_b=pos_b)
            self.history.append(attempt)
            return attempt

        result = evaluate_swap(self.grid, pos_a, pos_b, self.dictionary)
        attempt = SwapAttempt(
            outcome=AttemptOutcome(result.outcome.value),
            pos_a=pos_a,
            pos_b=pos_b,
            words_found=result.words_found,
            validation=result,
        )

        if result.legal:
            swapped = self.grid.swap_letters(pos_a, pos_b)
            self.grid = collapse(swapped.clear(result.positions))

            new_words = []
            for word in result.words_found:
                if word not in self.found_words and word not in new_words:
                    new_words.append(word)
            self.found_words.extend(new_words)

            attempt.cleared = list(result.positions)
            attempt.new_words = new_words
            logger.info("Swap %s <-> %s cleared %s; %d letters left",
                        tuple(pos_a), tuple(pos_b), result.words_found, self.remaining_letters)
        else:
            logger.debug("Swap %s <-> %s rejected (%s)", tuple(pos_a), tuple(pos_b), result.outcome.value)

        self.history.append(attempt)
        return attempt

    def hint(self) -> Optional[SwapHint]:
        """
        Ask for a hint on the live grid.

        A hint is only charged when one is found. Returns None when hints are
        used up or no swap completes two unfound words.
        """
        if self.hints_remaining <= 0:
            logger.info("No hints remaining")
            return None

        hint = generate_hint(self.grid, self.dictionary, self.found_words, rng=self._rng)
        if hint is not None:
            self.hints_remaining -= 1
        return hint

    def get_state(self) -> Dict:
        """
        Get the current session state as a dictionary.

        Useful for serialization and logging.
        """
        return {
            "level_id": self.level.id,
            "grid": self.grid.to_rows(),
            "remaining_letters": self.remaining_letters,
            "found_words": list(self.found_words),
            "hints_remaining": self.hints_remaining,
            "is_complete": self.is_complete,
            "moves": len(self.history),
        }
