"""
Level generation from a word list.

Words are shuffled into pairs. Each pair is written onto the canvas so the
two words touch, then one letter of each word is exchanged across the seam
(the obfuscation swap). Undoing that swap is the move that completes both
words again. The canvas is settled under gravity after every pair, and a
placement is kept only if the whole layout still solves newest pair first.
"""

import logging
import random
from typing import Any, Dict, Iterable, List, Optional

from ..engine.models import GAP, Grid, Orientation, Position
from ..engine.gravity import settle
from .models import (
    GeneratorConfig,
    GenerationError,
    GenerationResult,
    GenerationStep,
    Highlight,
    PlacementPlan,
    PLACEMENT_EXHAUSTED,
)
from .parsing import validate_words
from .verify import check_layout, tile_slots
from .placement import (
    Canvas,
    apply_pair,
    first_pair_positions,
    is_valid_placement,
    sample_positions,
)


logger = logging.getLogger(__name__)


def _canvas_rows(canvas: Canvas) -> List[str]:
    return [''.join(row) for row in canvas]


def _snapshot(description: str, canvas: Canvas, highlights: Optional[List[Highlight]] = None) -> GenerationStep:
    return GenerationStep(
        description=description,
        grid=_canvas_rows(canvas),
        highlights=highlights or [],
    )


def _move_plan(plan: PlacementPlan, *mappings: Dict[Position, Position]) -> PlacementPlan:
    """Follow a plan's cells through successive position mappings."""
    def follow(pos: Position) -> Position:
        for mapping in mappings:
            pos = mapping.get(pos, pos)
        return pos

    return plan.model_copy(update={
        "word1_positions": [follow(p) for p in plan.word1_positions],
        "word2_positions": [follow(p) for p in plan.word2_positions],
        "swap": tuple(follow(p) for p in plan.swap),
    })


def _choose_orientation(rng: random.Random, horizontal_bias: float) -> Orientation:
    return 'H' if rng.random() < horizontal_bias else 'V'


class LevelGenerator:
    """
    Builds one level from a word list.

    Attributes:
        config: Generation settings
        rng: Random source; seeded from config.seed
        canvas: Working canvas, replaced after every placed pair
        placements: Placed pairs, positions kept in current canvas coordinates
        words: The level dictionary, set by run
        steps: Debug snapshots when config.record_steps is set
    """

    def __init__(self, config: GeneratorConfig, rng: Optional[random.Random] = None):
        self.config = config
        self.rng = rng or random.Random(config.seed)
        size = config.grid_size
        self.canvas: Canvas = [[GAP] * size for _ in range(size)]
        self.placements: List[PlacementPlan] = []
        self.words: List[str] = []
        self.steps: List[GenerationStep] = []

    def _record(self, description: str, canvas: Canvas, highlights: Optional[List[Highlight]] = None) -> None:
        if self.config.record_steps:
            self.steps.append(_snapshot(description, canvas, highlights))

    def _try_pair(self, word1: str, word2: str, is_first: bool):
        """One randomized placement attempt for a pair."""
        orientation = _choose_orientation(self.rng, self.config.horizontal_bias)

        if is_first:
            positions1, positions2 = first_pair_positions(
                self.config.grid_size, word1, word2, orientation, self.rng
            )
        else:
            sampled = sample_positions(self.canvas, word1, word2, orientation, self.rng)
            if sampled is None:
                return None
            positions1, positions2 = sampled
            if not is_valid_placement(self.canvas, positions1, positions2, orientation):
                return None

        return apply_pair(
            self.canvas, word1, word2, orientation,
            positions1, positions2, self.rng, shift=not is_first,
        )

    def place_pair(self, word1: str, word2: str, pair_index: int) -> bool:
        """Place one pair, retrying up to config.max_attempts times."""
        is_first = pair_index == 0

        for attempt in range(self.config.max_attempts):
            placed = self._try_pair(word1, word2, is_first)
            if placed is None:
                continue

            unswapped, swapped, plan, moves = placed

            settled = settle(Grid.from_rows(_canvas_rows(swapped)))
            landed = tile_slots(settled)
            placements = [_move_plan(p, moves, landed) for p in self.placements]
            placements.append(_move_plan(plan, landed))

            rows = settled.to_rows()
            problem = check_layout(rows, placements, self.words)
            if problem:
                logger.debug("Attempt %d for %s, %s rejected: %s", attempt + 1, word1, word2, problem)
                continue

            logger.info(
                "Placed pair %d (%s, %s) %s after %d attempts",
                pair_index + 1, word1, word2,
                "horizontally" if plan.orientation == 'H' else "vertically",
                attempt + 1,
            )
            self._record_pair(pair_index, plan, unswapped)

            self.canvas = [list(row) for row in rows]
            self.placements = placements
            self._record(f"Pair {pair_index + 1}: After applying gravity", self.canvas)
            return True

        logger.warning("Failed to place pair %s, %s after %d attempts",
                       word1, word2, self.config.max_attempts)
        return False

    def _record_pair(self, pair_index: int, plan: PlacementPlan, unswapped: Canvas) -> None:
        if not self.config.record_steps:
            return

        label = f"Pair {pair_index + 1}: {plan.words[0]}, {plan.words[1]}"
        new_cells = plan.word1_positions + plan.word2_positions

        if pair_index > 0:
            self._record(
                f"{label} - Before shifting letters upward",
                self.canvas,
                [Highlight(row=p.row, col=p.col, mark='new') for p in new_cells],
            )

        direction = "horizontal" if plan.orientation == 'H' else "vertical"
        self._record(
            f"{label} - Planned positions ({direction})",
            unswapped,
            [Highlight(row=p.row, col=p.col, mark='word1') for p in plan.word1_positions]
            + [Highlight(row=p.row, col=p.col, mark='word2') for p in plan.word2_positions],
        )

        a, b = plan.swap
        self._record(
            f"Pair {pair_index + 1}: Letters swapped between positions",
            unswapped,
            [Highlight(row=a.row, col=a.col, mark='swap'), Highlight(row=b.row, col=b.col, mark='swap')],
        )

    def run(self, words: List[str]) -> GenerationResult:
        error = validate_words(words, self.config.grid_size)
        if error is not None:
            logger.warning("Rejected word list: %s", error.message)
            return GenerationResult(success=False, error=error)

        self.words = list(words)
        self._record("Initial empty grid", self.canvas)

        shuffled = list(words)
        self.rng.shuffle(shuffled)
        pairs = [(shuffled[i], shuffled[i + 1]) for i in range(0, len(shuffled), 2)]
        logger.info("Generating level from %d words in %d pairs", len(words), len(pairs))

        for index, (word1, word2) in enumerate(pairs):
            if not self.place_pair(word1, word2, index):
                return GenerationResult(
                    success=False,
                    placements=self.placements,
                    steps=self.steps,
                    error=GenerationError(
                        code=PLACEMENT_EXHAUSTED,
                        message=(
                            f"Failed to place word pair: {word1}, {word2}. "
                            f"Try different words or fewer pairs."
                        ),
                        words=[word1, word2],
                    ),
                )

        self._record("Final grid", self.canvas)

        return GenerationResult(
            success=True,
            grid=_canvas_rows(self.canvas),
            valid_words=list(words),
            placements=self.placements,
            steps=self.steps,
        )


def generate(
    words: Iterable[str],
    grid_size: Optional[int] = None,
    config: Optional[GeneratorConfig] = None,
    rng: Optional[random.Random] = None,
    **config_kwargs: Any,
) -> GenerationResult:
    """
    Generate a level grid from a word list.

    Args:
        words: An even number of words, three letters or longer
        grid_size: Canvas size; overrides config.grid_size when given
        config: Optional GeneratorConfig instance
        rng: Random source; defaults to one seeded from config.seed
        **config_kwargs: Config parameters if config not provided

    Returns:
        GenerationResult holding either the grid rows and dictionary or a
        structured error. Nothing is raised for bad input.
    """
    if config is None:
        config = GeneratorConfig(**config_kwargs)
    if grid_size is not None:
        config = GeneratorConfig(**{**config.model_dump(), "grid_size": grid_size})

    words = [w.strip().upper() for w in words]
    return LevelGenerator(config, rng=rng).run(words)
