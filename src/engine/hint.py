"""Next-move hints over a live grid."""

import logging
import random
from typing import Iterable, List, Optional, Tuple

from .models import Grid, Position, SwapHint, HintPositionError, WordMatch
from .scanner import normalize_dictionary
from .swap import detect_swap_words, distinct_words, MIN_WORDS_FOR_LEGAL_SWAP


logger = logging.getLogger(__name__)

# Half of the eight neighbours, so each unordered pair is visited once
HINT_DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (0, 1),    # right
    (1, 0),    # down
    (1, 1),    # down-right
    (1, -1),   # down-left
)


def check_bounds(grid: Grid, *positions: Position) -> None:
    """
    Raises:
        HintPositionError: If any position lies outside the grid
    """
    for pos in positions:
        if not grid.in_bounds(pos):
            raise HintPositionError(
                f"Hint position {tuple(pos)} outside {grid.height}x{grid.width} grid"
            )


def find_swap_candidates(
    grid: Grid,
    dictionary: Iterable[str],
) -> List[Tuple[Position, Position, List[WordMatch]]]:
    """Every neighbouring letter pair whose swap would complete at least one word."""
    words = normalize_dictionary(dictionary)
    candidates = []

    for pos in grid.letter_positions():
        for dr, dc in HINT_DIRECTIONS:
            other = Position(pos.row + dr, pos.col + dc)
            if not grid.is_letter(other):
                continue
            matches = detect_swap_words(grid, pos, other, words)
            if matches:
                candidates.append((pos, other, matches))

    return candidates


def generate_hint(
    grid: Grid,
    dictionary: Iterable[str],
    found_words: Iterable[str] = (),
    rng: Optional[random.Random] = None,
) -> Optional[SwapHint]:
    """
    Pick a swap that would complete two or more words not yet found.

    `grid` is the live play grid owned by the caller. Returns None when no
    such swap exists.
    """
    rng = rng or random.Random()
    found = {w.upper() for w in found_words}

    qualifying = []
    for pos_a, pos_b, matches in find_swap_candidates(grid, dictionary):
        new_words = [w for w in distinct_words(matches) if w not in found]
        logger.debug("Swap %s <-> %s creates %s (new: %s)",
                     tuple(pos_a), tuple(pos_b), [m.word for m in matches], new_words)
        if len(new_words) >= MIN_WORDS_FOR_LEGAL_SWAP:
            qualifying.append(SwapHint(pos_a=pos_a, pos_b=pos_b, words_created=new_words))

    if not qualifying:
        logger.info("No hint available: no swap completes two unfound words")
        return None

    hint = rng.choice(qualifying)
    check_bounds(grid, hint.pos_a, hint.pos_b)
    logger.info("Hint %s <-> %s from %d candidates",
                tuple(hint.pos_a), tuple(hint.pos_b), len(qualifying))
    return hint


def position_hint(
    grid: Grid,
    dictionary: Iterable[str],
    found_words: Iterable[str] = (),
    rng: Optional[random.Random] = None,
) -> Optional[Position]:
    """A weaker hint: just one of the two cells of a hinted swap."""
    rng = rng or random.Random()
    hint = generate_hint(grid, dictionary, found_words, rng=rng)
    if hint is None:
        return None
    return hint.pos_a if rng.random() < 0.5 else hint.pos_b
