"""
Swap validation.

A swap is legal only when the exchanged letters complete at least two distinct
dictionary words. Exactly one word is reported as a separate outcome so the
caller can give weaker feedback than for a plain invalid swap.
"""

from typing import Iterable, List

from .models import Grid, Position, SwapOutcome, SwapResult, WordMatch
from .scanner import normalize_dictionary, run_through, match_words


MIN_WORDS_FOR_LEGAL_SWAP = 2


def are_adjacent(a: Position, b: Position) -> bool:
    """True when the positions share a row or column and differ by one."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


def distinct_words(matches: Iterable[WordMatch]) -> List[str]:
    """Matched words in order, each listed once."""
    words: List[str] = []
    for match in matches:
        if match.word not in words:
            words.append(match.word)
    return words


def detect_swap_words(
    grid: Grid,
    a: Position,
    b: Position,
    dictionary: Iterable[str],
) -> List[WordMatch]:
    """
    Words a swap of `a` and `b` would complete.

    The letters are exchanged on a scratch grid, then the horizontal and
    vertical runs through both positions are matched against the dictionary.
    A match only counts when it covers one of the swapped cells; an earlier
    copy of the same word elsewhere in the run is skipped over. Matches are
    de-duplicated, so a run shared by both positions is counted once.
    """
    if not (grid.is_letter(a) and grid.is_letter(b)):
        return []

    words = normalize_dictionary(dictionary)
    scratch = grid.swap_letters(a, b)

    matches: List[WordMatch] = []
    for pos in (a, b):
        for orientation in ('H', 'V'):
            run = run_through(scratch, pos, orientation)
            if run is None:
                continue
            for match in match_words(run, words, covering=(a, b)):
                if match not in matches:
                    matches.append(match)

    # Order independent of which position was passed first
    return sorted(matches, key=lambda m: (m.positions[0], m.orientation, m.word))


def evaluate_swap(
    grid: Grid,
    a: Position,
    b: Position,
    dictionary: Iterable[str],
) -> SwapResult:
    """
    Decide whether swapping two adjacent letters is a legal move.

    The grid is not modified; committing the swap is up to the caller.

    Raises:
        ValueError: If the positions are not 4-adjacent visible letters
    """
    if not are_adjacent(a, b):
        raise ValueError(f"Positions {tuple(a)} and {tuple(b)} are not adjacent")
    if not (grid.is_letter(a) and grid.is_letter(b)):
        raise ValueError(f"Both {tuple(a)} and {tuple(b)} must hold letters")

    matches = detect_swap_words(grid, a, b, dictionary)
    words = distinct_words(matches)

    if len(words) >= MIN_WORDS_FOR_LEGAL_SWAP:
        outcome = SwapOutcome.LEGAL
    elif len(words) == 1:
        outcome = SwapOutcome.SINGLE_WORD
    else:
        outcome = SwapOutcome.INVALID

    positions = sorted({pos for match in matches for pos in match.positions})

    return SwapResult(
        outcome=outcome,
        words_found=words,
        positions=positions,
        matches=matches,
    )
