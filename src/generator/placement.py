"""
Word pair placement on the authoring canvas.

The canvas is a square list of character rows where a space is open sky.
After every pair the canvas is settled, so each column is a solid stack
resting on the floor. New words are inserted into those stacks: letters in
the way are pushed upward, keeping their order, to make room.
"""

import logging
import random
from typing import Dict, List, Optional, Tuple

from ..engine.models import GAP, Position, Orientation
from .models import PlacementPlan


logger = logging.getLogger(__name__)

Canvas = List[List[str]]


def copy_canvas(canvas: Canvas) -> Canvas:
    return [row[:] for row in canvas]


def word_positions(word: str, row: int, col: int, orientation: Orientation) -> List[Position]:
    """Absolute cells of a word starting at (row, col)."""
    if orientation == 'H':
        return [Position(row, col + i) for i in range(len(word))]
    return [Position(row + i, col) for i in range(len(word))]


def fits(canvas: Canvas, positions: List[Position]) -> bool:
    size = len(canvas)
    return all(0 <= p.row < size and 0 <= p.col < size for p in positions)


def is_occupied(canvas: Canvas, pos: Position) -> bool:
    return canvas[pos.row][pos.col] != GAP


def is_supported(canvas: Canvas, pos: Position) -> bool:
    """A cell rests on the floor or on a letter directly below it."""
    if pos.row == len(canvas) - 1:
        return True
    return canvas[pos.row + 1][pos.col] != GAP


def column_height(canvas: Canvas, col: int) -> int:
    return sum(1 for row in canvas if row[col] != GAP)


def column_top(canvas: Canvas, col: int) -> int:
    """Row of the highest letter in a column, or the canvas size if empty."""
    for r, row in enumerate(canvas):
        if row[col] != GAP:
            return r
    return len(canvas)


def check_support(
    canvas: Canvas,
    word1: List[Position],
    word2: List[Position],
    orientation: Orientation,
) -> bool:
    """
    Every horizontal cell, or the bottom cell of a vertical word, must rest on
    something: the floor, an existing letter, or a cell of the pair itself.
    """
    new_cells = set(word1) | set(word2)

    def rests(pos: Position) -> bool:
        below = Position(pos.row + 1, pos.col)
        return is_occupied(canvas, pos) or is_supported(canvas, pos) or below in new_cells

    if orientation == 'H':
        return all(rests(p) for p in word1 + word2)
    return rests(word1[-1]) and rests(word2[-1])


def overlaps(canvas: Canvas, positions: List[Position]) -> bool:
    return any(is_occupied(canvas, p) for p in positions)


def shift_column(
    canvas: Canvas,
    col: int,
    new_positions: List[Position],
    moves: Optional[Dict[Position, Position]] = None,
) -> bool:
    """
    Push the letters of one column upward to free the rows of a new word.

    Letters at or above the lowest overlapped row move up by the number of
    new cells at or above them; letters below stay put. Mutates `canvas`,
    and records each moved letter as old position -> new position in `moves`.

    Returns False if a letter would be pushed off the top of the canvas.
    """
    new_rows = sorted(p.row for p in new_positions if p.col == col)
    existing = [(r, canvas[r][col]) for r in range(len(canvas)) if canvas[r][col] != GAP]
    overlap_rows = [r for r in new_rows if canvas[r][col] != GAP]

    if not new_rows or not existing or not overlap_rows:
        return True

    lowest_overlap = max(overlap_rows)
    to_shift = [(r, letter) for r, letter in existing if r <= lowest_overlap]
    to_keep = [(r, letter) for r, letter in existing if r > lowest_overlap]

    total_shift = sum(1 for r in new_rows if r <= to_shift[-1][0])
    start = to_shift[0][0] - total_shift
    if start < 0:
        logger.debug("Column %d: shifting %d letters would overflow the top", col, len(to_shift))
        return False

    for r, _ in existing:
        canvas[r][col] = GAP
    for r, letter in to_keep:
        canvas[r][col] = letter
    for offset, (r, letter) in enumerate(to_shift):
        canvas[start + offset][col] = letter
        if moves is not None:
            moves[Position(r, col)] = Position(start + offset, col)

    return True


def cross_pairs(
    canvas: Canvas,
    word1: List[Position],
    word2: List[Position],
) -> List[Tuple[Position, Position]]:
    """4-adjacent cell pairs straddling the two words whose letters differ."""
    pairs = []
    for a in word1:
        for b in word2:
            if abs(a.row - b.row) + abs(a.col - b.col) != 1:
                continue
            if canvas[a.row][a.col] == canvas[b.row][b.col]:
                continue
            pairs.append((a, b))
    return pairs


def apply_pair(
    canvas: Canvas,
    word1: str,
    word2: str,
    orientation: Orientation,
    positions1: List[Position],
    positions2: List[Position],
    rng: random.Random,
    shift: bool = True,
) -> Optional[Tuple[Canvas, Canvas, PlacementPlan, Dict[Position, Position]]]:
    """
    Shift, write and obfuscate a pair at already chosen positions.

    Returns (unswapped canvas, swapped canvas, plan, moves), where `moves`
    maps every pushed letter to its new position, or None when shifting
    overflows, letters would be lost, or no swappable cross pair exists.
    """
    working = copy_canvas(canvas)
    new_positions = positions1 + positions2
    before = sum(1 for row in canvas for ch in row if ch != GAP)

    shifted_columns: List[int] = []
    moves: Dict[Position, Position] = {}
    if shift:
        for col in sorted({p.col for p in new_positions}):
            if not overlaps(canvas, [p for p in new_positions if p.col == col]):
                continue
            if not shift_column(working, col, new_positions, moves):
                return None
            shifted_columns.append(col)

    overwritten = sum(1 for p in set(new_positions) if working[p.row][p.col] != GAP)
    if overwritten:
        logger.debug("Placement would overwrite %d letters", overwritten)
        return None

    for word, positions in ((word1, positions1), (word2, positions2)):
        for letter, pos in zip(word, positions):
            working[pos.row][pos.col] = letter

    after = sum(1 for row in working for ch in row if ch != GAP)
    if after != before + len(set(new_positions)):
        return None

    pairs = cross_pairs(working, positions1, positions2)
    if not pairs:
        logger.debug("No swappable cross pair between %s and %s", word1, word2)
        return None

    a, b = rng.choice(pairs)
    swapped = copy_canvas(working)
    swapped[a.row][a.col], swapped[b.row][b.col] = working[b.row][b.col], working[a.row][a.col]

    plan = PlacementPlan(
        words=(word1, word2),
        orientation=orientation,
        word1_positions=positions1,
        word2_positions=positions2,
        shifted_columns=shifted_columns,
        swap=(a, b),
    )
    return working, swapped, plan, moves


def first_pair_positions(
    size: int,
    word1: str,
    word2: str,
    orientation: Orientation,
    rng: random.Random,
) -> Tuple[List[Position], List[Position]]:
    """
    Lay the first pair on the floor of an empty canvas.

    Horizontally the shorter word sits directly on top of the longer one;
    vertically the words stand in neighbouring columns.
    """
    if orientation == 'H':
        shorter, longer = (word1, word2) if len(word1) <= len(word2) else (word2, word1)
        col_longer = rng.randint(0, size - len(longer))
        col_shorter = rng.randint(col_longer, col_longer + len(longer) - len(shorter))
        shorter_pos = word_positions(shorter, size - 2, col_shorter, 'H')
        longer_pos = word_positions(longer, size - 1, col_longer, 'H')
        if len(word1) <= len(word2):
            return shorter_pos, longer_pos
        return longer_pos, shorter_pos

    col = rng.randint(0, size - 2)
    return (
        word_positions(word1, size - len(word1), col, 'V'),
        word_positions(word2, size - len(word2), col + 1, 'V'),
    )


def _weighted_rows(lo: int, hi: int, rng: random.Random) -> Optional[int]:
    """Pick a row in [lo, hi], higher rows (smaller indices) more likely."""
    if lo > hi:
        return None
    rows = list(range(lo, hi + 1))
    return rng.choices(rows, weights=[1.0 / (1 + i) for i in range(len(rows))])[0]


def sample_positions(
    canvas: Canvas,
    word1: str,
    word2: str,
    orientation: Orientation,
    rng: random.Random,
) -> Optional[Tuple[List[Position], List[Position]]]:
    """
    Draw one random placement for a later pair.

    Start columns are weighted towards sparsely filled columns that still
    touch the structure, and start rows towards the top of it.
    Horizontal pairs stack word2 directly under word1; vertical pairs stand
    side by side with a common top row.
    """
    size = len(canvas)
    heights: Dict[int, int] = {c: column_height(canvas, c) for c in range(size)}

    if orientation == 'H':
        span = max(len(word1), len(word2))
        starts = [
            c for c in range(size - span + 1)
            if any(heights[c + i] for i in range(span))
        ]
        spans = {c: range(c, c + span) for c in starts}
    else:
        starts = [c for c in range(size - 1) if heights[c] and heights[c + 1]]
        spans = {c: range(c, c + 2) for c in starts}

    if not starts:
        return None

    weights = [1.0 / (1 + sum(heights[c] for c in spans[s]) / len(spans[s])) for s in starts]
    col = rng.choices(starts, weights=weights)[0]

    if orientation == 'H':
        top = min(column_top(canvas, c) for c in spans[col])
        row = _weighted_rows(max(0, top - 1), size - 2, rng)
        if row is None:
            return None
        return word_positions(word1, row, col, 'H'), word_positions(word2, row + 1, col, 'H')

    lo = max(
        column_top(canvas, col) - len(word1) + 1,
        column_top(canvas, col + 1) - len(word2) + 1,
        0,
    )
    row = _weighted_rows(lo, size - max(len(word1), len(word2)), rng)
    if row is None:
        return None
    return word_positions(word1, row, col, 'V'), word_positions(word2, row, col + 1, 'V')


def is_valid_placement(
    canvas: Canvas,
    positions1: List[Position],
    positions2: List[Position],
    orientation: Orientation,
) -> bool:
    """Bounds, anchoring on the existing structure, and support."""
    if not (fits(canvas, positions1) and fits(canvas, positions2)):
        return False
    if not (overlaps(canvas, positions1) and overlaps(canvas, positions2)):
        return False
    return check_support(canvas, positions1, positions2, orientation)
