"""
Layout checks run on every candidate placement.

A layout is accepted only if:
- no dictionary word can be read on the grid before any swap
- every placed pair's planted swap is legal and completes both of its words
- solving the pairs newest first, one planted swap each, clears exactly the
  pair's own letters every time and empties the grid
"""

from typing import Dict, Iterable, List, Optional

from ..engine.models import Grid, Position, SwapResult
from ..engine.scanner import normalize_dictionary, scan_runs
from ..engine.swap import are_adjacent, evaluate_swap
from ..engine.gravity import collapse
from .models import PlacementPlan


def tile_slots(grid: Grid) -> Dict[Position, Position]:
    """Map each visible tile's origin position to the slot it occupies now."""
    return {
        Position(cell.row, cell.col): Position(r, c)
        for r, row in enumerate(grid.cells)
        for c, cell in enumerate(row)
        if cell.visible
    }


def stray_words(grid: Grid, dictionary: Iterable[str]) -> List[str]:
    """Dictionary words already readable somewhere on the grid."""
    words = normalize_dictionary(dictionary)
    found: List[str] = []
    for run in scan_runs(grid):
        for word in words:
            if word in run.letters and word not in found:
                found.append(word)
    return found


def evaluate_planted_swap(
    grid: Grid,
    plan: PlacementPlan,
    dictionary: Iterable[str],
) -> Optional[SwapResult]:
    """
    Evaluate a pair's planted swap wherever its two tiles are now.

    Returns None when either tile is gone or they are no longer neighbours.
    """
    slots = tile_slots(grid)
    a, b = plan.swap
    if a not in slots or b not in slots or not are_adjacent(slots[a], slots[b]):
        return None
    return evaluate_swap(grid, slots[a], slots[b], dictionary)


def check_layout(
    rows: List[str],
    placements: List[PlacementPlan],
    dictionary: Iterable[str],
) -> Optional[str]:
    """
    Check a canvas and its placements, in current canvas coordinates.

    Returns a description of the first problem found, or None.
    """
    words = normalize_dictionary(dictionary)
    grid = Grid.from_rows(rows)

    stray = stray_words(grid, words)
    if stray:
        return f"Words readable before any swap: {', '.join(stray)}"

    for plan in placements:
        result = evaluate_planted_swap(grid, plan, words)
        if result is None or not result.legal or not set(plan.words) <= set(result.words_found):
            return f"Pair {plan.words[0]}, {plan.words[1]} has no legal swap on the initial grid"

    # Solve newest pair first
    for plan in reversed(placements):
        slots = tile_slots(grid)
        result = evaluate_planted_swap(grid, plan, words)
        if result is None or not result.legal or set(result.words_found) != set(plan.words):
            return f"Pair {plan.words[0]}, {plan.words[1]} cannot be solved in order"

        cells = {slots.get(p) for p in plan.word1_positions + plan.word2_positions}
        if set(result.positions) != cells:
            return f"Solving {plan.words[0]}, {plan.words[1]} would clear other letters"

        a, b = plan.swap
        grid = collapse(grid.swap_letters(slots[a], slots[b]).clear(result.positions))

    if grid.visible_count:
        return f"{grid.visible_count} letters left after solving every pair"

    return None
