"""Column gravity for play grids and authoring canvases."""

from typing import Callable, List

from .models import Cell, Grid


def _compact(
    column: List[Cell],
    is_barrier: Callable[[Cell], bool],
    is_falling: Callable[[Cell], bool],
) -> List[Cell]:
    """
    Drop falling cells to the bottom of each barrier-bounded segment.

    Barriers stay where they are. Within a segment the falling cells keep
    their top-to-bottom order and the remaining cells are stacked above them.
    """
    result: List[Cell] = []
    segment: List[Cell] = []

    for cell in column + [None]:
        if cell is not None and not is_barrier(cell):
            segment.append(cell)
            continue
        falling = [c for c in segment if is_falling(c)]
        resting = [c for c in segment if not is_falling(c)]
        result.extend(resting + falling)
        segment = []
        if cell is not None:
            result.append(cell)

    return result


def _apply_by_column(grid: Grid, compact: Callable[[List[Cell]], List[Cell]]) -> Grid:
    rows = [list(row) for row in grid.cells]
    for col in range(grid.width):
        column = compact([rows[r][col] for r in range(grid.height)])
        for r, cell in enumerate(column):
            rows[r][col] = cell
    return grid.with_rows(rows)


def collapse(grid: Grid) -> Grid:
    """
    Let visible letters fall after cells were cleared.

    Each column is handled on its own. Structural gaps never move and bound
    the segments letters can fall through; cleared cells rise above the
    letters of their segment. Cells carry their identity with them.
    """
    return _apply_by_column(
        grid,
        lambda column: _compact(column, is_barrier=lambda c: c.is_gap, is_falling=lambda c: c.visible),
    )


def settle(grid: Grid) -> Grid:
    """
    Authoring-canvas gravity: every letter drops to the bottom of its column.

    On a canvas gaps are open space rather than level structure, so nothing
    blocks a fall. As with collapse, cells keep their row/col, which lets the
    caller see where each letter landed.
    """
    return _apply_by_column(
        grid,
        lambda column: _compact(column, is_barrier=lambda c: False, is_falling=lambda c: not c.is_gap),
    )
