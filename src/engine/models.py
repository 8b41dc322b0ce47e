"""Data models for the puzzle grid engine."""

from enum import Enum
from typing import List, Optional, Literal, NamedTuple, Tuple, Iterable, Sequence
from pydantic import BaseModel, Field, ConfigDict


GAP = ' '

Orientation = Literal['H', 'V']


class Position(NamedTuple):
    """A (row, col) slot in a grid."""
    row: int
    col: int


class Cell(BaseModel):
    """
    A single grid slot.

    `letter` is empty only for structural gaps. `row`/`col` are the cell's
    coordinates in the authoring grid and travel with the letter when it falls,
    so they identify the tile rather than the slot it currently occupies.
    """
    model_config = ConfigDict(frozen=True)

    letter: str = Field('', max_length=1)
    row: int
    col: int
    cleared: bool = False

    @property
    def is_gap(self) -> bool:
        return self.letter == ''

    @property
    def visible(self) -> bool:
        """A letter that is still on the board."""
        return not self.is_gap and not self.cleared


class Grid(BaseModel):
    """
    Rectangular matrix of cells.

    Grids are values: every operation returns a new grid and leaves the
    receiver untouched.
    """
    model_config = ConfigDict(frozen=True)

    cells: Tuple[Tuple[Cell, ...], ...] = ()

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[str]]) -> "Grid":
        """
        Build a grid from rows of characters, a space marking a gap.

        Rows may be strings or lists of single characters; short rows are
        padded with gaps to the widest row.
        """
        rows = [[(ch or GAP) for ch in row] for row in rows]
        width = max((len(r) for r in rows), default=0)

        cells = []
        for r, row in enumerate(rows):
            line = []
            for c in range(width):
                ch = row[c] if c < len(row) else GAP
                if len(ch) != 1:
                    raise ValueError(f"Cell ({r}, {c}) must hold a single character, got {ch!r}")
                letter = '' if ch == GAP else ch.upper()
                line.append(Cell(letter=letter, row=r, col=c))
            cells.append(tuple(line))

        return cls(cells=tuple(cells))

    @classmethod
    def blank(cls, size: int) -> "Grid":
        """A size x size grid made only of gaps."""
        return cls.from_rows([GAP * size for _ in range(size)])

    @property
    def height(self) -> int:
        return len(self.cells)

    @property
    def width(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos[0] < self.height and 0 <= pos[1] < self.width

    def cell(self, pos: Position) -> Cell:
        if not self.in_bounds(pos):
            raise ValueError(f"Position {tuple(pos)} outside {self.height}x{self.width} grid")
        return self.cells[pos[0]][pos[1]]

    def letter_at(self, pos: Position) -> str:
        """The visible letter at `pos`, or '' for gaps and cleared cells."""
        cell = self.cell(pos)
        return cell.letter if cell.visible else ''

    def is_letter(self, pos: Position) -> bool:
        return self.in_bounds(pos) and self.cells[pos[0]][pos[1]].visible

    def positions(self) -> List[Position]:
        return [Position(r, c) for r in range(self.height) for c in range(self.width)]

    def letter_positions(self) -> List[Position]:
        return [p for p in self.positions() if self.cells[p.row][p.col].visible]

    @property
    def visible_count(self) -> int:
        return len(self.letter_positions())

    def _replace(self, updates: dict) -> "Grid":
        """Copy with {Position: Cell} substitutions applied."""
        rows = [list(row) for row in self.cells]
        for (r, c), cell in updates.items():
            rows[r][c] = cell
        return self.model_copy(update={"cells": tuple(tuple(row) for row in rows)})

    def swap_letters(self, a: Position, b: Position) -> "Grid":
        """Exchange the letters of two cells; cell identities stay in place."""
        cell_a, cell_b = self.cell(a), self.cell(b)
        return self._replace({
            a: cell_a.model_copy(update={"letter": cell_b.letter}),
            b: cell_b.model_copy(update={"letter": cell_a.letter}),
        })

    def clear(self, positions: Iterable[Position]) -> "Grid":
        """Mark the letters at `positions` as cleared."""
        updates = {}
        for pos in positions:
            cell = self.cell(pos)
            if cell.visible:
                updates[Position(*pos)] = cell.model_copy(update={"cleared": True})
        return self._replace(updates)

    def with_rows(self, rows: List[List[Cell]]) -> "Grid":
        return self.model_copy(update={"cells": tuple(tuple(row) for row in rows)})

    def bounds(self) -> Optional[Tuple[int, int, int, int]]:
        """(min_row, max_row, min_col, max_col) of visible letters, or None."""
        letters = self.letter_positions()
        if not letters:
            return None
        return (
            min(p.row for p in letters),
            max(p.row for p in letters),
            min(p.col for p in letters),
            max(p.col for p in letters),
        )

    def trim(self) -> "Grid":
        """
        Crop to the smallest rectangle holding every visible letter.

        Cells keep their original row/col, so positions in the trimmed grid
        can always be traced back to the authoring grid.
        """
        bounds = self.bounds()
        if bounds is None:
            return Grid()
        min_row, max_row, min_col, max_col = bounds
        rows = [list(self.cells[r][min_col:max_col + 1]) for r in range(min_row, max_row + 1)]
        return self.with_rows(rows)

    def to_rows(self) -> List[str]:
        """Rows as strings, gaps and cleared cells rendered as spaces."""
        return [
            ''.join(cell.letter if cell.visible else GAP for cell in row)
            for row in self.cells
        ]

    def render(self, empty: str = '.') -> str:
        return '\n'.join(row.replace(GAP, empty) for row in self.to_rows())


class Run(BaseModel):
    """Maximal contiguous stretch of visible letters in one row or column."""
    orientation: Orientation
    positions: List[Position]
    letters: str

    def __len__(self) -> int:
        return len(self.positions)


class WordMatch(BaseModel):
    """A dictionary word found inside a run."""
    model_config = ConfigDict(frozen=True)

    word: str
    positions: Tuple[Position, ...]
    orientation: Orientation

    def touches(self, *positions: Position) -> bool:
        return any(tuple(p) in self.positions for p in positions)


class SwapOutcome(str, Enum):
    LEGAL = "LEGAL"
    SINGLE_WORD = "SINGLE_WORD"
    INVALID = "INVALID"


class SwapResult(BaseModel):
    """Result of evaluating a candidate swap."""
    outcome: SwapOutcome
    words_found: List[str] = Field(default_factory=list)
    positions: List[Position] = Field(default_factory=list)
    matches: List[WordMatch] = Field(default_factory=list)

    @property
    def legal(self) -> bool:
        return self.outcome == SwapOutcome.LEGAL


class SwapHint(BaseModel):
    """A swap the player could make, and the new words it would complete."""
    pos_a: Position
    pos_b: Position
    words_created: List[str] = Field(default_factory=list)


class HintPositionError(ValueError):
    """A hint referred to a position outside the grid it was computed from."""
