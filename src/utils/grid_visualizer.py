from typing import Dict, Iterable, List, Tuple

from ..engine.models import GAP, Grid, Position
from ..generator.models import GenerationStep

# Brackets drawn around highlighted cells
MARKERS: Dict[str, Tuple[str, str]] = {
    'new': ('{', '}'),
    'word1': ('[', ']'),
    'word2': ('(', ')'),
    'swap': ('<', '>'),
    'hint': ('*', '*'),
}


def render_rows(rows: List[str], marks: Dict[Tuple[int, int], str], empty: str = '.') -> str:
    """Render rows three characters per cell, bracketing marked cells."""
    lines = []
    for r, row in enumerate(rows):
        line = ''
        for c, ch in enumerate(row):
            letter = empty if ch == GAP else ch
            left, right = MARKERS.get(marks.get((r, c), ''), (' ', ' '))
            line += f"{left}{letter}{right}"
        lines.append(line.rstrip())
    return '\n'.join(lines)


def render_step(step: GenerationStep) -> str:
    """A generation step as its description followed by the marked canvas."""
    marks = {(h.row, h.col): h.mark for h in step.highlights}
    return f"{step.description}\n{render_rows(step.grid, marks)}"


def render_grid(grid: Grid, highlight: Iterable[Position] = (), mark: str = 'hint') -> str:
    """Render a play grid, optionally marking some cells."""
    marks = {tuple(p): mark for p in highlight}
    return render_rows(grid.to_rows(), marks)


def render_steps(steps: List[GenerationStep]) -> str:
    return '\n\n'.join(render_step(s) for s in steps)
