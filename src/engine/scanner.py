"""Run extraction and dictionary matching."""

from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .models import Grid, Position, Run, WordMatch, Orientation


MIN_RUN_LENGTH = 3


def normalize_dictionary(words: Iterable[str]) -> Tuple[str, ...]:
    """Uppercase, strip and de-duplicate words, keeping their first-seen order."""
    seen = {}
    for word in words:
        word = word.strip().upper()
        if word:
            seen.setdefault(word, None)
    return tuple(seen)


def _step(orientation: Orientation) -> Tuple[int, int]:
    return (0, 1) if orientation == 'H' else (1, 0)


def run_through(grid: Grid, pos: Position, orientation: Orientation) -> Optional[Run]:
    """
    The maximal run containing `pos` in the given orientation.

    Returns None when `pos` is not a visible letter or the run is shorter
    than three cells.
    """
    if not grid.is_letter(pos):
        return None

    dr, dc = _step(orientation)

    # Walk back to the start of the run
    start_row, start_col = pos
    while grid.is_letter((start_row - dr, start_col - dc)):
        start_row, start_col = start_row - dr, start_col - dc

    positions: List[Position] = []
    row, col = start_row, start_col
    while grid.is_letter((row, col)):
        positions.append(Position(row, col))
        row, col = row + dr, col + dc

    if len(positions) < MIN_RUN_LENGTH:
        return None

    letters = ''.join(grid.letter_at(p) for p in positions).upper()
    return Run(orientation=orientation, positions=positions, letters=letters)


def scan_runs(grid: Grid) -> List[Run]:
    """Extract every horizontal then vertical run of three or more letters."""
    runs: List[Run] = []

    for orientation, lines, span in (
        ('H', grid.height, grid.width),
        ('V', grid.width, grid.height),
    ):
        for line in range(lines):
            positions: List[Position] = []
            for i in range(span + 1):  # +1 to flush the last run
                pos = Position(line, i) if orientation == 'H' else Position(i, line)
                if i < span and grid.is_letter(pos):
                    positions.append(pos)
                    continue
                if len(positions) >= MIN_RUN_LENGTH:
                    letters = ''.join(grid.letter_at(p) for p in positions).upper()
                    runs.append(Run(orientation=orientation, positions=positions, letters=letters))
                positions = []

    return runs


def _occurrences(letters: str, word: str) -> Iterator[int]:
    start = letters.find(word)
    while start != -1:
        yield start
        start = letters.find(word, start + 1)


def match_words(
    run: Run,
    dictionary: Iterable[str],
    covering: Sequence[Position] = (),
) -> List[WordMatch]:
    """
    Find dictionary words inside a run.

    Only one occurrence of each word is reported: the first one, or with
    `covering` given, the first one whose span includes any of those cells.
    Words with no such occurrence are skipped.
    """
    matches: List[WordMatch] = []
    letters = run.letters.upper()
    covering = {tuple(p) for p in covering}

    for word in normalize_dictionary(dictionary):
        for start in _occurrences(letters, word):
            positions = tuple(run.positions[start:start + len(word)])
            if covering and not covering.intersection(positions):
                continue
            matches.append(WordMatch(
                word=word,
                positions=positions,
                orientation=run.orientation,
            ))
            break

    return matches
