"""Puzzle grid engine for worfdall."""

from .models import (
    GAP,
    Position,
    Cell,
    Grid,
    Run,
    WordMatch,
    SwapOutcome,
    SwapResult,
    SwapHint,
    HintPositionError,
)
from .scanner import scan_runs, run_through, match_words, normalize_dictionary
from .swap import are_adjacent, detect_swap_words, evaluate_swap
from .gravity import collapse, settle
from .hint import generate_hint, position_hint

__all__ = [
    # Models
    "GAP",
    "Position",
    "Cell",
    "Grid",
    "Run",
    "WordMatch",
    "SwapOutcome",
    "SwapResult",
    "SwapHint",
    "HintPositionError",
    # Word scanning
    "scan_runs",
    "run_through",
    "match_words",
    "normalize_dictionary",
    # Swaps
    "are_adjacent",
    "detect_swap_words",
    "evaluate_swap",
    # Gravity
    "collapse",
    "settle",
    # Hints
    "generate_hint",
    "position_hint",
]
