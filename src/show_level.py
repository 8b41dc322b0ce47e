"""
Standalone CLI for inspecting saved levels.

Usage:
    python -m src.show_level levels/level1.json
    python -m src.show_level levels/level1.json --hint --seed 7
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .game import Level, GameSession
from .engine import scan_runs, match_words
from .utils.grid_visualizer import render_grid


def load_level(path: Path) -> Level:
    with open(path) as f:
        return Level.model_validate_json(f.read())


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Show a saved worfdall level",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m src.show_level levels/level1.json
  python -m src.show_level levels/level1.json --hint
        """
    )
    parser.add_argument(
        "level",
        help="Path to the level JSON file"
    )
    parser.add_argument(
        "--hint",
        action="store_true",
        help="Mark a swap that completes two words"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for hint selection"
    )

    args = parser.parse_args(argv)

    level_path = Path(args.level)
    if not level_path.exists():
        print(f"Error: Level file not found: {args.level}", file=sys.stderr)
        return 1

    try:
        level = load_level(level_path)
    except Exception as e:
        print(f"Error loading level: {e}", file=sys.stderr)
        return 1

    session = GameSession.create(level, seed=args.seed)

    print(f"Level {level.id}: {level.name}")
    print(f"Play grid: {session.grid.height}x{session.grid.width}, {session.remaining_letters} letters")
    print(f"Words: {', '.join(session.dictionary)}")
    print()

    highlight = []
    if args.hint:
        hint = session.hint()
        if hint is None:
            print("Sorry, no hint available for this level.")
        else:
            highlight = [hint.pos_a, hint.pos_b]
            print(f"Hint: swap {tuple(hint.pos_a)} and {tuple(hint.pos_b)} "
                  f"to make {', '.join(hint.words_created)}")
        print()

    print(render_grid(session.grid, highlight))

    visible = [m.word for run in scan_runs(session.grid) for m in match_words(run, session.dictionary)]
    if visible:
        print()
        print(f"Already spelled on the grid: {', '.join(visible)}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
