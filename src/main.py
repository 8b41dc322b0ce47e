"""
Main entry point for generating worfdall levels.

Usage:
    python -m src.main config.yaml
    python -m src.main config.yaml --output levels/level1.json --verbose
    python -m src.main --words CAT DOG SUN HAT --steps
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

import yaml

from .generator import GeneratorConfig, generate, parse_words
from .game import Level
from .utils.grid_visualizer import render_steps


def load_config(config_path: str) -> Tuple[List[str], GeneratorConfig, dict]:
    """
    Load a generation request from a YAML file.

    The file holds `words` (a list or a newline separated block), optional
    level fields under `level`, and any GeneratorConfig field.
    """
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    words = data.pop("words", [])
    if isinstance(words, str):
        words = parse_words(words)
    level_fields = data.pop("level", {}) or {}

    return [str(w).upper() for w in words], GeneratorConfig(**data), level_fields


def save_level(level: Level, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        f.write(level.model_dump_json(indent=2))


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Generate a worfdall level from a word list",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  words:
    - CAT
    - DOG
    - SUN
    - HAT
  grid_size: 20
  max_attempts: 1000
  seed: 42
  level:
    id: 1
    name: Animals
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file (not needed with --words)"
    )
    parser.add_argument(
        "--words",
        nargs="+",
        help="Words to place; overrides the config file's word list"
    )
    parser.add_argument(
        "--grid-size",
        type=int,
        help="Canvas size (default: 20)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for a reproducible layout"
    )
    parser.add_argument(
        "--output", "-o",
        help="Path to save the level JSON (default: levels/<timestamp>.json)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print progress to stdout"
    )
    parser.add_argument(
        "--steps",
        action="store_true",
        help="Print every generation step"
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if not args.config and not args.words:
        print("Error: config file or --words required", file=sys.stderr)
        return 1

    words: List[str] = []
    config = GeneratorConfig()
    level_fields: dict = {}
    if args.config:
        try:
            words, config, level_fields = load_config(args.config)
        except Exception as e:
            print(f"Error loading config: {e}", file=sys.stderr)
            return 1

    if args.words:
        words = parse_words(' '.join(args.words))

    overrides = {"record_steps": config.record_steps or args.steps}
    if args.grid_size is not None:
        overrides["grid_size"] = args.grid_size
    if args.seed is not None:
        overrides["seed"] = args.seed
    config = GeneratorConfig(**{**config.model_dump(), **overrides})

    if args.output:
        output_path = Path(args.output)
    else:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_path = Path("levels") / f"level_{timestamp}.json"

    if args.verbose:
        print(f"Words: {' '.join(words)}")
        print(f"Grid size: {config.grid_size}")
        print(f"Output: {output_path}")
        print()

    result = generate(words, config=config)

    if args.steps and result.steps:
        print(render_steps(result.steps))
        print()

    if not result.success:
        print(f"Error generating level: {result.error.message}", file=sys.stderr)
        return 1

    level = Level.from_generation(result, **level_fields)
    save_level(level, output_path)

    # Print summary
    print("=== Generated Level ===")
    print(level.to_grid().render())
    print()
    print(f"Pairs placed: {len(result.placements)}")
    print(f"Words: {', '.join(level.valid_words)}")
    print(f"Saved to: {output_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
