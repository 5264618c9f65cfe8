"""pressuregen CLI entry point."""

from __future__ import annotations

import argparse
import random
import sys
from collections import Counter
from pathlib import Path

from pressuregen.config import Config, load_config
from pressuregen.generator import GenerationError
from pressuregen.grid import Level
from pressuregen.output import export_json, export_render
from pressuregen.validator import validate_level
from pressuregen.world import generate_world_report


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the pressuregen command."""
    parser = argparse.ArgumentParser(
        description="pressuregen - Generate solvable pipe puzzle worlds",
    )
    parser.add_argument(
        "config",
        type=Path,
        nargs="?",
        default=None,
        help="Path to config.toml (optional, uses defaults if not provided)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output directory (default: config's output_dir). "
        "Files are written to <output>/<seed>/",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed (overrides config, 0 = random)",
    )
    parser.add_argument(
        "--full",
        action="store_true",
        help="Write the verbose level format instead of the compact one",
    )
    parser.add_argument(
        "--render",
        action="store_true",
        help="Also write an ASCII sheet of every level (levels.txt)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args(argv)

    # Load or create config
    if args.config:
        try:
            config = load_config(args.config)
            if args.verbose:
                print(f"Loaded config from {args.config}")
        except FileNotFoundError:
            print(f"Error: Config file not found: {args.config}", file=sys.stderr)
            return 1
        except ValueError as e:
            print(f"Error: Invalid config: {e}", file=sys.stderr)
            return 1
    else:
        config = Config()
        if args.verbose:
            print("Using default configuration")

    seed = args.seed if args.seed is not None else config.seed
    if seed == 0:
        seed = random.Random().randint(1, 999999999)
    rng = random.Random(seed)

    # Determine output directory: CLI > config
    if args.output is not None:
        output_dir = args.output
    else:
        output_dir = Path(config.run.output_dir)
    seed_dir = output_dir / str(seed)
    seed_dir.mkdir(parents=True, exist_ok=True)

    all_levels: list[Level] = []
    for world in config.worlds:
        if args.verbose:
            print(
                f"Generating world {world.world_id}: {world.level_count} levels, "
                f"{world.cols}x{world.rows}, {world.goal_count} goals, "
                f"{world.difficulty}"
            )
        try:
            results = generate_world_report(world, rng)
        except GenerationError as e:
            print(f"Error: World {world.world_id}: {e}", file=sys.stderr)
            return 1

        levels = [r.level for r in results if r.level is not None]
        if args.verbose:
            for index, result in enumerate(results):
                failures = Counter(f.name for f in result.failures)
                summary = ", ".join(f"{k}={v}" for k, v in sorted(failures.items()))
                status = "ok" if result.level is not None else "FAILED"
                print(
                    f"  slot {index}: {status} after {result.attempts} attempts"
                    + (f" ({summary})" if summary else "")
                )
            for level in levels:
                for warning in validate_level(level).warnings:
                    print(f"  - level {level.id}: {warning}")

        if not levels:
            print(
                f"Error: World {world.world_id} produced no level",
                file=sys.stderr,
            )
            return 1

        json_path = seed_dir / f"world-{world.world_id}.json"
        export_json(levels, json_path, compact=not args.full)
        print(f"Written: {json_path} ({len(levels)}/{world.level_count} levels)")
        all_levels.extend(levels)

    if args.render:
        render_path = seed_dir / "levels.txt"
        export_render(all_levels, render_path)
        print(f"Written: {render_path}")

    print(f"Generated {len(all_levels)} levels with seed {seed}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
