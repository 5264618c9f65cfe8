"""JSON export and ASCII rendering of generated levels."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from pressuregen.compact import dehydrate_level
from pressuregen.grid import Direction, Level, Position, TileKind
from pressuregen.validator import apply_solution

# Box drawing characters keyed by sorted opening names
PIPE_CHARS: dict[str, str] = {
    "down-up": "│",
    "left-right": "─",
    "right-up": "└",
    "left-up": "┘",
    "down-right": "┌",
    "down-left": "┐",
    "down-left-right-up": "┼",
    "down-left-up": "┤",
    "down-right-up": "├",
    "left-right-up": "┴",
    "down-left-right": "┬",
    "up": "╵",
    "down": "╷",
    "left": "╴",
    "right": "╶",
}

WALL_CHAR = "#"
GOAL_CHAR = "O"
CRUSHED_CHAR = "x"
EMPTY_CHAR = "."


def pipe_char(connections: frozenset[Direction]) -> str:
    """Box drawing character for a set of openings."""
    key = "-".join(sorted(d.value for d in connections))
    return PIPE_CHARS.get(key, EMPTY_CHAR)


def level_to_dict(level: Level) -> dict[str, Any]:
    """Convert a level to a verbose JSON-serializable dict.

    Unlike the compact format, every tile is listed with its explicit
    direction list.
    """
    return {
        "id": level.id,
        "name": level.name,
        "world": level.world,
        "gridCols": level.grid_cols,
        "gridRows": level.grid_rows,
        "maxMoves": level.max_moves,
        "compressionDelay": level.compression_delay,
        "compressionDirection": level.compression_direction,
        "isGenerated": level.is_generated,
        "goalNodes": [{"x": g.x, "y": g.y} for g in level.goal_nodes],
        "tiles": [
            {
                "id": tile.id,
                "x": tile.position.x,
                "y": tile.position.y,
                "type": tile.kind.value,
                "connections": [d.value for d in Direction if d in tile.connections],
                "canRotate": tile.can_rotate,
                "isGoalNode": tile.is_goal,
            }
            for tile in level.tiles
        ],
        "solution": [
            {"x": m.position.x, "y": m.position.y, "rotations": m.rotations}
            for m in level.solution
        ],
    }


def export_json(
    levels: list[Level], output_path: Path, compact: bool = True
) -> None:
    """Write levels to a JSON file.

    Args:
        levels: Levels to export.
        output_path: Path to write the JSON file.
        compact: Use the compact format instead of the verbose one.
    """
    convert = dehydrate_level if compact else level_to_dict
    data = [convert(level) for level in levels]
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def render_level(level: Level, solved: bool = False) -> str:
    """Draw a level as a character grid.

    Args:
        level: The level to draw.
        solved: Draw the tiles with the solution applied.

    Returns:
        One line per grid row.
    """
    tiles = apply_solution(level.tiles, level.solution) if solved else level.tiles
    by_position = {tile.position: tile for tile in tiles}

    lines: list[str] = []
    for y in range(level.grid_rows):
        row: list[str] = []
        for x in range(level.grid_cols):
            tile = by_position.get(Position(x, y))
            if tile is None:
                row.append(EMPTY_CHAR)
            elif tile.is_goal:
                row.append(GOAL_CHAR)
            elif tile.kind == TileKind.WALL:
                row.append(WALL_CHAR)
            elif tile.kind == TileKind.CRUSHED:
                row.append(CRUSHED_CHAR)
            else:
                row.append(pipe_char(tile.connections))
        lines.append("".join(row))
    return "\n".join(lines)


def export_render(levels: list[Level], output_path: Path) -> None:
    """Write a human-readable sheet with each level scrambled and solved.

    Args:
        levels: Levels to draw.
        output_path: Path to write the text file.
    """
    lines: list[str] = []
    lines.append("=" * 60)
    lines.append(f"PRESSURE LEVELS ({len(levels)})")
    lines.append(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    lines.append("=" * 60)

    for level in levels:
        lines.append("")
        lines.append(f"#{level.id} {level.name} (world {level.world})")
        lines.append(
            f"  {level.grid_cols}x{level.grid_rows}, {level.goal_count} goals, "
            f"compression: {level.compression_direction}, "
            f"moves: {level.total_rotations}/{level.max_moves}"
        )
        scrambled = render_level(level).splitlines()
        solved = render_level(level, solved=True).splitlines()
        width = max(level.grid_cols, len("scrambled")) + 4
        lines.append(f"  {'scrambled'.ljust(width)}solved")
        for left, right in zip(scrambled, solved):
            lines.append(f"  {left.ljust(width)}{right}")

    with open(output_path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")
