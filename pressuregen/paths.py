"""Winding path search between goal nodes.

Paths are carved with a randomized depth-first backtracker instead of a
shortest-path search, so they meander through the grid rather than running
along a Manhattan staircase.
"""

from __future__ import annotations

import random
from collections.abc import Iterator

from pressuregen.grid import Direction, Position

# Cells closer than this to the target may hug already visited cells.
TARGET_SLACK = 2

# Expansion budget per unit of max path length.
EXPANSIONS_PER_STEP = 64


def _shuffled_directions(rng: random.Random) -> Iterator[Direction]:
    directions = list(Direction)
    rng.shuffle(directions)
    return iter(directions)


def _crowds_path(
    cell: Position, current: Position, visited: set[Position]
) -> bool:
    """True if `cell` touches more than one visited cell besides `current`."""
    touching = 0
    for direction in Direction:
        nxt = cell.neighbor(direction)
        if nxt != current and nxt in visited:
            touching += 1
    return touching > 1


def winding_path(
    start: Position,
    target: Position,
    cols: int,
    rows: int,
    blocked: set[Position],
    rng: random.Random,
    max_length: int,
    max_expansions: int | None = None,
) -> list[Position] | None:
    """Search a winding path from `start` to `target`.

    Args:
        start: First cell of the path.
        target: Cell to reach. Always enterable, even if listed in `blocked`.
        cols: Grid width.
        rows: Grid height.
        blocked: Cells the path may not enter (walls, other goals, cells of
            earlier paths).
        rng: Random number generator for the direction order.
        max_length: Longest path accepted, in cells.
        max_expansions: Cap on forward steps before giving up. Defaults to
            `EXPANSIONS_PER_STEP * max_length`.

    Returns:
        Cells from `start` to `target` inclusive, or None if no path was
        found within the bounds.
    """
    if max_expansions is None:
        max_expansions = EXPANSIONS_PER_STEP * max_length

    path = [start]
    visited = {start}
    frames = [_shuffled_directions(rng)]
    expansions = 0

    while frames:
        current = path[-1]
        if current == target:
            return path

        step: Position | None = None
        if len(path) <= max_length:
            for direction in frames[-1]:
                nxt = current.neighbor(direction)
                if not nxt.is_interior(cols, rows) or nxt in visited:
                    continue
                if nxt != target and nxt in blocked:
                    continue
                if nxt.manhattan(target) > TARGET_SLACK and _crowds_path(
                    nxt, current, visited
                ):
                    continue
                step = nxt
                break

        if step is None:
            # Dead end: backtrack
            frames.pop()
            visited.discard(path.pop())
            continue

        expansions += 1
        if expansions > max_expansions:
            return None
        visited.add(step)
        path.append(step)
        frames.append(_shuffled_directions(rng))

    return None
