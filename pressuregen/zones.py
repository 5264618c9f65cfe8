"""Goal placement inside the compression zone."""

from __future__ import annotations

import math
import random

from pressuregen.grid import Position
from pressuregen.profiles import CompressionProfile


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def goal_zone(
    cols: int, rows: int, profile: CompressionProfile
) -> tuple[int, int, int, int]:
    """Convert a profile's fractional zone to inclusive cell bounds.

    Fractions are applied to the interior span (`dim - 2`) and the result is
    clamped to the interior.

    Args:
        cols: Grid width.
        rows: Grid height.
        profile: Compression profile providing the zone fractions.

    Returns:
        (min_x, max_x, min_y, max_y), inclusive. The zone is empty when a
        minimum exceeds its maximum.
    """
    span_x = cols - 2
    span_y = rows - 2
    min_x = max(1, _round_half_up(profile.zone_x[0] * span_x))
    max_x = min(cols - 2, _round_half_up(profile.zone_x[1] * span_x))
    min_y = max(1, _round_half_up(profile.zone_y[0] * span_y))
    max_y = min(rows - 2, _round_half_up(profile.zone_y[1] * span_y))
    return min_x, max_x, min_y, max_y


def min_goal_separation(cols: int, rows: int) -> int:
    """Minimum Manhattan distance between any two goals."""
    return max(3, min(cols, rows) // 3)


def select_goal_positions(
    cols: int,
    rows: int,
    count: int,
    profile: CompressionProfile,
    rng: random.Random,
) -> list[Position] | None:
    """Pick goal cells inside the profile's zone.

    Candidates are visited in random order and kept greedily if they are
    far enough from every goal already kept.

    Args:
        cols: Grid width.
        rows: Grid height.
        count: Number of goals wanted.
        profile: Compression profile biasing the zone.
        rng: Random number generator.

    Returns:
        Goal positions in placement order, or None if fewer than `count`
        cells fit.
    """
    min_x, max_x, min_y, max_y = goal_zone(cols, rows, profile)
    candidates = [
        Position(x, y)
        for y in range(min_y, max_y + 1)
        for x in range(min_x, max_x + 1)
    ]
    rng.shuffle(candidates)

    separation = min_goal_separation(cols, rows)
    goals: list[Position] = []
    for candidate in candidates:
        if len(goals) >= count:
            break
        if all(candidate.manhattan(goal) >= separation for goal in goals):
            goals.append(candidate)

    if len(goals) < count:
        return None
    return goals
