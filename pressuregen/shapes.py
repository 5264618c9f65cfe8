"""Pipe shape catalog.

Every path tile is one of eleven base shapes turned by 0-3 clockwise quarter
turns. The catalog is ordered by opening count so that a lookup always
returns the smallest shape that covers the requested openings.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from pressuregen.grid import ALL_DIRECTIONS, Direction, rotate_connections

UP, RIGHT, DOWN, LEFT = Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT


@dataclass(frozen=True)
class Shape:
    """A base pipe shape in its unrotated orientation."""

    name: str
    openings: frozenset[Direction]

    def rotated(self, times: int) -> frozenset[Direction]:
        return rotate_connections(self.openings, times)


SHAPES: tuple[Shape, ...] = (
    Shape("straight_v", frozenset({UP, DOWN})),
    Shape("straight_h", frozenset({LEFT, RIGHT})),
    Shape("corner_ur", frozenset({UP, RIGHT})),
    Shape("corner_rd", frozenset({RIGHT, DOWN})),
    Shape("corner_dl", frozenset({DOWN, LEFT})),
    Shape("corner_lu", frozenset({LEFT, UP})),
    Shape("tee_urd", frozenset({UP, RIGHT, DOWN})),
    Shape("tee_rdl", frozenset({RIGHT, DOWN, LEFT})),
    Shape("tee_dlu", frozenset({DOWN, LEFT, UP})),
    Shape("tee_lur", frozenset({LEFT, UP, RIGHT})),
    Shape("cross", ALL_DIRECTIONS),
)

CROSS = SHAPES[-1]


def find_shape(required: Iterable[Direction]) -> tuple[Shape, int]:
    """Find the smallest shape and rotation covering the required openings.

    Args:
        required: Openings the cell must expose.

    Returns:
        (shape, rotation) such that `shape.rotated(rotation)` is a superset
        of `required`. Requests no smaller shape can satisfy resolve to the
        cross with rotation 0.
    """
    needed = frozenset(required)
    for shape in SHAPES:
        if len(shape.openings) < len(needed):
            continue
        for rotation in range(4):
            if needed <= shape.rotated(rotation):
                return shape, rotation
    return CROSS, 0


def solved_openings(required: Iterable[Direction]) -> frozenset[Direction]:
    """Openings of the catalog tile chosen for `required`, in solved form."""
    shape, rotation = find_shape(required)
    return shape.rotated(rotation)


def is_catalog_shape(connections: frozenset[Direction]) -> bool:
    """True if the openings equal some catalog shape under some rotation."""
    return any(
        shape.rotated(rotation) == connections
        for shape in SHAPES
        for rotation in range(4)
    )
