"""Tile materialization and scrambling.

Builds concrete path tiles from the abstract connection maps in their
solved orientation, then turns each one by a random 1-3 quarter turns and
records the inverse turn of every main-path tile as the solution.
"""

from __future__ import annotations

import random
from collections.abc import Collection

from pressuregen.grid import (
    ConnectionMap,
    Direction,
    Move,
    Position,
    Tile,
    TileKind,
    merge_connections,
)
from pressuregen.shapes import find_shape


def materialize_tile(
    position: Position,
    required: Collection[Direction],
    scramble: int = 0,
    can_rotate: bool = True,
) -> tuple[Tile, Move | None]:
    """Build one path tile turned `scramble` quarter turns past solved.

    Args:
        position: Cell of the tile.
        required: Openings the solved tile must expose.
        scramble: Clockwise quarter turns applied after solving (0-3).
        can_rotate: Whether the player may rotate the tile.

    Returns:
        (tile, move) where `move` restores the solved orientation, or None
        if the tile starts unscrambled.
    """
    shape, rotation = find_shape(required)
    tile = Tile(
        id=f"path-{position.x}-{position.y}",
        position=position,
        kind=TileKind.PATH,
        connections=shape.rotated(rotation + scramble),
        can_rotate=can_rotate,
    )
    unscramble = (4 - scramble) % 4
    move = Move(position, unscramble) if unscramble else None
    return tile, move


def build_tiles(
    main: ConnectionMap,
    branches: ConnectionMap,
    goals: Collection[Position],
    rng: random.Random,
    locked_fraction: float = 0.0,
) -> tuple[list[Tile], list[Move]]:
    """Materialize and scramble every non-goal path cell.

    A `locked_fraction` share of the main-path cells is placed solved and
    made non-rotatable as a free hint. Decoy branch cells are scrambled
    too, but only main-path cells contribute moves to the solution.

    Args:
        main: Openings of the solution path.
        branches: Openings of the decoy branches.
        goals: Goal cells, which are skipped.
        rng: Random number generator.
        locked_fraction: Share (0-1) of main-path cells placed solved.

    Returns:
        (tiles, solution)
    """
    goal_set = set(goals)
    main_cells = [cell for cell in main.cells() if cell not in goal_set]
    locked_count = round(len(main_cells) * locked_fraction)
    locked = set(rng.sample(main_cells, locked_count)) if locked_count else set()

    tiles: list[Tile] = []
    solution: list[Move] = []

    for cell, required in merge_connections(main, branches).items():
        if cell in goal_set or not required:
            continue

        if cell in locked:
            tile, _ = materialize_tile(cell, required, scramble=0, can_rotate=False)
            tiles.append(tile)
            continue

        tile, move = materialize_tile(cell, required, scramble=rng.randint(1, 3))
        tiles.append(tile)
        if move is not None and cell in main:
            solution.append(move)

    return tiles, solution
