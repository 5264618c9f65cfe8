"""Interior wall clusters and dead-end decoy branches.

Both placements are best effort: running out of room yields fewer walls or
shorter branches, never a failure.
"""

from __future__ import annotations

import random

from pressuregen.grid import Direction, Position, Tile, make_wall

# Attempts per requested wall cluster
WALL_ATTEMPTS_PER_CLUSTER = 12

# Cluster offsets from the anchor cell
ROOM_CLUSTERS: tuple[tuple[tuple[int, int], ...], ...] = (
    ((0, 0), (1, 0)),  # horizontal pair
    ((0, 0), (0, 1)),  # vertical pair
    ((0, 0), (1, 0), (2, 0)),  # horizontal triple
    ((0, 0), (1, 0), (1, 1)),  # L-shape
)


def place_room_walls(
    cols: int,
    rows: int,
    occupied: set[Position],
    count: int,
    rng: random.Random,
) -> list[Tile]:
    """Place up to `count` small wall clusters on free interior cells.

    Clusters form short room walls rather than isolated blocks, which
    creates corridors for the player to read. Cells of placed clusters are
    added to `occupied`.

    Args:
        cols: Grid width.
        rows: Grid height.
        occupied: Cells already taken; updated in place.
        count: Number of clusters wanted.
        rng: Random number generator.

    Returns:
        Wall tiles of every cluster placed.
    """
    walls: list[Tile] = []
    placed = 0

    for _ in range(count * WALL_ATTEMPTS_PER_CLUSTER):
        if placed >= count:
            break
        anchor = Position(rng.randint(1, cols - 2), rng.randint(1, rows - 2))
        if anchor in occupied:
            continue

        offsets = ROOM_CLUSTERS[rng.randrange(len(ROOM_CLUSTERS))]
        cells = [Position(anchor.x + dx, anchor.y + dy) for dx, dy in offsets]
        if not all(c.is_interior(cols, rows) and c not in occupied for c in cells):
            continue

        for cell in cells:
            occupied.add(cell)
            walls.append(make_wall(cell))
        placed += 1

    return walls


def dead_end_branch(
    start: Position,
    cols: int,
    rows: int,
    blocked: set[Position],
    length: int,
    rng: random.Random,
) -> list[Position]:
    """Walk a short stub away from `start` into free interior cells.

    Each step takes the first free direction of a shuffled order, so the
    stub may stop early when boxed in.

    Args:
        start: Main-path cell the branch hangs from (not included).
        cols: Grid width.
        rows: Grid height.
        blocked: Cells the branch may not enter.
        length: Maximum number of steps.
        rng: Random number generator.

    Returns:
        Branch cells in walking order, possibly empty.
    """
    branch: list[Position] = []
    visited = {start}
    current = start

    for _ in range(length):
        directions = list(Direction)
        rng.shuffle(directions)
        for direction in directions:
            nxt = current.neighbor(direction)
            if not nxt.is_interior(cols, rows):
                continue
            if nxt in blocked or nxt in visited:
                continue
            visited.add(nxt)
            branch.append(nxt)
            current = nxt
            break
        else:
            break

    return branch
