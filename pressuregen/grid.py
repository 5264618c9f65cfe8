"""Grid data structures for pressuregen.

This module contains the value types shared by every generation phase:
directions, positions, tiles, solution moves and the finished level.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum


class Direction(Enum):
    """An opening direction, in clockwise order."""

    UP = "up"
    RIGHT = "right"
    DOWN = "down"
    LEFT = "left"

    @property
    def opposite(self) -> Direction:
        """The direction facing back."""
        return self.rotated(2)

    @property
    def delta(self) -> tuple[int, int]:
        """(dx, dy) offset of the neighbouring cell. y grows downwards."""
        return _DELTAS[self]

    def rotated(self, times: int) -> Direction:
        """Rotate by `times` clockwise quarter turns."""
        order = list(Direction)
        return order[(order.index(self) + times) % 4]


_DELTAS = {
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
}

ALL_DIRECTIONS = frozenset(Direction)


@dataclass(frozen=True, order=True)
class Position:
    """An integer grid cell."""

    x: int
    y: int

    def neighbor(self, direction: Direction) -> Position:
        dx, dy = direction.delta
        return Position(self.x + dx, self.y + dy)

    def manhattan(self, other: Position) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def is_interior(self, cols: int, rows: int) -> bool:
        """True if the cell lies strictly inside the border ring."""
        return 1 <= self.x <= cols - 2 and 1 <= self.y <= rows - 2


def direction_between(a: Position, b: Position) -> Direction:
    """Direction leading from `a` to the orthogonally adjacent cell `b`.

    Raises:
        ValueError: If the cells are not adjacent.
    """
    for direction in Direction:
        if a.neighbor(direction) == b:
            return direction
    raise ValueError(f"{a} and {b} are not adjacent")


class TileKind(Enum):
    """Tile categories.

    CRUSHED tiles are never produced by the generator; the consuming engine
    marks tiles crushed during play and the verifier treats them as walls.
    """

    WALL = "wall"
    NODE = "node"
    PATH = "path"
    CRUSHED = "crushed"


def rotate_connections(
    connections: frozenset[Direction], times: int
) -> frozenset[Direction]:
    """Rotate a set of openings by `times` clockwise quarter turns."""
    return frozenset(d.rotated(times) for d in connections)


@dataclass(frozen=True)
class Tile:
    """A single grid tile.

    Tiles are identified by `id`, which is derived from kind and position
    (`wall-3-0`, `node-2-2`, `path-4-1`).
    """

    id: str
    position: Position
    kind: TileKind
    connections: frozenset[Direction] = field(default_factory=frozenset)
    can_rotate: bool = False
    is_goal: bool = False

    def rotated(self, times: int) -> Tile:
        """Return a copy turned clockwise `times` quarter turns."""
        return replace(self, connections=rotate_connections(self.connections, times))


def make_wall(position: Position) -> Tile:
    return Tile(
        id=f"wall-{position.x}-{position.y}",
        position=position,
        kind=TileKind.WALL,
    )


def make_goal_node(position: Position) -> Tile:
    """Goal nodes are fixed and open on every side."""
    return Tile(
        id=f"node-{position.x}-{position.y}",
        position=position,
        kind=TileKind.NODE,
        connections=ALL_DIRECTIONS,
        is_goal=True,
    )


def border_walls(cols: int, rows: int) -> list[Tile]:
    """Build the perimeter wall ring, top and bottom rows first."""
    walls: list[Tile] = []
    for x in range(cols):
        walls.append(make_wall(Position(x, 0)))
        if rows > 1:
            walls.append(make_wall(Position(x, rows - 1)))
    for y in range(1, rows - 1):
        walls.append(make_wall(Position(0, y)))
        if cols > 1:
            walls.append(make_wall(Position(cols - 1, y)))
    return walls


@dataclass(frozen=True)
class Move:
    """Rotate the tile at `position` clockwise `rotations` quarter turns."""

    position: Position
    rotations: int


class ConnectionMap:
    """Openings each cell must expose, accumulated edge by edge."""

    def __init__(self) -> None:
        self._cells: dict[Position, set[Direction]] = {}

    def add(self, position: Position, direction: Direction) -> None:
        self._cells.setdefault(position, set()).add(direction)

    def link(self, a: Position, b: Position) -> None:
        """Record reciprocal openings between two adjacent cells."""
        direction = direction_between(a, b)
        self.add(a, direction)
        self.add(b, direction.opposite)

    def add_path(self, cells: list[Position]) -> None:
        """Link every consecutive pair of cells in a path."""
        for a, b in zip(cells, cells[1:]):
            self.link(a, b)

    def get(self, position: Position) -> frozenset[Direction]:
        return frozenset(self._cells.get(position, ()))

    def cells(self) -> list[Position]:
        """Cells in insertion order."""
        return list(self._cells)

    def __contains__(self, position: object) -> bool:
        return position in self._cells

    def __len__(self) -> int:
        return len(self._cells)


def merge_connections(*maps: ConnectionMap) -> dict[Position, frozenset[Direction]]:
    """Union the openings of several maps per cell, keeping first-seen order."""
    merged: dict[Position, set[Direction]] = {}
    for connection_map in maps:
        for cell in connection_map.cells():
            merged.setdefault(cell, set()).update(connection_map.get(cell))
    return {cell: frozenset(dirs) for cell, dirs in merged.items()}


@dataclass(frozen=True)
class Level:
    """A finished puzzle level.

    Levels are immutable once generated. The consuming engine copies the
    tiles before letting the player rotate them.
    """

    id: int
    name: str
    world: int
    grid_cols: int
    grid_rows: int
    tiles: tuple[Tile, ...]
    goal_nodes: tuple[Position, ...]
    max_moves: int
    compression_delay: int
    compression_direction: str
    solution: tuple[Move, ...] = ()
    is_generated: bool = True

    def tile_at(self, position: Position) -> Tile | None:
        """Get the tile at a cell, or None if the cell is empty."""
        for tile in self.tiles:
            if tile.position == position:
                return tile
        return None

    @property
    def goal_count(self) -> int:
        return len(self.goal_nodes)

    @property
    def total_rotations(self) -> int:
        """Quarter turns needed to solve the level."""
        return sum(move.rotations for move in self.solution)
