"""Compact level format.

A level is written as a small dict: border walls are implied by
`autoWalls`, goal nodes by `goals`, and every other tile carries a short
shape code instead of a direction list.

Tile codes (`c` field):
    Straight : ud | lr
    Corner   : ur | rd | dl | lu
    T-shape  : urd | rdl | dlu | lur
    Cross    : x

Tiles without a code are walls unless `t` says otherwise. `r: false` marks
a tile the player cannot rotate.
"""

from __future__ import annotations

from typing import Any

from pressuregen.grid import (
    ALL_DIRECTIONS,
    Direction,
    Level,
    Move,
    Position,
    Tile,
    TileKind,
    border_walls,
    make_goal_node,
    make_wall,
)

UP, RIGHT, DOWN, LEFT = Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT

CODE_TO_DIRECTIONS: dict[str, frozenset[Direction]] = {
    "ud": frozenset({UP, DOWN}),
    "lr": frozenset({LEFT, RIGHT}),
    "ur": frozenset({UP, RIGHT}),
    "rd": frozenset({RIGHT, DOWN}),
    "dl": frozenset({DOWN, LEFT}),
    "lu": frozenset({LEFT, UP}),
    "urd": frozenset({UP, RIGHT, DOWN}),
    "rdl": frozenset({RIGHT, DOWN, LEFT}),
    "dlu": frozenset({DOWN, LEFT, UP}),
    "lur": frozenset({LEFT, UP, RIGHT}),
    "x": ALL_DIRECTIONS,
}

DIRECTIONS_TO_CODE = {dirs: code for code, dirs in CODE_TO_DIRECTIONS.items()}

_TILE_PREFIX = {
    TileKind.WALL: "wall",
    TileKind.NODE: "node",
    TileKind.PATH: "path",
    TileKind.CRUSHED: "path",
}


def parse_code(code: str) -> frozenset[Direction]:
    """Convert a shape code to its openings.

    Raises:
        ValueError: If the code is unknown.
    """
    try:
        return CODE_TO_DIRECTIONS[code]
    except KeyError:
        raise ValueError(f'Unknown connection code: "{code}"') from None


def encode_connections(connections: frozenset[Direction]) -> str:
    """Convert openings to their shape code.

    Raises:
        ValueError: If the openings are not a catalog shape.
    """
    try:
        return DIRECTIONS_TO_CODE[connections]
    except KeyError:
        names = sorted(d.value for d in connections)
        raise ValueError(f"No connection code for {names}") from None


def _pair(position: Position) -> list[int]:
    return [position.x, position.y]


def _has_full_border(level: Level) -> bool:
    walls = {t.position for t in level.tiles if t.kind == TileKind.WALL}
    return all(
        wall.position in walls
        for wall in border_walls(level.grid_cols, level.grid_rows)
    )


def dehydrate_level(level: Level) -> dict[str, Any]:
    """Convert a level to the compact format.

    Args:
        level: The level to convert.

    Returns:
        JSON-serializable dict.
    """
    goal_set = set(level.goal_nodes)
    auto_walls = _has_full_border(level)
    border = (
        {t.position for t in border_walls(level.grid_cols, level.grid_rows)}
        if auto_walls
        else set()
    )

    interior_walls: list[list[int]] = []
    tiles: list[dict[str, Any]] = []
    for tile in level.tiles:
        if tile.position in goal_set:
            continue
        if tile.kind == TileKind.WALL:
            if tile.position not in border:
                interior_walls.append(_pair(tile.position))
            continue

        entry: dict[str, Any] = {"p": _pair(tile.position)}
        if tile.connections:
            entry["c"] = encode_connections(tile.connections)
        if not tile.can_rotate:
            entry["r"] = False
        if tile.kind != TileKind.PATH or not tile.connections:
            entry["t"] = tile.kind.value
        tiles.append(entry)

    data: dict[str, Any] = {
        "id": level.id,
        "name": level.name,
        "world": level.world,
        "grid": [level.grid_cols, level.grid_rows],
        "maxMoves": level.max_moves,
        "compressionDelay": level.compression_delay,
        "compressionDirection": level.compression_direction,
        "goals": [_pair(goal) for goal in level.goal_nodes],
    }
    if auto_walls:
        data["autoWalls"] = "border"
    if interior_walls:
        data["interiorWalls"] = interior_walls
    data["tiles"] = tiles
    data["solution"] = [
        [move.position.x, move.position.y, move.rotations] for move in level.solution
    ]
    data["isGenerated"] = level.is_generated
    return data


def _hydrate_tile(entry: dict[str, Any]) -> Tile:
    position = Position(*entry["p"])
    code = entry.get("c")
    if "t" in entry:
        kind = TileKind(entry["t"])
    elif code is None:
        kind = TileKind.WALL
    else:
        kind = TileKind.PATH

    if kind == TileKind.WALL:
        return make_wall(position)

    return Tile(
        id=f"{_TILE_PREFIX[kind]}-{position.x}-{position.y}",
        position=position,
        kind=kind,
        connections=parse_code(code) if code is not None else frozenset(),
        can_rotate=entry.get("r", True),
    )


def hydrate_level(data: dict[str, Any]) -> Level:
    """Build a level from the compact format.

    Args:
        data: Dict produced by dehydrate_level() or written by hand.

    Returns:
        The level.

    Raises:
        ValueError: If a tile carries an unknown shape code or tile type.
        KeyError: If a required field is missing.
    """
    cols, rows = data["grid"]
    goals = [Position(x, y) for x, y in data["goals"]]
    goal_set = set(goals)

    tiles: list[Tile] = []
    if data.get("autoWalls") == "border":
        tiles.extend(border_walls(cols, rows))
    for x, y in data.get("interiorWalls", []):
        tiles.append(make_wall(Position(x, y)))
    tiles.extend(make_goal_node(goal) for goal in goals)
    for entry in data["tiles"]:
        if Position(*entry["p"]) in goal_set:
            continue
        tiles.append(_hydrate_tile(entry))

    return Level(
        id=data["id"],
        name=data["name"],
        world=data["world"],
        grid_cols=cols,
        grid_rows=rows,
        tiles=tuple(tiles),
        goal_nodes=tuple(goals),
        max_moves=data["maxMoves"],
        compression_delay=data["compressionDelay"],
        compression_direction=data.get("compressionDirection", "all"),
        solution=tuple(
            Move(Position(x, y), rotations)
            for x, y, rotations in data.get("solution", [])
        ),
        is_generated=data.get("isGenerated", False),
    )
