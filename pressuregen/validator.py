"""Connectivity checks and level validation for pressuregen.

`is_connected` is the single source of truth for "solved": it is used by the
generator to reject pre-solved scrambles and to confirm embedded solutions,
and by `validate_level` to check finished levels. Validation distinguishes
between errors (blocking) and warnings (informational).
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from pressuregen.grid import Direction, Level, Move, Position, Tile, TileKind
from pressuregen.shapes import is_catalog_shape

_IMPASSABLE = {TileKind.WALL, TileKind.CRUSHED}


@dataclass
class ValidationResult:
    """Result of level validation.

    Attributes:
        is_valid: True if the level passes all required checks (no errors).
        errors: List of blocking issues that make the level invalid.
        warnings: List of informational issues that don't block validation.
    """

    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def is_connected(tiles: Iterable[Tile], goals: Sequence[Position]) -> bool:
    """Check whether every goal is reachable from the first one.

    Traversal moves from a tile to its neighbour through opening D only if
    the neighbour exposes the opposite of D. Walls and crushed tiles are
    never entered.

    Args:
        tiles: Full tile set of the grid.
        goals: Goal positions.

    Returns:
        True if all goals are mutually reachable (trivially True for fewer
        than two goals).
    """
    if len(goals) < 2:
        return True

    by_position = {tile.position: tile for tile in tiles}
    start = goals[0]
    visited = {start}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        tile = by_position.get(current)
        if tile is None:
            continue
        for direction in tile.connections:
            nxt = current.neighbor(direction)
            if nxt in visited:
                continue
            neighbor = by_position.get(nxt)
            if neighbor is None or neighbor.kind in _IMPASSABLE:
                continue
            if direction.opposite in neighbor.connections:
                visited.add(nxt)
                queue.append(nxt)

    return all(goal in visited for goal in goals)


def apply_solution(
    tiles: Iterable[Tile], solution: Iterable[Move]
) -> tuple[Tile, ...]:
    """Return a copy of `tiles` with every move applied."""
    turns: dict[Position, int] = {}
    for move in solution:
        turns[move.position] = turns.get(move.position, 0) + move.rotations
    return tuple(
        tile.rotated(turns[tile.position]) if tile.position in turns else tile
        for tile in tiles
    )


def find_dead_zones(
    openings: Mapping[Position, frozenset[Direction]],
    blocked: set[Position],
    cols: int,
    rows: int,
) -> list[Position]:
    """Find cells whose required openings lead nowhere.

    A cell is dead if one of its openings faces a blocked cell, leaves the
    grid interior, or faces a cell that does not open back.

    Args:
        openings: Merged openings for every path cell.
        blocked: Wall cells.
        cols: Grid width.
        rows: Grid height.

    Returns:
        Dead cells in map order.
    """
    dead: list[Position] = []
    for cell, directions in openings.items():
        for direction in directions:
            nxt = cell.neighbor(direction)
            if (
                nxt in blocked
                or not nxt.is_interior(cols, rows)
                or direction.opposite not in openings.get(nxt, frozenset())
            ):
                dead.append(cell)
                break
    return dead


def validate_level(level: Level) -> ValidationResult:
    """Validate a finished level against all invariants.

    Checks:
    - Goal tile count matches the goal list
    - Every path tile is a catalog shape
    - Every move targets a rotatable path tile
    - Initial arrangement is not already solved (2+ goals)
    - Applying the solution connects all goals
    - Solution needs at least one rotation
    - Move budget covers the solution

    Args:
        level: The level to validate.

    Returns:
        ValidationResult with errors and warnings.
    """
    errors: list[str] = []
    warnings: list[str] = []

    _check_goals(level, errors)
    _check_shapes(level, errors)
    _check_moves(level, errors)
    _check_solution(level, errors)
    _check_decoration(level, warnings)

    return ValidationResult(
        is_valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def _check_goals(level: Level, errors: list[str]) -> None:
    goal_tiles = [t for t in level.tiles if t.is_goal]
    if len(goal_tiles) != level.goal_count:
        errors.append(
            f"Goal tiles: {len(goal_tiles)} but {level.goal_count} goal positions"
        )
    goal_positions = {t.position for t in goal_tiles}
    for goal in level.goal_nodes:
        if goal not in goal_positions:
            errors.append(f"Goal ({goal.x}, {goal.y}) has no goal tile")


def _check_shapes(level: Level, errors: list[str]) -> None:
    for tile in level.tiles:
        if tile.kind != TileKind.PATH:
            continue
        if not 1 <= len(tile.connections) <= 4 or not is_catalog_shape(
            tile.connections
        ):
            names = sorted(d.value for d in tile.connections)
            errors.append(f"Tile {tile.id}: {names} is not a catalog shape")


def _check_moves(level: Level, errors: list[str]) -> None:
    by_position = {tile.position: tile for tile in level.tiles}
    for move in level.solution:
        tile = by_position.get(move.position)
        if tile is None or tile.kind != TileKind.PATH:
            errors.append(
                f"Move at ({move.position.x}, {move.position.y}) targets no path tile"
            )
        elif not tile.can_rotate:
            errors.append(f"Move targets locked tile {tile.id}")
        if not 1 <= move.rotations <= 3:
            errors.append(
                f"Move at ({move.position.x}, {move.position.y}) has "
                f"{move.rotations} rotations"
            )


def _check_solution(level: Level, errors: list[str]) -> None:
    if level.goal_count >= 2 and is_connected(level.tiles, level.goal_nodes):
        errors.append("Initial arrangement is already solved")

    solved = apply_solution(level.tiles, level.solution)
    if not is_connected(solved, level.goal_nodes):
        errors.append("Applying the solution does not connect all goals")

    total = level.total_rotations
    if total == 0:
        errors.append("Solution needs no rotations")
    if level.max_moves < total:
        errors.append(f"Move budget {level.max_moves} < solution rotations {total}")


def _check_decoration(level: Level, warnings: list[str]) -> None:
    solution_cells = {move.position for move in level.solution}
    path_tiles = [t for t in level.tiles if t.kind == TileKind.PATH]
    if all(t.position in solution_cells or not t.can_rotate for t in path_tiles):
        warnings.append("No decoy tiles")

    interior_walls = [
        t
        for t in level.tiles
        if t.kind == TileKind.WALL
        and t.position.is_interior(level.grid_cols, level.grid_rows)
    ]
    if not interior_walls:
        warnings.append("No interior walls")
