"""Level generation for pressuregen.

Build-from-solution approach: construct the solved layout, then scramble.

1. Border walls
2. Goal nodes in the compression zone
3. Winding paths between consecutive goals
4. Interior wall clusters
5. Dead-end decoy branches off the main path
6. Scrambled tiles with the embedded solution
7. Checks: not pre-solved, solution connects, solution non-empty

Every phase reports failure by returning None; the attempt is then
abandoned and a fresh one started, up to MAX_ATTEMPTS.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum, auto

from pressuregen.grid import (
    ConnectionMap,
    Level,
    Move,
    Position,
    Tile,
    border_walls,
    make_goal_node,
    merge_connections,
)
from pressuregen.materialize import build_tiles
from pressuregen.names import generate_name
from pressuregen.obstacles import dead_end_branch, place_room_walls
from pressuregen.paths import winding_path
from pressuregen.profiles import (
    DIFFICULTY_PROFILES,
    CompressionProfile,
    get_compression,
    get_difficulty,
    pick_compression,
)
from pressuregen.validator import apply_solution, find_dead_zones, is_connected
from pressuregen.zones import select_goal_positions

MAX_ATTEMPTS = 40

# Steps per decoy branch
BRANCH_LENGTH = (2, 3)

# Decoy branches per level when not given explicitly
DEFAULT_BRANCHES = (1, 2)


class GenerationError(Exception):
    """Invalid generation options."""

    pass


class AttemptFailure(Enum):
    """Why a generation attempt was abandoned."""

    PLACEMENT = auto()  # goals don't fit the zone with the separation rule
    PATH = auto()  # no winding path between two goals
    DEAD_ZONE = auto()  # an opening leads into a wall or nowhere
    PRE_SOLVED = auto()  # scrambled tiles already connect all goals
    INCONSISTENT_SOLUTION = auto()  # applying the moves does not connect
    DEGENERATE_SOLUTION = auto()  # zero rotations needed


@dataclass
class GenerationOptions:
    """Parameters of a single level.

    Attributes:
        cols: Grid width, border included.
        rows: Grid height, border included.
        goal_count: Number of goal nodes to connect.
        difficulty: Difficulty tier name.
        compression: Compression direction name (random when None).
        interior_walls: Wall clusters (drawn from the tier range when None).
        branches: Decoy branches (1-2 when None).
        locked_fraction: Share of main-path tiles placed solved and fixed.
        id: Level id (random when None).
        name: Level name (generated when None).
        world: World the level belongs to.
    """

    cols: int
    rows: int
    goal_count: int
    difficulty: str = "medium"
    compression: str | None = None
    interior_walls: int | None = None
    branches: int | None = None
    locked_fraction: float = 0.0
    id: int | None = None
    name: str | None = None
    world: int = 1


@dataclass
class GenerationResult:
    """Outcome of a generation run.

    Attributes:
        level: The generated level, or None if every attempt failed.
        attempts: Number of attempts made.
        failures: Reason for each abandoned attempt, in order.
    """

    level: Level | None
    attempts: int
    failures: list[AttemptFailure] = field(default_factory=list)


@dataclass
class _Puzzle:
    """Tiles and solution of a successful attempt."""

    tiles: list[Tile]
    goals: list[Position]
    solution: list[Move]


def validate_options(options: GenerationOptions) -> list[str]:
    """Validate generation options.

    Args:
        options: Options to validate.

    Returns:
        List of error messages (empty if valid).
    """
    errors: list[str] = []

    if options.cols < 3 or options.rows < 3:
        errors.append(
            f"Grid must be at least 3x3, got {options.cols}x{options.rows}"
        )
    if options.goal_count < 2:
        errors.append(f"goal_count must be at least 2, got {options.goal_count}")
    if options.difficulty not in DIFFICULTY_PROFILES:
        errors.append(
            f"Invalid difficulty: '{options.difficulty}'. "
            f"Valid options: {', '.join(DIFFICULTY_PROFILES)}"
        )
    if not 0.0 <= options.locked_fraction <= 1.0:
        errors.append(
            f"locked_fraction must be between 0.0 and 1.0, "
            f"got {options.locked_fraction}"
        )
    if options.interior_walls is not None and options.interior_walls < 0:
        errors.append(f"interior_walls must be >= 0, got {options.interior_walls}")
    if options.branches is not None and options.branches < 0:
        errors.append(f"branches must be >= 0, got {options.branches}")

    return errors


def connect_goals(
    goals: list[Position],
    cols: int,
    rows: int,
    occupied: set[Position],
    rng: random.Random,
) -> ConnectionMap | None:
    """Carve winding paths between each consecutive pair of goals.

    Later paths may not cross earlier ones. Path cells are added to
    `occupied`.

    Returns:
        Openings of the main path, or None if any pair could not be joined.
    """
    main = ConnectionMap()
    goal_set = set(goals)

    for source, target in zip(goals, goals[1:]):
        blocked = occupied - {target}
        path = winding_path(source, target, cols, rows, blocked, rng, cols * rows)
        if path is None or len(path) < 2:
            return None
        main.add_path(path)
        occupied.update(cell for cell in path if cell not in goal_set)

    return main


def add_branches(
    main: ConnectionMap,
    goals: list[Position],
    cols: int,
    rows: int,
    occupied: set[Position],
    count: int,
    rng: random.Random,
) -> ConnectionMap:
    """Hang up to `count` dead-end stubs off random main-path cells.

    Each main-path cell roots at most one branch. Branch cells are added to
    `occupied`.

    Returns:
        Openings of the branches, root cells included.
    """
    branches = ConnectionMap()
    goal_set = set(goals)
    roots = [cell for cell in main.cells() if cell not in goal_set]
    rng.shuffle(roots)

    added = 0
    for root in roots:
        if added >= count:
            break
        if len(main.get(root) | branches.get(root)) >= 4:
            continue
        stub = dead_end_branch(
            root, cols, rows, set(occupied), rng.randint(*BRANCH_LENGTH), rng
        )
        if not stub:
            continue
        branches.add_path([root, *stub])
        occupied.update(stub)
        added += 1

    return branches


def _attempt(
    options: GenerationOptions,
    compression: CompressionProfile,
    wall_count: int,
    branch_count: int,
    rng: random.Random,
) -> _Puzzle | AttemptFailure:
    cols, rows = options.cols, options.rows

    walls = border_walls(cols, rows)
    occupied = {tile.position for tile in walls}

    goals = select_goal_positions(cols, rows, options.goal_count, compression, rng)
    if goals is None:
        return AttemptFailure.PLACEMENT
    occupied.update(goals)

    main = connect_goals(goals, cols, rows, occupied, rng)
    if main is None:
        return AttemptFailure.PATH

    if wall_count > 0:
        walls.extend(place_room_walls(cols, rows, occupied, wall_count, rng))

    branches = add_branches(main, goals, cols, rows, occupied, branch_count, rng)

    wall_cells = {tile.position for tile in walls}
    openings = merge_connections(main, branches)
    if find_dead_zones(openings, wall_cells, cols, rows):
        return AttemptFailure.DEAD_ZONE

    path_tiles, solution = build_tiles(
        main, branches, goals, rng, options.locked_fraction
    )
    tiles = [*walls, *(make_goal_node(goal) for goal in goals), *path_tiles]

    if is_connected(tiles, goals):
        return AttemptFailure.PRE_SOLVED
    if not is_connected(apply_solution(tiles, solution), goals):
        return AttemptFailure.INCONSISTENT_SOLUTION
    if sum(move.rotations for move in solution) == 0:
        return AttemptFailure.DEGENERATE_SOLUTION

    return _Puzzle(tiles=tiles, goals=goals, solution=solution)


def generate_level_report(
    options: GenerationOptions, rng: random.Random
) -> GenerationResult:
    """Generate a level, reporting every abandoned attempt.

    The compression profile, wall cluster count and branch count are drawn
    once per call when not given, so all attempts share them.

    Args:
        options: Level parameters.
        rng: Random number generator; the only source of randomness.

    Returns:
        GenerationResult with the level (or None) and attempt details.

    Raises:
        GenerationError: If the options are invalid.
    """
    option_errors = validate_options(options)
    if option_errors:
        raise GenerationError(f"Invalid options: {'; '.join(option_errors)}")

    difficulty = get_difficulty(options.difficulty)
    if options.compression is not None:
        compression = get_compression(options.compression)
    else:
        compression = pick_compression(rng)
    if options.interior_walls is not None:
        wall_count = options.interior_walls
    else:
        wall_count = rng.randint(difficulty.walls_min, difficulty.walls_max)
    if options.branches is not None:
        branch_count = options.branches
    else:
        branch_count = rng.randint(*DEFAULT_BRANCHES)

    failures: list[AttemptFailure] = []
    for attempt in range(MAX_ATTEMPTS):
        outcome = _attempt(options, compression, wall_count, branch_count, rng)
        if isinstance(outcome, AttemptFailure):
            failures.append(outcome)
            continue

        total_rotations = sum(move.rotations for move in outcome.solution)
        level = Level(
            id=options.id if options.id is not None else rng.randint(1, 999999999),
            name=options.name or generate_name(options.difficulty, rng),
            world=options.world,
            grid_cols=options.cols,
            grid_rows=options.rows,
            tiles=tuple(outcome.tiles),
            goal_nodes=tuple(outcome.goals),
            max_moves=total_rotations + difficulty.move_padding,
            compression_delay=difficulty.compression_delay,
            compression_direction=compression.direction,
            solution=tuple(outcome.solution),
        )
        return GenerationResult(level=level, attempts=attempt + 1, failures=failures)

    return GenerationResult(level=None, attempts=MAX_ATTEMPTS, failures=failures)


def generate_level(options: GenerationOptions, rng: random.Random) -> Level | None:
    """Generate a level, or None if all attempts failed.

    See generate_level_report() for details.
    """
    return generate_level_report(options, rng).level
