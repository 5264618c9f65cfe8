"""Tests for the level generation controller."""

import random

import pytest

from pressuregen.compact import dehydrate_level, hydrate_level
from pressuregen.generator import (
    MAX_ATTEMPTS,
    AttemptFailure,
    GenerationError,
    GenerationOptions,
    add_branches,
    connect_goals,
    generate_level,
    generate_level_report,
    validate_options,
)
from pressuregen.grid import ConnectionMap, Position, TileKind, border_walls
from pressuregen.profiles import get_difficulty
from pressuregen.shapes import is_catalog_shape
from pressuregen.validator import apply_solution, is_connected, validate_level


def generate_many(options: GenerationOptions, seeds: range) -> list:
    """Generate one level per seed, dropping failures."""
    levels = []
    for seed in seeds:
        level = generate_level(options, random.Random(seed))
        if level is not None:
            levels.append(level)
    return levels


class TestValidateOptions:
    """Tests for validate_options."""

    def test_valid_options_return_empty_list(self):
        assert validate_options(GenerationOptions(cols=7, rows=7, goal_count=2)) == []

    def test_grid_too_small(self):
        errors = validate_options(GenerationOptions(cols=2, rows=7, goal_count=2))
        assert len(errors) == 1
        assert "3x3" in errors[0]

    def test_single_goal(self):
        errors = validate_options(GenerationOptions(cols=7, rows=7, goal_count=1))
        assert len(errors) == 1
        assert "goal_count" in errors[0]

    def test_unknown_difficulty(self):
        errors = validate_options(
            GenerationOptions(cols=7, rows=7, goal_count=2, difficulty="nightmare")
        )
        assert len(errors) == 1
        assert "nightmare" in errors[0]

    def test_locked_fraction_out_of_range(self):
        errors = validate_options(
            GenerationOptions(cols=7, rows=7, goal_count=2, locked_fraction=1.5)
        )
        assert len(errors) == 1
        assert "locked_fraction" in errors[0]

    def test_negative_counts(self):
        errors = validate_options(
            GenerationOptions(
                cols=7, rows=7, goal_count=2, interior_walls=-1, branches=-2
            )
        )
        assert len(errors) == 2

    def test_collects_every_error(self):
        errors = validate_options(
            GenerationOptions(cols=1, rows=1, goal_count=0, difficulty="?")
        )
        assert len(errors) == 3


class TestConnectGoals:
    """Tests for connect_goals."""

    def test_joins_two_goals(self):
        goals = [Position(1, 1), Position(5, 5)]
        occupied = {t.position for t in border_walls(7, 7)} | set(goals)
        before = set(occupied)

        main = connect_goals(goals, 7, 7, occupied, random.Random(1))

        assert main is not None
        for goal in goals:
            assert goal in main
            assert len(main.get(goal)) == 1
        path_cells = set(main.cells()) - set(goals)
        assert path_cells
        assert path_cells <= occupied
        assert not path_cells & before

    def test_paths_do_not_cross(self):
        goals = [Position(1, 1), Position(7, 7), Position(1, 7)]
        for seed in range(10):
            occupied = {t.position for t in border_walls(9, 9)} | set(goals)
            main = connect_goals(goals, 9, 9, occupied, random.Random(seed))
            if main is None:
                continue
            # The middle goal joins both paths; every other cell has two openings
            assert len(main.get(Position(7, 7))) == 2
            for cell in main.cells():
                if cell not in goals:
                    assert len(main.get(cell)) == 2

    def test_walled_off_goal_fails(self):
        goals = [Position(1, 1), Position(5, 5)]
        occupied = {t.position for t in border_walls(7, 7)} | set(goals)
        occupied |= {Position(4, 5), Position(5, 4)}
        assert connect_goals(goals, 7, 7, occupied, random.Random(0)) is None


class TestAddBranches:
    """Tests for add_branches."""

    def make_main(self) -> tuple[ConnectionMap, list[Position], set[Position]]:
        cells = [Position(x, 4) for x in range(1, 8)]
        main = ConnectionMap()
        main.add_path(cells)
        goals = [cells[0], cells[-1]]
        occupied = {t.position for t in border_walls(9, 9)} | set(cells)
        return main, goals, occupied

    def test_adds_requested_branches(self):
        main, goals, occupied = self.make_main()
        branches = add_branches(main, goals, 9, 9, occupied, 2, random.Random(3))

        roots = [cell for cell in branches.cells() if cell in main]
        assert len(roots) == 2
        for root in roots:
            assert root not in goals
            assert len(branches.get(root)) == 1
        stubs = [cell for cell in branches.cells() if cell not in main]
        assert stubs
        assert set(stubs) <= occupied

    def test_zero_branches(self):
        main, goals, occupied = self.make_main()
        branches = add_branches(main, goals, 9, 9, occupied, 0, random.Random(0))
        assert len(branches) == 0


class TestGenerateLevel:
    """Tests for generate_level and generate_level_report."""

    def test_invalid_options_raise(self):
        with pytest.raises(GenerationError, match="Invalid options"):
            generate_level(
                GenerationOptions(cols=7, rows=7, goal_count=1), random.Random(0)
            )

    def test_generated_levels_are_valid(self):
        options = GenerationOptions(cols=9, rows=9, goal_count=2, difficulty="easy")
        levels = generate_many(options, range(10))
        assert len(levels) >= 5

        padding = get_difficulty("easy").move_padding
        for level in levels:
            result = validate_level(level)
            assert result.is_valid, result.errors
            assert not is_connected(level.tiles, level.goal_nodes)
            assert is_connected(
                apply_solution(level.tiles, level.solution), level.goal_nodes
            )
            assert level.total_rotations > 0
            assert level.max_moves == level.total_rotations + padding
            assert len([t for t in level.tiles if t.is_goal]) == 2
            for tile in level.tiles:
                if tile.kind == TileKind.PATH:
                    assert is_catalog_shape(tile.connections)
            assert hydrate_level(dehydrate_level(level)) == level

    def test_border_is_walled(self):
        options = GenerationOptions(cols=9, rows=9, goal_count=2, difficulty="easy")
        level = generate_many(options, range(10))[0]
        walls = {t.position for t in level.tiles if t.kind == TileKind.WALL}
        for wall in border_walls(9, 9):
            assert wall.position in walls

    def test_three_goals(self):
        options = GenerationOptions(
            cols=10, rows=10, goal_count=3, difficulty="medium", compression="all"
        )
        levels = generate_many(options, range(10))
        assert levels
        for level in levels:
            assert level.goal_count == 3
            assert validate_level(level).is_valid

    def test_small_grid_sometimes_succeeds(self):
        options = GenerationOptions(
            cols=5, rows=5, goal_count=2, difficulty="easy", compression="top"
        )
        levels = generate_many(options, range(30))
        assert levels
        for level in levels:
            assert len([t for t in level.tiles if t.is_goal]) == 2
            assert level.solution

    def test_impossible_goal_count_fails(self):
        options = GenerationOptions(cols=5, rows=5, goal_count=6, difficulty="easy")
        result = generate_level_report(options, random.Random(0))
        assert result.level is None
        assert result.attempts == MAX_ATTEMPTS
        assert result.failures == [AttemptFailure.PLACEMENT] * MAX_ATTEMPTS

    def test_report_counts_attempts(self):
        options = GenerationOptions(cols=9, rows=9, goal_count=2, difficulty="easy")
        result = generate_level_report(options, random.Random(2))
        if result.level is not None:
            assert result.attempts == len(result.failures) + 1
        else:
            assert len(result.failures) == MAX_ATTEMPTS

    def test_deterministic(self):
        options = GenerationOptions(cols=9, rows=9, goal_count=2)
        a = generate_level(options, random.Random(1234))
        b = generate_level(options, random.Random(1234))
        assert a == b

    def test_explicit_options_respected(self):
        options = GenerationOptions(
            cols=9,
            rows=9,
            goal_count=2,
            difficulty="easy",
            compression="left",
            interior_walls=0,
            branches=0,
            id=42,
            name="Test Level",
            world=3,
        )
        levels = generate_many(options, range(10))
        assert levels
        for level in levels:
            assert level.id == 42
            assert level.name == "Test Level"
            assert level.world == 3
            assert level.compression_direction == "left"
            assert level.compression_delay == get_difficulty("easy").compression_delay
            result = validate_level(level)
            assert "No interior walls" in result.warnings
            assert "No decoy tiles" in result.warnings

    def test_generated_id_and_name(self):
        options = GenerationOptions(cols=9, rows=9, goal_count=2, difficulty="hard")
        level = generate_many(options, range(10))[0]
        assert 1 <= level.id <= 999999999
        assert len(level.name.split()) == 2

    def test_locked_tiles_stay_out_of_solution(self):
        options = GenerationOptions(
            cols=9, rows=9, goal_count=2, difficulty="easy", locked_fraction=0.5
        )
        levels = generate_many(options, range(10))
        assert levels
        for level in levels:
            locked = {
                t.position
                for t in level.tiles
                if t.kind == TileKind.PATH and not t.can_rotate
            }
            assert locked
            assert not locked & {m.position for m in level.solution}
            assert validate_level(level).is_valid
