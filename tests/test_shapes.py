"""Tests for the pipe shape catalog."""

from itertools import combinations

from pressuregen.grid import ALL_DIRECTIONS, Direction
from pressuregen.shapes import (
    CROSS,
    SHAPES,
    find_shape,
    is_catalog_shape,
    solved_openings,
)

UP, RIGHT, DOWN, LEFT = Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT


def all_requests() -> list[frozenset[Direction]]:
    """Every non-empty subset of directions."""
    return [
        frozenset(combo)
        for size in range(1, 5)
        for combo in combinations(list(Direction), size)
    ]


def test_catalog_composition():
    """Two straights, four corners, four Ts and one cross."""
    sizes = [len(shape.openings) for shape in SHAPES]
    assert sizes.count(2) == 6
    assert sizes.count(3) == 4
    assert sizes.count(4) == 1
    assert SHAPES[-1] is CROSS


def test_catalog_is_ordered_by_size():
    sizes = [len(shape.openings) for shape in SHAPES]
    assert sizes == sorted(sizes)


class TestFindShape:
    def test_corner_needs_no_rotation(self):
        shape, rotation = find_shape({UP, RIGHT})
        assert shape.name == "corner_ur"
        assert rotation == 0

    def test_straight(self):
        shape, rotation = find_shape({UP, DOWN})
        assert shape.name == "straight_v"
        assert rotation == 0

    def test_horizontal_request_gets_exact_straight(self):
        shape, rotation = find_shape({LEFT, RIGHT})
        assert len(shape.openings) == 2
        assert shape.rotated(rotation) == frozenset({LEFT, RIGHT})

    def test_single_opening_uses_straight(self):
        shape, rotation = find_shape({LEFT})
        assert len(shape.openings) == 2
        assert LEFT in shape.rotated(rotation)

    def test_three_openings_use_tee(self):
        shape, rotation = find_shape({LEFT, UP, DOWN})
        assert len(shape.openings) == 3
        assert shape.rotated(rotation) == frozenset({LEFT, UP, DOWN})

    def test_four_openings_use_cross(self):
        assert find_shape(ALL_DIRECTIONS) == (CROSS, 0)

    def test_every_request_is_covered_by_smallest_shape(self):
        for request in all_requests():
            shape, rotation = find_shape(request)
            assert request <= shape.rotated(rotation)
            assert len(shape.openings) == max(2, len(request))
            assert 0 <= rotation <= 3

    def test_is_pure(self):
        assert find_shape({DOWN, LEFT}) == find_shape({DOWN, LEFT})

    def test_solved_openings(self):
        assert solved_openings({RIGHT, DOWN, LEFT}) == frozenset({RIGHT, DOWN, LEFT})


class TestIsCatalogShape:
    def test_accepts_rotations_of_base_shapes(self):
        for shape in SHAPES:
            for rotation in range(4):
                assert is_catalog_shape(shape.rotated(rotation))

    def test_rejects_single_opening(self):
        assert not is_catalog_shape(frozenset({UP}))

    def test_rejects_empty(self):
        assert not is_catalog_shape(frozenset())
