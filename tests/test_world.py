"""Tests for world batch generation."""

import random

import pytest

from pressuregen.generator import GenerationError
from pressuregen.world import WorldConfig, generate_world, generate_world_report


def test_options_for_numbers_levels():
    """options_for derives id, name and world from the slot index."""
    world = WorldConfig(
        world_id=2, start_id=11, cols=9, rows=8, goal_count=3, names=["First"]
    )
    first = world.options_for(0)
    second = world.options_for(1)

    assert first.id == 11
    assert first.name == "First"
    assert first.world == 2
    assert (first.cols, first.rows, first.goal_count) == (9, 8, 3)
    assert second.id == 12
    assert second.name is None


def test_generate_world_report_one_result_per_slot():
    world = WorldConfig(level_count=4, start_id=5, cols=9, rows=9)
    results = generate_world_report(world, random.Random(7))

    assert len(results) == 4
    for index, result in enumerate(results):
        if result.level is not None:
            assert result.level.id == 5 + index
            assert result.level.world == 1


def test_generate_world_skips_failed_slots():
    world = WorldConfig(level_count=3, cols=5, rows=5, goal_count=6)
    assert generate_world(world, random.Random(0)) == []


def test_generate_world_deterministic():
    world = WorldConfig(level_count=3, cols=8, rows=8, difficulty="medium")
    a = generate_world(world, random.Random(99))
    b = generate_world(world, random.Random(99))
    assert a == b
    assert a


def test_invalid_world_raises():
    with pytest.raises(GenerationError):
        generate_world(WorldConfig(difficulty="impossible"), random.Random(0))
