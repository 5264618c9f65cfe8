"""Batch generation of a world's level list."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from pressuregen.generator import (
    GenerationOptions,
    GenerationResult,
    generate_level_report,
)
from pressuregen.grid import Level


@dataclass
class WorldConfig:
    """Generation parameters shared by every level of a world.

    Attributes:
        world_id: World number stored on each level.
        level_count: Number of levels to attempt.
        start_id: Id of the first level; later levels count up from it.
        cols: Grid width.
        rows: Grid height.
        goal_count: Goal nodes per level.
        difficulty: Difficulty tier name.
        compression: Compression direction (random per level when None).
        interior_walls: Wall clusters per level (tier default when None).
        branches: Decoy branches per level (default when None).
        locked_fraction: Share of main-path tiles placed solved.
        names: Optional names, by level index; missing names are generated.
    """

    world_id: int = 1
    level_count: int = 10
    start_id: int = 1
    cols: int = 7
    rows: int = 7
    goal_count: int = 2
    difficulty: str = "easy"
    compression: str | None = None
    interior_walls: int | None = None
    branches: int | None = None
    locked_fraction: float = 0.0
    names: list[str] = field(default_factory=list)

    def options_for(self, index: int) -> GenerationOptions:
        """Generation options of the level at `index` within the world."""
        return GenerationOptions(
            cols=self.cols,
            rows=self.rows,
            goal_count=self.goal_count,
            difficulty=self.difficulty,
            compression=self.compression,
            interior_walls=self.interior_walls,
            branches=self.branches,
            locked_fraction=self.locked_fraction,
            id=self.start_id + index,
            name=self.names[index] if index < len(self.names) else None,
            world=self.world_id,
        )


def generate_world_report(
    config: WorldConfig, rng: random.Random
) -> list[GenerationResult]:
    """Run the generator once per level slot.

    Args:
        config: World parameters.
        rng: Random number generator shared by every slot.

    Returns:
        One GenerationResult per slot, in slot order.

    Raises:
        GenerationError: If the world parameters are invalid.
    """
    return [
        generate_level_report(config.options_for(index), rng)
        for index in range(config.level_count)
    ]


def generate_world(config: WorldConfig, rng: random.Random) -> list[Level]:
    """Generate a world's levels, skipping slots that produced nothing."""
    return [
        result.level
        for result in generate_world_report(config, rng)
        if result.level is not None
    ]
