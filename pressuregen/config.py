"""Configuration parsing for pressuregen."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pressuregen.profiles import DIFFICULTY_PROFILES
from pressuregen.world import WorldConfig

# Use tomllib (Python 3.11+) with fallback to tomli
if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError as e:
        raise ImportError(
            "tomli is required for Python < 3.11. Install with: pip install tomli"
        ) from e


@dataclass
class RunConfig:
    """Run-wide settings."""

    seed: int = 0  # 0 = pick a random seed
    output_dir: str = "./output"


def _check_world(world: WorldConfig) -> None:
    """Validate a world section.

    Raises:
        ValueError: On the first invalid value.
    """
    if world.level_count < 1:
        raise ValueError(f"levels must be >= 1, got {world.level_count}")
    if world.cols < 3 or world.rows < 3:
        raise ValueError(f"grid must be at least 3x3, got {world.cols}x{world.rows}")
    if world.goal_count < 2:
        raise ValueError(f"goals must be >= 2, got {world.goal_count}")
    if world.difficulty not in DIFFICULTY_PROFILES:
        raise ValueError(
            f"difficulty must be one of {', '.join(DIFFICULTY_PROFILES)}, "
            f"got '{world.difficulty}'"
        )
    if not 0.0 <= world.locked_fraction <= 1.0:
        raise ValueError(
            f"locked_fraction must be 0.0-1.0, got {world.locked_fraction}"
        )


@dataclass
class Config:
    """Main configuration container."""

    run: RunConfig = field(default_factory=RunConfig)
    worlds: list[WorldConfig] = field(default_factory=lambda: [WorldConfig()])

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.worlds:
            raise ValueError("at least one world is required")
        for world in self.worlds:
            _check_world(world)

    @property
    def seed(self) -> int:
        return self.run.seed

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        """Create Config from a dictionary (e.g., parsed TOML)."""
        run_section = data.get("run", {})
        world_sections = data.get("worlds", [{}])

        return cls(
            run=RunConfig(
                seed=run_section.get("seed", 0),
                output_dir=run_section.get("output_dir", "./output"),
            ),
            worlds=[
                WorldConfig(
                    world_id=section.get("id", index + 1),
                    level_count=section.get("levels", 10),
                    start_id=section.get("start_id", 1),
                    cols=section.get("cols", 7),
                    rows=section.get("rows", section.get("cols", 7)),
                    goal_count=section.get("goals", 2),
                    difficulty=section.get("difficulty", "easy"),
                    compression=section.get("compression"),
                    interior_walls=section.get("interior_walls"),
                    branches=section.get("branches"),
                    locked_fraction=section.get("locked_fraction", 0.0),
                    names=section.get("names", []),
                )
                for index, section in enumerate(world_sections)
            ],
        )

    @classmethod
    def from_toml(cls, path: str | Path) -> Config:
        """Load configuration from a TOML file."""
        path = Path(path)
        with path.open("rb") as f:
            data = tomllib.load(f)
        return cls.from_dict(data)


def load_config(path: str | Path) -> Config:
    """Load configuration from a TOML file.

    This is a convenience function that wraps Config.from_toml().

    Args:
        path: Path to the TOML configuration file.

    Returns:
        Parsed Config object.
    """
    return Config.from_toml(path)
