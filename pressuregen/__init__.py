"""pressuregen - procedural generator for pipe-connection puzzle levels."""

__version__ = "0.1.0"

from pressuregen.compact import dehydrate_level, hydrate_level
from pressuregen.config import Config, RunConfig, load_config
from pressuregen.generator import (
    AttemptFailure,
    GenerationError,
    GenerationOptions,
    GenerationResult,
    generate_level,
    generate_level_report,
)
from pressuregen.grid import (
    ConnectionMap,
    Direction,
    Level,
    Move,
    Position,
    Tile,
    TileKind,
)
from pressuregen.output import export_json, export_render, level_to_dict, render_level
from pressuregen.profiles import (
    COMPRESSION_PROFILES,
    DIFFICULTY_PROFILES,
    CompressionProfile,
    DifficultyProfile,
)
from pressuregen.shapes import SHAPES, Shape, find_shape
from pressuregen.validator import (
    ValidationResult,
    apply_solution,
    is_connected,
    validate_level,
)
from pressuregen.world import WorldConfig, generate_world

__all__ = [
    # Grid
    "ConnectionMap",
    "Direction",
    "Level",
    "Move",
    "Position",
    "Tile",
    "TileKind",
    # Shapes
    "SHAPES",
    "Shape",
    "find_shape",
    # Profiles
    "COMPRESSION_PROFILES",
    "DIFFICULTY_PROFILES",
    "CompressionProfile",
    "DifficultyProfile",
    # Generator
    "AttemptFailure",
    "GenerationError",
    "GenerationOptions",
    "GenerationResult",
    "generate_level",
    "generate_level_report",
    # World
    "WorldConfig",
    "generate_world",
    # Config
    "Config",
    "RunConfig",
    "load_config",
    # Validator
    "ValidationResult",
    "apply_solution",
    "is_connected",
    "validate_level",
    # Output
    "dehydrate_level",
    "hydrate_level",
    "export_json",
    "export_render",
    "level_to_dict",
    "render_level",
]
