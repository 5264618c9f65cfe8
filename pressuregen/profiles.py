"""Difficulty and compression profiles."""

from __future__ import annotations

import random
from dataclasses import dataclass


@dataclass(frozen=True)
class DifficultyProfile:
    """Per-tier tuning.

    Attributes:
        name: Tier name (easy, medium, hard, expert).
        compression_delay: Milliseconds before the walls start closing in.
        move_padding: Extra moves granted on top of the solution length.
        walls_min: Minimum interior wall clusters when not given explicitly.
        walls_max: Maximum interior wall clusters when not given explicitly.
    """

    name: str
    compression_delay: int
    move_padding: int
    walls_min: int
    walls_max: int


DIFFICULTY_PROFILES: dict[str, DifficultyProfile] = {
    "easy": DifficultyProfile("easy", 12000, 4, 0, 1),
    "medium": DifficultyProfile("medium", 8000, 3, 1, 2),
    "hard": DifficultyProfile("hard", 5000, 2, 2, 3),
    "expert": DifficultyProfile("expert", 3500, 1, 2, 4),
}


@dataclass(frozen=True)
class CompressionProfile:
    """Where the walls press in from, and where goals go as a result.

    Goals are placed toward the compressing side(s) so the hazard actually
    threatens them. Zones are fractions of the interior width and height.
    """

    direction: str
    zone_x: tuple[float, float]
    zone_y: tuple[float, float]


COMPRESSION_PROFILES: tuple[CompressionProfile, ...] = (
    CompressionProfile("top", (0.15, 0.85), (0.15, 0.5)),
    CompressionProfile("bottom", (0.15, 0.85), (0.5, 0.85)),
    CompressionProfile("left", (0.15, 0.5), (0.15, 0.85)),
    CompressionProfile("right", (0.5, 0.85), (0.15, 0.85)),
    CompressionProfile("top-bottom", (0.15, 0.85), (0.2, 0.8)),
    CompressionProfile("left-right", (0.2, 0.8), (0.15, 0.85)),
    CompressionProfile("top-left", (0.15, 0.5), (0.15, 0.5)),
    CompressionProfile("top-right", (0.5, 0.85), (0.15, 0.5)),
    CompressionProfile("bottom-left", (0.15, 0.5), (0.5, 0.85)),
    CompressionProfile("bottom-right", (0.5, 0.85), (0.5, 0.85)),
    CompressionProfile("all", (0.25, 0.75), (0.25, 0.75)),
)

_COMPRESSION_BY_NAME = {p.direction: p for p in COMPRESSION_PROFILES}


def get_difficulty(name: str) -> DifficultyProfile:
    """Look up a difficulty tier.

    Raises:
        KeyError: If the tier is unknown.
    """
    return DIFFICULTY_PROFILES[name]


def get_compression(name: str) -> CompressionProfile:
    """Look up a compression profile, falling back to "all" for unknown names."""
    return _COMPRESSION_BY_NAME.get(name, _COMPRESSION_BY_NAME["all"])


def pick_compression(rng: random.Random) -> CompressionProfile:
    return rng.choice(COMPRESSION_PROFILES)
