"""Level name generator."""

from __future__ import annotations

import random

ADJECTIVES: dict[str, list[str]] = {
    "easy": ["Open", "Gentle", "Flowing", "Clear", "Smooth", "Soft", "Wide", "Loose"],
    "medium": [
        "Twisted", "Coiled", "Bent", "Winding", "Fractured", "Tangled", "Warped"
    ],
    "hard": ["Brutal", "Dense", "Locked", "Crushing", "Vicious", "Tight", "Savage"],
    "expert": ["Merciless", "Extreme", "Critical", "Lethal", "Infernal", "Absolute"],
}

NOUNS = [
    "Circuit",
    "Conduit",
    "Nexus",
    "Corridor",
    "Channel",
    "Lattice",
    "Mesh",
    "Duct",
    "Passage",
    "Vein",
]


def generate_name(difficulty: str, rng: random.Random) -> str:
    """Build an "Adjective Noun" name flavoured by difficulty.

    Unknown difficulties use the medium adjectives.
    """
    adjectives = ADJECTIVES.get(difficulty, ADJECTIVES["medium"])
    return f"{rng.choice(adjectives)} {rng.choice(NOUNS)}"
