"""
Die faces and rolling for Dice-Poker-over-SSH.
"""

import random
from typing import List, Optional

# Die representation: int face 1..6
Face = int

FACES = (1, 2, 3, 4, 5, 6)
HOLE_DICE = 2


def is_valid_face(value) -> bool:
    """Return True if value is an integer die face in 1..6."""
    return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 6


def roll_die(rng: Optional[random.Random] = None) -> Face:
    """Roll a single fair die."""
    return (rng or random).randint(1, 6)


def roll_dice(count: int, rng: Optional[random.Random] = None) -> List[Face]:
    """Roll `count` independent dice."""
    if count < 0:
        raise ValueError(f"Cannot roll {count} dice")
    return [roll_die(rng) for _ in range(count)]

