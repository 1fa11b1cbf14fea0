"""
Bot players for Dice-Poker-over-SSH.

DiceBot is a baseline policy: it ignores hand strength, pot odds and
position and draws an action from a fixed distribution. Anything with a
decide(player, game_state) -> 'fold' | 'check' | 'call' method can replace it.
"""

import random
from typing import Any, Dict, Optional, Sequence, Tuple

from dicepoker.betting_engine import ACTIONS


# cumulative thresholds are built from these in order
DEFAULT_WEIGHTS: Tuple[Tuple[str, float], ...] = (
    ('fold', 0.1),
    ('check', 0.5),
    ('call', 0.4),
)

BOT_NAMES = ("Dice King", "Lucky Roller", "Snake Eyes", "Boxcars", "High Roller", "Pip Counter")


def make_bot_name(rng: Optional[random.Random] = None) -> str:
    rng = rng or random
    return f"{rng.choice(BOT_NAMES)}-{rng.randrange(100)}"


class DiceBot:
    def __init__(self, rng: Optional[random.Random] = None,
                 weights: Sequence[Tuple[str, float]] = DEFAULT_WEIGHTS):
        for action, weight in weights:
            if action not in ACTIONS:
                raise ValueError(f"Unknown bot action: {action}")
            if weight < 0:
                raise ValueError(f"Negative weight for {action}")
        total = sum(w for _, w in weights)
        if total <= 0:
            raise ValueError("Bot weights must sum to a positive value")
        self.rng = rng or random.Random()
        self.weights = tuple((a, w / total) for a, w in weights)

    def decide(self, player: Any = None, game_state: Optional[Dict[str, Any]] = None) -> str:
        """Pick an action. Seat state is accepted but not used by this policy."""
        roll = self.rng.random()
        cumulative = 0.0
        for action, weight in self.weights:
            cumulative += weight
            if roll < cumulative:
                return action
        return self.weights[-1][0]
