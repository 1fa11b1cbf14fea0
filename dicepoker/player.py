"""
Player model and seat manager for Dice-Poker-over-SSH.

A Player is one seat at a room's table. Human seats are keyed by their
connection id; bot seats get a synthetic id from new_bot_id().
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional

from dicepoker.game_engine import STARTING_CHIPS
from dicepoker.hand_evaluation import HandResult


def new_player_id() -> str:
    return str(uuid.uuid4())


def new_bot_id() -> str:
    return f"BOT-{uuid.uuid4().hex[:12]}"


class Player:
    def __init__(self, player_id: str, name: str, is_human: bool = True,
                 chips: int = STARTING_CHIPS, is_host: bool = False):
        self.id = player_id
        self.name = name
        self.is_human = is_human
        self.chips = chips
        self.bet = 0  # contribution on the current street
        self.hole_dice: List[int] = []
        self.has_folded = False
        self.is_host = is_host
        self.hand_result: Optional[HandResult] = None
        self.is_winner: Optional[bool] = None

    @property
    def is_bot(self) -> bool:
        return not self.is_human

    def contribute(self, amount: int) -> int:
        """Move up to `amount` chips from the stack into the current bet.

        Returns what was actually paid; a short stack pays everything it has.
        """
        pay = max(0, min(amount, self.chips))
        self.chips -= pay
        self.bet += pay
        return pay

    def reset_for_round(self, hole_dice: List[int]):
        self.hole_dice = list(hole_dice)
        self.bet = 0
        self.has_folded = False
        self.is_winner = False
        self.hand_result = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'is_human': self.is_human,
            'chips': self.chips,
            'bet': self.bet,
            'hole_dice': list(self.hole_dice),
            'has_folded': self.has_folded,
            'is_host': self.is_host,
            'hand_result': self.hand_result.to_dict() if self.hand_result else None,
            'is_winner': self.is_winner,
        }

    def __repr__(self) -> str:
        kind = "human" if self.is_human else "bot"
        return f"<Player {self.name!r} {kind} chips={self.chips}>"


class PlayerManager:
    """Ordered seats of one room. Seating order is turn order."""

    def __init__(self, room_code: str = ""):
        self.players: List[Player] = []
        self.room_code = room_code

    def register_player(self, player_id: str, name: str, is_human: bool = True,
                        is_host: bool = False, chips: int = STARTING_CHIPS) -> Player:
        existing = self.get_player(player_id)
        if existing:
            logging.debug(f"Player {player_id} already seated in {self.room_code}, returning existing player")
            return existing

        player = Player(player_id, name, is_human=is_human, chips=chips, is_host=is_host)
        self.players.append(player)
        logging.debug(f"Seated {player.name} in {self.room_code}. Total players: {len(self.players)}")
        return player

    def get_player(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)
