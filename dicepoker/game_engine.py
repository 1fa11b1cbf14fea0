"""
Core room state for Dice-Poker-over-SSH.

GameEngine owns one table: seats, community dice, pot, phase, the turn
pointer and the human-readable log. It only mutates state; turn sequencing
and timers live in dicepoker.game.Game.
"""

import logging
import random
from enum import Enum
from typing import Any, Dict, List, Optional

from dicepoker.dice import HOLE_DICE, roll_dice


# Fixed protocol constants
BLIND_AMOUNT = 10
CALL_AMOUNT = 10
STARTING_CHIPS = 1000
MIN_PLAYERS_TO_START = 2


class Phase(str, Enum):
    IDLE = 'IDLE'
    PRE_FLOP = 'PRE_FLOP'
    FLOP = 'FLOP'
    TURN = 'TURN'
    RIVER = 'RIVER'
    SHOWDOWN = 'SHOWDOWN'


BETTING_PHASES = (Phase.PRE_FLOP, Phase.FLOP, Phase.TURN, Phase.RIVER)
STARTABLE_PHASES = (Phase.IDLE, Phase.SHOWDOWN)

# phase -> (next phase, community dice to deal)
STREET_TRANSITIONS = {
    Phase.PRE_FLOP: (Phase.FLOP, 3),
    Phase.FLOP: (Phase.TURN, 1),
    Phase.TURN: (Phase.RIVER, 1),
    Phase.RIVER: (Phase.SHOWDOWN, 0),
}

PHASE_MESSAGES = {
    Phase.FLOP: "Flop: 3 community dice rolled",
    Phase.TURN: "Turn: 1 community die rolled",
    Phase.RIVER: "River: 1 community die rolled",
    Phase.SHOWDOWN: "Showdown!",
}

# expected community dice per phase
COMMUNITY_SIZES = {
    Phase.IDLE: 0,
    Phase.PRE_FLOP: 0,
    Phase.FLOP: 3,
    Phase.TURN: 4,
    Phase.RIVER: 5,
    Phase.SHOWDOWN: 5,
}


class GameEngine:
    """Authoritative state of a single room."""

    def __init__(self, room_code: str, players: Optional[List[Any]] = None,
                 rng: Optional[random.Random] = None):
        self.room_code = room_code
        self.players: List[Any] = players if players is not None else []
        self.rng = rng or random.Random()
        self.phase = Phase.IDLE
        self.community_dice: List[int] = []
        self.pot = 0
        self.current_bet = 0
        self.active_player_idx = -1
        self.log: List[str] = []
        # bumped on every start; stale timers compare against it
        self.hand_no = 0

    def add_log(self, message: str):
        self.log.append(message)
        logging.debug("[%s] %s", self.room_code, message)

    @property
    def active_player(self):
        if 0 <= self.active_player_idx < len(self.players):
            return self.players[self.active_player_idx]
        return None

    def player_index(self, player_id: str) -> int:
        for idx, p in enumerate(self.players):
            if p.id == player_id:
                return idx
        return -1

    def non_folded_players(self) -> List[Any]:
        return [p for p in self.players if not p.has_folded]

    def next_active_seat(self, from_idx: int) -> int:
        """First non-folded seat after from_idx, or -1 when the street is over."""
        for idx in range(from_idx + 1, len(self.players)):
            if not self.players[idx].has_folded:
                return idx
        return -1

    def first_active_seat(self) -> int:
        return self.next_active_seat(-1)

    def start_round(self):
        """Deal a fresh round: hole dice, blinds, seat 0 to act."""
        self.hand_no += 1
        self.phase = Phase.PRE_FLOP
        self.community_dice = []
        self.log = []
        self.pot = 0
        self.add_log(f"--- Round {self.hand_no} begins ---")
        self.deal_hole_dice()
        self.collect_blinds()
        self.active_player_idx = 0

    def deal_hole_dice(self):
        """Roll 2 hole dice for every seat and clear per-round flags."""
        for p in self.players:
            p.reset_for_round(roll_dice(HOLE_DICE, self.rng))

    def collect_blinds(self):
        """Charge the blind from every seat; short stacks go all-in."""
        for p in self.players:
            paid = p.contribute(BLIND_AMOUNT)
            self.pot += paid
            if paid < BLIND_AMOUNT:
                self.add_log(f"{p.name} posts an all-in blind of {paid}")
        self.current_bet = BLIND_AMOUNT
        self.add_log(f"Blinds of {BLIND_AMOUNT} collected")

    def deal_community(self, count: int) -> List[int]:
        dice = roll_dice(count, self.rng)
        self.community_dice.extend(dice)
        return dice

    def reset_street_bets(self):
        """Reset betting amounts for the new street."""
        self.current_bet = 0
        for p in self.players:
            p.bet = 0

    def advance_phase(self) -> Phase:
        """Move to the next street, dealing community dice as needed."""
        next_phase, count = STREET_TRANSITIONS[self.phase]
        if count:
            self.deal_community(count)
        self.phase = next_phase
        self.add_log(PHASE_MESSAGES[next_phase])
        self.reset_street_bets()
        if next_phase == Phase.SHOWDOWN:
            self.active_player_idx = -1
        else:
            self.active_player_idx = self.first_active_seat()
        logging.debug("Room %s advanced to %s", self.room_code, next_phase.value)
        return next_phase

    def end_round(self):
        """Force the round into its terminal state."""
        self.phase = Phase.SHOWDOWN
        self.active_player_idx = -1

    def get_public_state(self) -> Dict[str, Any]:
        """Full, unredacted snapshot of the room."""
        return {
            'room_id': self.room_code,
            'phase': self.phase.value,
            'community_dice': list(self.community_dice),
            'pot': self.pot,
            'current_bet': self.current_bet,
            'active_player_idx': self.active_player_idx,
            'hand_no': self.hand_no,
            'log': list(self.log),
            'players': [p.to_dict() for p in self.players],
        }
