"""
Betting logic for Dice-Poker-over-SSH.

Fixed-limit, one action per seat per street: fold, check, or call a fixed
amount. Turn order and street pacing are handled by dicepoker.game.
"""

import logging
from typing import Optional

from dicepoker.game_engine import CALL_AMOUNT


ACTIONS = ('fold', 'check', 'call')


def normalize_action(action) -> Optional[str]:
    """Return the canonical action name, or None if it is not one."""
    if not isinstance(action, str):
        return None
    action = action.strip().lower()
    return action if action in ACTIONS else None


class BettingEngine:
    """Applies player actions to a GameEngine."""

    def __init__(self, game_engine):
        self.game_engine = game_engine

    def apply_action(self, player, action: str) -> bool:
        """Apply one action for `player`.

        Returns True when the action ended the round (everyone else folded).
        """
        logging.debug("Player %s action: %s", player.name, action)
        if action == 'fold':
            return self._fold(player)
        elif action == 'call':
            self._call(player)
        else:
            self.game_engine.add_log(f"{player.name} checks")
        return False

    def _fold(self, player) -> bool:
        player.has_folded = True
        self.game_engine.add_log(f"{player.name} folds")
        remaining = self.game_engine.non_folded_players()
        if len(remaining) == 1:
            self.award_uncontested(remaining[0])
            return True
        return False

    def _call(self, player):
        paid = player.contribute(CALL_AMOUNT)
        self.game_engine.pot += paid
        if paid < CALL_AMOUNT:
            self.game_engine.add_log(f"{player.name} goes all-in with {paid}")
        else:
            self.game_engine.add_log(f"{player.name} calls {paid}")

    def award_uncontested(self, winner):
        """Give the whole pot to the last seat standing and end the round."""
        engine = self.game_engine
        amount = engine.pot
        winner.chips += amount
        engine.pot = 0
        for p in engine.players:
            p.is_winner = p is winner
        engine.add_log(f"{winner.name} wins {amount} (everyone else folded)")
        engine.end_round()
