"""
Showdown and winner determination for Dice-Poker-over-SSH.
"""

import logging
from typing import Any, Dict

from dicepoker.hand_evaluation import compare_hands, evaluate_dice


class ShowdownEngine:
    """Evaluates contenders and hands the pot to a single winner."""

    def __init__(self, game_engine):
        self.game_engine = game_engine

    def evaluate_hands(self) -> Dict[str, Any]:
        """Evaluate every non-folded seat and award the pot.

        Ties go to the first contender in seat order; the pot is never split.
        Returns a dict with the winner's name and id, the amount won and
        each contender's HandResult keyed by seat id.
        """
        engine = self.game_engine
        contenders = engine.non_folded_players()
        if not contenders:
            logging.warning("Showdown in room %s with no contenders", engine.room_code)
            return {'winner': None, 'winner_id': None, 'pot': engine.pot, 'hands': {}}

        for p in contenders:
            p.hand_result = evaluate_dice(p.hole_dice + engine.community_dice)

        winner = contenders[0]
        for p in contenders[1:]:
            if compare_hands(p.hand_result, winner.hand_result) > 0:
                winner = p

        amount = engine.pot
        winner.chips += amount
        engine.pot = 0
        for p in engine.players:
            p.is_winner = p is winner

        engine.add_log(f"🏆 {winner.name} wins {amount} with {winner.hand_result.description}")
        return {
            'winner': winner.name,
            'winner_id': winner.id,
            'pot': amount,
            'hands': {p.id: p.hand_result for p in contenders},
        }
