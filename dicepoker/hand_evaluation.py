"""
Hand evaluation for Dice-Poker-over-SSH.

A hand is any multiset of die faces (2 hole dice plus up to 5 community
dice). Ranks are checked top-down in RANK_CHECKS and the first check that
matches decides the hand, so the order of that tuple is part of the rules.
"""

from collections import Counter
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from dicepoker.dice import is_valid_face


class HandRank(IntEnum):
    HIGH_DIE = 0
    ONE_PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    FIVE_STRAIGHT = 4
    SIX_STRAIGHT = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    FIVE_OF_A_KIND = 8


RANK_NAMES = {
    HandRank.HIGH_DIE: 'High Die',
    HandRank.ONE_PAIR: 'One Pair',
    HandRank.TWO_PAIR: 'Two Pair',
    HandRank.THREE_OF_A_KIND: 'Three of a Kind',
    HandRank.FIVE_STRAIGHT: 'Five Straight',
    HandRank.SIX_STRAIGHT: 'Six Straight',
    HandRank.FULL_HOUSE: 'Full House',
    HandRank.FOUR_OF_A_KIND: 'Four of a Kind',
    HandRank.FIVE_OF_A_KIND: 'Five of a Kind',
}

HIGH_STRAIGHT = (2, 3, 4, 5, 6)
LOW_STRAIGHT = (1, 2, 3, 4, 5)
SIX_STRAIGHT = (1, 2, 3, 4, 5, 6)


@dataclass(frozen=True)
class HandResult:
    """Ranked result of a set of dice. Compare with compare_hands()."""

    rank: HandRank
    tie_breakers: Tuple[int, ...]
    description: str

    @property
    def rank_name(self) -> str:
        return RANK_NAMES[self.rank]

    def to_dict(self) -> Dict[str, object]:
        return {
            'rank': self.rank.name,
            'rank_name': self.rank_name,
            'tie_breakers': list(self.tie_breakers),
            'description': self.description,
        }


def _plural(face: int) -> str:
    return f"{face}s"


def hand_description(rank: HandRank, tie_breakers: Sequence[int]) -> str:
    """Convert a rank and its tie-breakers to a human-readable description."""
    if rank == HandRank.FIVE_OF_A_KIND:
        return f"Five of a Kind, {_plural(tie_breakers[0])}"
    elif rank == HandRank.FOUR_OF_A_KIND:
        return f"Four of a Kind, {_plural(tie_breakers[0])}"
    elif rank == HandRank.FULL_HOUSE:
        return f"Full House, {_plural(tie_breakers[0])} over {_plural(tie_breakers[1])}"
    elif rank == HandRank.SIX_STRAIGHT:
        return "Six Straight (1-6)"
    elif rank == HandRank.FIVE_STRAIGHT:
        if tie_breakers[0] == 6:
            return "High Straight (2-6)"
        return "Low Straight (1-5)"
    elif rank == HandRank.THREE_OF_A_KIND:
        return f"Three of a Kind, {_plural(tie_breakers[0])}"
    elif rank == HandRank.TWO_PAIR:
        return f"Two Pair, {_plural(tie_breakers[0])} and {_plural(tie_breakers[1])}"
    elif rank == HandRank.ONE_PAIR:
        return f"Pair of {_plural(tie_breakers[0])}"
    else:
        return f"High Die, {tie_breakers[0]}"


def _result(rank: HandRank, tie_breakers: Sequence[int]) -> HandResult:
    tb = tuple(tie_breakers)
    return HandResult(rank, tb, hand_description(rank, tb))


class _DiceInfo:
    """Face counts shared by the rank checks."""

    def __init__(self, dice: Sequence[int]):
        self.dice = list(dice)
        self.counts = Counter(self.dice)
        # distinct faces, highest first
        self.faces = sorted(self.counts, reverse=True)
        self.trip = next((f for f in self.faces if self.counts[f] >= 3), None)

    def has_all(self, faces: Sequence[int]) -> bool:
        return all(f in self.counts for f in faces)

    def top_excluding(self, excluded: Sequence[int], n: int) -> List[int]:
        """Highest n dice (duplicates kept) whose face is not in excluded."""
        return sorted((d for d in self.dice if d not in excluded), reverse=True)[:n]


def _five_of_a_kind(info: _DiceInfo) -> Optional[HandResult]:
    for face in info.faces:
        if info.counts[face] >= 5:
            return _result(HandRank.FIVE_OF_A_KIND, [face])
    return None


def _four_of_a_kind(info: _DiceInfo) -> Optional[HandResult]:
    for face in info.faces:
        if info.counts[face] == 4:
            kickers = [f for f in info.faces if f != face]
            return _result(HandRank.FOUR_OF_A_KIND, [face, kickers[0] if kickers else 0])
    return None


def _full_house(info: _DiceInfo) -> Optional[HandResult]:
    if info.trip is None:
        return None
    pair = next((f for f in info.faces if f != info.trip and info.counts[f] >= 2), None)
    if pair is None:
        return None
    return _result(HandRank.FULL_HOUSE, [info.trip, pair])


def _six_straight(info: _DiceInfo) -> Optional[HandResult]:
    if info.has_all(SIX_STRAIGHT):
        return _result(HandRank.SIX_STRAIGHT, [6])
    return None


def _five_straight(info: _DiceInfo) -> Optional[HandResult]:
    # high straight wins over low when both are present
    if info.has_all(HIGH_STRAIGHT):
        return _result(HandRank.FIVE_STRAIGHT, [6])
    if info.has_all(LOW_STRAIGHT):
        return _result(HandRank.FIVE_STRAIGHT, [5])
    return None


def _three_of_a_kind(info: _DiceInfo) -> Optional[HandResult]:
    if info.trip is None:
        return None
    return _result(HandRank.THREE_OF_A_KIND, [info.trip] + info.top_excluding([info.trip], 2))


def _pairs(info: _DiceInfo) -> List[int]:
    return [f for f in info.faces if info.counts[f] >= 2]


def _two_pair(info: _DiceInfo) -> Optional[HandResult]:
    pairs = _pairs(info)
    if len(pairs) < 2:
        return None
    high, low = pairs[0], pairs[1]
    kicker = info.top_excluding([high, low], 1)
    return _result(HandRank.TWO_PAIR, [high, low, kicker[0] if kicker else 0])


def _one_pair(info: _DiceInfo) -> Optional[HandResult]:
    pairs = _pairs(info)
    if len(pairs) != 1:
        return None
    pair = pairs[0]
    return _result(HandRank.ONE_PAIR, [pair] + info.top_excluding([pair], 3))


def _high_die(info: _DiceInfo) -> HandResult:
    return _result(HandRank.HIGH_DIE, sorted(info.dice, reverse=True)[:5])


# Highest precedence first. Straights sit below Full House on purpose:
# 1,1,1,1,2,3,4,5,6 must stay Four of a Kind.
RANK_CHECKS: Tuple[Callable[[_DiceInfo], Optional[HandResult]], ...] = (
    _five_of_a_kind,
    _four_of_a_kind,
    _full_house,
    _six_straight,
    _five_straight,
    _three_of_a_kind,
    _two_pair,
    _one_pair,
)


def evaluate_dice(dice: Sequence[int]) -> HandResult:
    """Evaluate a multiset of die faces and return its HandResult.

    Raises ValueError for an empty hand or a face outside 1..6.
    """
    if not dice:
        raise ValueError("Cannot evaluate an empty hand")
    for face in dice:
        if not is_valid_face(face):
            raise ValueError(f"Invalid die face: {face!r}")

    info = _DiceInfo(dice)
    for check in RANK_CHECKS:
        result = check(info)
        if result is not None:
            return result
    return _high_die(info)


def compare_hands(a: HandResult, b: HandResult) -> int:
    """Positive if a beats b, negative if b beats a, 0 on a tie.

    Tie-breakers are compared pairwise; when one sequence runs out first
    the hands are tied.
    """
    if a.rank != b.rank:
        return int(a.rank) - int(b.rank)
    for x, y in zip(a.tie_breakers, b.tie_breakers):
        if x != y:
            return x - y
    return 0
