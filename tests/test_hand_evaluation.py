import random

import pytest

from dicepoker.hand_evaluation import (
    HandRank,
    HandResult,
    compare_hands,
    evaluate_dice,
    hand_description,
)


def test_evaluate_each_category():
    assert evaluate_dice([4, 4, 4, 4, 4, 1, 2]).rank == HandRank.FIVE_OF_A_KIND
    assert evaluate_dice([3, 3, 3, 3, 6, 1, 2]).rank == HandRank.FOUR_OF_A_KIND
    assert evaluate_dice([5, 5, 5, 2, 2, 1, 6]).rank == HandRank.FULL_HOUSE
    assert evaluate_dice([1, 2, 3, 4, 5, 6, 6]).rank == HandRank.SIX_STRAIGHT
    assert evaluate_dice([2, 3, 4, 5, 6, 6, 2]).rank == HandRank.FIVE_STRAIGHT
    assert evaluate_dice([1, 2, 3, 4, 5, 5, 1]).rank == HandRank.FIVE_STRAIGHT
    assert evaluate_dice([6, 6, 6, 1, 2, 4, 5]).rank == HandRank.THREE_OF_A_KIND
    assert evaluate_dice([6, 6, 2, 2, 1, 4, 5]).rank == HandRank.TWO_PAIR
    assert evaluate_dice([3, 3, 1, 2, 5, 6]).rank == HandRank.ONE_PAIR
    assert evaluate_dice([1, 2, 4, 5, 6]).rank == HandRank.HIGH_DIE


def test_tie_breakers_and_descriptions():
    five = evaluate_dice([6, 6, 6, 6, 6, 1, 1])
    assert five.tie_breakers == (6,)
    assert five.description == "Five of a Kind, 6s"

    quads = evaluate_dice([2, 2, 2, 2, 5, 3, 1])
    assert quads.tie_breakers == (2, 5)
    assert quads.description == "Four of a Kind, 2s"

    full = evaluate_dice([5, 5, 5, 2, 2, 1, 3])
    assert full.tie_breakers == (5, 2)
    assert full.description == "Full House, 5s over 2s"

    high_straight = evaluate_dice([2, 3, 4, 5, 6, 6])
    assert high_straight.tie_breakers == (6,)
    assert high_straight.description == "High Straight (2-6)"

    low_straight = evaluate_dice([1, 2, 3, 4, 5, 1, 2])
    assert low_straight.tie_breakers == (5,)
    assert low_straight.description == "Low Straight (1-5)"

    trips = evaluate_dice([4, 4, 4, 6, 2, 1, 3])
    assert trips.rank == HandRank.THREE_OF_A_KIND
    assert trips.tie_breakers == (4, 6, 3)
    assert trips.description == "Three of a Kind, 4s"

    two_pair = evaluate_dice([2, 2, 6, 6, 3, 3, 5])
    assert two_pair.tie_breakers == (6, 3, 5)
    assert two_pair.description == "Two Pair, 6s and 3s"

    pair = evaluate_dice([5, 5, 1, 2, 3, 6])
    assert pair.tie_breakers == (5, 6, 3, 2)
    assert pair.description == "Pair of 5s"

    high = evaluate_dice([1, 3, 6])
    assert high.tie_breakers == (6, 3, 1)
    assert high.description == "High Die, 6"


def test_precedence_edges():
    # quads beat the six-straight hidden in the same dice
    hand = evaluate_dice([1, 1, 1, 1, 2, 3, 4, 5, 6])
    assert hand.rank == HandRank.FOUR_OF_A_KIND
    assert hand.tie_breakers == (1, 6)

    # two trips read as a full house, higher trip first
    hand = evaluate_dice([2, 2, 2, 5, 5, 5, 1])
    assert hand.rank == HandRank.FULL_HOUSE
    assert hand.tie_breakers == (5, 2)

    # full house beats a six straight
    hand = evaluate_dice([1, 1, 1, 2, 2, 3, 4, 5, 6])
    assert hand.rank == HandRank.FULL_HOUSE

    # both five straights present is still scored as the high one
    hand = evaluate_dice([1, 2, 3, 4, 5, 6])
    assert hand.rank == HandRank.SIX_STRAIGHT

    # quads with nothing else use a zero kicker
    hand = evaluate_dice([3, 3, 3, 3])
    assert hand.tie_breakers == (3, 0)


def test_invalid_input():
    with pytest.raises(ValueError):
        evaluate_dice([])
    with pytest.raises(ValueError):
        evaluate_dice([1, 2, 7])
    with pytest.raises(ValueError):
        evaluate_dice([0, 3])


def test_compare_hands():
    pair_of_sixes = evaluate_dice([6, 6, 1, 2, 4])
    pair_of_fives = evaluate_dice([5, 5, 1, 2, 4])
    two_pair = evaluate_dice([2, 2, 3, 3, 1])
    assert compare_hands(pair_of_sixes, pair_of_fives) > 0
    assert compare_hands(pair_of_fives, pair_of_sixes) < 0
    assert compare_hands(two_pair, pair_of_sixes) > 0

    same_a = evaluate_dice([6, 6, 1, 2, 4])
    same_b = evaluate_dice([4, 2, 1, 6, 6])
    assert compare_hands(same_a, same_b) == 0

    high = evaluate_dice([2, 3, 4, 5, 6, 6])
    low = evaluate_dice([1, 2, 3, 4, 5, 1])
    assert compare_hands(high, low) > 0


def test_compare_stops_at_shorter_tie_breakers():
    a = HandResult(HandRank.HIGH_DIE, (6, 5), "High Die, 6")
    b = HandResult(HandRank.HIGH_DIE, (6, 5, 4), "High Die, 6")
    assert compare_hands(a, b) == 0


def test_hand_result_to_dict_and_description_helper():
    hand = evaluate_dice([5, 5, 5, 2, 2])
    data = hand.to_dict()
    assert data == {
        'rank': 'FULL_HOUSE',
        'rank_name': 'Full House',
        'tie_breakers': [5, 2],
        'description': 'Full House, 5s over 2s',
    }
    assert hand_description(HandRank.SIX_STRAIGHT, (6,)) == "Six Straight (1-6)"


def test_order_does_not_matter():
    rng = random.Random(2024)
    for _ in range(200):
        dice = [rng.randint(1, 6) for _ in range(rng.randint(2, 7))]
        shuffled = list(dice)
        rng.shuffle(shuffled)
        assert evaluate_dice(dice) == evaluate_dice(shuffled)


def test_six_straight_with_a_pair():
    hand = evaluate_dice([1, 1, 2, 3, 4, 5, 6])
    assert hand.rank == HandRank.SIX_STRAIGHT
    assert hand.tie_breakers == (6,)


def test_straight_ladder():
    six = evaluate_dice([1, 2, 3, 4, 5, 6])
    high = evaluate_dice([2, 3, 4, 5, 6])
    low = evaluate_dice([1, 2, 3, 4, 5])
    assert compare_hands(six, high) > 0
    assert compare_hands(high, low) > 0
    assert compare_hands(six, low) > 0


def test_compare_is_antisymmetric():
    rng = random.Random(77)
    hands = [evaluate_dice([rng.randint(1, 6) for _ in range(7)]) for _ in range(60)]
    for a in hands:
        for b in hands:
            assert (compare_hands(a, b) > 0) == (compare_hands(b, a) < 0)
