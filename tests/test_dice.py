import random

import pytest

from dicepoker.dice import FACES, is_valid_face, roll_dice, roll_die


def test_roll_die_stays_in_range():
    rng = random.Random(7)
    rolls = [roll_die(rng) for _ in range(500)]
    assert set(rolls) <= set(FACES)
    # 500 rolls of a fair die hit every face
    assert set(rolls) == set(FACES)


def test_roll_dice_count_and_determinism():
    assert roll_dice(0) == []
    assert len(roll_dice(5, random.Random(1))) == 5
    assert roll_dice(7, random.Random(99)) == roll_dice(7, random.Random(99))

    with pytest.raises(ValueError):
        roll_dice(-1)


def test_is_valid_face():
    assert all(is_valid_face(f) for f in FACES)
    assert not is_valid_face(0)
    assert not is_valid_face(7)
    assert not is_valid_face("3")
    assert not is_valid_face(True)
