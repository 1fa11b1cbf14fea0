import random
from collections import Counter

import pytest

from dicepoker.ai import BOT_NAMES, DEFAULT_WEIGHTS, DiceBot, make_bot_name


def test_bot_only_returns_known_actions():
    bot = DiceBot(random.Random(11))
    seen = Counter(bot.decide() for _ in range(2000))
    assert set(seen) == {'fold', 'check', 'call'}
    # fold is the rare branch
    assert seen['fold'] < seen['check']
    assert seen['fold'] < seen['call']


def test_bot_thresholds():
    class FixedRng:
        def __init__(self, value):
            self.value = value

        def random(self):
            return self.value

    assert DiceBot(FixedRng(0.05)).decide() == 'fold'
    assert DiceBot(FixedRng(0.3)).decide() == 'check'
    assert DiceBot(FixedRng(0.59)).decide() == 'check'
    assert DiceBot(FixedRng(0.61)).decide() == 'call'
    assert DiceBot(FixedRng(0.9999)).decide() == 'call'


def test_weights_are_normalized_and_validated():
    bot = DiceBot(weights=(('check', 2), ('call', 2)))
    assert bot.weights == (('check', 0.5), ('call', 0.5))
    assert dict(DEFAULT_WEIGHTS)['fold'] == pytest.approx(0.1)

    with pytest.raises(ValueError):
        DiceBot(weights=(('raise', 1),))
    with pytest.raises(ValueError):
        DiceBot(weights=(('fold', -1), ('call', 2)))
    with pytest.raises(ValueError):
        DiceBot(weights=(('fold', 0),))


def test_make_bot_name():
    name = make_bot_name(random.Random(3))
    base, _, number = name.rpartition("-")
    assert base in BOT_NAMES
    assert 0 <= int(number) < 100
