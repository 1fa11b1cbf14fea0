import random
from collections import deque
from typing import Callable, Iterable, List, Optional

import pytest

from dicepoker.game import Game
from dicepoker.player import Player


class ScriptedBot:
    """Bot policy which returns predetermined actions."""

    def __init__(self, actions: Iterable[str] = ()):
        self._queue = deque(actions)
        self.seen = []

    def decide(self, player=None, game_state=None):
        self.seen.append((player, game_state))
        if not self._queue:
            raise RuntimeError("No more scripted actions available")
        action = self._queue.popleft()
        if callable(action):
            return action(game_state)
        return action


class EventSink:
    """Collects outbound events for one viewer."""

    def __init__(self):
        self.events: List[dict] = []

    def __call__(self, message):
        self.events.append(message)

    def of_type(self, kind: str) -> List[dict]:
        return [e for e in self.events if e['type'] == kind]

    @property
    def last_view(self) -> Optional[dict]:
        updates = self.of_type('game_update')
        return updates[-1]['room'] if updates else None


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def make_player() -> Callable[..., Player]:
    """Factory for Player objects with preset dice."""

    def _factory(name: str, chips: int = 1000, hole_dice: Optional[List[int]] = None,
                 *, is_human: bool = True, is_host: bool = False) -> Player:
        player = Player(f"id-{name}", name, is_human=is_human, chips=chips, is_host=is_host)
        if hole_dice is not None:
            player.hole_dice = list(hole_dice)
        return player

    return _factory


@pytest.fixture
def make_game(rng) -> Callable[..., Game]:
    """Game with zero delays, so continuations fire on the next loop tick."""

    def _factory(actions: Iterable[str] = (), **kwargs) -> Game:
        kwargs.setdefault('bot_delay', 0)
        kwargs.setdefault('phase_delay', 0)
        return Game("ROOM01", rng=rng, bot=ScriptedBot(actions), **kwargs)

    return _factory


@pytest.fixture
def sink_factory() -> Callable[[], EventSink]:
    return EventSink
