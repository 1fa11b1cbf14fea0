"""
Turn and phase coordination for Dice-Poker-over-SSH.

Game is the per-room state machine. It brings together the room state
(GameEngine), the betting rules, the showdown and the bot policy, and it
serializes every mutation of one room behind a single asyncio.Lock.

Bot turns and street advances are delayed continuations. Each one carries
the TurnToken that was current when it was scheduled and is dropped if the
room has moved on by the time it fires.
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Set

from dicepoker.ai import DiceBot, make_bot_name
from dicepoker.betting_engine import BettingEngine, normalize_action
from dicepoker.game_engine import (
    BETTING_PHASES,
    MIN_PLAYERS_TO_START,
    STARTABLE_PHASES,
    GameEngine,
    Phase,
)
from dicepoker.player import Player, PlayerManager, new_bot_id
from dicepoker.showdown_engine import ShowdownEngine
from dicepoker.views import redact_state


DEFAULT_BOT_DELAY = 1.5
DEFAULT_PHASE_DELAY = 1.0


@dataclass(frozen=True)
class TurnToken:
    hand_no: int
    phase: Phase
    active_player_idx: int


class Game:
    """Main game coordinator for one room."""

    def __init__(self, room_code: str, rng: Optional[random.Random] = None, bot=None,
                 bot_delay: float = DEFAULT_BOT_DELAY, phase_delay: float = DEFAULT_PHASE_DELAY,
                 on_change: Optional[Callable[["Game"], Any]] = None):
        self.room_code = room_code
        self.rng = rng or random.Random()
        self.player_manager = PlayerManager(room_code)

        # Initialize game components
        self.engine = GameEngine(room_code, self.player_manager.players, self.rng)
        self.betting = BettingEngine(self.engine)
        self.showdown = ShowdownEngine(self.engine)
        self.bot = bot or DiceBot(self.rng)

        self.bot_delay = bot_delay
        self.phase_delay = phase_delay
        self.on_change = on_change
        self.last_showdown: Optional[Dict[str, Any]] = None
        self._lock = asyncio.Lock()
        self._pending: Set[asyncio.Task] = set()
        self._closed = False

    @property
    def players(self) -> List[Player]:
        return self.player_manager.players

    @property
    def phase(self) -> Phase:
        return self.engine.phase

    @property
    def pot(self) -> int:
        return self.engine.pot

    @property
    def community_dice(self) -> List[int]:
        return self.engine.community_dice

    @property
    def log(self) -> List[str]:
        return self.engine.log

    @property
    def active_player_idx(self) -> int:
        return self.engine.active_player_idx

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def token(self) -> TurnToken:
        return TurnToken(self.engine.hand_no, self.engine.phase, self.engine.active_player_idx)

    def _notify(self):
        if self.on_change is not None:
            self.on_change(self)

    # -- seating -----------------------------------------------------------

    def seat_host(self, player_id: str, name: str) -> Player:
        """Seat the room creator. Only used while the room is being built."""
        host = self.player_manager.register_player(player_id, name, is_human=True, is_host=True)
        self.engine.add_log(f"Room {self.room_code} created by {name}")
        return host

    def _seat(self, player_id: str, name: str, is_human: bool) -> Optional[Player]:
        if self.engine.phase != Phase.IDLE:
            logging.debug("Room %s: ignoring seat for %s, phase is %s",
                          self.room_code, name, self.engine.phase.value)
            return None
        if self.player_manager.get_player(player_id):
            return None
        player = self.player_manager.register_player(player_id, name, is_human=is_human)
        if is_human:
            self.engine.add_log(f"{name} joined the room")
        else:
            self.engine.add_log(f"Bot {name} joined the table")
        self._notify()
        return player

    async def join(self, player_id: str, name: str) -> Optional[Player]:
        async with self._lock:
            return self._seat(player_id, name, is_human=True)

    async def add_bot(self, requester_id: Optional[str] = None) -> Optional[Player]:
        async with self._lock:
            if requester_id is not None and self.player_manager.get_player(requester_id) is None:
                logging.debug("Room %s: add_bot from unseated %s ignored", self.room_code, requester_id)
                return None
            return self._seat(new_bot_id(), make_bot_name(self.rng), is_human=False)

    # -- round flow --------------------------------------------------------

    async def start(self, caller_id: str) -> bool:
        async with self._lock:
            return self._start(caller_id)

    def _start(self, caller_id: str) -> bool:
        caller = self.player_manager.get_player(caller_id)
        if caller is None or not caller.is_host:
            logging.debug("Room %s: start from non-host %s ignored", self.room_code, caller_id)
            return False
        if self.engine.phase not in STARTABLE_PHASES:
            logging.debug("Room %s: start ignored during %s", self.room_code, self.engine.phase.value)
            return False
        if len(self.players) < MIN_PLAYERS_TO_START:
            logging.debug("Room %s: start needs %d players", self.room_code, MIN_PLAYERS_TO_START)
            return False

        self.last_showdown = None
        self.engine.start_round()
        logging.info("Room %s: round %d started with %d players",
                     self.room_code, self.engine.hand_no, len(self.players))
        self._notify()
        self._schedule_bot_if_needed()
        return True

    async def player_action(self, player_id: str, action: str) -> bool:
        async with self._lock:
            return self._apply_action(player_id, action)

    def _apply_action(self, player_id: str, action: str) -> bool:
        act = normalize_action(action)
        if act is None:
            logging.debug("Room %s: unknown action %r from %s", self.room_code, action, player_id)
            return False
        if self.engine.phase not in BETTING_PHASES:
            return False
        player = self.engine.active_player
        if player is None or player.id != player_id:
            logging.debug("Room %s: out-of-turn %s from %s", self.room_code, act, player_id)
            return False

        if self.betting.apply_action(player, act):
            self._notify()
            return True
        self._advance_turn()
        return True

    def _advance_turn(self):
        nxt = self.engine.next_active_seat(self.engine.active_player_idx)
        if nxt == -1:
            # street complete; nobody may act until the next phase is dealt
            self.engine.active_player_idx = -1
            self._notify()
            self._schedule(self.phase_delay, self._next_phase)
            return

        self.engine.active_player_idx = nxt
        self._notify()
        self._schedule_bot_if_needed()

    def _next_phase(self):
        phase = self.engine.advance_phase()
        if phase == Phase.SHOWDOWN:
            self.last_showdown = self.showdown.evaluate_hands()
            logging.info("Room %s: round %d won by %s", self.room_code,
                         self.engine.hand_no, self.last_showdown.get('winner'))
        self._notify()
        if phase != Phase.SHOWDOWN:
            self._schedule_bot_if_needed()

    def _schedule_bot_if_needed(self):
        player = self.engine.active_player
        if player is not None and player.is_bot and not player.has_folded:
            self._schedule(self.bot_delay, self._bot_turn, player.id)

    def _bot_turn(self, bot_id: str):
        player = self.engine.active_player
        if player is None or player.id != bot_id:
            return
        view = redact_state(self.engine.get_public_state(), bot_id)
        decision = self.bot.decide(player, view)
        if not self._apply_action(bot_id, decision):
            logging.warning("Room %s: bot %s produced unusable action %r",
                            self.room_code, player.name, decision)

    # -- timers ------------------------------------------------------------

    def _schedule(self, delay: float, callback: Callable[..., Any], *args):
        if self._closed:
            return
        token = self.token()
        task = asyncio.get_running_loop().create_task(self._run_later(delay, token, callback, args))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _run_later(self, delay: float, token: TurnToken, callback: Callable[..., Any], args):
        await asyncio.sleep(delay)
        async with self._lock:
            if self._closed:
                return
            current = self.token()
            if current != token:
                logging.debug("Room %s: dropping stale %s (scheduled at %s, now %s)",
                              self.room_code, callback.__name__, token, current)
                return
            try:
                callback(*args)
            except Exception:
                logging.exception("Room %s: scheduled %s failed", self.room_code, callback.__name__)

    async def wait_for_pending(self):
        """Wait until no continuation is scheduled (mainly for tests)."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def close(self):
        """Cancel scheduled continuations; the room accepts no more timers."""
        self._closed = True
        for task in list(self._pending):
            task.cancel()

    def get_state(self) -> Dict[str, Any]:
        return self.engine.get_public_state()
