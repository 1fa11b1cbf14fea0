"""
Room registry and broadcast gateway for Dice-Poker-over-SSH.

RoomManager owns every live room, routes inbound commands to the right
room's Game and, after each mutation, pushes a redacted snapshot to every
viewer connected to that room.
"""

import asyncio
import logging
import random
import string
import time
from typing import Any, Callable, Dict, List, Optional

from dicepoker.game import DEFAULT_BOT_DELAY, DEFAULT_PHASE_DELAY, Game
from dicepoker.player import Player
from dicepoker.views import redact_state


ROOM_CODE_ALPHABET = string.ascii_uppercase + string.digits
ROOM_CODE_LENGTH = 6
DEFAULT_IDLE_TIMEOUT = 30 * 60
DEFAULT_CLEANUP_INTERVAL = 60

# viewer delivery: called with one outbound message dict
Deliver = Callable[[Dict[str, Any]], Any]


class RoomError(Exception):
    """Base class for errors surfaced to the command originator."""


class RoomNotFoundError(RoomError):
    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Room '{code}' not found")


def normalize_code(code) -> str:
    return str(code or "").strip().upper()


def _deliver(deliver: Optional[Deliver], message: Dict[str, Any], viewer_id: str = "?"):
    if deliver is None:
        return
    try:
        deliver(message)
    except Exception:
        logging.exception(f"Error delivering {message.get('type')} to viewer {viewer_id}")


class Room:
    """A live room: its Game plus the viewers subscribed to it."""

    def __init__(self, code: str, creator: str, game: Game,
                 idle_timeout: float = DEFAULT_IDLE_TIMEOUT, created_at: Optional[float] = None):
        self.code = code
        self.creator = creator
        self.game = game
        self.idle_timeout = idle_timeout
        self.created_at = created_at if created_at is not None else time.time()
        self.last_activity = self.created_at
        self.viewers: Dict[str, Deliver] = {}

    @property
    def expires_at(self) -> float:
        return self.last_activity + self.idle_timeout

    def touch(self, now: Optional[float] = None):
        self.last_activity = now if now is not None else time.time()

    def is_expired(self, now: Optional[float] = None) -> bool:
        """True once nobody is watching and the room has been idle too long."""
        now = now if now is not None else time.time()
        return not self.viewers and now >= self.expires_at

    def time_remaining(self, now: Optional[float] = None) -> int:
        """Minutes until an unwatched room would be reaped."""
        now = now if now is not None else time.time()
        return max(0, int((self.expires_at - now) / 60))

    def subscribe(self, viewer_id: str, deliver: Optional[Deliver]):
        if deliver is not None:
            self.viewers[viewer_id] = deliver

    def unsubscribe(self, viewer_id: str) -> bool:
        return self.viewers.pop(viewer_id, None) is not None

    def view_for(self, viewer_id: Optional[str]) -> Dict[str, Any]:
        return redact_state(self.game.get_state(), viewer_id)

    def broadcast(self):
        """Send every viewer their own redacted snapshot."""
        self.touch()
        for viewer_id, deliver in list(self.viewers.items()):
            _deliver(deliver, {'type': 'game_update', 'room': self.view_for(viewer_id)}, viewer_id)


class RoomManager:
    """Registry of live rooms keyed by room code."""

    def __init__(self, rng: Optional[random.Random] = None,
                 bot_delay: float = DEFAULT_BOT_DELAY, phase_delay: float = DEFAULT_PHASE_DELAY,
                 idle_timeout: float = DEFAULT_IDLE_TIMEOUT,
                 cleanup_interval: float = DEFAULT_CLEANUP_INTERVAL):
        self.rooms: Dict[str, Room] = {}
        self.rng = rng or random.Random()
        self.bot_delay = bot_delay
        self.phase_delay = phase_delay
        self.idle_timeout = idle_timeout
        self.cleanup_interval = cleanup_interval
        self._cleanup_task: Optional[asyncio.Task] = None

    def _generate_code(self) -> str:
        while True:
            code = "".join(self.rng.choice(ROOM_CODE_ALPHABET) for _ in range(ROOM_CODE_LENGTH))
            if code not in self.rooms:
                return code

    def _ensure_cleanup_task(self):
        if self._cleanup_task is not None and not self._cleanup_task.done():
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        self._cleanup_task = loop.create_task(self._cleanup_expired_rooms())

    def get_room(self, code) -> Optional[Room]:
        return self.rooms.get(normalize_code(code))

    def require_room(self, code) -> Room:
        room = self.get_room(code)
        if room is None:
            raise RoomNotFoundError(normalize_code(code))
        return room

    def list_rooms(self) -> List[Dict[str, Any]]:
        return [
            {
                'room_id': room.code,
                'creator': room.creator,
                'phase': room.game.phase.value,
                'players': len(room.game.players),
                'viewers': len(room.viewers),
            }
            for room in self.rooms.values()
        ]

    # -- inbound commands --------------------------------------------------

    def create_room(self, player_id: str, player_name: Optional[str],
                    deliver: Optional[Deliver] = None) -> Room:
        """Create a room with the caller seated as host."""
        code = self._generate_code()
        name = player_name or f"Player {player_id[:4]}"
        game = Game(code, rng=random.Random(self.rng.random()),
                    bot_delay=self.bot_delay, phase_delay=self.phase_delay)
        room = Room(code, name, game, idle_timeout=self.idle_timeout)
        game.on_change = lambda _game: room.broadcast()
        host = game.seat_host(player_id, name)
        self.rooms[code] = room
        logging.info(f"Room {code} created by {name}")

        room.subscribe(player_id, deliver)
        _deliver(deliver, {'type': 'room_created', 'room_id': code, 'player': host.to_dict()}, player_id)
        room.broadcast()
        self._ensure_cleanup_task()
        return room

    async def join_room(self, code, player_id: str, player_name: Optional[str],
                        deliver: Optional[Deliver] = None) -> Optional[Player]:
        """Seat the caller and subscribe them to updates.

        A caller who already holds a seat is re-subscribed. Returns None, and
        subscribes nothing, when no seat is available.
        """
        room = self.require_room(code)
        name = player_name or f"Player {player_id[:4]}"
        player = await room.game.join(player_id, name)
        if player is None:
            player = room.game.player_manager.get_player(player_id)
        if player is None:
            logging.debug(f"Join of {room.code} by {player_id} refused during {room.game.phase.value}")
            return None
        room.subscribe(player_id, deliver)
        room.touch()
        _deliver(deliver, {'type': 'game_update', 'room': room.view_for(player_id)}, player_id)
        return player

    async def add_bot(self, code, requester_id: Optional[str] = None) -> Optional[Player]:
        room = self.require_room(code)
        return await room.game.add_bot(requester_id)

    async def start_game(self, code, player_id: str) -> bool:
        room = self.require_room(code)
        return await room.game.start(player_id)

    async def player_action(self, code, player_id: str, action: str) -> bool:
        room = self.require_room(code)
        return await room.game.player_action(player_id, action)

    async def dispatch(self, viewer_id: str, command: Dict[str, Any],
                       deliver: Optional[Deliver] = None) -> Optional[Room]:
        """Route one inbound command. Routing errors go back to `deliver`.

        Returns the room the command was applied to, if any.
        """
        kind = command.get('type')
        try:
            if kind == 'create_room':
                return self.create_room(viewer_id, command.get('player_name'), deliver)
            room_id = command.get('room_id')
            if kind == 'join_room':
                seat = await self.join_room(room_id, viewer_id, command.get('player_name'), deliver)
                return self.get_room(room_id) if seat is not None else None
            elif kind == 'add_bot':
                await self.add_bot(room_id, viewer_id)
            elif kind == 'start_game':
                await self.start_game(room_id, viewer_id)
            elif kind == 'player_action':
                await self.player_action(room_id, viewer_id, command.get('action'))
            else:
                logging.debug(f"Ignoring unknown command {kind!r} from {viewer_id}")
                return None
            return self.get_room(room_id)
        except RoomError as e:
            logging.info(f"Command {kind} from {viewer_id} rejected: {e}")
            _deliver(deliver, {'type': 'error', 'message': str(e)}, viewer_id)
            return None

    # -- lifecycle ---------------------------------------------------------

    def disconnect(self, code, viewer_id: str) -> bool:
        """Stop sending updates to a viewer. Their seat stays at the table."""
        room = self.get_room(code)
        if room is None:
            return False
        removed = room.unsubscribe(viewer_id)
        if removed:
            room.touch()
            logging.info(f"Viewer {viewer_id} left room {room.code}")
        return removed

    def delete_room(self, code) -> bool:
        room = self.rooms.pop(normalize_code(code), None)
        if room is None:
            return False
        room.game.close()
        for viewer_id, deliver in list(room.viewers.items()):
            _deliver(deliver, {'type': 'room_closed', 'room_id': room.code}, viewer_id)
        room.viewers.clear()
        logging.info(f"Room {room.code} deleted")
        return True

    def reap_idle_rooms(self, now: Optional[float] = None) -> List[str]:
        expired = [code for code, room in self.rooms.items() if room.is_expired(now)]
        for code in expired:
            self.delete_room(code)
        if expired:
            logging.info(f"Reaped {len(expired)} idle room(s): {', '.join(expired)}")
        return expired

    async def _cleanup_expired_rooms(self):
        while True:
            try:
                self.reap_idle_rooms()
            except Exception:
                logging.exception("Room cleanup failed")
            try:
                await asyncio.sleep(self.cleanup_interval)
            except asyncio.CancelledError:
                return

    async def shutdown(self):
        if self._cleanup_task is not None:
            self._cleanup_task.cancel()
            try:
                await self._cleanup_task
            except asyncio.CancelledError:
                pass
            self._cleanup_task = None
        for code in list(self.rooms):
            self.delete_room(code)
