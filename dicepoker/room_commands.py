"""
Command handlers for Dice-Poker-over-SSH sessions.

Each handler turns one typed line into an inbound command for the
RoomManager. Outbound events come back through session.deliver.
"""

import logging
from typing import List

from dicepoker.ui.colors import Colors

PROMPT = "❯ "


async def handle_command(session, cmd: str) -> bool:
    """Dispatch a typed command. Returns False if the command is unknown."""
    parts = cmd.split()
    if not parts:
        return True
    verb = parts[0].lower()
    handler = COMMANDS.get(verb)
    if handler is None:
        return False
    await handler(session, parts[1:])
    return True


def _manager(session):
    return session._server_state.room_manager


async def _require_room(session) -> bool:
    if session._current_room:
        return True
    await session.write(f"❌ You are not in a room. Use '{Colors.GREEN}create{Colors.RESET}' or '{Colors.GREEN}join <code>{Colors.RESET}'.\r\n\r\n{PROMPT}")
    return False


async def _show_help(session, args: List[str]):
    lines = [
        f"{Colors.BOLD}{Colors.YELLOW}🎲 Dice Poker Commands:{Colors.RESET}",
        "  create [name]        - Create a room and take the host seat",
        "  join <code> [name]   - Join a room that has not started yet",
        "  bot                  - Add a bot to your room (before the first round)",
        "  start                - Roll a new round (host only)",
        "  call | check | fold  - Act when it is your turn",
        "  view                 - Redraw the table",
        "  rooms                - List live rooms",
        "  leave                - Stop watching the current room",
        "  quit                 - Disconnect",
    ]
    await session.write("\r\n".join(lines) + f"\r\n\r\n{PROMPT}")


async def _create_room(session, args: List[str]):
    if session._current_room:
        _manager(session).disconnect(session._current_room, session._player_id)
        session._current_room = None
    name = " ".join(args) or session._username
    room = await _manager(session).dispatch(
        session._player_id, {'type': 'create_room', 'player_name': name}, session.deliver)
    if room is not None:
        session._current_room = room.code


async def _join_room(session, args: List[str]):
    if not args:
        await session.write(f"❌ Usage: join <room_code> [name]\r\n\r\n{PROMPT}")
        return
    name = " ".join(args[1:]) or session._username
    manager = _manager(session)
    room = await manager.dispatch(
        session._player_id, {'type': 'join_room', 'room_id': args[0], 'player_name': name}, session.deliver)
    if room is None:
        if manager.get_room(args[0]) is not None:
            await session.write(f"❌ Room {args[0].upper()} has already started; seats open only before the first round.\r\n\r\n{PROMPT}")
        return
    if session._current_room and session._current_room != room.code:
        manager.disconnect(session._current_room, session._player_id)
    session._current_room = room.code


async def _add_bot(session, args: List[str]):
    if not await _require_room(session):
        return
    await _manager(session).dispatch(
        session._player_id, {'type': 'add_bot', 'room_id': session._current_room}, session.deliver)


async def _start_game(session, args: List[str]):
    if not await _require_room(session):
        return
    await _manager(session).dispatch(
        session._player_id, {'type': 'start_game', 'room_id': session._current_room}, session.deliver)


def _action_handler(action: str):
    async def _handler(session, args: List[str]):
        if not await _require_room(session):
            return
        await _manager(session).dispatch(
            session._player_id,
            {'type': 'player_action', 'room_id': session._current_room, 'action': action},
            session.deliver,
        )
    _handler.__name__ = f"_{action}"
    return _handler


async def _show_view(session, args: List[str]):
    if not await _require_room(session):
        return
    room = _manager(session).get_room(session._current_room)
    if room is None:
        session._current_room = None
        await session.write(f"❌ Room no longer exists\r\n\r\n{PROMPT}")
        return
    session.deliver({'type': 'game_update', 'room': room.view_for(session._player_id)})


async def _list_rooms(session, args: List[str]):
    rooms = _manager(session).list_rooms()
    out = [f"{Colors.BOLD}{Colors.MAGENTA}🏠 Live Rooms:{Colors.RESET}"]
    if not rooms:
        out.append("  (none yet, use 'create' to open one)")
    for info in rooms:
        current = f" {Colors.GREEN}👈 Current{Colors.RESET}" if info['room_id'] == session._current_room else ""
        out.append(
            f"  🏠 {Colors.CYAN}{info['room_id']}{Colors.RESET} by {info['creator']} · "
            f"{info['phase'].replace('_', ' ').title()} · {info['players']} seats, {info['viewers']} online{current}"
        )
    await session.write("\r\n".join(out) + f"\r\n\r\n{PROMPT}")


async def _leave_room(session, args: List[str]):
    if not await _require_room(session):
        return
    code = session._current_room
    _manager(session).disconnect(code, session._player_id)
    session._current_room = None
    logging.debug(f"Session {session._player_id} left {code}")
    await session.write(f"👋 Left room {code}. Your seat stays at the table.\r\n\r\n{PROMPT}")


COMMANDS = {
    'help': _show_help,
    'create': _create_room,
    'join': _join_room,
    'bot': _add_bot,
    'addbot': _add_bot,
    'start': _start_game,
    'fold': _action_handler('fold'),
    'check': _action_handler('check'),
    'call': _action_handler('call'),
    'view': _show_view,
    'rooms': _list_rooms,
    'leave': _leave_room,
}
