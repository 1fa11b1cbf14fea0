"""
SSH session handling for Dice-Poker-over-SSH.

One RoomSession per SSH connection. It reads typed commands, forwards them
to the RoomManager, and renders the events the manager delivers back. All
deliveries go through one queue so updates reach this client in order.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from dicepoker.player import new_player_id
from dicepoker.room_commands import PROMPT, handle_command
from dicepoker.server_info import format_motd, get_server_info
from dicepoker.terminal_ui import TerminalUI
from dicepoker.ui.colors import Colors


class RoomSession:
    """Session handler bound to one connection id."""

    def __init__(self, stdin, stdout, stderr, server_state=None, username=None):
        self._stdin = stdin
        self._stdout = stdout
        self._stderr = stderr
        self._input_buffer = ""
        self._running = True
        self._should_exit = False
        self._server_state = server_state
        self._username = username or "guest"
        self._player_id = new_player_id()
        self._current_room: Optional[str] = None
        self._ui = TerminalUI(self._player_id)
        self._updates: "asyncio.Queue[Dict[str, Any]]" = asyncio.Queue()
        self._reader_task: Optional[asyncio.Task] = None
        self._writer_task: Optional[asyncio.Task] = None

    def deliver(self, message: Dict[str, Any]):
        """Outbound event sink handed to the RoomManager."""
        if self._running:
            self._updates.put_nowait(message)

    async def write(self, text: str):
        try:
            self._stdout.write(text)
            await self._stdout.drain()
        except (ConnectionError, BrokenPipeError, OSError) as e:
            logging.debug(f"Write to session {self._player_id} failed: {e}")
            await self._stop()

    async def run(self):
        """Serve this connection until the client quits or disconnects."""
        await self._send_welcome()
        self._reader_task = asyncio.create_task(self._read_input())
        self._writer_task = asyncio.create_task(self._pump_updates())
        try:
            await self._reader_task
        finally:
            await self._stop()
            self._writer_task.cancel()
            try:
                await self._writer_task
            except asyncio.CancelledError:
                pass
            try:
                self._stdout.channel.exit(0)
            except Exception:
                logging.debug("Channel already closed")

    async def _send_welcome(self):
        server_info = get_server_info()
        await self.write(
            format_motd(server_info) + "\r\n"
            f"🎭 Logged in as: {Colors.CYAN}{self._username}{Colors.RESET}\r\n"
            f"💡 Type '{Colors.GREEN}help{Colors.RESET}' for commands or '{Colors.GREEN}create{Colors.RESET}' to open a room.\r\n\r\n"
            + PROMPT
        )

    async def _stop(self):
        """Stop the session and unsubscribe from its room."""
        if not self._running:
            return
        self._running = False
        self._should_exit = True
        if self._current_room and self._server_state:
            self._server_state.room_manager.disconnect(self._current_room, self._player_id)
        logging.info(f"Session for {self._username} ({self._player_id}) stopped")

    async def _read_input(self):
        """Continuously read input from stdin."""
        try:
            while self._running and not self._should_exit:
                data = await self._stdin.read(1)
                if not data:
                    break
                char = data.decode('utf-8', errors='ignore') if isinstance(data, bytes) else data
                await self._handle_char(char)
        except asyncio.CancelledError:
            pass
        except Exception:
            logging.exception("Input reader error")
        finally:
            logging.debug(f"Input reader for {self._player_id} ending")

    async def _handle_char(self, char: str):
        if char in ('\r', '\n'):
            cmd = self._input_buffer.strip()
            self._input_buffer = ""
            await self._process_command(cmd)
        elif char in ('\x7f', '\x08'):  # Backspace
            self._input_buffer = self._input_buffer[:-1]
        elif char == '\x03':  # Ctrl+C
            self._input_buffer = ""
            await self.write(f"^C\r\n{PROMPT}")
        elif char == '\x04':  # Ctrl+D
            await self.write("Goodbye!\r\n")
            await self._stop()
        elif 32 <= ord(char) < 127:
            self._input_buffer += char

    async def _process_command(self, cmd: str):
        if not cmd:
            await self.write(PROMPT)
            return
        if cmd.lower() in ("quit", "exit"):
            await self.write("Goodbye!\r\n")
            await self._stop()
            return
        if not await handle_command(self, cmd):
            await self.write(
                f"❓ Unknown command: {cmd}\r\n"
                f"💡 Type '{Colors.GREEN}help{Colors.RESET}' for available commands.\r\n\r\n{PROMPT}"
            )

    async def _pump_updates(self):
        while True:
            message = await self._updates.get()
            try:
                await self.write(self.format_event(message))
            except Exception:
                logging.exception(f"Failed to render {message.get('type')} for {self._player_id}")

    def format_event(self, message: Dict[str, Any]) -> str:
        """Render one outbound event for this client."""
        kind = message.get('type')
        if kind == 'game_update':
            return self._ui.render(message['room']) + f"\r\n{PROMPT}"
        if kind == 'room_created':
            code = message['room_id']
            return (
                f"✅ {Colors.GREEN}Room created!{Colors.RESET} Code: {Colors.BOLD}{Colors.CYAN}{code}{Colors.RESET}\r\n"
                f"💡 Friends can join with '{Colors.GREEN}join {code}{Colors.RESET}'\r\n"
            )
        if kind == 'room_closed':
            if self._current_room == message.get('room_id'):
                self._current_room = None
            return f"🚪 Room {message.get('room_id')} was closed\r\n\r\n{PROMPT}"
        if kind == 'error':
            return f"❌ {Colors.RED}{message.get('message')}{Colors.RESET}\r\n\r\n{PROMPT}"
        return ""
