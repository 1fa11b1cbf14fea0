"""
Room-aware SSH server for Dice-Poker-over-SSH.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import Optional

import asyncssh

from dicepoker.rooms import RoomManager
from dicepoker.server_info import get_game_settings
from dicepoker.ssh_session import RoomSession


class RoomServerState:
    """Shared state handed to every session."""

    def __init__(self, room_manager: Optional[RoomManager] = None):
        if room_manager is None:
            settings = get_game_settings()
            room_manager = RoomManager(
                bot_delay=settings["bot_action_delay"],
                phase_delay=settings["phase_advance_delay"],
                idle_timeout=settings["room_idle_timeout"],
                cleanup_interval=settings["room_cleanup_interval"],
            )
        self.room_manager = room_manager


class _RoomSSHServer(asyncssh.SSHServer):
    """Open server: any username is accepted without credentials."""

    def connection_made(self, conn):
        logging.debug("SSH connection established")

    def connection_lost(self, exc):
        if exc:
            logging.info(f"SSH connection lost: {exc}")

    def password_auth_supported(self):
        return False

    def public_key_auth_supported(self):
        return False

    def keyboard_interactive_auth_supported(self):
        return False

    def begin_auth(self, username):
        logging.info(f"Accepting connection for user: {username}")
        # False means no authentication is required
        return False


def ensure_host_key(path: Path) -> Path:
    """Create a persistent host key on first start."""
    if path.exists():
        return path
    try:
        key = asyncssh.generate_private_key("ssh-rsa")
        path.write_bytes(key.export_private_key())
        path.chmod(0o600)
    except (OSError, asyncssh.Error) as e:
        raise RuntimeError(f"Failed to generate host key: {e}") from e
    logging.info(f"Generated new host key at {path}")
    return path


class RoomSSHServer:
    """SSH server with room support."""

    def __init__(self, host: str = "0.0.0.0", port: int = 22222,
                 room_manager: Optional[RoomManager] = None, host_key_path: Optional[str] = None):
        self.host = host
        self.port = port
        self.state = RoomServerState(room_manager)
        self.host_key_path = Path(host_key_path or os.getenv("HOST_KEY_PATH", "dice_poker_host_key"))
        self._server = None

    def session_factory(self, stdin, stdout, stderr):
        username = stdout.get_extra_info('username')
        return RoomSession(stdin, stdout, stderr, server_state=self.state, username=username).run()

    async def start(self) -> None:
        """Start the SSH server."""
        key_path = ensure_host_key(self.host_key_path)
        self._server = await asyncssh.create_server(
            _RoomSSHServer,
            self.host,
            self.port,
            server_host_keys=[str(key_path)],
            session_factory=self.session_factory,
            reuse_address=True,
        )
        logging.info(f"Room-aware SSH server listening on {self.host}:{self.port}")

    async def serve_forever(self) -> None:
        await self.start()
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            pass
        finally:
            if self._server is not None:
                self._server.close()
            await self.state.room_manager.shutdown()
