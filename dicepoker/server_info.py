"""
Server information and settings for Dice-Poker-over-SSH.

Values come from the real environment first, then from a `.env` file in the
working directory, then from the defaults below.
"""

import logging
import os
from typing import Any, Dict

from dotenv import dotenv_values

from .version import get_version_info


SERVER_DEFAULTS = {
    'SERVER_ENV': 'Development',
    'SERVER_HOST': 'localhost',
    'SERVER_PORT': '22222',
    'SERVER_NAME': 'Dice-Poker-over-SSH Server',
}

GAME_DEFAULTS = {
    'BOT_ACTION_DELAY': 1.5,
    'PHASE_ADVANCE_DELAY': 1.0,
    'ROOM_IDLE_TIMEOUT': 1800.0,
    'ROOM_CLEANUP_INTERVAL': 60.0,
    'HEALTHCHECK_PORT': 22223,
    'HEALTHCHECK_INTERVAL': 60,
}


def load_env_file(filepath: str = ".env") -> Dict[str, str]:
    """Load key/value pairs from a .env file; a missing file gives {}."""
    if not os.path.exists(filepath):
        return {}
    return {k: v for k, v in dotenv_values(filepath).items() if v is not None}


def get_setting(key: str, env_vars: Dict[str, str], default=None):
    return os.getenv(key) or env_vars.get(key, default)


def _typed(key: str, raw, default):
    try:
        return type(default)(raw)
    except (TypeError, ValueError):
        logging.warning(f"Invalid value for {key}: {raw!r}, using {default}")
        return default


def get_server_info() -> Dict[str, Any]:
    """Get complete server information including version and environment details"""
    env_vars = load_env_file()

    info = {key.lower(): get_setting(key, env_vars, default) for key, default in SERVER_DEFAULTS.items()}
    server_host = info['server_host']
    server_port = info['server_port']
    info['ssh_connection_string'] = f"{server_host} -p {server_port}" if server_port != "22" else server_host
    info.update(get_version_info())
    return info


def get_game_settings() -> Dict[str, Any]:
    """Pacing delays, room reaping and healthcheck settings."""
    env_vars = load_env_file()
    settings = {}
    for key, default in GAME_DEFAULTS.items():
        raw = get_setting(key, env_vars)
        settings[key.lower()] = default if raw is None else _typed(key, raw, default)
    return settings


def format_motd(server_info: Dict[str, Any]) -> str:
    """Format the Message of the Day with server information"""
    from .ui.colors import Colors

    motd_lines = [
        f"{Colors.BOLD}{Colors.YELLOW}🎲 Welcome to Dice-Poker-over-SSH! 🎲{Colors.RESET}",
        f"🖥️ Server: {Colors.CYAN}{server_info['server_name']}{Colors.RESET}",
        f"🌐 Environment: {Colors.GREEN if server_info['server_env'] == 'Public Stable' else Colors.YELLOW}{server_info['server_env']}{Colors.RESET}",
        f"📍 Connect: {Colors.BOLD}ssh <username>@{server_info['ssh_connection_string']}{Colors.RESET}",
    ]

    if server_info['version'] != 'dev':
        motd_lines.append(f"📦 Version: {Colors.DIM}{server_info['version']} ({server_info['build_date']}){Colors.RESET}")

    return "\r\n".join(motd_lines)
