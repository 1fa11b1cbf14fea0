"""Healthcheck service for Dice-Poker-over-SSH

Runs a small HTTP server on HEALTHCHECK_PORT that returns JSON status for an SSH connect
probe to SERVER_HOST:SERVER_PORT, plus live room and seat counts.
Interval is configurable via HEALTHCHECK_INTERVAL (seconds).
"""
import asyncio
import logging
import time
from typing import Any, Dict, Optional

import asyncssh
from aiohttp import web

from .server_info import get_game_settings, get_server_info


class SSHProbe:
    def __init__(self, host: str, port: int, timeout: float = 5.0):
        self.host = host
        self.port = port
        self.timeout = timeout

    async def probe(self) -> Dict[str, Any]:
        """Attempt to open an SSH transport and return status info."""
        result: Dict[str, Any] = {
            'host': self.host,
            'port': self.port,
            'tcp_connect': False,
            'ssh_ok': False,
            'error': None,
        }

        try:
            reader, writer = await asyncio.wait_for(asyncio.open_connection(self.host, self.port), timeout=self.timeout)
            result['tcp_connect'] = True
            writer.close()
            try:
                await writer.wait_closed()
            except OSError:
                pass
        except (OSError, asyncio.TimeoutError) as e:
            result['error'] = f'tcp_connect_failed: {e}'
            return result

        try:
            conn = await asyncio.wait_for(
                asyncssh.connect(self.host, port=self.port, username='healthcheck', known_hosts=None),
                timeout=self.timeout,
            )
            result['ssh_ok'] = True
            conn.close()
            await conn.wait_closed()
        except (OSError, asyncssh.Error, asyncio.TimeoutError) as e:
            # SSH-level error, tcp_connect stays True
            result['error'] = str(e)

        return result


def classify(probe: Dict[str, Any]) -> str:
    tcp_ok = bool(probe.get('tcp_connect'))
    ssh_ok = bool(probe.get('ssh_ok'))
    if tcp_ok and ssh_ok:
        return 'ok'
    if tcp_ok:
        return 'warn'
    return 'fail'


class HealthcheckService:
    def __init__(self, room_manager=None, host: str = '0.0.0.0'):
        info = get_server_info()
        settings = get_game_settings()
        self.server_host = info['server_host']
        self.server_port = int(info['server_port'])
        self.port = settings['healthcheck_port']
        self.interval = settings['healthcheck_interval']
        self.host = host
        self.room_manager = room_manager
        self._latest: Dict[str, Any] = {
            'status': 'unknown',
            'last_probe': None,
            'probe': None,
        }
        self._probe = SSHProbe(self.server_host, self.server_port)
        self._task: Optional[asyncio.Task] = None
        self._runner: Optional[web.AppRunner] = None

    def room_stats(self) -> Dict[str, int]:
        if self.room_manager is None:
            return {'rooms': 0, 'seated_players': 0, 'viewers': 0}
        rooms = list(self.room_manager.rooms.values())
        return {
            'rooms': len(rooms),
            'seated_players': sum(len(room.game.players) for room in rooms),
            'viewers': sum(len(room.viewers) for room in rooms),
        }

    async def run_probe(self):
        try:
            res = await self._probe.probe()
            self._latest['probe'] = res
            self._latest['status'] = classify(res)
        except Exception as e:
            logging.exception('Healthcheck probe failed')
            self._latest['status'] = 'error'
            self._latest['probe'] = {'error': str(e)}
        # use epoch seconds for last_probe
        self._latest['last_probe'] = int(time.time())

    async def _background_probe(self):
        while True:
            await self.run_probe()
            await asyncio.sleep(self.interval)

    async def status_handler(self, request):
        return web.json_response({**self._latest, **self.room_stats()})

    def build_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get('/health', self.status_handler)
        return app

    async def start(self):
        self._task = asyncio.create_task(self._background_probe())

        self._runner = web.AppRunner(self.build_app())
        await self._runner.setup()
        site = web.TCPSite(self._runner, host=self.host, port=self.port)
        await site.start()
        logging.info(f'Healthcheck HTTP server listening on {self.host}:{self.port}, probing {self.server_host}:{self.server_port} every {self.interval}s')

    async def stop(self):
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        if self._runner is not None:
            await self._runner.cleanup()


async def start_healthcheck_in_background(room_manager=None) -> HealthcheckService:
    svc = HealthcheckService(room_manager)
    await svc.start()
    return svc
