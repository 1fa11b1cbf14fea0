"""
Entry point for Dice-Poker-over-SSH
Starts the SSH server with the room registry and the healthcheck endpoint.
"""

import argparse
import asyncio
import logging

from dicepoker.healthcheck import start_healthcheck_in_background
from dicepoker.ssh_server import RoomSSHServer


async def main(host: str, port: int, healthcheck: bool = True):
    print("🎲 Starting Dice-Poker-over-SSH server")
    print("=" * 50)

    server = RoomSSHServer(host=host, port=port)
    health = None
    if healthcheck:
        try:
            health = await start_healthcheck_in_background(server.state.room_manager)
        except OSError as e:
            logging.warning(f"Healthcheck failed to start: {e}")

    try:
        await server.serve_forever()
    finally:
        if health is not None:
            await health.stop()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run Dice-Poker-over-SSH server with room system")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", default=22222, type=int, help="Port to bind to")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--no-healthcheck", action="store_true", help="Do not start the HTTP healthcheck")
    args = parser.parse_args()

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)

    # Suppress AsyncSSH's verbose window change messages
    logging.getLogger('asyncssh').setLevel(logging.WARNING)

    try:
        asyncio.run(main(args.host, args.port, healthcheck=not args.no_healthcheck))
    except KeyboardInterrupt:
        print("\n👋 Server shutting down...")
    except RuntimeError as e:
        print(f"❌ Error: {e}")
