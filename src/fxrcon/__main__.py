"""Runs the tool server over stdio, connecting with environment variables."""
import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv

from .config import ServerConfig
from .errors import LoginFailure
from .manager import ServerManager
from .tools import create_server

log = logging.getLogger("fxrcon")


def setup_logging(debug: bool) -> None:
    # stdout carries the protocol stream, so logs must go to stderr
    log.setLevel(logging.DEBUG if debug else logging.INFO)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("%(asctime)s:%(levelname)s:%(name)s: %(message)s")
    )
    log.addHandler(handler)


async def serve(manager: ServerManager) -> None:
    server = create_server(manager)

    try:
        await manager.connect()
        log.info(f"connected to {manager.client.info.host}:{manager.client.info.port}")
        await server.run_stdio_async()
    finally:
        manager.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="fxrcon",
        description="Serve FiveM RCON administration tools over stdio.",
    )
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    args = parser.parse_args(argv)

    load_dotenv()
    setup_logging(args.debug)

    config = ServerConfig.from_env()
    if not config.has_auto_connect():
        log.error(
            "RCON_ADDRESS and RCON_PASSWORD must be set "
            "(RCON_PORT defaults to 30120)"
        )
        return 1

    manager = ServerManager.from_config(config)
    try:
        asyncio.run(serve(manager))
    except LoginFailure as e:
        log.error(str(e))
        return 1
    except KeyboardInterrupt:
        pass

    return 0


if __name__ == "__main__":
    sys.exit(main())
