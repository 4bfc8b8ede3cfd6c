"""Provides an interactive prompt for administering a FiveM server."""

import asyncio
import logging
import shlex

import fxrcon
from fxrcon.tools import render_result

IP_ADDR = "127.0.0.1"
PORT = 30120
PASSWORD = "ASCII_PASSWORD"

log = logging.getLogger("fxrcon")
log.setLevel(logging.WARNING)
handler = logging.StreamHandler()
handler.setFormatter(
    logging.Formatter("%(asctime)s:%(levelname)s:%(name)s: %(message)s")
)
log.addHandler(handler)

manager = fxrcon.ServerManager(IP_ADDR, PORT, PASSWORD)


async def ainput():
    return await asyncio.to_thread(input)


async def handle(line: str) -> str:
    name, *args = shlex.split(line)

    if name == "#ensure" and args:
        return render_result(await manager.ensure_plugin(args[0]))
    elif name == "#stop" and args:
        return render_result(await manager.stop_plugin(args[0]))
    elif name == "#restart" and args:
        return render_result(await manager.restart_plugin(args[0]))
    elif name == "#logs":
        return "\n".join(manager.get_logs()) or "No operations recorded"
    elif name == "#console":
        return await manager.get_console_logs(int(args[0]) if args else 100)

    return render_result(await manager.execute_command(line))


async def main():
    await manager.connect()
    try:
        while True:
            line = await ainput()
            if not line.strip():
                continue

            try:
                print(await handle(line))
            except fxrcon.RCONTimeoutError as e:
                print(e)
    finally:
        manager.close()


if __name__ == "__main__":
    asyncio.run(main())
