"""A test script for simulating an RCON client/server exchange."""
import asyncio
import logging

import fxrcon
import fxrcon.server as rcon_server

IP_ADDR = "127.0.0.1"
PORT = 30120
PASSWORD = "ASCII_PASSWORD"

log = logging.getLogger("fxrcon")
log.setLevel(logging.DEBUG)
handler = logging.StreamHandler()
handler.setFormatter(logging.Formatter("%(asctime)s:%(levelname)s:%(name)s: %(message)s"))
log.addHandler(handler)


def respond(command: str) -> str:
    if command.startswith("ensure "):
        return f"Started resource {command.partition(' ')[2]}"
    return f"No such command {command}."


server = rcon_server.AsyncRCONServer(password=PASSWORD, responder=respond)
client = fxrcon.RCONClient(IP_ADDR, PORT, PASSWORD)


async def main():
    await server.host(IP_ADDR, PORT)

    try:
        async with client:
            for command in ("ensure chat", "players"):
                response = await client.send_command(command)
                print(fxrcon.classify(response, command))
    finally:
        server.close()


if __name__ == "__main__":
    asyncio.run(main())
