"""Sends a command to a FiveM server and prints how it was classified."""
import asyncio
import logging

import fxrcon

IP_ADDR = "127.0.0.1"
PORT = 30120
PASSWORD = "ASCII_PASSWORD"

log = logging.getLogger("fxrcon")
log.setLevel(logging.DEBUG)
handler = logging.StreamHandler()
handler.setFormatter(logging.Formatter("%(asctime)s:%(levelname)s:%(name)s: %(message)s"))
log.addHandler(handler)

client = fxrcon.RCONClient(IP_ADDR, PORT, PASSWORD)


async def main():
    async with client:
        response = await client.send_command("status")
        print(response)
        print(fxrcon.classify(response, "status").to_dict())


if __name__ == "__main__":
    asyncio.run(main())
