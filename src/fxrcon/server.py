import asyncio
import logging
from typing import Callable

from .protocol import (
    RCONServerProtocol,
    ServerAuthFailureEvent,
    ServerCommandEvent,
)

log = logging.getLogger(__name__)

Responder = Callable[[str], "str | None"]


def echo(command: str) -> str:
    return command


class AsyncRCONServer(asyncio.DatagramProtocol):
    """A mock server intended for testing.

    :param password: The password that requests must carry.
    :param responder:
        A function returning the reply to a command. If it returns
        ``None``, no reply is sent, simulating a lost datagram.
        Defaults to echoing the command back.
    :param name: A name to prefix log messages with.

    """

    def __init__(
        self,
        *,
        password: str,
        responder: Responder = echo,
        name: str = "server",
    ):
        self.name = name
        self.protocol = RCONServerProtocol(password=password)
        self.responder = responder
        self.commands: list[str] = []
        """Every authenticated command received, in order."""

        self._transport: asyncio.DatagramTransport | None = None

    @property
    def address(self) -> tuple[str, int]:
        """The address the server is bound to."""
        if self._transport is None:
            raise RuntimeError("server is not hosting")
        return self._transport.get_extra_info("sockname")[:2]

    async def host(self, ip: str = "127.0.0.1", port: int = 0) -> tuple[str, int]:
        """Starts listening on the given address.

        :returns: The bound address, useful when ``port`` is 0.

        """
        loop = asyncio.get_running_loop()
        self._transport, _ = await loop.create_datagram_endpoint(
            lambda: self,
            local_addr=(ip, port),
        )
        return self.address

    def close(self) -> None:
        if self._transport is not None:
            self._transport.close()
            self._transport = None

    # DatagramProtocol

    def connection_made(self, transport):
        log.info(f"{self.name}: ready to accept commands")

    def connection_lost(self, exc: Exception | None):
        if exc:
            log.error(f"{self.name}: connection has closed with error", exc_info=exc)
        else:
            log.info(f"{self.name}: connection has been closed")

    def datagram_received(self, data: bytes, addr):
        assert self._transport is not None

        try:
            self.protocol.receive_datagram(data)
        except ValueError as e:
            return log.debug(f"{self.name}: failed to decode received data: {e}")

        for event in self.protocol.events_received():
            if isinstance(event, ServerCommandEvent):
                self.commands.append(event.message)
                reply = self.responder(event.message)
                if reply is not None:
                    self._transport.sendto(self.protocol.respond(reply).data, addr)
            elif isinstance(event, ServerAuthFailureEvent):
                log.debug(f"{self.name}: rejected command with bad password")

        for packet in self.protocol.packets_to_send():
            self._transport.sendto(packet.data, addr)

    def error_received(self, exc: OSError):
        log.error(f"{self.name}: unusual error occurred during session", exc_info=exc)
