import secrets
from typing import Iterable

from .base import RCONGenericProtocol
from .events import ServerAuthFailureEvent, ServerCommandEvent, ServerEvent
from .packet import *

BAD_PASSWORD_REPLY = "Bad rcon password."


class RCONServerProtocol(RCONGenericProtocol):
    """A Sans-IO implementation of the server side of the protocol.

    Mostly useful for simulating a game server in tests.

    :param password:
        The password to compare against each incoming request.

    """

    _events: list[ServerEvent]
    """A list of events waiting to be collected."""
    _to_send: list[ServerPacket]

    def __init__(self, *, password: str) -> None:
        self.password = password
        self.reset()

    def __repr__(self) -> str:
        return "<{} {} event(s), {} packet(s) to send>".format(
            type(self).__name__,
            len(self._events),
            len(self._to_send),
        )

    def receive_datagram(self, data: bytes) -> ClientCommandPacket:
        """Handles a request received from the client.

        :raises ValueError: Handling failed due to a malformed request.

        """
        packet = Packet.from_bytes(data, from_client=True)
        events, to_send = self._handle_packet(packet)
        self._events.extend(events)
        self._to_send.extend(to_send)

        return packet

    # Utility methods

    def reset(self) -> None:
        """Discards any events and packets that have not been collected."""
        self._events = []
        self._to_send = []

    def respond(self, response: str) -> ServerResponsePacket:
        """Returns a payload for replying to the client's command."""
        return ServerResponsePacket(response)

    def _handle_packet(
        self,
        packet: ClientCommandPacket,
    ) -> tuple[Iterable[ServerEvent], Iterable[ServerPacket]]:
        if secrets.compare_digest(packet.password.encode(), self.password.encode()):
            return (ServerCommandEvent(packet.command),), ()

        reply = self.respond(BAD_PASSWORD_REPLY)
        return (ServerAuthFailureEvent(packet.command),), (reply,)
