import enum

from .base import RCONGenericProtocol
from .errors import InvalidStateError
from .events import ClientCommandEvent, ClientEvent
from .packet import *


class ClientState(enum.Enum):
    """Defines the current state of the protocol."""

    IDLE = enum.auto()
    """No command is waiting for a reply."""
    AWAITING_RESPONSE = enum.auto()
    """A command was sent and the next reply will be correlated with it."""


class RCONClientProtocol(RCONGenericProtocol):
    """Implements the client-side portion of the protocol.

    The wire format has no request identifiers, so at most one command
    can be outstanding at a time. The first datagram received after
    :py:meth:`send_command()` is treated as the reply to that command,
    and any datagram received while idle is rejected.

    :param password:
        The password to embed in every request.

    """

    state: ClientState
    """The current state of the protocol."""

    _events: list[ClientEvent]
    """A list of events waiting to be collected."""
    _pending: str | None
    """The command currently awaiting a reply."""
    _to_send: list[ClientPacket]

    def __init__(self, password: str) -> None:
        self.password = password
        self.reset()

    def __repr__(self) -> str:
        return "<{} {}, {} event(s), {} packet(s) to send>".format(
            type(self).__name__,
            self.state.name.lower().replace("_", " "),
            len(self._events),
            len(self._to_send),
        )

    # Required methods

    def receive_datagram(self, data: bytes) -> ServerResponsePacket:
        """Handles a datagram received from the server.

        :raises InvalidStateError:
            No command is currently awaiting a reply.

        """
        self._assert_state(ClientState.AWAITING_RESPONSE)
        assert self._pending is not None

        packet = Packet.from_bytes(data, from_client=False)
        self._events.append(ClientCommandEvent(self._pending, packet.message))
        self._pending = None
        self.state = ClientState.IDLE

        return packet

    # Utility methods

    @property
    def pending_command(self) -> str | None:
        """The command currently awaiting a reply, if any."""
        return self._pending

    def invalidate_command(self) -> None:
        """Stops waiting for a reply to the pending command.

        This should be called whenever a command times out so a late
        reply cannot be attributed to the next command.

        If no command is pending, this is a no-op.

        """
        self._pending = None
        self.state = ClientState.IDLE

    def reset(self) -> None:
        """Resets the protocol to the beginning state."""
        self._events = []
        self._pending = None
        self.state = ClientState.IDLE
        self._to_send = []

    def send_command(self, command: str) -> ClientCommandPacket:
        """Returns a payload for sending a command and starts
        waiting for its reply.

        :raises InvalidStateError:
            Another command is still awaiting a reply.
        :raises ProtocolError:
            The request would not fit in a single datagram.
            The protocol is left idle.

        """
        self._assert_state(ClientState.IDLE)
        packet = ClientCommandPacket(self.password, command)

        self._pending = command
        self.state = ClientState.AWAITING_RESPONSE
        return packet

    def _assert_state(self, *states: ClientState) -> None:
        if self.state not in states:
            raise InvalidStateError(self.state, states, self._pending)
