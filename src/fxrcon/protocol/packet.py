"""
Defines the frames that can be sent and received between
the client and server.

Every frame starts with the four byte marker ``FF FF FF FF`` and
is followed by a text payload. Requests always have the form
``rcon <password> <command>``, while replies are free-form text.
There is no length prefix; datagram boundaries delimit each frame.
"""
import functools
from typing import Literal, Type, overload

from ..errors import ProtocolError

__all__ = (
    "MARKER",
    "MAX_PACKET_SIZE",
    "encode",
    "decode",
    "Packet",
    "ClientPacket",
    "ServerPacket",
    "ClientCommandPacket",
    "ServerResponsePacket",
)

MARKER = b"\xff\xff\xff\xff"
"""The sentinel that every frame begins with."""
MAX_PACKET_SIZE = 65507
"""The largest payload a single UDP datagram can carry."""

_REQUEST_PREFIX = b"rcon "


def _convert_exception(
    from_exc: Type[Exception],
    to_exc: Type[Exception],
    message: str | None = None,
):
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except from_exc as e:
                if message is not None:
                    raise to_exc(message) from e
                raise to_exc from e

        return wrapper

    return decorator


def encode(command: str, password: str) -> bytes:
    """Encodes a command into a request frame.

    The command is not escaped, truncated or otherwise validated.

    """
    return MARKER + f"rcon {password} {command}".encode()


def decode(data: bytes) -> str:
    """Decodes a reply frame into its text.

    Buffers shorter than the marker decode to an empty string
    rather than raising an error.

    """
    if len(data) < len(MARKER):
        return ""
    return data[len(MARKER) :].decode(errors="replace").strip()


class Packet:
    """The base class used for all frames sent between
    the RCON server and client.

    Packets can be instantiated through either their custom constructors
    or from this class's :py:meth:`from_bytes()` method.

    :param data: The binary data contained by the packet.

    """

    __slots__ = ("data",)

    def __init__(self, data: bytes):
        over_size = len(data) - MAX_PACKET_SIZE
        if over_size > 0:
            raise ProtocolError(f"max packet size exceeded by {over_size} bytes")

        self.data = data

    def __repr__(self):
        return "{}({!r})".format(type(self).__name__, self.data)

    @property
    def payload(self) -> bytes:
        """The raw bytes following the marker."""
        return self.data[len(MARKER) :]

    @property
    def message(self) -> str:
        """The text following the marker, stripped of surrounding whitespace.

        .. seealso:: :py:func:`decode()`

        """
        return decode(self.data)

    @classmethod
    @overload
    def from_bytes(
        cls, data: bytes, *, from_client: Literal[True]
    ) -> "ClientCommandPacket":
        ...

    @classmethod
    @overload
    def from_bytes(
        cls, data: bytes, *, from_client: Literal[False]
    ) -> "ServerResponsePacket":
        ...

    @classmethod
    @_convert_exception(UnicodeDecodeError, ProtocolError, "request is not valid UTF-8")
    def from_bytes(cls, data: bytes, *, from_client: bool) -> "Packet":
        """Constructs a packet from the given data.

        :param data: The data to parse.
        :param from_client:
            Whether the packet came from the server or client.
            This is required for disambiguation of data.
        :returns: The corresponding subclass of Packet.
        :raises ProtocolError:
            The given data is malformed and does not match the
            frame format.

        """
        if not from_client:
            # Replies are free-form, so anything shorter than the marker
            # simply decodes to an empty message
            return ServerResponsePacket.from_raw(data)

        if not data.startswith(MARKER):
            raise ProtocolError("expected 0xFFFFFFFF at start of frame")

        payload = data[len(MARKER) :]
        if not payload.startswith(_REQUEST_PREFIX):
            raise ProtocolError("expected request to begin with 'rcon '")

        password, sep, command = payload[len(_REQUEST_PREFIX) :].partition(b" ")
        if not sep:
            raise ProtocolError("request is missing a command")

        return ClientCommandPacket(password.decode(), command.decode())


class ClientPacket(Packet):
    """The base class for packets sent by the client."""


class ServerPacket(Packet):
    """The base class used for packets sent by the server."""


class ClientCommandPacket(ClientPacket):
    """The packet sent by the client issuing a command to the server.

    :param password: The RCON password embedded in the request.
    :param command: The command to send to the server.

    """

    def __init__(self, password: str, command: str):
        super().__init__(encode(command, password))

    def __repr__(self):
        return "{}(<password>, {!r})".format(type(self).__name__, self.command)

    @property
    def password(self) -> str:
        body = self.payload[len(_REQUEST_PREFIX) :]
        return body.partition(b" ")[0].decode()

    @property
    def command(self) -> str:
        body = self.payload[len(_REQUEST_PREFIX) :]
        return body.partition(b" ")[2].decode()


class ServerResponsePacket(ServerPacket):
    """The packet sent by the server in reply to a command.

    :param response: The text of the reply.

    """

    def __init__(self, response: str):
        super().__init__(MARKER + response.encode())

    def __repr__(self):
        return "{}({!r})".format(type(self).__name__, self.message)

    @classmethod
    def from_raw(cls, data: bytes) -> "ServerResponsePacket":
        """Wraps raw datagram bytes without re-encoding them."""
        packet = cls.__new__(cls)
        Packet.__init__(packet, data)
        return packet
