"""Contains a Sans-IO implementation of the legacy datagram RCON protocol.

Suggested reading about sansio:
    https://fractalideas.com/blog/sans-io-when-rubber-meets-road/
    https://sans-io.readthedocs.io/index.html

"""

from .base import RCONGenericProtocol as RCONGenericProtocol
from .client import ClientState as ClientState, RCONClientProtocol as RCONClientProtocol
from .errors import InvalidStateError as InvalidStateError
from .events import (
    ClientCommandEvent as ClientCommandEvent,
    ClientEvent as ClientEvent,
    Event as Event,
    ServerAuthFailureEvent as ServerAuthFailureEvent,
    ServerCommandEvent as ServerCommandEvent,
    ServerEvent as ServerEvent,
)
from .packet import (
    MARKER as MARKER,
    ClientCommandPacket as ClientCommandPacket,
    ClientPacket as ClientPacket,
    Packet as Packet,
    ServerPacket as ServerPacket,
    ServerResponsePacket as ServerResponsePacket,
    decode as decode,
    encode as encode,
)
from .server import (
    BAD_PASSWORD_REPLY as BAD_PASSWORD_REPLY,
    RCONServerProtocol as RCONServerProtocol,
)
