"""Provides classes to be used as facades for :py:class:`Packet` objects."""
from dataclasses import dataclass


class Event:
    """The base class for events produced by :py:class:`RCONGenericProtocol`
    subclasses.
    """


class ClientEvent(Event):
    """An event produced by the :py:class:`RCONClientProtocol` subclass."""


@dataclass
class ClientCommandEvent(ClientEvent):
    """Represents the reply to the command currently awaiting a response."""

    command: str
    """The command this reply was correlated with."""
    message: str
    """The decoded reply from the server."""


class ServerEvent(Event):
    """An event produced by the :py:class:`RCONServerProtocol` subclass."""


@dataclass
class ServerCommandEvent(ServerEvent):
    """Represents a command sent by the client with the correct password.

    A reply must be returned through :py:meth:`RCONServerProtocol.respond()`.

    """

    message: str
    """The command that was requested by the client."""


@dataclass
class ServerAuthFailureEvent(ServerEvent):
    """Indicates that a request carried the wrong password.

    The protocol automatically generates a ``Bad rcon password.``
    reply so nothing else needs to be done here.

    """

    message: str
    """The command that was rejected."""
