from abc import ABC, abstractmethod
from typing import Any

from .packet import Packet

__all__ = ("RCONGenericProtocol",)


class RCONGenericProtocol(ABC):
    """The base class for one side of a request/reply exchange.

    Subclasses parse incoming datagrams in :py:meth:`receive_datagram()`
    and queue the results, which the I/O layer then drains with
    :py:meth:`events_received()` and :py:meth:`packets_to_send()`.

    """

    _events: list[Any]
    _to_send: list[Packet]

    @abstractmethod
    def receive_datagram(self, data: bytes) -> Packet:
        """Parses a datagram from the remote peer, queuing any
        resulting events and replies.

        :raises ValueError: The datagram is not valid for this side.

        """

    @abstractmethod
    def reset(self) -> None:
        """Returns the protocol to its initial state, discarding
        anything that has not been collected.
        """

    def events_received(self) -> list[Any]:
        """Removes and returns the events queued since the last call."""
        events, self._events = self._events, []
        return events

    def packets_to_send(self) -> list[Packet]:
        """Removes and returns the packets that should be sent to the remote peer."""
        packets, self._to_send = self._to_send, []
        return packets
