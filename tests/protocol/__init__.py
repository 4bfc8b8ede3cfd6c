from typing import Any, Sequence, Type, TypeVar, overload

from fxrcon.protocol import (
    ClientEvent,
    ClientPacket,
    Packet,
    RCONClientProtocol,
    RCONGenericProtocol,
    RCONServerProtocol,
    ServerEvent,
    ServerPacket,
)

expected_password = "foobar2000"
incorrect_password = "abc123"

T = TypeVar("T")


@overload
def communicate(
    proto_a: RCONClientProtocol,
    proto_b: RCONServerProtocol,
    *packets: ClientPacket,
) -> Sequence[ServerEvent]: ...


@overload
def communicate(
    proto_a: RCONServerProtocol,
    proto_b: RCONClientProtocol,
    *packets: ServerPacket,
) -> Sequence[ClientEvent]: ...


def communicate(
    proto_a: RCONGenericProtocol,
    proto_b: RCONGenericProtocol,
    *packets: Packet,
) -> Sequence[Any]:
    """Sends the given packets alongside the packets returned from
    :py:meth:`RCONGenericProtocol.packets_to_send()` from one protocol
    to the other and returns the events received by the second protocol.
    """
    for packet in proto_a.packets_to_send():
        proto_b.receive_datagram(packet.data)

    for packet in packets:
        proto_b.receive_datagram(packet.data)

    return proto_b.events_received()


def first_and_only_event(proto_a: RCONGenericProtocol, event_cls: Type[T]) -> T:
    events = proto_a.events_received()
    assert len(events) == 1
    first_event = events[0]
    assert isinstance(first_event, event_cls)
    return first_event


def first_and_only_packet(proto_a: RCONGenericProtocol, packet_cls: Type[T]) -> T:
    packets = proto_a.packets_to_send()
    assert len(packets) == 1
    first_packet = packets[0]
    assert isinstance(first_packet, packet_cls)
    return first_packet
