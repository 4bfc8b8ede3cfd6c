import pytest

from fxrcon.errors import ProtocolError
from fxrcon.protocol import (
    ClientCommandEvent,
    ClientCommandPacket,
    ClientState,
    InvalidStateError,
    RCONClientProtocol,
    ServerResponsePacket,
)

from . import first_and_only_event


def test_invalid_states(client: RCONClientProtocol):
    """Asserts the client will raise :py:exc:`InvalidStateError` where appropriate."""
    reply = ServerResponsePacket("Hello world!")

    for _ in range(2):
        # Replies are only accepted while a command is pending
        with pytest.raises(InvalidStateError):
            client.receive_datagram(reply.data)
        assert not client.events_received()

        packet = client.send_command("say Hello world!")
        assert isinstance(packet, ClientCommandPacket)
        assert client.state == ClientState.AWAITING_RESPONSE
        assert client.pending_command == "say Hello world!"

        # Only one command can be outstanding
        with pytest.raises(InvalidStateError):
            client.send_command("too early")

        client.receive_datagram(reply.data)
        event = first_and_only_event(client, ClientCommandEvent)
        assert event.command == "say Hello world!"
        assert event.message == "Hello world!"
        assert client.state == ClientState.IDLE

        client.reset()


def test_invalidate_command(client: RCONClientProtocol):
    """Asserts a late reply cannot be attributed to the next command."""
    client.send_command("slow")
    client.invalidate_command()
    assert client.state == ClientState.IDLE
    assert client.pending_command is None

    with pytest.raises(InvalidStateError):
        client.receive_datagram(ServerResponsePacket("reply to slow").data)

    # Nothing to invalidate, just making sure it works without error
    client.invalidate_command()

    client.send_command("fast")
    client.receive_datagram(ServerResponsePacket("reply to fast").data)
    event = first_and_only_event(client, ClientCommandEvent)
    assert event.command == "fast"
    assert event.message == "reply to fast"


def test_password_embedded(client: RCONClientProtocol):
    packet = client.send_command("version")
    assert packet.data == b"\xff\xff\xff\xffrcon foobar2000 version"
    assert client.packets_to_send() == []


def test_undersized_reply(client: RCONClientProtocol):
    client.send_command("version")
    client.receive_datagram(b"\xff\xff")
    assert first_and_only_event(client, ClientCommandEvent).message == ""


def test_oversized_command_leaves_client_idle(client: RCONClientProtocol):
    """Asserts a command too large for one datagram does not wedge the client."""
    with pytest.raises(ProtocolError):
        client.send_command("say " + "x" * 70000)

    assert client.state == ClientState.IDLE
    assert client.pending_command is None

    packet = client.send_command("status")
    assert packet.command == "status"
    assert client.state == ClientState.AWAITING_RESPONSE


def test_invalid_state_names_pending_command(client: RCONClientProtocol):
    with pytest.raises(InvalidStateError, match="no command is awaiting a reply") as exc_info:
        client.receive_datagram(ServerResponsePacket("stray").data)
    assert exc_info.value.pending_command is None

    client.send_command("status")
    with pytest.raises(InvalidStateError, match="'status' is still awaiting a reply") as exc_info:
        client.send_command("version")
    assert exc_info.value.current_state == ClientState.AWAITING_RESPONSE
    assert exc_info.value.expected_states == (ClientState.IDLE,)
