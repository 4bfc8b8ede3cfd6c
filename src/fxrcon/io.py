import asyncio
import logging
from abc import ABC, abstractmethod

from .config import ConnectorConfig
from .errors import RCONClientClosed, RCONTimeoutError
from .protocol import (
    ClientCommandEvent,
    ClientPacket,
    InvalidStateError,
    RCONClientProtocol,
)

log = logging.getLogger(__name__)


class AsyncClientProtocol(ABC):
    """
    Provides a bridge between :py:class:`RCONClient` and the underlying
    I/O implementations.
    """

    @abstractmethod
    def close(self) -> None:
        """Releases the underlying transport.

        This method must be idempotent, and any command waiting
        for a reply must fail instead of waiting indefinitely.

        """

    @abstractmethod
    def is_closed(self) -> bool:
        """Indicates if :py:meth:`close()` has been called."""

    @abstractmethod
    def is_open(self) -> bool:
        """Indicates if the transport to the server is currently open."""

    @abstractmethod
    async def open(self, host: str, port: int) -> None:
        """Opens the transport to the given address if not already open.

        :raises RCONClientClosed: The protocol was already closed.
        :raises OSError: The transport could not be created.

        """

    @abstractmethod
    async def send_command(self, command: str, timeout: float | None = None) -> str:
        """Sends a command to the server and waits for its reply.

        :param command: The command string to send.
        :param timeout:
            The number of seconds to wait for a reply.
            Defaults to :py:attr:`ConnectorConfig.command_timeout`.
        :returns: The server's reply as a string.
        :raises RCONTimeoutError: The server did not reply in time.
        :raises RCONClientClosed: The protocol was closed.
        :raises OSError: The command could not be transmitted.

        """


class AsyncClientConnector(AsyncClientProtocol):
    """An asyncio implementation of the :py:class:`AsyncClientProtocol`.

    Commands are serialised with a lock since the protocol cannot
    correlate more than one outstanding command at a time.

    """

    _transport: asyncio.DatagramTransport | None
    _response: asyncio.Future[str] | None
    """The future waiting for the reply to the pending command."""

    def __init__(
        self,
        protocol: RCONClientProtocol,
        *,
        config: ConnectorConfig | None = None,
    ):
        if config is None:
            config = ConnectorConfig()

        self.config = config
        self.protocol = protocol

        self._closed = False
        self._lock = asyncio.Lock()
        self._response = None
        self._transport = None

    def close(self) -> None:
        self._closed = True

        if self._transport is not None:
            self._transport.close()
            self._transport = None

        self._fail_pending(RCONClientClosed("client was closed"))

    def is_closed(self) -> bool:
        return self._closed

    def is_open(self) -> bool:
        return self._transport is not None

    async def open(self, host: str, port: int) -> None:
        if self._closed:
            raise RCONClientClosed("cannot open a closed client")
        elif self._transport is not None:
            return

        log.debug(f"opening datagram endpoint to {host}:{port}")
        loop = asyncio.get_running_loop()
        transport, _ = await loop.create_datagram_endpoint(
            lambda: self,  # type: ignore
            remote_addr=(host, port),
        )

        if self._closed:
            # close() was called while the endpoint was being created
            transport.close()
            raise RCONClientClosed("cannot open a closed client")

        self._transport = transport

    def send(self, packet: ClientPacket) -> None:
        """Sends a packet to the server."""
        if self._transport is None:
            raise RCONClientClosed("transport is not open")

        self._transport.sendto(packet.data)
        log.debug(f"sent {type(packet).__name__}")

    async def send_command(self, command: str, timeout: float | None = None) -> str:
        if timeout is None:
            timeout = self.config.command_timeout

        async with self._lock:
            if self._closed:
                raise RCONClientClosed(f"cannot send command after closing: {command!r}")

            loop = asyncio.get_running_loop()
            self._response = fut = loop.create_future()

            try:
                packet = self.protocol.send_command(command)
                self.send(packet)
                return await asyncio.wait_for(fut, timeout=timeout)
            except asyncio.TimeoutError:
                log.warning(f"no reply received after {timeout:g} seconds: {command!r}")
                raise RCONTimeoutError(command) from None
            finally:
                # Any reply arriving after this point is dropped
                self.protocol.invalidate_command()
                self._response = None

    def _fail_pending(self, exc: BaseException) -> None:
        fut = self._response
        if fut is not None and not fut.done():
            fut.set_exception(exc)

    # DatagramProtocol

    def connection_made(self, transport):
        """Logs when the protocol has connected.

        .. seealso:: :py:meth:`asyncio.BaseProtocol.connection_made()`

        """
        log.debug("protocol has connected")

    def connection_lost(self, exc: Exception | None):
        """Logs when the protocol has disconnected.

        .. seealso:: :py:meth:`asyncio.BaseProtocol.connection_lost()`

        """
        if exc:
            log.error("protocol has disconnected with error", exc_info=exc)
            self._fail_pending(exc)
        else:
            log.debug("protocol has disconnected")
            self._fail_pending(RCONClientClosed("connection was lost"))

    def datagram_received(self, data: bytes, addr):
        """Handles a datagram from the server.

        .. seealso:: :py:meth:`asyncio.DatagramProtocol.datagram_received()`

        """
        try:
            self.protocol.receive_datagram(data)
        except InvalidStateError:
            return log.debug(f"ignoring reply from {addr} with no pending command")
        except ValueError as e:
            return log.debug("ignoring malformed data with cause:", exc_info=e)

        log.debug(f"reply received from {addr}")

        for event in self.protocol.events_received():
            if isinstance(event, ClientCommandEvent):
                fut = self._response
                if fut is not None and not fut.done():
                    fut.set_result(event.message)
            else:
                raise RuntimeError(f"unhandled event type {type(event)}")

    def error_received(self, exc: OSError):
        """Fails the pending command with the given error.

        .. seealso:: :py:meth:`asyncio.DatagramProtocol.error_received()`

        """
        log.error("unusual error occurred during session", exc_info=exc)
        self._fail_pending(exc)
