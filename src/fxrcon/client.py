import asyncio
import logging
from dataclasses import dataclass, field

from .config import ConnectorConfig
from .errors import LoginFailure, LoginRefused, RCONClientClosed
from .io import AsyncClientConnector, AsyncClientProtocol
from .protocol import RCONClientProtocol

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConnectionInfo:
    """The address and password of the server a client talks to."""

    host: str
    port: int
    password: str = field(repr=False)


class RCONClient:
    """An implementation of the RCON client protocol using asyncio.

    Example usage::

        async with fxrcon.RCONClient("127.0.0.1", 30120, password) as client:
            print(await client.send_command("status"))

    Only one command is sent at a time. Concurrent calls to
    :py:meth:`send_command()` wait for each other in order.

    :param host: The host of the game server.
    :param port: The RCON port of the game server.
    :param password: The password embedded in every request.
    :param config:
        The configuration to use for timeouts.
        Defaults to an instance of :py:class:`ConnectorConfig`.
    :param protocol:
        The protocol to use for sending commands.
        Defaults to an instance of :py:class:`AsyncClientConnector`.

    """

    def __init__(
        self,
        host: str,
        port: int,
        password: str,
        *,
        config: ConnectorConfig | None = None,
        protocol: AsyncClientProtocol | None = None,
    ):
        if config is None:
            config = ConnectorConfig()
        if protocol is None:
            protocol = AsyncClientConnector(RCONClientProtocol(password), config=config)

        self.config = config
        self.protocol = protocol

        self._info = ConnectionInfo(host, port, password)
        self._connected = False

    def __repr__(self) -> str:
        return "<{} {}:{} {}>".format(
            type(self).__name__,
            self._info.host,
            self._info.port,
            "connected" if self.is_connected() else "not connected",
        )

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, tb):
        self.close()

    @property
    def info(self) -> ConnectionInfo:
        """The server this client was created for."""
        return self._info

    def is_connected(self) -> bool:
        """Indicates if :py:meth:`connect()` succeeded and the client
        has not been closed since.
        """
        return self._connected and not self.protocol.is_closed()

    # Connection methods

    async def connect(self) -> None:
        """Verifies that the server is reachable and accepts our password.

        The protocol has no login handshake, so a probe command is sent
        instead and its reply is checked for a password rejection.

        :raises LoginRefused: The password given to the server was denied.
        :raises LoginFailure: The server could not be reached.
        :raises RCONClientClosed: The client was already closed.

        """
        log.info(f"attempting to connect to {self._info.host}:{self._info.port}")

        try:
            response = await self.send_command(
                self.config.probe_command,
                timeout=self.config.connect_timeout,
            )
        except RCONClientClosed:
            raise
        except (asyncio.TimeoutError, OSError) as e:
            log.error("failed to connect to the server")
            raise LoginFailure(f"Failed to connect to server: {e}") from e

        if "Bad rcon" in response:
            log.error("password authentication was denied")
            raise LoginRefused("Failed to connect to server: Invalid RCON password")

        self._connected = True
        log.info("successfully connected to the server")

    def close(self) -> None:
        """Closes the connection.

        This method is idempotent and can be called multiple times consecutively.
        Commands sent after closing raise :py:exc:`RCONClientClosed`.

        """
        if self._connected:
            log.info("closing connection to the server")
        self._connected = False
        self.protocol.close()

    # Commands

    async def send_command(self, command: str, timeout: float | None = None) -> str:
        """Sends a command to the server and returns its reply.

        The reply is returned as-is, use :py:func:`classify()` to
        interpret it as a :py:class:`Result`.

        :param command: The command string to send.
        :param timeout:
            The number of seconds to wait for a reply.
            Defaults to :py:attr:`ConnectorConfig.command_timeout`.
        :raises RCONTimeoutError: The server did not reply in time.
        :raises RCONClientClosed: The client has been closed.
        :raises OSError: The command could not be transmitted.

        """
        await self.protocol.open(self._info.host, self._info.port)
        return await self.protocol.send_command(command, timeout)
