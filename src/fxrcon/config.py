import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

DEFAULT_PORT = 30120
DEFAULT_LOGS_SUBDIR = Path("local", "txData", "default", "logs")


@dataclass
class ConnectorConfig:
    """Specifies the configuration used for the :py:class:`AsyncClientConnector`."""

    command_timeout: float = 5.0
    """
    The amount of time in seconds to wait for the server to reply
    to a command before giving up.

    No retries are attempted, as resending a command could
    execute it twice on the server.
    """
    connect_timeout: float = 5.0
    """
    The amount of time in seconds to wait for the server to reply
    to the ``version`` probe sent by :py:meth:`RCONClient.connect()`.
    """
    probe_command: str = "version"
    """The command used to verify the password when connecting."""


@dataclass(frozen=True)
class ServerConfig:
    """Describes how to reach a game server and where its logs are kept."""

    host: str | None = None
    port: int | None = None
    password: str | None = None
    logs_dir: Path | None = None
    connector: ConnectorConfig = field(default_factory=ConnectorConfig)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ServerConfig":
        """Reads the configuration from environment variables.

        ========================  ===========================================
        Variable                  Meaning
        ========================  ===========================================
        ``RCON_ADDRESS``          The host of the game server.
        ``RCON_PORT``             The RCON port, defaulting to 30120.
        ``RCON_PASSWORD``         The RCON password.
        ``FIVEM_LOGS_DIR``        The server logs directory, defaulting to
                                  ``local/txData/default/logs`` under the
                                  current working directory.
        ========================  ===========================================

        :raises ValueError: ``RCON_PORT`` is not an integer.

        """
        if environ is None:
            environ = os.environ

        port = environ.get("RCON_PORT")
        logs_dir = environ.get("FIVEM_LOGS_DIR")

        return cls(
            host=environ.get("RCON_ADDRESS") or None,
            port=int(port) if port else DEFAULT_PORT,
            password=environ.get("RCON_PASSWORD") or None,
            logs_dir=Path(logs_dir) if logs_dir else Path.cwd() / DEFAULT_LOGS_SUBDIR,
        )

    def has_auto_connect(self) -> bool:
        """Indicates if enough information was given to connect on startup."""
        return bool(self.host and self.password)
