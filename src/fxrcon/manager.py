import collections
import datetime
import json
import logging
from pathlib import Path
from typing import Any

from .client import RCONClient
from .config import ConnectorConfig, DEFAULT_PORT, ServerConfig
from .errors import RCONError
from .logs import LogFileReader
from .parser import classify, validate_command
from .result import ErrorCode, Result

log = logging.getLogger(__name__)

TRIGGER_EVENT_COMMAND = "mcp_trigger_event"
"""The command registered by the server-side bridge for triggering events."""


class ServerManager:
    """Administers a game server's plugins over RCON.

    Every operation validates its command, sends it and classifies the
    reply into a :py:class:`Result`. Commands rejected by the server are
    returned as failed results, while transport failures such as
    timeouts are raised after being recorded in the operation log.

    :param host: The host of the game server.
    :param port: The RCON port of the game server.
    :param password: The RCON password.
    :param logs_dir: The directory containing the server's log files.
    :param config: The configuration to use for the client's timeouts.
    :param client:
        The client to send commands through.
        Defaults to an :py:class:`RCONClient` for the given address.
    :param reader:
        The reader to use for server log files.
        Defaults to a :py:class:`LogFileReader` for ``logs_dir``.
    :param max_log_entries:
        The number of operation log entries to keep before
        the oldest entries are discarded.
    :raises ValueError: No password was given.

    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = DEFAULT_PORT,
        password: str = "",
        logs_dir: Path | str | None = None,
        *,
        config: ConnectorConfig | None = None,
        client: RCONClient | None = None,
        reader: LogFileReader | None = None,
        max_log_entries: int = 1000,
    ):
        if not password and client is None:
            raise ValueError("RCON password is required")
        if client is None:
            client = RCONClient(host, port, password, config=config)
        if reader is None:
            reader = LogFileReader(logs_dir)

        self.client = client
        self.reader = reader
        self._logs: collections.deque[str] = collections.deque(maxlen=max_log_entries)

    @classmethod
    def from_config(cls, config: ServerConfig) -> "ServerManager":
        """Creates a manager from a :py:class:`ServerConfig`.

        :raises ValueError: The configuration is missing a password.

        """
        return cls(
            config.host or "localhost",
            config.port or DEFAULT_PORT,
            config.password or "",
            config.logs_dir,
            config=config.connector,
        )

    async def connect(self) -> None:
        """A shorthand for :py:meth:`RCONClient.connect()`."""
        await self.client.connect()

    def close(self) -> None:
        """A shorthand for :py:meth:`RCONClient.close()`."""
        self.client.close()

    # Plugins

    async def ensure_plugin(self, plugin_name: str) -> Result:
        """Starts the given plugin, or restarts it if already running."""
        return await self._plugin_command("ensure", plugin_name)

    async def stop_plugin(self, plugin_name: str) -> Result:
        """Stops the given plugin."""
        return await self._plugin_command("stop", plugin_name)

    async def restart_plugin(self, plugin_name: str) -> Result:
        """Restarts the given plugin."""
        return await self._plugin_command("restart", plugin_name)

    async def refresh_resources(self) -> Result:
        """Rescans the server's resource directories for new plugins."""
        return await self._run("refresh", "REFRESH", "Resources refreshed", "refresh resources")

    # Commands

    async def execute_command(self, command: str) -> Result:
        """Sends an arbitrary command to the server."""
        return await self._run(command, "COMMAND", command, f"execute {command}")

    async def trigger_event(self, event: str, *args: Any) -> Result:
        """Asks the server-side bridge to trigger an event with
        the given JSON-serializable arguments.
        """
        if not event or not event.strip():
            return Result.failure(ErrorCode.INVALID_ARGUMENTS, "Event name is required")

        command = f"{TRIGGER_EVENT_COMMAND} {event}"
        if args:
            command = f"{command} {json.dumps(list(args))}"

        return await self._run(command, "TRIGGER", event, f"trigger {event}")

    # Server logs

    async def get_console_logs(self, lines: int = 100) -> str:
        """Returns the last lines of the server's log files."""
        content = await self.reader.read_console_logs(lines)
        if content:
            self._record("LOG_ACCESS", f"Successfully read {lines} lines from log files")
            return content

        message = (
            "Log files not accessible. "
            "Please ensure logs directory path is configured correctly."
        )
        self._record("LOG_ACCESS", message)
        return message

    async def get_plugin_logs(self, lines: int = 50, plugin_name: str | None = None) -> str:
        """Returns the last lines written by server scripts."""
        content = await self.reader.read_plugin_logs(lines, plugin_name)
        if content:
            self._record("PLUGIN_LOG_ACCESS", f"Successfully read {lines} plugin log lines")
            return content

        if plugin_name:
            message = (
                f"No logs found for plugin {plugin_name!r}. "
                "Plugin may not be running or generating logs."
            )
        else:
            message = "No plugin logs found. Plugins may not be running or generating logs."
        self._record("PLUGIN_LOG_ACCESS", message)
        return message

    # Operation log

    def get_logs(self, limit: int = 100) -> list[str]:
        """Returns up to the last ``limit`` operation log entries, oldest first."""
        if limit <= 0:
            return []
        return list(self._logs)[-limit:]

    def clear_logs(self) -> None:
        """Discards every operation log entry."""
        self._logs.clear()

    def _record(self, action: str, text: str) -> None:
        timestamp = datetime.datetime.now(datetime.timezone.utc).isoformat()
        self._logs.append(f"[{timestamp}] {action}: {text}")

    async def _plugin_command(self, verb: str, plugin_name: str) -> Result:
        if not plugin_name or not plugin_name.strip():
            return Result.failure(ErrorCode.INVALID_ARGUMENTS, "Plugin name is required")

        return await self._run(
            f"{verb} {plugin_name}",
            verb.upper(),
            plugin_name,
            f"{verb} {plugin_name}",
        )

    async def _run(self, command: str, action: str, subject: str, attempt: str) -> Result:
        if (rejected := validate_command(command)) is not None:
            self._record("ERROR", f"Failed to {attempt} - {rejected.message}")
            return rejected

        try:
            response = await self.client.send_command(command)
        except (RCONError, OSError) as e:
            log.warning(f"failed to {attempt}: {e}")
            self._record("ERROR", f"Failed to {attempt} - {e}")
            raise

        self._record(action, f"{subject} - {response}")
        return classify(response, command)
