"""Exposes a :py:class:`ServerManager` as tools over the Model Context Protocol."""
import json
import logging

from mcp.server.fastmcp import FastMCP

from .errors import RCONError
from .manager import ServerManager
from .result import Result

log = logging.getLogger(__name__)


def render_result(result: Result) -> str:
    """Renders a result as text suitable for showing to a user."""
    if not result.success:
        if result.error is None:
            return f"Error: {result.message}"
        return f"Error [{result.error.code}]: {result.error.message}"

    data = result.data
    if isinstance(data, dict) and set(data) == {"response", "command"}:
        if not data["response"]:
            return result.message
        return f"{result.message}\nResponse: {data['response']}"
    elif data is None:
        return result.message

    return f"{result.message}\n{json.dumps(data, indent=2, default=str)}"


class BridgeTools:
    """Implements each tool on top of a :py:class:`ServerManager`.

    Transport failures are reported as text rather than raised
    so the caller always receives a readable reply.

    """

    def __init__(self, manager: ServerManager):
        self.manager = manager

    async def ensure_plugin(self, plugin_name: str) -> str:
        return await self._call(
            f"Plugin {plugin_name} ensured", self.manager.ensure_plugin(plugin_name)
        )

    async def stop_plugin(self, plugin_name: str) -> str:
        return await self._call(
            f"Plugin {plugin_name} stopped", self.manager.stop_plugin(plugin_name)
        )

    async def restart_plugin(self, plugin_name: str) -> str:
        return await self._call(
            f"Plugin {plugin_name} restarted", self.manager.restart_plugin(plugin_name)
        )

    async def execute_command(self, command: str) -> str:
        return await self._call(
            f"Command executed: {command}", self.manager.execute_command(command)
        )

    async def refresh_resources(self) -> str:
        return await self._call("Resources refreshed", self.manager.refresh_resources())

    async def trigger_event(self, event: str, args: list | None = None) -> str:
        return await self._call(
            f"Event {event} triggered",
            self.manager.trigger_event(event, *(args or ())),
        )

    async def get_server_logs(self, lines: int = 100) -> str:
        content = await self.manager.get_console_logs(lines)
        return f"CONSOLE LOGS:\n{content}"

    async def get_plugin_logs(self, lines: int = 50, plugin_name: str | None = None) -> str:
        content = await self.manager.get_plugin_logs(lines, plugin_name)
        title = f"PLUGIN {plugin_name!r} LOGS" if plugin_name else "ALL PLUGIN LOGS"
        return f"{title}:\n{content}"

    def get_operation_logs(self, limit: int = 100) -> str:
        entries = self.manager.get_logs(limit)
        return "\n".join(entries) if entries else "No operations recorded"

    def clear_logs(self) -> str:
        self.manager.clear_logs()
        return "Operation logs cleared"

    async def _call(self, title: str, coro) -> str:
        try:
            result = await coro
        except (RCONError, OSError) as e:
            return f"Tool execution failed: {e}"

        return f"{title}: {render_result(result)}"


def create_server(manager: ServerManager, name: str = "fxrcon") -> FastMCP:
    """Creates a FastMCP server whose tools operate on the given manager."""
    mcp = FastMCP(name)
    tools = BridgeTools(manager)

    @mcp.tool()
    async def ensure_plugin(plugin_name: str) -> str:
        """Start/ensure a FiveM plugin."""
        return await tools.ensure_plugin(plugin_name)

    @mcp.tool()
    async def stop_plugin(plugin_name: str) -> str:
        """Stop a FiveM plugin."""
        return await tools.stop_plugin(plugin_name)

    @mcp.tool()
    async def restart_plugin(plugin_name: str) -> str:
        """Restart a FiveM plugin."""
        return await tools.restart_plugin(plugin_name)

    @mcp.tool()
    async def execute_command(command: str) -> str:
        """Execute a raw RCON command on the server."""
        return await tools.execute_command(command)

    @mcp.tool()
    async def refresh_resources() -> str:
        """Refresh the FiveM server resource list."""
        return await tools.refresh_resources()

    @mcp.tool()
    async def trigger_event(event: str, args: list | None = None) -> str:
        """Trigger a server event through the server-side bridge resource."""
        return await tools.trigger_event(event, args)

    @mcp.tool()
    async def get_server_logs(lines: int = 100) -> str:
        """Get FiveM server logs."""
        return await tools.get_server_logs(lines)

    @mcp.tool()
    async def get_plugin_logs(lines: int = 50, plugin_name: str | None = None) -> str:
        """Get FiveM plugin/script logs, optionally for one plugin."""
        return await tools.get_plugin_logs(lines, plugin_name)

    @mcp.tool()
    def get_operation_logs(limit: int = 100) -> str:
        """Get the most recent operations performed through this bridge."""
        return tools.get_operation_logs(limit)

    @mcp.tool()
    def clear_logs() -> str:
        """Clear the local operation logs."""
        return tools.clear_logs()

    @mcp.resource("fivem://logs/recent", mime_type="text/plain")
    def recent_logs() -> str:
        """Recent server operation logs."""
        return "\n".join(manager.get_logs())

    @mcp.resource("fivem://console/info", mime_type="text/plain")
    async def console_info() -> str:
        """Server console information via log files."""
        return await manager.get_console_logs()

    log.debug(f"created tool server {name!r}")
    return mcp
