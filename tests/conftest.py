from typing import Callable

import pytest

from fxrcon import ServerManager
from fxrcon.logs import LogFileReader


class FakeClient:
    """Records commands and replies from a fixed table."""

    def __init__(
        self,
        replies: dict[str, str] | None = None,
        error: Exception | None = None,
    ):
        self.replies = replies or {}
        self.error = error
        self.commands: list[str] = []
        self.closed = False

    async def connect(self) -> None:
        pass

    def close(self) -> None:
        self.closed = True

    async def send_command(self, command: str, timeout: float | None = None) -> str:
        self.commands.append(command)
        if self.error is not None:
            raise self.error
        return self.replies.get(command, "ok")


class EmptyReader(LogFileReader):
    async def read_console_logs(self, lines: int = 100):
        return None

    async def read_plugin_logs(self, lines: int = 50, plugin_name=None):
        return None


MakeManager = Callable[..., ServerManager]


@pytest.fixture
def make_manager() -> MakeManager:
    """Returns a factory for managers backed by a :py:class:`FakeClient`."""

    def factory(
        replies: dict[str, str] | None = None,
        error: Exception | None = None,
        **kwargs,
    ) -> ServerManager:
        kwargs.setdefault("reader", EmptyReader())
        return ServerManager(client=FakeClient(replies, error), **kwargs)  # type: ignore

    return factory


@pytest.fixture
def manager(make_manager: MakeManager) -> ServerManager:
    return make_manager(
        {
            "ensure chat": "Started resource chat",
            "stop chat": "Stopping resource chat",
            "restart chat": "Restarting resource chat",
            "status": "No such command status.",
            "refresh": "",
        }
    )
