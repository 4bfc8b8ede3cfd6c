import asyncio


class RCONError(Exception):
    """The base class for RCON errors."""


class RCONConnectionError(RCONError, ConnectionError):
    """Raised when the client could not establish a session with the server."""


class LoginFailure(RCONConnectionError):
    """Raised when the client could not log into the RCON server."""


class LoginRefused(LoginFailure):
    """Raised when the password given to the RCON server was incorrect."""


class RCONTimeoutError(RCONError, asyncio.TimeoutError):
    """Raised when the server did not reply to a command in time."""

    command: str
    """The command that was waiting for a reply."""

    def __init__(self, command: str):
        self.command = command
        super().__init__(f"Command timeout: {command}")


class RCONClientClosed(RCONError):
    """Raised when a command is sent through a client that has been closed."""


class ProtocolError(RCONError, ValueError):
    """Raised when a frame does not match the expected format."""
