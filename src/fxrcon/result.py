"""Defines the uniform result envelope returned by every server operation."""
import enum
from dataclasses import dataclass
from typing import Any


class ErrorCode(str, enum.Enum):
    """Stable identifiers describing why an operation failed."""

    CONNECTION_FAILED = "CONNECTION_FAILED"
    COMMAND_FAILED = "COMMAND_FAILED"
    PLUGIN_NOT_FOUND = "PLUGIN_NOT_FOUND"
    INVALID_COMMAND = "INVALID_COMMAND"
    TIMEOUT = "TIMEOUT"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    INVALID_ARGUMENTS = "INVALID_ARGUMENTS"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ErrorInfo:
    """Describes the failure of an operation."""

    code: ErrorCode
    message: str
    details: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"code": self.code.value, "message": self.message}
        if self.details is not None:
            d["details"] = self.details
        return d


@dataclass(frozen=True, slots=True)
class Result:
    """The outcome of an operation against the server.

    Commands rejected by the server are reported here with
    :py:attr:`success` set to ``False`` instead of being raised,
    so callers can inspect them without unwinding.

    """

    success: bool
    message: str
    data: Any = None
    """The payload of a successful operation, usually containing
    the ``response`` and ``command`` keys.
    """
    error: ErrorInfo | None = None

    @classmethod
    def failure(
        cls,
        code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> "Result":
        """A shorthand for constructing a failed result whose
        message matches its error message.
        """
        return cls(False, message, error=ErrorInfo(code, message, details))

    def to_dict(self) -> dict[str, Any]:
        """Returns the JSON-compatible form of this result.

        Optional fields that are not set are omitted.

        """
        d: dict[str, Any] = {"success": self.success, "message": self.message}
        if self.data is not None:
            d["data"] = self.data
        if self.error is not None:
            d["error"] = self.error.to_dict()
        return d
