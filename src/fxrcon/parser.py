"""
Provides utility functions for interpreting the free-form replies
sent by the server into :py:class:`Result` envelopes.

Interpretation happens in two steps. :py:func:`interpret()` decides
which kind of reply was received, and :py:func:`classify()` turns that
decision into a :py:class:`Result`. Both are pure functions of their
arguments.
"""
from dataclasses import dataclass
import json
import logging
import re
from typing import Any

from .result import ErrorCode, ErrorInfo, Result

log = logging.getLogger(__name__)

# Replies that indicate the server rejected the command outright
_ERROR_PATTERNS = (
    re.compile(r"No such command", re.IGNORECASE),
    re.compile(r"Unknown command", re.IGNORECASE),
    re.compile(r"Command not found", re.IGNORECASE),
    re.compile(r"Error:", re.IGNORECASE),
    re.compile(r"script error", re.IGNORECASE),
    re.compile(r"Failed to", re.IGNORECASE),
    re.compile(r"Cannot", re.IGNORECASE),
    re.compile(r"Invalid", re.IGNORECASE),
    re.compile(r"Permission denied", re.IGNORECASE),
    re.compile(r"Access denied", re.IGNORECASE),
    re.compile(r"Timeout", re.IGNORECASE),
    re.compile(r"Connection failed", re.IGNORECASE),
    re.compile(r"Resource .* not found", re.IGNORECASE),
    re.compile(r"Plugin .* not found", re.IGNORECASE),
)
_ARGUMENT_NULL = re.compile(r"argument.*null", re.IGNORECASE)
_FALSY_REPLY = re.compile(r"nil|false", re.IGNORECASE)

# Checked in order, the first match decides the error code
_ERROR_CODES = (
    (
        re.compile(r"No such command|Unknown command|Command not found", re.IGNORECASE),
        ErrorCode.INVALID_COMMAND,
    ),
    (re.compile(r"Permission denied|Access denied", re.IGNORECASE), ErrorCode.PERMISSION_DENIED),
    (re.compile(r"Timeout", re.IGNORECASE), ErrorCode.TIMEOUT),
    (re.compile(r"Connection failed", re.IGNORECASE), ErrorCode.CONNECTION_FAILED),
    (
        re.compile(r"Resource.*not found|Plugin.*not found", re.IGNORECASE),
        ErrorCode.RESOURCE_NOT_FOUND,
    ),
    (re.compile(r"Invalid|argument.*null", re.IGNORECASE), ErrorCode.INVALID_ARGUMENTS),
    (re.compile(r"script error|Failed to", re.IGNORECASE), ErrorCode.COMMAND_FAILED),
)

# Phrases that mark a failed command even inside a structured reply
_COMMAND_FAILURES = ("No such command", "Unknown command", "Command not found")
_STRUCTURED_MARKERS = ('{"data":', "[MCP-Bridge]", '"success":')
_STRUCTURED_ERROR_MARKERS = ("[ERROR]", "ERROR:")

_ECHO_PREFIX = re.compile(r"^print\s+", re.IGNORECASE)
_NATIVE_ERROR_PREFIX = re.compile(r"^script error in native [0-9a-f]+:\s*", re.IGNORECASE)
_JSON_OBJECT = re.compile(r"\{.*\}")

_DANGEROUS_PATTERNS = (
    re.compile(r"rm\s+-rf", re.IGNORECASE),
    re.compile(r"del\s+/[sq]", re.IGNORECASE),
    re.compile(r"format\s+", re.IGNORECASE),
    re.compile(r"shutdown", re.IGNORECASE),
    re.compile(r"reboot", re.IGNORECASE),
)


@dataclass(frozen=True, slots=True)
class PlainError:
    """A plain-text reply that matched one of the known error signatures."""

    response: str


@dataclass(frozen=True, slots=True)
class StructuredSuccess:
    """A reply from a cooperating server-side extension that succeeded."""

    response: str
    message: str
    data: Any = None
    """The ``data`` field given by the extension, if any."""


@dataclass(frozen=True, slots=True)
class StructuredError:
    """A reply from a cooperating server-side extension that failed."""

    response: str
    payload: dict[str, Any] | None = None
    """The JSON object included in the reply, if one could be parsed."""


@dataclass(frozen=True, slots=True)
class PlainSuccess:
    """A plain-text reply with no sign of failure."""

    response: str


Interpretation = PlainError | StructuredSuccess | StructuredError | PlainSuccess


def is_error_response(response: str) -> bool:
    """Checks if a reply matches any of the known error signatures."""
    return (
        any(p.match(response) for p in _ERROR_PATTERNS)
        or _ARGUMENT_NULL.search(response) is not None
        or _FALSY_REPLY.fullmatch(response) is not None
    )


def is_structured_response(response: str) -> bool:
    """Checks if a reply looks like it came from a server-side extension."""
    return any(marker in response for marker in _STRUCTURED_MARKERS)


def has_command_failure(response: str) -> bool:
    return any(phrase in response for phrase in _COMMAND_FAILURES)


def interpret(response: str) -> Interpretation:
    """Decides which kind of reply the server sent.

    Plain error signatures take precedence over everything else.
    Structured replies trust the ``success`` field of their JSON
    payload unless a command failure phrase is also present.

    """
    response = response.strip()

    if is_error_response(response):
        log.debug("reply matched an error signature")
        return PlainError(response)

    if not is_structured_response(response):
        return PlainSuccess(response)

    clean = _ECHO_PREFIX.sub("", response, count=1).strip()
    if has_command_failure(clean):
        log.debug("structured reply contains a command failure")
        return StructuredError(response)

    if m := _JSON_OBJECT.search(clean):
        try:
            payload = json.loads(m[0])
        except ValueError as e:
            log.debug(f"could not parse JSON in structured reply: {e}")
            return StructuredSuccess(
                response, "Plugin command executed (JSON parse error)"
            )

        if not isinstance(payload, dict):
            return StructuredSuccess(
                response, "Plugin command executed (JSON parse error)"
            )
        elif payload.get("success") is False:
            return StructuredError(response, payload)

        message = payload.get("message")
        if not _is_present(message):
            message = "Plugin command executed successfully"
        return StructuredSuccess(response, str(message), payload.get("data"))

    if any(marker in response for marker in _STRUCTURED_ERROR_MARKERS):
        return StructuredError(response)

    return StructuredSuccess(response, "Plugin command executed successfully")


def classify(response: str, command: str) -> Result:
    """Interprets a reply to the given command as a :py:class:`Result`."""
    log.debug(f"classifying reply to {command!r}: {response!r}")
    kind = interpret(response)
    default_data = {"response": kind.response, "command": command}

    if isinstance(kind, PlainSuccess):
        return Result(True, "Command executed successfully", data=default_data)

    elif isinstance(kind, StructuredSuccess):
        data = kind.data if _is_present(kind.data) else default_data
        return Result(True, kind.message, data=data)

    elif isinstance(kind, StructuredError) and kind.payload is not None:
        data = kind.payload.get("data")
        return Result(
            False,
            "Command execution failed",
            data=data if _is_present(data) else default_data,
            error=ErrorInfo(
                determine_error_code(kind.response),
                extract_error_message(kind.response),
                default_data,
            ),
        )

    return Result.failure(
        determine_error_code(kind.response),
        extract_error_message(kind.response),
        default_data,
    )


def determine_error_code(response: str) -> ErrorCode:
    """Derives the most specific error code for a failed reply."""
    for pattern, code in _ERROR_CODES:
        if pattern.search(response):
            return code
    return ErrorCode.UNKNOWN_ERROR


def extract_error_message(response: str) -> str:
    """Strips echo and native error prefixes from a failed reply."""
    message = _ECHO_PREFIX.sub("", response, count=1)
    message = _NATIVE_ERROR_PREFIX.sub("", message, count=1).strip()
    if message:
        message = message[0].upper() + message[1:]
    return message or "Unknown error occurred"


def validate_command(command: str) -> Result | None:
    """Rejects commands that should never be sent to the server.

    :returns:
        A failed :py:class:`Result` if the command is empty or
        potentially destructive, ``None`` otherwise.

    """
    if not command or not command.strip():
        return Result.failure(ErrorCode.INVALID_ARGUMENTS, "Command cannot be empty")

    if any(p.search(command) for p in _DANGEROUS_PATTERNS):
        log.warning(f"refusing to send dangerous command: {command!r}")
        return Result.failure(
            ErrorCode.PERMISSION_DENIED,
            "Command contains potentially dangerous operations",
        )

    return None


def _is_present(value: Any) -> bool:
    # Empty containers count as present, only scalars can be blank
    if value is None or value is False or value == "":
        return False
    return not (isinstance(value, (int, float)) and value == 0)
