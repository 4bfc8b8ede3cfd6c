import pytest

from fxrcon.parser import (
    PlainError,
    PlainSuccess,
    StructuredError,
    StructuredSuccess,
    classify,
    determine_error_code,
    extract_error_message,
    interpret,
    validate_command,
)
from fxrcon.result import ErrorCode, Result


@pytest.mark.parametrize(
    "response,kind",
    [
        ("Started resource chat", PlainSuccess),
        ("Unknown command foo", PlainError),
        ("nil", PlainError),
        ('{"success":true,"message":"ok"}', StructuredSuccess),
        ('{"success":false}', StructuredError),
        ("[MCP-Bridge] [ERROR] handler crashed", StructuredError),
        ('Error: {"success":true}', PlainError),
    ],
)
def test_interpret_kinds(response: str, kind: type):
    assert isinstance(interpret(response), kind)


def test_unknown_command():
    result = classify("Unknown command foo", "foo")
    assert not result.success
    assert result.error is not None
    assert result.error.code == ErrorCode.INVALID_COMMAND
    assert result.error.details == {"response": "Unknown command foo", "command": "foo"}
    assert result.message == "Unknown command foo"


def test_plain_success():
    result = classify("  Started resource chat\n", "ensure chat")
    assert result == Result(
        True,
        "Command executed successfully",
        data={"response": "Started resource chat", "command": "ensure chat"},
    )


def test_structured_success():
    raw = '{"success":true,"message":"ok","data":{"x":1}}'
    result = classify(raw, "mcp_status")
    assert result.success
    assert result.message == "ok"
    assert result.data["x"] == 1
    assert result.error is None


def test_structured_failure():
    result = classify('{"success":false}', "mcp_status")
    assert not result.success
    assert result.message == "Command execution failed"
    assert result.error is not None
    assert result.error.code == ErrorCode.UNKNOWN_ERROR
    assert result.data == {"response": '{"success":false}', "command": "mcp_status"}


def test_structured_failure_keeps_data():
    raw = '{"success":false,"data":{"reason":"missing"}}'
    result = classify(raw, "mcp_status")
    assert not result.success
    assert result.data == {"reason": "missing"}


def test_structured_with_echo_prefix():
    raw = 'print [MCP-Bridge] {"success":true,"data":{"players":3}}'
    result = classify(raw, "mcp_players")
    assert result.success
    assert result.message == "Plugin command executed successfully"
    assert result.data == {"players": 3}


def test_structured_defaults():
    # Empty containers are kept, blank scalars fall back to the defaults
    result = classify('{"success":true,"message":"","data":{}}', "cmd")
    assert result.message == "Plugin command executed successfully"
    assert result.data == {}

    result = classify('{"success":true,"data":null}', "cmd")
    assert result.data == {"response": '{"success":true,"data":null}', "command": "cmd"}


def test_structured_success_field_missing():
    result = classify('{"data":{"ok":1}}', "cmd")
    assert result.success
    assert result.data == {"ok": 1}


def test_structured_command_failure_phrase():
    """Asserts command failure phrases override the JSON success field."""
    raw = '{"success":true} No such command mcp_status'
    result = classify(raw, "mcp_status")
    assert not result.success
    assert result.error is not None
    assert result.error.code == ErrorCode.INVALID_COMMAND
    assert result.data is None


def test_structured_unparseable_json():
    result = classify('[MCP-Bridge] {"success": tru}', "cmd")
    assert result.success
    assert result.message == "Plugin command executed (JSON parse error)"
    assert result.data == {"response": '[MCP-Bridge] {"success": tru}', "command": "cmd"}


def test_structured_without_json():
    result = classify("[MCP-Bridge] event dispatched", "cmd")
    assert result.success
    assert result.message == "Plugin command executed successfully"

    result = classify("[MCP-Bridge] ERROR: handler not registered", "cmd")
    assert not result.success
    assert result.error is not None
    assert result.message == "[MCP-Bridge] ERROR: handler not registered"


@pytest.mark.parametrize("response", ["nil", "NIL", "false", "False"])
def test_falsy_replies(response: str):
    assert not classify(response, "cmd").success


def test_falsy_words_inside_text():
    assert classify("nil values are ignored", "cmd").success
    assert classify("Players: 0, locked: false", "cmd").success


@pytest.mark.parametrize(
    "response,code",
    [
        ("No such command stats", ErrorCode.INVALID_COMMAND),
        ("Command not found: stats", ErrorCode.INVALID_COMMAND),
        ("Access denied for stop", ErrorCode.PERMISSION_DENIED),
        ("Permission denied", ErrorCode.PERMISSION_DENIED),
        ("Timeout while waiting for resource", ErrorCode.TIMEOUT),
        ("Connection failed to database", ErrorCode.CONNECTION_FAILED),
        ("Resource chat not found", ErrorCode.RESOURCE_NOT_FOUND),
        ("Plugin chat not found", ErrorCode.RESOURCE_NOT_FOUND),
        ("Invalid player id", ErrorCode.INVALID_ARGUMENTS),
        ("Failed to start resource chat", ErrorCode.COMMAND_FAILED),
        ("Cannot stop a stopped resource", ErrorCode.UNKNOWN_ERROR),
        ("Error: something happened", ErrorCode.UNKNOWN_ERROR),
    ],
)
def test_error_codes(response: str, code: ErrorCode):
    result = classify(response, "cmd")
    assert not result.success
    assert result.error is not None
    assert result.error.code == code


def test_error_code_precedence():
    # Invalid-command phrases win over anything that follows
    assert (
        determine_error_code("Unknown command, access denied") == ErrorCode.INVALID_COMMAND
    )
    assert determine_error_code("Failed to connect: timeout") == ErrorCode.TIMEOUT


def test_native_script_error():
    raw = "script error in native 4f8a2c1b: argument at index 0 was null"
    result = classify(raw, "cmd")
    assert not result.success
    assert result.error is not None
    assert result.error.code == ErrorCode.INVALID_ARGUMENTS
    assert result.message == "Argument at index 0 was null"


def test_extract_error_message():
    assert extract_error_message("print failed to load") == "Failed to load"
    assert extract_error_message("print ") == "Unknown error occurred"
    assert extract_error_message("") == "Unknown error occurred"


def test_result_to_dict():
    result = classify("Unknown command foo", "foo")
    assert result.to_dict() == {
        "success": False,
        "message": "Unknown command foo",
        "error": {
            "code": "INVALID_COMMAND",
            "message": "Unknown command foo",
            "details": {"response": "Unknown command foo", "command": "foo"},
        },
    }

    result = classify("ok", "foo")
    assert result.to_dict() == {
        "success": True,
        "message": "Command executed successfully",
        "data": {"response": "ok", "command": "foo"},
    }


@pytest.mark.parametrize("command", ["", "   ", "\t\n"])
def test_validate_empty_command(command: str):
    result = validate_command(command)
    assert result is not None
    assert not result.success
    assert result.error is not None
    assert result.error.code == ErrorCode.INVALID_ARGUMENTS


@pytest.mark.parametrize(
    "command",
    ["rm -rf /", "RM  -RF ~", "del /s C:\\", "format C:", "shutdown now", "exec reboot.cfg"],
)
def test_validate_dangerous_command(command: str):
    result = validate_command(command)
    assert result is not None
    assert not result.success
    assert result.error is not None
    assert result.error.code == ErrorCode.PERMISSION_DENIED


@pytest.mark.parametrize("command", ["ensure chat", "status", "say hello"])
def test_validate_ordinary_command(command: str):
    assert validate_command(command) is None
