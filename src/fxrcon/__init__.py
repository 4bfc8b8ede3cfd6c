from .client import ConnectionInfo as ConnectionInfo, RCONClient as RCONClient
from .config import ConnectorConfig as ConnectorConfig, ServerConfig as ServerConfig
from .errors import (
    LoginFailure as LoginFailure,
    LoginRefused as LoginRefused,
    ProtocolError as ProtocolError,
    RCONClientClosed as RCONClientClosed,
    RCONConnectionError as RCONConnectionError,
    RCONError as RCONError,
    RCONTimeoutError as RCONTimeoutError,
)
from .io import (
    AsyncClientConnector as AsyncClientConnector,
    AsyncClientProtocol as AsyncClientProtocol,
)
from .logs import LogFileReader as LogFileReader
from .manager import ServerManager as ServerManager
from .parser import (
    PlainError as PlainError,
    PlainSuccess as PlainSuccess,
    StructuredError as StructuredError,
    StructuredSuccess as StructuredSuccess,
    classify as classify,
    interpret as interpret,
    validate_command as validate_command,
)
from .protocol import (
    ClientCommandEvent as ClientCommandEvent,
    ClientState as ClientState,
    InvalidStateError as InvalidStateError,
    RCONClientProtocol as RCONClientProtocol,
    RCONGenericProtocol as RCONGenericProtocol,
    RCONServerProtocol as RCONServerProtocol,
    ServerAuthFailureEvent as ServerAuthFailureEvent,
    ServerCommandEvent as ServerCommandEvent,
    decode as decode,
    encode as encode,
)
from .result import ErrorCode as ErrorCode, ErrorInfo as ErrorInfo, Result as Result


def _get_version() -> str:
    from importlib.metadata import version

    return version("fxrcon")


__version__ = _get_version()
