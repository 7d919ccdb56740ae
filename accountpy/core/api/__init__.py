"""Account server API: configuration, wire protocol and error taxonomy."""
from .config import (
    APIConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    SettingsProvider,
    DEFAULT_TIMEOUT,
)
from .errors import ErrorKind, ServerErrorCodes, classify, describe
from .events import EventEmitter
from .models import (
    Credentials,
    UserRecord,
    OperationKind,
    OperationResult,
    UNKNOWN_USER_ID,
)
from .request import (
    HttpRequest,
    RequestBuilder,
    RequestDispatcher,
    TransportOutcome,
    ResponseDecoder,
    DecodedPayload,
    Decoded,
    Malformed,
)
from .session import SessionFactory

__all__ = [
    # Configuration
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'SettingsProvider',
    'DEFAULT_TIMEOUT',
    
    # Errors
    'ErrorKind',
    'ServerErrorCodes',
    'classify',
    'describe',
    
    # Events
    'EventEmitter',
    
    # Models
    'Credentials',
    'UserRecord',
    'OperationKind',
    'OperationResult',
    'UNKNOWN_USER_ID',
    
    # Requests
    'HttpRequest',
    'RequestBuilder',
    'RequestDispatcher',
    'TransportOutcome',
    'ResponseDecoder',
    'DecodedPayload',
    'Decoded',
    'Malformed',
    'SessionFactory',
]
