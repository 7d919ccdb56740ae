"""One-shot operation objects for event-driven callers."""
from .base import AsyncOperation, OperationState, SUCCEEDED, FAILED
from .account_operations import (
    AccountOperation,
    RegisterOperation,
    LoginOperation,
    AuthenticateOperation,
)
from .ping import PingOperation, PING_FAILED

__all__ = [
    'AsyncOperation',
    'OperationState',
    'SUCCEEDED',
    'FAILED',
    'AccountOperation',
    'RegisterOperation',
    'LoginOperation',
    'AuthenticateOperation',
    'PingOperation',
    'PING_FAILED',
]
