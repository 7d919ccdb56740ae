"""Account session management."""
from ..api.models import (
    Credentials,
    UserRecord,
    OperationKind,
    OperationResult,
    UNKNOWN_USER_ID,
)
from .session_manager import AccountSessionManager, ResultCallback

__all__ = [
    'Credentials',
    'UserRecord',
    'OperationKind',
    'OperationResult',
    'UNKNOWN_USER_ID',
    'AccountSessionManager',
    'ResultCallback',
]
