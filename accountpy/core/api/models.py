"""
Account value objects.

Credentials are caller input; UserRecord and OperationResult are produced
by the session manager and never mutated after construction.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from .errors import ErrorKind

# Sentinel id for a user the server did not describe
UNKNOWN_USER_ID = 9999


class OperationKind(Enum):
    """Which endpoint produced a result."""
    NONE = 'none'
    REGISTER = 'register'
    LOGIN = 'login'
    AUTH = 'auth'


@dataclass(frozen=True)
class Credentials:
    """User name and password for register and login."""
    name: str
    password: str = field(repr=False)
    
    def is_complete(self) -> bool:
        """Both fields must be non-empty before any request is sent."""
        return bool(self.name) and bool(self.password)
    
    def to_payload(self) -> Dict[str, str]:
        """Request body for the register/login endpoints."""
        return {'user_name': self.name, 'user_password': self.password}


@dataclass(frozen=True)
class UserRecord:
    """User as described by the account server."""
    name: str = ''
    id: int = UNKNOWN_USER_ID
    
    @property
    def is_known(self) -> bool:
        return self.id != UNKNOWN_USER_ID
    
    @classmethod
    def from_json(cls, data: Any) -> 'UserRecord':
        """
        Build from a ``{"user_name", "user_id"}`` mapping.
        
        Missing or wrongly typed fields fall back to the defaults.
        """
        if not isinstance(data, Mapping):
            return cls()
        
        name = data.get('user_name')
        user_id = _as_int(data.get('user_id'))
        
        return cls(
            name=name if isinstance(name, str) else '',
            id=UNKNOWN_USER_ID if user_id is None else user_id
        )


def _as_int(value: Any) -> Optional[int]:
    # bool is an int subclass but never a valid id
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


@dataclass(frozen=True)
class OperationResult:
    """
    Outcome of one account operation.
    
    Attributes:
        kind: Operation that produced the result
        error: ErrorKind.NORMAL on success, otherwise the failure kind
        user: Decoded user (default record on failure)
        token: Session token returned by login, if any
        valid: False only for the default, never-executed value
        message: Free-text server message, for display only
    """
    kind: OperationKind = OperationKind.NONE
    error: ErrorKind = ErrorKind.NORMAL
    user: UserRecord = field(default_factory=UserRecord)
    token: Optional[str] = field(default=None, repr=False)
    valid: bool = False
    message: str = ''
    
    @property
    def succeeded(self) -> bool:
        return self.valid and self.error is ErrorKind.NORMAL
    
    @classmethod
    def success(
        cls,
        kind: OperationKind,
        user: UserRecord,
        token: Optional[str] = None,
        message: str = ''
    ) -> 'OperationResult':
        return cls(kind=kind, error=ErrorKind.NORMAL, user=user, token=token, valid=True, message=message)
    
    @classmethod
    def failure(cls, kind: OperationKind, error: ErrorKind, message: str = '') -> 'OperationResult':
        return cls(kind=kind, error=error, user=UserRecord(), valid=True, message=message)
