"""Account error kinds and server error code table."""
from enum import Enum
from typing import Dict, Optional


class ErrorKind(Enum):
    """Closed set of outcomes an account operation can report."""
    
    NORMAL = 'NORMAL'
    
    # Local: detected before any network call
    INPUT_INVALID = 'INPUT_INVALID'
    TOKEN_INVALID = 'TOKEN_INVALID'
    SETTINGS_UNAVAILABLE = 'SETTINGS_UNAVAILABLE'
    
    # Network transport: request never completed or body unreadable
    TRANSPORT_ERROR = 'TRANSPORT_ERROR'
    
    # Network semantic: declared by the server in a non-2xx response
    USERNAME_EXISTS = 'USERNAME_EXISTS'
    INVALID_CREDENTIALS = 'INVALID_CREDENTIALS'
    USER_NOT_FOUND = 'USER_NOT_FOUND'
    USER_BANNED = 'USER_BANNED'
    USER_LOGIN_DISABLED = 'USER_LOGIN_DISABLED'
    TOO_MANY_REQUESTS = 'TOO_MANY_REQUESTS'
    INTERNAL_ERROR = 'INTERNAL_ERROR'
    VALIDATION_ERROR = 'VALIDATION_ERROR'
    TOKEN_EXPIRED = 'TOKEN_EXPIRED'
    TOKEN_REVOKED = 'TOKEN_REVOKED'
    UNAUTHORIZED = 'UNAUTHORIZED'
    FORBIDDEN = 'FORBIDDEN'
    NOT_FOUND = 'NOT_FOUND'
    SERVICE_UNAVAILABLE = 'SERVICE_UNAVAILABLE'
    UNKNOWN = 'UNKNOWN'
    
    @property
    def is_local(self) -> bool:
        return self in _LOCAL
    
    @property
    def is_transport(self) -> bool:
        return self is ErrorKind.TRANSPORT_ERROR
    
    @property
    def is_semantic(self) -> bool:
        return self in _SEMANTIC
    
    @property
    def is_network(self) -> bool:
        """True for transport and server-declared failures."""
        return self.is_transport or self.is_semantic


_LOCAL = frozenset({
    ErrorKind.INPUT_INVALID,
    ErrorKind.TOKEN_INVALID,
    ErrorKind.SETTINGS_UNAVAILABLE,
})


class ServerErrorCodes:
    """Server error code strings and their descriptions."""
    
    ERROR_CODES: Dict[str, ErrorKind] = {
        'USERNAME_EXISTS': ErrorKind.USERNAME_EXISTS,
        'INVALID_CREDENTIALS': ErrorKind.INVALID_CREDENTIALS,
        'USER_NOT_FOUND': ErrorKind.USER_NOT_FOUND,
        'USER_BANNED': ErrorKind.USER_BANNED,
        'USER_LOGIN_DISABLED': ErrorKind.USER_LOGIN_DISABLED,
        'TOO_MANY_REQUESTS': ErrorKind.TOO_MANY_REQUESTS,
        'INTERNAL_ERROR': ErrorKind.INTERNAL_ERROR,
        'VALIDATION_ERROR': ErrorKind.VALIDATION_ERROR,
        'TOKEN_EXPIRED': ErrorKind.TOKEN_EXPIRED,
        'TOKEN_REVOKED': ErrorKind.TOKEN_REVOKED,
        'UNAUTHORIZED': ErrorKind.UNAUTHORIZED,
        'FORBIDDEN': ErrorKind.FORBIDDEN,
        'NOT_FOUND': ErrorKind.NOT_FOUND,
        'SERVICE_UNAVAILABLE': ErrorKind.SERVICE_UNAVAILABLE,
    }
    
    DESCRIPTIONS: Dict[ErrorKind, str] = {
        ErrorKind.NORMAL: 'No error.',
        ErrorKind.INPUT_INVALID: 'User name and password must not be empty.',
        ErrorKind.TOKEN_INVALID: 'No session token; log in first.',
        ErrorKind.SETTINGS_UNAVAILABLE: 'Account server is not configured.',
        ErrorKind.TRANSPORT_ERROR: 'The server could not be reached or sent an unreadable response.',
        ErrorKind.USERNAME_EXISTS: 'That user name is already taken.',
        ErrorKind.INVALID_CREDENTIALS: 'Wrong user name or password.',
        ErrorKind.USER_NOT_FOUND: 'No such user.',
        ErrorKind.USER_BANNED: 'This account has been banned.',
        ErrorKind.USER_LOGIN_DISABLED: 'Login is disabled for this account.',
        ErrorKind.TOO_MANY_REQUESTS: 'Too many requests. Please wait and try again.',
        ErrorKind.INTERNAL_ERROR: 'The server hit an internal error.',
        ErrorKind.VALIDATION_ERROR: 'The server rejected the submitted data.',
        ErrorKind.TOKEN_EXPIRED: 'Session token has expired; log in again.',
        ErrorKind.TOKEN_REVOKED: 'Session token has been revoked; log in again.',
        ErrorKind.UNAUTHORIZED: 'Not authorized.',
        ErrorKind.FORBIDDEN: 'Access denied.',
        ErrorKind.NOT_FOUND: 'Endpoint not found on the server.',
        ErrorKind.SERVICE_UNAVAILABLE: 'The account service is temporarily unavailable.',
        ErrorKind.UNKNOWN: 'Unknown server error.',
    }
    
    @classmethod
    def get_kind(cls, code: Optional[str]) -> ErrorKind:
        """Gets the error kind for a server code string."""
        if not code:
            return ErrorKind.UNKNOWN
        return cls.ERROR_CODES.get(code, ErrorKind.UNKNOWN)
    
    @classmethod
    def get_message(cls, kind: ErrorKind) -> str:
        """Gets a human readable message for an error kind."""
        return cls.DESCRIPTIONS.get(kind, f"Unknown error: {kind.value}")


_SEMANTIC = frozenset(ServerErrorCodes.ERROR_CODES.values()) | {ErrorKind.UNKNOWN}


def classify(server_error_code: Optional[str]) -> ErrorKind:
    """
    Map a server error code to an ErrorKind.
    
    Matching is exact and case-sensitive. Empty, missing, and unrecognised
    codes all map to ErrorKind.UNKNOWN.
    """
    if not isinstance(server_error_code, str):
        return ErrorKind.UNKNOWN
    return ServerErrorCodes.get_kind(server_error_code)


def describe(kind: ErrorKind) -> str:
    """Human readable sentence for an error kind."""
    return ServerErrorCodes.get_message(kind)
