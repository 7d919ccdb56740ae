"""
accountpy - Async Python client for an account server.

Usage:
    >>> from accountpy import AccountClient
    >>> 
    >>> async with AccountClient("https://api.example.com") as client:
    ...     result = await client.login("alice", "secret")
    ...     print(result.error, result.user)
"""
import logging
from .client import AccountClient

# Configuration
from .core.api import (
    APIConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    SettingsProvider,
    ErrorKind,
    classify,
    describe,
    Credentials,
    UserRecord,
    OperationKind,
    OperationResult,
    RequestDispatcher,
    ResponseDecoder,
)

# Session and operations
from .core.account import AccountSessionManager
from .core.operations import (
    RegisterOperation,
    LoginOperation,
    AuthenticateOperation,
    PingOperation,
    OperationState,
)
from .core.exceptions import (
    AccountException,
    SettingsUnavailableError,
    AccountRequestError,
    OperationStateError,
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for accountpy modules.
    
    This ensures that all accountpy loggers are properly configured
    to show log messages at the specified level.
    
    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'accountpy',
        'accountpy.client',
        'accountpy.api',
        'accountpy.decoder',
        'accountpy.account',
        'accountpy.operations',
        'accountpy.events',
        'accountpy.cli',
    ]
    
    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        # Ensure propagation is enabled
        logger.propagate = True


__all__ = [
    'AccountClient',
    'AccountSessionManager',
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'SettingsProvider',
    'ErrorKind',
    'classify',
    'describe',
    'Credentials',
    'UserRecord',
    'OperationKind',
    'OperationResult',
    'RequestDispatcher',
    'ResponseDecoder',
    'RegisterOperation',
    'LoginOperation',
    'AuthenticateOperation',
    'PingOperation',
    'OperationState',
    'AccountException',
    'SettingsUnavailableError',
    'AccountRequestError',
    'OperationStateError',
    'setup_logging',
]
