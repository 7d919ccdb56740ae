"""
Custom exceptions for account client operations.

Account operations themselves never raise: they report failures through
``OperationResult.error``. These exceptions cover configuration and
programming errors, and are converted to error kinds at the session
manager boundary.
"""
from typing import Optional


class AccountException(Exception):
    """Base exception for all accountpy errors."""
    
    def __init__(self, message: str, error_code: Optional[str] = None) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            error_code: Server or local error code (if available)
        """
        self.error_code = error_code
        super().__init__(message)


class SettingsUnavailableError(AccountException):
    """Raised when no usable server configuration is available."""
    
    def __init__(self, message: str = "Account server settings are unavailable") -> None:
        super().__init__(message, error_code="SETTINGS_UNAVAILABLE")


class AccountRequestError(AccountException):
    """Exception raised when a request cannot be built or sent."""
    
    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        error_code: Optional[str] = None
    ) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            url: Target URL of the failed request
            error_code: Error code (if available)
        """
        self.url = url
        super().__init__(message, error_code)


class OperationStateError(AccountException):
    """Raised when a one-shot operation is activated more than once."""
    pass
