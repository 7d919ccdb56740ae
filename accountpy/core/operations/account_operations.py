"""Operation objects wrapping AccountSessionManager calls."""
from typing import Optional

from .base import AsyncOperation
from ..account.session_manager import AccountSessionManager
from ..api.errors import ErrorKind
from ..api.models import Credentials, OperationResult


class AccountOperation(AsyncOperation):
    """
    One account call as a one-shot operation.
    
    ``succeeded`` fires with the OperationResult when its error is NORMAL,
    ``failed`` fires with it otherwise. Without a session manager the
    operation fails with the default (invalid) OperationResult.
    """
    
    def __init__(self, manager: Optional[AccountSessionManager]):
        super().__init__()
        self._manager = manager
    
    async def _run(self):
        manager = self._manager
        if manager is None:
            self._logger.warning(f"{type(self).__name__}: no session manager")
            self._finish(False, OperationResult())
            return
        
        await self._call(manager)
    
    async def _call(self, manager: AccountSessionManager):
        raise NotImplementedError
    
    def _on_result(self, result: OperationResult):
        self._finish(result.error is ErrorKind.NORMAL, result)
    
    def _default_failure(self) -> OperationResult:
        return OperationResult()
    
    def _release(self):
        self._manager = None


class RegisterOperation(AccountOperation):
    """Register a user."""
    
    def __init__(self, manager: Optional[AccountSessionManager], credentials: Credentials):
        super().__init__(manager)
        self._credentials = credentials
    
    async def _call(self, manager: AccountSessionManager):
        await manager.register(self._credentials, callback=self._on_result)
    
    def _release(self):
        super()._release()
        self._credentials = None


class LoginOperation(AccountOperation):
    """Log a user in; the manager keeps the returned token."""
    
    def __init__(self, manager: Optional[AccountSessionManager], credentials: Credentials):
        super().__init__(manager)
        self._credentials = credentials
    
    async def _call(self, manager: AccountSessionManager):
        await manager.login(self._credentials, callback=self._on_result)
    
    def _release(self):
        super()._release()
        self._credentials = None


class AuthenticateOperation(AccountOperation):
    """Check the manager's current token with the server."""
    
    async def _call(self, manager: AccountSessionManager):
        await manager.authenticate(callback=self._on_result)
