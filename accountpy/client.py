"""
AccountClient - High-level async client for the account server.

Example:
    >>> async with AccountClient("https://api.example.com") as client:
    ...     result = await client.login("alice", "secret")
    ...     if result.succeeded:
    ...         print(result.user.name, client.token)
"""
from dataclasses import replace
from typing import Callable, Optional

from .core.api import (
    APIConfig,
    TimeoutConfig,
    Credentials,
    OperationResult,
    RequestDispatcher,
)
from .core.account import AccountSessionManager, ResultCallback
from .core.operations import (
    RegisterOperation,
    LoginOperation,
    AuthenticateOperation,
    PingOperation,
)
from .core.logging import get_logger

logger = get_logger('accountpy.client')


class AccountClient:
    """
    High-level async client combining configuration, dispatcher and
    session manager.

    Basic usage:
        >>> client = AccountClient("https://api.example.com", timeout=10)
        >>> await client.register("alice", "secret")
        >>> await client.login("alice", "secret")
        >>> me = await client.authenticate()
        >>> client.logout()
        >>> await client.close()

    With custom configuration:
        >>> config = APIConfig.insecure(base_url="https://localhost:8443")
        >>> async with AccountClient(config=config) as client:
        ...     latency = await client.ping()
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        config: Optional[APIConfig] = None,
        timeout: Optional[float] = None,
        dispatcher: Optional[RequestDispatcher] = None
    ):
        """
        Initialize client.

        Args:
            base_url: Account server URL (overrides config.base_url)
            config: API configuration (read from environment if omitted)
            timeout: Request timeout in seconds (overrides config.timeout.total)
            dispatcher: Custom dispatcher, e.g. one sharing an HTTP session
        """
        self._config = replace(config) if config else APIConfig.from_env()
        if base_url:
            self._config.base_url = base_url
        if timeout is not None:
            self._config.timeout = TimeoutConfig(total=timeout)

        self._owns_dispatcher = dispatcher is None
        self._dispatcher = dispatcher or RequestDispatcher(self._config)
        self._manager = AccountSessionManager(self._config, dispatcher=self._dispatcher)
        logger.debug(f"Client for {self._config.base_url or '<unconfigured>'} (timeout {self._config.timeout.total}s)")

    @property
    def config(self) -> APIConfig:
        return self._config

    @property
    def session(self) -> AccountSessionManager:
        """The underlying session manager."""
        return self._manager

    @property
    def token(self) -> str:
        return self._manager.token

    def on_token_changed(self, callback: Callable[[], None]) -> 'AccountClient':
        self._manager.on_token_changed(callback)
        return self

    # ==================== Account ====================

    async def register(
        self,
        name: str,
        password: str,
        callback: Optional[ResultCallback] = None
    ) -> OperationResult:
        """Register a new user."""
        return await self._manager.register(Credentials(name, password), callback=callback)

    async def login(
        self,
        name: str,
        password: str,
        callback: Optional[ResultCallback] = None
    ) -> OperationResult:
        """Log in; the token is kept for authenticate()."""
        return await self._manager.login(Credentials(name, password), callback=callback)

    async def authenticate(self, callback: Optional[ResultCallback] = None) -> OperationResult:
        """Validate the current token."""
        return await self._manager.authenticate(callback=callback)

    def logout(self):
        self._manager.logout()

    def set_token(self, token: str):
        """Use a token obtained elsewhere (e.g. a previous run)."""
        self._manager.set_token(token)

    async def ping(self, url: Optional[str] = None, timeout: Optional[float] = None) -> float:
        """
        Measure server latency.

        Args:
            url: URL to probe (defaults to the base URL)
            timeout: Seconds before giving up

        Returns:
            Latency in milliseconds, or -1.0 on failure
        """
        return await self.ping_operation(url, timeout)

    # ==================== Operation objects ====================

    def register_operation(self, name: str, password: str) -> RegisterOperation:
        return RegisterOperation(self._manager, Credentials(name, password))

    def login_operation(self, name: str, password: str) -> LoginOperation:
        return LoginOperation(self._manager, Credentials(name, password))

    def authenticate_operation(self) -> AuthenticateOperation:
        return AuthenticateOperation(self._manager)

    def ping_operation(self, url: Optional[str] = None, timeout: Optional[float] = None) -> PingOperation:
        target = url or self._config.base_url
        if not target:
            raise ValueError("No URL to ping and no base URL configured")
        return PingOperation(target, timeout=timeout, dispatcher=self._dispatcher, config=self._config)

    # ==================== Lifecycle ====================

    async def close(self):
        """Close the client and release its HTTP session."""
        await self._manager.close()
        if self._owns_dispatcher:
            await self._dispatcher.close()

    async def __aenter__(self) -> 'AccountClient':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def __repr__(self) -> str:
        state = "authenticated" if self._manager.has_token else "anonymous"
        return f"<AccountClient {self._config.base_url or '<unconfigured>'} {state}>"
