"""
Account session manager.

Runs register, login and authenticate against the account server and owns
the session token. Every operation completes with an OperationResult; no
exception escapes to the caller.
"""
import asyncio
import threading
from typing import Callable, Optional, Union

from ..api.config import APIConfig, SettingsProvider, ConfigSource
from ..api.errors import ErrorKind, classify
from ..api.events import EventEmitter
from ..api.models import Credentials, OperationKind, OperationResult
from ..api.request.dispatcher import RequestDispatcher, TransportOutcome
from ..api.request.request_builder import HttpRequest, RequestBuilder
from ..api.request.response_handler import DecodedPayload, Malformed, ResponseDecoder
from ..exceptions import SettingsUnavailableError
from ..logging import get_logger, mask_token

ResultCallback = Callable[[OperationResult], None]

# Event names
TOKEN_CHANGED = 'token_changed'
RESULT = 'result'


class AccountSessionManager:
    """
    Orchestrates account operations and holds the session token.

    Each network operation runs validate -> dispatch -> decode -> classify
    -> state update -> notify. Operations are coroutines returning the
    OperationResult; each also accepts ``callback=`` which receives the
    same result before the coroutine returns.

    Events:
        token_changed: fired with no arguments on every token write
        result: fired with the OperationResult of every finished operation

    Example:
        >>> manager = AccountSessionManager(APIConfig(base_url='https://api.example.com'))
        >>> manager.on('token_changed', lambda: print('token changed'))
        >>> result = await manager.login(Credentials('alice', 'secret'))
        >>> if result.succeeded:
        ...     me = await manager.authenticate()
    """

    def __init__(
        self,
        settings: Union[SettingsProvider, ConfigSource],
        dispatcher: Optional[RequestDispatcher] = None,
        decoder: Optional[ResponseDecoder] = None
    ):
        """
        Initialize session manager.

        Args:
            settings: APIConfig, settings provider, or callable returning a config
            dispatcher: Request dispatcher (created from settings on first use if omitted)
            decoder: Response decoder
        """
        self._settings = SettingsProvider.of(settings)
        self._dispatcher = dispatcher
        self._owns_dispatcher = dispatcher is None
        self._decoder = decoder or ResponseDecoder()

        self._token = ''
        self._token_lock = threading.Lock()

        self._events = EventEmitter('accountpy.account')
        self._logger = get_logger('accountpy.account')

    # ==================== Events ====================

    def on(self, event: str, callback: Callable) -> 'AccountSessionManager':
        """Register an event handler."""
        self._events.on(event, callback)
        return self

    def once(self, event: str, callback: Callable) -> 'AccountSessionManager':
        """Register an event handler that runs once."""
        self._events.once(event, callback)
        return self

    def off(self, event: str, callback: Optional[Callable] = None) -> 'AccountSessionManager':
        """Remove an event handler."""
        self._events.off(event, callback)
        return self

    def on_token_changed(self, callback: Callable[[], None]) -> 'AccountSessionManager':
        """Register a handler for token_changed."""
        return self.on(TOKEN_CHANGED, callback)

    # ==================== Token ====================

    @property
    def token(self) -> str:
        """Current session token ('' when absent)."""
        with self._token_lock:
            return self._token

    @property
    def has_token(self) -> bool:
        """Whether a non-empty token is held."""
        return bool(self.token)

    def set_token(self, token: Optional[str]):
        """Replace the session token and notify, even if the value is unchanged."""
        with self._token_lock:
            self._token = token or ''

        self._logger.debug(f"Session token set to {mask_token(token or '')}")
        self._events.emit(TOKEN_CHANGED)

    def clear_token(self):
        """Set the token to '' and notify."""
        self.set_token('')

    def logout(self):
        """Forget the session token. No request is sent."""
        self._logger.info("Logged out")
        self.clear_token()

    # ==================== Operations ====================

    async def register(
        self,
        credentials: Credentials,
        callback: Optional[ResultCallback] = None
    ) -> OperationResult:
        """
        Create an account.

        Args:
            credentials: Name and password of the new user
            callback: Receives the result

        Returns:
            OperationResult with kind REGISTER
        """
        if credentials is None or not credentials.is_complete():
            return self._reject(OperationKind.REGISTER, ErrorKind.INPUT_INVALID, callback)

        return await self._execute(
            OperationKind.REGISTER,
            lambda builder: builder.register(credentials),
            callback
        )

    async def login(
        self,
        credentials: Credentials,
        callback: Optional[ResultCallback] = None
    ) -> OperationResult:
        """
        Log in and store the returned session token.

        The token is stored, and token_changed fired, before the callback
        runs.

        Args:
            credentials: Name and password
            callback: Receives the result

        Returns:
            OperationResult with kind LOGIN and the token on success
        """
        if credentials is None or not credentials.is_complete():
            return self._reject(OperationKind.LOGIN, ErrorKind.INPUT_INVALID, callback)

        return await self._execute(
            OperationKind.LOGIN,
            lambda builder: builder.login(credentials),
            callback,
            on_success=self._login_succeeded
        )

    async def authenticate(self, callback: Optional[ResultCallback] = None) -> OperationResult:
        """
        Validate the current session token with the server.

        Returns:
            OperationResult with kind AUTH; TOKEN_INVALID without a request
            when there is no token
        """
        token = self.token
        if not token:
            return self._reject(OperationKind.AUTH, ErrorKind.TOKEN_INVALID, callback)

        return await self._execute(
            OperationKind.AUTH,
            lambda builder: builder.authenticate(token),
            callback
        )

    # ==================== Pipeline ====================

    async def _execute(
        self,
        kind: OperationKind,
        build_request: Callable[[RequestBuilder], HttpRequest],
        callback: Optional[ResultCallback],
        on_success: Optional[Callable[[DecodedPayload], OperationResult]] = None
    ) -> OperationResult:
        try:
            config = self._settings.get()
        except SettingsUnavailableError as e:
            self._logger.warning(f"{kind.value}: {e}")
            return self._reject(kind, ErrorKind.SETTINGS_UNAVAILABLE, callback, str(e))

        request = build_request(RequestBuilder(config))
        self._logger.debug(f"{kind.value}: {request.method} {request.url}")

        try:
            outcome = await self._dispatch(request, config)
            result = self._to_result(kind, outcome, on_success)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self._logger.exception(f"{kind.value}: request pipeline failed")
            result = OperationResult.failure(kind, ErrorKind.TRANSPORT_ERROR, str(e))

        return self._complete(result, callback)

    def _get_dispatcher(self, config: APIConfig) -> RequestDispatcher:
        if self._dispatcher is None:
            self._dispatcher = RequestDispatcher(config)
            self._owns_dispatcher = True
        return self._dispatcher

    async def _dispatch(self, request: HttpRequest, config: APIConfig) -> TransportOutcome:
        """Hand the request to the dispatcher and wait for its single outcome."""
        done = asyncio.get_running_loop().create_future()

        def continuation(outcome: TransportOutcome):
            if not done.done():
                done.set_result(outcome)

        self._get_dispatcher(config).dispatch(request, continuation)
        return await done

    def _to_result(
        self,
        kind: OperationKind,
        outcome: TransportOutcome,
        on_success: Optional[Callable[[DecodedPayload], OperationResult]]
    ) -> OperationResult:
        if not outcome.success:
            self._logger.warning(f"{kind.value}: transport failure ({outcome.error})")
            return OperationResult.failure(kind, ErrorKind.TRANSPORT_ERROR, outcome.error or '')

        decoded = self._decoder.decode(outcome.body, outcome.status)
        if isinstance(decoded, Malformed):
            return OperationResult.failure(kind, ErrorKind.TRANSPORT_ERROR, decoded.reason)

        payload = decoded.payload
        if not payload.is_success:
            error = classify(payload.error)
            self._logger.info(
                f"{kind.value}: server returned HTTP {payload.status} {payload.error or '<no code>'} -> {error.name}"
            )
            return OperationResult.failure(kind, error, payload.message)

        if on_success is not None:
            return on_success(payload)
        return OperationResult.success(kind, payload.user, message=payload.message)

    def _login_succeeded(self, payload: DecodedPayload) -> OperationResult:
        if payload.token:
            self.set_token(payload.token)
        self._logger.info(f"Logged in as {payload.user.name!r} (id {payload.user.id})")
        return OperationResult.success(
            OperationKind.LOGIN,
            payload.user,
            token=payload.token,
            message=payload.message
        )

    def _reject(
        self,
        kind: OperationKind,
        error: ErrorKind,
        callback: Optional[ResultCallback],
        message: str = ''
    ) -> OperationResult:
        """Complete with a local error; nothing is sent."""
        self._logger.debug(f"{kind.value}: rejected locally with {error.name}")
        return self._complete(OperationResult.failure(kind, error, message), callback)

    def _complete(self, result: OperationResult, callback: Optional[ResultCallback]) -> OperationResult:
        if callback is not None:
            try:
                callback(result)
            except Exception:
                self._logger.exception(f"{result.kind.value}: result callback raised")

        self._events.emit(RESULT, result)
        return result

    # ==================== Lifecycle ====================

    async def close(self):
        """Close the dispatcher if this manager created it."""
        if self._owns_dispatcher and self._dispatcher is not None:
            await self._dispatcher.close()
            self._dispatcher = None

    async def __aenter__(self) -> 'AccountSessionManager':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
