"""
Request dispatcher.

Issues one HTTP request at a time on behalf of the account client and
reports exactly one terminal outcome per request. Transport problems
(DNS, connect, TLS, timeout, unreadable body) never raise; they are
reported as a failed TransportOutcome.
"""
import asyncio
import time
from dataclasses import dataclass
from typing import Callable, Optional

import aiohttp

from .request_builder import HttpRequest
from ..config import APIConfig, DEFAULT_TIMEOUT
from ..session import SessionFactory
from ...exceptions import AccountRequestError
from ...logging import get_logger

Continuation = Callable[['TransportOutcome'], None]


@dataclass(frozen=True)
class TransportOutcome:
    """
    Terminal event of one request.

    ``success`` is False when the request never completed; ``status`` and
    ``body`` are only meaningful when it is True.
    """
    success: bool
    status: int = 0
    body: bytes = b''
    elapsed: float = 0.0
    error: Optional[str] = None

    @classmethod
    def failure(cls, error: str, elapsed: float = 0.0) -> 'TransportOutcome':
        return cls(success=False, elapsed=elapsed, error=error)


class RequestDispatcher:
    """
    Sends HttpRequests over an aiohttp session.

    The HTTP session is injected or created lazily from the configuration.
    A session created here is closed by close(); an injected one belongs
    to the caller.

    Example:
        >>> async with RequestDispatcher(config) as dispatcher:
        ...     outcome = await dispatcher.send(request)
    """

    def __init__(
        self,
        config: Optional[APIConfig] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize dispatcher.

        Args:
            config: API configuration (uses defaults if not provided)
            session: HTTP session to use instead of creating one
        """
        self._config = config or APIConfig.default()
        self._session = session
        self._owns_session = session is None
        self._closed = False
        self._logger = get_logger('accountpy.api')

    @property
    def config(self) -> APIConfig:
        """Get current configuration."""
        return self._config

    @property
    def closed(self) -> bool:
        return self._closed

    async def __aenter__(self) -> 'RequestDispatcher':
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open."""
        if self._session is None or (self._owns_session and self._session.closed):
            self._session = SessionFactory.create_async_session(self._config)
            self._owns_session = True
        return self._session

    async def close(self):
        """Close dispatcher and release resources it created."""
        self._closed = True

        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    def _resolve_timeout(self, request: HttpRequest) -> float:
        if request.timeout is not None:
            return request.timeout
        if self._config.timeout.total:
            return self._config.timeout.total
        return DEFAULT_TIMEOUT

    async def _perform(self, request: HttpRequest, timeout: float):
        session = await self._ensure_session()
        proxy = self._config.proxy.to_aiohttp_proxy() if self._config.proxy else None

        async with session.request(
            request.method,
            request.url,
            headers=request.headers,
            data=request.body,
            timeout=self._config.timeout.to_aiohttp_timeout(timeout),
            proxy=proxy
        ) as response:
            body = await response.read()
            return response.status, body

    async def send(self, request: HttpRequest) -> TransportOutcome:
        """
        Send a request and wait for its outcome.

        Args:
            request: Request to send

        Returns:
            TransportOutcome; success is False on any transport failure

        Raises:
            AccountRequestError: If the dispatcher has been closed
        """
        if self._closed:
            raise AccountRequestError("Dispatcher is closed", url=request.url)

        timeout = self._resolve_timeout(request)
        self._logger.debug(f"{request.method} {request.url} (timeout {timeout}s)")
        started = time.perf_counter()

        try:
            # Outer deadline in case the transport does not honour its own
            status, body = await asyncio.wait_for(self._perform(request, timeout), timeout=timeout)
        except asyncio.TimeoutError:
            elapsed = time.perf_counter() - started
            self._logger.error(f"Timeout after {elapsed:.2f}s: {request.method} {request.url}")
            return TransportOutcome.failure("timeout", elapsed)
        except (aiohttp.ClientError, OSError) as e:
            elapsed = time.perf_counter() - started
            self._logger.error(f"Network error: {request.method} {request.url}: {e}")
            return TransportOutcome.failure(str(e) or type(e).__name__, elapsed)

        elapsed = time.perf_counter() - started
        self._logger.debug(f"HTTP {status} from {request.url} in {elapsed * 1000:.0f}ms")
        return TransportOutcome(success=True, status=status, body=body, elapsed=elapsed)

    def dispatch(self, request: HttpRequest, continuation: Continuation) -> asyncio.Task:
        """
        Start a request and return immediately.

        ``continuation`` is called exactly once with the TransportOutcome,
        including when the task is cancelled or send() raises. Must be
        called from a running event loop.

        Args:
            request: Request to send
            continuation: Receives the terminal outcome

        Returns:
            The task running the request
        """
        loop = asyncio.get_running_loop()
        task = loop.create_task(self.send(request))
        delivered = False

        def deliver(done: asyncio.Task):
            nonlocal delivered
            if delivered:
                return
            delivered = True

            if done.cancelled():
                outcome = TransportOutcome.failure("cancelled")
            elif done.exception() is not None:
                outcome = TransportOutcome.failure(str(done.exception()))
            else:
                outcome = done.result()

            try:
                continuation(outcome)
            except Exception:
                self._logger.exception(f"Continuation for {request.url} raised")

        task.add_done_callback(deliver)
        return task
