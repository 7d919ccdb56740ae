"""Server latency probe."""
import asyncio
import time
from typing import Optional

from .base import AsyncOperation
from ..api.config import APIConfig
from ..api.request.dispatcher import RequestDispatcher, TransportOutcome
from ..api.request.request_builder import RequestBuilder

# Payload of the failed event
PING_FAILED = -1.0


class PingOperation(AsyncOperation):
    """
    Measure round-trip time of one GET request.
    
    ``succeeded`` fires with the elapsed milliseconds when the server
    answered at all (any HTTP status); ``failed`` fires with -1.0 when the
    request did not complete, including on timeout.
    
    Example:
        >>> latency = await PingOperation('https://api.example.com/health', timeout=2.0)
    """
    
    def __init__(
        self,
        url: str,
        timeout: Optional[float] = None,
        dispatcher: Optional[RequestDispatcher] = None,
        config: Optional[APIConfig] = None
    ):
        """
        Args:
            url: URL to probe
            timeout: Seconds before the probe fails (config timeout if omitted)
            dispatcher: Dispatcher to send through (a temporary one is created if omitted)
            config: Configuration for the temporary dispatcher and default timeout
        """
        super().__init__()
        self._url = url
        self._timeout = timeout
        self._config = config or (dispatcher.config if dispatcher else APIConfig.default())
        self._dispatcher = dispatcher
    
    @property
    def url(self) -> str:
        return self._url
    
    async def _run(self):
        dispatcher = self._dispatcher or RequestDispatcher(self._config)
        request = RequestBuilder(self._config).ping(self._url, self._timeout)
        
        done = asyncio.get_running_loop().create_future()
        
        def continuation(outcome: TransportOutcome):
            if not done.done():
                done.set_result((outcome, time.perf_counter()))
        
        started = time.perf_counter()
        try:
            dispatcher.dispatch(request, continuation)
            outcome, finished = await done
        finally:
            if self._dispatcher is None:
                await dispatcher.close()
        
        if outcome.success:
            latency = (finished - started) * 1000.0
            self._logger.debug(f"Ping {self._url}: {latency:.1f}ms (HTTP {outcome.status})")
            self._finish(True, latency)
        else:
            self._logger.info(f"Ping {self._url} failed: {outcome.error}")
            self._finish(False, PING_FAILED)
    
    def _default_failure(self) -> float:
        return PING_FAILED
    
    def _release(self):
        self._dispatcher = None
