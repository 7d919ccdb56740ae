"""One-shot asynchronous operation objects."""
import asyncio
from enum import Enum
from typing import Any, Callable, Generator, Optional

from ..api.events import EventEmitter
from ..exceptions import OperationStateError
from ..logging import get_logger

# Terminal events
SUCCEEDED = 'succeeded'
FAILED = 'failed'


class OperationState(Enum):
    PENDING = 'pending'
    RUNNING = 'running'
    DISPOSED = 'disposed'


class AsyncOperation:
    """
    Base for fire-once operations with separate success/failure streams.
    
    Exactly one of ``succeeded`` or ``failed`` fires, once. Right after
    that the operation disposes itself: handlers are dropped, held
    references are released and the state becomes DISPOSED. An operation
    cannot be activated twice.
    
    Operations are awaitable; awaiting activates a pending operation and
    returns the payload of the terminal event.
    
    Example:
        >>> op = SomeOperation(...)
        >>> op.on_success(show).on_failure(report)
        >>> op.activate()
    """
    
    def __init__(self):
        self._events = EventEmitter('accountpy.operations')
        self._logger = get_logger('accountpy.operations')
        self._state = OperationState.PENDING
        self._fired = False
        self._task: Optional[asyncio.Task] = None
        self._future: Optional[asyncio.Future] = None
    
    # ==================== Subscription ====================
    
    def on(self, event: str, callback: Callable[[Any], None]) -> 'AsyncOperation':
        """Register a handler for ``succeeded`` or ``failed``."""
        if event not in (SUCCEEDED, FAILED):
            raise ValueError(f"Unknown operation event: {event}")
        if self._state is OperationState.DISPOSED:
            raise OperationStateError(f"{type(self).__name__} has already finished")
        self._events.on(event, callback)
        return self
    
    def on_success(self, callback: Callable[[Any], None]) -> 'AsyncOperation':
        return self.on(SUCCEEDED, callback)
    
    def on_failure(self, callback: Callable[[Any], None]) -> 'AsyncOperation':
        return self.on(FAILED, callback)
    
    # ==================== State ====================
    
    @property
    def state(self) -> OperationState:
        return self._state
    
    @property
    def done(self) -> bool:
        return self._fired
    
    # ==================== Lifecycle ====================
    
    def activate(self) -> asyncio.Task:
        """
        Start the operation. Must be called from a running event loop.
        
        Raises:
            OperationStateError: If the operation was already activated
        """
        if self._state is not OperationState.PENDING:
            raise OperationStateError(f"{type(self).__name__} can only be activated once")
        
        loop = asyncio.get_running_loop()
        self._state = OperationState.RUNNING
        self._future = loop.create_future()
        self._task = loop.create_task(self._guarded_run())
        return self._task
    
    def __await__(self) -> Generator[Any, None, Any]:
        if self._state is OperationState.PENDING:
            self.activate()
        return self._future.__await__()
    
    async def _guarded_run(self):
        try:
            await self._run()
        except asyncio.CancelledError:
            self._finish(False, self._default_failure())
            raise
        except Exception:
            self._logger.exception(f"{type(self).__name__} failed unexpectedly")
        
        if not self._fired:
            self._finish(False, self._default_failure())
    
    async def _run(self):
        """Do the work and call _finish exactly once."""
        raise NotImplementedError
    
    def _default_failure(self) -> Any:
        """Payload of the failed event when no real result exists."""
        return None
    
    def _finish(self, succeeded: bool, payload: Any) -> bool:
        """Fire the terminal event and dispose. Later calls are ignored."""
        if self._fired:
            return False
        self._fired = True
        
        self._events.emit(SUCCEEDED if succeeded else FAILED, payload)
        if self._future is not None and not self._future.done():
            self._future.set_result(payload)
        
        self._dispose()
        return True
    
    def _dispose(self):
        self._events.clear()
        self._release()
        self._state = OperationState.DISPOSED
    
    def _release(self):
        """Drop references held for the duration of the operation."""
        pass
