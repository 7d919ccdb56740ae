"""Event emitter implementation using Observer Pattern."""
from typing import Dict, List, Callable, Optional

from ...logging import get_logger


class EventEmitter:
    """
    Event emitter using Observer Pattern.
    
    An event may have zero or many handlers. Handlers run in registration
    order; a handler that raises is logged and the remaining handlers still
    run.
    """
    
    def __init__(self, logger_name: str = 'accountpy.events'):
        """Initializes event emitter."""
        self._events: Dict[str, List[Callable]] = {}
        self._logger = get_logger(logger_name)
    
    def on(self, event: str, callback: Callable) -> 'EventEmitter':
        """Registers an event handler."""
        if event not in self._events:
            self._events[event] = []
        self._events[event].append(callback)
        return self
    
    def once(self, event: str, callback: Callable) -> 'EventEmitter':
        """Registers a handler that is removed after its first call."""
        def wrapper(*args, **kwargs):
            self.off(event, wrapper)
            callback(*args, **kwargs)
        
        wrapper.listener = callback
        return self.on(event, wrapper)
    
    def emit(self, event: str, *args, **kwargs) -> int:
        """Emits an event. Returns the number of handlers called."""
        # Copy so handlers may unregister themselves while we iterate
        callbacks = list(self._events.get(event, ()))
        for callback in callbacks:
            try:
                callback(*args, **kwargs)
            except Exception:
                self._logger.exception(f"Handler for '{event}' raised")
        return len(callbacks)
    
    def off(self, event: str, callback: Optional[Callable] = None) -> 'EventEmitter':
        """Removes an event handler, including one registered with once()."""
        if event not in self._events:
            return self
        
        if callback is None:
            del self._events[event]
        else:
            self._events[event] = [
                cb for cb in self._events[event]
                if cb != callback and getattr(cb, 'listener', None) != callback
            ]
        
        return self
    
    def clear(self) -> 'EventEmitter':
        """Removes every handler of every event."""
        self._events.clear()
        return self
    
    def listener_count(self, event: str) -> int:
        """Number of handlers registered for an event."""
        return len(self._events.get(event, ()))
