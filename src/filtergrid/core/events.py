import logging
from typing import Callable, Dict, List

logger = logging.getLogger(__name__)

class EventEmitter:
    """
    Simple event emitter used by the core in place of Qt Signals.
    Callbacks run synchronously in the emitter's thread, in subscription order.
    Unlike Qt slots, an exception raised by a listener reaches the caller of emit().
    The remaining listeners still run first; the first exception is then re-raised.
    """
    def __init__(self):
        self._listeners: Dict[str, List[Callable]] = {}

    def on(self, event_name: str, callback: Callable):
        """Register a callback for an event."""
        if event_name not in self._listeners:
            self._listeners[event_name] = []
        self._listeners[event_name].append(callback)

    def off(self, event_name: str, callback: Callable) -> bool:
        """Unregister a callback. Returns False if it was not registered."""
        if event_name in self._listeners:
            try:
                self._listeners[event_name].remove(callback)
                return True
            except ValueError:
                pass
        return False

    def listener_count(self, event_name: str) -> int:
        return len(self._listeners.get(event_name, []))

    def emit(self, event_name: str, *args, **kwargs):
        """Emit an event, calling all registered listeners."""
        error = None
        # Copy so a listener may unsubscribe while we iterate
        for callback in list(self._listeners.get(event_name, [])):
            try:
                callback(*args, **kwargs)
            except Exception as e:
                logger.debug(f"Listener for '{event_name}' raised {type(e).__name__}: {e}")
                if error is None:
                    error = e
        if error is not None:
            raise error

    def clear(self):
        """Remove all listeners."""
        self._listeners.clear()
