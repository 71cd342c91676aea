import inspect
import logging
from typing import Callable, Dict, List

logger = logging.getLogger(__name__)


class EventEmitter:
    """Simple event emitter for upload events."""

    def __init__(self):
        self._listeners: Dict[str, List[Callable]] = {}

    def on(self, event_name: str, callback: Callable):
        """Subscribe to an event."""
        if event_name not in self._listeners:
            self._listeners[event_name] = []
        if callback not in self._listeners[event_name]:
            self._listeners[event_name].append(callback)

    async def emit(self, event_name: str, *args, **kwargs):
        """Emit an event to all listeners; listener errors are logged, not raised."""
        for callback in self._listeners.get(event_name, [])[:]:
            try:
                outcome = callback(*args, **kwargs)
                if inspect.isawaitable(outcome):
                    await outcome
            except Exception as e:
                logger.error(f"Error in event listener for {event_name}: {e}")
