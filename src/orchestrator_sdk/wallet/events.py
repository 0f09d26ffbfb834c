import asyncio
import inspect
import logging
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

Listener = Callable[[Any], Any]


class EventTarget:
    """
    Listener registry for host notifications such as a wallet's keystore change.

    Listeners may be plain functions or coroutine functions. A listener that
    raises is logged and does not prevent the remaining listeners from running.
    """

    def __init__(self):
        self._listeners: Dict[str, List[Listener]] = {}

    def add_event_listener(self, event_name: str, listener: Listener) -> None:
        listeners = self._listeners.setdefault(event_name, [])
        if listener not in listeners:
            listeners.append(listener)

    def remove_event_listener(self, event_name: str, listener: Listener) -> None:
        listeners = self._listeners.get(event_name)
        if not listeners or listener not in listeners:
            return
        listeners.remove(listener)
        if not listeners:
            del self._listeners[event_name]

    def listener_count(self, event_name: str) -> int:
        return len(self._listeners.get(event_name, []))

    async def dispatch_event(self, event_name: str, detail: Optional[Any] = None) -> int:
        """Call every listener of `event_name` in registration order. Returns how many ran."""
        listeners = list(self._listeners.get(event_name, []))
        for listener in listeners:
            try:
                result = listener(detail)
                if inspect.isawaitable(result):
                    await result
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(f"Listener for {event_name} failed: {e}")
        return len(listeners)
