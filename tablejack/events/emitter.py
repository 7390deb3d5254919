"""
Event system for the tablejack engine.

The table announces what happens during a round on an `EventEmitter`; hosts
and statistics collectors subscribe to the event names they care about, or to
everything with `on_any`. Listeners run synchronously, in subscription order,
inside the intent that produced the event.
"""

from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
import threading
import logging
from enum import Enum

logger = logging.getLogger("tablejack.events")

EventData = Dict[str, Any]
EventName = Union[str, Enum]


def _event_name(event_type: EventName) -> str:
    return event_type.name if isinstance(event_type, Enum) else event_type


class EventEmitter:
    """
    Synchronous publish/subscribe hub.

    Listeners for a single event receive the event data; ``on_any`` listeners
    receive an ``(event_name, data)`` tuple. A listener that raises is logged
    and the remaining listeners still run.
    """

    def __init__(self):
        self._listeners: Dict[str, List[Callable]] = defaultdict(list)
        self._any_listeners: List[Callable] = []
        self._lock = threading.RLock()

    def on(self, event_type: EventName, callback: Callable[[EventData], None]) -> Callable:
        """
        Subscribe to one event type.

        Args:
            event_type: Event name or `EngineEventType` member
            callback: Called with the event data

        Returns:
            Function that removes the subscription
        """
        return self._subscribe(self._listeners[_event_name(event_type)], callback)

    def on_any(self, callback: Callable[[Tuple[str, EventData]], None]) -> Callable:
        """
        Subscribe to every event.

        Returns:
            Function that removes the subscription
        """
        return self._subscribe(self._any_listeners, callback)

    def emit(self, event_type: EventName, data: EventData) -> None:
        """Deliver ``data`` to the listeners of ``event_type`` and to ``on_any`` listeners."""
        name = _event_name(event_type)

        with self._lock:
            calls = [(callback, data) for callback in self._listeners.get(name, ())]
            calls.extend((callback, (name, data)) for callback in self._any_listeners)

        # Outside the lock so listeners may subscribe or emit
        for callback, payload in calls:
            try:
                callback(payload)
            except Exception as e:
                logger.error(f"Error in event handler for {name}: {e}", exc_info=True)

    def listener_count(self, event_type: Optional[EventName] = None) -> int:
        """Number of listeners for ``event_type``, or of ``on_any`` listeners when None."""
        with self._lock:
            if event_type is None:
                return len(self._any_listeners)
            return len(self._listeners.get(_event_name(event_type), ()))

    def _subscribe(self, bucket: List[Callable], callback: Callable) -> Callable:
        with self._lock:
            bucket.append(callback)

        def unsubscribe():
            with self._lock:
                if callback in bucket:
                    bucket.remove(callback)

        return unsubscribe


class EventBus:
    """
    Process-wide default emitter.

    Tables and engines built without an explicit emitter share this one.
    """

    _instance: Optional[EventEmitter] = None
    _lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> EventEmitter:
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = EventEmitter()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the shared emitter; the next `get_instance` creates a fresh one."""
        with cls._lock:
            cls._instance = None


class EngineEventType(Enum):
    """
    Event types emitted by the table and its engine host.
    """

    # Engine lifecycle
    ENGINE_INIT = "engine_init"
    ENGINE_SHUTDOWN = "engine_shutdown"

    # Round lifecycle
    ROUND_STARTED = "round_started"
    ROUND_ENDED = "round_ended"

    PLAYER_BET = "player_bet"
    PLAYER_ACTION = "player_action"

    CARD_DEALT = "card_dealt"
    CARD_REVEALED = "card_revealed"

    HAND_BUSTED = "hand_busted"
    DEALER_ACTION = "dealer_action"

    BANKROLL_UPDATED = "bankroll_updated"
    SHUFFLE = "shuffle"

    # Validation failures surfaced to the player
    WARNING = "warning"
