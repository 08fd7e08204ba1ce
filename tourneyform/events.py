"""Event system for the registration pipeline.

This module provides the event data structure and event emitter used to
observe the form: every validation, composition, dispatch and notification
step emits a typed RegistrationEvent. Binding layers subscribe to these
events to update their own views; tests use them as an audit trail.

Payloads never carry field values, only field names, codes and ids.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from .types import EventType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistrationEvent:
    """A single event emitted by the registration runtime.

    Attributes:
        event_id: Unique event identifier (e.g., "evt_9f1c...")
        type: Event type from EventType enum
        ts: UTC timestamp when the event occurred
        payload: Optional event-specific data (field names, error codes, ids)

    Examples:
        >>> from datetime import datetime, timezone
        >>> event = RegistrationEvent(
        ...     event_id="evt_001",
        ...     type=EventType.VALIDATION_PASSED,
        ...     ts=datetime.now(timezone.utc),
        ... )
        >>> event.type.value
        'validation.passed'
    """
    event_id: str
    type: EventType
    ts: datetime
    payload: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        """Convert string type to EventType enum if needed."""
        if isinstance(self.type, str):
            object.__setattr__(self, "type", EventType(self.type))

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization.

        Timestamp is formatted as an ISO 8601 string.
        """
        result: Dict[str, Any] = {
            "eventId": self.event_id,
            "type": self.type.value,
            "ts": self.ts.isoformat(),
        }
        if self.payload is not None:
            result["payload"] = self.payload
        return result

    def to_jsonl(self) -> str:
        """Convert event to a single-line JSON string."""
        return json.dumps(self.to_dict(), separators=(',', ':'), ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RegistrationEvent":
        """Create RegistrationEvent from a dictionary with camelCase keys."""
        ts = datetime.fromisoformat(data["ts"].replace('Z', '+00:00'))
        return cls(
            event_id=data["eventId"],
            type=EventType(data["type"]),
            ts=ts,
            payload=data.get("payload"),
        )


EventListener = Callable[[RegistrationEvent], None]
"""Type alias for event listener callbacks.

Listeners are called synchronously when events are emitted.
"""


class EventEmitter:
    """Dispatches events to type-specific and wildcard listeners.

    Listeners are called in registration order, type-specific listeners first.
    A listener that raises is logged and skipped; the remaining listeners and
    the emitting pipeline are unaffected.

    Examples:
        >>> emitter = EventEmitter()
        >>> seen = []
        >>> emitter.on(EventType.FORM_RESET, seen.append)
        >>> emitter.listener_count(EventType.FORM_RESET)
        1
    """

    def __init__(self):
        self._listeners: Dict[EventType, List[EventListener]] = {}
        self._any_listeners: List[EventListener] = []

    def on(self, event_type: EventType, listener: EventListener) -> None:
        """Subscribe to a specific event type."""
        self._listeners.setdefault(event_type, []).append(listener)

    def on_any(self, listener: EventListener) -> None:
        """Subscribe to all event types."""
        self._any_listeners.append(listener)

    def off(self, event_type: EventType, listener: EventListener) -> None:
        """Unsubscribe from a specific event type. Unknown listeners are ignored."""
        listeners = self._listeners.get(event_type, [])
        if listener in listeners:
            listeners.remove(listener)

    def off_any(self, listener: EventListener) -> None:
        """Unsubscribe from the wildcard subscription. Unknown listeners are ignored."""
        if listener in self._any_listeners:
            self._any_listeners.remove(listener)

    def emit(self, event: RegistrationEvent) -> None:
        """Dispatch an event to all registered listeners."""
        for listener in self._listeners.get(event.type, []) + self._any_listeners:
            try:
                listener(event)
            except Exception:
                logger.exception("Listener %r failed on %s", listener, event.type.value)

    def clear(self) -> None:
        """Remove all event listeners."""
        self._listeners.clear()
        self._any_listeners.clear()

    def listener_count(self, event_type: Optional[EventType] = None) -> int:
        """Count listeners for one event type, or all listeners when None."""
        if event_type is not None:
            return len(self._listeners.get(event_type, []))
        return len(self._any_listeners) + sum(len(l) for l in self._listeners.values())


__all__ = [
    "RegistrationEvent",
    "EventType",
    "EventListener",
    "EventEmitter",
]
