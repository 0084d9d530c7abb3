"""
Event Bus - Notification dispatcher for governance state changes.

Enables:
- One-way notifications for proposals, votes, execution and parameter changes
- Event filtering
- Event history

Dispatch is synchronous and ordered: handlers run in subscription order
inside the emitting call, after that call has committed its state.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Set, Union
import hashlib
import itertools
import logging

logger = logging.getLogger(__name__)

_sequence = itertools.count()


class EventType(Enum):
    """Governance notification types."""
    PROPOSAL_CREATED = "governance.proposal_created"
    VOTE_CAST = "governance.vote_cast"
    PROPOSAL_EXECUTED = "governance.proposal_executed"

    VOTING_DURATION_UPDATED = "governance.voting_duration_updated"
    PROPOSAL_THRESHOLD_UPDATED = "governance.proposal_threshold_updated"
    QUORUM_THRESHOLD_UPDATED = "governance.quorum_threshold_updated"

    # Custom event
    CUSTOM = "custom"


@dataclass
class Event:
    """Standard event structure."""
    type: str  # EventType value or custom string
    data: Dict[str, Any] = field(default_factory=dict)
    source: str = "unknown"
    timestamp: datetime = field(default_factory=datetime.utcnow)
    id: str = field(default="")

    def __post_init__(self):
        if not self.id:
            self.id = self._generate_id()

    def _generate_id(self) -> str:
        """Generate unique event ID."""
        data = f"{self.type}:{self.timestamp.isoformat()}:{next(_sequence)}"
        return hashlib.sha256(data.encode()).hexdigest()[:16]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "type": self.type,
            "data": self.data,
            "source": self.source,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class EventHandler:
    """Registered event handler."""
    callback: Callable[[Event], Any]
    event_types: Set[str]
    filter_func: Optional[Callable[[Event], bool]] = None
    name: str = ""

    def __post_init__(self):
        if not self.name:
            self.name = self.callback.__name__

    def matches(self, event: Event) -> bool:
        if event.type not in self.event_types and "*" not in self.event_types:
            return False
        return self.filter_func is None or self.filter_func(event)


class EventBus:
    """
    Synchronous event bus for governance notifications.

    Supports:
    - Decorator and direct subscription
    - Event filtering
    - Bounded event history
    """

    def __init__(self, max_history: int = 1000):
        self._handlers: List[EventHandler] = []
        self._history: List[Event] = []
        self._max_history = max_history

    def subscribe(
        self,
        event_types: Union[str, EventType, List[Union[str, EventType]]],
        filter_func: Optional[Callable[[Event], bool]] = None,
    ) -> Callable:
        """
        Decorator to subscribe a handler to event types.

        Usage:
            @bus.subscribe(EventType.PROPOSAL_EXECUTED)
            def on_executed(event: Event):
                apply_change(event.data["proposal_id"])

            @bus.subscribe("*")
            def audit(event: Event):
                print(event.to_dict())
        """
        def decorator(func: Callable) -> Callable:
            self.add_handler(func, event_types, filter_func)
            return func

        return decorator

    def add_handler(
        self,
        callback: Callable[[Event], Any],
        event_types: Union[str, EventType, List[Union[str, EventType]]],
        filter_func: Optional[Callable[[Event], bool]] = None,
        name: str = "",
    ) -> EventHandler:
        """Register a callback without the decorator form."""
        if isinstance(event_types, (str, EventType)):
            event_types = [event_types]

        handler = EventHandler(
            callback=callback,
            event_types={_type_value(t) for t in event_types},
            filter_func=filter_func,
            name=name,
        )
        self._handlers.append(handler)
        return handler

    def unsubscribe(self, handler_name: str) -> bool:
        """Unsubscribe a handler by name."""
        for i, handler in enumerate(self._handlers):
            if handler.name == handler_name:
                self._handlers.pop(i)
                return True
        return False

    def publish(self, event: Event) -> int:
        """
        Publish an event to all subscribed handlers.

        Returns number of handlers that handled the event without raising.
        """
        self._add_to_history(event)

        # Snapshot so handlers may subscribe/unsubscribe while dispatching
        matching = [h for h in self._handlers if h.matches(event)]

        executed = 0
        for handler in matching:
            try:
                handler.callback(event)
                executed += 1
            except Exception as e:
                logger.error(f"Error in event handler {handler.name}: {e}")

        logger.debug(f"Event {event.type} delivered to {executed} handlers")
        return executed

    def emit(
        self,
        event_type: Union[str, EventType],
        data: Optional[Dict[str, Any]] = None,
        source: str = "unknown",
    ) -> int:
        """
        Convenience method to create and publish an event.

        Returns number of handlers that received the event.
        """
        event = Event(
            type=_type_value(event_type),
            data=data or {},
            source=source,
        )
        return self.publish(event)

    def _add_to_history(self, event: Event) -> None:
        """Add event to history."""
        self._history.append(event)
        if len(self._history) > self._max_history:
            self._history = self._history[-self._max_history:]

    def get_history(
        self,
        event_types: Optional[List[Union[str, EventType]]] = None,
        limit: int = 100,
    ) -> List[Event]:
        """Get event history with optional filtering."""
        history = self._history

        if event_types:
            wanted = {_type_value(t) for t in event_types}
            history = [e for e in history if e.type in wanted]

        return history[-limit:]

    def clear_history(self) -> None:
        """Clear event history."""
        self._history = []

    def get_stats(self) -> Dict[str, Any]:
        """Get event bus statistics."""
        event_counts: Dict[str, int] = {}
        for event in self._history:
            event_counts[event.type] = event_counts.get(event.type, 0) + 1

        return {
            "handlers": len(self._handlers),
            "history_size": len(self._history),
            "event_counts": event_counts,
        }


def _type_value(event_type: Union[str, EventType]) -> str:
    if isinstance(event_type, EventType):
        return event_type.value
    return event_type
