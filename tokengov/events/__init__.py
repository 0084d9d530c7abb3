"""Governance notifications."""

from tokengov.events.bus import Event, EventBus, EventHandler, EventType

__all__ = ["Event", "EventBus", "EventHandler", "EventType"]
