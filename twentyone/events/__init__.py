"""
Event system for the twentyone engine.

This package provides the event emitter and the process-wide event bus the
game session publishes to.
"""

from twentyone.events.emitter import (
    EventEmitter,
    EventBus,
    EventPriority,
    EngineEventType,
)

__all__ = ["EventEmitter", "EventBus", "EventPriority", "EngineEventType"]
