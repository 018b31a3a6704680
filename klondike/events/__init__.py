"""
Event system for the Klondike engine.

This package provides the event emitter the game controller reports through.
"""

from klondike.events.emitter import (
    EventEmitter,
    EventBus,
    EventPriority,
    EngineEventType,
)

__all__ = ["EventEmitter", "EventBus", "EventPriority", "EngineEventType"]
