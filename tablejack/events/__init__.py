"""
Event system for the tablejack engine.

This package provides the event bus the table uses to announce what happens
during a round.
"""

from tablejack.events.emitter import EventEmitter, EventBus, EngineEventType

__all__ = ["EventEmitter", "EventBus", "EngineEventType"]
