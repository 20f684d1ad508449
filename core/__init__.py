"""
Core abstract interfaces for the Memory Arena platform.

This module provides the base classes and ports that games build on:
the Game interface, deferred-callback scheduling, and session storage.
"""

from core.game import Game
from core.scheduler import Scheduler, ScheduledTask, ManualScheduler, AsyncioScheduler
from core.session_store import SessionStore, InMemorySessionStore, JsonFileSessionStore

__all__ = [
    "Game",
    "Scheduler",
    "ScheduledTask",
    "ManualScheduler",
    "AsyncioScheduler",
    "SessionStore",
    "InMemorySessionStore",
    "JsonFileSessionStore",
]
