"""Mock implementations for testing and development."""

from .clock import MockClock
from .scheduler import MockScheduler
from .storage import MemoryKeyValueStore

__all__ = ["MemoryKeyValueStore", "MockClock", "MockScheduler"]
