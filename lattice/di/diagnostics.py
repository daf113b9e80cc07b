"""
DI Diagnostics - Observability and event tracking for DI containers.
"""

import time
from typing import Any, Dict, List, Optional, Protocol
from enum import Enum
import dataclasses
import logging

logger = logging.getLogger("lattice.di.diagnostics")


class DIEventType(Enum):
    """Types of DI events."""
    REGISTRATION = "registration"
    REGISTRATION_IGNORED = "registration_ignored"
    RESOLUTION_START = "resolution_start"
    RESOLUTION_SUCCESS = "resolution_success"
    INJECTION = "injection"
    LOOKUP_MISS = "lookup_miss"


@dataclasses.dataclass
class DIEvent:
    """A diagnostic event in the DI system."""
    type: DIEventType
    timestamp: float = dataclasses.field(default_factory=time.time)
    key: Optional[str] = None
    owner: Optional[str] = None
    attribute: Optional[str] = None
    duration: Optional[float] = None
    metadata: Dict[str, Any] = dataclasses.field(default_factory=dict)


class DiagnosticListener(Protocol):
    """Interface for DI diagnostic listeners."""
    def on_event(self, event: DIEvent) -> None:
        """Called when a DI event occurs."""
        ...


class ConsoleDiagnosticListener:
    """Diagnostic listener that writes events to the logging system."""
    def __init__(self, log_level: int = logging.DEBUG):
        self.log_level = log_level

    def on_event(self, event: DIEvent) -> None:
        if event.type == DIEventType.REGISTRATION:
            logger.log(self.log_level, f"Registered factory for key={event.key!r}")
        elif event.type == DIEventType.REGISTRATION_IGNORED:
            logger.log(logging.WARNING, f"Ignored re-registration of realized key={event.key!r}")
        elif event.type == DIEventType.RESOLUTION_START:
            logger.log(self.log_level, f"Resolving key={event.key!r}...")
        elif event.type == DIEventType.RESOLUTION_SUCCESS:
            logger.log(self.log_level, f"✓ Resolved key={event.key!r} in {event.duration:.4f}s")
        elif event.type == DIEventType.INJECTION:
            logger.log(self.log_level, f"Injected {event.owner}.{event.attribute} <- {event.key!r}")
        elif event.type == DIEventType.LOOKUP_MISS:
            logger.log(logging.WARNING, f"✗ No factory registered for key={event.key!r}")


class RecordingDiagnosticListener:
    """Keeps every event in memory; handy in tests and the CLI."""
    def __init__(self):
        self.events: List[DIEvent] = []

    def on_event(self, event: DIEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: DIEventType) -> List[DIEvent]:
        return [e for e in self.events if e.type == event_type]


class DIDiagnostics:
    """Coordinator for DI diagnostic listeners."""
    def __init__(self):
        self._listeners: List[DiagnosticListener] = []

    def add_listener(self, listener: DiagnosticListener) -> None:
        """Add a diagnostic listener."""
        self._listeners.append(listener)

    def remove_listener(self, listener: DiagnosticListener) -> None:
        """Remove a previously added listener."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, event_type: DIEventType, **kwargs) -> None:
        """Emit a diagnostic event to all listeners."""
        if not self._listeners:
            return
        event = DIEvent(type=event_type, **kwargs)
        for listener in self._listeners:
            try:
                listener.on_event(event)
            except Exception as e:
                # Diagnostics should never crash the main application
                logger.error(f"Diagnostic listener error: {e}")
