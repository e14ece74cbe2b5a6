"""Trace event model.

A TraceEvent is one line of an authorization trace: the already formatted
message, the nesting level used for indentation, the event type that selects
the render color, and the wall-clock time it was appended.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class EventType(str, Enum):
    """Closed set of trace event categories."""
    START = "start"
    END = "end"
    INFO = "info"
    ERROR = "error"
    EXPRESSION = "expression"
    CONTEXT = "context"
    RESULT = "result"

    @classmethod
    def parse(cls, value: EventType | str) -> EventType:
        """Coerce a tag to an EventType, falling back to INFO for unknown tags.

        Only used where tags arrive as text (keyword arguments from callers,
        deserialized records). Unknown tags are logged, not raised.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            logger.warning("Unknown trace event type %r, using 'info'", value)
            return cls.INFO


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class TraceEvent:
    """Immutable record appended to a TraceRecorder."""
    message: str
    level: int = 0
    type: EventType = EventType.INFO
    timestamp: datetime = field(default_factory=_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "level": self.level,
            "type": self.type.value,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TraceEvent:
        """Rebuild an event from its dict form.

        Raises:
            KeyError: If ``message`` is missing.
            ValueError: If ``level`` is not an integer.
        """
        timestamp = data.get("timestamp")
        if isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp)
        elif timestamp is None:
            timestamp = _now()
        return cls(
            message=str(data["message"]),
            level=int(data.get("level", 0)),
            type=EventType.parse(data.get("type", EventType.INFO)),
            timestamp=timestamp,
        )
