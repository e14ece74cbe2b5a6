"""Trace recorders for rule evaluation.

A rule evaluator narrates its work into a TraceRecorder: which rule started,
what context it saw, what each check returned and how the rule ended. The
recorder keeps the events in append order and renders them as an indented,
colored audit log.

Nested evaluations can record into their own recorder and be merged into the
parent afterwards. Pass the active recorder down the call chain explicitly;
there is no module-level "current trace".
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Iterator, TextIO

import pandas as pd

from ruletrace.tracing.events import EventType, TraceEvent
from ruletrace.tracing.formatting import safe_format
from ruletrace.tracing.render import render_events

logger = logging.getLogger(__name__)

DATAFRAME_COLUMNS = ["message", "level", "type", "timestamp"]


class TraceRecorder:
    """Ordered, append-only log of trace events.

    Events are never mutated or removed once appended. Readers get snapshots,
    so a recorder can be rendered, merged or inspected any number of times.

    Not safe for unsynchronized use from several threads; give each
    concurrent branch its own recorder and merge afterwards.
    """

    def __init__(self, initial_message: str | None = None) -> None:
        self._events: list[TraceEvent] = []
        if initial_message:
            self.add(initial_message, 0, EventType.START)

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[TraceEvent]:
        return iter(self.get_messages())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(events={len(self._events)})"

    # === Append ===

    def add(
        self,
        message: str,
        level: int = 0,
        event_type: EventType | str = EventType.INFO,
    ) -> None:
        """Append one event stamped with the current time.

        Args:
            message: Fully formatted message text.
            level: Nesting depth for indentation. Negative values are stored
                as given and render without indentation.
            event_type: EventType member or its string value.
        """
        self._events.append(
            TraceEvent(message=message, level=level, type=EventType.parse(event_type))
        )

    # === Narration helpers ===

    def start_rule(self, name: str, level: int = 0, expression: str | None = None) -> None:
        self.add(f"🎯 Starting rule: '{name}'", level, EventType.START)
        if expression:
            self.add_expression(expression, level + 1)

    def end_rule(self, name: str, result: bool, level: int = 0) -> None:
        if result:
            self.add(f"✅ Rule '{name}' → ALLOWED", level, EventType.END)
        else:
            self.add(f"🚫 Rule '{name}' → DENIED", level, EventType.END)

    def add_expression(self, expression: str, level: int = 0) -> None:
        self.add(f"📄 Expression: {expression}", level, EventType.EXPRESSION)

    def add_context(self, key: str, value: Any, level: int = 0) -> None:
        """Record a context value; dicts and lists are pretty-printed as JSON."""
        self.add(f"🔍 Context.{key}: {safe_format(value)}", level, EventType.CONTEXT)

    def add_evaluation(self, description: str, result: Any, level: int = 0) -> None:
        """Record the outcome of one evaluation step.

        Boolean results get an allow/deny icon; anything else is shown as-is
        with a neutral icon.
        """
        if result is True:
            message = f"✅ {description} → true"
        elif result is False:
            message = f"🚫 {description} → false"
        else:
            message = f"🔄 {description} → {safe_format(result, indent=None)}"
        self.add(message, level, EventType.RESULT)

    def add_error(self, error: BaseException | str, level: int = 0) -> None:
        self.add(f"❌ Error: {safe_format(error)}", level, EventType.ERROR)

    # === Composition ===

    def merge(self, other: TraceRecorder) -> None:
        """Append a snapshot of other's events, keeping their order and levels.

        ``other`` is left untouched. Levels are not shifted; set them on the
        child recorder before merging if it should appear nested.
        """
        events = other.get_messages()
        self._events.extend(events)
        logger.debug("Merged %d trace events from %r", len(events), other)

    # === Read ===

    def get_messages(self) -> list[TraceEvent]:
        """Return a new list of the recorded events, in append order."""
        return list(self._events)

    def filter_by_type(self, event_type: EventType | str) -> list[TraceEvent]:
        """Return events of one type, in append order."""
        wanted = EventType.parse(event_type)
        return [e for e in self._events if e.type is wanted]

    def to_dicts(self) -> list[dict[str, Any]]:
        return [e.to_dict() for e in self._events]

    def to_dataframe(self) -> pd.DataFrame:
        """One row per event with message, level, type and timestamp columns."""
        rows = [
            {
                "message": e.message,
                "level": e.level,
                "type": e.type.value,
                "timestamp": e.timestamp,
            }
            for e in self._events
        ]
        return pd.DataFrame(rows, columns=DATAFRAME_COLUMNS)

    # === Output ===

    def trace(self, color: bool = True) -> str:
        """Render the events as indented lines.

        Each line is ``2 * level`` spaces followed by the message wrapped in
        the ANSI color of its type. ``color=False`` drops the escape codes.
        """
        return render_events(self._events, color=color)

    def log(self, file: TextIO | None = None) -> None:
        """Write the rendered trace to stderr (or ``file``) once."""
        stream = file if file is not None else sys.stderr
        print(self.trace(), file=stream)
        logger.debug("Wrote trace with %d events", len(self._events))


class NullTraceRecorder(TraceRecorder):
    """Recorder that discards everything.

    Use when tracing is disabled so evaluators can call the narration
    helpers unconditionally.
    """

    def add(
        self,
        message: str,
        level: int = 0,
        event_type: EventType | str = EventType.INFO,
    ) -> None:
        pass

    def merge(self, other: TraceRecorder) -> None:
        pass


def create_trace(initial_message: str | None = None) -> TraceRecorder:
    """Create a recorder, optionally opening with a level-0 start event.

    Example:
        >>> trace = create_trace("Authorization Check")
        >>> trace.add_context("resource", "users")
        >>> trace.end_rule("AdminRule", True, 1)
        >>> print(trace.trace(color=False))
        Authorization Check
        🔍 Context.resource: users
          ✅ Rule 'AdminRule' → ALLOWED
    """
    return TraceRecorder(initial_message)
