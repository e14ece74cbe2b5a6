"""Authorization trace recording.

TraceRecorder collects the events a rule evaluator narrates while reaching a
decision and renders them as an indented, colored audit log.
"""

from ruletrace.tracing.events import EventType, TraceEvent
from ruletrace.tracing.recorder import (
    NullTraceRecorder,
    TraceRecorder,
    create_trace,
)
from ruletrace.tracing.render import COLORS, render_event, render_events

__all__ = [
    "COLORS",
    "EventType",
    "NullTraceRecorder",
    "TraceEvent",
    "TraceRecorder",
    "create_trace",
    "render_event",
    "render_events",
]
