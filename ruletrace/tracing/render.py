"""Rendering of trace events to indented, ANSI-colored text.

The color table and the two-spaces-per-level indentation are part of the
public output format; tooling downstream greps for them.
"""

from __future__ import annotations

from typing import Iterable

from ruletrace.tracing.events import EventType, TraceEvent

RESET = "\x1b[0m"
INDENT = "  "

YELLOW = "\x1b[33m"
GREEN = "\x1b[32m"
RED = "\x1b[31m"
CYAN = "\x1b[36m"
MAGENTA = "\x1b[35m"
BLUE = "\x1b[34m"

COLORS: dict[EventType, str] = {
    EventType.START: YELLOW,
    EventType.END: GREEN,
    EventType.ERROR: RED,
    EventType.INFO: CYAN,
    EventType.EXPRESSION: MAGENTA,
    EventType.CONTEXT: BLUE,
    EventType.RESULT: GREEN,
}


def indentation(level: int) -> str:
    """Indent prefix for a level; negative levels get none."""
    return INDENT * max(level, 0)


def render_event(event: TraceEvent, color: bool = True) -> str:
    """Render a single event as one entry.

    Multi-line messages keep a single color pair: indentation and the color
    code open the first line and the reset closes the last.
    """
    prefix = indentation(event.level)
    if not color:
        return f"{prefix}{event.message}"
    return f"{prefix}{COLORS[event.type]}{event.message}{RESET}"


def render_events(events: Iterable[TraceEvent], color: bool = True) -> str:
    """Render events in order, one entry per event, joined by newlines.

    An empty sequence renders to the empty string. There is no trailing
    newline.
    """
    return "\n".join(render_event(event, color=color) for event in events)
