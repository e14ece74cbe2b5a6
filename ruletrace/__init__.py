"""ruletrace: execution traces for policy rule evaluation.

The library is silent by default. Enable its diagnostics with the helpers
re-exported from ruletrace.logging_config, e.g.::

    import ruletrace
    ruletrace.enable_console_logging(level="DEBUG")
"""

import logging

from ruletrace.logging_config import (
    configure_from_env,
    disable_logging,
    enable_console_logging,
    enable_file_logging,
    enable_json_logging,
    set_level,
    set_module_level,
)
from ruletrace.tracing import (
    EventType,
    NullTraceRecorder,
    TraceEvent,
    TraceRecorder,
    create_trace,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "EventType",
    "NullTraceRecorder",
    "TraceEvent",
    "TraceRecorder",
    "configure_from_env",
    "create_trace",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_logging",
    "set_level",
    "set_module_level",
]
