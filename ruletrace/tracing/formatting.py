"""Stringification of values embedded in trace messages.

Everything here is total: a value that cannot be rendered is replaced by a
placeholder and a warning is logged, so recording a trace never aborts the
decision path it observes.
"""

from __future__ import annotations

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)

STRUCTURED_TYPES = (dict, list, tuple, set, frozenset)


def placeholder(value: Any) -> str:
    return f"<unrenderable {type(value).__name__}>"


def _string_keys(value: Any) -> Any:
    """Copy of a structured value with every dict key turned into text.

    JSON only accepts scalar keys and cannot sort mixed key types; policy
    contexts often carry int or tuple keys.
    """
    if isinstance(value, dict):
        return {str(k): _string_keys(v) for k, v in value.items()}
    # Sets have no JSON form and no stable order of their own.
    if isinstance(value, (set, frozenset)):
        return [_string_keys(v) for v in sorted(value, key=repr)]
    if isinstance(value, (list, tuple)):
        return [_string_keys(v) for v in value]
    return value


def format_scalar(value: Any) -> str:
    """Render a non-structured value the way the trace messages show it."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def format_structured(value: Any, indent: int | None = 2) -> str:
    """Render a dict/list-like value as JSON with sorted, stringified keys.

    Nested objects JSON cannot encode use their ``str()`` form.
    ``indent=None`` produces the compact single-line form.
    """
    separators = None if indent is not None else (", ", ": ")
    return json.dumps(
        _string_keys(value),
        indent=indent,
        sort_keys=True,
        ensure_ascii=False,
        separators=separators,
        default=str,
    )


def safe_format(value: Any, *, indent: int | None = 2) -> str:
    """Render any value for a trace message without ever raising.

    Structured values are tried as JSON first, then as ``str(value)``. The
    placeholder is used only when the value has no string form at all.

    Args:
        value: The value to render.
        indent: JSON indentation for structured values; None for one line.

    Returns:
        The rendered text, or a placeholder if rendering failed.
    """
    if isinstance(value, STRUCTURED_TYPES):
        try:
            return format_structured(value, indent=indent)
        except Exception:
            logger.debug(
                "JSON rendering of %s failed, using str()",
                type(value).__name__,
                exc_info=True,
            )
    try:
        return format_scalar(value)
    except Exception:
        logger.warning(
            "Could not render %s value for trace, using placeholder",
            type(value).__name__,
            exc_info=True,
        )
        return placeholder(value)
