"""Tracing a small policy evaluation.

Demonstrates how an evaluator narrates its work into recorders:
1. Record the request context on a top-level trace
2. Evaluate each rule into its own child recorder
3. Merge the child traces in call order and print the result

Run with RULETRACE_LOGGING=DEBUG to also see the library's own diagnostics.
"""

from __future__ import annotations

from typing import Any

import ruletrace
from ruletrace import TraceRecorder, create_trace

# =============================================================================
# Rules: name -> (expression text, predicate over the request context)
# =============================================================================

RULES: dict[str, tuple[str, Any]] = {
    "AdminRule": ("user.role == 'admin'", lambda ctx: ctx["user"]["role"] == "admin"),
    "OwnerRule": ("resource.owner == user.id", lambda ctx: ctx["resource"]["owner"] == ctx["user"]["id"]),
    "QuotaRule": ("user.quota_left", lambda ctx: ctx["user"]["quota_left"]),
}


def evaluate(name: str, context: dict[str, Any], level: int) -> tuple[bool, TraceRecorder]:
    expression, predicate = RULES[name]
    trace = create_trace()
    trace.start_rule(name, level, expression)
    try:
        result = predicate(context)
    except Exception as exc:
        trace.add_error(exc, level + 1)
        result = False
    trace.add_evaluation(expression, result, level + 1)
    allowed = result is True
    trace.end_rule(name, allowed, level)
    return allowed, trace


def main() -> None:
    ruletrace.configure_from_env()

    context = {
        "user": {"id": 7, "role": "editor", "quota_left": 3},
        "resource": {"type": "document", "owner": 7},
    }

    root = create_trace("Authorization Check")
    for key, value in context.items():
        root.add_context(key, value)

    decisions = []
    for name in RULES:
        allowed, child = evaluate(name, context, level=1)
        decisions.append(allowed)
        root.merge(child)

    root.add_evaluation("any rule allowed", any(decisions))
    root.log()


if __name__ == "__main__":
    main()
