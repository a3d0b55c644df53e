"""
SpecTree execution components.

This package provides the per-example runtime scope, shared example
parameter binding and a minimal runner.
"""

from spectree.execution.binding import BoundArguments
from spectree.execution.runner import (
    ExampleResult,
    ExampleStatus,
    Runner,
    RunReport,
    run,
)
from spectree.execution.scope import ExampleScope, current_scope, resolve

__all__ = [
    "BoundArguments",
    "ExampleResult",
    "ExampleStatus",
    "ExampleScope",
    "Runner",
    "RunReport",
    "current_scope",
    "resolve",
    "run",
]
