"""
Core type definitions for SpecTree.

This module contains type aliases shared by the structure and execution
packages.
"""

from typing import TYPE_CHECKING, Any, Callable, Mapping

if TYPE_CHECKING:
    from spectree.execution.scope import ExampleScope

Identifier = str

Value = Any

ComputeFn = Callable[["ExampleScope"], Value]

ExampleBody = Callable[["ExampleScope"], Any]

TemplateBody = Callable[["ExampleScope", Mapping[Identifier, Value]], Any]

SUBJECT = "subject"
