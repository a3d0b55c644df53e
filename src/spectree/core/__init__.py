"""
Core SpecTree components.

This package provides the fundamental building blocks shared by the
declaration and execution sides: type aliases, argument expressions and
source locations.
"""

from spectree.core.arguments import (
    ArgumentExpression,
    Deferred,
    Literal,
    as_argument,
    deferred,
    literal,
)
from spectree.core.location import SourceLocation, caller_location
from spectree.core.types import (
    SUBJECT,
    ComputeFn,
    ExampleBody,
    Identifier,
    TemplateBody,
    Value,
)

__all__ = [
    "ArgumentExpression",
    "Deferred",
    "Literal",
    "as_argument",
    "deferred",
    "literal",
    "SourceLocation",
    "caller_location",
    "SUBJECT",
    "ComputeFn",
    "ExampleBody",
    "Identifier",
    "TemplateBody",
    "Value",
]
