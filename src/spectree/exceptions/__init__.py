"""
SpecTree exception classes.

This package provides all exception types used throughout SpecTree
for consistent error handling and reporting.
"""

from spectree.exceptions.core import (
    ArityMismatchError,
    CircularHelperError,
    DuplicateHelperError,
    DuplicateTemplateError,
    ErrorContext,
    ErrorLevel,
    FrozenGroupError,
    SpecTreeError,
    UndefinedHelperError,
    UnknownTemplateError,
    WrongScopeError,
)

__all__ = [
    "SpecTreeError",
    "ErrorContext",
    "ErrorLevel",
    "DuplicateHelperError",
    "UndefinedHelperError",
    "CircularHelperError",
    "DuplicateTemplateError",
    "UnknownTemplateError",
    "ArityMismatchError",
    "FrozenGroupError",
    "WrongScopeError",
]
