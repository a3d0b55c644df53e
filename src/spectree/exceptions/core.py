"""
Exception classes for SpecTree declaration and execution.

This module defines specific exception types for the contract violations
that can occur while building a group tree (structural errors) and while
resolving helpers inside a running example (resolution errors).
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from spectree.core.location import SourceLocation


class ErrorLevel(Enum):
    """Error message detail level for end users vs developers."""

    USER = "user"  # Group path and file basename only
    DEVELOPER = "developer"  # Full source paths


@dataclass
class ErrorContext:
    """
    Context information for error messages.

    Captures where the offending declaration lives, both in tree terms
    (the group path) and in Python source terms (file and line).

    Params:
        group_path: Description chain of the group, e.g. "User > full_name"
        location: Source location of the declaration that caused the error
        detail: Optional extra line appended to the message
    """

    group_path: str | None = None
    location: "SourceLocation | None" = None
    detail: str | None = None

    def format_location(self, error_level: ErrorLevel) -> str:
        """
        Format location information based on error level.

        Params:
            error_level: Whether to show USER or DEVELOPER level details

        Returns:
            Formatted location string with appropriate detail level
        """
        lines = []

        if self.group_path:
            lines.append(f"  in group '{self.group_path}'")

        if self.location is not None:
            if error_level == ErrorLevel.DEVELOPER:
                lines.append(f"  declared at {self.location.file}:{self.location.line}")
            else:
                lines.append(
                    f"  declared at {self.location.basename}:{self.location.line}"
                )

        if self.detail:
            lines.append(f"  {self.detail}")

        return "\n".join(lines)


class SpecTreeError(Exception):
    """Base exception for all SpecTree errors."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        """
        Initialize the exception.

        Params:
            message: Primary error message
            context: ErrorContext with group path and source location
            error_level: Level of detail to show in error message
        """
        self.context = context
        self.error_level = error_level
        self.primary_message = message
        if context:
            location_info = context.format_location(error_level)
            full_message = f"{message}\n{location_info}" if location_info else message
        else:
            full_message = message
        super().__init__(full_message)


class DuplicateHelperError(SpecTreeError):
    """Raised when a helper name is defined twice on the same group."""

    def __init__(
        self,
        name: str,
        group_path: str,
        context: ErrorContext | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        """
        Initialize the exception.

        Params:
            name: The helper name that is already defined
            group_path: Path of the group holding both definitions
            context: Location of the second definition
            error_level: Level of detail to show in error message
        """
        self.name = name
        self.group_path = group_path
        super().__init__(
            f"Helper '{name}' is already defined in group '{group_path}'",
            context,
            error_level,
        )


class UndefinedHelperError(SpecTreeError, AttributeError):
    """Raised when no group in the ancestor chain defines a helper.

    Also an AttributeError, so `hasattr(scope, name)` and
    `getattr(scope, name, default)` work with attribute access on a scope.
    """

    def __init__(
        self,
        name: str,
        group_path: str,
        available: Sequence[str] = (),
        context: ErrorContext | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        """
        Initialize the exception.

        Params:
            name: The helper name that could not be found
            group_path: Path of the group where lookup started
            available: Helper names visible from that group
            context: Location of the reference that asked for the helper
            error_level: Level of detail to show in error message
        """
        self.group_path = group_path
        self.available = list(available)
        message = f"Helper '{name}' is not defined for group '{group_path}'"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message, context, error_level)
        # AttributeError.__init__ resets `name`
        self.name = name


class CircularHelperError(SpecTreeError):
    """Raised when a helper depends on itself, directly or indirectly."""

    def __init__(
        self,
        name: str,
        chain: Sequence[str],
        context: ErrorContext | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        """
        Initialize the exception.

        Params:
            name: The helper whose resolution re-entered itself
            chain: Resolution stack from the first helper to the repeat
            context: Location of the helper definition
            error_level: Level of detail to show in error message
        """
        self.name = name
        self.chain = list(chain)
        super().__init__(
            f"Circular helper dependency on '{name}': {' -> '.join(self.chain)}",
            context,
            error_level,
        )


class DuplicateTemplateError(SpecTreeError):
    """Raised when a shared example template name is registered twice."""

    def __init__(
        self,
        name: str,
        context: ErrorContext | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        """
        Initialize the exception.

        Params:
            name: The template name that already exists
            context: Location of the second definition
            error_level: Level of detail to show in error message
        """
        self.name = name
        super().__init__(
            f"Shared examples '{name}' are already defined", context, error_level
        )


class UnknownTemplateError(SpecTreeError):
    """Raised when including a shared example template that does not exist."""

    def __init__(
        self,
        name: str,
        available: Sequence[str] = (),
        context: ErrorContext | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        """
        Initialize the exception.

        Params:
            name: The template name that was requested
            available: Names of the registered templates
            context: Location of the inclusion
            error_level: Level of detail to show in error message
        """
        self.name = name
        self.available = list(available)
        message = f"Shared examples '{name}' are not defined"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message, context, error_level)


class ArityMismatchError(SpecTreeError):
    """Raised when an inclusion supplies the wrong number of arguments."""

    def __init__(
        self,
        name: str,
        parameter_names: Sequence[str],
        argument_count: int,
        context: ErrorContext | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        """
        Initialize the exception.

        Params:
            name: The template being included
            parameter_names: Parameters declared by the template
            argument_count: Number of arguments supplied by the inclusion
            context: Location of the inclusion
            error_level: Level of detail to show in error message
        """
        self.name = name
        self.parameter_names = list(parameter_names)
        self.argument_count = argument_count
        super().__init__(
            f"Shared examples '{name}' expect {len(self.parameter_names)} "
            f"argument(s) ({', '.join(self.parameter_names) or 'none'}), "
            f"got {argument_count}",
            context,
            error_level,
        )


class FrozenGroupError(SpecTreeError):
    """Raised when a closed group is modified."""

    def __init__(
        self,
        group_path: str,
        operation: str,
        context: ErrorContext | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        """
        Initialize the exception.

        Params:
            group_path: Path of the closed group
            operation: The declaration that was attempted (e.g. "let 'name'")
            context: Location of the attempted declaration
            error_level: Level of detail to show in error message
        """
        self.group_path = group_path
        self.operation = operation
        super().__init__(
            f"Cannot {operation} on closed group '{group_path}'", context, error_level
        )


class WrongScopeError(SpecTreeError):
    """Raised when a helper value is requested outside a running example."""

    def __init__(
        self,
        name: str,
        context: ErrorContext | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        """
        Initialize the exception.

        Params:
            name: The helper name that was requested
            context: Location of the offending call
            error_level: Level of detail to show in error message
        """
        self.name = name
        super().__init__(
            f"Helper '{name}' is only available inside a running example, "
            "not at declaration time",
            context,
            error_level,
        )
