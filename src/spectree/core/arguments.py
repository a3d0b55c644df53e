"""
Argument expressions for shared example inclusions.

An inclusion binds each template parameter either to a literal value, fixed
when the inclusion is declared, or to a deferred reference naming a helper
that is resolved later inside the running example's scope.
"""

from typing import TYPE_CHECKING, Any

from attrs import field, frozen

from spectree.core.types import Identifier, Value

if TYPE_CHECKING:
    from spectree.execution.scope import ExampleScope


@frozen
class Literal:
    """Argument whose value is known at declaration time."""

    value: Any

    def evaluate(self, scope: "ExampleScope") -> Value:
        return self.value

    def __str__(self) -> str:
        return repr(self.value)


def _check_identifier(instance, attribute, value) -> None:
    if not isinstance(value, str) or not value:
        raise ValueError(f"Deferred reference needs a non-empty helper name, got {value!r}")


@frozen
class Deferred:
    """Reference to a helper, resolved in the example scope that consumes it."""

    name: Identifier = field(validator=_check_identifier)

    def evaluate(self, scope: "ExampleScope") -> Value:
        return scope.resolve(self.name)

    def __str__(self) -> str:
        return f"deferred({self.name!r})"


ArgumentExpression = Literal | Deferred


def deferred(name: Identifier) -> Deferred:
    """
    Mark an inclusion argument as a reference to a helper.

    Params:
        name: Helper name to resolve when the example runs

    Returns:
        Deferred argument expression
    """
    return Deferred(name)


def literal(value: Any) -> Literal:
    """Wrap a value explicitly as a literal argument."""
    return Literal(value)


def as_argument(value: Any) -> ArgumentExpression:
    """
    Normalize an inclusion argument.

    Argument expressions pass through unchanged; any other value becomes a
    Literal, so authors can write plain values.
    """
    if isinstance(value, (Literal, Deferred)):
        return value
    return Literal(value)
