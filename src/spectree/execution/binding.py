"""
Parameter binding for shared example templates.

BoundArguments maps a template's parameter names to the argument
expressions of one inclusion. Values are produced on access: literals
return their value, deferred references resolve through the example scope
at the moment the template body reads the parameter.
"""

from typing import TYPE_CHECKING, Iterator, Mapping, Sequence

from spectree.core.arguments import ArgumentExpression
from spectree.core.types import Identifier, Value

if TYPE_CHECKING:
    from spectree.execution.scope import ExampleScope


class BoundArguments(Mapping[Identifier, Value]):
    """Lazy parameter mapping handed to a shared example body.

    Supports item access (`args["first"]`) and attribute access
    (`args.first`). Reading a deferred parameter twice reuses the example
    scope's memoized helper value. Membership tests (`"first" in args`) only
    check the parameter names.
    """

    def __init__(
        self,
        scope: "ExampleScope",
        parameter_names: Sequence[Identifier],
        arguments: Sequence[ArgumentExpression],
    ):
        if len(parameter_names) != len(arguments):
            raise ValueError(
                f"Cannot bind {len(arguments)} argument(s) to "
                f"{len(parameter_names)} parameter(s)"
            )
        self._scope = scope
        self._expressions: dict[Identifier, ArgumentExpression] = dict(
            zip(parameter_names, arguments)
        )

    def expression(self, name: Identifier) -> ArgumentExpression:
        """Get the unevaluated argument expression bound to a parameter."""
        return self._expressions[name]

    def __getitem__(self, name: Identifier) -> Value:
        return self._expressions[name].evaluate(self._scope)

    def __contains__(self, name: object) -> bool:
        # Membership never evaluates the bound expression
        return name in self._expressions

    def __iter__(self) -> Iterator[Identifier]:
        return iter(self._expressions)

    def __len__(self) -> int:
        return len(self._expressions)

    def __getattr__(self, name: str) -> Value:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            expression = self._expressions[name]
        except KeyError:
            raise AttributeError(f"No parameter named '{name}'") from None
        return expression.evaluate(self._scope)

    def __repr__(self) -> str:
        bound = ", ".join(f"{k}={v}" for k, v in self._expressions.items())
        return f"BoundArguments({bound})"
