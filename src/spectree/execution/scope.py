"""
Runtime scope for a single example execution.

An ExampleScope is created for every example run. It resolves helper names
against the owning group's chain of HelperRegistry entries, evaluates each
helper at most once and memoizes the result for the rest of the run.

While an example executes, its scope is the *current* scope. Module level
`resolve` reads helper values through it, and fails with WrongScopeError when
no example is running (for instance, from declaration-time code).
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING, Iterator

from spectree.core.location import caller_location
from spectree.core.types import Identifier, Value
from spectree.exceptions import CircularHelperError, ErrorContext, WrongScopeError
from spectree.structure.registry import HelperRegistry

if TYPE_CHECKING:
    from spectree.structure.builder import ExampleDef, GroupNode

logger = logging.getLogger(__name__)

_current_scope: ContextVar["ExampleScope | None"] = ContextVar(
    "spectree_current_scope", default=None
)


class ExampleScope:
    """Execution context of one example, owning its memo cache.

    Helpers receive the scope as their only argument, so a helper body can
    resolve other helpers through it. Attribute access is a shortcut for
    `resolve`: `scope.first_name` is `scope.resolve("first_name")`.

    A scope belongs to exactly one running example and is not shared between
    threads.
    """

    def __init__(self, group: "GroupNode", example: "ExampleDef | None" = None):
        """
        Initialize the scope.

        Params:
            group: Group whose helpers (and ancestors' helpers) are visible
            example: Example being run, used for error locations
        """
        self._group = group
        self._example = example
        self._memo: dict[Identifier, Value] = {}
        self._resolving: list[Identifier] = []

    @property
    def group(self) -> "GroupNode":
        return self._group

    @property
    def example(self) -> "ExampleDef | None":
        return self._example

    def resolve(self, name: Identifier) -> Value:
        """
        Get the value of a helper, computing it on first use.

        Params:
            name: Helper name, passed as data

        Returns:
            The memoized helper value

        Raises:
            UndefinedHelperError: If no enclosing group defines `name`
            CircularHelperError: If evaluating `name` requires `name` itself
        """
        if name in self._memo:
            logger.debug("Helper %r served from memo in '%s'", name, self._group.path)
            return self._memo[name]

        if name in self._resolving:
            start = self._resolving.index(name)
            definition = HelperRegistry.lookup(name, self._group)
            raise CircularHelperError(
                name,
                self._resolving[start:] + [name],
                ErrorContext(group_path=self._group.path, location=definition.location),
                self._group.error_level,
            )

        definition = HelperRegistry.lookup(name, self._group, self._error_context())

        self._resolving.append(name)
        try:
            with self.activate():
                logger.debug("Computing helper %r for '%s'", name, self._group.path)
                value = definition.compute(self)
        finally:
            self._resolving.pop()

        self._memo[name] = value
        return value

    def is_resolved(self, name: Identifier) -> bool:
        """Check whether a helper has already been computed in this scope."""
        return name in self._memo

    def materialize_eager(self) -> None:
        """Compute every visible eager helper, in declaration order."""
        for definition in HelperRegistry.visible_definitions(self._group):
            if definition.eager:
                self.resolve(definition.name)

    @contextmanager
    def activate(self) -> Iterator["ExampleScope"]:
        """Make this scope the current scope for the duration of the block."""
        token = _current_scope.set(self)
        try:
            yield self
        finally:
            _current_scope.reset(token)

    def _error_context(self) -> ErrorContext:
        location = self._example.location if self._example is not None else None
        return ErrorContext(group_path=self._group.path, location=location)

    def __getattr__(self, name: str) -> Value:
        if name.startswith("_"):
            raise AttributeError(name)
        return self.resolve(name)

    def __repr__(self) -> str:
        return f"ExampleScope({self._group.path!r}, resolved={sorted(self._memo)})"


def current_scope() -> ExampleScope | None:
    """Get the scope of the example currently running, if any."""
    return _current_scope.get()


def resolve(name: Identifier) -> Value:
    """
    Resolve a helper in the currently running example.

    Params:
        name: Helper name

    Returns:
        The memoized helper value

    Raises:
        WrongScopeError: If called while no example is running
    """
    scope = _current_scope.get()
    if scope is None:
        raise WrongScopeError(name, ErrorContext(location=caller_location()))
    return scope.resolve(name)
