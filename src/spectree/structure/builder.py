"""
Declaration tree classes for SpecTree.

This module contains the group tree (GroupNode), the example definitions
attached to it (ExampleDef) and the Suite coordinator that owns root groups
and the shared example template table.

Building the tree is pure wiring: helper recipes and shared example
inclusions are recorded, never evaluated. A group accepts declarations while
it is open and becomes read-only once its `with` block exits.
"""

import logging
import weakref
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterator, Sequence

from attrs import frozen

from spectree.config import SuiteConfig
from spectree.core.arguments import ArgumentExpression, as_argument
from spectree.core.location import UNKNOWN_LOCATION, SourceLocation, caller_location
from spectree.core.types import SUBJECT, ComputeFn, ExampleBody, Identifier, TemplateBody
from spectree.exceptions import (
    ArityMismatchError,
    ErrorContext,
    ErrorLevel,
    FrozenGroupError,
    WrongScopeError,
)
from spectree.execution.binding import BoundArguments
from spectree.structure.registry import (
    HelperDefinition,
    HelperRegistry,
    SharedExampleTemplate,
    TemplateRegistry,
)

logger = logging.getLogger(__name__)

PATH_SEPARATOR = " > "


class GroupState(Enum):
    """Declaration lifecycle of a group."""

    OPEN = "open"
    CLOSED = "closed"


@frozen
class Inclusion:
    """A shared example template instantiated with argument expressions."""

    template: SharedExampleTemplate
    arguments: tuple[ArgumentExpression, ...]
    location: SourceLocation = UNKNOWN_LOCATION

    def bind(self, scope) -> BoundArguments:
        """Bind the template parameters to this inclusion's arguments."""
        return BoundArguments(scope, self.template.parameter_names, self.arguments)

    def run(self, scope) -> Any:
        return self.template.body(scope, self.bind(scope))


@dataclass(eq=False)
class ExampleDef:
    """An executable example attached to its owning group."""

    description: str
    group: "GroupNode" = field(repr=False)
    body: ExampleBody = field(repr=False)
    location: SourceLocation = UNKNOWN_LOCATION
    inclusion: Inclusion | None = None

    @property
    def full_description(self) -> str:
        return f"{self.group.path}{PATH_SEPARATOR}{self.description}"

    def run(self, scope) -> Any:
        """Invoke the example body with a scope owned by this example's group."""
        return self.body(scope)


@dataclass(eq=False)
class GroupNode:
    """Node in the declaration tree: a described group of examples.

    Owns child groups, the helper definitions declared on it, and its example
    definitions (inline examples and shared example inclusions, in declaration
    order). The parent is held by weak reference; the tree is owned from the
    root down.
    """

    description: str
    templates: TemplateRegistry
    error_level: ErrorLevel = ErrorLevel.USER
    location: SourceLocation = UNKNOWN_LOCATION
    parent_ref: "weakref.ReferenceType[GroupNode] | None" = None
    children: list["GroupNode"] = field(default_factory=list)
    helpers: HelperRegistry = field(default_factory=HelperRegistry)
    examples: list[ExampleDef] = field(default_factory=list)
    state: GroupState = GroupState.OPEN

    @property
    def parent(self) -> "GroupNode | None":
        return self.parent_ref() if self.parent_ref is not None else None

    @property
    def path(self) -> str:
        """Description chain from the root, e.g. "User > full_name"."""
        parts = []
        node: GroupNode | None = self
        while node is not None:
            parts.append(node.description)
            node = node.parent
        return PATH_SEPARATOR.join(reversed(parts))

    @property
    def is_closed(self) -> bool:
        return self.state == GroupState.CLOSED

    def __repr__(self) -> str:
        return f"GroupNode({self.path!r}, state={self.state.value})"

    def close(self) -> None:
        """Freeze this group and its whole subtree."""
        for child in self.children:
            child.close()
        if not self.is_closed:
            self.state = GroupState.CLOSED
            logger.debug("Closed group '%s'", self.path)

    def _ensure_open(self, operation: str, location: SourceLocation) -> None:
        if self.is_closed:
            raise FrozenGroupError(
                self.path,
                operation,
                ErrorContext(group_path=self.path, location=location),
                self.error_level,
            )

    def group(self, description: str):
        """
        Open a nested group.

        Use as a context manager; the nested group closes when the block exits:

            with parent.group("when empty") as empty:
                empty.let("items", lambda scope: [])

        Params:
            description: Description of the nested group

        Raises:
            FrozenGroupError: If this group is closed
        """
        location = caller_location()
        self._ensure_open(f"add group '{description}'", location)
        child = GroupNode(
            description=description,
            templates=self.templates,
            error_level=self.error_level,
            location=location,
            parent_ref=weakref.ref(self),
        )
        self.children.append(child)
        return _opened(child)

    def let(
        self,
        name: Identifier | ComputeFn | None = None,
        compute: ComputeFn | None = None,
        *,
        eager: bool = False,
    ):
        """
        Declare a lazily computed, memoized helper on this group.

        Supported forms:

            group.let("first_name", lambda scope: "Foo")

            @group.let
            def first_name(scope): ...

            @group.let("first_name", eager=True)
            def compute(scope): ...

        Params:
            name: Helper name, or the compute function when used as a bare decorator
            compute: Function receiving the ExampleScope and returning the value
            eager: Compute the helper before the example body runs

        Returns:
            The HelperDefinition, or a decorator when `compute` is omitted

        Raises:
            DuplicateHelperError: If `name` is already defined on this group
            FrozenGroupError: If this group is closed
        """
        if callable(name) and compute is None:
            return self._define_helper(name.__name__, name, eager)
        if compute is not None:
            return self._define_helper(name, compute, eager)

        def decorator(fn: ComputeFn) -> HelperDefinition:
            return self._define_helper(name or fn.__name__, fn, eager)

        return decorator

    def subject(self, compute: ComputeFn | None = None, *, eager: bool = False):
        """Declare the helper named "subject"; usable as a decorator."""
        if compute is not None:
            return self._define_helper(SUBJECT, compute, eager)

        def decorator(fn: ComputeFn) -> HelperDefinition:
            return self._define_helper(SUBJECT, fn, eager)

        return decorator

    def _define_helper(
        self, name: Identifier, compute: ComputeFn, eager: bool
    ) -> HelperDefinition:
        location = caller_location()
        if not isinstance(name, str) or not name:
            raise ValueError(f"Helper name must be a non-empty string, got {name!r}")
        if not callable(compute):
            raise TypeError(f"Helper '{name}' needs a callable, got {compute!r}")
        self._ensure_open(f"let '{name}'", location)
        definition = HelperDefinition(
            name=name, compute=compute, location=location, eager=eager
        )
        self.helpers.define(definition, self.path, self.error_level)
        return definition

    def example(self, description: str, body: ExampleBody | None = None):
        """
        Declare an example with an inline body.

            group.example("is valid", lambda scope: ...)

            @group.example("is valid")
            def _(scope): ...

        Params:
            description: Example description
            body: Function receiving the ExampleScope; fails by raising

        Returns:
            The ExampleDef, or a decorator when `body` is omitted

        Raises:
            FrozenGroupError: If this group is closed
        """
        location = caller_location()
        self._ensure_open(f"add example '{description}'", location)

        def add(fn: ExampleBody) -> ExampleDef:
            self._ensure_open(f"add example '{description}'", location)
            example = ExampleDef(
                description=description, group=self, body=fn, location=location
            )
            self.examples.append(example)
            return example

        if body is not None:
            return add(body)
        return add

    def include_shared_examples(
        self, name: Identifier, *arguments: Any, description: str | None = None
    ) -> ExampleDef:
        """
        Instantiate a shared example template on this group.

        Arguments are bound to the template parameters by position. Plain
        values are literals; wrap a helper name with `deferred(...)` to have it
        resolved inside the running example's scope.

        Params:
            name: Registered template name
            *arguments: One argument expression per template parameter
            description: Example description, defaults to "behaves like <name>"

        Returns:
            The ExampleDef created for the inclusion

        Raises:
            UnknownTemplateError: If no template is registered under `name`
            ArityMismatchError: If the argument count differs from the parameter count
            FrozenGroupError: If this group is closed
        """
        location = caller_location()
        self._ensure_open(f"include shared examples '{name}'", location)
        context = ErrorContext(group_path=self.path, location=location)
        template = self.templates.get(name, context)
        if len(arguments) != template.arity:
            raise ArityMismatchError(
                name, template.parameter_names, len(arguments), context, self.error_level
            )

        inclusion = Inclusion(
            template=template,
            arguments=tuple(as_argument(argument) for argument in arguments),
            location=location,
        )
        example = ExampleDef(
            description=description or f"behaves like {name}",
            group=self,
            body=inclusion.run,
            location=location,
            inclusion=inclusion,
        )
        self.examples.append(example)
        return example

    it_behaves_like = include_shared_examples

    def resolve(self, name: Identifier) -> Any:
        """
        Helper values do not exist at declaration time.

        Raises:
            WrongScopeError: Always; resolve helpers inside an example body
        """
        raise WrongScopeError(
            name,
            ErrorContext(group_path=self.path, location=caller_location()),
            self.error_level,
        )

    def walk(self) -> Iterator["GroupNode"]:
        """Iterate over this group and its descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def walk_examples(self) -> Iterator[ExampleDef]:
        """Iterate over every example reachable from this group."""
        for node in self.walk():
            yield from node.examples


@contextmanager
def _opened(node: GroupNode) -> Iterator[GroupNode]:
    try:
        yield node
    finally:
        node.close()


class Suite:
    """Coordinator owning root groups and the shared example template table.

    Responsibilities:
    - Open root groups with `describe`
    - Register shared example templates for inclusion by any group
    - Close the whole tree before it is run
    """

    def __init__(self, config: SuiteConfig | None = None):
        self.config = config or SuiteConfig()
        self.templates = TemplateRegistry(self.config.error_level)
        self.roots: list[GroupNode] = []
        self._closed = False

    @property
    def is_closed(self) -> bool:
        return self._closed

    def _ensure_open(self, operation: str, location: SourceLocation) -> None:
        if self._closed:
            raise FrozenGroupError(
                "<suite>",
                operation,
                ErrorContext(location=location),
                self.config.error_level,
            )

    def describe(self, description: str):
        """
        Open a root group; it closes when the `with` block exits.

            with suite.describe("User") as user:
                user.subject(lambda scope: User(scope.first_name))

        Raises:
            FrozenGroupError: If the suite is closed
        """
        location = caller_location()
        self._ensure_open(f"add group '{description}'", location)
        root = GroupNode(
            description=description,
            templates=self.templates,
            error_level=self.config.error_level,
            location=location,
        )
        self.roots.append(root)
        return _opened(root)

    def define_shared_examples(
        self,
        name: Identifier,
        parameter_names: Sequence[Identifier],
        body: TemplateBody,
    ) -> SharedExampleTemplate:
        """
        Register a shared example template.

        Params:
            name: Template name used by inclusions
            parameter_names: Ordered parameter names
            body: Function receiving (scope, bound arguments)

        Raises:
            DuplicateTemplateError: If `name` is already registered
            FrozenGroupError: If the suite is closed
            ValueError: If parameter names are empty or repeated
        """
        location = caller_location()
        self._ensure_open(f"define shared examples '{name}'", location)
        template = SharedExampleTemplate(
            name=name, parameter_names=parameter_names, body=body, location=location
        )
        return self.templates.define(template)

    def shared_examples(
        self, name: Identifier, parameter_names: Sequence[Identifier] = ()
    ) -> Callable[[TemplateBody], SharedExampleTemplate]:
        """Decorator form of `define_shared_examples`."""

        def decorator(body: TemplateBody) -> SharedExampleTemplate:
            return self.define_shared_examples(name, parameter_names, body)

        return decorator

    def close(self) -> None:
        """Freeze every root group and the template table."""
        for root in self.roots:
            root.close()
        self._closed = True

    def groups(self) -> Iterator[GroupNode]:
        for root in self.roots:
            yield from root.walk()

    def examples(self) -> Iterator[ExampleDef]:
        """Iterate over every example in declaration order."""
        for root in self.roots:
            yield from root.walk_examples()
