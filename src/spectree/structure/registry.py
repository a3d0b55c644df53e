"""
Registry classes for helpers and shared example templates.

HelperRegistry holds the helper recipes declared on one group and resolves
names through the enclosing groups. TemplateRegistry is the suite-wide table
of shared example templates that inclusions refer to by name.
"""

import logging
from typing import TYPE_CHECKING, Iterator

from attrs import field, frozen

from spectree.core.location import UNKNOWN_LOCATION, SourceLocation
from spectree.core.types import ComputeFn, Identifier, TemplateBody
from spectree.exceptions import (
    DuplicateHelperError,
    DuplicateTemplateError,
    ErrorContext,
    ErrorLevel,
    UndefinedHelperError,
    UnknownTemplateError,
)

if TYPE_CHECKING:
    from spectree.structure.builder import GroupNode

logger = logging.getLogger(__name__)


@frozen
class HelperDefinition:
    """A named, lazily evaluated helper recipe declared on a group."""

    name: Identifier
    compute: ComputeFn
    location: SourceLocation = UNKNOWN_LOCATION
    eager: bool = False


class HelperRegistry:
    """Registry of the helper definitions declared directly on one group.

    Definitions keep their declaration order. A name may be defined once per
    registry; redefining it on a nested group shadows the outer definition,
    which is resolved by `lookup` walking from the nearest group outward.
    """

    def __init__(self):
        self.definitions: dict[Identifier, HelperDefinition] = {}

    def define(
        self,
        definition: HelperDefinition,
        group_path: str,
        error_level: ErrorLevel = ErrorLevel.USER,
    ) -> None:
        """
        Register a helper definition on this group.

        Params:
            definition: The helper recipe to store
            group_path: Path of the owning group for error reporting
            error_level: Level of detail for raised errors

        Raises:
            DuplicateHelperError: If the name is already defined on this group
        """
        existing = self.definitions.get(definition.name)
        if existing is not None:
            raise DuplicateHelperError(
                definition.name,
                group_path,
                ErrorContext(
                    group_path=group_path,
                    location=definition.location,
                    detail=f"first defined at {existing.location}",
                ),
                error_level,
            )
        self.definitions[definition.name] = definition

    def get(self, name: Identifier) -> HelperDefinition | None:
        """Get a definition declared on this group only."""
        return self.definitions.get(name)

    def names(self) -> list[Identifier]:
        return list(self.definitions)

    def __contains__(self, name: object) -> bool:
        return name in self.definitions

    def __iter__(self) -> Iterator[HelperDefinition]:
        return iter(self.definitions.values())

    def __len__(self) -> int:
        return len(self.definitions)

    @staticmethod
    def lookup(
        name: Identifier,
        starting_node: "GroupNode",
        context: ErrorContext | None = None,
    ) -> HelperDefinition:
        """
        Find the nearest definition of a helper.

        Walks from `starting_node` through its ancestors to the root and
        returns the first definition found. The recipe is returned, never
        evaluated.

        Params:
            name: Helper name to look up
            starting_node: Group where the lookup starts
            context: Location of the reference, used if the lookup fails

        Returns:
            The nearest HelperDefinition for `name`

        Raises:
            UndefinedHelperError: If no group in the chain defines `name`
        """
        node: "GroupNode | None" = starting_node
        while node is not None:
            definition = node.helpers.get(name)
            if definition is not None:
                return definition
            node = node.parent
        raise UndefinedHelperError(
            name,
            starting_node.path,
            HelperRegistry.visible_names(starting_node),
            context or ErrorContext(group_path=starting_node.path),
            starting_node.error_level,
        )

    @staticmethod
    def visible_definitions(starting_node: "GroupNode") -> list[HelperDefinition]:
        """
        Collect the definitions visible from a group, nearest winning.

        Returns:
            Definitions ordered outermost group first, declaration order within
            a group; shadowed definitions are omitted
        """
        chain = []
        node: "GroupNode | None" = starting_node
        while node is not None:
            chain.append(node)
            node = node.parent

        visible: dict[Identifier, HelperDefinition] = {}
        for node in reversed(chain):
            for definition in node.helpers:
                # Re-insert so a shadowing definition takes the inner position
                visible.pop(definition.name, None)
                visible[definition.name] = definition
        return list(visible.values())

    @staticmethod
    def visible_names(starting_node: "GroupNode") -> list[Identifier]:
        """Get the helper names visible from a group."""
        return sorted(d.name for d in HelperRegistry.visible_definitions(starting_node))


# Attribute names of BoundArguments that a parameter would hide behind
RESERVED_PARAMETER_NAMES = frozenset({"expression", "get", "items", "keys", "values"})


def _unique_parameters(instance, attribute, value) -> None:
    seen = set()
    for name in value:
        if not isinstance(name, str) or not name:
            raise ValueError(f"Parameter names must be non-empty strings, got {name!r}")
        if name in RESERVED_PARAMETER_NAMES:
            raise ValueError(
                f"Parameter name '{name}' is reserved, choose another "
                f"(reserved: {', '.join(sorted(RESERVED_PARAMETER_NAMES))})"
            )
        if name in seen:
            raise ValueError(f"Duplicate parameter name '{name}'")
        seen.add(name)


@frozen
class SharedExampleTemplate:
    """A named, parameterized example body shared between groups."""

    name: Identifier
    parameter_names: tuple[Identifier, ...] = field(
        converter=tuple, validator=_unique_parameters
    )
    body: TemplateBody
    location: SourceLocation = UNKNOWN_LOCATION

    @property
    def arity(self) -> int:
        return len(self.parameter_names)


class TemplateRegistry:
    """Suite-wide table of shared example templates keyed by name.

    Inclusions keep a reference to the registered template object; templates
    are never copied into the including group.
    """

    def __init__(self, error_level: ErrorLevel = ErrorLevel.USER):
        self.templates: dict[Identifier, SharedExampleTemplate] = {}
        self.error_level = error_level

    def define(self, template: SharedExampleTemplate) -> SharedExampleTemplate:
        """
        Register a shared example template.

        Params:
            template: Template to register

        Returns:
            The registered template

        Raises:
            DuplicateTemplateError: If a template with the same name exists
        """
        existing = self.templates.get(template.name)
        if existing is not None:
            raise DuplicateTemplateError(
                template.name,
                ErrorContext(
                    location=template.location,
                    detail=f"first defined at {existing.location}",
                ),
                self.error_level,
            )
        self.templates[template.name] = template
        logger.debug(
            "Registered shared examples %r with parameters %s",
            template.name,
            list(template.parameter_names),
        )
        return template

    def get(
        self, name: Identifier, context: ErrorContext | None = None
    ) -> SharedExampleTemplate:
        """
        Get a template by name.

        Params:
            name: Template name
            context: Location of the reference, used if the lookup fails

        Raises:
            UnknownTemplateError: If no template is registered under `name`
        """
        template = self.templates.get(name)
        if template is None:
            raise UnknownTemplateError(
                name, sorted(self.templates), context, self.error_level
            )
        return template

    def has_template(self, name: Identifier) -> bool:
        return name in self.templates

    def names(self) -> list[Identifier]:
        return list(self.templates)
