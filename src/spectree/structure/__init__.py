"""
SpecTree structure components.

This package provides the declaration tree, the helper registry and the
shared example template table.
"""

from spectree.structure.builder import (
    ExampleDef,
    GroupNode,
    GroupState,
    Inclusion,
    Suite,
)
from spectree.structure.registry import (
    HelperDefinition,
    HelperRegistry,
    SharedExampleTemplate,
    TemplateRegistry,
)

__all__ = [
    "ExampleDef",
    "GroupNode",
    "GroupState",
    "Inclusion",
    "Suite",
    "HelperDefinition",
    "HelperRegistry",
    "SharedExampleTemplate",
    "TemplateRegistry",
]
