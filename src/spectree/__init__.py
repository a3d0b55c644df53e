"""
SpecTree - a declarative test-definition engine with memoized helpers

SpecTree builds trees of example groups whose helpers are lazily computed
and memoized once per example, and whose shared examples can take deferred
references to helpers resolved inside each running example.
"""

from importlib.metadata import version

from spectree.config import SuiteConfig
from spectree.core.arguments import deferred, literal
from spectree.execution.runner import Runner, RunReport, run
from spectree.execution.scope import ExampleScope, current_scope, resolve
from spectree.structure.builder import ExampleDef, GroupNode, Suite

__version__ = version("spectree")

__all__ = [
    "__version__",
    "Suite",
    "SuiteConfig",
    "GroupNode",
    "ExampleDef",
    "ExampleScope",
    "Runner",
    "RunReport",
    "current_scope",
    "deferred",
    "literal",
    "resolve",
    "run",
]
