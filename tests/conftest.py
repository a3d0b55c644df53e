"""
Shared test fixtures and utilities for the spectree test suite.
"""

from types import SimpleNamespace

import pytest

from spectree import Suite, SuiteConfig
from spectree.exceptions import ErrorLevel
from spectree.execution import ExampleScope


@pytest.fixture
def suite():
    """Fresh suite with default configuration."""
    return Suite()


@pytest.fixture
def developer_suite():
    """Suite whose errors show full source paths."""
    return Suite(SuiteConfig(error_level=ErrorLevel.DEVELOPER))


@pytest.fixture
def combines(suite):
    """Register the "combines" template, which records what it joined.

    The template body joins its two parameters with a space, appends the
    result to `combines.seen` and compares it with the group's subject.
    """
    seen = []

    @suite.shared_examples("combines", ["first", "second"])
    def template(scope, args):
        combined = f"{args['first']} {args['second']}"
        seen.append(combined)
        assert scope.subject == combined

    return SimpleNamespace(template=template, seen=seen)


@pytest.fixture
def make_scope():
    """Build the scope a runner would build for an example."""

    def build(example):
        return ExampleScope(example.group, example)

    return build
