"""
Tests for shared example parameter binding.

Deferred references must be resolved against the scope of the example that
runs the shared body, at the time the body reads the parameter.
"""

import pytest

from spectree import deferred, literal
from spectree.core.arguments import Deferred
from spectree.exceptions import UndefinedHelperError
from spectree.execution import BoundArguments, ExampleScope


class TestBoundArguments:
    """Test the lazy parameter mapping."""

    def test_literal_and_deferred_values(self, suite):
        """Test both kinds of argument produce their values."""
        with suite.describe("full_name") as group:
            group.let("first_name", lambda scope: "Foo")

        bound = BoundArguments(
            ExampleScope(group), ["first", "second"], [deferred("first_name"), literal("Bar")]
        )

        assert bound["first"] == "Foo"
        assert bound.second == "Bar"
        assert dict(bound) == {"first": "Foo", "second": "Bar"}
        assert list(bound) == ["first", "second"]
        assert len(bound) == 2

    def test_deferred_resolved_on_access_only(self, suite):
        """Test binding does not resolve anything until a parameter is read."""
        calls = []

        with suite.describe("full_name") as group:
            group.let("first_name", lambda scope: calls.append(1) or "Foo")

        scope = ExampleScope(group)
        bound = BoundArguments(scope, ["first"], [deferred("first_name")])

        assert calls == []
        assert not scope.is_resolved("first_name")

        assert bound["first"] == "Foo"
        assert bound["first"] == "Foo"
        assert calls == [1]

    def test_deferred_shares_memo_with_direct_resolution(self, suite):
        """Test a parameter and a direct resolve see the same computed value."""
        with suite.describe("full_name") as group:
            group.let("token", lambda scope: object())

        scope = ExampleScope(group)
        bound = BoundArguments(scope, ["value"], [deferred("token")])

        assert bound.value is scope.resolve("token")

    def test_expression_is_available_unevaluated(self, suite):
        """Test the raw argument expression can be inspected."""
        with suite.describe("full_name") as group:
            pass

        bound = BoundArguments(ExampleScope(group), ["first"], [deferred("first_name")])

        assert bound.expression("first") == Deferred("first_name")

    def test_unknown_parameter(self, suite):
        """Test missing parameters raise KeyError / AttributeError."""
        with suite.describe("full_name") as group:
            pass

        bound = BoundArguments(ExampleScope(group), [], [])

        with pytest.raises(KeyError):
            bound["missing"]
        with pytest.raises(AttributeError):
            bound.missing

    def test_undefined_deferred_helper_fails_on_access(self, suite):
        """Test an unresolvable reference fails only when read."""
        with suite.describe("full_name") as group:
            pass

        bound = BoundArguments(ExampleScope(group), ["first"], [deferred("nope")])

        with pytest.raises(UndefinedHelperError):
            bound["first"]

    def test_membership_does_not_resolve(self, suite):
        """Test `in` checks parameter names without computing deferred helpers."""
        calls = []

        with suite.describe("full_name") as group:
            group.let("first_name", lambda scope: calls.append(1) or "Foo")

        scope = ExampleScope(group)
        bound = BoundArguments(
            scope, ["first", "second"], [deferred("first_name"), deferred("nope")]
        )

        assert "first" in bound
        assert "second" in bound
        assert "third" not in bound
        assert calls == []
        assert not scope.is_resolved("first_name")

    def test_length_mismatch_rejected(self, suite):
        """Test parameters and arguments must pair up."""
        with suite.describe("full_name") as group:
            pass

        with pytest.raises(ValueError):
            BoundArguments(ExampleScope(group), ["first", "second"], [literal(1)])

    def test_repr_shows_expressions(self, suite):
        """Test the repr shows the expressions, not resolved values."""
        with suite.describe("full_name") as group:
            pass

        bound = BoundArguments(
            ExampleScope(group), ["first", "second"], [deferred("first_name"), literal(3)]
        )

        assert repr(bound) == "BoundArguments(first=deferred('first_name'), second=3)"


class TestDeferredInclusion:
    """Test deferred inclusion arguments resolve per including group."""

    def test_sibling_groups_bind_same_parameter_differently(self, suite, make_scope):
        """Test one template sees each including group's own helper."""
        seen = []

        @suite.shared_examples("records", ["value"])
        def records(scope, args):
            seen.append(args["value"])

        with suite.describe("Parent") as parent:
            with parent.group("left") as left:
                left.let("source", lambda scope: "left value")
                left_example = left.include_shared_examples("records", deferred("source"))
            with parent.group("right") as right:
                right.let("other", lambda scope: "right value")
                right_example = right.include_shared_examples("records", deferred("other"))

        left_example.run(make_scope(left_example))
        right_example.run(make_scope(right_example))

        assert seen == ["left value", "right value"]

    def test_deferred_reference_to_subject(self, suite, make_scope):
        """Test "subject" can be passed by reference."""
        seen = []
        suite.define_shared_examples("records", ["value"], lambda scope, args: seen.append(args.value))

        with suite.describe("User") as user:
            user.subject(lambda scope: "the subject")
            example = user.include_shared_examples("records", deferred("subject"))

        example.run(make_scope(example))

        assert seen == ["the subject"]

    def test_deferred_uses_shadowing_in_nested_group(self, suite, make_scope):
        """Test a reference resolves to the nearest definition for the including group."""
        seen = []
        suite.define_shared_examples("records", ["value"], lambda scope, args: seen.append(args.value))

        with suite.describe("User") as user:
            user.let("first_name", lambda scope: "Outer")
            with user.group("nested") as nested:
                nested.let("first_name", lambda scope: "Inner")
                example = nested.include_shared_examples("records", deferred("first_name"))

        example.run(make_scope(example))

        assert seen == ["Inner"]
