"""Tests for exemplar/group.py: declaration DSL, all-scoped hooks, fail-fast and run results."""

import pytest

from exemplar.errors import RegistryFrozenError, RuntimeFault, UsageFault
from exemplar.example import Example
from exemplar.group import ExampleGroup, describe
from exemplar.reporters import Reporter
from exemplar.result import ExecutionStatus


class RecordingReporter(Reporter):
    name = "recording"

    def __init__(self):
        self.events = []
        self.flushed = 0

    def example_started(self, example):
        self.events.append(("started", example.description))

    def example_finished(self, example, result):
        self.events.append(("finished", example.description, result.status))

    def flush(self):
        self.flushed += 1


class TestDeclaration:

    def test_describe_function(self):
        group = describe("Stack", kind="unit")
        assert isinstance(group, ExampleGroup)
        assert group.parent is None
        assert group.metadata == {"kind": "unit"}

    def test_subject_and_description_joined(self):
        group = ExampleGroup.describe("Stack", "#push")
        assert group.description == "Stack #push"

    def test_context_creates_child(self):
        parent = ExampleGroup.describe("parent")
        child = parent.context("child")
        assert child.parent is parent
        assert parent.children == [child]
        assert child.top_level is parent
        assert child.lineage() == [parent, child]

    def test_context_manager_returns_group(self):
        parent = ExampleGroup.describe("parent")
        with parent.context("child") as child:
            child.it("works", lambda ctx: None)
        assert len(child.examples) == 1

    def test_example_with_body_returns_example(self, group):
        example = group.example("adds", lambda ctx: None)
        assert isinstance(example, Example)
        assert group.examples == [example]

    def test_bare_decorator(self, group):
        """@group.example applied to a function takes its description from the name."""
        @group.example
        def adds_two_numbers(ctx):
            pass

        assert isinstance(adds_two_numbers, Example)
        assert adds_two_numbers.description == "adds two numbers"

    def test_decorator_with_description_and_metadata(self, group):
        @group.it("adds", demo="data")
        def _(ctx):
            pass

        assert isinstance(_, Example)
        assert _.description == "adds"
        assert _.metadata["demo"] == "data"
        assert len(group.examples) == 1

    def test_examples_keep_declaration_order(self, group, run_group):
        order = []
        for name in ("c", "a", "b"):
            group.example(name, lambda ctx: order.append(ctx.description))
        run_group(group)
        assert order == ["c", "a", "b"]

    def test_hook_decorator_forms(self, group):
        """Hooks register with @decorator, @decorator(scope) and (scope, fn)."""
        @group.before
        def one(ctx):
            pass

        @group.before("all")
        def two(ctx):
            pass

        group.after("each", lambda ctx: None)
        assert len(group.hook_registry) == 3
        assert one.__name__ == "one"
        assert two.__name__ == "two"

    def test_around_all_rejected(self, group):
        with pytest.raises(UsageFault):
            group.around("all", lambda ctx, example: example.run())

    def test_all_examples_includes_descendants(self):
        root = ExampleGroup.describe("root")
        a = root.example("a", lambda ctx: None)
        child = root.context("child")
        b = child.example("b", lambda ctx: None)
        assert root.all_examples() == [a, b]


class TestAllScopedHooks:

    def test_before_and_after_all_run_once(self, group, run_group):
        calls = []
        group.before("all", lambda ctx: calls.append("before all"))
        group.after("all", lambda ctx: calls.append("after all"))
        group.before(lambda ctx: calls.append("before each"))
        group.example("one", lambda ctx: None)
        group.example("two", lambda ctx: None)
        run_group(group)
        assert calls == ["before all", "before each", "before each", "after all"]

    def test_after_all_reverse_order(self, group, run_group):
        calls = []
        group.after("all", lambda ctx: calls.append(1))
        group.after("all", lambda ctx: calls.append(2))
        run_group(group)
        assert calls == [2, 1]

    def test_before_all_receives_group_context(self, group, run_group):
        seen = []
        group.before("all", lambda ctx: seen.append((ctx.example_group, ctx.in_block)))
        run_group(group)
        assert seen == [(group, False)]

    def test_before_all_fault_fails_every_example_without_running(self, run_group):
        """Examples under a failed before(:all) are failed with a RuntimeFault and never run."""
        ran = []
        calls = []
        root = ExampleGroup.describe("root")

        def broken(ctx):
            raise ConnectionError("db down")

        root.before("all", broken)
        root.after("all", lambda ctx: calls.append("root after all"))
        first = root.example("first", lambda ctx: ran.append("first"))
        child = root.context("child")
        child.before("all", lambda ctx: calls.append("child before all"))
        second = child.example("second", lambda ctx: ran.append("second"))

        assert run_group(root) is False
        assert ran == []
        assert calls == ["root after all"]
        for example in (first, second):
            result = example.execution_result
            assert result.status is ExecutionStatus.FAILED
            assert isinstance(result.exception_encountered, RuntimeFault)
            assert isinstance(result.exception_encountered.cause, ConnectionError)
            assert result.exception_encountered.hook_name.endswith("broken")

    def test_before_all_fault_stops_later_before_all(self, group, run_group):
        calls = []

        def broken(ctx):
            raise RuntimeError("boom")

        group.before("all", broken)
        group.before("all", lambda ctx: calls.append("second"))
        group.example("x", lambda ctx: None)
        run_group(group)
        assert calls == []

    def test_after_all_fault_is_warning_only(self, group, run_group, capture_console):
        """after(:all) faults do not change example results."""
        def broken(ctx):
            raise RuntimeError("cleanup failed")

        group.after("all", broken)
        example = group.example("x", lambda ctx: None)
        assert run_group(group) is True
        assert example.passed
        assert "cleanup failed" in capture_console()

    def test_sibling_group_unaffected_by_before_all_fault(self, run_group):
        root = ExampleGroup.describe("root")
        bad = root.context("bad")

        def broken(ctx):
            raise RuntimeError("boom")

        bad.before("all", broken)
        bad.example("x", lambda ctx: None)
        good = root.context("good")
        ok = good.example("y", lambda ctx: None)
        run_group(root)
        assert ok.passed


class TestFrozenRegistry:

    def test_registering_during_run_is_rejected(self, group, run_group):
        """Adding hooks from inside a running example is a usage fault."""
        group.example("x", lambda ctx: group.before(lambda c: None))
        with pytest.raises(RegistryFrozenError):
            run_group(group)

    def test_registry_editable_after_run(self, group, run_group):
        group.example("x", lambda ctx: None)
        run_group(group)
        group.before(lambda ctx: None)
        assert len(group.hook_registry) == 1


class TestFailFast:

    def test_stops_after_first_failure(self, run_group):
        root = ExampleGroup.describe("root")

        def broken(ctx):
            raise RuntimeError("boom")

        root.example("bad", broken)
        skipped = root.example("never", lambda ctx: None)
        child = root.context("child")
        nested = child.example("also never", lambda ctx: None)
        assert run_group(root, fail_fast=True) is False
        assert skipped.execution_result.status is ExecutionStatus.NOT_RUN
        assert nested.execution_result.status is ExecutionStatus.NOT_RUN

    def test_runs_everything_without_fail_fast(self, group, run_group):
        def broken(ctx):
            raise RuntimeError("boom")

        group.example("bad", broken)
        ok = group.example("ok", lambda ctx: None)
        run_group(group)
        assert ok.passed


class TestRunResults:

    def test_results_counts(self, group, run_group):
        def broken(ctx):
            raise RuntimeError("boom")

        group.example("pass", lambda ctx: None)
        group.example("fail", broken)
        group.example("pending")
        counts_before = group.results()
        assert counts_before[ExecutionStatus.NOT_RUN] == 3
        run_group(group)
        counts = group.results()
        assert counts[ExecutionStatus.PASSED] == 1
        assert counts[ExecutionStatus.FAILED] == 1
        assert counts[ExecutionStatus.PENDING] == 1
        assert counts[ExecutionStatus.NOT_RUN] == 0

    def test_rerun_replaces_result(self, group, run_group):
        """Running again seals a fresh result for each example."""
        example = group.example("x", lambda ctx: None)
        run_group(group)
        first = example.execution_result
        run_group(group)
        assert example.execution_result is not first
        assert example.passed

    def test_reporters_notified_in_order(self, group, quiet_config):
        reporter = RecordingReporter()
        group.example("one", lambda ctx: None)
        group.example("two")
        assert group.run(quiet_config, reporters=[reporter])
        assert reporter.events == [
            ("started", "one"),
            ("finished", "one", ExecutionStatus.PASSED),
            ("started", "two"),
            ("finished", "two", ExecutionStatus.PENDING),
        ]
        assert reporter.flushed == 1

    def test_reporters_flushed_on_usage_fault(self, group, quiet_config):
        reporter = RecordingReporter()
        group.before("all", lambda ctx: ctx.mark_pending())
        with pytest.raises(UsageFault):
            group.run(quiet_config, reporters=[reporter])
        assert reporter.flushed == 1

    def test_around_running_example_twice_is_usage_fault(self, group, run_group):
        def wrap(ctx, example):
            example.run()
            example.run()

        group.around(wrap)
        group.example("x", lambda ctx: None)
        with pytest.raises(UsageFault, match="more than once"):
            run_group(group)
