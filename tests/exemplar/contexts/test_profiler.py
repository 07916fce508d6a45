"""Tests for exemplar/contexts/profiler.py: per-example phase timings."""

import time

import pytest

from exemplar.config import RunConfig
from exemplar.contexts import ExampleProfiler
from exemplar.runner import ExampleRunner


@pytest.fixture
def examples(group):
    return [group.example(name, lambda ctx: None) for name in ("fast", "slow")]


class TestExampleProfiler:

    def test_disabled_records_nothing(self, examples):
        profiler = ExampleProfiler(enabled=False)
        with profiler.example(examples[0]):
            with profiler.phase("body"):
                pass
        assert profiler.timings == {}

    def test_phase_outside_example_is_ignored(self):
        profiler = ExampleProfiler(enabled=True)
        with profiler.phase("body"):
            pass
        assert profiler.timings == {}

    def test_records_are_keyed_by_example(self, examples):
        """Each example gets its own before/body/after breakdown."""
        fast, slow = examples
        profiler = ExampleProfiler(enabled=True)
        for example in examples:
            with profiler.example(example):
                with profiler.phase("before"):
                    pass
                with profiler.phase("body"):
                    if example is slow:
                        time.sleep(0.01)
        timings = profiler.timings
        assert set(timings) == {fast, slow}
        assert set(timings[slow]) == {"before", "body", "after"}
        assert timings[slow]["body"] > timings[fast]["body"]
        assert timings[fast]["after"] == 0.0

    def test_phase_recorded_when_block_raises(self, examples):
        profiler = ExampleProfiler(enabled=True)
        with profiler.example(examples[0]):
            with pytest.raises(RuntimeError):
                with profiler.phase("body"):
                    time.sleep(0.001)
                    raise RuntimeError("boom")
        assert profiler.timings[examples[0]]["body"] > 0.0

    def test_rerun_replaces_record(self, examples):
        profiler = ExampleProfiler(enabled=True)
        for _ in range(2):
            with profiler.example(examples[0]):
                with profiler.phase("body"):
                    pass
        assert len(profiler.timings) == 1

    def test_report_sorted_slowest_first(self, examples, capture_console):
        fast, slow = examples
        profiler = ExampleProfiler(enabled=True, slowest=1)
        for example in (fast, slow):
            with profiler.example(example):
                with profiler.phase("body"):
                    if example is slow:
                        time.sleep(0.01)
        rows = profiler.report()
        assert [row["example"] for row in rows] == [slow.full_description, fast.full_description]
        assert rows[0]["total_ms"] >= rows[0]["body_ms"] > 0.0
        output = capture_console()
        assert "Slowest 1 of 2 examples" in output
        assert slow.full_description in output
        assert fast.full_description not in output

    def test_report_empty(self, capture_console):
        assert ExampleProfiler(enabled=True).report() == []
        assert capture_console() == ""

    def test_reset(self, examples):
        profiler = ExampleProfiler(enabled=True)
        with profiler.example(examples[0]):
            pass
        profiler.reset()
        assert profiler.timings == {}


class TestProfiledRun:

    def test_group_run_prints_breakdown(self, group, capture_console):
        """profile_examples=True prints a before/body/after row per example."""
        group.before(lambda ctx: None)
        group.example("profiled", lambda ctx: None)
        assert group.run(RunConfig(reporters=[], profile_examples=True))
        output = capture_console()
        assert "example profiler" in output
        assert "group description profiled" in output
        for column in ("before", "body", "after", "total"):
            assert column in output

    def test_runner_times_every_phase(self, group):
        runner = ExampleRunner(RunConfig(reporters=[], profile_examples=True))
        example = group.example("timed", lambda ctx: None)
        runner.run(example)
        assert set(runner.profiler.timings[example]) == {"before", "body", "after"}
