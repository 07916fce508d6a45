"""Tests for exemplar/config.py and exemplar/reporters/registry.py: RunConfig validation and reporter lookup."""

import pytest

from exemplar.config import RunConfig
from exemplar.reporters import (
    ConsoleReporter, JSONLReporter, Reporter, ReporterRegistry, build_reporters,
)


class TestRunConfig:

    def test_defaults(self):
        config = RunConfig()
        assert config.fail_fast is False
        assert config.profile_examples is False
        assert config.report_suppressed_faults is True
        assert config.reporters == ["console"]

    def test_default_reporters_not_shared(self):
        a, b = RunConfig(), RunConfig()
        a.reporters.append("jsonl")
        assert b.reporters == ["console"]

    def test_reporters_must_be_list(self):
        with pytest.raises(ValueError, match="list of names"):
            RunConfig(reporters="console")

    def test_duplicate_reporters_rejected(self):
        with pytest.raises(ValueError, match="duplicates"):
            RunConfig(reporters=["console", "console"])

    def test_empty_run_name_rejected(self):
        with pytest.raises(ValueError, match="run_name"):
            RunConfig(run_name="")

    def test_empty_output_dir_rejected(self):
        with pytest.raises(ValueError, match="output_dir"):
            RunConfig(output_dir="")

    def test_profile_slowest_must_be_positive(self):
        with pytest.raises(ValueError, match="profile_slowest"):
            RunConfig(profile_slowest=0)


class TestReporterRegistry:

    @pytest.fixture
    def scratch_reporter(self):
        """A throwaway Reporter subclass, unregistered again after the test."""
        class ScratchReporter(Reporter):
            name = "scratch"

            def example_finished(self, example, result):
                pass

        yield ScratchReporter
        ReporterRegistry.unregister("scratch")

    def test_builtin_reporters_registered(self):
        assert ReporterRegistry.get("console") is ConsoleReporter
        assert ReporterRegistry.get("jsonl") is JSONLReporter
        assert {"console", "jsonl"} <= set(ReporterRegistry.names())

    def test_unknown_name_lists_available(self):
        with pytest.raises(ValueError, match="Unknown reporter: 'nope'. Available:"):
            ReporterRegistry.get("nope")

    def test_register_returns_class(self, scratch_reporter):
        assert ReporterRegistry.register(scratch_reporter) is scratch_reporter
        assert ReporterRegistry.get("scratch") is scratch_reporter

    def test_register_is_idempotent(self, scratch_reporter):
        ReporterRegistry.register(scratch_reporter)
        ReporterRegistry.register(scratch_reporter)
        assert ReporterRegistry.names().count("scratch") == 1

    def test_name_clash_rejected(self, scratch_reporter):
        """A second class cannot take a name that is already registered."""
        class Impostor(scratch_reporter):
            pass

        ReporterRegistry.register(scratch_reporter)
        with pytest.raises(ValueError, match="already used by ScratchReporter"):
            ReporterRegistry.register(Impostor)

    def test_non_reporter_rejected(self):
        class NotAReporter:
            name = "nope"

        with pytest.raises(TypeError, match="Reporter subclasses"):
            ReporterRegistry.register(NotAReporter)

    def test_inherited_base_name_rejected(self):
        class Nameless(Reporter):
            def example_finished(self, example, result):
                pass

        with pytest.raises(TypeError, match="must define its own 'name'"):
            ReporterRegistry.register(Nameless)

    def test_build_reporters_uses_registered_class(self, scratch_reporter):
        ReporterRegistry.register(scratch_reporter)
        reporters = build_reporters(RunConfig(reporters=["scratch"]))
        assert len(reporters) == 1
        assert isinstance(reporters[0], scratch_reporter)
