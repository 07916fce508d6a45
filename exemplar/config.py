"""Run configuration dataclass.

Controls how an ExampleGroup run behaves and which reporters receive
finalized results.
"""

from dataclasses import dataclass, field


@dataclass
class RunConfig:
    """Settings for a single group run."""
    # Stop starting new examples after the first failure
    fail_fast: bool = False

    # Time each example's before hooks, body and after hooks; print the slowest
    profile_examples: bool = False
    profile_slowest: int = 10

    # Warn about faults dropped because an earlier fault was already recorded
    report_suppressed_faults: bool = True

    # Reporter names looked up in ReporterRegistry
    reporters: list[str] = field(default_factory=lambda: ["console"])
    output_dir: str = "output"
    run_name: str = "exemplar"

    def __post_init__(self):
        if not isinstance(self.reporters, (list, tuple)):
            raise ValueError(f"reporters must be a list of names, got {type(self.reporters).__name__}")
        if len(set(self.reporters)) != len(self.reporters):
            raise ValueError(f"reporters must not contain duplicates, got {list(self.reporters)}")
        if not self.run_name:
            raise ValueError("run_name must be a non-empty string")
        if not self.output_dir:
            raise ValueError("output_dir must be a non-empty string")
        if self.profile_slowest < 1:
            raise ValueError(f"profile_slowest must be at least 1, got {self.profile_slowest}")
