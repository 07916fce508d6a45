"""Shared fixtures for exemplar unit tests."""

import io

import pytest
from rich.console import Console

from exconsole.config import ConsoleConfig, ConsoleMode
from exconsole.exconsole import ExConsole
from exconsole.themes import ExDarkTheme
from exemplar.config import RunConfig
from exemplar.group import ExampleGroup


# ---- Console singleton: force NULL mode before any test touches it ----

@pytest.fixture(autouse=True, scope="session")
def _silence_console():
    """Initialize ExConsole in NULL mode to suppress all output during tests.

    Session-scoped so the singleton is set once and stays NULL for the
    entire test run. Tests that assert on output use ``capture_console``.
    """
    ExConsole(ConsoleConfig(mode=ConsoleMode.NULL))


@pytest.fixture
def capture_console():
    """Swap ExConsole to NORMAL mode with a StringIO buffer.

    Yields a callable that returns the captured output as a string.
    Restores the original NULL-mode console on teardown.
    """
    console = ExConsole()
    original_console = console._console
    original_mode = console._mode

    buffer = io.StringIO()
    console._console = Console(
        file=buffer, width=300, highlight=False, no_color=True,
        theme=ExDarkTheme(),
    )
    console._mode = ConsoleMode.NORMAL

    def get_output():
        return buffer.getvalue()

    yield get_output

    # Restore original state
    console._console = original_console
    console._mode = original_mode


# ---- Group fixtures ----

@pytest.fixture
def quiet_config():
    """RunConfig with no reporters attached."""
    return RunConfig(reporters=[])


@pytest.fixture
def group():
    """Empty top-level group."""
    return ExampleGroup.describe('group description')


@pytest.fixture
def run_group(quiet_config):
    """Callable that runs a group without reporters and returns its success flag."""
    def _run(g, **overrides):
        config = RunConfig(**{'reporters': [], **overrides}) if overrides else quiet_config
        return g.run(config=config)
    return _run
