from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo

from rich.console import Console, RenderableType
from rich.markup import escape
from rich.style import Style

from .config import ConsoleConfig, ConsoleMode
from .themes import ExDarkTheme


class ExConsole:
    """
    Singleton console used for every piece of user-visible output in exemplar.

    The console can run in three modes. NORMAL prints styled output to the
    terminal, LOGGING writes plain text to ``ConsoleConfig.log_file`` and NULL
    discards everything (used by the test suite). Constructing ``ExConsole()``
    always returns the same instance; passing a different ``ConsoleConfig``
    re-initializes it.

    :ivar _instance: Singleton instance of the `ExConsole` class.
    :vartype _instance: ExConsole
    :ivar _console: The rich console that output is written to.
    :vartype _console: Console | None
    :ivar _cfg: Configuration for the console behavior and attributes.
    :vartype _cfg: ConsoleConfig | None
    :ivar _log_file_handle: Opened file handle for logging mode, if applicable.
    :vartype _log_file_handle: Any | None
    :ivar _mode: The operating mode for the console.
    :vartype _mode: ConsoleMode | None
    """
    _instance = None
    _console: Console|None = None
    _cfg: ConsoleConfig|None = None
    _log_file_handle: Any|None = None
    _mode: ConsoleMode|None = None
    _tz_info: ZoneInfo|None = None

    _ICONS = {
        "notification": ("notification.icon", "notification.content", "●"),
        "success": ("success.icon", "success", "✔"),
        "warning": ("warning.icon", "warning.content", "▲"),
        "error": ("error.icon", "error.content", "✖"),
    }

    def __new__(cls, cfg: ConsoleConfig|None = None):
        """
        Return the singleton, creating it on first use.

        When the singleton already exists and a different configuration is
        supplied, the console is re-initialized with it.

        :param cfg: Optional configuration object. If None is provided on
            first use, defaults are applied.
        :returns: The globally unique console instance.
        """
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialize(cfg)
        elif cfg is not None and cls._instance._cfg != cfg:
            cls._instance._initialize(cfg)
        return cls._instance

    def _initialize(self, cfg: ConsoleConfig|None = None):
        """
        Set up the rich console for the configured mode.

        :param cfg: Console settings. Defaults to ``ConsoleConfig()``.
        :raises ValueError: When using LOGGING mode without a `log_file`.
        :raises RuntimeError: When the log file cannot be opened.
        """
        # Close existing log file if re-initializing
        if self._log_file_handle:
            self._log_file_handle.close()
            self._log_file_handle = None

        self._cfg = cfg if cfg is not None else ConsoleConfig()
        self._mode = self._cfg.mode
        self._tz_info = ZoneInfo(self._cfg.timezone) if self._cfg.timezone else None

        theme = ExDarkTheme()

        if self._mode == ConsoleMode.NULL:
            self._console = Console(quiet=True)
            return

        if self._mode == ConsoleMode.LOGGING:
            if not self._cfg.log_file:
                raise ValueError("log_file must be specified in ConsoleConfig for logging mode")
            try:
                self._log_file_handle = open(self._cfg.log_file, "a+", encoding="utf-8")
            except OSError as e:
                raise RuntimeError(f"Failed to open log file {self._cfg.log_file}: {e}") from e
            self._console = Console(
                file=self._log_file_handle,
                theme=theme,
                force_terminal=False,
                no_color=True,
                width=self._cfg.width or 120,
            )
            return

        if self._mode == ConsoleMode.NORMAL:
            self._console = Console(
                theme=theme,
                no_color=not self._cfg.use_colors,
                highlight=False,
                width=self._cfg.width,
            )
            return

        raise ValueError(f"Unsupported console mode: {self._mode}")

    def _should_do_print(self):
        return self._mode != ConsoleMode.NULL

    def print(self, content: str|RenderableType = "", style: str|Style = ""):
        """Print plain markup text or any rich renderable."""
        if not self._should_do_print():
            return
        if isinstance(content, str):
            self._console.print(self._with_time(content), style=style or None)
        else:
            self._console.print(content, style=style or None)

    def print_notification(self, content: str):
        self._print_typed("notification", content)

    def print_warning(self, content: str):
        self._print_typed("warning", content)

    def print_error(self, content: str):
        self._print_typed("error", content)

    def print_success(self, content: str):
        self._print_typed("success", content)

    def rule(self, content: str = "", style: str|Style = "rule.line"):
        if self._should_do_print():
            self._console.rule(f"[rule.text]{content}[/rule.text]" if content else "", style=style)

    def _print_typed(self, kind: str, content: str):
        if not self._should_do_print():
            return
        icon_style, content_style, icon = self._ICONS[kind]
        self._console.print(self._with_time(
            f"[{icon_style}]{icon}[/{icon_style}] [{content_style}]{escape(content)}[/{content_style}]"
        ))

    def _with_time(self, text: str) -> str:
        if not self._cfg.show_time:
            return text
        stamp = datetime.now(self._tz_info).strftime(self._cfg.time_format.value)
        return f"[time]{stamp}[/time] {text}"

