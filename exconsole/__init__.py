from .config import ConsoleConfig, ConsoleMode, TimeFormat
from .themes import ExDarkTheme
from .utils import apply_style, subtle
from .exconsole import ExConsole

__all__ = [
    "ExConsole",
    "ConsoleConfig",
    "ConsoleMode",
    "TimeFormat",
    "ExDarkTheme",
    "apply_style",
    "subtle",
]
