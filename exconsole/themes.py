from rich.style import Style
from rich.theme import Theme


class ExDarkTheme(Theme):
    """
    Dark colour palette for exemplar console output.

    Defines the named styles used by ExConsole message types and by the
    reporters (example status, fault kinds, timings, tables).

    :ivar BLUE: Light blue used for notifications and rules.
    :ivar GREEN: Green used for passed examples and success messages.
    :ivar YELLOW: Yellow used for pending examples and warnings.
    :ivar RED: Red used for failed examples and errors.
    :ivar MED_GREY: Medium grey for subtle text and details.
    """
    BLUE = '#61AFEF'
    RICH_BLUE = '#4B6BFF'
    CYAN = '#56B6C2'
    GREEN = '#98C379'
    YELLOW = '#E5C07B'
    RED = '#E06C75'
    ORANGE = '#D19A66'
    MED_GREY = '#8A8F98'
    PURPLE = '#663399'
    LAVENDER = '#B87FD9'
    MAGENTA = '#BE50AE'
    DEFAULT_TEXT = '#F8E8EC'

    def __init__(self):
        super().__init__({
            # Basic colors
            "blue": Style(color=self.BLUE),
            "cyan": Style(color=self.CYAN),
            "green": Style(color=self.GREEN),
            "yellow": Style(color=self.YELLOW),
            "red": Style(color=self.RED),
            "orange": Style(color=self.ORANGE),
            "med_grey": Style(color=self.MED_GREY),
            "purple": Style(color=self.PURPLE),
            "lavender": Style(color=self.LAVENDER),
            "magenta": Style(color=self.MAGENTA),
            "default": Style(color=self.DEFAULT_TEXT),

            # Content type styles
            "notification.icon": Style(color=self.PURPLE),
            "notification.content": Style(color=self.BLUE),
            "success.icon": Style(color=self.GREEN),
            "success": Style(color=self.GREEN, bold=True),
            "warning.icon": Style(color=self.ORANGE),
            "warning.content": Style(color=self.YELLOW),
            "error.icon": Style(color=self.RED),
            "error.content": Style(color=self.RED),
            "info.content": Style(color=self.DEFAULT_TEXT),

            # Rules
            "rule.text": Style(color=self.ORANGE),
            "rule.line": Style(color=self.BLUE),

            # Time display
            "time": Style(color=self.ORANGE),

            # Example status
            "status.passed": Style(color=self.GREEN),
            "status.failed": Style(color=self.RED, bold=True),
            "status.pending": Style(color=self.YELLOW),
            "status.not_run": Style(color=self.MED_GREY),
            "fault.assertion": Style(color=self.RED),
            "fault.runtime": Style(color=self.MAGENTA),

            # Semantic text roles
            "label": Style(color=self.MED_GREY),
            "detail": Style(color=self.MED_GREY),
            "description": Style(color=self.MED_GREY, italic=True),
            "metric.value": Style(color=self.CYAN),
            "group.name": Style(color=self.LAVENDER, bold=True),
            "table.header": Style(color=self.MED_GREY, bold=True),
            "divider": Style(color=self.MED_GREY),
        })
