from enum import Enum

import typer

from retype.common.messaging import protocols


class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


LEVEL_ORDER = {"debug": 10, "info": 20, "success": 25, "warning": 30, "error": 40}


class CliRenderer(protocols.Renderer):
    """
    Renders messages to the command line using Typer for colored output.
    Messages below the configured level are dropped.
    """

    def __init__(self, loglevel: LogLevel = LogLevel.INFO):
        self._threshold = LEVEL_ORDER[loglevel.value]

    def render(self, message: str, level: str) -> None:
        if LEVEL_ORDER.get(level, 20) < self._threshold:
            return

        color = None
        if level == "success":
            color = typer.colors.GREEN
        elif level == "warning":
            color = typer.colors.YELLOW
        elif level == "error":
            color = typer.colors.RED
        elif level == "debug":
            color = typer.colors.BRIGHT_BLACK

        typer.secho(message, fg=color)
