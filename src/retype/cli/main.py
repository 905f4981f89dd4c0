import logging
from pathlib import Path
from typing import Optional

import typer

from retype.common import bus
from .commands.extract import extract_command
from .commands.fix_imports import fix_imports_command
from .commands.references import references_command
from .commands.rename import rename_command
from .commands.search import search_command
from .commands.unused import unused_command
from .factories import CliState
from .rendering import CliRenderer, LogLevel

app = typer.Typer(
    name="retype",
    help=bus.render_to_string("cli.app.help"),
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    path: Path = typer.Option(
        Path("."),
        "--path",
        "-p",
        file_okay=False,
        dir_okay=True,
        help=bus.render_to_string("cli.option.path.help"),
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help=bus.render_to_string("cli.option.config.help"),
    ),
    loglevel: LogLevel = typer.Option(
        LogLevel.INFO,
        "--loglevel",
        help=bus.render_to_string("cli.option.loglevel.help"),
        case_sensitive=False,
    ),
):
    # The CLI is the composition root: it decides how messages are shown.
    bus.set_renderer(CliRenderer(loglevel=loglevel))
    logging.basicConfig(
        level=logging.DEBUG if loglevel is LogLevel.DEBUG else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = CliState(root_path=path.resolve(), tsconfig=config)


# Register commands
app.command(name="search", help=bus.render_to_string("cli.command.search.help"))(search_command)
app.command(name="rename", help=bus.render_to_string("cli.command.rename.help"))(rename_command)
app.command(name="extract", help=bus.render_to_string("cli.command.extract.help"))(
    extract_command
)
app.command(name="unused", help=bus.render_to_string("cli.command.unused.help"))(unused_command)
app.command(name="references", help=bus.render_to_string("cli.command.references.help"))(
    references_command
)
app.command(name="fix-imports", help=bus.render_to_string("cli.command.fix_imports.help"))(
    fix_imports_command
)


if __name__ == "__main__":
    app()
