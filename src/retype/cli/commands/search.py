from typing import Optional

import typer

from retype.common import bus
from retype.cli.factories import echo_entity, make_project
from retype.refactor import SearchService
from retype.spec.exceptions import RetypeError
from retype.spec.models import EntityKind, SearchOptions


def search_command(
    ctx: typer.Context,
    name: Optional[str] = typer.Argument(
        None, help=bus.render_to_string("cli.argument.search_name.help")
    ),
    kind: Optional[EntityKind] = typer.Option(
        None, "--kind", "-k", help=bus.render_to_string("cli.option.kind.help")
    ),
    exported: Optional[bool] = typer.Option(
        None, "--exported/--private", help=bus.render_to_string("cli.option.exported.help")
    ),
    file: Optional[str] = typer.Option(
        None, "--file", "-f", help=bus.render_to_string("cli.option.file.help")
    ),
    regex: bool = typer.Option(
        False, "--regex", "-r", help=bus.render_to_string("cli.option.regex.help")
    ),
):
    project = make_project(ctx)
    options = SearchOptions(name=name, kind=kind, exported=exported, file=file, regex=regex)
    try:
        result = SearchService(project).search(options)
    except RetypeError as e:
        bus.error("error.generic", error=str(e))
        raise typer.Exit(code=1)

    if not result.entities:
        bus.warning("search.run.no_results")
        return

    for entity in result.entities:
        echo_entity(project, entity)
    bus.success(
        "search.run.summary",
        count=len(result.entities),
        files=result.total_files,
        ms=result.search_time_ms,
    )
