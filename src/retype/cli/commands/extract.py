from typing import Optional

import typer

from retype.common import bus
from retype.cli.factories import make_project, select_entity
from retype.refactor import ExtractService
from retype.spec.exceptions import RetypeError
from retype.spec.models import EntityKind


def extract_command(
    ctx: typer.Context,
    name: str = typer.Argument(
        ..., help=bus.render_to_string("cli.argument.entity_name.help")
    ),
    target: str = typer.Argument(
        ..., help=bus.render_to_string("cli.argument.target.help")
    ),
    kind: Optional[EntityKind] = typer.Option(
        None, "--kind", "-k", help=bus.render_to_string("cli.option.kind.help")
    ),
    file: Optional[str] = typer.Option(
        None, "--file", "-f", help=bus.render_to_string("cli.option.file.help")
    ),
    yes: bool = typer.Option(
        False, "-y", "--yes", help=bus.render_to_string("cli.option.yes.help")
    ),
):
    project = make_project(ctx)
    entity = select_entity(project, name, kind=kind, file=file)

    bus.info(
        "extract.run.plan",
        kind=entity.kind.value,
        name=entity.name,
        source=project.relative(entity.file_path),
        target=target,
    )
    confirmed = yes or typer.confirm(bus.render_to_string("extract.run.confirm"), default=False)
    if not confirmed:
        bus.error("extract.run.aborted")
        raise typer.Exit(code=1)

    try:
        result = ExtractService(project).extract(entity, target)
    except RetypeError as e:
        bus.error("error.generic", error=str(e))
        raise typer.Exit(code=1)

    bus.success(
        "extract.run.success",
        name=result.entity_name,
        target=project.relative(result.target_path),
        count=len(result.imports_updated),
    )
    for path in result.imports_updated:
        bus.info("extract.run.updated_file", path=project.relative(path))
