from typing import Optional

import typer

from retype.common import bus
from retype.cli.factories import format_location, make_project, select_entity
from retype.refactor import RenameService
from retype.spec.exceptions import RetypeError
from retype.spec.models import EntityKind

# References listed before the rest is summarized.
PREVIEW_LIMIT = 15


def rename_command(
    ctx: typer.Context,
    name: str = typer.Argument(
        ..., help=bus.render_to_string("cli.argument.entity_name.help")
    ),
    new_name: str = typer.Argument(
        ..., help=bus.render_to_string("cli.argument.new_name.help")
    ),
    kind: Optional[EntityKind] = typer.Option(
        None, "--kind", "-k", help=bus.render_to_string("cli.option.kind.help")
    ),
    file: Optional[str] = typer.Option(
        None, "--file", "-f", help=bus.render_to_string("cli.option.file.help")
    ),
    regex: bool = typer.Option(
        False, "--regex", "-r", help=bus.render_to_string("cli.option.regex.help")
    ),
    preview: bool = typer.Option(
        False, "--preview", help=bus.render_to_string("cli.option.preview.help")
    ),
    yes: bool = typer.Option(
        False, "-y", "--yes", help=bus.render_to_string("cli.option.yes.help")
    ),
):
    project = make_project(ctx)
    entity = select_entity(project, name, kind=kind, file=file, regex=regex)
    service = RenameService(project)

    try:
        service.project.provider.validate_identifier(new_name)
        references = service.preview_rename(entity)

        bus.info(
            "rename.run.preview_header",
            old_name=entity.name,
            new_name=new_name,
            count=len(references),
        )
        for ref in references[:PREVIEW_LIMIT]:
            typer.echo(f"  {format_location(project, ref.file, ref.line)}  {ref.text}")
        if len(references) > PREVIEW_LIMIT:
            bus.info("rename.run.more", count=len(references) - PREVIEW_LIMIT)

        if preview:
            return

        confirmed = yes or typer.confirm(bus.render_to_string("rename.run.confirm"), default=False)
        if not confirmed:
            bus.error("rename.run.aborted")
            raise typer.Exit(code=1)

        result = service.rename(entity, new_name)
    except RetypeError as e:
        bus.error("error.generic", error=str(e))
        raise typer.Exit(code=1)

    bus.success(
        "rename.run.success",
        old_name=result.old_name,
        new_name=result.new_name,
        count=result.references_updated,
        files=len(result.files_modified),
    )
