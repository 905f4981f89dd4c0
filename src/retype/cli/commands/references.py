import typer

from retype.common import bus
from retype.cli.factories import format_location, make_project
from retype.refactor import ReferencesService


def references_command(
    ctx: typer.Context,
    path: str = typer.Argument(
        ..., help=bus.render_to_string("cli.argument.reference_path.help")
    ),
):
    project = make_project(ctx)
    if project.get_file(path) is None:
        bus.error("references.run.file_not_found", path=path)
        raise typer.Exit(code=1)

    report = ReferencesService(project).find_all_references_to_file(path)
    if not report.imports and not report.entities:
        bus.info("references.run.no_references", path=path)
        return

    if report.imports:
        bus.info("references.run.importers_header", count=len(report.imports))
        for ref in report.imports:
            typer.echo(
                bus.render_to_string(
                    "references.run.importer",
                    location=format_location(project, ref.from_file, ref.line),
                    statement=ref.import_statement,
                )
            )

    for entity_refs in report.entities:
        entity = entity_refs.entity
        bus.info(
            "references.run.entity_header",
            name=entity.name,
            kind=entity.kind.value,
            count=len(entity_refs.referenced_in),
        )
        for ref in entity_refs.referenced_in:
            typer.echo(
                bus.render_to_string(
                    "references.run.entity_ref",
                    location=format_location(project, ref.file, ref.line),
                    text=ref.text,
                )
            )
