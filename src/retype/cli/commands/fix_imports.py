import typer

from retype.common import bus
from retype.cli.factories import format_location, make_project
from retype.refactor import ImportsService


def fix_imports_command(
    ctx: typer.Context,
    dry_run: bool = typer.Option(
        False, "--dry-run", help=bus.render_to_string("cli.option.dry_run.help")
    ),
    yes: bool = typer.Option(
        False, "-y", "--yes", help=bus.render_to_string("cli.option.yes.help")
    ),
):
    project = make_project(ctx)
    service = ImportsService(project)
    analysis = service.analyze_import_errors()

    if not analysis.fixable and not analysis.unfixable:
        bus.success("imports.run.nothing")
        return

    bus.info(
        "imports.run.summary",
        fixable=len(analysis.fixable),
        unfixable=len(analysis.unfixable),
    )

    automatic = []
    for fix in analysis.fixable:
        error = fix.error
        location = format_location(project, error.file, error.line)
        if len(fix.candidates) == 1:
            automatic.append(fix)
            candidate = fix.candidates[0]
            typer.echo(
                bus.render_to_string(
                    "imports.run.fixable",
                    location=location,
                    name=error.missing_name,
                    source=project.relative(candidate.file_path),
                )
            )
            continue
        bus.warning(
            "imports.run.ambiguous",
            location=location,
            name=error.missing_name,
            count=len(fix.candidates),
        )
        for candidate in fix.candidates:
            typer.echo(
                bus.render_to_string(
                    "imports.run.candidate",
                    location=format_location(project, candidate.file_path, candidate.line),
                )
            )

    for item in analysis.unfixable:
        bus.warning(
            "imports.run.unfixable",
            location=format_location(project, item.error.file, item.error.line),
            reason=item.reason,
        )

    if dry_run or not automatic:
        return

    confirmed = yes or typer.confirm(
        bus.render_to_string("imports.run.confirm", count=len(automatic)), default=False
    )
    if not confirmed:
        bus.error("imports.run.aborted")
        raise typer.Exit(code=1)

    summary = service.fix_multiple(automatic)
    bus.success("imports.run.success", fixed=summary.fixed, failed=summary.failed)
