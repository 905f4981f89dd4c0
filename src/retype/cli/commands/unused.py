from typing import Optional

import typer

from retype.common import bus
from retype.cli.factories import format_location, make_project
from retype.refactor import UnusedService


def unused_command(
    ctx: typer.Context,
    exported: Optional[bool] = typer.Option(
        None, "--exported/--private", help=bus.render_to_string("cli.option.exported.help")
    ),
    stats: bool = typer.Option(
        False, "--stats", help=bus.render_to_string("cli.option.stats.help")
    ),
):
    project = make_project(ctx)
    service = UnusedService(project)

    if stats:
        summary = service.get_unused_stats()
        bus.info(
            "unused.run.summary",
            total=summary.total,
            exported=summary.exported,
            private=summary.private,
        )
        for kind, count in sorted(summary.by_kind.items()):
            typer.echo(bus.render_to_string("unused.run.by_kind", kind=kind, count=count))
        return

    if exported is None:
        results = service.find_unused()
    elif exported:
        results = service.find_unused_exports()
    else:
        results = service.find_unused_private()

    if not results:
        bus.success("unused.run.none")
        return

    for result in results:
        entity = result.entity
        typer.echo(
            bus.render_to_string(
                "unused.run.row",
                kind=entity.kind.value,
                name=entity.name,
                location=format_location(project, entity.file_path, entity.line),
                reason=result.reason,
            )
        )
    exported_count = sum(1 for r in results if r.entity.is_exported)
    bus.warning(
        "unused.run.summary",
        total=len(results),
        exported=exported_count,
        private=len(results) - exported_count,
    )
