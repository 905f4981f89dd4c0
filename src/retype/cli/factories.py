from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import typer

from retype.common import bus
from retype.refactor import SearchService
from retype.spec.exceptions import RetypeError
from retype.spec.models import Entity, EntityKind, SearchOptions
from retype.workspace import Project, load_config_from_path


@dataclass
class CliState:
    root_path: Path
    tsconfig: Optional[Path] = None


def make_project(ctx: typer.Context) -> Project:
    """Load the project selected by the global options, or exit with an error."""
    state: CliState = ctx.obj
    try:
        config = load_config_from_path(state.root_path)
        if state.tsconfig is not None:
            config.tsconfig = str(state.tsconfig.resolve())
        project = Project.from_config(config).load(require_config=config.require_tsconfig)
    except RetypeError as e:
        bus.error("error.generic", error=str(e))
        raise typer.Exit(code=1)

    if project.tsconfig_used is not None:
        bus.debug(
            "project.loaded_tsconfig",
            count=project.file_count,
            tsconfig=project.relative(project.tsconfig_used),
        )
    else:
        bus.debug("project.loaded", count=project.file_count, root=project.root_path)
    return project


def format_location(project: Project, path: Path, line: int) -> str:
    return f"{project.relative(path)}:{line}"


def echo_entity(project: Project, entity: Entity) -> None:
    typer.echo(
        bus.render_to_string(
            "entity.row",
            kind=entity.kind.value,
            name=entity.name,
            location=format_location(project, entity.file_path, entity.line),
            exported="  (exported)" if entity.is_exported else "",
        )
    )


def select_entity(
    project: Project,
    name: str,
    kind: Optional[EntityKind] = None,
    file: Optional[str] = None,
    regex: bool = False,
) -> Entity:
    """
    Find exactly one entity, or exit. Without --regex the name must match
    exactly; several matches are listed and treated as an error.
    """
    try:
        result = SearchService(project).search(
            SearchOptions(name=name, kind=kind, file=file, regex=regex)
        )
    except RetypeError as e:
        bus.error("error.generic", error=str(e))
        raise typer.Exit(code=1)

    matches: List[Entity] = result.entities
    if not regex:
        matches = [e for e in matches if e.name == name]

    if not matches:
        bus.error("entity.not_found", name=name)
        raise typer.Exit(code=1)
    if len(matches) > 1:
        bus.error("entity.ambiguous", name=name, count=len(matches))
        for entity in matches:
            echo_entity(project, entity)
        raise typer.Exit(code=1)
    return matches[0]
