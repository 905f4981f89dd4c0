import logging
from pathlib import Path
from typing import List, Union

from retype.spec.models import (
    Entity,
    EntityReferences,
    FileReference,
    FileReferenceReport,
    Reference,
)

from .base import ProjectService
from .entities import extract_entities

log = logging.getLogger(__name__)


class ReferencesService(ProjectService):
    """Read-only reports of who depends on a file or an entity."""

    def find_file_references(self, path: Union[str, Path]) -> List[FileReference]:
        target = self.project.resolve_path(path)
        graph = self.project.build_import_graph()
        if target not in graph:
            return []

        found: List[FileReference] = []
        for importer, _, data in graph.in_edges(target, data=True):
            for decl in data["imports"]:
                found.append(
                    FileReference(
                        from_file=importer,
                        to_file=target,
                        import_statement=decl.text,
                        line=decl.line,
                    )
                )
        order = {sf.path: i for i, sf in enumerate(self.project.list_files())}
        found.sort(key=lambda ref: (order.get(ref.from_file, len(order)), ref.line))
        return found

    def find_entity_references(self, entity: Entity) -> EntityReferences:
        try:
            locations = self.provider.find_references(entity.handle)
        except Exception as e:
            log.warning("Could not find references of %s: %s", entity.name, e)
            return EntityReferences(entity=entity)
        return EntityReferences(
            entity=entity,
            referenced_in=[
                Reference(file=loc.path, line=loc.line, text=loc.text)
                for loc in locations
                if not loc.is_definition
            ],
        )

    def find_all_references_to_file(self, path: Union[str, Path]) -> FileReferenceReport:
        report = FileReferenceReport(imports=self.find_file_references(path))
        source_file = self.project.get_file(path)
        if source_file is None:
            return report
        for entity in extract_entities(self.provider, source_file):
            if not entity.is_exported:
                continue
            refs = self.find_entity_references(entity)
            if refs.referenced_in:
                report.entities.append(refs)
        return report
