import logging
from typing import List, Optional

from retype.spec.exceptions import EntityNotFoundError, StaleHandleError
from retype.spec.language import ReferenceLocation
from retype.spec.models import Entity, EntityKind, Reference, RenameResult

from .base import ProjectService
from .search import SearchService

log = logging.getLogger(__name__)


class RenameService(ProjectService):
    def _locate(self, entity: Entity) -> List[ReferenceLocation]:
        if entity.kind not in EntityKind or entity.handle is None:
            raise StaleHandleError(f"'{entity.name}' cannot be renamed: no declaration handle.")
        if entity.handle.kind is not entity.kind:
            raise StaleHandleError(f"'{entity.name}' carries a handle of a different kind.")
        return self.provider.find_references(entity.handle)

    def preview_rename(self, entity: Entity) -> List[Reference]:
        """Every place a rename would touch, in provider order."""
        return [
            Reference(file=loc.path, line=loc.line, text=loc.text) for loc in self._locate(entity)
        ]

    def rename(self, entity: Entity, new_name: str) -> RenameResult:
        # 1. Validate before touching anything
        self.provider.validate_identifier(new_name)
        locations = self._locate(entity)

        # 2. Files holding a use of the entity (the definition alone does not count)
        files_modified = {loc.path for loc in locations if not loc.is_definition}

        # 3. Rewrite and persist
        self.provider.rename(entity.handle, new_name)
        self.project.save()

        log.debug(
            "Renamed %s -> %s: %d reference(s) in %d file(s)",
            entity.name,
            new_name,
            len(locations),
            len(files_modified),
        )
        return RenameResult(
            old_name=entity.name,
            new_name=new_name,
            files_modified=files_modified,
            references_updated=len(locations),
        )

    def rename_by_name(
        self, name: str, new_name: str, kind: Optional[EntityKind] = None
    ) -> RenameResult:
        matches = SearchService(self.project).find_by_name(name, kind)
        if not matches:
            raise EntityNotFoundError(f"Entity '{name}' not found.")
        return self.rename(matches[0], new_name)
