import logging
import re
import time
from typing import Any, Dict, List, Optional

from retype.spec.exceptions import PatternError
from retype.spec.models import Entity, EntityKind, SearchOptions, SearchResult

from .base import ProjectService
from .entities import extract_entities

log = logging.getLogger(__name__)


class SearchService(ProjectService):
    def search(self, options: Optional[SearchOptions] = None) -> SearchResult:
        """
        Scan every project file for entities matching `options`.

        Results are in file order, then kind group order, then source order.
        Nothing is cached between calls.
        """
        options = options or SearchOptions()
        started = time.perf_counter()
        files = self.project.list_files()

        pattern = None
        if options.name and options.regex:
            try:
                pattern = re.compile(options.name, re.IGNORECASE)
            except re.error as e:
                raise PatternError(f"Invalid regular expression '{options.name}': {e}") from e

        entities: List[Entity] = []
        for source_file in files:
            if options.file and options.file not in str(source_file.path):
                continue
            try:
                file_entities = extract_entities(self.provider, source_file)
            except Exception as e:
                log.warning("Could not analyze %s: %s", source_file.path, e)
                continue
            entities.extend(file_entities)

        if options.name:
            if pattern is not None:
                entities = [e for e in entities if pattern.search(e.name)]
            else:
                needle = options.name.lower()
                entities = [e for e in entities if needle in e.name.lower()]
        if options.kind is not None:
            entities = [e for e in entities if e.kind is options.kind]
        if options.exported is not None:
            entities = [e for e in entities if e.is_exported == options.exported]

        elapsed_ms = (time.perf_counter() - started) * 1000
        return SearchResult(entities=entities, total_files=len(files), search_time_ms=elapsed_ms)

    def find_by_name(self, name: str, kind: Optional[EntityKind] = None) -> List[Entity]:
        """Entities whose name is exactly `name`."""
        result = self.search(SearchOptions(name=name, kind=kind))
        return [e for e in result.entities if e.name == name]

    def find_all_by_kind(self, kind: EntityKind) -> List[Entity]:
        return self.search(SearchOptions(kind=kind)).entities

    def find_in_file(self, file: str) -> List[Entity]:
        return self.search(SearchOptions(file=file)).entities

    def get_entity_details(self, entity: Entity) -> Dict[str, Any]:
        return {
            "name": entity.name,
            "kind": entity.kind.value,
            "file": self.project.relative(entity.file_path),
            "line": entity.line,
            "column": entity.column,
            "exported": entity.is_exported,
        }
