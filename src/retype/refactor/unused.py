import logging
from typing import Dict, List, Optional

from retype.spec.models import Entity, UnusedResult, UnusedStats

from .base import ProjectService
from .entities import extract_entities

log = logging.getLogger(__name__)

# A reference starting this close (in bytes) to the declaration's name token in
# the same file is the declaration itself.
DEFINITION_TOLERANCE = 2

REASON_UNUSED_EXPORT = "exported but never imported or used elsewhere"
REASON_UNUSED_PRIVATE = "not exported and never used in its file"
REASON_DECLARED_ONLY = "declared but never used"


class UnusedService(ProjectService):
    def find_unused(self) -> List[UnusedResult]:
        results: List[UnusedResult] = []
        for source_file in self.project.list_files():
            if self.project.is_entry_point(source_file.path):
                continue
            for entity in extract_entities(self.provider, source_file):
                result = self._check(entity)
                if result is not None:
                    results.append(result)
        return results

    def find_unused_exports(self) -> List[UnusedResult]:
        return [r for r in self.find_unused() if r.entity.is_exported]

    def find_unused_private(self) -> List[UnusedResult]:
        return [r for r in self.find_unused() if not r.entity.is_exported]

    def get_unused_stats(self) -> UnusedStats:
        results = self.find_unused()
        by_kind: Dict[str, int] = {}
        for result in results:
            key = result.entity.kind.value
            by_kind[key] = by_kind.get(key, 0) + 1
        exported = sum(1 for r in results if r.entity.is_exported)
        return UnusedStats(
            total=len(results),
            by_kind=by_kind,
            exported=exported,
            private=len(results) - exported,
        )

    def _check(self, entity: Entity) -> Optional[UnusedResult]:
        try:
            references = self.provider.find_references(entity.handle)
        except Exception as e:
            log.warning("Skipping %s at %s: %s", entity.name, entity.location, e)
            return None

        name_start = entity.handle.name_node.start_byte
        remaining = [
            ref
            for ref in references
            if not (
                ref.path == entity.file_path
                and abs(ref.start_byte - name_start) < DEFINITION_TOLERANCE
            )
        ]

        if not remaining:
            reason = REASON_UNUSED_EXPORT if entity.is_exported else REASON_UNUSED_PRIVATE
            return UnusedResult(entity=entity, reason=reason)

        if not entity.is_exported and all(ref.path == entity.file_path for ref in remaining):
            # Other declarations of the same name (overloads, repeated var) are
            # not uses.
            real = [ref for ref in remaining if not ref.is_declaration_site]
            if not real:
                return UnusedResult(entity=entity, reason=REASON_DECLARED_ONLY)
        return None
