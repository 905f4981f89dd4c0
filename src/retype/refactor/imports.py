import logging
import re
from typing import List

from retype.spec.language import DiagnosticSeverity
from retype.spec.models import (
    Entity,
    FixableImport,
    FixSummary,
    ImportAnalysis,
    UnfixableImport,
    UnresolvedImport,
)

from .base import ProjectService
from .entities import extract_entities
from .paths import module_specifier

log = logging.getLogger(__name__)

CANNOT_FIND_NAME = re.compile(r"Cannot find name '([^']+)'")
CANNOT_FIND_MODULE = re.compile(r"Cannot find module '([^']+)'")


class ImportsService(ProjectService):
    def analyze_import_errors(self) -> ImportAnalysis:
        """
        Classify every unresolved name or module in the project as fixable
        (with candidate declarations) or unfixable (with a reason).
        """
        analysis = ImportAnalysis()
        exported = self._exported_entities()

        for source_file in self.project.list_files():
            try:
                diagnostics = self.provider.get_diagnostics(source_file)
            except Exception as e:
                log.warning("Could not collect diagnostics for %s: %s", source_file.path, e)
                continue

            for diagnostic in diagnostics:
                if diagnostic.severity is not DiagnosticSeverity.ERROR:
                    continue
                name_match = CANNOT_FIND_NAME.search(diagnostic.message)
                module_match = CANNOT_FIND_MODULE.search(diagnostic.message)
                if name_match is None and module_match is None:
                    continue

                error = UnresolvedImport(
                    file=source_file.path,
                    line=diagnostic.line,
                    column=diagnostic.column,
                    message=diagnostic.message,
                    missing_name=(name_match or module_match).group(1),
                )
                if name_match is not None:
                    name = name_match.group(1)
                    candidates = [
                        e for e in exported if e.name == name and e.file_path != source_file.path
                    ]
                    if candidates:
                        analysis.fixable.append(FixableImport(error=error, candidates=candidates))
                    else:
                        analysis.unfixable.append(
                            UnfixableImport(
                                error=error,
                                reason=f'No exported entity named "{name}" found in the codebase',
                            )
                        )
                else:
                    module = module_match.group(1)
                    analysis.unfixable.append(
                        UnfixableImport(
                            error=error,
                            reason=f'Module "{module}" not found - may need to be installed '
                            "or path corrected",
                        )
                    )
        return analysis

    def _exported_entities(self) -> List[Entity]:
        entities: List[Entity] = []
        for source_file in self.project.list_files():
            try:
                entities.extend(e for e in extract_entities(self.provider, source_file) if e.is_exported)
            except Exception as e:
                log.warning("Could not analyze %s: %s", source_file.path, e)
        return entities

    def fix_import(self, fix: FixableImport) -> bool:
        """
        Add the missing import to the file in memory. Returns False when there is
        no single candidate to use. Nothing is written to disk.
        """
        candidate = fix.selected_candidate
        if candidate is None:
            if len(fix.candidates) != 1:
                return False
            candidate = fix.candidates[0]
            fix.selected_candidate = candidate

        source_file = self.project.get_file(fix.error.file)
        if source_file is None:
            return False

        specifier = module_specifier(fix.error.file, candidate.file_path)
        for decl in self.provider.get_imports(source_file):
            if (
                decl.module_specifier != specifier
                or not decl.accepts_named
                or decl.is_type_only
            ):
                continue
            if candidate.name not in decl.local_names:
                self.provider.add_specifier(decl, candidate.name)
            return True

        self.provider.add_module_declaration(source_file, specifier, [(candidate.name, None)])
        return True

    def fix_multiple(self, fixes: List[FixableImport]) -> FixSummary:
        summary = FixSummary()
        for fix in fixes:
            try:
                applied = self.fix_import(fix)
            except Exception as e:
                log.warning("Failed to fix import in %s: %s", fix.error.file, e)
                applied = False
            if applied:
                summary.fixed += 1
            else:
                summary.failed += 1
        self.project.save()
        return summary
