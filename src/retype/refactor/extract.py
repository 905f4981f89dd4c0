import logging
from pathlib import Path
from typing import List, Optional, Set, Union

from retype.spec.exceptions import InvalidTargetPathError
from retype.spec.language import CapturedDeclaration
from retype.spec.models import Entity, ExtractResult

from .base import ProjectService
from .entities import extract_entities
from .paths import (
    is_relative_specifier,
    is_typescript_file,
    module_specifier,
    rebase_specifier,
)

log = logging.getLogger(__name__)


def entity_text(captured: CapturedDeclaration) -> str:
    """The declaration as it will appear in the destination, always exported."""
    if captured.declarator_count > 1:
        return f"export {captured.declaration_keyword} {captured.declarator_text};"
    code = captured.statement_text
    if not code.startswith("export "):
        code = "export " + code
    return (captured.leading_comments + code).strip()


def new_file_content(imports: List[str], text: str) -> str:
    parts = []
    if imports:
        parts.extend(imports)
        parts.append("")
    parts.append(text)
    return "\n".join(parts) + "\n"


def merge_content(existing: str, imports: List[str], text: str, last_import_line: int = 0) -> str:
    """
    Merge a moved declaration into an existing file.

    Imports not already present in the file go right after line
    `last_import_line` (1-based), or at the top followed by a blank line when
    the file has no imports. The declaration is appended after a blank line.
    """
    lines = existing.rstrip("\n").split("\n") if existing.strip() else []
    missing = [imp for imp in imports if imp not in existing]
    if missing:
        if last_import_line > 0:
            lines[last_import_line:last_import_line] = missing
        elif lines:
            lines[0:0] = missing + [""]
        else:
            lines.extend(missing)
    if lines:
        lines.append("")
    lines.append(text)
    return "\n".join(lines) + "\n"


class ExtractService(ProjectService):
    def extract(self, entity: Entity, target_path: Union[str, Path]) -> ExtractResult:
        """
        Move a top-level declaration into another file and rewire every import
        of it. All analysis happens before the first edit.
        """
        project = self.project
        provider = self.provider

        # 0. Validation
        target = project.resolve_path(target_path)
        if not is_typescript_file(target):
            raise InvalidTargetPathError(f"Target must be a .ts or .tsx file: {target_path}")
        origin_path = entity.file_path
        if target == origin_path:
            raise InvalidTargetPathError(f"'{entity.name}' already lives in {target_path}")
        origin = provider.get_source_file(origin_path)

        # 1. Text capture
        captured = provider.capture_declaration(entity.handle)
        text = entity_text(captured)

        # 2. Dependency imports
        used = provider.referenced_names(entity.handle)
        imports = self._carried_imports(origin, used, target)
        sibling_import = self._sibling_import(origin, entity, used, target)
        if sibling_import:
            imports.append(sibling_import)

        importers = self._importers(origin_path, entity.name, target)
        log.debug(
            "Extracting %s from %s to %s: %d import(s) carried, %d importer(s)",
            entity.name,
            origin_path,
            target,
            len(imports),
            len(importers),
        )

        # 3. Destination
        self._materialize(target, origin_path, entity.name, imports, text)

        # 4. Rewire importers
        imports_updated = []
        for path in importers:
            if self._rewire(provider.get_source_file(path), origin_path, target, entity.name):
                imports_updated.append(path)

        # 5. Origin cleanup
        provider.remove_declaration(entity.handle)
        self._add_named(origin, module_specifier(origin_path, target), entity.name)

        # 6. Persist
        project.save()
        return ExtractResult(
            entity_name=entity.name,
            source_path=origin_path,
            target_path=target,
            imports_updated=imports_updated,
        )

    def _carried_imports(self, origin, used: Set[str], target: Path) -> List[str]:
        lines: List[str] = []
        for decl in self.provider.get_imports(origin):
            if not decl.local_names & used:
                continue
            text = decl.text
            specifier = decl.module_specifier
            if is_relative_specifier(specifier):
                if self.provider.resolve_module(origin.path, specifier) == target:
                    continue
                rebased = rebase_specifier(specifier, origin.path, target)
                if rebased != specifier:
                    text = decl.with_module_specifier(rebased)
            if text not in lines:
                lines.append(text)
        return lines

    def _sibling_import(self, origin, entity: Entity, used: Set[str], target: Path) -> Optional[str]:
        exported: List[str] = []
        for sibling in extract_entities(self.provider, origin):
            if sibling.name == entity.name or sibling.name not in used:
                continue
            if not sibling.is_exported:
                log.warning(
                    "%s uses '%s', which is not exported from %s; the moved code will not compile "
                    "until it is",
                    entity.name,
                    sibling.name,
                    origin.path,
                )
                continue
            if sibling.name not in exported:
                exported.append(sibling.name)
        if not exported:
            return None
        imports = self.provider.get_imports(origin)
        quote = imports[0].quote if imports else '"'
        specifier = module_specifier(target, origin.path)
        return f"import {{ {', '.join(exported)} }} from {quote}{specifier}{quote};"

    def _importers(self, origin_path: Path, name: str, target: Path) -> List[Path]:
        graph = self.project.build_import_graph()
        if origin_path not in graph:
            return []
        importers = []
        for path in graph.predecessors(origin_path):
            if path == target:
                continue
            declarations = graph.edges[path, origin_path]["imports"]
            if any(decl.find_specifier(name) for decl in declarations):
                importers.append(path)
            elif any(decl.namespace_name for decl in declarations):
                log.warning(
                    "%s uses a namespace import of %s; uses of %s through it are not rewired",
                    path,
                    origin_path,
                    name,
                )
        order = {sf.path: i for i, sf in enumerate(self.project.list_files())}
        return sorted(importers, key=lambda p: order.get(p, len(order)))

    def _materialize(
        self, target: Path, origin_path: Path, name: str, imports: List[str], text: str
    ) -> None:
        provider = self.provider
        source_file = provider.get_source_file(target)
        if source_file is None and target.is_file():
            source_file = provider.add_source_file(target, target.read_text(encoding="utf-8"))

        if source_file is None:
            self.project.add_file(target, new_file_content(imports, text))
            return

        # The destination may itself import the entity from the origin.
        self._drop_import_of(source_file, origin_path, name)

        existing = provider.get_imports(source_file)
        last_line = existing[-1].end_line if existing else 0
        provider.replace_text(
            source_file, merge_content(source_file.text, imports, text, last_line)
        )

    def _matching_declaration(self, source_file, origin_path: Path, name: str):
        provider = self.provider
        for decl in provider.get_imports(source_file) + provider.get_reexports(source_file):
            if decl.find_specifier(name) is None:
                continue
            if provider.resolve_module(source_file.path, decl.module_specifier) == origin_path:
                return decl
        return None

    def _drop_import_of(self, source_file, origin_path: Path, name: str) -> None:
        while True:
            decl = self._matching_declaration(source_file, origin_path, name)
            if decl is None or decl.kind != "import":
                return
            self.provider.remove_specifier(decl, name)

    def _rewire(self, source_file, origin_path: Path, target: Path, name: str) -> bool:
        provider = self.provider
        new_specifier = module_specifier(source_file.path, target)
        changed = False
        while True:
            decl = self._matching_declaration(source_file, origin_path, name)
            if decl is None:
                return changed
            spec = decl.find_specifier(name)
            sole = (
                len(decl.specifiers) == 1
                and decl.default_name is None
                and decl.namespace_name is None
            )
            if sole:
                provider.set_module_specifier(decl, new_specifier)
            else:
                provider.remove_specifier(decl, name)
                self._add_named(source_file, new_specifier, name, spec.alias, kind=decl.kind)
            changed = True

    def _add_named(
        self,
        source_file,
        specifier: str,
        name: str,
        alias: Optional[str] = None,
        kind: str = "import",
    ) -> None:
        provider = self.provider
        if kind == "import":
            declarations = provider.get_imports(source_file)
        else:
            declarations = provider.get_reexports(source_file)
        for decl in declarations:
            if decl.module_specifier != specifier or not decl.accepts_named or decl.is_type_only:
                continue
            existing = decl.find_specifier(name)
            if existing is not None and existing.alias == alias:
                return
            provider.add_specifier(decl, name, alias)
            return
        provider.add_module_declaration(source_file, specifier, [(name, alias)], kind=kind)
