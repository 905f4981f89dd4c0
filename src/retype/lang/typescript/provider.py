import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, Tuple

from retype.spec.exceptions import InvalidIdentifierError, StaleHandleError
from retype.spec.language import (
    CapturedDeclaration,
    DeclarationHandle,
    Declarations,
    Diagnostic,
    ModuleDeclaration,
    ReferenceLocation,
)
from retype.spec.models import EntityKind

from . import edits
from .diagnostics import DiagnosticsCollector
from .references import ReferenceFinder
from .resolution import ModuleResolver
from .source_file import SourceFile, TextEdit
from .syntax import collect_declarations, collect_imports, collect_reexports

log = logging.getLogger(__name__)

RESERVED_WORDS = frozenset(
    """
    break case catch class const continue debugger default delete do else enum
    export extends false finally for function if import in instanceof new null
    return super switch this throw true try typeof var void while with
    implements interface let package private protected public static yield
    """.split()
)


def is_identifier(name: str) -> bool:
    # Same rules as Python identifiers, plus "$".
    return name.replace("$", "_").isidentifier()


class TypeScriptProvider:
    """
    Language provider for TypeScript and TSX backed by tree-sitter.

    Holds every loaded file in load order. All reference queries, diagnostics
    and edits go through here so that handle freshness is checked in one place.
    """

    def __init__(self):
        self._files: Dict[Path, SourceFile] = {}
        self._resolver = ModuleResolver(lambda path: path in self._files)
        self._references = ReferenceFinder(self.source_files, self._resolver)
        self._diagnostics = DiagnosticsCollector(self._resolver)

    # --- Files ---

    def add_source_file(self, path: Path, text: str) -> SourceFile:
        existing = self._files.get(path)
        if existing is not None:
            existing.replace_text(text)
            return existing
        source_file = SourceFile(path, text)
        self._files[path] = source_file
        self._resolver.clear()
        return source_file

    def get_source_file(self, path: Path) -> Optional[SourceFile]:
        return self._files.get(path)

    def source_files(self) -> List[SourceFile]:
        return list(self._files.values())

    def replace_text(self, source_file: SourceFile, text: str) -> None:
        source_file.replace_text(text)

    def line_text(self, source_file: SourceFile, line: int) -> str:
        return source_file.line_text(line)

    def line_and_column(self, source_file: SourceFile, offset: int) -> Tuple[int, int]:
        return source_file.line_and_column(offset)

    def save(self) -> List[Path]:
        written = []
        for source_file in self._files.values():
            if not source_file.dirty:
                continue
            source_file.path.parent.mkdir(parents=True, exist_ok=True)
            source_file.path.write_text(source_file.text, encoding="utf-8")
            source_file.mark_saved()
            written.append(source_file.path)
        log.debug("Saved %d file(s)", len(written))
        return written

    # --- Declarations ---

    def get_declarations(self, source_file: SourceFile) -> Declarations:
        declarations = Declarations()
        for handle in collect_declarations(source_file):
            declarations.of_kind(handle.kind).append(handle)
        return declarations

    def check_handle(self, handle: DeclarationHandle) -> None:
        if not isinstance(handle, DeclarationHandle) or handle.kind not in EntityKind:
            raise StaleHandleError("Not a declaration handle of a renameable entity.")
        if self._files.get(handle.path) is not handle.source_file or handle.is_stale:
            raise StaleHandleError(
                f"Declaration '{handle.name}' in {handle.path} is out of date; search again."
            )

    # --- Queries ---

    def find_references(self, handle: DeclarationHandle) -> List[ReferenceLocation]:
        self.check_handle(handle)
        return self._references.find(handle)

    def get_diagnostics(self, source_file: SourceFile) -> List[Diagnostic]:
        return self._diagnostics.collect(source_file)

    def get_imports(self, source_file: SourceFile) -> List[ModuleDeclaration]:
        return list(collect_imports(source_file))

    def get_reexports(self, source_file: SourceFile) -> List[ModuleDeclaration]:
        return list(collect_reexports(source_file))

    def resolve_module(self, from_path: Path, module_specifier: str) -> Optional[Path]:
        return self._resolver.resolve(from_path, module_specifier)

    # --- Rename ---

    def validate_identifier(self, name: str) -> None:
        if not is_identifier(name) or name in RESERVED_WORDS:
            raise InvalidIdentifierError(f"'{name}' is not a valid identifier.")

    def rename(self, handle: DeclarationHandle, new_name: str) -> Set[Path]:
        self.validate_identifier(new_name)
        old_name = handle.name
        per_file: Dict[Path, List[TextEdit]] = {}
        for ref in self.find_references(handle):
            if not ref.rewrite:
                continue
            replacement = f"{old_name}: {new_name}" if ref.is_shorthand else new_name
            per_file.setdefault(ref.path, []).append(
                TextEdit(ref.start_byte, ref.end_byte, replacement)
            )
        for path, file_edits in per_file.items():
            self._files[path].apply_edits(file_edits)
        log.debug("Renamed '%s' to '%s' in %d file(s)", old_name, new_name, len(per_file))
        return set(per_file)

    # --- Mutation ---

    def capture_declaration(self, handle: DeclarationHandle) -> CapturedDeclaration:
        self.check_handle(handle)
        return edits.capture_declaration(handle)

    def referenced_names(self, handle: DeclarationHandle) -> Set[str]:
        self.check_handle(handle)
        return edits.referenced_names(handle)

    def remove_declaration(self, handle: DeclarationHandle) -> None:
        self.check_handle(handle)
        edits.remove_declaration(handle)

    def add_module_declaration(
        self,
        source_file: SourceFile,
        module_specifier: str,
        names: Iterable[Tuple[str, Optional[str]]],
        kind: str = "import",
    ) -> None:
        edits.add_module_declaration(source_file, module_specifier, names, kind)

    def add_specifier(
        self, declaration: ModuleDeclaration, name: str, alias: Optional[str] = None
    ) -> None:
        edits.add_specifier(declaration, name, alias)

    def remove_specifier(self, declaration: ModuleDeclaration, name: str) -> None:
        edits.remove_specifier(declaration, name)

    def set_module_specifier(self, declaration: ModuleDeclaration, module_specifier: str) -> None:
        edits.set_module_specifier(declaration, module_specifier)
