from pathlib import Path
from typing import Any, Iterable, List, Optional, Protocol, Set, Tuple

from .language import (
    CapturedDeclaration,
    DeclarationHandle,
    Declarations,
    Diagnostic,
    ModuleDeclaration,
    ReferenceLocation,
)


class LanguageProviderProtocol(Protocol):
    """
    Defines the contract between the refactoring engine and a language front-end.

    The provider owns parsed files, declaration handles and every text mutation.
    The engine never inspects syntax nodes; it only moves handles and module
    declarations back into the provider.
    """

    def add_source_file(self, path: Path, text: str) -> Any:
        """Parse `text` as the content of `path`, replacing any earlier version."""
        ...

    def get_source_file(self, path: Path) -> Optional[Any]: ...

    def source_files(self) -> List[Any]:
        """All loaded files, in load order."""
        ...

    def get_declarations(self, source_file: Any) -> Declarations:
        """Top-level named declarations of a file, grouped by kind, source order."""
        ...

    def find_references(self, handle: DeclarationHandle) -> List[ReferenceLocation]:
        """
        Every occurrence of the declaration across the loaded project, including
        the declaration's own name token. Follows named, aliased, namespace and
        default imports as well as re-exports.
        """
        ...

    def validate_identifier(self, name: str) -> None:
        """Raise InvalidIdentifierError if `name` cannot be used as a binding."""
        ...

    def rename(self, handle: DeclarationHandle, new_name: str) -> Set[Path]:
        """Rewrite every reference in place. Returns the files whose text changed."""
        ...

    def get_diagnostics(self, source_file: Any) -> List[Diagnostic]: ...

    def get_imports(self, source_file: Any) -> List[ModuleDeclaration]: ...

    def get_reexports(self, source_file: Any) -> List[ModuleDeclaration]: ...

    def resolve_module(self, from_path: Path, module_specifier: str) -> Optional[Path]:
        """The project file a relative specifier points at, or None."""
        ...

    def capture_declaration(self, handle: DeclarationHandle) -> CapturedDeclaration: ...

    def referenced_names(self, handle: DeclarationHandle) -> Set[str]:
        """Raw identifier names appearing anywhere in the declaration's subtree."""
        ...

    def remove_declaration(self, handle: DeclarationHandle) -> None: ...

    def add_module_declaration(
        self,
        source_file: Any,
        module_specifier: str,
        names: Iterable[Tuple[str, Optional[str]]],
        kind: str = "import",
    ) -> None: ...

    def add_specifier(
        self, declaration: ModuleDeclaration, name: str, alias: Optional[str] = None
    ) -> None: ...

    def remove_specifier(self, declaration: ModuleDeclaration, name: str) -> None: ...

    def set_module_specifier(
        self, declaration: ModuleDeclaration, module_specifier: str
    ) -> None: ...

    def replace_text(self, source_file: Any, text: str) -> None: ...

    def line_text(self, source_file: Any, line: int) -> str: ...

    def line_and_column(self, source_file: Any, offset: int) -> Tuple[int, int]:
        """1-based line and column of a byte offset."""
        ...

    def save(self) -> List[Path]:
        """Write every modified file to disk. Returns the written paths."""
        ...
