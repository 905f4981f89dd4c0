from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional, Set

from .models import EntityKind


@dataclass(frozen=True, eq=False)
class DeclarationHandle:
    """
    A provider-owned pointer to one named top-level declaration.

    The handle is tied to the generation of the source file it was taken from.
    Any reparse or save of that file bumps the generation and makes the handle
    stale.
    """

    source_file: Any
    generation: int
    kind: EntityKind
    node: Any
    name_node: Any
    statement: Any
    declaration: Any
    is_exported: bool
    is_default_export: bool = False

    @property
    def name(self) -> str:
        return self.source_file.node_text(self.name_node)

    @property
    def path(self) -> Path:
        return self.source_file.path

    @property
    def is_stale(self) -> bool:
        return self.generation != self.source_file.generation


@dataclass
class Declarations:
    functions: List[DeclarationHandle] = field(default_factory=list)
    classes: List[DeclarationHandle] = field(default_factory=list)
    variables: List[DeclarationHandle] = field(default_factory=list)
    interfaces: List[DeclarationHandle] = field(default_factory=list)
    type_aliases: List[DeclarationHandle] = field(default_factory=list)
    enums: List[DeclarationHandle] = field(default_factory=list)

    def of_kind(self, kind: EntityKind) -> List[DeclarationHandle]:
        if kind is EntityKind.FUNCTION:
            return self.functions
        if kind is EntityKind.CLASS:
            return self.classes
        if kind is EntityKind.VARIABLE:
            return self.variables
        if kind is EntityKind.INTERFACE:
            return self.interfaces
        if kind is EntityKind.TYPE:
            return self.type_aliases
        if kind is EntityKind.ENUM:
            return self.enums
        raise ValueError(f"Unknown entity kind: {kind!r}")


@dataclass(frozen=True, eq=False)
class ReferenceLocation:
    """One occurrence of a declaration's name somewhere in the project."""

    path: Path
    line: int
    column: int
    start_byte: int
    end_byte: int
    text: str
    node: Any = field(repr=False)
    # The occurrence is the declaration's own name token.
    is_definition: bool = False
    # The occurrence is the name of another declaration of the same identifier
    # (overload signature, duplicate var).
    is_declaration_site: bool = False
    # Renaming the declaration rewrites this occurrence. False for uses that go
    # through a local alias.
    rewrite: bool = True
    # Object literal shorthand ({ name }) that needs expanding on rename.
    is_shorthand: bool = False


class DiagnosticSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    path: Path
    line: int
    column: int
    start_byte: int
    code: int
    message: str
    severity: DiagnosticSeverity = DiagnosticSeverity.ERROR


@dataclass(frozen=True, eq=False)
class ModuleSpecifier:
    """A single `name` or `name as alias` entry of an import or export clause."""

    name: str
    alias: Optional[str]
    node: Any = field(repr=False)
    name_node: Any = field(repr=False)

    @property
    def local_name(self) -> str:
        return self.alias or self.name


@dataclass(frozen=True, eq=False)
class ModuleDeclaration:
    """
    An import declaration, or an export declaration with a `from` clause.
    """

    source_file: Any = field(repr=False)
    generation: int
    kind: str  # "import" or "export"
    module_specifier: str
    node: Any = field(repr=False)
    source_node: Any = field(repr=False)
    clause_node: Any = field(default=None, repr=False)
    specifiers: List[ModuleSpecifier] = field(default_factory=list)
    default_name: Optional[str] = None
    namespace_name: Optional[str] = None
    is_type_only: bool = False
    is_wildcard: bool = False

    @property
    def path(self) -> Path:
        return self.source_file.path

    @property
    def text(self) -> str:
        return self.source_file.node_text(self.node)

    @property
    def line(self) -> int:
        return self.source_file.line_and_column(self.node.start_byte)[0]

    @property
    def end_line(self) -> int:
        return self.source_file.line_and_column(self.node.end_byte)[0]

    @property
    def quote(self) -> str:
        return self.source_file.node_text(self.source_node)[0]

    def with_module_specifier(self, module_specifier: str) -> str:
        """The declaration's text with its module specifier replaced."""
        source_file = self.source_file
        return (
            source_file.slice(self.node.start_byte, self.source_node.start_byte)
            + self.quote
            + module_specifier
            + self.quote
            + source_file.slice(self.source_node.end_byte, self.node.end_byte)
        )

    @property
    def local_names(self) -> Set[str]:
        names = {spec.local_name for spec in self.specifiers}
        if self.default_name:
            names.add(self.default_name)
        if self.namespace_name:
            names.add(self.namespace_name)
        return names

    @property
    def accepts_named(self) -> bool:
        """Whether a `{ name }` entry can be added to this declaration."""
        if self.clause_node is not None:
            return True
        return self.kind == "import" and self.default_name is not None and self.namespace_name is None

    def find_specifier(self, name: str) -> Optional[ModuleSpecifier]:
        for spec in self.specifiers:
            if spec.name == name:
                return spec
        return None


@dataclass(frozen=True)
class CapturedDeclaration:
    """Source text of a declaration, split the way a move needs it."""

    leading_comments: str
    statement_text: str
    statement_has_export: bool
    declarator_count: int
    declaration_keyword: Optional[str] = None
    declarator_text: Optional[str] = None
