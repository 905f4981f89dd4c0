from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Set


class EntityKind(str, Enum):
    FUNCTION = "function"
    CLASS = "class"
    VARIABLE = "variable"
    INTERFACE = "interface"
    TYPE = "type"
    ENUM = "enum"


# Extraction group order for entities within one file.
KIND_ORDER: List[EntityKind] = list(EntityKind)


@dataclass
class Entity:
    """A named top-level declaration found in a project file."""

    name: str
    kind: EntityKind
    file_path: Path
    line: int
    column: int
    is_exported: bool
    # Provider-owned declaration handle. Opaque to everything but the provider.
    handle: Any = field(default=None, repr=False, compare=False)

    @property
    def location(self) -> str:
        return f"{self.file_path}:{self.line}:{self.column}"


@dataclass
class SearchOptions:
    name: Optional[str] = None
    kind: Optional[EntityKind] = None
    exported: Optional[bool] = None
    file: Optional[str] = None
    regex: bool = False


@dataclass
class SearchResult:
    entities: List[Entity]
    total_files: int
    search_time_ms: float


@dataclass
class Reference:
    file: Path
    line: int
    text: str


@dataclass
class RenameResult:
    old_name: str
    new_name: str
    files_modified: Set[Path]
    references_updated: int


@dataclass
class ExtractResult:
    entity_name: str
    source_path: Path
    target_path: Path
    imports_updated: List[Path] = field(default_factory=list)


@dataclass
class UnusedResult:
    entity: Entity
    reason: str


@dataclass
class UnusedStats:
    total: int
    by_kind: Dict[str, int]
    exported: int
    private: int


@dataclass
class UnresolvedImport:
    """A diagnostic about a name or module the compiler could not resolve."""

    file: Path
    line: int
    column: int
    message: str
    missing_name: Optional[str] = None


@dataclass
class FixableImport:
    error: UnresolvedImport
    candidates: List[Entity]
    selected_candidate: Optional[Entity] = None


@dataclass
class UnfixableImport:
    error: UnresolvedImport
    reason: str


@dataclass
class ImportAnalysis:
    fixable: List[FixableImport] = field(default_factory=list)
    unfixable: List[UnfixableImport] = field(default_factory=list)


@dataclass
class FixSummary:
    fixed: int = 0
    failed: int = 0


@dataclass
class FileReference:
    from_file: Path
    to_file: Path
    import_statement: str
    line: int


@dataclass
class EntityReferences:
    entity: Entity
    referenced_in: List[Reference] = field(default_factory=list)


@dataclass
class FileReferenceReport:
    imports: List[FileReference] = field(default_factory=list)
    entities: List[EntityReferences] = field(default_factory=list)
