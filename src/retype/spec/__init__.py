from .models import (
    KIND_ORDER,
    Entity,
    EntityKind,
    EntityReferences,
    ExtractResult,
    FileReference,
    FileReferenceReport,
    FixableImport,
    FixSummary,
    ImportAnalysis,
    Reference,
    RenameResult,
    SearchOptions,
    SearchResult,
    UnfixableImport,
    UnresolvedImport,
    UnusedResult,
    UnusedStats,
)
from .language import (
    CapturedDeclaration,
    DeclarationHandle,
    Declarations,
    Diagnostic,
    DiagnosticSeverity,
    ModuleDeclaration,
    ModuleSpecifier,
    ReferenceLocation,
)
from .protocols import LanguageProviderProtocol
from .exceptions import (
    ConfigurationError,
    EntityNotFoundError,
    InvalidIdentifierError,
    InvalidTargetPathError,
    NotInitializedError,
    PatternError,
    RetypeError,
    StaleHandleError,
)

__all__ = [
    "KIND_ORDER",
    "Entity",
    "EntityKind",
    "EntityReferences",
    "ExtractResult",
    "FileReference",
    "FileReferenceReport",
    "FixableImport",
    "FixSummary",
    "ImportAnalysis",
    "Reference",
    "RenameResult",
    "SearchOptions",
    "SearchResult",
    "UnfixableImport",
    "UnresolvedImport",
    "UnusedResult",
    "UnusedStats",
    "CapturedDeclaration",
    "DeclarationHandle",
    "Declarations",
    "Diagnostic",
    "DiagnosticSeverity",
    "ModuleDeclaration",
    "ModuleSpecifier",
    "ReferenceLocation",
    "LanguageProviderProtocol",
    "ConfigurationError",
    "EntityNotFoundError",
    "InvalidIdentifierError",
    "InvalidTargetPathError",
    "NotInitializedError",
    "PatternError",
    "RetypeError",
    "StaleHandleError",
]
