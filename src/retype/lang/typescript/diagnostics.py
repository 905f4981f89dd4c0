from typing import List

from retype.spec.language import Diagnostic, DiagnosticSeverity

from .globals import is_global_name
from .resolution import ModuleResolver, is_relative
from .scope import resolve_scope, usage_index
from .source_file import SourceFile
from .syntax import collect_imports, collect_reexports

CANNOT_FIND_NAME = 2304
CANNOT_FIND_MODULE = 2307
SYNTAX_ERROR = 1005


class DiagnosticsCollector:
    """
    Reports the compiler errors the engine can act on: unresolved names,
    unresolved modules and syntax errors.
    """

    def __init__(self, resolver: ModuleResolver):
        self._resolver = resolver

    def collect(self, source_file: SourceFile) -> List[Diagnostic]:
        diagnostics: List[Diagnostic] = []
        diagnostics.extend(self._syntax_errors(source_file))
        diagnostics.extend(self._unresolved_modules(source_file))
        diagnostics.extend(self._unresolved_names(source_file))
        diagnostics.sort(key=lambda d: d.start_byte)
        return diagnostics

    def _make(self, source_file: SourceFile, offset: int, code: int, message: str) -> Diagnostic:
        line, column = source_file.line_and_column(offset)
        return Diagnostic(
            path=source_file.path,
            line=line,
            column=column,
            start_byte=offset,
            code=code,
            message=message,
            severity=DiagnosticSeverity.ERROR,
        )

    def _syntax_errors(self, source_file: SourceFile) -> List[Diagnostic]:
        if not source_file.root.has_error:
            return []
        found = []
        stack = [source_file.root]
        while stack:
            node = stack.pop()
            if node.type == "ERROR":
                found.append(self._make(source_file, node.start_byte, SYNTAX_ERROR, "Syntax error."))
                continue
            if node.is_missing:
                found.append(
                    self._make(source_file, node.start_byte, SYNTAX_ERROR, f"'{node.type}' expected.")
                )
                continue
            if node.has_error:
                stack.extend(node.children)
        return found

    def _unresolved_modules(self, source_file: SourceFile) -> List[Diagnostic]:
        found = []
        for decl in collect_imports(source_file) + collect_reexports(source_file):
            specifier = decl.module_specifier
            if is_relative(specifier):
                resolved = self._resolver.resolve(source_file.path, specifier) is not None
            else:
                resolved = self._resolver.exists_package(source_file.path, specifier)
            if not resolved:
                found.append(
                    self._make(
                        source_file,
                        decl.source_node.start_byte,
                        CANNOT_FIND_MODULE,
                        f"Cannot find module '{specifier}' or its corresponding type declarations.",
                    )
                )
        return found

    def _unresolved_names(self, source_file: SourceFile) -> List[Diagnostic]:
        found = []
        for name, nodes in usage_index(source_file).items():
            if is_global_name(name):
                continue
            for node in nodes:
                if resolve_scope(source_file, node) is None:
                    found.append(
                        self._make(
                            source_file,
                            node.start_byte,
                            CANNOT_FIND_NAME,
                            f"Cannot find name '{name}'.",
                        )
                    )
        return found
