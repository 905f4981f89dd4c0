from pathlib import Path
from typing import Callable, Iterable, List, Optional, Set, Tuple

from tree_sitter import Node

from retype.spec.language import DeclarationHandle, ReferenceLocation

from .resolution import ModuleResolver
from .scope import binds_at_top_level, usage_index
from .source_file import SourceFile
from .syntax import (
    collect_declarations,
    collect_imports,
    collect_reexports,
    exported_names_of,
    has_token,
    same_node,
)


def make_location(
    source_file: SourceFile,
    node: Node,
    *,
    is_definition: bool = False,
    is_declaration_site: bool = False,
    rewrite: bool = True,
) -> ReferenceLocation:
    line, column = source_file.line_and_column(node.start_byte)
    return ReferenceLocation(
        path=source_file.path,
        line=line,
        column=column,
        start_byte=node.start_byte,
        end_byte=node.end_byte,
        text=source_file.line_text(line).strip(),
        node=node,
        is_definition=is_definition,
        is_declaration_site=is_declaration_site,
        rewrite=rewrite,
        is_shorthand=node.type == "shorthand_property_identifier",
    )


class ReferenceFinder:
    """
    Finds every occurrence of a top-level declaration across the project.

    Same-file occurrences come from scope resolution. Cross-file occurrences
    come from walking importers of the declaring file: named and aliased
    specifiers, `ns.Name` member accesses through namespace imports, default
    imports, and re-exports (which are followed transitively).
    """

    def __init__(
        self,
        files: Callable[[], Iterable[SourceFile]],
        resolver: ModuleResolver,
    ):
        self._files = files
        self._resolver = resolver

    def find(self, handle: DeclarationHandle) -> List[ReferenceLocation]:
        source_file: SourceFile = handle.source_file
        name = handle.name
        locations = self._local_references(source_file, handle, name)
        if not handle.is_exported:
            return locations

        public_names: List[Tuple[str, bool]] = []
        if handle.statement.type == "export_statement" and not has_token(handle.statement, "default"):
            public_names.append((name, True))
        for exported_as in exported_names_of(source_file, name):
            public_names.append((exported_as, exported_as == name))
        if handle.is_default_export:
            public_names.append(("default", False))

        visited: Set[Tuple[Path, str]] = set()
        for export_name, rewrite in public_names:
            self._collect_importers(source_file.path, export_name, rewrite, visited, locations)
        return locations

    def _local_references(
        self, source_file: SourceFile, handle: DeclarationHandle, name: str
    ) -> List[ReferenceLocation]:
        found: List[ReferenceLocation] = [
            make_location(source_file, handle.name_node, is_definition=True)
        ]
        for other in collect_declarations(source_file):
            if other is handle or other.name != name or other.kind is not handle.kind:
                continue
            found.append(make_location(source_file, other.name_node, is_declaration_site=True))
        for node in usage_index(source_file).get(name, []):
            if binds_at_top_level(source_file, node):
                found.append(make_location(source_file, node))
        found.sort(key=lambda loc: loc.start_byte)
        return found

    def _collect_importers(
        self,
        target: Path,
        export_name: str,
        rewrite: bool,
        visited: Set[Tuple[Path, str]],
        out: List[ReferenceLocation],
    ) -> None:
        if (target, export_name) in visited:
            return
        visited.add((target, export_name))

        for source_file in self._files():
            if source_file.path == target:
                continue
            for decl in collect_imports(source_file):
                if self._resolver.resolve(source_file.path, decl.module_specifier) != target:
                    continue
                if export_name == "default":
                    if decl.default_name:
                        self._collect_local_uses(source_file, decl.default_name, False, out)
                    continue
                for spec in decl.specifiers:
                    if spec.name != export_name:
                        continue
                    out.append(make_location(source_file, spec.name_node, rewrite=rewrite))
                    self._collect_local_uses(
                        source_file, spec.local_name, rewrite and spec.alias is None, out
                    )
                if decl.namespace_name:
                    self._collect_member_uses(
                        source_file, decl.namespace_name, export_name, rewrite, out
                    )

            for decl in collect_reexports(source_file):
                if self._resolver.resolve(source_file.path, decl.module_specifier) != target:
                    continue
                if decl.is_wildcard and export_name != "default":
                    self._collect_importers(source_file.path, export_name, rewrite, visited, out)
                    continue
                for spec in decl.specifiers:
                    if spec.name != export_name:
                        continue
                    out.append(make_location(source_file, spec.name_node, rewrite=rewrite))
                    self._collect_importers(
                        source_file.path,
                        spec.alias or spec.name,
                        rewrite and spec.alias is None,
                        visited,
                        out,
                    )

    def _collect_local_uses(
        self, source_file: SourceFile, local_name: str, rewrite: bool, out: List[ReferenceLocation]
    ) -> None:
        for node in usage_index(source_file).get(local_name, []):
            if binds_at_top_level(source_file, node):
                out.append(make_location(source_file, node, rewrite=rewrite))

    def _collect_member_uses(
        self,
        source_file: SourceFile,
        namespace: str,
        member: str,
        rewrite: bool,
        out: List[ReferenceLocation],
    ) -> None:
        for node in usage_index(source_file).get(namespace, []):
            if not binds_at_top_level(source_file, node):
                continue
            target = _qualified_member(source_file, node)
            if target is not None and source_file.node_text(target) == member:
                out.append(make_location(source_file, target, rewrite=rewrite))


def _qualified_member(source_file: SourceFile, qualifier: Node) -> Optional[Node]:
    """For `ns.Name` (value or type position), the `Name` node."""
    parent = qualifier.parent
    if parent is None:
        return None
    if parent.type == "member_expression" and same_node(
        parent.child_by_field_name("object"), qualifier
    ):
        return parent.child_by_field_name("property")
    if parent.type == "nested_type_identifier" and same_node(
        parent.child_by_field_name("module"), qualifier
    ):
        return parent.child_by_field_name("name")
    if parent.type == "nested_identifier":
        for child in parent.named_children:
            if child.type == "property_identifier":
                return child
    return None
