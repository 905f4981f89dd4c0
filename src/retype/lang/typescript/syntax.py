"""
Top-level structure of a TypeScript file: named declarations, import
declarations and re-exports. All results are memoized per parse.
"""

from typing import Dict, Iterator, List, Optional, Set

from tree_sitter import Node

from retype.spec.language import DeclarationHandle, ModuleDeclaration, ModuleSpecifier
from retype.spec.models import EntityKind

from .source_file import SourceFile

DECLARATION_KINDS: Dict[str, EntityKind] = {
    "function_declaration": EntityKind.FUNCTION,
    "generator_function_declaration": EntityKind.FUNCTION,
    "function_signature": EntityKind.FUNCTION,
    "class_declaration": EntityKind.CLASS,
    "abstract_class_declaration": EntityKind.CLASS,
    "interface_declaration": EntityKind.INTERFACE,
    "type_alias_declaration": EntityKind.TYPE,
    "enum_declaration": EntityKind.ENUM,
}

VARIABLE_STATEMENTS = ("lexical_declaration", "variable_declaration")

COMMENT = "comment"


def same_node(a: Optional[Node], b: Optional[Node]) -> bool:
    if a is None or b is None:
        return False
    return a.start_byte == b.start_byte and a.end_byte == b.end_byte and a.type == b.type


def is_field(parent: Node, field_name: str, node: Node) -> bool:
    return same_node(parent.child_by_field_name(field_name), node)


def has_token(node: Node, token: str) -> bool:
    """True if `node` has a direct anonymous child spelled `token`."""
    return any(not child.is_named and child.type == token for child in node.children)


def string_value(source_file: SourceFile, node: Node) -> str:
    return source_file.node_text(node)[1:-1]


def top_level_statements(source_file: SourceFile) -> Iterator[Node]:
    for child in source_file.root.named_children:
        if child.type != COMMENT:
            yield child


def unwrap_declaration(statement: Node) -> Optional[Node]:
    """Strip `export` and `declare` wrappers off a top-level statement."""
    node = statement
    if node.type == "export_statement":
        inner = node.child_by_field_name("declaration")
        if inner is None:
            return None
        node = inner
    if node.type == "ambient_declaration":
        for child in node.named_children:
            if child.type in DECLARATION_KINDS or child.type in VARIABLE_STATEMENTS:
                return child
        return None
    return node


def _export_clause(statement: Node) -> Optional[Node]:
    for child in statement.named_children:
        if child.type == "export_clause":
            return child
    return None


def local_export_names(source_file: SourceFile) -> Set[str]:
    """Names exported through `export { a, b }` or `export default a;`."""
    cached = source_file.cache.get("local_exports")
    if cached is not None:
        return cached

    names: Set[str] = set()
    defaults: Set[str] = set()
    aliases: Dict[str, List[str]] = {}
    for statement in top_level_statements(source_file):
        if statement.type != "export_statement":
            continue
        if statement.child_by_field_name("source") is not None:
            continue
        clause = _export_clause(statement)
        if clause is not None:
            for spec in clause.named_children:
                if spec.type != "export_specifier":
                    continue
                name_node = spec.child_by_field_name("name")
                if name_node is None:
                    continue
                name = source_file.node_text(name_node)
                names.add(name)
                alias_node = spec.child_by_field_name("alias")
                exported_as = source_file.node_text(alias_node) if alias_node is not None else name
                if exported_as == "default":
                    defaults.add(name)
                else:
                    aliases.setdefault(name, []).append(exported_as)
        value = statement.child_by_field_name("value")
        if value is not None and value.type == "identifier":
            names.add(source_file.node_text(value))
            defaults.add(source_file.node_text(value))

    source_file.cache["local_exports"] = names
    source_file.cache["default_exports"] = defaults
    source_file.cache["export_aliases"] = aliases
    return names


def default_export_names(source_file: SourceFile) -> Set[str]:
    local_export_names(source_file)
    return source_file.cache["default_exports"]


def exported_names_of(source_file: SourceFile, name: str) -> List[str]:
    """Public names under which the local binding `name` is exported by a clause."""
    local_export_names(source_file)
    return source_file.cache["export_aliases"].get(name, [])


def collect_declarations(source_file: SourceFile) -> List[DeclarationHandle]:
    """Named top-level declarations in source order."""
    cached = source_file.cache.get("declarations")
    if cached is not None:
        return cached

    exported_names = local_export_names(source_file)
    default_names = default_export_names(source_file)
    handles: List[DeclarationHandle] = []

    for statement in top_level_statements(source_file):
        node = unwrap_declaration(statement)
        if node is None:
            continue
        export_modifier = statement.type == "export_statement"
        default_modifier = export_modifier and has_token(statement, "default")

        if node.type in VARIABLE_STATEMENTS:
            for declarator in node.named_children:
                if declarator.type != "variable_declarator":
                    continue
                name_node = declarator.child_by_field_name("name")
                # Destructuring declarators are not tracked.
                if name_node is None or name_node.type != "identifier":
                    continue
                name = source_file.node_text(name_node)
                handles.append(
                    DeclarationHandle(
                        source_file=source_file,
                        generation=source_file.generation,
                        kind=EntityKind.VARIABLE,
                        node=declarator,
                        name_node=name_node,
                        statement=statement,
                        declaration=node,
                        is_exported=export_modifier or name in exported_names,
                        is_default_export=name in default_names,
                    )
                )
            continue

        kind = DECLARATION_KINDS.get(node.type)
        if kind is None:
            continue
        name_node = node.child_by_field_name("name")
        if name_node is None:
            continue
        name = source_file.node_text(name_node)
        handles.append(
            DeclarationHandle(
                source_file=source_file,
                generation=source_file.generation,
                kind=kind,
                node=node,
                name_node=name_node,
                statement=statement,
                declaration=node,
                is_exported=export_modifier or name in exported_names,
                is_default_export=default_modifier or name in default_names,
            )
        )

    source_file.cache["declarations"] = handles
    return handles


def _specifiers(source_file: SourceFile, clause: Node, node_type: str) -> List[ModuleSpecifier]:
    result = []
    for spec in clause.named_children:
        if spec.type != node_type:
            continue
        name_node = spec.child_by_field_name("name")
        if name_node is None:
            continue
        alias_node = spec.child_by_field_name("alias")
        name = source_file.node_text(name_node)
        if name_node.type == "string":
            name = name[1:-1]
        result.append(
            ModuleSpecifier(
                name=name,
                alias=source_file.node_text(alias_node) if alias_node is not None else None,
                node=spec,
                name_node=name_node,
            )
        )
    return result


def _parse_import(source_file: SourceFile, statement: Node) -> Optional[ModuleDeclaration]:
    source_node = statement.child_by_field_name("source")
    if source_node is None or source_node.type != "string":
        return None

    clause_node = None
    specifiers: List[ModuleSpecifier] = []
    default_name = None
    namespace_name = None

    for child in statement.named_children:
        if child.type != "import_clause":
            continue
        for part in child.named_children:
            if part.type == "identifier":
                default_name = source_file.node_text(part)
            elif part.type == "namespace_import":
                for ident in part.named_children:
                    if ident.type == "identifier":
                        namespace_name = source_file.node_text(ident)
            elif part.type == "named_imports":
                clause_node = part
                specifiers = _specifiers(source_file, part, "import_specifier")

    return ModuleDeclaration(
        source_file=source_file,
        generation=source_file.generation,
        kind="import",
        module_specifier=string_value(source_file, source_node),
        node=statement,
        source_node=source_node,
        clause_node=clause_node,
        specifiers=specifiers,
        default_name=default_name,
        namespace_name=namespace_name,
        is_type_only=has_token(statement, "type"),
    )


def _parse_reexport(source_file: SourceFile, statement: Node) -> Optional[ModuleDeclaration]:
    source_node = statement.child_by_field_name("source")
    if source_node is None or source_node.type != "string":
        return None

    clause_node = _export_clause(statement)
    namespace_name = None
    for child in statement.named_children:
        if child.type == "namespace_export":
            for ident in child.named_children:
                namespace_name = source_file.node_text(ident)

    return ModuleDeclaration(
        source_file=source_file,
        generation=source_file.generation,
        kind="export",
        module_specifier=string_value(source_file, source_node),
        node=statement,
        source_node=source_node,
        clause_node=clause_node,
        specifiers=(
            _specifiers(source_file, clause_node, "export_specifier")
            if clause_node is not None
            else []
        ),
        namespace_name=namespace_name,
        is_type_only=has_token(statement, "type"),
        is_wildcard=clause_node is None and namespace_name is None,
    )


def collect_imports(source_file: SourceFile) -> List[ModuleDeclaration]:
    cached = source_file.cache.get("imports")
    if cached is None:
        cached = []
        for statement in top_level_statements(source_file):
            if statement.type == "import_statement":
                decl = _parse_import(source_file, statement)
                if decl is not None:
                    cached.append(decl)
        source_file.cache["imports"] = cached
    return cached


def collect_reexports(source_file: SourceFile) -> List[ModuleDeclaration]:
    cached = source_file.cache.get("reexports")
    if cached is None:
        cached = []
        for statement in top_level_statements(source_file):
            if statement.type == "export_statement":
                decl = _parse_reexport(source_file, statement)
                if decl is not None:
                    cached.append(decl)
        source_file.cache["reexports"] = cached
    return cached


def leading_comment_start(source_file: SourceFile, statement: Node) -> int:
    """
    Start offset of the comment block directly attached above `statement`
    (no blank line in between), or the statement start if there is none.
    """
    start = statement.start_byte
    node = statement.prev_sibling
    while node is not None and node.type == COMMENT:
        gap = source_file.slice(node.end_byte, start)
        if gap.count("\n") > 1 or gap.strip():
            break
        # A trailing comment of the previous statement is not attached.
        if source_file.slice(source_file.line_start(node.start_byte), node.start_byte).strip():
            break
        start = node.start_byte
        node = node.prev_sibling
    return start
