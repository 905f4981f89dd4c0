"""
Lexical name resolution for TypeScript.

Resolution answers one question: which scope node binds a given identifier
usage. The answer is the program node for top-level bindings, some inner node
for locals, or None for names bound nowhere in the file (globals and missing
names).
"""

from typing import Dict, List, Optional, Set

from tree_sitter import Node

from .source_file import SourceFile
from .syntax import VARIABLE_STATEMENTS, is_field

FUNCTION_SCOPES = frozenset(
    {
        "function_declaration",
        "generator_function_declaration",
        "function_expression",
        "function",
        "generator_function",
        "arrow_function",
        "method_definition",
        "function_signature",
        "method_signature",
        "abstract_method_signature",
        "call_signature",
        "construct_signature",
        "function_type",
        "constructor_type",
    }
)

CLASS_SCOPES = frozenset({"class_declaration", "abstract_class_declaration", "class"})

SCOPE_TYPES = FUNCTION_SCOPES | CLASS_SCOPES | frozenset(
    {
        "program",
        "statement_block",
        "switch_body",
        "for_statement",
        "for_in_statement",
        "catch_clause",
        "interface_declaration",
        "type_alias_declaration",
        "enum_declaration",
        "conditional_type",
        "index_signature",
    }
)

NAMED_DECLARATIONS = frozenset(
    {
        "function_declaration",
        "generator_function_declaration",
        "function_signature",
        "class_declaration",
        "abstract_class_declaration",
        "interface_declaration",
        "type_alias_declaration",
        "enum_declaration",
        "internal_module",
        "module",
    }
)

# Nodes whose `name` field introduces a binding.
NAME_BINDERS = NAMED_DECLARATIONS | frozenset(
    {"function_expression", "function", "generator_function", "class", "type_parameter"}
)

PATTERN_CONTAINERS = frozenset(
    {
        "object_pattern",
        "array_pattern",
        "pair_pattern",
        "assignment_pattern",
        "object_assignment_pattern",
        "rest_pattern",
    }
)

IMPORT_BINDERS = frozenset(
    {"import_specifier", "namespace_import", "import_clause", "import_require_clause", "namespace_export"}
)

USAGE_TYPES = frozenset({"identifier", "type_identifier", "shorthand_property_identifier"})

JSX_ELEMENT_NAMES = frozenset(
    {"jsx_opening_element", "jsx_closing_element", "jsx_self_closing_element"}
)


def pattern_names(source_file: SourceFile, node: Optional[Node], out: Set[str]) -> None:
    if node is None:
        return
    node_type = node.type
    if node_type in ("identifier", "shorthand_property_identifier_pattern"):
        out.add(source_file.node_text(node))
    elif node_type in ("object_pattern", "array_pattern", "rest_pattern"):
        for child in node.named_children:
            pattern_names(source_file, child, out)
    elif node_type == "pair_pattern":
        pattern_names(source_file, node.child_by_field_name("value"), out)
    elif node_type in ("assignment_pattern", "object_assignment_pattern"):
        pattern_names(source_file, node.child_by_field_name("left"), out)


def _import_names(source_file: SourceFile, statement: Node, out: Set[str]) -> None:
    for child in statement.named_children:
        if child.type == "import_clause":
            for part in child.named_children:
                if part.type == "identifier":
                    out.add(source_file.node_text(part))
                elif part.type == "namespace_import":
                    for ident in part.named_children:
                        out.add(source_file.node_text(ident))
                elif part.type == "named_imports":
                    for spec in part.named_children:
                        if spec.type != "import_specifier":
                            continue
                        local = spec.child_by_field_name("alias") or spec.child_by_field_name("name")
                        if local is not None:
                            out.add(source_file.node_text(local))
        elif child.type == "import_require_clause":
            for ident in child.named_children:
                if ident.type == "identifier":
                    out.add(source_file.node_text(ident))
                    break


def statement_bindings(source_file: SourceFile, statement: Node, out: Set[str]) -> None:
    """Names a statement introduces into its enclosing block."""
    node_type = statement.type
    if node_type == "export_statement":
        inner = statement.child_by_field_name("declaration")
        if inner is not None:
            statement_bindings(source_file, inner, out)
    elif node_type in ("ambient_declaration", "expression_statement"):
        for child in statement.named_children:
            if child.type in NAMED_DECLARATIONS or child.type in VARIABLE_STATEMENTS:
                statement_bindings(source_file, child, out)
    elif node_type in VARIABLE_STATEMENTS:
        for declarator in statement.named_children:
            if declarator.type == "variable_declarator":
                pattern_names(source_file, declarator.child_by_field_name("name"), out)
    elif node_type in NAMED_DECLARATIONS:
        name = statement.child_by_field_name("name")
        if name is not None and name.type in ("identifier", "type_identifier"):
            out.add(source_file.node_text(name))
    elif node_type == "import_statement":
        _import_names(source_file, statement, out)
    elif node_type == "import_alias":
        for child in statement.named_children:
            if child.type == "identifier":
                out.add(source_file.node_text(child))
                break


def _hoisted_vars(source_file: SourceFile, body: Optional[Node], out: Set[str]) -> None:
    """`var` declarations anywhere below `body` that do not cross a function."""
    if body is None:
        return
    stack: List[Node] = [body]
    while stack:
        node = stack.pop()
        if node.type == "variable_declaration":
            statement_bindings(source_file, node, out)
        elif node.type == "for_in_statement":
            kind = node.child_by_field_name("kind")
            if kind is not None and kind.type == "var":
                pattern_names(source_file, node.child_by_field_name("left"), out)
        for child in node.named_children:
            if child.type not in FUNCTION_SCOPES and child.type not in CLASS_SCOPES:
                stack.append(child)


def _type_parameter_names(source_file: SourceFile, node: Node, out: Set[str]) -> None:
    params = node.child_by_field_name("type_parameters")
    if params is None:
        return
    for param in params.named_children:
        if param.type == "type_parameter":
            name = param.child_by_field_name("name")
            if name is not None:
                out.add(source_file.node_text(name))


def _infer_names(source_file: SourceFile, node: Node, out: Set[str]) -> None:
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "infer_type":
            for child in current.named_children:
                if child.type == "type_identifier":
                    out.add(source_file.node_text(child))
                    break
        stack.extend(current.named_children)


def scope_bindings(source_file: SourceFile, scope: Node) -> Set[str]:
    out: Set[str] = set()
    node_type = scope.type

    if node_type in ("program", "statement_block"):
        for statement in scope.named_children:
            statement_bindings(source_file, statement, out)
        if node_type == "program":
            _hoisted_vars(source_file, scope, out)
    elif node_type == "switch_body":
        for case in scope.named_children:
            for statement in case.named_children:
                statement_bindings(source_file, statement, out)
    elif node_type in FUNCTION_SCOPES:
        if node_type in ("function_expression", "function", "generator_function"):
            name = scope.child_by_field_name("name")
            if name is not None:
                out.add(source_file.node_text(name))
        _type_parameter_names(source_file, scope, out)
        params = scope.child_by_field_name("parameters")
        if params is not None:
            for param in params.named_children:
                if param.type in ("required_parameter", "optional_parameter"):
                    pattern_names(source_file, param.child_by_field_name("pattern"), out)
                elif param.type == "identifier":
                    out.add(source_file.node_text(param))
        pattern_names(source_file, scope.child_by_field_name("parameter"), out)
        _hoisted_vars(source_file, scope.child_by_field_name("body"), out)
    elif node_type in CLASS_SCOPES:
        _type_parameter_names(source_file, scope, out)
        if node_type == "class":
            name = scope.child_by_field_name("name")
            if name is not None:
                out.add(source_file.node_text(name))
    elif node_type in ("interface_declaration", "type_alias_declaration"):
        _type_parameter_names(source_file, scope, out)
    elif node_type == "enum_declaration":
        body = scope.child_by_field_name("body")
        if body is not None:
            for member in body.named_children:
                if member.type == "property_identifier":
                    out.add(source_file.node_text(member))
                elif member.type == "enum_assignment":
                    name = member.child_by_field_name("name")
                    if name is not None:
                        out.add(source_file.node_text(name))
    elif node_type == "for_statement":
        initializer = scope.child_by_field_name("initializer")
        if initializer is not None:
            statement_bindings(source_file, initializer, out)
    elif node_type == "for_in_statement":
        if scope.child_by_field_name("kind") is not None:
            pattern_names(source_file, scope.child_by_field_name("left"), out)
    elif node_type == "catch_clause":
        pattern_names(source_file, scope.child_by_field_name("parameter"), out)
    elif node_type == "conditional_type":
        _infer_names(source_file, scope, out)
    elif node_type == "index_signature":
        name = scope.child_by_field_name("name")
        if name is not None:
            out.add(source_file.node_text(name))
        for child in scope.named_children:
            if child.type == "mapped_type_clause":
                mapped = child.child_by_field_name("name")
                if mapped is not None:
                    out.add(source_file.node_text(mapped))

    return out


def is_binding(node: Node) -> bool:
    """True if the identifier introduces a name rather than using one."""
    parent = node.parent
    if parent is None:
        return False
    parent_type = parent.type

    if parent_type in NAME_BINDERS and is_field(parent, "name", node):
        return True
    if parent_type in IMPORT_BINDERS:
        return True
    if parent_type == "export_specifier":
        if is_field(parent, "alias", node):
            return True
        statement = parent.parent.parent if parent.parent is not None else None
        # The name of a re-export belongs to the other module.
        return statement is not None and statement.child_by_field_name("source") is not None
    if parent_type == "arrow_function" and is_field(parent, "parameter", node):
        return True
    if parent_type in ("mapped_type_clause", "index_signature") and is_field(parent, "name", node):
        return True
    if parent_type == "infer_type":
        return True
    if parent_type == "import_alias":
        return parent.named_children[0].start_byte == node.start_byte

    child, current = node, parent
    while current.type in PATTERN_CONTAINERS:
        if current.type == "pair_pattern" and not is_field(current, "value", child):
            return False
        if current.type in ("assignment_pattern", "object_assignment_pattern") and not is_field(
            current, "left", child
        ):
            return False
        child, current = current, current.parent
        if current is None:
            return False

    current_type = current.type
    if current_type == "variable_declarator":
        return is_field(current, "name", child)
    if current_type in ("required_parameter", "optional_parameter"):
        return is_field(current, "pattern", child)
    if current_type == "catch_clause":
        return is_field(current, "parameter", child)
    if current_type == "for_in_statement":
        return is_field(current, "left", child) and current.child_by_field_name("kind") is not None
    return False


def is_usage(source_file: SourceFile, node: Node) -> bool:
    if node.type not in USAGE_TYPES or is_binding(node):
        return False
    parent = node.parent
    if parent is None:
        return True
    if parent.type == "nested_type_identifier" and is_field(parent, "name", node):
        return False
    if parent.type in JSX_ELEMENT_NAMES and source_file.node_text(node)[:1].islower():
        return False
    return True


def usage_index(source_file: SourceFile) -> Dict[str, List[Node]]:
    """Every identifier usage in the file, keyed by name, in source order."""
    cached = source_file.cache.get("usages")
    if cached is not None:
        return cached

    index: Dict[str, List[Node]] = {}
    stack = [source_file.root]
    while stack:
        node = stack.pop()
        if node.type in USAGE_TYPES:
            if is_usage(source_file, node):
                index.setdefault(source_file.node_text(node), []).append(node)
            continue
        stack.extend(reversed(node.children))

    source_file.cache["usages"] = index
    return index


def resolve_scope(source_file: SourceFile, identifier: Node) -> Optional[Node]:
    """The nearest scope node binding the identifier's name, or None."""
    name = source_file.node_text(identifier)
    if identifier.type == "shorthand_property_identifier":
        name = name.strip()
    bindings_cache: Dict[int, Set[str]] = source_file.cache.setdefault("scopes", {})
    node = identifier.parent
    while node is not None:
        if node.type in SCOPE_TYPES:
            bindings = bindings_cache.get(node.id)
            if bindings is None:
                bindings = scope_bindings(source_file, node)
                bindings_cache[node.id] = bindings
            if name in bindings:
                return node
        node = node.parent
    return None


def binds_at_top_level(source_file: SourceFile, identifier: Node) -> bool:
    scope = resolve_scope(source_file, identifier)
    return scope is not None and scope.type == "program"
