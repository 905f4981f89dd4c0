"""
Text-level mutations of TypeScript files.

Each function computes byte-range edits against the current parse and applies
them through `SourceFile.apply_edits`, which reparses the file. Records taken
from an older parse are rejected.
"""

from typing import Iterable, List, Optional, Set, Tuple

from tree_sitter import Node

from retype.spec.exceptions import StaleHandleError
from retype.spec.language import CapturedDeclaration, DeclarationHandle, ModuleDeclaration
from retype.spec.models import EntityKind

from .source_file import SourceFile, TextEdit
from .syntax import collect_imports, leading_comment_start

RAW_NAME_TYPES = frozenset({"identifier", "type_identifier", "shorthand_property_identifier"})


def _check_fresh(record, source_file: SourceFile) -> None:
    if record.generation != source_file.generation:
        raise StaleHandleError(
            f"{source_file.path} changed since this declaration was read; search again."
        )


def format_specifiers(names: Iterable[Tuple[str, Optional[str]]]) -> str:
    parts = []
    for name, alias in names:
        parts.append(name if not alias or alias == name else f"{name} as {alias}")
    return ", ".join(parts)


def quote_style(source_file: SourceFile) -> str:
    for decl in collect_imports(source_file):
        return source_file.node_text(decl.source_node)[0]
    return '"'


def removal_range(source_file: SourceFile, start: int, end: int) -> Tuple[int, int]:
    """
    Widen [start, end) to whole lines when the range is alone on its lines,
    and swallow one blank line so that removal leaves no double gap.
    """
    size = len(source_file.source)
    line_start = source_file.line_start(start)
    if not source_file.slice(line_start, start).strip():
        start = line_start
    line_end = source_file.line_end(end) if end < size else size
    if not source_file.slice(end, line_end).strip():
        end = line_end

    preceded_by_blank = start == 0 or not source_file.slice(
        source_file.line_start(start - 1), start
    ).strip()
    if preceded_by_blank and end < size:
        next_end = source_file.line_end(end)
        if not source_file.slice(end, next_end).strip():
            end = next_end
    elif preceded_by_blank and start > 0:
        # Nothing follows, so the gap above goes instead.
        start = source_file.line_start(start - 1)
    return start, end


def _list_item_range(items: List[Node], index: int) -> Tuple[int, int]:
    """Range removing one element of a comma separated list, comma included."""
    if index < len(items) - 1:
        return items[index].start_byte, items[index + 1].start_byte
    return items[index - 1].end_byte, items[index].end_byte


def remove_statement(source_file: SourceFile, statement: Node) -> None:
    start = leading_comment_start(source_file, statement)
    start, end = removal_range(source_file, start, statement.end_byte)
    source_file.apply_edits([TextEdit(start, end, "")])


def _declarators(handle: DeclarationHandle) -> List[Node]:
    return [c for c in handle.declaration.named_children if c.type == "variable_declarator"]


def remove_declaration(handle: DeclarationHandle) -> None:
    source_file: SourceFile = handle.source_file
    _check_fresh(handle, source_file)
    if handle.kind is EntityKind.VARIABLE:
        declarators = _declarators(handle)
        if len(declarators) > 1:
            index = next(
                i for i, d in enumerate(declarators) if d.start_byte == handle.node.start_byte
            )
            start, end = _list_item_range(declarators, index)
            source_file.apply_edits([TextEdit(start, end, "")])
            return
    remove_statement(source_file, handle.statement)


def capture_declaration(handle: DeclarationHandle) -> CapturedDeclaration:
    source_file: SourceFile = handle.source_file
    _check_fresh(handle, source_file)
    statement = handle.statement
    comment_start = leading_comment_start(source_file, statement)

    keyword = None
    declarator_text = None
    count = 1
    if handle.kind is EntityKind.VARIABLE:
        count = len(_declarators(handle))
        keyword = handle.declaration.children[0].type
        declarator_text = source_file.node_text(handle.node)

    return CapturedDeclaration(
        leading_comments=source_file.slice(comment_start, statement.start_byte),
        statement_text=source_file.node_text(statement),
        statement_has_export=statement.type == "export_statement",
        declarator_count=count,
        declaration_keyword=keyword,
        declarator_text=declarator_text,
    )


def referenced_names(handle: DeclarationHandle) -> Set[str]:
    source_file: SourceFile = handle.source_file
    _check_fresh(handle, source_file)
    root = handle.node if handle.kind is EntityKind.VARIABLE else handle.declaration
    names: Set[str] = set()
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type in RAW_NAME_TYPES:
            names.add(source_file.node_text(node))
        stack.extend(node.children)
    names.discard(handle.name)
    return names


def add_module_declaration(
    source_file: SourceFile,
    module_specifier: str,
    names: Iterable[Tuple[str, Optional[str]]],
    kind: str = "import",
) -> None:
    quote = quote_style(source_file)
    text = f"{kind} {{ {format_specifiers(names)} }} from {quote}{module_specifier}{quote};"
    imports = collect_imports(source_file)
    if imports:
        anchor = imports[-1].node.end_byte
        source_file.apply_edits([TextEdit(anchor, anchor, "\n" + text)])
        return
    separator = "\n"
    if source_file.text and not source_file.text.startswith("\n"):
        separator = "\n\n"
    source_file.apply_edits([TextEdit(0, 0, text + (separator if source_file.text else "\n"))])


def _default_identifier(declaration: ModuleDeclaration) -> Optional[Node]:
    for child in declaration.node.named_children:
        if child.type == "import_clause":
            for part in child.named_children:
                if part.type == "identifier":
                    return part
    return None


def add_specifier(declaration: ModuleDeclaration, name: str, alias: Optional[str] = None) -> None:
    source_file: SourceFile = declaration.source_file
    _check_fresh(declaration, source_file)
    text = format_specifiers([(name, alias)])

    if declaration.clause_node is not None:
        if declaration.specifiers:
            anchor = declaration.specifiers[-1].node.end_byte
            edit = TextEdit(anchor, anchor, ", " + text)
        else:
            clause = declaration.clause_node
            edit = TextEdit(clause.start_byte, clause.end_byte, "{ " + text + " }")
    else:
        default = _default_identifier(declaration) if declaration.kind == "import" else None
        if default is None or declaration.namespace_name is not None:
            raise ValueError(
                f"Cannot add a named binding to '{declaration.text}' in {source_file.path}"
            )
        edit = TextEdit(default.end_byte, default.end_byte, ", { " + text + " }")
    source_file.apply_edits([edit])


def remove_specifier(declaration: ModuleDeclaration, name: str) -> None:
    source_file: SourceFile = declaration.source_file
    _check_fresh(declaration, source_file)
    specs = declaration.specifiers
    index = next((i for i, spec in enumerate(specs) if spec.name == name), None)
    if index is None:
        return

    if len(specs) > 1:
        start, end = _list_item_range([spec.node for spec in specs], index)
        source_file.apply_edits([TextEdit(start, end, "")])
        return

    default = _default_identifier(declaration) if declaration.kind == "import" else None
    if default is not None and declaration.clause_node is not None:
        source_file.apply_edits([TextEdit(default.end_byte, declaration.clause_node.end_byte, "")])
        return
    remove_statement(source_file, declaration.node)


def set_module_specifier(declaration: ModuleDeclaration, module_specifier: str) -> None:
    source_file: SourceFile = declaration.source_file
    _check_fresh(declaration, source_file)
    node = declaration.source_node
    quote = source_file.node_text(node)[0]
    source_file.apply_edits(
        [TextEdit(node.start_byte, node.end_byte, f"{quote}{module_specifier}{quote}")]
    )
