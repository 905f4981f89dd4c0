from pathlib import Path

import pytest

from retype.lang.typescript import TypeScriptProvider
from retype.spec.exceptions import StaleHandleError


def load(text: str, name: str = "a.ts"):
    provider = TypeScriptProvider()
    source_file = provider.add_source_file(Path("/virtual") / name, text)
    return provider, source_file


def test_add_import_to_file_without_imports():
    provider, sf = load("const x = 1;\n")

    provider.add_module_declaration(sf, "./lib", [("a", None)])

    assert sf.text == 'import { a } from "./lib";\n\nconst x = 1;\n'


def test_add_import_after_last_import_keeps_quote_style():
    provider, sf = load("import { b } from './b';\n\nfoo();\n")

    provider.add_module_declaration(sf, "./a", [("a", None), ("c", "d")])

    assert sf.text == "import { b } from './b';\nimport { a, c as d } from './a';\n\nfoo();\n"


def test_add_specifier_extends_named_imports():
    provider, sf = load("import { a } from './a';\n")

    provider.add_specifier(provider.get_imports(sf)[0], "b")

    assert sf.text == "import { a, b } from './a';\n"


def test_add_specifier_next_to_default_import():
    provider, sf = load("import D from './d';\n")

    provider.add_specifier(provider.get_imports(sf)[0], "x")

    assert sf.text == "import D, { x } from './d';\n"


def test_add_specifier_to_namespace_import_is_refused():
    provider, sf = load("import * as ns from './d';\n")
    with pytest.raises(ValueError):
        provider.add_specifier(provider.get_imports(sf)[0], "x")


@pytest.mark.parametrize(
    "name, expected",
    [
        ("a", "import { b } from './a';\n"),
        ("b", "import { a } from './a';\n"),
    ],
)
def test_remove_one_of_several_specifiers(name, expected):
    provider, sf = load("import { a, b } from './a';\n")

    provider.remove_specifier(provider.get_imports(sf)[0], name)

    assert sf.text == expected


def test_removing_the_last_specifier_removes_the_statement():
    provider, sf = load("import { a } from './a';\nconst x = a;\n")

    provider.remove_specifier(provider.get_imports(sf)[0], "a")

    assert sf.text == "const x = a;\n"


def test_set_module_specifier():
    provider, sf = load("import { a } from './a';\n")

    provider.set_module_specifier(provider.get_imports(sf)[0], "./lib/a")

    assert sf.text == "import { a } from './lib/a';\n"


def test_records_from_an_older_parse_are_rejected():
    provider, sf = load("import { a, b } from './a';\n")
    decl = provider.get_imports(sf)[0]
    provider.remove_specifier(decl, "a")

    with pytest.raises(StaleHandleError):
        provider.remove_specifier(decl, "b")


@pytest.mark.parametrize(
    "index, expected",
    [
        (0, "export const b = 2;\n"),
        (1, "export const a = 1;\n"),
    ],
)
def test_remove_one_declarator(index, expected):
    provider, sf = load("export const a = 1, b = 2;\n")

    provider.remove_declaration(provider.get_declarations(sf).variables[index])

    assert sf.text == expected


def test_remove_declaration_takes_comments_and_blank_line():
    provider, sf = load(
        "const keep = 1;\n"
        "\n"
        "// Adds things.\n"
        "export function add(a: number, b: number) {\n"
        "  return a + b;\n"
        "}\n"
        "\n"
        "export const after = 2;\n"
    )

    provider.remove_declaration(provider.get_declarations(sf).functions[0])

    assert sf.text == "const keep = 1;\n\nexport const after = 2;\n"


def test_capture_and_referenced_names():
    provider, sf = load(
        "import { fmt } from './fmt';\n"
        "const LIMIT = 3;\n"
        "/** Docs. */\n"
        "function clip(text: string): string {\n"
        "  return fmt(text).slice(0, LIMIT);\n"
        "}\n"
    )
    handle = provider.get_declarations(sf).functions[0]

    captured = provider.capture_declaration(handle)
    names = provider.referenced_names(handle)

    assert captured.leading_comments == "/** Docs. */\n"
    assert captured.statement_text.startswith("function clip(")
    assert not captured.statement_has_export
    assert {"fmt", "LIMIT", "text"} <= names
    assert "clip" not in names
    assert "slice" not in names
