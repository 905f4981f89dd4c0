from retype.refactor import ImportsService
from retype.workspace import Project

GREETER = """\
export function greet(): string {
  return "hi";
}

export const other = 1;
"""


def load(workspace_factory, **files: str) -> Project:
    for name, content in files.items():
        workspace_factory.with_source(f"src/{name}.ts", content)
    return Project(workspace_factory.build()).load()


def test_missing_name_with_single_candidate_is_fixed(workspace_factory):
    project = load(workspace_factory, a=GREETER, b="console.log(greet());\n")
    service = ImportsService(project)

    analysis = service.analyze_import_errors()

    assert analysis.unfixable == []
    assert len(analysis.fixable) == 1
    fix = analysis.fixable[0]
    assert fix.error.missing_name == "greet"
    assert fix.error.file == project.root_path / "src/b.ts"
    assert (fix.error.line, fix.error.column) == (1, 13)
    assert [c.name for c in fix.candidates] == ["greet"]

    assert service.fix_import(fix) is True
    assert fix.selected_candidate is fix.candidates[0]
    assert project.get_file("src/b.ts").text == (
        'import { greet } from "./a";\n\nconsole.log(greet());\n'
    )
    # Nothing is written until the caller saves.
    assert (project.root_path / "src/b.ts").read_text(encoding="utf-8") == (
        "console.log(greet());\n"
    )
    assert service.analyze_import_errors().fixable == []


def test_fix_multiple_saves_once(workspace_factory):
    project = load(
        workspace_factory,
        a=GREETER,
        b="console.log(greet());\n",
        c="export const twice = () => greet() + greet();\n",
    )
    service = ImportsService(project)
    fixes = service.analyze_import_errors().fixable

    summary = service.fix_multiple(fixes)

    assert (summary.fixed, summary.failed) == (3, 0)
    c_text = (project.root_path / "src/c.ts").read_text(encoding="utf-8")
    assert c_text.count('import { greet } from "./a";') == 1


def test_existing_import_of_the_module_is_extended(workspace_factory):
    project = load(
        workspace_factory,
        a=GREETER,
        b='import { other } from "./a";\n\nconsole.log(greet(), other);\n',
    )
    service = ImportsService(project)

    service.fix_import(service.analyze_import_errors().fixable[0])

    assert project.get_file("src/b.ts").text.startswith('import { other, greet } from "./a";\n')


def test_unfixable_reasons(workspace_factory):
    project = load(
        workspace_factory,
        c='import { x } from "./nowhere";\n\nmissingThing(x);\n',
    )

    analysis = ImportsService(project).analyze_import_errors()

    assert analysis.fixable == []
    assert [item.reason for item in analysis.unfixable] == [
        'Module "./nowhere" not found - may need to be installed or path corrected',
        'No exported entity named "missingThing" found in the codebase',
    ]
    assert [item.error.missing_name for item in analysis.unfixable] == ["./nowhere", "missingThing"]


def test_ambiguous_candidates_need_a_selection(workspace_factory):
    project = load(
        workspace_factory,
        one="export const dup = 1;\n",
        two="export const dup = 2;\n",
        use="export const value = dup;\n",
    )
    service = ImportsService(project)
    fix = service.analyze_import_errors().fixable[0]

    assert len(fix.candidates) == 2
    assert service.fix_import(fix) is False

    fix.selected_candidate = fix.candidates[1]
    assert service.fix_import(fix) is True
    assert project.get_file("src/use.ts").text.startswith('import { dup } from "./two";\n')


def test_type_only_import_is_not_extended_with_a_value(workspace_factory):
    project = load(
        workspace_factory,
        a=GREETER + "\nexport interface Tag {\n  label: string;\n}\n",
        b="import type { Tag } from './a';\n\nexport const tag: Tag = { label: greet() };\n",
    )
    service = ImportsService(project)

    summary = service.fix_multiple(service.analyze_import_errors().fixable)

    assert (summary.fixed, summary.failed) == (1, 0)
    assert (project.root_path / "src/b.ts").read_text(encoding="utf-8").startswith(
        "import type { Tag } from './a';\nimport { greet } from './a';\n"
    )
