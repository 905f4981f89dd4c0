import pytest

from retype.refactor import ReferencesService, SearchService
from retype.workspace import Project


@pytest.fixture
def project(workspace_factory):
    root = (
        workspace_factory.with_source(
            "src/a.ts", "export function greet() {}\n\nfunction hidden() {}\n"
        )
        .with_source("src/b.ts", 'import { greet } from "./a";\n\ngreet();\n')
        .with_source("src/c.ts", 'export * from "./a";\n')
        .build()
    )
    return Project(root).load()


def test_file_references(project):
    refs = ReferencesService(project).find_file_references("src/a.ts")

    assert [(project.relative(r.from_file), r.line, r.import_statement) for r in refs] == [
        ("src/b.ts", 1, 'import { greet } from "./a";'),
        ("src/c.ts", 1, 'export * from "./a";'),
    ]
    assert all(r.to_file == project.root_path / "src/a.ts" for r in refs)


def test_entity_references_exclude_the_declaration(project):
    greet = SearchService(project).find_by_name("greet")[0]

    refs = ReferencesService(project).find_entity_references(greet)

    assert [(project.relative(r.file), r.line) for r in refs.referenced_in] == [
        ("src/b.ts", 1),
        ("src/b.ts", 3),
    ]


def test_report_for_a_file(project):
    report = ReferencesService(project).find_all_references_to_file("src/a.ts")

    assert len(report.imports) == 2
    assert [e.entity.name for e in report.entities] == ["greet"]


def test_unknown_file_has_no_references(project):
    report = ReferencesService(project).find_all_references_to_file("src/missing.ts")
    assert report.imports == []
    assert report.entities == []
