import pytest

from retype.spec.exceptions import ConfigurationError, NotInitializedError
from retype.workspace import Project


def test_project_must_be_loaded_before_use(tmp_path):
    project = Project(tmp_path)

    assert not project.loaded
    with pytest.raises(NotInitializedError):
        project.list_files()
    with pytest.raises(NotInitializedError):
        project.build_import_graph()


def test_load_without_tsconfig_uses_globs(workspace_factory):
    root = (
        workspace_factory.with_source("src/a.ts", "export const a = 1;\n")
        .with_source("src/types.d.ts", "declare const x: number;\n")
        .with_source("node_modules/lib/index.ts", "export const lib = 1;\n")
        .build()
    )

    project = Project(root).load()

    assert project.tsconfig_used is None
    assert [project.relative(sf.path) for sf in project.list_files()] == ["src/a.ts"]


def test_load_with_tsconfig(workspace_factory):
    root = (
        workspace_factory.with_tsconfig({"include": ["src"]})
        .with_source("src/a.ts", "")
        .with_source("scripts/build.ts", "")
        .build()
    )

    project = Project(root).load()

    assert project.tsconfig_used == root.resolve() / "tsconfig.json"
    assert project.file_count == 1


def test_required_tsconfig_missing(tmp_path):
    with pytest.raises(ConfigurationError):
        Project(tmp_path).load(require_config=True)


def test_missing_explicit_tsconfig_falls_back_to_globs(workspace_factory):
    root = workspace_factory.with_source("a.ts", "").build()

    project = Project(root, config_path="custom/tsconfig.json").load()

    assert project.tsconfig_used is None
    assert project.file_count == 1


def test_import_graph_edges(workspace_factory):
    root = (
        workspace_factory.with_source("src/a.ts", 'import { b } from "./b";\nexport const a = b;\n')
        .with_source("src/b.ts", "export const b = 1;\n")
        .with_source("src/c.ts", 'export * from "./a";\nimport fs from "fs";\n')
        .build()
    )
    project = Project(root).load()
    a, b, c = (project.resolve_path(f"src/{name}.ts") for name in "abc")

    graph = project.build_import_graph()

    assert set(graph.edges) == {(a, b), (c, a)}
    assert [decl.module_specifier for decl in graph.edges[c, a]["imports"]] == ["./a"]


def test_add_file_is_written_on_save(workspace_factory):
    root = workspace_factory.with_source("a.ts", "").build()
    project = Project(root).load()

    project.add_file("lib/new.ts", "export const n = 1;\n")
    written = project.save()

    assert written == [root.resolve() / "lib/new.ts"]
    assert (root / "lib/new.ts").read_text(encoding="utf-8") == "export const n = 1;\n"


def test_entry_points_match_file_names(tmp_path):
    project = Project(tmp_path, entry_points=["main.ts"])
    assert project.is_entry_point(tmp_path / "src/main.ts")
    assert not project.is_entry_point(tmp_path / "src/index.ts")
