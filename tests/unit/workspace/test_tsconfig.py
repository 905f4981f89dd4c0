import json

import pytest

from retype.spec.exceptions import ConfigurationError
from retype.workspace.tsconfig import (
    designated_files,
    load_tsconfig,
    read_jsonc,
    strip_json_comments,
)


def test_strip_json_comments_keeps_strings_intact():
    text = '{"url": "http://example.com", // trailing\n "n": 1 /* block */}'
    assert json.loads(strip_json_comments(text)) == {"url": "http://example.com", "n": 1}


def test_read_jsonc_accepts_trailing_commas(tmp_path):
    path = tmp_path / "tsconfig.json"
    path.write_text('{\n  "include": ["src",],\n}\n', encoding="utf-8")
    assert read_jsonc(path) == {"include": ["src"]}


def test_read_jsonc_rejects_invalid_json(tmp_path):
    path = tmp_path / "tsconfig.json"
    path.write_text("{ include: }", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        read_jsonc(path)


def test_designated_files_follow_include(workspace_factory):
    root = (
        workspace_factory.with_tsconfig({"include": ["src"]})
        .with_source("src/a.ts", "")
        .with_source("src/sub/b.ts", "")
        .with_source("src/x.js", "")
        .with_source("other/c.ts", "")
        .build()
    )

    files = designated_files(load_tsconfig(root / "tsconfig.json"))

    assert files == [(root / "src/a.ts").resolve(), (root / "src/sub/b.ts").resolve()]


def test_designated_files_respect_files_and_allow_js(workspace_factory):
    root = (
        workspace_factory.with_tsconfig(
            {"compilerOptions": {"allowJs": True}, "files": ["main.ts"], "include": ["lib"]}
        )
        .with_source("main.ts", "")
        .with_source("lib/util.js", "")
        .with_source("unlisted.ts", "")
        .build()
    )

    files = designated_files(load_tsconfig(root / "tsconfig.json"))

    assert files == [(root / "main.ts").resolve(), (root / "lib/util.js").resolve()]


def test_extends_merges_parent_options(workspace_factory):
    root = (
        workspace_factory.with_tsconfig(
            {"compilerOptions": {"allowJs": True}, "include": ["src"]}, path="tsconfig.base.json"
        )
        .with_tsconfig({"extends": "./tsconfig.base.json", "compilerOptions": {"strict": True}})
        .build()
    )

    config = load_tsconfig(root / "tsconfig.json")

    assert config.allow_js
    assert config.compiler_options["strict"] is True
    assert config.include == ["src"]
