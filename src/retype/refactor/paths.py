import os
from pathlib import Path

TYPESCRIPT_SUFFIXES = (".ts", ".tsx")

# Longest first so that ".d.ts" wins over ".ts".
_STRIPPED_EXTENSIONS = (".d.ts", ".tsx", ".ts", ".jsx", ".js", ".mts", ".cts")


def is_typescript_file(path: Path) -> bool:
    return str(path).endswith(TYPESCRIPT_SUFFIXES)


def remove_extension(specifier: str) -> str:
    for ext in _STRIPPED_EXTENSIONS:
        if specifier.endswith(ext):
            return specifier[: -len(ext)]
    return specifier


def relative_path(from_file: Path, to_file: Path) -> str:
    """Path of `to_file` relative to the directory of `from_file`, with `/` separators."""
    rel = os.path.relpath(to_file, from_file.parent).replace(os.sep, "/")
    if not rel.startswith("."):
        rel = "./" + rel
    return rel


def module_specifier(from_file: Path, to_file: Path) -> str:
    """The specifier `from_file` uses to import `to_file`."""
    return remove_extension(relative_path(from_file, to_file))


def rebase_specifier(specifier: str, from_file: Path, to_file: Path) -> str:
    """
    Rewrite a relative specifier written in `from_file` so that it points at the
    same place when written in `to_file`.
    """
    absolute = os.path.normpath(os.path.join(str(from_file.parent), specifier))
    rel = os.path.relpath(absolute, to_file.parent).replace(os.sep, "/")
    if not rel.startswith("."):
        rel = "./" + rel
    return rel


def is_relative_specifier(specifier: str) -> bool:
    return specifier.startswith("./") or specifier.startswith("../") or specifier in (".", "..")
