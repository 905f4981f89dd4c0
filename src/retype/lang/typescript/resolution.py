import os
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple

SOURCE_EXTENSIONS = (".ts", ".tsx", ".d.ts", ".js", ".jsx")

# Emitted-JavaScript specifiers that point at a TypeScript source.
_JS_TO_TS = {
    ".js": (".ts", ".tsx"),
    ".jsx": (".tsx",),
    ".mjs": (".mts",),
    ".cjs": (".cts",),
}

NODE_BUILTINS = frozenset(
    {
        "assert",
        "async_hooks",
        "buffer",
        "child_process",
        "cluster",
        "console",
        "constants",
        "crypto",
        "dgram",
        "dns",
        "domain",
        "events",
        "fs",
        "fs/promises",
        "http",
        "http2",
        "https",
        "inspector",
        "module",
        "net",
        "os",
        "path",
        "perf_hooks",
        "process",
        "punycode",
        "querystring",
        "readline",
        "repl",
        "stream",
        "string_decoder",
        "timers",
        "tls",
        "tty",
        "url",
        "util",
        "v8",
        "vm",
        "worker_threads",
        "zlib",
    }
)


def is_relative(module_specifier: str) -> bool:
    return module_specifier.startswith("./") or module_specifier.startswith("../") or module_specifier in (".", "..")


def package_name(module_specifier: str) -> str:
    parts = module_specifier.split("/")
    if module_specifier.startswith("@") and len(parts) > 1:
        return "/".join(parts[:2])
    return parts[0]


class ModuleResolver:
    """
    Maps (importing file, module specifier) to a file.

    Relative specifiers resolve against known project files first and the file
    system second, trying the TypeScript extension list and `index` files.
    Bare specifiers never resolve to a project file; `exists_package` only
    tells whether they are installed.
    """

    def __init__(self, is_known: Callable[[Path], bool]):
        self._is_known = is_known
        self._cache: Dict[Tuple[Path, str], Optional[Path]] = {}

    def clear(self) -> None:
        self._cache.clear()

    def _exists(self, path: Path) -> bool:
        return self._is_known(path) or path.is_file()

    def resolve(self, from_path: Path, module_specifier: str) -> Optional[Path]:
        if not is_relative(module_specifier):
            return None
        key = (from_path, module_specifier)
        if key not in self._cache:
            self._cache[key] = self._resolve(from_path, module_specifier)
        return self._cache[key]

    def _resolve(self, from_path: Path, module_specifier: str) -> Optional[Path]:
        base = Path(os.path.normpath(from_path.parent / module_specifier))

        suffix = base.suffix.lower()
        if suffix in _JS_TO_TS:
            stem = base.with_suffix("")
            for ext in _JS_TO_TS[suffix]:
                candidate = stem.with_name(stem.name + ext)
                if self._exists(candidate):
                    return candidate
        if suffix in SOURCE_EXTENSIONS and self._exists(base):
            return base

        for ext in SOURCE_EXTENSIONS:
            candidate = base.with_name(base.name + ext)
            if self._exists(candidate):
                return candidate
        for ext in SOURCE_EXTENSIONS:
            candidate = base / f"index{ext}"
            if self._exists(candidate):
                return candidate
        return None

    def exists_package(self, from_path: Path, module_specifier: str) -> bool:
        if module_specifier.startswith("node:") or module_specifier in NODE_BUILTINS:
            return True
        name = package_name(module_specifier)
        for directory in from_path.parents:
            if (directory / "node_modules" / name).exists():
                return True
            if (directory / "node_modules" / "@types" / name.lstrip("@").replace("/", "__")).exists():
                return True
        return False
