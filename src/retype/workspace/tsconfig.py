import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from retype.spec.exceptions import ConfigurationError

from .globs import GlobSet, expand_directory_patterns, walk_files

log = logging.getLogger(__name__)

DEFAULT_TSCONFIG_EXCLUDE = ("node_modules", "bower_components", "jspm_packages")

_TRAILING_COMMA = re.compile(r",(\s*[}\]])")


def strip_json_comments(text: str) -> str:
    """Remove // and /* */ comments outside of string literals."""
    out = []
    i = 0
    in_string = False
    while i < len(text):
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < len(text):
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue
        if ch == '"':
            in_string = True
            out.append(ch)
            i += 1
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = len(text) if end == -1 else end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = len(text) if end == -1 else end + 2
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def read_jsonc(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e
    cleaned = _TRAILING_COMMA.sub(r"\1", strip_json_comments(text))
    try:
        data = json.loads(cleaned) if cleaned.strip() else {}
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a JSON object.")
    return data


@dataclass
class TsConfig:
    path: Path
    files: Optional[List[str]] = None
    include: Optional[List[str]] = None
    exclude: Optional[List[str]] = None
    compiler_options: Dict[str, Any] = field(default_factory=dict)

    @property
    def base_dir(self) -> Path:
        return self.path.parent

    @property
    def allow_js(self) -> bool:
        return bool(self.compiler_options.get("allowJs"))


def load_tsconfig(path: Path) -> TsConfig:
    """Read a tsconfig, merging one level of `extends` from a relative path."""
    data = read_jsonc(path)
    config = TsConfig(path=path)

    extends = data.get("extends")
    if isinstance(extends, str) and extends.startswith("."):
        parent_path = (path.parent / extends).resolve()
        if parent_path.suffix != ".json":
            parent_path = parent_path.with_name(parent_path.name + ".json")
        if parent_path.is_file():
            parent = read_jsonc(parent_path)
            config.compiler_options.update(parent.get("compilerOptions") or {})
            for key in ("files", "include", "exclude"):
                if key in parent:
                    # Inherited patterns are relative to the parent config.
                    rebased = [
                        _rebase(entry, parent_path.parent, path.parent) for entry in parent[key]
                    ]
                    setattr(config, key, rebased)
        else:
            log.warning("tsconfig %s extends missing file %s", path, parent_path)

    config.compiler_options.update(data.get("compilerOptions") or {})
    for key in ("files", "include", "exclude"):
        if key in data:
            setattr(config, key, list(data[key]))
    return config


def _rebase(entry: str, source_dir: Path, target_dir: Path) -> str:
    absolute = source_dir / entry
    try:
        return absolute.relative_to(target_dir).as_posix()
    except ValueError:
        return entry


def source_suffixes(config: TsConfig) -> tuple:
    suffixes = (".ts", ".tsx")
    if config.allow_js:
        suffixes += (".js", ".jsx")
    return suffixes


def designated_files(config: TsConfig) -> List[Path]:
    """The files a tsconfig puts in the program, in deterministic order."""
    base = config.base_dir
    result: List[Path] = []
    seen = set()

    for entry in config.files or []:
        path = (base / entry).resolve()
        if path.is_file() and path not in seen:
            seen.add(path)
            result.append(path)

    include = config.include
    if include is None:
        include = [] if config.files is not None else ["**/*"]
    if not include:
        return result

    exclude = config.exclude
    if exclude is None:
        exclude = list(DEFAULT_TSCONFIG_EXCLUDE)
        out_dir = config.compiler_options.get("outDir")
        if out_dir:
            exclude.append(out_dir)

    include_set = GlobSet(expand_directory_patterns(include, base))
    exclude_set = GlobSet(
        expand_directory_patterns(exclude, base) + ["**/node_modules/**"]
    )
    suffixes = source_suffixes(config)
    for path in walk_files(base, include_set, exclude_set):
        if not path.name.endswith(suffixes):
            continue
        resolved = path.resolve()
        if resolved not in seen:
            seen.add(resolved)
            result.append(resolved)
    return result
