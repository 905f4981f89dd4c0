from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

try:
    import tomllib
except ImportError:
    import tomli as tomllib

from retype.spec.exceptions import ConfigurationError

CONFIG_FILENAME = "retype.toml"

DEFAULT_ENTRY_POINTS = ["index.ts", "index.tsx", "main.ts", "main.tsx"]


@dataclass
class RetypeConfig:
    root_path: Path
    tsconfig: Optional[str] = None
    include: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    entry_points: List[str] = field(default_factory=lambda: list(DEFAULT_ENTRY_POINTS))
    require_tsconfig: bool = False

    @property
    def tsconfig_path(self) -> Optional[Path]:
        if self.tsconfig is None:
            return None
        path = Path(self.tsconfig)
        return path if path.is_absolute() else self.root_path / path


def _string_list(data: Dict[str, Any], key: str, source: Path) -> Optional[List[str]]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigurationError(f"'{key}' in {source} must be a list of strings.")
    return list(value)


def load_config_from_path(root_path: Path, config_file: Optional[Path] = None) -> RetypeConfig:
    """
    Build the configuration for a project root.

    Values come from `retype.toml` at the root (or `config_file`) when present;
    everything missing keeps its default.
    """
    root_path = root_path.resolve()
    config = RetypeConfig(root_path=root_path)
    source = config_file or root_path / CONFIG_FILENAME
    if not source.is_file():
        if config_file is not None:
            raise ConfigurationError(f"Configuration file not found: {config_file}")
        return config

    try:
        with source.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {source}: {e}") from e

    tsconfig = data.get("tsconfig")
    if tsconfig is not None:
        if not isinstance(tsconfig, str):
            raise ConfigurationError(f"'tsconfig' in {source} must be a string.")
        config.tsconfig = tsconfig

    include = _string_list(data, "include", source)
    if include is not None:
        config.include = include
    exclude = _string_list(data, "exclude", source)
    if exclude is not None:
        config.exclude = exclude
    entry_points = _string_list(data, "entry-points", source)
    if entry_points is not None:
        config.entry_points = entry_points

    config.require_tsconfig = bool(data.get("require-tsconfig", False))
    return config
