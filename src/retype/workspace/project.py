import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

import networkx as nx

from retype.lang.typescript import TypeScriptProvider
from retype.spec.exceptions import ConfigurationError, NotInitializedError
from retype.spec.protocols import LanguageProviderProtocol

from .config import DEFAULT_ENTRY_POINTS, RetypeConfig
from .globs import DEFAULT_EXCLUDE, DEFAULT_INCLUDE, GlobSet, walk_files
from .tsconfig import designated_files, load_tsconfig

log = logging.getLogger(__name__)

TSCONFIG_FILENAME = "tsconfig.json"

PathLike = Union[str, Path]


class Project:
    """
    The set of TypeScript files a refactoring operates on.

    A project is created by the caller, loaded once, and then passed to every
    service. It owns the language provider, which owns the parsed files.
    """

    def __init__(
        self,
        root_path: PathLike,
        config_path: Optional[PathLike] = None,
        include: Optional[Sequence[str]] = None,
        exclude: Optional[Sequence[str]] = None,
        entry_points: Optional[Sequence[str]] = None,
        provider: Optional[LanguageProviderProtocol] = None,
    ):
        self.root_path = Path(root_path).resolve()
        self.config_path = self._absolute(config_path) if config_path is not None else None
        self.include = list(include) if include else list(DEFAULT_INCLUDE)
        self.exclude = list(exclude) if exclude else list(DEFAULT_EXCLUDE)
        self.entry_points = list(entry_points) if entry_points else list(DEFAULT_ENTRY_POINTS)
        self.provider: LanguageProviderProtocol = provider or TypeScriptProvider()
        self.tsconfig_used: Optional[Path] = None
        self._loaded = False

    @classmethod
    def from_config(cls, config: RetypeConfig, **kwargs) -> "Project":
        return cls(
            config.root_path,
            config_path=config.tsconfig_path,
            include=config.include or None,
            exclude=config.exclude or None,
            entry_points=config.entry_points,
            **kwargs,
        )

    def _absolute(self, path: PathLike) -> Path:
        path = Path(path)
        if not path.is_absolute():
            path = self.root_path / path
        return path.resolve()

    @property
    def loaded(self) -> bool:
        return self._loaded

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            raise NotInitializedError("Project has not been loaded. Call load() first.")

    def _find_tsconfig(self, require_config: bool) -> Optional[Path]:
        if self.config_path is not None:
            if self.config_path.is_file():
                return self.config_path
            if not require_config:
                log.warning(
                    "tsconfig %s not found; falling back to include/exclude globs",
                    self.config_path,
                )
                return None
        default = self.root_path / TSCONFIG_FILENAME
        if default.is_file():
            return default
        if require_config:
            raise ConfigurationError(
                f"No tsconfig found (looked for {self.config_path or default})."
            )
        return None

    def load(self, require_config: bool = False) -> "Project":
        tsconfig = self._find_tsconfig(require_config)
        if tsconfig is not None:
            paths = designated_files(load_tsconfig(tsconfig))
            self.tsconfig_used = tsconfig
            log.debug("Loading files designated by %s", tsconfig)
        else:
            paths = list(walk_files(self.root_path, GlobSet(self.include), GlobSet(self.exclude)))
            log.debug("Loading files matching %s", self.include)

        for path in paths:
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                log.warning("Skipping unreadable file %s: %s", path, e)
                continue
            self.provider.add_source_file(path, text)

        self._loaded = True
        log.debug("Loaded %d source file(s) from %s", self.file_count, self.root_path)
        return self

    # --- Index API ---

    def list_files(self) -> List:
        self._ensure_loaded()
        return self.provider.source_files()

    @property
    def file_count(self) -> int:
        return len(self.provider.source_files())

    def resolve_path(self, path: PathLike) -> Path:
        return self._absolute(path)

    def get_file(self, path: PathLike):
        self._ensure_loaded()
        return self.provider.get_source_file(self._absolute(path))

    def add_file(self, path: PathLike, text: str):
        """Create a file in memory (or overwrite an existing one). Written on save()."""
        self._ensure_loaded()
        source_file = self.provider.add_source_file(self._absolute(path), text)
        source_file.dirty = True
        return source_file

    def save(self) -> List[Path]:
        self._ensure_loaded()
        return self.provider.save()

    def is_entry_point(self, path: Path) -> bool:
        return path.name in self.entry_points

    def relative(self, path: Path) -> str:
        try:
            return path.relative_to(self.root_path).as_posix()
        except ValueError:
            return str(path)

    def build_import_graph(self) -> nx.DiGraph:
        """
        File-level dependency graph.

        Nodes: file paths of every loaded file.
        Edges: importer -> imported, with the list of module declarations
        (imports and re-exports) that produce the edge under "imports".
        """
        self._ensure_loaded()
        graph = nx.DiGraph()
        files = self.provider.source_files()
        for source_file in files:
            graph.add_node(source_file.path)

        for source_file in files:
            declarations = self.provider.get_imports(source_file) + self.provider.get_reexports(
                source_file
            )
            for decl in declarations:
                target = self.provider.resolve_module(source_file.path, decl.module_specifier)
                if target is None or target == source_file.path or target not in graph:
                    continue
                if graph.has_edge(source_file.path, target):
                    graph.edges[source_file.path, target]["imports"].append(decl)
                else:
                    graph.add_edge(source_file.path, target, imports=[decl])
        return graph
