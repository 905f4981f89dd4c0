from .config import RetypeConfig, load_config_from_path
from .globs import DEFAULT_EXCLUDE, DEFAULT_INCLUDE, GlobSet
from .project import Project

__all__ = [
    "RetypeConfig",
    "load_config_from_path",
    "DEFAULT_EXCLUDE",
    "DEFAULT_INCLUDE",
    "GlobSet",
    "Project",
]
