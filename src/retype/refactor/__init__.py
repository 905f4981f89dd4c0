from .entities import extract_entities, find_entity_by_name
from .extract import ExtractService
from .imports import ImportsService
from .references import ReferencesService
from .rename import RenameService
from .search import SearchService
from .unused import UnusedService

__all__ = [
    "extract_entities",
    "find_entity_by_name",
    "ExtractService",
    "ImportsService",
    "ReferencesService",
    "RenameService",
    "SearchService",
    "UnusedService",
]
