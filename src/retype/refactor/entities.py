from typing import List, Optional

from retype.spec.models import KIND_ORDER, Entity, EntityKind
from retype.spec.protocols import LanguageProviderProtocol


def extract_entities(provider: LanguageProviderProtocol, source_file) -> List[Entity]:
    """
    Entities of one file: grouped by kind in extraction order, source order
    within each group. Every call yields fresh handles.
    """
    declarations = provider.get_declarations(source_file)
    entities: List[Entity] = []
    for kind in KIND_ORDER:
        for handle in declarations.of_kind(kind):
            line, column = provider.line_and_column(source_file, handle.name_node.start_byte)
            entities.append(
                Entity(
                    name=handle.name,
                    kind=kind,
                    file_path=source_file.path,
                    line=line,
                    column=column,
                    is_exported=handle.is_exported,
                    handle=handle,
                )
            )
    return entities


def find_entity_by_name(
    entities: List[Entity], name: str, kind: Optional[EntityKind] = None
) -> Optional[Entity]:
    for entity in entities:
        if entity.name == name and (kind is None or entity.kind is kind):
            return entity
    return None
