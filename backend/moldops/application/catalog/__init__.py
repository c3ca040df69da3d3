from .definition import EntityDefinition, RelationLookup
from .entities import ENTITIES, get_entity, list_entities

__all__ = [
    "EntityDefinition",
    "RelationLookup",
    "ENTITIES",
    "get_entity",
    "list_entities",
]
