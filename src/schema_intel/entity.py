"""
Entity Property Model

Helpers over the semi-structured entity records handed to the engine.
An entity is a mapping with a reserved @type (string or list of strings),
an optional @id, and an open set of properties whose values are scalars,
nested entities (mappings carrying their own @type), or lists of either.

Every helper degrades instead of raising: a record that is not a mapping, or
has no usable @type, is treated as an entity of type "Unknown".
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, Iterable, List, Optional
import logging

from schema_intel.constants import (
    GRAPH_KEY,
    ID_KEY,
    RESERVED_PREFIX,
    TYPE_KEY,
    UNKNOWN_TYPE,
)

logger = logging.getLogger(__name__)


class ValueKind(Enum):
    """Shape of a property value, as far as the entity graph is concerned."""
    SCALAR = "scalar"
    NESTED_ENTITY = "nested_entity"
    ENTITY_LIST = "entity_list"  # list containing at least one nested entity
    SCALAR_LIST = "scalar_list"


def is_nested_entity(value: Any) -> bool:
    """Check whether a value is an embedded entity (a mapping with @type)."""
    return isinstance(value, Mapping) and TYPE_KEY in value


def classify_value(value: Any) -> ValueKind:
    """Classify a property value.

    Args:
        value: Any property value

    Returns:
        ValueKind for the value's top-level shape
    """
    if is_nested_entity(value):
        return ValueKind.NESTED_ENTITY
    if isinstance(value, (list, tuple)):
        if any(is_nested_entity(item) for item in value):
            return ValueKind.ENTITY_LIST
        return ValueKind.SCALAR_LIST
    return ValueKind.SCALAR


def is_reserved(key: Any) -> bool:
    """Check whether a property key is a reserved JSON-LD field."""
    return isinstance(key, str) and key.startswith(RESERVED_PREFIX)


def get_all_types(entity: Any) -> List[str]:
    """Get every type name declared on an entity.

    Args:
        entity: Entity mapping

    Returns:
        List of type names, or ["Unknown"] when none is usable
    """
    if not isinstance(entity, Mapping):
        return [UNKNOWN_TYPE]

    type_val = entity.get(TYPE_KEY)
    if isinstance(type_val, str) and type_val:
        return [type_val]
    if isinstance(type_val, (list, tuple)):
        types = [t for t in type_val if isinstance(t, str) and t]
        if types:
            return types

    return [UNKNOWN_TYPE]


def primary_type(entity: Any) -> str:
    """Get the entity's primary type (first declared type)."""
    return get_all_types(entity)[0]


def entity_id(entity: Any) -> Optional[str]:
    """Get the entity's explicit @id, if it carries one."""
    if not isinstance(entity, Mapping):
        return None
    value = entity.get(ID_KEY)
    if value is None or value == "":
        return None
    return str(value)


def has_property(entity: Any, name: str) -> bool:
    """Check whether an entity has a property with a non-null value."""
    if not isinstance(entity, Mapping):
        return False
    return name in entity and entity[name] is not None


def missing_properties(entity: Any, names: Iterable[str]) -> List[str]:
    """Get the names not present on the entity, preserving input order."""
    return [name for name in names if not has_property(entity, name)]


def matches_any_type(entity: Any, types: Iterable[str]) -> bool:
    """Check whether any of the entity's types is in the given set."""
    wanted = set(types)
    return any(t in wanted for t in get_all_types(entity))


def load_entities(document: Any) -> List[Mapping]:
    """Flatten a parsed JSON-LD document into a flat entity list.

    Accepts a single entity, a list of entities or documents, or a document
    with an @graph array. Items without a @type outside of @graph are skipped.

    Args:
        document: Parsed JSON value

    Returns:
        List of entity mappings in document order
    """
    entities: List[Mapping] = []

    if isinstance(document, Mapping):
        graph = document.get(GRAPH_KEY)
        if isinstance(graph, list):
            entities.extend(item for item in graph if isinstance(item, Mapping))
        elif TYPE_KEY in document:
            entities.append(document)
        else:
            logger.debug("Skipping JSON-LD object without @type or @graph")
    elif isinstance(document, list):
        for item in document:
            entities.extend(load_entities(item))

    return entities
