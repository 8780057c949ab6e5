"""
Entity Graph Builder

Turns the flat, insertion-ordered entity list into a tree of EntityNodes.
Nested entities (property values that carry their own @type, alone or inside
a list) become child nodes; every other non-reserved property stays in the
node's property map. A property contributes either children or a property
entry, never both.
"""

from collections.abc import Mapping
from typing import Any, FrozenSet, List, Optional, Sequence
import copy
import logging

from schema_intel.constants import DEFAULT_MAX_NESTING_DEPTH
from schema_intel.entity import (
    ValueKind,
    classify_value,
    entity_id,
    is_nested_entity,
    is_reserved,
    primary_type,
)
from schema_intel.issues import IssueDetector, node_confidence
from schema_intel.models import ConfidenceTier, EntityNode

logger = logging.getLogger(__name__)


class EntityGraphBuilder:
    """Build the entity graph from extracted entities."""

    def __init__(
        self,
        detector: Optional[IssueDetector] = None,
        max_depth: int = DEFAULT_MAX_NESTING_DEPTH,
    ):
        """Initialize the builder.

        Args:
            detector: Issue detector used to attach issues to each node
            max_depth: Maximum depth of child nodes (top-level nodes are depth 0)
        """
        self.detector = detector if detector is not None else IssueDetector()
        self.max_depth = max(0, max_depth)

    def build(self, entities: Sequence[Any]) -> List[EntityNode]:
        """Build one top-level node per input entity, in input order.

        Args:
            entities: Flat entity list

        Returns:
            Top-level EntityNodes
        """
        nodes = []
        for index, entity in enumerate(entities):
            if not isinstance(entity, Mapping):
                logger.warning(
                    f"Entity {index} is {type(entity).__name__}, not an object; treating as Unknown"
                )
                entity = {}

            node_id = entity_id(entity) or f"entity-{index}"
            issues = self.detector.detect_entity_issues(entity)
            nodes.append(EntityNode(
                id=node_id,
                type=primary_type(entity),
                properties=extract_properties(entity),
                children=tuple(self._extract_children(entity, 0, frozenset({id(entity)}))),
                issues=tuple(issues),
                confidence=node_confidence(issues),
            ))

        logger.debug(f"Built entity graph with {len(nodes)} top-level nodes")
        return nodes

    def _extract_children(
        self,
        entity: Mapping,
        depth: int,
        ancestors: FrozenSet[int],
    ) -> List[EntityNode]:
        """Scan properties in declaration order and build child nodes."""
        children: List[EntityNode] = []

        for key, value in entity.items():
            if is_reserved(key):
                continue

            kind = classify_value(value)
            if kind == ValueKind.NESTED_ENTITY:
                nested = [(value, f"nested-{key}")]
            elif kind == ValueKind.ENTITY_LIST:
                nested = [
                    (item, f"nested-array-{key}")
                    for item in value
                    if is_nested_entity(item)
                ]
            else:
                continue

            if depth >= self.max_depth:
                logger.warning(
                    f"Nesting depth limit ({self.max_depth}) reached at property '{key}'; "
                    f"skipping {len(nested)} nested entities"
                )
                continue

            for item, fallback_id in nested:
                if id(item) in ancestors:
                    logger.warning(
                        f"Self-referencing entity at property '{key}'; skipping"
                    )
                    continue
                children.append(self._build_nested(item, fallback_id, depth + 1, ancestors))

        return children

    def _build_nested(
        self,
        entity: Mapping,
        fallback_id: str,
        depth: int,
        ancestors: FrozenSet[int],
    ) -> EntityNode:
        return EntityNode(
            id=entity_id(entity) or fallback_id,
            type=primary_type(entity),
            properties=extract_properties(entity),
            children=tuple(self._extract_children(entity, depth, ancestors | {id(entity)})),
            issues=tuple(self.detector.detect_entity_issues(entity)),
            # Nested entities are not independently scored
            confidence=ConfidenceTier.MEDIUM,
        )


def extract_properties(entity: Mapping) -> dict:
    """Copy the displayable (non-reserved, non-nested) properties of an entity."""
    properties = {}
    for key, value in entity.items():
        if is_reserved(key):
            continue
        if classify_value(value) in (ValueKind.NESTED_ENTITY, ValueKind.ENTITY_LIST):
            continue
        properties[key] = copy.deepcopy(value)
    return properties
