"""
Issue Detector

Evaluates entities against the rule catalog and flags:
- Missing required properties (errors)
- Missing recommended properties (warnings)
- Duplicate entity types across the page (conflicts)
- Software applications with no publishing Organization
"""

from collections import Counter
from typing import Any, List, Optional, Sequence
import logging

from schema_intel.constants import (
    LOW_CONFIDENCE_WARNING_THRESHOLD,
    ORGANIZATION_TYPE,
    SOFTWARE_APP_TYPES,
    UNKNOWN_TYPE,
)
from schema_intel.entity import matches_any_type, missing_properties, primary_type
from schema_intel.models import ConfidenceTier, EntityNode, Issue, IssueKind, Severity
from schema_intel.rules import RuleCatalog

logger = logging.getLogger(__name__)


class IssueDetector:
    """Detect structured data issues per entity and across the entity set."""

    def __init__(self, catalog: Optional[RuleCatalog] = None):
        """Initialize the detector.

        Args:
            catalog: Rule catalog to evaluate against (default: built-in)
        """
        self.catalog = catalog if catalog is not None else RuleCatalog.default()

    def detect_entity_issues(self, entity: Any) -> List[Issue]:
        """Evaluate one entity against every rule it triggers.

        An entity is evaluated independently against each matching rule, so
        a multi-typed entity can collect issues from several rules.

        Args:
            entity: Entity mapping

        Returns:
            Missing-required errors then missing-recommended warnings, per rule
        """
        issues: List[Issue] = []

        for rule in self.catalog:
            if not rule.matches(entity):
                continue

            for prop in missing_properties(entity, rule.required):
                issues.append(Issue(
                    kind=IssueKind.MISSING,
                    severity=Severity.ERROR,
                    property=prop,
                    message=f"Missing required property: {prop}",
                    recommendation=f'Add the "{prop}" property to enable {rule.name} rich results',
                ))

            for prop in missing_properties(entity, rule.recommended):
                issues.append(Issue(
                    kind=IssueKind.WEAK,
                    severity=Severity.WARNING,
                    property=prop,
                    message=f"Missing recommended property: {prop}",
                    recommendation=f'Adding "{prop}" increases eligibility confidence for {rule.name}',
                ))

        return issues

    def detect_cross_entity_issues(self, entities: Sequence[Any]) -> List[Issue]:
        """Detect issues that only show up across the top-level entity set.

        Args:
            entities: Flat top-level entity list

        Returns:
            Conflict warnings (one per duplicated type), then the missing
            publisher issue if applicable
        """
        issues: List[Issue] = []

        type_counts = Counter(primary_type(entity) for entity in entities)
        for schema_type, count in type_counts.items():
            if count > 1 and schema_type != UNKNOWN_TYPE:
                issues.append(Issue(
                    kind=IssueKind.CONFLICT,
                    severity=Severity.WARNING,
                    message=f"Multiple {schema_type} entities detected ({count})",
                    recommendation="Consider consolidating into a single entity or using @id references",
                ))

        has_software_app = any(
            matches_any_type(entity, SOFTWARE_APP_TYPES) for entity in entities
        )
        has_organization = any(
            primary_type(entity) == ORGANIZATION_TYPE for entity in entities
        )
        if has_software_app and not has_organization:
            issues.append(Issue(
                kind=IssueKind.WEAK,
                severity=Severity.INFO,
                message="SoftwareApplication without linked Organization",
                recommendation="Add an Organization entity with publisher relationship",
            ))

        logger.debug(f"Cross-entity pass found {len(issues)} issues")
        return issues

    def collect_issues(
        self,
        nodes: Sequence[EntityNode],
        entities: Sequence[Any],
    ) -> List[Issue]:
        """Combine every node's issues (depth-first) with cross-entity issues.

        Args:
            nodes: Top-level entity graph nodes
            entities: Flat top-level entity list the graph was built from

        Returns:
            Full issue list for the analysis
        """
        issues: List[Issue] = []
        for node in nodes:
            for descendant in node.walk():
                issues.extend(descendant.issues)
        issues.extend(self.detect_cross_entity_issues(entities))
        return issues


def node_confidence(issues: Sequence[Issue]) -> ConfidenceTier:
    """Confidence tier for a top-level entity given its own issues."""
    errors = sum(1 for i in issues if i.severity == Severity.ERROR)
    warnings = sum(1 for i in issues if i.severity == Severity.WARNING)

    if errors > 0:
        return ConfidenceTier.LOW
    if warnings > LOW_CONFIDENCE_WARNING_THRESHOLD:
        return ConfidenceTier.LOW
    if warnings > 0:
        return ConfidenceTier.MEDIUM
    return ConfidenceTier.HIGH
