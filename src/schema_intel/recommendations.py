"""Prioritized recommendations from issues."""

from typing import Any, List, Sequence
import logging

from schema_intel.constants import (
    HIGH_PRIORITY_IMPACT,
    IMAGE_RECOMMENDATION_DESCRIPTION,
    IMAGE_RECOMMENDATION_IMPACT,
    IMAGE_RECOMMENDATION_TITLE,
    MAX_HIGH_PRIORITY,
    MAX_MEDIUM_PRIORITY,
    MEDIUM_PRIORITY_IMPACT,
)
from schema_intel.entity import has_property
from schema_intel.models import Issue, Priority, Recommendation, Severity

logger = logging.getLogger(__name__)


class RecommendationGenerator:
    """Reduce the issue list into a short, priority-ordered action list."""

    def generate(
        self,
        entities: Sequence[Any],
        issues: Sequence[Issue],
    ) -> List[Recommendation]:
        """Generate recommendations.

        High: the first three errors naming a property. Medium: the first
        three warnings naming a property. Low: add an image, when no
        top-level entity has one. Property names are not deduplicated
        across bands.

        Args:
            entities: Flat top-level entity list
            issues: Combined issue list, in analysis order

        Returns:
            Recommendations ordered high, medium, low
        """
        recommendations = []

        recommendations.extend(self._from_issues(
            issues, Severity.ERROR, Priority.HIGH, MAX_HIGH_PRIORITY, HIGH_PRIORITY_IMPACT
        ))
        recommendations.extend(self._from_issues(
            issues, Severity.WARNING, Priority.MEDIUM, MAX_MEDIUM_PRIORITY, MEDIUM_PRIORITY_IMPACT
        ))

        if not any(has_property(e, "image") for e in entities):
            recommendations.append(Recommendation(
                priority=Priority.LOW,
                title=IMAGE_RECOMMENDATION_TITLE,
                description=IMAGE_RECOMMENDATION_DESCRIPTION,
                impact=IMAGE_RECOMMENDATION_IMPACT,
            ))

        logger.debug(f"Generated {len(recommendations)} recommendations")
        return recommendations

    def _from_issues(
        self,
        issues: Sequence[Issue],
        severity: Severity,
        priority: Priority,
        limit: int,
        impact: str,
    ) -> List[Recommendation]:
        selected = [i for i in issues if i.severity == severity and i.property][:limit]
        return [
            Recommendation(
                priority=priority,
                title=f"Add missing {issue.property}",
                description=issue.message,
                impact=impact,
            )
            for issue in selected
        ]
