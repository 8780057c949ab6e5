"""
Score Calculator

Derives five sub-scores from the entity graph, its issues and the rich
result verdicts, then combines them into one weighted opportunity score:

- entity_clarity (25%): 100 minus 15 per error on any graph node
- relationship_depth (20%): base 50, +25 nested entities, +25 explicit @id
- rich_result_alignment (25%): share of verdicts eligible (60) and high confidence (40)
- business_intent_match (15%): 70 by default; "saas" checks for software types
- content_consistency (15%): base 60, +20 any name, +20 any description
"""

from typing import Any, Optional, Sequence
import logging
import math

from schema_intel.config import AnalysisConfig
from schema_intel.constants import (
    ALIGNMENT_ELIGIBLE_POINTS,
    ALIGNMENT_HIGH_CONFIDENCE_POINTS,
    BUSINESS_INTENT_DEFAULT,
    BUSINESS_INTENT_MATCH,
    BUSINESS_INTENT_MISMATCH,
    CONSISTENCY_BASE,
    CONSISTENCY_DESCRIPTION_BONUS,
    CONSISTENCY_NAME_BONUS,
    ERROR_PENALTY,
    MAX_SCORE,
    MIN_SCORE,
    RELATIONSHIP_BASE,
    RELATIONSHIP_ID_BONUS,
    RELATIONSHIP_NESTED_BONUS,
    SAAS_INTENT_TYPES,
    SCORE_WEIGHTS,
)
from schema_intel.entity import entity_id, has_property, matches_any_type
from schema_intel.models import (
    BusinessType,
    ConfidenceTier,
    EntityNode,
    RichResultEligibility,
    ScoreBreakdown,
    Severity,
)

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 rounding up."""
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    """Clamp a score into the 0-100 range."""
    return int(max(MIN_SCORE, min(MAX_SCORE, value)))


class ScoreCalculator:
    """Calculate the score breakdown and the weighted opportunity score."""

    WEIGHTS = SCORE_WEIGHTS

    def calculate(
        self,
        entities: Sequence[Any],
        nodes: Sequence[EntityNode],
        eligibility: Sequence[RichResultEligibility],
        config: Optional[AnalysisConfig] = None,
    ) -> ScoreBreakdown:
        """Calculate all five sub-scores.

        Args:
            entities: Flat top-level entity list
            nodes: Top-level entity graph nodes
            eligibility: Rich result verdicts
            config: Optional business context

        Returns:
            ScoreBreakdown with every sub-score in [0, 100]
        """
        breakdown = ScoreBreakdown(
            entity_clarity=clamp_score(self._entity_clarity(nodes)),
            relationship_depth=clamp_score(self._relationship_depth(entities, nodes)),
            rich_result_alignment=clamp_score(self._rich_result_alignment(eligibility)),
            business_intent_match=clamp_score(self._business_intent_match(entities, config)),
            content_consistency=clamp_score(self._content_consistency(entities)),
        )
        logger.debug(f"Score breakdown: {breakdown.to_dict()}")
        return breakdown

    def opportunity_score(self, breakdown: ScoreBreakdown) -> int:
        """Combine the sub-scores into the weighted 0-100 opportunity score."""
        weighted = sum(
            getattr(breakdown, name) * weight
            for name, weight in self.WEIGHTS.items()
        )
        return clamp_score(round_half_up(weighted))

    def _entity_clarity(self, nodes: Sequence[EntityNode]) -> int:
        total_errors = sum(
            1
            for node in nodes
            for descendant in node.walk()
            for issue in descendant.issues
            if issue.severity == Severity.ERROR
        )
        return max(0, MAX_SCORE - ERROR_PENALTY * total_errors)

    def _relationship_depth(
        self,
        entities: Sequence[Any],
        nodes: Sequence[EntityNode],
    ) -> int:
        score = RELATIONSHIP_BASE
        if any(node.children for node in nodes):
            score += RELATIONSHIP_NESTED_BONUS
        if any(entity_id(entity) is not None for entity in entities):
            score += RELATIONSHIP_ID_BONUS
        return score

    def _rich_result_alignment(self, eligibility: Sequence[RichResultEligibility]) -> int:
        if not eligibility:
            return 0

        total = len(eligibility)
        eligible_count = sum(1 for e in eligibility if e.eligible)
        high_count = sum(1 for e in eligibility if e.confidence == ConfidenceTier.HIGH)

        return round_half_up(
            (eligible_count / total) * ALIGNMENT_ELIGIBLE_POINTS
            + (high_count / total) * ALIGNMENT_HIGH_CONFIDENCE_POINTS
        )

    def _business_intent_match(
        self,
        entities: Sequence[Any],
        config: Optional[AnalysisConfig],
    ) -> int:
        # Only the saas context is scored; other business types keep the default
        if config is None or config.business_type != BusinessType.SAAS:
            return BUSINESS_INTENT_DEFAULT

        has_software = any(matches_any_type(e, SAAS_INTENT_TYPES) for e in entities)
        return BUSINESS_INTENT_MATCH if has_software else BUSINESS_INTENT_MISMATCH

    def _content_consistency(self, entities: Sequence[Any]) -> int:
        score = CONSISTENCY_BASE
        if any(has_property(e, "name") for e in entities):
            score += CONSISTENCY_NAME_BONUS
        if any(has_property(e, "description") for e in entities):
            score += CONSISTENCY_DESCRIPTION_BONUS
        return score
