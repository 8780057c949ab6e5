"""Rich result eligibility checks against the rule catalog."""

from typing import Any, List, Optional, Sequence
import logging

from schema_intel.constants import LOW_CONFIDENCE_RECOMMENDED_THRESHOLD
from schema_intel.entity import missing_properties
from schema_intel.models import ConfidenceTier, RichResultEligibility
from schema_intel.rules import Rule, RuleCatalog

logger = logging.getLogger(__name__)


class EligibilityChecker:
    """Produce one eligibility verdict per rule that has a matching entity."""

    def __init__(self, catalog: Optional[RuleCatalog] = None):
        self.catalog = catalog if catalog is not None else RuleCatalog.default()

    def check(self, entities: Sequence[Any]) -> List[RichResultEligibility]:
        """Check rich result eligibility for every rule in the catalog.

        Only the first entity matching a rule is evaluated for it; later
        matches are ignored even when more complete. Rules with no matching
        entity produce no verdict.

        Args:
            entities: Flat top-level entity list

        Returns:
            Verdicts in catalog order
        """
        results = []

        for rule in self.catalog:
            match = next((e for e in entities if rule.matches(e)), None)
            if match is None:
                continue
            results.append(self._evaluate(rule, match))

        logger.debug(f"Eligibility: {len(results)} of {len(self.catalog)} rules matched")
        return results

    def _evaluate(self, rule: Rule, entity: Any) -> RichResultEligibility:
        missing_required = missing_properties(entity, rule.required)
        missing_recommended = missing_properties(entity, rule.recommended)

        if missing_required:
            eligible = False
            confidence = ConfidenceTier.LOW
            reason = f"Missing required: {', '.join(missing_required)}"
        else:
            eligible = True
            if len(missing_recommended) > LOW_CONFIDENCE_RECOMMENDED_THRESHOLD:
                confidence = ConfidenceTier.LOW
            elif missing_recommended:
                confidence = ConfidenceTier.MEDIUM
            else:
                confidence = ConfidenceTier.HIGH

            if missing_recommended:
                reason = f"Eligible, but add {', '.join(missing_recommended)} to increase confidence"
            else:
                reason = "All required and recommended properties present"

        return RichResultEligibility(
            type=rule.key,
            name=rule.name,
            eligible=eligible,
            confidence=confidence,
            missing_properties=tuple(missing_required + missing_recommended),
            reason=reason,
        )
