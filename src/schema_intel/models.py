"""Data models for schema analysis."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional
import logging

logger = logging.getLogger(__name__)


class IssueKind(Enum):
    """Classification of a structured data issue."""
    MISSING = "missing"
    WEAK = "weak"
    CONFLICT = "conflict"
    FRAMEWORK = "framework"


class Severity(Enum):
    """How serious an issue is."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ConfidenceTier(Enum):
    """Qualitative confidence for entities and rich result verdicts."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Priority(Enum):
    """Recommendation priority band."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class BusinessType(Enum):
    """Kind of business the analyzed site represents."""
    SAAS = "saas"
    LOCAL_BUSINESS = "local-business"
    PUBLISHER = "publisher"
    MARKETPLACE = "marketplace"
    ECOMMERCE = "ecommerce"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: Any) -> Optional["BusinessType"]:
        """Parse a business type, mapping unrecognized values to CUSTOM.

        Args:
            value: BusinessType, string, or None

        Returns:
            BusinessType, or None when no value was given
        """
        if value is None or value == "":
            return None
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            logger.debug(f"Unrecognized business type {value!r}; using {cls.CUSTOM.value}")
            return cls.CUSTOM


class BusinessIntent(Enum):
    """What the site wants searchers to do."""
    LEAD_GENERATION = "lead-generation"
    APP_INSTALLS = "app-installs"
    CONTENT_DISCOVERY = "content-discovery"
    TRANSACTIONS = "transactions"

    @classmethod
    def parse(cls, value: Any) -> Optional["BusinessIntent"]:
        """Parse an intent; unrecognized values yield None."""
        if value is None or value == "":
            return None
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            logger.debug(f"Unrecognized business intent {value!r}; ignoring")
            return None


@dataclass(frozen=True)
class Issue:
    """A single finding against an entity or the entity set."""

    kind: IssueKind
    severity: Severity
    message: str
    property: Optional[str] = None
    recommendation: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        data = {
            "type": self.kind.value,
            "severity": self.severity.value,
            "message": self.message,
        }
        if self.property is not None:
            data["property"] = self.property
        if self.recommendation is not None:
            data["recommendation"] = self.recommendation
        return data


@dataclass(frozen=True)
class EntityNode:
    """One entity in the entity graph, with its nested entities as children."""

    id: str
    type: str
    properties: Mapping[str, Any] = field(default_factory=dict, hash=False)
    children: tuple["EntityNode", ...] = ()
    issues: tuple[Issue, ...] = ()
    confidence: ConfidenceTier = ConfidenceTier.MEDIUM

    def __post_init__(self):
        # Read-only view; nodes are never mutated after construction
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    def walk(self):
        """Yield this node and all descendants, depth-first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "id": self.id,
            "type": self.type,
            "properties": dict(self.properties),
            "children": [child.to_dict() for child in self.children],
            "issues": [issue.to_dict() for issue in self.issues],
            "confidence": self.confidence.value,
        }


@dataclass(frozen=True)
class RichResultEligibility:
    """Eligibility verdict for one rich result feature."""

    type: str
    name: str
    eligible: bool
    confidence: ConfidenceTier
    missing_properties: tuple[str, ...] = ()
    reason: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "type": self.type,
            "name": self.name,
            "eligible": self.eligible,
            "confidence": self.confidence.value,
            "missingProperties": list(self.missing_properties),
            "reason": self.reason,
        }


@dataclass(frozen=True)
class ScoreBreakdown:
    """The five sub-scores behind the opportunity score (each 0-100)."""

    entity_clarity: int
    relationship_depth: int
    rich_result_alignment: int
    business_intent_match: int
    content_consistency: int

    def to_dict(self) -> dict[str, int]:
        """Serialize to dictionary."""
        return {
            "entityClarity": self.entity_clarity,
            "relationshipDepth": self.relationship_depth,
            "richResultAlignment": self.rich_result_alignment,
            "businessIntentMatch": self.business_intent_match,
            "contentConsistency": self.content_consistency,
        }


@dataclass(frozen=True)
class Recommendation:
    """A prioritized action to improve structured data."""

    priority: Priority
    title: str
    description: str
    impact: str
    fix: Optional[str] = None  # JSON-LD snippet

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        data = {
            "priority": self.priority.value,
            "title": self.title,
            "description": self.description,
            "impact": self.impact,
        }
        if self.fix is not None:
            data["fix"] = self.fix
        return data


@dataclass(frozen=True)
class AnalysisResult:
    """Complete structured data analysis for one page."""

    url: str
    fetched_at: datetime
    entities: tuple[EntityNode, ...]
    eligible_rich_results: tuple[RichResultEligibility, ...]
    opportunity_score: int
    score_breakdown: ScoreBreakdown
    issues: tuple[Issue, ...] = ()
    recommendations: tuple[Recommendation, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON report shape."""
        return {
            "url": self.url,
            "fetchedAt": self.fetched_at.isoformat(),
            "entities": [node.to_dict() for node in self.entities],
            "eligibleRichResults": [e.to_dict() for e in self.eligible_rich_results],
            "opportunityScore": self.opportunity_score,
            "scoreBreakdown": self.score_breakdown.to_dict(),
            "issues": [issue.to_dict() for issue in self.issues],
            "recommendations": [rec.to_dict() for rec in self.recommendations],
        }
