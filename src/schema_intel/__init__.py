"""Schema.org structured data intelligence: entity graph, issues, rich results and scoring."""

__version__ = "0.1.0"

from schema_intel.engine import SchemaIntelligenceEngine, analyze_schemas, analyze_many
from schema_intel.graph import EntityGraphBuilder
from schema_intel.issues import IssueDetector
from schema_intel.eligibility import EligibilityChecker
from schema_intel.scoring import ScoreCalculator
from schema_intel.recommendations import RecommendationGenerator
from schema_intel.rules import Rule, RuleCatalog, RuleCatalogError
from schema_intel.entity import load_entities
from schema_intel.models import (
    AnalysisResult,
    BusinessIntent,
    BusinessType,
    ConfidenceTier,
    EntityNode,
    Issue,
    IssueKind,
    Priority,
    Recommendation,
    RichResultEligibility,
    ScoreBreakdown,
    Severity,
)
from schema_intel.config import AnalysisConfig, EngineConfig, settings

__all__ = [
    # Core
    "SchemaIntelligenceEngine",
    "analyze_schemas",
    "analyze_many",
    "EntityGraphBuilder",
    "IssueDetector",
    "EligibilityChecker",
    "ScoreCalculator",
    "RecommendationGenerator",
    "Rule",
    "RuleCatalog",
    "RuleCatalogError",
    "load_entities",
    # Models
    "AnalysisResult",
    "BusinessIntent",
    "BusinessType",
    "ConfidenceTier",
    "EntityNode",
    "Issue",
    "IssueKind",
    "Priority",
    "Recommendation",
    "RichResultEligibility",
    "ScoreBreakdown",
    "Severity",
    # Config
    "AnalysisConfig",
    "EngineConfig",
    "settings",
]
