"""
Schema Intelligence Engine

Runs the full analysis over one page's extracted entities:

    graph builder -> issue detector + eligibility checker
                  -> score calculator -> recommendation generator

Every stage is a pure function of its inputs; the only non-deterministic
value is the fetched_at timestamp, which callers may inject.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional, Sequence, Tuple
import logging

from schema_intel.config import AnalysisConfig, EngineConfig, settings
from schema_intel.constants import DEFAULT_MAX_NESTING_DEPTH
from schema_intel.eligibility import EligibilityChecker
from schema_intel.graph import EntityGraphBuilder
from schema_intel.issues import IssueDetector
from schema_intel.models import AnalysisResult
from schema_intel.recommendations import RecommendationGenerator
from schema_intel.rules import RuleCatalog
from schema_intel.scoring import ScoreCalculator

logger = logging.getLogger(__name__)


class SchemaIntelligenceEngine:
    """Turn extracted structured data entities into an AnalysisResult."""

    def __init__(
        self,
        catalog: Optional[RuleCatalog] = None,
        max_depth: int = DEFAULT_MAX_NESTING_DEPTH,
        max_workers: Optional[int] = None,
    ):
        """Initialize the engine.

        Args:
            catalog: Rule catalog (default: built-in ten-rule catalog)
            max_depth: Maximum nesting depth for the entity graph
            max_workers: Default thread pool size for analyze_many
        """
        self.max_workers = max_workers
        self.catalog = catalog if catalog is not None else RuleCatalog.default()
        self.detector = IssueDetector(self.catalog)
        self.graph_builder = EntityGraphBuilder(self.detector, max_depth=max_depth)
        self.eligibility_checker = EligibilityChecker(self.catalog)
        self.score_calculator = ScoreCalculator()
        self.recommendation_generator = RecommendationGenerator()

    @classmethod
    def from_config(cls, config: EngineConfig) -> "SchemaIntelligenceEngine":
        """Build an engine from an EngineConfig.

        Raises:
            RuleCatalogError: If config.rules_file cannot be loaded
        """
        catalog = RuleCatalog.from_file(config.rules_file) if config.rules_file else None
        return cls(
            catalog=catalog,
            max_depth=config.max_depth,
            max_workers=config.max_workers,
        )

    def analyze(
        self,
        entities: Optional[Iterable[Any]],
        url: str,
        config: Optional[AnalysisConfig] = None,
        fetched_at: Optional[datetime] = None,
    ) -> AnalysisResult:
        """Analyze a page's entities.

        Never raises for entity input: malformed entities degrade to type
        "Unknown" and an empty list yields a result scored from the base
        values.

        Args:
            entities: Flat, insertion-ordered entity list
            url: Page URL, used only as a label
            config: Optional business context
            fetched_at: Timestamp to attach (default: now, UTC)

        Returns:
            AnalysisResult
        """
        entities = list(entities) if entities is not None else []
        if not entities:
            logger.debug(f"No entities to analyze for {url}")

        nodes = self.graph_builder.build(entities)
        issues = self.detector.collect_issues(nodes, entities)
        eligibility = self.eligibility_checker.check(entities)
        breakdown = self.score_calculator.calculate(entities, nodes, eligibility, config)
        opportunity_score = self.score_calculator.opportunity_score(breakdown)
        recommendations = self.recommendation_generator.generate(entities, issues)

        logger.info(
            f"Analyzed {url}: {len(entities)} entities, {len(issues)} issues, "
            f"{sum(1 for e in eligibility if e.eligible)}/{len(eligibility)} rich results eligible, "
            f"score {opportunity_score}"
        )

        return AnalysisResult(
            url=url,
            fetched_at=fetched_at or datetime.now(timezone.utc),
            entities=tuple(nodes),
            eligible_rich_results=tuple(eligibility),
            opportunity_score=opportunity_score,
            score_breakdown=breakdown,
            issues=tuple(issues),
            recommendations=tuple(recommendations),
        )

    def analyze_many(
        self,
        pages: Iterable[Tuple[Sequence[Any], str]],
        config: Optional[AnalysisConfig] = None,
        max_workers: Optional[int] = None,
    ) -> List[AnalysisResult]:
        """Analyze several pages in a thread pool.

        Analyses share no state, so they run without coordination.

        Args:
            pages: (entities, url) pairs
            config: Business context applied to every page
            max_workers: Thread pool size (default: the engine's max_workers,
                then the executor default)

        Returns:
            Results in the same order as pages
        """
        pages = list(pages)
        if max_workers is None:
            max_workers = self.max_workers
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(
                lambda page: self.analyze(page[0], page[1], config),
                pages,
            ))


_default_engine = SchemaIntelligenceEngine(max_workers=settings.MAX_WORKERS)


def analyze_schemas(
    entities: Optional[Iterable[Any]],
    url: str,
    config: Optional[AnalysisConfig] = None,
    fetched_at: Optional[datetime] = None,
) -> AnalysisResult:
    """Analyze entities with the built-in rule catalog.

    Args:
        entities: Flat, insertion-ordered entity list
        url: Page URL label
        config: Optional business context
        fetched_at: Optional timestamp to attach

    Returns:
        AnalysisResult
    """
    return _default_engine.analyze(entities, url, config, fetched_at)


def analyze_many(
    pages: Iterable[Tuple[Sequence[Any], str]],
    config: Optional[AnalysisConfig] = None,
    max_workers: Optional[int] = None,
) -> List[AnalysisResult]:
    """Analyze several pages in parallel with the built-in rule catalog."""
    return _default_engine.analyze_many(pages, config, max_workers)
