# src/schema_intel/constants.py
"""Centralized constants for the schema intelligence engine.

Scoring formulas, type sets and fixed recommendation strings shared across
modules. For caller-configurable values, see config.py.
"""

# =============================================================================
# Entity Constants
# =============================================================================

# Keys starting with this sigil are reserved JSON-LD fields (@type, @id, ...)
RESERVED_PREFIX = "@"

TYPE_KEY = "@type"
ID_KEY = "@id"
GRAPH_KEY = "@graph"

# Type assigned to entities without a recognizable @type
UNKNOWN_TYPE = "Unknown"

# Graph builder stops descending past this depth (top-level nodes are depth 0)
DEFAULT_MAX_NESTING_DEPTH = 32


# =============================================================================
# Cross-Entity Constants
# =============================================================================

# Types that expect a publishing Organization somewhere on the page
SOFTWARE_APP_TYPES = frozenset({
    "SoftwareApplication",
    "WebApplication",
    "MobileApplication",
})

ORGANIZATION_TYPE = "Organization"

# Types that satisfy a "saas" business context
SAAS_INTENT_TYPES = frozenset({"SoftwareApplication", "WebApplication"})


# =============================================================================
# Scoring Constants
# =============================================================================

# Sub-score weights; must sum to exactly 1.00
SCORE_WEIGHTS = {
    "entity_clarity": 0.25,
    "relationship_depth": 0.20,
    "rich_result_alignment": 0.25,
    "business_intent_match": 0.15,
    "content_consistency": 0.15,
}

MAX_SCORE = 100
MIN_SCORE = 0

# Points lost from entity clarity per error-severity issue
ERROR_PENALTY = 15

RELATIONSHIP_BASE = 50
RELATIONSHIP_NESTED_BONUS = 25
RELATIONSHIP_ID_BONUS = 25

# Share of rich result alignment earned by eligibility vs high confidence
ALIGNMENT_ELIGIBLE_POINTS = 60
ALIGNMENT_HIGH_CONFIDENCE_POINTS = 40

BUSINESS_INTENT_DEFAULT = 70
BUSINESS_INTENT_MATCH = 100
BUSINESS_INTENT_MISMATCH = 30

CONSISTENCY_BASE = 60
CONSISTENCY_NAME_BONUS = 20
CONSISTENCY_DESCRIPTION_BONUS = 20

# Eligibility confidence drops to "low" above this many missing recommended
LOW_CONFIDENCE_RECOMMENDED_THRESHOLD = 2

# Node confidence drops to "low" above this many warnings
LOW_CONFIDENCE_WARNING_THRESHOLD = 2


# =============================================================================
# Recommendation Constants
# =============================================================================

# Maximum recommendations emitted per priority band
MAX_HIGH_PRIORITY = 3
MAX_MEDIUM_PRIORITY = 3

HIGH_PRIORITY_IMPACT = "Required for rich result eligibility"
MEDIUM_PRIORITY_IMPACT = "Increases confidence for rich results"

IMAGE_RECOMMENDATION_TITLE = "Add image property"
IMAGE_RECOMMENDATION_DESCRIPTION = "Images significantly increase rich result chances"
IMAGE_RECOMMENDATION_IMPACT = "Visual enhancement in search results"
