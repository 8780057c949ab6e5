"""
Rich Result Rule Catalog

Declarative table of the rich result features the engine evaluates. Each rule
names the schema.org types that trigger it, the properties required for
eligibility, and the properties recommended for higher confidence.

The catalog is an immutable object handed to the engine, so alternate rule
sets can be loaded from YAML/JSON or built in tests without touching engine
code.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Tuple
import json
import logging

import yaml

from schema_intel.entity import matches_any_type

logger = logging.getLogger(__name__)


class RuleCatalogError(ValueError):
    """Raised when a rule catalog definition is malformed."""


@dataclass(frozen=True)
class Rule:
    """A single rich result rule."""

    key: str
    name: str
    trigger_types: Tuple[str, ...]
    required: Tuple[str, ...] = ()
    recommended: Tuple[str, ...] = ()

    def matches(self, entity: Any) -> bool:
        """Check whether any of the entity's types triggers this rule."""
        return matches_any_type(entity, self.trigger_types)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "name": self.name,
            "trigger_types": list(self.trigger_types),
            "required": list(self.required),
            "recommended": list(self.recommended),
        }

    @classmethod
    def from_dict(cls, key: str, data: Mapping) -> "Rule":
        """Build a rule from its dictionary form.

        Accepts both snake_case keys (trigger_types/required/recommended) and
        the camelCase spelling (requiredTypes/requiredProperties/
        recommendedProperties).

        Raises:
            RuleCatalogError: If the definition is not usable
        """
        if not isinstance(data, Mapping):
            raise RuleCatalogError(f"Rule '{key}' must be a mapping")

        trigger_types = _string_tuple(
            key, "trigger_types", data.get("trigger_types", data.get("requiredTypes"))
        )
        if not trigger_types:
            raise RuleCatalogError(f"Rule '{key}' has no trigger types")

        return cls(
            key=str(key),
            name=str(data.get("name") or key),
            trigger_types=trigger_types,
            required=_string_tuple(
                key, "required", data.get("required", data.get("requiredProperties"))
            ),
            recommended=_string_tuple(
                key, "recommended", data.get("recommended", data.get("recommendedProperties"))
            ),
        )


def _string_tuple(rule_key: str, field_name: str, value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise RuleCatalogError(
            f"Rule '{rule_key}' field '{field_name}' must be a list of strings"
        )
    return tuple(value)


class RuleCatalog:
    """Immutable, ordered collection of rich result rules."""

    def __init__(self, rules):
        rules = tuple(rules)
        keys = [rule.key for rule in rules]
        duplicates = sorted({k for k in keys if keys.count(k) > 1})
        if duplicates:
            raise RuleCatalogError(f"Duplicate rule keys: {', '.join(duplicates)}")
        self._rules = rules

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, key: object) -> bool:
        return any(rule.key == key for rule in self._rules)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RuleCatalog):
            return NotImplemented
        return self._rules == other._rules

    def __hash__(self) -> int:
        return hash(self._rules)

    def __repr__(self) -> str:
        return f"RuleCatalog({', '.join(self.keys())})"

    def keys(self) -> Tuple[str, ...]:
        """Rule keys in declaration order."""
        return tuple(rule.key for rule in self._rules)

    def get(self, key: str) -> Optional[Rule]:
        """Look up a rule by key."""
        for rule in self._rules:
            if rule.key == key:
                return rule
        return None

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        """Serialize to dictionary keyed by rule key."""
        return {rule.key: rule.to_dict() for rule in self._rules}

    @classmethod
    def default(cls) -> "RuleCatalog":
        """The built-in ten-rule catalog."""
        return DEFAULT_CATALOG

    @classmethod
    def from_dict(cls, data: Mapping) -> "RuleCatalog":
        """Build a catalog from a mapping of rule key to rule definition.

        A top-level 'rules' key is unwrapped if present.

        Raises:
            RuleCatalogError: If the definition is malformed
        """
        if isinstance(data, Mapping) and isinstance(data.get("rules"), Mapping):
            data = data["rules"]
        if not isinstance(data, Mapping):
            raise RuleCatalogError("Rule catalog must be a mapping of rule key to rule")

        return cls(Rule.from_dict(key, value) for key, value in data.items())

    @classmethod
    def from_yaml(cls, path: str) -> "RuleCatalog":
        """Load a catalog from a YAML file.

        Raises:
            RuleCatalogError: If the file is missing or malformed
        """
        file_path = Path(path)
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except OSError as e:
            raise RuleCatalogError(f"Cannot read rule catalog {file_path}: {e}") from e
        except yaml.YAMLError as e:
            raise RuleCatalogError(f"Invalid YAML in rule catalog {file_path}: {e}") from e

        catalog = cls.from_dict(data)
        logger.info(f"Loaded {len(catalog)} rules from {file_path}")
        return catalog

    @classmethod
    def from_file(cls, path: str) -> "RuleCatalog":
        """Load a catalog from a JSON or YAML file, chosen by suffix.

        Raises:
            RuleCatalogError: If the file is missing or malformed
        """
        file_path = Path(path)
        if file_path.suffix.lower() != ".json":
            return cls.from_yaml(path)

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise RuleCatalogError(f"Cannot read rule catalog {file_path}: {e}") from e
        except json.JSONDecodeError as e:
            raise RuleCatalogError(f"Invalid JSON in rule catalog {file_path}: {e}") from e

        catalog = cls.from_dict(data)
        logger.info(f"Loaded {len(catalog)} rules from {file_path}")
        return catalog


# Rich result types that Google supports
DEFAULT_CATALOG = RuleCatalog([
    Rule(
        key="Article",
        name="Article",
        trigger_types=("Article", "NewsArticle", "BlogPosting"),
        required=("headline", "image", "author", "datePublished"),
        recommended=("dateModified", "publisher"),
    ),
    Rule(
        key="Product",
        name="Product",
        trigger_types=("Product",),
        required=("name", "image"),
        recommended=("offers", "aggregateRating", "review", "brand"),
    ),
    Rule(
        key="SoftwareApp",
        name="Software App",
        trigger_types=("SoftwareApplication", "MobileApplication", "WebApplication"),
        required=("name",),
        recommended=("applicationCategory", "operatingSystem", "offers", "aggregateRating"),
    ),
    Rule(
        key="LocalBusiness",
        name="Local Business",
        trigger_types=("LocalBusiness", "Restaurant", "Store"),
        required=("name", "address"),
        recommended=("telephone", "openingHoursSpecification", "geo", "image"),
    ),
    Rule(
        key="Organization",
        name="Organization",
        trigger_types=("Organization", "Corporation"),
        required=("name",),
        recommended=("logo", "url", "sameAs", "contactPoint"),
    ),
    Rule(
        key="FAQ",
        name="FAQ",
        trigger_types=("FAQPage",),
        required=("mainEntity",),
    ),
    Rule(
        key="HowTo",
        name="How-to",
        trigger_types=("HowTo",),
        required=("name", "step"),
        recommended=("image", "totalTime", "estimatedCost"),
    ),
    Rule(
        key="Review",
        name="Review",
        trigger_types=("Review",),
        required=("itemReviewed", "reviewRating", "author"),
        recommended=("reviewBody", "datePublished"),
    ),
    Rule(
        key="BreadcrumbList",
        name="Breadcrumb",
        trigger_types=("BreadcrumbList",),
        required=("itemListElement",),
    ),
    Rule(
        key="WebSite",
        name="Sitelinks Search Box",
        trigger_types=("WebSite",),
        required=("url", "potentialAction"),
        recommended=("name",),
    ),
])
