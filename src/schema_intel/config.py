from dotenv import load_dotenv
from dataclasses import dataclass
from typing import Optional
from pathlib import Path
import json
import os

from schema_intel.constants import DEFAULT_MAX_NESTING_DEPTH
from schema_intel.models import BusinessIntent, BusinessType

load_dotenv()  # Loads variables from .env file


def _int_env(name: str, default: Optional[int]) -> Optional[int]:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        return default  # Keep default if conversion fails


class Settings:
    """
    Manages application settings loaded from environment variables.
    """
    LOG_FILE = os.getenv("SCHEMA_INTEL_LOG_FILE")

    # Alternate rule catalog (YAML or JSON); built-in catalog when unset
    RULES_FILE = os.getenv("SCHEMA_INTEL_RULES_FILE")
    MAX_DEPTH = _int_env("SCHEMA_INTEL_MAX_DEPTH", DEFAULT_MAX_NESTING_DEPTH)
    MAX_WORKERS = _int_env("SCHEMA_INTEL_MAX_WORKERS", None)

    # Default business context
    BUSINESS_TYPE = os.getenv("SCHEMA_INTEL_BUSINESS_TYPE")
    INTENT = os.getenv("SCHEMA_INTEL_INTENT")


settings = Settings()


@dataclass
class EngineConfig:
    """Configuration for the schema intelligence engine."""
    max_depth: int = DEFAULT_MAX_NESTING_DEPTH
    rules_file: Optional[str] = None
    max_workers: Optional[int] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Load configuration from environment variables.

        Returns:
            EngineConfig: Configuration instance with values from environment
        """
        return cls(
            max_depth=_int_env("SCHEMA_INTEL_MAX_DEPTH", DEFAULT_MAX_NESTING_DEPTH),
            rules_file=os.getenv("SCHEMA_INTEL_RULES_FILE") or None,
            max_workers=_int_env("SCHEMA_INTEL_MAX_WORKERS", None),
            log_level=os.getenv("SCHEMA_INTEL_LOG_LEVEL", "INFO"),
        )


@dataclass(frozen=True)
class AnalysisConfig:
    """Business context the analysis is scored against.

    Only the "saas" business type currently changes scoring; other types
    are accepted and carried through without effect.
    """
    business_type: Optional[BusinessType] = None
    intent: Optional[BusinessIntent] = None

    def __post_init__(self):
        # Accept plain strings for convenience
        object.__setattr__(self, "business_type", BusinessType.parse(self.business_type))
        object.__setattr__(self, "intent", BusinessIntent.parse(self.intent))

    @classmethod
    def from_env(cls) -> "AnalysisConfig":
        """Load business context from environment variables.

        Returns:
            AnalysisConfig with values from SCHEMA_INTEL_BUSINESS_TYPE and
            SCHEMA_INTEL_INTENT
        """
        return cls(
            business_type=os.getenv("SCHEMA_INTEL_BUSINESS_TYPE"),
            intent=os.getenv("SCHEMA_INTEL_INTENT"),
        )

    @classmethod
    def from_file(cls, path: str) -> "AnalysisConfig":
        """Load business context from a JSON configuration file.

        Accepts businessType/business_type and intent keys, optionally
        nested under a top-level "analysis" key.

        Args:
            path: Path to JSON configuration file

        Returns:
            AnalysisConfig with values from file (defaults if file is missing)
        """
        file_path = Path(path)

        if not file_path.exists():
            return cls()

        with open(file_path, 'r') as f:
            config = json.load(f)

        analysis_config = config.get('analysis', config)

        return cls(
            business_type=analysis_config.get('businessType', analysis_config.get('business_type')),
            intent=analysis_config.get('intent'),
        )

    def to_dict(self) -> dict:
        """Convert configuration to dictionary.

        Returns:
            Dictionary with businessType and intent values
        """
        return {
            'businessType': self.business_type.value if self.business_type else None,
            'intent': self.intent.value if self.intent else None,
        }
