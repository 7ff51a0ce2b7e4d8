from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field

from moodsense.insights import CONFIG_PATH
from moodsense.logging_config import get_logger

logger = get_logger(__name__)


# =============================================================================
# InsightsConfig (args/insights.yaml)
# =============================================================================

class PatternConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    low_threshold: int = Field(default=4, ge=1, le=10)
    high_threshold: int = Field(default=7, ge=1, le=10)
    min_streak: int = Field(default=3, ge=1)
    volatile_variance: float = Field(default=4.0, ge=0)
    significant_variance: float = Field(default=6.0, ge=0)
    stable_variance: float = Field(default=2.0, ge=0)


class TimeAffinityConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    min_entries: int = Field(default=7, ge=1)
    min_bucket_samples: int = Field(default=2, ge=1)


class ThemesConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    min_frequency: int = Field(default=2, ge=1)
    max_themes: int = Field(default=5, ge=1)


class KeywordsConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    min_length: int = Field(default=4, ge=1)
    min_count: int = Field(default=2, ge=1)
    max_keywords: int = Field(default=5, ge=1)


class BaselineConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    threshold: float = Field(default=0.5, ge=0)


class BurnoutConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    lookback_hours: int = Field(default=24, ge=1)


class NarrativeConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    note_snippet_length: int = Field(default=100, ge=1)
    days_away_threshold: int = Field(default=3, ge=0)


class InsightsConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    history_limit: int = Field(default=30, ge=1)
    recent_window: int = Field(default=7, ge=1)
    pattern: PatternConfig = Field(default_factory=PatternConfig)
    time_affinity: TimeAffinityConfig = Field(default_factory=TimeAffinityConfig)
    themes: ThemesConfig = Field(default_factory=ThemesConfig)
    keywords: KeywordsConfig = Field(default_factory=KeywordsConfig)
    baseline: BaselineConfig = Field(default_factory=BaselineConfig)
    burnout: BurnoutConfig = Field(default_factory=BurnoutConfig)
    narrative: NarrativeConfig = Field(default_factory=NarrativeConfig)


def load_config(path: Path | None = None) -> InsightsConfig:
    """Load and validate the insights config, falling back to defaults on any problem."""
    yaml_path = path or CONFIG_PATH

    try:
        if yaml_path.exists():
            with open(yaml_path) as f:
                raw = yaml.safe_load(f) or {}
        else:
            raw = {}

        return InsightsConfig.model_validate(raw.get("insights", raw))
    except Exception as e:
        logger.warning("config_invalid", path=str(yaml_path), error=str(e))
        return InsightsConfig()


__all__ = [
    "BaselineConfig",
    "BurnoutConfig",
    "InsightsConfig",
    "KeywordsConfig",
    "NarrativeConfig",
    "PatternConfig",
    "ThemesConfig",
    "TimeAffinityConfig",
    "load_config",
]
