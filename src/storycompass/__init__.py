"""Scenario path traversal and percentile badge scoring."""

from .accumulator import AxisScoreAccumulator
from .badge_scores import (
    BadgeScoreCalculator,
    BadgeScoreReport,
    calculate_badge_scores,
    format_badge_score_report,
)
from .contracts import BadgeTierThreshold, CalculateBadgeScoresQuery, CompassAxisScoreResult
from .errors import BadgeScoreError, InvalidArgumentError, NotFoundError
from .loaders import (
    load_bundle_from_file,
    load_bundle_from_mapping,
    load_scenario_from_file,
    load_scenario_from_mapping,
)
from .models import Branch, CompassChange, ContentBundle, Scenario, Scene, normalise_axis
from .paths import count_scenario_paths, enumerate_scenario_paths
from .percentiles import calculate_percentile, calculate_percentiles
from .repository import (
    ContentRepository,
    FileContentRepository,
    InMemoryContentRepository,
)
from .settings import BadgeScoreSettings
from .tiers import DEFAULT_TIERS, derive_tier_thresholds

__all__ = [
    "Branch",
    "CompassChange",
    "Scene",
    "Scenario",
    "ContentBundle",
    "normalise_axis",
    "load_scenario_from_mapping",
    "load_scenario_from_file",
    "load_bundle_from_mapping",
    "load_bundle_from_file",
    "ContentRepository",
    "InMemoryContentRepository",
    "FileContentRepository",
    "enumerate_scenario_paths",
    "count_scenario_paths",
    "AxisScoreAccumulator",
    "calculate_percentile",
    "calculate_percentiles",
    "CalculateBadgeScoresQuery",
    "CompassAxisScoreResult",
    "BadgeTierThreshold",
    "BadgeScoreCalculator",
    "BadgeScoreReport",
    "calculate_badge_scores",
    "format_badge_score_report",
    "DEFAULT_TIERS",
    "derive_tier_thresholds",
    "BadgeScoreSettings",
    "BadgeScoreError",
    "InvalidArgumentError",
    "NotFoundError",
]
