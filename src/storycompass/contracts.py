"""Request and response models exchanged with badge tooling."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CalculateBadgeScoresQuery(BaseModel):
    """Parameters for a badge score calculation over one content bundle."""

    model_config = ConfigDict(frozen=True)

    bundle_id: str
    percentiles: tuple[float, ...]

    @field_validator("bundle_id", mode="before")
    @classmethod
    def _validate_bundle_id(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError("Content bundle ID must be provided as a string.")
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("Content bundle ID cannot be null or empty.")
        return trimmed

    @field_validator("percentiles", mode="before")
    @classmethod
    def _require_percentiles(cls, value: Any) -> Any:
        if value is None or isinstance(value, (str, bytes)):
            raise ValueError("Percentiles must be provided as a list of numbers.")
        values = tuple(value)
        if not values:
            raise ValueError("Percentiles array cannot be null or empty.")
        for entry in values:
            if isinstance(entry, bool):
                raise ValueError("Percentiles must be numbers.")
        return values

    @field_validator("percentiles")
    @classmethod
    def _validate_percentile_range(cls, value: tuple[float, ...]) -> tuple[float, ...]:
        for percentile in value:
            if not 0 <= percentile <= 100:
                raise ValueError("Percentiles must be between 0 and 100.")
        return value


class CompassAxisScoreResult(BaseModel):
    """Percentile scores computed for a single compass axis."""

    axis_name: str
    percentile_scores: dict[float, float] = Field(default_factory=dict)

    def score_at(self, percentile: float) -> float:
        """Return the score computed for ``percentile``.

        Raises:
            KeyError: If ``percentile`` was not requested.
        """

        return self.percentile_scores[float(percentile)]


class BadgeTierThreshold(BaseModel):
    """Score a player must reach on an axis to earn one badge tier."""

    axis_name: str
    tier: str
    tier_order: int = Field(..., ge=1)
    percentile: float = Field(..., ge=0, le=100)
    required_score: float


__all__ = [
    "BadgeTierThreshold",
    "CalculateBadgeScoresQuery",
    "CompassAxisScoreResult",
]
