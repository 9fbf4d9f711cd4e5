"""Turn per-axis percentile scores into badge tier thresholds."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from .contracts import BadgeTierThreshold, CompassAxisScoreResult
from .errors import InvalidArgumentError
from .percentiles import validate_percentile_rank

TierSpec = Tuple[str, float]

DEFAULT_TIERS: tuple[TierSpec, ...] = (
    ("bronze", 50.0),
    ("silver", 75.0),
    ("gold", 90.0),
)


def parse_tier_spec(raw: str) -> TierSpec:
    """Parse ``"name=percentile"`` into a tier specification."""

    name, separator, rank = raw.partition("=")
    name = name.strip()
    if not separator or not name:
        raise InvalidArgumentError(
            f"Tier '{raw}' must be written as name=percentile."
        )
    try:
        value = float(rank.strip())
    except ValueError as exc:
        raise InvalidArgumentError(f"Tier '{raw}' has a non-numeric percentile.") from exc
    return name.lower(), validate_percentile_rank(value)


def _ordered_tiers(tiers: Iterable[TierSpec]) -> List[TierSpec]:
    ordered: List[TierSpec] = []
    seen: set[str] = set()
    for name, rank in tiers:
        key = name.strip().lower()
        if not key:
            raise InvalidArgumentError("Tier names must be non-empty.")
        if key in seen:
            raise InvalidArgumentError(f"Duplicate badge tier '{key}'.")
        seen.add(key)
        ordered.append((key, validate_percentile_rank(rank)))
    if not ordered:
        raise InvalidArgumentError("At least one badge tier must be defined.")
    return sorted(ordered, key=lambda tier: tier[1])


def tier_percentiles(tiers: Iterable[TierSpec] = DEFAULT_TIERS) -> tuple[float, ...]:
    """Return the percentile ranks the given tiers need, lowest first."""

    return tuple(rank for _, rank in _ordered_tiers(tiers))


def derive_tier_thresholds(
    results: Sequence[CompassAxisScoreResult],
    tiers: Iterable[TierSpec] = DEFAULT_TIERS,
) -> List[BadgeTierThreshold]:
    """Assign each tier the score found at its percentile on every axis.

    Tiers are ordered by percentile; the lowest percentile becomes tier order
    1. Every tier percentile must have been computed for each result.

    Raises:
        InvalidArgumentError: If tiers are malformed or a result lacks one of
            the tier percentiles.
    """

    ordered = _ordered_tiers(tiers)
    thresholds: List[BadgeTierThreshold] = []
    for result in results:
        for tier_order, (name, rank) in enumerate(ordered, start=1):
            if rank not in result.percentile_scores:
                raise InvalidArgumentError(
                    f"Axis '{result.axis_name}' has no score for percentile {rank:g} "
                    f"required by tier '{name}'."
                )
            thresholds.append(
                BadgeTierThreshold(
                    axis_name=result.axis_name,
                    tier=name,
                    tier_order=tier_order,
                    percentile=rank,
                    required_score=result.percentile_scores[rank],
                )
            )
    return thresholds


__all__ = [
    "DEFAULT_TIERS",
    "TierSpec",
    "derive_tier_thresholds",
    "parse_tier_spec",
    "tier_percentiles",
]
