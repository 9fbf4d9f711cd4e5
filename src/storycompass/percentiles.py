"""Order statistics used to calibrate badge thresholds."""

from __future__ import annotations

import math
from typing import Dict, Iterable, Sequence

from .errors import InvalidArgumentError


def validate_percentile_rank(rank: float) -> float:
    """Return ``rank`` as a float, rejecting values outside ``[0, 100]``."""

    if isinstance(rank, bool) or not isinstance(rank, (int, float)):
        raise InvalidArgumentError(f"Percentile must be a number, got {rank!r}")
    value = float(rank)
    if math.isnan(value) or value < 0 or value > 100:
        raise InvalidArgumentError(f"Percentiles must be between 0 and 100, got {rank!r}")
    return value


def calculate_percentile(sorted_samples: Sequence[float], rank: float) -> float:
    """Return the value at percentile ``rank`` of ascending ``sorted_samples``.

    Uses linear interpolation between closest ranks, placing rank ``p`` at
    position ``p / 100 * (n - 1)`` (the R-7 definition used by spreadsheets and
    ``numpy.percentile``). An empty sample list yields ``0.0``, which callers
    cannot tell apart from a genuine score of zero.
    """

    if not sorted_samples:
        return 0.0

    count = len(sorted_samples)
    if count == 1:
        return float(sorted_samples[0])

    position = (rank / 100.0) * (count - 1)
    lower_index = math.floor(position)
    upper_index = math.ceil(position)

    if lower_index < 0:
        return float(sorted_samples[0])
    if upper_index >= count:
        return float(sorted_samples[-1])
    if lower_index == upper_index:
        return float(sorted_samples[lower_index])

    lower_value = sorted_samples[lower_index]
    upper_value = sorted_samples[upper_index]
    fraction = position - lower_index
    return float(lower_value + (upper_value - lower_value) * fraction)


def calculate_percentiles(
    samples: Iterable[float], ranks: Iterable[float]
) -> Dict[float, float]:
    """Compute each requested percentile rank over ``samples``.

    Args:
        samples: Scores in any order.
        ranks: Percentile ranks between 0 and 100 inclusive.

    Returns:
        Mapping of each requested rank (as a float) to its interpolated value.

    Raises:
        InvalidArgumentError: If any rank falls outside ``[0, 100]``.
    """

    validated_ranks = [validate_percentile_rank(rank) for rank in ranks]
    sorted_samples = sorted(float(sample) for sample in samples)
    return {
        rank: calculate_percentile(sorted_samples, rank) for rank in validated_ranks
    }


__all__ = [
    "calculate_percentile",
    "calculate_percentiles",
    "validate_percentile_rank",
]
