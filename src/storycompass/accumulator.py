"""Group path-level cumulative scores by compass axis."""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping

from .models import normalise_axis


class AxisScoreAccumulator:
    """Collect every path-terminal score observed for each compass axis.

    Axis names are compared case-insensitively. The name reported for an axis
    is the first spelling the accumulator was given for it, and axes are
    reported in the order they were first observed.
    """

    def __init__(self) -> None:
        self._scores: Dict[str, List[float]] = {}
        self._labels: Dict[str, str] = {}

    def add_path(
        self,
        path: Mapping[str, float],
        *,
        labels: Mapping[str, str] | None = None,
    ) -> None:
        """Record one completed path.

        Args:
            path: Mapping of axis name (any casing) to the path's cumulative
                score for that axis.
            labels: Optional mapping of normalised axis key to display name,
                used in preference to the keys in ``path``.
        """

        for axis, score in path.items():
            key = normalise_axis(axis)
            if key not in self._scores:
                self._scores[key] = []
                self._labels[key] = (labels or {}).get(key, axis)
            self._scores[key].append(float(score))

    def add_paths(
        self,
        paths: Iterable[Mapping[str, float]],
        *,
        labels: Mapping[str, str] | None = None,
    ) -> None:
        """Record several completed paths."""

        for path in paths:
            self.add_path(path, labels=labels)

    def merge(self, other: "AxisScoreAccumulator") -> None:
        """Fold the scores collected by ``other`` into this accumulator."""

        for key, scores in other._scores.items():
            if key not in self._scores:
                self._scores[key] = []
                self._labels[key] = other._labels[key]
            self._scores[key].extend(scores)

    def scores_by_axis(self) -> Dict[str, List[float]]:
        """Return a copy of the collected scores keyed by display name."""

        return {self._labels[key]: list(scores) for key, scores in self._scores.items()}

    def scores_for(self, axis: str) -> List[float]:
        """Return the scores recorded for ``axis`` (empty when never observed)."""

        return list(self._scores.get(normalise_axis(axis), ()))

    @property
    def axis_count(self) -> int:
        return len(self._scores)

    def __len__(self) -> int:
        return sum(len(scores) for scores in self._scores.values())

    def __bool__(self) -> bool:
        return bool(self._scores)


__all__ = ["AxisScoreAccumulator"]
