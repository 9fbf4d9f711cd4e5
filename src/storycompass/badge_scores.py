"""Calculate per-axis percentile badge scores for a content bundle."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Tuple

from pydantic import ValidationError

from .accumulator import AxisScoreAccumulator
from .contracts import BadgeTierThreshold, CalculateBadgeScoresQuery, CompassAxisScoreResult
from .errors import BadgeScoreError, InvalidArgumentError, NotFoundError
from .loaders import default_content_root
from .models import Scenario
from .paths import AxisScores, enumerate_scenario_paths, scenario_axis_labels
from .percentiles import calculate_percentiles
from .repository import ContentRepository, FileContentRepository
from .settings import BadgeScoreSettings
from .tiers import DEFAULT_TIERS, derive_tier_thresholds, parse_tier_spec, tier_percentiles

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScenarioTraversal:
    """Paths found while walking a single scenario."""

    scenario_id: str
    title: str
    paths: Tuple[AxisScores, ...]
    axis_labels: Dict[str, str]

    @property
    def path_count(self) -> int:
        return len(self.paths)


@dataclass(frozen=True)
class BadgeScoreReport:
    """Badge scores for a bundle together with details about how they were found."""

    bundle_id: str
    percentiles: tuple[float, ...]
    results: tuple[CompassAxisScoreResult, ...]
    scenario_path_counts: tuple[tuple[str, int], ...]
    axis_sample_counts: tuple[tuple[str, int], ...]
    missing_scenarios: tuple[str, ...]

    @property
    def scenario_count(self) -> int:
        """Return the number of scenarios that were traversed."""

        return len(self.scenario_path_counts)

    @property
    def total_path_count(self) -> int:
        """Return the number of scored paths across all scenarios."""

        return sum(count for _, count in self.scenario_path_counts)

    @property
    def has_missing_scenarios(self) -> bool:
        return bool(self.missing_scenarios)


def _build_query(bundle_id: str, percentiles: Iterable[float]) -> CalculateBadgeScoresQuery:
    try:
        return CalculateBadgeScoresQuery(bundle_id=bundle_id, percentiles=percentiles)
    except ValidationError as exc:
        messages = "; ".join(
            str(error.get("msg", "invalid value")).removeprefix("Value error, ")
            for error in exc.errors()
        )
        raise InvalidArgumentError(messages) from exc


def traverse_scenario(scenario: Scenario) -> ScenarioTraversal:
    """Enumerate the scored paths of ``scenario``."""

    paths = enumerate_scenario_paths(scenario)
    return ScenarioTraversal(
        scenario_id=scenario.id,
        title=scenario.title,
        paths=tuple(paths),
        axis_labels=scenario_axis_labels(scenario),
    )


class BadgeScoreCalculator:
    """Compute percentile badge scores for the scenarios of a content bundle.

    Every scenario in the bundle is walked exhaustively; the cumulative compass
    score at the end of each path becomes one sample for that axis. Percentiles
    over those samples are what badge tiers are calibrated against.
    """

    def __init__(self, repository: ContentRepository, *, max_workers: int = 1) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be greater than zero")
        self._repository = repository
        self._max_workers = max_workers

    @property
    def repository(self) -> ContentRepository:
        return self._repository

    def calculate(
        self, bundle_id: str, percentiles: Iterable[float]
    ) -> List[CompassAxisScoreResult]:
        """Return one :class:`CompassAxisScoreResult` per observed axis.

        Raises:
            InvalidArgumentError: If ``bundle_id`` is blank or ``percentiles`` is
                empty or contains a value outside ``[0, 100]``.
            NotFoundError: If the bundle does not exist.
        """

        return list(self.calculate_report(bundle_id, percentiles).results)

    def calculate_report(
        self, bundle_id: str, percentiles: Iterable[float]
    ) -> BadgeScoreReport:
        """Like :meth:`calculate` but also report path counts and skipped scenarios."""

        query = _build_query(bundle_id, percentiles)

        bundle = self._repository.get_bundle_by_id(query.bundle_id)
        if bundle is None:
            raise NotFoundError(f"Content bundle not found: {query.bundle_id}")

        logger.info(
            "Calculating badge scores for bundle %s with %d scenarios",
            bundle.id,
            len(bundle.scenario_ids),
        )

        scenarios: List[Scenario] = []
        missing: List[str] = []
        for scenario_id in bundle.scenario_ids:
            try:
                scenario = self._repository.get_scenario_by_id(scenario_id)
            except ValueError as exc:
                logger.warning(
                    "Scenario %s in bundle %s could not be loaded: %s",
                    scenario_id,
                    bundle.id,
                    exc,
                )
                missing.append(scenario_id)
                continue
            if scenario is None:
                logger.warning(
                    "Scenario %s not found in bundle %s", scenario_id, bundle.id
                )
                missing.append(scenario_id)
                continue
            scenarios.append(scenario)

        if not scenarios:
            logger.warning("No scenarios found for bundle %s", bundle.id)
            return BadgeScoreReport(
                bundle_id=bundle.id,
                percentiles=query.percentiles,
                results=(),
                scenario_path_counts=(),
                axis_sample_counts=(),
                missing_scenarios=tuple(missing),
            )

        traversals = self._traverse_all(scenarios)

        accumulator = AxisScoreAccumulator()
        for traversal in traversals:
            logger.debug(
                "Found %d paths in scenario %s: %s",
                traversal.path_count,
                traversal.scenario_id,
                traversal.title,
            )
            accumulator.add_paths(traversal.paths, labels=traversal.axis_labels)

        results: List[CompassAxisScoreResult] = []
        sample_counts: List[tuple[str, int]] = []
        for axis_name, scores in accumulator.scores_by_axis().items():
            if not scores:
                continue
            results.append(
                CompassAxisScoreResult(
                    axis_name=axis_name,
                    percentile_scores=calculate_percentiles(scores, query.percentiles),
                )
            )
            sample_counts.append((axis_name, len(scores)))
            logger.info(
                "Calculated percentiles for axis %s: %d paths analysed",
                axis_name,
                len(scores),
            )

        logger.info(
            "Badge score calculation complete for bundle %s: %d axes processed",
            bundle.id,
            len(results),
        )

        return BadgeScoreReport(
            bundle_id=bundle.id,
            percentiles=query.percentiles,
            results=tuple(results),
            scenario_path_counts=tuple(
                (traversal.scenario_id, traversal.path_count) for traversal in traversals
            ),
            axis_sample_counts=tuple(sample_counts),
            missing_scenarios=tuple(missing),
        )

    def _traverse_all(self, scenarios: Sequence[Scenario]) -> List[ScenarioTraversal]:
        if self._max_workers == 1 or len(scenarios) < 2:
            return [traverse_scenario(scenario) for scenario in scenarios]

        # map() keeps scenario order, so merged output matches a sequential run.
        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            return list(executor.map(traverse_scenario, scenarios))


def calculate_badge_scores(
    bundle_id: str,
    percentiles: Iterable[float],
    *,
    repository: ContentRepository,
    max_workers: int = 1,
) -> List[CompassAxisScoreResult]:
    """Convenience wrapper around :meth:`BadgeScoreCalculator.calculate`."""

    calculator = BadgeScoreCalculator(repository, max_workers=max_workers)
    return calculator.calculate(bundle_id, percentiles)


def format_badge_score_report(
    report: BadgeScoreReport,
    *,
    thresholds: Sequence[BadgeTierThreshold] = (),
) -> str:
    """Return a human-friendly summary of a badge score calculation."""

    lines = [
        "Badge Score Calibration",
        "=======================",
        f"Bundle: {report.bundle_id}",
        (
            f"Scenarios analysed: {report.scenario_count}"
            f" (scored paths: {report.total_path_count})"
        ),
    ]
    lines.extend(
        f"- {scenario_id}: {count} paths"
        for scenario_id, count in report.scenario_path_counts
    )

    if report.missing_scenarios:
        lines.append("Scenarios that could not be loaded:")
        lines.extend(f"- {scenario_id}" for scenario_id in report.missing_scenarios)

    lines.append("")
    if not report.results:
        lines.append("No compass axis scores were recorded.")
        return "\n".join(lines)

    sample_counts = dict(report.axis_sample_counts)
    for result in report.results:
        lines.append(
            f"Axis: {result.axis_name} ({sample_counts.get(result.axis_name, 0)} samples)"
        )
        lines.extend(
            f"  p{percentile:g}: {score:g}"
            for percentile, score in result.percentile_scores.items()
        )

    if thresholds:
        lines.append("")
        lines.append("Badge tiers:")
        lines.extend(
            (
                f"- {threshold.axis_name} {threshold.tier}"
                f" (tier {threshold.tier_order}, p{threshold.percentile:g}):"
                f" {threshold.required_score:g}"
            )
            for threshold in thresholds
        )

    return "\n".join(lines)


def _report_payload(
    report: BadgeScoreReport, thresholds: Sequence[BadgeTierThreshold]
) -> dict[str, object]:
    return {
        "bundle_id": report.bundle_id,
        "percentiles": list(report.percentiles),
        "results": [result.model_dump(mode="json") for result in report.results],
        "scenario_path_counts": dict(report.scenario_path_counts),
        "missing_scenarios": list(report.missing_scenarios),
        "tiers": [threshold.model_dump(mode="json") for threshold in thresholds],
    }


def _parse_args(
    argv: Sequence[str] | None, settings: BadgeScoreSettings
) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Compute percentile badge scores for every compass axis in a content bundle."
        )
    )
    parser.add_argument("bundle_id", help="Identifier of the bundle to score.")
    parser.add_argument(
        "--content-root",
        type=Path,
        default=settings.content_root,
        help=(
            "Directory holding bundles/ and scenarios/ JSON files. Defaults to "
            "STORYCOMPASS_CONTENT_ROOT or the bundled demo content."
        ),
    )
    parser.add_argument(
        "--percentiles",
        nargs="+",
        type=float,
        default=None,
        help="Percentile ranks between 0 and 100 to compute.",
    )
    parser.add_argument(
        "--tiers",
        nargs="*",
        default=None,
        metavar="NAME=PERCENTILE",
        help=(
            "Derive badge tier thresholds, e.g. bronze=50 silver=75 gold=90. "
            "Without values the default bronze/silver/gold tiers are used."
        ),
    )
    parser.add_argument(
        "--max-workers",
        type=int,
        default=settings.max_workers,
        help="Number of scenarios to traverse in parallel.",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"),
        type=str.upper,
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit the report as JSON instead of text.",
    )
    return parser.parse_args(argv)


def main(
    argv: Sequence[str] | None = None,
    *,
    settings: BadgeScoreSettings | None = None,
) -> int:
    """Entry point used by ``python -m storycompass.badge_scores``."""

    if settings is None:
        try:
            settings = BadgeScoreSettings.from_env()
        except ValueError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2
    args = _parse_args(argv, settings)

    logging.basicConfig(
        level=args.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    content_root = args.content_root or default_content_root()
    repository = FileContentRepository(content_root)

    percentiles = list(args.percentiles or settings.default_percentiles)
    try:
        if args.tiers is None:
            tiers = []
        elif not args.tiers:
            tiers = list(DEFAULT_TIERS)
        else:
            tiers = [parse_tier_spec(raw) for raw in args.tiers]
        for rank in tier_percentiles(tiers) if tiers else ():
            if rank not in percentiles:
                percentiles.append(rank)

        calculator = BadgeScoreCalculator(repository, max_workers=args.max_workers)
        report = calculator.calculate_report(args.bundle_id, percentiles)
        thresholds = derive_tier_thresholds(report.results, tiers) if tiers else []
    except InvalidArgumentError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except BadgeScoreError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(_report_payload(report, thresholds), indent=2))
    else:
        print(format_badge_score_report(report, thresholds=thresholds))
    return 0


__all__ = [
    "BadgeScoreCalculator",
    "BadgeScoreReport",
    "ScenarioTraversal",
    "calculate_badge_scores",
    "format_badge_score_report",
    "main",
    "traverse_scenario",
]


if __name__ == "__main__":  # pragma: no cover - convenience CLI
    raise SystemExit(main())
