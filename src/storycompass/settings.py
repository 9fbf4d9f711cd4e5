"""Configuration helpers for running badge score calculations."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

DEFAULT_PERCENTILES: tuple[float, ...] = (50.0, 75.0, 90.0)

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _normalise_path(value: str | None) -> Path | None:
    if value is None:
        return None

    trimmed = value.strip()
    if not trimmed:
        return None

    return Path(trimmed).expanduser()


def _normalise_string(value: str | None, *, default: str) -> str:
    if value is None:
        return default

    trimmed = value.strip()
    return trimmed or default


def parse_percentile_list(raw: str) -> tuple[float, ...]:
    """Parse a comma-separated list of percentile ranks.

    Raises:
        ValueError: If an entry is not a number between 0 and 100 or the list
            is empty.
    """

    values: list[float] = []
    for entry in raw.split(","):
        trimmed = entry.strip()
        if not trimmed:
            continue
        try:
            value = float(trimmed)
        except ValueError as exc:
            raise ValueError(f"Percentile '{trimmed}' is not a number.") from exc
        if not 0 <= value <= 100:
            raise ValueError(f"Percentile '{trimmed}' must be between 0 and 100.")
        values.append(value)

    if not values:
        raise ValueError("At least one percentile must be provided.")
    return tuple(values)


@dataclass(frozen=True)
class BadgeScoreSettings:
    """Runtime settings for the badge score engine.

    Values are read from environment variables so deployments can tune the
    calculation without code changes. Empty strings are treated as if the
    variable was unset.
    """

    content_root: Path | None = None
    default_percentiles: tuple[float, ...] = DEFAULT_PERCENTILES
    max_workers: int = 1
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "BadgeScoreSettings":
        """Return settings populated from ``environ``.

        Args:
            environ: Optional mapping of environment variables. When omitted,
                :data:`os.environ` is used.
        """

        source = environ if environ is not None else os.environ

        content_root = _normalise_path(source.get("STORYCOMPASS_CONTENT_ROOT"))

        default_percentiles = DEFAULT_PERCENTILES
        percentiles_raw = source.get("STORYCOMPASS_DEFAULT_PERCENTILES")
        if percentiles_raw is not None and percentiles_raw.strip():
            try:
                default_percentiles = parse_percentile_list(percentiles_raw)
            except ValueError as exc:
                raise ValueError(
                    f"STORYCOMPASS_DEFAULT_PERCENTILES is invalid: {exc}"
                ) from exc

        max_workers = 1
        workers_raw = source.get("STORYCOMPASS_MAX_WORKERS")
        if workers_raw is not None:
            trimmed_workers = workers_raw.strip()
            if trimmed_workers:
                try:
                    parsed_workers = int(trimmed_workers)
                except ValueError as exc:
                    raise ValueError(
                        "STORYCOMPASS_MAX_WORKERS must be a positive integer."
                    ) from exc
                if parsed_workers < 1:
                    raise ValueError(
                        "STORYCOMPASS_MAX_WORKERS must be greater than zero."
                    )
                max_workers = parsed_workers

        log_level = _normalise_string(
            source.get("STORYCOMPASS_LOG_LEVEL"), default="WARNING"
        ).upper()
        if log_level not in _LOG_LEVELS:
            raise ValueError(
                "STORYCOMPASS_LOG_LEVEL must be one of: " + ", ".join(_LOG_LEVELS)
            )

        return cls(
            content_root=content_root,
            default_percentiles=default_percentiles,
            max_workers=max_workers,
            log_level=log_level,
        )


__all__ = ["BadgeScoreSettings", "DEFAULT_PERCENTILES", "parse_percentile_list"]
