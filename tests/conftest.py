"""Test configuration for the storycompass project."""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from collections.abc import Mapping
from typing import Any

import pytest

from storycompass import (
    ContentBundle,
    InMemoryContentRepository,
    Scenario,
    load_scenario_from_mapping,
)


def _build_scenario(
    scenario_id: str, scenes: list[Mapping[str, Any]], *, title: str = ""
) -> Scenario:
    """Create a scenario from compact scene definitions."""

    return load_scenario_from_mapping(
        {"id": scenario_id, "title": title or scenario_id, "scenes": list(scenes)}
    )


def _choice(
    target: str | None = None, axis: str | None = None, delta: float = 0
) -> dict[str, Any]:
    """Return a branch definition used by the scenario builders."""

    branch: dict[str, Any] = {"next_scene_id": target}
    if axis is not None:
        branch["compass_change"] = {"axis": axis, "delta": delta}
    return branch


@pytest.fixture()
def kindness_fork() -> Scenario:
    """A single decision with one kind and one unkind ending."""

    return _build_scenario(
        "kindness-fork",
        [
            {
                "id": "a",
                "branches": [_choice("x", "Kindness", 3), _choice("y", "Kindness", -2)],
            },
            {"id": "x"},
            {"id": "y"},
        ],
    )


@pytest.fixture()
def make_repository() -> Any:
    """Factory fixture building an in-memory repository for one bundle."""

    def _factory(
        scenarios: list[Scenario],
        *,
        bundle_id: str = "bundle-1",
        extra_scenario_ids: tuple[str, ...] = (),
    ) -> InMemoryContentRepository:
        bundle = ContentBundle(
            id=bundle_id,
            scenario_ids=[scenario.id for scenario in scenarios]
            + list(extra_scenario_ids),
        )
        return InMemoryContentRepository(bundles=[bundle], scenarios=scenarios)

    return _factory


__all__ = ["kindness_fork", "make_repository"]
