"""Tests for scenario and bundle definition loaders."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from storycompass.loaders import (
    default_content_root,
    load_bundle_from_file,
    load_bundle_from_mapping,
    load_scenario_from_file,
    load_scenario_from_mapping,
)
from storycompass.models import Branch, CompassChange


_SCENARIO_DEFINITION = {
    "id": "harbour",
    "title": "The Harbour",
    "scenes": [
        {
            "id": "dock",
            "title": "On the dock",
            "branches": [
                {
                    "choice": "Help the fisherman",
                    "next_scene_id": "boat",
                    "compass_change": {"axis": "Kindness", "delta": 2},
                },
                {
                    "choice": "Walk away",
                    "compass_change": {"axis": "Kindness", "delta": -1},
                },
            ],
        },
        {"id": "boat", "next_scene_id": "sea"},
        {"id": "sea"},
    ],
}


def test_load_scenario_from_mapping() -> None:
    scenario = load_scenario_from_mapping(_SCENARIO_DEFINITION)

    assert scenario.id == "harbour"
    assert scenario.title == "The Harbour"
    assert [scene.id for scene in scenario.scenes] == ["dock", "boat", "sea"]

    dock = scenario.scenes[0]
    assert dock.title == "On the dock"
    assert dock.branches == (
        Branch("boat", CompassChange("Kindness", 2), "Help the fisherman"),
        Branch(None, CompassChange("Kindness", -1), "Walk away"),
    )
    assert scenario.scenes[1].next_scene_id == "sea"
    assert scenario.scenes[2].branches == ()


def test_alias_keys_are_accepted() -> None:
    scenario = load_scenario_from_mapping(
        {
            "id": "aliases",
            "scenes": [
                {
                    "id": "start",
                    "choices": [
                        {
                            "text": "Be brave",
                            "nextSceneId": "end",
                            "compassChange": {"axisId": "Courage", "delta": 1.5},
                        },
                        {
                            "option": "Fib",
                            "next_scene": "end",
                            "compass_impact": {"axis_id": "Honesty", "delta": -1},
                        },
                    ],
                },
                {"id": "end", "nextSceneId": None},
            ],
        }
    )

    first, second = scenario.scenes[0].branches
    assert first == Branch("end", CompassChange("Courage", 1.5), "Be brave")
    assert second == Branch("end", CompassChange("Honesty", -1), "Fib")
    assert scenario.title == ""


def test_compass_change_without_axis_is_ignored() -> None:
    scenario = load_scenario_from_mapping(
        {
            "id": "no-axis",
            "scenes": [
                {"id": "a", "branches": [{"compass_change": {"axis": " ", "delta": 4}}]}
            ],
        }
    )

    assert scenario.scenes[0].branches[0].compass_change is None


def test_missing_scenes_yield_empty_scenario() -> None:
    scenario = load_scenario_from_mapping({"id": "empty", "title": "Empty"})

    assert scenario.scenes == ()


@pytest.mark.parametrize(
    ("definition", "message"),
    [
        ({"title": "No id"}, "require a string 'id'"),
        ({"id": "s", "scenes": {}}, "list of scenes"),
        ({"id": "s", "scenes": ["dock"]}, "Scene #0"),
        ({"id": "s", "scenes": [{"title": "x"}]}, "requires a string 'id'"),
        ({"id": "s", "scenes": [{"id": "a", "branches": "b"}]}, "branches as a list"),
        ({"id": "s", "scenes": [{"id": "a", "branches": [1]}]}, "Branch #0"),
        (
            {"id": "s", "scenes": [{"id": "a", "next_scene_id": 3}]},
            "string next scene id",
        ),
        (
            {
                "id": "s",
                "scenes": [
                    {"id": "a", "branches": [{"compass_change": {"axis": "x", "delta": "1"}}]}
                ],
            },
            "numeric compass 'delta'",
        ),
        (
            {"id": "s", "scenes": [{"id": "a"}, {"id": "a"}]},
            "duplicate scene id",
        ),
    ],
)
def test_malformed_scenarios_are_rejected(definition: dict, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        load_scenario_from_mapping(definition)


def test_load_bundle_from_mapping_accepts_aliases() -> None:
    bundle = load_bundle_from_mapping(
        {"id": "pack", "title": "Pack", "scenarioIds": ["one", "two"]}
    )

    assert bundle.id == "pack"
    assert bundle.title == "Pack"
    assert bundle.scenario_ids == ("one", "two")


def test_load_bundle_rejects_non_string_ids() -> None:
    with pytest.raises(ValueError, match="list of strings"):
        load_bundle_from_mapping({"id": "pack", "scenario_ids": [1, 2]})


def test_load_from_files(tmp_path: Path) -> None:
    scenario_path = tmp_path / "harbour.json"
    scenario_path.write_text(json.dumps(_SCENARIO_DEFINITION), encoding="utf-8")
    bundle_path = tmp_path / "pack.json"
    bundle_path.write_text(
        json.dumps({"id": "pack", "scenarios": ["harbour"]}), encoding="utf-8"
    )

    assert load_scenario_from_file(scenario_path).id == "harbour"
    assert load_bundle_from_file(bundle_path).scenario_ids == ("harbour",)


def test_top_level_must_be_object(tmp_path: Path) -> None:
    path = tmp_path / "list.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(ValueError, match="object at the top level"):
        load_scenario_from_file(path)


def test_bundled_demo_content_loads() -> None:
    root = default_content_root()

    bundle = load_bundle_from_file(root / "bundles" / "forest-tales.json")
    assert bundle.scenario_ids == ("lost-fox", "bridge-keeper")
    for scenario_id in bundle.scenario_ids:
        scenario = load_scenario_from_file(root / "scenarios" / f"{scenario_id}.json")
        assert scenario.scenes
