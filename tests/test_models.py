"""Tests for the read-only branch model."""

from __future__ import annotations

import pytest

from storycompass.models import (
    Branch,
    CompassChange,
    ContentBundle,
    Scenario,
    Scene,
    normalise_axis,
)


def test_normalise_axis_is_case_insensitive() -> None:
    assert normalise_axis("  Kindness ") == "kindness"
    assert normalise_axis("KINDNESS") == normalise_axis("kindness")


def test_normalise_axis_rejects_blank() -> None:
    with pytest.raises(ValueError):
        normalise_axis("   ")


def test_compass_change_coerces_delta_to_float() -> None:
    change = CompassChange(" Courage ", 2)

    assert change.axis == "Courage"
    assert change.delta == 2.0
    assert isinstance(change.delta, float)
    assert change.axis_key == "courage"


@pytest.mark.parametrize("delta", ["2", None, True])
def test_compass_change_rejects_non_numeric_delta(delta: object) -> None:
    with pytest.raises(TypeError):
        CompassChange("Courage", delta)  # type: ignore[arg-type]


def test_blank_branch_target_means_ending() -> None:
    branch = Branch(next_scene_id="   ")

    assert branch.next_scene_id is None
    assert branch.is_ending


def test_branch_rejects_foreign_compass_change() -> None:
    with pytest.raises(TypeError):
        Branch(compass_change={"axis": "Kindness", "delta": 1})  # type: ignore[arg-type]


def test_scene_normalises_fields() -> None:
    scene = Scene(" hall ", next_scene_id="", branches=[Branch("exit")])

    assert scene.id == "hall"
    assert scene.next_scene_id is None
    assert scene.branches == (Branch("exit"),)
    assert scene.has_branches


def test_scenario_rejects_duplicate_scene_ids() -> None:
    with pytest.raises(ValueError, match="duplicate scene id 'a'"):
        Scenario(id="dupes", title="Dupes", scenes=[Scene("a"), Scene("a")])


def test_scenario_indexes_scenes_in_order() -> None:
    scenario = Scenario(id="s", title=" Title ", scenes=[Scene("b"), Scene("a")])

    assert scenario.title == "Title"
    assert scenario.first_scene == Scene("b")
    assert list(scenario.scene_index) == ["b", "a"]
    with pytest.raises(TypeError):
        scenario.scene_index["c"] = Scene("c")  # type: ignore[index]


def test_empty_scenario_has_no_first_scene() -> None:
    assert Scenario(id="s", title="").first_scene is None


def test_bundle_validates_scenario_ids() -> None:
    bundle = ContentBundle(id="b", scenario_ids=[" one ", "two"])

    assert bundle.scenario_ids == ("one", "two")
    with pytest.raises(ValueError):
        ContentBundle(id="b", scenario_ids=["", "two"])
    with pytest.raises(ValueError):
        ContentBundle(id=" ")
