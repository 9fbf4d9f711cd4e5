"""Parse scenario and bundle definitions into the branch model.

Definitions are JSON-compatible mappings as exported by the authoring tools.
Several spellings are accepted for the same field (``next_scene_id``,
``nextSceneId`` and ``next_scene`` for example) because older exports used
camelCase keys.
"""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any, Mapping, Sequence

from .models import Branch, CompassChange, ContentBundle, Scenario, Scene

_NEXT_SCENE_KEYS = ("next_scene_id", "nextSceneId", "next_scene")
_BRANCH_LIST_KEYS = ("branches", "choices")
_BRANCH_TEXT_KEYS = ("choice", "text", "option")
_COMPASS_CHANGE_KEYS = ("compass_change", "compassChange", "compass_impact")
_AXIS_KEYS = ("axis", "axisId", "axis_id")
_SCENARIO_ID_LIST_KEYS = ("scenario_ids", "scenarioIds", "scenarios")


def _first_present(payload: Mapping[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        if key in payload:
            return payload[key]
    return None


def _coerce_optional_string(value: Any, *, error_message: str) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    raise ValueError(error_message)


def _parse_compass_change(
    payload: Any, *, location: str
) -> CompassChange | None:
    if payload is None:
        return None
    if not isinstance(payload, Mapping):
        raise ValueError(f"{location} must define its compass change as an object.")

    axis = _first_present(payload, _AXIS_KEYS)
    if axis is None or (isinstance(axis, str) and not axis.strip()):
        # Compass changes without an axis carry no score.
        return None
    if not isinstance(axis, str):
        raise ValueError(f"{location} must use a string compass axis.")

    delta = payload.get("delta", 0)
    if isinstance(delta, bool) or not isinstance(delta, (int, float)):
        raise ValueError(f"{location} must use a numeric compass 'delta'.")

    return CompassChange(axis=axis, delta=delta)


def _parse_branch(payload: Any, *, scene_id: str, index: int) -> Branch:
    location = f"Branch #{index} in scene '{scene_id}'"
    if not isinstance(payload, Mapping):
        raise ValueError(f"{location} must be an object definition.")

    next_scene_id = _coerce_optional_string(
        _first_present(payload, _NEXT_SCENE_KEYS),
        error_message=f"{location} must use a string next scene id.",
    )
    choice = _coerce_optional_string(
        _first_present(payload, _BRANCH_TEXT_KEYS),
        error_message=f"{location} must use a string choice text.",
    )
    compass_change = _parse_compass_change(
        _first_present(payload, _COMPASS_CHANGE_KEYS), location=location
    )

    return Branch(
        next_scene_id=next_scene_id,
        compass_change=compass_change,
        choice=choice,
    )


def _parse_scene(payload: Any, *, scenario_id: str, index: int) -> Scene:
    if not isinstance(payload, Mapping):
        raise ValueError(
            f"Scene #{index} in scenario '{scenario_id}' must be an object definition."
        )

    scene_id = payload.get("id")
    if not isinstance(scene_id, str) or not scene_id.strip():
        raise ValueError(
            f"Scene #{index} in scenario '{scenario_id}' requires a string 'id'."
        )

    next_scene_id = _coerce_optional_string(
        _first_present(payload, _NEXT_SCENE_KEYS),
        error_message=f"Scene '{scene_id}' must use a string next scene id.",
    )
    title = _coerce_optional_string(
        payload.get("title"),
        error_message=f"Scene '{scene_id}' must use a string 'title'.",
    )

    raw_branches = _first_present(payload, _BRANCH_LIST_KEYS)
    if raw_branches is None:
        raw_branches = []
    if not isinstance(raw_branches, list):
        raise ValueError(f"Scene '{scene_id}' must define its branches as a list.")

    branches = tuple(
        _parse_branch(branch_payload, scene_id=scene_id, index=branch_index)
        for branch_index, branch_payload in enumerate(raw_branches)
    )

    return Scene(
        id=scene_id,
        next_scene_id=next_scene_id,
        branches=branches,
        title=title,
    )


def load_scenario_from_mapping(definition: Mapping[str, Any]) -> Scenario:
    """Convert a scenario definition mapping into a :class:`Scenario`.

    The mapping must contain an ``id`` string and may contain a ``title`` and a
    ``scenes`` list. Scene order is preserved; the first scene is where every
    playthrough starts.
    """

    if not isinstance(definition, Mapping):
        raise ValueError("Scenario definitions must be objects.")

    scenario_id = definition.get("id")
    if not isinstance(scenario_id, str) or not scenario_id.strip():
        raise ValueError("Scenario definitions require a string 'id'.")

    title = definition.get("title", "")
    if title is None:
        title = ""
    if not isinstance(title, str):
        raise ValueError(f"Scenario '{scenario_id}' must use a string 'title'.")

    raw_scenes = definition.get("scenes")
    if raw_scenes is None:
        raw_scenes = []
    if not isinstance(raw_scenes, list):
        raise ValueError(f"Scenario '{scenario_id}' must define a list of scenes.")

    scenes = [
        _parse_scene(scene_payload, scenario_id=scenario_id, index=index)
        for index, scene_payload in enumerate(raw_scenes)
    ]

    return Scenario(id=scenario_id, title=title, scenes=scenes)


def load_bundle_from_mapping(definition: Mapping[str, Any]) -> ContentBundle:
    """Convert a bundle definition mapping into a :class:`ContentBundle`."""

    if not isinstance(definition, Mapping):
        raise ValueError("Bundle definitions must be objects.")

    bundle_id = definition.get("id")
    if not isinstance(bundle_id, str) or not bundle_id.strip():
        raise ValueError("Bundle definitions require a string 'id'.")

    title = definition.get("title", "")
    if title is None:
        title = ""
    if not isinstance(title, str):
        raise ValueError(f"Bundle '{bundle_id}' must use a string 'title'.")

    raw_ids = _first_present(definition, _SCENARIO_ID_LIST_KEYS)
    if raw_ids is None:
        raw_ids = []
    if not isinstance(raw_ids, list) or not all(
        isinstance(entry, str) for entry in raw_ids
    ):
        raise ValueError(
            f"Bundle '{bundle_id}' must define its scenario ids as a list of strings."
        )

    return ContentBundle(id=bundle_id, scenario_ids=raw_ids, title=title)


def _read_json_object(path: Path) -> Mapping[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        raw_data = json.load(handle)

    if not isinstance(raw_data, Mapping):
        raise ValueError(f"{path.name} must contain an object at the top level.")
    return raw_data


def load_scenario_from_file(path: str | Path) -> Scenario:
    """Load a scenario definition from a JSON file on disk."""

    return load_scenario_from_mapping(_read_json_object(Path(path)))


def load_bundle_from_file(path: str | Path) -> ContentBundle:
    """Load a bundle definition from a JSON file on disk."""

    return load_bundle_from_mapping(_read_json_object(Path(path)))


def default_content_root() -> Path:
    """Return the directory holding the bundled demo content."""

    return Path(str(resources.files("storycompass.data")))


__all__ = [
    "default_content_root",
    "load_bundle_from_file",
    "load_bundle_from_mapping",
    "load_scenario_from_file",
    "load_scenario_from_mapping",
]
