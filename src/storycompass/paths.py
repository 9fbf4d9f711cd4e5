"""Enumerate every playthrough of a scenario with its cumulative axis scores."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Set

from .models import Branch, Scenario, Scene

AxisScores = Dict[str, float]


@dataclass
class _Frame:
    """Pending unit of work on the traversal stack.

    A frame without ``scene_id`` holds a completed path waiting to be emitted.
    """

    scene_id: str | None
    scores: AxisScores
    visited: Set[str]


def _apply_branch(scores: AxisScores, branch: Branch) -> AxisScores:
    """Return a copy of ``scores`` with the branch's compass change applied."""

    branch_scores = dict(scores)
    change = branch.compass_change
    if change is not None:
        key = change.axis_key
        branch_scores[key] = branch_scores.get(key, 0.0) + change.delta
    return branch_scores


def _resolve(scenes: Mapping[str, Scene], scene_id: str | None) -> str | None:
    if scene_id is not None and scene_id in scenes:
        return scene_id
    return None


def enumerate_scenario_paths(scenario: Scenario) -> List[AxisScores]:
    """Return the cumulative axis scores of every completed path in ``scenario``.

    Traversal starts at the first defined scene and walks depth-first using an
    explicit stack. Each branch of a choice scene works on its own copy of the
    scores and of the visited set, so siblings never observe each other's
    deltas while a single path still cannot pass through the same scene twice.
    Reaching a scene that is already on the current path abandons that path
    without emitting it. A successor id that names no scene in the scenario
    ends the path. Paths that end without touching any axis are not emitted.

    Keys of the returned mappings are normalised axis names (see
    :func:`~storycompass.models.normalise_axis`). Paths are returned in the
    order a recursive depth-first walk would find them.
    """

    first_scene = scenario.first_scene
    if first_scene is None:
        return []

    scenes = scenario.scene_index
    paths: List[AxisScores] = []
    stack: List[_Frame] = [_Frame(first_scene.id, {}, set())]

    while stack:
        frame = stack.pop()
        if frame.scene_id is None:
            paths.append(frame.scores)
            continue

        if frame.scene_id in frame.visited:
            continue
        frame.visited.add(frame.scene_id)
        scene = scenes[frame.scene_id]

        if scene.has_branches:
            forks: List[_Frame] = []
            for branch in scene.branches:
                branch_scores = _apply_branch(frame.scores, branch)
                target = _resolve(scenes, branch.next_scene_id)
                if target is not None:
                    forks.append(_Frame(target, branch_scores, set(frame.visited)))
                elif branch_scores:
                    forks.append(_Frame(None, branch_scores, frame.visited))
            # LIFO: push in reverse so the first branch is explored first.
            stack.extend(reversed(forks))
            continue

        target = _resolve(scenes, scene.next_scene_id)
        if target is not None:
            stack.append(_Frame(target, frame.scores, frame.visited))
        elif frame.scores:
            paths.append(dict(frame.scores))

    return paths


def count_scenario_paths(scenario: Scenario) -> int:
    """Return how many scored paths :func:`enumerate_scenario_paths` finds."""

    return len(enumerate_scenario_paths(scenario))


def scenario_axis_labels(scenario: Scenario) -> Dict[str, str]:
    """Map each normalised axis key to its first spelling in ``scenario``.

    Scenes and branches are scanned in definition order.
    """

    labels: Dict[str, str] = {}
    for scene in scenario.scenes:
        for branch in scene.branches:
            change = branch.compass_change
            if change is not None:
                labels.setdefault(change.axis_key, change.axis)
    return labels


__all__ = [
    "AxisScores",
    "count_scenario_paths",
    "enumerate_scenario_paths",
    "scenario_axis_labels",
]
