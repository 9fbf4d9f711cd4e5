"""Read-only branch model describing scenarios, scenes and their choices."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Sequence


def _validate_text(value: str, *, field_name: str) -> str:
    """Validate and normalise identifier-like text fields."""

    if not isinstance(value, str):
        raise TypeError(f"{field_name} must be a string, got {type(value)!r}")

    stripped = value.strip()
    if not stripped:
        raise ValueError(f"{field_name} must be a non-empty string")

    return stripped


def _optional_text(value: str | None, *, field_name: str) -> str | None:
    """Return ``None`` for missing or blank values, otherwise the stripped text."""

    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"{field_name} must be a string, got {type(value)!r}")

    stripped = value.strip()
    return stripped or None


def normalise_axis(axis: str) -> str:
    """Return the case-insensitive lookup key for a compass axis name."""

    return _validate_text(axis, field_name="axis").casefold()


@dataclass(frozen=True)
class CompassChange:
    """Signed adjustment applied to one compass axis when a branch is taken."""

    axis: str
    delta: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "axis", _validate_text(self.axis, field_name="axis"))

        if isinstance(self.delta, bool) or not isinstance(self.delta, (int, float)):
            raise TypeError(f"delta must be a number, got {type(self.delta)!r}")
        object.__setattr__(self, "delta", float(self.delta))

    @property
    def axis_key(self) -> str:
        """Return the normalised key used to accumulate this axis."""

        return normalise_axis(self.axis)


@dataclass(frozen=True)
class Branch:
    """A choice edge leaving a scene.

    A branch without ``next_scene_id`` ends the narrative.
    """

    next_scene_id: str | None = None
    compass_change: CompassChange | None = None
    choice: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "next_scene_id",
            _optional_text(self.next_scene_id, field_name="next_scene_id"),
        )
        object.__setattr__(
            self, "choice", _optional_text(self.choice, field_name="choice")
        )
        if self.compass_change is not None and not isinstance(
            self.compass_change, CompassChange
        ):
            raise TypeError("compass_change must be a CompassChange instance")

    @property
    def is_ending(self) -> bool:
        """Return ``True`` when taking this branch ends the story."""

        return self.next_scene_id is None


@dataclass(frozen=True)
class Scene:
    """A node in a scenario's narrative graph."""

    id: str
    next_scene_id: str | None = None
    branches: Sequence[Branch] = field(default_factory=tuple)
    title: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "id", _validate_text(self.id, field_name="scene id"))
        object.__setattr__(
            self,
            "next_scene_id",
            _optional_text(self.next_scene_id, field_name="next_scene_id"),
        )
        object.__setattr__(
            self, "title", _optional_text(self.title, field_name="scene title")
        )

        branches = tuple(self.branches)
        for branch in branches:
            if not isinstance(branch, Branch):
                raise TypeError(f"Scene '{self.id}' branches must be Branch instances")
        object.__setattr__(self, "branches", branches)

    @property
    def has_branches(self) -> bool:
        """Return ``True`` for choice scenes."""

        return bool(self.branches)


@dataclass(frozen=True)
class Scenario:
    """A branching narrative unit composed of scenes in definition order."""

    id: str
    title: str
    scenes: Sequence[Scene] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "id", _validate_text(self.id, field_name="scenario id")
        )
        if not isinstance(self.title, str):
            raise TypeError(f"title must be a string, got {type(self.title)!r}")
        object.__setattr__(self, "title", self.title.strip())

        scenes = tuple(self.scenes)
        seen_ids: set[str] = set()
        for scene in scenes:
            if not isinstance(scene, Scene):
                raise TypeError(
                    f"Scenario '{self.id}' scenes must be Scene instances"
                )
            if scene.id in seen_ids:
                raise ValueError(
                    f"Scenario '{self.id}' defines duplicate scene id '{scene.id}'."
                )
            seen_ids.add(scene.id)
        object.__setattr__(self, "scenes", scenes)

    @property
    def first_scene(self) -> Scene | None:
        """Return the scene traversal starts from, if any."""

        return self.scenes[0] if self.scenes else None

    @property
    def scene_index(self) -> Mapping[str, Scene]:
        """Return a read-only mapping of scene id to scene."""

        return MappingProxyType({scene.id: scene for scene in self.scenes})


@dataclass(frozen=True)
class ContentBundle:
    """A published collection of scenarios scored together."""

    id: str
    scenario_ids: Sequence[str] = field(default_factory=tuple)
    title: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "id", _validate_text(self.id, field_name="bundle id"))
        object.__setattr__(
            self,
            "scenario_ids",
            tuple(
                _validate_text(scenario_id, field_name="scenario id")
                for scenario_id in self.scenario_ids
            ),
        )
        if not isinstance(self.title, str):
            raise TypeError(f"title must be a string, got {type(self.title)!r}")
        object.__setattr__(self, "title", self.title.strip())


__all__ = [
    "Branch",
    "CompassChange",
    "ContentBundle",
    "Scenario",
    "Scene",
    "normalise_axis",
]
