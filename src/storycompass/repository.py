"""Content lookups consumed by the badge scoring engine."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, List

from .loaders import load_bundle_from_file, load_scenario_from_file
from .models import ContentBundle, Scenario


class ContentRepository(ABC):
    """Interface describing where bundles and scenarios are loaded from."""

    @abstractmethod
    def get_bundle_by_id(self, bundle_id: str) -> ContentBundle | None:
        """Return the bundle with ``bundle_id`` or ``None`` when it is unknown."""

    @abstractmethod
    def get_scenario_by_id(self, scenario_id: str) -> Scenario | None:
        """Return the scenario with ``scenario_id`` or ``None`` when it is unknown."""


class InMemoryContentRepository(ContentRepository):
    """Keep bundles and scenarios in local process memory."""

    def __init__(
        self,
        *,
        bundles: Iterable[ContentBundle] = (),
        scenarios: Iterable[Scenario] = (),
    ) -> None:
        self._bundles: Dict[str, ContentBundle] = {}
        self._scenarios: Dict[str, Scenario] = {}
        for bundle in bundles:
            self.add_bundle(bundle)
        for scenario in scenarios:
            self.add_scenario(scenario)

    def add_bundle(self, bundle: ContentBundle) -> None:
        self._bundles[bundle.id] = bundle

    def add_scenario(self, scenario: Scenario) -> None:
        self._scenarios[scenario.id] = scenario

    def get_bundle_by_id(self, bundle_id: str) -> ContentBundle | None:
        return self._bundles.get(_validate_content_id(bundle_id))

    def get_scenario_by_id(self, scenario_id: str) -> Scenario | None:
        return self._scenarios.get(_validate_content_id(scenario_id))

    def list_bundles(self) -> List[str]:
        return sorted(self._bundles.keys())


class FileContentRepository(ContentRepository):
    """Read bundles and scenarios from a directory of JSON files.

    The directory holds ``bundles/<id>.json`` and ``scenarios/<id>.json``.
    Files are read on every lookup so edits are picked up without restarting.
    """

    def __init__(self, content_root: Path) -> None:
        self.content_root = Path(content_root)

    @property
    def bundle_dir(self) -> Path:
        return self.content_root / "bundles"

    @property
    def scenario_dir(self) -> Path:
        return self.content_root / "scenarios"

    def get_bundle_by_id(self, bundle_id: str) -> ContentBundle | None:
        bundle_file = self._content_path(self.bundle_dir, bundle_id)
        if bundle_file is None or not bundle_file.is_file():
            return None
        return load_bundle_from_file(bundle_file)

    def get_scenario_by_id(self, scenario_id: str) -> Scenario | None:
        scenario_file = self._content_path(self.scenario_dir, scenario_id)
        if scenario_file is None or not scenario_file.is_file():
            return None
        return load_scenario_from_file(scenario_file)

    def list_bundles(self) -> List[str]:
        if not self.bundle_dir.is_dir():
            return []
        return sorted(
            bundle_path.stem
            for bundle_path in self.bundle_dir.glob("*.json")
            if bundle_path.is_file()
        )

    @staticmethod
    def _content_path(directory: Path, content_id: str) -> Path | None:
        validated = _validate_content_id(content_id)
        # Ids that would leave the directory cannot name a stored file.
        if "/" in validated or "\\" in validated or validated in {".", ".."}:
            return None
        return directory / f"{validated}.json"


def _validate_content_id(content_id: str) -> str:
    if not isinstance(content_id, str):
        raise TypeError("content id must be a string")
    stripped = content_id.strip()
    if not stripped:
        raise ValueError("content id must be a non-empty string")
    return stripped


__all__ = [
    "ContentRepository",
    "FileContentRepository",
    "InMemoryContentRepository",
]
