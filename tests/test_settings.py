"""Tests for environment-driven settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from storycompass.settings import (
    DEFAULT_PERCENTILES,
    BadgeScoreSettings,
    parse_percentile_list,
)


def test_defaults_when_environment_is_empty() -> None:
    settings = BadgeScoreSettings.from_env({})

    assert settings == BadgeScoreSettings()
    assert settings.content_root is None
    assert settings.default_percentiles == DEFAULT_PERCENTILES
    assert settings.max_workers == 1
    assert settings.log_level == "WARNING"


def test_values_are_read_from_environment() -> None:
    settings = BadgeScoreSettings.from_env(
        {
            "STORYCOMPASS_CONTENT_ROOT": " /srv/content ",
            "STORYCOMPASS_DEFAULT_PERCENTILES": "10, 50 ,99.5",
            "STORYCOMPASS_MAX_WORKERS": "4",
            "STORYCOMPASS_LOG_LEVEL": "debug",
        }
    )

    assert settings.content_root == Path("/srv/content")
    assert settings.default_percentiles == (10.0, 50.0, 99.5)
    assert settings.max_workers == 4
    assert settings.log_level == "DEBUG"


def test_blank_values_are_treated_as_unset() -> None:
    settings = BadgeScoreSettings.from_env(
        {
            "STORYCOMPASS_CONTENT_ROOT": "  ",
            "STORYCOMPASS_DEFAULT_PERCENTILES": "",
            "STORYCOMPASS_MAX_WORKERS": " ",
            "STORYCOMPASS_LOG_LEVEL": "",
        }
    )

    assert settings == BadgeScoreSettings()


def test_content_root_expands_user(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))

    settings = BadgeScoreSettings.from_env({"STORYCOMPASS_CONTENT_ROOT": "~/content"})

    assert settings.content_root == tmp_path / "content"


@pytest.mark.parametrize(
    ("environ", "message"),
    [
        ({"STORYCOMPASS_MAX_WORKERS": "many"}, "positive integer"),
        ({"STORYCOMPASS_MAX_WORKERS": "0"}, "greater than zero"),
        ({"STORYCOMPASS_DEFAULT_PERCENTILES": "50,abc"}, "not a number"),
        ({"STORYCOMPASS_DEFAULT_PERCENTILES": "101"}, "between 0 and 100"),
        ({"STORYCOMPASS_LOG_LEVEL": "chatty"}, "must be one of"),
    ],
)
def test_invalid_values_raise(environ: dict[str, str], message: str) -> None:
    with pytest.raises(ValueError, match=message):
        BadgeScoreSettings.from_env(environ)


def test_parse_percentile_list_requires_values() -> None:
    with pytest.raises(ValueError):
        parse_percentile_list(" , ")
