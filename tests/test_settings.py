"""Unit tests for persisted settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from xlsxmerge.config import (
    DEFAULT_TEMPLATE,
    MergeSettings,
    load_settings,
    reset_settings,
    save_settings,
    settings_path,
)
from xlsxmerge.core.errors import ConfigError


def test_defaults_when_no_file(tmp_path: Path) -> None:
    settings = load_settings(tmp_path / "missing.yaml")

    assert settings.template == DEFAULT_TEMPLATE
    assert settings.replace_spaces is True
    assert settings.on_exists == "rename"
    assert settings.resolved_output_dir() == Path.cwd()


def test_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "settings.yaml"
    saved = MergeSettings(template="report_%yyyy", prefix="Q_", on_exists="abort", output_dir=str(tmp_path))

    save_settings(saved, path)

    assert load_settings(path) == saved


def test_default_location_follows_home(_isolated_home: Path) -> None:
    save_settings(MergeSettings(prefix="x_"))

    assert settings_path() == _isolated_home / "settings.yaml"
    assert load_settings().prefix == "x_"


def test_blank_template_restores_default(tmp_path: Path) -> None:
    path = tmp_path / "settings.yaml"
    path.write_text("template: '   '\n", encoding="utf-8")

    assert load_settings(path).template == DEFAULT_TEMPLATE


def test_unknown_keys_are_ignored(tmp_path: Path) -> None:
    path = tmp_path / "settings.yaml"
    path.write_text("suffix: _v2\nlegacy_option: 1\n", encoding="utf-8")

    assert load_settings(path).suffix == "_v2"


@pytest.mark.parametrize(
    "payload",
    [
        "template: [unclosed\n",
        "- just\n- a list\n",
        "on_exists: replace-everything\n",
    ],
)
def test_invalid_settings_raise_config_error(tmp_path: Path, payload: str) -> None:
    path = tmp_path / "settings.yaml"
    path.write_text(payload, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_settings(path)


def test_reset_restores_defaults(tmp_path: Path) -> None:
    path = tmp_path / "settings.yaml"
    save_settings(MergeSettings(prefix="custom_", replace_spaces=False), path)

    restored = reset_settings(path)

    assert restored == MergeSettings()
    assert load_settings(path) == MergeSettings()
