"""Configuration helpers for xlsxmerge runtime files.

Provides the persisted user settings (output naming template, prefix/suffix,
collision policy) stored as YAML in the application home. ``XLSXMERGE_HOME``
(environment or ``.env``) relocates the home directory.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Literal

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from xlsxmerge.core.errors import ConfigError


load_dotenv(override=False)

DEFAULT_TEMPLATE = "merged_%d-%mo-%yyyy"
SETTINGS_FILE = "settings.yaml"

CollisionPolicy = Literal["overwrite", "rename", "abort"]


def app_home() -> Path:
    """Writable base for settings and logs."""
    env = os.getenv("XLSXMERGE_HOME")
    if env:
        return Path(env).expanduser()
    return Path.home() / "XlsxMerge"


def settings_path() -> Path:
    return app_home() / SETTINGS_FILE


class MergeSettings(BaseModel):
    """User preferences remembered between runs."""

    model_config = ConfigDict(extra="ignore")

    template: str = DEFAULT_TEMPLATE
    prefix: str = ""
    suffix: str = ""
    replace_spaces: bool = True
    on_exists: CollisionPolicy = "rename"
    output_dir: str | None = None
    copy_styles: bool = True

    @field_validator("template", mode="before")
    @classmethod
    def _blank_template_uses_default(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_TEMPLATE
        return value

    def resolved_output_dir(self) -> Path:
        if self.output_dir:
            return Path(self.output_dir).expanduser()
        return Path.cwd()


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot read settings file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file must contain a mapping: {path}")
    return data


def load_settings(path: str | Path | None = None) -> MergeSettings:
    """Load settings, falling back to defaults when no file exists yet."""

    target = Path(path) if path else settings_path()
    if not target.exists():
        return MergeSettings()
    data = _load_yaml(target)
    try:
        return MergeSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings in {target}: {exc}") from exc


def save_settings(settings: MergeSettings, path: str | Path | None = None) -> Path:
    target = Path(path) if path else settings_path()
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("w", encoding="utf-8") as handle:
            yaml.safe_dump(settings.model_dump(), handle, sort_keys=False, allow_unicode=True)
    except OSError as exc:
        raise ConfigError(f"Cannot write settings file {target}: {exc}") from exc
    return target


def reset_settings(path: str | Path | None = None) -> MergeSettings:
    """Restore default settings and persist them."""

    defaults = MergeSettings()
    save_settings(defaults, path)
    return defaults


__all__ = [
    "CollisionPolicy",
    "DEFAULT_TEMPLATE",
    "MergeSettings",
    "app_home",
    "load_settings",
    "reset_settings",
    "save_settings",
    "settings_path",
]
