# src/mockcloud/core/config.py
"""Configuration schema and loading for mockcloud containers.

Settings are frozen pydantic models; YAML layers are merged before validation.
Configuration precedence: overrides > YAML file > preset > defaults.
Presets are YAML files shipped in the ``mockcloud/presets`` directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from mockcloud.contracts.enums import FaultCode

DEFAULT_CONTAINER_IDENTIFIER = "MockContainer"
DEFAULT_MAX_RESULTS_LIMIT = 50


class FaultSettings(BaseModel):
    """Faults applied to a container when it is built."""

    model_config = {"frozen": True, "extra": "forbid"}

    whole_operation_error: FaultCode | None = Field(
        default=None,
        description="Fault code every operation fails with (modify/fetch/query)",
    )
    failing_record_names: list[str] = Field(
        default_factory=list,
        description="Record names whose individual saves, deletes and fetches fail",
    )

    @field_validator("whole_operation_error", mode="before")
    @classmethod
    def parse_fault_code(cls, v: Any) -> Any:
        """Accept code names (``network_failure``) as well as integers."""
        if isinstance(v, str) and not v.isdigit():
            try:
                return FaultCode[v.upper()]
            except KeyError:
                raise ValueError(f"Unknown fault code name: {v!r}") from None
        return v


class MockCloudSettings(BaseModel):
    """Top-level container configuration."""

    model_config = {"frozen": True, "extra": "forbid"}

    container_identifier: str = Field(
        default=DEFAULT_CONTAINER_IDENTIFIER,
        min_length=1,
        description="Identifier reported by the container",
    )
    max_results_limit: int = Field(
        default=DEFAULT_MAX_RESULTS_LIMIT,
        gt=0,
        description="Cap applied to query result limits; a limit of 0 means this cap",
    )
    seed: int | None = Field(
        default=None,
        description="Seed for the engine's random source (fault codes, progress fractions)",
    )
    faults: FaultSettings = Field(
        default_factory=FaultSettings,
        description="Faults configured at construction",
    )
    preset_name: str | None = Field(
        default=None,
        description="Preset these settings were layered on, if any",
    )


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Layer ``override`` on ``base``; nested mappings merge, anything else replaces.

    Returns a new dict; neither input is mutated.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        merged[key] = deep_merge(current, value) if isinstance(current, dict) and isinstance(value, dict) else value
    return merged


def _get_presets_dir() -> Path:
    return Path(__file__).parent.parent / "presets"


def _read_mapping(path: Path, label: str) -> dict[str, Any]:
    """Parse a YAML file that must hold a mapping; an empty file is an empty mapping."""
    with path.open() as f:
        loaded = yaml.safe_load(f)
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ValueError(f"{label} must be a YAML mapping, got {type(loaded).__name__}")
    return loaded


def list_presets(presets_dir: Path | None = None) -> list[str]:
    """Names of the shipped presets (or those in ``presets_dir``), sorted."""
    directory = presets_dir or _get_presets_dir()
    if not directory.is_dir():
        return []
    return sorted(path.stem for path in directory.glob("*.yaml"))


def load_preset(preset_name: str, presets_dir: Path | None = None) -> dict[str, Any]:
    """Raw mapping of one preset.

    Raises:
        FileNotFoundError: If no preset has that name; the message lists the available ones
        ValueError: If the preset file does not hold a mapping
        yaml.YAMLError: If the preset file is not valid YAML
    """
    directory = presets_dir or _get_presets_dir()
    path = directory / f"{preset_name}.yaml"
    if not path.is_file():
        raise FileNotFoundError(f"Unknown preset {preset_name!r}. Available presets: {list_presets(directory)}")
    return _read_mapping(path, f"Preset {preset_name!r}")


def load_settings(
    preset: str | None = None,
    config_file: Path | None = None,
    overrides: dict[str, Any] | None = None,
    *,
    presets_dir: Path | None = None,
) -> MockCloudSettings:
    """Build settings from up to three layers over the model defaults.

    Later layers win: ``preset``, then ``config_file``, then ``overrides``
    (typically the keyword arguments of a ``mockcloud`` pytest marker).

    Raises:
        FileNotFoundError: If the preset or the config file does not exist
        ValueError: If a YAML layer is not a mapping
        pydantic.ValidationError: If the merged layers do not validate
    """
    layers: list[dict[str, Any]] = []
    if preset is not None:
        layers.append(load_preset(preset, presets_dir))
    if config_file is not None:
        if not config_file.is_file():
            raise FileNotFoundError(f"Config file not found: {config_file}")
        layers.append(_read_mapping(config_file, f"Config file {str(config_file)!r}"))
    if overrides:
        layers.append(overrides)

    merged: dict[str, Any] = {}
    for layer in layers:
        merged = deep_merge(merged, layer)
    merged["preset_name"] = preset
    return MockCloudSettings.model_validate(merged)
