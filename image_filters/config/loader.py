"""YAML configuration loading for the image filter tools."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Dict, Mapping, MutableMapping, Optional, Union

import yaml

PathLike = Union[str, Path]

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "config.yaml"


def _merge_dicts(base: MutableMapping[str, Any], overrides: Mapping[str, Any]) -> None:
    """Recursively merge ``overrides`` into ``base`` in-place."""
    for key, value in overrides.items():
        current = base.get(key)
        if isinstance(current, MutableMapping) and isinstance(value, Mapping):
            _merge_dicts(current, value)
        else:
            base[key] = copy.deepcopy(value)


def load_config(
    path: Optional[PathLike] = None, *, overrides: Optional[Mapping[str, Any]] = None
) -> Dict[str, Any]:
    """Read the YAML config at ``path`` (default: the bundled file) and apply overrides."""
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    with config_path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration root must be a mapping: {config_path}")
    if overrides:
        _merge_dicts(data, overrides)
    return data


def get_section(config: Mapping[str, Any], section: str, default: Optional[Any] = None) -> Any:
    """Return a deep copy of ``config[section]``, or ``default`` when missing or null."""
    value = config.get(section)
    if value is None:
        value = {} if default is None else default
    return copy.deepcopy(value)


__all__ = ["load_config", "get_section", "DEFAULT_CONFIG_PATH"]
