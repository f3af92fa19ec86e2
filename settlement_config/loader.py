"""
Configuration Loader (``settlement_config.loader``).

Responsibility
--------------
Loads a configuration set's ``root.yaml`` and parses it into the frozen
``settlement_config.schema`` dataclasses. Runtime callers go through
``settlement_config.get_active_config()`` instead of calling this.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing ``config_id`` / ``version`` or unknown keys -> ``ValueError``.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from settlement_config.schema import (
    GroupDefaults,
    SettlementConfigurationSet,
    SettlementSection,
)


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the top level is not a mapping.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top level must be a mapping, got {type(data).__name__}")
    return data


def _parse_section(cls: type, data: dict[str, Any] | None, section: str):
    data = data or {}
    if not isinstance(data, dict):
        raise ValueError(f"'{section}' must be a mapping")
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown keys in '{section}': {', '.join(unknown)}")
    # tolerance is kept as text so "0.01" never passes through float
    values = {k: str(v) if k == "tolerance" else v for k, v in data.items()}
    return cls(**values)


def parse_configuration(data: dict[str, Any]) -> SettlementConfigurationSet:
    """
    Parse a root.yaml mapping into a SettlementConfigurationSet.

    Raises:
        ValueError: on missing identity fields or unknown keys.
    """
    if "config_id" not in data:
        raise ValueError("Configuration is missing 'config_id'")
    if "version" not in data:
        raise ValueError("Configuration is missing 'version'")

    return SettlementConfigurationSet(
        config_id=str(data["config_id"]),
        version=int(data["version"]),
        settlement=_parse_section(SettlementSection, data.get("settlement"), "settlement"),
        group=_parse_section(GroupDefaults, data.get("group"), "group"),
        checksum=compute_checksum(data),
    )


def load_configuration(path: Path) -> SettlementConfigurationSet:
    """Load and parse a root.yaml file."""
    return parse_configuration(load_yaml_file(path))


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
