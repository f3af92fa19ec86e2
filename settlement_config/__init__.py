"""
settlement_config -- single public entrypoint for settlement configuration.

Responsibility:
    Provides the only way to obtain configuration at runtime through
    ``get_active_config()``. Returns a frozen ``SettlementConfigurationSet``;
    ``settlement_config.bridges`` turns it into a kernel ``SettlementPolicy``.

Architecture position:
    Configuration -- YAML-driven. Sits above ``settlement_kernel`` and beside
    ``settlement_engines``. The kernel MUST NEVER import from
    ``settlement_config``.

Failure modes:
    - ``FileNotFoundError`` -- no configuration set with the requested name.
    - ``ValueError`` -- unknown keys, missing identity, or values the kernel
      policy rejects.
    - ``yaml.YAMLError`` -- malformed YAML.

Audit relevance:
    Every successful ``get_active_config()`` call emits a
    ``SETTLEMENT_CONFIG_TRACE`` log entry with the config_id, version and
    checksum, tying each settlement report to the configuration that
    produced it.
"""

from __future__ import annotations

from pathlib import Path

from settlement_config.bridges import build_settlement_policy
from settlement_config.loader import load_configuration
from settlement_config.schema import SettlementConfigurationSet
from settlement_kernel.logging_config import get_logger

_logger = get_logger("config")

# Default configuration sets directory
_DEFAULT_CONFIG_DIR = Path(__file__).parent / "sets"


def get_active_config(
    name: str = "default",
    config_dir: Path | None = None,
) -> SettlementConfigurationSet:
    """The ONLY public configuration entrypoint.

    Guarantees:
        - The returned set has been parsed and its settlement section
          accepted by ``SettlementPolicy`` validation.
        - A ``SETTLEMENT_CONFIG_TRACE`` log entry is emitted on every
          successful call.

    Args:
        name: Configuration set name (subdirectory holding ``root.yaml``).
        config_dir: Override path to the configuration sets directory.
            Defaults to settlement_config/sets/.

    Raises:
        FileNotFoundError: If the set does not exist.
        ValueError: If configuration validation fails.
    """
    sets_dir = Path(config_dir) if config_dir is not None else _DEFAULT_CONFIG_DIR
    root_file = sets_dir / name / "root.yaml"
    if not root_file.is_file():
        raise FileNotFoundError(f"Configuration set not found: {root_file}")

    config = load_configuration(root_file)

    # Validate by building the kernel policy once
    policy = build_settlement_policy(config)

    _logger.info(
        "SETTLEMENT_CONFIG_TRACE",
        extra={
            "trace_type": "SETTLEMENT_CONFIG_TRACE",
            "config_id": config.config_id,
            "config_version": config.version,
            "checksum": config.checksum,
            "decimal_places": policy.decimal_places,
            "tolerance": str(policy.tolerance),
            "ordering": policy.ordering.value,
        },
    )
    return config


__all__ = [
    "SettlementConfigurationSet",
    "build_settlement_policy",
    "get_active_config",
]
