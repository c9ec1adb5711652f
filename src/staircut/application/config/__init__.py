"""Configuration schema and loading for staircase projects.

This package provides JSON-based configuration loading and validation.
It includes Pydantic models for schema validation, a loader with
detailed error reporting, and adapters to domain value objects.

Public API:
    - ProjectConfiguration: Root configuration model
    - StepMeasurementConfig: One step's measurements
    - PlankSpecConfig: A purchasable plank
    - InventoryConfig: Tread and riser catalogs
    - CuttingConstraintsConfig: Saw and rotation settings
    - load_config: Load configuration from a JSON file
    - load_config_from_dict: Load configuration from a dictionary
    - ConfigError: Exception for configuration errors
    - config_to_measurements / config_to_inventory / config_to_constraints:
      Convert configuration to domain value objects
    - merge_constraints_with_cli: Apply command-line overrides

Example:
    >>> from pathlib import Path
    >>> from staircut.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("staircase.json"))
    ...     print(f"{len(config.measurements)} steps")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from staircut.application.config.adapter import (
    config_to_constraints,
    config_to_inventory,
    config_to_measurements,
    merge_constraints_with_cli,
)
from staircut.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from staircut.application.config.schema import (
    SUPPORTED_VERSIONS,
    CuttingConstraintsConfig,
    InventoryConfig,
    PlankSpecConfig,
    ProjectConfiguration,
    StepMeasurementConfig,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "ConfigError",
    "CuttingConstraintsConfig",
    "InventoryConfig",
    "PlankSpecConfig",
    "ProjectConfiguration",
    "StepMeasurementConfig",
    "config_to_constraints",
    "config_to_inventory",
    "config_to_measurements",
    "load_config",
    "load_config_from_dict",
    "merge_constraints_with_cli",
]
