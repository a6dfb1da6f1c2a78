"""
Configuration for batch indexing and the command line.

Usage::

    config = PentacellConfig.from_yaml("pentacell.yaml")
    indexed = index_dataframe(df, config.resolution,
                              lon_col=config.lon_col, lat_col=config.lat_col)

Example YAML::

    resolution: 12
    boundary_segments: 4
    strict: false
    lon_col: lon
    lat_col: lat
    log_level: DEBUG
"""

import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .resolution import validate_resolution

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class PentacellConfig:
    """Settings shared by the CLI and the vectorized helpers."""

    resolution: int = 9
    # None or <= 0 lets cell_to_boundary pick a per-resolution default.
    boundary_segments: Optional[int] = None
    # False turns failing rows into 0 / NaN instead of raising.
    strict: bool = True
    lon_col: str = "longitude"
    lat_col: str = "latitude"
    log_level: str = "INFO"

    def __post_init__(self):
        self.resolution = validate_resolution(self.resolution)
        if self.boundary_segments is not None:
            self.boundary_segments = int(self.boundary_segments)
        self.log_level = str(self.log_level).upper()
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {_LOG_LEVELS}, got {self.log_level!r}")

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "PentacellConfig":
        """Build from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**values)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "PentacellConfig":
        """Load from a YAML file; an empty file gives the defaults."""
        with open(path, encoding="utf-8") as f:
            values = yaml.safe_load(f) or {}
        if not isinstance(values, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        logger.debug(f"Loaded config from {path}")
        return cls.from_dict(values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_yaml(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(self.to_dict(), f, sort_keys=False)
        return path
