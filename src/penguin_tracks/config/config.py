"""
penguin_tracks.config.config

Run configuration for the penguin track plotting pipeline.

Supports two configuration methods (which can be combined):
1. YAML configuration file
    - see penguin_tracks/config/definitions/emperor_penguins.yml for the default
2. Direct keyword arguments to `load_config()`, which override YAML values
"""

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, List, Optional

import yaml  # type: ignore[import-untyped]

log = logging.getLogger(__name__)

DEFINITIONS_DIR = Path(__file__).parent / "definitions"
DEFAULT_CONFIG_FILE = DEFINITIONS_DIR / "emperor_penguins.yml"


# pylint: disable=R0902 # Too many instance attributes
@dataclass
class TrackConfig:
    """
    List of possible configuration parameters for a track plotting run.
    These can be set in a YAML file or passed as keyword arguments to load_config().
    """

    # Input files
    tracks_file: Optional[str] = None  # delimited GPS file
    bathymetry_file: Optional[str] = None  # GeoTIFF, drawn first
    ice_file: Optional[str] = None  # GeoTIFF, drawn over the bathymetry
    # GPS file layout
    id_column: str = "id"
    time_column: str = "timestamp"
    latitude_column: str = "latitude"
    longitude_column: str = "longitude"
    separator: str = ","
    time_format: Optional[str] = None  # strftime format, or None to infer
    # Track filtering
    exclude_ids: List[str] = field(default_factory=list)  # animals dropped from all plots
    min_points: int = 2  # animals with fewer records are dropped
    # Map
    area: str = "ross_sea"  # area definition name, see penguin_tracks.areas.definitions
    title: Optional[str] = None
    bathymetry_alpha: float = 1.0
    ice_alpha: float = 0.8
    # Outputs
    output_dir: str = "."
    static_file: str = "penguin_tracks.jpg"
    animation_file: str = "penguin_tracks.gif"
    log_dir: Optional[str] = None  # None: no log files, only stdout
    dpi: int = 150
    # Animation
    make_animation: bool = True
    fps: int = 10
    time_step_hours: float = 6.0  # model time between frames
    trail_hours: Optional[float] = None  # None: growing path, else trailing window
    animation_dpi: int = 100


def config_keys() -> list[str]:
    """return the names of all supported configuration parameters"""
    return [f.name for f in fields(TrackConfig)]


def read_yaml_config(yaml_file: str | Path) -> dict[str, Any]:
    """Load configuration dict from YAML file.

    Args:
        yaml_file (str | Path): Path to the YAML configuration file.

    Raises:
        FileNotFoundError: If the YAML configuration file is not found.
        ValueError: If the file does not contain a YAML mapping.

    Returns:
        dict[str, Any]: The loaded configuration.
    """
    if isinstance(yaml_file, str):
        yaml_file = Path(yaml_file)

    if not yaml_file.is_file():
        raise FileNotFoundError(f"YAML config file not found: {yaml_file}")

    with open(yaml_file, "r", encoding="utf-8") as f:
        result = yaml.safe_load(f)

    if result is None:
        return {}
    if not isinstance(result, dict):
        raise ValueError(f"YAML config file {yaml_file} does not contain a mapping")
    return result


def load_config(yaml_file: str | Path | None = None, **overrides: Any) -> TrackConfig:
    """Build a TrackConfig from an optional YAML file and keyword overrides.

    Overrides with a value of None are ignored, so unset command line
    arguments can be passed straight through.

    Args:
        yaml_file (str|Path|None): YAML file to load. Defaults to None (dataclass defaults).
        **overrides: parameter values that replace YAML values

    Raises:
        ValueError: for unknown configuration parameters

    Returns:
        TrackConfig: the run configuration
    """
    config_dict: dict[str, Any] = {}
    if yaml_file is not None:
        log.info("loading config from %s", yaml_file)
        config_dict.update(read_yaml_config(yaml_file))

    config_dict.update({k: v for k, v in overrides.items() if v is not None})

    unknown = sorted(set(config_dict) - set(config_keys()))
    if unknown:
        log.error("unknown configuration parameters: %s", unknown)
        raise ValueError(f"unknown configuration parameters: {unknown}")

    if "exclude_ids" in config_dict:
        config_dict["exclude_ids"] = [str(i) for i in config_dict["exclude_ids"] or []]

    return TrackConfig(**config_dict)
