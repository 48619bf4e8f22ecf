"""penguin_tracks.config

# Run configuration

`config.py` provides the `TrackConfig` dataclass and `load_config()`, which
reads a YAML file from `definitions/` (or anywhere else) and applies keyword overrides.
"""
