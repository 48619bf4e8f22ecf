"""
Plot animal GPS tracks (emperor penguins foraging from the Cape Washington
colony in the Ross Sea) over bathymetry and sea ice raster maps, as a static
image and a looping GIF animation.

# Installation

```
pip install -e .[test]
```

This installs the `penguin_tracks` package and the `plot_penguin_tracks`
command.

# Quick Start

Edit the input file paths in
`src/penguin_tracks/config/definitions/emperor_penguins.yml` (or copy it), then:

```
plot_penguin_tracks -c emperor_penguins.yml
```

writes `penguin_tracks.jpg` and `penguin_tracks.gif` to the configured
`output_dir`.

# Processing Steps

| Step | Module |
|---|---|
| load GPS points, drop excluded animals and animals with too little data | `penguin_tracks.tracks.tracks` |
| read bathymetry and sea ice GeoTIFFs, cropped to the map area | `penguin_tracks.rasters.rasters` |
| reproject track points to the map projection | `penguin_tracks.tracks.tracks`, `penguin_tracks.areas.areas` |
| draw rasters, tracks and legend and save the image | `penguin_tracks.areas.track_plot` |
| step through time and save a GIF | `penguin_tracks.animation.track_animation` |

# Tool List

| Tool | Purpose |
|---|---|
| plot_penguin_tracks.py | plot GPS tracks over rasters as an image and an animation |

# Test Development

Each module has an associated pytest unit or integration test in a
**tests/** directory inside the module directory. ie:

```
mymodule.py
tests/test_mymodule.py
```

Test data (GeoTIFFs and GPS files) are generated in temporary directories by
the fixtures in `conftest.py`. If a test needs data outside the repository,
include the following at the top of the test code:

`pytestmark = pytest.mark.requires_external_data`

and run the remaining tests with `pytest -m "not requires_external_data"`.
"""
