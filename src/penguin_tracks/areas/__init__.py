"""penguin_tracks.areas

# Area Definitions and TrackPlot class

## definitions

contain standard area definition files used by the TrackPlot and TrackAnimation
classes and the plot_penguin_tracks.py tool. Each area definition is stored in a
separate <area_name>.py file holding an `area_definition` dict. A definition can
inherit all the settings of another with `"use_definitions_from": "<other_area>"`
and then only set what differs.

| area | |
|---|---|
| antarctica | circular map of Antarctica to 60S |
| ross_sea | 800 x 800 km of the western Ross Sea |
| cape_washington | 200 x 200 km around the Cape Washington colony |

## areas.py

contains code to handle the area definitions (`Area`), and the `BoundingBox`
class used for projected extents.

## track_plot.py

contains the TrackPlot class. The main external function of the TrackPlot class
is **plot_tracks()**:

`penguin_tracks.areas.track_plot.TrackPlot.plot_tracks`

## Example : plot tracks over bathymetry and sea ice

```
from penguin_tracks.areas.track_plot import TrackPlot
from penguin_tracks.rasters.rasters import load_rasters
from penguin_tracks.tracks.tracks import load_tracks

tracks = load_tracks("emperor_penguin_gps.csv", exclude_ids=["EP07", "EP13"])

thisplot = TrackPlot("ross_sea")
layers = load_rasters(
    ["ibcso_bathymetry.tif", "sea_ice.tif"],
    bounds=thisplot.thisarea.xy_extent(),
    bounds_crs=thisplot.thisarea.crs_bng,
    alphas=[1.0, 0.8],
)
thisplot.plot_tracks(tracks, rasters=layers, output_file="tracks.jpg")
```
"""
