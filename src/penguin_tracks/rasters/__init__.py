"""penguin_tracks.rasters

# Raster map layers

`rasters.py` reads georeferenced images (GeoTIFF, single band or RGB/RGBA)
with rasterio and crops them to a region of interest, returning
`RasterLayer` objects that `penguin_tracks.areas.track_plot.TrackPlot`
stacks under the penguin tracks.

Typical layers are an IBCSO bathymetry image and a sea ice surface image,
drawn in that order.
"""
