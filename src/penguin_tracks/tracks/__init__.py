"""penguin_tracks.tracks

# GPS track loading

`tracks.py` reads delimited GPS files into polars track tables, drops
excluded animals and animals with too few fixes, assigns each animal a
colour (sorted by identifier) and reprojects the points into a raster's CRS.
"""
