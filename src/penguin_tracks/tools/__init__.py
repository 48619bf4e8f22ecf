"""
# Tools

The following command line tools are available:

## plot_penguin_tracks.py

Plot animal GPS tracks over bathymetry and sea ice rasters on a selectable
polar map, as a static image and a looping GIF animation. Installed as the
`plot_penguin_tracks` command.

Further details at `penguin_tracks.tools.plot_penguin_tracks`
"""
