"""penguin_tracks.animation

# Track animations

`track_animation.py` contains the TrackAnimation class, which draws the same
map layers as `penguin_tracks.areas.track_plot.TrackPlot` and then steps
through time, saving each frame to a looping GIF with matplotlib's
FuncAnimation and PillowWriter.

```
from datetime import timedelta
from penguin_tracks.animation.track_animation import TrackAnimation

TrackAnimation("ross_sea").animate(
    tracks, rasters=layers, output_file="tracks.gif", time_step=timedelta(hours=6), fps=10
)
```
"""
