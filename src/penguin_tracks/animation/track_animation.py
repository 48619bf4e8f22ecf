"""penguin_tracks.animation.track_animation.py

Animate animal GPS tracks over raster layers as a looping GIF.

Each frame shows the tracks up to a frame time. Frame times are spaced
`time_step` apart from the first to the last GPS fix, and the GIF plays at
`fps` frames per second, so one second of animation covers
`fps * time_step` of real time.

By default each frame shows the whole path so far (growing path). With
`trail` set, only the last `trail` of each path is shown.
"""

import logging
from datetime import timedelta
from typing import Sequence

import numpy as np
import polars as pl
from matplotlib import pyplot as plt
from matplotlib.animation import FuncAnimation, PillowWriter

from penguin_tracks.areas.track_plot import TrackPlot, output_path, to_datetime
from penguin_tracks.rasters.rasters import RasterLayer
from penguin_tracks.tracks.tracks import TIME_COL

# pylint:disable=too-many-arguments
# pylint:disable=too-many-positional-arguments
# pylint:disable=too-many-locals

log = logging.getLogger(__name__)


def frame_times(timestamps, time_step: timedelta) -> np.ndarray:
    """evenly spaced frame times covering all timestamps

    The first frame time is the earliest timestamp. Frame times are time_step
    apart, and the last frame time is at or after the latest timestamp.

    Args:
        timestamps (pl.Series|np.ndarray|list): datetimes
        time_step (timedelta): time between frames

    Raises:
        ValueError: time_step is not positive

    Returns:
        np.ndarray: datetime64[us] frame times, empty if there are no timestamps
    """
    if time_step <= timedelta(0):
        raise ValueError(f"time_step must be positive, got {time_step}")

    if isinstance(timestamps, pl.Series):
        timestamps = timestamps.drop_nulls().to_numpy()
    times = np.asarray(timestamps, dtype="datetime64[us]")
    if times.size == 0:
        return np.array([], dtype="datetime64[us]")

    start = times.min()
    end = times.max()
    step = np.timedelta64(time_step).astype("timedelta64[us]")

    n_steps = int(np.ceil((end - start) / step))

    return start + step * np.arange(n_steps + 1)


class TrackAnimation:
    """class to create GIF animations of animal tracks in polar areas"""

    def __init__(self, area: str, area_overrides: dict | None = None, area_file: str | None = None):
        """class initialization

        Args:
            area (str): area name as per penguin_tracks.areas.definitions
            area_overrides (dict|None): dictionary to override area dict definitions
            area_file (str|None): path of an area definition file outside the package
        """
        self.area = area
        self.plotter = TrackPlot(area, area_overrides=area_overrides, area_file=area_file)
        self.thisarea = self.plotter.thisarea

    def animate(
        self,
        tracks: pl.DataFrame,
        rasters: Sequence[RasterLayer] = (),
        output_file: str = "tracks.gif",
        output_dir: str = "",
        time_step: timedelta = timedelta(hours=6),
        fps: float = 10,
        trail: timedelta | None = None,
        dpi: int = 100,
        title: str | None = None,
        colors: dict[str, str] | None = None,
    ) -> str:
        """Animate tracks over raster layers and save as a looping GIF

        Args:
            tracks (pl.DataFrame): track table (id, timestamp, latitude, longitude)
            rasters (Sequence[RasterLayer]): layers to draw under the tracks, bottom first
            output_file (str): GIF file name (.gif is added if missing)
            output_dir (str): directory for output_file, created if needed
            time_step (timedelta): time between frames
            fps (float): frames per second of the GIF
            trail (timedelta|None): None shows the whole path so far, otherwise
                                    only points within trail of the frame time
            dpi (int): resolution of frames
            title (str|None): plot title. None uses the area's long name
            colors (dict[str,str]|None): animal id -> colour. None assigns colours
                                         in sorted id order

        Raises:
            ValueError: fps or time_step not positive

        Returns:
            str: path of the saved GIF
        """
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")

        anim_filename = output_path(output_file, output_dir, (".gif",))

        tracks = self.plotter.project_tracks(tracks)
        if colors is None:
            colors = self.plotter.track_colors(tracks)

        times = frame_times(tracks[TIME_COL], time_step)
        if times.size == 0:
            log.warning("no track points to animate, writing a single frame")
        n_frames = max(times.size, 1)

        log.info(
            "animating %d points for %d animals: %d frames, %s per frame, %s fps",
            tracks.height,
            len(colors),
            n_frames,
            time_step,
            fps,
        )

        fig, ax, dataprj = self.plotter.setup_figure(rasters, title=title)
        self.plotter.draw_legend(ax, colors)

        timestamp_text = ax.text(
            self.thisarea.timestamp_position_xy[0],
            self.thisarea.timestamp_position_xy[1],
            "",
            transform=ax.transAxes,
            fontsize=self.thisarea.timestamp_fontsize,
            bbox={"boxstyle": "round", "facecolor": "white", "alpha": 0.8, "edgecolor": "grey"},
            zorder=40,
        )

        track_artists: list = []

        def func_animation(frame: int) -> list:
            while track_artists:
                track_artists.pop().remove()
            if times.size == 0:
                timestamp_text.set_text("no data")
            else:
                until = times[frame]
                track_artists.extend(
                    self.plotter.draw_tracks(
                        ax, dataprj, tracks, colors, until=until, trail=trail
                    )
                )
                timestamp_text.set_text(to_datetime(until).strftime("%Y-%m-%d %H:%M"))
            return track_artists + [timestamp_text]

        anim = FuncAnimation(
            fig,
            func_animation,
            frames=n_frames,
            interval=1000.0 / fps,
            blit=False,
            repeat=False,
            cache_frame_data=False,
        )

        log.info("Saving animation to %s at %d dpi", anim_filename, dpi)
        # PillowWriter saves GIFs with loop=0 (loop forever)
        anim.save(anim_filename, writer=PillowWriter(fps=fps), dpi=dpi)
        plt.close(fig)

        return anim_filename
