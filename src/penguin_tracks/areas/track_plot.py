"""penguin_tracks.areas.track_plot.py
class to plot animal GPS tracks over raster layers in areas defined in
penguin_tracks.areas.definitions

Layers are drawn in this order (bottom to top):

- area background colour
- raster layers, in the order given (eg bathymetry then sea ice)
- coastlines, grid lines and scale bar (if enabled for the area)
- tracks: one line and set of points per animal, coloured by sorted id
- legend and title
"""

import logging
import os
from datetime import datetime, timedelta
from typing import Sequence

import cartopy.crs as ccrs  # type: ignore
import matplotlib.path as mpath
import numpy as np
import polars as pl
from cartopy.mpl.geoaxes import GeoAxes  # type: ignore
from matplotlib import pyplot as plt
from matplotlib.figure import Figure
from matplotlib.lines import Line2D

from penguin_tracks.areas.areas import Area
from penguin_tracks.rasters.rasters import RasterLayer
from penguin_tracks.tracks.tracks import (
    ID_COL,
    TIME_COL,
    assign_track_colors,
    reproject_tracks,
    track_ids,
)

# pylint:disable=too-many-arguments
# pylint:disable=too-many-positional-arguments
# pylint:disable=too-many-locals

log = logging.getLogger(__name__)

SUPPORTED_IMAGE_TYPES = (".jpg", ".jpeg", ".png")


def to_datetime(value) -> datetime:
    """convert a numpy datetime64 (or datetime) to a datetime.datetime"""
    if isinstance(value, np.datetime64):
        return value.astype("datetime64[us]").item()
    return value


def select_track_points(
    tracks: pl.DataFrame,
    until: datetime | np.datetime64 | None = None,
    trail: timedelta | None = None,
) -> pl.DataFrame:
    """select the track points visible at a given time

    Args:
        tracks (pl.DataFrame): track table
        until (datetime|np.datetime64|None): keep points with timestamp <= until.
                                             None keeps all points
        trail (timedelta|None): if set, also drop points older than until - trail

    Returns:
        pl.DataFrame: selected points
    """
    if until is None:
        return tracks
    until = to_datetime(until)
    selected = tracks.filter(pl.col(TIME_COL) <= until)
    if trail is not None:
        selected = selected.filter(pl.col(TIME_COL) > until - trail)
    return selected


class TrackPlot:
    """class to create map plots of animal tracks in polar areas"""

    def __init__(self, area: str, area_overrides: dict | None = None, area_file: str | None = None):
        """class inititialization

        Args:
            area (str): area name as per penguin_tracks.areas.definitions
            area_overrides (dict|None): dictionary to override area dict definitions
            area_file (str|None): path of an area definition file outside the package
        """
        self.area = area

        self.thisarea = Area(area, area_overrides, area_filename=area_file)

    def project_tracks(self, tracks: pl.DataFrame) -> pl.DataFrame:
        """add x,y columns in the area's projection to a track table"""
        return reproject_tracks(tracks, self.thisarea.crs_bng)

    def track_colors(self, tracks: pl.DataFrame) -> dict[str, str]:
        """colour for each animal in the track table, assigned in sorted id order"""
        return assign_track_colors(track_ids(tracks), cmap_name=self.thisarea.track_cmap_name)

    def setup_figure(
        self,
        rasters: Sequence[RasterLayer] = (),
        title: str | None = None,
    ) -> tuple[Figure, GeoAxes, ccrs.Projection]:
        """create the figure and draw everything except the tracks

        Args:
            rasters (Sequence[RasterLayer]): layers to draw, bottom first
            title (str|None): plot title. None uses the area's long name

        Returns:
            (Figure, GeoAxes, ccrs.Projection): figure, map axis, data projection
        """
        fig = plt.figure(figsize=(self.thisarea.fig_width, self.thisarea.fig_height))
        # width, height in inches

        ax, dataprj = self.setup_projection_and_extent(self.thisarea.axes)

        if self.thisarea.background_color:
            ax.set_facecolor(self.thisarea.background_color)

        self.draw_rasters(ax, dataprj, rasters)

        self.draw_coastlines(ax)

        self.draw_gridlines(ax)

        self.draw_mapscale_bar(ax, dataprj)

        if title is None:
            title = self.thisarea.long_name
        if title:
            ax.set_title(title, fontsize=self.thisarea.title_fontsize)

        return fig, ax, dataprj

    def setup_projection_and_extent(self, axis_position=None):
        """Setup projection and extent for current Area

        Args:
            axis_position (List, optional): [left,bottom,width,height]. Defaults to None.

        Returns:
            cartopy_geo_axis, data_projection_crs
        """
        log.info("setup_projection_and_extent..")

        # EPSG:3995: WGS 84 / Arctic Polar Stereographic
        if self.thisarea.epsg_number == 3995:
            dataprj = ccrs.epsg("3995")
            this_projection = ccrs.NorthPolarStereo(central_longitude=0, true_scale_latitude=71.0)

        # EPSG:3413: NSIDC Sea Ice Polar Stereographic North
        elif self.thisarea.epsg_number == 3413:
            dataprj = ccrs.epsg("3413")
            this_projection = ccrs.NorthPolarStereo(central_longitude=-45, true_scale_latitude=70.0)

        # EPSG:3031: Antarctic Polar Stereographic / WGS 84
        elif self.thisarea.epsg_number == 3031:
            dataprj = ccrs.epsg("3031")
            this_projection = ccrs.SouthPolarStereo(true_scale_latitude=-71.0)

        # EPSG:3395: World Mercator/ WGS 84
        elif self.thisarea.epsg_number == 3395:
            dataprj = ccrs.epsg("3395")
            this_projection = ccrs.Mercator()

        else:
            log.info("using EPSG-%d for map and data projection", self.thisarea.epsg_number)
            dataprj = ccrs.epsg(str(self.thisarea.epsg_number))
            this_projection = dataprj

        ax = plt.axes(axis_position, projection=this_projection)

        if not self.thisarea.draw_axis_frame:
            ax.axis("off")

        if self.thisarea.specify_by_bounding_lat and self.thisarea.hemisphere == "south":
            # Note that the '+1' below is a fudge to expand the area to account for the clipping
            # of the circular boundary
            ax.set_extent([-180, 180, -90, self.thisarea.bounding_lat + 1], ccrs.PlateCarree())
        elif self.thisarea.specify_by_bounding_lat and self.thisarea.hemisphere == "north":
            ax.set_extent([-180, 180, 90, self.thisarea.bounding_lat - 1], ccrs.PlateCarree())
        else:
            ax.set_extent(list(self.thisarea.xy_extent().as_extent()), dataprj)

        # Make a circular border for the plot
        if self.thisarea.round:
            # Compute a circle in axes coordinates, which we can use as a boundary
            # for the map. We can pan/zoom as much as we like - the boundary will be
            # permanently circular.
            theta = np.linspace(0, 2 * np.pi, 100)
            center, radius = [0.5, 0.5], 0.5
            verts = np.vstack([np.sin(theta), np.cos(theta)]).T
            circle = mpath.Path(verts * radius + center)
            ax.set_boundary(circle, transform=ax.transAxes)

        return ax, dataprj

    def layer_transform(self, layer: RasterLayer, ax: GeoAxes):
        """cartopy crs to draw a raster layer with

        Layers in the area's EPSG are drawn directly in map coordinates. Others
        are regridded by cartopy in to the map projection.
        """
        if layer.epsg_number == self.thisarea.epsg_number:
            # map projections are set up to match their EPSG definitions
            return ax.projection
        if layer.epsg_number is None:
            raise ValueError(f"raster layer {layer.name} has a CRS with no EPSG number")
        log.info(
            "raster layer %s is in EPSG-%d, map is EPSG-%d: image will be regridded",
            layer.name,
            layer.epsg_number,
            self.thisarea.epsg_number,
        )
        return ccrs.epsg(str(layer.epsg_number))

    def draw_rasters(  # pylint: disable=unused-argument
        self,
        ax: GeoAxes,
        dataprj,
        rasters: Sequence[RasterLayer],
        cmap: str = "Blues_r",
    ) -> list:
        """draw raster layers in the order given, first at the bottom

        Args:
            ax (GeoAxes): the main map plot axis
            dataprj (ccrs.Projection): the data projection
            rasters (Sequence[RasterLayer]): layers to draw
            cmap (str): colormap for single band layers

        Returns:
            list: the image artists
        """
        images = []
        for zorder, layer in enumerate(rasters, start=1):
            log.info("drawing raster layer %s (alpha %.2f)", layer.name, layer.alpha)
            kwargs = {}
            if not layer.is_rgb:
                kwargs["cmap"] = cmap
            images.append(
                ax.imshow(
                    layer.image,
                    extent=layer.extent.as_extent(),
                    origin="upper",
                    transform=self.layer_transform(layer, ax),
                    alpha=layer.alpha,
                    interpolation="nearest",
                    zorder=zorder,
                    **kwargs,
                )
            )
        return images

    def draw_tracks(
        self,
        ax: GeoAxes,
        dataprj,
        tracks: pl.DataFrame,
        colors: dict[str, str],
        until: datetime | np.datetime64 | None = None,
        trail: timedelta | None = None,
    ) -> list:
        """draw a line and points for each animal's track

        Args:
            ax (GeoAxes): the main map plot axis
            dataprj (ccrs.Projection): the data projection
            tracks (pl.DataFrame): track table with x,y columns in the area's projection
            colors (dict[str,str]): animal id -> colour
            until (datetime|np.datetime64|None): only draw points up to this time.
                                                 The latest position is marked.
            trail (timedelta|None): only draw points within this time before until

        Returns:
            list: the drawn artists
        """
        artists: list = []
        visible = select_track_points(tracks, until=until, trail=trail)

        for thisid, color in colors.items():
            full_track = tracks.filter(pl.col(ID_COL) == thisid)
            track = visible.filter(pl.col(ID_COL) == thisid)

            if self.thisarea.mark_track_start and full_track.height > 0:
                first = full_track.row(0, named=True)
                if until is None or first[TIME_COL] <= to_datetime(until):
                    (start,) = ax.plot(
                        first["x"],
                        first["y"],
                        marker="*",
                        markersize=12,
                        color=color,
                        markeredgecolor="black",
                        markeredgewidth=0.5,
                        transform=dataprj,
                        zorder=22,
                    )
                    artists.append(start)

            if track.height == 0:
                continue

            x = track["x"].to_numpy()
            y = track["y"].to_numpy()

            (line,) = ax.plot(
                x,
                y,
                color=color,
                linewidth=self.thisarea.track_linewidth,
                alpha=self.thisarea.track_alpha,
                label=thisid,
                transform=dataprj,
                zorder=20,
            )
            artists.append(line)

            artists.append(
                ax.scatter(
                    x,
                    y,
                    s=self.thisarea.track_marker_size,
                    color=color,
                    alpha=self.thisarea.track_alpha,
                    transform=dataprj,
                    zorder=21,
                )
            )

            if until is not None:
                (head,) = ax.plot(
                    x[-1],
                    y[-1],
                    marker="o",
                    markersize=7,
                    color=color,
                    markeredgecolor="black",
                    transform=dataprj,
                    zorder=23,
                )
                artists.append(head)

        return artists

    def draw_legend(self, ax: GeoAxes, colors: dict[str, str]):
        """draw a legend with one entry per animal

        Args:
            ax (GeoAxes): the main map plot axis
            colors (dict[str,str]): animal id -> colour

        Returns:
            Legend|None: the legend, or None if not drawn
        """
        if not self.thisarea.include_legend or not colors:
            return None

        handles = [
            Line2D([0], [0], color=color, linewidth=2, marker="o", markersize=4, label=thisid)
            for thisid, color in colors.items()
        ]
        legend = ax.legend(
            handles=handles,
            loc=self.thisarea.legend_location,
            fontsize=self.thisarea.legend_fontsize,
            ncol=self.thisarea.legend_ncols,
            framealpha=0.8,
        )
        legend.set_zorder(40)
        return legend

    def draw_gridlines(self, ax: GeoAxes, zorder=30):
        """draw latitude and longitude grid lines on maps

        Args:
            ax (GeoAxes): cartopy axis
            zorder (int, optional): vertical order. Defaults to 30.
        """
        if not self.thisarea.show_gridlines:
            return

        log.info("draw grid lines..")

        # draw meridians and parallels
        gl = ax.gridlines(
            color=self.thisarea.gridline_color,
            linestyle=(0, (1, 1)),
            xlocs=list(self.thisarea.longitude_gridlines),
            ylocs=list(self.thisarea.latitude_gridlines),
            zorder=zorder,
        )
        gl.xlabel_style = {
            "color": self.thisarea.gridlabel_color,
            "size": self.thisarea.gridlabel_size,
        }
        gl.ylabel_style = {
            "color": self.thisarea.gridlabel_color,
            "size": self.thisarea.gridlabel_size,
        }
        gl.n_steps = 90
        if self.thisarea.draw_gridlabels and not self.thisarea.round:
            gl.left_labels = True
            gl.bottom_labels = True
            gl.right_labels = False
            gl.top_labels = False
            gl.x_inline = gl.y_inline = False
            gl.draw_labels = True

    def draw_mapscale_bar(self, ax: GeoAxes, dataprj):
        """draw the map scale bar in km

        Args:
            ax (GeoAxes): the main map plot axis
            dataprj (ccrs.Projection): the data projection
        """
        if not self.thisarea.show_scalebar or self.thisarea.mapscale is None:
            return

        log.info("Adding map scale bar")

        mapscale = self.thisarea.mapscale

        # Centre point of scale bar in data coordinates (m)
        cx, cy = self.thisarea.latlon_to_xy(mapscale[1], mapscale[0])

        cx0 = cx - (mapscale[4] * 1e3) / 2.0
        cx1 = cx + (mapscale[4] * 1e3) / 2.0

        ax.plot(
            [cx0, cx1],
            [cy, cy],
            color=mapscale[5],
            linewidth=2,
            marker="|",
            markersize=9,
            transform=dataprj,
            zorder=30,
        )

        ax.text(
            cx0 + (cx1 - cx0) / 3,
            cy + mapscale[6] * 1e3,
            "km",
            transform=dataprj,
            color=mapscale[5],
            fontsize=9,
            zorder=30,
        )

        ax.text(
            cx0 + (cx1 - cx0) / 3,
            cy - 2 * mapscale[6] * 1e3,
            f"{mapscale[4]}",
            transform=dataprj,
            color=mapscale[5],
            fontsize=9,
            zorder=30,
        )

    def draw_coastlines(self, ax: GeoAxes):
        """draw cartopy (Natural Earth) coastlines over map

        Args:
            ax (GeoAxes): matplotlib Axis
        """
        if not self.thisarea.draw_coastlines:
            return

        if self.thisarea.use_cartopy_coastline == "low":
            ax.coastlines(resolution="110m", color=self.thisarea.coastline_color, zorder=25)
        elif self.thisarea.use_cartopy_coastline == "medium":
            ax.coastlines(resolution="50m", color=self.thisarea.coastline_color, zorder=25)
        elif self.thisarea.use_cartopy_coastline == "high":
            ax.coastlines(resolution="10m", color=self.thisarea.coastline_color, zorder=25)

    def plot_tracks(
        self,
        tracks: pl.DataFrame,
        rasters: Sequence[RasterLayer] = (),
        output_file: str = "penguin_tracks.jpg",
        output_dir: str = "",
        title: str | None = None,
        dpi: int = 150,
        colors: dict[str, str] | None = None,
    ) -> str:
        """Plot animal tracks over raster layers and save the figure

        Args:
            tracks (pl.DataFrame): track table (id, timestamp, latitude, longitude)
            rasters (Sequence[RasterLayer]): layers to draw under the tracks, bottom first
            output_file (str): image file name. .jpg is added if it has no
                               .jpg, .jpeg or .png extension
            output_dir (str): directory for output_file, created if needed
            title (str|None): plot title. None uses the area's long name
            dpi (int): resolution of saved image
            colors (dict[str,str]|None): animal id -> colour. None assigns colours
                                         in sorted id order

        Returns:
            str: path of the saved image
        """
        plot_filename = output_path(output_file, output_dir, SUPPORTED_IMAGE_TYPES)

        tracks = self.project_tracks(tracks)
        if colors is None:
            colors = self.track_colors(tracks)

        log.info("plotting %d points for %d animals in %s", tracks.height, len(colors), self.area)
        if tracks.height == 0:
            log.warning("no track points to plot")

        fig, ax, dataprj = self.setup_figure(rasters, title=title)

        self.draw_tracks(ax, dataprj, tracks, colors)

        self.draw_legend(ax, colors)

        log.info("Saving plot to %s at %d dpi", plot_filename, dpi)
        if plot_filename.lower().endswith((".jpg", ".jpeg")):
            fig.savefig(plot_filename, dpi=dpi, pil_kwargs={"quality": 90})
        else:
            fig.savefig(plot_filename, dpi=dpi)
        plt.close(fig)

        return plot_filename


def output_path(output_file: str, output_dir: str, extensions: Sequence[str]) -> str:
    """form an output file path, adding the first extension if output_file has none of them

    Args:
        output_file (str): file name or path
        output_dir (str): directory to put it in, created if it does not exist. "" for none
        extensions (Sequence[str]): accepted lower case extensions

    Returns:
        str: output path
    """
    if not output_file:
        raise ValueError("no output file name provided")
    if not output_file.lower().endswith(tuple(extensions)):
        output_file += extensions[0]
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)
        return os.path.join(output_dir, output_file)
    return output_file
