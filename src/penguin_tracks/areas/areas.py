"""penguin_tracks.areas.areas.py: Area class to define map areas for track plotting"""

from __future__ import annotations

import glob
import importlib
import importlib.util
import logging
import os
import sys
from dataclasses import dataclass

import numpy as np
import polars as pl
from pyproj import CRS  # coordinate reference system
from pyproj import Transformer  # Transformer transforms between projections

# pylint: disable=too-many-statements
# pylint: disable=too-many-instance-attributes

log = logging.getLogger(__name__)

AREA_DEFINITIONS_DIR = os.path.join(os.path.dirname(__file__), "definitions")


@dataclass
class BoundingBox:
    """Rectangular region in projected coordinates (m)"""

    minx: float
    miny: float
    maxx: float
    maxy: float

    def __post_init__(self):
        if self.maxx < self.minx or self.maxy < self.miny:
            raise ValueError(f"invalid bounding box {self}")

    @property
    def width(self) -> float:
        return self.maxx - self.minx

    @property
    def height(self) -> float:
        return self.maxy - self.miny

    def as_bounds(self) -> tuple[float, float, float, float]:
        """return (left, bottom, right, top), the order used by rasterio"""
        return (self.minx, self.miny, self.maxx, self.maxy)

    def as_extent(self) -> tuple[float, float, float, float]:
        """return (left, right, bottom, top), the order used by matplotlib and cartopy"""
        return (self.minx, self.maxx, self.miny, self.maxy)

    def intersection(self, other: BoundingBox) -> BoundingBox | None:
        """rectangular intersection with another box

        Args:
            other (BoundingBox): box in the same coordinate system

        Returns:
            BoundingBox|None: overlapping region, or None if the boxes do not overlap
        """
        minx = max(self.minx, other.minx)
        miny = max(self.miny, other.miny)
        maxx = min(self.maxx, other.maxx)
        maxy = min(self.maxy, other.maxy)
        if minx >= maxx or miny >= maxy:
            return None
        return BoundingBox(minx, miny, maxx, maxy)


def list_all_area_definition_names_only() -> list[str]:
    """return a sorted list of all area definition names

    Returns:
        list[str]
    """
    if not os.path.isdir(AREA_DEFINITIONS_DIR):
        raise FileNotFoundError(f"{AREA_DEFINITIONS_DIR} not found")

    all_defs = glob.glob(f"{AREA_DEFINITIONS_DIR}/*.py")
    return sorted(
        os.path.basename(thisdef).replace(".py", "")
        for thisdef in all_defs
        if "__init__" not in thisdef
    )


def list_all_area_definition_names() -> list[str]:
    """return a list of all area definition names with their long name

    Returns:
        list[str]: "name : long_name" strings
    """
    final_defs = []
    for thisdef in list_all_area_definition_names_only():
        thisarea = Area(thisdef)
        if thisarea.area_summary:
            final_defs.append(f"{thisdef} : {thisarea.area_summary}")
        else:
            final_defs.append(f"{thisdef} : {thisarea.long_name}")
    return final_defs


def import_module_from_file(file_path):
    """Imports a Python module from a specified file path.

    The module name is derived from the file name, excluding its extension
    and directory path. The module is also added to `sys.modules`.

    Args:
        file_path (str): The file path to the Python module to be imported.

    Raises:
        ImportError: If the module cannot be imported

    Returns:
        tuple: (module, module_name)
    """
    module_name = os.path.splitext(os.path.basename(file_path))[0]

    spec = importlib.util.spec_from_file_location(module_name, file_path)
    if spec and spec.loader:
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        spec.loader.exec_module(module)
        return module, module_name

    raise ImportError(f"Cannot import module from file path: {file_path}")


class Area:
    """class to define polar map areas for plotting tracks"""

    def __init__(self, name: str, overrides: dict | None = None, area_filename: str | None = None):
        """class initialization

        Args:
            name (str): area name, as a module in penguin_tracks.areas.definitions
            overrides (dict|None): dictionary to override any parameters in area definition dicts
            area_filename (str|None): path of an area definition file outside the package
        """

        self.name = name

        try:
            self.load_area(overrides, area_filename)
        except ImportError as exc:
            raise ImportError(f"{name} not in supported area list") from exc

    def load_area(self, overrides: dict | None = None, area_filename: str | None = None):
        """Load area settings for current area name"""

        log.info("loading area -%s-", self.name)

        if area_filename is None:
            try:
                module = importlib.import_module(f"penguin_tracks.areas.definitions.{self.name}")
            except ImportError as exc:
                raise ImportError(f"Could not load area definition: {self.name}") from exc
        else:
            module, self.name = import_module_from_file(area_filename)

        area_definition = module.area_definition.copy()

        # definitions can inherit settings from another definition
        secondary_area_name = area_definition.pop("use_definitions_from", None)
        while secondary_area_name is not None:
            log.info("loading secondary area %s", secondary_area_name)
            try:
                module2 = importlib.import_module(
                    f"penguin_tracks.areas.definitions.{secondary_area_name}"
                )
            except ImportError as exc:
                raise ImportError(f"Could not load area definition: {secondary_area_name}") from exc
            area_definition2 = module2.area_definition.copy()
            secondary_area_name = area_definition2.pop("use_definitions_from", None)
            area_definition2.update(area_definition)
            area_definition = area_definition2

        if overrides is not None and isinstance(overrides, dict):
            area_definition.update(overrides)

        self.long_name = area_definition["long_name"]
        self.area_summary = area_definition.get("area_summary", "")
        # Area extent and projection
        self.hemisphere = area_definition["hemisphere"]
        self.epsg_number = area_definition["epsg_number"]
        self.centre_lon = area_definition.get("centre_lon")
        self.centre_lat = area_definition.get("centre_lat")
        self.width_km = area_definition.get("width_km")
        self.height_km = area_definition.get("height_km")
        self.specify_by_centre = area_definition.get("specify_by_centre", False)
        self.specify_by_bounding_lat = area_definition.get("specify_by_bounding_lat", False)
        self.specify_plot_area_by_lowerleft_corner = area_definition.get(
            "specify_plot_area_by_lowerleft_corner", False
        )
        self.llcorner_lat = area_definition.get("llcorner_lat")
        self.llcorner_lon = area_definition.get("llcorner_lon")
        self.round = area_definition.get("round", False)
        self.bounding_lat = area_definition.get("bounding_lat")

        # Plot parameters
        self.fig_width = area_definition.get("fig_width", 10)
        self.fig_height = area_definition.get("fig_height", 10)
        self.axes = area_definition.get("axes", [0.08, 0.08, 0.84, 0.84])
        self.draw_axis_frame = area_definition.get("draw_axis_frame", True)
        self.background_color = area_definition.get("background_color", None)
        self.draw_coastlines = area_definition.get("draw_coastlines", False)
        self.coastline_color = area_definition.get("coastline_color", "grey")
        self.use_cartopy_coastline = area_definition.get("use_cartopy_coastline", "no")
        self.title_fontsize = area_definition.get("title_fontsize", 14)

        # Tracks
        self.track_linewidth = area_definition.get("track_linewidth", 1.2)
        self.track_marker_size = area_definition.get("track_marker_size", 6)
        self.track_alpha = area_definition.get("track_alpha", 0.9)
        self.track_cmap_name = area_definition.get("track_cmap_name", None)
        self.mark_track_start = area_definition.get("mark_track_start", True)

        # Legend
        self.include_legend = area_definition.get("include_legend", True)
        self.legend_location = area_definition.get("legend_location", "upper right")
        self.legend_fontsize = area_definition.get("legend_fontsize", 8)
        self.legend_ncols = area_definition.get("legend_ncols", 1)

        # Animation
        self.timestamp_position_xy = area_definition.get("timestamp_position_xy", (0.02, 0.95))
        self.timestamp_fontsize = area_definition.get("timestamp_fontsize", 12)

        # Grid lines
        self.show_gridlines: bool = area_definition.get("show_gridlines", True)
        self.longitude_gridlines = np.asarray(
            area_definition.get("longitude_gridlines", [])
        ).astype("float")
        self.longitude_gridlines[self.longitude_gridlines > 180.0] -= 360.0
        self.latitude_gridlines = area_definition.get("latitude_gridlines", [])
        self.gridline_color: str = area_definition.get("gridline_color", "lightgrey")
        self.gridlabel_color = area_definition.get("gridlabel_color", "darkgrey")
        self.gridlabel_size = area_definition.get("gridlabel_size", 9)
        self.draw_gridlabels = area_definition.get("draw_gridlabels", True)

        # Scale bar
        self.show_scalebar = area_definition.get("show_scalebar", False)
        self.mapscale = area_definition.get("mapscale")

        self.crs_wgs = CRS("epsg:4326")  # assuming you're using WGS84 geographic
        self.crs_bng = CRS(f"epsg:{self.epsg_number}")

        # Setup the Transforms
        self.xy_to_lonlat_transformer = Transformer.from_crs(
            self.crs_bng, self.crs_wgs, always_xy=True
        )
        self.lonlat_to_xy_transformer = Transformer.from_crs(
            self.crs_wgs, self.crs_bng, always_xy=True
        )

    def latlon_to_xy(self, lats: np.ndarray | float | list, lons: np.ndarray | float | list):
        """convert latitude and longitude to x,y in area's projection

        Args:
            lats (np.ndarray|float|list): latitude values
            lons (np.ndarray|float|list): longitude values

        Returns:
            (np.ndarray,np.ndarray): x,y
        """
        return self.lonlat_to_xy_transformer.transform(lons, lats)

    def xy_to_latlon(self, x: np.ndarray | float | list, y: np.ndarray | float | list):
        """convert from x,y to latitide, longitiude in area's projection

        Args:
            x (np.ndarray): x coordinates
            y (np.ndarray): y coordinates

        Returns:
            (np.ndarray,np.ndarray): latitude values, longitude values
        """
        return self.xy_to_lonlat_transformer.transform(x, y)[::-1]

    def xy_extent(self) -> BoundingBox:
        """projected extent of the area, the region of interest used to crop rasters

        Returns:
            BoundingBox: area extent in the area's projection (m)
        """
        if self.specify_by_centre:
            centre_x, centre_y = self.latlon_to_xy(self.centre_lat, self.centre_lon)
            half_w = self.width_km * 1000 / 2
            half_h = self.height_km * 1000 / 2
            return BoundingBox(
                centre_x - half_w, centre_y - half_h, centre_x + half_w, centre_y + half_h
            )
        if self.specify_plot_area_by_lowerleft_corner:
            ll_x, ll_y = self.latlon_to_xy(self.llcorner_lat, self.llcorner_lon)
            return BoundingBox(
                ll_x, ll_y, ll_x + self.width_km * 1000, ll_y + self.height_km * 1000
            )
        if self.specify_by_bounding_lat:
            # polar stereographic: the bounding latitude circle is centred on the pole
            edge_x, edge_y = self.latlon_to_xy(self.bounding_lat, 0.0)
            radius = float(np.hypot(edge_x, edge_y))
            return BoundingBox(-radius, -radius, radius, radius)

        raise ValueError(f"area {self.name} must specify by centre, lower left, or bounding lat")

    def inside_xy_extent(
        self,
        lats: np.ndarray,
        lons: np.ndarray,
    ) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray, np.ndarray, int]:
        """filter points based on x,y extent of area

        Args:
            lats (np.ndarray): latitude values (degs N)
            lons (np.ndarray): longitude values (deg E)

        Returns:
            (lats_inside, lons_inside, x_inside, y_inside, indices_inside, n_inside)
        """
        lats = np.atleast_1d(np.asarray(lats, dtype=float))
        lons = np.atleast_1d(np.asarray(lons, dtype=float))

        x, y = self.latlon_to_xy(lats, lons)
        x = np.asarray(x)
        y = np.asarray(y)

        extent = self.xy_extent()
        inside_area = (x >= extent.minx) & (x <= extent.maxx) & (y >= extent.miny) & (
            y <= extent.maxy
        )
        indices_inside = np.where(inside_area)[0]

        return (
            lats[inside_area],
            lons[inside_area],
            x[inside_area],
            y[inside_area],
            indices_inside,
            len(indices_inside),
        )

    def latlon_to_xy_polars(
        self,
        df: pl.DataFrame,
        lat_col: str = "latitude",
        lon_col: str = "longitude",
        out_x_col: str = "x",
        out_y_col: str = "y",
    ) -> pl.DataFrame:
        """
        Convert latitude and longitude columns in a Polars DataFrame to x,y
        coordinates in the area's projection.

        Args:
            df (pl.DataFrame): DataFrame containing lat/lon
            lat_col (str): name of latitude column in df
            lon_col (str): name of longitude column in df
            out_x_col (str): name of output x column to create
            out_y_col (str): name of output y column to create
        Returns:
            pl.DataFrame: DataFrame with added x,y columns
        """
        x, y = self.latlon_to_xy(df[lat_col].to_numpy(), df[lon_col].to_numpy())
        return df.with_columns(
            [
                pl.Series(out_x_col, np.asarray(x, dtype=np.float64), dtype=pl.Float64),
                pl.Series(out_y_col, np.asarray(y, dtype=np.float64), dtype=pl.Float64),
            ]
        )
