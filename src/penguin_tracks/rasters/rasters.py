"""penguin_tracks.rasters.rasters.py

Read georeferenced raster images (GeoTIFF) and crop them to a region of
interest for use as map layers, eg IBCSO bathymetry and a sea ice surface
image.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Sequence

import numpy as np
import rasterio  # to read GeoTIFF extents and windows
from pyproj import CRS  # coordinate reference system
from rasterio.errors import RasterioIOError
from rasterio.warp import transform_bounds
from rasterio.windows import Window, from_bounds
from rasterio.windows import bounds as window_bounds

from penguin_tracks.areas.areas import BoundingBox

# pylint: disable=too-many-arguments
# pylint: disable=too-many-locals

log = logging.getLogger(__name__)


@dataclass
class RasterLayer:
    """A cropped raster image ready for plotting

    Attributes:
        name (str): layer name
        image (np.ndarray): (rows, cols) single band (masked where nodata) or
                            (rows, cols, bands) colour image
        extent (BoundingBox): extent of image in crs
        crs (CRS): coordinate reference system of image
        alpha (float): transparency used when plotting (0..1)
    """

    name: str
    image: np.ndarray
    extent: BoundingBox
    crs: CRS
    alpha: float = 1.0

    @property
    def is_rgb(self) -> bool:
        return self.image.ndim == 3

    @property
    def epsg_number(self) -> int | None:
        return self.crs.to_epsg()


def snap_window(window: Window, width: int, height: int, tol: float = 1e-6) -> Window:
    """expand a fractional window outwards to whole pixels, limited to the raster size

    Args:
        window (Window): fractional window
        width (int): raster width (pixels)
        height (int): raster height (pixels)
        tol (float): pixel fraction treated as floating point noise

    Returns:
        Window: integer window
    """
    col_start = max(int(np.floor(window.col_off + tol)), 0)
    row_start = max(int(np.floor(window.row_off + tol)), 0)
    col_end = min(int(np.ceil(window.col_off + window.width - tol)), width)
    row_end = min(int(np.ceil(window.row_off + window.height - tol)), height)
    return Window(col_start, row_start, col_end - col_start, row_end - row_start)


def get_raster_extent(fname: str) -> tuple[BoundingBox, CRS, float]:
    """Get info from GeoTIFF on its extent

    Args:
        fname (str): path of GeoTIFF file

    Raises:
        ValueError: non-square pixels or no CRS
        IOError: file could not be read

    Returns:
        tuple(BoundingBox, CRS, float): extent, crs, pixel_width
    """
    try:
        with rasterio.open(fname) as dataset:
            if dataset.crs is None:
                raise ValueError(f"{fname} has no coordinate reference system")
            left, bottom, right, top = dataset.bounds
            pixel_width = dataset.transform[0]
            pixel_height = -dataset.transform[4]  # Negative because the height is
            # typically negative in GeoTIFFs
            if not np.isclose(pixel_width, pixel_height):
                raise ValueError(f"pixel_width {pixel_width} != pixel_height {pixel_height}")
            crs = CRS.from_user_input(dataset.crs.to_wkt())
    except RasterioIOError as exc:
        raise IOError(f"Could not read GeoTIFF: {exc}") from exc

    return BoundingBox(left, bottom, right, top), crs, pixel_width


def load_raster(
    fname: str,
    bounds: BoundingBox | None = None,
    bounds_crs: CRS | str | int | None = None,
    name: str | None = None,
    alpha: float = 1.0,
) -> RasterLayer:
    """Read a GeoTIFF, cropped to the intersection of its extent and bounds expanded to
    whole pixels (equal to the intersection when bounds lie on pixel edges)

    Args:
        fname (str): path of GeoTIFF file
        bounds (BoundingBox|None): region of interest. None reads the whole raster
        bounds_crs (CRS|str|int|None): CRS of bounds. None means the raster's CRS
        name (str|None): layer name, default is the file name without extension
        alpha (float): layer transparency for plotting

    Raises:
        FileNotFoundError: file not found
        IOError: file could not be read
        ValueError: bounds do not overlap the raster

    Returns:
        RasterLayer: cropped image, its extent and crs
    """
    if not os.path.isfile(fname):
        log.error("raster file %s not found", fname)
        raise FileNotFoundError(f"raster file {fname} not found")

    if name is None:
        name = os.path.splitext(os.path.basename(fname))[0]

    log.info("loading raster %s from %s", name, fname)

    try:
        with rasterio.open(fname) as dataset:
            if dataset.crs is None:
                raise ValueError(f"{fname} has no coordinate reference system")
            raster_crs = CRS.from_user_input(dataset.crs.to_wkt())
            full_extent = BoundingBox(*dataset.bounds)

            if bounds is None:
                window = Window(0, 0, dataset.width, dataset.height)
            else:
                if bounds_crs is not None and not CRS.from_user_input(bounds_crs).equals(
                    raster_crs
                ):
                    log.info("transforming crop bounds in to raster crs")
                    bounds = BoundingBox(
                        *transform_bounds(
                            CRS.from_user_input(bounds_crs).to_wkt(),
                            dataset.crs,
                            *bounds.as_bounds(),
                        )
                    )

                crop = full_extent.intersection(bounds)
                if crop is None:
                    log.error("bounds %s do not overlap raster %s", bounds, fname)
                    raise ValueError(f"bounds {bounds} do not overlap raster extent {full_extent}")

                window = snap_window(
                    from_bounds(*crop.as_bounds(), transform=dataset.transform),
                    dataset.width,
                    dataset.height,
                )

            extent = BoundingBox(*window_bounds(window, dataset.transform))

            if dataset.count == 1:
                image = dataset.read(1, window=window, masked=True)
            else:
                # (bands, rows, cols) -> (rows, cols, bands) for imshow
                image = np.moveaxis(dataset.read(window=window), 0, -1)
                if image.shape[-1] > 4:
                    log.warning("%s has %d bands, using the first 3", fname, image.shape[-1])
                    image = image[..., :3]
    except RasterioIOError as exc:
        raise IOError(f"Could not read GeoTIFF: {exc}") from exc

    log.info(
        "raster %s cropped to %d x %d pixels, extent %s", name, image.shape[1], image.shape[0], extent
    )

    return RasterLayer(name=name, image=image, extent=extent, crs=raster_crs, alpha=alpha)


def load_rasters(
    fnames: Sequence[str],
    bounds: BoundingBox | None = None,
    bounds_crs: CRS | str | int | None = None,
    alphas: Sequence[float] | None = None,
) -> list[RasterLayer]:
    """Load several raster layers, in drawing order (eg bathymetry then ice)

    Args:
        fnames (Sequence[str]): GeoTIFF file paths
        bounds (BoundingBox|None): region of interest
        bounds_crs (CRS|str|int|None): CRS of bounds
        alphas (Sequence[float]|None): transparency of each layer, default 1.0

    Returns:
        list[RasterLayer]: the cropped layers
    """
    if alphas is None:
        alphas = [1.0] * len(fnames)
    if len(alphas) != len(fnames):
        raise ValueError(f"{len(alphas)} alphas given for {len(fnames)} rasters")

    return [
        load_raster(fname, bounds=bounds, bounds_crs=bounds_crs, alpha=alpha)
        for fname, alpha in zip(fnames, alphas)
    ]
