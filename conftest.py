"""shared pytest fixtures: synthetic GeoTIFFs and GPS tracks in the Ross Sea"""

from datetime import datetime, timedelta

import numpy as np
import polars as pl
import pytest
import rasterio
from rasterio.transform import from_origin

from penguin_tracks.areas.areas import Area

PIXEL_SIZE = 5000.0  # m
MARGIN = 100_000.0  # m, rasters extend this far past the ross_sea area


def write_geotiff(path, data, left, top, pixel_size=PIXEL_SIZE, epsg=3031, nodata=None):
    """write a (bands, rows, cols) array to a GeoTIFF

    Args:
        path (Path): output file
        data (np.ndarray): (bands, rows, cols) array
        left (float): x of left edge (m)
        top (float): y of top edge (m)
        pixel_size (float): pixel size (m)
        epsg (int): EPSG number of the CRS
        nodata (float|None): nodata value
    """
    bands, rows, cols = data.shape
    with rasterio.open(
        path,
        "w",
        driver="GTiff",
        height=rows,
        width=cols,
        count=bands,
        dtype=data.dtype,
        crs=f"EPSG:{epsg}",
        transform=from_origin(left, top, pixel_size, pixel_size),
        nodata=nodata,
    ) as dst:
        dst.write(data)
    return str(path)


def ross_sea_raster_origin():
    """top left corner and size of a raster grid covering the ross_sea area plus a margin"""
    extent = Area("ross_sea").xy_extent()
    left = np.floor((extent.minx - MARGIN) / PIXEL_SIZE) * PIXEL_SIZE
    top = np.ceil((extent.maxy + MARGIN) / PIXEL_SIZE) * PIXEL_SIZE
    cols = int(np.ceil((extent.maxx + MARGIN - left) / PIXEL_SIZE))
    rows = int(np.ceil((top - (extent.miny - MARGIN)) / PIXEL_SIZE))
    return left, top, rows, cols


@pytest.fixture(name="bathymetry_tif")
def fixture_bathymetry_tif(tmp_path):
    """RGB bathymetry-like GeoTIFF (blue gradient) covering the ross_sea area"""
    left, top, rows, cols = ross_sea_raster_origin()
    gradient = np.linspace(40, 200, cols, dtype=np.float64)[np.newaxis, :].repeat(rows, axis=0)
    data = np.stack(
        [
            np.full((rows, cols), 20),
            gradient * 0.6,
            gradient,
        ]
    ).astype(np.uint8)
    return write_geotiff(tmp_path / "bathymetry_rgb.tif", data, left, top)


@pytest.fixture(name="ice_tif")
def fixture_ice_tif(tmp_path):
    """RGBA sea ice GeoTIFF: white ice in the southern half, transparent elsewhere"""
    left, top, rows, cols = ross_sea_raster_origin()
    data = np.zeros((4, rows, cols), dtype=np.uint8)
    data[:3, rows // 2 :, :] = 245
    data[3, rows // 2 :, :] = 255
    return write_geotiff(tmp_path / "sea_ice_rgba.tif", data, left, top)


@pytest.fixture(name="gps_tracks")
def fixture_gps_tracks():
    """three synthetic foraging trips leaving Cape Washington, one fix every 4 hours"""
    rows = []
    t0 = datetime(2019, 11, 1, 0, 0, 0)
    for i, thisid in enumerate(["EP03", "EP01", "EP02"]):
        for j in range(18):
            rows.append(
                {
                    "id": thisid,
                    "timestamp": t0 + timedelta(hours=4 * j + i),
                    "latitude": -74.65 + 0.04 * j * (i - 1),
                    "longitude": 165.4 + 0.12 * j,
                }
            )
    return pl.DataFrame(rows).sort(["id", "timestamp"])


@pytest.fixture(name="gps_csv")
def fixture_gps_csv(tmp_path, gps_tracks):
    """gps_tracks written to csv, plus two short tracks to be excluded"""
    extra = pl.DataFrame(
        {
            "id": ["EP07", "EP07", "EP13"],
            "timestamp": [
                datetime(2019, 11, 1, 0, 0, 0),
                datetime(2019, 11, 1, 4, 0, 0),
                datetime(2019, 11, 1, 0, 0, 0),
            ],
            "latitude": [-74.6, -74.7, -74.6],
            "longitude": [165.5, 165.6, 165.5],
        }
    )
    df = pl.concat([gps_tracks, extra]).with_columns(
        pl.col("timestamp").dt.strftime("%Y-%m-%d %H:%M:%S")
    )
    path = tmp_path / "emperor_penguin_gps.csv"
    df.write_csv(path)
    return str(path)
