"""pytests for penguin_tracks.rasters.rasters"""

import numpy as np
import pytest
import rasterio
from rasterio.transform import from_origin
from rasterio.windows import Window

from penguin_tracks.areas.areas import Area, BoundingBox
from penguin_tracks.rasters.rasters import (
    get_raster_extent,
    load_raster,
    load_rasters,
    snap_window,
)

LEFT = 300_000.0
TOP = -1_400_000.0
PIXEL = 1000.0
ROWS = 150
COLS = 200


def write_tif(path, bands=3, nodata=None):
    """write a ROWS x COLS GeoTIFF in EPSG:3031 with 1km pixels"""
    data = np.arange(bands * ROWS * COLS, dtype=np.float32).reshape(bands, ROWS, COLS) % 250
    if nodata is not None:
        data[0, :10, :] = nodata
    dtype = "float32" if nodata is not None else "uint8"
    with rasterio.open(
        path,
        "w",
        driver="GTiff",
        height=ROWS,
        width=COLS,
        count=bands,
        dtype=dtype,
        crs="EPSG:3031",
        transform=from_origin(LEFT, TOP, PIXEL, PIXEL),
        nodata=nodata,
    ) as dst:
        dst.write(data.astype(dtype))
    return str(path)


@pytest.fixture(name="rgb_tif")
def fixture_rgb_tif(tmp_path):
    """3 band uint8 GeoTIFF"""
    return write_tif(tmp_path / "rgb.tif")


def test_get_raster_extent(rgb_tif):
    """extent, crs and pixel size of the whole raster"""
    extent, crs, pixel_width = get_raster_extent(rgb_tif)
    assert extent == BoundingBox(LEFT, TOP - ROWS * PIXEL, LEFT + COLS * PIXEL, TOP)
    assert crs.to_epsg() == 3031
    assert pixel_width == PIXEL


def test_load_whole_raster(rgb_tif):
    """no bounds reads everything as (rows, cols, bands)"""
    layer = load_raster(rgb_tif, alpha=0.5)
    assert layer.name == "rgb"
    assert layer.image.shape == (ROWS, COLS, 3)
    assert layer.is_rgb
    assert layer.alpha == 0.5
    assert layer.epsg_number == 3031


@pytest.mark.parametrize(
    "request_box",
    [
        BoundingBox(350_000, -1_500_000, 420_000, -1_450_000),  # inside
        BoundingBox(450_000, -1_600_000, 600_000, -1_500_000),  # overlaps bottom right
        BoundingBox(0, -2_000_000, 1_000_000, -1_000_000),  # contains the raster
    ],
)
def test_crop_extent_is_intersection(rgb_tif, request_box):
    """cropped extent == intersection of raster extent and requested box"""
    full_extent, _, _ = get_raster_extent(rgb_tif)
    expected = full_extent.intersection(request_box)

    layer = load_raster(rgb_tif, bounds=request_box)

    assert layer.extent.as_bounds() == pytest.approx(expected.as_bounds())
    assert layer.image.shape[0] == round(expected.height / PIXEL)
    assert layer.image.shape[1] == round(expected.width / PIXEL)


def test_crop_unaligned_box_covers_request(rgb_tif):
    """boxes not on pixel edges are expanded outwards to whole pixels"""
    request_box = BoundingBox(350_400, -1_500_300, 420_700, -1_450_200)
    layer = load_raster(rgb_tif, bounds=request_box)
    assert layer.extent.minx <= request_box.minx
    assert layer.extent.maxx >= request_box.maxx
    assert layer.extent.miny <= request_box.miny
    assert layer.extent.maxy >= request_box.maxy
    assert layer.extent.width - request_box.width < 2 * PIXEL


def test_crop_no_overlap_raises(rgb_tif):
    """bounds outside the raster"""
    with pytest.raises(ValueError):
        load_raster(rgb_tif, bounds=BoundingBox(0, 0, 1000, 1000))


def test_bounds_in_same_crs(rgb_tif):
    """giving the raster's own crs for the bounds does not change the crop"""
    request_box = BoundingBox(350_000, -1_500_000, 420_000, -1_450_000)
    layer1 = load_raster(rgb_tif, bounds=request_box)
    layer2 = load_raster(rgb_tif, bounds=request_box, bounds_crs=3031)
    assert layer1.extent == layer2.extent


def test_bounds_from_area(bathymetry_tif):
    """crop a raster to an area's region of interest"""
    thisarea = Area("cape_washington")
    extent = thisarea.xy_extent()
    layer = load_raster(bathymetry_tif, bounds=extent, bounds_crs=thisarea.crs_bng)
    assert layer.extent.minx <= extent.minx
    assert layer.extent.maxx >= extent.maxx
    assert layer.extent.width <= extent.width + 2 * 5000


def test_single_band_nodata_masked(tmp_path):
    """single band rasters are 2D masked arrays"""
    fname = write_tif(tmp_path / "bathy.tif", bands=1, nodata=-9999.0)
    layer = load_raster(fname)
    assert layer.image.ndim == 2
    assert not layer.is_rgb
    assert np.ma.isMaskedArray(layer.image)
    assert layer.image.mask[:10, :].all()
    assert not layer.image.mask[10:, :].any()


def test_missing_file_raises(tmp_path):
    """missing raster"""
    with pytest.raises(FileNotFoundError):
        load_raster(str(tmp_path / "missing.tif"))


def test_unreadable_file_raises(tmp_path):
    """a file that is not a GeoTIFF"""
    fname = tmp_path / "not_a.tif"
    fname.write_text("not an image", encoding="utf-8")
    with pytest.raises(IOError):
        load_raster(str(fname))
    with pytest.raises(IOError):
        get_raster_extent(str(fname))


def test_load_rasters_order_and_alphas(rgb_tif, tmp_path):
    """layers are returned in the order given"""
    other = write_tif(tmp_path / "ice.tif", bands=4)
    layers = load_rasters([rgb_tif, other], alphas=[1.0, 0.7])
    assert [layer.name for layer in layers] == ["rgb", "ice"]
    assert layers[1].image.shape == (ROWS, COLS, 4)
    assert layers[1].alpha == 0.7

    with pytest.raises(ValueError):
        load_rasters([rgb_tif, other], alphas=[1.0])


def test_snap_window():
    """fractional windows expand outwards, and are limited to the raster"""
    window = snap_window(Window(2.5, 3.0000000001, 4.2, 5.0), 10, 10)
    assert (window.col_off, window.row_off, window.width, window.height) == (2, 3, 5, 5)

    window = snap_window(Window(-3, 8, 20, 5), 10, 10)
    assert (window.col_off, window.row_off, window.width, window.height) == (0, 8, 10, 2)
