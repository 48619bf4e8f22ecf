"""pytests for penguin_tracks.areas.areas.py"""

import numpy as np
import polars as pl
import pytest

from penguin_tracks.areas.areas import (
    Area,
    BoundingBox,
    list_all_area_definition_names,
    list_all_area_definition_names_only,
)


def test_bad_area_name():
    """pytest to check for handling of invalid area names"""
    with pytest.raises(ImportError, match="not in supported area list"):
        Area("badname")


def test_good_area_names():
    """all area definitions load, and are listed with a summary"""
    area_list = list_all_area_definition_names_only()
    assert {"antarctica", "ross_sea", "cape_washington"} <= set(area_list)

    for area in area_list:
        thisarea = Area(area)
        assert thisarea.epsg_number

    assert "ross_sea : Western Ross Sea, foraging range of the Cape Washington emperor colony" in (
        list_all_area_definition_names()
    )


def test_inherited_definitions():
    """cape_washington inherits from ross_sea, which inherits from antarctica"""
    thisarea = Area("cape_washington")
    assert thisarea.long_name == "Cape Washington"
    assert thisarea.hemisphere == "south"  # from antarctica
    assert thisarea.epsg_number == 3031  # from antarctica
    assert thisarea.specify_by_centre  # from ross_sea
    assert not thisarea.draw_coastlines  # from ross_sea
    assert thisarea.width_km == 200  # own setting


def test_overrides():
    """overrides replace definition values"""
    thisarea = Area("ross_sea", overrides={"width_km": 400, "include_legend": False})
    assert thisarea.width_km == 400
    assert not thisarea.include_legend
    assert thisarea.xy_extent().width == pytest.approx(400_000.0)


def test_area_file(tmp_path):
    """areas can be defined in a file outside the package"""
    fname = tmp_path / "my_colony.py"
    fname.write_text(
        'area_definition = {"use_definitions_from": "ross_sea", "long_name": "My colony",'
        ' "centre_lon": 166.0, "centre_lat": -77.5, "width_km": 100, "height_km": 50}\n',
        encoding="utf-8",
    )
    thisarea = Area("ignored", area_filename=str(fname))
    assert thisarea.name == "my_colony"
    assert thisarea.long_name == "My colony"
    extent = thisarea.xy_extent()
    assert extent.width == pytest.approx(100_000.0)
    assert extent.height == pytest.approx(50_000.0)


def test_gridline_longitudes_wrapped():
    """longitudes > 180 are converted to -180..180"""
    thisarea = Area("ross_sea")
    assert thisarea.longitude_gridlines.max() <= 180.0
    assert -170.0 in thisarea.longitude_gridlines


def test_latlon_xy_round_trip():
    """latlon_to_xy and xy_to_latlon are inverses"""
    thisarea = Area("ross_sea")
    lats = np.array([-74.65, -77.5, -70.0])
    lons = np.array([165.4, 175.0, -170.0])
    x, y = thisarea.latlon_to_xy(lats, lons)
    lats2, lons2 = thisarea.xy_to_latlon(x, y)
    np.testing.assert_allclose(lats2, lats, atol=1e-8)
    np.testing.assert_allclose(lons2, lons, atol=1e-8)


def test_xy_extent_by_centre():
    """centre specified extents are centred on the projected centre point"""
    thisarea = Area("ross_sea")
    extent = thisarea.xy_extent()
    cx, cy = thisarea.latlon_to_xy(-74.5, 170.0)
    assert extent.width == pytest.approx(800_000.0)
    assert extent.height == pytest.approx(800_000.0)
    assert (extent.minx + extent.maxx) / 2 == pytest.approx(cx)
    assert (extent.miny + extent.maxy) / 2 == pytest.approx(cy)


def test_xy_extent_by_bounding_lat():
    """round areas are a square around the pole reaching the bounding latitude"""
    thisarea = Area("antarctica")
    extent = thisarea.xy_extent()
    assert extent.minx == pytest.approx(-extent.maxx)
    assert extent.miny == pytest.approx(-extent.maxy)
    x, y = thisarea.latlon_to_xy(-60.0, 90.0)
    assert np.hypot(x, y) == pytest.approx(extent.maxx)


def test_xy_extent_not_specified():
    """an area with no extent method raises ValueError"""
    thisarea = Area("ross_sea", overrides={"specify_by_centre": False})
    with pytest.raises(ValueError):
        thisarea.xy_extent()


def test_inside_xy_extent():
    """points are filtered to the area extent"""
    thisarea = Area("cape_washington")
    lats = np.array([-74.65, -60.0, -74.7])
    lons = np.array([165.4, 0.0, 165.0])
    lats_in, lons_in, x_in, y_in, indices, n_inside = thisarea.inside_xy_extent(lats, lons)
    assert n_inside == 2
    assert list(indices) == [0, 2]
    assert list(lats_in) == [-74.65, -74.7]
    assert list(lons_in) == [165.4, 165.0]
    assert len(x_in) == len(y_in) == 2


def test_latlon_to_xy_polars():
    """x,y columns are added to a DataFrame"""
    thisarea = Area("ross_sea")
    df = pl.DataFrame({"latitude": [-74.65, -75.0], "longitude": [165.4, 170.0]})
    df = thisarea.latlon_to_xy_polars(df)
    x, y = thisarea.latlon_to_xy(df["latitude"].to_numpy(), df["longitude"].to_numpy())
    np.testing.assert_allclose(df["x"].to_numpy(), x)
    np.testing.assert_allclose(df["y"].to_numpy(), y)


def test_bounding_box():
    """BoundingBox orderings, sizes and intersections"""
    box = BoundingBox(0, 10, 100, 60)
    assert box.width == 100
    assert box.height == 50
    assert box.as_bounds() == (0, 10, 100, 60)
    assert box.as_extent() == (0, 100, 10, 60)

    assert box.intersection(BoundingBox(50, 0, 200, 20)) == BoundingBox(50, 10, 100, 20)
    assert box.intersection(BoundingBox(-10, -10, 500, 500)) == box
    assert box.intersection(BoundingBox(200, 200, 300, 300)) is None
    assert box.intersection(BoundingBox(100, 10, 200, 60)) is None  # touching edge only

    with pytest.raises(ValueError):
        BoundingBox(10, 0, 0, 10)
