"""pytests for penguin_tracks.areas.track_plot.py"""

import os
from datetime import datetime, timedelta

import numpy as np
import polars as pl
import pytest
from matplotlib import pyplot as plt
from PIL import Image

from penguin_tracks.areas.track_plot import TrackPlot, output_path, select_track_points
from penguin_tracks.rasters.rasters import load_rasters
from penguin_tracks.tracks.tracks import load_tracks, track_ids


@pytest.fixture(name="ross_sea_rasters")
def fixture_ross_sea_rasters(bathymetry_tif, ice_tif):
    """bathymetry and ice layers cropped to the ross_sea area"""
    thisplot = TrackPlot("ross_sea")
    return load_rasters(
        [bathymetry_tif, ice_tif],
        bounds=thisplot.thisarea.xy_extent(),
        bounds_crs=thisplot.thisarea.crs_bng,
        alphas=[1.0, 0.8],
    )


def test_plot_tracks_over_rasters(tmp_path, gps_tracks, ross_sea_rasters):
    """static figure with bathymetry, ice and tracks is saved as a JPEG"""
    thisplot = TrackPlot("ross_sea")
    fname = thisplot.plot_tracks(
        gps_tracks,
        rasters=ross_sea_rasters,
        output_file="tracks",
        output_dir=str(tmp_path / "plots"),
        dpi=50,
    )
    assert fname == os.path.join(str(tmp_path / "plots"), "tracks.jpg")
    with Image.open(fname) as img:
        assert img.format == "JPEG"
        assert img.size == (
            thisplot.thisarea.fig_width * 50,
            thisplot.thisarea.fig_height * 50,
        )


def test_plot_zero_points(tmp_path, ross_sea_rasters):
    """no track points still gives a valid image"""
    empty = pl.DataFrame(
        schema={
            "id": pl.String,
            "timestamp": pl.Datetime("us"),
            "latitude": pl.Float64,
            "longitude": pl.Float64,
        }
    )
    thisplot = TrackPlot("cape_washington")
    fname = thisplot.plot_tracks(
        empty, rasters=ross_sea_rasters, output_file=str(tmp_path / "empty.png"), dpi=40
    )
    assert fname.endswith("empty.png")
    with Image.open(fname) as img:
        img.verify()
        assert img.format == "PNG"


def test_plot_round_area_without_rasters(tmp_path, gps_tracks):
    """circular areas, no raster layers"""
    thisplot = TrackPlot("antarctica", area_overrides={"draw_coastlines": False})
    fname = thisplot.plot_tracks(gps_tracks, output_file=str(tmp_path / "ant.jpg"), dpi=30)
    with Image.open(fname) as img:
        assert img.format == "JPEG"


def test_rendered_ids_exclude_removed_animals(gps_csv):
    """ids drawn and in the legend are the input ids minus the excluded ones"""
    input_ids = set(pl.read_csv(gps_csv)["id"].to_list())
    tracks = load_tracks(
        gps_csv, time_format="%Y-%m-%d %H:%M:%S", exclude_ids=["EP07", "EP13"], min_points=1
    )

    thisplot = TrackPlot("ross_sea")
    tracks = thisplot.project_tracks(tracks)
    colors = thisplot.track_colors(tracks)

    fig, ax, dataprj = thisplot.setup_figure()
    artists = thisplot.draw_tracks(ax, dataprj, tracks, colors)
    legend = thisplot.draw_legend(ax, colors)

    expected = input_ids - {"EP07", "EP13"}
    assert {a.get_label() for a in artists if a.get_label() in input_ids} == expected
    assert [t.get_text() for t in legend.get_texts()] == sorted(expected)
    assert list(colors) == track_ids(tracks)
    plt.close(fig)


def test_draw_rasters_in_order(ross_sea_rasters):
    """first raster layer is drawn below the second"""
    thisplot = TrackPlot("ross_sea")
    fig, ax, dataprj = thisplot.setup_figure(title="")
    images = thisplot.draw_rasters(ax, dataprj, ross_sea_rasters)
    assert len(images) == 2
    assert images[0].get_zorder() < images[1].get_zorder()
    assert images[1].get_alpha() == pytest.approx(0.8)
    plt.close(fig)


def test_draw_tracks_until_marks_head(gps_tracks):
    """drawing up to a time adds a head marker for each visible track"""
    thisplot = TrackPlot("ross_sea", area_overrides={"mark_track_start": False})
    tracks = thisplot.project_tracks(gps_tracks)
    colors = thisplot.track_colors(tracks)
    fig, ax, dataprj = thisplot.setup_figure()

    all_artists = thisplot.draw_tracks(ax, dataprj, tracks, colors)
    assert len(all_artists) == 2 * 3  # line and points per animal

    # only EP03 (first fix at t0) and EP01 (t0 + 1h) have started at t0 + 1h
    until = datetime(2019, 11, 1, 1, 0, 0)
    some_artists = thisplot.draw_tracks(ax, dataprj, tracks, colors, until=until)
    assert len(some_artists) == 3 * 2  # line, points and head per animal
    plt.close(fig)


def test_no_legend_when_disabled():
    """include_legend False"""
    thisplot = TrackPlot("ross_sea", area_overrides={"include_legend": False})
    fig, ax, _ = thisplot.setup_figure()
    assert thisplot.draw_legend(ax, {"EP01": "#ff0000"}) is None
    plt.close(fig)


def test_other_epsg_projection():
    """an EPSG number without a named projection uses the EPSG projection for the map"""
    thisplot = TrackPlot("ross_sea", area_overrides={"epsg_number": 3976, "show_scalebar": False})
    fig = plt.figure()
    ax, dataprj = thisplot.setup_projection_and_extent()
    assert ax.projection == dataprj
    plt.close(fig)


def test_select_track_points(gps_tracks):
    """growing and trailing selections of points"""
    until = np.datetime64("2019-11-02T00:00:00")
    grown = select_track_points(gps_tracks, until=until)
    assert grown["timestamp"].max() <= datetime(2019, 11, 2)
    assert grown.height == 7 + 6 + 6  # EP03: 0..24h, EP01: 1..21h, EP02: 2..22h

    trailing = select_track_points(gps_tracks, until=until, trail=timedelta(hours=8))
    assert trailing["timestamp"].min() > datetime(2019, 11, 1, 16)
    assert trailing.height == 2 + 2 + 2

    assert select_track_points(gps_tracks).height == gps_tracks.height


def test_output_path(tmp_path):
    """extensions are added when missing, and directories created"""
    assert output_path("a", "", (".jpg", ".png")) == "a.jpg"
    assert output_path("a.PNG", "", (".jpg", ".png")) == "a.PNG"
    outdir = str(tmp_path / "new" / "dir")
    assert output_path("b.gif", outdir, (".gif",)) == os.path.join(outdir, "b.gif")
    assert os.path.isdir(outdir)
    with pytest.raises(ValueError):
        output_path("", "", (".jpg",))
