#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Tool to plot animal GPS tracks over bathymetry and sea ice maps, as a static
image and a looping GIF animation

For full list of command line args:

`plot_penguin_tracks.py --help`

Settings are read from a YAML configuration file (default:
src/penguin_tracks/config/definitions/emperor_penguins.yml). Command line
arguments override values in the configuration file.

## Examples

List all available area definitions (ie the areas you can select to plot your tracks on):

`plot_penguin_tracks.py --list_areas`

Plot the tracks, bathymetry and ice files given in the default configuration:

`plot_penguin_tracks.py`

Plot a different GPS file over the Cape Washington area, one animation frame
every 3 hours, showing the last 2 days of each track:

`plot_penguin_tracks.py -t gps_2019.csv -a cape_washington --time_step_hours 3 --trail_hours 48`

Static image only, using your own configuration file:

`plot_penguin_tracks.py -c my_colony.yml --no_animation -o /tmp/plots`
"""

__all__ = ["main"]

import argparse
import logging
import os
import sys
from datetime import timedelta

from penguin_tracks.animation.track_animation import TrackAnimation
from penguin_tracks.areas.areas import (
    list_all_area_definition_names,
    list_all_area_definition_names_only,
)
from penguin_tracks.areas.track_plot import TrackPlot
from penguin_tracks.config.config import DEFAULT_CONFIG_FILE, TrackConfig, load_config
from penguin_tracks.logging_funcs.logging import exception_hook, set_loggers
from penguin_tracks.rasters.rasters import load_rasters
from penguin_tracks.tracks.tracks import load_tracks, track_summary

# pylint: disable=too-many-locals
# pylint: disable=too-many-statements

log = logging.getLogger(__name__)

# Colour constants for highlighting terminal output text
RED = "\033[0;31m"  # pylint: disable=invalid-name
BLACK_BOLD = "\033[1;30m"  # pylint: disable=invalid-name
NC = "\033[0m"  # No Color, pylint: disable=invalid-name


def get_parser() -> argparse.ArgumentParser:
    """command line parser of tool"""

    parser = argparse.ArgumentParser(
        description=(
            "Tool to plot animal GPS tracks over bathymetry and sea ice rasters,"
            " as a static image and a looping GIF animation"
        )
    )

    parser.add_argument(
        "--area",
        "-a",
        help="area definition name. See --list_areas for a full list",
        required=False,
    )

    parser.add_argument(
        "--areadef_file",
        "-af",
        help=(
            "[optional] path of an area definition file, /somepath/<yourareaname>.py, "
            "in the same format as src/penguin_tracks/areas/definitions"
        ),
        required=False,
    )

    parser.add_argument(
        "--bathymetry",
        "-b",
        help="[optional] path of bathymetry GeoTIFF, drawn first",
        required=False,
    )

    parser.add_argument(
        "--config",
        "-c",
        help=f"[optional] path of YAML configuration file. Default is {DEFAULT_CONFIG_FILE}",
        required=False,
    )

    parser.add_argument(
        "--debug",
        "-d",
        help="[optional] show debug log messages",
        action="store_true",
    )

    parser.add_argument(
        "--fps",
        help="[optional, int] animation frames per second",
        type=int,
        required=False,
    )

    parser.add_argument(
        "--ice",
        "-i",
        help="[optional] path of sea ice GeoTIFF, drawn over the bathymetry",
        required=False,
    )

    parser.add_argument(
        "--list_areas",
        "-l",
        help="list available area definition names and exit",
        action="store_true",
    )

    parser.add_argument(
        "--log_dir",
        help="[optional] directory to write info.log, warning.log and error.log files to",
        required=False,
    )

    parser.add_argument(
        "--no_animation",
        "-na",
        help="[optional] only make the static image",
        action="store_true",
    )

    parser.add_argument(
        "--out_dir",
        "-o",
        help="[optional] output directory for the image and animation",
        required=False,
    )

    parser.add_argument(
        "--time_step_hours",
        "-ts",
        help="[optional, float] hours of tracking between animation frames",
        type=float,
        required=False,
    )

    parser.add_argument(
        "--title",
        help="[optional] plot title",
        required=False,
    )

    parser.add_argument(
        "--tracks",
        "-t",
        help="path of delimited GPS track file",
        required=False,
    )

    parser.add_argument(
        "--trail_hours",
        "-th",
        help=(
            "[optional, float] only show the last trail_hours of each track in the "
            "animation. Default is to show the whole path so far"
        ),
        type=float,
        required=False,
    )

    return parser


def config_from_args(args: argparse.Namespace) -> TrackConfig:
    """build the run configuration: command line > YAML file > defaults

    Args:
        args (argparse.Namespace): parsed command line arguments

    Returns:
        TrackConfig: run configuration
    """
    config_file = args.config if args.config else DEFAULT_CONFIG_FILE

    return load_config(
        config_file,
        tracks_file=args.tracks,
        bathymetry_file=args.bathymetry,
        ice_file=args.ice,
        area=args.area,
        output_dir=args.out_dir,
        log_dir=args.log_dir,
        title=args.title,
        fps=args.fps,
        time_step_hours=args.time_step_hours,
        trail_hours=args.trail_hours,
        make_animation=False if args.no_animation else None,
    )


def main(args):
    """main function of tool

    Returns:
        None
    """

    # ----------------------------------------------------------------------
    # Process Command Line Arguments for tool
    # ----------------------------------------------------------------------

    args = get_parser().parse_args(args)

    # Print a list of available area definitions
    if args.list_areas:
        area_list = list_all_area_definition_names()
        mystr = f"{BLACK_BOLD}List of Available Area Names from Area Definitions{NC}"
        print("-" * (len(mystr) - 8))
        print(mystr)
        print("-" * (len(mystr) - 8))
        for area_name in area_list:
            print(f"{area_name}")
        sys.exit(0)

    try:
        config = config_from_args(args)
    except (FileNotFoundError, ValueError) as exc:
        sys.exit(f"{RED}configuration error: {exc}{NC}")

    # ----------------------------------------------------------------------
    # Setup logging
    # ----------------------------------------------------------------------

    default_log_level = logging.INFO
    if args.debug:
        default_log_level = logging.DEBUG

    set_loggers(log_dir=config.log_dir, default_log_level=default_log_level)
    sys.excepthook = exception_hook

    # ----------------------------------------------------------------------
    # Check inputs
    # ----------------------------------------------------------------------

    if not config.tracks_file:
        sys.exit(f"{RED}no GPS track file given{NC}. Use --tracks or tracks_file in the config")
    if not os.path.isfile(config.tracks_file):
        sys.exit(f"{RED}GPS track file does not exist: {config.tracks_file}{NC}")

    raster_files = []
    raster_alphas = []
    for raster_file, alpha in (
        (config.bathymetry_file, config.bathymetry_alpha),
        (config.ice_file, config.ice_alpha),
    ):
        if not raster_file:
            continue
        if not os.path.isfile(raster_file):
            sys.exit(f"{RED}raster file does not exist: {raster_file}{NC}")
        raster_files.append(raster_file)
        raster_alphas.append(alpha)

    if args.areadef_file:
        if not os.path.exists(args.areadef_file):
            sys.exit(
                f"{RED}area definition file does not exist: {args.areadef_file}{NC}\n"
                "It should be an existing file called /somepath/<yourareaname>.py, "
                "in the same format as src/penguin_tracks/areas/definitions"
            )
    elif config.area not in list_all_area_definition_names_only():
        sys.exit(
            f"{RED}area {config.area} not found{NC}. Use --list_areas to show available area names"
        )

    if config.time_step_hours <= 0:
        sys.exit(f"{RED}time_step_hours must be positive{NC}")
    if config.fps <= 0:
        sys.exit(f"{RED}fps must be positive{NC}")

    # ----------------------------------------------------------------------
    # Load tracks and rasters
    # ----------------------------------------------------------------------

    tracks = load_tracks(
        config.tracks_file,
        id_col=config.id_column,
        time_col=config.time_column,
        lat_col=config.latitude_column,
        lon_col=config.longitude_column,
        separator=config.separator,
        time_format=config.time_format,
        exclude_ids=config.exclude_ids,
        min_points=config.min_points,
    )

    for row in track_summary(tracks).iter_rows(named=True):
        log.info(
            "%s: %d points from %s to %s (%.1f days)",
            row["id"],
            row["n_points"],
            row["start"],
            row["end"],
            row["duration_days"],
        )

    thisplot = TrackPlot(config.area, area_file=args.areadef_file)

    rasters = load_rasters(
        raster_files,
        bounds=thisplot.thisarea.xy_extent(),
        bounds_crs=thisplot.thisarea.crs_bng,
        alphas=raster_alphas,
    )

    colors = thisplot.track_colors(tracks)

    # ----------------------------------------------------------------------
    # Static image
    # ----------------------------------------------------------------------

    plot_file = thisplot.plot_tracks(
        tracks,
        rasters=rasters,
        output_file=config.static_file,
        output_dir=config.output_dir,
        title=config.title,
        dpi=config.dpi,
        colors=colors,
    )
    log.info("static image written to %s", plot_file)

    # ----------------------------------------------------------------------
    # Animation
    # ----------------------------------------------------------------------

    if config.make_animation:
        anim_file = TrackAnimation(config.area, area_file=args.areadef_file).animate(
            tracks,
            rasters=rasters,
            output_file=config.animation_file,
            output_dir=config.output_dir,
            time_step=timedelta(hours=config.time_step_hours),
            fps=config.fps,
            trail=None if config.trail_hours is None else timedelta(hours=config.trail_hours),
            dpi=config.animation_dpi,
            title=config.title,
            colors=colors,
        )
        log.info("animation written to %s", anim_file)

    log.info("plot completed ok")


def entry():
    """console script entry point"""
    main(sys.argv[1:])


if __name__ == "__main__":
    main(sys.argv[1:])
