"""penguin_tracks.tracks.tracks.py

Load, filter and reproject GPS track points.

Track tables are polars DataFrames with canonical columns:

| column | type | |
|---|---|---|
| id | String | animal identifier |
| timestamp | Datetime | time of the GPS fix, UTC without a time zone |
| latitude | Float64 | degrees N |
| longitude | Float64 | degrees E |
| x, y | Float64 | projected coordinates (m), added by `reproject_tracks()` |

Rows are sorted by id, then timestamp.
"""

import logging
import os
from typing import List, Sequence, Tuple, Union

import matplotlib.colors as mcolors
import numpy as np
import polars as pl
from matplotlib import colormaps
from pyproj import CRS, Transformer

log = logging.getLogger(__name__)

ID_COL = "id"
TIME_COL = "timestamp"
LAT_COL = "latitude"
LON_COL = "longitude"

WGS84 = "epsg:4326"


# pylint: disable=too-many-arguments
# pylint: disable=too-many-positional-arguments
def load_tracks(
    filename: str,
    id_col: str = ID_COL,
    time_col: str = TIME_COL,
    lat_col: str = LAT_COL,
    lon_col: str = LON_COL,
    separator: str = ",",
    time_format: str | None = None,
    exclude_ids: Sequence[str] | None = None,
    min_points: int = 2,
) -> pl.DataFrame:
    """Load GPS track points from a delimited text file

    Args:
        filename (str): path of delimited GPS file
        id_col (str): name of animal identifier column in file
        time_col (str): name of timestamp column in file
        lat_col (str): name of latitude column in file
        lon_col (str): name of longitude column in file
        separator (str): column separator. Defaults to ",".
        time_format (str|None): strftime format of timestamps, None to infer.
            Timestamps are returned as naive UTC.
        exclude_ids (Sequence[str]|None): identifiers to drop
        min_points (int): identifiers with fewer records are dropped

    Raises:
        FileNotFoundError: file not found
        KeyError: a required column is missing
        ValueError: coordinates or timestamps can not be parsed, or are missing

    Returns:
        pl.DataFrame: track table with canonical columns, sorted by id and timestamp
    """
    if not os.path.isfile(filename):
        log.error("GPS file %s not found", filename)
        raise FileNotFoundError(f"GPS file {filename} not found")

    log.info("loading GPS tracks from %s", filename)

    df = pl.read_csv(filename, separator=separator, infer_schema_length=0)

    columns = {id_col: ID_COL, time_col: TIME_COL, lat_col: LAT_COL, lon_col: LON_COL}
    for column in columns:
        if column not in df.columns:
            log.error("column %s not found in %s", column, filename)
            raise KeyError(f"column {column} not found in {filename}, has {df.columns}")

    df = df.select([pl.col(src).alias(dst) for src, dst in columns.items()])

    try:
        df = df.with_columns(
            pl.col(ID_COL).str.strip_chars(),
            pl.col(LAT_COL).str.strip_chars().cast(pl.Float64, strict=True),
            pl.col(LON_COL).str.strip_chars().cast(pl.Float64, strict=True),
            # timestamps with an offset are converted to UTC, naive ones are taken as UTC
            pl.col(TIME_COL)
            .str.strip_chars()
            .str.to_datetime(format=time_format, strict=True, time_unit="us", time_zone="UTC")
            .dt.replace_time_zone(None),
        )
    except pl.exceptions.PolarsError as exc:
        log.error("could not parse GPS records in %s: %s", filename, exc)
        raise ValueError(f"could not parse GPS records in {filename}: {exc}") from exc

    for column in (ID_COL, TIME_COL, LAT_COL, LON_COL):
        n_missing = df[column].null_count()
        if n_missing:
            log.error("%d records in %s have no %s value", n_missing, filename, column)
            raise ValueError(f"{n_missing} records in {filename} have no {column} value")

    n_input_ids = df[ID_COL].n_unique()
    log.info("read %d points for %d animals", df.height, n_input_ids)

    return filter_tracks(df, exclude_ids=exclude_ids, min_points=min_points)


def filter_tracks(
    df: pl.DataFrame,
    exclude_ids: Sequence[str] | None = None,
    min_points: int = 2,
) -> pl.DataFrame:
    """Drop excluded identifiers and identifiers with insufficient data

    Args:
        df (pl.DataFrame): track table
        exclude_ids (Sequence[str]|None): identifiers to drop
        min_points (int): identifiers with fewer records than this are dropped

    Returns:
        pl.DataFrame: filtered track table sorted by id and timestamp
    """
    time_dtype = df.schema[TIME_COL]
    if isinstance(time_dtype, pl.Datetime) and time_dtype.time_zone is not None:
        log.debug("converting timestamps from %s to naive UTC", time_dtype.time_zone)
        df = df.with_columns(
            pl.col(TIME_COL).dt.convert_time_zone("UTC").dt.replace_time_zone(None)
        )

    if exclude_ids:
        exclude_ids = [str(i) for i in exclude_ids]
        missing = sorted(set(exclude_ids) - set(df[ID_COL].unique().to_list()))
        if missing:
            log.warning("excluded ids not present in data: %s", missing)
        df = df.filter(~pl.col(ID_COL).is_in(exclude_ids))
        log.info("excluded ids: %s", exclude_ids)

    counts = df.group_by(ID_COL).agg(pl.len().alias("n_points"))
    too_few = counts.filter(pl.col("n_points") < min_points)[ID_COL].to_list()
    if too_few:
        log.info("dropping ids with fewer than %d points: %s", min_points, sorted(too_few))
        df = df.filter(~pl.col(ID_COL).is_in(too_few))

    df = df.sort([ID_COL, TIME_COL])

    log.info("kept %d points for %d animals", df.height, df[ID_COL].n_unique())

    return df


def track_ids(df: pl.DataFrame) -> list[str]:
    """return the distinct animal identifiers in a track table, sorted alphabetically"""
    return sorted(df[ID_COL].unique().to_list())


def track_summary(df: pl.DataFrame) -> pl.DataFrame:
    """per animal summary of a track table

    Args:
        df (pl.DataFrame): track table

    Returns:
        pl.DataFrame: columns id, n_points, start, end, duration_days
    """
    return (
        df.group_by(ID_COL)
        .agg(
            pl.len().alias("n_points"),
            pl.col(TIME_COL).min().alias("start"),
            pl.col(TIME_COL).max().alias("end"),
        )
        .with_columns(
            ((pl.col("end") - pl.col("start")).dt.total_seconds() / 86400.0).alias(
                "duration_days"
            )
        )
        .sort(ID_COL)
    )


def get_unique_colors(
    n: int, cmap_name_override: str | None = None, as_hex: bool = False
) -> List[Union[str, Tuple[float, float, float, float]]]:
    """Get a list of n unique colors, as sampled from the tab20 or tab10 colormap.

    Args:
        n (int): Number of colors required (<= 20 will provide unique colors,
                 otherwise some repetition).
        cmap_name_override (str | None): Override colormap name to use. Typical alternatives are
                                         "tab10", "tab20b", "tab20c", "Set1", "Set2", "Set3".
        as_hex (bool): If True, returns colors as hex strings. If False, returns RGBA tuples.

    Returns:
        List[str | Tuple[float, float, float, float]]: List of colors as hex strings or RGBA tuples.
    """
    if n < 1:
        return []

    if n <= 10:
        cmap_name = "tab10"
    else:
        cmap_name = "tab20"
    if cmap_name_override is not None:
        cmap_name = cmap_name_override

    cmap = colormaps[cmap_name].resampled(n)
    colors: List[Union[str, Tuple[float, float, float, float]]] = [cmap(i) for i in range(cmap.N)]

    if as_hex:
        colors = [mcolors.to_hex(color) for color in colors]

    return colors


def assign_track_colors(ids: Sequence[str], cmap_name: str | None = None) -> dict[str, str]:
    """map animal identifiers to colours

    Identifiers are sorted alphabetically before colours are assigned, so
    the same set of identifiers always gets the same colours.

    Args:
        ids (Sequence[str]): animal identifiers (duplicates are ignored)
        cmap_name (str|None): colormap override, see get_unique_colors()

    Returns:
        dict[str, str]: identifier -> hex colour
    """
    sorted_ids = sorted(set(ids))
    colors = get_unique_colors(len(sorted_ids), cmap_name_override=cmap_name, as_hex=True)
    return {thisid: str(color) for thisid, color in zip(sorted_ids, colors)}


def reproject_tracks(
    df: pl.DataFrame,
    target_crs: CRS | str | int,
    source_crs: CRS | str | int = WGS84,
    out_x_col: str = "x",
    out_y_col: str = "y",
) -> pl.DataFrame:
    """add projected x,y columns to a track table

    Args:
        df (pl.DataFrame): track table with latitude, longitude columns
        target_crs (CRS|str|int): CRS to project in to (eg the raster's CRS)
        source_crs (CRS|str|int): CRS of latitude, longitude. Defaults to WGS84.
        out_x_col (str): name of output x column
        out_y_col (str): name of output y column

    Returns:
        pl.DataFrame: track table with added x,y columns (m)
    """
    transformer = Transformer.from_crs(
        CRS.from_user_input(source_crs), CRS.from_user_input(target_crs), always_xy=True
    )
    x, y = transformer.transform(df[LON_COL].to_numpy(), df[LAT_COL].to_numpy())

    log.info("reprojected %d points to %s", df.height, CRS.from_user_input(target_crs).name)

    return df.with_columns(
        pl.Series(out_x_col, np.asarray(x, dtype=np.float64), dtype=pl.Float64),
        pl.Series(out_y_col, np.asarray(y, dtype=np.float64), dtype=pl.Float64),
    )


def unproject_tracks(
    df: pl.DataFrame,
    source_crs: CRS | str | int,
    target_crs: CRS | str | int = WGS84,
    x_col: str = "x",
    y_col: str = "y",
) -> pl.DataFrame:
    """replace latitude, longitude columns from projected x,y columns

    Args:
        df (pl.DataFrame): track table with x,y columns
        source_crs (CRS|str|int): CRS of the x,y columns
        target_crs (CRS|str|int): geographic CRS. Defaults to WGS84.
        x_col (str): name of x column
        y_col (str): name of y column

    Returns:
        pl.DataFrame: track table with latitude, longitude recomputed from x,y
    """
    transformer = Transformer.from_crs(
        CRS.from_user_input(source_crs), CRS.from_user_input(target_crs), always_xy=True
    )
    lons, lats = transformer.transform(df[x_col].to_numpy(), df[y_col].to_numpy())

    return df.with_columns(
        pl.Series(LAT_COL, np.asarray(lats, dtype=np.float64), dtype=pl.Float64),
        pl.Series(LON_COL, np.asarray(lons, dtype=np.float64), dtype=pl.Float64),
    )
