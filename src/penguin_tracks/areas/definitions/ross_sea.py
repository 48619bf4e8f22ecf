"""Area definition"""

# pylint: disable=R0801 # warning for similar lines

area_definition = {
    "use_definitions_from": "antarctica",
    "long_name": "Western Ross Sea",
    "area_summary": "Western Ross Sea, foraging range of the Cape Washington emperor colony",
    # --------------------------------------------
    # Area definition
    # --------------------------------------------
    "round": False,
    "specify_by_bounding_lat": False,
    "bounding_lat": None,
    "specify_by_centre": True,  # specify plot area by centre lat/lon, width, height (km)
    "centre_lon": 170.0,  # degrees E
    "centre_lat": -74.5,  # degrees N
    "width_km": 800,  # width in km of plot area (x direction)
    "height_km": 800,  # height in km of plot area (y direction)
    # --------------------------------------------
    # Plot parameters for this area
    # --------------------------------------------
    "draw_coastlines": False,  # rasters carry the coastline
    "use_cartopy_coastline": "no",
    "legend_location": "upper right",
    "legend_ncols": 1,
    "longitude_gridlines": [150, 160, 170, 180, 190],  # deg E
    "latitude_gridlines": [-70, -72, -74, -76, -78],  # deg N
    "draw_gridlabels": True,
    "mapscale": [
        158.0,  # longitude to position scale bar
        -77.5,  # latitide to position scale bar
        170.0,  # longitude of true scale (ie centre of area)
        -74.5,  # latitude of true scale (ie centre of area)
        100,  # width of scale bar (km)
        "black",  # color of scale bar
        8,  # size of scale bar
    ],
}
