"""Area definition"""

area_definition = {
    "use_definitions_from": "ross_sea",
    "long_name": "Cape Washington",
    "area_summary": "Close-up of the Cape Washington emperor colony and Terra Nova Bay",
    "centre_lon": 165.4,  # degrees E
    "centre_lat": -74.65,  # degrees N
    "width_km": 200,
    "height_km": 200,
    "track_marker_size": 8,
    "longitude_gridlines": [160, 163, 166, 169, 172],  # deg E
    "latitude_gridlines": [-74, -74.5, -75, -75.5],  # deg N
    "mapscale": [
        163.0,  # longitude to position scale bar
        -75.4,  # latitide to position scale bar
        165.4,  # longitude of true scale (ie centre of area)
        -74.65,  # latitude of true scale (ie centre of area)
        20,  # width of scale bar (km)
        "black",  # color of scale bar
        2,  # size of scale bar
    ],
}
