"""Area definition"""

area_definition = {
    "long_name": "Antarctica",
    "area_summary": "Circular map of Antarctica and the Southern Ocean to 60S",
    # --------------------------------------------
    # Area definition
    # --------------------------------------------
    "hemisphere": "south",  # area is in  'south' or 'north'
    "epsg_number": 3031,  # EPSG number for area's projection
    #   --------
    "round": True,  # False=rectangular, True = round map area
    "specify_by_bounding_lat": True,  # for round hemisphere views
    "bounding_lat": -60.0,  # limiting latitude for round areas or None
    #   --------
    "specify_by_centre": False,  # specify plot area by centre lat/lon, width, height (km)
    "centre_lon": None,  # degrees E
    "centre_lat": None,  # degrees N
    "width_km": None,  # width in km of plot area (x direction)
    "height_km": None,  # height in km of plot area (y direction)
    #   --------
    "specify_plot_area_by_lowerleft_corner": False,  # specify by lower left corner, w,h
    "llcorner_lat": None,  # lower left corner latitude
    "llcorner_lon": None,  # lower left corner longitude
    # --------------------------------------------
    # Plot parameters for this area
    # --------------------------------------------
    "fig_width": 10,  # inches
    "fig_height": 10,  # inches
    "axes": [0.05, 0.05, 0.9, 0.85],  # [left, bottom, width, height] of map axis
    "draw_axis_frame": True,
    "background_color": "#F2F7FF",  # background color of map where there is no raster
    "title_fontsize": 14,
    "draw_coastlines": True,  # Draw coastlines
    "coastline_color": "grey",  # Colour to draw coastlines
    "use_cartopy_coastline": "low",  # 'no', 'low','medium', 'high' (downloads Natural Earth)
    # ------------------------------------------------------
    # Track drawing
    # ------------------------------------------------------
    "track_linewidth": 1.0,
    "track_marker_size": 4,  # scatter marker size (points^2)
    "track_alpha": 0.9,
    "track_cmap_name": None,  # None: tab10 for <=10 animals, else tab20
    "mark_track_start": True,  # draw a star at each animal's first fix
    # ------------------------------------------------------
    # Legend
    # ------------------------------------------------------
    "include_legend": True,
    "legend_location": "lower left",
    "legend_fontsize": 8,
    "legend_ncols": 2,
    # ------------------------------------------------------
    # Animation
    # ------------------------------------------------------
    "timestamp_position_xy": (0.02, 0.95),  # axes fraction position of frame time label
    "timestamp_fontsize": 12,
    # ------------------------------------------------------
    #       Lat/lon grid lines to show in main area
    #           - use empty lists to not include
    # ------------------------------------------------------
    "show_gridlines": True,
    "longitude_gridlines": [0, 30, 60, 90, 120, 150, 180, 210, 240, 270, 300, 330],  # deg E
    "latitude_gridlines": [-60, -70, -80],  # deg N
    "gridline_color": "lightgrey",  # color to use for lat/lon grid lines
    "gridlabel_color": "darkgrey",  # color of grid labels
    "gridlabel_size": 9,  # size of grid labels
    "draw_gridlabels": False,  # labels are not drawn on round maps
    # ------------------------------------------------------
    #       Show a scale bar in km
    # ------------------------------------------------------
    "show_scalebar": True,
    "mapscale": [
        -178.0,  # longitude to position scale bar
        -65.0,  # latitide to position scale bar
        0.0,  # longitude of true scale (ie centre of area)
        -90.0,  # latitude of true scale (ie centre of area)
        1000,  # width of scale bar (km)
        "grey",  # color of scale bar
        70,  # size of scale bar
    ],
}
