"""Area definitions: one module per area, each holding an area_definition dict"""
