"""Geographic upload conversion service.

Accepts an uploaded GeoJSON, KML, KMZ, GPX, CSV or zipped Shapefile as a
base64 data URL and returns a single GeoJSON FeatureCollection with
``(lon, lat)`` coordinates.
"""

__version__ = "0.1.0"
