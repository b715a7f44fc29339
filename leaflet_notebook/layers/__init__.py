"""
Geometry descriptors and their GeoJSON conversion.

Descriptors use [lat, lon] pairs; everything emitted from here is GeoJSON [lon, lat].
"""
