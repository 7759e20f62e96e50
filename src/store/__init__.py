"""Geospatial store access layer.

This module talks to Tile38 over the Redis protocol and builds the
SET/FSET payloads written for each feature.
"""
