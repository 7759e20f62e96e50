"""Geodata ingestion pipeline.

This module discovers dataset files, decodes their features, and
dispatches one load worker per file against the geospatial store.
"""
