"""
Data preparation utilities for viewtime processing.

This module contains helpers to read and crop MODIS viewtime rasters and to
recover the nominal UTC acquisition time from product filenames.
"""
