"""
Local solar time conversion.

This module contains the decimal time formatter, the LocST -> UTC converter
and the script that runs the conversion over a MODIS viewtime raster.
"""
