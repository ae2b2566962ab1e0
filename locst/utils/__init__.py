"""
Inspection helpers for conversion output.
"""
