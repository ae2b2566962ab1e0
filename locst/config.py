"""
Configuration for local solar time conversion
"""
from pathlib import Path

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent

# Output directory
OUTPUT_DIR = PROJECT_ROOT / "data" / "results"

# Viewtime SDS scale factor (MOD11 user guide, 3.2 Scientific Data Sets)
VIEWTIME_SCALE_FACTOR = 0.1

# Raw viewtime values outside [VIEWTIME_MIN, VIEWTIME_MAX) are fill values
VIEWTIME_MIN = 0
VIEWTIME_MAX = 240

# Earth rotation: 15 degrees of longitude per hour
DEGREES_PER_HOUR = 15.0
MINUTES_PER_DAY = 24 * 60

# Pixel coordinates are reported in geographic lon/lat
GEOGRAPHIC_CRS = "EPSG:4326"

# Parquet output
COMPRESSION = "snappy"

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
