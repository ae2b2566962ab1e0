#!/usr/bin/env python3
"""
Viewtime -> UTC conversion
Reads a MODIS viewtime raster, recovers the nominal UTC acquisition time from
the product filename and writes per-pixel UTC (and optional civil time) to Parquet.
"""
import argparse
import logging
import sys
import time
from pathlib import Path
from zoneinfo import ZoneInfo

import pyarrow as pa
import pyarrow.parquet as pq

from ..config import (
    COMPRESSION,
    GEOGRAPHIC_CRS,
    LOG_FORMAT,
    OUTPUT_DIR
)
from ..data.filename import parse_product_filename
from ..data.viewtime import ViewtimeGrid, crop_viewtime, extent_polygon, read_viewtime
from ..exceptions import LocSTError
from .local_solar_time import local_solar_time_to_utc

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT,
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)


def viewtime_to_utc(filename, viewtime, extent=None, extent_crs=None, tz=None, zone_provider=ZoneInfo):
    """
    Calculate UTC and optionally civil local time for every viewtime pixel

    Args:
        filename: MODIS product filename, e.g. MOD11_L2.A2018019.1350.006.2018020082352.hdf
        viewtime: Path to a viewtime raster, an open rasterio dataset or a ViewtimeGrid
        extent: Optional area of interest as (xmin, xmax, ymin, ymax)
        extent_crs: CRS of ``extent`` (defaults to geographic lon/lat)
        tz: Optional civil time zone identifier, e.g. "Australia/ACT"
        zone_provider: Time-zone database lookup

    Returns:
        pandas DataFrame, one row per valid pixel
    """
    utc = parse_product_filename(filename)
    logger.info(f"Nominal UTC from filename: {utc}")

    geometry = None
    if extent is not None:
        if extent_crs is None:
            logger.info(f"No CRS given for extent, assuming {GEOGRAPHIC_CRS}")
            extent_crs = GEOGRAPHIC_CRS
        geometry = extent_polygon(*extent)

    if isinstance(viewtime, ViewtimeGrid):
        if geometry is not None:
            raise ValueError("Cannot crop a ViewtimeGrid; pass the raster path or dataset instead")
        grid = viewtime
    elif isinstance(viewtime, (str, Path)):
        grid = read_viewtime(viewtime, geometry, extent_crs)
    elif geometry is not None:
        grid = crop_viewtime(viewtime, geometry, extent_crs)
    else:
        grid = ViewtimeGrid.from_dataset(viewtime)

    return local_solar_time_to_utc(grid, utc, tz=tz, zone_provider=zone_provider)


def write_results(frame, output_file):
    """Write a conversion table to Parquet"""
    output_file = Path(output_file)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    table = pa.Table.from_pandas(frame, preserve_index=False)
    pq.write_table(table, output_file, compression=COMPRESSION)
    logger.info(f"✓ Wrote {table.num_rows} rows to {output_file}")
    return output_file


def main(argv=None):
    parser = argparse.ArgumentParser(description="Convert MODIS viewtime (local solar time) to UTC")
    parser.add_argument("--filename", required=True, help="MODIS product filename carrying the A{YYYY}{DDD} stamp")
    parser.add_argument("--viewtime", required=True, help="Viewtime raster (GeoTIFF)")
    parser.add_argument("--extent", type=float, nargs=4, metavar=("XMIN", "XMAX", "YMIN", "YMAX"),
                        help="Crop to this area of interest")
    parser.add_argument("--extent-crs", type=str, help="CRS of --extent (default: EPSG:4326)")
    parser.add_argument("--tz", type=str, help="Civil time zone for local time, e.g. Australia/ACT")
    parser.add_argument("--output", type=str, help="Output Parquet file")
    args = parser.parse_args(argv)

    logger.info("=" * 60)
    logger.info("Viewtime -> UTC Conversion")
    logger.info("=" * 60)

    viewtime_path = Path(args.viewtime)
    if not viewtime_path.exists():
        logger.error(f"Viewtime raster not found: {viewtime_path}")
        return 1

    output_file = Path(args.output) if args.output else OUTPUT_DIR / f"{viewtime_path.stem}_utc.parquet"

    start_time = time.time()
    try:
        frame = viewtime_to_utc(
            args.filename,
            viewtime_path,
            extent=args.extent,
            extent_crs=args.extent_crs,
            tz=args.tz
        )
    except LocSTError as e:
        logger.error(f"Conversion failed: {e}")
        return 1

    write_results(frame, output_file)

    duration = time.time() - start_time
    logger.info("=" * 60)
    logger.info(f"Finished {len(frame)} pixels in {duration:.2f}s")
    if "utc_difference" in frame and len(frame):
        logger.info(f"UTC difference to filename time: {frame['utc_difference'].min()} .. {frame['utc_difference'].max()}")
    logger.info("=" * 60)

    return 0


if __name__ == "__main__":
    sys.exit(main())
