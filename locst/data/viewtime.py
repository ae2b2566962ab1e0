"""
Viewtime raster handling
Reads MODIS viewtime rasters, crops them to an area of interest and exposes
one (lon, lat, local solar time) observation per valid cell
"""
import logging

import geopandas as gpd
import numpy as np
import rasterio
from rasterio.crs import CRS
from rasterio.mask import mask
from rasterio.transform import xy
from rasterio.warp import transform as transform_coords
from shapely.geometry import box

from ..config import (
    GEOGRAPHIC_CRS,
    VIEWTIME_MAX,
    VIEWTIME_MIN,
    VIEWTIME_SCALE_FACTOR
)
from ..exceptions import InvalidInputShapeError
from ..models import Observation

logger = logging.getLogger(__name__)


class ViewtimeGrid:
    """
    Raw viewtime values with the lon/lat of every cell centre.

    Values are kept unscaled; ``VIEWTIME_SCALE_FACTOR`` is applied when
    observations are produced. Cells that are masked, equal to ``nodata``,
    NaN, >= VIEWTIME_MAX or < VIEWTIME_MIN are excluded.
    """

    def __init__(self, values, lon, lat, nodata=None, scale_factor=VIEWTIME_SCALE_FACTOR):
        values = np.ma.asarray(values)
        if values.ndim != 2:
            raise InvalidInputShapeError(f"Viewtime grid must be 2-D, got shape {values.shape}")

        self.values = values
        # cell centres past the antimeridian (e.g. 180.25) are wrapped into [-180, 180]
        lon = np.asarray(lon, dtype=float)
        lon = np.where(lon > 180, lon - 360, np.where(lon < -180, lon + 360, lon))
        self.lon = np.broadcast_to(lon, values.shape)
        self.lat = np.broadcast_to(np.asarray(lat, dtype=float), values.shape)
        self.nodata = nodata
        self.scale_factor = scale_factor

    @classmethod
    def from_array(cls, values, transform, crs=GEOGRAPHIC_CRS, nodata=None):
        """Build a grid from an array and its affine transform, deriving cell centre lon/lat."""
        values = np.ma.asarray(values)
        rows, cols = np.indices(values.shape)
        xs, ys = xy(transform, rows.ravel(), cols.ravel(), offset="center")
        xs = np.asarray(xs, dtype=float)
        ys = np.asarray(ys, dtype=float)

        if crs is None:
            logger.warning("No CRS found, assuming geographic lon/lat coordinates")
        elif not CRS.from_user_input(crs).is_geographic:
            logger.info(f"Transforming cell coordinates from {crs} to {GEOGRAPHIC_CRS}")
            xs, ys = transform_coords(crs, GEOGRAPHIC_CRS, xs, ys)
            xs = np.asarray(xs, dtype=float)
            ys = np.asarray(ys, dtype=float)

        return cls(
            values,
            xs.reshape(values.shape),
            ys.reshape(values.shape),
            nodata=nodata
        )

    @classmethod
    def from_dataset(cls, dataset, band=1):
        """Build a grid from one band of an open rasterio dataset."""
        values = dataset.read(band, masked=True)
        return cls.from_array(values, dataset.transform, dataset.crs, dataset.nodata)

    @property
    def shape(self):
        return self.values.shape

    def valid_mask(self):
        """Boolean array, True where the cell holds a usable viewtime value."""
        raw = np.ma.getdata(self.values).astype(float)
        valid = ~np.ma.getmaskarray(self.values)
        valid &= np.isfinite(raw)
        valid &= (raw >= VIEWTIME_MIN) & (raw < VIEWTIME_MAX)
        if self.nodata is not None and not np.isnan(self.nodata):
            valid &= raw != self.nodata
        return valid

    def observations(self):
        """Yield one Observation per valid cell, row by row."""
        valid = self.valid_mask()
        excluded = valid.size - int(valid.sum())
        if excluded:
            logger.info(f"Excluding {excluded} of {valid.size} viewtime cells as invalid")

        raw = np.ma.getdata(self.values).astype(float)
        for row, col in zip(*np.nonzero(valid)):
            yield Observation(
                longitude=float(self.lon[row, col]),
                local_solar_time=float(raw[row, col]) * self.scale_factor,
                latitude=float(self.lat[row, col])
            )


def extent_polygon(xmin, xmax, ymin, ymax):
    """Rectangle polygon from an extent given as (xmin, xmax, ymin, ymax)."""
    return box(xmin, ymin, xmax, ymax)


def crop_viewtime(dataset, geometry, geometry_crs=GEOGRAPHIC_CRS, band=1):
    """
    Crop a viewtime raster to a polygon

    Args:
        dataset: Open rasterio dataset holding the viewtime band
        geometry: Area of interest (shapely polygon)
        geometry_crs: CRS the polygon coordinates are expressed in
        band: Band index to read

    Returns:
        ViewtimeGrid restricted to the polygon's bounding window, cells
        outside the polygon masked
    """
    target_crs = dataset.crs.to_wkt() if dataset.crs else GEOGRAPHIC_CRS
    logger.info(f"Reprojecting area of interest from {geometry_crs} to {dataset.crs or GEOGRAPHIC_CRS}")
    shapes = gpd.GeoSeries([geometry], crs=geometry_crs).to_crs(target_crs)

    out_image, out_transform = mask(
        dataset,
        list(shapes.geometry),
        crop=True,
        all_touched=True,
        filled=False,
        indexes=band
    )
    logger.info(f"Cropped viewtime to {out_image.shape[1]} x {out_image.shape[0]} pixels")

    return ViewtimeGrid.from_array(out_image, out_transform, dataset.crs, dataset.nodata)


def read_viewtime(path, geometry=None, geometry_crs=GEOGRAPHIC_CRS, band=1):
    """Open a viewtime raster and return it as a grid, cropped when a polygon is given."""
    logger.info(f"Opening viewtime raster: {path}")
    with rasterio.open(path) as src:
        logger.info(f"Viewtime CRS: {src.crs}")
        logger.info(f"Viewtime shape: {src.width} x {src.height} pixels")
        if geometry is not None:
            return crop_viewtime(src, geometry, geometry_crs, band=band)
        return ViewtimeGrid.from_dataset(src, band=band)
