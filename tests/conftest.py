import numpy as np
import pytest
import rasterio
from rasterio.io import MemoryFile
from rasterio.transform import from_origin

# 2 x 2 degree block of 0.5 degree cells, north-west corner at 137E 35S
ORIGIN_TRANSFORM = from_origin(137.0, -35.0, 0.5, 0.5)


def _profile(values, transform, crs, nodata):
    return {
        "driver": "GTiff",
        "height": values.shape[0],
        "width": values.shape[1],
        "count": 1,
        "dtype": values.dtype.name,
        "crs": crs,
        "transform": transform,
        "nodata": nodata,
    }


@pytest.fixture
def open_viewtime():
    """Open an in-memory single band viewtime raster."""
    memfiles = []

    def _open(values, transform=ORIGIN_TRANSFORM, crs="EPSG:4326", nodata=None):
        values = np.asarray(values)
        memfile = MemoryFile()
        memfiles.append(memfile)
        with memfile.open(**_profile(values, transform, crs, nodata)) as dst:
            dst.write(values, 1)
        return memfile.open()

    yield _open

    for memfile in memfiles:
        memfile.close()


@pytest.fixture
def viewtime_tif(tmp_path):
    """Write a 2 x 2 viewtime GeoTIFF with two valid and two fill cells."""
    values = np.array([[236, 250], [-5, 120]], dtype=np.int16)
    path = tmp_path / "vtr_s.tif"
    with rasterio.open(path, "w", **_profile(values, ORIGIN_TRANSFORM, "EPSG:4326", None)) as dst:
        dst.write(values, 1)
    return path
