import geopandas as gpd
import numpy as np
import pandas as pd
import pytest
from rasterio.transform import from_origin

from locst.data.viewtime import (
    ViewtimeGrid,
    crop_viewtime,
    extent_polygon,
    read_viewtime,
)
from locst.exceptions import InvalidInputShapeError
from locst.solar.local_solar_time import local_solar_time_to_utc

from .conftest import ORIGIN_TRANSFORM


def test_cell_centre_coordinates():
    grid = ViewtimeGrid.from_array(np.zeros((2, 2)), ORIGIN_TRANSFORM, "EPSG:4326")

    np.testing.assert_allclose(grid.lon, [[137.25, 137.75], [137.25, 137.75]])
    np.testing.assert_allclose(grid.lat, [[-35.25, -35.25], [-35.75, -35.75]])


def test_cells_past_the_antimeridian_are_wrapped():
    grid = ViewtimeGrid.from_array([[120, 120]], from_origin(179.5, 0, 0.5, 0.5))

    np.testing.assert_allclose(grid.lon, [[179.75, -179.75]])

    # 179.75E -> +11h59m, 179.75W -> -11h59m
    frame = local_solar_time_to_utc(grid, "2018-01-19")
    assert list(frame["utc_instant"]) == [
        pd.Timestamp("2018-01-19 00:01", tz="UTC"),
        pd.Timestamp("2018-01-19 23:59", tz="UTC"),
    ]


def test_grid_must_be_two_dimensional():
    with pytest.raises(InvalidInputShapeError):
        ViewtimeGrid(np.zeros(3), 0.0, 0.0)


def test_scale_factor_is_applied():
    grid = ViewtimeGrid.from_array(np.array([[236]]), ORIGIN_TRANSFORM)

    (obs,) = list(grid.observations())
    assert obs.local_solar_time == pytest.approx(23.6)
    assert obs.longitude == pytest.approx(137.25)
    assert obs.latitude == pytest.approx(-35.25)


def test_invalid_cells_are_excluded():
    values = np.array([[239.0, 240.0, 0.0], [-1.0, np.nan, 500.0]])
    grid = ViewtimeGrid.from_array(values, ORIGIN_TRANSFORM)

    observations = list(grid.observations())
    assert [o.local_solar_time for o in observations] == pytest.approx([23.9, 0.0])
    assert grid.valid_mask().sum() == 2


def test_nodata_and_masked_cells_are_excluded():
    values = np.ma.array([[100, 101], [102, 103]], mask=[[False, True], [False, False]])
    grid = ViewtimeGrid.from_array(values, ORIGIN_TRANSFORM, nodata=102)

    assert [o.local_solar_time for o in grid.observations()] == pytest.approx([10.0, 10.3])


def test_from_dataset(open_viewtime):
    with open_viewtime(np.array([[236, 250], [-5, 120]], dtype=np.int16)) as src:
        grid = ViewtimeGrid.from_dataset(src)

    assert grid.shape == (2, 2)
    assert len(list(grid.observations())) == 2


def test_projected_raster_reports_geographic_coordinates(open_viewtime):
    # UTM 54S, one cell next to the 141E central meridian
    transform = from_origin(500000, 6000000, 1000, 1000)
    with open_viewtime(np.array([[120]], dtype=np.int16), transform=transform, crs="EPSG:32754") as src:
        grid = ViewtimeGrid.from_dataset(src)

    (obs,) = list(grid.observations())
    assert obs.longitude == pytest.approx(141.0, abs=0.1)
    assert -37 < obs.latitude < -35


def test_grid_conversion():
    grid = ViewtimeGrid.from_array(np.array([[236, 250], [-5, 120]]), ORIGIN_TRANSFORM)
    frame = local_solar_time_to_utc(grid, "2018-01-19")

    assert "latitude" in frame.columns
    assert len(frame) == 2
    assert list(frame["latitude"]) == pytest.approx([-35.25, -35.75])
    assert list(frame["local_solar_time_clock"]) == ["23:36", "12:00"]
    # 137.25E -> 9h09m, 137.75E -> 9h11m
    assert list(frame["utc_instant"]) == [
        pd.Timestamp("2018-01-19 14:27", tz="UTC"),
        pd.Timestamp("2018-01-19 02:49", tz="UTC"),
    ]


def test_grid_with_no_valid_cells_gives_empty_table():
    grid = ViewtimeGrid.from_array(np.full((2, 2), 255), ORIGIN_TRANSFORM)
    frame = local_solar_time_to_utc(grid, "2018-01-19", tz="Australia/ACT")

    assert frame.empty
    assert "local_civil_instant" in frame.columns


def test_crop_to_extent(open_viewtime):
    values = np.full((4, 4), 100, dtype=np.int16)
    with open_viewtime(values) as src:
        grid = crop_viewtime(src, extent_polygon(137.1, 137.9, -35.9, -35.1))

    observations = list(grid.observations())
    assert len(observations) == 4
    assert all(o.longitude < 138 for o in observations)
    assert all(o.latitude > -36 for o in observations)


def test_crop_reprojects_the_area_of_interest(open_viewtime):
    polygon = gpd.GeoSeries([extent_polygon(137.1, 137.9, -35.9, -35.1)], crs="EPSG:4326").to_crs("EPSG:3857")
    values = np.full((4, 4), 100, dtype=np.int16)
    with open_viewtime(values) as src:
        grid = crop_viewtime(src, polygon.iloc[0], "EPSG:3857")

    assert len(list(grid.observations())) == 4


def test_read_viewtime(viewtime_tif):
    grid = read_viewtime(viewtime_tif)
    assert grid.shape == (2, 2)

    cropped = read_viewtime(viewtime_tif, extent_polygon(137.1, 137.4, -35.4, -35.1))
    assert cropped.shape == (1, 1)
    assert len(list(cropped.observations())) == 1
