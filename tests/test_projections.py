"""Tests for the map projections and their shared solvers.

Worked examples are from EPSG Guidance Note 7-2.
"""

import math
import warnings

import jax.numpy as jnp
import pytest

from projax.config import get_roundtrip_tolerance
from projax.errors import ConvergenceWarning, MissingParameterError
from projax.info import ProjectionParameter
from projax.transforms import is_empty
from projax.transforms.projections import (
    AlbersProjection,
    CassiniSoldnerProjection,
    HotineObliqueMercatorProjection,
    KrovakProjection,
    LambertConformalConic2SP,
    Mercator,
    ObliqueMercatorProjection,
    ObliqueStereographicProjection,
    PolyconicProjection,
    ProjectionKind,
    PseudoMercator,
    TransverseMercator,
    adjust_lon,
    phi1z,
    phi2z,
)
from projax.units import LinearUnit

# ──────────────────────────────────────────────
# Tolerances
# ──────────────────────────────────────────────

_EPSG_TOL = 0.05  # metres (or feet), published examples are rounded to 1 cm
_SNYDER_TOL = 0.5  # metres, worked examples are rounded to 0.1 m
_OBLIQUE_TOL = 0.1  # metres
_ORIGIN_TOL = 1e-6  # metres

_WGS84_A = 6378137.0
_WGS84_B = 6356752.314245179
_SPHERE_R = 6371000.0
_BESSEL_A = 6377397.155
_BESSEL_B = 6377397.155 * (1.0 - 1.0 / 299.1528128)


def _params(semi_major=_WGS84_A, semi_minor=_WGS84_B, unit=1.0, **values):
    params = [
        ProjectionParameter("semi_major", semi_major),
        ProjectionParameter("semi_minor", semi_minor),
        ProjectionParameter("unit", unit),
    ]
    params.extend(ProjectionParameter(name, value) for name, value in values.items())
    return params


def _assert_roundtrip(projection, lonlat):
    tol = get_roundtrip_tolerance()
    back = projection.meters_to_degrees(projection.degrees_to_meters(lonlat))
    assert abs(float(back[0]) - lonlat[0]) < tol
    assert abs(float(back[1]) - lonlat[1]) < tol

    via_inverse = projection.inverse().transform(projection.transform(lonlat))
    assert abs(float(via_inverse[0]) - lonlat[0]) < tol
    assert abs(float(via_inverse[1]) - lonlat[1]) < tol


# ──────────────────────────────────────────────
# Projection fixtures
# ──────────────────────────────────────────────


def _utm31():
    return TransverseMercator(_params(
        central_meridian=3.0, latitude_of_origin=0.0, scale_factor=0.9996,
        false_easting=500000.0, false_northing=0.0,
    ))


def _british_national_grid():
    return TransverseMercator(_params(
        semi_major=6377563.396, semi_minor=6377563.396 * (1.0 - 1.0 / 299.3249646),
        central_meridian=-2.0, latitude_of_origin=49.0, scale_factor=0.9996012717,
        false_easting=400000.0, false_northing=-100000.0,
    ))


def _texas_south_central():
    return LambertConformalConic2SP(_params(
        semi_major=6378206.4, semi_minor=6356583.8, unit=LinearUnit.us_survey_foot().meters_per_unit,
        central_meridian=-99.0, latitude_of_origin=27.0 + 50.0 / 60.0,
        standard_parallel_1=28.0 + 23.0 / 60.0, standard_parallel_2=30.0 + 17.0 / 60.0,
        false_easting=2000000.0, false_northing=0.0,
    ))


def _conus_albers():
    return AlbersProjection(_params(
        central_meridian=-96.0, latitude_of_origin=23.0,
        standard_parallel_1=29.5, standard_parallel_2=45.5,
        false_easting=1000.0, false_northing=2000.0,
    ))


def _trinidad():
    clarke_foot = LinearUnit.clarkes_foot().meters_per_unit
    return CassiniSoldnerProjection(_params(
        semi_major=20926348.0 * clarke_foot, semi_minor=20855233.0 * clarke_foot, unit=0.66 * clarke_foot,
        central_meridian=-(61.0 + 20.0 / 60.0), latitude_of_origin=10.0 + 26.0 / 60.0 + 30.0 / 3600.0,
        false_easting=430000.0, false_northing=325000.0,
    ))


def _snyder_albers(**overrides):
    values = dict(
        semi_major=6378206.4, semi_minor=6356583.8,
        central_meridian=-96.0, latitude_of_origin=23.0,
        standard_parallel_1=29.5, standard_parallel_2=45.5,
    )
    values.update(overrides)
    return AlbersProjection(_params(**values))


def _krovak():
    return KrovakProjection(_params(
        semi_major=_BESSEL_A, semi_minor=_BESSEL_B,
        latitude_of_center=49.5, longitude_of_center=24.0 + 50.0 / 60.0,
        azimuth=30.28813972222222, pseudo_standard_parallel_1=78.5, scale_factor=0.9999,
    ))


def _borneo(cls=HotineObliqueMercatorProjection):
    return cls(_params(
        semi_major=6377298.556, semi_minor=6377298.556 * (1.0 - 1.0 / 300.8017),
        latitude_of_center=4.0, longitude_of_center=115.0,
        azimuth=53.31582047222222, rectified_grid_angle=53.13010236111111, scale_factor=0.99984,
        false_easting=590476.87, false_northing=442857.65,
    ))


def _rd_new():
    return ObliqueStereographicProjection(_params(
        semi_major=_BESSEL_A, semi_minor=_BESSEL_B,
        latitude_of_origin=52.0 + 9.0 / 60.0 + 22.178 / 3600.0,
        central_meridian=5.0 + 23.0 / 60.0 + 15.5 / 3600.0,
        scale_factor=0.9999079, false_easting=155000.0, false_northing=463000.0,
    ))


def _cassini():
    return CassiniSoldnerProjection(_params(
        central_meridian=-61.0, latitude_of_origin=10.5, false_easting=430000.0, false_northing=325000.0,
    ))


def _polyconic():
    return PolyconicProjection(_params(
        central_meridian=-54.0, latitude_of_origin=-10.0, false_easting=5000000.0, false_northing=10000000.0,
    ))


class TestSolvers:
    def test_adjust_lon_wraps(self):
        assert abs(adjust_lon(3.0 * math.pi / 2.0) + math.pi / 2.0) < 1e-12
        assert abs(adjust_lon(-3.0 * math.pi / 2.0) - math.pi / 2.0) < 1e-12
        assert adjust_lon(1.0) == 1.0

    def test_adjust_lon_large(self):
        x = adjust_lon(1000.0 * math.pi + 0.5)
        assert -math.pi <= x <= math.pi

    def test_phi2z_converges(self):
        e = math.sqrt(0.0066943799901413165)
        phi = math.radians(45.0)
        con = e * math.sin(phi)
        ts = math.tan(0.5 * (math.pi / 2 - phi)) / ((1.0 - con) / (1.0 + con)) ** (0.5 * e)
        assert abs(phi2z(e, ts) - phi) < 1e-10

    def test_phi2z_nan_warns(self):
        with pytest.warns(ConvergenceWarning, match="phi2z"):
            assert math.isnan(phi2z(0.08, math.nan))

    def test_phi1z_nan_warns(self):
        with pytest.warns(ConvergenceWarning, match="phi1z"):
            assert math.isnan(phi1z(0.08, math.nan))

    def test_phi1z_sphere(self):
        assert abs(phi1z(0.0, 1.0) - math.asin(0.5)) < 1e-15

    def test_inv_mlfn_nan_warns(self):
        with pytest.warns(ConvergenceWarning, match="inv_mlfn"):
            assert math.isnan(_utm31().inv_mlfn(math.nan))

    def test_inv_mlfn_inverts_mlfn(self):
        tm = _utm31()
        phi = math.radians(52.0)
        m = tm.mlfn(phi, math.sin(phi), math.cos(phi))
        assert abs(tm.inv_mlfn(m) - phi) < 1e-11

    def test_no_warning_on_regular_points(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error", ConvergenceWarning)
            _assert_roundtrip(_utm31(), [4.0, 51.0])


class TestMercator:
    def test_1sp_origin(self):
        merc = Mercator(_params(central_meridian=0.0, latitude_of_origin=0.0, scale_factor=1.0))
        xy = merc.transform([0.0, 0.0])
        assert abs(float(xy[0])) < _ORIGIN_TOL
        assert abs(float(xy[1])) < _ORIGIN_TOL

    def test_1sp_antimeridian(self):
        merc = Mercator(_params(central_meridian=0.0, latitude_of_origin=0.0, scale_factor=1.0))
        xy = merc.transform([180.0, 0.0])
        assert abs(float(xy[0]) - math.pi * _WGS84_A) < _ORIGIN_TOL

    def test_1sp_epsg_example(self):
        merc = Mercator(_params(
            semi_major=_BESSEL_A, semi_minor=6377397.155 * (1.0 - 1.0 / 299.15281),
            central_meridian=110.0, latitude_of_origin=0.0, scale_factor=0.997,
            false_easting=3900000.0, false_northing=900000.0,
        ))
        xy = merc.transform([120.0, -3.0])
        assert abs(float(xy[0]) - 5009726.58) < _EPSG_TOL
        assert abs(float(xy[1]) - 569150.82) < _EPSG_TOL

    def test_2sp_epsg_example(self):
        merc = Mercator(_params(
            semi_major=6378245.0, semi_minor=6378245.0 * (1.0 - 1.0 / 298.3),
            central_meridian=51.0, latitude_of_origin=42.0,
        ))
        xy = merc.transform([53.0, 53.0])
        assert abs(float(xy[0]) - 165704.29) < _EPSG_TOL
        assert abs(float(xy[1]) - 5171848.07) < _EPSG_TOL

    def test_variant_naming(self):
        one = Mercator(_params(central_meridian=0.0, latitude_of_origin=0.0, scale_factor=1.0))
        two = Mercator(_params(central_meridian=0.0, latitude_of_origin=0.0))
        assert (one.name, one.authority_code) == ("Mercator_1SP", 9804)
        assert (two.name, two.authority_code) == ("Mercator_2SP", 9805)

    def test_pole_is_nan(self):
        merc = Mercator(_params(central_meridian=0.0, latitude_of_origin=0.0, scale_factor=1.0))
        xy = merc.transform([10.0, 90.0])
        assert math.isnan(float(xy[0]))
        assert math.isnan(float(xy[1]))

    def test_roundtrip(self):
        merc = Mercator(_params(central_meridian=10.0, latitude_of_origin=30.0))
        _assert_roundtrip(merc, [25.0, -60.0])
        _assert_roundtrip(merc, [-150.0, 75.0])


class TestPseudoMercator:
    def test_epsg_example(self):
        web = PseudoMercator(_params(central_meridian=0.0, latitude_of_origin=0.0))
        xy = web.transform([-(100.0 + 20.0 / 60.0), 24.0 + 22.0 / 60.0 + 54.433 / 3600.0])
        assert abs(float(xy[0]) + 11169055.58) < _EPSG_TOL
        assert abs(float(xy[1]) - 2800000.00) < _EPSG_TOL

    def test_spherical(self):
        web = PseudoMercator(_params(central_meridian=0.0, latitude_of_origin=0.0))
        assert web.semi_minor == web.semi_major
        assert web.e == 0.0
        assert web.authority_code == 3856

    def test_roundtrip(self):
        _assert_roundtrip(PseudoMercator(_params(central_meridian=0.0, latitude_of_origin=0.0)), [139.7, 35.7])


class TestTransverseMercator:
    def test_utm_central_meridian(self):
        xy = _utm31().transform([3.0, 0.0])
        assert abs(float(xy[0]) - 500000.0) < _ORIGIN_TOL
        assert abs(float(xy[1])) < _ORIGIN_TOL

    def test_utm_northing_at_45(self):
        xy = _utm31().transform([3.0, 45.0])
        assert abs(float(xy[1]) - 4982950.40) < _EPSG_TOL

    def test_epsg_example(self):
        xy = _british_national_grid().transform([0.5, 50.5])
        assert abs(float(xy[0]) - 577274.99) < _EPSG_TOL
        assert abs(float(xy[1]) - 69740.50) < _EPSG_TOL

    def test_height_passes_through(self):
        xyz = _utm31().transform([3.5, 10.0, 123.0])
        assert xyz.shape == (3,)
        assert float(xyz[2]) == 123.0

    def test_roundtrip(self):
        _assert_roundtrip(_utm31(), [1.2, 43.6])
        _assert_roundtrip(_utm31(), [5.9, -33.0])
        _assert_roundtrip(_british_national_grid(), [-3.2, 55.9])

    def test_reverse_beyond_pole_clamps(self):
        lonlat = _utm31().inverse().transform([500000.0, 2.5e7])
        assert abs(float(lonlat[1]) - 90.0) < 1e-9

    def test_nan_warns(self):
        with pytest.warns(ConvergenceWarning):
            lonlat = _utm31().inverse().transform([math.nan, math.nan])
        assert math.isnan(float(lonlat[1]))


class TestLambertConformalConic:
    def test_epsg_example_us_feet(self):
        xy = _texas_south_central().transform([-96.0, 28.5])
        assert abs(float(xy[0]) - 2963503.91) < _EPSG_TOL
        assert abs(float(xy[1]) - 254759.80) < _EPSG_TOL

    def test_origin(self):
        lcc = _texas_south_central()
        xy = lcc.transform([-99.0, 27.0 + 50.0 / 60.0])
        assert abs(float(xy[0]) - 2000000.0) < _ORIGIN_TOL
        assert abs(float(xy[1])) < _ORIGIN_TOL

    def test_opposite_pole_is_empty(self):
        assert is_empty(_texas_south_central().transform([-99.0, -90.0]))

    def test_roundtrip(self):
        _assert_roundtrip(_texas_south_central(), [-97.7, 30.3])

    def test_equal_parallels(self):
        lcc = LambertConformalConic2SP(_params(
            central_meridian=0.0, latitude_of_origin=45.0,
            standard_parallel_1=45.0, standard_parallel_2=45.0,
        ))
        assert abs(lcc.ns - math.sin(math.radians(45.0))) < 1e-12
        _assert_roundtrip(lcc, [5.0, 50.0])


class TestAlbers:
    def test_origin(self):
        xy = _conus_albers().transform([-96.0, 23.0])
        assert abs(float(xy[0]) - 1000.0) < _ORIGIN_TOL
        assert abs(float(xy[1]) - 2000.0) < _ORIGIN_TOL

    def test_roundtrip(self):
        _assert_roundtrip(_conus_albers(), [-75.0, 35.0])
        _assert_roundtrip(_conus_albers(), [-120.0, 48.0])

    def test_requires_standard_parallels(self):
        with pytest.raises(MissingParameterError, match="standard_parallel_1"):
            AlbersProjection(_params(central_meridian=0.0, latitude_of_origin=0.0))

    def test_snyder_example(self):
        xy = _snyder_albers().transform([-75.0, 35.0])
        assert abs(float(xy[0]) - 1885472.7) < _SNYDER_TOL
        assert abs(float(xy[1]) - 1535925.0) < _SNYDER_TOL

    def test_sphere(self):
        albers = _snyder_albers(semi_major=_SPHERE_R, semi_minor=_SPHERE_R)
        assert albers.e == 0.0
        xy = albers.transform([-96.0, 23.0])
        assert abs(float(xy[0])) < _ORIGIN_TOL
        assert abs(float(xy[1])) < _ORIGIN_TOL
        _assert_roundtrip(albers, [-75.0, 35.0])
        _assert_roundtrip(albers, [-120.0, 60.0])

    def test_equal_parallels(self):
        albers = _snyder_albers(standard_parallel_1=40.0, standard_parallel_2=40.0)
        assert abs(albers.n - math.sin(math.radians(40.0))) < 1e-12
        _assert_roundtrip(albers, [-90.0, 42.0])

    def test_pole_roundtrip(self):
        lonlat = _conus_albers().inverse().transform(_conus_albers().transform([-96.0, 90.0]))
        assert abs(float(lonlat[1]) - 90.0) < 1e-9

    @pytest.mark.parametrize("xy", [[1e8, 1e8], [-1e8, 0.0], [0.0, 1e8], [0.0, -1e8]])
    def test_reverse_outside_area_is_empty(self, xy):
        with warnings.catch_warnings():
            warnings.simplefilter("error", ConvergenceWarning)
            assert is_empty(_conus_albers().inverse().transform(xy))

    def test_nan_warns_and_is_empty(self):
        with pytest.warns(ConvergenceWarning, match="Albers latitude"):
            assert is_empty(_conus_albers().inverse().transform([math.nan, math.nan]))


class TestKrovak:
    def test_roundtrip(self):
        _assert_roundtrip(_krovak(), [16.849771, 50.209011])
        _assert_roundtrip(_krovak(), [14.42, 50.08])

    def test_southwest_orientation(self):
        xy = _krovak().transform([16.849771, 50.209011])
        assert float(xy[0]) < 0.0
        assert float(xy[1]) < 0.0

    def test_output_is_2d(self):
        assert _krovak().transform([14.42, 50.08, 300.0]).shape == (2,)

    def test_epsg_example(self):
        lon = 16.0 + 50.0 / 60.0 + 59.179 / 3600.0
        lat = 50.0 + 12.0 / 60.0 + 32.442 / 3600.0
        xy = _krovak().transform([lon, lat])
        assert abs(float(xy[0]) + 568990.997) < _OBLIQUE_TOL
        assert abs(float(xy[1]) + 1050538.643) < _OBLIQUE_TOL

    def test_south_pole_forward_is_finite(self):
        xy = _krovak().transform([24.0 + 50.0 / 60.0, -90.0])
        assert xy.shape == (2,)
        assert bool(jnp.all(jnp.isfinite(xy)))

    def test_cone_apex_reverse_is_finite(self):
        lonlat = _krovak().inverse().transform([0.0, 0.0])
        assert bool(jnp.all(jnp.isfinite(lonlat)))
        assert float(lonlat[1]) > 50.0

    def test_nan_warns(self):
        with pytest.warns(ConvergenceWarning, match="Krovak latitude"):
            lonlat = _krovak().inverse().transform([math.nan, math.nan])
        assert math.isnan(float(lonlat[1]))

    def test_requires_azimuth(self):
        with pytest.raises(MissingParameterError, match="azimuth"):
            KrovakProjection(_params(latitude_of_center=49.5, longitude_of_center=24.8))


class TestPolyconic:
    def test_origin(self):
        xy = _polyconic().transform([-54.0, -10.0])
        assert abs(float(xy[0]) - 5000000.0) < _ORIGIN_TOL
        assert abs(float(xy[1]) - 10000000.0) < _ORIGIN_TOL

    def test_roundtrip(self):
        _assert_roundtrip(_polyconic(), [-50.0, -5.0])
        _assert_roundtrip(_polyconic(), [-58.0, -20.0])

    def test_equator_roundtrip(self):
        _assert_roundtrip(_polyconic(), [-52.0, 0.0])

    def test_sphere_reference(self):
        poly = PolyconicProjection(_params(
            semi_major=_SPHERE_R, semi_minor=_SPHERE_R, central_meridian=0.0, latitude_of_origin=0.0,
        ))
        xy = poly.transform([60.0, 30.0])
        assert abs(float(xy[0]) - _SPHERE_R * math.sqrt(3.0) / 2.0) < _ORIGIN_TOL
        assert abs(float(xy[1]) - _SPHERE_R * (math.pi / 6.0 + math.sqrt(3.0) - 1.5)) < _ORIGIN_TOL
        _assert_roundtrip(poly, [60.0, 30.0])

    def test_nan_warns_and_is_empty(self):
        with pytest.warns(ConvergenceWarning, match="Polyconic latitude"):
            assert is_empty(_polyconic().inverse().transform([math.nan, math.nan]))

    def test_output_is_2d(self):
        assert _polyconic().transform([-50.0, -5.0, 10.0]).shape == (2,)


class TestCassiniSoldner:
    def test_origin(self):
        xy = _cassini().transform([-61.0, 10.5])
        assert abs(float(xy[0]) - 430000.0) < _ORIGIN_TOL
        assert abs(float(xy[1]) - 325000.0) < _ORIGIN_TOL

    def test_roundtrip(self):
        _assert_roundtrip(_cassini(), [-61.5, 10.25])

    def test_epsg_example_links(self):
        xy = _trinidad().transform([-62.0, 10.0])
        assert abs(float(xy[0]) - 66644.94) < _EPSG_TOL
        assert abs(float(xy[1]) - 82536.22) < _EPSG_TOL

    def test_epsg_example_roundtrip(self):
        _assert_roundtrip(_trinidad(), [-62.0, 10.0])

    def test_nan_warns(self):
        with pytest.warns(ConvergenceWarning, match="Cassini-Soldner footpoint latitude"):
            lonlat = _cassini().inverse().transform([math.nan, math.nan])
        assert math.isnan(float(lonlat[1]))


class TestObliqueMercator:
    def test_hotine_epsg_example(self):
        lon = 115.0 + 48.0 / 60.0 + 19.8196 / 3600.0
        lat = 5.0 + 23.0 / 60.0 + 14.1129 / 3600.0
        xy = _borneo().transform([lon, lat])
        assert abs(float(xy[0]) - 679245.73) < _OBLIQUE_TOL
        assert abs(float(xy[1]) - 596562.78) < _OBLIQUE_TOL

    def test_hotine_roundtrip(self):
        _assert_roundtrip(_borneo(), [115.0 + 48.0 / 60.0 + 19.8196 / 3600.0, 5.0 + 23.0 / 60.0 + 14.1129 / 3600.0])

    def test_oblique_roundtrip(self):
        _assert_roundtrip(_borneo(ObliqueMercatorProjection), [116.5, 6.0])

    def test_variants_differ_by_centre_offset(self):
        p = [116.0, 5.0]
        a = _borneo().transform(p)
        b = _borneo(ObliqueMercatorProjection).transform(p)
        assert float(jnp.max(jnp.abs(a - b))) > 1.0

    def test_names(self):
        assert _borneo().authority_code == 9812
        assert _borneo(ObliqueMercatorProjection).name == "Oblique_Mercator"


class TestObliqueStereographic:
    def test_epsg_example(self):
        xy = _rd_new().transform([6.0, 53.0])
        assert abs(float(xy[0]) - 196105.283) < _EPSG_TOL
        assert abs(float(xy[1]) - 557057.739) < _EPSG_TOL

    def test_origin(self):
        proj = _rd_new()
        xy = proj.transform([5.0 + 23.0 / 60.0 + 15.5 / 3600.0, 52.0 + 9.0 / 60.0 + 22.178 / 3600.0])
        assert abs(float(xy[0]) - 155000.0) < 1e-3
        assert abs(float(xy[1]) - 463000.0) < 1e-3

    def test_roundtrip(self):
        _assert_roundtrip(_rd_new(), [4.9, 52.37])
        _assert_roundtrip(_rd_new(), [5.38763889, 52.15616056])

    def test_nan_warns(self):
        with pytest.warns(ConvergenceWarning, match="Oblique stereographic latitude"):
            lonlat = _rd_new().inverse().transform([math.nan, math.nan])
        assert math.isnan(float(lonlat[1]))


class TestMapProjectionBase:
    def test_missing_required_parameter(self):
        with pytest.raises(MissingParameterError, match="central_meridian"):
            TransverseMercator(_params(latitude_of_origin=0.0))

    def test_alternate_origin_names(self):
        tm = TransverseMercator(_params(longitude_of_center=3.0, latitude_of_center=0.0))
        assert abs(tm.central_meridian - math.radians(3.0)) < 1e-15

    def test_parameter_access(self):
        tm = _utm31()
        assert tm.num_parameters == 8
        assert tm.get_parameter(0).name == "semi_major"
        assert tm.get_parameter("SCALE_FACTOR").value == 0.9996
        assert tm.get_parameter("azimuth") is None

    def test_false_origin_in_units(self):
        feet = LinearUnit.foot().meters_per_unit
        tm = TransverseMercator(_params(
            unit=feet, central_meridian=3.0, latitude_of_origin=0.0, false_easting=1000.0,
        ))
        xy = tm.transform([3.0, 0.0])
        assert abs(float(xy[0]) - 1000.0) < 1e-6

    def test_inverse_pairing(self):
        tm = _utm31()
        assert tm.inverse().inverse() is tm
        assert tm.inverse().is_inverse

    def test_invert_matches_inverse(self):
        tm = _utm31()
        p = [510000.0, 5500000.0]
        expected = tm.inverse().transform(p)
        tm.invert()
        assert jnp.all(jnp.abs(tm.transform(p) - expected) < 1e-12)

    def test_equal_params(self):
        assert _utm31().equal_params(_utm31())
        assert not _utm31().equal_params(_utm31().inverse())

    def test_wkt(self):
        tm = _utm31()
        assert tm.wkt.startswith('PARAM_MT["Transverse_Mercator", PARAMETER["semi_major", 6378137.0]')
        assert tm.inverse().wkt.startswith('INVERSE_MT[PARAM_MT["Transverse_Mercator"')

    def test_transform_list(self):
        out = _utm31().transform_list([[3.0, 0.0], [3.0, 45.0]])
        assert len(out) == 2
        assert abs(float(out[0][0]) - 500000.0) < _ORIGIN_TOL


class TestProjectionKind:
    @pytest.mark.parametrize(
        "name, kind",
        [
            ("Transverse_Mercator", ProjectionKind.TRANSVERSE_MERCATOR),
            ("transverse mercator", ProjectionKind.TRANSVERSE_MERCATOR),
            ("Mercator_1SP", ProjectionKind.MERCATOR),
            ("Popular Visualisation Pseudo-Mercator", ProjectionKind.PSEUDO_MERCATOR),
            ("Albers_Conic_Equal_Area", ProjectionKind.ALBERS),
            ("Lambert_Conformal_Conic_2SP", ProjectionKind.LAMBERT_CONFORMAL_CONIC),
            ("Hotine_Oblique_Mercator", ProjectionKind.HOTINE_OBLIQUE_MERCATOR),
            ("Oblique_Stereographic", ProjectionKind.OBLIQUE_STEREOGRAPHIC),
            ("KROVAK", ProjectionKind.KROVAK),
        ],
    )
    def test_from_name(self, name, kind):
        assert ProjectionKind.from_name(name) is kind

    def test_unknown(self):
        assert ProjectionKind.from_name("Lambert_Conformal_Conic_1SP") is None
        assert ProjectionKind.from_name("Sinusoidal") is None

    def test_create(self):
        proj = ProjectionKind.CASSINI_SOLDNER.create(_params(central_meridian=0.0, latitude_of_origin=0.0))
        assert isinstance(proj, CassiniSoldnerProjection)
        assert ProjectionKind.POLYCONIC.projection_class is PolyconicProjection
