"""Tests for the coordinate system factory."""

import pytest

from projax.coordinate_systems import (
    FittedCoordinateSystem,
    GeographicCoordinateSystem,
    ProjectedCoordinateSystem,
)
from projax.datums import DatumType, Ellipsoid, HorizontalDatum, PrimeMeridian, Wgs84ConversionInfo
from projax.errors import ConfigurationError, ParseError
from projax.factory import CoordinateSystemFactory
from projax.info import AxisInfo, AxisOrientation, ProjectionParameter
from projax.transforms import AffineTransform
from projax.units import AngularUnit, LinearUnit

_LON = AxisInfo("Lon", AxisOrientation.EAST)
_LAT = AxisInfo("Lat", AxisOrientation.NORTH)
_X = AxisInfo("X", AxisOrientation.EAST)
_Y = AxisInfo("Y", AxisOrientation.NORTH)


@pytest.fixture
def factory():
    return CoordinateSystemFactory()


@pytest.fixture
def bessel_gcs(factory):
    ellipsoid = factory.create_flattened_sphere("Bessel 1841", 6377397.155, 299.1528128, LinearUnit.metre())
    datum = factory.create_horizontal_datum(
        "Amersfoort", DatumType.HD_GEOCENTRIC, ellipsoid,
        Wgs84ConversionInfo(565.417, 50.3319, 465.552, -0.398957, 0.343988, -1.8774, 4.0725),
    )
    return factory.create_geographic_coordinate_system(
        "Amersfoort", AngularUnit.degrees(), datum, PrimeMeridian.greenwich(), _LON, _LAT
    )


class TestValueObjects:
    def test_ellipsoid_derives_inverse_flattening(self, factory):
        e = factory.create_ellipsoid("Test", 6378137.0, 6356752.314245179, LinearUnit.metre())
        assert abs(e.inverse_flattening - 298.257223563) < 1e-6
        assert not e.is_ivf_definitive

    def test_ellipsoid_sphere(self, factory):
        e = factory.create_ellipsoid("Ball", 6371000.0, 6371000.0, LinearUnit.metre())
        assert e.inverse_flattening == 0.0
        assert e.semi_minor_axis == 6371000.0

    def test_flattened_sphere_derives_minor_axis(self, factory):
        e = factory.create_flattened_sphere("WGS 84", 6378137.0, 298.257223563, LinearUnit.metre())
        assert e.equal_params(Ellipsoid.wgs84())

    def test_prime_meridian(self, factory):
        pm = factory.create_prime_meridian("Paris", AngularUnit.grad(), 2.5969213)
        assert pm.equal_params(PrimeMeridian.paris())

    def test_horizontal_datum(self, factory):
        datum = factory.create_horizontal_datum("WGS84", DatumType.HD_GEOCENTRIC, Ellipsoid.wgs84())
        assert datum.equal_params(HorizontalDatum.wgs84())
        assert datum.wgs84_parameters is None

    @pytest.mark.parametrize(
        "create",
        [
            lambda f: f.create_ellipsoid("", 1.0, 1.0, LinearUnit.metre()),
            lambda f: f.create_flattened_sphere("", 1.0, 300.0, LinearUnit.metre()),
            lambda f: f.create_prime_meridian("", AngularUnit.degrees(), 0.0),
            lambda f: f.create_horizontal_datum("", DatumType.HD_OTHER, Ellipsoid.wgs84()),
        ],
        ids=["ellipsoid", "flattened_sphere", "prime_meridian", "datum"],
    )
    def test_empty_name_raises(self, factory, create):
        with pytest.raises(ConfigurationError, match="non-empty name"):
            create(factory)


class TestCoordinateSystems:
    def test_geographic(self, bessel_gcs):
        assert bessel_gcs.name == "Amersfoort"
        assert bessel_gcs.get_axis(1) == _LAT
        assert abs(bessel_gcs.horizontal_datum.ellipsoid.semi_minor_axis - 6356078.963) < 1e-3

    def test_projection(self, factory):
        projection = factory.create_projection(
            "RD New", "Oblique_Stereographic", [ProjectionParameter("latitude_of_origin", 52.15616055555555)]
        )
        assert projection.class_name == "Oblique_Stereographic"
        assert projection.name == "RD New"

    def test_projection_requires_parameters(self, factory):
        with pytest.raises(ConfigurationError, match="at least one parameter"):
            factory.create_projection("Empty", "Mercator", [])

    def test_projected(self, factory, bessel_gcs):
        projection = factory.create_projection(
            "RD New", "Oblique_Stereographic", [ProjectionParameter("central_meridian", 5.38763888888889)]
        )
        pcs = factory.create_projected_coordinate_system(
            "Amersfoort / RD New", bessel_gcs, projection, LinearUnit.metre(), _X, _Y
        )
        assert pcs.horizontal_datum is bessel_gcs.horizontal_datum
        assert pcs.geographic_cs is bessel_gcs
        assert pcs.linear_unit.meters_per_unit == 1.0

    def test_geocentric_axes(self, factory):
        geoc = factory.create_geocentric_coordinate_system(
            "Geocentric", HorizontalDatum.wgs84(), LinearUnit.metre(), PrimeMeridian.greenwich()
        )
        assert [a.name for a in geoc.axis_info] == ["X", "Y", "Z"]
        assert all(a.orientation is AxisOrientation.OTHER for a in geoc.axis_info)

    def test_geographic_empty_name_raises(self, factory):
        with pytest.raises(ConfigurationError):
            factory.create_geographic_coordinate_system(
                "", AngularUnit.degrees(), HorizontalDatum.wgs84(), PrimeMeridian.greenwich(), _LON, _LAT
            )


class TestFitted:
    def test_from_transform(self, factory):
        base = ProjectedCoordinateSystem.wgs84_utm(31, True)
        to_base = AffineTransform(1.0, 0.0, 1000.0, 0.0, 1.0, 2000.0)
        fitted = factory.create_fitted_coordinate_system("Site", base, to_base)
        assert fitted.to_base_transform is to_base
        assert fitted.base_system is base

    def test_from_wkt(self, factory):
        base = ProjectedCoordinateSystem.wgs84_utm(31, True)
        wkt = AffineTransform(2.0, 0.0, 10.0, 0.0, 2.0, -5.0).wkt
        fitted = factory.create_fitted_coordinate_system("Site", base, wkt)
        xy = fitted.to_base_transform.transform([1.0, 1.0])
        assert abs(float(xy[0]) - 12.0) < 1e-12
        assert abs(float(xy[1]) + 3.0) < 1e-12

    def test_unsupported_wkt_raises(self, factory):
        base = ProjectedCoordinateSystem.wgs84_utm(31, True)
        with pytest.raises(ConfigurationError, match="Unsupported"):
            factory.create_fitted_coordinate_system("Site", base, 'PARAM_MT["Exponential", PARAMETER["base", 2]]')


class TestFromWkt:
    def test_geographic(self, factory):
        cs = factory.create_from_wkt(GeographicCoordinateSystem.wgs84().wkt)
        assert isinstance(cs, GeographicCoordinateSystem)
        assert cs.authority_code == 4326

    def test_fitted(self, factory):
        base = ProjectedCoordinateSystem.wgs84_utm(31, True)
        fitted = FittedCoordinateSystem(base, AffineTransform(1.0, 0.0, 5.0, 0.0, 1.0, 5.0), "Site")
        cs = factory.create_from_wkt(fitted.wkt)
        assert isinstance(cs, FittedCoordinateSystem)

    def test_non_coordinate_system_gives_none(self, factory):
        assert factory.create_from_wkt('UNIT["metre", 1, AUTHORITY["EPSG", "9001"]]') is None
        assert factory.create_from_wkt('SPHEROID["Sphere", 6371000, 0]') is None

    def test_malformed_raises(self, factory):
        with pytest.raises(ParseError):
            factory.create_from_wkt('GEOGCS["Broken", DATUM[')

