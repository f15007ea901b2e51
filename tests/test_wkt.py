"""Tests for the WKT tokenizer and readers."""

import math

import pytest

from projax.coordinate_systems import GeographicCoordinateSystem, ProjectedCoordinateSystem
from projax.datums import Ellipsoid, HorizontalDatum, PrimeMeridian
from projax.errors import ConfigurationError, ParseError
from projax.info import AxisInfo, AxisOrientation
from projax.operations import CoordinateTransformationFactory
from projax.transforms import AffineTransform
from projax.units import AngularUnit, LinearUnit, Unit
from projax.wkt import TokenType, WktStreamTokenizer, parse_coordinate_system, parse_math_transform

# ──────────────────────────────────────────────
# Fixtures
# ──────────────────────────────────────────────

_WGS84_GEOGCS = """GEOGCS["WGS 84",
    DATUM["WGS_1984",
        SPHEROID["WGS 84",6378137,298.257223563,AUTHORITY["EPSG","7030"]],
        AUTHORITY["EPSG","6326"]],
    PRIMEM["Greenwich",0,AUTHORITY["EPSG","8901"]],
    UNIT["degree",0.01745329251994328,AUTHORITY["EPSG","9122"]],
    AUTHORITY["EPSG","4326"]]"""

_NAD83_UTM10 = """PROJCS["NAD83 / UTM zone 10N",
    GEOGCS["NAD83",
        DATUM["North_American_Datum_1983",
            SPHEROID["GRS 1980",6378137,298.257222101,AUTHORITY["EPSG","7019"]],
            TOWGS84[0,0,0,0,0,0,0],
            AUTHORITY["EPSG","6269"]],
        PRIMEM["Greenwich",0],
        UNIT["degree",0.0174532925199433]],
    PROJECTION["Transverse_Mercator"],
    PARAMETER["latitude_of_origin",0],
    PARAMETER["central_meridian",-123],
    PARAMETER["scale_factor",0.9996],
    PARAMETER["false_easting",500000],
    PARAMETER["false_northing",0],
    UNIT["metre",1,AUTHORITY["EPSG","9001"]],
    AXIS["Easting",EAST],
    AXIS["Northing",NORTH],
    AUTHORITY["EPSG","26910"]]"""

_DATUM = 'DATUM["D", SPHEROID["S", 6378137, 298.257223563]{}]'
_GEOGCS_TAIL = 'GEOGCS["G", {}]'
_PRIMEM = 'PRIMEM["Greenwich", 0]'
_DEGREE = 'UNIT["degree", 0.0174532925199433]'


def _tokens(text):
    t = WktStreamTokenizer(text)
    out = []
    while t.next_token() is not TokenType.EOF:
        out.append((t.token, t.token_type))
    return out


class TestTokenizer:
    def test_parameter_clause(self):
        assert _tokens('PARAMETER["elt_0_1", -1.5E-3]') == [
            ("PARAMETER", TokenType.WORD),
            ("[", TokenType.SYMBOL),
            ('"', TokenType.SYMBOL),
            ("elt_0_1", TokenType.WORD),
            ('"', TokenType.SYMBOL),
            (",", TokenType.SYMBOL),
            ("-1.5E-3", TokenType.NUMBER),
            ("]", TokenType.SYMBOL),
        ]

    def test_word_with_trailing_digits(self):
        assert _tokens("TOWGS84[") == [("TOWGS84", TokenType.WORD), ("[", TokenType.SYMBOL)]

    @pytest.mark.parametrize(
        ("text", "value"),
        [("6378137", 6378137.0), ("-123", -123.0), ("0.9996", 0.9996), ("1.0E+05", 1.0e5), ("2.5E-7", 2.5e-7)],
    )
    def test_numbers(self, text, value):
        t = WktStreamTokenizer(text)
        assert t.read_number() == value

    def test_numeric_value_of_word_is_nan(self):
        t = WktStreamTokenizer("GEOGCS")
        t.next_token()
        assert math.isnan(t.numeric_value)

    def test_whitespace_kept_when_asked(self):
        t = WktStreamTokenizer("A \nB")
        assert t.next_token(ignore_whitespace=False) is TokenType.WORD
        assert t.next_token(ignore_whitespace=False) is TokenType.WHITESPACE
        assert t.next_token(ignore_whitespace=False) is TokenType.EOL

    def test_line_and_column(self):
        t = WktStreamTokenizer("A\nBCD")
        t.next_token()
        assert (t.line, t.column) == (1, 2)
        t.next_token()
        assert t.token == "BCD"
        assert (t.line, t.column) == (2, 4)

    def test_quoted_word_preserves_spaces(self):
        t = WktStreamTokenizer('"NAD83 / UTM  zone 10N"')
        assert t.read_double_quoted_word() == "NAD83 / UTM  zone 10N"

    def test_unterminated_quote(self):
        t = WktStreamTokenizer('"abc')
        with pytest.raises(ParseError, match="Unterminated"):
            t.read_double_quoted_word()

    @pytest.mark.parametrize("text", ['AUTHORITY["EPSG", "4326"]', 'AUTHORITY["EPSG", 4326]'])
    def test_authority(self, text):
        t = WktStreamTokenizer(text)
        assert t.read_authority() == ("EPSG", 4326)

    def test_authority_bad_code(self):
        t = WktStreamTokenizer('AUTHORITY["EPSG", "abc"]')
        with pytest.raises(ParseError, match="Invalid authority code"):
            t.read_authority()

    def test_read_token_mismatch(self):
        t = WktStreamTokenizer("[")
        with pytest.raises(ParseError, match=r"Expecting \('\]'\)"):
            t.read_token("]")

    def test_next_element(self):
        t = WktStreamTokenizer(", X ] ;")
        assert t.next_element() is True
        assert t.token == "X"
        assert t.next_element() is False
        with pytest.raises(ParseError):
            t.next_element()


class TestValueObjects:
    def test_unit(self):
        unit = parse_coordinate_system('UNIT["metre", 1, AUTHORITY["EPSG", "9001"]]')
        assert type(unit) is Unit
        assert unit.conversion_factor == 1.0
        assert unit.authority_code == 9001

    def test_spheroid(self):
        e = parse_coordinate_system('SPHEROID["WGS 84", 6378137, 298.257223563, AUTHORITY["EPSG", "7030"]]')
        assert e.equal_params(Ellipsoid.wgs84())
        assert e.authority_code == 7030

    def test_sphere(self):
        e = parse_coordinate_system('SPHEROID["Sphere", 6371000, 0]')
        assert e.semi_minor_axis == 6371000.0

    def test_prime_meridian(self):
        pm = parse_coordinate_system('PRIMEM["Lisbon", -9.131906111111]')
        assert isinstance(pm, PrimeMeridian)
        assert pm.longitude == -9.131906111111

    @pytest.mark.parametrize(
        "ellipsoid",
        [Ellipsoid.wgs84(), Ellipsoid.clarke1866(), Ellipsoid.clarke1880(), Ellipsoid.sphere()],
        ids=["wgs84", "clarke1866", "clarke1880_feet", "sphere"],
    )
    def test_spheroid_round_trip(self, ellipsoid):
        parsed = parse_coordinate_system(ellipsoid.wkt)
        assert parsed.equal_params(ellipsoid)
        assert parsed.axis_unit.meters_per_unit == 1.0

    def test_axes_definitive_spheroid_writes_ivf(self):
        wkt = Ellipsoid.clarke1866().wkt
        ivf = float(wkt.split(",")[2])
        assert abs(ivf - 294.9786982138982) < 1e-6

    def test_paris_round_trip(self):
        parsed = parse_coordinate_system(PrimeMeridian.paris().wkt)
        assert parsed.equal_params(PrimeMeridian.paris())
        assert PrimeMeridian.paris().equal_params(parsed)

    def test_datum_with_towgs84(self):
        datum = parse_coordinate_system(_DATUM.format(", TOWGS84[-87, -98, -121]"))
        assert isinstance(datum, HorizontalDatum)
        p = datum.wgs84_parameters
        assert (p.dx, p.dy, p.dz) == (-87.0, -98.0, -121.0)
        assert p.ppm == 0.0

    def test_towgs84_seven_values(self):
        datum = parse_coordinate_system(_DATUM.format(", TOWGS84[1, 2, 3, 4, 5, 6, 7]"))
        assert datum.wgs84_parameters.ppm == 7.0

    @pytest.mark.parametrize("values", ["1, 2", "1, 2, 3, 4, 5, 6, 7, 8"])
    def test_towgs84_bad_count(self, values):
        with pytest.raises(ParseError, match="TOWGS84"):
            parse_coordinate_system(_DATUM.format(f", TOWGS84[{values}]"))


class TestGeographic:
    def test_wgs84(self):
        gcs = parse_coordinate_system(_WGS84_GEOGCS)
        assert isinstance(gcs, GeographicCoordinateSystem)
        assert gcs.name == "WGS 84"
        assert gcs.horizontal_datum.ellipsoid.semi_major_axis == 6378137.0
        assert gcs.horizontal_datum.authority_code == 6326
        assert gcs.prime_meridian.authority_code == 8901
        assert gcs.authority_code == 4326
        assert gcs.equal_params(GeographicCoordinateSystem.wgs84())

    def test_default_axes(self):
        gcs = parse_coordinate_system(_WGS84_GEOGCS)
        assert gcs.axis_info == [AxisInfo("Lon", AxisOrientation.EAST), AxisInfo("Lat", AxisOrientation.NORTH)]

    def test_clauses_in_any_order(self):
        text = _GEOGCS_TAIL.format(
            f'AUTHORITY["EPSG", 4326], {_DEGREE}, AXIS["Lat", NORTH], AXIS["Lon", EAST], {_PRIMEM}, '
            + _DATUM.format("")
        )
        gcs = parse_coordinate_system(text)
        assert gcs.authority_code == 4326
        assert [a.orientation for a in gcs.axis_info] == [AxisOrientation.NORTH, AxisOrientation.EAST]

    def test_quoted_axis_orientation(self):
        gcs = parse_coordinate_system(
            _GEOGCS_TAIL.format(f'{_DATUM.format("")}, {_PRIMEM}, {_DEGREE}, AXIS["Lon", "east"], AXIS["Lat", "north"]')
        )
        assert gcs.get_axis(0).orientation is AxisOrientation.EAST

    def test_unknown_axis_orientation(self):
        with pytest.raises(ParseError, match="axis orientation"):
            parse_coordinate_system(
                _GEOGCS_TAIL.format(f'{_DATUM.format("")}, {_PRIMEM}, {_DEGREE}, AXIS["Lon", SIDEWAYS]')
            )

    @pytest.mark.parametrize(
        ("parts", "missing"),
        [
            ((_PRIMEM, _DEGREE), "DATUM"),
            ((_DATUM.format(""), _DEGREE), "PRIMEM"),
            ((_DATUM.format(""), _PRIMEM), "UNIT"),
        ],
    )
    def test_missing_clause(self, parts, missing):
        with pytest.raises(ParseError, match=f"has no {missing}"):
            parse_coordinate_system(_GEOGCS_TAIL.format(", ".join(parts)))

    def test_unexpected_clause_position(self):
        with pytest.raises(ParseError) as info:
            parse_coordinate_system('GEOGCS["WGS 84",\nFOO')
        assert info.value.line == 2
        assert info.value.column == 4
        assert "(line 2, column 4)" in str(info.value)


class TestProjected:
    def test_nad83_utm(self):
        pcs = parse_coordinate_system(_NAD83_UTM10)
        assert isinstance(pcs, ProjectedCoordinateSystem)
        assert pcs.authority_code == 26910
        assert pcs.projection.class_name == "Transverse_Mercator"
        assert pcs.projection.get_parameter("central_meridian").value == -123.0
        assert pcs.get_axis(0) == AxisInfo("Easting", AxisOrientation.EAST)
        assert pcs.horizontal_datum.wgs84_parameters.has_zero_values_only

    def test_parsed_system_transforms(self):
        pcs = parse_coordinate_system(_NAD83_UTM10)
        ct = CoordinateTransformationFactory().create_from_coordinate_systems(pcs.geographic_cs, pcs)
        xy = ct.math_transform.transform([-123.0, 0.0])
        assert abs(float(xy[0]) - 500000.0) < 1e-3
        assert abs(float(xy[1])) < 1e-3

    def test_default_unit_is_metre(self):
        text = (
            f'PROJCS["P", {_WGS84_GEOGCS}, PROJECTION["Mercator_1SP"], '
            'PARAMETER["central_meridian", 0], PARAMETER["scale_factor", 1]]'
        )
        pcs = parse_coordinate_system(text)
        assert pcs.linear_unit.equal_params(LinearUnit.metre())

    def test_missing_projection(self):
        with pytest.raises(ConfigurationError, match="no PROJECTION"):
            parse_coordinate_system(f'PROJCS["P", {_WGS84_GEOGCS}, UNIT["metre", 1]]')

    def test_missing_geogcs(self):
        with pytest.raises(ParseError, match="no GEOGCS"):
            parse_coordinate_system('PROJCS["P", PROJECTION["Mercator_1SP"], UNIT["metre", 1]]')


class TestFitted:
    def test_fitted(self):
        text = (
            'FITTED_CS["Site", PARAM_MT["Affine", PARAMETER["num_row", 3], PARAMETER["num_col", 3], '
            f'PARAMETER["elt_0_2", 1000], PARAMETER["elt_1_2", 2000]], {_NAD83_UTM10}]'
        )
        fitted = parse_coordinate_system(text)
        assert fitted.base_system.authority_code == 26910
        xy = fitted.to_base_transform.transform([1.0, 1.0])
        assert abs(float(xy[0]) - 1001.0) < 1e-9
        assert abs(float(xy[1]) - 2001.0) < 1e-9

    def test_unsupported_to_base(self):
        text = f'FITTED_CS["Site", PARAM_MT["Exponential", PARAMETER["base", 2]], {_WGS84_GEOGCS}]'
        with pytest.raises(ParseError, match="unsupported to-base"):
            parse_coordinate_system(text)


class TestUnsupported:
    @pytest.mark.parametrize("keyword", ["COMPD_CS", "VERT_CS", "GEOCCS", "LOCAL_CS"])
    def test_unsupported_systems(self, keyword):
        with pytest.raises(ParseError, match="not supported"):
            parse_coordinate_system(f'{keyword}["x", UNIT["metre", 1]]')

    def test_unknown_root(self):
        with pytest.raises(ParseError, match="not a recognized"):
            parse_coordinate_system('ENGCRS["x"]')

    @pytest.mark.parametrize("text", ["", "   \n  "])
    def test_empty(self, text):
        with pytest.raises(ParseError, match="Empty"):
            parse_coordinate_system(text)


class TestMathTransform:
    def test_affine(self):
        mt = parse_math_transform(
            'PARAM_MT["Affine", PARAMETER["num_row", 3], PARAMETER["num_col", 3], '
            'PARAMETER["elt_0_0", 2], PARAMETER["elt_0_2", 100], PARAMETER["elt_1_2", -50]]'
        )
        assert isinstance(mt, AffineTransform)
        xy = mt.transform([1.0, 1.0])
        assert abs(float(xy[0]) - 102.0) < 1e-12
        assert abs(float(xy[1]) + 49.0) < 1e-12

    def test_name_is_case_insensitive(self):
        mt = parse_math_transform('PARAM_MT["affine", PARAMETER["num_row", 3], PARAMETER["num_col", 3]]')
        assert mt.identity()

    def test_unknown_and_out_of_range_parameters_ignored(self):
        mt = parse_math_transform(
            'PARAM_MT["Affine", PARAMETER["num_row", 3], PARAMETER["num_col", 3], '
            'PARAMETER["comment", 7], PARAMETER["elt_3_3", 9]]'
        )
        assert mt.identity()

    @pytest.mark.parametrize(
        "text",
        ["", "  ", 'UNIT["metre", 1]', 'PARAM_MT["Exponential", PARAMETER["base", 2]]'],
        ids=["empty", "blank", "not_a_transform", "unsupported"],
    )
    def test_none(self, text):
        assert parse_math_transform(text) is None

    def test_missing_size(self):
        with pytest.raises(ParseError, match="num_row and num_col"):
            parse_math_transform('PARAM_MT["Affine", PARAMETER["num_col", 3]]')

    def test_invalid_size(self):
        with pytest.raises(ParseError, match="Invalid affine matrix size"):
            parse_math_transform('PARAM_MT["Affine", PARAMETER["num_row", 0], PARAMETER["num_col", 3]]')

    def test_no_parameters(self):
        with pytest.raises(ParseError, match="no parameters"):
            parse_math_transform('PARAM_MT["Affine"]')

    def test_round_trip(self):
        affine = AffineTransform(0.5, -0.25, 12.5, 0.25, 0.5, -7.0)
        parsed = parse_math_transform(affine.wkt)
        assert parsed.get_matrix() == affine.get_matrix()
