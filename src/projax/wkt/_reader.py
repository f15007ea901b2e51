"""
Reader for coordinate system Well-Known Text.

Parses the OGC 1.0 WKT forms of units, ellipsoids, datums, prime meridians
and geographic, projected and fitted coordinate systems.  Trailing optional
clauses (``AXIS``, ``AUTHORITY``, ``TOWGS84``) may appear in any order.

Example:
    ```python
    from projax.wkt import parse_coordinate_system

    gcs = parse_coordinate_system(
        'GEOGCS["WGS 84", DATUM["WGS_1984", SPHEROID["WGS 84", 6378137, 298.257223563], '
        'AUTHORITY["EPSG", "6326"]], PRIMEM["Greenwich", 0], UNIT["degree", 0.0174532925199433]]'
    )
    gcs.horizontal_datum.ellipsoid.semi_major_axis  # 6378137.0
    ```
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from projax.coordinate_systems import (
    CoordinateSystem,
    FittedCoordinateSystem,
    GeographicCoordinateSystem,
    ProjectedCoordinateSystem,
)
from projax.datums import DatumType, Ellipsoid, HorizontalDatum, PrimeMeridian, Wgs84ConversionInfo
from projax.errors import ConfigurationError
from projax.info import AxisInfo, AxisOrientation, Info, ProjectionParameter
from projax.parameters import Projection
from projax.units import AngularUnit, LinearUnit, Unit
from projax.wkt._math_transform_reader import read_math_transform
from projax.wkt._tokenizer import TokenType, WktStreamTokenizer

logger = logging.getLogger(__name__)

_UNSUPPORTED_CS = frozenset({"COMPD_CS", "VERT_CS", "GEOCCS", "LOCAL_CS"})


class CoordinateSystemWktReader:
    """Recursive-descent reader over a :class:`WktStreamTokenizer`.

    Every ``_read_*`` method is entered with the clause keyword as the
    current token and returns with the clause's closing ``]`` current.

    Args:
        wkt: Text to parse.
    """

    def __init__(self, wkt: str) -> None:
        self._t = WktStreamTokenizer(wkt)

    @classmethod
    def parse(cls, wkt: str) -> Info:
        """Parse *wkt* into a unit, ellipsoid, datum, prime meridian or CS.

        Args:
            wkt: Well-Known Text.

        Returns:
            Info: The parsed object.

        Raises:
            ParseError: If the text is empty, malformed, or its root keyword
                is unrecognized or an unsupported CS kind.
            ConfigurationError: If a ``PROJCS`` has no ``PROJECTION``.
        """
        reader = cls(wkt)
        t = reader._t
        t.next_token()
        keyword = t.token
        logger.debug("Parsing WKT root %r", keyword)
        if not keyword:
            raise t.error("Empty WKT")
        if keyword == "UNIT":
            return reader._read_unit(Unit)
        if keyword == "SPHEROID":
            return reader._read_ellipsoid()
        if keyword == "DATUM":
            return reader._read_horizontal_datum()
        if keyword == "PRIMEM":
            return reader._read_prime_meridian()
        return reader._read_coordinate_system()

    # ──────────────────────────────────────────────
    # Clause helpers
    # ──────────────────────────────────────────────

    def _open(self) -> str:
        """Consume ``[ "name"`` and return the name."""
        self._t.read_token("[")
        return self._t.read_double_quoted_word()

    def _read_tail(self, handlers: dict[str, Callable[[], None]]) -> None:
        t = self._t
        while t.next_element():
            handler = handlers.get(t.token)
            if handler is None:
                raise t.error(f"Unexpected '{t.token}'")
            handler()

    def _authority_handler(self, meta: dict) -> Callable[[], None]:
        def read() -> None:
            meta["authority"], meta["authority_code"] = self._t.read_authority()

        return read

    # ──────────────────────────────────────────────
    # Value objects
    # ──────────────────────────────────────────────

    def _read_unit(self, unit_cls: type[Unit] | type[LinearUnit] | type[AngularUnit]):
        name = self._open()
        self._t.read_token(",")
        factor = self._t.read_number()
        meta: dict = {}
        self._read_tail({"AUTHORITY": self._authority_handler(meta)})
        return unit_cls(factor, name, **meta)

    def _read_ellipsoid(self) -> Ellipsoid:
        name = self._open()
        self._t.read_token(",")
        a = self._t.read_number()
        self._t.read_token(",")
        ivf = self._t.read_number()
        meta: dict = {}
        self._read_tail({"AUTHORITY": self._authority_handler(meta)})
        # a zero inverse flattening keeps the supplied minor axis, i.e. a sphere
        return Ellipsoid(a, a, ivf, True, LinearUnit.metre(), name, **meta)

    def _read_towgs84(self) -> Wgs84ConversionInfo:
        t = self._t
        t.read_token("[")
        values = [t.read_number()]
        while t.next_element():
            if t.token_type is not TokenType.NUMBER:
                raise t.error(f"Expecting a number but got a '{t.token}'")
            values.append(t.numeric_value)
            if len(values) > 7:
                raise t.error("TOWGS84 takes at most 7 values")
        if len(values) < 3:
            raise t.error("TOWGS84 needs at least dx, dy, dz")
        return Wgs84ConversionInfo(*values)

    def _read_horizontal_datum(self) -> HorizontalDatum:
        name = self._open()
        self._t.read_token(",")
        self._t.read_token("SPHEROID")
        ellipsoid = self._read_ellipsoid()
        meta: dict = {}
        shift: list[Wgs84ConversionInfo] = []
        self._read_tail({
            "TOWGS84": lambda: shift.append(self._read_towgs84()),
            "AUTHORITY": self._authority_handler(meta),
        })
        return HorizontalDatum(
            ellipsoid, shift[-1] if shift else None, DatumType.HD_GEOCENTRIC, name, **meta
        )

    def _read_prime_meridian(self) -> PrimeMeridian:
        name = self._open()
        self._t.read_token(",")
        longitude = self._t.read_number()
        meta: dict = {}
        self._read_tail({"AUTHORITY": self._authority_handler(meta)})
        return PrimeMeridian(longitude, AngularUnit.degrees(), name, **meta)

    def _read_axis(self) -> AxisInfo:
        t = self._t
        name = self._open()
        t.read_token(",")
        t.next_token()
        word = t.read_double_quoted_word() if t.token == '"' else t.token
        orientation = AxisOrientation.from_name(word)
        if orientation is None:
            raise t.error(f"Unknown axis orientation '{word}'")
        t.read_token("]")
        return AxisInfo(name, orientation)

    def _read_projection(self) -> Projection:
        class_name = self._open()
        meta: dict = {}
        self._read_tail({"AUTHORITY": self._authority_handler(meta)})
        return Projection(class_name, [], class_name, **meta)

    # ──────────────────────────────────────────────
    # Coordinate systems
    # ──────────────────────────────────────────────

    def _read_coordinate_system(self) -> CoordinateSystem:
        t = self._t
        keyword = t.token
        if keyword == "GEOGCS":
            return self._read_geographic()
        if keyword == "PROJCS":
            return self._read_projected()
        if keyword == "FITTED_CS":
            return self._read_fitted()
        if keyword in _UNSUPPORTED_CS:
            raise t.error(f"{keyword} coordinate systems are not supported")
        raise t.error(f"'{keyword}' is not a recognized WKT object")

    def _read_geographic(self) -> GeographicCoordinateSystem:
        t = self._t
        name = self._open()
        parts: dict = {}
        axes: list[AxisInfo] = []
        meta: dict = {}

        def put(key: str, reader: Callable[[], object]) -> Callable[[], None]:
            return lambda: parts.__setitem__(key, reader())

        self._read_tail({
            "DATUM": put("datum", self._read_horizontal_datum),
            "PRIMEM": put("primem", self._read_prime_meridian),
            "UNIT": put("unit", lambda: self._read_unit(AngularUnit)),
            "AXIS": lambda: axes.append(self._read_axis()),
            "AUTHORITY": self._authority_handler(meta),
        })
        for key, clause in (("datum", "DATUM"), ("primem", "PRIMEM"), ("unit", "UNIT")):
            if key not in parts:
                raise t.error(f"GEOGCS {name!r} has no {clause}")
        return GeographicCoordinateSystem(parts["unit"], parts["datum"], parts["primem"], axes, name, **meta)

    def _read_projected(self) -> ProjectedCoordinateSystem:
        t = self._t
        name = self._open()
        parts: dict = {}
        params: list[ProjectionParameter] = []
        axes: list[AxisInfo] = []
        meta: dict = {}

        def put(key: str, reader: Callable[[], object]) -> Callable[[], None]:
            return lambda: parts.__setitem__(key, reader())

        self._read_tail({
            "GEOGCS": put("gcs", self._read_geographic),
            "PROJECTION": put("projection", self._read_projection),
            "PARAMETER": lambda: params.append(ProjectionParameter(*t.read_parameter())),
            "UNIT": put("unit", lambda: self._read_unit(LinearUnit)),
            "AXIS": lambda: axes.append(self._read_axis()),
            "AUTHORITY": self._authority_handler(meta),
        })
        if "gcs" not in parts:
            raise t.error(f"PROJCS {name!r} has no GEOGCS")
        if "projection" not in parts:
            raise ConfigurationError(f"PROJCS {name!r} has no PROJECTION")
        gcs: GeographicCoordinateSystem = parts["gcs"]
        projection: Projection = parts["projection"]
        projection.parameters = params
        unit = parts.get("unit", LinearUnit.metre())
        return ProjectedCoordinateSystem(gcs.horizontal_datum, gcs, unit, projection, axes, name, **meta)

    def _read_fitted(self) -> FittedCoordinateSystem:
        t = self._t
        name = self._open()
        t.read_token(",")
        t.read_token("PARAM_MT")
        to_base = read_math_transform(t)
        if to_base is None:
            raise t.error(f"FITTED_CS {name!r} has an unsupported to-base transform")
        t.read_token(",")
        t.next_token()
        base = self._read_coordinate_system()
        meta: dict = {}
        self._read_tail({"AUTHORITY": self._authority_handler(meta)})
        return FittedCoordinateSystem(base, to_base, name, **meta)


def parse_coordinate_system(wkt: str) -> Info:
    """Shorthand for :meth:`CoordinateSystemWktReader.parse`."""
    return CoordinateSystemWktReader.parse(wkt)
