"""
Coordinate reference systems.

Provides the coordinate system family consumed by the transformation
factory:

- :class:`GeographicCoordinateSystem`: angular ``[lon, lat]`` on a datum.
- :class:`GeocentricCoordinateSystem`: Earth-centred ``[x, y, z]``.
- :class:`ProjectedCoordinateSystem`: a geographic system plus a map
  projection and linear unit.
- :class:`FittedCoordinateSystem`: a base system plus a to-base transform.

Each system reports its :class:`CoordinateSystemKind`, which is what
:class:`~projax.operations.CoordinateTransformationFactory` dispatches on.
"""

from __future__ import annotations

import enum
from collections.abc import Sequence

from projax.datums import HorizontalDatum, PrimeMeridian
from projax.info import AxisInfo, AxisOrientation, Info, ProjectionParameter
from projax.parameters import Projection
from projax.transforms._base import MathTransform
from projax.units import AngularUnit, LinearUnit

_GEOGRAPHIC_AXES = (AxisInfo("Lon", AxisOrientation.EAST), AxisInfo("Lat", AxisOrientation.NORTH))
_PROJECTED_AXES = (AxisInfo("X", AxisOrientation.EAST), AxisInfo("Y", AxisOrientation.NORTH))
_GEOCENTRIC_AXES = (
    AxisInfo("X", AxisOrientation.OTHER),
    AxisInfo("Y", AxisOrientation.OTHER),
    AxisInfo("Z", AxisOrientation.OTHER),
)


class CoordinateSystemKind(enum.Enum):
    """Kinds of coordinate system understood by the transformation factory."""

    GEOGRAPHIC = "geographic"
    GEOCENTRIC = "geocentric"
    PROJECTED = "projected"
    FITTED = "fitted"


class CoordinateSystem(Info):
    """Base coordinate system: a list of axes plus metadata.

    Args:
        axis_info: Axes in ordinate order.
        name: System name.
        **info: Remaining :class:`~projax.info.Info` metadata.
    """

    kind: CoordinateSystemKind

    def __init__(self, axis_info: Sequence[AxisInfo] = (), name: str = "", **info) -> None:
        super().__init__(name, **info)
        self.axis_info: list[AxisInfo] = list(axis_info)

    @property
    def dimension(self) -> int:
        return len(self.axis_info)

    def get_axis(self, dimension: int) -> AxisInfo:
        """Return the axis for ordinate *dimension*.

        Raises:
            IndexError: If *dimension* is outside ``[0, dimension)``.
        """
        if dimension < 0 or dimension >= len(self.axis_info):
            raise IndexError(f"Axis index {dimension} out of range for {len(self.axis_info)}-D {self.name!r}")
        return self.axis_info[dimension]

    def get_units(self, dimension: int) -> AngularUnit | LinearUnit:
        raise NotImplementedError

    def _axes_wkt(self, defaults: Sequence[AxisInfo]) -> str:
        if list(self.axis_info) == list(defaults):
            return ""
        return "".join(f", {a.wkt}" for a in self.axis_info)

    def _same_orientations(self, other: CoordinateSystem) -> bool:
        if other.dimension != self.dimension:
            return False
        return all(a.orientation == b.orientation for a, b in zip(self.axis_info, other.axis_info))


class HorizontalCoordinateSystem(CoordinateSystem):
    """Coordinate system anchored to a horizontal datum."""

    def __init__(self, horizontal_datum: HorizontalDatum, axis_info: Sequence[AxisInfo] = (), name: str = "", **info) -> None:
        super().__init__(axis_info, name, **info)
        self.horizontal_datum = horizontal_datum


class GeographicCoordinateSystem(HorizontalCoordinateSystem):
    """Angular ``[lon, lat]`` coordinates on an ellipsoid.

    Args:
        angular_unit: Unit of longitude and latitude.
        horizontal_datum: Datum.
        prime_meridian: Meridian longitudes are measured from.
        axis_info: Axes; defaults to ``Lon`` (east), ``Lat`` (north).
        name: System name.
        **info: Remaining :class:`~projax.info.Info` metadata.
    """

    kind = CoordinateSystemKind.GEOGRAPHIC

    def __init__(
        self,
        angular_unit: AngularUnit,
        horizontal_datum: HorizontalDatum,
        prime_meridian: PrimeMeridian,
        axis_info: Sequence[AxisInfo] | None = None,
        name: str = "",
        **info,
    ) -> None:
        super().__init__(horizontal_datum, _GEOGRAPHIC_AXES if not axis_info else axis_info, name, **info)
        self.angular_unit = angular_unit
        self.prime_meridian = prime_meridian

    @classmethod
    def wgs84(cls) -> GeographicCoordinateSystem:
        """WGS 84 geographic 2D, EPSG 4326."""
        return cls(
            AngularUnit.degrees(), HorizontalDatum.wgs84(), PrimeMeridian.greenwich(),
            list(_GEOGRAPHIC_AXES), "WGS 84", authority="EPSG", authority_code=4326,
        )

    def get_units(self, dimension: int) -> AngularUnit:
        return self.angular_unit

    @property
    def wkt(self) -> str:
        return (
            f'GEOGCS["{self.name}", {self.horizontal_datum.wkt}, {self.prime_meridian.wkt}, '
            f"{self.angular_unit.wkt}{self._axes_wkt(_GEOGRAPHIC_AXES)}{self._authority_wkt()}]"
        )

    def equal_params(self, other: object) -> bool:
        if not isinstance(other, GeographicCoordinateSystem):
            return False
        return (
            self._same_orientations(other)
            and other.angular_unit.equal_params(self.angular_unit)
            and other.horizontal_datum.equal_params(self.horizontal_datum)
            and other.prime_meridian.equal_params(self.prime_meridian)
        )


class GeocentricCoordinateSystem(CoordinateSystem):
    """Earth-centred Cartesian ``[x, y, z]`` coordinates.

    Args:
        horizontal_datum: Datum.
        linear_unit: Unit of the three axes.
        prime_meridian: Meridian of the ``x`` axis.
        axis_info: Axes; defaults to ``X``, ``Y``, ``Z`` with orientation OTHER.
        name: System name.
        **info: Remaining :class:`~projax.info.Info` metadata.
    """

    kind = CoordinateSystemKind.GEOCENTRIC

    def __init__(
        self,
        horizontal_datum: HorizontalDatum,
        linear_unit: LinearUnit,
        prime_meridian: PrimeMeridian,
        axis_info: Sequence[AxisInfo] | None = None,
        name: str = "",
        **info,
    ) -> None:
        super().__init__(_GEOCENTRIC_AXES if not axis_info else axis_info, name, **info)
        self.horizontal_datum = horizontal_datum
        self.linear_unit = linear_unit
        self.prime_meridian = prime_meridian

    @classmethod
    def wgs84(cls) -> GeocentricCoordinateSystem:
        """WGS 84 geocentric system in metres."""
        return cls(HorizontalDatum.wgs84(), LinearUnit.metre(), PrimeMeridian.greenwich(), name="WGS84 Geocentric")

    def get_units(self, dimension: int) -> LinearUnit:
        return self.linear_unit

    @property
    def wkt(self) -> str:
        return (
            f'GEOCCS["{self.name}", {self.horizontal_datum.wkt}, {self.prime_meridian.wkt}, '
            f"{self.linear_unit.wkt}{self._axes_wkt(_GEOCENTRIC_AXES)}{self._authority_wkt()}]"
        )

    def equal_params(self, other: object) -> bool:
        if not isinstance(other, GeocentricCoordinateSystem):
            return False
        return (
            other.horizontal_datum.equal_params(self.horizontal_datum)
            and other.linear_unit.equal_params(self.linear_unit)
            and other.prime_meridian.equal_params(self.prime_meridian)
        )


class ProjectedCoordinateSystem(HorizontalCoordinateSystem):
    """Planar coordinates obtained by projecting a geographic system.

    Args:
        horizontal_datum: Datum (normally that of *geographic_cs*).
        geographic_cs: Base geographic system.
        linear_unit: Unit of the projected axes.
        projection: Projection descriptor.
        axis_info: Axes; defaults to ``X`` (east), ``Y`` (north).
        name: System name.
        **info: Remaining :class:`~projax.info.Info` metadata.

    Examples:
        ```python
        from projax.coordinate_systems import ProjectedCoordinateSystem

        utm = ProjectedCoordinateSystem.wgs84_utm(31, True)
        utm.authority_code  # 32631
        ```
    """

    kind = CoordinateSystemKind.PROJECTED

    def __init__(
        self,
        horizontal_datum: HorizontalDatum,
        geographic_cs: GeographicCoordinateSystem,
        linear_unit: LinearUnit,
        projection: Projection,
        axis_info: Sequence[AxisInfo] | None = None,
        name: str = "",
        **info,
    ) -> None:
        super().__init__(horizontal_datum, _PROJECTED_AXES if not axis_info else axis_info, name, **info)
        self.geographic_cs = geographic_cs
        self.linear_unit = linear_unit
        self.projection = projection

    @classmethod
    def wgs84_utm(cls, zone: int, zone_is_north: bool) -> ProjectedCoordinateSystem:
        """WGS 84 / UTM zone, EPSG ``326zz`` (north) or ``327zz`` (south).

        Args:
            zone: UTM zone number, 1-60.
            zone_is_north: ``True`` for the northern hemisphere.

        Returns:
            ProjectedCoordinateSystem: The UTM system.
        """
        hemisphere = "N" if zone_is_north else "S"
        code = 32600 + zone + (0 if zone_is_north else 100)
        params = [
            ProjectionParameter("latitude_of_origin", 0.0),
            ProjectionParameter("central_meridian", float(zone * 6 - 183)),
            ProjectionParameter("scale_factor", 0.9996),
            ProjectionParameter("false_easting", 500000.0),
            ProjectionParameter("false_northing", 0.0 if zone_is_north else 10000000.0),
        ]
        projection = Projection(
            "Transverse_Mercator", params, f"UTM{zone}{hemisphere}", authority="EPSG", authority_code=code,
        )
        axes = [AxisInfo("East", AxisOrientation.EAST), AxisInfo("North", AxisOrientation.NORTH)]
        return cls(
            HorizontalDatum.wgs84(), GeographicCoordinateSystem.wgs84(), LinearUnit.metre(), projection, axes,
            f"WGS 84 / UTM zone {zone}{hemisphere}", authority="EPSG", authority_code=code,
            remarks="Large and medium scale topographic mapping and engineering survey.",
        )

    @classmethod
    def web_mercator(cls) -> ProjectedCoordinateSystem:
        """WGS 84 / Pseudo-Mercator, EPSG 3857."""
        params = [
            ProjectionParameter("latitude_of_origin", 0.0),
            ProjectionParameter("central_meridian", 0.0),
            ProjectionParameter("false_easting", 0.0),
            ProjectionParameter("false_northing", 0.0),
        ]
        projection = Projection(
            "Popular Visualisation Pseudo-Mercator", params, "Popular Visualisation Pseudo-Mercator",
            authority="EPSG", authority_code=3856, alias="Pseudo-Mercator",
        )
        axes = [AxisInfo("East", AxisOrientation.EAST), AxisInfo("North", AxisOrientation.NORTH)]
        return cls(
            HorizontalDatum.wgs84(), GeographicCoordinateSystem.wgs84(), LinearUnit.metre(), projection, axes,
            "WGS 84 / Pseudo-Mercator", authority="EPSG", authority_code=3857,
            alias="WGS 84 / Popular Visualisation Pseudo-Mercator", abbreviation="WebMercator",
            remarks="Certain Web mapping and visualisation applications. Uses spherical development "
            "of ellipsoidal coordinates.",
        )

    def get_units(self, dimension: int) -> LinearUnit:
        return self.linear_unit

    @property
    def wkt(self) -> str:
        params = "".join(f", {p.wkt}" for p in self.projection.parameters)
        return (
            f'PROJCS["{self.name}", {self.geographic_cs.wkt}, {self.projection.wkt}{params}, '
            f"{self.linear_unit.wkt}{self._axes_wkt(_PROJECTED_AXES)}{self._authority_wkt()}]"
        )

    def equal_params(self, other: object) -> bool:
        if not isinstance(other, ProjectedCoordinateSystem):
            return False
        if not self._same_orientations(other):
            return False
        return (
            other.geographic_cs.equal_params(self.geographic_cs)
            and other.horizontal_datum.equal_params(self.horizontal_datum)
            and other.linear_unit.equal_params(self.linear_unit)
            and other.projection.equal_params(self.projection)
        )


class FittedCoordinateSystem(CoordinateSystem):
    """A coordinate system defined by a transform onto a base system.

    The axes are copied from the base system, and units are the base
    system's.

    Args:
        base_system: System the fitted coordinates map onto.
        to_base: Transform from fitted to base coordinates.
        name: System name.
        **info: Remaining :class:`~projax.info.Info` metadata.
    """

    kind = CoordinateSystemKind.FITTED

    def __init__(self, base_system: CoordinateSystem, to_base: MathTransform, name: str = "", **info) -> None:
        super().__init__(base_system.axis_info, name, **info)
        self.base_system = base_system
        self.to_base_transform = to_base

    def to_base(self) -> str:
        """WKT of the to-base transform."""
        return self.to_base_transform.wkt

    def get_units(self, dimension: int) -> AngularUnit | LinearUnit:
        return self.base_system.get_units(dimension)

    @property
    def wkt(self) -> str:
        return f'FITTED_CS["{self.name}", {self.to_base()}, {self.base_system.wkt}{self._authority_wkt()}]'

    def equal_params(self, other: object) -> bool:
        if not isinstance(other, FittedCoordinateSystem):
            return False
        return other.base_system.equal_params(self.base_system) and other.to_base() == self.to_base()
