"""
Builders for coordinate systems and their components.

:class:`CoordinateSystemFactory` constructs ellipsoids, datums, prime
meridians, projections and coordinate systems from plain values or from
Well-Known Text.  Every named object requires a non-empty name.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from projax.coordinate_systems import (
    CoordinateSystem,
    FittedCoordinateSystem,
    GeocentricCoordinateSystem,
    GeographicCoordinateSystem,
    ProjectedCoordinateSystem,
)
from projax.datums import DatumType, Ellipsoid, HorizontalDatum, PrimeMeridian, Wgs84ConversionInfo
from projax.errors import ConfigurationError
from projax.info import AxisInfo, AxisOrientation, ProjectionParameter
from projax.parameters import Projection
from projax.transforms import MathTransform
from projax.units import AngularUnit, LinearUnit
from projax.wkt import parse_coordinate_system, parse_math_transform

logger = logging.getLogger(__name__)


def _require_name(name: str, what: str) -> None:
    if not name:
        raise ConfigurationError(f"{what} requires a non-empty name")


class CoordinateSystemFactory:
    """Create coordinate system objects.

    Examples:
        ```python
        from projax.factory import CoordinateSystemFactory
        from projax.units import LinearUnit

        factory = CoordinateSystemFactory()
        bessel = factory.create_flattened_sphere("Bessel 1841", 6377397.155, 299.1528128, LinearUnit.metre())
        ```
    """

    def create_from_wkt(self, wkt: str) -> CoordinateSystem | None:
        """Parse *wkt* and return it if it describes a coordinate system.

        Args:
            wkt: Well-Known Text.

        Returns:
            CoordinateSystem | None: Parsed system, or ``None`` when the
            text describes some other object (a unit, datum, ...).

        Raises:
            ParseError: If *wkt* is malformed or uses an unsupported root.
        """
        obj = parse_coordinate_system(wkt)
        if isinstance(obj, CoordinateSystem):
            return obj
        logger.debug("WKT describes a %s, not a coordinate system", type(obj).__name__)
        return None

    def create_ellipsoid(
        self, name: str, semi_major_axis: float, semi_minor_axis: float, linear_unit: LinearUnit
    ) -> Ellipsoid:
        """Ellipsoid defined by its two semi-axes; inverse flattening is derived."""
        _require_name(name, "Ellipsoid")
        ivf = 0.0
        if semi_major_axis != semi_minor_axis:
            ivf = semi_major_axis / (semi_major_axis - semi_minor_axis)
        return Ellipsoid(semi_major_axis, semi_minor_axis, ivf, False, linear_unit, name)

    def create_flattened_sphere(
        self, name: str, semi_major_axis: float, inverse_flattening: float, linear_unit: LinearUnit
    ) -> Ellipsoid:
        """Ellipsoid defined by its semi-major axis and inverse flattening."""
        _require_name(name, "Ellipsoid")
        return Ellipsoid(semi_major_axis, -1.0, inverse_flattening, True, linear_unit, name)

    def create_prime_meridian(self, name: str, angular_unit: AngularUnit, longitude: float) -> PrimeMeridian:
        _require_name(name, "Prime meridian")
        return PrimeMeridian(longitude, angular_unit, name)

    def create_horizontal_datum(
        self,
        name: str,
        datum_type: DatumType,
        ellipsoid: Ellipsoid,
        to_wgs84: Wgs84ConversionInfo | None = None,
    ) -> HorizontalDatum:
        _require_name(name, "Horizontal datum")
        return HorizontalDatum(ellipsoid, to_wgs84, datum_type, name)

    def create_geographic_coordinate_system(
        self,
        name: str,
        angular_unit: AngularUnit,
        datum: HorizontalDatum,
        prime_meridian: PrimeMeridian,
        axis0: AxisInfo,
        axis1: AxisInfo,
    ) -> GeographicCoordinateSystem:
        _require_name(name, "Geographic coordinate system")
        return GeographicCoordinateSystem(angular_unit, datum, prime_meridian, [axis0, axis1], name)

    def create_projection(
        self, name: str, wkt_projection_class: str, parameters: Sequence[ProjectionParameter]
    ) -> Projection:
        """Projection descriptor.

        Raises:
            ConfigurationError: If *name* is empty or *parameters* is empty.
        """
        _require_name(name, "Projection")
        if not parameters:
            raise ConfigurationError(f"Projection {name!r} requires at least one parameter")
        return Projection(wkt_projection_class, parameters, name)

    def create_projected_coordinate_system(
        self,
        name: str,
        gcs: GeographicCoordinateSystem,
        projection: Projection,
        linear_unit: LinearUnit,
        axis0: AxisInfo,
        axis1: AxisInfo,
    ) -> ProjectedCoordinateSystem:
        _require_name(name, "Projected coordinate system")
        return ProjectedCoordinateSystem(
            gcs.horizontal_datum, gcs, linear_unit, projection, [axis0, axis1], name
        )

    def create_geocentric_coordinate_system(
        self, name: str, datum: HorizontalDatum, linear_unit: LinearUnit, prime_meridian: PrimeMeridian
    ) -> GeocentricCoordinateSystem:
        _require_name(name, "Geocentric coordinate system")
        axes = [
            AxisInfo("X", AxisOrientation.OTHER),
            AxisInfo("Y", AxisOrientation.OTHER),
            AxisInfo("Z", AxisOrientation.OTHER),
        ]
        return GeocentricCoordinateSystem(datum, linear_unit, prime_meridian, axes, name)

    def create_fitted_coordinate_system(
        self, name: str, base_system: CoordinateSystem, to_base: MathTransform | str
    ) -> FittedCoordinateSystem:
        """Fitted coordinate system over *base_system*.

        Args:
            name: System name.
            base_system: System the fitted coordinates map onto.
            to_base: Transform to the base system, or its ``PARAM_MT`` WKT.

        Raises:
            ConfigurationError: If *name* is empty or *to_base* WKT does not
                describe a supported transform.
        """
        _require_name(name, "Fitted coordinate system")
        if isinstance(to_base, str):
            transform = parse_math_transform(to_base)
            if transform is None:
                raise ConfigurationError(f"Unsupported to-base transform: {to_base!r}")
            to_base = transform
        return FittedCoordinateSystem(base_system, to_base, name)
