"""
Transformation path finding between coordinate systems.

:class:`CoordinateTransformationFactory` inspects the kinds of a source and
target coordinate system and assembles the chain of math transforms that
maps one onto the other: map projections (forward or inverse), prime
meridian shifts, geodetic/geocentric conversions and Bursa-Wolf datum
shifts through WGS84.  Multi-step paths are returned as a
:class:`~projax.transforms.ConcatenatedTransform`.

A pair of systems with no known path yields ``None`` rather than an error.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from projax.coordinate_systems import (
    CoordinateSystem,
    CoordinateSystemKind,
    FittedCoordinateSystem,
    GeocentricCoordinateSystem,
    GeographicCoordinateSystem,
    ProjectedCoordinateSystem,
)
from projax.datums import Ellipsoid, HorizontalDatum
from projax.info import ProjectionParameter
from projax.operations.coordinate_transformation import CoordinateTransformation, TransformType
from projax.parameters import Projection, normalize_name
from projax.transforms import (
    ConcatenatedTransform,
    DatumTransform,
    GeocentricTransform,
    GeographicTransform,
    MathTransform,
    PrimeMeridianTransform,
)
from projax.transforms.projections import MapProjection, ProjectionKind
from projax.units import LinearUnit

logger = logging.getLogger(__name__)

_G = CoordinateSystemKind.GEOGRAPHIC
_C = CoordinateSystemKind.GEOCENTRIC
_P = CoordinateSystemKind.PROJECTED


def _has_parameter(parameters: list[ProjectionParameter], name: str) -> bool:
    return any(normalize_name(p.name) == name for p in parameters)


def _has_shift(datum: HorizontalDatum) -> bool:
    return datum.wgs84_parameters is not None and not datum.wgs84_parameters.has_zero_values_only


class CoordinateTransformationFactory:
    """Create coordinate transformations between coordinate systems.

    Examples:
        ```python
        from projax.coordinate_systems import GeographicCoordinateSystem, ProjectedCoordinateSystem
        from projax.operations import CoordinateTransformationFactory

        factory = CoordinateTransformationFactory()
        ct = factory.create_from_coordinate_systems(
            GeographicCoordinateSystem.wgs84(), ProjectedCoordinateSystem.wgs84_utm(31, True)
        )
        ct.math_transform.transform([3.0, 0.0])  # [500000.0, 0.0]
        ```
    """

    def __init__(self) -> None:
        self._rules: dict[
            tuple[CoordinateSystemKind, CoordinateSystemKind],
            Callable[[CoordinateSystem, CoordinateSystem], CoordinateTransformation | None],
        ] = {
            (_P, _G): self._proj_to_geog,
            (_G, _P): self._geog_to_proj,
            (_G, _C): self._geog_to_geoc,
            (_C, _G): self._geoc_to_geog,
            (_P, _P): self._proj_to_proj,
            (_C, _C): self._geoc_to_geoc,
            (_G, _G): self._geog_to_geog,
        }

    def create_from_coordinate_systems(
        self, source: CoordinateSystem, target: CoordinateSystem
    ) -> CoordinateTransformation | None:
        """Create a transformation from *source* to *target*.

        Args:
            source: Source coordinate system.
            target: Target coordinate system.

        Returns:
            CoordinateTransformation | None: The transformation, or ``None``
            if no path between the two systems is known.
        """
        rule = self._rules.get((source.kind, target.kind))
        if rule is not None:
            logger.debug("Transforming %s -> %s", source.kind.value, target.kind.value)
            return rule(source, target)
        if source.kind is CoordinateSystemKind.FITTED:
            logger.debug("Transforming fitted -> %s", target.kind.value)
            return self._fitted_to_any(source, target)
        if target.kind is CoordinateSystemKind.FITTED:
            logger.debug("Transforming %s -> fitted", source.kind.value)
            return self._any_to_fitted(source, target)
        logger.info("No transformation path from %r to %r", source.name, target.name)
        return None

    def create_coordinate_operation(
        self, projection: Projection, ellipsoid: Ellipsoid, unit: LinearUnit
    ) -> MapProjection | None:
        """Build the map projection described by *projection*.

        ``semi_major``, ``semi_minor`` (in metres) and ``unit`` (metres per
        unit) are taken from *ellipsoid* and *unit* unless the projection
        already supplies them.

        Args:
            projection: Projection descriptor.
            ellipsoid: Ellipsoid of the base geographic system.
            unit: Linear unit of the projected system.

        Returns:
            MapProjection | None: The projection, or ``None`` if the
            classification name is not supported.
        """
        parameters = list(projection.parameters)
        mpu = ellipsoid.axis_unit.meters_per_unit
        if not _has_parameter(parameters, "semi_major"):
            parameters.append(ProjectionParameter("semi_major", ellipsoid.semi_major_axis * mpu))
        if not _has_parameter(parameters, "semi_minor"):
            parameters.append(ProjectionParameter("semi_minor", ellipsoid.semi_minor_axis * mpu))
        if not _has_parameter(parameters, "unit"):
            parameters.append(ProjectionParameter("unit", unit.meters_per_unit))
        kind = ProjectionKind.from_name(projection.class_name)
        if kind is None:
            logger.warning("Unsupported projection %r", projection.class_name)
            return None
        return kind.create(parameters)

    def create_geocentric_operation(self, cs: GeocentricCoordinateSystem) -> GeocentricTransform:
        """Geodetic-to-geocentric transform on the datum ellipsoid of *cs*."""
        return GeocentricTransform.from_ellipsoid(cs.horizontal_datum.ellipsoid)

    def _projection_of(self, cs: ProjectedCoordinateSystem) -> MapProjection | None:
        return self.create_coordinate_operation(
            cs.projection, cs.geographic_cs.horizontal_datum.ellipsoid, cs.linear_unit
        )

    def _concatenate(
        self, source: CoordinateSystem, target: CoordinateSystem, *steps: tuple[CoordinateSystem, CoordinateSystem]
    ) -> CoordinateTransformation | None:
        stages = []
        for s, t in steps:
            stage = self.create_from_coordinate_systems(s, t)
            if stage is None:
                return None
            stages.append(stage)
        return CoordinateTransformation(source, target, TransformType.TRANSFORMATION, ConcatenatedTransform(stages))

    def _proj_to_geog(
        self, source: ProjectedCoordinateSystem, target: GeographicCoordinateSystem
    ) -> CoordinateTransformation | None:
        if not source.geographic_cs.equal_params(target):
            return self._concatenate(
                source, target, (source, source.geographic_cs), (source.geographic_cs, target)
            )
        projection = self._projection_of(source)
        if projection is None:
            return None
        return CoordinateTransformation(source, target, TransformType.TRANSFORMATION, projection.inverse())

    def _geog_to_proj(
        self, source: GeographicCoordinateSystem, target: ProjectedCoordinateSystem
    ) -> CoordinateTransformation | None:
        if not source.equal_params(target.geographic_cs):
            return self._concatenate(
                source, target, (source, target.geographic_cs), (target.geographic_cs, target)
            )
        projection = self._projection_of(target)
        if projection is None:
            return None
        return CoordinateTransformation(source, target, TransformType.TRANSFORMATION, projection)

    def _geog_to_geoc(
        self, source: GeographicCoordinateSystem, target: GeocentricCoordinateSystem
    ) -> CoordinateTransformation:
        geocentric = self.create_geocentric_operation(target)
        if source.prime_meridian.equal_params(target.prime_meridian):
            return CoordinateTransformation(source, target, TransformType.CONVERSION, geocentric)
        ct = ConcatenatedTransform([
            CoordinateTransformation(
                source, target, TransformType.TRANSFORMATION,
                PrimeMeridianTransform(source.prime_meridian, target.prime_meridian),
            ),
            CoordinateTransformation(source, target, TransformType.CONVERSION, geocentric),
        ])
        return CoordinateTransformation(source, target, TransformType.CONVERSION, ct)

    def _geoc_to_geog(
        self, source: GeocentricCoordinateSystem, target: GeographicCoordinateSystem
    ) -> CoordinateTransformation:
        geocentric = self.create_geocentric_operation(source).inverse()
        if source.prime_meridian.equal_params(target.prime_meridian):
            return CoordinateTransformation(source, target, TransformType.CONVERSION, geocentric)
        ct = ConcatenatedTransform([
            CoordinateTransformation(source, target, TransformType.CONVERSION, geocentric),
            CoordinateTransformation(
                source, target, TransformType.TRANSFORMATION,
                PrimeMeridianTransform(source.prime_meridian, target.prime_meridian),
            ),
        ])
        return CoordinateTransformation(source, target, TransformType.CONVERSION, ct)

    def _proj_to_proj(
        self, source: ProjectedCoordinateSystem, target: ProjectedCoordinateSystem
    ) -> CoordinateTransformation | None:
        to_geog = self.create_from_coordinate_systems(source, source.geographic_cs)
        if to_geog is None:
            return None
        stages = [to_geog]
        geog_to_geog = self.create_from_coordinate_systems(source.geographic_cs, target.geographic_cs)
        if geog_to_geog is not None:
            stages.append(geog_to_geog)
        from_geog = self.create_from_coordinate_systems(target.geographic_cs, target)
        if from_geog is None:
            return None
        stages.append(from_geog)
        return CoordinateTransformation(source, target, TransformType.TRANSFORMATION, ConcatenatedTransform(stages))

    def _geog_to_geog(
        self, source: GeographicCoordinateSystem, target: GeographicCoordinateSystem
    ) -> CoordinateTransformation:
        if source.horizontal_datum.equal_params(target.horizontal_datum):
            return CoordinateTransformation(
                source, target, TransformType.CONVERSION, GeographicTransform(source, target)
            )
        # both geocentric systems share the source meridian; the final stage re-references it
        metre = LinearUnit.metre()
        source_centric = GeocentricCoordinateSystem(
            source.horizontal_datum, metre, source.prime_meridian,
            name=f"{source.horizontal_datum.name} Geocentric",
        )
        target_centric = GeocentricCoordinateSystem(
            target.horizontal_datum, metre, source.prime_meridian,
            name=f"{target.horizontal_datum.name} Geocentric",
        )
        stages = []
        for s, t in ((source, source_centric), (source_centric, target_centric), (target_centric, target)):
            stage = self.create_from_coordinate_systems(s, t)
            if stage is not None:
                stages.append(stage)
        return CoordinateTransformation(source, target, TransformType.TRANSFORMATION, ConcatenatedTransform(stages))

    def _geoc_to_geoc(
        self, source: GeocentricCoordinateSystem, target: GeocentricCoordinateSystem
    ) -> CoordinateTransformation | None:
        src_datum = source.horizontal_datum
        tgt_datum = target.horizontal_datum
        stages = []
        if _has_shift(src_datum):
            stages.append(CoordinateTransformation(
                GeocentricCoordinateSystem.wgs84() if _has_shift(tgt_datum) else target, source,
                TransformType.TRANSFORMATION, DatumTransform(src_datum.wgs84_parameters),
            ))
        if _has_shift(tgt_datum):
            stages.append(CoordinateTransformation(
                GeocentricCoordinateSystem.wgs84() if _has_shift(src_datum) else source, target,
                TransformType.TRANSFORMATION, DatumTransform(tgt_datum.wgs84_parameters).inverse(),
            ))
        if not stages:
            return None
        if len(stages) == 1:
            return CoordinateTransformation(
                source, target, TransformType.CONVERSION_AND_TRANSFORMATION, stages[0].math_transform
            )
        return CoordinateTransformation(
            source, target, TransformType.CONVERSION_AND_TRANSFORMATION, ConcatenatedTransform(stages)
        )

    def _fitted_to_any(
        self, source: FittedCoordinateSystem, target: CoordinateSystem
    ) -> CoordinateTransformation | None:
        # a copy, so inverting the pipeline leaves the fitted system untouched
        to_base = source.to_base_transform.clone()
        if source.base_system.equal_params(target):
            return CoordinateTransformation(source, target, TransformType.TRANSFORMATION, to_base)
        rest = self.create_from_coordinate_systems(source.base_system, target)
        if rest is None:
            return None
        ct = ConcatenatedTransform([
            CoordinateTransformation(source, source.base_system, TransformType.TRANSFORMATION, to_base),
            rest,
        ])
        return CoordinateTransformation(source, target, TransformType.TRANSFORMATION, ct)

    def _any_to_fitted(
        self, source: CoordinateSystem, target: FittedCoordinateSystem
    ) -> CoordinateTransformation | None:
        from_base: MathTransform | None = target.to_base_transform.clone().inverse()
        if from_base is None:
            return None
        if target.base_system.equal_params(source):
            return CoordinateTransformation(source, target, TransformType.TRANSFORMATION, from_base)
        head = self.create_from_coordinate_systems(source, target.base_system)
        if head is None:
            return None
        ct = ConcatenatedTransform([
            head,
            CoordinateTransformation(target.base_system, target, TransformType.TRANSFORMATION, from_base),
        ])
        return CoordinateTransformation(source, target, TransformType.TRANSFORMATION, ct)
