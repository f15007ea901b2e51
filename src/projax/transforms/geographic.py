"""Conversion between two geographic coordinate systems on the same datum."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from jax import Array
from jax.typing import ArrayLike

from projax.transforms._base import MathTransform, as_point, to_floats

if TYPE_CHECKING:
    from projax.coordinate_systems import GeographicCoordinateSystem


class GeographicTransform(MathTransform):
    """Rescale and re-reference longitudes between two geographic systems.

    The longitude is converted to Greenwich-relative radians using the
    source angular unit and prime meridian, then expressed in the target's.
    Latitude and height pass through.  The transform has no cached
    inverse: :meth:`inverse` returns ``None``, though :meth:`invert` swaps
    the roles of the two systems.

    Args:
        source: Source geographic coordinate system.
        target: Target geographic coordinate system.
    """

    def __init__(self, source: GeographicCoordinateSystem, target: GeographicCoordinateSystem) -> None:
        super().__init__()
        self.source = source
        self.target = target

    @property
    def dim_source(self) -> int:
        return self.source.dimension

    @property
    def dim_target(self) -> int:
        return self.target.dimension

    def inverse(self) -> MathTransform | None:
        return None

    def transform(self, point: ArrayLike | Sequence[float]) -> Array:
        src, tgt = (self.target, self.source) if self._is_inverse else (self.source, self.target)
        p = to_floats(point)
        lon = p[0] * src.angular_unit.radians_per_unit
        lon += src.prime_meridian.longitude * src.prime_meridian.angular_unit.radians_per_unit
        lon -= tgt.prime_meridian.longitude * tgt.prime_meridian.angular_unit.radians_per_unit
        p[0] = lon / tgt.angular_unit.radians_per_unit
        return as_point(p)
