"""Longitude shift between two prime meridians."""

from __future__ import annotations

from collections.abc import Sequence

from jax import Array
from jax.typing import ArrayLike

from projax.datums import PrimeMeridian
from projax.transforms._base import MathTransform, as_point, to_floats


class PrimeMeridianTransform(MathTransform):
    """Re-reference longitudes from *source* to *target* meridian.

    Adds ``source.longitude - target.longitude`` to ordinate 0, with both
    meridian longitudes converted to degrees; remaining ordinates pass
    through.  Input longitudes are in degrees.

    Args:
        source: Meridian the input longitudes are measured from.
        target: Meridian the output longitudes are measured from.
    """

    def __init__(self, source: PrimeMeridian, target: PrimeMeridian) -> None:
        super().__init__()
        self.source = source
        self.target = target

    @property
    def dim_source(self) -> int:
        return 3

    @property
    def dim_target(self) -> int:
        return 3

    def _create_inverse(self) -> MathTransform:
        return self.clone()

    def transform(self, point: ArrayLike | Sequence[float]) -> Array:
        p = to_floats(point)
        shift = self.source.degrees - self.target.degrees
        p[0] += -shift if self._is_inverse else shift
        return as_point(p)

    def equal_params(self, other: object) -> bool:
        if not isinstance(other, PrimeMeridianTransform):
            return False
        return (
            other.source.equal_params(self.source)
            and other.target.equal_params(self.target)
            and other._is_inverse == self._is_inverse
        )
