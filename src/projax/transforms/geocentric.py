"""Geodetic to geocentric (Earth-centred Cartesian) conversion.

Converts ``[longitude, latitude, height]`` in degrees and metres to
``[x, y, z]`` in metres on an arbitrary ellipsoid, and back.  The inverse
uses Bowring's non-iterative approximation with explicit branches for
points on the polar axis and at the centre of the earth.

The kernels are written elementwise in ``jax.numpy`` so the same code
serves single points and batches (:meth:`GeocentricTransform.transform_list`).

References:
    1. B. R. Bowring, "Transformation from spatial to geographical
       coordinates", *Survey Review* 23(181), 1976.
    2. R. Toms, "An Efficient Algorithm for Geocentric to Geodetic
       Coordinate Conversion", 1995.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import numpy as np
import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from projax.config import get_dtype
from projax.constants import AD_C, COS_67P5
from projax.datums import Ellipsoid
from projax.info import ProjectionParameter
from projax.parameters import ProjectionParameterSet
from projax.transforms._base import MathTransform, as_point


@jax.jit
def _geodetic_to_geocentric(lon: Array, lat: Array, h: Array, a: Array, es: Array) -> Array:
    lon = jnp.deg2rad(lon)
    lat = jnp.deg2rad(lat)
    h = jnp.where(jnp.isnan(h), 0.0, h)

    sin_lat = jnp.sin(lat)
    cos_lat = jnp.cos(lat)
    v = a / jnp.sqrt(1.0 - es * sin_lat * sin_lat)

    x = (v + h) * cos_lat * jnp.cos(lon)
    y = (v + h) * cos_lat * jnp.sin(lon)
    z = ((1.0 - es) * v + h) * sin_lat
    return jnp.stack([x, y, z], axis=-1)


@jax.jit
def _geocentric_to_geodetic(x: Array, y: Array, z: Array, a: Array, b: Array, es: Array, ses: Array) -> Array:
    z = jnp.where(jnp.isnan(z), 0.0, z)

    at_pole = (x == 0.0) & (y == 0.0)
    at_centre = at_pole & (z == 0.0)
    lon = jnp.where(
        x != 0.0,
        jnp.arctan2(y, x),
        jnp.where(y > 0.0, jnp.pi / 2, jnp.where(y < 0.0, -jnp.pi / 2, 0.0)),
    )

    w2 = x * x + y * y
    w = jnp.sqrt(w2)
    t0 = z * AD_C
    s0 = jnp.sqrt(t0 * t0 + w2)
    sin_b0 = t0 / s0
    cos_b0 = w / s0

    t1 = z + b * ses * sin_b0**3
    total = w - a * es * cos_b0**3
    s1 = jnp.sqrt(t1 * t1 + total * total)
    sin_p1 = t1 / s1
    cos_p1 = total / s1
    rn = a / jnp.sqrt(1.0 - es * sin_p1 * sin_p1)

    height = jnp.where(
        cos_p1 >= COS_67P5,
        w / cos_p1 - rn,
        jnp.where(cos_p1 <= -COS_67P5, w / -cos_p1 - rn, z / sin_p1 + rn * (es - 1.0)),
    )
    lat = jnp.where(at_pole, jnp.where(z > 0.0, jnp.pi / 2, -jnp.pi / 2), jnp.arctan(sin_p1 / cos_p1))

    # centre of the earth
    lat = jnp.where(at_centre, jnp.pi / 2, lat)
    height = jnp.where(at_centre, -b, height)
    return jnp.stack([jnp.rad2deg(lon), jnp.rad2deg(lat), height], axis=-1)


class GeocentricTransform(MathTransform):
    """Geodetic ``[lon, lat, h]`` (degrees, metres) to geocentric ``[x, y, z]`` (metres).

    A missing or ``NaN`` height (or ``z`` on the way back) is treated as 0.

    Args:
        parameters: Parameters holding ``semi_major`` and ``semi_minor`` in
            metres.

    Examples:
        ```python
        from projax.datums import Ellipsoid
        from projax.transforms import GeocentricTransform

        t = GeocentricTransform.from_ellipsoid(Ellipsoid.wgs84())
        t.transform([0.0, 0.0, 0.0])  # [6378137.0, 0.0, 0.0]
        ```
    """

    def __init__(self, parameters: Iterable[ProjectionParameter] | ProjectionParameterSet) -> None:
        super().__init__()
        params = parameters if isinstance(parameters, ProjectionParameterSet) else ProjectionParameterSet(parameters)
        self._parameters = params
        self.semi_major = params.get_parameter_value("semi_major")
        self.semi_minor = params.get_parameter_value("semi_minor")
        a2 = self.semi_major * self.semi_major
        b2 = self.semi_minor * self.semi_minor
        self.es = 1.0 - b2 / a2
        self.ses = (a2 - b2) / b2

    @classmethod
    def from_ellipsoid(cls, ellipsoid: Ellipsoid) -> GeocentricTransform:
        """Build the transform for *ellipsoid*, converting its axes to metres."""
        mpu = ellipsoid.axis_unit.meters_per_unit
        return cls([
            ProjectionParameter("semi_major", ellipsoid.semi_major_axis * mpu),
            ProjectionParameter("semi_minor", ellipsoid.semi_minor_axis * mpu),
        ])

    @property
    def dim_source(self) -> int:
        return 3

    @property
    def dim_target(self) -> int:
        return 3

    def _create_inverse(self) -> MathTransform:
        return self.clone()

    def _apply(self, columns: np.ndarray) -> Array:
        dtype = get_dtype()
        c0, c1, c2 = (jnp.asarray(columns[:, i], dtype=dtype) for i in range(3))
        a = jnp.asarray(self.semi_major, dtype=dtype)
        es = jnp.asarray(self.es, dtype=dtype)
        if not self._is_inverse:
            return _geodetic_to_geocentric(c0, c1, c2, a, es)
        b = jnp.asarray(self.semi_minor, dtype=dtype)
        ses = jnp.asarray(self.ses, dtype=dtype)
        return _geocentric_to_geodetic(c0, c1, c2, a, b, es, ses)

    @staticmethod
    def _pad(point: ArrayLike | Sequence[float]) -> list[float]:
        p = np.asarray(point, dtype=np.float64).reshape(-1).tolist()
        return (p + [0.0, 0.0, 0.0])[:3] if len(p) < 3 else p[:3]

    def transform(self, point: ArrayLike | Sequence[float]) -> Array:
        return as_point(self._apply(np.array([self._pad(point)]))[0])

    def transform_list(self, points: Iterable[ArrayLike | Sequence[float]]) -> list[Array]:
        rows = [self._pad(p) for p in points]
        if not rows:
            return []
        out = self._apply(np.array(rows))
        return [out[i] for i in range(out.shape[0])]

    def equal_params(self, other: object) -> bool:
        if not isinstance(other, GeocentricTransform):
            return False
        return other._parameters == self._parameters and other._is_inverse == self._is_inverse
