"""Albers equal-area conic projection with two standard parallels.

References:
    1. J. P. Snyder, *Map Projections: A Working Manual*, pp. 101-102.
    2. EPSG Guidance Note 7-2, Sec. 3.2.2 (Albers Equal Area, EPSG 9822).
"""

from __future__ import annotations

from collections.abc import Iterable

import jax.numpy as jnp
from jax import Array

from projax.constants import DEG2RAD, EPSLN, HALF_PI
from projax.info import ProjectionParameter
from projax.parameters import ProjectionParameterSet
from projax.transforms.projections._base import MapProjection, adjust_lon, msfnz, phi1z, qsfnz, sign

_MAX_ITER = 25
_TOL = 1e-6

# |q| this close to its polar value is taken as the pole
_POLE_TOL = 1e-10


class AlbersProjection(MapProjection):
    """Albers Conic Equal Area, EPSG 9822.

    Requires ``standard_parallel_1`` and ``standard_parallel_2`` (degrees)
    in addition to the common projection parameters.  Equal standard
    parallels give the one-parallel form, and a zero eccentricity the
    spherical one.

    The reverse direction solves for latitude from the authalic ``q``
    value.  Points outside the projected area (``|q|`` beyond its polar
    value) and points whose latitude has not settled to 1e-6 rad after 25
    iterations have no image (empty result).
    """

    def __init__(self, parameters: Iterable[ProjectionParameter] | ProjectionParameterSet) -> None:
        super().__init__(parameters)
        self.name = "Albers_Conic_Equal_Area"
        self.authority = "EPSG"
        self.authority_code = 9822

        lat1 = DEG2RAD * self._parameters.get_parameter_value("standard_parallel_1")
        lat2 = DEG2RAD * self._parameters.get_parameter_value("standard_parallel_2")
        e = self.e
        sin1 = jnp.sin(lat1)
        sin2 = jnp.sin(lat2)
        ms1 = msfnz(e, sin1, jnp.cos(lat1))
        ms2 = msfnz(e, sin2, jnp.cos(lat2))
        qs1 = qsfnz(e, sin1)
        qs2 = qsfnz(e, sin2)
        qs0 = qsfnz(e, jnp.sin(self.lat_origin))

        self.n = jnp.where(abs(lat1 - lat2) > EPSLN, (ms1 * ms1 - ms2 * ms2) / (qs2 - qs1), sin1)
        self.c = ms1 * ms1 + self.n * qs1
        self.ro0 = self._rho(qs0)
        self.q_pole = qsfnz(e, 1.0)

    def _rho(self, qs: Array) -> Array:
        return self.semi_major * jnp.sqrt(self.c - self.n * qs) / self.n

    def _forward(self, lam: Array, phi: Array) -> tuple[Array, Array]:
        ro = self._rho(qsfnz(self.e, jnp.sin(phi)))
        theta = self.n * adjust_lon(lam - self.central_meridian)
        return ro * jnp.sin(theta), self.ro0 - ro * jnp.cos(theta)

    def _reverse(self, x: Array, y: Array) -> tuple[Array, Array] | None:
        con = sign(self.n)
        dy = self.ro0 - y
        ro = con * jnp.hypot(x, dy)
        theta = jnp.where(ro != 0.0, jnp.arctan2(con * x, con * dy), 0.0)
        rn = ro * self.n / self.semi_major
        qs = (self.c - rn * rn) / self.n

        excess = jnp.abs(qs) - self.q_pole
        if bool(excess > _POLE_TOL):
            return None
        on_pole = excess >= -_POLE_TOL
        lat = phi1z(self.e, jnp.where(on_pole, 0.0, qs), _TOL, _MAX_ITER, "Albers latitude")
        if bool(jnp.isnan(lat)):
            return None
        lat = jnp.where(on_pole, sign(qs) * HALF_PI, lat)
        return adjust_lon(self.central_meridian + theta / self.n), lat
