"""Lambert conformal conic projection with two standard parallels.

References:
    1. J. P. Snyder, *Map Projections: A Working Manual*, pp. 107-109.
    2. EPSG Guidance Note 7-2, Sec. 3.2.1.1 (Lambert Conic Conformal 2SP,
       EPSG 9802).
"""

from __future__ import annotations

from collections.abc import Iterable

import jax.numpy as jnp
from jax import Array

from projax.constants import DEG2RAD, EPSLN, HALF_PI
from projax.info import ProjectionParameter
from projax.parameters import ProjectionParameterSet
from projax.transforms.projections._base import MapProjection, adjust_lon, msfnz, phi2z, sign, tsfnz


class LambertConformalConic2SP(MapProjection):
    """Lambert Conic Conformal (2SP), EPSG 9802.

    Requires ``standard_parallel_1`` and ``standard_parallel_2`` (degrees).
    With equal standard parallels the cone constant degenerates to
    ``sin(standard_parallel_1)`` (the 1SP case).  Projecting the pole
    opposite the cone apex has no image and returns an empty point.
    """

    def __init__(self, parameters: Iterable[ProjectionParameter] | ProjectionParameterSet) -> None:
        super().__init__(parameters)
        self.name = "Lambert_Conformal_Conic_2SP"
        self.authority = "EPSG"
        self.authority_code = 9802

        lat1 = DEG2RAD * self._parameters.get_parameter_value("standard_parallel_1")
        lat2 = DEG2RAD * self._parameters.get_parameter_value("standard_parallel_2")
        e = self.e
        ms1 = msfnz(e, jnp.sin(lat1), jnp.cos(lat1))
        ts1 = tsfnz(e, lat1, jnp.sin(lat1))
        ms2 = msfnz(e, jnp.sin(lat2), jnp.cos(lat2))
        ts2 = tsfnz(e, lat2, jnp.sin(lat2))
        ts0 = tsfnz(e, self.lat_origin, jnp.sin(self.lat_origin))

        self.ns = jnp.where(
            abs(lat1 - lat2) > EPSLN,
            jnp.log(ms1 / ms2) / jnp.log(ts1 / ts2),
            jnp.sin(lat1),
        )
        self.f0 = ms1 / (self.ns * ts1**self.ns)
        self.rh = self.semi_major * self.f0 * ts0**self.ns

    def _forward(self, lam: Array, phi: Array) -> tuple[Array, Array] | None:
        at_pole = jnp.abs(jnp.abs(phi) - HALF_PI) <= EPSLN
        if bool(at_pole & (phi * self.ns <= 0.0)):
            return None
        ts = tsfnz(self.e, phi, jnp.sin(phi))
        rh1 = jnp.where(at_pole, 0.0, self.semi_major * self.f0 * ts**self.ns)
        theta = self.ns * adjust_lon(lam - self.central_meridian)
        return rh1 * jnp.sin(theta), self.rh - rh1 * jnp.cos(theta)

    def _reverse(self, x: Array, y: Array) -> tuple[Array, Array]:
        dy = self.rh - y
        con = sign(self.ns)
        rh1 = con * jnp.hypot(x, dy)
        theta = jnp.where(rh1 != 0.0, jnp.arctan2(con * x, con * dy), 0.0)
        ts = (rh1 / (self.semi_major * self.f0)) ** (1.0 / self.ns)
        lat = jnp.where((rh1 != 0.0) | (self.ns > 0.0), phi2z(self.e, ts), -HALF_PI)
        return adjust_lon(theta / self.ns + self.central_meridian), lat
