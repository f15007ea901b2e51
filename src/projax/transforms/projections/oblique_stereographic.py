"""Oblique stereographic projection (double projection via the conformal sphere).

References:
    1. EPSG Guidance Note 7-2, Sec. 3.4.1 (Oblique Stereographic, EPSG 9809).
"""

from __future__ import annotations

from collections.abc import Iterable

import jax
import jax.numpy as jnp
from jax import Array

from projax.constants import HALF_PI
from projax.info import ProjectionParameter
from projax.parameters import ProjectionParameterSet
from projax.transforms.projections._base import MapProjection, as_real, asinz, settle

_TOL = 1e-14
_MAX_ITER = 15
_EPSILON = 1e-6


def _srat(esinp: Array, exp: Array) -> Array:
    return ((1.0 - esinp) / (1.0 + esinp)) ** exp


@jax.jit
def _latitude(num: Array, conformal_lat: Array, e: Array) -> tuple[Array, Array]:
    def cond(state):
        _, step, i = state
        return ~(jnp.abs(step) < _TOL) & (i < _MAX_ITER + 1)

    def body(state):
        lat, _, i = state
        phi = 2.0 * jnp.arctan(num * _srat(e * jnp.sin(lat), -0.5 * e)) - HALF_PI
        return phi, phi - lat, i + 1

    init = (conformal_lat, jnp.full_like(conformal_lat, jnp.inf), jnp.int32(0))
    lat, step, _ = jax.lax.while_loop(cond, body, init)
    converged = jnp.abs(step) < _TOL
    return jnp.where(converged, lat, jnp.nan), converged


class ObliqueStereographicProjection(MapProjection):
    """Oblique Stereographic, EPSG 9809.

    The ellipsoid is first mapped conformally onto a sphere (Gauss
    conformal latitude), which is then projected stereographically from
    the point antipodal to the origin.
    """

    def __init__(self, parameters: Iterable[ProjectionParameter] | ProjectionParameterSet) -> None:
        super().__init__(parameters)
        self.name = "Oblique_Stereographic"
        self.authority = "EPSG"
        self.authority_code = 9809

        es = self.es
        self._global_scale = self.scale_factor * self.semi_major
        sphi = jnp.sin(self.lat_origin)
        cphi2 = jnp.cos(self.lat_origin) ** 2
        self._r2 = 2.0 * jnp.sqrt(1.0 - es) / (1.0 - es * sphi * sphi)
        self._c = jnp.sqrt(1.0 + es * cphi2 * cphi2 / (1.0 - es))
        self._phic0 = jnp.arcsin(sphi / self._c)
        self._sinc0 = jnp.sin(self._phic0)
        self._cosc0 = jnp.cos(self._phic0)
        self._ratexp = 0.5 * self._c * self.e
        self._k = jnp.tan(0.5 * self._phic0 + jnp.pi / 4.0) / (
            jnp.tan(0.5 * self.lat_origin + jnp.pi / 4.0) ** self._c * _srat(self.e * sphi, self._ratexp)
        )

    def _forward(self, lam: Array, phi: Array) -> tuple[Array, Array]:
        x = (lam - self.central_meridian) * self._c
        y = 2.0 * jnp.arctan(
            self._k * jnp.tan(0.5 * phi + jnp.pi / 4.0) ** self._c * _srat(self.e * jnp.sin(phi), self._ratexp)
        ) - HALF_PI
        sinc = jnp.sin(y)
        cosc = jnp.cos(y)
        cosl = jnp.cos(x)
        k = self._r2 / (1.0 + self._sinc0 * sinc + self._cosc0 * cosc * cosl)
        x = k * cosc * jnp.sin(x)
        y = k * (self._cosc0 * sinc - self._sinc0 * cosc * cosl)
        return x * self._global_scale, y * self._global_scale

    def _reverse(self, x: Array, y: Array) -> tuple[Array, Array]:
        x = x / self._global_scale
        y = y / self._global_scale
        rho = jnp.hypot(x, y)
        at_origin = jnp.abs(rho) < _EPSILON
        ce = 2.0 * jnp.arctan2(rho, self._r2)
        sinc = jnp.sin(ce)
        cosc = jnp.cos(ce)
        lon = jnp.where(at_origin, 0.0, jnp.arctan2(x * sinc, rho * self._cosc0 * cosc - y * self._sinc0 * sinc))
        lat = jnp.where(at_origin, self._phic0, asinz(cosc * self._sinc0 + y * sinc * self._cosc0 / rho))

        lon = lon / self._c
        num = (jnp.tan(0.5 * lat + jnp.pi / 4.0) / self._k) ** (1.0 / self._c)
        lat = settle("Oblique stereographic latitude", _MAX_ITER + 1, *_latitude(as_real(num), as_real(lat), self.e))
        return lon + self.central_meridian, lat
