"""Krovak oblique conformal conic projection (Czech and Slovak S-JTSK).

References:
    1. EPSG Guidance Note 7-2, Sec. 3.2.4 (Krovak, EPSG 9819).
"""

from __future__ import annotations

from collections.abc import Iterable

import jax
import jax.numpy as jnp
from jax import Array

from projax.constants import DEG2RAD, HALF_PI
from projax.info import ProjectionParameter
from projax.parameters import ProjectionParameterSet
from projax.transforms.projections._base import MapProjection, as_real, asinz, settle

_MAX_ITER = 15
_TOL = 1e-11
_S45 = 0.785398163397448


@jax.jit
def _latitude(kau: Array, e: Array) -> tuple[Array, Array]:
    """Geodetic latitude from the Gaussian-sphere term ``kau`` by fixed-point iteration."""

    def cond(state):
        _, step, i = state
        return ~(jnp.abs(step) <= _TOL) & (i < _MAX_ITER)

    def body(state):
        phi, _, i = state
        esf = e * jnp.sin(phi)
        updated = 2.0 * (jnp.arctan(kau * ((1.0 + esf) / (1.0 - esf)) ** (e / 2.0)) - _S45)
        return updated, phi - updated, i + 1

    init = (jnp.zeros_like(kau), jnp.full_like(kau, jnp.inf), jnp.int32(0))
    phi, step, _ = jax.lax.while_loop(cond, body, init)
    converged = jnp.abs(step) <= _TOL
    return jnp.where(converged, phi, jnp.nan), converged


class KrovakProjection(MapProjection):
    """Krovak, EPSG 9819.

    Requires ``azimuth`` (of the cone axis) and
    ``pseudo_standard_parallel_1`` in degrees.  Output is always 2D, with
    the south-west oriented axes of the EPSG method: both ordinates are
    negative over the area of use.  The cone apex ``[0, 0]`` unprojects to
    the pole of the oblique sphere.
    """

    keeps_height = False

    def __init__(self, parameters: Iterable[ProjectionParameter] | ProjectionParameterSet) -> None:
        super().__init__(parameters)
        self.name = "Krovak"
        self.authority = "EPSG"
        self.authority_code = 9819

        azimuth = DEG2RAD * self._parameters.get_parameter_value("azimuth")
        pseudo_parallel = DEG2RAD * self._parameters.get_parameter_value("pseudo_standard_parallel_1")
        self._sin_azim = jnp.sin(azimuth)
        self._cos_azim = jnp.cos(azimuth)
        self._n = jnp.sin(pseudo_parallel)
        self._tan_s2 = jnp.tan(pseudo_parallel / 2.0 + _S45)

        sin_lat = jnp.sin(self.lat_origin)
        cos_lat = jnp.cos(self.lat_origin)
        cos_l2 = cos_lat * cos_lat
        es = self.es
        e = self.e
        self._alfa = jnp.sqrt(1.0 + (es * cos_l2 * cos_l2) / (1.0 - es))
        self._hae = self._alfa * e / 2.0
        u0 = jnp.arcsin(sin_lat / self._alfa)
        esl = e * sin_lat
        g = ((1.0 - esl) / (1.0 + esl)) ** (self._alfa * e / 2.0)
        self._k1 = jnp.tan(self.lat_origin / 2.0 + _S45) ** self._alfa * g / jnp.tan(u0 / 2.0 + _S45)
        self._ka = (1.0 / self._k1) ** (-1.0 / self._alfa)
        radius = jnp.sqrt(1.0 - es) / (1.0 - es * sin_lat * sin_lat)
        self._ro0 = self.scale_factor * radius / jnp.tan(pseudo_parallel)
        self._rop = self._ro0 * self._tan_s2**self._n

    def _forward(self, lam: Array, phi: Array) -> tuple[Array, Array]:
        lam = lam - self.central_meridian
        esp = self.e * jnp.sin(phi)
        gfi = ((1.0 - esp) / (1.0 + esp)) ** self._hae
        # tan is 0 at the south pole, rounding may make it negative
        base = jnp.maximum(jnp.tan(phi / 2.0 + _S45), 0.0)
        u = 2.0 * (jnp.arctan(base**self._alfa / self._k1 * gfi) - _S45)
        deltav = -lam * self._alfa
        cos_u = jnp.cos(u)
        s = asinz(self._cos_azim * jnp.sin(u) + self._sin_azim * cos_u * jnp.cos(deltav))
        d = asinz(cos_u * jnp.sin(deltav) / jnp.cos(s))
        eps = self._n * d
        ro = self._rop / jnp.tan(s / 2.0 + _S45) ** self._n
        # x and y are swapped relative to the EPSG southing/westing
        y = -(ro * jnp.cos(eps)) * self.semi_major
        x = -(ro * jnp.sin(eps)) * self.semi_major
        return x, y

    def _reverse(self, x: Array, y: Array) -> tuple[Array, Array]:
        x = x / self.semi_major
        y = y / self.semi_major
        ro = jnp.hypot(x, y)
        eps = jnp.arctan2(-x, -y)
        d = eps / self._n
        # the cone apex is the pole of the oblique sphere
        s = jnp.where(
            ro == 0.0,
            HALF_PI,
            2.0 * (jnp.arctan((self._ro0 / ro) ** (1.0 / self._n) * self._tan_s2) - _S45),
        )
        cs = jnp.cos(s)
        u = asinz(self._cos_azim * jnp.sin(s) - self._sin_azim * cs * jnp.cos(d))
        kau = self._ka * jnp.tan(u / 2.0 + _S45) ** (1.0 / self._alfa)
        deltav = asinz(cs * jnp.sin(d) / jnp.cos(u))
        lam = -deltav / self._alfa
        phi = settle("Krovak latitude", _MAX_ITER, *_latitude(as_real(kau), self.e))
        return lam + self.central_meridian, phi
