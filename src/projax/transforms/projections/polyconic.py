"""American polyconic projection.

References:
    1. J. P. Snyder, *Map Projections: A Working Manual*, pp. 124-137.
    2. EPSG Guidance Note 7-2, Sec. 3.3.3 (American Polyconic, EPSG 9818).
"""

from __future__ import annotations

from collections.abc import Iterable

import jax
import jax.numpy as jnp
from jax import Array

from projax.info import ProjectionParameter
from projax.parameters import ProjectionParameterSet
from projax.transforms.projections._base import MapProjection, adjust_lon, as_real, mlfn, warn_not_converged

_EPSILON = 1e-10
_MAX_ITER = 20
_TOL = 1e-12


@jax.jit
def _latitude(x: Array, y: Array, es: Array, en: Array) -> tuple[Array, Array, Array]:
    """Newton-Raphson latitude for the reverse direction (Snyder eq. 18-17).

    Returns the latitude, a convergence flag and a flag raised when an
    iterate reaches a meridian of zero cosine.
    """
    r = y * y + x * x

    def cond(state):
        _, d_phi, i, degenerate = state
        return ~degenerate & ~(jnp.abs(d_phi) <= _TOL) & (i < _MAX_ITER + 1)

    def body(state):
        phi, _, i, _ = state
        sp = jnp.sin(phi)
        cp = jnp.cos(phi)
        degenerate = jnp.abs(cp) < _TOL
        s2ph = sp * cp
        mlp = jnp.sqrt(1.0 - es * sp * sp)
        c = sp * mlp / cp
        ml = mlfn(en, phi, sp, cp)
        mlb = ml * ml + r
        mlp = (1.0 - es) / (mlp * mlp * mlp)
        d_phi = (ml + ml + c * mlb - 2.0 * y * (c * ml + 1.0)) / (
            es * s2ph * (mlb - 2.0 * y * ml) / c + 2.0 * (y - ml) * (c * mlp - 1.0 / s2ph) - mlp - mlp
        )
        settled = degenerate | (jnp.abs(d_phi) <= _TOL)
        return jnp.where(settled, phi, phi + d_phi), d_phi, i + 1, degenerate

    init = (y, jnp.full_like(y, jnp.inf), jnp.int32(0), jnp.bool_(False))
    phi, d_phi, _, degenerate = jax.lax.while_loop(cond, body, init)
    converged = ~degenerate & (jnp.abs(d_phi) <= _TOL)
    return phi, converged, degenerate


class PolyconicProjection(MapProjection):
    """American Polyconic, EPSG 9818.

    The reverse direction solves for latitude by Newton-Raphson; points
    whose iteration reaches a meridian of zero cosine, or fails to settle
    within 21 steps, have no image (empty result).  Output is always 2D.
    """

    keeps_height = False

    def __init__(self, parameters: Iterable[ProjectionParameter] | ProjectionParameterSet) -> None:
        super().__init__(parameters)
        self.name = "Polyconic"
        self.authority = "EPSG"
        self.authority_code = 9818
        self.ml0 = self.mlfn(self.lat_origin, jnp.sin(self.lat_origin), jnp.cos(self.lat_origin))

    def _msfn(self, s: Array, c: Array) -> Array:
        return c / jnp.sqrt(1.0 - s * s * self.es)

    def _forward(self, lam: Array, phi: Array) -> tuple[Array, Array]:
        delta_lam = adjust_lon(lam - self.central_meridian)
        on_equator = jnp.abs(phi) <= _EPSILON
        sp = jnp.sin(phi)
        cp = jnp.cos(phi)
        ms = jnp.where(jnp.abs(cp) > _EPSILON, self._msfn(sp, cp) / sp, 0.0)
        el = delta_lam * sp
        x = jnp.where(on_equator, delta_lam, ms * jnp.sin(el))
        y = jnp.where(on_equator, -self.ml0, self.mlfn(phi, sp, cp) - self.ml0 + ms * (1.0 - jnp.cos(el)))
        k0a = self.scale_factor * self.semi_major
        return k0a * x, k0a * y

    def _reverse(self, x: Array, y: Array) -> tuple[Array, Array] | None:
        k0a = self.scale_factor * self.semi_major
        x = x / k0a
        y = y / k0a + self.ml0
        if bool(jnp.abs(y) <= _EPSILON):
            return adjust_lon(x + self.central_meridian), jnp.zeros_like(y)

        phi, converged, degenerate = _latitude(as_real(x), as_real(y), as_real(self.es), self.en)
        if bool(degenerate):
            return None
        if not bool(converged):
            warn_not_converged("Polyconic latitude", _MAX_ITER + 1)
            return None

        sp = jnp.sin(phi)
        lam = jnp.arcsin(x * jnp.tan(phi) * jnp.sqrt(1.0 - self.es * sp * sp)) / sp
        return adjust_lon(lam + self.central_meridian), phi
