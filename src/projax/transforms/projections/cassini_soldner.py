"""Cassini-Soldner transverse cylindrical projection.

References:
    1. EPSG Guidance Note 7-2, Sec. 3.3.1 (Cassini-Soldner, EPSG 9806).
"""

from __future__ import annotations

from collections.abc import Iterable

import jax.numpy as jnp
from jax import Array

from projax.info import ProjectionParameter
from projax.parameters import ProjectionParameterSet
from projax.transforms.projections._base import MapProjection, adjust_lon

_ONE_6TH = 1.0 / 6.0
_ONE_120TH = 1.0 / 120.0
_ONE_24TH = 1.0 / 24.0
_ONE_3RD = 1.0 / 3.0
_ONE_15TH = 1.0 / 15.0

_MAX_ITER = 10


class CassiniSoldnerProjection(MapProjection):
    """Cassini-Soldner, EPSG 9806.

    The reverse direction finds the footpoint latitude with at most 11
    Newton steps on the meridian distance.
    """

    def __init__(self, parameters: Iterable[ProjectionParameter] | ProjectionParameterSet) -> None:
        super().__init__(parameters)
        self.name = "Cassini_Soldner"
        self.authority = "EPSG"
        self.authority_code = 9806
        self._c_factor = self.es / (1.0 - self.es)
        self._m0 = self.mlfn(self.lat_origin, jnp.sin(self.lat_origin), jnp.cos(self.lat_origin))

    def _forward(self, lam: Array, phi: Array) -> tuple[Array, Array]:
        lam = lam - self.central_meridian
        sin_phi = jnp.sin(phi)
        cos_phi = jnp.cos(phi)
        n = 1.0 / jnp.sqrt(1.0 - self.es * sin_phi * sin_phi)
        tn = jnp.tan(phi)
        t = tn * tn
        a1 = lam * cos_phi
        a2 = a1 * a1
        c = self._c_factor * cos_phi * cos_phi
        x = n * a1 * (1.0 - a2 * t * (_ONE_6TH - (8.0 - t + 8.0 * c) * a2 * _ONE_120TH))
        y = self.mlfn(phi, sin_phi, cos_phi) - self._m0 + n * tn * a2 * (
            0.5 + (5.0 - t + 6.0 * c) * a2 * _ONE_24TH
        )
        return self.semi_major * x, self.semi_major * y

    def _reverse(self, x: Array, y: Array) -> tuple[Array, Array]:
        x = x / self.semi_major
        y = y / self.semi_major
        phi1 = self.inv_mlfn(self._m0 + y, _MAX_ITER + 1, "Cassini-Soldner footpoint latitude")
        tn = jnp.tan(phi1)
        t = tn * tn
        n = jnp.sin(phi1)
        r = 1.0 / (1.0 - self.es * n * n)
        n = jnp.sqrt(r)
        r = r * (1.0 - self.es) * n
        dd = x / n
        d2 = dd * dd
        phi = phi1 - (n * tn / r) * d2 * (0.5 - (1.0 + 3.0 * t) * d2 * _ONE_24TH)
        lam = dd * (1.0 + t * d2 * (-_ONE_3RD + (1.0 + 3.0 * t) * d2 * _ONE_15TH)) / jnp.cos(phi1)
        return adjust_lon(lam + self.central_meridian), phi
