"""Transverse Mercator (Gauss-Kruger) projection.

Uses the Snyder / proj4 power series in the longitude difference, accurate
to about a millimetre within a few degrees of the central meridian (the UTM
zone width).

References:
    1. J. P. Snyder, *Map Projections: A Working Manual*, pp. 60-64.
"""

from __future__ import annotations

from collections.abc import Iterable

import jax.numpy as jnp
from jax import Array

from projax.constants import HALF_PI
from projax.info import ProjectionParameter
from projax.parameters import ProjectionParameterSet
from projax.transforms.projections._base import MapProjection, adjust_lon, sign

_FC1 = 1.0
_FC2 = 0.5
_FC3 = 0.16666666666666666666666
_FC4 = 0.08333333333333333333333
_FC5 = 0.05
_FC6 = 0.03333333333333333333333
_FC7 = 0.02380952380952380952380
_FC8 = 0.01785714285714285714285

# cos(phi) below which tan(phi) is treated as 0
_EPSILON = 1e-6


class TransverseMercator(MapProjection):
    """Ellipsoidal Transverse Mercator, EPSG 9807.

    The reverse direction clamps to the nearer pole, on the central
    meridian, once the footpoint latitude reaches ``pi/2``.

    Examples:
        ```python
        from projax.coordinate_systems import ProjectedCoordinateSystem
        from projax.operations import CoordinateTransformationFactory
        from projax.coordinate_systems import GeographicCoordinateSystem

        utm31 = ProjectedCoordinateSystem.wgs84_utm(31, True)
        ct = CoordinateTransformationFactory().create_from_coordinate_systems(
            GeographicCoordinateSystem.wgs84(), utm31
        )
        ct.math_transform.transform([3.0, 0.0])  # [500000.0, 0.0]
        ```
    """

    def __init__(self, parameters: Iterable[ProjectionParameter] | ProjectionParameterSet) -> None:
        super().__init__(parameters)
        self.name = "Transverse_Mercator"
        self.authority = "EPSG"
        self.authority_code = 9807
        self.esp = self.es / (1.0 - self.es)
        self.ml0 = self.mlfn(self.lat_origin, jnp.sin(self.lat_origin), jnp.cos(self.lat_origin))

    def _forward(self, lam: Array, phi: Array) -> tuple[Array, Array]:
        x = adjust_lon(lam - self.central_meridian)
        sinphi = jnp.sin(phi)
        cosphi = jnp.cos(phi)
        t = jnp.where(jnp.abs(cosphi) > _EPSILON, sinphi / cosphi, 0.0)
        t = t * t
        al = cosphi * x
        als = al * al
        al = al / jnp.sqrt(1.0 - self.es * sinphi * sinphi)
        n = self.esp * cosphi * cosphi

        y = self.mlfn(phi, sinphi, cosphi) - self.ml0 + sinphi * al * x * _FC2 * (
            1.0
            + _FC4 * als * (
                5.0 - t + n * (9.0 + 4.0 * n)
                + _FC6 * als * (
                    61.0 + t * (t - 58.0) + n * (270.0 - 330.0 * t)
                    + _FC8 * als * (1385.0 + t * (t * (543.0 - t) - 3111.0))
                )
            )
        )
        x = al * (
            _FC1
            + _FC3 * als * (
                1.0 - t + n
                + _FC5 * als * (
                    5.0 + t * (t - 18.0) + n * (14.0 - 58.0 * t)
                    + _FC7 * als * (61.0 + t * (t * (179.0 - t) - 479.0))
                )
            )
        )
        k0a = self.scale_factor * self.semi_major
        return k0a * x, k0a * y

    def _reverse(self, x: Array, y: Array) -> tuple[Array, Array]:
        x = x / self.semi_major
        y = y / self.semi_major
        phi = self.inv_mlfn(self.ml0 + y / self.scale_factor)
        beyond_pole = jnp.abs(phi) >= HALF_PI

        sinphi = jnp.sin(phi)
        cosphi = jnp.cos(phi)
        t = jnp.where(jnp.abs(cosphi) > _EPSILON, sinphi / cosphi, 0.0)
        n = self.esp * cosphi * cosphi
        con = 1.0 - self.es * sinphi * sinphi
        d = x * jnp.sqrt(con) / self.scale_factor
        con = con * t
        t = t * t
        ds = d * d

        lat = phi - (con * ds / (1.0 - self.es)) * _FC2 * (
            1.0
            - ds * _FC4 * (
                5.0 + t * (3.0 - 9.0 * n) + n * (1.0 - 4.0 * n)
                - ds * _FC6 * (
                    61.0 + t * (90.0 - 252.0 * n + 45.0 * t) + 46.0 * n
                    - ds * _FC8 * (1385.0 + t * (3633.0 + t * (4095.0 + 1574.0 * t)))
                )
            )
        )
        lon = adjust_lon(
            self.central_meridian
            + d * (
                _FC1
                - ds * _FC3 * (
                    1.0 + 2.0 * t + n
                    - ds * _FC5 * (
                        5.0 + t * (28.0 + 24.0 * t + 8.0 * n) + 6.0 * n
                        - ds * _FC7 * (61.0 + t * (662.0 + t * (1320.0 + 720.0 * t)))
                    )
                )
            ) / cosphi
        )
        # the footpoint latitude reached a pole
        lon = jnp.where(beyond_pole, self.central_meridian, lon)
        lat = jnp.where(beyond_pole, sign(y) * HALF_PI, lat)
        return lon, lat
