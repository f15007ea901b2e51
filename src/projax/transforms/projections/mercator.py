"""Mercator (1SP and 2SP) and Web ("Pseudo") Mercator projections.

References:
    1. EPSG Guidance Note 7-2, Sec. 3.5.1 (Mercator variants A and B) and
       Sec. 3.5.1.1 (Popular Visualisation Pseudo Mercator).
"""

from __future__ import annotations

from collections.abc import Iterable

import jax.numpy as jnp
from jax import Array

from projax.constants import EPSLN, HALF_PI
from projax.info import ProjectionParameter
from projax.parameters import ProjectionParameterSet
from projax.transforms.projections._base import MapProjection


class Mercator(MapProjection):
    """Ellipsoidal normal-aspect Mercator.

    With a ``scale_factor`` parameter the projection is Mercator (1SP) and
    that value is the scale on the equator.  Without one it is Mercator
    (2SP, EPSG 9805) and the scale is derived so that the parallel at
    ``latitude_of_origin`` is true to scale.

    Points at the poles, or with a ``NaN`` longitude or latitude, project
    to ``[nan, nan]``.

    Examples:
        ```python
        from projax.info import ProjectionParameter as P
        from projax.transforms.projections import Mercator

        merc = Mercator([
            P("semi_major", 6378137.0), P("semi_minor", 6378137.0), P("unit", 1.0),
            P("central_meridian", 0.0), P("latitude_of_origin", 0.0), P("scale_factor", 1.0),
        ])
        merc.transform([180.0, 0.0])  # [20037508.34..., 0.0]
        ```
    """

    def __init__(self, parameters: Iterable[ProjectionParameter] | ProjectionParameterSet) -> None:
        super().__init__(parameters)
        self.authority = "EPSG"
        if self.get_parameter("scale_factor") is None:
            sin_lat0 = jnp.sin(self.lat_origin)
            self.k0 = jnp.cos(self.lat_origin) / jnp.sqrt(1.0 - self.es * sin_lat0 * sin_lat0)
            self.authority_code = 9805
            self.name = "Mercator_2SP"
        else:
            self.k0 = self.scale_factor
            self.authority_code = 9804
            self.name = "Mercator_1SP"

    def _forward(self, lam: Array, phi: Array) -> tuple[Array, Array]:
        undefined = jnp.isnan(lam) | jnp.isnan(phi) | (jnp.abs(jnp.abs(phi) - HALF_PI) <= EPSLN)
        ak0 = self.semi_major * self.k0
        esinphi = self.e * jnp.sin(phi)
        x = ak0 * (lam - self.central_meridian)
        y = ak0 * jnp.log(
            jnp.tan(jnp.pi * 0.25 + phi * 0.5) * ((1.0 - esinphi) / (1.0 + esinphi)) ** (self.e * 0.5)
        )
        return jnp.where(undefined, jnp.nan, x), jnp.where(undefined, jnp.nan, y)

    def _reverse(self, x: Array, y: Array) -> tuple[Array, Array]:
        ak0 = self.semi_major * self.k0
        ts = jnp.exp(-y / ak0)
        chi = HALF_PI - 2.0 * jnp.arctan(ts)
        es = self.es
        e4 = es * es
        e6 = e4 * es
        e8 = e4 * e4
        phi = (
            chi
            + (es * 0.5 + 5.0 * e4 / 24.0 + e6 / 12.0 + 13.0 * e8 / 360.0) * jnp.sin(2.0 * chi)
            + (7.0 * e4 / 48.0 + 29.0 * e6 / 240.0 + 811.0 * e8 / 11520.0) * jnp.sin(4.0 * chi)
            + (7.0 * e6 / 120.0 + 81.0 * e8 / 1120.0) * jnp.sin(6.0 * chi)
            + (4279.0 * e8 / 161280.0) * jnp.sin(8.0 * chi)
        )
        lam = x / ak0 + self.central_meridian
        return lam, phi


class PseudoMercator(Mercator):
    """Popular Visualisation Pseudo-Mercator ("Web Mercator").

    Spherical Mercator on a sphere of radius ``semi_major``: the supplied
    ``semi_minor`` is replaced by ``semi_major`` and ``scale_factor`` is
    forced to 1.
    """

    def __init__(self, parameters: Iterable[ProjectionParameter] | ProjectionParameterSet) -> None:
        ps = ProjectionParameterSet(
            parameters.to_projection_parameters() if isinstance(parameters, ProjectionParameterSet) else parameters
        )
        ps.set_parameter_value("semi_minor", ps.get_parameter_value("semi_major"))
        ps.set_parameter_value("scale_factor", 1.0)
        super().__init__(ps)
        self.name = "Pseudo-Mercator"
        self.authority_code = 3856
