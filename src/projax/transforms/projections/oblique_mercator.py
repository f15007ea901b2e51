"""Hotine oblique Mercator projections.

References:
    1. J. P. Snyder, *Map Projections: A Working Manual*, pp. 66-75.
    2. EPSG Guidance Note 7-2, Sec. 3.2.4 (Hotine Oblique Mercator,
       EPSG 9812 and 9815).
"""

from __future__ import annotations

from collections.abc import Iterable

import jax.numpy as jnp
from jax import Array

from projax.constants import DEG2RAD, EPSLN, HALF_PI
from projax.info import ProjectionParameter
from projax.parameters import ProjectionParameterSet
from projax.transforms.projections._base import MapProjection, adjust_lon, asinz, phi2z, sign, tsfnz


class HotineObliqueMercatorProjection(MapProjection):
    """Hotine Oblique Mercator, EPSG 9812.

    Requires ``azimuth`` (of the initial line through the projection
    centre) and ``rectified_grid_angle``, both in degrees.  Easting and
    northing are measured from the projection centre, so the ``u``
    ordinate of the centre is removed.  Points whose rectified ``u``
    reaches the poles of the oblique sphere have no image (empty result).

    Note:
        EPSG and PROJ attach the offsets the other way round: EPSG 9812
        (variant A) measures them from the natural origin and EPSG 9815
        (variant B) from the projection centre.  Here ``Hotine_Oblique_Mercator``
        applies the centre offsets and :class:`ObliqueMercatorProjection`
        the natural-origin ones, so a variant B definition with its false
        easting and northing at the centre gives EPSG coordinates through
        this class.
    """

    #: Whether offsets are measured from the natural origin instead of the projection centre.
    natural_origin_offsets = False

    def __init__(self, parameters: Iterable[ProjectionParameter] | ProjectionParameterSet) -> None:
        super().__init__(parameters)
        self.name = "Hotine_Oblique_Mercator"
        self.authority = "EPSG"
        self.authority_code = 9812

        azimuth = DEG2RAD * self._parameters.get_parameter_value("azimuth")
        grid_angle = DEG2RAD * self._parameters.get_parameter_value("rectified_grid_angle")
        es = self.es
        lat0 = self.lat_origin
        sin_p20 = jnp.sin(lat0)
        cos_p20 = jnp.cos(lat0)
        con = 1.0 - es * sin_p20 * sin_p20
        com = jnp.sqrt(1.0 - es)
        self._bl = jnp.sqrt(1.0 + es * cos_p20**4 / (1.0 - es))
        self._al = self.semi_major * self._bl * self.scale_factor * com / con

        on_equator = abs(lat0) < EPSLN
        d = jnp.where(on_equator, 1.0, self._bl * com / (cos_p20 * jnp.sqrt(con)))
        root = jnp.sqrt(jnp.maximum(d * d - 1.0, 0.0))
        f = jnp.where(on_equator, 1.0, d + jnp.where(lat0 >= 0.0, root, -root))
        self._d = d
        self._el = jnp.where(on_equator, 1.0, f * tsfnz(self.e, lat0, sin_p20) ** self._bl)

        g = 0.5 * (f - 1.0 / f)
        gama = asinz(jnp.sin(azimuth) / d)
        self.central_meridian = self.central_meridian - asinz(g * jnp.tan(gama)) / self._bl

        self._singam = jnp.sin(gama)
        self._cosgam = jnp.cos(gama)
        u = (self._al / self._bl) * jnp.arctan(root / jnp.cos(azimuth))
        interior = not on_equator and abs(abs(lat0) - HALF_PI) > EPSLN
        self._u = jnp.where(lat0 >= 0.0, u, -u) if interior else jnp.zeros_like(u)
        self._singrid = jnp.sin(grid_angle)
        self._cosgrid = jnp.cos(grid_angle)

    def _forward(self, lam: Array, phi: Array) -> tuple[Array, Array] | None:
        bl = self._bl
        al = self._al
        dlon = adjust_lon(lam - self.central_meridian)
        vl = jnp.sin(bl * dlon)
        at_pole = jnp.abs(jnp.abs(phi) - HALF_PI) <= EPSLN

        q = self._el / tsfnz(self.e, phi, jnp.sin(phi)) ** bl
        s = 0.5 * (q - 1.0 / q)
        t = 0.5 * (q + 1.0 / q)
        con = jnp.cos(bl * dlon)
        us = jnp.where(
            jnp.abs(con) < 1e-7,
            al * bl * dlon,
            al * jnp.arctan((s * self._cosgam + vl * self._singam) / con) / bl
            + jnp.where(con < 0.0, jnp.pi * al / bl, 0.0),
        )
        ul = jnp.where(
            at_pole,
            jnp.where(phi >= 0.0, self._singam, -self._singam),
            (s * self._singam - vl * self._cosgam) / t,
        )
        us = jnp.where(at_pole, al * phi / bl, us)

        if bool(jnp.abs(jnp.abs(ul) - 1.0) <= EPSLN):
            return None
        vs = 0.5 * al * jnp.log((1.0 - ul) / (1.0 + ul)) / bl
        if not self.natural_origin_offsets:
            us = us - self._u
        x = vs * self._cosgrid + us * self._singrid
        y = us * self._cosgrid - vs * self._singrid
        return x, y

    def _reverse(self, x: Array, y: Array) -> tuple[Array, Array]:
        bl = self._bl
        al = self._al
        vs = x * self._cosgrid - y * self._singrid
        us = y * self._cosgrid + x * self._singrid
        if not self.natural_origin_offsets:
            us = us + self._u
        q = jnp.exp(-bl * vs / al)
        s = 0.5 * (q - 1.0 / q)
        t = 0.5 * (q + 1.0 / q)
        vl = jnp.sin(bl * us / al)
        ul = (vl * self._cosgam + s * self._singam) / t
        at_pole = jnp.abs(jnp.abs(ul) - 1.0) <= EPSLN

        ts1 = (self._el / jnp.sqrt((1.0 + ul) / (1.0 - ul))) ** (1.0 / bl)
        lat = phi2z(self.e, jnp.where(at_pole, 1.0, ts1))
        theta = self.central_meridian - jnp.arctan2(s * self._cosgam - vl * self._singam, jnp.cos(bl * us / al)) / bl
        lon = jnp.where(at_pole, self.central_meridian, adjust_lon(theta))
        lat = jnp.where(at_pole, sign(ul) * HALF_PI, lat)
        return lon, lat


class ObliqueMercatorProjection(HotineObliqueMercatorProjection):
    """Oblique Mercator, EPSG 9815, with offsets taken at the natural origin.

    See the note on :class:`HotineObliqueMercatorProjection` for how the two
    offset conventions map onto the EPSG variants.
    """

    natural_origin_offsets = True

    def __init__(self, parameters: Iterable[ProjectionParameter] | ProjectionParameterSet) -> None:
        super().__init__(parameters)
        self.name = "Oblique_Mercator"
        self.authority_code = 9815
