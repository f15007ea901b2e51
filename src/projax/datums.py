"""Ellipsoids, prime meridians and horizontal datums.

Provides the shape and anchoring objects a coordinate system is built on:

- :class:`Ellipsoid`: reference ellipsoid (semi-axes, inverse flattening).
- :class:`PrimeMeridian`: zero-longitude meridian.
- :class:`Wgs84ConversionInfo`: Bursa-Wolf 7-parameter shift to WGS84.
- :class:`DatumType`, :class:`Datum` and :class:`HorizontalDatum`.

Well-known instances are exposed as classmethods returning fresh values.

References:
    1. EPSG Guidance Note 7-2, *Coordinate Conversions and Transformations
       including Formulas*, Sec. 2.4.3.3 (Helmert 7-parameter).
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field

from projax.constants import RAD2DEG, SEC2RAD
from projax.info import Info, format_number
from projax.units import AngularUnit, LinearUnit


class Ellipsoid(Info):
    """Reference ellipsoid.

    When ``is_ivf_definitive`` is ``True`` the inverse flattening is the
    defining value and the semi-minor axis is derived from it as
    ``(1 - 1/ivf) * a``.  A zero or infinite inverse flattening (a sphere)
    keeps the supplied semi-minor axis instead.

    Args:
        semi_major_axis: Equatorial radius, in *axis_unit*.
        semi_minor_axis: Polar radius, in *axis_unit*.
        inverse_flattening: ``a / (a - b)``.
        is_ivf_definitive: Whether *inverse_flattening* defines the shape.
        axis_unit: Unit of the axes.  Defaults to metre.
        name: Ellipsoid name.
        **info: Remaining :class:`~projax.info.Info` metadata.

    Examples:
        ```python
        from projax.datums import Ellipsoid
        Ellipsoid.wgs84().semi_minor_axis  # 6356752.314245...
        ```
    """

    EQUALITY_TOLERANCE = 1.0e-6  # metres

    def __init__(
        self,
        semi_major_axis: float,
        semi_minor_axis: float,
        inverse_flattening: float,
        is_ivf_definitive: bool,
        axis_unit: LinearUnit | None = None,
        name: str = "",
        **info,
    ) -> None:
        super().__init__(name, **info)
        self.semi_major_axis = float(semi_major_axis)
        self.inverse_flattening = float(inverse_flattening)
        self.is_ivf_definitive = is_ivf_definitive
        self.axis_unit = axis_unit if axis_unit is not None else LinearUnit.metre()
        ivf = self.inverse_flattening
        if is_ivf_definitive and ivf != 0.0 and not math.isinf(ivf):
            self.semi_minor_axis = (1.0 - 1.0 / ivf) * self.semi_major_axis
        else:
            self.semi_minor_axis = float(semi_minor_axis)

    @classmethod
    def wgs84(cls) -> Ellipsoid:
        """WGS 84 ellipsoid, EPSG 7030."""
        return cls(
            6378137.0, 0.0, 298.257223563, True, LinearUnit.metre(), "WGS 84",
            authority="EPSG", authority_code=7030, alias="WGS84",
        )

    @classmethod
    def wgs72(cls) -> Ellipsoid:
        """WGS 72 ellipsoid, EPSG 7043."""
        return cls(
            6378135.0, 0.0, 298.26, True, LinearUnit.metre(), "WGS 72",
            authority="EPSG", authority_code=7043, alias="WGS 72",
        )

    @classmethod
    def grs80(cls) -> Ellipsoid:
        """GRS 1980 ellipsoid, EPSG 7019."""
        return cls(
            6378137.0, 0.0, 298.257222101, True, LinearUnit.metre(), "GRS 1980",
            authority="EPSG", authority_code=7019, alias="International 1979",
            remarks="Adopted by IUGG 1979 Canberra.",
        )

    @classmethod
    def international1924(cls) -> Ellipsoid:
        """International 1924 (Hayford 1909) ellipsoid, EPSG 7022."""
        return cls(
            6378388.0, 0.0, 297.0, True, LinearUnit.metre(), "International 1924",
            authority="EPSG", authority_code=7022, alias="Hayford 1909",
        )

    @classmethod
    def clarke1880(cls) -> Ellipsoid:
        """Clarke 1880 ellipsoid in Clarke's feet, EPSG 7034."""
        return cls(
            20926202.0, 0.0, 297.0, True, LinearUnit.clarkes_foot(), "Clarke 1880",
            authority="EPSG", authority_code=7034, alias="Clarke 1880",
        )

    @classmethod
    def clarke1866(cls) -> Ellipsoid:
        """Clarke 1866 ellipsoid (axes definitive), EPSG 7008."""
        return cls(
            6378206.4, 6356583.8, math.inf, False, LinearUnit.metre(), "Clarke 1866",
            authority="EPSG", authority_code=7008, alias="Clarke 1866",
        )

    @classmethod
    def sphere(cls) -> Ellipsoid:
        """GRS 1980 authalic sphere, EPSG 7048."""
        return cls(
            6370997.0, 6370997.0, math.inf, False, LinearUnit.metre(),
            "GRS 1980 Authalic Sphere", authority="EPSG", authority_code=7048, alias="Sphere",
        )

    @property
    def wkt(self) -> str:
        # WKT axes are in metres; spheres are written with a zero inverse flattening
        a, b = self._axes_in_metres()
        ivf = self.inverse_flattening
        if a == b:
            ivf = 0.0
        elif not self.is_ivf_definitive or ivf == 0.0 or math.isinf(ivf):
            ivf = a / (a - b)
        return (
            f'SPHEROID["{self.name}", {format_number(a)}, '
            f"{format_number(ivf)}{self._authority_wkt()}]"
        )

    def _axes_in_metres(self) -> tuple[float, float]:
        k = self.axis_unit.meters_per_unit
        return self.semi_major_axis * k, self.semi_minor_axis * k

    def equal_params(self, other: object) -> bool:
        """Whether both ellipsoids have the same shape, compared in metres.

        How the shape was defined (axes or inverse flattening) and the
        axis unit do not matter.
        """
        if not isinstance(other, Ellipsoid):
            return False
        return all(
            abs(mine - theirs) < self.EQUALITY_TOLERANCE
            for mine, theirs in zip(self._axes_in_metres(), other._axes_in_metres())
        )


class PrimeMeridian(Info):
    """Meridian from which longitudes are measured.

    Args:
        longitude: Longitude of the meridian relative to Greenwich, in *angular_unit*.
        angular_unit: Unit of *longitude*.  Defaults to degrees.
        name: Meridian name.
        **info: Remaining :class:`~projax.info.Info` metadata.
    """

    EQUALITY_TOLERANCE = 1.0e-10  # degrees

    def __init__(self, longitude: float, angular_unit: AngularUnit | None = None, name: str = "", **info) -> None:
        super().__init__(name, **info)
        self.longitude = float(longitude)
        self.angular_unit = angular_unit if angular_unit is not None else AngularUnit.degrees()

    @classmethod
    def _epsg(cls, longitude: float, name: str, code: int, remarks: str = "") -> PrimeMeridian:
        return cls(longitude, AngularUnit.degrees(), name, authority="EPSG", authority_code=code, remarks=remarks)

    @classmethod
    def greenwich(cls) -> PrimeMeridian:
        return cls._epsg(0.0, "Greenwich", 8901)

    @classmethod
    def lisbon(cls) -> PrimeMeridian:
        return cls._epsg(-9.0754862, "Lisbon", 8902)

    @classmethod
    def paris(cls) -> PrimeMeridian:
        return cls(
            2.5969213, AngularUnit.grad(), "Paris", authority="EPSG", authority_code=8903,
            remarks="Value adopted by IGN (Paris) in 1936. Equivalent to 2 deg 20min 14.025sec.",
        )

    @classmethod
    def bogota(cls) -> PrimeMeridian:
        return cls._epsg(-74.04513, "Bogota", 8904)

    @classmethod
    def madrid(cls) -> PrimeMeridian:
        return cls._epsg(-3.411658, "Madrid", 8905)

    @classmethod
    def rome(cls) -> PrimeMeridian:
        return cls._epsg(12.27084, "Rome", 8906)

    @classmethod
    def bern(cls) -> PrimeMeridian:
        return cls._epsg(7.26225, "Bern", 8907, "1895 value.")

    @classmethod
    def jakarta(cls) -> PrimeMeridian:
        return cls._epsg(106.482779, "Jakarta", 8908)

    @classmethod
    def ferro(cls) -> PrimeMeridian:
        return cls._epsg(-17.66666666666667, "Ferro", 8909, "Used in Austria and former Czechoslovakia.")

    @classmethod
    def brussels(cls) -> PrimeMeridian:
        return cls._epsg(4.220471, "Brussels", 8910)

    @classmethod
    def stockholm(cls) -> PrimeMeridian:
        return cls._epsg(18.03298, "Stockholm", 8911)

    @classmethod
    def athens(cls) -> PrimeMeridian:
        return cls._epsg(23.4258815, "Athens", 8912)

    @classmethod
    def oslo(cls) -> PrimeMeridian:
        return cls._epsg(10.43225, "Oslo", 8913, "Formerly known as Kristiania or Christiania.")

    @property
    def degrees(self) -> float:
        """Longitude of the meridian in degrees."""
        return self.longitude * self.angular_unit.radians_per_unit * RAD2DEG

    @property
    def wkt(self) -> str:
        return f'PRIMEM["{self.name}", {format_number(self.degrees)}{self._authority_wkt()}]'

    def equal_params(self, other: object) -> bool:
        if not isinstance(other, PrimeMeridian):
            return False
        return abs(other.degrees - self.degrees) < self.EQUALITY_TOLERANCE


@dataclass
class Wgs84ConversionInfo:
    """Bursa-Wolf parameters shifting a datum to WGS84.

    Rotations follow the position-vector convention.  Equality compares the
    seven numeric parameters only.

    Args:
        dx: X translation [m].
        dy: Y translation [m].
        dz: Z translation [m].
        ex: X rotation [arc-seconds].
        ey: Y rotation [arc-seconds].
        ez: Z rotation [arc-seconds].
        ppm: Scale correction [parts per million].
        area_of_use: Free-text area of use.
    """

    dx: float = 0.0
    dy: float = 0.0
    dz: float = 0.0
    ex: float = 0.0
    ey: float = 0.0
    ez: float = 0.0
    ppm: float = 0.0
    area_of_use: str = field(default="", compare=False)

    @property
    def has_zero_values_only(self) -> bool:
        """``True`` when no shift is needed (all seven parameters are zero)."""
        return not any((self.dx, self.dy, self.dz, self.ex, self.ey, self.ez, self.ppm))

    def get_affine_transform(self) -> list[float]:
        """Return the linearized shift vector used by the datum transform.

        Returns:
            list[float]: ``[scale, rx, ry, rz, dx, dy, dz]`` where the
            rotations are in radians and pre-multiplied by ``scale``.
        """
        rs = 1.0 + self.ppm * 1e-6
        return [
            rs,
            self.ex * SEC2RAD * rs,
            self.ey * SEC2RAD * rs,
            self.ez * SEC2RAD * rs,
            self.dx,
            self.dy,
            self.dz,
        ]

    @property
    def wkt(self) -> str:
        values = ", ".join(
            format_number(v) for v in (self.dx, self.dy, self.dz, self.ex, self.ey, self.ez, self.ppm)
        )
        return f"TOWGS84[{values}]"


class DatumType(enum.Enum):
    """OGC datum type codes."""

    HD_OTHER = 1000
    HD_CLASSIC = 1001
    HD_GEOCENTRIC = 1002
    VD_OTHER = 2000
    VD_ORTHOMETRIC = 2001
    VD_ELLIPSOIDAL = 2002
    VD_ALTITUDE_BAROMETRIC = 2003
    VD_NORMAL = 2004
    VD_GEOID_MODEL_DERIVED = 2005
    VD_DEPTH = 2006
    LD_MIN = 10000


class Datum(Info):
    """Base datum carrying only its type."""

    def __init__(self, datum_type: DatumType = DatumType.HD_OTHER, name: str = "", **info) -> None:
        super().__init__(name, **info)
        self.datum_type = datum_type

    def equal_params(self, other: object) -> bool:
        if not isinstance(other, Datum):
            return False
        return other.datum_type == self.datum_type


class HorizontalDatum(Datum):
    """Horizontal datum: an ellipsoid plus an optional shift to WGS84.

    Args:
        ellipsoid: Reference ellipsoid.
        wgs84_parameters: Bursa-Wolf shift to WGS84, ``None`` if unknown.
        datum_type: Datum type code.
        name: Datum name.
        **info: Remaining :class:`~projax.info.Info` metadata.
    """

    def __init__(
        self,
        ellipsoid: Ellipsoid,
        wgs84_parameters: Wgs84ConversionInfo | None = None,
        datum_type: DatumType = DatumType.HD_GEOCENTRIC,
        name: str = "",
        **info,
    ) -> None:
        super().__init__(datum_type, name, **info)
        self.ellipsoid = ellipsoid
        self.wgs84_parameters = wgs84_parameters

    @classmethod
    def wgs84(cls) -> HorizontalDatum:
        """World Geodetic System 1984, EPSG 6326."""
        return cls(
            Ellipsoid.wgs84(), None, DatumType.HD_GEOCENTRIC, "World Geodetic System 1984",
            authority="EPSG", authority_code=6326,
        )

    @classmethod
    def wgs72(cls) -> HorizontalDatum:
        """World Geodetic System 1972, EPSG 6322."""
        return cls(
            Ellipsoid.wgs72(), Wgs84ConversionInfo(0, 0, 4.5, 0, 0, 0.554, 0.219),
            DatumType.HD_GEOCENTRIC, "World Geodetic System 1972",
            authority="EPSG", authority_code=6322,
            remarks="Used by GPS before 1987.",
        )

    @classmethod
    def etrf89(cls) -> HorizontalDatum:
        """European Terrestrial Reference System 1989, EPSG 6258."""
        return cls(
            Ellipsoid.grs80(), Wgs84ConversionInfo(), DatumType.HD_GEOCENTRIC,
            "European Terrestrial Reference System 1989",
            authority="EPSG", authority_code=6258, alias="ETRF89",
        )

    @classmethod
    def ed50(cls) -> HorizontalDatum:
        """European Datum 1950, EPSG 6230."""
        return cls(
            Ellipsoid.international1924(), Wgs84ConversionInfo(-87, -98, -121, 0, 0, 0, 0),
            DatumType.HD_GEOCENTRIC, "European Datum 1950",
            authority="EPSG", authority_code=6230, alias="ED50",
        )

    @property
    def wkt(self) -> str:
        parts = f'DATUM["{self.name}", {self.ellipsoid.wkt}'
        if self.wgs84_parameters is not None:
            parts += f", {self.wgs84_parameters.wkt}"
        return parts + f"{self._authority_wkt()}]"

    def equal_params(self, other: object) -> bool:
        if not isinstance(other, HorizontalDatum):
            return False
        if (other.wgs84_parameters is None) != (self.wgs84_parameters is None):
            return False
        if other.wgs84_parameters is not None and other.wgs84_parameters != self.wgs84_parameters:
            return False
        return other.ellipsoid.equal_params(self.ellipsoid) and other.datum_type == self.datum_type
