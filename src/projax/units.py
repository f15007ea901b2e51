"""Units of measure.

Provides :class:`Unit` (a generic conversion factor), :class:`LinearUnit`
(metres per unit) and :class:`AngularUnit` (radians per unit), together with
the well-known EPSG units as classmethods.  Each classmethod call returns a
fresh, independently owned instance.
"""

from __future__ import annotations

from projax.info import Info, format_number


class Unit(Info):
    """Unit with an unspecified dimension.

    Produced by the WKT reader for top-level ``UNIT`` clauses, where the
    dimension cannot be inferred from context.

    Args:
        conversion_factor: Number of base units per this unit.
        name: Unit name.
        **info: Remaining :class:`~projax.info.Info` metadata.
    """

    def __init__(self, conversion_factor: float, name: str = "", **info) -> None:
        super().__init__(name, **info)
        self.conversion_factor = float(conversion_factor)

    @property
    def wkt(self) -> str:
        return f'UNIT["{self.name}", {format_number(self.conversion_factor)}{self._authority_wkt()}]'

    def equal_params(self, other: object) -> bool:
        if not isinstance(other, Unit):
            return False
        return other.conversion_factor == self.conversion_factor


class LinearUnit(Info):
    """Linear unit of measure.

    Args:
        meters_per_unit: Number of metres in one unit.
        name: Unit name.
        **info: Remaining :class:`~projax.info.Info` metadata.

    Examples:
        ```python
        from projax.units import LinearUnit
        LinearUnit.foot().meters_per_unit  # 0.3048
        ```
    """

    def __init__(self, meters_per_unit: float, name: str = "", **info) -> None:
        super().__init__(name, **info)
        self.meters_per_unit = float(meters_per_unit)

    @classmethod
    def metre(cls) -> LinearUnit:
        """International metre, EPSG 9001."""
        return cls(
            1.0, "metre", authority="EPSG", authority_code=9001, alias="m",
            remarks="Also known as International metre. SI standard unit.",
        )

    @classmethod
    def foot(cls) -> LinearUnit:
        """International foot, EPSG 9002."""
        return cls(0.3048, "foot", authority="EPSG", authority_code=9002, alias="ft")

    @classmethod
    def us_survey_foot(cls) -> LinearUnit:
        """US survey foot, EPSG 9003."""
        return cls(
            0.304800609601219, "US survey foot", authority="EPSG", authority_code=9003,
            alias="American foot", abbreviation="ftUS", remarks="Used in USA.",
        )

    @classmethod
    def nautical_mile(cls) -> LinearUnit:
        """Nautical mile, EPSG 9030."""
        return cls(1852.0, "nautical mile", authority="EPSG", authority_code=9030, alias="NM")

    @classmethod
    def clarkes_foot(cls) -> LinearUnit:
        """Clarke's foot, EPSG 9005."""
        return cls(
            0.3047972654, "Clarke's foot", authority="EPSG", authority_code=9005,
            alias="Clarke's foot",
            remarks="Assumes Clarke's 1865 ratio of 1 British foot = 0.3047972654 "
            "French legal metres applies to the international metre.",
        )

    @property
    def wkt(self) -> str:
        return f'UNIT["{self.name}", {format_number(self.meters_per_unit)}{self._authority_wkt()}]'

    def equal_params(self, other: object) -> bool:
        if not isinstance(other, LinearUnit):
            return False
        return other.meters_per_unit == self.meters_per_unit


class AngularUnit(Info):
    """Angular unit of measure.

    Two angular units are considered equal when their radians-per-unit
    factors differ by less than :attr:`EQUALITY_TOLERANCE`.

    Args:
        radians_per_unit: Number of radians in one unit.
        name: Unit name.
        **info: Remaining :class:`~projax.info.Info` metadata.
    """

    EQUALITY_TOLERANCE = 2.0e-17

    def __init__(self, radians_per_unit: float, name: str = "", **info) -> None:
        super().__init__(name, **info)
        self.radians_per_unit = float(radians_per_unit)

    @classmethod
    def degrees(cls) -> AngularUnit:
        """Degree (pi/180 radians), EPSG 9102."""
        return cls(
            0.017453292519943295769236907684886, "degree", authority="EPSG",
            authority_code=9102, alias="deg", remarks="=pi/180 radians",
        )

    @classmethod
    def radian(cls) -> AngularUnit:
        """Radian, EPSG 9101."""
        return cls(
            1.0, "radian", authority="EPSG", authority_code=9101, alias="rad",
            remarks="SI standard unit.",
        )

    @classmethod
    def grad(cls) -> AngularUnit:
        """Grad (pi/200 radians), EPSG 9105."""
        return cls(
            0.015707963267948966192313216916398, "grad", authority="EPSG",
            authority_code=9105, alias="gr", remarks="=pi/200 radians.",
        )

    @classmethod
    def gon(cls) -> AngularUnit:
        """Gon (pi/200 radians), EPSG 9106."""
        return cls(
            0.015707963267948966192313216916398, "gon", authority="EPSG",
            authority_code=9106, alias="g", remarks="=pi/200 radians.",
        )

    @property
    def wkt(self) -> str:
        return f'UNIT["{self.name}", {format_number(self.radians_per_unit)}{self._authority_wkt()}]'

    def equal_params(self, other: object) -> bool:
        if not isinstance(other, AngularUnit):
            return False
        return abs(other.radians_per_unit - self.radians_per_unit) < self.EQUALITY_TOLERANCE
