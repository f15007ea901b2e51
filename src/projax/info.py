"""Descriptive metadata records shared by every CRS object.

Provides:

- :class:`Info`: name/authority metadata base type with the
  ``equal_params`` contract (semantic equality that ignores the metadata).
- :class:`AxisOrientation` and :class:`AxisInfo`: axis descriptors.
- :class:`Parameter` and :class:`ProjectionParameter`: named numeric values.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


def format_number(value: float) -> str:
    """Format a number for WKT output.

    Uses the shortest repr that round-trips through ``float``, with the
    exponent (if any) written as ``1.0E-05`` so the WKT tokenizer reads it
    back as one number.

    Args:
        value: Number to format.

    Returns:
        str: WKT-ready text.
    """
    text = repr(float(value))
    if "e" not in text:
        return text
    mantissa, exponent = text.split("e")
    if "." not in mantissa:
        mantissa += ".0"
    return f"{mantissa}E{exponent}"


class Info:
    """Named metadata carried by units, datums, coordinate systems and projections.

    The metadata is descriptive only: two objects whose ``equal_params``
    agree are interchangeable for computation even if their names differ.

    Args:
        name: Object name.
        authority: Authority name, e.g. ``"EPSG"``.
        authority_code: Code within the authority, ``-1`` if unknown.
        alias: Alternate name.
        abbreviation: Short name.
        remarks: Free-text remarks.
    """

    def __init__(
        self,
        name: str = "",
        authority: str = "",
        authority_code: int = -1,
        alias: str = "",
        abbreviation: str = "",
        remarks: str = "",
    ) -> None:
        self.name = name
        self.authority = authority
        self.authority_code = authority_code
        self.alias = alias
        self.abbreviation = abbreviation
        self.remarks = remarks

    def equal_params(self, other: object) -> bool:
        """Return ``True`` if *other* is computationally equivalent to this object."""
        raise NotImplementedError(f"{type(self).__name__} does not define equal_params")

    @property
    def wkt(self) -> str:
        """Well-Known Text representation."""
        raise NotImplementedError(f"{type(self).__name__} has no WKT form")

    def _authority_wkt(self) -> str:
        if self.authority and self.authority_code > 0:
            return f', AUTHORITY["{self.authority}", "{self.authority_code}"]'
        return ""

    def __str__(self) -> str:
        return self.wkt

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, authority_code={self.authority_code})"


class AxisOrientation(enum.Enum):
    """Orientation of a coordinate system axis.

    Attributes:
        OTHER: Unknown or unspecified direction.
        NORTH: Increasing ordinates point north.
        SOUTH: Increasing ordinates point south.
        EAST: Increasing ordinates point east.
        WEST: Increasing ordinates point west.
        UP: Increasing ordinates point up.
        DOWN: Increasing ordinates point down.
    """

    OTHER = "OTHER"
    NORTH = "NORTH"
    SOUTH = "SOUTH"
    EAST = "EAST"
    WEST = "WEST"
    UP = "UP"
    DOWN = "DOWN"

    @classmethod
    def from_name(cls, name: str) -> AxisOrientation | None:
        """Look up an orientation by case-insensitive name, ``None`` if unknown."""
        try:
            return cls[name.upper()]
        except KeyError:
            return None


@dataclass(frozen=True)
class AxisInfo:
    """Name and orientation of one coordinate system axis.

    Args:
        name: Human-readable axis name, e.g. ``"Lon"``.
        orientation: Axis direction.
    """

    name: str
    orientation: AxisOrientation = AxisOrientation.OTHER

    @property
    def wkt(self) -> str:
        return f'AXIS["{self.name}", {self.orientation.value}]'


@dataclass
class Parameter:
    """A named numeric value, as used by ``PARAM_MT`` clauses.

    Args:
        name: Parameter name.
        value: Parameter value.
    """

    name: str
    value: float

    @property
    def wkt(self) -> str:
        return f'PARAMETER["{self.name}", {format_number(self.value)}]'


@dataclass
class ProjectionParameter(Parameter):
    """A named projection parameter, e.g. ``central_meridian``."""
