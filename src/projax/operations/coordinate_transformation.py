"""Coordinate transformation record."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from projax.coordinate_systems import CoordinateSystem
    from projax.transforms import MathTransform


class TransformType(enum.Enum):
    """Semantic type of a coordinate transformation.

    Attributes:
        OTHER: Unknown or unspecified.
        CONVERSION: Exact change of representation on one datum.
        TRANSFORMATION: Empirically derived change of datum.
        CONVERSION_AND_TRANSFORMATION: Both of the above.
    """

    OTHER = 0
    CONVERSION = 1
    TRANSFORMATION = 2
    CONVERSION_AND_TRANSFORMATION = 3


@dataclass(frozen=True)
class CoordinateTransformation:
    """A math transform between two coordinate systems, with metadata.

    Args:
        source_cs: Coordinate system of input points.
        target_cs: Coordinate system of output points.
        transform_type: Semantic type.
        math_transform: Transform applied to points.
        name: Transformation name.
        authority: Authority name.
        authority_code: Authority code, ``-1`` if unknown.
        area_of_use: Free-text area of use.
        remarks: Free-text remarks.
    """

    source_cs: CoordinateSystem
    target_cs: CoordinateSystem
    transform_type: TransformType
    math_transform: MathTransform
    name: str = ""
    authority: str = ""
    authority_code: int = -1
    area_of_use: str = ""
    remarks: str = ""
