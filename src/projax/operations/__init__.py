"""Coordinate operations between coordinate systems.

Provides:

- :class:`CoordinateTransformation`: source/target systems plus the math
  transform that maps between them.
- :class:`TransformType`: conversion vs. datum transformation.
- :class:`CoordinateTransformationFactory`: path finder that assembles a
  transformation for any supported pair of systems.
"""

from .coordinate_transformation import CoordinateTransformation, TransformType
from .factory import CoordinateTransformationFactory

__all__ = [
    "CoordinateTransformation",
    "TransformType",
    "CoordinateTransformationFactory",
]
