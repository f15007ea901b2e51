"""Coordinate transforms.

This sub-package provides the :class:`MathTransform` contract and its
implementations:

- **Projections**: see :mod:`projax.transforms.projections`
- **Geocentric**: geodetic ``[lon, lat, h]`` ↔ Earth-centred ``[x, y, z]``
- **Datum**: seven-parameter Bursa-Wolf shift between geocentric systems
- **Prime meridian** and **geographic**: longitude re-referencing
- **Affine**: homogeneous matrix transforms
- **Concatenated**: pipelines of the above
"""

from ._base import MathTransform, as_point, empty_point, is_empty
from .affine import AffineTransform, invert_matrix
from .concatenated import ConcatenatedTransform
from .datum import DatumTransform
from .geocentric import GeocentricTransform
from .geographic import GeographicTransform
from .prime_meridian import PrimeMeridianTransform

__all__ = [
    "MathTransform",
    "as_point",
    "empty_point",
    "is_empty",
    "AffineTransform",
    "invert_matrix",
    "ConcatenatedTransform",
    "DatumTransform",
    "GeocentricTransform",
    "GeographicTransform",
    "PrimeMeridianTransform",
]
