"""Well-Known Text (OGC 1.0) parsing.

Provides:

- :func:`parse_coordinate_system`: units, ellipsoids, datums, prime
  meridians and geographic, projected and fitted coordinate systems.
- :func:`parse_math_transform`: ``PARAM_MT["Affine", ...]`` transforms.
- :class:`WktStreamTokenizer`: the underlying tokenizer.
"""

from ._math_transform_reader import MathTransformWktReader, parse_math_transform
from ._reader import CoordinateSystemWktReader, parse_coordinate_system
from ._tokenizer import StreamTokenizer, TokenType, WktStreamTokenizer

__all__ = [
    "CoordinateSystemWktReader",
    "MathTransformWktReader",
    "StreamTokenizer",
    "TokenType",
    "WktStreamTokenizer",
    "parse_coordinate_system",
    "parse_math_transform",
]
