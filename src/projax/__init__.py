"""
projax is a coordinate reference system and map projection library implemented in JAX.
"""

from .constants import (
    DEG2RAD,
    RAD2DEG,
    SEC2RAD,
    WGS84_a,
    WGS84_f,
)

from .config import set_dtype, get_dtype, get_roundtrip_tolerance

from .errors import (
    ProjaxError,
    ConfigurationError,
    MissingParameterError,
    ParseError,
    SingularMatrixError,
    ConvergenceWarning,
)

from .info import AxisInfo, AxisOrientation, Parameter, ProjectionParameter
from .units import AngularUnit, LinearUnit, Unit
from .parameters import Projection, ProjectionParameterSet
from .datums import (
    DatumType,
    Ellipsoid,
    HorizontalDatum,
    PrimeMeridian,
    Wgs84ConversionInfo,
)

from .coordinate_systems import (
    CoordinateSystem,
    CoordinateSystemKind,
    FittedCoordinateSystem,
    GeocentricCoordinateSystem,
    GeographicCoordinateSystem,
    ProjectedCoordinateSystem,
)

from .transforms import MathTransform, AffineTransform, ConcatenatedTransform
from .operations import (
    CoordinateTransformation,
    CoordinateTransformationFactory,
    TransformType,
)
from .factory import CoordinateSystemFactory
from .wkt import parse_coordinate_system, parse_math_transform
