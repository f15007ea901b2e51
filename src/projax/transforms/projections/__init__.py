"""Map projections.

Each projection is a :class:`MapProjection`, a
:class:`~projax.transforms.MathTransform` from ``[lon, lat]`` degrees to
``[x, y]`` in the projection's linear unit (and back once inverted):

- **Cylindrical**: Mercator (1SP/2SP), Pseudo-Mercator, Transverse
  Mercator, Cassini-Soldner
- **Conic**: Albers equal-area, Lambert conformal (2SP), Krovak,
  American polyconic
- **Oblique**: Hotine / Oblique Mercator, Oblique Stereographic

:class:`ProjectionKind` maps WKT projection names to these classes.
"""

from .albers import AlbersProjection
from .cassini_soldner import CassiniSoldnerProjection
from .krovak import KrovakProjection
from .lambert import LambertConformalConic2SP
from .mercator import Mercator, PseudoMercator
from .oblique_mercator import HotineObliqueMercatorProjection, ObliqueMercatorProjection
from .oblique_stereographic import ObliqueStereographicProjection
from .polyconic import PolyconicProjection
from .transverse_mercator import TransverseMercator
from ._base import (
    MapProjection,
    adjust_lon,
    asinz,
    msfnz,
    phi1z,
    phi2z,
    qsfnz,
    sign,
    tsfnz,
)
from ._kinds import ProjectionKind

__all__ = [
    "MapProjection",
    "ProjectionKind",
    "Mercator",
    "PseudoMercator",
    "TransverseMercator",
    "AlbersProjection",
    "LambertConformalConic2SP",
    "KrovakProjection",
    "PolyconicProjection",
    "CassiniSoldnerProjection",
    "HotineObliqueMercatorProjection",
    "ObliqueMercatorProjection",
    "ObliqueStereographicProjection",
    "adjust_lon",
    "asinz",
    "sign",
    "msfnz",
    "qsfnz",
    "tsfnz",
    "phi1z",
    "phi2z",
]
