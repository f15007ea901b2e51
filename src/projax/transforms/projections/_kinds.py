"""Closed registry mapping projection classification names to classes."""

from __future__ import annotations

import enum
from collections.abc import Iterable

from projax.info import ProjectionParameter
from projax.parameters import ProjectionParameterSet, normalize_name
from projax.transforms.projections._base import MapProjection
from projax.transforms.projections.albers import AlbersProjection
from projax.transforms.projections.cassini_soldner import CassiniSoldnerProjection
from projax.transforms.projections.krovak import KrovakProjection
from projax.transforms.projections.lambert import LambertConformalConic2SP
from projax.transforms.projections.mercator import Mercator, PseudoMercator
from projax.transforms.projections.oblique_mercator import (
    HotineObliqueMercatorProjection,
    ObliqueMercatorProjection,
)
from projax.transforms.projections.oblique_stereographic import ObliqueStereographicProjection
from projax.transforms.projections.polyconic import PolyconicProjection
from projax.transforms.projections.transverse_mercator import TransverseMercator


class ProjectionKind(enum.Enum):
    """Supported projection methods.

    Attributes:
        MERCATOR: Mercator 1SP/2SP.
        PSEUDO_MERCATOR: Popular Visualisation Pseudo-Mercator.
        TRANSVERSE_MERCATOR: Transverse Mercator.
        ALBERS: Albers Conic Equal Area.
        KROVAK: Krovak.
        POLYCONIC: American Polyconic.
        LAMBERT_CONFORMAL_CONIC: Lambert Conic Conformal (2SP).
        CASSINI_SOLDNER: Cassini-Soldner.
        HOTINE_OBLIQUE_MERCATOR: Hotine Oblique Mercator.
        OBLIQUE_MERCATOR: Oblique Mercator.
        OBLIQUE_STEREOGRAPHIC: Oblique Stereographic.
    """

    MERCATOR = "mercator"
    PSEUDO_MERCATOR = "pseudo_mercator"
    TRANSVERSE_MERCATOR = "transverse_mercator"
    ALBERS = "albers"
    KROVAK = "krovak"
    POLYCONIC = "polyconic"
    LAMBERT_CONFORMAL_CONIC = "lambert_conformal_conic"
    CASSINI_SOLDNER = "cassini_soldner"
    HOTINE_OBLIQUE_MERCATOR = "hotine_oblique_mercator"
    OBLIQUE_MERCATOR = "oblique_mercator"
    OBLIQUE_STEREOGRAPHIC = "oblique_stereographic"

    @classmethod
    def from_name(cls, name: str) -> ProjectionKind | None:
        """Classify a WKT projection name, ``None`` if unsupported.

        Matching is case-insensitive and treats spaces as underscores.

        Args:
            name: Projection name, e.g. ``"Transverse_Mercator"``.

        Returns:
            ProjectionKind | None: Matching kind.
        """
        return _ALIASES.get(normalize_name(name))

    @property
    def projection_class(self) -> type[MapProjection]:
        return _CLASSES[self]

    def create(self, parameters: Iterable[ProjectionParameter] | ProjectionParameterSet) -> MapProjection:
        """Instantiate the projection for *parameters*."""
        return _CLASSES[self](parameters)


_ALIASES: dict[str, ProjectionKind] = {
    "mercator": ProjectionKind.MERCATOR,
    "mercator_1sp": ProjectionKind.MERCATOR,
    "mercator_2sp": ProjectionKind.MERCATOR,
    "pseudo-mercator": ProjectionKind.PSEUDO_MERCATOR,
    "popular_visualisation_pseudo-mercator": ProjectionKind.PSEUDO_MERCATOR,
    "google_mercator": ProjectionKind.PSEUDO_MERCATOR,
    "transverse_mercator": ProjectionKind.TRANSVERSE_MERCATOR,
    "albers": ProjectionKind.ALBERS,
    "albers_conic_equal_area": ProjectionKind.ALBERS,
    "krovak": ProjectionKind.KROVAK,
    "polyconic": ProjectionKind.POLYCONIC,
    "lambert_conformal_conic": ProjectionKind.LAMBERT_CONFORMAL_CONIC,
    "lambert_conformal_conic_2sp": ProjectionKind.LAMBERT_CONFORMAL_CONIC,
    "lambert_conic_conformal_(2sp)": ProjectionKind.LAMBERT_CONFORMAL_CONIC,
    "cassini_soldner": ProjectionKind.CASSINI_SOLDNER,
    "hotine_oblique_mercator": ProjectionKind.HOTINE_OBLIQUE_MERCATOR,
    "oblique_mercator": ProjectionKind.OBLIQUE_MERCATOR,
    "oblique_stereographic": ProjectionKind.OBLIQUE_STEREOGRAPHIC,
}

_CLASSES: dict[ProjectionKind, type[MapProjection]] = {
    ProjectionKind.MERCATOR: Mercator,
    ProjectionKind.PSEUDO_MERCATOR: PseudoMercator,
    ProjectionKind.TRANSVERSE_MERCATOR: TransverseMercator,
    ProjectionKind.ALBERS: AlbersProjection,
    ProjectionKind.KROVAK: KrovakProjection,
    ProjectionKind.POLYCONIC: PolyconicProjection,
    ProjectionKind.LAMBERT_CONFORMAL_CONIC: LambertConformalConic2SP,
    ProjectionKind.CASSINI_SOLDNER: CassiniSoldnerProjection,
    ProjectionKind.HOTINE_OBLIQUE_MERCATOR: HotineObliqueMercatorProjection,
    ProjectionKind.OBLIQUE_MERCATOR: ObliqueMercatorProjection,
    ProjectionKind.OBLIQUE_STEREOGRAPHIC: ObliqueStereographicProjection,
}
