"""
Map projection base class and the shared series/solver helpers.

Every projection reads its ellipsoid, origin and false-origin values from a
:class:`~projax.parameters.ProjectionParameterSet`:

- ``semi_major``, ``semi_minor`` (required, metres)
- ``scale_factor`` (optional, default 1)
- ``central_meridian`` or ``longitude_of_center`` (required, degrees)
- ``latitude_of_origin`` or ``latitude_of_center`` (required, degrees)
- ``unit`` (required, metres per output unit)
- ``false_easting``, ``false_northing`` (optional, default 0, in output units)

Subclasses implement :meth:`MapProjection._forward` and
:meth:`MapProjection._reverse` on radians and metres; the base class handles
degrees, the false origin, units and a pass-through height ordinate.

The helpers are written in ``jax.numpy``.  The meridian-distance series and
the latitude solvers follow the USGS General Cartographic Transformation
Package as carried by proj4; the solvers iterate with
``jax.lax.while_loop`` in double precision so that their tolerances are
reachable whatever output dtype is configured.  A solver that reaches its
iteration cap returns ``NaN`` and issues a
:class:`~projax.errors.ConvergenceWarning`.

References:
    1. J. P. Snyder, *Map Projections: A Working Manual*, USGS Professional
       Paper 1395, 1987.
"""

from __future__ import annotations

import warnings
from collections.abc import Iterable, Sequence

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from projax.constants import DBLLONG, DEG2RAD, EPSLN, HALF_PI, MAX_VAL, PRJ_MAXLONG, RAD2DEG, TWO_PI
from projax.errors import ConvergenceWarning
from projax.info import Info, ProjectionParameter
from projax.parameters import ProjectionParameterSet
from projax.transforms._base import MathTransform, as_point, empty_point, is_empty

# Meridian distance series coefficients
_C00 = 1.0
_C02 = 0.25
_C04 = 0.046875
_C06 = 0.01953125
_C08 = 0.01068115234375
_C22 = 0.75
_C44 = 0.46875
_C46 = 0.01302083333333333333
_C48 = 0.00712076822916666666
_C66 = 0.36458333333333333333
_C68 = 0.00569661458333333333
_C88 = 0.3076171875

_MLFN_TOL = 1e-11
_MLFN_MAX_ITER = 20

_PHI1Z_TOL = 1e-7
_PHI1Z_MAX_ITER = 24

_PHI2Z_TOL = 1e-10
_PHI2Z_MAX_ITER = 15


def as_real(x: ArrayLike) -> Array:
    """Convert *x* to a double-precision array for the solver kernels."""
    return jnp.asarray(x, dtype=jnp.float64)


def warn_not_converged(solver: str, iterations: int) -> None:
    """Issue a :class:`ConvergenceWarning` for *solver*."""
    warnings.warn(
        f"{solver} did not converge after {iterations} iterations",
        ConvergenceWarning,
        stacklevel=3,
    )


def settle(solver: str, max_iter: int, value: Array, converged: Array) -> Array:
    """Return a solver result, warning if the solver stopped at its cap.

    Args:
        solver: Solver name used in the warning.
        max_iter: Iteration cap of the solver.
        value: Solver result, already ``NaN`` where it did not converge.
        converged: Convergence flag returned by the solver kernel.

    Returns:
        jax.Array: *value*.
    """
    if not bool(jnp.all(converged)):
        warn_not_converged(solver, max_iter)
    return value


# ──────────────────────────────────────────────
# Shared helpers
# ──────────────────────────────────────────────


def sign(x: ArrayLike) -> Array:
    """Return -1 for negative *x*, otherwise 1."""
    return jnp.where(x < 0.0, -1.0, 1.0)


@jax.jit
def _adjust_lon(x: Array) -> Array:
    def cond(state):
        x, i = state
        return (jnp.abs(x) > jnp.pi) & (i <= MAX_VAL)

    def body(state):
        x, i = state
        turns = x / TWO_PI
        step = jnp.where(
            jnp.abs(x / jnp.pi) < 2.0,
            sign(x) * TWO_PI,
            jnp.where(
                jnp.abs(turns) < PRJ_MAXLONG,
                jnp.trunc(turns) * TWO_PI,
                jnp.where(
                    jnp.abs(turns / PRJ_MAXLONG) < PRJ_MAXLONG,
                    jnp.trunc(turns / PRJ_MAXLONG) * (TWO_PI * PRJ_MAXLONG),
                    jnp.where(
                        jnp.abs(turns / DBLLONG) < PRJ_MAXLONG,
                        jnp.trunc(turns / DBLLONG) * (TWO_PI * DBLLONG),
                        sign(x) * TWO_PI,
                    ),
                ),
            ),
        )
        return x - step, i + 1

    x, _ = jax.lax.while_loop(cond, body, (x, jnp.int32(0)))
    return x


def adjust_lon(x: ArrayLike) -> Array:
    """Wrap a longitude into ``[-pi, pi]``.

    Removes whole multiples of ``2 pi``, choosing the strategy by magnitude
    so that very large inputs lose as little precision as possible.  At
    most ``MAX_VAL + 1`` passes are made.

    Args:
        x: Longitude [rad].

    Returns:
        jax.Array: Wrapped longitude [rad].
    """
    return _adjust_lon(as_real(x))


def asinz(c: ArrayLike) -> Array:
    """Arc sine with its argument clamped to ``[-1, 1]``."""
    return jnp.arcsin(jnp.clip(c, -1.0, 1.0))


def msfnz(eccent: ArrayLike, sinphi: ArrayLike, cosphi: ArrayLike) -> Array:
    """Snyder's ``m``: ``cos(phi) / sqrt(1 - e^2 sin^2(phi))``."""
    con = eccent * sinphi
    return cosphi / jnp.sqrt(1.0 - con * con)


def qsfnz(eccent: ArrayLike, sinphi: ArrayLike) -> Array:
    """Snyder's authalic ``q`` function (eq. 3-12), ``2 sin(phi)`` on a sphere."""
    spherical = eccent <= 1.0e-7
    e = jnp.where(spherical, 1.0, eccent)
    con = e * sinphi
    q = (1.0 - e * e) * (sinphi / (1.0 - con * con) - (0.5 / e) * jnp.log((1.0 - con) / (1.0 + con)))
    return jnp.where(spherical, 2.0 * sinphi, q)


def tsfnz(eccent: ArrayLike, phi: ArrayLike, sinphi: ArrayLike) -> Array:
    """Snyder's conformal ``t`` function (eq. 15-9)."""
    con = eccent * sinphi
    con = ((1.0 - con) / (1.0 + con)) ** (0.5 * eccent)
    return jnp.tan(0.5 * (HALF_PI - phi)) / con


@jax.jit
def _phi1z(eccent: Array, qs: Array, tol: Array, max_iter: Array) -> tuple[Array, Array]:
    spherical = eccent < EPSLN
    e = jnp.where(spherical, 1.0, eccent)
    eccnts = e * e

    def cond(state):
        _, dphi, i = state
        return ~(jnp.abs(dphi) <= tol) & (i < max_iter)

    def body(state):
        phi, _, i = state
        sinpi = jnp.sin(phi)
        cospi = jnp.cos(phi)
        con = e * sinpi
        com = 1.0 - con * con
        dphi = 0.5 * com * com / cospi * (
            qs / (1.0 - eccnts) - sinpi / com + 0.5 / e * jnp.log((1.0 - con) / (1.0 + con))
        )
        return phi + dphi, dphi, i + 1

    # a sphere needs no iteration
    dphi0 = jnp.where(spherical, 0.0, jnp.inf).astype(qs.dtype)
    phi, dphi, _ = jax.lax.while_loop(cond, body, (asinz(0.5 * qs), dphi0, jnp.int32(0)))
    converged = jnp.abs(dphi) <= tol
    return jnp.where(converged, phi, jnp.nan), converged


def phi1z(
    eccent: ArrayLike,
    qs: ArrayLike,
    tol: float = _PHI1Z_TOL,
    max_iter: int = _PHI1Z_MAX_ITER,
    solver: str = "phi1z",
) -> Array:
    """Latitude from the authalic ``q`` value (Snyder eq. 3-16).

    Args:
        eccent: First eccentricity.
        qs: Authalic ``q`` value.
        tol: Step size [rad] at which the iteration stops.
        max_iter: Iteration cap.
        solver: Name reported by the :class:`ConvergenceWarning`.

    Returns:
        jax.Array: Latitude [rad], ``NaN`` if the cap was reached.
    """
    return settle(solver, max_iter, *_phi1z(as_real(eccent), as_real(qs), as_real(tol), max_iter))


@jax.jit
def _phi2z(eccent: Array, ts: Array) -> tuple[Array, Array]:
    eccnth = 0.5 * eccent

    def cond(state):
        _, dphi, i = state
        return ~(jnp.abs(dphi) <= _PHI2Z_TOL) & (i < _PHI2Z_MAX_ITER)

    def body(state):
        chi, _, i = state
        con = eccent * jnp.sin(chi)
        dphi = HALF_PI - 2.0 * jnp.arctan(ts * ((1.0 - con) / (1.0 + con)) ** eccnth) - chi
        return chi + dphi, dphi, i + 1

    chi0 = HALF_PI - 2.0 * jnp.arctan(ts)
    chi, dphi, _ = jax.lax.while_loop(cond, body, (chi0, jnp.full_like(ts, jnp.inf), jnp.int32(0)))
    converged = jnp.abs(dphi) <= _PHI2Z_TOL
    return jnp.where(converged, chi, jnp.nan), converged


def phi2z(eccent: ArrayLike, ts: ArrayLike) -> Array:
    """Latitude from the conformal ``t`` value (Snyder eq. 7-9).

    Returns ``NaN`` if 15 iterations do not reach a step of 1e-10 rad.
    """
    return settle("phi2z", _PHI2Z_MAX_ITER, *_phi2z(as_real(eccent), as_real(ts)))


def mlfn(en: Array, phi: ArrayLike, sphi: ArrayLike, cphi: ArrayLike) -> Array:
    """Meridian distance from the equator for a unit semi-major axis.

    Args:
        en: The five series coefficients ``en0..en4`` of the ellipsoid.
        phi: Latitude [rad].
        sphi: ``sin(phi)``.
        cphi: ``cos(phi)``.

    Returns:
        jax.Array: Meridian distance.
    """
    cphi = cphi * sphi
    sphi = sphi * sphi
    return en[0] * phi - cphi * (en[1] + sphi * (en[2] + sphi * (en[3] + sphi * en[4])))


@jax.jit
def _inv_mlfn(arg: Array, es: Array, en: Array, max_iter: Array) -> tuple[Array, Array]:
    k = 1.0 / (1.0 - es)

    def cond(state):
        _, t, i = state
        return ~(jnp.abs(t) < _MLFN_TOL) & (i < max_iter)

    def body(state):
        phi, _, i = state
        s = jnp.sin(phi)
        t = 1.0 - es * s * s
        t = (mlfn(en, phi, s, jnp.cos(phi)) - arg) * (t * jnp.sqrt(t)) * k
        return phi - t, t, i + 1

    phi, t, _ = jax.lax.while_loop(cond, body, (arg, jnp.full_like(arg, jnp.inf), jnp.int32(0)))
    converged = jnp.abs(t) < _MLFN_TOL
    return jnp.where(converged, phi, jnp.nan), converged


# ──────────────────────────────────────────────
# Base class
# ──────────────────────────────────────────────


class MapProjection(MathTransform, Info):
    """Base class for map projections.

    In the forward direction :meth:`transform` maps ``[lon, lat(, h)]`` in
    degrees to ``[x, y(, h)]`` in the projection's linear unit; after
    :meth:`invert` (or on the object returned by :meth:`inverse`) it maps
    the other way.  A third ordinate is carried through, scaled by the
    unit only.

    A projection also describes itself like a
    :class:`~projax.parameters.Projection`: it has a name, an authority
    code and indexed or named parameter access.

    Args:
        parameters: Projection parameters.

    Raises:
        MissingParameterError: If a required parameter is absent.
    """

    #: Whether the projection carries a third ordinate through.
    keeps_height = True

    def __init__(self, parameters: Iterable[ProjectionParameter] | ProjectionParameterSet) -> None:
        MathTransform.__init__(self)
        Info.__init__(self)
        if isinstance(parameters, ProjectionParameterSet):
            parameters = parameters.to_projection_parameters()
        self._parameters = ProjectionParameterSet(parameters)
        ps = self._parameters

        self.semi_major = ps.get_parameter_value("semi_major")
        self.semi_minor = ps.get_parameter_value("semi_minor")
        f = (self.semi_major - self.semi_minor) / self.semi_major
        self.es = 2.0 * f - f * f
        self.e = jnp.sqrt(as_real(self.es))
        self.scale_factor = ps.get_optional_parameter_value("scale_factor", 1.0)
        self.central_meridian = DEG2RAD * ps.get_parameter_value("central_meridian", "longitude_of_center")
        self.lat_origin = DEG2RAD * ps.get_parameter_value("latitude_of_origin", "latitude_of_center")
        self.meters_per_unit = ps.get_parameter_value("unit")
        self.false_easting = ps.get_optional_parameter_value("false_easting", 0.0) * self.meters_per_unit
        self.false_northing = ps.get_optional_parameter_value("false_northing", 0.0) * self.meters_per_unit

        es = self.es
        self.en = as_real([
            _C00 - es * (_C02 + es * (_C04 + es * (_C06 + es * _C08))),
            es * (_C22 - es * (_C04 + es * (_C06 + es * _C08))),
            es * es * (_C44 - es * (_C46 + es * _C48)),
            es**3 * (_C66 - es * _C68),
            es**4 * _C88,
        ])

    # -- descriptor ------------------------------------------------------

    @property
    def class_name(self) -> str:
        return self.name

    @property
    def num_parameters(self) -> int:
        return len(self._parameters)

    @property
    def parameters(self) -> ProjectionParameterSet:
        return self._parameters

    def get_parameter(self, key: int | str) -> ProjectionParameter | None:
        """Return a parameter by insertion index or case-insensitive name."""
        if isinstance(key, int):
            return self._parameters.get_at_index(key)
        return self._parameters.find(key)

    # -- MathTransform ---------------------------------------------------

    @property
    def dim_source(self) -> int:
        return 2

    @property
    def dim_target(self) -> int:
        return 2

    def _create_inverse(self) -> MathTransform:
        return self.clone()

    def transform(self, point: ArrayLike | Sequence[float]) -> Array:
        if self._is_inverse:
            return self.meters_to_degrees(point)
        return self.degrees_to_meters(point)

    def equal_params(self, other: object) -> bool:
        if not isinstance(other, MapProjection):
            return False
        return other._parameters == self._parameters and other._is_inverse == self._is_inverse

    @property
    def wkt(self) -> str:
        body = "".join(f", {p.wkt}" for p in self._parameters)
        text = f'PARAM_MT["{self.name}"{body}]'
        return f"INVERSE_MT[{text}]" if self._is_inverse else text

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, is_inverse={self._is_inverse})"

    # -- unit handling ---------------------------------------------------

    def degrees_to_meters(self, lonlat: ArrayLike | Sequence[float]) -> Array:
        """Project ``[lon, lat(, h)]`` in degrees to ``[x, y(, h)]`` in output units."""
        p = as_real(lonlat).reshape(-1)
        res = self.radians_to_meters(p.at[:2].multiply(DEG2RAD))
        if is_empty(res):
            return res
        res = as_real(res).at[0].add(self.false_easting).at[1].add(self.false_northing)
        return as_point(res / self.meters_per_unit)

    def meters_to_degrees(self, p: ArrayLike | Sequence[float]) -> Array:
        """Unproject ``[x, y(, h)]`` in output units to ``[lon, lat(, h)]`` in degrees."""
        q = as_real(p).reshape(-1) * self.meters_per_unit
        res = self.meters_to_radians(q.at[0].add(-self.false_easting).at[1].add(-self.false_northing))
        if is_empty(res):
            return res
        return as_point(as_real(res).at[:2].multiply(RAD2DEG))

    def radians_to_meters(self, lonlat: ArrayLike | Sequence[float]) -> Array:
        """Project ``[lon, lat(, h)]`` in radians to metres from the natural origin."""
        p = as_real(lonlat).reshape(-1)
        xy = self._forward(p[0], p[1])
        if xy is None:
            return empty_point()
        return self._with_height(xy, p)

    def meters_to_radians(self, p: ArrayLike | Sequence[float]) -> Array:
        """Unproject metres from the natural origin to ``[lon, lat(, h)]`` in radians."""
        q = as_real(p).reshape(-1)
        lonlat = self._reverse(q[0], q[1])
        if lonlat is None:
            return empty_point()
        return self._with_height(lonlat, q)

    def _with_height(self, pair: tuple[Array, Array], source: Array) -> Array:
        out = jnp.stack([as_real(pair[0]), as_real(pair[1])])
        if self.keeps_height:
            out = jnp.concatenate([out, source[2:3]])
        return as_point(out)

    def _forward(self, lam: Array, phi: Array) -> tuple[Array, Array] | None:
        raise NotImplementedError

    def _reverse(self, x: Array, y: Array) -> tuple[Array, Array] | None:
        raise NotImplementedError

    # -- meridian distance -----------------------------------------------

    def mlfn(self, phi: ArrayLike, sphi: ArrayLike, cphi: ArrayLike) -> Array:
        """Meridian distance from the equator for a unit semi-major axis."""
        return mlfn(self.en, phi, sphi, cphi)

    def inv_mlfn(self, arg: ArrayLike, max_iter: int = _MLFN_MAX_ITER + 1, solver: str = "inv_mlfn") -> Array:
        """Latitude whose meridian distance is *arg*.

        Args:
            arg: Meridian distance for a unit semi-major axis.
            max_iter: Iteration cap.
            solver: Name reported by the :class:`ConvergenceWarning`.

        Returns:
            jax.Array: Latitude [rad], ``NaN`` if not converged.
        """
        return settle(solver, max_iter, *_inv_mlfn(as_real(arg), as_real(self.es), self.en, max_iter))
