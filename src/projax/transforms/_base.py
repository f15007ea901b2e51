"""
The :class:`MathTransform` contract shared by every coordinate transform.

A transform maps points of ``dim_source`` ordinates to points of
``dim_target`` ordinates.  Points are accepted as any sequence or
array-like and returned as 1-D :class:`jax.Array` objects of the configured
dtype; a length-0 array marks "no result" (see :func:`is_empty`).

Each transform carries two pieces of mutable state:

- a lazily built inverse, created at most once and paired with its source
  so that ``t.inverse().inverse() is t``;
- a direction flag toggled in place by :meth:`MathTransform.invert`, which
  also flips the paired inverse.

Both are guarded by one re-entrant lock shared by the pair.
"""

from __future__ import annotations

import copy
import threading
from collections.abc import Iterable, Sequence

import numpy as np
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from projax.config import get_dtype


def as_point(values: ArrayLike | Sequence[float]) -> Array:
    """Build an output point of the configured dtype.

    Args:
        values: Ordinates.

    Returns:
        Array: 1-D array of ordinates.
    """
    return jnp.asarray(values, dtype=get_dtype()).reshape(-1)


def empty_point() -> Array:
    """Return the empty "no result" point."""
    return jnp.zeros((0,), dtype=get_dtype())


def is_empty(point: ArrayLike | Sequence[float]) -> bool:
    """Return ``True`` if *point* is the empty "no result" marker."""
    return np.size(np.asarray(point)) == 0


def to_floats(point: ArrayLike | Sequence[float]) -> list[float]:
    """Convert an input point to a list of Python floats.

    Used by transforms that slice and pad ordinates before a single
    array operation.

    Args:
        point: Input ordinates.

    Returns:
        list[float]: Ordinates as floats.
    """
    return np.asarray(point, dtype=np.float64).reshape(-1).tolist()


class MathTransform:
    """Base class for coordinate transforms.

    Subclasses implement :meth:`transform`, report ``dim_source`` and
    ``dim_target``, and override :meth:`_create_inverse` when an inverse
    exists.  The base class wires the returned twin back to its source and
    flips its direction flag.
    """

    def __init__(self) -> None:
        self._inverse: MathTransform | None = None
        self._is_inverse = False
        self._lock = threading.RLock()

    @property
    def dim_source(self) -> int:
        raise NotImplementedError

    @property
    def dim_target(self) -> int:
        raise NotImplementedError

    @property
    def is_inverse(self) -> bool:
        """``True`` while the transform runs in its reverse direction."""
        return self._is_inverse

    def transform(self, point: ArrayLike | Sequence[float]) -> Array:
        """Transform a single point.

        Args:
            point: Input ordinates, at least ``dim_source`` of them.

        Returns:
            Array: Output ordinates, or an empty array when the point has no
            image.
        """
        raise NotImplementedError

    def transform_list(self, points: Iterable[ArrayLike | Sequence[float]]) -> list[Array]:
        """Transform each point of *points* independently."""
        return [self.transform(p) for p in points]

    def _create_inverse(self) -> MathTransform | None:
        return None

    def inverse(self) -> MathTransform | None:
        """Return the inverse transform, building and caching it on first use.

        The returned transform is paired with this one, so calling
        ``inverse()`` on it returns this very object.

        Returns:
            MathTransform | None: Inverse transform, or ``None`` if the
            transform is not invertible.
        """
        with self._lock:
            if self._inverse is None:
                twin = self._create_inverse()
                if twin is None:
                    return None
                twin._lock = self._lock
                twin._inverse = self
                twin._is_inverse = not self._is_inverse
                self._inverse = twin
            return self._inverse

    def invert(self) -> None:
        """Reverse the direction of this transform in place.

        A previously returned :meth:`inverse` is flipped too, so the pair
        stays mutually inverse.
        """
        with self._lock:
            self._is_inverse = not self._is_inverse
            if self._inverse is not None:
                self._inverse._is_inverse = not self._inverse._is_inverse

    def clone(self) -> MathTransform:
        """Return a structurally independent copy with no cached inverse."""
        twin = copy.copy(self)
        twin._inverse = None
        twin._lock = threading.RLock()
        return twin

    def identity(self) -> bool:
        return False

    @property
    def wkt(self) -> str:
        raise NotImplementedError(f"{type(self).__name__} has no WKT form")

    def derivative(self, point: ArrayLike | Sequence[float]) -> Array:
        raise NotImplementedError(f"{type(self).__name__} does not provide derivatives")

    def get_codomain_convex_hull(self, points: Iterable[ArrayLike | Sequence[float]]) -> list[Array]:
        raise NotImplementedError(f"{type(self).__name__} does not provide a codomain hull")

    def get_domain_flags(self, points: Iterable[ArrayLike | Sequence[float]]) -> list[int]:
        raise NotImplementedError(f"{type(self).__name__} does not provide domain flags")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(is_inverse={self._is_inverse})"
