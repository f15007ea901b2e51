"""
Affine transform in homogeneous coordinates.

A transform from ``M`` to ``N`` ordinates is described by an
``(N+1) x (M+1)`` matrix whose last column holds the translation and whose
last row is ``[0, ..., 0, 1]``.  The inverse is computed from an LU
factorization with partial pivoting, solving for the columns of the
identity.

References:
    1. T. H. Cormen, C. E. Leiserson, R. L. Rivest, C. Stein, *Introduction
       to Algorithms*, Sec. 28.1 (LUP decomposition).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import jax.numpy as jnp
import jax.scipy.linalg
from jax import Array
from jax.typing import ArrayLike

from projax.config import get_dtype
from projax.errors import SingularMatrixError
from projax.info import Parameter
from projax.transforms._base import MathTransform, as_point, empty_point, to_floats

logger = logging.getLogger(__name__)


def invert_matrix(matrix: Sequence[Sequence[float]] | ArrayLike) -> Array:
    """Invert a square matrix by LUP decomposition.

    Args:
        matrix: Square matrix as nested sequences or a 2-D array.

    Returns:
        jax.Array: Inverse matrix.

    Raises:
        SingularMatrixError: If *matrix* is not square or ``U`` has a zero
            on its diagonal.
    """
    rows = matrix.tolist() if hasattr(matrix, "tolist") else matrix
    n = len(rows)
    if any(len(row) != n for row in rows):
        raise SingularMatrixError(f"Only square matrices can be inverted, got {n} rows")
    a = jnp.asarray(rows, dtype=get_dtype())
    lu, piv = jax.scipy.linalg.lu_factor(a)
    zero_pivots = jnp.flatnonzero(jnp.diagonal(lu) == 0.0)
    if zero_pivots.size:
        raise SingularMatrixError(f"Singular matrix: zero pivot in column {int(zero_pivots[0])}")
    return jax.scipy.linalg.lu_solve((lu, piv), jnp.eye(n, dtype=a.dtype))


class AffineTransform(MathTransform):
    """Affine transform given by a homogeneous matrix.

    Construct from six values for the common 2D case, or pass a full
    ``(N+1) x (M+1)`` matrix with :meth:`from_matrix`.

    Args:
        m00: Scale X.
        m01: Shear X.
        m02: Translate X.
        m10: Shear Y.
        m11: Scale Y.
        m12: Translate Y.

    Examples:
        ```python
        from projax.transforms import AffineTransform

        shift = AffineTransform(1, 0, 10, 0, 1, -5)
        shift.transform([1.0, 2.0])  # [11.0, -3.0]
        ```
    """

    def __init__(self, m00: float, m01: float, m02: float, m10: float, m11: float, m12: float) -> None:
        super().__init__()
        self._matrix = [
            [float(m00), float(m01), float(m02)],
            [float(m10), float(m11), float(m12)],
            [0.0, 0.0, 1.0],
        ]
        self._inverse_matrix: list[list[float]] | None = None

    @classmethod
    def from_matrix(cls, matrix: Sequence[Sequence[float]] | ArrayLike) -> AffineTransform:
        """Build a transform from a full homogeneous matrix."""
        rows = [[float(v) for v in row] for row in (matrix.tolist() if hasattr(matrix, "tolist") else matrix)]
        t = cls(1.0, 0.0, 0.0, 0.0, 1.0, 0.0)
        t._matrix = rows
        return t

    @property
    def dim_source(self) -> int:
        return len(self._matrix[0]) - 1

    @property
    def dim_target(self) -> int:
        return len(self._matrix) - 1

    def _active_matrix(self) -> list[list[float]]:
        if not self._is_inverse:
            return self._matrix
        with self._lock:
            if self._inverse_matrix is None:
                logger.debug("Inverting %dx%d affine matrix", len(self._matrix), len(self._matrix[0]))
                self._inverse_matrix = invert_matrix(self._matrix).tolist()
            return self._inverse_matrix

    def _create_inverse(self) -> MathTransform:
        # raises SingularMatrixError for a singular matrix
        if self._inverse_matrix is None:
            self._inverse_matrix = invert_matrix(self._matrix).tolist()
        return self.clone()

    def get_matrix(self) -> list[list[float]]:
        """Return a copy of the matrix currently applied by :meth:`transform`."""
        return [list(row) for row in self._active_matrix()]

    def transform(self, point: ArrayLike | Sequence[float]) -> Array:
        p = to_floats(point)
        m = self._active_matrix()
        dim_s = len(m[0]) - 1
        dim_t = len(m) - 1
        if len(p) < dim_s:
            return empty_point()
        mat = jnp.asarray(m, dtype=get_dtype())
        return as_point(mat[:dim_t, :dim_s] @ jnp.asarray(p[:dim_s], dtype=get_dtype()) + mat[:dim_t, dim_s])

    def get_parameter_values(self) -> list[Parameter]:
        """Return the matrix as ``num_row``, ``num_col`` and ``elt_R_C`` parameters."""
        m = self._active_matrix()
        params = [Parameter("num_row", float(len(m))), Parameter("num_col", float(len(m[0])))]
        for r, row in enumerate(m):
            for c, value in enumerate(row):
                params.append(Parameter(f"elt_{r}_{c}", value))
        return params

    def identity(self) -> bool:
        m = self._matrix
        if len(m) != len(m[0]):
            return False
        return all(m[r][c] == (1.0 if r == c else 0.0) for r in range(len(m)) for c in range(len(m)))

    @property
    def wkt(self) -> str:
        body = ", ".join(p.wkt for p in self.get_parameter_values())
        return f'PARAM_MT["Affine", {body}]'

    def __repr__(self) -> str:
        return f"AffineTransform(matrix={self._active_matrix()!r})"
