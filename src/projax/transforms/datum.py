"""Bursa-Wolf datum shift between geocentric coordinate systems.

Applies the linearized (small-angle) seven-parameter Helmert transform
built from :meth:`~projax.datums.Wgs84ConversionInfo.get_affine_transform`.
The reverse direction uses the algebraically negated rotations, scale and
translations, which is accurate to first order in the shift parameters.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import numpy as np
import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from projax.config import get_dtype
from projax.datums import Wgs84ConversionInfo
from projax.transforms._base import MathTransform, as_point


@jax.jit
def _shift_forward(p: Array, v: Array) -> Array:
    x, y, z = p[..., 0], p[..., 1], p[..., 2]
    return jnp.stack([
        v[0] * (x - v[3] * y + v[2] * z) + v[4],
        v[0] * (v[3] * x + y - v[1] * z) + v[5],
        v[0] * (-v[2] * x + v[1] * y + z) + v[6],
    ], axis=-1)


@jax.jit
def _shift_reverse(p: Array, v: Array) -> Array:
    x, y, z = p[..., 0], p[..., 1], p[..., 2]
    s = 1.0 - (v[0] - 1.0)
    return jnp.stack([
        s * (x + v[3] * y - v[2] * z) - v[4],
        s * (-v[3] * x + y + v[1] * z) - v[5],
        s * (v[2] * x - v[1] * y + z) - v[6],
    ], axis=-1)


class DatumTransform(MathTransform):
    """Seven-parameter datum shift on geocentric ``[x, y, z]`` metres.

    Args:
        to_wgs84: Shift from the source datum to WGS84.

    Examples:
        ```python
        from projax.datums import Wgs84ConversionInfo
        from projax.transforms import DatumTransform

        t = DatumTransform(Wgs84ConversionInfo(dx=-87.0, dy=-98.0, dz=-121.0))
        t.transform([4e6, 1e6, 4.8e6])  # [3999913.0, 999902.0, 4799879.0]
        ```
    """

    def __init__(self, to_wgs84: Wgs84ConversionInfo) -> None:
        super().__init__()
        self.to_wgs84 = to_wgs84
        self._v = to_wgs84.get_affine_transform()

    @property
    def dim_source(self) -> int:
        return 3

    @property
    def dim_target(self) -> int:
        return 3

    def _create_inverse(self) -> MathTransform:
        return self.clone()

    def _apply(self, rows: list[list[float]]) -> Array:
        dtype = get_dtype()
        p = jnp.asarray(np.array(rows), dtype=dtype)
        v = jnp.asarray(self._v, dtype=dtype)
        return _shift_reverse(p, v) if self._is_inverse else _shift_forward(p, v)

    @staticmethod
    def _pad(point: ArrayLike | Sequence[float]) -> list[float]:
        p = np.asarray(point, dtype=np.float64).reshape(-1).tolist()
        return (p + [0.0, 0.0, 0.0])[:3]

    def transform(self, point: ArrayLike | Sequence[float]) -> Array:
        return as_point(self._apply([self._pad(point)])[0])

    def transform_list(self, points: Iterable[ArrayLike | Sequence[float]]) -> list[Array]:
        rows = [self._pad(p) for p in points]
        if not rows:
            return []
        out = self._apply(rows)
        return [out[i] for i in range(out.shape[0])]

    def equal_params(self, other: object) -> bool:
        if not isinstance(other, DatumTransform):
            return False
        return other.to_wgs84 == self.to_wgs84 and other._is_inverse == self._is_inverse

    @property
    def wkt(self) -> str:
        return self.to_wgs84.wkt
