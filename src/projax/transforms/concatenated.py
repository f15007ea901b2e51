"""Pipelines of coordinate transformations applied in sequence."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from jax import Array
from jax.typing import ArrayLike

from projax.transforms._base import MathTransform, as_point, is_empty

if TYPE_CHECKING:
    from projax.operations import CoordinateTransformation


class ConcatenatedTransform(MathTransform):
    """Ordered list of coordinate transformation stages folded left to right.

    Each stage is a :class:`~projax.operations.CoordinateTransformation`;
    only its ``math_transform`` is applied, while its source and target
    systems define the pipeline dimensions.  ``NaN`` ordinates and empty
    points flow through the stages unchanged.

    :meth:`invert` reverses the stage order and inverts every stage's
    transform in place.  :meth:`inverse` instead builds an independent
    reversed pipeline and leaves this one untouched.

    Args:
        stages: Stages in application order.

    Examples:
        ```python
        from projax.operations import CoordinateTransformationFactory
        from projax.coordinate_systems import GeographicCoordinateSystem, ProjectedCoordinateSystem

        ct = CoordinateTransformationFactory().create_from_coordinate_systems(
            GeographicCoordinateSystem.wgs84(), ProjectedCoordinateSystem.web_mercator()
        )
        ct.math_transform.transform([12.0, 45.0])
        ```
    """

    def __init__(self, stages: Iterable[CoordinateTransformation] = ()) -> None:
        super().__init__()
        self._stages: list[CoordinateTransformation] = list(stages)

    @property
    def stages(self) -> list[CoordinateTransformation]:
        """Stages in application order (a shallow copy)."""
        return list(self._stages)

    @property
    def dim_source(self) -> int:
        return self._stages[0].source_cs.dimension

    @property
    def dim_target(self) -> int:
        return self._stages[-1].target_cs.dimension

    def append(self, stage: CoordinateTransformation) -> None:
        with self._lock:
            self._stages.append(stage)
            self._drop_inverse()

    def set_list(self, stages: Iterable[CoordinateTransformation]) -> None:
        """Replace all stages and clear the cached inverse."""
        with self._lock:
            self._stages = list(stages)
            self._drop_inverse()

    def _drop_inverse(self) -> None:
        if self._inverse is not None:
            self._inverse._inverse = None
            self._inverse = None

    def transform(self, point: ArrayLike | Sequence[float]) -> Array:
        p = as_point(point)
        for stage in self._stages:
            if is_empty(p):
                break
            p = stage.math_transform.transform(p)
        return p

    def _reverse_in_place(self) -> None:
        self._stages = [
            dataclasses.replace(s, source_cs=s.target_cs, target_cs=s.source_cs) for s in reversed(self._stages)
        ]
        for stage in self._stages:
            stage.math_transform.invert()

    def invert(self) -> None:
        with self._lock:
            self._reverse_in_place()
            if self._inverse is not None:
                self._inverse._reverse_in_place()

    def clone(self) -> ConcatenatedTransform:
        """Return a copy whose stages hold independent math transforms."""
        return ConcatenatedTransform(
            dataclasses.replace(s, math_transform=s.math_transform.clone()) for s in self._stages
        )

    def inverse(self) -> ConcatenatedTransform:
        with self._lock:
            if self._inverse is None:
                twin = self.clone()
                twin._reverse_in_place()
                twin._lock = self._lock
                twin._inverse = self
                self._inverse = twin
            return self._inverse

    def identity(self) -> bool:
        return all(s.math_transform.identity() for s in self._stages)

    def __repr__(self) -> str:
        return f"ConcatenatedTransform(stages={len(self._stages)})"
