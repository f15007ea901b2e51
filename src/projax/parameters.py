"""Projection parameter containers.

Provides :class:`ProjectionParameterSet`, the case-insensitive parameter
lookup consumed by every map projection, and :class:`Projection`, the
projection descriptor held by a projected coordinate system.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from projax.errors import MissingParameterError
from projax.info import Info, ProjectionParameter


def normalize_name(name: str) -> str:
    """Normalize a classification name for lookups.

    Lower-cases *name* and replaces spaces with underscores, so that
    ``"Transverse Mercator"`` and ``"transverse_mercator"`` match.

    Args:
        name: Name as written in WKT or user code.

    Returns:
        str: Normalized name.
    """
    return name.lower().replace(" ", "_")


class ProjectionParameterSet:
    """Named projection parameters with case-insensitive lookup.

    Keys are stored lower-cased; the original spelling of each name is kept
    for display and the insertion order is kept for positional access
    (matching the order of ``PARAMETER`` clauses in WKT).  Setting an
    existing name overwrites its value in place.

    Args:
        parameters: Initial parameters, in order.

    Examples:
        ```python
        from projax.info import ProjectionParameter
        from projax.parameters import ProjectionParameterSet

        ps = ProjectionParameterSet([ProjectionParameter("Latitude_Of_Origin", 49.0)])
        ps.get_parameter_value("LATITUDE_OF_ORIGIN")  # 49.0
        ```
    """

    def __init__(self, parameters: Iterable[ProjectionParameter] = ()) -> None:
        self._values: dict[str, float] = {}
        self._original_names: dict[str, str] = {}
        self._order: list[str] = []
        for p in parameters:
            self.set_parameter_value(p.name, p.value)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[ProjectionParameter]:
        return iter(self.to_projection_parameters())

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._values

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProjectionParameterSet):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        body = ", ".join(f"{p.name}={p.value!r}" for p in self)
        return f"ProjectionParameterSet({body})"

    def set_parameter_value(self, name: str, value: float) -> None:
        """Set *name* to *value*, appending it if not yet present."""
        key = name.lower()
        if key not in self._values:
            self._order.append(key)
            self._original_names[key] = name
        self._values[key] = float(value)

    def get_parameter_value(self, name: str, *alternate_names: str) -> float:
        """Return the value of a required parameter.

        Args:
            name: Primary parameter name.
            *alternate_names: Names tried in order when *name* is absent.

        Returns:
            float: Parameter value.

        Raises:
            MissingParameterError: If neither *name* nor any alternate is set.
        """
        key = name.lower()
        if key in self._values:
            return self._values[key]
        for alt in alternate_names:
            if alt.lower() in self._values:
                return self._values[alt.lower()]
        raise MissingParameterError(name, alternate_names)

    def get_optional_parameter_value(self, name: str, default: float, *alternate_names: str) -> float:
        """Return the value of an optional parameter, or *default* when absent."""
        try:
            return self.get_parameter_value(name, *alternate_names)
        except MissingParameterError:
            return default

    def find(self, name: str) -> ProjectionParameter | None:
        """Return the parameter called *name* (any case), or ``None``."""
        key = name.lower()
        if key not in self._values:
            return None
        return ProjectionParameter(self._original_names[key], self._values[key])

    def get_at_index(self, index: int) -> ProjectionParameter | None:
        """Return the parameter at insertion position *index*, or ``None``."""
        if index < 0 or index >= len(self._order):
            return None
        key = self._order[index]
        return ProjectionParameter(self._original_names[key], self._values[key])

    def to_projection_parameters(self) -> list[ProjectionParameter]:
        """Return fresh copies of all parameters in insertion order."""
        return [ProjectionParameter(self._original_names[k], self._values[k]) for k in self._order]


class Projection(Info):
    """Projection descriptor: a classification name plus its parameters.

    The descriptor carries no math; the transformation factory turns it into
    a concrete :class:`~projax.transforms.projections.MapProjection`.

    Args:
        class_name: Projection method, e.g. ``"Transverse_Mercator"``.
        parameters: Projection parameters in WKT order.
        name: Descriptor name (often equal to *class_name*).
        **info: Remaining :class:`~projax.info.Info` metadata.
    """

    def __init__(self, class_name: str, parameters: Iterable[ProjectionParameter], name: str = "", **info) -> None:
        super().__init__(name or class_name, **info)
        self.class_name = class_name
        self.parameters: list[ProjectionParameter] = list(parameters)

    @property
    def num_parameters(self) -> int:
        return len(self.parameters)

    def get_parameter(self, key: int | str) -> ProjectionParameter | None:
        """Return a parameter by position or by case-insensitive name."""
        if isinstance(key, int):
            return self.parameters[key] if 0 <= key < len(self.parameters) else None
        for p in self.parameters:
            if p.name.lower() == key.lower():
                return p
        return None

    @property
    def wkt(self) -> str:
        return f'PROJECTION["{self.class_name}"{self._authority_wkt()}]'

    def equal_params(self, other: object) -> bool:
        if not isinstance(other, Projection):
            return False
        if other.num_parameters != self.num_parameters:
            return False
        for p in self.parameters:
            q = other.get_parameter(p.name)
            if q is None or q.value != p.value:
                return False
        return True
