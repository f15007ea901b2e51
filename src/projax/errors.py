"""Exception types raised by projax.

Structural problems (a missing required parameter, malformed WKT, a
singular affine matrix) are raised at construction or parse time.
Numerical non-convergence and undefined geometry are never raised: they
surface as ``NaN`` ordinates or an empty point so that pipelines keep
running, see :class:`ConvergenceWarning`.
"""

from __future__ import annotations


class ProjaxError(Exception):
    """Base class for all projax errors."""


class ConfigurationError(ProjaxError, ValueError):
    """A precondition on a CRS object or projection parameters is violated."""


class MissingParameterError(ConfigurationError, KeyError):
    """A required projection parameter is absent from a parameter set.

    Args:
        name: Requested parameter name.
        alternates: Alternate names that were also tried.
    """

    def __init__(self, name: str, alternates: tuple[str, ...] = ()) -> None:
        self.name = name
        self.alternates = tuple(alternates)
        tried = ", ".join(repr(n) for n in (name, *self.alternates))
        super().__init__(f"Missing required parameter: {tried}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class ParseError(ProjaxError, ValueError):
    """WKT text is malformed or names an unsupported object.

    Args:
        message: Description of the problem.
        line: 1-based line of the offending token, if known.
        column: 1-based column of the offending token, if known.
    """

    def __init__(self, message: str, line: int | None = None, column: int | None = None) -> None:
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)


class SingularMatrixError(ProjaxError, ArithmeticError):
    """An affine transform matrix has no inverse."""


class ConvergenceWarning(RuntimeWarning):
    """An iterative solver reached its iteration cap without converging.

    Issued through :func:`warnings.warn`; the affected transform still
    returns its ``NaN`` or empty result.
    """
