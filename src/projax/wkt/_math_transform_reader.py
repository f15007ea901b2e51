"""Reader for ``PARAM_MT`` math transform WKT."""

from __future__ import annotations

import logging
import re

from projax.transforms import AffineTransform, MathTransform
from projax.wkt._tokenizer import WktStreamTokenizer

logger = logging.getLogger(__name__)

_ELEMENT = re.compile(r"elt_([0-3])_([0-3])")


def _read_parameters(tokenizer: WktStreamTokenizer) -> list[tuple[str, float]]:
    """Read ``PARAMETER`` clauses up to the closing ``]`` of the transform."""
    params: list[tuple[str, float]] = []
    while True:
        if tokenizer.token != "PARAMETER":
            raise tokenizer.error(f"Expecting ('PARAMETER') but got a '{tokenizer.token}'")
        params.append(tokenizer.read_parameter())
        if not tokenizer.next_element():
            return params


def _read_affine(tokenizer: WktStreamTokenizer) -> AffineTransform:
    params = _read_parameters(tokenizer)
    values = {name: value for name, value in params}
    try:
        rows = int(values["num_row"])
        cols = int(values["num_col"])
    except KeyError:
        raise tokenizer.error("Affine transform requires num_row and num_col") from None
    if rows <= 0 or cols <= 0:
        raise tokenizer.error(f"Invalid affine matrix size {rows}x{cols}")

    matrix = [[1.0 if r == c else 0.0 for c in range(cols)] for r in range(rows)]
    for name, value in params:
        m = _ELEMENT.fullmatch(name)
        if m is None:
            continue
        r, c = int(m.group(1)), int(m.group(2))
        if r < rows and c < cols:
            matrix[r][c] = value
    return AffineTransform.from_matrix(matrix)


def read_math_transform(tokenizer: WktStreamTokenizer) -> MathTransform | None:
    """Read a ``PARAM_MT`` clause whose keyword is the current token.

    The tokenizer is left on the clause's closing ``]``.

    Returns:
        MathTransform | None: The transform, or ``None`` if its name is
        not ``Affine`` (the clause is still consumed).
    """
    if tokenizer.token != "PARAM_MT":
        tokenizer.read_token("PARAM_MT")
    tokenizer.read_token("[")
    name = tokenizer.read_double_quoted_word()
    if not tokenizer.next_element():
        raise tokenizer.error(f"Transform {name!r} has no parameters")
    if name.upper() == "AFFINE":
        return _read_affine(tokenizer)
    _read_parameters(tokenizer)
    logger.debug("Unsupported math transform %r", name)
    return None


class MathTransformWktReader:
    """Parse math transforms from WKT.

    Only ``PARAM_MT["Affine", ...]`` is understood.  The matrix starts as
    the identity of size ``num_row x num_col``; ``elt_R_C`` parameters with
    ``R, C`` in ``0..3`` and inside the matrix overwrite its entries, and
    other parameter names are ignored.
    """

    @staticmethod
    def parse(wkt: str) -> MathTransform | None:
        """Parse *wkt*.

        Args:
            wkt: Transform WKT.

        Returns:
            MathTransform | None: The transform; ``None`` for empty text,
            non-``PARAM_MT`` roots and unsupported transform names.

        Raises:
            ParseError: If an affine clause is malformed or lacks a valid size.
        """
        if not wkt.strip():
            return None
        tokenizer = WktStreamTokenizer(wkt)
        tokenizer.next_token()
        if tokenizer.token != "PARAM_MT":
            logger.debug("Not a math transform: %r", tokenizer.token)
            return None
        return read_math_transform(tokenizer)


def parse_math_transform(wkt: str) -> MathTransform | None:
    """Shorthand for :meth:`MathTransformWktReader.parse`."""
    return MathTransformWktReader.parse(wkt)

