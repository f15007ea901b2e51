"""Module-wide floating-point precision configuration.

Provides ``set_dtype`` and ``get_dtype`` to control the float dtype of the
arrays returned by every projax transform.  The default is ``jnp.float64``:
projected coordinates reach magnitudes of ~2e7 m and geocentric ones ~6.4e6 m,
so single precision cannot hold sub-metre results.  Importing this module
therefore enables JAX's 64-bit mode (``jax_enable_x64``).

The projection formulas run on Python floats; only their results are
materialized as ``jax.Array`` values of the configured dtype.  The geocentric
and datum kernels run in ``jnp`` directly and follow the same dtype.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp

_VALID_DTYPES = (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64)

jax.config.update("jax_enable_x64", True)

_dtype = jnp.float64


def set_dtype(dtype) -> None:
    """Set the module-wide float dtype for projax.

    If *dtype* is ``jnp.float64``, JAX's 64-bit mode is (re-)enabled via
    ``jax.config.update("jax_enable_x64", True)``.

    Args:
        dtype: One of ``jnp.float16``, ``jnp.bfloat16``, ``jnp.float32``,
            or ``jnp.float64``.

    Raises:
        ValueError: If *dtype* is not a supported float type.
    """
    global _dtype
    if dtype not in _VALID_DTYPES:
        raise ValueError(
            f"Unsupported dtype {dtype}. Must be one of: "
            f"jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64"
        )
    if dtype == jnp.float64:
        jax.config.update("jax_enable_x64", True)
    _dtype = dtype


def get_dtype():
    """Return the current module-wide float dtype.

    Returns:
        The active float dtype (default ``jnp.float64``).
    """
    return _dtype


def get_roundtrip_tolerance() -> float:
    """Return the dtype-adaptive angular tolerance for round-trip checks.

    The tolerance scales with the precision of the configured float dtype:

    - ``float64``:  1e-6 deg
    - ``float32``:  1e-2 deg
    - ``float16``:  1.0 deg
    - ``bfloat16``: 1.0 deg

    Returns:
        float: Tolerance in degrees.
    """
    if _dtype == jnp.float64:
        return 1e-6
    if _dtype == jnp.float32:
        return 1e-2
    # float16 and bfloat16
    return 1.0
