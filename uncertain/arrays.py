"""Bridge between numpy containers and ``UncertainValue``.

Arrays of uncertain values are numpy arrays with ``dtype=object``. Plain
numpy arithmetic (``a + b``, ``a * 2``) already works element-wise on such
arrays through the value type's operators, and numpy's object ufuncs
(``np.sin``, ``np.sqrt``, ...) dispatch to its closed-form methods. This
module adds the one operation numpy cannot provide: lifting an arbitrary real
function, with finite-difference propagation, over every element.
"""

from __future__ import annotations

import logging

import numpy as np

from .propagation import RealFunc
from .value import UncertainValue

logger = logging.getLogger(__name__)


def apply(values, f: RealFunc) -> np.ndarray:
    """Apply ``f`` with uncertainty propagation to every element.

    Args:
        values (array_like): n-dimensional array (or nested sequence) of
            ``UncertainValue``; any number of dimensions and any shape.
        f (Callable[[float], float]): Scalar real function.

    Returns:
        numpy.ndarray: Flat 1-D object array of length ``values.size`` in
        row-major order, where element ``i`` is ``flat[i].apply(f)``.

    Note:
        The input shape is not preserved; reshape the result if needed.
        Each element uses the fourth-order finite-difference strategy.
    """
    arr = np.asarray(values, dtype=object)
    result = np.full(arr.size, UncertainValue.zero(), dtype=object)
    logger.debug(
        "Applying %s to %d elements of shape %s",
        getattr(f, "__name__", repr(f)),
        arr.size,
        arr.shape,
    )
    for i, x in enumerate(arr.flat):
        result[i] = x.apply(f)
    return result


def from_arrays(estimates, uncertainties) -> np.ndarray:
    """Pair estimate and uncertainty arrays into an array of values.

    Args:
        estimates (array_like): Estimates, any shape.
        uncertainties (array_like): Uncertainties broadcastable against
            ``estimates`` (a scalar applies one uncertainty to every element).

    Returns:
        numpy.ndarray: Object array with the broadcast shape.

    Raises:
        ValueError: If the two inputs cannot be broadcast together.
    """
    est, unc = np.broadcast_arrays(
        np.asarray(estimates, dtype=float), np.asarray(uncertainties, dtype=float)
    )
    out = np.empty(est.shape, dtype=object)
    for idx in np.ndindex(est.shape):
        out[idx] = UncertainValue(float(est[idx]), float(unc[idx]))
    return out


def estimates(values) -> np.ndarray:
    """Return the estimates of an array of values as floats, keeping its shape."""
    arr = np.asarray(values, dtype=object)
    return np.array([float(v.estimate) for v in arr.flat], dtype=float).reshape(
        arr.shape
    )


def uncertainties(values) -> np.ndarray:
    """Return the uncertainties of an array of values as floats, keeping its shape."""
    arr = np.asarray(values, dtype=object)
    return np.array([float(v.uncertainty) for v in arr.flat], dtype=float).reshape(
        arr.shape
    )
