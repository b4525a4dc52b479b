"""Finite-difference derivatives and uncertainty combination rules.

All routines operate on plain floats and follow IEEE semantics: invalid
operations yield NaN or inf rather than raising. Nothing here knows about
``UncertainValue``; the value type builds on these primitives.

Combination rules for independent uncertainties:
- Quadrature: u = sqrt(Σ u_i²) (sums, differences, ties in max/min)
- Linear: u = Σ |u_i| (worst-case bound, used by ``abs_sub``)
- Linearized: u_out = u_in · |f'(x)| (first-order Taylor propagation)
"""

from __future__ import annotations

from typing import Callable

import numpy as np

from .config import FIRST_ORDER_STEP, FOURTH_ORDER_STEP

RealFunc = Callable[[float], float]


@np.errstate(all="ignore")
def central_difference(f: RealFunc, x: float, step: float = FIRST_ORDER_STEP) -> float:
    """Estimate ``f'(x)`` with the two-point central difference.

    Args:
        f (Callable[[float], float]): Scalar real function.
        x (float): Point of evaluation.
        step (float, optional): Step ``h``. Defaults to ``1e-9``.

    Returns:
        float: ``(f(x + h) - f(x - h)) / (2h)``.

    Note:
        Truncation error is O(h²) while cancellation error grows as ``h``
        shrinks; the default step is a fixed trade-off, not tuned per function.
    """
    h = float(step)
    x = np.float64(x)
    return float((np.float64(f(x + h)) - np.float64(f(x - h))) / (2.0 * h))


@np.errstate(all="ignore")
def five_point_stencil(f: RealFunc, x: float, step: float = FOURTH_ORDER_STEP) -> float:
    """Estimate ``f'(x)`` with the fourth-order five-point stencil.

    Args:
        f (Callable[[float], float]): Scalar real function.
        x (float): Point of evaluation.
        step (float, optional): Step ``h``. Defaults to ``1e-6``.

    Returns:
        float: ``(-f(x+2h) + 8f(x+h) - 8f(x-h) + f(x-2h)) / (12h)``.

    Note:
        Truncation error is O(h⁴) at the cost of four evaluations of ``f``
        instead of two.
    """
    h = float(step)
    x = np.float64(x)
    numerator = (
        -np.float64(f(x + 2.0 * h))
        + 8.0 * np.float64(f(x + h))
        - 8.0 * np.float64(f(x - h))
        + np.float64(f(x - 2.0 * h))
    )
    return float(numerator / (12.0 * h))


@np.errstate(all="ignore")
def linearized(uncertainty: float, derivative: float) -> float:
    """Scale an input uncertainty by the magnitude of a derivative."""
    return float(np.float64(uncertainty) * np.abs(np.float64(derivative)))


@np.errstate(all="ignore")
def quadrature(*terms: float) -> float:
    """Combine independent uncertainties as sqrt(sum of squares)."""
    total = np.float64(0.0)
    for t in terms:
        total += np.float64(t) ** 2
    return float(np.sqrt(total))


@np.errstate(all="ignore")
def linear_sum(*terms: float) -> float:
    """Combine uncertainties as a worst-case linear sum of magnitudes."""
    return float(sum(np.abs(np.float64(t)) for t in terms))


@np.errstate(all="ignore")
def relative_quadrature(
    estimate_a: float, uncertainty_a: float, estimate_b: float, uncertainty_b: float
) -> float:
    """Combine fractional uncertainties of two factors in quadrature.

    Returns:
        float: ``sqrt((u_a / e_a)² + (u_b / e_b)²)``; NaN or inf when either
        estimate is zero.
    """
    rel_a = np.float64(uncertainty_a) / np.float64(estimate_a)
    rel_b = np.float64(uncertainty_b) / np.float64(estimate_b)
    return float(np.sqrt(rel_a**2 + rel_b**2))
