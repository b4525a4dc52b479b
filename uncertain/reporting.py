"""Summarize uncertain values as intervals and tables.

This module sits after the numerical work: it turns values into coverage
intervals under the Gaussian error model and into pandas tables with
reporting-ready text columns. Original numeric columns are kept alongside the
formatted ones for downstream computation.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from scipy.stats import norm

from .arrays import estimates, uncertainties
from .config import DEFAULT_COVERAGE
from .formatting import format_value_with_uncertainty
from .value import UncertainValue

ESTIMATE_COL = "Estimate"
UNCERTAINTY_COL = "Uncertainty"
RELATIVE_COL = "Relative uncertainty"
REPORTED_COL = "Reported"


def coverage_factor(coverage: float = DEFAULT_COVERAGE) -> float:
    """Return the Gaussian coverage factor ``k`` for a two-sided interval.

    Args:
        coverage (float, optional): Coverage probability in (0, 1).
            Defaults to ``0.95``.

    Returns:
        float: ``k`` such that ``estimate ± k·uncertainty`` covers
        ``coverage`` of a normal distribution (≈1.96 for 95 %).

    Raises:
        ValueError: If ``coverage`` is not strictly between 0 and 1.
    """
    p = float(coverage)
    if not 0.0 < p < 1.0:
        raise ValueError(f"coverage must be in (0, 1), got {coverage!r}")
    return float(norm.ppf((1.0 + p) / 2.0))


def coverage_interval(
    value: UncertainValue, coverage: float = DEFAULT_COVERAGE
) -> Tuple[float, float, float]:
    """Expanded-uncertainty interval around the estimate.

    Args:
        value (UncertainValue): Value to summarize.
        coverage (float, optional): Coverage probability. Defaults to ``0.95``.

    Returns:
        tuple[float, float, float]: ``(low, high, k)``.

    Note:
        Assumes the uncertainty is one standard deviation of a normal error,
        the same model the propagation rules rely on.
    """
    k = coverage_factor(coverage)
    half_width = k * float(value.uncertainty)
    e = float(value.estimate)
    return e - half_width, e + half_width, k


def uncertainty_forms(value: float, uncertainty: float) -> Tuple[float, float]:
    """Return fractional and percentage uncertainty forms.

    Returns:
        tuple[float, float]: ``(fractional, percentage)``; ``(nan, nan)`` when
        ``value`` is zero or either input is non-finite.
    """
    v = float(value)
    u = float(uncertainty)
    if not np.isfinite(v) or not np.isfinite(u) or v == 0:
        return np.nan, np.nan
    frac = abs(u / v)
    return float(frac), float(frac * 100.0)


def to_frame(values, labels: Optional[Sequence[str]] = None) -> pd.DataFrame:
    """Tabulate values with numeric and reporting-ready columns.

    Args:
        values (array_like): Array or sequence of ``UncertainValue``; arrays of
            more than one dimension are flattened in row-major order.
        labels (Sequence[str], optional): Row labels, one per element.

    Returns:
        pandas.DataFrame: Columns ``Estimate``, ``Uncertainty``,
        ``Relative uncertainty`` and ``Reported``.

    Raises:
        ValueError: If ``labels`` does not match the number of values.
    """
    arr = np.asarray(values, dtype=object).reshape(-1)
    est = estimates(arr)
    unc = uncertainties(arr)

    if labels is not None and len(labels) != len(arr):
        raise ValueError(
            f"Expected {len(arr)} labels, got {len(labels)}."
        )

    df = pd.DataFrame(
        {
            ESTIMATE_COL: est,
            UNCERTAINTY_COL: unc,
            RELATIVE_COL: [uncertainty_forms(e, u)[0] for e, u in zip(est, unc)],
            REPORTED_COL: [
                format_value_with_uncertainty(e, u) for e, u in zip(est, unc)
            ],
        },
        index=list(labels) if labels is not None else None,
    )
    return df
