"""
A Python package for propagating measurement uncertainty through arithmetic.

Values carry an estimate and a one-standard-deviation uncertainty; every
operation returns a new value with the propagated uncertainty.

Modules:
    - value: The UncertainValue type, its operators and closed-form functions.
    - propagation: Finite-difference derivatives and combination rules.
    - arrays: Element-wise application over numpy arrays of values.
    - formatting: Significant-figure rounding and text parsing.
    - reporting: Coverage intervals and pandas summary tables.
    - plotting: Error-bar plots.
    - config: Numerical defaults and the opt-in strict domain mode.
"""

__version__ = "1.0.0"

from .arrays import apply, estimates, from_arrays, uncertainties
from .config import DomainError, strict_domain
from .formatting import format_value_with_uncertainty, round_value_to_uncertainty
from .propagation import central_difference, five_point_stencil, quadrature
from .reporting import coverage_interval, to_frame
from .value import FloatCategory, UncertainValue

__all__ = [
    # Value type
    "UncertainValue",
    "FloatCategory",
    # Arrays
    "apply",
    "from_arrays",
    "estimates",
    "uncertainties",
    # Propagation primitives
    "central_difference",
    "five_point_stencil",
    "quadrature",
    # Reporting
    "coverage_interval",
    "format_value_with_uncertainty",
    "round_value_to_uncertainty",
    "to_frame",
    # Configuration
    "DomainError",
    "strict_domain",
]
