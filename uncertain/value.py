"""Scalar value type carrying an estimate and its propagated uncertainty.

Every operation returns a new ``UncertainValue``. Uncertainties of distinct
operands are treated as independent one-standard-deviation errors.

Propagation rules:
- Addition/subtraction: u = sqrt(u_a² + u_b²)
- Multiplication/division: u = sqrt((u_a/e_a)² + (u_b/e_b)²) · result
- Functions of one value: u = u_in · |f'(e)| (closed form where the
  derivative is known, finite differences for arbitrary callables)
- Piecewise-constant functions (floor, round, ...): u = 0

No operation raises on domain violations; NaN and inf propagate as in IEEE
arithmetic. Use :func:`uncertain.config.strict_domain` to opt into
:class:`uncertain.config.DomainError` instead.
"""

from __future__ import annotations

import enum
import numbers
import warnings
from dataclasses import dataclass
from typing import Callable, Optional, Tuple, Union

import numpy as np

from .config import (
    FIRST_ORDER_STEP,
    FOURTH_ORDER_STEP,
    require_nonzero,
    require_positive,
)
from .formatting import format_value_with_uncertainty, parse_value_with_uncertainty
from .propagation import (
    RealFunc,
    central_difference,
    five_point_stencil,
    linear_sum,
    linearized,
    quadrature,
    relative_quadrature,
)

LN_2: float = 0.6931471805599453
LN_10: float = 2.302585092994046

Operand = Union["UncertainValue", float, int]


class FloatCategory(enum.Enum):
    NAN = "nan"
    INFINITE = "infinite"
    ZERO = "zero"
    SUBNORMAL = "subnormal"
    NORMAL = "normal"


def _propagated(uncertainty: float, derivative: float) -> float:
    # Exact inputs stay exact even where the derivative blows up.
    if uncertainty == 0:
        return 0.0
    return linearized(uncertainty, derivative)


def _round_half_away(x: np.float64) -> np.float64:
    t = np.trunc(x)
    if np.abs(x - t) >= 0.5:
        t += np.copysign(1.0, x)
    return t


@dataclass(frozen=True, order=True)
class UncertainValue:
    """A float estimate paired with its standard uncertainty.

    Attributes:
        estimate (float): Best-known value of the quantity.
        uncertainty (float): One-standard-deviation error of ``estimate``.
            Conceptually non-negative; not validated.

    Note:
        Equality compares both fields with float semantics, so a NaN value
        never equals itself. Ordering is lexicographic on
        ``(estimate, uncertainty)``.
    """

    estimate: float
    uncertainty: float = 0.0

    def __eq__(self, other: object) -> bool:
        # Field-wise float comparison, so NaN never equals itself.
        if other.__class__ is not self.__class__:
            return NotImplemented
        return self.estimate == other.estimate and self.uncertainty == other.uncertainty

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_float(cls, x: float) -> "UncertainValue":
        """Wrap a plain number as an exact value."""
        return cls(float(x), 0.0)

    @classmethod
    def parse(cls, text: str) -> "UncertainValue":
        """Build a value from ``"1.5"``, ``"1.5 ± 0.1"`` or ``"1.5 +/- 0.1"``."""
        return cls(*parse_value_with_uncertainty(text))

    @classmethod
    def zero(cls) -> "UncertainValue":
        return cls(0.0, 0.0)

    @classmethod
    def one(cls) -> "UncertainValue":
        return cls(1.0, 0.0)

    @classmethod
    def nan(cls) -> "UncertainValue":
        return cls(float("nan"), float("nan"))

    @classmethod
    def infinity(cls) -> "UncertainValue":
        return cls(float("inf"), 0.0)

    @classmethod
    def neg_infinity(cls) -> "UncertainValue":
        return cls(float("-inf"), 0.0)

    @classmethod
    def neg_zero(cls) -> "UncertainValue":
        return cls(-0.0, 0.0)

    @classmethod
    def min_value(cls) -> "UncertainValue":
        return cls(float(np.finfo(np.float64).min), 0.0)

    @classmethod
    def min_positive_value(cls) -> "UncertainValue":
        return cls(float(np.finfo(np.float64).tiny), 0.0)

    @classmethod
    def max_value(cls) -> "UncertainValue":
        return cls(float(np.finfo(np.float64).max), 0.0)

    @classmethod
    def epsilon(cls) -> "UncertainValue":
        return cls(float(np.finfo(np.float64).eps), 0.0)

    @staticmethod
    def _coerce(other: object) -> Optional["UncertainValue"]:
        if isinstance(other, UncertainValue):
            return other
        if isinstance(other, numbers.Real):
            return UncertainValue(float(other), 0.0)
        return None

    @classmethod
    def _require(cls, other: object, role: str = "operand") -> "UncertainValue":
        value = cls._coerce(other)
        if value is None:
            raise TypeError(f"Unsupported {role} type: {type(other).__name__}")
        return value

    # ------------------------------------------------------------------
    # Generic function application
    # ------------------------------------------------------------------

    def apply(self, f: RealFunc) -> "UncertainValue":
        """Apply ``f`` using the fourth-order finite-difference derivative."""
        return self.apply_fourth_order(f)

    def apply_first_order(
        self, f: RealFunc, step: float = FIRST_ORDER_STEP
    ) -> "UncertainValue":
        """Apply ``f`` with a two-point central-difference derivative.

        Args:
            f (Callable[[float], float]): Scalar real function.
            step (float, optional): Difference step. Defaults to ``1e-9``.

        Returns:
            UncertainValue: ``f(estimate)`` with uncertainty
            ``uncertainty · |f'(estimate)|``.
        """
        with np.errstate(all="ignore"):
            value = float(f(np.float64(self.estimate)))
        derivative = central_difference(f, self.estimate, step)
        return UncertainValue(value, _propagated(self.uncertainty, derivative))

    def apply_fourth_order(
        self, f: RealFunc, step: float = FOURTH_ORDER_STEP
    ) -> "UncertainValue":
        """Apply ``f`` with a five-point-stencil derivative.

        Args:
            f (Callable[[float], float]): Scalar real function.
            step (float, optional): Difference step. Defaults to ``1e-6``.

        Returns:
            UncertainValue: ``f(estimate)`` with uncertainty
            ``uncertainty · |f'(estimate)|``.
        """
        with np.errstate(all="ignore"):
            value = float(f(np.float64(self.estimate)))
        derivative = five_point_stencil(f, self.estimate, step)
        return UncertainValue(value, _propagated(self.uncertainty, derivative))

    @np.errstate(all="ignore")
    def _closed_form(
        self, f: Callable[[np.float64], np.float64], df: Callable[[np.float64], np.float64]
    ) -> "UncertainValue":
        x = np.float64(self.estimate)
        return UncertainValue(float(f(x)), _propagated(self.uncertainty, df(x)))

    @np.errstate(all="ignore")
    def _exact(self, f: Callable[[np.float64], np.float64]) -> "UncertainValue":
        return UncertainValue(float(f(np.float64(self.estimate))), 0.0)

    # ------------------------------------------------------------------
    # Arithmetic operators
    # ------------------------------------------------------------------

    @np.errstate(all="ignore")
    def __add__(self, other: Operand) -> "UncertainValue":
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        estimate = np.float64(self.estimate) + np.float64(other.estimate)
        return UncertainValue(
            float(estimate), quadrature(self.uncertainty, other.uncertainty)
        )

    def __radd__(self, other: Operand) -> "UncertainValue":
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other + self

    @np.errstate(all="ignore")
    def __sub__(self, other: Operand) -> "UncertainValue":
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        estimate = np.float64(self.estimate) - np.float64(other.estimate)
        return UncertainValue(
            float(estimate), quadrature(self.uncertainty, other.uncertainty)
        )

    def __rsub__(self, other: Operand) -> "UncertainValue":
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other - self

    @np.errstate(all="ignore")
    def __mul__(self, other: Operand) -> "UncertainValue":
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        require_nonzero(self.estimate, "multiplication")
        require_nonzero(other.estimate, "multiplication")
        estimate = np.float64(self.estimate) * np.float64(other.estimate)
        rel = relative_quadrature(
            self.estimate, self.uncertainty, other.estimate, other.uncertainty
        )
        return UncertainValue(float(estimate), float(rel * estimate))

    def __rmul__(self, other: Operand) -> "UncertainValue":
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other * self

    @np.errstate(all="ignore")
    def __truediv__(self, other: Operand) -> "UncertainValue":
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        require_nonzero(self.estimate, "division")
        require_nonzero(other.estimate, "division")
        estimate = np.float64(self.estimate) / np.float64(other.estimate)
        rel = relative_quadrature(
            self.estimate, self.uncertainty, other.estimate, other.uncertainty
        )
        return UncertainValue(float(estimate), float(rel * estimate))

    def __rtruediv__(self, other: Operand) -> "UncertainValue":
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other / self

    def __mod__(self, other: Operand) -> "UncertainValue":
        if self._coerce(other) is None:
            return NotImplemented
        warnings.warn(
            "Modulo is not supported for uncertain values; returning 0 ± 0.",
            RuntimeWarning,
            stacklevel=2,
        )
        return UncertainValue(0.0, 0.0)

    def __rmod__(self, other: Operand) -> "UncertainValue":
        return self.__mod__(other)

    def __pow__(self, other: Operand) -> "UncertainValue":
        if isinstance(other, numbers.Integral) and not isinstance(other, bool):
            return self.powi(int(other))
        exponent = self._coerce(other)
        if exponent is None:
            return NotImplemented
        return self.powf(exponent)

    def __rpow__(self, other: Operand) -> "UncertainValue":
        base = self._coerce(other)
        if base is None:
            return NotImplemented
        b = np.float64(base.estimate)
        # d/dn b**n = b**n · ln b
        return self._closed_form(lambda n: b**n, lambda n: b**n * np.log(b))

    def __neg__(self) -> "UncertainValue":
        return UncertainValue(-self.estimate, self.uncertainty)

    def __pos__(self) -> "UncertainValue":
        return UncertainValue(self.estimate, self.uncertainty)

    def __abs__(self) -> "UncertainValue":
        return self.abs()

    def __round__(self, ndigits: Optional[int] = None) -> "UncertainValue":
        if ndigits is None:
            return self.round()
        scale = 10.0 ** abs(ndigits)
        if ndigits >= 0:
            return self._exact(lambda x: _round_half_away(x * scale) / scale)
        return self._exact(lambda x: _round_half_away(x / scale) * scale)

    def __floor__(self) -> "UncertainValue":
        return self.floor()

    def __ceil__(self) -> "UncertainValue":
        return self.ceil()

    def __trunc__(self) -> "UncertainValue":
        return self.trunc()

    def __float__(self) -> float:
        return float(self.estimate)

    def __int__(self) -> int:
        return int(self.estimate)

    def __str__(self) -> str:
        return format_value_with_uncertainty(self.estimate, self.uncertainty)

    @property
    def relative_uncertainty(self) -> float:
        """Fractional uncertainty ``|uncertainty / estimate|`` (inf at zero)."""
        with np.errstate(all="ignore"):
            return float(
                np.abs(np.float64(self.uncertainty) / np.float64(self.estimate))
            )

    # ------------------------------------------------------------------
    # Powers, roots, exponentials and logarithms
    # ------------------------------------------------------------------

    def recip(self) -> "UncertainValue":
        require_nonzero(self.estimate, "recip")
        return self._closed_form(lambda x: 1.0 / x, lambda x: 1.0 / x**2)

    def powi(self, n: int) -> "UncertainValue":
        n = int(n)
        if n < 0:
            require_nonzero(self.estimate, "powi")
        return self._closed_form(lambda x: x**n, lambda x: n * x ** (n - 1))

    def powf(self, n: Operand) -> "UncertainValue":
        """Raise to a real power; the exponent's own uncertainty is ignored."""
        exponent = self._require(n, "exponent")
        p = np.float64(exponent.estimate)
        return self._closed_form(lambda x: x**p, lambda x: p * x ** (p - 1.0))

    def sqrt(self) -> "UncertainValue":
        require_positive(self.estimate, "sqrt")
        return self._closed_form(np.sqrt, lambda x: 1.0 / (2.0 * np.sqrt(x)))

    def cbrt(self) -> "UncertainValue":
        require_nonzero(self.estimate, "cbrt")
        return self._closed_form(np.cbrt, lambda x: 1.0 / (3.0 * np.cbrt(x) ** 2))

    def exp(self) -> "UncertainValue":
        return self._closed_form(np.exp, np.exp)

    def exp2(self) -> "UncertainValue":
        return self._closed_form(np.exp2, lambda x: np.exp2(x) * LN_2)

    def exp_m1(self) -> "UncertainValue":
        return self._closed_form(np.expm1, np.exp)

    def ln(self) -> "UncertainValue":
        require_positive(self.estimate, "ln")
        return self._closed_form(np.log, lambda x: 1.0 / x)

    def ln_1p(self) -> "UncertainValue":
        require_positive(1.0 + self.estimate, "ln_1p")
        return self._closed_form(np.log1p, lambda x: 1.0 / (1.0 + x))

    def log2(self) -> "UncertainValue":
        require_positive(self.estimate, "log2")
        return self._closed_form(np.log2, lambda x: 1.0 / (x * LN_2))

    def log10(self) -> "UncertainValue":
        require_positive(self.estimate, "log10")
        return self._closed_form(np.log10, lambda x: 1.0 / (x * LN_10))

    def log(self, base: Optional[Operand] = None) -> "UncertainValue":
        """Logarithm to ``base``; natural logarithm when ``base`` is omitted.

        Only the estimate of an uncertain ``base`` is used.
        """
        if base is None:
            return self.ln()
        b = self._require(base, "log base")
        require_positive(self.estimate, "log")
        b_est = np.float64(b.estimate)
        return self._closed_form(
            lambda x: np.log(x) / np.log(b_est), lambda x: 1.0 / (x * np.log(b_est))
        )

    # ------------------------------------------------------------------
    # Trigonometric functions
    # ------------------------------------------------------------------

    def sin(self) -> "UncertainValue":
        return self._closed_form(np.sin, np.cos)

    def cos(self) -> "UncertainValue":
        return self._closed_form(np.cos, np.sin)

    def tan(self) -> "UncertainValue":
        return self._closed_form(np.tan, lambda x: 1.0 + np.tan(x) ** 2)

    def sin_cos(self) -> Tuple["UncertainValue", "UncertainValue"]:
        """Return ``(sin, cos)`` propagated from the same input."""
        return self.sin(), self.cos()

    def asin(self) -> "UncertainValue":
        return self._closed_form(np.arcsin, lambda x: 1.0 / np.sqrt(1.0 - x**2))

    def acos(self) -> "UncertainValue":
        return self._closed_form(np.arccos, lambda x: 1.0 / np.sqrt(1.0 - x**2))

    def atan(self) -> "UncertainValue":
        return self._closed_form(np.arctan, lambda x: 1.0 / (1.0 + x**2))

    @np.errstate(all="ignore")
    def atan2(self, other: Operand) -> "UncertainValue":
        """Four-quadrant arctangent of ``self / other`` (``self`` is y).

        The input uncertainties are combined in quadrature and scaled by
        ``1 / (x² + y²)``.
        """
        x = self._require(other)
        ey, ex = np.float64(self.estimate), np.float64(x.estimate)
        u = quadrature(self.uncertainty, x.uncertainty) / (ey**2 + ex**2)
        return UncertainValue(float(np.arctan2(ey, ex)), float(u))

    # ------------------------------------------------------------------
    # Hyperbolic functions
    # ------------------------------------------------------------------

    def sinh(self) -> "UncertainValue":
        return self._closed_form(np.sinh, np.cosh)

    def cosh(self) -> "UncertainValue":
        return self._closed_form(np.cosh, np.sinh)

    def tanh(self) -> "UncertainValue":
        return self._closed_form(np.tanh, lambda x: 1.0 - np.tanh(x) ** 2)

    def asinh(self) -> "UncertainValue":
        return self._closed_form(np.arcsinh, lambda x: 1.0 / np.sqrt(1.0 + x**2))

    def acosh(self) -> "UncertainValue":
        return self._closed_form(np.arccosh, lambda x: 1.0 / np.sqrt(x**2 - 1.0))

    def atanh(self) -> "UncertainValue":
        return self._closed_form(np.arctanh, lambda x: 1.0 / (1.0 - x**2))

    # numpy's object-dtype ufuncs call methods named after the ufunc.
    arcsin = asin
    arccos = acos
    arctan = atan
    arcsinh = asinh
    arccosh = acosh
    arctanh = atanh
    expm1 = exp_m1
    log1p = ln_1p

    # ------------------------------------------------------------------
    # Two-operand helpers
    # ------------------------------------------------------------------

    @np.errstate(all="ignore")
    def hypot(self, other: Operand) -> "UncertainValue":
        o = self._require(other)
        estimate = np.hypot(np.float64(self.estimate), np.float64(o.estimate))
        return UncertainValue(float(estimate), quadrature(self.uncertainty, o.uncertainty))

    @np.errstate(all="ignore")
    def abs_sub(self, other: Operand) -> "UncertainValue":
        """Absolute difference with uncertainties added linearly."""
        o = self._require(other)
        a, b = np.float64(self.estimate), np.float64(o.estimate)
        estimate = a - b if a > b else b - a
        return UncertainValue(float(estimate), linear_sum(self.uncertainty, o.uncertainty))

    def max(self, other: Operand) -> "UncertainValue":
        """Operand with the larger estimate.

        Bit-equal estimates return that estimate with both uncertainties
        combined in quadrature.
        """
        o = self._require(other)
        if self.estimate > o.estimate:
            return self
        if self.estimate < o.estimate:
            return o
        return UncertainValue(self.estimate, quadrature(self.uncertainty, o.uncertainty))

    def min(self, other: Operand) -> "UncertainValue":
        """Operand with the smaller estimate; ties combine as in :meth:`max`."""
        o = self._require(other)
        if self.estimate < o.estimate:
            return self
        if self.estimate > o.estimate:
            return o
        return UncertainValue(self.estimate, quadrature(self.uncertainty, o.uncertainty))

    def mul_add(self, a: Operand, b: Operand) -> "UncertainValue":
        """``self * a + b`` with both steps propagated."""
        return (self * a) + b

    # ------------------------------------------------------------------
    # Piecewise-constant functions (uncertainty collapses to zero)
    # ------------------------------------------------------------------

    def abs(self) -> "UncertainValue":
        return UncertainValue(float(np.abs(np.float64(self.estimate))), self.uncertainty)

    def signum(self) -> "UncertainValue":
        return self._exact(lambda x: x if np.isnan(x) else np.copysign(1.0, x))

    def floor(self) -> "UncertainValue":
        return self._exact(np.floor)

    def ceil(self) -> "UncertainValue":
        return self._exact(np.ceil)

    def round(self) -> "UncertainValue":
        """Round half away from zero."""
        return self._exact(_round_half_away)

    def trunc(self) -> "UncertainValue":
        return self._exact(np.trunc)

    def fract(self) -> "UncertainValue":
        return self._exact(lambda x: x - np.trunc(x))

    # ------------------------------------------------------------------
    # Classification (estimate only)
    # ------------------------------------------------------------------

    def is_nan(self) -> bool:
        return bool(np.isnan(self.estimate))

    def is_infinite(self) -> bool:
        return bool(np.isinf(self.estimate))

    def is_finite(self) -> bool:
        return bool(np.isfinite(self.estimate))

    def is_normal(self) -> bool:
        return self.classify() is FloatCategory.NORMAL

    def is_zero(self) -> bool:
        return self.estimate == 0

    def is_sign_positive(self) -> bool:
        return not bool(np.signbit(self.estimate))

    def is_sign_negative(self) -> bool:
        return bool(np.signbit(self.estimate))

    def classify(self) -> FloatCategory:
        x = float(self.estimate)
        if np.isnan(x):
            return FloatCategory.NAN
        if np.isinf(x):
            return FloatCategory.INFINITE
        if x == 0:
            return FloatCategory.ZERO
        if abs(x) < np.finfo(np.float64).tiny:
            return FloatCategory.SUBNORMAL
        return FloatCategory.NORMAL

    def integer_decode(self) -> Tuple[int, int, int]:
        """Decompose the estimate as ``sign · mantissa · 2**exponent``."""
        bits = int(np.array(float(self.estimate), dtype=np.float64).view(np.uint64))
        sign = -1 if bits >> 63 else 1
        exponent = (bits >> 52) & 0x7FF
        if exponent == 0:
            mantissa = (bits & 0xFFFFFFFFFFFFF) << 1
        else:
            mantissa = (bits & 0xFFFFFFFFFFFFF) | 0x10000000000000
        return mantissa, exponent - 1075, sign
