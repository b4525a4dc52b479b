"""
Significant-figure rounding and text formatting for uncertain values.

Rounding convention:
- Uncertainty rounded to 1 significant figure (2 if the leading digit is 1)
- Estimate rounded to the same place value as the uncertainty
- A negative uncertainty keeps its sign in the rounded and rendered forms

Text forms accepted by ``parse_value_with_uncertainty``:
- ``"1.5"`` (exact value)
- ``"1.5 ± 0.1"`` or ``"1.5 +/- 0.1"``
"""

from __future__ import annotations

import math
import re
from typing import Tuple

_PLUS_MINUS = re.compile(r"\s*(?:±|\+/-|\+-)\s*")

# Beyond this many decimals fixed-point text stops being readable.
_MAX_FIXED_DECIMALS = 15


def _leading_digit_and_exponent(u: float) -> Tuple[int, int]:
    # Read from scientific notation: subnormal magnitudes overflow 10**-exponent.
    mantissa, exponent = f"{u:.12e}".split("e")
    return int(mantissa[0]), int(exponent)


def round_uncertainty(u: float) -> Tuple[float, int]:
    """Round a positive uncertainty to its reporting precision.

    Returns:
        tuple[float, int]: ``(rounded_uncertainty, ndigits)`` where ``ndigits``
        is the decimal place the paired estimate should be rounded to; it may
        be negative (tens, hundreds, ...). Non-positive or non-finite input is
        returned unchanged with ``ndigits = 0``.
    """
    if not math.isfinite(u) or u <= 0:
        return u, 0

    leading, exponent = _leading_digit_and_exponent(float(u))
    sig_figs = 2 if leading == 1 else 1
    ndigits = sig_figs - 1 - exponent
    return float(round(float(u), ndigits)), int(ndigits)


def round_value_to_uncertainty(value: float, uncertainty: float) -> Tuple[float, float]:
    """Round an estimate to the decimal place of its rounded uncertainty.

    The sign of ``uncertainty`` is preserved in the rounded result.
    """
    ru, ndigits = round_uncertainty(abs(float(uncertainty)))
    if not math.isfinite(ru) or ru == 0:
        return float(value), float(uncertainty)
    return float(round(float(value), ndigits)), math.copysign(ru, float(uncertainty))


def _fixed(x: float, ndigits: int) -> str:
    return f"{round(float(x), ndigits):.{max(ndigits, 0)}f}"


def format_value_with_uncertainty(value: float, uncertainty: float) -> str:
    """Render ``value ± uncertainty`` with matched precision.

    A negative uncertainty keeps its sign in the text. Falls back to ``.6g``
    for both numbers when the uncertainty is zero or non-finite, when the
    value is not finite, or when the precision would need more than 15
    decimal places.
    """
    u = float(uncertainty)
    ru, ndigits = round_uncertainty(abs(u))
    if (
        ru == 0
        or not math.isfinite(ru)
        or not math.isfinite(float(value))
        or ndigits > _MAX_FIXED_DECIMALS
    ):
        return f"{float(value):.6g} ± {u:.6g}"

    sign = "-" if u < 0 else ""
    return f"{_fixed(value, ndigits)} ± {sign}{_fixed(ru, ndigits)}"


def parse_value_with_uncertainty(text: str) -> Tuple[float, float]:
    """Parse ``"x"``, ``"x ± u"`` or ``"x +/- u"`` into floats.

    Raises:
        ValueError: If ``text`` does not hold one or two parsable numbers.
    """
    parts = _PLUS_MINUS.split(str(text).strip())
    if len(parts) == 1:
        return float(parts[0]), 0.0
    if len(parts) == 2:
        return float(parts[0]), float(parts[1])
    raise ValueError(f"Cannot parse uncertain value from {text!r}")
