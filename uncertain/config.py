"""Centralized numerical defaults and the opt-in strict domain mode."""

from __future__ import annotations

import contextlib
import contextvars
from typing import Iterator

FIRST_ORDER_STEP: float = 1e-9
FOURTH_ORDER_STEP: float = 1e-6
DEFAULT_COVERAGE: float = 0.95

_STRICT_DOMAIN: contextvars.ContextVar[bool] = contextvars.ContextVar(
    "strict_domain", default=False
)


class DomainError(ValueError):
    """Raised in strict mode when an estimate falls outside a function's domain."""


def is_strict() -> bool:
    return _STRICT_DOMAIN.get()


@contextlib.contextmanager
def strict_domain(enabled: bool = True) -> Iterator[None]:
    """Raise :class:`DomainError` instead of propagating NaN/inf.

    Args:
        enabled (bool, optional): Strict flag for the duration of the block.
            Defaults to ``True``; pass ``False`` to switch strictness off
            inside an enclosing strict block.

    Note:
        The flag lives in a :class:`contextvars.ContextVar`, so it is local to
        the current thread or asyncio task. Outside the block every operation
        follows plain floating-point semantics and never raises.
    """
    token = _STRICT_DOMAIN.set(bool(enabled))
    try:
        yield
    finally:
        _STRICT_DOMAIN.reset(token)


def require_nonzero(x: float, operation: str) -> None:
    if is_strict() and x == 0:
        raise DomainError(f"{operation} is undefined for a zero estimate")


def require_positive(x: float, operation: str) -> None:
    if is_strict() and not x > 0:
        raise DomainError(f"{operation} requires a positive estimate, got {x!r}")

