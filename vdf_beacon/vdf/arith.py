"""
vdf_beacon.vdf.arith
====================

Modular arithmetic primitives for the RSA-group VDF.

Python integers are arbitrary precision, so the only custom code here is the
domain checking: :func:`mod_exp` wraps the three-argument :func:`pow`
(binary exponentiation) and :func:`mod_square` is the single squaring step
invoked ``T`` times per evaluation.

:func:`mod_square` performs no checks because it sits in the hot loop; the
evaluator, prover and verifier validate their inputs once at the boundary.
"""

from __future__ import annotations

from ..errors import ArithmeticDomainError


def mod_exp(base: int, exp: int, modulus: int) -> int:
    """
    Return ``base ** exp % modulus``.

    Raises :class:`ArithmeticDomainError` for ``modulus <= 0`` or negative
    ``base``/``exp``. Exponents of any size are accepted; challenge values are
    used directly as exponents without reduction.
    """
    if modulus <= 0:
        raise ArithmeticDomainError("mod_exp", f"modulus must be positive (got {modulus})")
    if base < 0:
        raise ArithmeticDomainError("mod_exp", "negative base")
    if exp < 0:
        raise ArithmeticDomainError("mod_exp", "negative exponent")
    return pow(base, exp, modulus)


def mod_square(value: int, modulus: int) -> int:
    """Return ``value * value % modulus`` (one sequential VDF step)."""
    return value * value % modulus


def mod_mul(a: int, b: int, modulus: int) -> int:
    """Return ``a * b % modulus``."""
    if modulus <= 0:
        raise ArithmeticDomainError("mod_mul", f"modulus must be positive (got {modulus})")
    return a * b % modulus


__all__ = ["mod_exp", "mod_square", "mod_mul"]
