"""
vdf-beacon errors.

A small, typed hierarchy of exceptions raised by the VDF core and its
boundary code. Callers can catch the base `VDFError` to handle every error
raised by this package, or catch the concrete subclasses for more granular
control.

Protocol-level rejections (wrong proof length, non-canonical values, failed
final equation) are *not* exceptions: the verifier returns ``False`` for
them. Only programmer-error-class inputs raise.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class VDFError(Exception):
    """Base class for all vdf-beacon errors."""
    pass


@dataclass(eq=False)
class InvalidParameters(VDFError, ValueError):
    """
    Raised at the API boundary when an argument violates its contract.

    Attributes:
        name: Parameter name (e.g., 'iterations', 'delta', 'x').
        value: The offending value (large integers are abbreviated in str()).
        reason: Short human-readable explanation.
    """
    name: str
    value: Any
    reason: str

    def __str__(self) -> str:
        return f"InvalidParameters: {self.name}={_short(self.value)} ({self.reason})"


@dataclass(eq=False)
class ArithmeticDomainError(VDFError, ArithmeticError):
    """
    Raised by the modular arithmetic layer on inputs outside its domain
    (zero or negative modulus, negative base or exponent).
    """
    operation: str
    reason: str

    def __str__(self) -> str:
        return f"ArithmeticDomainError: {self.operation}: {self.reason}"


class EncodingError(VDFError, ValueError):
    """Malformed hex/bytes at the serialization boundary, or an unencodable value."""
    pass


class ConfigError(VDFError):
    """Invalid configuration file contents or environment overrides."""
    pass


@dataclass(eq=False)
class VDFInvalid(VDFError):
    """
    Raised by :meth:`vdf_beacon.vdf.verifier.Verifier.require_valid` when a
    proof does not verify.

    Attributes:
        reason: Verifier reason label ('length_mismatch', 'non_canonical',
                'equation_mismatch').
        detail: Optional extra context (e.g., a proof file name).
    """
    reason: str
    detail: Optional[str] = None

    def __str__(self) -> str:
        base = f"VDFInvalid: reason={self.reason}"
        return f"{base} detail={self.detail}" if self.detail else base


def _short(value: Any) -> str:
    text = repr(value)
    if len(text) > 48:
        return text[:20] + "..." + text[-20:]
    return text


__all__ = [
    "VDFError",
    "InvalidParameters",
    "ArithmeticDomainError",
    "EncodingError",
    "ConfigError",
    "VDFInvalid",
]
