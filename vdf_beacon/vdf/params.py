"""
vdf_beacon.vdf.params
=====================

Profiles and helpers for configuring the VDF (time-delay) parameters.

What lives here
---------------
- A frozen :class:`VDFParams` dataclass capturing the RSA modulus ``N``,
  iteration count ``T`` and proof granularity ``delta``.
- Built-in profiles: ``reference`` (the deployed raffle coordinator,
  ``T = 2^20``, ``delta = 9``) and ``devnet`` (same modulus, small ``T`` for
  local runs and CI).
- Boundary validation shared by the evaluator, prover and verifier
  (:func:`tau_of`, :func:`check_modulus`, :func:`check_delay`).
- Environment-variable overrides for CI/dev convenience:
    * ``VDF_PROFILE``      → profile name ("reference", "devnet")
    * ``VDF_ITERATIONS``   → integer iteration override
    * ``VDF_DELTA``        → integer delta override
    * ``VDF_MODULUS_HEX``  → hex string (with or without "0x") modulus override

Profiles are immutable values and are passed explicitly into every call; no
operation reads ambient parameters, so instances with different parameters
can coexist in one process.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional

from ..constants import (
    DEFAULT_VDF_DELTA,
    DEFAULT_VDF_ITERATIONS,
    HASH_PAD_BYTES,
    REFERENCE_MODULUS_HEX,
    VDF_MIN_MODULUS_BITS,
)
from ..errors import InvalidParameters


# ---------------------------------------------------------------------------
# Boundary validation
# ---------------------------------------------------------------------------

def _require_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameters(name, value, "must be an int")
    return value


def check_iterations(iterations: int, *, allow_zero: bool = False) -> int:
    """Require ``T > 0`` (or ``T >= 0`` with ``allow_zero``)."""
    _require_int("iterations", iterations)
    if iterations < 0 or (iterations == 0 and not allow_zero):
        raise InvalidParameters("iterations", iterations, "must be >= 0" if allow_zero else "must be > 0")
    return iterations


def tau_of(iterations: int) -> int:
    """Exact ``floor(log2(T))`` for ``T > 0``."""
    return check_iterations(iterations).bit_length() - 1


def check_modulus(modulus: int) -> int:
    """Modulus must be an odd integer > 1. Returns it unchanged."""
    _require_int("modulus", modulus)
    if modulus <= 1:
        raise InvalidParameters("modulus", modulus, "must be > 1")
    if modulus % 2 == 0:
        raise InvalidParameters("modulus", modulus, "must be odd")
    return modulus


def check_delay(iterations: int, delta: int) -> int:
    """
    Validate proof parameters and return ``tau``: ``T`` a power of two and
    ``0 <= delta < tau``.

    The halving recursion only closes when every level splits ``T`` exactly;
    for other ``T`` an honest proof fails the final equation. ``delta >= tau``
    would leave an empty proof whose verification degenerates to a full
    ``x^(2^delta)`` recomputation, so it is rejected too.
    """
    tau = tau_of(iterations)
    if iterations & (iterations - 1):
        raise InvalidParameters("iterations", iterations, "must be a power of two for proofs")
    _require_int("delta", delta)
    if delta < 0:
        raise InvalidParameters("delta", delta, "must be >= 0")
    if delta >= tau:
        raise InvalidParameters("delta", delta, f"must be < floor(log2(T)) = {tau}")
    return tau


def check_element(name: str, value: int, modulus: int) -> int:
    """Require ``0 <= value < modulus``."""
    _require_int(name, value)
    if value < 0:
        raise InvalidParameters(name, value, "must be non-negative")
    if value >= modulus:
        raise InvalidParameters(name, value, "must be < modulus")
    return value


# ---------------------------------------------------------------------------
# Params
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class VDFParams:
    """Container for one VDF configuration."""
    name: str
    iterations: int
    delta: int
    # Hex string (optional "0x") of the RSA modulus.
    modulus_hex: str
    description: str = ""

    @property
    def modulus_n(self) -> int:
        """Return modulus as int."""
        return int(self.modulus_hex, 16)

    @property
    def modulus_bitlen(self) -> int:
        return self.modulus_n.bit_length()

    @property
    def modulus_bytelen(self) -> int:
        return (self.modulus_bitlen + 7) // 8

    @property
    def tau(self) -> int:
        return tau_of(self.iterations)

    @property
    def proof_length(self) -> int:
        """Number of checkpoints in a proof under these parameters."""
        return self.tau - self.delta

    def validate(self) -> None:
        """Sanity checks to catch misconfigurations early."""
        try:
            n = self.modulus_n
        except ValueError:
            raise InvalidParameters("modulus_hex", self.modulus_hex, "not a hex string") from None
        check_modulus(n)
        if n.bit_length() < VDF_MIN_MODULUS_BITS:
            raise InvalidParameters(
                "modulus_hex", self.modulus_hex, f"modulus must be at least {VDF_MIN_MODULUS_BITS} bits"
            )
        if self.modulus_bytelen > HASH_PAD_BYTES:
            raise InvalidParameters(
                "modulus_hex",
                self.modulus_hex,
                f"modulus wider than the {HASH_PAD_BYTES}-byte challenge operand width",
            )
        check_delay(self.iterations, self.delta)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "iterations": self.iterations,
            "delta": self.delta,
            "tau": self.tau,
            "proof_length": self.proof_length,
            "modulus_bits": self.modulus_bitlen,
            "modulus_hex": self.modulus_hex,
            "description": self.description,
        }


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------

REFERENCE = VDFParams(
    name="reference",
    iterations=DEFAULT_VDF_ITERATIONS,
    delta=DEFAULT_VDF_DELTA,
    modulus_hex=REFERENCE_MODULUS_HEX,
    description="Deployed raffle coordinator: 1028-bit modulus, T=2^20, delta=9.",
)

DEVNET = VDFParams(
    name="devnet",
    iterations=1 << 12,         # keep snappy for local runs/CI
    delta=3,
    modulus_hex=REFERENCE_MODULUS_HEX,
    description="Fast local profile sharing the reference modulus.",
)

DEFAULT_PROFILES: Dict[str, VDFParams] = {
    REFERENCE.name: REFERENCE,
    DEVNET.name: DEVNET,
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def profile_names() -> list[str]:
    """Return available profile names."""
    return sorted(DEFAULT_PROFILES.keys())


def _strip_0x(s: str) -> str:
    s = s.strip()
    return s[2:] if s[:2] in ("0x", "0X") else s


def from_dict(d: Mapping[str, Any]) -> VDFParams:
    """
    Construct :class:`VDFParams` from a plain mapping (e.g., parsed YAML/JSON).
    Missing keys fall back to the named profile (or ``reference``); unknown
    keys are ignored. The result is validated.
    """
    base = DEFAULT_PROFILES.get(str(d.get("name", "")), REFERENCE)
    params = replace(
        base,
        name=str(d.get("name", base.name)),
        iterations=int(d.get("iterations", base.iterations)),
        delta=int(d.get("delta", base.delta)),
        modulus_hex=_strip_0x(str(d.get("modulus_hex", base.modulus_hex))),
        description=str(d.get("description", base.description)),
    )
    params.validate()
    return params


def _apply_env_overrides(p: VDFParams, env: Mapping[str, str]) -> VDFParams:
    def _int(key: str, default: int) -> int:
        raw = env.get(key)
        if raw is None:
            return default
        try:
            return int(raw, 0)
        except ValueError:
            raise InvalidParameters(key, raw, "not an integer") from None

    return replace(
        p,
        iterations=_int("VDF_ITERATIONS", p.iterations),
        delta=_int("VDF_DELTA", p.delta),
        modulus_hex=_strip_0x(env.get("VDF_MODULUS_HEX", p.modulus_hex)),
    )


def get_params(profile: Optional[str] = None, env: Optional[Mapping[str, str]] = None) -> VDFParams:
    """
    Load parameters by profile name, then apply environment overrides.

    If ``profile`` is None, uses ``VDF_PROFILE`` if set, otherwise ``reference``.
    Unknown profile names raise :class:`InvalidParameters`.
    """
    env = os.environ if env is None else env
    chosen = profile or env.get("VDF_PROFILE") or REFERENCE.name
    if chosen not in DEFAULT_PROFILES:
        raise InvalidParameters("profile", chosen, f"unknown profile; expected one of {profile_names()}")
    params = _apply_env_overrides(DEFAULT_PROFILES[chosen], env)
    params.validate()
    return params


__all__ = [
    "VDFParams",
    "REFERENCE",
    "DEVNET",
    "DEFAULT_PROFILES",
    "tau_of",
    "check_iterations",
    "check_modulus",
    "check_delay",
    "check_element",
    "profile_names",
    "from_dict",
    "get_params",
]
