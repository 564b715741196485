"""
vdf_beacon.vdf.verifier
=======================

Verifier for halving proofs produced by :mod:`vdf_beacon.vdf.prover`.

The verifier replays the prover's folding with the published checkpoints
instead of computing them:

  1. Reject structurally: ``len(proof) != tau - delta`` → ``False`` before
     any exponentiation; ``x``, ``y`` or a checkpoint ``>= N`` → ``False``
     (a value congruent mod N would otherwise be accepted).
  2. For ``i = 1 .. tau - delta`` recompute ``r_i`` with the same pad rule as
     the prover (keyed on the *current* ``x_i``/``y_i``) and fold
     ``x_{i+1} = x_i^r_i * v_i``, ``y_{i+1} = v_i^r_i * y_i`` (mod N).
  3. Accept iff squaring ``x_final`` ``2^delta`` times gives ``y_final``.

Cost: ``2 (tau - delta)`` modular exponentiations with 256-bit exponents plus
``2^delta`` squarings, versus ``T`` squarings for re-evaluation.

Invalid parameters (``T`` not a positive power of two, ``delta`` outside
``[0, tau)``, a bad modulus, negative integers) are programmer errors and raise
:class:`~vdf_beacon.errors.InvalidParameters`. Every protocol-level rejection
is a plain ``False``.

For diagnostics use :func:`verify_with_report` or :class:`Verifier`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..errors import InvalidParameters, VDFInvalid
from ..metrics import METRICS
from ..types.core import VDFProofRecord, VerifyReport
from . import arith
from .challenge import derive_challenge
from .evaluator import repeated_square
from .params import VDFParams, check_delay, check_modulus, get_params

logger = logging.getLogger(__name__)


def _require_nonneg_int(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameters(name, value, "must be an int")
    if value < 0:
        raise InvalidParameters(name, value, "must be non-negative")


def _replay(x: int, y: int, T: int, delta: int, proof: Sequence[int], N: int) -> VerifyReport:
    tau = check_delay(T, delta)
    check_modulus(N)
    _require_nonneg_int("x", x)
    _require_nonneg_int("y", y)

    levels = tau - delta
    if len(proof) != levels:
        logger.debug("reject: proof length %d != %d", len(proof), levels)
        return VerifyReport(False, "length_mismatch")

    for i, v in enumerate(proof):
        _require_nonneg_int(f"proof[{i}]", v)
    if x >= N or y >= N or any(v >= N for v in proof):
        logger.debug("reject: non-canonical element (>= N)")
        return VerifyReport(False, "non_canonical")

    xi, yi = x, y
    for i in range(1, levels + 1):
        vi = proof[i - 1]
        ri = derive_challenge(i, xi, yi, vi)
        logger.debug("verify level=%d r=%s...", i, format(ri, "x")[:16])
        xi, yi = (
            arith.mod_exp(xi, ri, N) * vi % N,
            arith.mod_exp(vi, ri, N) * yi % N,
        )

    expected = repeated_square(xi, 1 << delta, N)
    if expected != yi:
        return VerifyReport(False, "equation_mismatch")
    return VerifyReport(True, "ok")


def verify_with_report(
    x: int, y: int, T: int, delta: int, proof: Sequence[int], N: int
) -> VerifyReport:
    """
    Verify and return a :class:`VerifyReport` with a reason label.

    Timed into ``verify_seconds`` and counted by outcome.
    """
    try:
        with METRICS.verify_timer():
            report = _replay(x, y, T, delta, proof, N)
    except InvalidParameters:
        METRICS.record_verification("error")
        raise
    METRICS.record_verification(report.reason)
    return report


def verify_proof(x: int, y: int, T: int, delta: int, proof: Sequence[int], N: int) -> bool:
    """Return True iff *proof* shows ``y == x^(2^T) mod N``."""
    return verify_with_report(x, y, T, delta, proof, N).ok


# -----------------------------------------------------------------------------
# Verifier bound to VDFParams
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Verifier:
    """
    Verifier for proofs under fixed :class:`VDFParams`.

    Use :meth:`verify` for boolean-only checks, :meth:`verify_with_report`
    to obtain a reason string, or :meth:`require_valid` to raise on failure.
    """
    params: VDFParams

    @classmethod
    def from_env(cls) -> "Verifier":
        return cls(get_params())

    def verify(self, x: int, y: int, proof: Sequence[int]) -> bool:
        return self.verify_with_report(x, y, proof).ok

    def verify_with_report(self, x: int, y: int, proof: Sequence[int]) -> VerifyReport:
        p = self.params
        return verify_with_report(x, y, p.iterations, p.delta, proof, p.modulus_n)

    def verify_record(self, record: VDFProofRecord) -> VerifyReport:
        """
        Verify a transcript record. A record whose (N, T, delta) differ from
        :attr:`params` is reported as ``params_mismatch`` without verifying.
        """
        p = self.params
        if (record.modulus, record.iterations, record.delta) != (p.modulus_n, p.iterations, p.delta):
            return VerifyReport(False, "params_mismatch")
        return self.verify_with_report(record.x, record.y, record.proof)

    def require_valid(self, x: int, y: int, proof: Sequence[int], detail: Optional[str] = None) -> None:
        """Raise :class:`VDFInvalid` unless the proof verifies."""
        report = self.verify_with_report(x, y, proof)
        if not report.ok:
            raise VDFInvalid(report.reason, detail)


__all__ = [
    "verify_proof",
    "verify_with_report",
    "Verifier",
]
