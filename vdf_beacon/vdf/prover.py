"""
vdf_beacon.vdf.prover
=====================

Halving-proof prover for the RSA-group VDF.

The prover evaluates ``y = x^(2^T) mod N`` and then folds the claim
``x^(2^T) == y`` in half ``tau - delta`` times (``tau = floor(log2(T))``).
At level ``i`` it publishes the midpoint checkpoint ``v_i`` and combines both
halves with a Fiat-Shamir challenge ``r_i``:

    v_i     = x_i ^ (2^(T // 2^i))          (T // 2^i sequential squarings)
    r_i     = H(x_i, y_i, v_i)              (see :mod:`.challenge`)
    x_{i+1} = x_i^r_i * v_i      mod N
    y_{i+1} = v_i^r_i * y_i      mod N

After the last level the verifier is left with a claim about ``2^delta``
squarings, which it checks directly.

Cost: ``T`` squarings for ``y`` plus ``sum T // 2^i`` (< ``T``) for the
checkpoints. All of it is sequential.

Key functions
-------------
- :func:`generate_proof`:  (x, T, delta, N) -> ProofResult(y, proof)
- :class:`Prover`:         wrapper bound to :class:`~.params.VDFParams`
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from time import perf_counter
from typing import List, Optional

from ..metrics import METRICS
from ..types.core import ProofResult, VDFProofRecord
from . import arith
from .challenge import derive_challenge
from .evaluator import ProgressFn, evaluate, repeated_square
from .params import VDFParams, check_delay, check_element, check_modulus, get_params

logger = logging.getLogger(__name__)


def generate_proof(x: int, T: int, delta: int, N: int, progress: Optional[ProgressFn] = None) -> ProofResult:
    """
    Evaluate the VDF and produce its proof.

    Args:
        x: seed, ``0 <= x < N``.
        T: number of squarings, a power of two.
        delta: omitted recursion levels, ``0 <= delta < floor(log2(T))``.
        N: odd modulus > 1.
        progress: optional ``(done, total)`` callback for the main evaluation.

    Returns:
        :class:`ProofResult` with ``len(proof) == floor(log2(T)) - delta``.

    Raises:
        InvalidParameters: on any contract violation.
    """
    check_modulus(N)
    check_element("x", x, N)
    tau = check_delay(T, delta)

    start = perf_counter()
    with METRICS.prove_timer():
        y = evaluate(x, T, N, progress)

        proof: List[int] = []
        xi, yi = x, y
        for i in range(1, tau - delta + 1):
            vi = repeated_square(xi, T >> i, N)
            ri = derive_challenge(i, xi, yi, vi)
            logger.debug("prove level=%d squarings=%d r=%s...", i, T >> i, format(ri, "x")[:16])

            xi, yi = (
                arith.mod_exp(xi, ri, N) * vi % N,
                arith.mod_exp(vi, ri, N) * yi % N,
            )
            proof.append(vi)

    METRICS.record_proof()
    logger.info(
        "generated VDF proof: T=%d delta=%d levels=%d elapsed=%.3fs",
        T, delta, len(proof), perf_counter() - start,
    )
    return ProofResult(y=y, proof=tuple(proof))


# ---------------------------------------------------------------------------
# Prover wrapper bound to VDFParams
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Prover:
    params: VDFParams

    @classmethod
    def from_env(cls) -> "Prover":
        return cls(get_params())

    def prove(self, x: int, progress: Optional[ProgressFn] = None) -> ProofResult:
        """Prove with parameters in :attr:`params`."""
        p = self.params
        return generate_proof(x, p.iterations, p.delta, p.modulus_n, progress)

    def prove_record(self, x: int, progress: Optional[ProgressFn] = None) -> VDFProofRecord:
        """Prove and package the full transcript for export."""
        result = self.prove(x, progress)
        return VDFProofRecord(
            x=x,
            y=result.y,
            iterations=self.params.iterations,
            delta=self.params.delta,
            proof=result.proof,
            modulus=self.params.modulus_n,
        )


__all__ = [
    "generate_proof",
    "Prover",
]
