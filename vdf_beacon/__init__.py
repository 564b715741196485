"""
vdf-beacon: a Verifiable Delay Function over an RSA group.

Delayed, unbiasable randomness from a committed seed:
- ``evaluate``:        ``y = x^(2^T) mod N`` by sequential squaring,
- ``generate_proof``:  ``y`` plus a halving proof of ``floor(log2 T) - delta``
                       checkpoints (Keccak-256 Fiat-Shamir challenges),
- ``verify_proof``:    replays the challenge chain in logarithmic time.

Only light, stable exports are surfaced here; see :mod:`vdf_beacon.vdf` for
the parameter-bound ``Prover``/``Verifier`` wrappers.
"""

from __future__ import annotations

from .errors import InvalidParameters, VDFError, VDFInvalid
from .types.core import ProofResult, VDFProofRecord
from .vdf import evaluate, generate_proof, verify_proof
from .version import __version__

__all__ = [
    "__version__",
    "evaluate",
    "generate_proof",
    "verify_proof",
    "ProofResult",
    "VDFProofRecord",
    "VDFError",
    "InvalidParameters",
    "VDFInvalid",
]
