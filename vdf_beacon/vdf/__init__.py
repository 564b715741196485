"""
vdf_beacon.vdf
==============

The VDF core: sequential squaring in an RSA group, a logarithmic-size halving
proof made non-interactive with Keccak-256 Fiat-Shamir challenges, and its
verifier.

Design
------
- Every call takes ``(x, T, delta, N)`` explicitly; :class:`VDFParams`
  profiles bundle them for convenience but nothing reads ambient state.
- Integers only. Conversion from hex/bytes happens once, in
  :mod:`vdf_beacon.utils.bytes`.

Usage
-----
>>> from vdf_beacon.vdf import evaluate, generate_proof, verify_proof
>>> y, proof = generate_proof(x, T, delta, N)
>>> verify_proof(x, y, T, delta, proof, N)
True
"""

from __future__ import annotations

from .evaluator import evaluate
from .params import DEVNET, REFERENCE, VDFParams, get_params
from .prover import Prover, generate_proof
from .verifier import Verifier, verify_proof, verify_with_report

__all__ = [
    "evaluate",
    "generate_proof",
    "verify_proof",
    "verify_with_report",
    "Prover",
    "Verifier",
    "VDFParams",
    "REFERENCE",
    "DEVNET",
    "get_params",
]
