"""
vdf_beacon.types
----------------

Immutable value types shared across the package.
"""

from .core import ProofResult, VDFProofRecord, VerifyReport

__all__ = ["ProofResult", "VDFProofRecord", "VerifyReport"]
