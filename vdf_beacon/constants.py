"""
vdf-beacon constants.

This module centralizes:
- The reference RSA modulus and delay parameters of the deployed raffle
  coordinator (T = 2^20 squarings, delta = 9 omitted levels)
- The fixed operand width used when packing Fiat-Shamir challenge preimages
- Small knobs for progress reporting and the CLI

Networks may select other parameters via :mod:`vdf_beacon.vdf.params`
profiles or environment overrides, but code that needs stable compile-time
defaults can import from here.
"""

from __future__ import annotations

# -----------------------------
# Reference deployment
# -----------------------------
# 1028-bit modulus (257 hex digits, 129 bytes). Its factorization must stay
# unknown; anyone holding it can skip the sequential squarings.
REFERENCE_MODULUS_HEX: str = (
    "C196BA6B8F017E8A7D66F83240C5F4ACF45C8F6F9E48F2B9D63C6F9B742CCB8701F3AF0B66D34AB63D6C6EFA509572DF"
    "E3019575280EF967A0C0E9A0B68B10CB6A7063BD5C7CC7FC1F76147CB1A45A3F802E8A8774E37CF11F750B15811D37F321"
    "293C29F67CBAA4C9E4C7A3AD1830F06069DC271D48D2611B1EF8B64C7EAD9C1"
)

DEFAULT_VDF_ITERATIONS: int = 1 << 20
DEFAULT_VDF_DELTA: int = 9

# Seed used by the reference walkthrough and the end-to-end tests.
REFERENCE_SEED: int = 0x1234ABCD

# -----------------------------
# Challenge hashing
# -----------------------------
# Operands of the challenge preimage are left-padded to this many bytes
# (except the checkpoint v_i). Pinned to the on-chain verifier's fixed-width
# storage layout; changing it breaks compatibility with deployed contracts.
HASH_PAD_BYTES: int = 129
HASH_PAD_HEX_DIGITS: int = 2 * HASH_PAD_BYTES

# Index of the operand that is never padded (the checkpoint v_i).
UNPADDED_OPERAND_INDEX: int = 2

# -----------------------------
# Operational knobs
# -----------------------------
# Approximate number of progress reports per sequential squaring run.
PROGRESS_REPORTS: int = 10

# Lower bound for modulus sizes accepted by VDFParams.validate().
VDF_MIN_MODULUS_BITS: int = 1024

__all__ = [
    "REFERENCE_MODULUS_HEX",
    "DEFAULT_VDF_ITERATIONS",
    "DEFAULT_VDF_DELTA",
    "REFERENCE_SEED",
    "HASH_PAD_BYTES",
    "HASH_PAD_HEX_DIGITS",
    "UNPADDED_OPERAND_INDEX",
    "PROGRESS_REPORTS",
    "VDF_MIN_MODULUS_BITS",
]
