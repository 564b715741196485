"""
vdf_beacon.vdf.challenge
========================

Fiat-Shamir challenge derivation shared by the prover and the verifier.

At recursion level ``i`` the challenge is::

    r_i = uint256( keccak256( enc(x_i) || enc(y_i) || enc(v_i) ) )

where ``enc`` is the minimal big-endian encoding, optionally left-padded to
:data:`~vdf_beacon.constants.HASH_PAD_BYTES` bytes. Padding applies to every
operand except the third (``v_i``): the on-chain verifier reads ``x_i`` and
``y_i`` from fixed-width big-number storage while ``v_i`` arrives as raw
calldata.

Whether padding is on is decided per level by :func:`needs_padding`. Level 1
operands come straight from canonical storage and are never padded; later
levels pad whenever ``x_i`` or ``y_i`` is not exactly the padded width.

This is the only hashing convention implemented. Proofs built under any other
packing cannot be checked here and vice versa.
"""

from __future__ import annotations

from ..constants import HASH_PAD_BYTES, UNPADDED_OPERAND_INDEX
from ..utils.bytes import hex_digit_len, int_from_bytes, int_to_min_bytes, left_pad
from ..utils.hash import packed_keccak256


def challenge_operand(value: int, pad: bool, width: int = HASH_PAD_BYTES) -> bytes:
    """
    Encode one challenge operand.

    Zero is always the single byte ``00``, even with ``pad=True``; the
    reference packer returns before padding for zero.
    """
    raw = int_to_min_bytes(value)
    if pad and value != 0:
        return left_pad(raw, width)
    return raw


def hash_to_int(pad: bool, *values: int, width: int = HASH_PAD_BYTES) -> int:
    """
    Tight-pack *values* and hash them to a 256-bit integer.

    ``pad`` is applied to every operand except index 2.
    """
    chunks = [
        challenge_operand(v, pad and i != UNPADDED_OPERAND_INDEX, width)
        for i, v in enumerate(values)
    ]
    return int_from_bytes(packed_keccak256(*chunks))


def needs_padding(level: int, x_i: int, y_i: int, width: int = HASH_PAD_BYTES) -> bool:
    """Pad flag for recursion ``level`` (1-indexed), keyed on the current accumulators."""
    if level == 1:
        return False
    digits = 2 * width
    return hex_digit_len(x_i) != digits or hex_digit_len(y_i) != digits


def derive_challenge(level: int, x_i: int, y_i: int, v_i: int) -> int:
    """Challenge ``r_i`` for one recursion level."""
    return hash_to_int(needs_padding(level, x_i, y_i), x_i, y_i, v_i)


__all__ = [
    "challenge_operand",
    "hash_to_int",
    "needs_padding",
    "derive_challenge",
]
