# Copyright (c) Animica.
# SPDX-License-Identifier: MIT
"""
vdf_beacon.utils.hash
=====================

Keccak-256 and Solidity-style *tight packing* helpers.

The VDF challenge must match an on-chain verifier bit-for-bit, so this module
reproduces ``keccak256(abi.encodePacked(bytes, bytes, ...))``:

- :func:`keccak256`: original Keccak-256 (pre-NIST padding, as used by the
  EVM). Note this is *not* ``hashlib.sha3_256``.
- :func:`pack_bytes`: ``abi.encodePacked`` for dynamic ``bytes`` values is a
  plain concatenation; no length prefixes, no separators.
- :func:`packed_keccak256`: the two combined.

Keccak comes from ``pycryptodome`` (``Crypto.Hash.keccak``).
"""

from __future__ import annotations

from Crypto.Hash import keccak as _keccak

from .bytes import BytesLike, as_bytes

__all__ = [
    "keccak256",
    "pack_bytes",
    "packed_keccak256",
]


def keccak256(data: BytesLike) -> bytes:
    """Return Keccak-256(data) (32 bytes)."""
    h = _keccak.new(digest_bits=256)
    h.update(as_bytes(data))
    return h.digest()


def pack_bytes(*chunks: BytesLike) -> bytes:
    """Tight packing of ``bytes`` operands: concatenation in argument order."""
    return b"".join(as_bytes(c) for c in chunks)


def packed_keccak256(*chunks: BytesLike) -> bytes:
    """Equivalent of Solidity ``keccak256(abi.encodePacked(chunks...))`` for ``bytes`` chunks."""
    return keccak256(pack_bytes(*chunks))
