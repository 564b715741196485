# Copyright (c) Animica.
# SPDX-License-Identifier: MIT
"""
vdf_beacon.utils.bytes
======================

The single serialization boundary between external representations (hex
strings, raw bytes, decimal strings) and the purely numeric VDF core.

Highlights
----------
- :func:`int_to_min_bytes` / :func:`int_from_bytes`: minimal big-endian
  encoding used on the wire and in challenge preimages (``0`` encodes as a
  single zero byte).
- :func:`to_even_hex`: minimal lowercase hex rounded up to whole bytes, the
  format exchanged with external verifiers (e.g. Solidity ``hex"..."``).
- :func:`parse_int`: the one coercion point for externally supplied
  integers (int, bytes-like, ``0x`` hex or decimal strings).
- :func:`from_hex` / :func:`to_hex` strict hex codecs and :func:`left_pad`.

Everything here raises :class:`~vdf_beacon.errors.EncodingError` on
malformed input instead of guessing.
"""

from __future__ import annotations

import re
from typing import Union

from ..errors import EncodingError

BytesLike = Union[bytes, bytearray, memoryview]
IntLike = Union[int, str, bytes, bytearray, memoryview]

__all__ = [
    "is_hex",
    "from_hex",
    "to_hex",
    "as_bytes",
    "left_pad",
    "int_to_min_bytes",
    "int_from_bytes",
    "to_even_hex",
    "hex_digit_len",
    "parse_int",
]

_HEX_RE = re.compile(r"^(?:0[xX])?[0-9a-fA-F]*$")
_DEC_RE = re.compile(r"^[0-9]+$")


# -----------------
# Hex <-> Bytes I/O
# -----------------


def is_hex(s: str) -> bool:
    """
    Return True if *s* is a hex string with an optional ``0x`` prefix.
    Odd nibble counts are accepted here; :func:`from_hex` decides how to treat them.
    """
    if not isinstance(s, str):
        return False
    return bool(_HEX_RE.match(s))


def from_hex(s: str, *, allow_odd: bool = True) -> bytes:
    """
    Convert a hex string (optional ``0x``) to bytes.

    Odd-length input is left-padded with one zero nibble unless
    ``allow_odd=False``. No whitespace or other characters are tolerated.
    """
    if not isinstance(s, str):
        raise EncodingError(f"from_hex expects a str, got {type(s).__name__}")
    if not _HEX_RE.match(s):
        raise EncodingError("invalid hex string (characters or whitespace)")
    body = s[2:] if s[:2] in ("0x", "0X") else s
    if len(body) % 2:
        if not allow_odd:
            raise EncodingError("hex string must have an even number of nibbles")
        body = "0" + body
    return bytes.fromhex(body)


def to_hex(b: BytesLike, *, prefix: str = "0x") -> str:
    """Encode bytes as lowercase hex, ``0x``-prefixed by default."""
    return (prefix or "") + as_bytes(b).hex()


def as_bytes(x: BytesLike) -> bytes:
    """Normalize bytes-like to immutable :class:`bytes`."""
    if isinstance(x, bytes):
        return x
    if isinstance(x, (bytearray, memoryview)):
        return bytes(x)
    raise EncodingError(f"expected bytes-like, got {type(x)!r}")


def left_pad(b: BytesLike, size: int, fill: int = 0) -> bytes:
    """
    Left-pad to *size* bytes with *fill* (0..255). If already >= size, returns original bytes.
    """
    bb = as_bytes(b)
    if len(bb) >= size:
        return bb
    if not (0 <= fill <= 255):
        raise ValueError("fill must be in 0..255")
    return bytes([fill]) * (size - len(bb)) + bb


# -----------------
# Integers
# -----------------


def int_to_min_bytes(n: int) -> bytes:
    """
    Minimal big-endian encoding of a non-negative integer.

    ``0`` maps to ``b"\\x00"``; every other value uses exactly
    ``ceil(bit_length / 8)`` bytes (never truncated, never over-padded).
    """
    if not isinstance(n, int) or isinstance(n, bool):
        raise EncodingError(f"expected int, got {type(n).__name__}")
    if n < 0:
        raise EncodingError("negative integers cannot be packed")
    if n == 0:
        return b"\x00"
    return n.to_bytes((n.bit_length() + 7) // 8, "big")


def int_from_bytes(b: BytesLike) -> int:
    """Interpret bytes as a big-endian unsigned integer (empty bytes -> 0)."""
    return int.from_bytes(as_bytes(b), "big", signed=False)


def to_even_hex(n: int, *, prefix: str = "0x") -> str:
    """Minimal lowercase hex of *n*, rounded up to an even digit count."""
    return to_hex(int_to_min_bytes(n), prefix=prefix)


def hex_digit_len(n: int) -> int:
    """Number of hex digits of *n* without prefix or even-length rounding."""
    if n < 0:
        raise EncodingError("negative integers have no hex width")
    return len(format(n, "x"))


def parse_int(value: IntLike) -> int:
    """
    Parse an externally supplied integer.

    Accepted forms:
      - ``int`` (bool is rejected)
      - bytes-like: big-endian unsigned
      - ``"0x..."`` hex string (odd length tolerated)
      - decimal string
    Surrounding whitespace and ``_`` separators in strings are ignored.
    Negative results are rejected.
    """
    if isinstance(value, bool):
        raise EncodingError("bool is not an integer input")
    if isinstance(value, int):
        if value < 0:
            raise EncodingError("negative integers are not accepted")
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return int_from_bytes(value)
    if isinstance(value, str):
        s = value.strip().replace("_", "")
        if s[:2] in ("0x", "0X"):
            if len(s) == 2:
                raise EncodingError("empty hex string")
            return int_from_bytes(from_hex(s))
        if _DEC_RE.match(s):
            return int(s, 10)
        raise EncodingError(f"not a hex (0x...) or decimal integer: {value!r}")
    raise EncodingError(f"unsupported integer input type: {type(value).__name__}")
