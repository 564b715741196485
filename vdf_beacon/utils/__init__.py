"""
vdf_beacon.utils
----------------

Utility namespace for the VDF package: byte/hex/int conversions (the
serialization boundary) and the Keccak-256 packing helpers used for
Fiat-Shamir challenges.

This package file deliberately avoids eager imports to keep dependency
order simple during bootstrap.
"""

__all__: list[str] = []
