from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Sequence, Tuple

from ..errors import EncodingError
from ..utils.bytes import parse_int, to_even_hex

"""
Core typed values for the VDF package.

These are immutable and free of heavy dependencies so they can be shared by
the prover, the verifier, the CLI and tests.

Types provided:
  • ProofResult     — prover output: delayed value ``y`` and checkpoints
  • VerifyReport    — verifier outcome with a reason label
  • VDFProofRecord  — full transcript (x, y, T, delta, proof, N) with the
                      JSON wire format and a Solidity fixture renderer

Wire format: every integer is a minimal, even-length, ``0x``-prefixed hex
string (see :func:`vdf_beacon.utils.bytes.to_even_hex`); ``iterations`` and
``delta`` are plain JSON integers.
"""


def _require_nonneg(name: str, v: int) -> None:
    if v < 0:
        raise ValueError(f"{name} must be non-negative (got {v})")


# ---- Prover / verifier results ----------------------------------------------


@dataclass(frozen=True, slots=True)
class ProofResult:
    """
    Output of :func:`vdf_beacon.vdf.prover.generate_proof`.

    Fields:
      y      — ``x^(2^T) mod N``
      proof  — checkpoints ``v_1 .. v_(tau-delta)`` in recursion order
    """

    y: int
    proof: Tuple[int, ...] = field(default_factory=tuple)

    def __iter__(self):
        # allows ``y, proof = generate_proof(...)``
        yield self.y
        yield self.proof


@dataclass(frozen=True, slots=True)
class VerifyReport:
    """Verifier outcome: ``ok`` plus a label ('ok', 'length_mismatch', 'non_canonical', 'equation_mismatch', 'params_mismatch')."""

    ok: bool
    reason: str

    def __bool__(self) -> bool:
        return self.ok


# ---- Transcript record -------------------------------------------------------


@dataclass(frozen=True, slots=True)
class VDFProofRecord:
    """
    Everything a third party needs to check one VDF evaluation.

    Fields:
      x           — seed
      y           — claimed output
      iterations  — T
      delta       — omitted recursion levels
      proof       — checkpoints
      modulus     — N
    """

    x: int
    y: int
    iterations: int
    delta: int
    proof: Tuple[int, ...]
    modulus: int

    def __post_init__(self) -> None:  # type: ignore[override]
        for name in ("x", "y", "iterations", "delta", "modulus"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, int):
                raise TypeError(f"{name} must be an int")
            _require_nonneg(name, v)
        if not isinstance(self.proof, tuple):
            object.__setattr__(self, "proof", tuple(self.proof))
        for i, v in enumerate(self.proof):
            if isinstance(v, bool) or not isinstance(v, int):
                raise TypeError(f"proof[{i}] must be an int")
            _require_nonneg(f"proof[{i}]", v)

    # -- JSON ---------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": to_even_hex(self.x),
            "y": to_even_hex(self.y),
            "modulus": to_even_hex(self.modulus),
            "iterations": self.iterations,
            "delta": self.delta,
            "proof": [to_even_hex(v) for v in self.proof],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "VDFProofRecord":
        """
        Parse a record. Integer fields accept anything
        :func:`~vdf_beacon.utils.bytes.parse_int` does.
        ``proof`` may be nested as ``{"proof": {"proof": [...], "y": ...}}``.
        """
        if not isinstance(d, Mapping):
            raise EncodingError("proof record must be a JSON object")
        data = dict(d)
        if isinstance(data.get("proof"), Mapping):
            data.update(data["proof"])
        missing = [k for k in ("x", "y", "modulus", "iterations", "delta", "proof") if k not in data]
        if missing:
            raise EncodingError(f"proof record missing required fields: {', '.join(missing)}")
        proof = data["proof"]
        if not isinstance(proof, Sequence) or isinstance(proof, (str, bytes)):
            raise EncodingError("proof must be a list of integers")
        try:
            return cls(
                x=parse_int(data["x"]),
                y=parse_int(data["y"]),
                iterations=parse_int(data["iterations"]),
                delta=parse_int(data["delta"]),
                proof=tuple(parse_int(v) for v in proof),
                modulus=parse_int(data["modulus"]),
            )
        except EncodingError:
            raise
        except (TypeError, ValueError) as e:
            raise EncodingError(f"invalid proof record: {e}") from e

    @classmethod
    def from_json(cls, text: str) -> "VDFProofRecord":
        try:
            obj = json.loads(text)
        except json.JSONDecodeError as e:
            raise EncodingError(f"invalid JSON in proof record: {e}") from e
        return cls.from_dict(obj)

    # -- Solidity -----------------------------------------------------------

    def to_solidity(self) -> str:
        """
        Render the record as Solidity test-fixture statements, matching what
        the on-chain verifier's tests paste in.
        """
        def h(v: int) -> str:
            return to_even_hex(v, prefix="")

        lines = [
            "// Solidity format:",
            f'  bytes memory x = hex"{h(self.x)}";',
            f'  bytes memory y = hex"{h(self.y)}";',
            f'  bytes memory N = hex"{h(self.modulus)}";',
            "",
            f"  uint256 T = {self.iterations};",
            f"  uint256 delta = {self.delta};",
            f"  bytes[] memory proof = new bytes[]({len(self.proof)});",
        ]
        lines.extend(f"  proof[{i}] = hex'{h(v)}';" for i, v in enumerate(self.proof))
        return "\n".join(lines) + "\n"


__all__ = [
    "ProofResult",
    "VerifyReport",
    "VDFProofRecord",
]
