#!/usr/bin/env python3
"""
VDF timing benchmark (evaluate / prove / verify)

Measures wall-clock time of the three VDF operations across a grid of
iteration counts T for one modulus:

For each T, this script:
  1) Builds a deterministic seed x from --seed (reduced mod N).
  2) Times one sequential evaluation y = x^(2^T) mod N.
  3) Times one proof generation (evaluation + checkpoints).
  4) Runs the verifier multiple times (with warmups) and reports
       - mean/median/95p latency (ms)
       - success rate (should be 100%)

Evaluation should scale linearly in T and verification roughly with
log2(T) - delta; a summary of ns/squaring across the grid is printed at the
end to make drift from linear obvious.

Usage examples:
  python -m vdf_beacon.bench.vdf_timing --iters 4k,16k,64k --delta 3
  python -m vdf_beacon.bench.vdf_timing --iters 2^20 --delta 9 --reps 5 --csv vdf.csv
"""
from __future__ import annotations

import argparse
import csv
import json
import statistics as stats
import time
from dataclasses import asdict, dataclass

from vdf_beacon.constants import REFERENCE_MODULUS_HEX, REFERENCE_SEED
from vdf_beacon.vdf.evaluator import evaluate
from vdf_beacon.vdf.params import tau_of
from vdf_beacon.vdf.prover import generate_proof
from vdf_beacon.vdf.verifier import verify_proof


# --- Helpers -----------------------------------------------------------------
def _parse_num_list(s: str) -> list[int]:
    """
    Parse a comma-separated list of integers with optional suffixes:
      - k / K => *1_024
      - m / M => *1_048_576
      - 2^N   => 1 << N
      - e.g. '4k,2^16,1m' are accepted
    Powers of two keep floor(log2 T) exact, which is what the proof length
    depends on.
    """
    out: list[int] = []
    for part in s.split(","):
        t = part.strip().lower()
        if not t:
            continue
        if t.startswith("2^"):
            out.append(1 << int(t[2:]))
            continue
        mul = 1
        if t.endswith(("k", "m")):
            mul = 1 << 10 if t[-1] == "k" else 1 << 20
            t = t[:-1]
        out.append(int(float(t) * mul))
    return out


def _format_ms(v: float) -> str:
    return f"{v:.3f}"


@dataclass
class BenchPoint:
    T: int
    delta: int
    proof_len: int
    eval_ms: float
    prove_ms: float
    verify_mean_ms: float
    verify_median_ms: float
    verify_p95_ms: float
    ok: int
    fail: int
    ns_per_square: float

    def to_row(self) -> list[str | int | float]:
        return [
            self.T,
            self.delta,
            self.proof_len,
            _format_ms(self.eval_ms),
            _format_ms(self.prove_ms),
            _format_ms(self.verify_mean_ms),
            _format_ms(self.verify_median_ms),
            _format_ms(self.verify_p95_ms),
            self.ok,
            self.fail,
            f"{self.ns_per_square:.1f}",
        ]


COLUMNS = [
    "T", "delta", "proof_len", "eval_ms", "prove_ms",
    "verify_mean_ms", "verify_median_ms", "verify_p95_ms", "ok", "fail", "ns/square",
]


# --- Core benchmarking --------------------------------------------------------
def bench_point(T: int, delta: int, N: int, seed: int, reps: int, warmup: int) -> BenchPoint:
    x = seed % N

    t0 = time.perf_counter()
    y_eval = evaluate(x, T, N)
    eval_ms = (time.perf_counter() - t0) * 1_000.0

    t0 = time.perf_counter()
    y, proof = generate_proof(x, T, delta, N)
    prove_ms = (time.perf_counter() - t0) * 1_000.0
    if y != y_eval:
        raise RuntimeError(f"prover output differs from evaluation at T={T}")

    for _ in range(warmup):
        verify_proof(x, y, T, delta, proof, N)

    times_ms: list[float] = []
    ok = 0
    fail = 0
    for _ in range(reps):
        t0 = time.perf_counter()
        valid = verify_proof(x, y, T, delta, proof, N)
        times_ms.append((time.perf_counter() - t0) * 1_000.0)
        if valid:
            ok += 1
        else:
            fail += 1

    p95 = stats.quantiles(times_ms, n=20)[18] if len(times_ms) >= 20 else max(times_ms)
    return BenchPoint(
        T=T,
        delta=delta,
        proof_len=len(proof),
        eval_ms=eval_ms,
        prove_ms=prove_ms,
        verify_mean_ms=stats.fmean(times_ms),
        verify_median_ms=stats.median(times_ms),
        verify_p95_ms=p95,
        ok=ok,
        fail=fail,
        ns_per_square=eval_ms * 1e6 / T,
    )


def print_table(points: list[BenchPoint]) -> None:
    rows = [p.to_row() for p in points]

    widths = [len(c) for c in COLUMNS]
    for r in rows:
        for i, cell in enumerate(r):
            widths[i] = max(widths[i], len(str(cell)))

    def _fmt_row(r: list[object]) -> str:
        return "  ".join(str(cell).rjust(widths[i]) for i, cell in enumerate(r))

    print(_fmt_row(COLUMNS))
    print("  ".join("-" * w for w in widths))
    for r in rows:
        print(_fmt_row(r))


def scaling_summary(points: list[BenchPoint]) -> str:
    """One line comparing ns/squaring at the smallest and largest T."""
    if len(points) < 2:
        return "scaling: need at least two T values"
    lo = min(points, key=lambda p: p.T)
    hi = max(points, key=lambda p: p.T)
    ratio = hi.ns_per_square / lo.ns_per_square if lo.ns_per_square else float("inf")
    return (
        f"scaling: T x{hi.T / lo.T:g} -> eval time x{hi.eval_ms / max(lo.eval_ms, 1e-9):.2f} "
        f"(ns/square ratio {ratio:.2f}, 1.00 = linear)"
    )


# --- CLI ---------------------------------------------------------------------
def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Benchmark VDF evaluate/prove/verify timings")
    ap.add_argument(
        "--iters",
        type=str,
        default="4k,16k,64k",
        help="Comma-separated iteration counts T (supports k/m and 2^N; e.g. '4k,2^16')",
    )
    ap.add_argument("--delta", type=int, default=3, help="Omitted recursion levels (must be < floor(log2 T))")
    ap.add_argument("--modulus", type=lambda x: int(x, 16), default=int(REFERENCE_MODULUS_HEX, 16),
                    help="RSA modulus as hex (default: reference 1028-bit modulus)")
    ap.add_argument("--reps", type=int, default=10, help="Verification repetitions per point (timed)")
    ap.add_argument("--warmup", type=int, default=2, help="Warmup verifications per point (not timed)")
    ap.add_argument("--seed", type=lambda x: int(x, 0), default=REFERENCE_SEED, help="Seed x (int, 0x... ok)")
    ap.add_argument("--csv", type=str, default="", help="Optional path to write CSV results")
    ap.add_argument("--json", type=str, default="", help="Optional path to write JSON results")
    args = ap.parse_args(argv)

    iters_list = _parse_num_list(args.iters)
    for T in iters_list:
        if T < 2 or T & (T - 1) or args.delta >= tau_of(T):
            ap.error(f"T={T}: must be a power of two >= 2 with delta={args.delta} below log2 T")
    if args.reps < 1:
        ap.error("--reps must be at least 1")

    points = [
        bench_point(T=T, delta=args.delta, N=args.modulus, seed=args.seed, reps=args.reps, warmup=args.warmup)
        for T in iters_list
    ]

    print_table(points)
    print()
    print(scaling_summary(points))

    if args.csv:
        with open(args.csv, "w", newline="") as f:
            w = csv.writer(f)
            w.writerow(list(asdict(points[0]).keys()) if points else COLUMNS)
            for p in points:
                w.writerow(list(asdict(p).values()))
        print(f"\nWrote CSV: {args.csv}")

    if args.json:
        with open(args.json, "w") as f:
            json.dump([asdict(p) for p in points], f, indent=2)
        print(f"Wrote JSON: {args.json}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
