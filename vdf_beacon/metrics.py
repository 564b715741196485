"""
Prometheus metrics for the VDF core.

This module defines counters and histograms for the evaluate → prove → verify
pipeline:
  • evaluations_total    — completed sequential evaluations
  • squarings_total      — sequential squarings performed by evaluations
  • proofs_total         — proofs generated
  • verifications_total  — verification attempts per outcome
  • prove_seconds        — wall time spent generating proofs
  • verify_seconds       — wall time spent verifying proofs

Design notes
------------
- Label cardinality is bounded: only ``outcome`` on verifications, drawn from
  the verifier's fixed reason vocabulary.
- No per-seed or per-request labels.

Usage
-----
    from vdf_beacon.metrics import METRICS

    with METRICS.verify_timer():
        ok = verify_proof(...)
    METRICS.record_verification("ok")

Tests and embedders that need isolation construct their own `Metrics` with a
private ``CollectorRegistry``.
"""

from __future__ import annotations

from contextlib import contextmanager
from time import perf_counter
from typing import Iterable, Iterator

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram


# --------- Vocabulary (kept small for bounded cardinality) ---------

_VERIFY_OUTCOMES = (
    "ok",                 # proof accepted
    "length_mismatch",    # proof has the wrong number of checkpoints
    "non_canonical",      # x, y or a checkpoint is >= N
    "equation_mismatch",  # final x^(2^(2^delta)) == y check failed
    "error",              # verifier raised (invalid parameters)
)

# --------- Default histogram buckets ---------

# Proof generation is dominated by ~2T squarings: sub-second up to minutes.
_PROVE_BUCKETS = (
    0.1, 0.25, 0.5,
    1.0, 2.5, 5.0, 10.0,
    30.0, 60.0, 120.0, 300.0,
)

# Verification: tau-delta modexps plus 2^delta squarings.
_VERIFY_BUCKETS = (
    0.001, 0.0025, 0.005, 0.01,
    0.025, 0.05, 0.1, 0.25,
    0.5, 1.0, 2.5,
)


class Metrics:
    """
    Container for all VDF Prometheus instruments.

    Args:
        namespace: Prometheus metric namespace (prefix).
        subsystem: Prometheus metric subsystem.
        registry:  Prometheus registry to register the metrics with.
    """

    def __init__(
        self,
        *,
        namespace: str = "vdf_beacon",
        subsystem: str = "vdf",
        registry: CollectorRegistry = REGISTRY,
        prove_buckets: Iterable[float] = _PROVE_BUCKETS,
        verify_buckets: Iterable[float] = _VERIFY_BUCKETS,
    ) -> None:
        # Counters
        self.evaluations_total = Counter(
            "evaluations_total",
            "Number of completed sequential VDF evaluations.",
            namespace=namespace,
            subsystem=subsystem,
            registry=registry,
        )
        self.squarings_total = Counter(
            "squarings_total",
            "Sequential modular squarings performed by evaluations.",
            namespace=namespace,
            subsystem=subsystem,
            registry=registry,
        )
        self.proofs_total = Counter(
            "proofs_total",
            "Number of VDF proofs generated.",
            namespace=namespace,
            subsystem=subsystem,
            registry=registry,
        )
        self.verifications_total = Counter(
            "verifications_total",
            "Number of VDF proof verifications, labeled by outcome.",
            labelnames=("outcome",),
            namespace=namespace,
            subsystem=subsystem,
            registry=registry,
        )

        # Histograms
        self.prove_seconds = Histogram(
            "prove_seconds",
            "Time spent generating VDF proofs (seconds).",
            buckets=tuple(prove_buckets),
            namespace=namespace,
            subsystem=subsystem,
            registry=registry,
        )
        self.verify_seconds = Histogram(
            "verify_seconds",
            "Time spent verifying VDF proofs (seconds).",
            buckets=tuple(verify_buckets),
            namespace=namespace,
            subsystem=subsystem,
            registry=registry,
        )

    # ----- Recording helpers -------------------------------------------------

    def record_evaluation(self, squarings: int) -> None:
        self.evaluations_total.inc()
        if squarings:
            self.squarings_total.inc(squarings)

    def record_proof(self) -> None:
        self.proofs_total.inc()

    def record_verification(self, outcome: str) -> None:
        """
        Increment the verification counter for an outcome.

        Unknown outcomes are folded into ``error``.
        """
        if outcome not in _VERIFY_OUTCOMES:
            outcome = "error"
        self.verifications_total.labels(outcome=outcome).inc()

    # ----- Context managers --------------------------------------------------

    @contextmanager
    def prove_timer(self) -> Iterator[None]:
        start = perf_counter()
        try:
            yield
        finally:
            self.prove_seconds.observe(perf_counter() - start)

    @contextmanager
    def verify_timer(self) -> Iterator[None]:
        """
        Context manager to time a verification block.

            with METRICS.verify_timer():
                verify_proof(...)
        """
        start = perf_counter()
        try:
            yield
        finally:
            self.verify_seconds.observe(perf_counter() - start)


# Singleton used by the library code paths
METRICS = Metrics()

__all__ = [
    "Metrics",
    "METRICS",
    "_VERIFY_OUTCOMES",
]
