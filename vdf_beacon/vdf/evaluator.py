"""
vdf_beacon.vdf.evaluator
========================

Sequential evaluation ``y = x^(2^T) mod N`` by ``T`` repeated squarings.

This loop is the delay: every squaring depends on the previous result, so it
cannot be parallelized, batched or cached across calls. Nothing here tries to.

Long runs report progress roughly :data:`~vdf_beacon.constants.PROGRESS_REPORTS`
times, through DEBUG logging and an optional ``progress(done, total)``
callback. Callers that need cancellation should run the evaluation in a task
or process they can drop; the loop itself has no cancellation points.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from ..constants import PROGRESS_REPORTS
from ..metrics import METRICS
from .arith import mod_square
from .params import check_element, check_iterations, check_modulus

logger = logging.getLogger(__name__)

ProgressFn = Callable[[int, int], None]


def repeated_square(value: int, count: int, modulus: int, progress: Optional[ProgressFn] = None) -> int:
    """
    Square *value* modulo *modulus* exactly *count* times.

    Inputs are trusted (validated by the public entry points). ``count == 0``
    returns *value* unchanged.
    """
    if progress is None and not logger.isEnabledFor(logging.DEBUG):
        # mod_square inlined; this is the hot path
        for _ in range(count):
            value = value * value % modulus
        return value

    step = max(1, count // PROGRESS_REPORTS)
    done = 0
    while done < count:
        chunk = min(step, count - done)
        for _ in range(chunk):
            value = mod_square(value, modulus)
        done += chunk
        logger.debug("squaring progress %d/%d", done, count)
        if progress is not None:
            progress(done, count)
    return value


def evaluate(x: int, T: int, N: int, progress: Optional[ProgressFn] = None) -> int:
    """
    Compute ``y = x^(2^T) mod N``.

    Args:
        x: seed, ``0 <= x < N``.
        T: number of sequential squarings, ``T >= 0`` (``T == 0`` returns ``x``).
        N: odd modulus > 1.
        progress: optional ``(done, total)`` callback.

    Raises:
        InvalidParameters: on any contract violation.
    """
    check_modulus(N)
    check_element("x", x, N)
    check_iterations(T, allow_zero=True)

    logger.debug("evaluate: T=%d modulus_bits=%d", T, N.bit_length())
    y = repeated_square(x, T, N, progress)
    METRICS.record_evaluation(T)
    return y


__all__ = ["evaluate", "repeated_square", "ProgressFn"]
