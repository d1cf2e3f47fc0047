"""Temporal FIR filtering of chroma feature vectors."""

from __future__ import annotations

from collections import deque
from typing import Deque, List, Protocol, Sequence, Tuple

NUM_BANDS = 12
MAX_FILTER_LENGTH = 8


class _FeatureVectorConsumer(Protocol):
    def consume(self, features: List[float]) -> None: ...


class ChromaFilter:
    """Convolve consecutive chroma vectors with a short filter kernel.

    Each output vector is the weighted sum of the last ``len(coefficients)``
    input vectors. The oldest vector takes the first coefficient. Nothing is
    emitted until enough input vectors have been seen to fill the kernel.
    """

    def __init__(
        self, coefficients: Sequence[float], consumer: _FeatureVectorConsumer
    ) -> None:
        coefficients = tuple(float(c) for c in coefficients)
        if not 1 <= len(coefficients) <= MAX_FILTER_LENGTH:
            raise ValueError(
                f"filter length must be between 1 and {MAX_FILTER_LENGTH}, "
                f"got {len(coefficients)}"
            )
        self.coefficients: Tuple[float, ...] = coefficients
        self.consumer = consumer
        self._history: Deque[List[float]] = deque(maxlen=len(coefficients))

    def reset(self) -> None:
        """Forget all buffered input vectors."""
        self._history.clear()

    def consume(self, features: Sequence[float]) -> None:
        """Add one chroma vector and emit a filtered vector when possible."""
        self._history.append(list(features[:NUM_BANDS]))
        if len(self._history) < len(self.coefficients):
            return
        result = [0.0] * NUM_BANDS
        for frame, coeff in zip(self._history, self.coefficients):
            for band, value in enumerate(frame):
                result[band] += value * coeff
        self.consumer.consume(result)