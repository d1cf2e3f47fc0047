"""Averaging of consecutive chroma feature vectors."""

from __future__ import annotations

from typing import List, Protocol, Sequence

NUM_BANDS = 12


class _FeatureVectorConsumer(Protocol):
    def consume(self, features: List[float]) -> None: ...


class ChromaResampler:
    """Emit the average of every ``factor`` consecutive chroma vectors."""

    def __init__(self, factor: int, consumer: _FeatureVectorConsumer) -> None:
        if factor <= 0:
            raise ValueError(f"factor must be positive, got {factor}")
        self.factor = factor
        self.consumer = consumer
        self._sum = [0.0] * NUM_BANDS
        self._count = 0

    def reset(self) -> None:
        """Discard any partially accumulated vectors."""
        self._sum = [0.0] * NUM_BANDS
        self._count = 0

    def consume(self, features: Sequence[float]) -> None:
        """Accumulate one vector, emitting the average once ``factor`` are in."""
        for band, value in enumerate(features[:NUM_BANDS]):
            self._sum[band] += value
        self._count += 1
        if self._count == self.factor:
            result = [total / self.factor for total in self._sum]
            self.consumer.consume(result)
            self.reset()