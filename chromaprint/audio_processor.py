"""Down-mixing and resampling of raw 16-bit audio into a single channel."""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Sequence

from chromaprint.resample import Resampler

logger = logging.getLogger(__name__)

MIN_SAMPLE_RATE = 1000
MAX_BUFFER_SIZE = 1024 * 32

RESAMPLE_FILTER_LENGTH = 16
RESAMPLE_PHASE_SHIFT = 8
RESAMPLE_LINEAR = 0
RESAMPLE_CUTOFF = 0.8


class _AudioConsumer(Protocol):
    def consume(self, samples: List[int]) -> None: ...


class AudioProcessorError(ValueError):
    """Raised when an audio stream cannot be processed."""


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // b
    return q if a >= 0 else -q


class AudioProcessor:
    """Converts an interleaved audio stream to mono at the target sample rate."""

    def __init__(self, sample_rate: int, consumer: _AudioConsumer) -> None:
        self.target_sample_rate = sample_rate
        self.consumer = consumer
        self._buffer: List[int] = []
        self._num_channels: Optional[int] = None
        self._resampler: Optional[Resampler] = None

    def reset(self, sample_rate: int, num_channels: int) -> None:
        """Prepare for a new audio stream."""
        if num_channels <= 0:
            raise AudioProcessorError("no audio channels")
        if sample_rate <= MIN_SAMPLE_RATE:
            raise AudioProcessorError(
                f"sample rate must be greater than {MIN_SAMPLE_RATE} ({sample_rate})"
            )
        self._buffer = []
        self._resampler = None
        if sample_rate != self.target_sample_rate:
            self._resampler = Resampler(
                self.target_sample_rate,
                sample_rate,
                RESAMPLE_FILTER_LENGTH,
                RESAMPLE_PHASE_SHIFT,
                RESAMPLE_LINEAR,
                RESAMPLE_CUTOFF,
            )
        self._num_channels = num_channels

    def consume(self, samples: Sequence[int]) -> None:
        """Process a chunk of interleaved samples."""
        if self._num_channels is None:
            raise AudioProcessorError("reset() must be called before consume()")
        if len(samples) % self._num_channels:
            raise ValueError(
                f"sample count {len(samples)} is not a multiple of "
                f"{self._num_channels} channels"
            )
        mono = self._downmix(samples)
        pos = 0
        while pos < len(mono):
            space = MAX_BUFFER_SIZE - len(self._buffer)
            chunk = mono[pos : pos + space]
            self._buffer.extend(chunk)
            pos += len(chunk)
            if len(self._buffer) == MAX_BUFFER_SIZE:
                self._resample()
                if len(self._buffer) == MAX_BUFFER_SIZE:
                    logger.debug("resampling failed to consume any input")
                    return

    def flush(self) -> None:
        """Process any buffered input and clear the buffer."""
        if self._buffer:
            self._resample()

    def _downmix(self, samples: Sequence[int]) -> List[int]:
        channels = self._num_channels
        if channels == 1:
            return list(samples)
        if channels == 2:
            return [
                _trunc_div(left + right, 2)
                for left, right in zip(samples[0::2], samples[1::2])
            ]
        return [
            _trunc_div(sum(samples[start : start + channels]), channels)
            for start in range(0, len(samples), channels)
        ]

    def _resample(self) -> None:
        if self._resampler is None:
            output, self._buffer = self._buffer, []
            self.consumer.consume(output)
            return

        output, consumed = self._resampler.resample(
            self._buffer, MAX_BUFFER_SIZE, True
        )
        self.consumer.consume(output)
        remaining = len(self._buffer) - consumed
        if remaining > 0:
            del self._buffer[:consumed]
        else:
            if remaining < 0:
                logger.debug("resampling read past the end of the input buffer")
            self._buffer = []