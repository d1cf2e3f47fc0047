import random

import pytest

from chromaprint.audio_processor import AudioProcessor, AudioProcessorError


class _Collector:
    def __init__(self):
        self.data = []

    def consume(self, samples):
        self.data.extend(samples)


def _signal(length, seed=0):
    rng = random.Random(seed)
    return [rng.randint(-20000, 20000) for _ in range(length)]


def _interleave(left, right):
    out = []
    for a, b in zip(left, right):
        out.extend((a, b))
    return out


def test_accessors():
    buffer = _Collector()
    buffer2 = _Collector()
    processor = AudioProcessor(44100, buffer)

    assert processor.target_sample_rate == 44100
    assert processor.consumer is buffer

    processor.target_sample_rate = 11025
    assert processor.target_sample_rate == 11025

    processor.consumer = buffer2
    assert processor.consumer is buffer2


def test_pass_through():
    data = _signal(100000)
    buffer = _Collector()
    processor = AudioProcessor(44100, buffer)
    processor.reset(44100, 1)
    processor.consume(data)
    processor.flush()
    assert buffer.data == data


def test_stereo_to_mono():
    mono = _signal(50000)
    stereo = _interleave(mono, mono)
    buffer = _Collector()
    processor = AudioProcessor(44100, buffer)
    processor.reset(44100, 2)
    processor.consume(stereo)
    processor.flush()
    assert buffer.data == mono


def test_stereo_average_truncates_toward_zero():
    buffer = _Collector()
    processor = AudioProcessor(44100, buffer)
    processor.reset(44100, 2)
    processor.consume([3, -4, 5, 6])
    processor.flush()
    assert buffer.data == [0, 5]


def test_multichannel_average_truncates_toward_zero():
    buffer = _Collector()
    processor = AudioProcessor(44100, buffer)
    processor.reset(44100, 3)
    processor.consume([1, 2, 4, -1, -2, -4])
    processor.flush()
    assert buffer.data == [2, -2]


def test_resample_mono():
    data = [1000] * 50000
    buffer = _Collector()
    processor = AudioProcessor(11025, buffer)
    processor.reset(44100, 1)
    processor.consume(data)
    processor.flush()
    assert len(data) // 4 - 80 <= len(buffer.data) <= len(data) // 4 + 1
    assert all(abs(v - 1000) <= 3 for v in buffer.data)


def test_resample_mono_non_integer():
    data = [1000] * 50000
    buffer = _Collector()
    processor = AudioProcessor(8000, buffer)
    processor.reset(44100, 1)
    processor.consume(data)
    processor.flush()
    expected = len(data) * 8000 // 44100
    assert expected - 120 <= len(buffer.data) <= expected + 1
    assert all(abs(v - 1000) <= 3 for v in buffer.data)


def test_stereo_to_mono_and_resample():
    mono = _signal(40000, seed=3)
    stereo = _interleave(mono, mono)

    mono_buffer = _Collector()
    mono_processor = AudioProcessor(11025, mono_buffer)
    mono_processor.reset(44100, 1)
    mono_processor.consume(mono)
    mono_processor.flush()

    stereo_buffer = _Collector()
    stereo_processor = AudioProcessor(11025, stereo_buffer)
    stereo_processor.reset(44100, 2)
    stereo_processor.consume(stereo)
    stereo_processor.flush()

    assert len(stereo_buffer.data) > 0
    assert stereo_buffer.data == mono_buffer.data


def test_chunked_input_matches_single_call():
    data = _signal(60000, seed=7)

    whole = _Collector()
    processor = AudioProcessor(11025, whole)
    processor.reset(44100, 1)
    processor.consume(data)
    processor.flush()

    pieces = _Collector()
    processor = AudioProcessor(11025, pieces)
    processor.reset(44100, 1)
    for start in range(0, len(data), 7000):
        processor.consume(data[start : start + 7000])
    processor.flush()

    assert pieces.data == whole.data


def test_flush_without_data_emits_nothing():
    buffer = _Collector()
    processor = AudioProcessor(44100, buffer)
    processor.reset(44100, 1)
    processor.flush()
    assert buffer.data == []


@pytest.mark.parametrize("channels", [0, -1])
def test_reset_rejects_missing_channels(channels):
    processor = AudioProcessor(44100, _Collector())
    with pytest.raises(AudioProcessorError):
        processor.reset(44100, channels)


@pytest.mark.parametrize("rate", [1000, 500])
def test_reset_rejects_low_sample_rate(rate):
    processor = AudioProcessor(44100, _Collector())
    with pytest.raises(AudioProcessorError):
        processor.reset(rate, 1)


def test_consume_requires_whole_frames():
    processor = AudioProcessor(44100, _Collector())
    processor.reset(44100, 2)
    with pytest.raises(ValueError):
        processor.consume([1, 2, 3])


def test_consume_before_reset_fails():
    processor = AudioProcessor(44100, _Collector())
    with pytest.raises(AudioProcessorError):
        processor.consume([1, 2])