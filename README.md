# chromaprint

Pure Python building blocks for the early stages of audio fingerprinting:
preparing raw 16-bit PCM audio and post-processing 12-band chroma vectors.
The package has no runtime dependencies.

## Installation

```
pip install .
```

To run the tests, install the test extra with `pip install .[test]` and then run `pytest`.

## Components

### `chromaprint.resample`

- `Resampler(out_rate, in_rate, filter_size, phase_shift, linear, cutoff)` is a
  stateful polyphase windowed-sinc resampler for 16-bit samples.
  - `resample(src, dst_size, update_ctx=True)` returns a tuple
    `(output_samples, consumed)`. `output_samples` holds at most `dst_size`
    samples. `consumed` is the number of input samples that the caller can
    drop from the front of its buffer.
  - `compensate(sample_delta, compensation_distance)` stretches or squeezes the
    next `compensation_distance` output samples.
- `bessel(x)` is the zeroth-order modified Bessel function of the first kind.
- `build_filter(factor, tap_count, phase_count, scale, window_type=9)` builds
  the flat list of integer filter-bank coefficients. Window type `0` is cubic,
  `1` is Blackman-Nuttall, and any other value is Kaiser with that beta.

### `chromaprint.audio_processor`

`AudioProcessor(sample_rate, consumer)` converts interleaved audio with any
number of channels into mono at `sample_rate`.

- `reset(sample_rate, num_channels)` prepares the processor for a new stream.
  It raises `AudioProcessorError` (a `ValueError`) if `num_channels <= 0` or
  if `sample_rate <= 1000`. When the input rate differs from the target rate,
  a `Resampler` is set up.
- `consume(samples)` mixes the samples down to mono and buffers them. Each time
  the buffer fills (32768 samples), it resamples the buffer and passes a list
  of samples to `consumer.consume`. Calling it before `reset` raises
  `AudioProcessorError`. A sample count that is not a multiple of the channel
  count raises `ValueError`.
- `flush()` processes whatever is still buffered.

`target_sample_rate` and `consumer` are plain attributes and can be changed.

### `chromaprint.chroma_filter`

`ChromaFilter(coefficients, consumer)` takes 1 to 8 coefficients. Each output
vector is the weighted sum of the last `len(coefficients)` input vectors, and
the oldest vector is multiplied by the first coefficient. No output is
produced until enough vectors have arrived. `reset()` clears the history.

### `chromaprint.chroma_resampler`

`ChromaResampler(factor, consumer)` averages each run of `factor` consecutive
chroma vectors into one vector. `reset()` discards a partly collected run.

Each stage passes its output to a consumer. A consumer is any object with a
`consume` method, so stages can be chained together.

## Example

```python
from chromaprint.audio_processor import AudioProcessor


class Collector:
    def __init__(self):
        self.items = []

    def consume(self, values):
        self.items.append(list(values))


sink = Collector()
processor = AudioProcessor(11025, sink)
processor.reset(44100, 2)               # input: 44.1 kHz stereo
processor.consume([100, 200] * 44100)   # one second of interleaved samples
processor.flush()
print(sum(len(block) for block in sink.items))  # about 11025
```

Chroma stages work in the same way:

```python
from chromaprint.chroma_resampler import ChromaResampler

vectors = Collector()
resampler = ChromaResampler(2, vectors)
resampler.consume([0.0, 5.0] + [0.0] * 10)
resampler.consume([1.0, 6.0] + [0.0] * 10)
print(vectors.items)   # [[0.5, 5.5, 0.0, ...]]
```

## What this package does not do

The package only covers audio preparation and chroma post-processing. It does
not include:

- the spectrum or FFT stage, or chroma extraction from audio;
- fingerprint calculation, compression or base64 encoding;
- fingerprint matching or hashing;
- audio file decoding;
- a command-line tool.