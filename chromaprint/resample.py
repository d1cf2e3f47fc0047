"""Polyphase audio resampling with a windowed-sinc filter bank."""

from __future__ import annotations

import math
import struct
from operator import mul
from typing import List, Sequence, Tuple

FILTER_SHIFT = 15
WINDOW_TYPE = 9

_FELEM_MIN = -32768
_FELEM_MAX = 32767


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _trunc_mod(a: int, b: int) -> int:
    """Remainder matching division that rounds toward zero."""
    return a - b * _trunc_div(a, b)


def _to_float32(x: float) -> float:
    return struct.unpack("f", struct.pack("f", x))[0]


def _clip(value: int, low: int, high: int) -> int:
    return low if value < low else high if value > high else value


def bessel(x: float) -> float:
    """Zeroth order modified Bessel function of the first kind."""
    v = 1.0
    last_v = 0.0
    t = 1.0
    x = x * x / 4
    i = 1
    while v != last_v:
        last_v = v
        t *= x / (i * i)
        v += t
        i += 1
    return v


def build_filter(
    factor: float,
    tap_count: int,
    phase_count: int,
    scale: int,
    window_type: int = WINDOW_TYPE,
) -> List[int]:
    """Build a polyphase filter bank.

    ``window_type`` 0 selects a cubic filter, 1 a Blackman-Nuttall windowed
    sinc and anything else a Kaiser windowed sinc with that beta.  Each phase
    is normalised so its coefficients sum to about ``scale``.
    """
    center = (tap_count - 1) // 2
    if factor > 1.0:
        factor = 1.0

    bank: List[int] = []
    for ph in range(phase_count):
        tab = []
        norm = 0.0
        for i in range(tap_count):
            offset = (i - center) - ph / phase_count
            x = math.pi * offset * factor
            y = 1.0 if x == 0 else math.sin(x) / x
            if window_type == 0:
                d = -0.5
                x = abs(offset * factor)
                if x < 1.0:
                    y = 1 - 3 * x * x + 2 * x * x * x + d * (-x * x + x * x * x)
                else:
                    y = d * (-4 + 8 * x - 5 * x * x + x * x * x)
            elif window_type == 1:
                w = 2.0 * x / (factor * tap_count) + math.pi
                y *= (
                    0.3635819
                    - 0.4891775 * math.cos(w)
                    + 0.1365995 * math.cos(2 * w)
                    - 0.0106411 * math.cos(3 * w)
                )
            else:
                w = 2.0 * x / (factor * tap_count * math.pi)
                y *= bessel(window_type * math.sqrt(max(1 - w * w, 0)))
            tab.append(y)
            norm += y

        bank.extend(
            _clip(round(_to_float32(value * scale / norm)), _FELEM_MIN, _FELEM_MAX)
            for value in tab
        )
    return bank


class Resampler:
    """Stateful sample-rate converter for 16-bit audio."""

    def __init__(
        self,
        out_rate: int,
        in_rate: int,
        filter_size: int,
        phase_shift: int,
        linear: bool,
        cutoff: float,
    ) -> None:
        factor = min(out_rate * cutoff / in_rate, 1.0)
        phase_count = 1 << phase_shift

        self.phase_shift = phase_shift
        self.phase_mask = phase_count - 1
        self.linear = bool(linear)
        self.filter_length = max(int(math.ceil(filter_size / factor)), 1)

        fl = self.filter_length
        bank = build_filter(factor, fl, phase_count, 1 << FILTER_SHIFT, WINDOW_TYPE)
        # One extra phase: the first phase shifted by one sample, used for
        # linear interpolation between the last phase and the next sample.
        bank.append(bank[fl - 1])
        bank.extend(bank[: fl - 1])
        self.filter_bank: List[int] = bank

        self._phase_filters = [
            tuple(bank[fl * ph : fl * ph + fl]) for ph in range(phase_count)
        ]
        self._next_filters = [
            tuple(bank[fl * ph + fl : fl * ph + 2 * fl]) for ph in range(phase_count)
        ]

        self.src_incr = out_rate
        self.ideal_dst_incr = in_rate * phase_count
        self.dst_incr = self.ideal_dst_incr
        self.index = -phase_count * ((fl - 1) // 2)
        self.frac = 0
        self.compensation_distance = 0

    def compensate(self, sample_delta: int, compensation_distance: int) -> None:
        """Stretch or squeeze the next ``compensation_distance`` output samples."""
        self.compensation_distance = compensation_distance
        self.dst_incr = self.ideal_dst_incr - _trunc_div(
            self.ideal_dst_incr * sample_delta, compensation_distance
        )

    def resample(
        self, src: Sequence[int], dst_size: int, update_ctx: bool = True
    ) -> Tuple[List[int], int]:
        """Resample ``src``, producing at most ``dst_size`` samples.

        Returns the output samples and the number of input samples consumed.
        """
        src = list(src)
        src_size = len(src)
        index = self.index
        frac = self.frac
        src_incr = self.src_incr
        dst_incr_frac = _trunc_mod(self.dst_incr, src_incr)
        dst_incr = _trunc_div(self.dst_incr, src_incr)
        compensation_distance = self.compensation_distance
        fl = self.filter_length
        dst: List[int] = []

        if compensation_distance == 0 and fl == 1 and self.phase_shift == 0:
            index2 = index << 32
            incr = _trunc_div((1 << 32) * self.dst_incr, src_incr)
            dst_size = min(
                dst_size, _trunc_div((src_size - 1 - index) * src_incr, self.dst_incr)
            )
            for _ in range(dst_size):
                dst.append(src[index2 >> 32])
                index2 += incr
            count = len(dst)
            frac += count * dst_incr_frac
            index += count * dst_incr
            index += _trunc_div(frac, src_incr)
            frac = _trunc_mod(frac, src_incr)
        else:
            rounding = 1 << (FILTER_SHIFT - 1)
            for dst_index in range(dst_size):
                phase = index & self.phase_mask
                sample_index = index >> self.phase_shift
                taps = self._phase_filters[phase]

                if sample_index < 0:
                    if src_size == 0:
                        break
                    val = sum(
                        src[abs(sample_index + i) % src_size] * coeff
                        for i, coeff in enumerate(taps)
                    )
                elif sample_index + fl > src_size:
                    break
                elif self.linear:
                    window = src[sample_index : sample_index + fl]
                    val = sum(map(mul, window, taps))
                    v2 = sum(map(mul, window, self._next_filters[phase]))
                    val += _trunc_div((v2 - val) * frac, src_incr)
                else:
                    val = sum(map(mul, src[sample_index : sample_index + fl], taps))

                val = (val + rounding) >> FILTER_SHIFT
                dst.append(_clip(val, _FELEM_MIN, _FELEM_MAX))

                frac += dst_incr_frac
                index += dst_incr
                if frac >= src_incr:
                    frac -= src_incr
                    index += 1

                if dst_index + 1 == compensation_distance:
                    compensation_distance = 0
                    dst_incr_frac = _trunc_mod(self.ideal_dst_incr, src_incr)
                    dst_incr = _trunc_div(self.ideal_dst_incr, src_incr)

        count = len(dst)
        consumed = max(index, 0) >> self.phase_shift
        if index >= 0:
            index &= self.phase_mask

        if compensation_distance:
            compensation_distance -= count

        if update_ctx:
            self.frac = frac
            self.index = index
            self.dst_incr = dst_incr_frac + src_incr * dst_incr
            self.compensation_distance = compensation_distance

        return dst, consumed