"""Block-level sample-rate conversion using a Kaiser-windowed sinc filter."""

from __future__ import annotations

import math
from functools import lru_cache
from typing import Optional, Sequence

NPC = 4096
"""Filter coefficients stored per unit of input-sample time."""

PI = 3.14159265358979232846

_IZERO_EPSILON = 1e-21
_ROLLOFF = 0.90
_BETA = 6.0
_MIN_BUFFER = 4096


def izero(x: float) -> float:
    """Zeroth-order modified Bessel function of the first kind."""
    total = u = 1.0
    n = 1
    halfx = x / 2.0
    while True:
        temp = halfx / n
        n += 1
        temp *= temp
        u *= temp
        total += u
        if u < _IZERO_EPSILON * total:
            return total


def lowpass_filter(nf: int, frq: float, beta: float, num: int) -> list[float]:
    """Return ``nf`` coefficients of one wing of a Kaiser-windowed low-pass filter.

    ``frq`` is the roll-off frequency, ``beta`` the Kaiser window parameter and
    ``num`` the number of coefficients per input sample.
    """
    coeffs = [2.0 * frq]
    for i in range(1, nf):
        temp = PI * i / num
        coeffs.append(math.sin(2.0 * temp * frq) / temp)

    ibeta = 1.0 / izero(beta)
    inm1 = 1.0 / (nf - 1) if nf > 1 else 0.0
    for i in range(1, nf):
        temp = i * inm1
        temp1 = max(1.0 - temp * temp, 0.0)
        coeffs[i] *= izero(beta * math.sqrt(temp1)) * ibeta
    return coeffs


@lru_cache(maxsize=None)
def _filter_tables(nmult: int) -> tuple[tuple[float, ...], tuple[float, ...]]:
    nwing = NPC * ((nmult - 1) // 2)
    imp = lowpass_filter(nwing, 0.5 * _ROLLOFF, _BETA, NPC)
    deltas = [b - a for a, b in zip(imp, imp[1:])]
    deltas.append(-imp[-1])
    return tuple(imp), tuple(deltas)


def _filter_up(imp, impd, interp, x, xp, phase, inc):
    phase *= NPC
    hp = int(phase)
    hdp = hp
    end = len(imp)
    frac = phase - math.floor(phase) if interp else 0.0
    if inc == 1:
        end -= 1
        if phase == 0:
            hp += NPC
            hdp += NPC
    value = 0.0
    while hp < end:
        coeff = imp[hp]
        if interp:
            coeff += impd[hdp] * frac
            hdp += NPC
        value += coeff * x[xp]
        hp += NPC
        xp += inc
    return value


def _filter_ud(imp, impd, interp, x, xp, phase, inc, dhb):
    ho = phase * dhb
    end = len(imp)
    if inc == 1:
        end -= 1
        if phase == 0:
            ho += dhb
    value = 0.0
    while (hp := int(ho)) < end:
        coeff = imp[hp]
        if interp:
            coeff += impd[hp] * (ho - math.floor(ho))
        value += coeff * x[xp]
        ho += dhb
        xp += inc
    return value


class Resampler:
    """Streaming sample-rate converter.

    A factor above 1 raises the sampling rate, below 1 lowers it.
    """

    interpolate = False

    def __init__(self, factor: Optional[float] = None) -> None:
        self._open = False
        if factor is not None:
            self.open(True, factor, factor)

    def open(self, high_quality: bool, min_factor: float, max_factor: float) -> None:
        """Prepare for conversion factors between ``min_factor`` and ``max_factor``."""
        self.close()
        if min_factor <= 0.0 or max_factor <= 0.0 or max_factor < min_factor:
            raise ValueError(
                "factors must be positive and max_factor must not be below min_factor"
            )
        self._min_factor = float(min_factor)
        self._max_factor = float(max_factor)
        self._nmult = 35 if high_quality else 11
        self._lpscl = 1.0
        self._imp, self._impd = _filter_tables(self._nmult)

        half = (self._nmult + 1) / 2.0
        xoff_min = int(half * max(1.0, 1.0 / min_factor) + 10)
        xoff_max = int(half * max(1.0, 1.0 / max_factor) + 10)
        self._xoff = max(xoff_min, xoff_max)

        self._xsize = max(2 * self._xoff + 10, _MIN_BUFFER)
        self._x = [0.0] * (self._xsize + self._xoff)
        self._xp = self._xoff
        self._xread = self._xoff

        self._ysize = int(self._xsize * max_factor + 2.0)
        self._y: list[float] = []
        self._time = float(self._xoff)
        self._open = True

    def close(self) -> None:
        """Release the buffers; the resampler must be opened again before use."""
        self._open = False
        self._x = []
        self._y = []

    def filter_width(self) -> int:
        """Return the reach of the filter wing in input samples."""
        self._require_open()
        return self._xoff

    def held_over(self) -> int:
        """Return the number of converted samples waiting to be delivered."""
        return len(self._y)

    def process(
        self,
        samples: Sequence[float],
        last: bool = False,
        max_output: Optional[int] = None,
        factor: Optional[float] = None,
    ) -> tuple[int, list[float]]:
        """Convert a block of samples.

        Returns the number of input samples consumed and the output produced.
        ``last`` marks the final block, which is zero-padded and flushed.
        ``max_output`` caps the output; the rest is held over for later calls.
        """
        self._require_open()
        if factor is None:
            factor = self._min_factor
        if factor < self._min_factor or factor > self._max_factor:
            raise ValueError(
                f"factor {factor} is not between {self._min_factor} and {self._max_factor}"
            )

        data = [float(s) for s in samples]
        total = len(data)
        used = 0
        out: list[float] = []
        limit = math.inf if max_output is None else max_output

        self._drain(out, limit)
        if self._y:
            return used, out

        lpscl = self._lpscl * factor if factor < 1 else self._lpscl

        while True:
            length = min(self._xsize - self._xread, total - used)
            self._x[self._xread:self._xread + length] = data[used:used + length]
            used += length
            self._xread += length

            if last and used == total:
                nx = self._xread - self._xoff
                self._x[self._xread:self._xread + self._xoff] = [0.0] * self._xoff
            else:
                nx = self._xread - 2 * self._xoff

            if nx <= 0:
                break

            if factor >= 1:
                produced = self._src_up(factor, nx, lpscl)
            else:
                produced = self._src_ud(factor, nx, lpscl)

            self._time -= nx
            self._xp += nx

            creep = int(self._time) - self._xoff
            if creep:
                self._time -= creep
                self._xp += creep

            start = self._xp - self._xoff
            reuse = self._xread - start
            self._x[0:reuse] = self._x[start:start + reuse]
            self._xread = reuse
            self._xp = self._xoff

            if len(produced) > self._ysize:
                raise RuntimeError("resampler output buffer overflow")

            self._y = produced
            self._drain(out, limit)
            if self._y:
                break

        return used, out

    def _require_open(self) -> None:
        if not self._open:
            raise RuntimeError("resampler is not open")

    def _drain(self, out: list[float], limit: float) -> None:
        room = limit - len(out)
        if self._y and room > 0:
            take = int(min(room, len(self._y)))
            out.extend(self._y[:take])
            del self._y[:take]

    def _src_up(self, factor: float, nx: int, lpscl: float) -> list[float]:
        imp, impd, interp, x = self._imp, self._impd, self.interpolate, self._x
        time = self._time
        dt = 1.0 / factor
        end_time = time + nx
        produced = []
        while time < end_time:
            left = time - math.floor(time)
            right = 1.0 - left
            xp = int(time)
            value = _filter_up(imp, impd, interp, x, xp, left, -1)
            value += _filter_up(imp, impd, interp, x, xp + 1, right, 1)
            produced.append(value * lpscl)
            time += dt
        self._time = time
        return produced

    def _src_ud(self, factor: float, nx: int, lpscl: float) -> list[float]:
        imp, impd, interp, x = self._imp, self._impd, self.interpolate, self._x
        time = self._time
        dt = 1.0 / factor
        dh = min(NPC, factor * NPC)
        end_time = time + nx
        produced = []
        while time < end_time:
            left = time - math.floor(time)
            right = 1.0 - left
            xp = int(time)
            value = _filter_ud(imp, impd, interp, x, xp, left, -1, dh)
            value += _filter_ud(imp, impd, interp, x, xp + 1, right, 1, dh)
            produced.append(value * lpscl)
            time += dt
        self._time = time
        return produced