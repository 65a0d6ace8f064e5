"""Thread-safe fixed-size ring buffer of audio samples."""

from __future__ import annotations

import threading

DEFAULT_SIZE = 1000


class RingBuffer:
    """A ring of float samples that drops the oldest sample when full.

    A ring of ``size`` slots holds at most ``size - 1`` samples.
    """

    def __init__(self, size: int = DEFAULT_SIZE) -> None:
        self._lock = threading.Lock()
        self._ring: list[float] = []
        self._in = 0
        self._out = 0
        self._size = 0
        self.set_size(size)

    @property
    def size(self) -> int:
        """Number of slots in the ring."""
        return self._size

    def set_size(self, size: int) -> None:
        """Replace the ring with an empty one of ``size`` slots."""
        if size < 1:
            raise ValueError("ring buffer size must be at least 1")
        with self._lock:
            self._ring = [0.0] * size
            self._size = size
            self._in = self._out = 0

    def put(self, sample: float) -> None:
        """Append a sample, discarding the oldest one if the ring is full."""
        with self._lock:
            self._in = (self._in + 1) % self._size
            if self._in == self._out:
                self._out = (self._out + 1) % self._size
            self._ring[self._in] = float(sample)

    def get(self) -> float:
        """Remove and return the oldest sample, or 0.0 if the ring is empty."""
        with self._lock:
            if self._out == self._in:
                return 0.0
            self._out = (self._out + 1) % self._size
            return self._ring[self._out]

    def __len__(self) -> int:
        with self._lock:
            if self._in >= self._out:
                return self._in - self._out
            return self._size + self._in - self._out

    def reset(self) -> None:
        """Discard all held samples."""
        with self._lock:
            self._in = self._out = 0