"""Stereo sample buffer shared between audio producers and the renderer.

Producers (audio callbacks, decoder threads) append frames at their own
cadence; the render loop drains everything accumulated since the last
frame in one swap.  A single lock guards both channels so a frame is
never split across drains.
"""

import threading
from typing import NamedTuple

import numpy as np


class DrainedBatch(NamedTuple):
    """Samples taken by one drain, one float32 array per channel."""

    left: np.ndarray
    right: np.ndarray


class SampleBuffer:
    """Lock-guarded pair of growing sample lists (L, R)."""

    def __init__(self):
        self._lock = threading.Lock()
        self._left: list[float] = []
        self._right: list[float] = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._left)

    def add_samples(self, left: float, right: float):
        """Append one stereo frame."""
        with self._lock:
            self._left.append(left)
            self._right.append(right)

    def add_block(self, left, right):
        """Append a block of stereo frames under one lock acquisition.

        Args:
            left:  1-D sequence or array of left-channel samples
            right: 1-D sequence or array of right-channel samples,
                   same length as ``left``
        """
        left = np.asarray(left, dtype=np.float32).ravel()
        right = np.asarray(right, dtype=np.float32).ravel()
        if len(left) != len(right):
            raise ValueError(
                f"Channel blocks differ in length: left={len(left)}, "
                f"right={len(right)}"
            )
        left_values = left.tolist()
        right_values = right.tolist()
        with self._lock:
            self._left.extend(left_values)
            self._right.extend(right_values)

    def drain_and_clear(self) -> DrainedBatch:
        """Take every pending frame and leave the buffer empty.

        The lists are swapped out while the lock is held; conversion to
        arrays happens after release so producers are never held up by it.
        """
        with self._lock:
            left, self._left = self._left, []
            right, self._right = self._right, []
        return DrainedBatch(
            np.asarray(left, dtype=np.float32),
            np.asarray(right, dtype=np.float32),
        )
