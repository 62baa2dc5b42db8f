"""Waveform reducer: collapses a drained batch to one peak per display column.

Each output value is the sample with the greatest magnitude in its bucket,
sign kept, so transients show up in the direction they swung instead of
being averaged away.
"""

import numpy as np


def reduce(batch, target_count: int) -> np.ndarray:
    """Decimate one channel's samples to at most ``target_count`` peaks.

    Buckets are closed by an integer threshold walk: position ``i`` closes
    the open bucket when ``i > idx * resolution``.  The first bucket holds
    only sample 0, and the bucket still open when the walk ends is not
    emitted.

    Args:
        batch:        1-D float samples, oldest first
        target_count: Maximum number of output points (display columns)

    Returns:
        np.ndarray of float32, length <= target_count
    """
    samples = np.asarray(batch, dtype=np.float32).ravel()
    if target_count <= 0 or len(samples) == 0:
        return np.empty(0, dtype=np.float32)

    resolution = len(samples) // target_count

    peaks = []
    idx = 0
    current_max = 0.0
    for i, sample in enumerate(samples.tolist()):
        # Past target_count the remaining samples pile into the last
        # (dropped) bucket, keeping the output within the column count.
        if idx < target_count and i > idx * resolution:
            peaks.append(current_max)
            current_max = 0.0
            idx += 1

        if abs(current_max) < abs(sample):
            current_max = sample

    return np.array(peaks, dtype=np.float32)
