"""Tests for peak-preserving waveform reduction."""

import numpy as np
import pytest

from waveform_processor import reduce


def test_empty_batch():
    assert reduce([], 10).shape == (0,)


@pytest.mark.parametrize("target_count", [0, -1, -50])
def test_non_positive_target(target_count):
    assert len(reduce([0.1, 0.2, 0.3], target_count)) == 0


def test_single_sample_never_closes_a_bucket():
    assert len(reduce([0.8], 5)) == 0


def test_one_sample_per_column_drops_trailing_bucket():
    """Three samples into three columns: last sample stays in the open bucket."""
    peaks = reduce([0.1, 0.9, -0.2], 3)
    np.testing.assert_array_equal(peaks, np.float32([0.1, 0.9]))


def test_fewer_samples_than_columns():
    """Resolution 0: every position after the first closes a bucket."""
    peaks = reduce([0.5, -0.7, 0.2], 10)
    np.testing.assert_array_equal(peaks, np.float32([0.5, -0.7]))


def test_negative_peak_keeps_sign():
    """A bucket whose largest swing is negative emits the negative value."""
    peaks = reduce([0.0, 0.5, -0.9, 0.1, 0.0], 2)
    np.testing.assert_array_equal(peaks, np.float32([0.0, -0.9]))


def test_output_capped_at_target_count():
    """8 samples into 3 columns would close 4 buckets; output stops at 3."""
    samples = [0.1, 0.2, -0.3, 0.4, 0.5, -0.6, 0.7, 0.8]
    peaks = reduce(samples, 3)
    np.testing.assert_array_equal(peaks, np.float32([0.1, -0.3, 0.5]))


def test_output_never_exceeds_target_count():
    rng = np.random.default_rng(7)
    for length in range(1, 200, 7):
        samples = rng.uniform(-1, 1, length)
        for target_count in range(1, 25):
            assert len(reduce(samples, target_count)) <= target_count


def test_each_peak_is_largest_swing_in_its_bucket():
    """Bucket 0 is sample 0; bucket k covers ((k-1)*res, k*res]."""
    rng = np.random.default_rng(42)
    samples = rng.uniform(-1, 1, 1000).astype(np.float32)
    target_count = 37
    resolution = len(samples) // target_count

    peaks = reduce(samples, target_count)
    assert len(peaks) == target_count

    for k, peak in enumerate(peaks):
        if k == 0:
            bucket = samples[:1]
        else:
            bucket = samples[(k - 1) * resolution + 1:k * resolution + 1]
        assert peak == bucket[np.argmax(np.abs(bucket))]


def test_float32_in_float32_out():
    samples = np.array([0.25, -0.5, 0.75, -1.0], dtype=np.float32)
    peaks = reduce(samples, 4)
    assert peaks.dtype == np.float32
    np.testing.assert_array_equal(peaks, [0.25, -0.5, 0.75])
